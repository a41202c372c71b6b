"""
Shared module for common utilities used by the REST API and the CLI.

CLEAN ARCHITECTURE STRUCTURE:
- shared.security: Authentication, authorization, rate limiting
  - principal.py: The acting Principal (role + field)
  - auth.py: JWT verification, current_principal, require_role
  - rate_limit.py: slowapi limiter

- shared.infrastructure: Database and request context
  - db.py: SQLAlchemy sessions, safe_commit()
  - correlation.py: X-Request-ID propagation

- shared.config: Configuration
  - settings.py: Environment config (Pydantic)
  - logging.py: Structured logging
  - constants.py: Role, messages, templates

- shared.utils: Utilities
  - exceptions.py: HTTP exceptions with auto-logging
  - schemas.py: Resource request/response schemas

IMPORT EXAMPLES:
    from shared.security.auth import current_principal, require_role
    from shared.infrastructure.db import get_db, safe_commit
    from shared.config.settings import settings
    from shared.config.constants import Role, Messages
    from shared.utils.exceptions import NotFoundError, ForbiddenError
"""

# This module provides no re-exports.
# All imports should use the canonical paths as documented above.
