# =============================================================================
# app/auth/dependencies.py - FastAPI Auth Dependencies
# =============================================================================
# Provides dependency injection for authentication.
#
# The access token is read from the Authorization: Bearer header when present,
# otherwise from the access cookie set at login.
#
# Usage:
#   from app.auth import get_current_user, require_roles, AuthUser
#
#   @router.get("/protected")
#   async def protected(user: AuthUser = Depends(get_current_user)):
#       return {"user_id": user.user_id}
#
#   @router.get("/admin-only", dependencies=[Depends(require_roles(Role.ADMIN))])
# =============================================================================

import logging
from typing import Optional

from fastapi import Depends, Request
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from app.config import settings
from app.auth.models import AuthUser
from app.auth.tokens import decode_access_token
from app.exceptions import ForbiddenError, UnauthenticatedError
from core.models.roles import Role

logger = logging.getLogger(__name__)

# Bearer header is optional; the cookie is the primary transport
security_optional = HTTPBearer(auto_error=False)


def extract_token(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials],
) -> str | None:
    """Bearer header first, then the access cookie."""
    if credentials is not None and credentials.credentials:
        return credentials.credentials
    return request.cookies.get(settings.TOKEN_COOKIE_NAME)


async def get_current_user(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security_optional),
) -> AuthUser:
    """
    Extract and validate the principal from the access token.

    Returns:
        AuthUser: The authenticated principal

    Raises:
        UnauthenticatedError: 401 if the token is missing, invalid or expired
    """
    token = extract_token(request, credentials)
    if not token:
        raise UnauthenticatedError("Authentication invalid")

    user = decode_access_token(token)
    logger.debug(f"Authenticated {user.role.value} {user.user_id}")
    return user


def require_roles(*roles: Role):
    """
    Build a dependency that only lets the given roles through.

    Raises:
        ForbiddenError: 403 when the principal's role is not allowed
    """
    allowed = frozenset(roles)

    async def _require(user: AuthUser = Depends(get_current_user)) -> AuthUser:
        if user.role not in allowed:
            logger.warning(
                f"{user.role.value} {user.user_id} denied; requires "
                f"{sorted(r.value for r in allowed)}"
            )
            raise ForbiddenError("Unauthorized to access this route")
        return user

    return _require
