# =============================================================================
# app/auth/__init__.py - Authentication Module
# =============================================================================
# Provides JWT-based authentication with an http-only access cookie.
#
# Usage:
#   from app.auth import get_current_user, AuthUser
#
#   @router.get("/protected")
#   async def protected(user: AuthUser = Depends(get_current_user)):
#       return {"user_id": user.user_id}
# =============================================================================

from app.auth.dependencies import get_current_user, require_roles
from app.auth.models import AuthUser
from app.auth.tokens import (
    attach_cookies_to_response,
    create_access_token,
    create_token_user,
    decode_access_token,
)

__all__ = [
    "get_current_user",
    "require_roles",
    "AuthUser",
    "attach_cookies_to_response",
    "create_access_token",
    "create_token_user",
    "decode_access_token",
]
