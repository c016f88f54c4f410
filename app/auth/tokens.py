# =============================================================================
# app/auth/tokens.py - Access Token Issuing & Decoding
# =============================================================================
# Signed JWTs (python-jose) carried in an http-only cookie.
#
# Usage:
#   user = create_token_user(commissioner_row, Role.COMMISSIONER)
#   attach_cookies_to_response(response, user)
# =============================================================================

import logging
import time
from typing import Any

from fastapi import Response
from jose import jwt, JWTError, ExpiredSignatureError
from pydantic import ValidationError

from app.config import settings
from app.auth.models import AuthUser, TokenPayload
from app.exceptions import UnauthenticatedError
from core.models.roles import Role

logger = logging.getLogger(__name__)


def create_token_user(record: dict[str, Any], role: Role) -> AuthUser:
    """Build the token user for a stored client, employee or commissioner row."""
    return AuthUser(userId=record["id"], name=record.get("name"), role=role)


def create_access_token(user: AuthUser, now: int | None = None) -> str:
    """
    Sign an access token for the user.

    Args:
        user: The token user
        now: Issue time as unix seconds (defaults to current time)
    """
    issued_at = int(now if now is not None else time.time())
    claims = {
        **user.to_token_user(),
        "iat": issued_at,
        "exp": issued_at + settings.JWT_LIFETIME_SECONDS,
    }
    return jwt.encode(claims, settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM)


def decode_access_token(token: str) -> AuthUser:
    """
    Verify a token and return its user.

    Raises:
        UnauthenticatedError: If the token is expired, tampered with,
            or carries an unknown role
    """
    try:
        claims = jwt.decode(
            token,
            settings.JWT_SECRET,
            algorithms=[settings.JWT_ALGORITHM],
        )
        payload = TokenPayload.model_validate(claims)
    except ExpiredSignatureError:
        logger.warning("Access token has expired")
        raise UnauthenticatedError("Token has expired")
    except JWTError as e:
        logger.warning(f"Access token validation failed: {e}")
        raise UnauthenticatedError("Authentication invalid")
    except ValidationError as e:
        logger.warning(f"Access token payload rejected: {e.error_count()} errors")
        raise UnauthenticatedError("Authentication invalid")

    return AuthUser(userId=payload.userId, name=payload.name, role=payload.role)


def cookie_kwargs(value: str) -> dict[str, Any]:
    return {
        "key": settings.TOKEN_COOKIE_NAME,
        "value": value,
        "max_age": settings.JWT_LIFETIME_SECONDS,
        "httponly": True,
        "secure": settings.cookie_secure,
        "samesite": "lax",
        "path": "/",
    }


def attach_cookies_to_response(response: Response, user: AuthUser) -> str:
    """Sign a token for the user and set it as the access cookie."""
    token = create_access_token(user)
    response.set_cookie(**cookie_kwargs(token))
    return token


def clear_token_cookie(response: Response) -> None:
    response.delete_cookie(
        key=settings.TOKEN_COOKIE_NAME,
        path="/",
        secure=settings.cookie_secure,
        httponly=True,
        samesite="lax",
    )
