# =============================================================================
# app/auth/routes.py - Authentication Routes
# =============================================================================
# Endpoints for the current session. Commissioner login lives with the
# commissioner routes; client and employee login are handled elsewhere.
# =============================================================================

from fastapi import APIRouter, Depends, Response

from app.auth.dependencies import get_current_user
from app.auth.models import AuthUser
from app.auth.tokens import clear_token_cookie

router = APIRouter()


@router.get("/me")
async def get_current_user_info(
    user: AuthUser = Depends(get_current_user)
) -> dict:
    """
    Get the token user for the current session.

    Raises:
        401: If not authenticated
    """
    return {"user": user.to_token_user()}


@router.post("/logout")
async def logout(
    response: Response,
    user: AuthUser = Depends(get_current_user),
) -> dict:
    """
    Clear the access cookie.
    """
    clear_token_cookie(response)
    return {"message": "Logged out"}
