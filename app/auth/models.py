# =============================================================================
# app/auth/models.py - Authentication Models
# =============================================================================
# Pydantic models for authentication data.
# =============================================================================

from pydantic import BaseModel, ConfigDict, Field

from core.models.roles import Role


class AuthUser(BaseModel):
    """
    Authenticated principal extracted from the access token.

    This is the minimal identity available from the token itself,
    without querying the database. Serialized with the camelCase keys
    the web client expects ("userId").
    """
    user_id: int = Field(..., alias="userId")
    name: str | None = None
    role: Role

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    def to_token_user(self) -> dict:
        """Public representation returned by login and /auth/me."""
        return {"name": self.name, "userId": self.user_id, "role": self.role.value}


class TokenPayload(BaseModel):
    """
    Decoded access token payload.

    Tokens carry the token user plus standard expiry claims.
    """
    userId: int
    name: str | None = None
    role: Role
    exp: int
    iat: int
