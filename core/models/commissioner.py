# =============================================================================
# core/models/commissioner.py - Commissioner & Order Assignment Schemas
# =============================================================================
# These models define the API contract for commissioner management:
# - CommissionerCreate / CommissionerUpdate: client-side mutations
# - CommissionerLogin: phone number + password credentials
# - CommissionerResponse: stored commissioner without the password hash
# - OrderAssignment: link a commissioner to an order
#
# Required-field checks live in CommissionerService so the error messages
# are the same whether or not the call came through HTTP.
# =============================================================================

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class CommissionerCreate(BaseModel):
    """
    Schema for creating a commissioner.

    The owning client is always the authenticated client, never the body.

    Example:
        {
            "name": "Ali Hassan",
            "identity_number": "29801011234567",
            "phone_number": "01012345678",
            "password": "s3cret-pass",
            "service_item_id": 4
        }
    """

    name: str | None = None
    identity_number: str | None = Field(default=None, alias="identityNumber")
    phone_number: str | None = Field(default=None, alias="phoneNumber")
    password: str | None = None
    service_item_id: int | None = Field(default=None, alias="serviceItemId")

    model_config = ConfigDict(populate_by_name=True)


class CommissionerUpdate(BaseModel):
    """
    Partial update of a commissioner. Only provided, non-empty fields change.
    """

    name: str | None = None
    identity_number: str | None = Field(default=None, alias="identityNumber")
    phone_number: str | None = Field(default=None, alias="phoneNumber")
    password: str | None = None
    service_item_id: int | None = Field(default=None, alias="serviceItemId")

    model_config = ConfigDict(populate_by_name=True)


class CommissionerLogin(BaseModel):
    """Credentials for POST /commissioners/login."""

    phone_number: str | None = Field(default=None, alias="phoneNumber")
    password: str | None = None

    model_config = ConfigDict(populate_by_name=True)


class CommissionerResponse(BaseModel):
    """
    A commissioner as returned to API clients.

    The password hash is never part of this schema.
    """

    id: int
    name: str
    identity_number: str | None = None
    phone_number: str | None = None
    client_id: int
    service_item_id: int | None = None

    model_config = ConfigDict(from_attributes=True, extra="ignore")

    @classmethod
    def from_row(cls, row: dict[str, Any]) -> "CommissionerResponse":
        """Build from a commissioners table row, dropping the password hash."""
        return cls.model_validate({k: v for k, v in row.items() if k != "password"})


class OrderAssignment(BaseModel):
    """
    Body of POST /orders/assign-commissioner.

    IDs may arrive as numbers or numeric strings.

    Example:
        {
            "commissionerId": 12,
            "orderId": "30"
        }
    """

    commissioner_id: int | str | None = Field(default=None, alias="commissionerId")
    order_id: int | str | None = Field(default=None, alias="orderId")

    model_config = ConfigDict(populate_by_name=True)
