# =============================================================================
# core/services/commissioner_service.py - Commissioner Business Logic
# =============================================================================
# Handles commissioner CRUD for the owning client and commissioner login.
#
# Reads and mutations are scoped to the acting client's commissioner set;
# the ownership rule itself is in core/access.py.
# =============================================================================

import logging
from typing import Any

from lib.supabase_client import SupabaseClient
from lib.security import hash_password, verify_password
from lib.utils import is_blank
from app.auth.models import AuthUser
from app.auth.tokens import create_token_user
from app.exceptions import BadRequestError, CommissionerNotFoundError, UnauthenticatedError
from core.access import ensure_owns_commissioner
from core.models.commissioner import CommissionerCreate, CommissionerUpdate
from core.models.roles import Role

logger = logging.getLogger(__name__)

TABLE = "commissioners"


class CommissionerService:
    """
    Service for commissioner management.

    Args:
        db: Persistence handle
    """

    def __init__(self, db: SupabaseClient):
        self.db = db

    # -------------------------------------------------------------------------
    # Create / Login
    # -------------------------------------------------------------------------

    def create_commissioner(
        self,
        client: AuthUser,
        data: CommissionerCreate,
    ) -> dict[str, Any]:
        """
        Create a commissioner owned by the acting client.

        Raises:
            BadRequestError: If name, identity number, phone number or
                password is missing
        """
        required = (data.name, data.identity_number, data.phone_number, data.password)
        if any(is_blank(value) for value in required):
            raise BadRequestError("Please provide all required fields")

        commissioner = self.db.insert(
            TABLE,
            {
                "name": data.name,
                "identity_number": data.identity_number,
                "phone_number": data.phone_number,
                "password": hash_password(data.password),
                "service_item_id": data.service_item_id,
                "client_id": client.user_id,
            },
        )
        logger.info(f"Client {client.user_id} created commissioner {commissioner['id']}")
        return commissioner

    def login(self, phone_number: str | None, password: str | None) -> AuthUser:
        """
        Check commissioner credentials and return the token user.

        Raises:
            BadRequestError: If phone number or password is missing
            UnauthenticatedError: If no commissioner has this phone number
                or the password is wrong
        """
        if is_blank(phone_number) or is_blank(password):
            raise BadRequestError("Please provide a valid phone number and password")

        commissioner = self.db.fetch_one(TABLE, {"phone_number": phone_number})
        if not commissioner or not verify_password(password, commissioner.get("password")):
            logger.warning("Commissioner login rejected")
            raise UnauthenticatedError("Invalid Credentials")

        logger.info(f"Commissioner {commissioner['id']} logged in")
        return create_token_user(commissioner, Role.COMMISSIONER)

    # -------------------------------------------------------------------------
    # Read
    # -------------------------------------------------------------------------

    def list_commissioners(self, client: AuthUser) -> list[dict[str, Any]]:
        """Commissioners owned by the acting client."""
        return self.db.fetch_many(TABLE, {"client_id": client.user_id}, order_by="id")

    def get_commissioner(self, client: AuthUser, commissioner_id: int) -> dict[str, Any]:
        """
        Raises:
            CommissionerNotFoundError: If the commissioner doesn't exist
            ForbiddenError: If it belongs to another client
        """
        commissioner = self._fetch(commissioner_id)
        ensure_owns_commissioner(
            client.user_id, self._owned_ids(client.user_id), commissioner_id
        )
        return commissioner

    # -------------------------------------------------------------------------
    # Update / Delete
    # -------------------------------------------------------------------------

    def update_commissioner(
        self,
        client: AuthUser,
        commissioner_id: int,
        changes: CommissionerUpdate,
    ) -> dict[str, Any]:
        """
        Apply the provided fields. Blank fields are ignored; a new password
        is hashed before it is stored.

        Raises:
            CommissionerNotFoundError: If the commissioner doesn't exist
            ForbiddenError: If it belongs to another client
        """
        commissioner = self._fetch(commissioner_id)

        update_data: dict[str, Any] = {}
        if not is_blank(changes.name):
            update_data["name"] = changes.name
        if not is_blank(changes.identity_number):
            update_data["identity_number"] = changes.identity_number
        if not is_blank(changes.phone_number):
            update_data["phone_number"] = changes.phone_number
        if changes.service_item_id:
            update_data["service_item_id"] = changes.service_item_id

        ensure_owns_commissioner(
            client.user_id, self._owned_ids(client.user_id), commissioner_id
        )

        if not is_blank(changes.password):
            update_data["password"] = hash_password(changes.password)

        if not update_data:
            return commissioner

        updated = self.db.update(TABLE, {"id": commissioner_id}, update_data)
        logger.info(
            f"Client {client.user_id} updated commissioner {commissioner_id}: "
            f"{sorted(update_data)}"
        )
        return updated or {**commissioner, **update_data}

    def delete_commissioner(self, client: AuthUser, commissioner_id: int) -> None:
        """
        Raises:
            CommissionerNotFoundError: If the commissioner doesn't exist
            ForbiddenError: If it belongs to another client
        """
        self._fetch(commissioner_id)
        ensure_owns_commissioner(
            client.user_id, self._owned_ids(client.user_id), commissioner_id
        )

        self.db.delete(TABLE, {"id": commissioner_id})
        logger.info(f"Client {client.user_id} deleted commissioner {commissioner_id}")

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    def _fetch(self, commissioner_id: int) -> dict[str, Any]:
        commissioner = self.db.fetch_one(TABLE, {"id": commissioner_id})
        if not commissioner:
            raise CommissionerNotFoundError(commissioner_id)
        return commissioner

    def _owned_ids(self, client_id: int) -> list[int]:
        rows = self.db.fetch_many(TABLE, {"client_id": client_id}, columns="id")
        return [row["id"] for row in rows]
