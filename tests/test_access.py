# =============================================================================
# tests/test_access.py - Access Rule Tests
# =============================================================================
# Unit tests for the chat participation and commissioner ownership rules.
# These functions are pure, so no database is involved.
# =============================================================================

import pytest

from app.exceptions import ForbiddenError
from core.access import (
    ChatParticipants,
    can_read_chat,
    can_send_message,
    ensure_can_read_chat,
    ensure_can_send_message,
    ensure_owns_commissioner,
    owns_commissioner,
)
from core.models.roles import Role


@pytest.fixture
def participants():
    """chat {client 5, employee 9}; client 5 delegates to commissioner 12."""
    return ChatParticipants(
        chat_id=1,
        client_id=5,
        employee_id=9,
        commissioner_ids=frozenset({12}),
    )


class TestCanReadChat:
    """Tests for the read rule."""

    def test_client_can_read(self, participants):
        assert can_read_chat(5, Role.CLIENT, participants) is True

    def test_employee_can_read(self, participants):
        assert can_read_chat(9, Role.EMPLOYEE, participants) is True

    def test_client_commissioner_can_read(self, participants):
        assert can_read_chat(12, Role.COMMISSIONER, participants) is True

    def test_unrelated_principal_cannot_read(self, participants):
        """Principal 7 has no link to the chat."""
        assert can_read_chat(7, Role.CLIENT, participants) is False

    def test_commissioner_of_other_client_cannot_read(self, participants):
        assert can_read_chat(13, Role.COMMISSIONER, participants) is False

    def test_no_commissioners_by_default(self):
        bare = ChatParticipants(chat_id=2, client_id=5, employee_id=9)
        assert bare.commissioner_ids == frozenset()
        assert can_read_chat(12, Role.COMMISSIONER, bare) is False

    @pytest.mark.parametrize(
        "principal_id,role",
        [
            (5, Role.COMMISSIONER),
            (5, Role.EMPLOYEE),
            (9, Role.CLIENT),
            (9, Role.COMMISSIONER),
            (12, Role.CLIENT),
            (12, Role.EMPLOYEE),
        ],
    )
    def test_id_matching_another_roles_field(self, participants, principal_id, role):
        """Ids come from separate tables; only the role's own field counts."""
        assert can_read_chat(principal_id, role, participants) is False

    def test_admin_cannot_read(self, participants):
        assert can_read_chat(100, Role.ADMIN, participants) is False


class TestCanSendMessage:
    """Tests for the write rule."""

    def test_client_can_send(self, participants):
        assert can_send_message(5, Role.CLIENT, participants) is True

    def test_employee_can_send(self, participants):
        assert can_send_message(9, Role.EMPLOYEE, participants) is True

    def test_admin_can_send_without_participating(self, participants):
        assert can_send_message(100, Role.ADMIN, participants) is True

    def test_commissioner_cannot_send(self, participants):
        """Commissioners may read the chat but not post into it."""
        assert can_read_chat(12, Role.COMMISSIONER, participants) is True
        assert can_send_message(12, Role.COMMISSIONER, participants) is False

    def test_unrelated_employee_cannot_send(self, participants):
        assert can_send_message(7, Role.EMPLOYEE, participants) is False

    @pytest.mark.parametrize(
        "principal_id,role",
        [
            (5, Role.COMMISSIONER),
            (5, Role.EMPLOYEE),
            (9, Role.CLIENT),
            (9, Role.COMMISSIONER),
        ],
    )
    def test_id_matching_another_roles_field(self, participants, principal_id, role):
        assert can_send_message(principal_id, role, participants) is False


class TestEnsureHelpers:
    """The ensure_* variants raise ForbiddenError on DENY."""

    def test_ensure_read_allows(self, participants):
        ensure_can_read_chat(5, Role.CLIENT, participants)

    def test_ensure_read_denies(self, participants):
        with pytest.raises(ForbiddenError) as exc_info:
            ensure_can_read_chat(7, Role.CLIENT, participants)

        assert exc_info.value.status_code == 403
        assert exc_info.value.message == "You do not have access to this chat"
        assert exc_info.value.details == {"chat_id": 1}

    def test_ensure_read_denies_commissioner_sharing_client_id(self, participants):
        with pytest.raises(ForbiddenError):
            ensure_can_read_chat(5, Role.COMMISSIONER, participants)

    def test_ensure_send_denies_commissioner(self, participants):
        with pytest.raises(ForbiddenError):
            ensure_can_send_message(12, Role.COMMISSIONER, participants)

    def test_ensure_send_allows_admin(self, participants):
        ensure_can_send_message(100, Role.ADMIN, participants)


class TestCommissionerOwnership:
    """Tests for the ownership rule."""

    def test_owned(self):
        assert owns_commissioner([12, 14], 12) is True

    def test_not_owned(self):
        assert owns_commissioner([12, 14], 13) is False

    def test_empty_set(self):
        assert owns_commissioner([], 12) is False

    def test_ensure_raises_for_foreign_commissioner(self):
        with pytest.raises(ForbiddenError) as exc_info:
            ensure_owns_commissioner(5, [12], 13)

        assert exc_info.value.message == "You are not authorized to modify this commissioner"

    def test_ensure_passes_for_own_commissioner(self):
        ensure_owns_commissioner(5, [12], 12)
