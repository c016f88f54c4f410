# =============================================================================
# tests/test_order_service.py - Order Service Tests
# =============================================================================

import pytest

from app.exceptions import BadRequestError, CommissionerNotFoundError, OrderNotFoundError
from core.services.order_service import OrderService

from tests.conftest import ORDER_ID, OTHER_COMMISSIONER_ID, OWN_COMMISSIONER_ID


@pytest.fixture
def service(db):
    return OrderService(db)


def linked_ids(store, order_id=ORDER_ID):
    """Commissioner ids linked to an order in the join table."""
    return [
        row["commissioner_id"]
        for row in store.tables.get("order_commissioners", [])
        if row["order_id"] == order_id
    ]


class TestAssignCommissioner:
    """Tests for linking commissioners to orders."""

    def test_assigns(self, service, fake_supabase):
        order = service.assign_commissioner(OWN_COMMISSIONER_ID, ORDER_ID)

        assert order["id"] == ORDER_ID
        assert linked_ids(fake_supabase) == [OWN_COMMISSIONER_ID]

    def test_accepts_numeric_strings(self, service, fake_supabase):
        service.assign_commissioner(str(OWN_COMMISSIONER_ID), str(ORDER_ID))

        assert linked_ids(fake_supabase) == [OWN_COMMISSIONER_ID]

    def test_assigning_twice_keeps_one_link(self, service, fake_supabase):
        service.assign_commissioner(OWN_COMMISSIONER_ID, ORDER_ID)
        service.assign_commissioner(OWN_COMMISSIONER_ID, ORDER_ID)

        assert linked_ids(fake_supabase) == [OWN_COMMISSIONER_ID]

    def test_multiple_commissioners(self, service, fake_supabase):
        service.assign_commissioner(OWN_COMMISSIONER_ID, ORDER_ID)
        service.assign_commissioner(OTHER_COMMISSIONER_ID, ORDER_ID)

        assert sorted(linked_ids(fake_supabase)) == [
            OWN_COMMISSIONER_ID,
            OTHER_COMMISSIONER_ID,
        ]

    @pytest.mark.parametrize("commissioner_id,order_id", [(None, ORDER_ID), (12, None), ("", "")])
    def test_missing_ids(self, service, commissioner_id, order_id):
        with pytest.raises(BadRequestError) as exc_info:
            service.assign_commissioner(commissioner_id, order_id)

        assert exc_info.value.message == "Please provide commissionerId and orderId"

    def test_malformed_id(self, service):
        with pytest.raises(BadRequestError):
            service.assign_commissioner("twelve", ORDER_ID)

    def test_unknown_commissioner(self, service):
        with pytest.raises(CommissionerNotFoundError):
            service.assign_commissioner(999, ORDER_ID)

    def test_unknown_order(self, service):
        with pytest.raises(OrderNotFoundError):
            service.assign_commissioner(OWN_COMMISSIONER_ID, 999)
