# =============================================================================
# tests/test_supabase_client.py - Persistence Wrapper Tests
# =============================================================================

import pytest

from lib.supabase_client import SupabaseClientError


class TestSupabaseClient:
    """Tests for the typed wrapper over the query builder."""

    def test_fetch_one_missing(self, db):
        assert db.fetch_one("chats", {"id": 404}) is None

    def test_fetch_many_ordered_desc(self, db):
        rows = db.fetch_many("messages", {"chat_id": 1}, order_by="created_at", desc=True)

        assert [r["content"] for r in rows] == ["second", "first"]

    def test_fetch_many_any_of(self, db):
        rows = db.fetch_many("chats", any_of="client_id.eq.9,employee_id.eq.9")

        assert [r["id"] for r in rows] == [1]

    def test_update_returns_row(self, db):
        row = db.update("orders", {"id": 30}, {"status": "done"})

        assert row["status"] == "done"

    def test_delete_counts_rows(self, db):
        assert db.delete("messages", {"chat_id": 1}) == 2
        assert db.delete("messages", {"chat_id": 1}) == 0

    @pytest.mark.parametrize("op,call", [
        ("select", lambda db: db.fetch_one("chats", {"id": 1})),
        ("select", lambda db: db.fetch_many("chats")),
        ("insert", lambda db: db.insert("messages", {"chat_id": 1})),
        ("update", lambda db: db.update("chats", {"id": 1}, {"x": 1})),
        ("delete", lambda db: db.delete("chats", {"id": 1})),
        ("upsert", lambda db: db.upsert("order_commissioners", {"order_id": 1}, "order_id")),
    ])
    def test_failures_are_wrapped(self, db, fake_supabase, op, call):
        fake_supabase.fail_ops.add(op)

        with pytest.raises(SupabaseClientError) as exc_info:
            call(db)

        assert "simulated" in exc_info.value.message
