# =============================================================================
# tests/conftest.py - Pytest Configuration
# =============================================================================
# This module provides pytest fixtures and configuration for all tests.
#
# Key features:
# - Sets up mock environment variables before any imports
# - Provides an in-memory stand-in for the supabase query builder
# - Seeds a small marketplace (clients, employee, commissioners, chat, order)
# =============================================================================

import os
from datetime import datetime, timedelta

# =============================================================================
# Set up test environment BEFORE any imports
# =============================================================================
# This must happen before importing app.config which loads settings immediately

os.environ.setdefault("SUPABASE_URL", "https://test-project.supabase.co")
os.environ.setdefault("SUPABASE_SERVICE_KEY", "test-service-key")
os.environ.setdefault("JWT_SECRET", "test-jwt-secret-0123456789")
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("ENVIRONMENT", "development")
os.environ.setdefault("DEBUG", "true")

import pytest

from app.auth.models import AuthUser
from core.models.roles import Role
from lib.security import hash_password
from lib.supabase_client import SupabaseClient


# =============================================================================
# In-memory query builder
# =============================================================================

BASE_TIME = datetime(2024, 1, 15, 10, 0, 0)


class FakeResponse:
    def __init__(self, data):
        self.data = data


class FakeQuery:
    """
    Chainable subset of the postgrest query builder.

    Relation embeds in select strings are ignored; rows come back as stored.
    Values are compared as strings, like PostgREST query parameters.
    """

    def __init__(self, store: "FakeSupabase", table: str):
        self.store = store
        self.table = table
        self.op = "select"
        self.payload = None
        self.on_conflict = None
        self.filters: list[tuple[str, object]] = []
        self.any_of: list[list[tuple[str, str]]] = []
        self.order_key = None
        self.order_desc = False
        self.limit_n = None

    def select(self, columns="*"):
        self.op = "select"
        return self

    def insert(self, data):
        self.op, self.payload = "insert", data
        return self

    def upsert(self, data, on_conflict=""):
        self.op, self.payload, self.on_conflict = "upsert", data, on_conflict
        return self

    def update(self, data):
        self.op, self.payload = "update", data
        return self

    def delete(self):
        self.op = "delete"
        return self

    def eq(self, column, value):
        self.filters.append((column, value))
        return self

    def or_(self, expression):
        group = []
        for part in expression.split(","):
            column, _, value = part.split(".", 2)
            group.append((column, value))
        self.any_of.append(group)
        return self

    def order(self, column, desc=False):
        self.order_key, self.order_desc = column, desc
        return self

    def limit(self, n):
        self.limit_n = n
        return self

    def _matches(self, row):
        if any(str(row.get(c)) != str(v) for c, v in self.filters):
            return False
        for group in self.any_of:
            if not any(str(row.get(c)) == v for c, v in group):
                return False
        return True

    def execute(self):
        self.store.calls.append((self.table, self.op))
        if self.op in self.store.fail_ops:
            raise RuntimeError(f"simulated {self.op} failure")

        rows = self.store.tables.setdefault(self.table, [])

        if self.op == "insert":
            return FakeResponse([self.store.add(self.table, self.payload)])

        if self.op == "upsert":
            keys = [k.strip() for k in self.on_conflict.split(",") if k.strip()]
            for row in rows:
                if all(str(row.get(k)) == str(self.payload.get(k)) for k in keys):
                    row.update(self.payload)
                    return FakeResponse([dict(row)])
            return FakeResponse([self.store.add(self.table, self.payload)])

        matched = [row for row in rows if self._matches(row)]

        if self.op == "update":
            for row in matched:
                row.update(self.payload)
            return FakeResponse([dict(row) for row in matched])

        if self.op == "delete":
            self.store.tables[self.table] = [row for row in rows if row not in matched]
            return FakeResponse([dict(row) for row in matched])

        if self.order_key:
            matched = sorted(
                matched, key=lambda r: r.get(self.order_key), reverse=self.order_desc
            )
        if self.limit_n is not None:
            matched = matched[: self.limit_n]
        return FakeResponse([dict(row) for row in matched])


class FakeSupabase:
    """Stands in for supabase.Client: only .table() is used."""

    def __init__(self):
        self.tables: dict[str, list[dict]] = {}
        self.calls: list[tuple[str, str]] = []
        self.fail_ops: set[str] = set()
        self._clock = 0

    def table(self, name):
        return FakeQuery(self, name)

    def add(self, table, data):
        rows = self.tables.setdefault(table, [])
        row = dict(data)
        if "id" not in row:
            row["id"] = max((r.get("id", 0) for r in rows), default=0) + 1
        if "created_at" not in row:
            self._clock += 1
            row["created_at"] = (BASE_TIME + timedelta(minutes=self._clock)).isoformat()
        rows.append(row)
        return dict(row)

    def seed(self, table, *rows):
        for row in rows:
            self.add(table, row)


# =============================================================================
# Fixtures
# =============================================================================

CLIENT_ID = 5
OTHER_CLIENT_ID = 6
EMPLOYEE_ID = 9
OWN_COMMISSIONER_ID = 12
OTHER_COMMISSIONER_ID = 13
ADMIN_ID = 100
CHAT_ID = 1
ORDER_ID = 30
COMMISSIONER_PASSWORD = "secret-pass"


@pytest.fixture
def fake_supabase():
    """Seeded in-memory marketplace."""
    store = FakeSupabase()
    store.seed(
        "clients",
        {"id": CLIENT_ID, "name": "Mona", "email": "mona@example.com"},
        {"id": OTHER_CLIENT_ID, "name": "Omar", "email": "omar@example.com"},
    )
    store.seed(
        "employees",
        {"id": EMPLOYEE_ID, "name": "Karim", "email": "karim@example.com"},
    )
    store.seed(
        "commissioners",
        {
            "id": OWN_COMMISSIONER_ID,
            "name": "Ali",
            "identity_number": "29801011234567",
            "phone_number": "01000000012",
            "password": hash_password(COMMISSIONER_PASSWORD, rounds=4),
            "client_id": CLIENT_ID,
            "service_item_id": 4,
        },
        {
            "id": OTHER_COMMISSIONER_ID,
            "name": "Sara",
            "identity_number": "29901011234567",
            "phone_number": "01000000013",
            "password": hash_password("other-pass", rounds=4),
            "client_id": OTHER_CLIENT_ID,
            "service_item_id": 4,
        },
    )
    store.seed(
        "chats",
        {"id": CHAT_ID, "client_id": CLIENT_ID, "employee_id": EMPLOYEE_ID, "service_item_id": 4},
    )
    # Stored out of order on purpose
    store.seed(
        "messages",
        {"id": 2, "chat_id": CHAT_ID, "sender": EMPLOYEE_ID, "content": "second",
         "created_at": "2024-01-15T09:05:00"},
        {"id": 1, "chat_id": CHAT_ID, "sender": CLIENT_ID, "content": "first",
         "created_at": "2024-01-15T09:00:00"},
    )
    store.seed("orders", {"id": ORDER_ID, "client_id": CLIENT_ID})
    return store


@pytest.fixture
def db(fake_supabase):
    """Persistence handle over the fake."""
    return SupabaseClient(fake_supabase)


@pytest.fixture
def client_user():
    return AuthUser(userId=CLIENT_ID, name="Mona", role=Role.CLIENT)


@pytest.fixture
def other_client_user():
    return AuthUser(userId=OTHER_CLIENT_ID, name="Omar", role=Role.CLIENT)


@pytest.fixture
def employee_user():
    return AuthUser(userId=EMPLOYEE_ID, name="Karim", role=Role.EMPLOYEE)


@pytest.fixture
def commissioner_user():
    return AuthUser(userId=OWN_COMMISSIONER_ID, name="Ali", role=Role.COMMISSIONER)


@pytest.fixture
def admin_user():
    return AuthUser(userId=ADMIN_ID, name="Root", role=Role.ADMIN)
