# =============================================================================
# lib/supabase_client.py - Supabase Client Wrapper
# =============================================================================
# This module provides a typed wrapper for Supabase database operations.
#
# The underlying supabase `Client` is created once by `create_supabase_client`
# and handed to a `SupabaseClient` wrapper. Services receive that wrapper
# explicitly (see app/dependencies.py) instead of importing a global, so tests
# can pass in a fake query builder.
#
# Every query is a single PostgREST round trip. Nothing here opens a
# transaction, so read-then-write sequences in the services are not atomic.
#
# Usage:
#   from lib.supabase_client import SupabaseClient, create_supabase_client
#   db = SupabaseClient(create_supabase_client())
#   chat = db.fetch_one("chats", {"id": 3})
# =============================================================================

from __future__ import annotations

import logging
from functools import lru_cache
from typing import Any

from supabase import create_client, Client

from app.config import settings

# Set up logging for this module
logger = logging.getLogger(__name__)


class SupabaseClientError(Exception):
    """
    Error during Supabase operations.

    Provides actionable error messages: what failed and how to fix it.
    """

    def __init__(
        self,
        message: str,
        code: str = "SUPABASE_ERROR",
        suggestion: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.code = code
        self.message = message
        self.suggestion = suggestion
        self.details = details or {}

    def __str__(self) -> str:
        result = f"[{self.code}] {self.message}"
        if self.suggestion:
            result += f" Suggestion: {self.suggestion}"
        return result


@lru_cache
def create_supabase_client() -> Client:
    """
    Create the process-wide supabase `Client`.

    Uses service_role key which bypasses Row Level Security (RLS);
    authorization is enforced by the service layer instead.

    Raises:
        SupabaseClientError: If client creation fails
    """
    try:
        client = create_client(
            settings.SUPABASE_URL,
            settings.SUPABASE_SERVICE_KEY
        )
        logger.info("Supabase client initialized successfully")
        return client
    except Exception as e:
        raise SupabaseClientError(
            message=f"Failed to create Supabase client: {e}",
            code="CLIENT_INIT_FAILED",
            suggestion="Check SUPABASE_URL and SUPABASE_SERVICE_KEY in your .env file"
        )


class SupabaseClient:
    """
    Typed wrapper for Supabase table operations.

    Filters are equality filters given as a dict of column -> value.

    Example:
        db = SupabaseClient(create_supabase_client())
        messages = db.fetch_many(
            "messages",
            filters={"chat_id": 3},
            order_by="created_at",
        )
    """

    def __init__(self, client: Client):
        self.client = client

    @staticmethod
    def _apply_filters(query, filters: dict[str, Any] | None):
        for column, value in (filters or {}).items():
            query = query.eq(column, value)
        return query

    # -------------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------------

    def fetch_one(
        self,
        table: str,
        filters: dict[str, Any],
        columns: str = "*",
    ) -> dict[str, Any] | None:
        """
        Fetch the first row matching the filters.

        Returns:
            Row dict, or None if nothing matched

        Raises:
            SupabaseClientError: If query fails
        """
        try:
            query = self.client.table(table).select(columns)
            response = self._apply_filters(query, filters).limit(1).execute()
        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to fetch from {table}: {e}",
                code="FETCH_FAILED",
                details={"table": table, "filters": filters},
            )

        rows = response.data or []
        return rows[0] if rows else None

    def fetch_many(
        self,
        table: str,
        filters: dict[str, Any] | None = None,
        columns: str = "*",
        order_by: str | None = None,
        desc: bool = False,
        any_of: str | None = None,
    ) -> list[dict[str, Any]]:
        """
        Fetch all rows matching the filters.

        Args:
            table: Table name
            filters: Equality filters (all must match)
            columns: PostgREST select string, may embed relations
            order_by: Column to order by
            desc: Descending order when True
            any_of: PostgREST `or` expression, e.g. "client_id.eq.5,employee_id.eq.5"

        Raises:
            SupabaseClientError: If query fails
        """
        try:
            query = self._apply_filters(self.client.table(table).select(columns), filters)
            if any_of:
                query = query.or_(any_of)
            if order_by:
                query = query.order(order_by, desc=desc)
            response = query.execute()
        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to fetch from {table}: {e}",
                code="FETCH_FAILED",
                details={"table": table, "filters": filters},
            )

        rows = response.data or []
        logger.debug(f"Fetched {len(rows)} rows from {table}")
        return rows

    # -------------------------------------------------------------------------
    # Writes
    # -------------------------------------------------------------------------

    def insert(self, table: str, data: dict[str, Any]) -> dict[str, Any]:
        """
        Insert one row and return it as stored.

        Raises:
            SupabaseClientError: If insert fails or returns no row
        """
        try:
            response = self.client.table(table).insert(data).execute()
        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to insert into {table}: {e}",
                code="INSERT_FAILED",
                details={"table": table},
            )

        if not response.data:
            raise SupabaseClientError(
                message=f"Insert into {table} returned no data",
                code="INSERT_FAILED",
                details={"table": table},
            )
        return response.data[0]

    def upsert(
        self,
        table: str,
        data: dict[str, Any],
        on_conflict: str,
    ) -> dict[str, Any]:
        """
        Insert a row or leave the existing one matching `on_conflict` in place.

        Raises:
            SupabaseClientError: If the upsert fails
        """
        try:
            response = (
                self.client.table(table)
                .upsert(data, on_conflict=on_conflict)
                .execute()
            )
        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to upsert into {table}: {e}",
                code="UPSERT_FAILED",
                details={"table": table, "on_conflict": on_conflict},
            )

        rows = response.data or []
        return rows[0] if rows else data

    def update(
        self,
        table: str,
        filters: dict[str, Any],
        data: dict[str, Any],
    ) -> dict[str, Any] | None:
        """
        Update rows matching the filters and return the first updated row.

        Raises:
            SupabaseClientError: If update fails
        """
        try:
            query = self.client.table(table).update(data)
            response = self._apply_filters(query, filters).execute()
        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to update {table}: {e}",
                code="UPDATE_FAILED",
                details={"table": table, "filters": filters},
            )

        rows = response.data or []
        return rows[0] if rows else None

    def delete(self, table: str, filters: dict[str, Any]) -> int:
        """
        Delete rows matching the filters.

        Returns:
            Number of rows deleted

        Raises:
            SupabaseClientError: If delete fails
        """
        try:
            query = self.client.table(table).delete()
            response = self._apply_filters(query, filters).execute()
        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to delete from {table}: {e}",
                code="DELETE_FAILED",
                details={"table": table, "filters": filters},
            )

        return len(response.data or [])
