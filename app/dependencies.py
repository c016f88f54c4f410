# =============================================================================
# app/dependencies.py - Shared Dependencies
# =============================================================================
# FastAPI dependency injection for shared resources.
# These are injected into route handlers using Depends().
#
# Tests replace get_db via app.dependency_overrides to run against a fake.
# =============================================================================

from typing import Annotated

from fastapi import Depends

from lib.supabase_client import SupabaseClient, create_supabase_client
from app.websocket.broadcast import publish_chat_message
from core.services import ChatService, CommissionerService, OrderService


def get_db() -> SupabaseClient:
    """
    Get the persistence handle.

    Wraps the cached supabase client created on first use.
    """
    return SupabaseClient(create_supabase_client())


DbDep = Annotated[SupabaseClient, Depends(get_db)]


def get_chat_service(db: DbDep) -> ChatService:
    return ChatService(db, publish=publish_chat_message)


def get_commissioner_service(db: DbDep) -> CommissionerService:
    return CommissionerService(db)


def get_order_service(db: DbDep) -> OrderService:
    return OrderService(db)


# Type aliases for dependency injection
ChatServiceDep = Annotated[ChatService, Depends(get_chat_service)]
CommissionerServiceDep = Annotated[CommissionerService, Depends(get_commissioner_service)]
OrderServiceDep = Annotated[OrderService, Depends(get_order_service)]
