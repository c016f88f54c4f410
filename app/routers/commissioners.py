# =============================================================================
# app/routers/commissioners.py - Commissioner Endpoints
# =============================================================================
# Commissioner management for the owning client, plus commissioner login.
# Everything except /login requires an authenticated client.
# =============================================================================

from typing import Annotated

from fastapi import APIRouter, Depends, Path, Response

from app.auth import AuthUser, attach_cookies_to_response, require_roles
from app.dependencies import CommissionerServiceDep
from core.models.commissioner import (
    CommissionerCreate,
    CommissionerLogin,
    CommissionerResponse,
    CommissionerUpdate,
)
from core.models.roles import Role

router = APIRouter()

require_client = require_roles(Role.CLIENT)


@router.post("")
async def create_commissioner(
    request: CommissionerCreate,
    commissioners: CommissionerServiceDep,
    client: AuthUser = Depends(require_client),
):
    """
    Create a commissioner acting on behalf of the current client.
    """
    commissioner = commissioners.create_commissioner(client, request)
    return {"commissioner": CommissionerResponse.from_row(commissioner)}


@router.post("/login")
async def login_commissioner(
    request: CommissionerLogin,
    response: Response,
    commissioners: CommissionerServiceDep,
):
    """
    Log a commissioner in with phone number and password.

    Sets the access cookie on success.
    """
    user = commissioners.login(request.phone_number, request.password)
    attach_cookies_to_response(response, user)
    return {"message": "Login Success", "user": user.to_token_user()}


@router.get("")
async def get_all_commissioners(
    commissioners: CommissionerServiceDep,
    client: AuthUser = Depends(require_client),
):
    """
    List the current client's commissioners.
    """
    rows = commissioners.list_commissioners(client)
    return {"commissioners": [CommissionerResponse.from_row(row) for row in rows]}


@router.get("/{commissioner_id}")
async def get_commissioner(
    commissioner_id: Annotated[int, Path(ge=1, description="Commissioner ID")],
    commissioners: CommissionerServiceDep,
    client: AuthUser = Depends(require_client),
):
    """
    Get one of the current client's commissioners.
    """
    commissioner = commissioners.get_commissioner(client, commissioner_id)
    return {"commissioner": CommissionerResponse.from_row(commissioner)}


@router.patch("/{commissioner_id}")
async def update_commissioner(
    commissioner_id: Annotated[int, Path(ge=1, description="Commissioner ID")],
    request: CommissionerUpdate,
    commissioners: CommissionerServiceDep,
    client: AuthUser = Depends(require_client),
):
    """
    Update one of the current client's commissioners.

    Only fields present in the body change.
    """
    commissioner = commissioners.update_commissioner(client, commissioner_id, request)
    return {"commissioner": CommissionerResponse.from_row(commissioner)}


@router.delete("/{commissioner_id}")
async def delete_commissioner(
    commissioner_id: Annotated[int, Path(ge=1, description="Commissioner ID")],
    commissioners: CommissionerServiceDep,
    client: AuthUser = Depends(require_client),
):
    """
    Delete one of the current client's commissioners.
    """
    commissioners.delete_commissioner(client, commissioner_id)
    return {"msg": "Commissioner has been deleted!"}
