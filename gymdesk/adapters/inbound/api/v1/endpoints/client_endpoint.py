# gymdesk/adapters/inbound/api/v1/endpoints/client_endpoint.py (async version)

import logging
from typing import Optional
from fastapi import APIRouter, Depends, Query, Response, status
from fastapi_pagination import Page, Params
from sqlalchemy.ext.asyncio import AsyncSession

from gymdesk.adapters.inbound.api.deps import get_session, get_tenant_context
from gymdesk.application.dtos.client_dto import ClientCreate, ClientOutput, ClientUpdate
from gymdesk.application.use_cases.client_use_cases import AsyncClientService
from gymdesk.domain.models.tenant_domain_model import TenantContext
from gymdesk.shared.utils.pagination import pagination_params

logger = logging.getLogger(__name__)
router = APIRouter()


@router.post(
    "",
    response_model=ClientOutput,
    status_code=status.HTTP_201_CREATED,
    summary="Create Client - Registers a gym member",
    description="Registers a new member of the caller's gym. New members start INACTIVE.",
)
async def create_client(
        client_input: ClientCreate,
        db: AsyncSession = Depends(get_session),
        tenant: TenantContext = Depends(get_tenant_context),
):
    return await AsyncClientService(db, tenant).create_client(client_input)


@router.get(
    "",
    response_model=Page[ClientOutput],
    summary="List Clients - Paginated member list",
    description=(
            "Lists the gym's members, newest first. `search` matches name, phone, "
            "email, national id or status. Statuses are computed for today."
    ),
)
async def list_clients(
        search: Optional[str] = Query(None, max_length=120, description="Free-text search"),
        order: str = Query("desc", pattern="^(asc|desc)$", description="Registration date order"),
        params: Params = Depends(pagination_params),
        db: AsyncSession = Depends(get_session),
        tenant: TenantContext = Depends(get_tenant_context),
):
    return await AsyncClientService(db, tenant).list_clients(params, search=search, order=order)


@router.get(
    "/{client_id}",
    response_model=ClientOutput,
    summary="Get Client - Member details",
    description="Returns a member of the caller's gym. A status made stale by the calendar is updated.",
)
async def get_client(
        client_id: int,
        db: AsyncSession = Depends(get_session),
        tenant: TenantContext = Depends(get_tenant_context),
):
    return await AsyncClientService(db, tenant).get_client(client_id)


@router.put(
    "/{client_id}",
    response_model=ClientOutput,
    summary="Update Client - Edits a member",
    description=(
            "Updates identity and contact fields. Staff may also override the "
            "membership dates and status."
    ),
)
async def update_client(
        client_id: int,
        client_input: ClientUpdate,
        db: AsyncSession = Depends(get_session),
        tenant: TenantContext = Depends(get_tenant_context),
):
    return await AsyncClientService(db, tenant).update_client(client_id, client_input)


@router.delete(
    "/{client_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete Client - Removes a member and their payments",
)
async def delete_client(
        client_id: int,
        db: AsyncSession = Depends(get_session),
        tenant: TenantContext = Depends(get_tenant_context),
):
    await AsyncClientService(db, tenant).delete_client(client_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
