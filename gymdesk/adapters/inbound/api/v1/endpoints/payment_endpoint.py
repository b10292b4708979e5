# gymdesk/adapters/inbound/api/v1/endpoints/payment_endpoint.py (async version)

import logging
from typing import Optional
from fastapi import APIRouter, Depends, Query, Response, status
from fastapi_pagination import Page, Params
from sqlalchemy.ext.asyncio import AsyncSession

from gymdesk.adapters.inbound.api.deps import get_session, get_tenant_context
from gymdesk.adapters.outbound.persistence.repositories.query_filters import MAX_PAYMENT_DAYS
from gymdesk.application.dtos.payment_dto import PaymentCreate, PaymentOutput, PaymentUpdate
from gymdesk.application.use_cases.payment_use_cases import AsyncPaymentService
from gymdesk.domain.models.tenant_domain_model import TenantContext
from gymdesk.shared.utils.pagination import pagination_params

logger = logging.getLogger(__name__)
router = APIRouter()


@router.post(
    "",
    response_model=PaymentOutput,
    status_code=status.HTTP_201_CREATED,
    summary="Record Payment",
    description=(
            "Records a payment of a member of the caller's gym. A PAID membership "
            "payment extends the member's membership in the same transaction."
    ),
)
async def create_payment(
        payment_input: PaymentCreate,
        db: AsyncSession = Depends(get_session),
        tenant: TenantContext = Depends(get_tenant_context),
):
    return await AsyncPaymentService(db, tenant).create_payment(payment_input)


@router.get(
    "",
    response_model=Page[PaymentOutput],
    summary="List Payments",
    description=(
            "Lists the gym's payments, newest first. `search` matches reference or "
            "notes; `days` keeps the last N days including today."
    ),
)
async def list_payments(
        client_id: Optional[int] = Query(None, gt=0, description="Only payments of this member"),
        search: Optional[str] = Query(None, max_length=120, description="Reference or notes search"),
        days: Optional[int] = Query(None, ge=1, le=MAX_PAYMENT_DAYS, description="Look-back window in days"),
        params: Params = Depends(pagination_params),
        db: AsyncSession = Depends(get_session),
        tenant: TenantContext = Depends(get_tenant_context),
):
    return await AsyncPaymentService(db, tenant).list_payments(
        params, client_id=client_id, search=search, days=days
    )


@router.get("/{payment_id}", response_model=PaymentOutput, summary="Get Payment")
async def get_payment(
        payment_id: int,
        db: AsyncSession = Depends(get_session),
        tenant: TenantContext = Depends(get_tenant_context),
):
    return await AsyncPaymentService(db, tenant).get_payment(payment_id)


@router.put(
    "/{payment_id}",
    response_model=PaymentOutput,
    summary="Update Payment",
    description="Updates method, type, plan, status, reference, notes or date. Membership is not recalculated.",
)
async def update_payment(
        payment_id: int,
        payment_input: PaymentUpdate,
        db: AsyncSession = Depends(get_session),
        tenant: TenantContext = Depends(get_tenant_context),
):
    return await AsyncPaymentService(db, tenant).update_payment(payment_id, payment_input)


@router.delete("/{payment_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Delete Payment")
async def delete_payment(
        payment_id: int,
        db: AsyncSession = Depends(get_session),
        tenant: TenantContext = Depends(get_tenant_context),
):
    await AsyncPaymentService(db, tenant).delete_payment(payment_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
