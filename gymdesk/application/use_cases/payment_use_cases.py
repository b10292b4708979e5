# gymdesk/application/use_cases/payment_use_cases.py (async version)

"""
Service for payment management.

Recording a payment and renewing the membership it pays for happen in one
transaction: the payment row is flushed, the renewal engine saves the client,
and a single commit makes both visible. Any failure rolls both back.
"""

import logging
from datetime import date
from typing import Callable, Optional

from fastapi_pagination import Page, Params
from fastapi_pagination.ext.sqlalchemy import paginate
from sqlalchemy.ext.asyncio import AsyncSession

from gymdesk.adapters.outbound.persistence.models import Payment
from gymdesk.adapters.outbound.persistence.repositories.client_repository import ClientStore
from gymdesk.adapters.outbound.persistence.repositories.payment_repository import PaymentStore, payment_repository
from gymdesk.adapters.outbound.persistence.repositories.query_filters import PaymentFilter, build_payment_query
from gymdesk.application.dtos.payment_dto import PaymentCreate, PaymentOutput, PaymentUpdate
from gymdesk.application.ports.inbound import IPaymentUseCase
from gymdesk.application.use_cases.base_use_cases import AsyncTenantService
from gymdesk.domain.exceptions import InvalidInputException, ResourceNotFoundException
from gymdesk.domain.models.tenant_domain_model import TenantContext
from gymdesk.domain.services.audit_service import audit_service
from gymdesk.domain.services.membership_renewal import MembershipRenewalEngine

logger = logging.getLogger(__name__)

ENTITY = "PAYMENT"


class AsyncPaymentService(AsyncTenantService, IPaymentUseCase):
    """
    Service for payments of one gym.
    """

    def __init__(
            self,
            db_session: AsyncSession,
            tenant: TenantContext,
            today: Callable[[], date] = date.today,
    ):
        super().__init__(db_session, tenant)
        self.today = today
        self.client_store = ClientStore(db_session)
        self.payment_store = PaymentStore(db_session)
        self.renewal_engine = MembershipRenewalEngine(self.client_store)

    async def _get_or_404(self, payment_id: int) -> Payment:
        payment = await self.payment_store.find_by_id(self.tenant, payment_id)
        if not payment:
            logger.warning(f"Payment {payment_id} not found in gym {self.tenant.gym_id}")
            raise ResourceNotFoundException(detail="Payment not found", resource_id=payment_id)
        return payment

    async def create_payment(self, data: PaymentCreate) -> PaymentOutput:
        """
        Record a payment and renew the client's membership when it buys one.

        Raises:
            InvalidInputException: If the client does not exist in this gym
        """
        client = await self.client_store.find_by_id(self.tenant, data.client_id)
        if client is None:
            logger.warning(f"Payment rejected: client {data.client_id} is not in gym {self.gym_id}")
            raise InvalidInputException(
                detail="Invalid payment",
                fields={"client_id": "client does not exist in this gym"},
            )

        previous_expiry = client.membership_expiry
        try:
            payment = await self.payment_store.save(Payment(**data.model_dump(), gym_id=self.gym_id))
            renewed = await self.renewal_engine.apply_renewal(client, payment, today=self.today())
            await self.commit()
        except Exception:
            await self.rollback()
            raise

        logger.info(f"Payment {payment.id} recorded for client {client.id} in gym {payment.gym_id}")
        audit_service.log(
            "CREATE", ENTITY, payment.id, self.tenant,
            details={"client_id": client.id, "amount": str(payment.amount), "status": payment.status.value},
        )
        if renewed is not None:
            audit_service.log(
                "RENEWAL", "CLIENT", client.id, self.tenant,
                details={
                    "payment_id": payment.id,
                    "previous_expiry": previous_expiry,
                    "membership_expiry": client.membership_expiry,
                    "status": client.status.value,
                },
            )
        return PaymentOutput.model_validate(payment)

    async def list_payments(
            self,
            params: Params,
            client_id: Optional[int] = None,
            search: Optional[str] = None,
            days: Optional[int] = None,
            today: Optional[date] = None,
    ) -> Page[PaymentOutput]:
        """List the gym's payments, newest first."""
        filters = PaymentFilter(client_id=client_id, search=search, days=days)
        query = build_payment_query(self.gym_id, filters, today=today or self.today())
        return await paginate(
            self.db,
            query,
            params,
            transformer=lambda payments: [PaymentOutput.model_validate(p) for p in payments],
        )

    async def get_payment(self, payment_id: int) -> PaymentOutput:
        return PaymentOutput.model_validate(await self._get_or_404(payment_id))

    async def update_payment(self, payment_id: int, data: PaymentUpdate) -> PaymentOutput:
        """
        Update the mutable fields of a payment.

        The membership is not touched, whatever the new status or type.
        """
        payment = await self._get_or_404(payment_id)
        changes = data.to_dict(exclude_unset=True)
        try:
            for field, value in changes.items():
                setattr(payment, field, value)
            payment = await self.payment_store.save(payment)
            await self.commit()
        except Exception:
            await self.rollback()
            raise

        audit_service.log(
            "UPDATE", ENTITY, payment.id, self.tenant,
            details={"fields": sorted(changes.keys())},
        )
        return PaymentOutput.model_validate(payment)

    async def delete_payment(self, payment_id: int) -> None:
        """Delete a payment. A renewal it triggered is kept."""
        payment = await self._get_or_404(payment_id)
        try:
            await payment_repository.remove(self.db, db_obj=payment)
            await self.commit()
        except Exception:
            await self.rollback()
            raise

        audit_service.log("DELETE", ENTITY, payment_id, self.tenant, details={"client_id": payment.client_id})
