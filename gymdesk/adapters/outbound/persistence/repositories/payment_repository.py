# gymdesk/adapters/outbound/persistence/repositories/payment_repository.py (async version)

"""
Repository for payment operations.
"""

from datetime import date
from typing import Optional, List
from sqlalchemy.ext.asyncio import AsyncSession

from gymdesk.adapters.outbound.persistence.repositories.base_repository import AsyncTenantCRUDBase
from gymdesk.adapters.outbound.persistence.repositories.query_filters import PaymentFilter, build_payment_query
from gymdesk.adapters.outbound.persistence.models import Payment
from gymdesk.application.ports.outbound import IPaymentStore
from gymdesk.domain.models.tenant_domain_model import TenantContext, require_tenant


class AsyncPaymentCRUD(AsyncTenantCRUDBase[Payment]):
    """
    Async implementation of CRUD repository for the Payment entity.
    """

    async def search(
            self,
            db: AsyncSession,
            tenant: TenantContext,
            filters: Optional[PaymentFilter] = None,
            today: Optional[date] = None,
    ) -> List[Payment]:
        """
        List the tenant's payments matching ``filters``.

        Args:
            db: Async database session
            tenant: Caller's tenant context
            filters: Client, text and date-range options
            today: Reference date for the ``days`` window

        Returns:
            Matching payments of the tenant's gym, newest first by default
        """
        query = build_payment_query(require_tenant(tenant), filters, today=today)
        return await self.get_multi(db, query)

    async def remove_for_client(self, db: AsyncSession, tenant: TenantContext, client_id: int) -> int:
        """Delete every payment of one client; returns the number removed."""
        removed = await self.remove_where(db, tenant, client_id=client_id)
        self.logger.info(f"Removed {removed} payment(s) of client {client_id}")
        return removed


# Create singleton instance of the repository
payment_repository = AsyncPaymentCRUD(Payment)


class PaymentStore(IPaymentStore):
    """``IPaymentStore`` bound to one session; flushes, never commits."""

    def __init__(self, db: AsyncSession, repository: AsyncPaymentCRUD = payment_repository):
        self.db = db
        self.repository = repository

    async def find_by_id(self, tenant: TenantContext, payment_id: int) -> Optional[Payment]:
        return await self.repository.get(self.db, tenant, payment_id)

    async def save(self, payment: Payment) -> Payment:
        return await self.repository.save(self.db, payment)
