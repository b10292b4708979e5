# gymdesk/adapters/outbound/persistence/repositories/client_repository.py (async version)

"""
Repository for client operations.

This module implements the repository that performs database operations
related to gym clients, and the session-bound ``ClientStore`` adapter that
the membership renewal engine writes through.
"""

from typing import Optional, List
from sqlalchemy.ext.asyncio import AsyncSession

from gymdesk.adapters.outbound.persistence.repositories.base_repository import AsyncTenantCRUDBase
from gymdesk.adapters.outbound.persistence.repositories.query_filters import ClientFilter, build_client_query
from gymdesk.adapters.outbound.persistence.models import Client
from gymdesk.application.ports.outbound import IClientStore
from gymdesk.domain.models.tenant_domain_model import TenantContext, require_tenant


class AsyncClientCRUD(AsyncTenantCRUDBase[Client]):
    """
    Async implementation of CRUD repository for the Client entity.
    """

    async def search(
            self, db: AsyncSession, tenant: TenantContext, filters: Optional[ClientFilter] = None
    ) -> List[Client]:
        """
        List the tenant's clients matching ``filters``.

        Args:
            db: Async database session
            tenant: Caller's tenant context
            filters: Search and ordering options

        Returns:
            Matching clients of the tenant's gym
        """
        return await self.get_multi(db, build_client_query(require_tenant(tenant), filters))


# Create singleton instance of the repository
client_repository = AsyncClientCRUD(Client)


class ClientStore(IClientStore):
    """``IClientStore`` bound to one session; flushes, never commits."""

    def __init__(self, db: AsyncSession, repository: AsyncClientCRUD = client_repository):
        self.db = db
        self.repository = repository

    async def find_by_id(self, tenant: TenantContext, client_id: int) -> Optional[Client]:
        return await self.repository.get(self.db, tenant, client_id)

    async def save(self, client: Client) -> Client:
        return await self.repository.save(self.db, client)
