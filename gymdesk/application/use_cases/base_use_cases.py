# gymdesk/application/use_cases/base_use_cases.py (async version)

"""
Base class for the tenant-scoped services.

A service is created per request with the request's session and tenant
context. Repositories only flush; the service commits once at the end of a
use case and rolls back if anything in it failed.
"""

import logging
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import SQLAlchemyError

from gymdesk.domain.exceptions import DatabaseOperationException
from gymdesk.domain.models.tenant_domain_model import TenantContext, require_tenant

# Configure logger
logger = logging.getLogger(__name__)


class AsyncTenantService:
    """
    Session and tenant holder shared by the client, payment and backup services.

    Attributes:
        db: Active async session
        tenant: Caller's tenant context
    """

    def __init__(self, db_session: AsyncSession, tenant: TenantContext):
        self.db = db_session
        self.tenant = tenant

    @property
    def gym_id(self) -> int:
        return require_tenant(self.tenant)

    async def commit(self) -> None:
        """
        Commit the current unit of work.

        Raises:
            DatabaseOperationException: If the commit fails; the session is rolled back
        """
        try:
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error(f"Commit failed for gym {self.tenant.gym_id}: {e}")
            raise DatabaseOperationException(detail="Error saving changes", original_error=e)

    async def rollback(self) -> None:
        await self.db.rollback()
