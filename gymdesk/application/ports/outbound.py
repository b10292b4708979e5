# gymdesk/application/ports/outbound.py

from abc import ABC, abstractmethod
from typing import Any, Optional

from gymdesk.domain.models.tenant_domain_model import TenantContext


class IClientStore(ABC):
    """Client persistence port. Every read is scoped to one gym."""

    @abstractmethod
    async def find_by_id(self, tenant: TenantContext, client_id: int) -> Optional[Any]:
        """Get a client of the tenant's gym, or None."""
        pass

    @abstractmethod
    async def save(self, client: Any) -> Any:
        """Persist a new or modified client."""
        pass


class IPaymentStore(ABC):
    """Payment persistence port. Every read is scoped to one gym."""

    @abstractmethod
    async def find_by_id(self, tenant: TenantContext, payment_id: int) -> Optional[Any]:
        """Get a payment of the tenant's gym, or None."""
        pass

    @abstractmethod
    async def save(self, payment: Any) -> Any:
        """Persist a new or modified payment."""
        pass


class IUserStore(ABC):
    """Staff user persistence port."""

    @abstractmethod
    async def get_by_username(self, username: str) -> Optional[Any]:
        """Get user by username."""
        pass
