# gymdesk/application/ports/inbound.py

from abc import ABC, abstractmethod
from datetime import date
from typing import Optional

from fastapi_pagination import Page, Params

from gymdesk.application.dtos.backup_dto import BackupExport
from gymdesk.application.dtos.client_dto import ClientCreate, ClientOutput, ClientUpdate
from gymdesk.application.dtos.payment_dto import PaymentCreate, PaymentOutput, PaymentUpdate
from gymdesk.application.dtos.user_dto import LoginRequest, TokenData


class IAuthUseCase(ABC):
    """Interface for staff authentication."""

    @abstractmethod
    async def login_user(self, credentials: LoginRequest) -> TokenData:
        """Authenticate a user and return a gym-scoped access token."""
        pass


class IClientUseCase(ABC):
    """Interface for client-related use cases."""

    @abstractmethod
    async def create_client(self, data: ClientCreate) -> ClientOutput:
        """Register a new client, INACTIVE until a membership is paid."""
        pass

    @abstractmethod
    async def list_clients(self, params: Params, search: Optional[str] = None,
                           order: str = "desc") -> Page[ClientOutput]:
        """List clients with their status recomputed for today."""
        pass

    @abstractmethod
    async def get_client(self, client_id: int) -> ClientOutput:
        """Get a client, persisting its status if the dates changed it."""
        pass

    @abstractmethod
    async def update_client(self, client_id: int, data: ClientUpdate) -> ClientOutput:
        """Update identity fields or override the membership."""
        pass

    @abstractmethod
    async def delete_client(self, client_id: int) -> None:
        """Delete a client and its payments."""
        pass


class IPaymentUseCase(ABC):
    """Interface for payment-related use cases."""

    @abstractmethod
    async def create_payment(self, data: PaymentCreate) -> PaymentOutput:
        """Record a payment and apply the membership renewal it buys."""
        pass

    @abstractmethod
    async def list_payments(self, params: Params, client_id: Optional[int] = None,
                            search: Optional[str] = None, days: Optional[int] = None,
                            today: Optional[date] = None) -> Page[PaymentOutput]:
        """List payments, newest first."""
        pass

    @abstractmethod
    async def get_payment(self, payment_id: int) -> PaymentOutput:
        """Get a payment by ID."""
        pass

    @abstractmethod
    async def update_payment(self, payment_id: int, data: PaymentUpdate) -> PaymentOutput:
        """Update the mutable fields of a payment."""
        pass

    @abstractmethod
    async def delete_payment(self, payment_id: int) -> None:
        """Delete a payment. The membership is left as it is."""
        pass


class IBackupUseCase(ABC):
    """Interface for data export."""

    @abstractmethod
    async def export(self) -> BackupExport:
        """Export the gym's clients and payments."""
        pass
