# gymdesk/application/use_cases/client_use_cases.py (async version)

"""
Service for gym client management.

Status is never trusted as stored: every read recomputes it from the
membership dates. A single read persists the recomputed value when it
differs; a list read only reports it.
"""

import logging
from datetime import date
from typing import Callable, Optional

from fastapi_pagination import Page, Params
from fastapi_pagination.ext.sqlalchemy import paginate
from sqlalchemy.ext.asyncio import AsyncSession

from gymdesk.adapters.outbound.persistence.models import Client
from gymdesk.adapters.outbound.persistence.repositories.client_repository import client_repository
from gymdesk.adapters.outbound.persistence.repositories.payment_repository import payment_repository
from gymdesk.adapters.outbound.persistence.repositories.query_filters import (
    ClientFilter,
    SortOrder,
    build_client_query,
)
from gymdesk.application.dtos.client_dto import ClientCreate, ClientOutput, ClientUpdate
from gymdesk.application.ports.inbound import IClientUseCase
from gymdesk.application.use_cases.base_use_cases import AsyncTenantService
from gymdesk.domain.exceptions import InvalidInputException, ResourceNotFoundException
from gymdesk.domain.models.client_domain_model import ClientStatus
from gymdesk.domain.models.tenant_domain_model import TenantContext
from gymdesk.domain.services.audit_service import audit_service
from gymdesk.domain.services.membership_status import resolve_status

logger = logging.getLogger(__name__)

ENTITY = "CLIENT"


class AsyncClientService(AsyncTenantService, IClientUseCase):
    """
    Service for client management within one gym.
    """

    def __init__(
            self,
            db_session: AsyncSession,
            tenant: TenantContext,
            today: Callable[[], date] = date.today,
    ):
        super().__init__(db_session, tenant)
        self.today = today

    async def _get_or_404(self, client_id: int) -> Client:
        client = await client_repository.get(self.db, self.tenant, client_id)
        if not client:
            logger.warning(f"Client {client_id} not found in gym {self.tenant.gym_id}")
            raise ResourceNotFoundException(detail="Client not found", resource_id=client_id)
        return client

    def _to_output(self, client: Client) -> ClientOutput:
        """Output with the status recomputed for today; the row is left untouched."""
        output = ClientOutput.model_validate(client)
        current = resolve_status(self.today(), client.membership_start, client.membership_expiry)
        return output.model_copy(update={"status": current})

    async def create_client(self, data: ClientCreate) -> ClientOutput:
        """
        Register a new client.

        Raises:
            ResourceAlreadyExistsException: On a uniqueness violation
        """
        try:
            client = await client_repository.create(
                self.db,
                self.tenant,
                obj_in={**data.to_dict(), "status": ClientStatus.INACTIVE},
            )
            await self.commit()
        except Exception:
            await self.rollback()
            raise

        logger.info(f"Client {client.id} created in gym {client.gym_id}")
        audit_service.log("CREATE", ENTITY, client.id, self.tenant)
        return ClientOutput.model_validate(client)

    async def list_clients(
            self,
            params: Params,
            search: Optional[str] = None,
            order: str = "desc",
    ) -> Page[ClientOutput]:
        """List the gym's clients, matching ``search`` when given."""
        filters = ClientFilter(search=search, order=SortOrder(order))
        query = build_client_query(self.gym_id, filters)
        return await paginate(
            self.db,
            query,
            params,
            transformer=lambda clients: [self._to_output(c) for c in clients],
        )

    async def get_client(self, client_id: int) -> ClientOutput:
        """
        Get a client by ID.

        When the stored status no longer matches the membership dates, the
        recomputed one is saved and the transition is audited.

        Raises:
            ResourceNotFoundException: If the client does not exist in this gym
        """
        client = await self._get_or_404(client_id)
        current = resolve_status(self.today(), client.membership_start, client.membership_expiry)

        if client.status != current:
            previous = client.status
            try:
                client.status = current
                await client_repository.save(self.db, client)
                await self.commit()
            except Exception:
                await self.rollback()
                raise
            logger.info(f"Client {client.id} status refreshed: {previous.value} -> {current.value}")
            audit_service.log(
                "STATUS_REFRESH", ENTITY, client.id, self.tenant,
                details={"from": previous.value, "to": current.value},
            )

        return ClientOutput.model_validate(client)

    async def update_client(self, client_id: int, data: ClientUpdate) -> ClientOutput:
        """
        Update a client.

        An explicit ``status`` is stored as given. Without one, a change of
        the membership dates recomputes the status. A field sent as null is
        cleared.

        Raises:
            ResourceNotFoundException: If the client does not exist in this gym
            InvalidInputException: If the membership would end before it starts
        """
        client = await self._get_or_404(client_id)
        changes = data.changes()

        start = changes.get("membership_start", client.membership_start)
        expiry = changes.get("membership_expiry", client.membership_expiry)
        if start is not None and expiry is not None and expiry < start:
            raise InvalidInputException(
                detail="Invalid membership dates",
                fields={"membership_expiry": "must not be before membership_start"},
            )

        if "status" not in changes and ("membership_start" in changes or "membership_expiry" in changes):
            changes["status"] = resolve_status(self.today(), start, expiry)

        try:
            client = await client_repository.update(self.db, db_obj=client, obj_in=changes)
            await self.commit()
        except Exception:
            await self.rollback()
            raise

        audit_service.log(
            "UPDATE", ENTITY, client.id, self.tenant,
            details={"fields": sorted(changes.keys())},
        )
        return ClientOutput.model_validate(client)

    async def delete_client(self, client_id: int) -> None:
        """
        Delete a client together with its payments.

        Raises:
            ResourceNotFoundException: If the client does not exist in this gym
        """
        client = await self._get_or_404(client_id)
        try:
            removed = await payment_repository.remove_for_client(self.db, self.tenant, client.id)
            await client_repository.remove(self.db, db_obj=client)
            await self.commit()
        except Exception:
            await self.rollback()
            raise

        audit_service.log("DELETE", ENTITY, client_id, self.tenant, details={"payments_removed": removed})
