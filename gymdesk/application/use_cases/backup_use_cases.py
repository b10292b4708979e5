# gymdesk/application/use_cases/backup_use_cases.py (async version)

import logging
from datetime import datetime, timezone

from gymdesk.adapters.outbound.persistence.repositories.client_repository import client_repository
from gymdesk.adapters.outbound.persistence.repositories.payment_repository import payment_repository
from gymdesk.adapters.outbound.persistence.repositories.query_filters import (
    ClientFilter,
    PaymentFilter,
    SortOrder,
)
from gymdesk.application.dtos.backup_dto import BackupExport
from gymdesk.application.dtos.client_dto import ClientOutput
from gymdesk.application.dtos.payment_dto import PaymentOutput
from gymdesk.application.ports.inbound import IBackupUseCase
from gymdesk.application.use_cases.base_use_cases import AsyncTenantService
from gymdesk.domain.services.audit_service import audit_service

logger = logging.getLogger(__name__)


class AsyncBackupService(AsyncTenantService, IBackupUseCase):
    """Read-only export of everything one gym owns."""

    async def export(self) -> BackupExport:
        clients = await client_repository.search(self.db, self.tenant, ClientFilter(order=SortOrder.ASC))
        payments = await payment_repository.search(self.db, self.tenant, PaymentFilter(order=SortOrder.ASC))

        export = BackupExport(
            gym_id=self.gym_id,
            generated_at=datetime.now(timezone.utc),
            clients=[ClientOutput.model_validate(c) for c in clients],
            payments=[PaymentOutput.model_validate(p) for p in payments],
        )
        logger.info(f"Backup exported for gym {self.gym_id}: {len(clients)} clients, {len(payments)} payments")
        audit_service.log(
            "BACKUP", "GYM", self.gym_id, self.tenant,
            details={"clients": len(clients), "payments": len(payments)},
        )
        return export
