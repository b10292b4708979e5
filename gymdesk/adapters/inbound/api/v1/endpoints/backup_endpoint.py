# gymdesk/adapters/inbound/api/v1/endpoints/backup_endpoint.py (async version)

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from gymdesk.adapters.inbound.api.deps import get_session, get_tenant_context
from gymdesk.application.dtos.backup_dto import BackupExport
from gymdesk.application.use_cases.backup_use_cases import AsyncBackupService
from gymdesk.domain.models.tenant_domain_model import TenantContext

router = APIRouter()


@router.post(
    "",
    response_model=BackupExport,
    summary="Backup - Exports the gym's data",
    description="Returns every member and payment of the caller's gym as JSON. Limited per IP address.",
)
async def export_backup(
        db: AsyncSession = Depends(get_session),
        tenant: TenantContext = Depends(get_tenant_context),
):
    return await AsyncBackupService(db, tenant).export()
