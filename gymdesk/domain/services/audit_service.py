# gymdesk/domain/services/audit_service.py

import json
import logging
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from gymdesk.domain.models.tenant_domain_model import TenantContext

audit_logger = logging.getLogger("AUDIT")


class AuditService:
    """
    Structured audit trail for business actions.

    Each entry is one JSON line on the ``AUDIT`` logger, tagged with the gym,
    the acting user and the caller address taken from the tenant context.
    """

    @staticmethod
    def log(
            action: str,
            entity: str,
            entity_id: Any,
            tenant: Optional[TenantContext],
            details: Optional[Dict[str, Any]] = None,
    ) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "at": datetime.now(timezone.utc).isoformat(),
            "action": action,
            "entity": entity,
            "entity_id": entity_id,
            "username": (tenant.username if tenant and tenant.username else "anonymous"),
            "gym_id": tenant.gym_id if tenant else None,
            "ip": tenant.client_ip if tenant else "unknown",
        }
        if details:
            payload["details"] = details

        audit_logger.info(json.dumps(payload, default=str))
        return payload


audit_service = AuditService()
