# gymdesk/domain/models/tenant_domain_model.py

from dataclasses import dataclass
from typing import Optional

from gymdesk.domain.exceptions import TenantContextMissingException

UNKNOWN_CALLER = "unknown"


@dataclass(frozen=True)
class TenantContext:
    """
    Per-request tenant scope.

    Built by the API dependency layer for every request and passed explicitly
    into use cases; nothing about the current gym lives in module or thread state.
    """
    gym_id: int
    username: Optional[str] = None
    client_ip: str = UNKNOWN_CALLER


def require_tenant(tenant: Optional[TenantContext]) -> int:
    """Return the gym id of ``tenant`` or fail fast when it was never resolved."""
    if tenant is None or not isinstance(tenant.gym_id, int) or tenant.gym_id <= 0:
        raise TenantContextMissingException()
    return tenant.gym_id
