# gymdesk/domain/models/client_domain_model.py

from datetime import date
from enum import Enum
from typing import Optional, Protocol


class ClientStatus(str, Enum):
    """Derived membership state of a client."""
    INACTIVE = "INACTIVE"
    ACTIVE = "ACTIVE"
    DELINQUENT = "DELINQUENT"


class MembershipHolder(Protocol):
    """Anything carrying membership dates; the ORM ``Client`` row satisfies it."""
    id: Optional[int]
    gym_id: int
    membership_start: Optional[date]
    membership_expiry: Optional[date]
    status: ClientStatus
