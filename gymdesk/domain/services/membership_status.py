# gymdesk/domain/services/membership_status.py

from datetime import date
from typing import Optional

from gymdesk.domain.models.client_domain_model import ClientStatus


def resolve_status(
        today: date,
        membership_start: Optional[date],
        membership_expiry: Optional[date],
) -> ClientStatus:
    """
    Derive a client's membership status from its dates.

    A membership that starts in the future is INACTIVE even when an older
    expiry has already lapsed; the start check runs before the expiry check.
    """
    if membership_expiry is None:
        return ClientStatus.INACTIVE
    if membership_start is not None and today < membership_start:
        return ClientStatus.INACTIVE
    if membership_expiry < today:
        return ClientStatus.DELINQUENT
    return ClientStatus.ACTIVE
