# gymdesk/adapters/outbound/persistence/repositories/query_filters.py

"""
Typed list filters and the query builder for each entity.

Every builder starts from the tenant's ``gym_id``; a filter can only narrow
the result further, never widen it to another gym.
"""

from dataclasses import dataclass
from datetime import date, timedelta
from enum import Enum
from typing import Optional

from sqlalchemy import Select, or_, select

from gymdesk.adapters.outbound.persistence.models import Client, Payment
from gymdesk.domain.models.client_domain_model import ClientStatus

MAX_PAYMENT_DAYS = 365


class SortOrder(str, Enum):
    ASC = "asc"
    DESC = "desc"


@dataclass(frozen=True)
class ClientFilter:
    """Free-text search over name, phone, email, national id and status."""
    search: Optional[str] = None
    order: SortOrder = SortOrder.DESC


@dataclass(frozen=True)
class PaymentFilter:
    """
    Payment list filter.

    ``days`` keeps payments dated within the last N days, today included.
    """
    client_id: Optional[int] = None
    search: Optional[str] = None
    days: Optional[int] = None
    order: SortOrder = SortOrder.DESC


def _pattern(search: Optional[str]) -> Optional[str]:
    if search is None:
        return None
    term = search.strip()
    return f"%{term}%" if term else None


def build_client_query(gym_id: int, filters: Optional[ClientFilter] = None) -> Select:
    filters = filters or ClientFilter()
    query = select(Client).where(Client.gym_id == gym_id)

    pattern = _pattern(filters.search)
    if pattern:
        conditions = [
            Client.first_name.ilike(pattern),
            Client.last_name.ilike(pattern),
            Client.phone.ilike(pattern),
            Client.email.ilike(pattern),
            Client.national_id.ilike(pattern),
        ]
        term = filters.search.strip().upper()
        if term in ClientStatus.__members__:
            conditions.append(Client.status == ClientStatus[term])
        query = query.where(or_(*conditions))

    if filters.order == SortOrder.ASC:
        return query.order_by(Client.registered_at.asc(), Client.id.asc())
    return query.order_by(Client.registered_at.desc(), Client.id.desc())


def build_payment_query(
        gym_id: int,
        filters: Optional[PaymentFilter] = None,
        today: Optional[date] = None,
) -> Select:
    filters = filters or PaymentFilter()
    query = select(Payment).where(Payment.gym_id == gym_id)

    if filters.client_id is not None:
        query = query.where(Payment.client_id == filters.client_id)

    pattern = _pattern(filters.search)
    if pattern:
        query = query.where(or_(Payment.reference.ilike(pattern), Payment.notes.ilike(pattern)))

    if filters.days is not None:
        days = max(1, min(filters.days, MAX_PAYMENT_DAYS))
        today = today or date.today()
        query = query.where(
            Payment.payment_date >= today - timedelta(days=days - 1),
            Payment.payment_date <= today,
        )

    if filters.order == SortOrder.ASC:
        return query.order_by(Payment.payment_date.asc(), Payment.id.asc())
    return query.order_by(Payment.payment_date.desc(), Payment.id.desc())
