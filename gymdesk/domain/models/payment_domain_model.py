# gymdesk/domain/models/payment_domain_model.py

from datetime import date
from enum import Enum
from typing import Optional, Protocol


class PaymentStatus(str, Enum):
    PAID = "PAID"
    PENDING = "PENDING"
    VOID = "VOID"
    REFUNDED = "REFUNDED"


class PaymentType(str, Enum):
    DAILY_MEMBERSHIP = "DAILY_MEMBERSHIP"
    MONTHLY_MEMBERSHIP = "MONTHLY_MEMBERSHIP"
    QUARTERLY_MEMBERSHIP = "QUARTERLY_MEMBERSHIP"
    SEMESTER_MEMBERSHIP = "SEMESTER_MEMBERSHIP"
    ANNUAL_MEMBERSHIP = "ANNUAL_MEMBERSHIP"
    REGISTRATION = "REGISTRATION"
    PENALTY = "PENALTY"
    OTHER = "OTHER"


class MembershipPlan(str, Enum):
    """Structured renewal intent for payments whose type carries none."""
    DAILY = "DAILY"
    MONTHLY = "MONTHLY"
    QUARTERLY = "QUARTERLY"
    SEMESTER = "SEMESTER"
    ANNUAL = "ANNUAL"


class PaymentMethod(str, Enum):
    CASH = "CASH"
    CARD = "CARD"
    TRANSFER = "TRANSFER"
    SINPE = "SINPE"
    OTHER = "OTHER"


class PaymentCurrency(str, Enum):
    CRC = "CRC"
    USD = "USD"


class PaymentRecord(Protocol):
    """Payment fields the renewal engine reads; the ORM ``Payment`` row satisfies it."""
    id: Optional[int]
    gym_id: int
    client_id: int
    payment_type: PaymentType
    membership_plan: Optional[MembershipPlan]
    status: PaymentStatus
    notes: Optional[str]
    payment_date: Optional[date]
