# gymdesk/application/dtos/payment_dto.py

"""
Schemas for payment data.

``PaymentUpdate`` only exposes the mutable fields; the client, the amount and
the currency of a payment are fixed once it is recorded.
"""

from datetime import date, datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from gymdesk.application.dtos.base_dto import CustomBaseModel, blank_to_none
from gymdesk.domain.models.payment_domain_model import (
    MembershipPlan,
    PaymentCurrency,
    PaymentMethod,
    PaymentStatus,
    PaymentType,
)


class PaymentFields(CustomBaseModel):
    reference: Optional[str] = Field(None, max_length=120, description="External reference")
    notes: Optional[str] = Field(None, max_length=1000, description="Free-text notes")
    membership_plan: Optional[MembershipPlan] = Field(
        None, description="Membership bought by a payment whose type is not a membership type"
    )

    @field_validator("reference", "notes", mode="before")
    def strip_text(cls, v):
        return blank_to_none(v)


class PaymentCreate(PaymentFields):
    """
    Schema for recording a payment.

    A PAID payment that buys a membership extends the client's membership in
    the same transaction.
    """
    client_id: int = Field(..., gt=0, description="Paying client")
    amount: Decimal = Field(..., ge=Decimal("0.01"), max_digits=12, decimal_places=2)
    currency: PaymentCurrency = PaymentCurrency.CRC
    payment_method: PaymentMethod
    payment_type: PaymentType
    status: PaymentStatus = PaymentStatus.PAID
    payment_date: date


class PaymentUpdate(PaymentFields):
    """Schema for updating the mutable fields of a payment. Never re-runs renewal."""
    payment_method: Optional[PaymentMethod] = None
    payment_type: Optional[PaymentType] = None
    status: Optional[PaymentStatus] = None
    payment_date: Optional[date] = None


class PaymentOutput(BaseModel):
    """
    Schema for returning payment data.
    """
    id: int
    gym_id: int
    client_id: int
    amount: Decimal
    currency: PaymentCurrency
    payment_method: PaymentMethod
    payment_type: PaymentType
    membership_plan: Optional[MembershipPlan] = None
    status: PaymentStatus
    reference: Optional[str] = None
    notes: Optional[str] = None
    payment_date: date
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)
