# gymdesk/adapters/outbound/persistence/models/payment_model.py

"""
Payment model.

A payment records that money was received (or is pending) from one client of
the same gym. Creating a PAID payment may renew the client's membership.
"""

from sqlalchemy import Column, String, Text, Numeric, Date, DateTime, ForeignKey, Enum as SAEnum, Index

from gymdesk.adapters.outbound.persistence.models.base_model import Base, IdType, utcnow
from gymdesk.domain.models.payment_domain_model import (
    MembershipPlan,
    PaymentCurrency,
    PaymentMethod,
    PaymentStatus,
    PaymentType,
)


class Payment(Base):
    """
    Model representing a recorded payment.

    Attributes:
        id: Unique identifier of the payment
        gym_id: Owning gym (tenant)
        client_id: Paying client, same gym
        amount: Fixed-point amount with 2 decimals
        currency: ISO currency code
        payment_method: How the money was received
        payment_type: What the payment is for
        membership_plan: Structured renewal intent, when the type carries none
        status: Payment state; only PAID renews memberships
        reference: External reference (receipt, transfer id)
        notes: Free-text notes
        payment_date: Date the payment was made
        created_at: Creation timestamp, never modified
        updated_at: Last update timestamp
    """
    __tablename__ = "payments"
    __table_args__ = (
        Index("idx_payments_gym_id", "gym_id"),
        Index("idx_payments_client_id", "client_id"),
        Index("idx_payments_payment_date", "payment_date"),
    )

    id = Column(IdType, primary_key=True, autoincrement=True)
    gym_id = Column(IdType, nullable=False)
    client_id = Column(IdType, ForeignKey("clients.id", ondelete="CASCADE"), nullable=False)
    amount = Column(Numeric(12, 2), nullable=False)
    currency = Column(
        SAEnum(PaymentCurrency, name="payment_currency", native_enum=False, length=3),
        nullable=False,
        default=PaymentCurrency.CRC,
    )
    payment_method = Column(
        SAEnum(PaymentMethod, name="payment_method", native_enum=False, length=20),
        nullable=False,
    )
    payment_type = Column(
        SAEnum(PaymentType, name="payment_type", native_enum=False, length=40),
        nullable=False,
    )
    membership_plan = Column(
        SAEnum(MembershipPlan, name="membership_plan", native_enum=False, length=20),
        nullable=True,
    )
    status = Column(
        SAEnum(PaymentStatus, name="payment_status", native_enum=False, length=20),
        nullable=False,
        default=PaymentStatus.PAID,
    )
    reference = Column(String(120), nullable=True)
    notes = Column(Text, nullable=True)
    payment_date = Column(Date, nullable=False)
    created_at = Column(DateTime, nullable=False, default=utcnow)
    updated_at = Column(DateTime, nullable=False, default=utcnow, onupdate=utcnow)

    def __repr__(self) -> str:
        """String representation of the Payment object."""
        return f"<Payment(id={self.id}, client_id={self.client_id}, status={self.status})>"
