# gymdesk/adapters/outbound/persistence/models/client_model.py

"""
Gym client (member) model.

A client belongs to exactly one gym (``gym_id``) and carries the membership
dates from which its status is derived.
"""

from sqlalchemy import Column, String, Date, DateTime, Enum as SAEnum, Index

from gymdesk.adapters.outbound.persistence.models.base_model import Base, IdType, utcnow
from gymdesk.domain.models.client_domain_model import ClientStatus


class Client(Base):
    """
    Model representing a gym member.

    Attributes:
        id: Unique identifier of the client
        gym_id: Owning gym (tenant)
        first_name: Given name
        last_name: Family name
        national_id: National identity number, digits only
        phone: Normalized phone number
        email: Contact email
        notes: Free-text notes
        status: Derived membership status
        registered_at: Registration timestamp
        membership_start: First day of the current membership
        membership_expiry: Last day of the current membership
    """
    __tablename__ = "clients"
    __table_args__ = (
        Index("idx_clients_gym_id", "gym_id"),
    )

    id = Column(IdType, primary_key=True, autoincrement=True)
    gym_id = Column(IdType, nullable=False)
    first_name = Column(String(120), nullable=False)
    last_name = Column(String(120), nullable=True)
    national_id = Column(String(20), nullable=True)
    phone = Column(String(40), nullable=True)
    email = Column(String(180), nullable=True)
    notes = Column(String(500), nullable=True)
    status = Column(
        SAEnum(ClientStatus, name="client_status", native_enum=False, length=20),
        nullable=False,
        default=ClientStatus.INACTIVE,
    )
    registered_at = Column(DateTime, nullable=False, default=utcnow)
    membership_start = Column(Date, nullable=True)
    membership_expiry = Column(Date, nullable=True)

    def __repr__(self) -> str:
        """String representation of the Client object."""
        return f"<Client(id={self.id}, gym_id={self.gym_id}, status={self.status})>"
