# gymdesk/adapters/outbound/persistence/models/user_model.py

"""
Gym staff user model.

Users authenticate against the API; the token issued to them carries the id
of the gym they work for, which scopes every request.
"""

from sqlalchemy import Column, Boolean, String, DateTime

from gymdesk.adapters.outbound.persistence.models.base_model import Base, IdType, utcnow


class User(Base):
    """
    Model representing a gym staff user.

    Attributes:
        id: Unique identifier of the user
        gym_id: Gym the user works for
        username: Login name, unique across gyms
        password: Password hash
        is_active: Whether the user may log in
        created_at: Creation timestamp
    """
    __tablename__ = "users"

    id = Column(IdType, primary_key=True, autoincrement=True)
    gym_id = Column(IdType, nullable=False, index=True)
    username = Column(String(80), unique=True, nullable=False, index=True)
    password = Column(String, nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime, nullable=False, default=utcnow)

    def __repr__(self) -> str:
        """String representation of the User object."""
        return f"<User(username={self.username}, gym_id={self.gym_id}, active={self.is_active})>"
