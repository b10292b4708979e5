# gymdesk/adapters/outbound/persistence/models/__init__.py

"""
Data models module.

Exports every SQLAlchemy model so that importing this package registers all
tables on ``Base.metadata``.
"""

from gymdesk.adapters.outbound.persistence.models.base_model import Base
from gymdesk.adapters.outbound.persistence.models.client_model import Client
from gymdesk.adapters.outbound.persistence.models.payment_model import Payment
from gymdesk.adapters.outbound.persistence.models.user_model import User

__all__ = [
    "Base",
    "Client",
    "Payment",
    "User",
]
