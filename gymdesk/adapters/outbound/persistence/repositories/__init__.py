# gymdesk/adapters/outbound/persistence/repositories/__init__.py (async version)

"""
CRUD (Create, Read, Update, Delete) module.

This module exports classes and instances of the repositories CRUD
for different system entities, implementing the Repository pattern.
"""

# Import CRUD classes
from gymdesk.adapters.outbound.persistence.repositories.base_repository import AsyncTenantCRUDBase
from gymdesk.adapters.outbound.persistence.repositories.client_repository import AsyncClientCRUD, ClientStore
from gymdesk.adapters.outbound.persistence.repositories.payment_repository import AsyncPaymentCRUD, PaymentStore
from gymdesk.adapters.outbound.persistence.repositories.user_repository import AsyncUserCRUD, UserStore

# Import singleton CRUD instances
from gymdesk.adapters.outbound.persistence.repositories.client_repository import client_repository
from gymdesk.adapters.outbound.persistence.repositories.payment_repository import payment_repository
from gymdesk.adapters.outbound.persistence.repositories.user_repository import user_repository

# Export all classes and instances
__all__ = [
    # Classes
    "AsyncTenantCRUDBase",
    "AsyncClientCRUD",
    "AsyncPaymentCRUD",
    "AsyncUserCRUD",
    "ClientStore",
    "PaymentStore",
    "UserStore",

    # Instances
    "client_repository",
    "payment_repository",
    "user_repository",
]
