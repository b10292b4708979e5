# gymdesk/application/use_cases/__init__.py (async version)

"""
Application service module.

This package contains the application services that implement the business logic
of the application, organized according to functional domains.
"""

# Export service classes for easier imports
from gymdesk.application.use_cases.base_use_cases import AsyncTenantService
from gymdesk.application.use_cases.auth_use_cases import AsyncAuthService
from gymdesk.application.use_cases.backup_use_cases import AsyncBackupService
from gymdesk.application.use_cases.client_use_cases import AsyncClientService
from gymdesk.application.use_cases.payment_use_cases import AsyncPaymentService

# Export all services
__all__ = [
    "AsyncTenantService",
    "AsyncAuthService",
    "AsyncBackupService",
    "AsyncClientService",
    "AsyncPaymentService",
]
