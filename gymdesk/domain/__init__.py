# gymdesk/domain/__init__.py

"""
Domain components: membership rules, tenant context and exceptions.
"""

# Export all exceptions for easier imports
from gymdesk.domain.exceptions import (
    DomainException,
    ResourceNotFoundException,
    ResourceAlreadyExistsException,
    ResourceInactiveException,
    InvalidCredentialsException,
    InvalidInputException,
    DatabaseOperationException,
    TenantContextMissingException,
    RenewalPreconditionException,
)
