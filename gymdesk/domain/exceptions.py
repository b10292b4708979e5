# gymdesk/domain/exceptions.py

"""
Custom exceptions for the application.

Domain exceptions are framework-free: they carry an ``internal_code`` that the
exception middleware translates into an HTTP status. User-fixable problems
(validation, not-found) are kept apart from programmer/configuration errors,
which are surfaced as internal errors.
"""

from typing import Any, Dict, Optional


class DomainException(Exception):
    """
    Base exception for all gymdesk domain errors.
    """

    internal_code: str = "DOMAIN_ERROR"

    def __init__(
            self,
            detail: str = "Domain error",
            internal_code: Optional[str] = None,
            details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(detail)
        self.detail = detail
        if internal_code is not None:
            self.internal_code = internal_code
        self.details = details or {}


class ResourceNotFoundException(DomainException):
    """Resource not found (or owned by another gym)."""

    internal_code = "RESOURCE_NOT_FOUND"

    def __init__(self, detail: str = "Resource not found", resource_id: Any = None):
        resource_info = f" (ID: {resource_id})" if resource_id is not None else ""
        super().__init__(detail=f"{detail}{resource_info}")
        self.resource_id = resource_id


class ResourceAlreadyExistsException(DomainException):
    """Resource already exists."""

    internal_code = "RESOURCE_ALREADY_EXISTS"

    def __init__(self, detail: str = "Resource already exists", resource_id: Any = None):
        resource_info = f" (ID: {resource_id})" if resource_id is not None else ""
        super().__init__(detail=f"{detail}{resource_info}")


class InvalidCredentialsException(DomainException):
    """Invalid credentials."""

    internal_code = "INVALID_CREDENTIALS"

    def __init__(self, detail: str = "Invalid credentials"):
        super().__init__(detail=detail)


class InvalidInputException(DomainException):
    """Invalid input data, rejected before any state mutation."""

    internal_code = "INVALID_INPUT"

    def __init__(self, detail: str = "Invalid input data", fields: Optional[Dict[str, str]] = None):
        field_errors = ""
        if fields:
            field_errors = ": " + ", ".join([f"{field}: {error}" for field, error in fields.items()])
        super().__init__(detail=f"{detail}{field_errors}", details=fields)


class ResourceInactiveException(DomainException):
    """Resource found, but it is inactive."""

    internal_code = "RESOURCE_INACTIVE"

    def __init__(self, detail: str = "Resource is inactive", resource_id: Any = None):
        resource_info = f" (ID: {resource_id})" if resource_id is not None else ""
        super().__init__(detail=f"{detail}{resource_info}")


class DatabaseOperationException(DomainException):
    """Error in a database operation."""

    internal_code = "DATABASE_OPERATION_ERROR"

    def __init__(self, detail: str = "Error executing database operation",
                 original_error: Optional[Exception] = None):
        error_info = f": {str(original_error)}" if original_error else ""
        super().__init__(detail=f"{detail}{error_info}")
        self.original_error = original_error


class TenantContextMissingException(DomainException):
    """An operation ran without a resolved gym. Programmer error."""

    internal_code = "TENANT_CONTEXT_MISSING"

    def __init__(self, detail: str = "Tenant context is not initialized"):
        super().__init__(detail=detail)


class RenewalPreconditionException(DomainException):
    """Membership renewal invoked with an inconsistent client/payment pair. Programmer error."""

    internal_code = "RENEWAL_PRECONDITION_FAILED"

    def __init__(self, detail: str = "Membership renewal precondition failed"):
        super().__init__(detail=detail)
