"""Domain-specific exceptions tagged with a failure kind"""

from enum import Enum


class ErrorKind(str, Enum):
    """Failure category; the API layer maps each kind to a status code"""

    VALIDATION = "validation"
    NOT_FOUND = "not_found"
    COLLABORATOR = "collaborator"
    INVARIANT = "invariant"
    INTERNAL = "internal"


class DomainException(Exception):
    """Base exception for domain layer"""

    kind: ErrorKind = ErrorKind.INTERNAL


class TenantValidationError(DomainException):
    """Tenant or payment data is malformed"""

    kind = ErrorKind.VALIDATION


class TenantNotFoundError(DomainException):
    """Referenced tenant id does not exist in the store"""

    kind = ErrorKind.NOT_FOUND

    def __init__(self, tenant_id: int):
        super().__init__(f"Tenant {tenant_id} not found")
        self.tenant_id = tenant_id


class TenantStoreError(DomainException):
    """Tenant store could not be read or written"""

    kind = ErrorKind.COLLABORATOR


class NotifierError(DomainException):
    """Email or SMS delivery failed"""

    kind = ErrorKind.COLLABORATOR


class InvariantViolation(DomainException, ValueError):
    """Data that the data model rules out reached the domain layer"""

    kind = ErrorKind.INVARIANT


def error_kind_of(exc: BaseException) -> ErrorKind:
    if isinstance(exc, DomainException):
        return exc.kind
    return ErrorKind.INTERNAL
