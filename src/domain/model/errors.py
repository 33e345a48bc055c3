"""Domain-level exceptions.

Services and adapters raise these errors to express business rule violations
and infrastructure failures. Route handlers match on ``kind`` and map it to an
HTTP status code.
"""

from enum import Enum


class ErrorKind(str, Enum):
    DUPLICATE_IDENTITY = 'duplicate_identity'
    INVALID_CREDENTIALS = 'invalid_credentials'
    NOT_FOUND = 'not_found'
    VALIDATION = 'validation'
    PERMISSION_DENIED = 'permission_denied'
    INFRASTRUCTURE = 'infrastructure'
    CONFIGURATION = 'configuration'


class DomainError(Exception):
    """Base class for all domain errors."""

    kind: ErrorKind = ErrorKind.INFRASTRUCTURE


class NotFoundError(DomainError):
    """Requested entity does not exist."""

    kind = ErrorKind.NOT_FOUND


class DuplicateError(DomainError):
    """Entity with the same unique key already exists."""

    kind = ErrorKind.DUPLICATE_IDENTITY


class InvalidCredentialsError(DomainError):
    """Identifier/secret pair did not authenticate."""

    kind = ErrorKind.INVALID_CREDENTIALS


class PermissionDeniedError(DomainError):
    """Caller lacks permission for the requested action."""

    kind = ErrorKind.PERMISSION_DENIED


class ValidationError(DomainError):
    """Input violates a business validation rule."""

    kind = ErrorKind.VALIDATION


class InfrastructureError(DomainError):
    """Backing store or connectivity failure."""

    kind = ErrorKind.INFRASTRUCTURE


class ConfigurationError(DomainError):
    """Required configuration is missing or invalid."""

    kind = ErrorKind.CONFIGURATION
