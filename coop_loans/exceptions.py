"""Custom exception hierarchy for coop-loans."""


class CoopLoansError(Exception):
    """Base exception for all coop-loans errors."""


class EntityNotFoundError(CoopLoansError):
    """Raised when a referenced entity does not exist."""


class ReferentialIntegrityError(EntityNotFoundError):
    """Raised when a foreign key reference is violated."""


class InvalidEntityStateError(CoopLoansError):
    """Raised when an entity is in an invalid state for the operation."""


class ConfigurationError(CoopLoansError):
    """Raised when configuration is invalid or missing."""


class MappingError(CoopLoansError):
    """Raised when a backend payload cannot be mapped to a domain model."""


class InvalidArgumentError(CoopLoansError, ValueError):
    """Raised when a caller passes input that breaks a calculation's contract."""
