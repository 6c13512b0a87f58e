"""Domain-level exceptions.

Services raise these errors to express business rule violations.
Route handlers catch them and map to appropriate HTTP status codes.
"""


class DomainError(Exception):
    """Base class for all domain errors."""


class NotFoundError(DomainError):
    """Requested entity does not exist."""


class DuplicateError(DomainError):
    """Entity with the same unique key already exists."""


class PermissionDeniedError(DomainError):
    """Caller lacks permission for the requested action."""


class ValidationError(DomainError):
    """Input violates a business validation rule.

    ``details`` maps field names to messages when the failure comes from
    schema rules (pattern, length, enum) rather than a missing input.
    """

    def __init__(self, message: str, details: dict[str, str] | None = None):
        self.message = message
        self.details = details
        super().__init__(message)


class InvalidIdError(ValidationError):
    """An identifier is not a well-formed ObjectId."""

    def __init__(self, field: str, value: object = None):
        self.field = field
        self.value = value
        super().__init__(f"Invalid data format for: {field}")


class InvalidCredentialsError(DomainError):
    """Email/password pair does not match (deliberately vague)."""


class InvalidTokenError(DomainError):
    """Auth token is malformed, expired or badly signed."""


class ServerConfigError(DomainError):
    """Required server configuration (e.g. signing secret) is missing."""


class StorageError(DomainError):
    """Underlying database operation failed."""
