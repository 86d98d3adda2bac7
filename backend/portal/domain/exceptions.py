"""Domain-specific exceptions: framework-independent.

Every error that crosses a layer boundary is one of these. Storage adapters
translate backend exceptions (botocore, SQLAlchemy) into this taxonomy so
callers never depend on a particular backend.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class FieldError:
    """A single rejected field and the reason it was rejected."""

    field: str
    message: str

    def to_dict(self) -> dict[str, str]:
        return {"field": self.field, "message": self.message}


class PortalError(Exception):
    """Base class for all portal errors. ``code`` is stable and machine-readable."""

    code = "OperationFailedError"

    def __init__(self, message: str, code: str | None = None):
        self.message = message
        if code is not None:
            self.code = code
        super().__init__(message)


class ValidationError(PortalError):
    """Raised when a request is rejected before it reaches storage."""

    code = "ValidationError"

    def __init__(self, errors: list[FieldError], message: str = "Validation failed"):
        self.errors = errors
        super().__init__(message)

    @classmethod
    def single(cls, field: str, message: str) -> "ValidationError":
        return cls([FieldError(field=field, message=message)])


class AlreadyExistsError(PortalError):
    """Raised when a create trips the uniqueness guard."""

    code = "AlreadyExistsError"

    def __init__(self, entity_type: str, key: str):
        self.entity_type = entity_type
        self.key = key
        super().__init__(f"{entity_type} with key '{key}' already exists")


class NotFoundError(PortalError):
    """Raised when an update, delete or strict lookup targets a missing record."""

    code = "NotFoundError"

    def __init__(self, entity_type: str, key: str):
        self.entity_type = entity_type
        self.key = key
        super().__init__(f"{entity_type} with key '{key}' not found")


class ConflictError(PortalError):
    """Raised when a guarded update finds the record changed by another writer."""

    code = "ConflictError"

    def __init__(self, entity_type: str, key: str):
        self.entity_type = entity_type
        self.key = key
        super().__init__(f"{entity_type} with key '{key}' was changed by another request")


class BackendUnavailableError(PortalError):
    """Raised when the storage backend or remote proxy cannot be reached."""

    code = "BackendUnavailableError"


class OperationFailedError(PortalError):
    """Catch-all for backend failures; carries the original message."""

    code = "OperationFailedError"

    def __init__(self, operation: str, message: str):
        self.operation = operation
        self.original_message = message
        super().__init__(f"Failed to {operation}: {message}")


class AuthenticationError(PortalError):
    """Raised for missing or invalid API keys, credentials and tokens."""

    code = "AUTHENTICATION_FAILED"


class ConfigurationError(PortalError):
    """Raised at startup when required configuration is missing."""

    code = "CONFIGURATION_ERROR"
