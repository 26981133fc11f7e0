"""Domain exceptions."""


class PermatrixError(Exception):
    """Base exception for permatrix."""

    kind = "error"


class NotFound(PermatrixError):
    """Requested resource was not found."""

    kind = "not_found"

    def __init__(self, entity: str, key: str = "") -> None:
        self.entity = entity
        self.key = key
        super().__init__(f"{entity} not found: {key}" if key else f"{entity} not found")


class Unauthorized(PermatrixError):
    """Caller lacks the privilege to view or edit the requested permissions."""

    kind = "unauthorized"


class Conflict(PermatrixError):
    """Concurrent role or catalog change invalidates the submitted edit."""

    kind = "conflict"

    def __init__(self, message: str, permissions: list[str] | None = None) -> None:
        self.permissions = sorted(permissions or [])
        super().__init__(message)


class ValidationFailure(PermatrixError):
    """Input data failed validation (e.g. unknown permission names)."""

    kind = "validation_failure"

    def __init__(self, message: str, invalid: list[str] | None = None) -> None:
        self.invalid = sorted(invalid or [])
        super().__init__(message)


class PersistenceFailure(PermatrixError):
    """Grant store unavailable or write rejected."""

    kind = "persistence_failure"
