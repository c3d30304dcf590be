"""Domain errors raised by the recommendation and shopping services."""


class MixMindError(Exception):
    """Base class for all domain errors."""


class NotFoundError(MixMindError):
    """Raised when an operation targets an unknown recipe, list, or item."""

    def __init__(self, kind: str, identifier: str) -> None:
        super().__init__(f"{kind} not found: {identifier}")
        self.kind = kind
        self.identifier = identifier


class InvalidInputError(MixMindError):
    """Raised when caller input fails validation."""


class PersistenceError(MixMindError):
    """Raised when the underlying store fails to read or write."""

    def __init__(self, message: str, cause: BaseException | None = None) -> None:
        super().__init__(message)
        self.cause = cause
