"""Error types shared by services and the API layer."""


class DairyError(Exception):
    """Base class for expected per-request failures."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(DairyError):
    """Request fields are missing or invalid."""


class NotFoundError(DairyError):
    """The account number does not belong to any member."""


class ConflictError(DairyError):
    """The account number or email is already registered."""


class AuthenticationError(DairyError):
    """The supplied credentials do not match a member."""


class StoreError(DairyError):
    """The underlying persistence layer failed."""
