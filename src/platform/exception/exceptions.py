class CustomBaseError(Exception):
    """Base class for all custom exceptions - controls logging behavior in @Logger.io"""

    def __init__(self, message: str, status_code: int = 500) -> None:
        self.message = message
        self.status_code = status_code
        super().__init__(message)


class DomainError(CustomBaseError):
    def __init__(self, message: str, status_code: int = 400) -> None:
        super().__init__(message, status_code)


class ValidationError(DomainError):
    """Bad attendee input (name, email or ticket count). Recoverable by re-prompting."""

    def __init__(self, message: str, *, field: str | None = None) -> None:
        super().__init__(message, 400)
        self.field = field


class NotFoundError(CustomBaseError):
    def __init__(self, message: str) -> None:
        super().__init__(message, 404)


class ConflictError(CustomBaseError):
    def __init__(self, message: str) -> None:
        super().__init__(message, 409)


class CapacityError(ConflictError):
    """Not enough remaining tickets for the requested count."""

    def __init__(self, *, requested: int, remaining: int) -> None:
        super().__init__(f'Only {remaining} tickets remaining')
        self.requested = requested
        self.remaining = remaining


class PersistenceError(CustomBaseError):
    """Snapshot could not be written, read or parsed."""

    def __init__(self, message: str) -> None:
        super().__init__(message, 500)


class ExportError(PersistenceError):
    pass
