class CustomBaseError(Exception):
    """Base class for all custom exceptions - controls logging behavior in @Logger.io"""

    def __init__(self, message: str, status_code: int) -> None:
        self.message = message
        self.status_code = status_code
        super().__init__(message)


class DomainError(CustomBaseError):
    def __init__(self, message: str, status_code: int = 400) -> None:
        super().__init__(message, status_code)


class ChildLimitExceededError(DomainError):
    def __init__(self, message: str) -> None:
        super().__init__(message, 409)


class MissingContextError(DomainError):
    def __init__(self, message: str) -> None:
        super().__init__(message, 400)


class NotFoundError(CustomBaseError):
    def __init__(self, message: str) -> None:
        super().__init__(message, 404)


class RemoteStoreError(CustomBaseError):
    def __init__(self, message: str, status_code: int = 502) -> None:
        super().__init__(message, status_code)


class PartialUpdateError(RemoteStoreError):
    """
    Raised when only part of a concurrent status batch was applied.

    Succeeded writes are not rolled back; the caller reconciles on next fetch.
    """

    def __init__(
        self,
        message: str,
        *,
        succeeded_ticket_ids: list[str],
        failed_ticket_ids: list[str],
    ) -> None:
        self.succeeded_ticket_ids = succeeded_ticket_ids
        self.failed_ticket_ids = failed_ticket_ids
        super().__init__(message)
