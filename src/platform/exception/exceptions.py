class CustomBaseError(Exception):
    """Base class for all custom exceptions - controls logging behavior in @Logger.io"""

    def __init__(self, message: str, status_code: int) -> None:
        self.message = message
        self.status_code = status_code
        super().__init__(message)


class DomainError(CustomBaseError):
    def __init__(self, message: str, status_code: int = 400) -> None:
        super().__init__(message, status_code)


class NotFoundError(CustomBaseError):
    def __init__(self, message: str) -> None:
        super().__init__(message, 404)


class AuthenticationError(CustomBaseError):
    def __init__(self, message: str) -> None:
        super().__init__(message, 401)


# ============================ Reservation ============================


class ReservationOutOfRangeError(DomainError):
    """Requested interval is empty or falls outside the reservation term."""

    def __init__(self, message: str) -> None:
        super().__init__(message, 400)


class ReservationOverbookedError(DomainError):
    """No capacity left for the requested interval."""

    def __init__(self, message: str) -> None:
        super().__init__(message, 400)


class StorageFailureError(CustomBaseError):
    """
    Infrastructure fault (connection loss, lock wait timeout, constraint violation).

    The message is what the client sees; the underlying cause stays in the logs.
    """

    def __init__(self, message: str = 'Storage temporarily unavailable, try again later') -> None:
        super().__init__(message, 500)
