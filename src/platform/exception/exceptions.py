class CustomBaseError(Exception):
    """Base class for all custom exceptions - controls logging behavior in @Logger.io"""

    def __init__(self, message: str, status_code: int) -> None:
        self.message = message
        self.status_code = status_code
        super().__init__(message)


class DomainError(CustomBaseError):
    def __init__(self, message: str, status_code: int = 400) -> None:
        super().__init__(message, status_code)


class ValidationFailedError(DomainError):
    """Missing or malformed required fields, or a change that would contradict stored data"""

    def __init__(self, message: str) -> None:
        super().__init__(message, 400)


class SeatOutOfRangeError(DomainError):
    def __init__(self, *, seat_number: int, capacity: int) -> None:
        self.seat_number = seat_number
        self.capacity = capacity
        super().__init__(f'Seat number must be between 1 and {capacity}', 400)


class SeatNotBookedError(DomainError):
    def __init__(self, *, seat_number: int) -> None:
        self.seat_number = seat_number
        super().__init__(f'Seat {seat_number} is not booked on this trip', 400)


class ForbiddenError(CustomBaseError):
    def __init__(self, message: str) -> None:
        super().__init__(message, 403)


class NotFoundError(CustomBaseError):
    def __init__(self, message: str) -> None:
        super().__init__(message, 404)


class ConflictError(CustomBaseError):
    def __init__(self, message: str) -> None:
        super().__init__(message, 409)


class SeatAlreadyBookedError(ConflictError):
    def __init__(self, *, seat_number: int) -> None:
        self.seat_number = seat_number
        super().__init__('Seat already booked')


class AuthenticationError(CustomBaseError):
    def __init__(self, message: str) -> None:
        super().__init__(message, 401)
