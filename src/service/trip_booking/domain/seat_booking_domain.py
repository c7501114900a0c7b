"""
Seat Booking Domain

Pure seat-occupancy rules for one trip instance. No database, no broadcasting:
callers persist the outcome and storage constraints back it up.

Every operation validates first and mutates last, so a raised error always
leaves the trip's booked-seat set untouched.
"""

from src.platform.exception.exceptions import (
    SeatAlreadyBookedError,
    SeatNotBookedError,
    SeatOutOfRangeError,
    ValidationFailedError,
)
from src.platform.logging.loguru_io import Logger
from src.service.trip_booking.domain.entity.trip_instance_entity import TripInstance


def ensure_seat_in_range(*, seat_number: int, capacity: int) -> None:
    if seat_number < 1 or seat_number > capacity:
        raise SeatOutOfRangeError(seat_number=seat_number, capacity=capacity)


@Logger.io
def book_seat(trip: TripInstance, seat_number: int, capacity: int) -> TripInstance:
    """
    Hold seat_number on the trip.

    Raises:
        SeatOutOfRangeError: seat_number outside [1, capacity]
        SeatAlreadyBookedError: seat_number already held
    """
    ensure_seat_in_range(seat_number=seat_number, capacity=capacity)
    if trip.is_booked(seat_number):
        raise SeatAlreadyBookedError(seat_number=seat_number)

    trip.booked_seats.add(seat_number)
    return trip


@Logger.io
def reassign_seat(trip: TripInstance, old_seat: int, new_seat: int, capacity: int) -> bool:
    """
    Move a held seat. Returns False when old_seat == new_seat (nothing to do).

    The collision check ignores old_seat itself, so moving onto your own seat
    is the no-op case rather than a conflict.

    Raises:
        SeatOutOfRangeError: new_seat outside [1, capacity]
        SeatAlreadyBookedError: new_seat is held by another reservation
        SeatNotBookedError: old_seat is not held (ledger and trip disagree)
    """
    if new_seat == old_seat:
        return False

    ensure_seat_in_range(seat_number=new_seat, capacity=capacity)
    if trip.is_booked(new_seat):
        raise SeatAlreadyBookedError(seat_number=new_seat)
    if not trip.is_booked(old_seat):
        raise SeatNotBookedError(seat_number=old_seat)

    trip.booked_seats.discard(old_seat)
    trip.booked_seats.add(new_seat)
    return True


@Logger.io
def release_seat(trip: TripInstance, seat_number: int) -> bool:
    """
    Free seat_number. Idempotent: releasing a seat that is not held succeeds
    and returns False so the caller can report the mismatch.
    """
    if not trip.is_booked(seat_number):
        Logger.base.warning(
            f'⚠️ [SEAT] Release of unbooked seat {seat_number} on trip {trip.id}, nothing to do'
        )
        return False

    trip.booked_seats.discard(seat_number)
    return True


@Logger.io
def validate_capacity_change(*, new_capacity: int, highest_booked_seat: int) -> None:
    """
    A bus may only shrink down to its highest booked seat on any derived trip.

    Raises:
        ValidationFailedError: non-positive capacity, or a booked seat would fall outside it
    """
    if new_capacity < 1:
        raise ValidationFailedError('capacity must be a positive integer')
    if new_capacity < highest_booked_seat:
        raise ValidationFailedError(
            f'Cannot reduce capacity to {new_capacity}: seat {highest_booked_seat} is booked'
        )
