from typing import List

import attrs
from uuid_utils import UUID

from src.service.trip_booking.domain.entity.trip_instance_entity import TripInstance


SEAT_RESERVATION_UPDATE = 'seatReservationUpdate'


@attrs.frozen
class SeatReservationUpdateEvent:
    """Full booked-seat snapshot of one trip, not a diff"""

    bus_id: int
    trip_id: UUID
    booked_seats: List[int]

    @classmethod
    def from_trip(cls, trip: TripInstance) -> 'SeatReservationUpdateEvent':
        return cls(bus_id=trip.bus_id, trip_id=trip.id, booked_seats=trip.sorted_booked_seats)

    def to_payload(self) -> dict:
        return {
            'type': SEAT_RESERVATION_UPDATE,
            'busId': self.bus_id,
            'tripId': str(self.trip_id),
            'bookedSeats': list(self.booked_seats),
        }
