from datetime import date, datetime, timezone
from typing import List, Optional, Set

import attrs
import uuid_utils as uuid
from uuid_utils import UUID

from src.platform.logging.loguru_io import Logger
from src.service.trip_booking.domain.value_object.trip_key import TripKey


@attrs.define
class TripInstance:
    """
    One dated occurrence of a default trip, carrying the live seat occupancy.

    booked_seats is a set: a seat number can only be held once.
    """

    id: UUID
    bus_id: int
    default_trip_id: int
    route_id: int
    trip_date: date
    booked_seats: Set[int] = attrs.field(factory=set, converter=set)
    created_at: Optional[datetime] = None

    @classmethod
    @Logger.io
    def create(cls, *, key: TripKey, route_id: int) -> 'TripInstance':
        return cls(
            id=uuid.uuid7(),
            bus_id=key.bus_id,
            default_trip_id=key.default_trip_id,
            route_id=route_id,
            trip_date=key.trip_date,
            booked_seats=set(),
            created_at=datetime.now(timezone.utc),
        )

    @property
    def key(self) -> TripKey:
        return TripKey(
            bus_id=self.bus_id, default_trip_id=self.default_trip_id, trip_date=self.trip_date
        )

    @property
    def sorted_booked_seats(self) -> List[int]:
        return sorted(self.booked_seats)

    @property
    def highest_booked_seat(self) -> int:
        return max(self.booked_seats, default=0)

    def is_booked(self, seat_number: int) -> bool:
        return seat_number in self.booked_seats
