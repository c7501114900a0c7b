from datetime import date
from typing import List

from pydantic import BaseModel

from src.platform.types import UtilsUUID7
from src.service.trip_booking.domain.entity.trip_instance_entity import TripInstance


class TripResponse(BaseModel):
    model_config = {
        'json_schema_extra': {
            'example': {
                'id': '01936d8f-5e73-7c4e-a9c5-123456789abc',  # UUID7
                'bus_id': 1,
                'default_trip_id': 3,
                'route_id': 2,
                'trip_date': '2025-01-10',
                'booked_seats': [3, 12],
            }
        },
    }

    id: UtilsUUID7
    bus_id: int
    default_trip_id: int
    route_id: int
    trip_date: date
    booked_seats: List[int]

    @classmethod
    def from_entity(cls, trip: TripInstance) -> 'TripResponse':
        return cls(
            id=trip.id,
            bus_id=trip.bus_id,
            default_trip_id=trip.default_trip_id,
            route_id=trip.route_id,
            trip_date=trip.trip_date,
            booked_seats=trip.sorted_booked_seats,
        )
