from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel

from src.platform.types import UtilsUUID7
from src.service.trip_booking.domain.entity.reservation_entity import Reservation


class ReservationCreateRequest(BaseModel):
    bus_id: int
    default_trip_id: int
    trip_date: date | datetime  # time-of-day is dropped when the trip is resolved
    seat_number: int

    class Config:
        json_schema_extra = {
            'example': {
                'bus_id': 1,
                'default_trip_id': 3,
                'trip_date': '2025-01-10',
                'seat_number': 12,
            }
        }


class ReservationUpdateRequest(BaseModel):
    seat_number: Optional[int] = None
    payment_status: Optional[str] = None  # pending / completed

    class Config:
        json_schema_extra = {
            'examples': [
                {'seat_number': 7},
                {'payment_status': 'completed'},
                {'seat_number': 7, 'payment_status': 'completed'},
            ]
        }


class ReservationResponse(BaseModel):
    model_config = {
        'json_schema_extra': {
            'example': {
                'id': '01936d8f-5e73-7c4e-a9c5-123456789abc',  # UUID7
                'commuter_id': 2,
                'bus_id': 1,
                'trip_id': '01936d8f-5e70-7a11-b2c3-abcdef012345',
                'seat_number': 12,
                'payment_status': 'pending',
                'created_at': '2025-01-10T10:30:00',
                'updated_at': '2025-01-10T10:30:00',
            }
        },
    }

    id: UtilsUUID7
    commuter_id: int
    bus_id: int
    trip_id: UtilsUUID7
    seat_number: int
    payment_status: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def from_entity(cls, reservation: Reservation) -> 'ReservationResponse':
        return cls(
            id=reservation.id,
            commuter_id=reservation.commuter_id,
            bus_id=reservation.bus_id,
            trip_id=reservation.trip_id,
            seat_number=reservation.seat_number,
            payment_status=reservation.payment_status.value,
            created_at=reservation.created_at,
            updated_at=reservation.updated_at,
        )


class DeleteReservationResponse(BaseModel):
    id: UtilsUUID7
    released_seat: int
    trip_id: UtilsUUID7
