"""
Trip booking models

Import all models here to ensure they are registered with SQLAlchemy
"""

from src.service.trip_booking.driven_adapter.model.reservation_model import ReservationModel
from src.service.trip_booking.driven_adapter.model.trip_model import TripModel
from src.service.trip_booking.driven_adapter.model.trip_seat_model import TripSeatModel

__all__ = [
    'ReservationModel',
    'TripModel',
    'TripSeatModel',
]
