"""
Fleet directory models

Import all models here to ensure they are registered with SQLAlchemy
"""

from src.service.fleet.driven_adapter.model.bus_model import BusModel
from src.service.fleet.driven_adapter.model.default_trip_model import DefaultTripModel
from src.service.fleet.driven_adapter.model.route_model import RouteModel

__all__ = [
    'BusModel',
    'DefaultTripModel',
    'RouteModel',
]
