"""
Wire Modules Configuration

Defines the modules that need dependency injection wiring.
Shared between production and test environments.
"""

from types import ModuleType

from src.service.fleet.app.command import (
    create_bus_use_case,
    create_default_trip_use_case,
    create_route_use_case,
    update_bus_capacity_use_case,
)
from src.service.fleet.app.query import get_directory_use_case
from src.service.shared_kernel.driving_adapter.http_controller.auth import role_auth
from src.service.trip_booking.app.command import (
    create_reservation_use_case,
    delete_reservation_use_case,
    resolve_trip_use_case,
    update_reservation_use_case,
)
from src.service.trip_booking.app.query import (
    get_reservation_use_case,
    get_trip_use_case,
    list_reservations_use_case,
)


WIRE_MODULES: list[ModuleType] = [
    # Fleet directory
    create_route_use_case,
    create_bus_use_case,
    create_default_trip_use_case,
    update_bus_capacity_use_case,
    get_directory_use_case,
    # Trips and reservations
    resolve_trip_use_case,
    create_reservation_use_case,
    update_reservation_use_case,
    delete_reservation_use_case,
    get_trip_use_case,
    get_reservation_use_case,
    list_reservations_use_case,
    # Auth
    role_auth,
]
