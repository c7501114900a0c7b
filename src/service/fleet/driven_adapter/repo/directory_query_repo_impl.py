from typing import AsyncContextManager, Callable, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from src.platform.logging.loguru_io import Logger
from src.service.fleet.app.interface.i_directory_query_repo import IDirectoryQueryRepo
from src.service.fleet.domain.entity.bus_entity import Bus
from src.service.fleet.domain.entity.default_trip_entity import DefaultTrip
from src.service.fleet.domain.entity.route_entity import Route
from src.service.fleet.driven_adapter.model.bus_model import BusModel
from src.service.fleet.driven_adapter.model.default_trip_model import DefaultTripModel
from src.service.fleet.driven_adapter.model.route_model import RouteModel


class DirectoryQueryRepoImpl(IDirectoryQueryRepo):
    def __init__(self, session_factory: Callable[..., AsyncContextManager[AsyncSession]]):
        self.session_factory = session_factory

    @Logger.io
    async def get_bus(self, *, bus_id: int) -> Optional[Bus]:
        async with self.session_factory() as session:
            db_bus = await session.get(BusModel, bus_id)
            return bus_model_to_entity(db_bus) if db_bus else None

    @Logger.io
    async def get_route(self, *, route_id: int) -> Optional[Route]:
        async with self.session_factory() as session:
            db_route = await session.get(RouteModel, route_id)
            return route_model_to_entity(db_route) if db_route else None

    @Logger.io
    async def get_default_trip(self, *, default_trip_id: int) -> Optional[DefaultTrip]:
        async with self.session_factory() as session:
            db_default_trip = await session.get(DefaultTripModel, default_trip_id)
            return default_trip_model_to_entity(db_default_trip) if db_default_trip else None


def bus_model_to_entity(db_bus: BusModel) -> Bus:
    return Bus(
        id=db_bus.id,
        bus_number=db_bus.bus_number,
        capacity=db_bus.capacity,
        operator_id=db_bus.operator_id,
        route_id=db_bus.route_id,
    )


def route_model_to_entity(db_route: RouteModel) -> Route:
    return Route(
        id=db_route.id,
        start_point=db_route.start_point,
        end_point=db_route.end_point,
        distance=db_route.distance,
        estimated_time=db_route.estimated_time,
        fare=db_route.fare,
    )


def default_trip_model_to_entity(db_default_trip: DefaultTripModel) -> DefaultTrip:
    return DefaultTrip(
        id=db_default_trip.id,
        route_id=db_default_trip.route_id,
        bus_id=db_default_trip.bus_id,
        start_time=db_default_trip.start_time,
        arrival_time=db_default_trip.arrival_time,
    )
