from contextlib import asynccontextmanager
from typing import AsyncContextManager, AsyncIterator, Callable, Optional

from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from src.platform.exception.exceptions import ConflictError
from src.platform.logging.loguru_io import Logger
from src.service.fleet.app.interface.i_directory_command_repo import IDirectoryCommandRepo
from src.service.fleet.domain.entity.bus_entity import Bus
from src.service.fleet.domain.entity.default_trip_entity import DefaultTrip
from src.service.fleet.domain.entity.route_entity import Route
from src.service.fleet.driven_adapter.model.bus_model import BusModel
from src.service.fleet.driven_adapter.model.default_trip_model import DefaultTripModel
from src.service.fleet.driven_adapter.model.route_model import RouteModel
from src.service.fleet.driven_adapter.repo.directory_query_repo_impl import (
    bus_model_to_entity,
    default_trip_model_to_entity,
    route_model_to_entity,
)


class DirectoryCommandRepoImpl(IDirectoryCommandRepo):
    """
    Two modes:
    - session_factory: every call runs and commits its own session
    - session (injected by UoW): writes are flushed, the UoW commits
    """

    def __init__(
        self,
        session_factory: Callable[..., AsyncContextManager[AsyncSession]] | None = None,
        *,
        session: AsyncSession | None = None,
    ):
        self.session_factory = session_factory
        self.session = session

    @asynccontextmanager
    async def _get_session(self) -> AsyncIterator[AsyncSession]:
        if self.session is not None:
            yield self.session
        elif self.session_factory is not None:
            async with self.session_factory() as session:
                yield session
        else:
            raise RuntimeError('No session or session_factory available')

    async def _persist(self, session: AsyncSession) -> None:
        if self.session is None:
            await session.commit()
        else:
            await session.flush()

    @Logger.io
    async def create_route(self, *, route: Route) -> Route:
        async with self._get_session() as session:
            db_route = RouteModel(
                start_point=route.start_point,
                end_point=route.end_point,
                distance=route.distance,
                estimated_time=route.estimated_time,
                fare=route.fare,
            )
            session.add(db_route)
            await self._persist(session)
            return route_model_to_entity(db_route)

    @Logger.io
    async def create_bus(self, *, bus: Bus) -> Bus:
        async with self._get_session() as session:
            db_bus = BusModel(
                bus_number=bus.bus_number,
                capacity=bus.capacity,
                operator_id=bus.operator_id,
                route_id=bus.route_id,
            )
            session.add(db_bus)
            try:
                await self._persist(session)
            except IntegrityError as e:
                await session.rollback()
                raise ConflictError(f'Bus number {bus.bus_number} already exists') from e
            return bus_model_to_entity(db_bus)

    @Logger.io
    async def create_default_trip(self, *, default_trip: DefaultTrip) -> DefaultTrip:
        async with self._get_session() as session:
            db_default_trip = DefaultTripModel(
                route_id=default_trip.route_id,
                bus_id=default_trip.bus_id,
                start_time=default_trip.start_time,
                arrival_time=default_trip.arrival_time,
            )
            session.add(db_default_trip)
            await self._persist(session)
            return default_trip_model_to_entity(db_default_trip)

    @Logger.io
    async def get_bus_for_update(self, *, bus_id: int) -> Optional[Bus]:
        async with self._get_session() as session:
            result = await session.execute(
                select(BusModel).where(BusModel.id == bus_id).with_for_update()
            )
            db_bus = result.scalar_one_or_none()
            return bus_model_to_entity(db_bus) if db_bus else None

    @Logger.io
    async def update_bus_capacity(self, *, bus_id: int, capacity: int) -> None:
        async with self._get_session() as session:
            await session.execute(
                update(BusModel).where(BusModel.id == bus_id).values(capacity=capacity)
            )
            await self._persist(session)
