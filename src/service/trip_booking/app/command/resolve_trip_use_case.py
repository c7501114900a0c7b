from datetime import date, datetime
from typing import Optional, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends
from opentelemetry import trace

from src.platform.config.di import Container
from src.platform.exception.exceptions import NotFoundError, ValidationFailedError
from src.platform.logging.loguru_io import Logger
from src.platform.state.trip_lock import TripLockRegistry
from src.service.fleet.app.interface.i_directory_query_repo import IDirectoryQueryRepo
from src.service.trip_booking.app.interface.i_trip_command_repo import ITripCommandRepo
from src.service.trip_booking.domain.entity.trip_instance_entity import TripInstance
from src.service.trip_booking.domain.value_object.trip_key import TripKey


class ResolveTripUseCase:
    """
    Find or lazily create the trip instance for (bus, default trip, calendar day).

    Flow:
    1. Bus, default trip and its route must exist (NotFound otherwise)
    2. The default trip must run on this bus, and match route_id when one is given
    3. Under the per-key lock, read the instance or insert an empty one;
       the storage unique constraint settles races with other processes
    """

    def __init__(
        self,
        *,
        directory_query_repo: IDirectoryQueryRepo,
        trip_command_repo: ITripCommandRepo,
        trip_lock_registry: TripLockRegistry,
    ) -> None:
        self.directory_query_repo = directory_query_repo
        self.trip_command_repo = trip_command_repo
        self.trip_lock_registry = trip_lock_registry
        self.tracer = trace.get_tracer(__name__)

    @classmethod
    @inject
    def depends(
        cls,
        directory_query_repo: IDirectoryQueryRepo = Depends(
            Provide[Container.directory_query_repo]
        ),
        trip_command_repo: ITripCommandRepo = Depends(Provide[Container.trip_command_repo]),
        trip_lock_registry: TripLockRegistry = Depends(Provide[Container.trip_lock_registry]),
    ) -> Self:
        return cls(
            directory_query_repo=directory_query_repo,
            trip_command_repo=trip_command_repo,
            trip_lock_registry=trip_lock_registry,
        )

    @Logger.io
    async def execute(
        self,
        *,
        bus_id: int,
        default_trip_id: int,
        trip_date: date | datetime | str,
        route_id: Optional[int] = None,
    ) -> TripInstance:
        key = TripKey(bus_id=bus_id, default_trip_id=default_trip_id, trip_date=trip_date)

        with self.tracer.start_as_current_span(
            'use_case.resolve_trip',
            attributes={
                'bus_id': bus_id,
                'default_trip_id': default_trip_id,
                'trip_date': key.trip_date.isoformat(),
            },
        ):
            if not await self.directory_query_repo.get_bus(bus_id=bus_id):
                raise NotFoundError('Bus not found')

            default_trip = await self.directory_query_repo.get_default_trip(
                default_trip_id=default_trip_id
            )
            if not default_trip:
                raise NotFoundError('Default trip not found')

            if default_trip.bus_id != bus_id:
                raise ValidationFailedError('Default trip does not run on this bus')
            if route_id is not None and route_id != default_trip.route_id:
                raise ValidationFailedError('Route does not match the default trip')

            if not await self.directory_query_repo.get_route(route_id=default_trip.route_id):
                raise NotFoundError('Route not found')

            async with self.trip_lock_registry.hold(('trip_key', key)):
                return await self.trip_command_repo.get_or_create(
                    key=key, route_id=default_trip.route_id
                )
