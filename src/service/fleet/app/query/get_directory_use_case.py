from typing import Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.exception.exceptions import NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.fleet.app.interface.i_directory_query_repo import IDirectoryQueryRepo
from src.service.fleet.domain.entity.bus_entity import Bus
from src.service.fleet.domain.entity.default_trip_entity import DefaultTrip
from src.service.fleet.domain.entity.route_entity import Route


class GetDirectoryUseCase:
    """Single-record lookups for the fleet directory"""

    def __init__(self, directory_query_repo: IDirectoryQueryRepo) -> None:
        self.directory_query_repo = directory_query_repo

    @classmethod
    @inject
    def depends(
        cls,
        directory_query_repo: IDirectoryQueryRepo = Depends(
            Provide[Container.directory_query_repo]
        ),
    ) -> Self:
        return cls(directory_query_repo=directory_query_repo)

    @Logger.io
    async def get_route(self, *, route_id: int) -> Route:
        route = await self.directory_query_repo.get_route(route_id=route_id)
        if not route:
            raise NotFoundError('Route not found')
        return route

    @Logger.io
    async def get_bus(self, *, bus_id: int) -> Bus:
        bus = await self.directory_query_repo.get_bus(bus_id=bus_id)
        if not bus:
            raise NotFoundError('Bus not found')
        return bus

    @Logger.io
    async def get_default_trip(self, *, default_trip_id: int) -> DefaultTrip:
        default_trip = await self.directory_query_repo.get_default_trip(
            default_trip_id=default_trip_id
        )
        if not default_trip:
            raise NotFoundError('Default trip not found')
        return default_trip
