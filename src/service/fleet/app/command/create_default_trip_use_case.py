from typing import Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.exception.exceptions import NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.fleet.app.interface.i_directory_command_repo import IDirectoryCommandRepo
from src.service.fleet.app.interface.i_directory_query_repo import IDirectoryQueryRepo
from src.service.fleet.domain.entity.default_trip_entity import DefaultTrip


class CreateDefaultTripUseCase:
    def __init__(
        self,
        directory_query_repo: IDirectoryQueryRepo,
        directory_command_repo: IDirectoryCommandRepo,
    ) -> None:
        self.directory_query_repo = directory_query_repo
        self.directory_command_repo = directory_command_repo

    @classmethod
    @inject
    def depends(
        cls,
        directory_query_repo: IDirectoryQueryRepo = Depends(
            Provide[Container.directory_query_repo]
        ),
        directory_command_repo: IDirectoryCommandRepo = Depends(
            Provide[Container.directory_command_repo]
        ),
    ) -> Self:
        return cls(
            directory_query_repo=directory_query_repo,
            directory_command_repo=directory_command_repo,
        )

    @Logger.io
    async def execute(
        self, *, route_id: int, bus_id: int, start_time: str, arrival_time: str
    ) -> DefaultTrip:
        default_trip = DefaultTrip.create(
            route_id=route_id, bus_id=bus_id, start_time=start_time, arrival_time=arrival_time
        )
        if not await self.directory_query_repo.get_bus(bus_id=bus_id):
            raise NotFoundError('Bus not found')
        if not await self.directory_query_repo.get_route(route_id=route_id):
            raise NotFoundError('Route not found')

        created = await self.directory_command_repo.create_default_trip(default_trip=default_trip)
        Logger.base.info(
            f'🗓️  [FLEET] Default trip {created.id} on bus {bus_id}: '
            f'{created.start_time} -> {created.arrival_time}'
        )
        return created
