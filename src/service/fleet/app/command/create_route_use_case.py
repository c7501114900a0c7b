from typing import Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.logging.loguru_io import Logger
from src.service.fleet.app.interface.i_directory_command_repo import IDirectoryCommandRepo
from src.service.fleet.domain.entity.route_entity import Route


class CreateRouteUseCase:
    def __init__(self, directory_command_repo: IDirectoryCommandRepo) -> None:
        self.directory_command_repo = directory_command_repo

    @classmethod
    @inject
    def depends(
        cls,
        directory_command_repo: IDirectoryCommandRepo = Depends(
            Provide[Container.directory_command_repo]
        ),
    ) -> Self:
        return cls(directory_command_repo=directory_command_repo)

    @Logger.io
    async def execute(
        self,
        *,
        start_point: str,
        end_point: str,
        distance: float,
        estimated_time: str,
        fare: int,
    ) -> Route:
        route = Route.create(
            start_point=start_point,
            end_point=end_point,
            distance=distance,
            estimated_time=estimated_time,
            fare=fare,
        )
        created = await self.directory_command_repo.create_route(route=route)
        Logger.base.info(
            f'🛣️  [FLEET] Route {created.id} created: {created.start_point} -> {created.end_point}'
        )
        return created
