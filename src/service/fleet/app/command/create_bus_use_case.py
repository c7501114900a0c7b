from typing import Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.exception.exceptions import NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.fleet.app.interface.i_directory_command_repo import IDirectoryCommandRepo
from src.service.fleet.app.interface.i_directory_query_repo import IDirectoryQueryRepo
from src.service.fleet.domain.entity.bus_entity import Bus


class CreateBusUseCase:
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
        self, *, bus_number: str, capacity: int, operator_id: int, route_id: int
    ) -> Bus:
        """
        Raises:
            ValidationFailedError: blank bus_number or non-positive capacity
            NotFoundError: route does not exist
            ConflictError: bus_number already registered
        """
        bus = Bus.create(
            bus_number=bus_number, capacity=capacity, operator_id=operator_id, route_id=route_id
        )
        if not await self.directory_query_repo.get_route(route_id=route_id):
            raise NotFoundError('Route not found')

        created = await self.directory_command_repo.create_bus(bus=bus)
        Logger.base.info(
            f'🚌 [FLEET] Bus {created.id} ({created.bus_number}) registered, '
            f'capacity {created.capacity}'
        )
        return created
