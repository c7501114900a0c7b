from typing import Callable, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.exception.exceptions import NotFoundError
from src.platform.logging.loguru_io import Logger
from src.platform.state.trip_lock import TripLockRegistry
from src.service.fleet.domain.entity.bus_entity import Bus
from src.service.trip_booking.domain.seat_booking_domain import validate_capacity_change


class UpdateBusCapacityUseCase:
    """
    Change a bus's seat capacity.

    The bus row is read for update and the highest booked seat across every trip
    of the bus is checked in the same transaction, so no booked seat can end up
    outside the new capacity.
    """

    def __init__(
        self,
        *,
        uow_factory: Callable[[], AbstractUnitOfWork],
        trip_lock_registry: TripLockRegistry,
    ) -> None:
        self.uow_factory = uow_factory
        self.trip_lock_registry = trip_lock_registry

    @classmethod
    @inject
    def depends(
        cls,
        uow_factory: Callable[[], AbstractUnitOfWork] = Depends(
            Provide[Container.unit_of_work.provider]
        ),
        trip_lock_registry: TripLockRegistry = Depends(Provide[Container.trip_lock_registry]),
    ) -> Self:
        return cls(uow_factory=uow_factory, trip_lock_registry=trip_lock_registry)

    @Logger.io
    async def execute(self, *, bus_id: int, capacity: int) -> Bus:
        async with self.trip_lock_registry.hold(('bus', bus_id)):
            async with self.uow_factory() as uow:
                bus = await uow.directory_command_repo.get_bus_for_update(bus_id=bus_id)
                if not bus:
                    raise NotFoundError('Bus not found')

                highest = await uow.trip_command_repo.get_highest_booked_seat_for_bus(
                    bus_id=bus_id
                )
                validate_capacity_change(new_capacity=capacity, highest_booked_seat=highest)

                await uow.directory_command_repo.update_bus_capacity(
                    bus_id=bus_id, capacity=capacity
                )
                await uow.commit()

        Logger.base.info(f'🚌 [FLEET] Bus {bus_id} capacity {bus.capacity} -> {capacity}')
        return bus.with_capacity(capacity)
