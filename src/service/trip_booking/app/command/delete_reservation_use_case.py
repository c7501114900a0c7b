import time
from typing import Callable, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends
from uuid_utils import UUID

from src.platform.config.di import Container
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.event.i_seat_update_broadcaster import ISeatUpdateBroadcaster
from src.platform.exception.exceptions import CustomBaseError, NotFoundError
from src.platform.logging.loguru_io import Logger
from src.platform.metrics.reservation_metrics import metrics
from src.platform.state.trip_lock import TripLockRegistry
from src.service.shared_kernel.domain.entity.user_entity import UserRole
from src.service.trip_booking.app.command.seat_update_notification import notify_seat_update
from src.service.trip_booking.app.interface.i_reservation_query_repo import (
    IReservationQueryRepo,
)
from src.service.trip_booking.domain.entity.reservation_entity import Reservation
from src.service.trip_booking.domain.seat_booking_domain import release_seat


class DeleteReservationUseCase:
    """Cancel a reservation and free its seat, then broadcast the new occupancy"""

    def __init__(
        self,
        *,
        reservation_query_repo: IReservationQueryRepo,
        uow_factory: Callable[[], AbstractUnitOfWork],
        trip_lock_registry: TripLockRegistry,
        seat_update_broadcaster: ISeatUpdateBroadcaster,
    ) -> None:
        self.reservation_query_repo = reservation_query_repo
        self.uow_factory = uow_factory
        self.trip_lock_registry = trip_lock_registry
        self.seat_update_broadcaster = seat_update_broadcaster

    @classmethod
    @inject
    def depends(
        cls,
        reservation_query_repo: IReservationQueryRepo = Depends(
            Provide[Container.reservation_query_repo]
        ),
        uow_factory: Callable[[], AbstractUnitOfWork] = Depends(
            Provide[Container.unit_of_work.provider]
        ),
        trip_lock_registry: TripLockRegistry = Depends(Provide[Container.trip_lock_registry]),
        seat_update_broadcaster: ISeatUpdateBroadcaster = Depends(
            Provide[Container.seat_update_broadcaster]
        ),
    ) -> Self:
        return cls(
            reservation_query_repo=reservation_query_repo,
            uow_factory=uow_factory,
            trip_lock_registry=trip_lock_registry,
            seat_update_broadcaster=seat_update_broadcaster,
        )

    @Logger.io
    async def execute(
        self, *, reservation_id: UUID, requester_id: int, requester_role: UserRole
    ) -> Reservation:
        started = time.perf_counter()
        try:
            reservation = await self._delete(
                reservation_id=reservation_id,
                requester_id=requester_id,
                requester_role=requester_role,
            )
        except CustomBaseError as e:
            metrics.record_reservation(
                operation='delete', result=type(e).__name__, duration=time.perf_counter() - started
            )
            raise
        metrics.record_reservation(
            operation='delete', result='success', duration=time.perf_counter() - started
        )
        return reservation

    async def _delete(
        self, *, reservation_id: UUID, requester_id: int, requester_role: UserRole
    ) -> Reservation:
        existing = await self.reservation_query_repo.get_by_id(reservation_id=reservation_id)
        if not existing:
            raise NotFoundError('Reservation not found')
        existing.ensure_manageable_by(requester_id=requester_id, requester_role=requester_role)

        async with self.trip_lock_registry.hold(('trip', existing.trip_id)):
            async with self.uow_factory() as uow:
                reservation = await uow.reservation_command_repo.get_by_id(
                    reservation_id=reservation_id
                )
                if not reservation:
                    raise NotFoundError('Reservation not found')
                trip = await uow.trip_command_repo.get_by_id(trip_id=reservation.trip_id)
                if not trip:
                    raise NotFoundError('Trip not found')

                if release_seat(trip, reservation.seat_number):
                    await uow.trip_command_repo.remove_seat(
                        trip_id=trip.id, seat_number=reservation.seat_number
                    )
                await uow.reservation_command_repo.delete(reservation_id=reservation.id)
                await uow.commit()

        Logger.base.info(
            f'🗑️  [RESERVE] Reservation {reservation.id} cancelled, '
            f'seat {reservation.seat_number} released on trip {trip.id}'
        )
        await notify_seat_update(broadcaster=self.seat_update_broadcaster, trip=trip)
        return reservation
