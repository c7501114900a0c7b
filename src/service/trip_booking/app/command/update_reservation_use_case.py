import time
from typing import Callable, Optional, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends
from opentelemetry import trace
from uuid_utils import UUID

from src.platform.config.di import Container
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.event.i_seat_update_broadcaster import ISeatUpdateBroadcaster
from src.platform.exception.exceptions import (
    CustomBaseError,
    NotFoundError,
    ValidationFailedError,
)
from src.platform.logging.loguru_io import Logger
from src.platform.metrics.reservation_metrics import metrics
from src.platform.state.trip_lock import TripLockRegistry
from src.service.shared_kernel.domain.entity.user_entity import UserRole
from src.service.trip_booking.app.command.seat_update_notification import notify_seat_update
from src.service.trip_booking.app.interface.i_reservation_query_repo import (
    IReservationQueryRepo,
)
from src.service.trip_booking.domain.entity.reservation_entity import Reservation
from src.service.trip_booking.domain.entity.trip_instance_entity import TripInstance
from src.service.trip_booking.domain.enum.payment_status import PaymentStatus
from src.service.trip_booking.domain.seat_booking_domain import reassign_seat


class UpdateReservationUseCase:
    """
    Change the seat and/or payment status of a reservation.

    A seat change moves the booked seat within the same trip atomically with the
    reservation row, then broadcasts. A status-only change never broadcasts.
    """

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
        self.tracer = trace.get_tracer(__name__)

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
        self,
        *,
        reservation_id: UUID,
        requester_id: int,
        requester_role: UserRole,
        seat_number: Optional[int] = None,
        payment_status: Optional[str | PaymentStatus] = None,
    ) -> Reservation:
        started = time.perf_counter()
        try:
            reservation = await self._update(
                reservation_id=reservation_id,
                requester_id=requester_id,
                requester_role=requester_role,
                seat_number=seat_number,
                payment_status=payment_status,
            )
        except CustomBaseError as e:
            metrics.record_reservation(
                operation='update', result=type(e).__name__, duration=time.perf_counter() - started
            )
            raise
        metrics.record_reservation(
            operation='update', result='success', duration=time.perf_counter() - started
        )
        return reservation

    async def _update(
        self,
        *,
        reservation_id: UUID,
        requester_id: int,
        requester_role: UserRole,
        seat_number: Optional[int],
        payment_status: Optional[str | PaymentStatus],
    ) -> Reservation:
        if seat_number is None and payment_status is None:
            raise ValidationFailedError('Provide seat_number or payment_status to update')

        existing = await self.reservation_query_repo.get_by_id(reservation_id=reservation_id)
        if not existing:
            raise NotFoundError('Reservation not found')
        existing.ensure_manageable_by(requester_id=requester_id, requester_role=requester_role)

        seat_changed = False
        trip: TripInstance | None = None

        with self.tracer.start_as_current_span(
            'use_case.update_reservation',
            attributes={'reservation_id': str(reservation_id), 'trip_id': str(existing.trip_id)},
        ):
            # Trip before bus, matching the reservation create path
            async with (
                self.trip_lock_registry.hold(('trip', existing.trip_id)),
                self.trip_lock_registry.hold(('bus', existing.bus_id)),
            ):
                async with self.uow_factory() as uow:
                    reservation = await uow.reservation_command_repo.get_by_id(
                        reservation_id=reservation_id
                    )
                    if not reservation:
                        raise NotFoundError('Reservation not found')

                    if seat_number is not None:
                        bus = await uow.directory_command_repo.get_bus_for_update(
                            bus_id=reservation.bus_id
                        )
                        if not bus:
                            raise NotFoundError('Bus not found')
                        trip = await uow.trip_command_repo.get_by_id(trip_id=reservation.trip_id)
                        if not trip:
                            raise NotFoundError('Trip not found')

                        old_seat = reservation.seat_number
                        seat_changed = reassign_seat(trip, old_seat, seat_number, bus.capacity)
                        if seat_changed:
                            await uow.trip_command_repo.move_seat(
                                trip_id=trip.id,
                                old_seat=old_seat,
                                new_seat=seat_number,
                                reservation_id=reservation.id,
                            )
                            reservation = reservation.move_to_seat(seat_number)

                    if payment_status is not None:
                        reservation = reservation.with_payment_status(payment_status)

                    reservation = await uow.reservation_command_repo.update(
                        reservation=reservation
                    )
                    await uow.commit()

        if seat_changed and trip is not None:
            Logger.base.info(
                f'🔁 [RESERVE] Reservation {reservation.id} moved to seat {reservation.seat_number}'
            )
            await notify_seat_update(broadcaster=self.seat_update_broadcaster, trip=trip)
        return reservation
