from datetime import date, datetime
import time
from typing import Callable, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends
from opentelemetry import trace

from src.platform.config.di import Container
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.event.i_seat_update_broadcaster import ISeatUpdateBroadcaster
from src.platform.exception.exceptions import CustomBaseError, NotFoundError
from src.platform.logging.loguru_io import Logger
from src.platform.metrics.reservation_metrics import metrics
from src.platform.state.trip_lock import TripLockRegistry
from src.service.fleet.app.interface.i_directory_query_repo import IDirectoryQueryRepo
from src.service.trip_booking.app.command.resolve_trip_use_case import ResolveTripUseCase
from src.service.trip_booking.app.command.seat_update_notification import notify_seat_update
from src.service.trip_booking.app.interface.i_trip_command_repo import ITripCommandRepo
from src.service.trip_booking.domain.entity.reservation_entity import Reservation
from src.service.trip_booking.domain.seat_booking_domain import book_seat, ensure_seat_in_range


class CreateReservationUseCase:
    """
    Reserve one seat for a commuter on the dated trip of a default trip.

    Flow:
    1. Bus must exist; seat must be inside its capacity (checked before any trip is created)
    2. Resolve (or lazily create) the trip instance
    3. Under the trip lock, in one transaction: book the seat on a fresh read of
       the trip, insert the reservation and its seat row, commit
    4. Broadcast the new booked-seat snapshot (after commit, failures ignored)
    """

    def __init__(
        self,
        *,
        directory_query_repo: IDirectoryQueryRepo,
        resolve_trip_use_case: ResolveTripUseCase,
        uow_factory: Callable[[], AbstractUnitOfWork],
        trip_lock_registry: TripLockRegistry,
        seat_update_broadcaster: ISeatUpdateBroadcaster,
    ) -> None:
        self.directory_query_repo = directory_query_repo
        self.resolve_trip_use_case = resolve_trip_use_case
        self.uow_factory = uow_factory
        self.trip_lock_registry = trip_lock_registry
        self.seat_update_broadcaster = seat_update_broadcaster
        self.tracer = trace.get_tracer(__name__)

    @classmethod
    @inject
    def depends(
        cls,
        directory_query_repo: IDirectoryQueryRepo = Depends(
            Provide[Container.directory_query_repo]
        ),
        trip_command_repo: ITripCommandRepo = Depends(Provide[Container.trip_command_repo]),
        uow_factory: Callable[[], AbstractUnitOfWork] = Depends(
            Provide[Container.unit_of_work.provider]
        ),
        trip_lock_registry: TripLockRegistry = Depends(Provide[Container.trip_lock_registry]),
        seat_update_broadcaster: ISeatUpdateBroadcaster = Depends(
            Provide[Container.seat_update_broadcaster]
        ),
    ) -> Self:
        return cls(
            directory_query_repo=directory_query_repo,
            resolve_trip_use_case=ResolveTripUseCase(
                directory_query_repo=directory_query_repo,
                trip_command_repo=trip_command_repo,
                trip_lock_registry=trip_lock_registry,
            ),
            uow_factory=uow_factory,
            trip_lock_registry=trip_lock_registry,
            seat_update_broadcaster=seat_update_broadcaster,
        )

    @Logger.io
    async def execute(
        self,
        *,
        commuter_id: int,
        bus_id: int,
        default_trip_id: int,
        trip_date: date | datetime | str,
        seat_number: int,
    ) -> Reservation:
        started = time.perf_counter()
        try:
            reservation = await self._create(
                commuter_id=commuter_id,
                bus_id=bus_id,
                default_trip_id=default_trip_id,
                trip_date=trip_date,
                seat_number=seat_number,
            )
        except CustomBaseError as e:
            metrics.record_reservation(
                operation='create', result=type(e).__name__, duration=time.perf_counter() - started
            )
            raise
        metrics.record_reservation(
            operation='create', result='success', duration=time.perf_counter() - started
        )
        return reservation

    async def _create(
        self,
        *,
        commuter_id: int,
        bus_id: int,
        default_trip_id: int,
        trip_date: date | datetime | str,
        seat_number: int,
    ) -> Reservation:
        with self.tracer.start_as_current_span(
            'use_case.create_reservation',
            attributes={'bus_id': bus_id, 'seat_number': seat_number, 'commuter_id': commuter_id},
        ):
            bus = await self.directory_query_repo.get_bus(bus_id=bus_id)
            if not bus:
                raise NotFoundError('Bus not found')
            ensure_seat_in_range(seat_number=seat_number, capacity=bus.capacity)

            trip = await self.resolve_trip_use_case.execute(
                bus_id=bus_id, default_trip_id=default_trip_id, trip_date=trip_date
            )

            # Capacity changes take the bus lock, so bookings hold it too
            async with (
                self.trip_lock_registry.hold(('trip', trip.id)),
                self.trip_lock_registry.hold(('bus', bus_id)),
            ):
                async with self.uow_factory() as uow:
                    # Capacity and occupancy are re-read inside the transaction
                    current_bus = await uow.directory_command_repo.get_bus_for_update(
                        bus_id=bus_id
                    )
                    if not current_bus:
                        raise NotFoundError('Bus not found')
                    current_trip = await uow.trip_command_repo.get_by_id(trip_id=trip.id)
                    if not current_trip:
                        raise NotFoundError('Trip not found')

                    book_seat(current_trip, seat_number, current_bus.capacity)

                    reservation = Reservation.create(
                        commuter_id=commuter_id,
                        bus_id=bus_id,
                        trip_id=current_trip.id,
                        seat_number=seat_number,
                    )
                    await uow.reservation_command_repo.create(reservation=reservation)
                    await uow.trip_command_repo.add_seat(
                        trip_id=current_trip.id,
                        seat_number=seat_number,
                        reservation_id=reservation.id,
                    )
                    await uow.commit()

            Logger.base.info(
                f'🎫 [RESERVE] Seat {seat_number} on trip {current_trip.id} '
                f'reserved by commuter {commuter_id}'
            )

        await notify_seat_update(broadcaster=self.seat_update_broadcaster, trip=current_trip)
        return reservation
