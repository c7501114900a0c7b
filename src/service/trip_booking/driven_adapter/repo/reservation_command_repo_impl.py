from contextlib import asynccontextmanager
from typing import AsyncContextManager, AsyncIterator, Callable, Optional

from sqlalchemy import delete, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from uuid_utils import UUID

from src.platform.exception.exceptions import SeatAlreadyBookedError
from src.platform.logging.loguru_io import Logger
from src.platform.types import to_std_uuid, to_utils_uuid
from src.service.trip_booking.app.interface.i_reservation_command_repo import (
    IReservationCommandRepo,
)
from src.service.trip_booking.domain.entity.reservation_entity import Reservation
from src.service.trip_booking.domain.enum.payment_status import PaymentStatus
from src.service.trip_booking.driven_adapter.model.reservation_model import ReservationModel


class ReservationCommandRepoImpl(IReservationCommandRepo):
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

    @Logger.io
    async def create(self, *, reservation: Reservation) -> Reservation:
        async with self._get_session() as session:
            session.add(
                ReservationModel(
                    id=to_std_uuid(reservation.id),
                    commuter_id=reservation.commuter_id,
                    bus_id=reservation.bus_id,
                    trip_id=to_std_uuid(reservation.trip_id),
                    seat_number=reservation.seat_number,
                    payment_status=reservation.payment_status.value,
                    created_at=reservation.created_at,
                    updated_at=reservation.updated_at,
                )
            )
            try:
                await session.flush()
            except IntegrityError as e:
                raise SeatAlreadyBookedError(seat_number=reservation.seat_number) from e
            return reservation

    @Logger.io
    async def get_by_id(self, *, reservation_id: UUID) -> Optional[Reservation]:
        async with self._get_session() as session:
            db_reservation = await session.get(ReservationModel, to_std_uuid(reservation_id))
            return reservation_model_to_entity(db_reservation) if db_reservation else None

    @Logger.io
    async def update(self, *, reservation: Reservation) -> Reservation:
        async with self._get_session() as session:
            try:
                await session.execute(
                    update(ReservationModel)
                    .where(ReservationModel.id == to_std_uuid(reservation.id))
                    .values(
                        seat_number=reservation.seat_number,
                        payment_status=reservation.payment_status.value,
                        updated_at=reservation.updated_at,
                    )
                )
            except IntegrityError as e:
                raise SeatAlreadyBookedError(seat_number=reservation.seat_number) from e
            return reservation

    @Logger.io
    async def delete(self, *, reservation_id: UUID) -> None:
        async with self._get_session() as session:
            await session.execute(
                delete(ReservationModel).where(ReservationModel.id == to_std_uuid(reservation_id))
            )


def reservation_model_to_entity(db_reservation: ReservationModel) -> Reservation:
    return Reservation(
        id=to_utils_uuid(db_reservation.id),
        commuter_id=db_reservation.commuter_id,
        bus_id=db_reservation.bus_id,
        trip_id=to_utils_uuid(db_reservation.trip_id),
        seat_number=db_reservation.seat_number,
        payment_status=PaymentStatus(db_reservation.payment_status),
        created_at=db_reservation.created_at,
        updated_at=db_reservation.updated_at,
    )
