from contextlib import asynccontextmanager
from typing import AsyncContextManager, AsyncIterator, Callable, Optional

from sqlalchemy import delete, func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from uuid_utils import UUID

from src.platform.exception.exceptions import SeatAlreadyBookedError
from src.platform.logging.loguru_io import Logger
from src.platform.metrics.reservation_metrics import metrics
from src.platform.types import to_std_uuid
from src.service.trip_booking.app.interface.i_trip_command_repo import ITripCommandRepo
from src.service.trip_booking.domain.entity.trip_instance_entity import TripInstance
from src.service.trip_booking.domain.value_object.trip_key import TripKey
from src.service.trip_booking.driven_adapter.model.trip_model import TripModel
from src.service.trip_booking.driven_adapter.model.trip_seat_model import TripSeatModel
from src.service.trip_booking.driven_adapter.repo.trip_mapper import (
    find_trip_by_id,
    find_trip_by_key,
)


class TripCommandRepoImpl(ITripCommandRepo):
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
        """
        If session is injected (from UoW), yield it directly without context management.
        Otherwise, use session_factory context manager.
        """
        if self.session is not None:
            yield self.session
        elif self.session_factory is not None:
            async with self.session_factory() as session:
                yield session
        else:
            raise RuntimeError('No session or session_factory available')

    @Logger.io
    async def get_or_create(self, *, key: TripKey, route_id: int) -> TripInstance:
        if self.session_factory is None:
            raise RuntimeError('get_or_create commits on its own and needs a session_factory')

        async with self.session_factory() as session:
            if existing := await find_trip_by_key(session, key):
                return existing

            trip = TripInstance.create(key=key, route_id=route_id)
            session.add(
                TripModel(
                    id=to_std_uuid(trip.id),
                    bus_id=trip.bus_id,
                    default_trip_id=trip.default_trip_id,
                    route_id=trip.route_id,
                    trip_date=trip.trip_date,
                    created_at=trip.created_at,
                )
            )
            try:
                await session.commit()
            except IntegrityError:
                await session.rollback()
                winner = await find_trip_by_key(session, key)
                if winner is None:
                    # Not a creation race (e.g. a foreign key failed)
                    raise
                Logger.base.info(f'♻️  [TRIP] Lost creation race for {key}, using {winner.id}')
                return winner

            metrics.record_trip_created()
            Logger.base.info(f'🆕 [TRIP] Created trip {trip.id} for {key}')
            return trip

    @Logger.io
    async def get_by_id(self, *, trip_id: UUID) -> Optional[TripInstance]:
        async with self._get_session() as session:
            return await find_trip_by_id(session, trip_id)

    @Logger.io
    async def add_seat(self, *, trip_id: UUID, seat_number: int, reservation_id: UUID) -> None:
        async with self._get_session() as session:
            session.add(
                TripSeatModel(
                    trip_id=to_std_uuid(trip_id),
                    seat_number=seat_number,
                    reservation_id=to_std_uuid(reservation_id),
                )
            )
            try:
                await session.flush()
            except IntegrityError as e:
                raise SeatAlreadyBookedError(seat_number=seat_number) from e

    @Logger.io
    async def move_seat(
        self, *, trip_id: UUID, old_seat: int, new_seat: int, reservation_id: UUID
    ) -> None:
        await self.remove_seat(trip_id=trip_id, seat_number=old_seat)
        await self.add_seat(trip_id=trip_id, seat_number=new_seat, reservation_id=reservation_id)

    @Logger.io
    async def remove_seat(self, *, trip_id: UUID, seat_number: int) -> bool:
        async with self._get_session() as session:
            result = await session.execute(
                delete(TripSeatModel).where(
                    TripSeatModel.trip_id == to_std_uuid(trip_id),
                    TripSeatModel.seat_number == seat_number,
                )
            )
            return bool(result.rowcount)

    @Logger.io
    async def get_highest_booked_seat_for_bus(self, *, bus_id: int) -> int:
        async with self._get_session() as session:
            result = await session.execute(
                select(func.max(TripSeatModel.seat_number))
                .join(TripModel, TripModel.id == TripSeatModel.trip_id)
                .where(TripModel.bus_id == bus_id)
            )
            return result.scalar_one_or_none() or 0
