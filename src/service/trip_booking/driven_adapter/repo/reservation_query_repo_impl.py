from typing import AsyncContextManager, Callable, List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from uuid_utils import UUID

from src.platform.logging.loguru_io import Logger
from src.platform.types import to_std_uuid
from src.service.trip_booking.app.interface.i_reservation_query_repo import (
    IReservationQueryRepo,
)
from src.service.trip_booking.domain.entity.reservation_entity import Reservation
from src.service.trip_booking.driven_adapter.model.reservation_model import ReservationModel
from src.service.trip_booking.driven_adapter.repo.reservation_command_repo_impl import (
    reservation_model_to_entity,
)


class ReservationQueryRepoImpl(IReservationQueryRepo):
    def __init__(self, session_factory: Callable[..., AsyncContextManager[AsyncSession]]):
        self.session_factory = session_factory

    @Logger.io
    async def get_by_id(self, *, reservation_id: UUID) -> Optional[Reservation]:
        async with self.session_factory() as session:
            db_reservation = await session.get(ReservationModel, to_std_uuid(reservation_id))
            return reservation_model_to_entity(db_reservation) if db_reservation else None

    @Logger.io
    async def list_all(self) -> List[Reservation]:
        async with self.session_factory() as session:
            result = await session.execute(
                select(ReservationModel).order_by(ReservationModel.created_at.desc())
            )
            return [reservation_model_to_entity(row) for row in result.scalars().all()]

    @Logger.io
    async def list_by_commuter(self, *, commuter_id: int) -> List[Reservation]:
        async with self.session_factory() as session:
            result = await session.execute(
                select(ReservationModel)
                .where(ReservationModel.commuter_id == commuter_id)
                .order_by(ReservationModel.created_at.desc())
            )
            return [reservation_model_to_entity(row) for row in result.scalars().all()]
