from typing import AsyncContextManager, Callable, Optional

from sqlalchemy.ext.asyncio import AsyncSession
from uuid_utils import UUID

from src.platform.logging.loguru_io import Logger
from src.service.trip_booking.app.interface.i_trip_query_repo import ITripQueryRepo
from src.service.trip_booking.domain.entity.trip_instance_entity import TripInstance
from src.service.trip_booking.domain.value_object.trip_key import TripKey
from src.service.trip_booking.driven_adapter.repo.trip_mapper import (
    find_trip_by_id,
    find_trip_by_key,
)


class TripQueryRepoImpl(ITripQueryRepo):
    def __init__(self, session_factory: Callable[..., AsyncContextManager[AsyncSession]]):
        self.session_factory = session_factory

    @Logger.io
    async def get_by_id(self, *, trip_id: UUID) -> Optional[TripInstance]:
        async with self.session_factory() as session:
            return await find_trip_by_id(session, trip_id)

    @Logger.io
    async def get_by_key(self, *, key: TripKey) -> Optional[TripInstance]:
        async with self.session_factory() as session:
            return await find_trip_by_key(session, key)
