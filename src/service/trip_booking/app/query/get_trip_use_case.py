from typing import Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends
from uuid_utils import UUID

from src.platform.config.di import Container
from src.platform.exception.exceptions import NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.trip_booking.app.interface.i_trip_query_repo import ITripQueryRepo
from src.service.trip_booking.domain.entity.trip_instance_entity import TripInstance


class GetTripUseCase:
    def __init__(self, trip_query_repo: ITripQueryRepo) -> None:
        self.trip_query_repo = trip_query_repo

    @classmethod
    @inject
    def depends(
        cls,
        trip_query_repo: ITripQueryRepo = Depends(Provide[Container.trip_query_repo]),
    ) -> Self:
        return cls(trip_query_repo=trip_query_repo)

    @Logger.io
    async def execute(self, *, trip_id: UUID) -> TripInstance:
        trip = await self.trip_query_repo.get_by_id(trip_id=trip_id)
        if trip is None:
            Logger.base.warning(f'⚠️ [GET_TRIP] Trip {trip_id} not found')
            raise NotFoundError('Trip not found')
        return trip
