from typing import Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends
from uuid_utils import UUID

from src.platform.config.di import Container
from src.platform.exception.exceptions import NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.shared_kernel.domain.entity.user_entity import UserRole
from src.service.trip_booking.app.interface.i_reservation_query_repo import (
    IReservationQueryRepo,
)
from src.service.trip_booking.domain.entity.reservation_entity import Reservation


class GetReservationUseCase:
    def __init__(self, reservation_query_repo: IReservationQueryRepo) -> None:
        self.reservation_query_repo = reservation_query_repo

    @classmethod
    @inject
    def depends(
        cls,
        reservation_query_repo: IReservationQueryRepo = Depends(
            Provide[Container.reservation_query_repo]
        ),
    ) -> Self:
        return cls(reservation_query_repo=reservation_query_repo)

    @Logger.io
    async def execute(
        self, *, reservation_id: UUID, requester_id: int, requester_role: UserRole
    ) -> Reservation:
        reservation = await self.reservation_query_repo.get_by_id(reservation_id=reservation_id)
        if not reservation:
            raise NotFoundError('Reservation not found')
        reservation.ensure_manageable_by(requester_id=requester_id, requester_role=requester_role)
        return reservation
