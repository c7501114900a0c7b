from typing import List, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.logging.loguru_io import Logger
from src.service.shared_kernel.domain.entity.user_entity import UserRole
from src.service.trip_booking.app.interface.i_reservation_query_repo import (
    IReservationQueryRepo,
)
from src.service.trip_booking.domain.entity.reservation_entity import Reservation


class ListReservationsUseCase:
    """Admins see every reservation, everyone else only their own"""

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
    async def execute(self, *, requester_id: int, requester_role: UserRole) -> List[Reservation]:
        if requester_role == UserRole.ADMIN:
            return await self.reservation_query_repo.list_all()
        return await self.reservation_query_repo.list_by_commuter(commuter_id=requester_id)
