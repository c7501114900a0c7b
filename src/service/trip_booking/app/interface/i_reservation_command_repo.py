from abc import ABC, abstractmethod
from typing import Optional

from uuid_utils import UUID

from src.service.trip_booking.domain.entity.reservation_entity import Reservation


class IReservationCommandRepo(ABC):
    """Reservation ledger writes; always used inside a unit of work"""

    @abstractmethod
    async def create(self, *, reservation: Reservation) -> Reservation:
        pass

    @abstractmethod
    async def get_by_id(self, *, reservation_id: UUID) -> Optional[Reservation]:
        pass

    @abstractmethod
    async def update(self, *, reservation: Reservation) -> Reservation:
        pass

    @abstractmethod
    async def delete(self, *, reservation_id: UUID) -> None:
        pass
