from abc import ABC, abstractmethod
from typing import List, Optional

from uuid_utils import UUID

from src.service.trip_booking.domain.entity.reservation_entity import Reservation


class IReservationQueryRepo(ABC):
    @abstractmethod
    async def get_by_id(self, *, reservation_id: UUID) -> Optional[Reservation]:
        pass

    @abstractmethod
    async def list_all(self) -> List[Reservation]:
        pass

    @abstractmethod
    async def list_by_commuter(self, *, commuter_id: int) -> List[Reservation]:
        pass
