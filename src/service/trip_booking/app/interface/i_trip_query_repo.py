from abc import ABC, abstractmethod
from typing import Optional

from uuid_utils import UUID

from src.service.trip_booking.domain.entity.trip_instance_entity import TripInstance
from src.service.trip_booking.domain.value_object.trip_key import TripKey


class ITripQueryRepo(ABC):
    @abstractmethod
    async def get_by_id(self, *, trip_id: UUID) -> Optional[TripInstance]:
        pass

    @abstractmethod
    async def get_by_key(self, *, key: TripKey) -> Optional[TripInstance]:
        pass
