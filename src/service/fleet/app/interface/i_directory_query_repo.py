from abc import ABC, abstractmethod
from typing import Optional

from src.service.fleet.domain.entity.bus_entity import Bus
from src.service.fleet.domain.entity.default_trip_entity import DefaultTrip
from src.service.fleet.domain.entity.route_entity import Route


class IDirectoryQueryRepo(ABC):
    """Read-only lookups of bus, route and default trip records"""

    @abstractmethod
    async def get_bus(self, *, bus_id: int) -> Optional[Bus]:
        pass

    @abstractmethod
    async def get_route(self, *, route_id: int) -> Optional[Route]:
        pass

    @abstractmethod
    async def get_default_trip(self, *, default_trip_id: int) -> Optional[DefaultTrip]:
        pass
