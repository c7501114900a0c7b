from abc import ABC, abstractmethod
from typing import Optional

from src.service.fleet.domain.entity.bus_entity import Bus
from src.service.fleet.domain.entity.default_trip_entity import DefaultTrip
from src.service.fleet.domain.entity.route_entity import Route


class IDirectoryCommandRepo(ABC):
    @abstractmethod
    async def create_route(self, *, route: Route) -> Route:
        pass

    @abstractmethod
    async def create_bus(self, *, bus: Bus) -> Bus:
        """
        Raises:
            ConflictError: bus_number already registered
        """
        pass

    @abstractmethod
    async def create_default_trip(self, *, default_trip: DefaultTrip) -> DefaultTrip:
        pass

    @abstractmethod
    async def get_bus_for_update(self, *, bus_id: int) -> Optional[Bus]:
        """Read the bus row inside the current transaction, locking it where the database can"""
        pass

    @abstractmethod
    async def update_bus_capacity(self, *, bus_id: int, capacity: int) -> None:
        pass
