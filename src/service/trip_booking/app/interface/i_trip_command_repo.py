from abc import ABC, abstractmethod
from typing import Optional

from uuid_utils import UUID

from src.service.trip_booking.domain.entity.trip_instance_entity import TripInstance
from src.service.trip_booking.domain.value_object.trip_key import TripKey


class ITripCommandRepo(ABC):
    """Trip instances and their booked-seat rows"""

    @abstractmethod
    async def get_or_create(self, *, key: TripKey, route_id: int) -> TripInstance:
        """
        Return the instance for key, inserting an empty one if none exists.

        Runs in its own committed transaction. When a concurrent caller wins
        the insert, the unique constraint rejects ours and the winner is read back.
        """
        pass

    @abstractmethod
    async def get_by_id(self, *, trip_id: UUID) -> Optional[TripInstance]:
        """Trip with its current booked seats"""
        pass

    @abstractmethod
    async def add_seat(self, *, trip_id: UUID, seat_number: int, reservation_id: UUID) -> None:
        """
        Raises:
            SeatAlreadyBookedError: the storage already holds this seat
        """
        pass

    @abstractmethod
    async def move_seat(
        self, *, trip_id: UUID, old_seat: int, new_seat: int, reservation_id: UUID
    ) -> None:
        """
        Raises:
            SeatAlreadyBookedError: the storage already holds new_seat
        """
        pass

    @abstractmethod
    async def remove_seat(self, *, trip_id: UUID, seat_number: int) -> bool:
        """Returns False when no such seat row existed"""
        pass

    @abstractmethod
    async def get_highest_booked_seat_for_bus(self, *, bus_id: int) -> int:
        """Highest seat number held on any trip of the bus, 0 when none"""
        pass
