from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from src.platform.types import to_std_uuid, to_utils_uuid
from src.service.trip_booking.domain.entity.trip_instance_entity import TripInstance
from src.service.trip_booking.domain.value_object.trip_key import TripKey
from src.service.trip_booking.driven_adapter.model.trip_model import TripModel
from src.service.trip_booking.driven_adapter.model.trip_seat_model import TripSeatModel


async def load_trip(session: AsyncSession, db_trip: Optional[TripModel]) -> Optional[TripInstance]:
    """TripModel + its trip_seat rows -> TripInstance"""
    if db_trip is None:
        return None

    result = await session.execute(
        select(TripSeatModel.seat_number).where(TripSeatModel.trip_id == db_trip.id)
    )
    return TripInstance(
        id=to_utils_uuid(db_trip.id),
        bus_id=db_trip.bus_id,
        default_trip_id=db_trip.default_trip_id,
        route_id=db_trip.route_id,
        trip_date=db_trip.trip_date,
        booked_seats=set(result.scalars().all()),
        created_at=db_trip.created_at,
    )


async def find_trip_by_key(session: AsyncSession, key: TripKey) -> Optional[TripInstance]:
    result = await session.execute(
        select(TripModel).where(
            TripModel.bus_id == key.bus_id,
            TripModel.default_trip_id == key.default_trip_id,
            TripModel.trip_date == key.trip_date,
        )
    )
    return await load_trip(session, result.scalar_one_or_none())


async def find_trip_by_id(session: AsyncSession, trip_id) -> Optional[TripInstance]:
    return await load_trip(session, await session.get(TripModel, to_std_uuid(trip_id)))
