import uuid

from sqlalchemy import ForeignKey, Integer, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from src.platform.database.db_setting import Base


class TripSeatModel(Base):
    """One row per booked seat; the primary key is the seat-exclusivity guard"""

    __tablename__ = 'trip_seat'

    trip_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True), ForeignKey('trip.id'), primary_key=True
    )
    seat_number: Mapped[int] = mapped_column(Integer, primary_key=True)
    reservation_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey('reservation.id', ondelete='CASCADE'),
        unique=True,
        nullable=False,
    )
