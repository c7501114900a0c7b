from datetime import date, datetime
import uuid

from sqlalchemy import Date, DateTime, ForeignKey, Integer, UniqueConstraint, Uuid
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.sql import func

from src.platform.database.db_setting import Base


class TripModel(Base):
    __tablename__ = 'trip'
    __table_args__ = (
        # At most one instance per (bus, default trip, day)
        UniqueConstraint('bus_id', 'default_trip_id', 'trip_date', name='uq_trip_bus_template_date'),
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid(as_uuid=True), primary_key=True)  # UUID7
    bus_id: Mapped[int] = mapped_column(Integer, ForeignKey('bus.id'), nullable=False, index=True)
    default_trip_id: Mapped[int] = mapped_column(
        Integer, ForeignKey('default_trip.id'), nullable=False
    )
    route_id: Mapped[int] = mapped_column(Integer, ForeignKey('route.id'), nullable=False)
    trip_date: Mapped[date] = mapped_column(Date, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
