from sqlalchemy import ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from src.platform.database.db_setting import Base


class DefaultTripModel(Base):
    __tablename__ = 'default_trip'

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    route_id: Mapped[int] = mapped_column(Integer, ForeignKey('route.id'), nullable=False)
    bus_id: Mapped[int] = mapped_column(Integer, ForeignKey('bus.id'), nullable=False, index=True)
    start_time: Mapped[str] = mapped_column(String(5), nullable=False)  # HH:MM
    arrival_time: Mapped[str] = mapped_column(String(5), nullable=False)  # HH:MM
