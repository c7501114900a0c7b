from datetime import date, datetime

import attrs

from src.platform.exception.exceptions import ValidationFailedError


def normalize_trip_date(value: date | datetime | str) -> date:
    """Reduce any date-like input to its calendar day; time-of-day is dropped"""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        raw = value.strip()
        try:
            return datetime.fromisoformat(raw.replace('Z', '+00:00')).date()
        except ValueError:
            pass
        try:
            return date.fromisoformat(raw[:10])
        except ValueError:
            pass
    raise ValidationFailedError(f'Invalid trip date: {value!r}')


@attrs.frozen
class TripKey:
    """Identity of a trip instance: this bus running this default trip on this day"""

    bus_id: int
    default_trip_id: int
    trip_date: date = attrs.field(converter=normalize_trip_date)

    def __str__(self) -> str:
        return f'bus={self.bus_id}/default_trip={self.default_trip_id}/{self.trip_date.isoformat()}'
