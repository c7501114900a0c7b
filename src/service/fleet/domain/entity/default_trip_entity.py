import re
from typing import Optional

import attrs

from src.platform.exception.exceptions import ValidationFailedError
from src.platform.logging.loguru_io import Logger


_HH_MM = re.compile(r'^([01]\d|2[0-3]):[0-5]\d$')


@attrs.define
class DefaultTrip:
    """Recurring scheduled service; dated trip instances are derived from it"""

    route_id: int
    bus_id: int
    start_time: str
    arrival_time: str
    id: Optional[int] = None

    @classmethod
    @Logger.io
    def create(
        cls, *, route_id: int, bus_id: int, start_time: str, arrival_time: str
    ) -> 'DefaultTrip':
        for field_name, value in (('start_time', start_time), ('arrival_time', arrival_time)):
            if not _HH_MM.match(value):
                raise ValidationFailedError(f'{field_name} must be formatted as HH:MM')

        return cls(
            route_id=route_id,
            bus_id=bus_id,
            start_time=start_time,
            arrival_time=arrival_time,
        )
