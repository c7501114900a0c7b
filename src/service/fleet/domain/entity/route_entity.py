from typing import Optional

import attrs

from src.platform.exception.exceptions import ValidationFailedError
from src.platform.logging.loguru_io import Logger


@attrs.define
class Route:
    start_point: str
    end_point: str
    distance: float
    estimated_time: str
    fare: int
    id: Optional[int] = None

    @classmethod
    @Logger.io
    def create(
        cls,
        *,
        start_point: str,
        end_point: str,
        distance: float,
        estimated_time: str,
        fare: int,
    ) -> 'Route':
        if not start_point.strip() or not end_point.strip():
            raise ValidationFailedError('start_point and end_point are required')
        if not estimated_time.strip():
            raise ValidationFailedError('estimated_time is required')
        if distance < 0:
            raise ValidationFailedError('distance must not be negative')
        if fare < 0:
            raise ValidationFailedError('fare must not be negative')

        return cls(
            start_point=start_point.strip(),
            end_point=end_point.strip(),
            distance=distance,
            estimated_time=estimated_time.strip(),
            fare=fare,
        )
