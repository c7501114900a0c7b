from typing import Optional

import attrs

from src.platform.exception.exceptions import ValidationFailedError
from src.platform.logging.loguru_io import Logger


@attrs.define
class Bus:
    bus_number: str
    capacity: int
    operator_id: int
    route_id: int
    id: Optional[int] = None

    @classmethod
    @Logger.io
    def create(cls, *, bus_number: str, capacity: int, operator_id: int, route_id: int) -> 'Bus':
        if not bus_number.strip():
            raise ValidationFailedError('bus_number is required')
        if capacity < 1:
            raise ValidationFailedError('capacity must be a positive integer')

        return cls(
            bus_number=bus_number.strip(),
            capacity=capacity,
            operator_id=operator_id,
            route_id=route_id,
        )

    @Logger.io
    def with_capacity(self, capacity: int) -> 'Bus':
        return attrs.evolve(self, capacity=capacity)
