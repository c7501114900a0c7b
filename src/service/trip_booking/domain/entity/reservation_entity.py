from datetime import datetime, timezone
from typing import Optional

import attrs
import uuid_utils as uuid
from uuid_utils import UUID

from src.platform.exception.exceptions import ForbiddenError, ValidationFailedError
from src.platform.logging.loguru_io import Logger
from src.service.shared_kernel.domain.entity.user_entity import UserRole
from src.service.trip_booking.domain.enum.payment_status import PaymentStatus


@attrs.define
class Reservation:
    id: UUID
    commuter_id: int
    bus_id: int
    trip_id: UUID
    seat_number: int
    payment_status: PaymentStatus = PaymentStatus.PENDING
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    @Logger.io
    def create(
        cls, *, commuter_id: int, bus_id: int, trip_id: UUID, seat_number: int
    ) -> 'Reservation':
        now = datetime.now(timezone.utc)
        return cls(
            id=uuid.uuid7(),
            commuter_id=commuter_id,
            bus_id=bus_id,
            trip_id=trip_id,
            seat_number=seat_number,
            payment_status=PaymentStatus.PENDING,
            created_at=now,
            updated_at=now,
        )

    def ensure_manageable_by(self, *, requester_id: int, requester_role: UserRole) -> None:
        """Only the owning commuter or an admin may change or remove a reservation"""
        if requester_role == UserRole.ADMIN:
            return
        if requester_id != self.commuter_id:
            raise ForbiddenError('Only the reservation owner or an admin can do this')

    @Logger.io
    def move_to_seat(self, seat_number: int) -> 'Reservation':
        return attrs.evolve(
            self, seat_number=seat_number, updated_at=datetime.now(timezone.utc)
        )

    @Logger.io
    def with_payment_status(self, payment_status: str | PaymentStatus) -> 'Reservation':
        try:
            status = PaymentStatus(payment_status)
        except ValueError:
            allowed = ', '.join(s.value for s in PaymentStatus)
            raise ValidationFailedError(f'payment_status must be one of: {allowed}')
        return attrs.evolve(self, payment_status=status, updated_at=datetime.now(timezone.utc))
