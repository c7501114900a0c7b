"""
Unit tests for DeleteReservationUseCase

Test Focus:
1. Owner or admin cancels: seat row and reservation removed in one commit, then broadcast
2. Another commuter: ForbiddenError, nothing touched
3. Seat already missing on the trip: still succeeds (idempotent release)
"""

from datetime import date
from unittest.mock import AsyncMock

import pytest
from uuid_utils import UUID

from src.platform.exception.exceptions import ForbiddenError, NotFoundError
from src.platform.state.trip_lock import TripLockRegistry
from src.service.shared_kernel.domain.entity.user_entity import UserRole
from src.service.trip_booking.app.command.delete_reservation_use_case import (
    DeleteReservationUseCase,
)
from src.service.trip_booking.domain.entity.reservation_entity import Reservation
from src.service.trip_booking.domain.entity.trip_instance_entity import TripInstance
from test.shared.fake_unit_of_work import FakeUnitOfWork


TRIP_ID = UUID('019a1af7-0000-7004-0000-000000000001')
RESERVATION_ID = UUID('019a1af7-0000-7005-0000-000000000001')


def _trip(*booked: int) -> TripInstance:
    return TripInstance(
        id=TRIP_ID,
        bus_id=1,
        default_trip_id=3,
        route_id=2,
        trip_date=date(2025, 1, 10),
        booked_seats=set(booked),
    )


@pytest.mark.unit
class TestDeleteReservation:
    @pytest.fixture
    def reservation(self) -> Reservation:
        return Reservation(
            id=RESERVATION_ID, commuter_id=3, bus_id=1, trip_id=TRIP_ID, seat_number=12
        )

    @pytest.fixture
    def uow(self, reservation: Reservation) -> FakeUnitOfWork:
        uow = FakeUnitOfWork()
        uow.reservation_command_repo.get_by_id = AsyncMock(return_value=reservation)
        uow.trip_command_repo.get_by_id = AsyncMock(return_value=_trip(3, 12))
        return uow

    @pytest.fixture
    def reservation_query_repo(self, reservation: Reservation) -> AsyncMock:
        repo = AsyncMock()
        repo.get_by_id = AsyncMock(return_value=reservation)
        return repo

    @pytest.fixture
    def broadcaster(self) -> AsyncMock:
        return AsyncMock()

    @pytest.fixture
    def use_case(
        self, reservation_query_repo: AsyncMock, uow: FakeUnitOfWork, broadcaster: AsyncMock
    ) -> DeleteReservationUseCase:
        return DeleteReservationUseCase(
            reservation_query_repo=reservation_query_repo,
            uow_factory=lambda: uow,
            trip_lock_registry=TripLockRegistry(),
            seat_update_broadcaster=broadcaster,
        )

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        'requester_id,requester_role', [(3, UserRole.COMMUTER), (1, UserRole.ADMIN)]
    )
    async def test_owner_or_admin_cancels(
        self,
        use_case: DeleteReservationUseCase,
        uow: FakeUnitOfWork,
        broadcaster: AsyncMock,
        requester_id: int,
        requester_role: UserRole,
    ) -> None:
        deleted = await use_case.execute(
            reservation_id=RESERVATION_ID, requester_id=requester_id, requester_role=requester_role
        )

        assert deleted.id == RESERVATION_ID
        uow.trip_command_repo.remove_seat.assert_awaited_once_with(
            trip_id=TRIP_ID, seat_number=12
        )
        uow.reservation_command_repo.delete.assert_awaited_once_with(
            reservation_id=RESERVATION_ID
        )
        assert uow.committed
        broadcaster.broadcast.assert_awaited_once()
        assert broadcaster.broadcast.call_args.kwargs['event_data']['bookedSeats'] == [3]

    @pytest.mark.asyncio
    async def test_other_commuter_is_forbidden(
        self, use_case: DeleteReservationUseCase, uow: FakeUnitOfWork, broadcaster: AsyncMock
    ) -> None:
        with pytest.raises(ForbiddenError):
            await use_case.execute(
                reservation_id=RESERVATION_ID, requester_id=4, requester_role=UserRole.COMMUTER
            )

        uow.reservation_command_repo.delete.assert_not_awaited()
        assert not uow.committed
        broadcaster.broadcast.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_fail_when_reservation_not_found(
        self, use_case: DeleteReservationUseCase, reservation_query_repo: AsyncMock
    ) -> None:
        reservation_query_repo.get_by_id = AsyncMock(return_value=None)

        with pytest.raises(NotFoundError, match='Reservation not found'):
            await use_case.execute(
                reservation_id=RESERVATION_ID, requester_id=1, requester_role=UserRole.ADMIN
            )

    @pytest.mark.asyncio
    async def test_seat_missing_on_trip_still_deletes(
        self, use_case: DeleteReservationUseCase, uow: FakeUnitOfWork
    ) -> None:
        uow.trip_command_repo.get_by_id = AsyncMock(return_value=_trip(3))

        await use_case.execute(
            reservation_id=RESERVATION_ID, requester_id=3, requester_role=UserRole.COMMUTER
        )

        uow.trip_command_repo.remove_seat.assert_not_awaited()
        uow.reservation_command_repo.delete.assert_awaited_once()
        assert uow.committed
