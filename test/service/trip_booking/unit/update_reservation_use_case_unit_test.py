"""
Unit tests for UpdateReservationUseCase

Test Focus:
1. Seat change moves the seat row and the reservation in one commit, then broadcasts
2. Status-only change never broadcasts
3. Fail Fast: nothing to change, not found, not the owner, invalid status
"""

from datetime import date
from unittest.mock import AsyncMock

import pytest
from uuid_utils import UUID

from src.platform.exception.exceptions import (
    ForbiddenError,
    NotFoundError,
    SeatAlreadyBookedError,
    ValidationFailedError,
)
from src.platform.state.trip_lock import TripLockRegistry
from src.service.fleet.domain.entity.bus_entity import Bus
from src.service.shared_kernel.domain.entity.user_entity import UserRole
from src.service.trip_booking.app.command.update_reservation_use_case import (
    UpdateReservationUseCase,
)
from src.service.trip_booking.domain.entity.reservation_entity import Reservation
from src.service.trip_booking.domain.entity.trip_instance_entity import TripInstance
from src.service.trip_booking.domain.enum.payment_status import PaymentStatus
from test.shared.fake_unit_of_work import FakeUnitOfWork


TRIP_ID = UUID('019a1af7-0000-7004-0000-000000000001')
RESERVATION_ID = UUID('019a1af7-0000-7005-0000-000000000001')


@pytest.mark.unit
class TestUpdateReservation:
    @pytest.fixture
    def reservation(self) -> Reservation:
        return Reservation(
            id=RESERVATION_ID, commuter_id=3, bus_id=1, trip_id=TRIP_ID, seat_number=5
        )

    @pytest.fixture
    def trip(self) -> TripInstance:
        return TripInstance(
            id=TRIP_ID,
            bus_id=1,
            default_trip_id=3,
            route_id=2,
            trip_date=date(2025, 1, 10),
            booked_seats={5, 20},
        )

    @pytest.fixture
    def uow(self, reservation: Reservation, trip: TripInstance) -> FakeUnitOfWork:
        uow = FakeUnitOfWork()
        uow.reservation_command_repo.get_by_id = AsyncMock(return_value=reservation)
        uow.reservation_command_repo.update = AsyncMock(
            side_effect=lambda *, reservation: reservation
        )
        uow.directory_command_repo.get_bus_for_update = AsyncMock(
            return_value=Bus(bus_number='KLB-1234', capacity=40, operator_id=2, route_id=2, id=1)
        )
        uow.trip_command_repo.get_by_id = AsyncMock(return_value=trip)
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
    ) -> UpdateReservationUseCase:
        return UpdateReservationUseCase(
            reservation_query_repo=reservation_query_repo,
            uow_factory=lambda: uow,
            trip_lock_registry=TripLockRegistry(),
            seat_update_broadcaster=broadcaster,
        )

    @pytest.mark.asyncio
    async def test_move_to_free_seat(
        self, use_case: UpdateReservationUseCase, uow: FakeUnitOfWork, broadcaster: AsyncMock
    ) -> None:
        updated = await use_case.execute(
            reservation_id=RESERVATION_ID,
            requester_id=3,
            requester_role=UserRole.COMMUTER,
            seat_number=7,
        )

        assert updated.seat_number == 7
        uow.trip_command_repo.move_seat.assert_awaited_once_with(
            trip_id=TRIP_ID, old_seat=5, new_seat=7, reservation_id=RESERVATION_ID
        )
        assert uow.committed
        broadcaster.broadcast.assert_awaited_once()
        assert broadcaster.broadcast.call_args.kwargs['event_data']['bookedSeats'] == [7, 20]

    @pytest.mark.asyncio
    async def test_same_seat_is_a_no_op_without_broadcast(
        self, use_case: UpdateReservationUseCase, uow: FakeUnitOfWork, broadcaster: AsyncMock
    ) -> None:
        updated = await use_case.execute(
            reservation_id=RESERVATION_ID,
            requester_id=3,
            requester_role=UserRole.COMMUTER,
            seat_number=5,
        )

        assert updated.seat_number == 5
        uow.trip_command_repo.move_seat.assert_not_awaited()
        broadcaster.broadcast.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_move_onto_held_seat_is_rejected(
        self, use_case: UpdateReservationUseCase, uow: FakeUnitOfWork, broadcaster: AsyncMock
    ) -> None:
        with pytest.raises(SeatAlreadyBookedError):
            await use_case.execute(
                reservation_id=RESERVATION_ID,
                requester_id=3,
                requester_role=UserRole.COMMUTER,
                seat_number=20,
            )

        uow.trip_command_repo.move_seat.assert_not_awaited()
        uow.reservation_command_repo.update.assert_not_awaited()
        assert not uow.committed
        broadcaster.broadcast.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_status_only_change_does_not_broadcast(
        self, use_case: UpdateReservationUseCase, uow: FakeUnitOfWork, broadcaster: AsyncMock
    ) -> None:
        updated = await use_case.execute(
            reservation_id=RESERVATION_ID,
            requester_id=3,
            requester_role=UserRole.COMMUTER,
            payment_status='completed',
        )

        assert updated.payment_status == PaymentStatus.COMPLETED
        assert updated.seat_number == 5
        uow.trip_command_repo.get_by_id.assert_not_awaited()
        assert uow.committed
        broadcaster.broadcast.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_invalid_status_is_rejected(
        self, use_case: UpdateReservationUseCase, uow: FakeUnitOfWork
    ) -> None:
        with pytest.raises(ValidationFailedError, match='payment_status must be one of'):
            await use_case.execute(
                reservation_id=RESERVATION_ID,
                requester_id=3,
                requester_role=UserRole.COMMUTER,
                payment_status='refunded',
            )

        assert not uow.committed

    @pytest.mark.asyncio
    async def test_nothing_to_change(self, use_case: UpdateReservationUseCase) -> None:
        with pytest.raises(ValidationFailedError):
            await use_case.execute(
                reservation_id=RESERVATION_ID, requester_id=3, requester_role=UserRole.COMMUTER
            )

    @pytest.mark.asyncio
    async def test_fail_when_reservation_not_found(
        self, use_case: UpdateReservationUseCase, reservation_query_repo: AsyncMock
    ) -> None:
        reservation_query_repo.get_by_id = AsyncMock(return_value=None)

        with pytest.raises(NotFoundError, match='Reservation not found'):
            await use_case.execute(
                reservation_id=RESERVATION_ID,
                requester_id=3,
                requester_role=UserRole.COMMUTER,
                seat_number=7,
            )

    @pytest.mark.asyncio
    async def test_other_commuter_is_forbidden(
        self, use_case: UpdateReservationUseCase, uow: FakeUnitOfWork
    ) -> None:
        with pytest.raises(ForbiddenError):
            await use_case.execute(
                reservation_id=RESERVATION_ID,
                requester_id=4,
                requester_role=UserRole.COMMUTER,
                seat_number=7,
            )

        uow.reservation_command_repo.get_by_id.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_admin_may_move_any_reservation(
        self, use_case: UpdateReservationUseCase, uow: FakeUnitOfWork
    ) -> None:
        updated = await use_case.execute(
            reservation_id=RESERVATION_ID,
            requester_id=1,
            requester_role=UserRole.ADMIN,
            seat_number=8,
        )

        assert updated.seat_number == 8
        assert uow.committed
