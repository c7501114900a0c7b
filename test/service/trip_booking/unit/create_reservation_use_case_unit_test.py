"""
Unit tests for CreateReservationUseCase

Test Focus:
1. Happy path: seat booked, reservation and seat row written in one commit, one broadcast
2. Fail Fast: unknown bus and out-of-range seat stop before a trip is resolved
3. Conflict: a seat already held on the fresh trip read aborts without commit or broadcast
4. Broadcast failure never fails the reservation
"""

from datetime import date
from functools import partial
from unittest.mock import AsyncMock

import anyio
import pytest
from uuid_utils import UUID

from src.platform.exception.exceptions import (
    NotFoundError,
    SeatAlreadyBookedError,
    SeatOutOfRangeError,
)
from src.platform.state.trip_lock import TripLockRegistry
from src.service.fleet.domain.entity.bus_entity import Bus
from src.service.trip_booking.app.command.create_reservation_use_case import (
    CreateReservationUseCase,
)
from src.service.trip_booking.domain.entity.trip_instance_entity import TripInstance
from src.service.trip_booking.domain.enum.payment_status import PaymentStatus
from test.shared.fake_unit_of_work import FakeUnitOfWork


TRIP_ID = UUID('019a1af7-0000-7004-0000-000000000001')


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
class TestCreateReservation:
    @pytest.fixture
    def bus(self) -> Bus:
        return Bus(bus_number='KLB-1234', capacity=40, operator_id=2, route_id=2, id=1)

    @pytest.fixture
    def uow(self, bus: Bus) -> FakeUnitOfWork:
        uow = FakeUnitOfWork()
        uow.directory_command_repo.get_bus_for_update = AsyncMock(return_value=bus)
        uow.trip_command_repo.get_by_id = AsyncMock(return_value=_trip())
        return uow

    @pytest.fixture
    def directory_query_repo(self, bus: Bus) -> AsyncMock:
        repo = AsyncMock()
        repo.get_bus = AsyncMock(return_value=bus)
        return repo

    @pytest.fixture
    def resolve_trip_use_case(self) -> AsyncMock:
        use_case = AsyncMock()
        use_case.execute = AsyncMock(return_value=_trip())
        return use_case

    @pytest.fixture
    def broadcaster(self) -> AsyncMock:
        return AsyncMock()

    @pytest.fixture
    def use_case(
        self,
        directory_query_repo: AsyncMock,
        resolve_trip_use_case: AsyncMock,
        uow: FakeUnitOfWork,
        broadcaster: AsyncMock,
    ) -> CreateReservationUseCase:
        return CreateReservationUseCase(
            directory_query_repo=directory_query_repo,
            resolve_trip_use_case=resolve_trip_use_case,
            uow_factory=lambda: uow,
            trip_lock_registry=TripLockRegistry(),
            seat_update_broadcaster=broadcaster,
        )

    @pytest.mark.asyncio
    async def test_reserve_free_seat(
        self,
        use_case: CreateReservationUseCase,
        uow: FakeUnitOfWork,
        broadcaster: AsyncMock,
    ) -> None:
        """
        Given: bus with capacity 40 and an empty trip
        When: commuter 3 reserves seat 12
        Then: reservation and seat row are written, committed once, [12] is broadcast
        """
        # Act
        reservation = await use_case.execute(
            commuter_id=3, bus_id=1, default_trip_id=3, trip_date='2025-01-10', seat_number=12
        )

        # Assert
        assert reservation.commuter_id == 3
        assert reservation.seat_number == 12
        assert reservation.trip_id == TRIP_ID
        assert reservation.payment_status == PaymentStatus.PENDING

        uow.reservation_command_repo.create.assert_awaited_once_with(reservation=reservation)
        uow.trip_command_repo.add_seat.assert_awaited_once_with(
            trip_id=TRIP_ID, seat_number=12, reservation_id=reservation.id
        )
        assert uow.committed

        broadcaster.broadcast.assert_awaited_once_with(
            event_data={
                'type': 'seatReservationUpdate',
                'busId': 1,
                'tripId': str(TRIP_ID),
                'bookedSeats': [12],
            }
        )

    @pytest.mark.asyncio
    async def test_waits_while_bus_capacity_is_being_changed(
        self, use_case: CreateReservationUseCase, uow: FakeUnitOfWork
    ) -> None:
        """
        Given: the bus lock is held, as a capacity change does
        When: a reservation is made on that bus
        Then: nothing is written until the bus lock is released
        """
        bus_held = anyio.Event()
        release_bus = anyio.Event()

        async def hold_bus() -> None:
            async with use_case.trip_lock_registry.hold(('bus', 1)):
                bus_held.set()
                await release_bus.wait()

        async with anyio.create_task_group() as tg:
            tg.start_soon(hold_bus)
            await bus_held.wait()
            tg.start_soon(
                partial(
                    use_case.execute,
                    commuter_id=3,
                    bus_id=1,
                    default_trip_id=3,
                    trip_date='2025-01-10',
                    seat_number=12,
                )
            )
            await anyio.sleep(0.05)

            assert not uow.committed
            uow.directory_command_repo.get_bus_for_update.assert_not_awaited()

            release_bus.set()

        assert uow.committed

    @pytest.mark.asyncio
    async def test_fail_when_bus_not_found(
        self,
        use_case: CreateReservationUseCase,
        directory_query_repo: AsyncMock,
        resolve_trip_use_case: AsyncMock,
    ) -> None:
        directory_query_repo.get_bus = AsyncMock(return_value=None)

        with pytest.raises(NotFoundError, match='Bus not found'):
            await use_case.execute(
                commuter_id=3, bus_id=99, default_trip_id=3, trip_date='2025-01-10', seat_number=1
            )

        resolve_trip_use_case.execute.assert_not_awaited()

    @pytest.mark.asyncio
    @pytest.mark.parametrize('seat_number', [0, 41])
    async def test_out_of_range_seat_does_not_create_a_trip(
        self,
        use_case: CreateReservationUseCase,
        resolve_trip_use_case: AsyncMock,
        broadcaster: AsyncMock,
        seat_number: int,
    ) -> None:
        with pytest.raises(SeatOutOfRangeError):
            await use_case.execute(
                commuter_id=3,
                bus_id=1,
                default_trip_id=3,
                trip_date='2025-01-10',
                seat_number=seat_number,
            )

        resolve_trip_use_case.execute.assert_not_awaited()
        broadcaster.broadcast.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_fail_when_seat_already_booked(
        self,
        use_case: CreateReservationUseCase,
        uow: FakeUnitOfWork,
        broadcaster: AsyncMock,
    ) -> None:
        """
        Given: seat 12 already held on the trip
        When: another commuter reserves seat 12
        Then: SeatAlreadyBookedError, nothing written, nothing committed, no broadcast
        """
        uow.trip_command_repo.get_by_id = AsyncMock(return_value=_trip(12))

        with pytest.raises(SeatAlreadyBookedError):
            await use_case.execute(
                commuter_id=4, bus_id=1, default_trip_id=3, trip_date='2025-01-10', seat_number=12
            )

        uow.reservation_command_repo.create.assert_not_awaited()
        uow.trip_command_repo.add_seat.assert_not_awaited()
        assert not uow.committed
        assert uow.rolled_back
        broadcaster.broadcast.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_storage_conflict_rolls_back(
        self,
        use_case: CreateReservationUseCase,
        uow: FakeUnitOfWork,
        broadcaster: AsyncMock,
    ) -> None:
        """A concurrent writer that got the seat first is caught by the seat row constraint"""
        uow.trip_command_repo.add_seat = AsyncMock(
            side_effect=SeatAlreadyBookedError(seat_number=12)
        )

        with pytest.raises(SeatAlreadyBookedError):
            await use_case.execute(
                commuter_id=4, bus_id=1, default_trip_id=3, trip_date='2025-01-10', seat_number=12
            )

        assert not uow.committed
        assert uow.rolled_back
        broadcaster.broadcast.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_broadcast_failure_does_not_fail_reservation(
        self,
        use_case: CreateReservationUseCase,
        uow: FakeUnitOfWork,
        broadcaster: AsyncMock,
    ) -> None:
        broadcaster.broadcast = AsyncMock(side_effect=RuntimeError('observer exploded'))

        reservation = await use_case.execute(
            commuter_id=3, bus_id=1, default_trip_id=3, trip_date='2025-01-10', seat_number=12
        )

        assert reservation.seat_number == 12
        assert uow.committed
