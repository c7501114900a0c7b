import pytest

from src.platform.exception.exceptions import ValidationFailedError
from src.service.fleet.domain.entity.bus_entity import Bus
from src.service.fleet.domain.entity.default_trip_entity import DefaultTrip
from src.service.fleet.domain.entity.route_entity import Route


@pytest.mark.unit
class TestBusCreate:
    def test_strips_bus_number(self) -> None:
        bus = Bus.create(bus_number='  KLB-1234 ', capacity=40, operator_id=2, route_id=1)

        assert bus.bus_number == 'KLB-1234'
        assert bus.id is None

    @pytest.mark.parametrize('capacity', [0, -1])
    def test_capacity_must_be_positive(self, capacity: int) -> None:
        with pytest.raises(ValidationFailedError, match='capacity'):
            Bus.create(bus_number='KLB-1234', capacity=capacity, operator_id=2, route_id=1)

    def test_bus_number_required(self) -> None:
        with pytest.raises(ValidationFailedError, match='bus_number'):
            Bus.create(bus_number='  ', capacity=40, operator_id=2, route_id=1)


@pytest.mark.unit
class TestRouteCreate:
    def test_negative_fare_is_rejected(self) -> None:
        with pytest.raises(ValidationFailedError, match='fare'):
            Route.create(
                start_point='A', end_point='B', distance=10, estimated_time='00:30', fare=-1
            )

    def test_blank_end_point_is_rejected(self) -> None:
        with pytest.raises(ValidationFailedError):
            Route.create(
                start_point='A', end_point=' ', distance=10, estimated_time='00:30', fare=50
            )


@pytest.mark.unit
class TestDefaultTripCreate:
    @pytest.mark.parametrize('start_time', ['8:30', '24:00', '08:60', 'morning'])
    def test_times_must_be_hh_mm(self, start_time: str) -> None:
        with pytest.raises(ValidationFailedError, match='HH:MM'):
            DefaultTrip.create(route_id=1, bus_id=1, start_time=start_time, arrival_time='09:50')

    def test_valid_times(self) -> None:
        default_trip = DefaultTrip.create(
            route_id=1, bus_id=1, start_time='23:59', arrival_time='00:40'
        )
        assert default_trip.start_time == '23:59'
