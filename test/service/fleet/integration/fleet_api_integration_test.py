from typing import Any, Dict

from fastapi.testclient import TestClient
import pytest

from src.platform.constant.route_constant import (
    BUS_CAPACITY_UPDATE,
    BUS_CREATE,
    BUS_GET,
    DEFAULT_TRIP_CREATE,
    DEFAULT_TRIP_GET,
    RESERVATION_BASE,
    ROUTE_CREATE,
    ROUTE_GET,
)
from test.shared.utils import assert_response_status, json_of
from test.util_constant import DEFAULT_ROUTE, DEFAULT_TRIP_DATE, OPERATOR_USER


@pytest.mark.integration
class TestFleetDirectory:
    def test_created_records_can_be_read_back(
        self, client: TestClient, fleet: Dict[str, Any], commuter_headers: Dict[str, str]
    ) -> None:
        route = json_of(
            client.get(ROUTE_GET.format(route_id=fleet['route']['id']), headers=commuter_headers),
            200,
        )
        bus = json_of(
            client.get(BUS_GET.format(bus_id=fleet['bus']['id']), headers=commuter_headers), 200
        )
        default_trip = json_of(
            client.get(
                DEFAULT_TRIP_GET.format(default_trip_id=fleet['default_trip']['id']),
                headers=commuter_headers,
            ),
            200,
        )

        assert route['start_point'] == DEFAULT_ROUTE['start_point']
        assert bus['capacity'] == 40
        assert bus['operator_id'] == OPERATOR_USER.id
        assert bus['route_id'] == route['id']
        assert default_trip['bus_id'] == bus['id']
        assert default_trip['start_time'] == '08:30'

    @pytest.mark.parametrize('path', [BUS_GET.format(bus_id=999), ROUTE_GET.format(route_id=999)])
    def test_unknown_record(
        self, client: TestClient, commuter_headers: Dict[str, str], path: str
    ) -> None:
        assert_response_status(client.get(path, headers=commuter_headers), 404)

    def test_commuter_cannot_write(
        self, client: TestClient, commuter_headers: Dict[str, str]
    ) -> None:
        assert_response_status(
            client.post(ROUTE_CREATE, json=DEFAULT_ROUTE, headers=commuter_headers), 403
        )

    def test_admin_can_write(self, client: TestClient, admin_headers: Dict[str, str]) -> None:
        assert_response_status(
            client.post(ROUTE_CREATE, json=DEFAULT_ROUTE, headers=admin_headers), 201
        )

    def test_duplicate_bus_number(
        self, client: TestClient, fleet: Dict[str, Any], operator_headers: Dict[str, str]
    ) -> None:
        response = client.post(
            BUS_CREATE,
            json={
                'bus_number': fleet['bus']['bus_number'],
                'capacity': 20,
                'route_id': fleet['route']['id'],
            },
            headers=operator_headers,
        )

        assert_response_status(response, 409)

    def test_bus_on_unknown_route(
        self, client: TestClient, operator_headers: Dict[str, str]
    ) -> None:
        response = client.post(
            BUS_CREATE,
            json={'bus_number': 'KLB-0001', 'capacity': 20, 'route_id': 999},
            headers=operator_headers,
        )

        assert_response_status(response, 404)

    def test_invalid_default_trip_time(
        self, client: TestClient, fleet: Dict[str, Any], operator_headers: Dict[str, str]
    ) -> None:
        response = client.post(
            DEFAULT_TRIP_CREATE,
            json={
                'route_id': fleet['route']['id'],
                'bus_id': fleet['bus']['id'],
                'start_time': '8am',
                'arrival_time': '09:50',
            },
            headers=operator_headers,
        )

        assert_response_status(response, 400)

    def test_missing_body_field(self, client: TestClient, operator_headers: Dict[str, str]) -> None:
        response = client.post(
            ROUTE_CREATE, json={'start_point': 'A'}, headers=operator_headers
        )

        assert_response_status(response, 400)


@pytest.mark.integration
class TestBusCapacity:
    def test_shrink_below_highest_booked_seat_is_rejected(
        self,
        client: TestClient,
        fleet: Dict[str, Any],
        operator_headers: Dict[str, str],
        commuter_headers: Dict[str, str],
    ) -> None:
        bus_id = fleet['bus']['id']
        json_of(
            client.post(
                RESERVATION_BASE,
                json={
                    'bus_id': bus_id,
                    'default_trip_id': fleet['default_trip']['id'],
                    'trip_date': DEFAULT_TRIP_DATE,
                    'seat_number': 30,
                },
                headers=commuter_headers,
            ),
            201,
        )
        url = BUS_CAPACITY_UPDATE.format(bus_id=bus_id)

        rejected = client.patch(url, json={'capacity': 29}, headers=operator_headers)
        assert_response_status(rejected, 400)

        shrunk = json_of(client.patch(url, json={'capacity': 30}, headers=operator_headers), 200)
        assert shrunk['capacity'] == 30

        bus = json_of(client.get(BUS_GET.format(bus_id=bus_id), headers=operator_headers), 200)
        assert bus['capacity'] == 30

    def test_grow_then_book_new_seat(
        self,
        client: TestClient,
        fleet: Dict[str, Any],
        operator_headers: Dict[str, str],
        commuter_headers: Dict[str, str],
    ) -> None:
        bus_id = fleet['bus']['id']
        json_of(
            client.patch(
                BUS_CAPACITY_UPDATE.format(bus_id=bus_id),
                json={'capacity': 45},
                headers=operator_headers,
            ),
            200,
        )

        response = client.post(
            RESERVATION_BASE,
            json={
                'bus_id': bus_id,
                'default_trip_id': fleet['default_trip']['id'],
                'trip_date': DEFAULT_TRIP_DATE,
                'seat_number': 45,
            },
            headers=commuter_headers,
        )

        assert_response_status(response, 201)

    def test_commuter_cannot_change_capacity(
        self, client: TestClient, fleet: Dict[str, Any], commuter_headers: Dict[str, str]
    ) -> None:
        response = client.patch(
            BUS_CAPACITY_UPDATE.format(bus_id=fleet['bus']['id']),
            json={'capacity': 10},
            headers=commuter_headers,
        )

        assert_response_status(response, 403)


@pytest.mark.integration
class TestOpsEndpoints:
    def test_health(self, client: TestClient) -> None:
        assert json_of(client.get('/health'), 200)['status'] == 'healthy'

    def test_metrics(self, client: TestClient) -> None:
        response = client.get('/metrics')

        assert_response_status(response, 200)
        assert 'seat_reservation_requests_total' in response.text
