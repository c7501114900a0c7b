from collections.abc import AsyncIterator
from datetime import date, datetime
from typing import Optional

import anyio
from fastapi import APIRouter, Depends, Query, status
from opentelemetry import trace
import orjson
from sse_starlette.sse import EventSourceResponse

from src.platform.config.di import container
from src.platform.logging.loguru_io import Logger
from src.platform.metrics.reservation_metrics import metrics
from src.platform.types import UtilsUUID7
from src.service.shared_kernel.domain.entity.user_entity import UserEntity
from src.service.shared_kernel.driving_adapter.http_controller.auth.role_auth import (
    get_current_user,
)
from src.service.trip_booking.app.command.resolve_trip_use_case import ResolveTripUseCase
from src.service.trip_booking.app.query.get_trip_use_case import GetTripUseCase
from src.service.trip_booking.driving_adapter.http_controller.schema.trip_schema import (
    TripResponse,
)


router = APIRouter()
tracer = trace.get_tracer(__name__)


@router.get('/resolve', status_code=status.HTTP_200_OK)
@Logger.io
async def resolve_trip(
    bus_id: int,
    default_trip_id: int,
    trip_date: date | datetime = Query(alias='date'),
    route_id: Optional[int] = None,
    current_user: UserEntity = Depends(get_current_user),
    use_case: ResolveTripUseCase = Depends(ResolveTripUseCase.depends),
) -> TripResponse:
    trip = await use_case.execute(
        bus_id=bus_id, default_trip_id=default_trip_id, trip_date=trip_date, route_id=route_id
    )
    return TripResponse.from_entity(trip)


# ============================ SSE Endpoint ============================


@router.get('/seat_updates/sse', status_code=status.HTTP_200_OK)
@Logger.io
async def stream_seat_updates() -> EventSourceResponse:
    """
    SSE relay of seat reservation updates for every trip.

    Clients filter by tripId on their side; the connection ends when the
    broadcaster is closed at shutdown.
    """
    broadcaster = container.seat_update_broadcaster()
    stream = await broadcaster.subscribe()
    Logger.base.info('📡 [SSE] Client subscribed to seat updates')

    async def event_generator() -> AsyncIterator[dict[str, str]]:
        metrics.connected_observers.labels(transport='sse').inc()
        try:
            async for event_data in stream:
                yield {'event': event_data['type'], 'data': orjson.dumps(event_data).decode()}
        except anyio.get_cancelled_exc_class():
            Logger.base.info('🔌 [SSE] Client disconnected')
            raise
        finally:
            metrics.connected_observers.labels(transport='sse').dec()
            await broadcaster.unsubscribe(stream=stream)

    return EventSourceResponse(event_generator())


@router.get('/{trip_id}', status_code=status.HTTP_200_OK)
@Logger.io
async def get_trip(
    trip_id: UtilsUUID7,
    current_user: UserEntity = Depends(get_current_user),
    use_case: GetTripUseCase = Depends(GetTripUseCase.depends),
) -> TripResponse:
    trip = await use_case.execute(trip_id=trip_id)
    return TripResponse.from_entity(trip)
