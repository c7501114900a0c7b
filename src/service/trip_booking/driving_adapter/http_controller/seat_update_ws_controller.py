import anyio
from anyio.abc import CancelScope
from anyio.streams.memory import MemoryObjectReceiveStream
from fastapi import APIRouter, WebSocket, WebSocketDisconnect, status
import orjson

from src.platform.config.di import container
from src.platform.logging.loguru_io import Logger
from src.platform.metrics.reservation_metrics import metrics


router = APIRouter()


@router.websocket('/seat_updates')
@Logger.io(truncate_content=True)
async def websocket_seat_updates(websocket: WebSocket) -> None:
    """
    WebSocket relay of seat reservation updates (no auth, no per-trip filter).
    Usage: ws://localhost:8000/ws/seat_updates
    """
    broadcaster = container.seat_update_broadcaster()
    # Subscribed before accept so no event is missed once the client is connected
    stream = await broadcaster.subscribe()
    await websocket.accept()
    metrics.connected_observers.labels(transport='websocket').inc()
    Logger.base.info(
        f'🔌 [WS] Observer connected (total: {broadcaster.subscriber_count})'
    )

    try:
        async with anyio.create_task_group() as tg:
            tg.start_soon(_relay_events, websocket, stream, tg.cancel_scope)
            tg.start_soon(_wait_for_disconnect, websocket, tg.cancel_scope)
    finally:
        metrics.connected_observers.labels(transport='websocket').dec()
        await broadcaster.unsubscribe(stream=stream)
        Logger.base.info('🔌 [WS] Observer disconnected')


async def _relay_events(
    websocket: WebSocket, stream: MemoryObjectReceiveStream[dict], cancel_scope: CancelScope
) -> None:
    try:
        async for event_data in stream:
            await websocket.send_text(orjson.dumps(event_data).decode())
    except WebSocketDisconnect:
        cancel_scope.cancel()
        return

    # Broadcaster closed at shutdown
    await websocket.close(code=status.WS_1001_GOING_AWAY)
    cancel_scope.cancel()


async def _wait_for_disconnect(websocket: WebSocket, cancel_scope: CancelScope) -> None:
    """Incoming messages are ignored; only the disconnect matters"""
    try:
        while True:
            await websocket.receive_text()
    except WebSocketDisconnect:
        pass
    cancel_scope.cancel()
