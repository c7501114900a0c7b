"""
In-memory seat update broadcaster

Created once by the DI container, closed by the application lifespan on
shutdown.
"""

from typing import List

from anyio import BrokenResourceError, ClosedResourceError, WouldBlock, create_memory_object_stream
from anyio.streams.memory import MemoryObjectReceiveStream, MemoryObjectSendStream

from src.platform.logging.loguru_io import Logger
from src.platform.metrics.reservation_metrics import metrics


class SeatUpdateBroadcasterImpl:
    """
    In-memory pub/sub for seat reservation updates

    - Every observer gets its own bounded memory stream
    - Full buffer: the event is dropped for that observer only (send_nowait raises WouldBlock)
    - Closed observer: removed on the next broadcast
    """

    def __init__(self, *, max_buffer_size: int = 32) -> None:
        self._max_buffer_size = max_buffer_size
        self._subscribers: List[
            tuple[MemoryObjectSendStream[dict], MemoryObjectReceiveStream[dict]]
        ] = []
        self._closed = False

    @property
    def subscriber_count(self) -> int:
        return len(self._subscribers)

    async def subscribe(self) -> MemoryObjectReceiveStream[dict]:
        send_stream, receive_stream = create_memory_object_stream[dict](
            max_buffer_size=self._max_buffer_size
        )
        if self._closed:
            # Late subscriber after shutdown gets an already finished stream
            await send_stream.aclose()
            return receive_stream

        self._subscribers.append((send_stream, receive_stream))
        Logger.base.debug(f'📡 [BROADCASTER] Observer subscribed (total: {self.subscriber_count})')
        return receive_stream

    async def broadcast(self, *, event_data: dict) -> int:
        if not self._subscribers:
            Logger.base.debug('📡 [BROADCASTER] No observers connected')
            return 0

        delivered = 0
        dropped = 0
        gone: list[tuple[MemoryObjectSendStream[dict], MemoryObjectReceiveStream[dict]]] = []

        for pair in list(self._subscribers):
            send_stream, _ = pair
            try:
                send_stream.send_nowait(event_data)
                delivered += 1
            except WouldBlock:
                dropped += 1
                Logger.base.warning(
                    f'⚠️ [BROADCASTER] Observer buffer full, dropping {event_data.get("type")}'
                )
            except (BrokenResourceError, ClosedResourceError):
                gone.append(pair)

        for pair in gone:
            await self._discard(pair)

        metrics.record_broadcast(delivered=delivered, dropped=dropped)
        Logger.base.info(
            f'📡 [BROADCASTER] {event_data.get("type")}: delivered={delivered}, '
            f'dropped={dropped}, disconnected={len(gone)}'
        )
        return delivered

    async def unsubscribe(self, *, stream: MemoryObjectReceiveStream[dict]) -> None:
        for pair in list(self._subscribers):
            if pair[1] is stream:
                await self._discard(pair)
                Logger.base.debug(
                    f'📡 [BROADCASTER] Observer unsubscribed (remaining: {self.subscriber_count})'
                )
                return

    async def aclose(self) -> None:
        self._closed = True
        for pair in list(self._subscribers):
            # Observers see end-of-stream and finish their loops
            await self._discard(pair, close_receiver=False)
        Logger.base.info('📡 [BROADCASTER] Closed all observer streams')

    async def _discard(
        self,
        pair: tuple[MemoryObjectSendStream[dict], MemoryObjectReceiveStream[dict]],
        *,
        close_receiver: bool = True,
    ) -> None:
        if pair in self._subscribers:
            self._subscribers.remove(pair)
        send_stream, receive_stream = pair
        await send_stream.aclose()
        if close_receiver:
            await receive_stream.aclose()
