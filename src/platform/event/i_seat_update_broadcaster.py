"""
Seat update broadcaster interface

Fans committed seat-occupancy changes out to every connected observer
(WebSocket and SSE clients) inside this process.
"""

from typing import Protocol

from anyio.streams.memory import MemoryObjectReceiveStream


class ISeatUpdateBroadcaster(Protocol):
    """
    Best-effort fan-out of seat update events.

    No acknowledgement, no retry and no replay: an observer that connects
    after an event was broadcast never sees it, and must re-read trip state
    through the query endpoints.
    """

    @property
    def subscriber_count(self) -> int: ...

    async def subscribe(self) -> MemoryObjectReceiveStream[dict]:
        """
        Register a new observer

        Returns:
            MemoryObjectReceiveStream that will receive event dictionaries
        """
        ...

    async def broadcast(self, *, event_data: dict) -> int:
        """
        Send event to all current observers

        Returns:
            Number of observers the event was delivered to

        Note:
            - Returns 0 when nobody is subscribed
            - Drops the event for an observer whose buffer is full
        """
        ...

    async def unsubscribe(self, *, stream: MemoryObjectReceiveStream[dict]) -> None:
        """Remove an observer; safe to call with an unknown or already closed stream"""
        ...

    async def aclose(self) -> None:
        """Close every observer stream; later broadcasts are no-ops"""
        ...
