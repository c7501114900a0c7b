from src.platform.event.i_seat_update_broadcaster import ISeatUpdateBroadcaster
from src.platform.logging.loguru_io import Logger
from src.service.trip_booking.domain.domain_event.seat_reservation_update_event import (
    SeatReservationUpdateEvent,
)
from src.service.trip_booking.domain.entity.trip_instance_entity import TripInstance


async def notify_seat_update(*, broadcaster: ISeatUpdateBroadcaster, trip: TripInstance) -> None:
    """
    Broadcast the committed booked-seat snapshot of trip.

    Must only be called after commit. Failures are logged and swallowed: the
    reservation outcome never depends on observers.
    """
    event = SeatReservationUpdateEvent.from_trip(trip)
    try:
        await broadcaster.broadcast(event_data=event.to_payload())
    except Exception as e:
        Logger.base.warning(
            f'⚠️ [NOTIFY] Seat update broadcast failed for trip {trip.id}: '
            f'{type(e).__name__}: {e}'
        )
