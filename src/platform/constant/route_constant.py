# Fleet directory
FLEET_BASE = '/api/fleet'
ROUTE_CREATE = f'{FLEET_BASE}/route'
ROUTE_GET = f'{FLEET_BASE}/route/{{route_id}}'
BUS_CREATE = f'{FLEET_BASE}/bus'
BUS_GET = f'{FLEET_BASE}/bus/{{bus_id}}'
BUS_CAPACITY_UPDATE = f'{FLEET_BASE}/bus/{{bus_id}}/capacity'
DEFAULT_TRIP_CREATE = f'{FLEET_BASE}/default_trip'
DEFAULT_TRIP_GET = f'{FLEET_BASE}/default_trip/{{default_trip_id}}'

# Trips
TRIP_BASE = '/api/trip'
TRIP_RESOLVE = f'{TRIP_BASE}/resolve'
TRIP_GET = f'{TRIP_BASE}/{{trip_id}}'
TRIP_SEAT_UPDATES_SSE = f'{TRIP_BASE}/seat_updates/sse'

# Reservations
RESERVATION_BASE = '/api/reservation'
RESERVATION_GET = f'{RESERVATION_BASE}/{{reservation_id}}'

# WebSocket
WS_BASE = '/ws'
SEAT_UPDATES_WS = f'{WS_BASE}/seat_updates'
