import attrs
from fastapi import APIRouter, Depends, status

from src.platform.logging.loguru_io import Logger
from src.service.fleet.app.command.create_bus_use_case import CreateBusUseCase
from src.service.fleet.app.command.create_default_trip_use_case import (
    CreateDefaultTripUseCase,
)
from src.service.fleet.app.command.create_route_use_case import CreateRouteUseCase
from src.service.fleet.app.command.update_bus_capacity_use_case import UpdateBusCapacityUseCase
from src.service.fleet.app.query.get_directory_use_case import GetDirectoryUseCase
from src.service.fleet.driving_adapter.http_controller.schema.fleet_schema import (
    BusCapacityUpdateRequest,
    BusCreateRequest,
    BusResponse,
    DefaultTripCreateRequest,
    DefaultTripResponse,
    RouteCreateRequest,
    RouteResponse,
)
from src.service.shared_kernel.domain.entity.user_entity import UserEntity
from src.service.shared_kernel.driving_adapter.http_controller.auth.role_auth import (
    get_current_user,
    require_fleet_manager,
)


router = APIRouter()


# ============================ Route ============================


@router.post('/route', status_code=status.HTTP_201_CREATED)
@Logger.io
async def create_route(
    request: RouteCreateRequest,
    current_user: UserEntity = Depends(require_fleet_manager),
    use_case: CreateRouteUseCase = Depends(CreateRouteUseCase.depends),
) -> RouteResponse:
    route = await use_case.execute(
        start_point=request.start_point,
        end_point=request.end_point,
        distance=request.distance,
        estimated_time=request.estimated_time,
        fare=request.fare,
    )
    return RouteResponse(**attrs.asdict(route))


@router.get('/route/{route_id}', status_code=status.HTTP_200_OK)
@Logger.io
async def get_route(
    route_id: int,
    current_user: UserEntity = Depends(get_current_user),
    use_case: GetDirectoryUseCase = Depends(GetDirectoryUseCase.depends),
) -> RouteResponse:
    route = await use_case.get_route(route_id=route_id)
    return RouteResponse(**attrs.asdict(route))


# ============================ Bus ============================


@router.post('/bus', status_code=status.HTTP_201_CREATED)
@Logger.io
async def create_bus(
    request: BusCreateRequest,
    current_user: UserEntity = Depends(require_fleet_manager),
    use_case: CreateBusUseCase = Depends(CreateBusUseCase.depends),
) -> BusResponse:
    bus = await use_case.execute(
        bus_number=request.bus_number,
        capacity=request.capacity,
        operator_id=request.operator_id or current_user.id or 0,
        route_id=request.route_id,
    )
    return BusResponse(**attrs.asdict(bus))


@router.get('/bus/{bus_id}', status_code=status.HTTP_200_OK)
@Logger.io
async def get_bus(
    bus_id: int,
    current_user: UserEntity = Depends(get_current_user),
    use_case: GetDirectoryUseCase = Depends(GetDirectoryUseCase.depends),
) -> BusResponse:
    bus = await use_case.get_bus(bus_id=bus_id)
    return BusResponse(**attrs.asdict(bus))


@router.patch('/bus/{bus_id}/capacity', status_code=status.HTTP_200_OK)
@Logger.io
async def update_bus_capacity(
    bus_id: int,
    request: BusCapacityUpdateRequest,
    current_user: UserEntity = Depends(require_fleet_manager),
    use_case: UpdateBusCapacityUseCase = Depends(UpdateBusCapacityUseCase.depends),
) -> BusResponse:
    """Rejected when a booked seat on any trip of the bus would fall outside the new capacity."""
    bus = await use_case.execute(bus_id=bus_id, capacity=request.capacity)
    return BusResponse(**attrs.asdict(bus))


# ============================ Default Trip ============================


@router.post('/default_trip', status_code=status.HTTP_201_CREATED)
@Logger.io
async def create_default_trip(
    request: DefaultTripCreateRequest,
    current_user: UserEntity = Depends(require_fleet_manager),
    use_case: CreateDefaultTripUseCase = Depends(CreateDefaultTripUseCase.depends),
) -> DefaultTripResponse:
    default_trip = await use_case.execute(
        route_id=request.route_id,
        bus_id=request.bus_id,
        start_time=request.start_time,
        arrival_time=request.arrival_time,
    )
    return DefaultTripResponse(**attrs.asdict(default_trip))


@router.get('/default_trip/{default_trip_id}', status_code=status.HTTP_200_OK)
@Logger.io
async def get_default_trip(
    default_trip_id: int,
    current_user: UserEntity = Depends(get_current_user),
    use_case: GetDirectoryUseCase = Depends(GetDirectoryUseCase.depends),
) -> DefaultTripResponse:
    default_trip = await use_case.get_default_trip(default_trip_id=default_trip_id)
    return DefaultTripResponse(**attrs.asdict(default_trip))
