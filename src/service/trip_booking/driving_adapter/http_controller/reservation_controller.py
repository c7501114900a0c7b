from typing import List

from fastapi import APIRouter, Depends, status
from opentelemetry import trace

from src.platform.logging.loguru_io import Logger
from src.platform.types import UtilsUUID7
from src.service.shared_kernel.domain.entity.user_entity import UserEntity
from src.service.shared_kernel.driving_adapter.http_controller.auth.role_auth import (
    get_current_user,
    require_commuter_or_admin,
)
from src.service.trip_booking.app.command.create_reservation_use_case import (
    CreateReservationUseCase,
)
from src.service.trip_booking.app.command.delete_reservation_use_case import (
    DeleteReservationUseCase,
)
from src.service.trip_booking.app.command.update_reservation_use_case import (
    UpdateReservationUseCase,
)
from src.service.trip_booking.app.query.get_reservation_use_case import GetReservationUseCase
from src.service.trip_booking.app.query.list_reservations_use_case import (
    ListReservationsUseCase,
)
from src.service.trip_booking.driving_adapter.http_controller.schema.reservation_schema import (
    DeleteReservationResponse,
    ReservationCreateRequest,
    ReservationResponse,
    ReservationUpdateRequest,
)


router = APIRouter()
tracer = trace.get_tracer(__name__)


@router.post('', status_code=status.HTTP_201_CREATED)
@Logger.io
async def create_reservation(
    request: ReservationCreateRequest,
    current_user: UserEntity = Depends(require_commuter_or_admin),
    use_case: CreateReservationUseCase = Depends(CreateReservationUseCase.depends),
) -> ReservationResponse:
    with tracer.start_as_current_span('controller.create_reservation') as span:
        span.set_attribute('bus_id', request.bus_id)
        span.set_attribute('seat_number', request.seat_number)
        span.set_attribute('commuter_id', current_user.id or 0)

        reservation = await use_case.execute(
            commuter_id=current_user.id or 0,
            bus_id=request.bus_id,
            default_trip_id=request.default_trip_id,
            trip_date=request.trip_date,
            seat_number=request.seat_number,
        )
        span.set_attribute('reservation.id', str(reservation.id))
        return ReservationResponse.from_entity(reservation)


@router.get('', status_code=status.HTTP_200_OK)
@Logger.io
async def list_reservations(
    current_user: UserEntity = Depends(get_current_user),
    use_case: ListReservationsUseCase = Depends(ListReservationsUseCase.depends),
) -> List[ReservationResponse]:
    """Admins see every reservation, everyone else only their own."""
    reservations = await use_case.execute(
        requester_id=current_user.id or 0, requester_role=current_user.role
    )
    return [ReservationResponse.from_entity(r) for r in reservations]


@router.get('/{reservation_id}', status_code=status.HTTP_200_OK)
@Logger.io
async def get_reservation(
    reservation_id: UtilsUUID7,
    current_user: UserEntity = Depends(get_current_user),
    use_case: GetReservationUseCase = Depends(GetReservationUseCase.depends),
) -> ReservationResponse:
    reservation = await use_case.execute(
        reservation_id=reservation_id,
        requester_id=current_user.id or 0,
        requester_role=current_user.role,
    )
    return ReservationResponse.from_entity(reservation)


@router.patch('/{reservation_id}', status_code=status.HTTP_200_OK)
@Logger.io
async def update_reservation(
    reservation_id: UtilsUUID7,
    request: ReservationUpdateRequest,
    current_user: UserEntity = Depends(get_current_user),
    use_case: UpdateReservationUseCase = Depends(UpdateReservationUseCase.depends),
) -> ReservationResponse:
    reservation = await use_case.execute(
        reservation_id=reservation_id,
        requester_id=current_user.id or 0,
        requester_role=current_user.role,
        seat_number=request.seat_number,
        payment_status=request.payment_status,
    )
    return ReservationResponse.from_entity(reservation)


@router.delete('/{reservation_id}', status_code=status.HTTP_200_OK)
@Logger.io
async def delete_reservation(
    reservation_id: UtilsUUID7,
    current_user: UserEntity = Depends(get_current_user),
    use_case: DeleteReservationUseCase = Depends(DeleteReservationUseCase.depends),
) -> DeleteReservationResponse:
    reservation = await use_case.execute(
        reservation_id=reservation_id,
        requester_id=current_user.id or 0,
        requester_role=current_user.role,
    )
    return DeleteReservationResponse(
        id=reservation.id,
        released_seat=reservation.seat_number,
        trip_id=reservation.trip_id,
    )
