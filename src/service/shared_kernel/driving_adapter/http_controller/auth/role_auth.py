from typing import Optional

from dependency_injector.wiring import Provide, inject
from fastapi import Cookie, Depends, Header
from opentelemetry import trace

from src.platform.config.core_setting import settings
from src.platform.config.di import Container
from src.platform.exception.exceptions import ForbiddenError
from src.service.shared_kernel.domain.entity.user_entity import UserEntity, UserRole
from src.service.shared_kernel.driving_adapter.http_controller.auth.jwt_auth import JwtAuth


tracer = trace.get_tracer(__name__)


class RoleAuthStrategy:
    @staticmethod
    def can_manage_fleet(user: UserEntity) -> bool:
        return user.role in (UserRole.OPERATOR, UserRole.ADMIN)

    @staticmethod
    def can_reserve_seat(user: UserEntity) -> bool:
        return user.role in (UserRole.COMMUTER, UserRole.ADMIN)


def extract_token(authorization: Optional[str], cookie_token: Optional[str]) -> Optional[str]:
    """Bearer header wins over the auth cookie"""
    if authorization:
        scheme, _, credentials = authorization.partition(' ')
        if scheme.lower() == 'bearer' and credentials:
            return credentials.strip()
    return cookie_token


@inject
async def get_current_user(
    authorization: Optional[str] = Header(None),
    token: Optional[str] = Cookie(None, alias=settings.AUTH_COOKIE_NAME),
    jwt_auth: JwtAuth = Depends(Provide[Container.jwt_auth]),
) -> UserEntity:
    """Get current user from JWT token (stateless, no DB query)"""
    return jwt_auth.get_current_user_info_from_jwt(extract_token(authorization, token))


async def require_fleet_manager(
    current_user: UserEntity = Depends(get_current_user),
) -> UserEntity:
    if not RoleAuthStrategy.can_manage_fleet(current_user):
        raise ForbiddenError('Only operators or admins can manage the fleet directory')
    return current_user


async def require_commuter_or_admin(
    current_user: UserEntity = Depends(get_current_user),
) -> UserEntity:
    with tracer.start_as_current_span(
        'auth.require_commuter_or_admin',
        attributes={
            'user.id': current_user.id or 0,
            'user.role': current_user.role.value,
        },
    ):
        if not RoleAuthStrategy.can_reserve_seat(current_user):
            raise ForbiddenError('Only commuters can reserve seats')
        return current_user
