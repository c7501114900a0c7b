from enum import Enum
from typing import Optional

import attrs

from src.platform.exception.exceptions import DomainError, ForbiddenError


class UserRole(str, Enum):
    ADMIN = 'admin'
    OPERATOR = 'operator'
    COMMUTER = 'commuter'


@attrs.define
class UserEntity:
    """Caller identity rebuilt from the access token; accounts live outside this service"""

    email: str = ''
    name: str = ''
    id: Optional[int] = None
    role: UserRole = UserRole.COMMUTER
    is_active: bool = True

    def validate_active(self) -> None:
        if not self.is_active:
            raise ForbiddenError('User is inactive')

    @staticmethod
    def validate_role(role: str) -> UserRole:
        """Validate if the role is valid"""
        valid_roles = [r.value for r in UserRole]
        if role not in valid_roles:
            raise DomainError(f'Invalid role: {role}. Must be one of: {", ".join(valid_roles)}')
        return UserRole(role)
