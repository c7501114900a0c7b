from typing import Any, Dict

from httpx import Response

from src.service.shared_kernel.domain.entity.user_entity import UserEntity
from src.service.shared_kernel.driving_adapter.http_controller.auth.jwt_auth import JwtAuth


def auth_headers(user: UserEntity) -> Dict[str, str]:
    """Bearer header carrying a token for user, signed with the test SECRET_KEY"""
    return {'Authorization': f'Bearer {JwtAuth().create_jwt_token(user)}'}


def assert_response_status(response: Response, expected_status: int, message: str | None = None):
    response_text = getattr(response, 'text', getattr(response, 'content', 'N/A'))
    assert response.status_code == expected_status, (
        message or f'Expected {expected_status}, got {response.status_code}: {response_text}'
    )


def json_of(response: Response, expected_status: int) -> Any:
    assert_response_status(response, expected_status)
    return response.json()
