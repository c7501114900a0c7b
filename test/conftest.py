"""
Test Configuration and Fixtures

This module provides:
- Environment setup before any application module reads settings
- A throwaway SQLite database per integration test
- TestClient and auth fixtures

Architecture:
- Unit tests (@pytest.mark.unit): use AsyncMock test doubles, no database
- Integration tests: drive the real app through TestClient against SQLite
"""

# =============================================================================
# CRITICAL: Environment setup MUST happen before any other imports
# Settings are read at import time (src.platform.config.core_setting)
# =============================================================================
import os
from pathlib import Path
import tempfile


_TEST_DB_DIR = Path(tempfile.mkdtemp(prefix='bus_reservation_test_'))


def _early_setup_test_environment() -> None:
    """Set test environment variables before any module imports."""
    worker_id = os.environ.get('PYTEST_XDIST_WORKER', 'master')
    db_path = _TEST_DB_DIR / f'test_{worker_id}.db'
    os.environ['DATABASE_URL'] = f'sqlite+aiosqlite:///{db_path}'
    os.environ['TEST_DB_PATH'] = str(db_path)

    test_log_dir = Path(__file__).parent / 'test_log'
    test_log_dir.mkdir(exist_ok=True)
    os.environ['LOG_DIR'] = str(test_log_dir)
    os.environ['LOG_FILE_PREFIX'] = 'test_'

    os.environ.setdefault('SECRET_KEY', 'test_secret_key')
    os.environ.setdefault('NOTIFIER_BUFFER_SIZE', '32')


# Call immediately to set env vars before any imports
_early_setup_test_environment()

from collections.abc import Generator  # noqa: E402
from typing import Any  # noqa: E402

from fastapi.testclient import TestClient  # noqa: E402
import pytest  # noqa: E402

from test.shared.utils import auth_headers  # noqa: E402
from test.util_constant import (  # noqa: E402
    ADMIN_USER,
    ANOTHER_COMMUTER_USER,
    COMMUTER_USER,
    OPERATOR_USER,
)


# =============================================================================
# Pytest Hooks
# =============================================================================
def pytest_collection_modifyitems(items: list[pytest.Item]) -> None:
    for item in items:
        markers = [m.name for m in item.iter_markers()]
        if 'unit' not in markers:
            item.fixturenames.insert(0, 'clean_database')


# =============================================================================
# Database Cleanup
# =============================================================================
@pytest.fixture(scope='function')
def clean_database() -> Generator[None, None, None]:
    """Every integration test starts from an empty file; tables are created by the lifespan"""
    db_path = Path(os.environ['TEST_DB_PATH'])
    db_path.unlink(missing_ok=True)
    yield
    db_path.unlink(missing_ok=True)


# =============================================================================
# Integration Test Fixtures
# =============================================================================
@pytest.fixture(scope='function')
def client(clean_database: None) -> Generator[TestClient, None, None]:
    """One app lifespan per test: wiring, tables and a fresh broadcaster"""
    from src.main import app

    with TestClient(app, raise_server_exceptions=False) as test_client:
        yield test_client


@pytest.fixture
def admin_headers() -> dict[str, str]:
    return auth_headers(ADMIN_USER)


@pytest.fixture
def operator_headers() -> dict[str, str]:
    return auth_headers(OPERATOR_USER)


@pytest.fixture
def commuter_headers() -> dict[str, str]:
    return auth_headers(COMMUTER_USER)


@pytest.fixture
def another_commuter_headers() -> dict[str, str]:
    return auth_headers(ANOTHER_COMMUTER_USER)


@pytest.fixture
def fleet(client: TestClient, operator_headers: dict[str, str]) -> dict[str, Any]:
    """Route + bus (capacity 40) + default trip, created through the fleet API"""
    from test.shared.given import given_fleet

    return given_fleet(client, operator_headers)
