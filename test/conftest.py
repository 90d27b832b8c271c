"""
Test Configuration and Fixtures

This module provides:
- Environment setup (in-memory sqlite, cheap bcrypt rounds) before any app import
- `database`: a fresh sqlite-backed Database for repository integration tests
- `client`: a TestClient over the test app; every client gets an empty database
- Helpers to register users and build HTTP Basic credentials

Architecture:
- Unit tests (`*_unit_test.py`, `@pytest.mark.unit`): stub repositories, no database
- Integration tests (`*_integration_test.py`): real SQLAlchemy repositories on aiosqlite
"""

# =============================================================================
# Environment setup MUST happen before any other imports
# Settings are read once, at import time of src.platform.config.core_setting
# =============================================================================
import os
from pathlib import Path


def _early_setup_test_environment() -> None:
    os.environ['DATABASE_URL'] = 'sqlite+aiosqlite://'
    os.environ['BCRYPT_ROUNDS'] = '4'
    os.environ.setdefault('DEPLOY_ENV', 'test')

    test_log_dir = Path(__file__).parent / 'test_log'
    test_log_dir.mkdir(exist_ok=True)
    os.environ['TEST_LOG_DIR'] = str(test_log_dir)


_early_setup_test_environment()

from collections.abc import AsyncGenerator, AsyncIterator, Callable, Generator  # noqa: E402
from contextlib import asynccontextmanager  # noqa: E402
from typing import Any  # noqa: E402

from fastapi import FastAPI  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
import pytest  # noqa: E402

from src.platform.app_factory import create_app  # noqa: E402
from src.platform.config.di import container  # noqa: E402
from src.platform.config.wire_modules import WIRE_MODULES  # noqa: E402
from src.platform.constant.route_constant import USER_CREATE  # noqa: E402
from src.platform.database.orm_db_setting import Database  # noqa: E402
from src.platform.logging.loguru_io import Logger  # noqa: E402


DEFAULT_PASSWORD = 'P@ssw0rd'


@asynccontextmanager
async def lifespan_for_tests(app: FastAPI) -> AsyncIterator[None]:
    """Wire DI and create tables on the TestClient's event loop; dispose on exit"""
    Logger.base.info('🧪 [Test App] Starting up...')
    container.wire(modules=WIRE_MODULES)
    database = container.database()
    await database.create_tables()

    yield

    await database.dispose()
    container.unwire()
    container.reset_singletons()
    Logger.base.info('👋 [Test App] Shutdown complete')


@pytest.fixture
def app() -> FastAPI:
    return create_app(lifespan=lifespan_for_tests, title_suffix=' (Test)')


@pytest.fixture
def client(app: FastAPI) -> Generator[TestClient, None, None]:
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
async def database() -> AsyncGenerator[Database, None]:
    db = Database(url='sqlite+aiosqlite://')
    await db.create_tables()
    yield db
    await db.dispose()


@pytest.fixture
def register_user(client: TestClient) -> Callable[..., dict[str, Any]]:
    def _register(
        username: str,
        role: str = 'buyer',
        password: str = DEFAULT_PASSWORD,
        email: str | None = None,
    ) -> dict[str, Any]:
        response = client.post(
            USER_CREATE,
            json={
                'username': username,
                'password': password,
                'email': email or f'{username}@x.com',
                'role': role,
            },
        )
        assert response.status_code == 201, response.text
        return response.json()

    return _register


@pytest.fixture
def admin_auth(client: TestClient) -> tuple[str, str]:
    """Registers an admin account and returns its Basic credentials"""
    response = client.post(
        USER_CREATE,
        json={
            'username': 'root',
            'password': DEFAULT_PASSWORD,
            'email': 'root@x.com',
            'role': 'admin',
        },
    )
    assert response.status_code == 201, response.text
    return ('root', DEFAULT_PASSWORD)
