from fastapi import FastAPI
from fastapi.testclient import TestClient
from pydantic import BaseModel
import pytest

from src.platform.exception.exception_handlers import register_exception_handlers
from src.platform.exception.exceptions import (
    AuthError,
    AuthzError,
    ConflictError,
    NotFoundError,
    StorageError,
    ValidationError,
)


class Payload(BaseModel):
    quantity: int


@pytest.fixture
def client() -> TestClient:
    app = FastAPI()
    register_exception_handlers(app)

    errors = {
        'validation': ValidationError('Price must be greater than 0'),
        'auth': AuthError(),
        'authz': AuthzError('Only sellers can perform this action'),
        'not-found': NotFoundError('Product not found: 1'),
        'conflict': ConflictError('Username already exists: alice'),
        'storage': StorageError('Storage operation failed: create user'),
    }

    @app.get('/raise/{kind}')
    async def raise_error(kind: str) -> None:
        if kind == 'unexpected':
            raise RuntimeError('boom')
        raise errors[kind]

    @app.post('/body')
    async def body(payload: Payload) -> Payload:
        return payload

    return TestClient(app, raise_server_exceptions=False)


@pytest.mark.unit
class TestExceptionHandlers:
    @pytest.mark.parametrize(
        'kind, status_code',
        [
            ('validation', 400),
            ('auth', 401),
            ('authz', 403),
            ('not-found', 404),
            ('conflict', 409),
            ('storage', 500),
        ],
    )
    def test_domain_errors_map_to_status_codes(
        self, client: TestClient, kind: str, status_code: int
    ) -> None:
        response = client.get(f'/raise/{kind}')

        assert response.status_code == status_code
        assert 'detail' in response.json()

    def test_auth_error_asks_for_basic_credentials(self, client: TestClient) -> None:
        response = client.get('/raise/auth')

        assert response.json() == {'detail': 'Invalid credentials'}
        assert response.headers['WWW-Authenticate'] == 'Basic'

    def test_storage_error_hides_details(self, client: TestClient) -> None:
        assert client.get('/raise/storage').json() == {'detail': 'Storage operation failed'}

    def test_unexpected_error_is_generic_500(self, client: TestClient) -> None:
        response = client.get('/raise/unexpected')

        assert response.status_code == 500
        assert response.json() == {'detail': 'Internal server error'}

    def test_request_body_errors_are_bad_request(self, client: TestClient) -> None:
        response = client.post('/body', json={'quantity': 'many'})

        assert response.status_code == 400
        assert response.json()['detail'][0]['loc'] == ['body', 'quantity']
