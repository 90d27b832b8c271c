from collections.abc import Generator

import pytest

from src.platform.exception.exceptions import NotFoundError
from src.platform.logging.loguru_io import Logger
from src.platform.logging.loguru_io_config import MASK, access_log_level
from src.platform.logging.loguru_io_utils import bind_arguments, mask_sensitive, safe_signature


@pytest.fixture
def captured() -> Generator[list[str], None, None]:
    messages: list[str] = []
    handler_id = Logger.base.add(messages.append, format='{level} {message}', level='DEBUG')
    yield messages
    Logger.base.remove(handler_id)


@pytest.mark.unit
class TestLoggerIO:
    def test_sync_arguments_and_return_are_logged_with_password_masked(
        self, captured: list[str]
    ) -> None:
        @Logger.io
        def authenticate(username: str, password: str) -> str:
            return f'welcome {username}'

        assert authenticate('alice', 'hunter2') == 'welcome alice'

        output = '\n'.join(captured)
        assert 'alice' in output
        assert 'welcome alice' in output
        assert 'hunter2' not in output
        assert MASK in output

    @pytest.mark.asyncio
    async def test_async_update_value_is_masked(self, captured: list[str]) -> None:
        @Logger.io
        async def update_field(*, user_id: int, field_name: str, new_value: str) -> bool:
            return True

        assert await update_field(user_id=1, field_name='password', new_value='s3cr3t')

        output = '\n'.join(captured)
        assert 's3cr3t' not in output
        assert "'field_name': 'password'" in output

    @pytest.mark.asyncio
    async def test_domain_errors_are_logged_once_and_reraised(self, captured: list[str]) -> None:
        @Logger.io
        async def inner() -> None:
            raise NotFoundError('Product not found: 7')

        @Logger.io
        async def outer() -> None:
            await inner()

        with pytest.raises(NotFoundError):
            await outer()

        errors = [line for line in captured if line.startswith('ERROR')]
        assert len(errors) == 1
        assert 'NotFoundError: Product not found: 7' in errors[0]

    def test_decorator_accepts_options(self, captured: list[str]) -> None:
        @Logger.io(truncate_content=True)
        def echo(value: str) -> str:
            return value

        echo('x' * 2000)

        assert any('truncated' in line for line in captured)

    def test_reraise_false_returns_none_after_logging(self, captured: list[str]) -> None:
        @Logger.io(reraise=False)
        def explode() -> str:
            raise RuntimeError('boom')

        assert explode() is None
        assert any('RuntimeError: boom' in line for line in captured)


@pytest.mark.unit
class TestMaskingUtils:
    def test_bind_arguments_names_positionals_and_drops_self(self) -> None:
        class Service:
            def login(self, username: str, password: str) -> None: ...

        arguments = bind_arguments(safe_signature(Service.login), (Service(), 'a', 'b'), {})

        assert arguments == {'username': 'a', 'password': 'b'}

    @pytest.mark.parametrize(
        'text',
        [
            "LoginRequest(username='a', password='hunter2')",
            'UserEntity(password_hash="$2b$04$abc")',
            "field_name='password' new_value='hunter2'",
        ],
    )
    def test_sensitive_fragments_in_reprs_are_masked(self, text: str) -> None:
        masked = mask_sensitive(text)

        assert 'hunter2' not in masked
        assert '$2b$04$abc' not in masked
        assert MASK in masked

    def test_non_sensitive_values_pass_through(self) -> None:
        value = {'username': 'alice'}
        assert mask_sensitive(value) is value


@pytest.mark.unit
class TestAccessLogLevel:
    @pytest.mark.parametrize(
        'message, level',
        [
            ('127.0.0.1:5000 - "GET /api/product HTTP/1.1" 200', 'SUCCESS'),
            ('127.0.0.1:5000 - "POST /api/product HTTP/1.1" 403', 'WARNING'),
            ('127.0.0.1:5000 - "GET /api/user/me HTTP/1.1" 401', 'WARNING'),
            ('127.0.0.1:5000 - "GET /api/product/9 HTTP/1.1" 404', 'INFO'),
            ('127.0.0.1:5000 - "GET /api/product HTTP/1.1" 500', 'ERROR'),
            ('Application startup complete.', None),
        ],
    )
    def test_status_code_picks_level(self, message: str, level: str | None) -> None:
        assert access_log_level(message) == level
