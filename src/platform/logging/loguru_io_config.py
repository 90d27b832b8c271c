"""
Loguru setup shared by every process of the marketplace

- one bound logger (`custom_logger`) carrying the service context
- stdout always; an hourly rotated file under LOG_DIR when DEBUG is on
- standard-library logging (uvicorn, sqlalchemy, aiosqlite) routed into loguru
"""

from contextvars import ContextVar
from datetime import datetime, timezone
from enum import StrEnum
import logging
import os
import re
import sys
from typing import TYPE_CHECKING

from loguru import logger as loguru_logger


if TYPE_CHECKING:
    from loguru import Logger as LoguruLogger

from src.platform.config.core_setting import settings
from src.platform.logging.service_context import get_service_context


LOG_DIR = os.environ.get('TEST_LOG_DIR', str(settings.LOG_DIR))

# Any argument whose name contains one of these is masked
SENSITIVE_KEYWORDS = {
    'password',
    'secret',
    'new_value',
}
MASK = '********'

# Third-party loggers whose DEBUG chatter drowns the LoguruIO trail
QUIET_LOGGERS = ('aiosqlite', 'sqlalchemy.engine', 'sqlalchemy.pool', 'asyncio')

chain_start_time_var: ContextVar[float] = ContextVar('chain_start_time_var', default=0)
call_depth_var: ContextVar[int] = ContextVar('call_depth_var', default=0)


class ExtraField(StrEnum):
    SERVICE_CONTEXT = 'service_context'
    CHAIN_START_TIME = 'chain_start_time'
    CALL_TARGET = 'call_target'


# uvicorn access line: '127.0.0.1:50000 - "GET /api/product HTTP/1.1" 200'
_ACCESS_STATUS_PATTERN = re.compile(r'" (\d{3})\b')


def access_log_level(message: str) -> str | None:
    """Level for a uvicorn access line based on its status code, None for other messages"""
    match = _ACCESS_STATUS_PATTERN.search(message)
    if match is None or ' HTTP/' not in message:
        return None

    status_code = int(match.group(1))
    if status_code >= 500:
        return 'ERROR'
    if status_code in (401, 403):
        return 'WARNING'
    if status_code >= 400:
        return 'INFO'
    return 'SUCCESS'


def _bind_defaults() -> 'LoguruLogger':
    return loguru_logger.bind(
        **{
            ExtraField.SERVICE_CONTEXT: get_service_context(),
            ExtraField.CHAIN_START_TIME: '',
            ExtraField.CALL_TARGET: '',
        }
    )


class InterceptHandler(logging.Handler):
    def emit(self, record: logging.LogRecord) -> None:
        if record.levelno <= logging.DEBUG and record.name.startswith(QUIET_LOGGERS):
            return

        message = record.getMessage()
        level: str | int | None = access_log_level(message)
        if level is None:
            try:
                level = loguru_logger.level(record.levelname).name
            except ValueError:
                level = record.levelno

        # Find caller from where originated the logged message
        frame, depth = logging.currentframe(), 2
        while frame and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back  # type: ignore
            depth += 1

        custom_logger.opt(depth=depth, exception=record.exc_info).log(level, message)


io_log_format = ' | '.join(
    (
        f'<c>{{extra[{ExtraField.SERVICE_CONTEXT}]}}</>',
        '<lvl>{level:<8}</>',
        f'<c>{{file}}::{{function}}:{{line}}</>=><y>{{extra[{ExtraField.CALL_TARGET}]}}</>',
        '{message}',
        '<lk>{elapsed}</>',
        f'<lk>{{extra[{ExtraField.CHAIN_START_TIME}]:<18}}</>',
    )
)


def _log_filename() -> str:
    hour = datetime.now(timezone.utc).strftime('%Y-%m-%d_%H')
    return f'test_{hour}.log' if os.environ.get('TEST_LOG_DIR') else f'{hour}.log'


def _add_sinks(target: 'LoguruLogger', level: str) -> None:
    target.add(sys.stdout, format=io_log_format, level=level, enqueue=True)
    if settings.DEBUG:
        target.add(
            f'{LOG_DIR}/{_log_filename()}',
            format=io_log_format,
            rotation='1 hour',
            retention='7 days',
            compression='gz',
            enqueue=True,
            level=level,
        )


loguru_logger.remove()
custom_logger = _bind_defaults()
_add_sinks(custom_logger, 'DEBUG' if settings.DEBUG else 'INFO')

logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)
