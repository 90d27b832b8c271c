from contextlib import asynccontextmanager
from typing import AsyncGenerator

from sqlalchemy.exc import SQLAlchemyError

from src.platform.exception.exceptions import StorageError
from src.platform.logging.loguru_io import Logger


@asynccontextmanager
async def storage_error_guard(operation: str) -> AsyncGenerator[None, None]:
    """Re-raise any SQLAlchemy failure as StorageError, keeping the original as __cause__"""
    try:
        yield
    except SQLAlchemyError as e:
        Logger.base.error(f'💥 [DB] {operation} failed: {type(e).__name__}: {e}')
        raise StorageError(f'Storage operation failed: {operation}') from e
