"""
Service context extraction for logging.

Identifies the emitting process so log lines from several workers can be
told apart once collected in one place.
"""

from functools import lru_cache
import os

from src.platform.config.core_setting import settings


@lru_cache(maxsize=1)
def get_service_context() -> str:
    return f'{settings.SERVICE_NAME}@{settings.DEPLOY_ENV}:{os.getpid()}'
