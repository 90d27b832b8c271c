"""
Marketplace Service - Main Application
Handles registration, authentication and the product catalog.

Run with: uvicorn src.service.marketplace.main:app
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI

from src.platform.app_factory import create_app
from src.platform.config.di import cleanup, container, setup
from src.platform.config.wire_modules import WIRE_MODULES
from src.platform.logging.loguru_io import Logger


@asynccontextmanager
async def lifespan(_app: FastAPI):
    """Manage application lifespan: startup and shutdown"""
    Logger.base.info('🚀 [Marketplace] Starting up...')

    setup()
    container.wire(modules=WIRE_MODULES)
    Logger.base.info('🔌 [Marketplace] Dependency injection wired')

    database = container.database()
    await database.create_tables()

    yield

    Logger.base.info('🛑 [Marketplace] Shutting down...')
    await database.dispose()
    container.unwire()
    cleanup()
    Logger.base.info('👋 [Marketplace] Shutdown complete')


app = create_app(lifespan=lifespan)
