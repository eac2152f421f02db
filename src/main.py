"""
Scanner FastAPI Application

Run with: granian src.main:app --interface asgi --port 8100
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.responses import RedirectResponse

from src.platform.app_factory import create_app
from src.platform.config.di import cleanup, container, setup
from src.platform.config.wire_modules import WIRE_MODULES
from src.platform.logging.loguru_io import Logger


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    Logger.base.info('🚀 [Scanner] Starting up...')

    setup()
    container.wire(modules=WIRE_MODULES)
    Logger.base.info('🔌 [Scanner] Dependency injection wired')

    settings = container.config_service()
    Logger.base.info(f'📡 [Scanner] Ticket store at {settings.SCANNER_API_BASE_URL}')

    yield

    Logger.base.info('🛑 [Scanner] Shutting down...')
    await cleanup()
    container.unwire()
    Logger.base.info('👋 [Scanner] Shutdown complete')


app = create_app(lifespan=lifespan)


@app.get('/')
async def root() -> RedirectResponse:
    """Root endpoint - redirect to docs."""
    return RedirectResponse(url='/docs')
