"""
Production FastAPI Application

Serve with: granian --interface asgi src.main:app
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.responses import RedirectResponse

from src.platform.app_factory import create_app
from src.platform.config.di import container
from src.platform.config.wire_modules import WIRE_MODULES
from src.platform.database.orm_db_setting import create_db_and_tables, dispose_engine
from src.platform.logging.loguru_io import Logger


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Manage application lifespan: startup and shutdown."""
    Logger.base.info('🚀 [Bus Reservation] Starting up...')

    container.wire(modules=WIRE_MODULES)
    Logger.base.info('🔌 [Bus Reservation] Dependency injection wired')

    await create_db_and_tables()
    Logger.base.info('🗄️  [Bus Reservation] Database tables ready')

    Logger.base.info('✅ [Bus Reservation] Ready to serve requests')

    yield

    Logger.base.info('🛑 [Bus Reservation] Shutting down...')

    # Observers see end-of-stream; the next startup gets a fresh broadcaster
    await container.seat_update_broadcaster().aclose()
    container.seat_update_broadcaster.reset()
    Logger.base.info('📡 [Bus Reservation] Seat update broadcaster closed')

    await dispose_engine()
    Logger.base.info('🗄️  [Bus Reservation] Database engine disposed')

    container.unwire()

    Logger.base.info('👋 [Bus Reservation] Shutdown complete')


app = create_app(lifespan=lifespan)


@app.get('/')
async def root() -> RedirectResponse:
    """Root endpoint - redirect to docs."""
    return RedirectResponse(url='/docs')
