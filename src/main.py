"""
Production FastAPI Application

Ticket sale contract served over HTTP on top of the in-memory ledger host.
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
    """Manage application lifespan: startup and shutdown."""
    Logger.base.info('🚀 [Ticket Sale] Starting up...')

    # Wire dependency injection for all modules
    container.wire(modules=WIRE_MODULES)
    Logger.base.info('🔌 [Ticket Sale] Dependency injection wired')

    setup()
    ledger_host = container.ledger_host()
    Logger.base.info(
        f'⛓️  [Ticket Sale] Ledger host ready at height {ledger_host.height}, '
        f'contract account {ledger_host.contract_address}'
    )

    Logger.base.info('✅ [Ticket Sale] Startup complete')

    yield

    Logger.base.info('🛑 [Ticket Sale] Shutting down...')
    cleanup()
    container.unwire()
    Logger.base.info('👋 [Ticket Sale] Shutdown complete')


app = create_app(lifespan=lifespan)


@app.get('/')
async def root() -> RedirectResponse:
    return RedirectResponse(url='/docs')
