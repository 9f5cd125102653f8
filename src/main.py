"""
Production FastAPI Application

Loads (or opens) the ledger once at startup and shares it with every request.
Run with: granian --interface asgi src.main:app
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from dependency_injector import providers
from fastapi import FastAPI

from src.platform.app_factory import create_app
from src.platform.config.di import container
from src.platform.config.wire_modules import WIRE_MODULES
from src.platform.logging.loguru_io import Logger
from src.service.ticketing.app.command.init_ledger_use_case import InitLedgerUseCase


# Upper bound on how long shutdown waits for queued confirmations
CONFIRMATION_DRAIN_TIMEOUT_SECONDS = 5.0


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    Logger.base.info('🚀 [Ticketing Service] Starting up...')

    container.wire(modules=WIRE_MODULES)
    Logger.base.info('🔌 [Ticketing Service] Dependency injection wired')

    # A corrupt snapshot raises here and aborts startup
    config = container.config_service()
    ledger = InitLedgerUseCase(snapshot_repo=container.ledger_snapshot_repo()).execute(
        name=config.DEFAULT_CONFERENCE_NAME, total_tickets=config.DEFAULT_TOTAL_TICKETS
    )
    container.ledger.override(providers.Object(ledger))
    Logger.base.info(f'🎟️ [Ticketing Service] Ledger ready: {ledger!r}')

    yield

    Logger.base.info('🛑 [Ticketing Service] Shutting down...')
    container.booking_notifier().join_pending(timeout=CONFIRMATION_DRAIN_TIMEOUT_SECONDS)
    container.ledger.reset_override()
    container.unwire()
    Logger.base.info('👋 [Ticketing Service] Shutdown complete')


app = create_app(lifespan=lifespan)
