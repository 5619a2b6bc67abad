"""Membership Minter API: FastAPI application entry point.

Invariants:
    - Routes registered explicitly, one router per concern
    - Global error handlers map MinterError to structured JSON responses
    - CORS configured from settings
    - Lifespan owns startup order: logging, database, runtime (restore, block polling)
      and the reverse on shutdown
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from minter.api.error_handlers import register_error_handlers
from minter.api.routes import balances, contract_calls, health, tokens
from minter.config import get_settings
from minter.infrastructure.database import init_db
from minter.infrastructure.observability import setup_logging
from minter.runtime import build_runtime

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    db = init_db(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )
    if settings.database_url.startswith("sqlite"):
        await db.create_all()

    runtime = build_runtime(settings, db)
    app.state.runtime = runtime
    await runtime.start()
    logger.info("Membership minter API started")
    yield
    logger.info("Membership minter API shutting down")
    await runtime.stop()
    await db.dispose()


app = FastAPI(
    title="Membership Minter API", version="0.1.0", lifespan=lifespan,
)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(balances.router)
app.include_router(contract_calls.router)
app.include_router(tokens.router)

register_error_handlers(app)
