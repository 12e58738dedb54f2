"""FastAPI application factory with lifespan management."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware

from geocoin.api.dependencies import set_ledger
from geocoin.api.routes import api_router
from geocoin.config import GameConfig
from geocoin.engine.ledger import TokenLedger, build_ledger
from geocoin.utils.logging import setup_logging

logger = logging.getLogger(__name__)


def create_app(config: GameConfig | None = None, ledger: TokenLedger | None = None) -> FastAPI:
    """Build and return the fully-configured FastAPI application.

    A prebuilt *ledger* may be supplied (tests do this); otherwise one is
    built from *config* when the app starts.
    """
    if config is None:
        config = ledger.config if ledger is not None else GameConfig()

    _config = config

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        setup_logging(_config.log_level, _config.log_file)
        set_ledger(ledger if ledger is not None else build_ledger(_config))
        logger.info("API server started — game ready.")
        yield
        set_ledger(None)
        logger.info("API server shutting down.")

    app = FastAPI(
        title="Geocoin Game Engine",
        description=(
            "Deterministic grid & token-economy engine for a location-based coin game.\n\n"
            "## API Groups\n\n"
            "- **Board** — Point-to-cell lookups and nearby cell enumeration\n"
            "- **Caches** — Cache placement, contents, collect / deposit, token home lookup\n"
            "- **Player** — Position, inventory, movement and positional sensor samples\n"
            "- **Control** — Reset and cache-set rebuild\n"
            "- **Config** — Read-only game configuration\n"
            "- **Events** — Recent game events\n"
        ),
        version="0.1.0",
        lifespan=lifespan,
    )

    # CORS — allow any origin in dev
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(RequestValidationError)
    async def validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
        # Rejected input may be NaN or Infinity, which strict JSON cannot echo back.
        detail = [{"loc": list(e["loc"]), "msg": e["msg"], "type": e["type"]} for e in exc.errors()]
        return JSONResponse(status_code=422, content={"detail": detail})

    app.include_router(api_router)

    return app
