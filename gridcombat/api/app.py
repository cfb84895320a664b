"""FastAPI application factory with lifespan management."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from gridcombat import __version__
from gridcombat.api.dependencies import set_config
from gridcombat.api.routes import api_router
from gridcombat.config import CombatConfig
from gridcombat.utils.logging import setup_logging

logger = logging.getLogger(__name__)


def create_app(config: CombatConfig | None = None) -> FastAPI:
    """Build and return the fully-configured FastAPI application."""
    if config is None:
        config = CombatConfig()

    _config = config

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        setup_logging(_config.log_level)
        set_config(_config)
        logger.info("API server started: combat engine ready.")
        yield
        logger.info("API server shutting down.")

    app = FastAPI(
        title="Grid Combat Engine",
        description=(
            "Deterministic turn-based Goblins vs. Elves combat.\n\n"
            "## API Groups\n\n"
            "- **Combat**: run a scenario to completion, or search the minimal elf attack boost\n"
            "- **Config**: read-only engine configuration\n"
        ),
        version=__version__,
        lifespan=lifespan,
        openapi_tags=[
            {"name": "Combat", "description": "Run a scenario and get rounds, remaining hit points and the outcome."},
            {"name": "Config", "description": "Read-only combat configuration (unit defaults, round limit, boost search)."},
        ],
    )

    # CORS: allow any origin in dev
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(api_router)

    return app
