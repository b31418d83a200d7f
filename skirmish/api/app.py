"""FastAPI application factory with lifespan management."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from skirmish.api.dependencies import set_engine_manager
from skirmish.api.engine_manager import EngineManager
from skirmish.api.routes import api_router
from skirmish.config import CombatConfig
from skirmish.utils.logging import setup_logging

logger = logging.getLogger(__name__)


def create_app(config: CombatConfig | None = None, autopilot: bool = False, autostart: bool = True) -> FastAPI:
    """Build and return the fully-configured FastAPI application."""
    if config is None:
        config = CombatConfig()

    _config = config

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        setup_logging(_config.log_level)
        manager = EngineManager(_config, autopilot=autopilot)
        set_engine_manager(manager)
        if autostart:
            manager.start()
        logger.info("API server started — session %s.", "running" if autostart else "ready")
        yield
        manager.stop()
        set_engine_manager(None)
        logger.info("API server shutting down.")

    app = FastAPI(
        title="Skirmish Combat Core",
        description=(
            "Side-scroller combat simulation — local inspection and control API.\n\n"
            "## API Groups\n\n"
            "- **State** — Live session state: player, enemies, projectiles, inventory, events\n"
            "- **Control** — Session lifecycle: start, pause, resume, step, reset\n"
            "- **Input** — Held player intent and autopilot toggle\n"
            "- **Inventory** — Use or discard the item in a slot\n"
            "- **Config** — Read-only combat configuration\n"
        ),
        version="0.1.0",
        lifespan=lifespan,
        openapi_tags=[
            {"name": "State", "description": "Live session state and the combat event feed."},
            {"name": "Control", "description": "Session lifecycle controls: start, pause, resume, single-step, and reset."},
            {"name": "Input", "description": "Player command held until replaced; optional autopilot."},
            {"name": "Inventory", "description": "Potion use (cooldown-gated) and item discard by slot index."},
            {"name": "Config", "description": "Read-only combat configuration parameters."},
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
