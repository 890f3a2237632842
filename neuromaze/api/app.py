"""FastAPI application factory with lifespan management."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncIterator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from neuromaze.api.dependencies import set_engine_manager
from neuromaze.api.engine_manager import EngineManager
from neuromaze.api.routes import api_router
from neuromaze.config import GameConfig
from neuromaze.utils.logging import setup_logging

logger = logging.getLogger(__name__)

FRONTEND_DIR = Path(__file__).resolve().parent.parent.parent / "frontend"
STATIC_DIR = FRONTEND_DIR / "dist"


def create_app(config: GameConfig | None = None) -> FastAPI:
    """Build and return the fully-configured FastAPI application."""
    if config is None:
        config = GameConfig()

    _config = config

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        setup_logging(_config.log_level, _config.log_file)
        manager = EngineManager(_config)
        set_engine_manager(manager)
        manager.start()
        logger.info("API server started, game running.")
        yield
        manager.stop()
        logger.info("API server shutting down.")

    app = FastAPI(
        title="NeuroMaze Engine",
        description=(
            "Adaptive maze-chase game core — real-time API for renderers and input.\n\n"
            "## API Groups\n\n"
            "- **State** — Live game state: player, enemies, powerups, feedback events\n"
            "- **Map** — Current maze layout (changes when the maze adapts)\n"
            "- **Input** — Player moves and the special ability\n"
            "- **Control** — Lifecycle: start, pause, resume, step, reset, restart\n"
            "- **Config** — Read-only game configuration\n"
        ),
        version="0.1.0",
        lifespan=lifespan,
        openapi_tags=[
            {"name": "State", "description": "Live state polled by the renderer, plus tile-flip/pickup/damage/level events."},
            {"name": "Map", "description": "Tile kinds and adaptability weights. Re-fetch after a tile_flip or level_start event."},
            {"name": "Input", "description": "Discrete directional moves and the area-push ability."},
            {"name": "Control", "description": "Lifecycle controls: start, pause, resume, single-step, reset, restart."},
            {"name": "Config", "description": "Read-only game configuration (grid size, cadences, damage, etc.)."},
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

    # Serve a built frontend if one sits next to the package
    if STATIC_DIR.exists():
        app.mount("/", StaticFiles(directory=str(STATIC_DIR), html=True), name="frontend")

    return app
