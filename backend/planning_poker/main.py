"""FastAPI application entrypoint for planning poker rooms."""

from __future__ import annotations

import asyncio
from contextlib import asynccontextmanager
import logging

from fastapi import FastAPI
from fastapi import Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
import uvicorn

from planning_poker.api.errors import handle_http_exception
from planning_poker.api.routers.rooms import router as rooms_router
from planning_poker.api.routers.scales import router as scales_router
from planning_poker.core.config import Settings
from planning_poker.core.config import load_settings
from planning_poker.core.log import configure_logging
from planning_poker.rooms.reaper import reclaim_idle_rooms_loop
from planning_poker.rooms.reaper import stop_task
from planning_poker.rooms.registry import RoomStore

logger = logging.getLogger(__name__)


def build_room_store(settings: Settings) -> RoomStore:
    return RoomStore(
        room_idle_seconds=settings.poker_room_idle_seconds,
        reject_votes_after_reveal=settings.poker_reject_votes_after_reveal,
    )


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the app with its own room store; the lifespan runs the idle-room sweep."""
    app_settings = settings if settings is not None else load_settings()
    configure_logging(app_settings.poker_log_level)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        sweeper = None
        if app_settings.poker_room_idle_seconds > 0:
            sweeper = asyncio.create_task(
                reclaim_idle_rooms_loop(
                    app.state.room_store,
                    app_settings.poker_room_sweep_interval_seconds,
                )
            )
        logger.info("Planning poker started (env=%s)", app_settings.poker_app_env)
        try:
            yield
        finally:
            if sweeper is not None:
                await stop_task(sweeper)

    app = FastAPI(title="Planning Poker", lifespan=lifespan)
    app.state.settings = app_settings
    app.state.room_store = build_room_store(app_settings)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=app_settings.cors_allow_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_exception_route(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        """Adapter used by FastAPI exception handling."""
        return await handle_http_exception(request, exc)

    app.include_router(rooms_router)
    app.include_router(scales_router)
    return app


app = create_app()


def run() -> None:
    settings = app.state.settings
    uvicorn.run(app, host=settings.poker_app_host, port=settings.poker_app_port)


__all__ = [
    "Settings",
    "app",
    "build_room_store",
    "create_app",
    "run",
]
