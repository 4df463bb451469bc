"""FastAPI application factory."""

from __future__ import annotations

from contextlib import asynccontextmanager

from fastapi import FastAPI

from snake_relay.config import RelayConfig
from snake_relay.server.rooms import RoomRegistry
from snake_relay.server.routes import router
from snake_relay.server.websocket import ws_router


def create_app(config: RelayConfig | None = None) -> FastAPI:
    """Build and return the FastAPI application."""
    config = config if config is not None else RelayConfig()

    @asynccontextmanager
    async def _lifespan(app: FastAPI):
        app.state.room_registry = RoomRegistry(config)
        yield
        await app.state.room_registry.cleanup()

    app = FastAPI(
        title="Snake Relay", version="0.1.0", lifespan=_lifespan,
    )
    app.include_router(router)
    app.include_router(ws_router)
    return app
