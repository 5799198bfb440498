"""FastAPI server exposing the producer-facing relay WebSocket."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from collections.abc import Callable, Awaitable

import uvicorn
from dotenv import load_dotenv
from fastapi import FastAPI, WebSocket

from audio_relay.state import RuntimeDeps
from audio_relay.errors import MissingCredentialError
from audio_relay.runtime.logging import configure_logging
from audio_relay.runtime.dependencies import build_runtime_deps
from audio_relay.handlers.websocket.manager import handle_websocket_connection
from audio_relay.runtime.settings_loader import load_settings, load_websocket_settings

logger = logging.getLogger(__name__)

# Values already present in the environment win over the .env file.
load_dotenv(override=False)
configure_logging()

DepsBuilder = Callable[[], Awaitable[RuntimeDeps]]


def create_app(*, deps_builder: DepsBuilder | None = None, endpoint_path: str | None = None) -> FastAPI:
    build = deps_builder or build_runtime_deps
    path = endpoint_path or load_websocket_settings().endpoint_path

    @asynccontextmanager
    async def _lifespan(app: FastAPI):
        runtime_deps = await build()
        app.state.runtime_deps = runtime_deps
        logger.info("runtime: ready, relay endpoint %s", path)
        try:
            yield
        finally:
            deps = getattr(app.state, "runtime_deps", None)
            if deps is not None:
                await deps.shutdown()

    app = FastAPI(lifespan=_lifespan)

    @app.websocket(path)
    async def relay_endpoint(websocket: WebSocket) -> None:
        runtime_deps = getattr(app.state, "runtime_deps", None)
        if runtime_deps is None:
            raise RuntimeError("Runtime dependencies are not initialized")
        await handle_websocket_connection(websocket, runtime_deps)

    return app


app = create_app()


def main() -> None:
    try:
        settings = load_settings()
    except MissingCredentialError as exc:
        logger.error("refusing to start: %s", exc)
        raise SystemExit(1) from None

    logger.info(
        "relay listening on ws://%s:%s%s",
        settings.server.host,
        settings.server.port,
        settings.websocket.endpoint_path,
    )
    uvicorn.run(app, host=settings.server.host, port=settings.server.port)


__all__ = ["app", "create_app", "main"]


if __name__ == "__main__":
    main()
