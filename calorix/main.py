"""Calorix - Entry point.

Serves the MCP tool surface over HTTP on the local machine and runs the
integration auto-sync timer for the lifetime of the app.
"""

import logging
import os
from contextlib import asynccontextmanager

import uvicorn
from starlette.applications import Starlette
from starlette.middleware import Middleware
from starlette.middleware.cors import CORSMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse
from starlette.routing import Route, Mount

from .shell.integrations import AutoSyncer
from .shell.mcp_server import mcp, get_container


logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


# ==================== Route Handlers ====================


async def health_check(request: Request) -> JSONResponse:
    """Liveness probe with a short state digest."""
    state = get_container().state
    return JSONResponse({
        "status": "healthy",
        "service": "calorix",
        "onboarded": state.user.onboarding_completed,
        "auto_sync": get_container().has_active_integrations(),
    })


# ==================== Create ASGI App ====================


def create_app() -> Starlette:
    """Create the Starlette application with MCP at root.

    The MCP streamable_http_app() handles /mcp/ internally when mounted at
    root. Its lifespan is entered first; the auto-syncer runs inside it.
    """
    mcp_app = mcp.streamable_http_app()

    @asynccontextmanager
    async def lifespan(app: Starlette):
        async with mcp_app.router.lifespan_context(app):
            syncer = AutoSyncer(get_container())
            syncer.start()
            try:
                yield
            finally:
                await syncer.stop()

    routes = [
        Route("/health", health_check, methods=["GET"]),
        Mount("/", app=mcp_app),
    ]

    return Starlette(
        routes=routes,
        middleware=[
            Middleware(
                CORSMiddleware,
                allow_origins=["http://localhost:5173", "http://127.0.0.1:5173"],
                allow_methods=["GET", "POST", "OPTIONS"],
                allow_headers=["*"],
            ),
        ],
        lifespan=lifespan,
    )


def main() -> None:
    """Run the server."""
    port = int(os.environ.get("PORT", 8080))
    host = os.environ.get("HOST", "127.0.0.1")

    logger.info("Starting Calorix on %s:%d", host, port)

    uvicorn.run(create_app(), host=host, port=port)


if __name__ == "__main__":
    main()
