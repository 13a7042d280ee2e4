"""FastAPI application factory."""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from tari_bridge import __version__
from tari_bridge.config import get_settings


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    settings = get_settings()

    app = FastAPI(
        title="Tari Bridge",
        description="Wallet request bridge for web origins",
        version=__version__,
        debug=settings.debug,
    )

    # Web origins call /rpc from the browser
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=False,
        allow_methods=["POST", "GET"],
        allow_headers=["*"],
    )

    from tari_bridge.api.routes import approvals, health, rpc

    app.include_router(health.router, tags=["Health"])
    app.include_router(rpc.router, tags=["RPC"])
    app.include_router(approvals.router)

    return app
