import logging
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from core.config import Settings, get_settings
from core.logging import setup_logging
from roster.connections import ConnectionManager
from roster.hub import RosterHub
from routes.api_v1 import api_v1_router
from routes.ws import router as ws_router

settings = get_settings()
setup_logging(settings)
logger = logging.getLogger(__name__)


def create_app(app_settings: Optional[Settings] = None) -> FastAPI:
    """Build the FastAPI app with a fresh hub (one authoritative store per app)."""
    app_settings = app_settings or settings
    app = FastAPI(title=app_settings.app_name)

    # CORS: single source of truth, defined before any routers.
    app.add_middleware(
        CORSMiddleware,
        allow_origins=app_settings.allowed_origins,
        allow_methods=["*"],
        allow_headers=["*"],
        allow_credentials=False,
    )

    connections = ConnectionManager()
    app.state.connections = connections
    app.state.hub = RosterHub(
        connections,
        default_season=app_settings.default_season,
        seed=app_settings.seed,
    )

    app.include_router(api_v1_router)
    app.include_router(ws_router)

    @app.on_event("startup")
    async def on_startup() -> None:
        """Application startup hook."""
        logger.info(
            "Roster hub ready: env=%s default_season=%s seeded=%s",
            app_settings.env,
            app_settings.default_season,
            "config" if app_settings.seed is not None else "entropy",
        )
        logger.info("Application startup complete")

    @app.on_event("shutdown")
    async def on_shutdown() -> None:
        """Application shutdown hook. Store contents are not persisted."""
        logger.info("Application shutdown complete: teams=%d", len(app.state.hub.store.teams))

    @app.get("/health")
    async def health() -> dict:
        """Simple health check endpoint."""
        return {"status": "ok"}

    return app


app = create_app(settings)
