"""FastAPI application factory."""

from __future__ import annotations

import logging
from datetime import datetime, timezone

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from . import __version__
from .config import get_allowed_origins
from .routes.runs import router as runs_router

logger = logging.getLogger(__name__)


def create_app() -> FastAPI:
    allowed_origins = get_allowed_origins()

    app = FastAPI(
        title="Actions Prune",
        version=__version__,
        description="Select and delete GitHub Actions workflow runs",
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=allowed_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/health")
    async def health() -> dict[str, str]:
        return {"status": "ok", "timestamp": datetime.now(timezone.utc).isoformat()}

    app.include_router(runs_router, prefix="/api")

    logger.info("Application created", extra={"allowed_origins": allowed_origins})
    return app
