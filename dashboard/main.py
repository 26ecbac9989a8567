"""
Dashboard Main — FastAPI application.

Single entry point for the analytics API. Each request pulls one record
snapshot and derives:
  [Daily Aggregator] → [Report Query]   [Performance]   [Workload] → (Export)
"""

from __future__ import annotations

from contextlib import asynccontextmanager

from fastapi import FastAPI
import structlog

from api.endpoints import router
from api.middleware import RequestIDMiddleware
from config.settings import get_settings
from dashboard.logger import configure_logging
from db.models import init_db

logger = structlog.get_logger()
settings = get_settings()


# ── Lifespan ──────────────────────────────────────────────────────────────────

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup / shutdown lifecycle."""
    configure_logging(settings.log_level, json_logs=not settings.debug)
    logger.info("starting_up", app=settings.app_name, version=settings.app_version)
    await init_db()
    yield
    logger.info("shutting_down")


# ── App ───────────────────────────────────────────────────────────────────────

app = FastAPI(
    title="Agent Insights",
    description="Operational analytics over contact-center agents and interactions.",
    version=settings.app_version,
    lifespan=lifespan,
)

# Middleware
app.add_middleware(RequestIDMiddleware)

# Routers
app.include_router(router)


# ── Uvicorn entry point ──────────────────────────────────────────────────────

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "dashboard.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
        workers=settings.workers,
    )
