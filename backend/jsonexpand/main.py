"""jsonexpand API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly, health before the catch-all `/{name}` routes
    - Global error handlers map JsonExpandError → structured JSON responses
    - CORS configured from settings (not hardcoded)
    - Store loaded on startup via lifespan context manager into app.state.store
    - Nested expansion runs as a post-processing middleware after routing

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - Three error handler layers: JsonExpandError (domain), RequestValidationError
      (Pydantic), Exception (catch-all) — never leaks internal details
    - Run with `uvicorn jsonexpand.main:app`
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from jsonexpand.api.error_handlers import register_error_handlers
from jsonexpand.api.expand_middleware import register_expand_middleware
from jsonexpand.api.routes import health, resources
from jsonexpand.config import get_settings
from jsonexpand.infrastructure.json_store import JsonStore
from jsonexpand.infrastructure.observability import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    app.state.store = JsonStore.from_file(
        settings.db_path, persist=settings.db_persist,
    )
    logger.info(
        "jsonexpand API started",
        extra={"path": settings.db_path},
    )
    yield
    logger.info("jsonexpand API shutting down")


app = FastAPI(
    title="jsonexpand API", version="1.0.0", lifespan=lifespan,
)

# CORS — configured from settings, not hardcoded
settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_expand_middleware(app)

# Routes — explicit registration, health first
app.include_router(health.router)
app.include_router(resources.router)

register_error_handlers(app)
