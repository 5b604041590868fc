"""FastAPI entrypoint for the backend.

Keep this file boring and obvious:
- create the app (optionally with an injected store)
- include the API router(s)
- configure CORS

Run locally:
  uvicorn backend.main:app --reload --host 0.0.0.0 --port 4000
or:
  python -m backend.main
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import Optional
import time

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .api.feedback import router as feedback_router
from .api.health import router as health_router
from .core.config import Settings, get_settings
from .core.errors import PersistenceError
from .core.logging import get_logger, setup_logging
from .db.feedback_store import BaseFeedbackStore, build_store
from .observability.otel import setup_otel

logger = get_logger(__name__)


def _wait_for_store(store: BaseFeedbackStore, settings: Settings) -> None:
    """Block until the store answers a ping or the timeout expires."""
    deadline = time.monotonic() + settings.store_wait_seconds
    last_error = None
    while True:
        try:
            store.ping()
            return
        except PersistenceError as exc:
            last_error = exc
            if time.monotonic() >= deadline:
                break
            logger.info("Waiting for feedback store to be ready...")
            time.sleep(2)
    raise RuntimeError("Feedback store not ready before timeout") from last_error


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings: Settings = app.state.settings
    owns_store = app.state.store is None
    if owns_store:
        app.state.store = build_store(settings)

    try:
        _wait_for_store(app.state.store, settings)
        logger.info("Feedback store ready (backend=%s)", type(app.state.store).__name__)
        yield
    finally:
        if owns_store:
            app.state.store.close()
            app.state.store = None


def create_app(settings: Optional[Settings] = None, store: Optional[BaseFeedbackStore] = None) -> FastAPI:
    """Build the API.

    When `store` is given it is used as-is and never closed by the app;
    otherwise the store selected by settings is created on startup.
    """
    settings = settings or get_settings()
    setup_logging(settings=settings)

    app = FastAPI(title=settings.app_name, lifespan=lifespan)
    app.state.settings = settings
    app.state.store = store

    # CORS: requests without an Origin header (curl, server-to-server) are never blocked.
    allow_origins = settings.allowed_origins()
    app.add_middleware(
        CORSMiddleware,
        allow_origins=allow_origins,
        allow_credentials=False,
        allow_methods=["GET", "POST"],
        allow_headers=["Content-Type"],
    )

    setup_otel(app, instrument_mongo=store is None and settings.feedback_store == "mongodb")

    # API routes
    app.include_router(health_router, tags=["health"])
    app.include_router(feedback_router, prefix="/api", tags=["feedback"])

    logger.info(
        "Backend created (cors_origins=%s, store=%s)",
        allow_origins,
        type(store).__name__ if store is not None else settings.feedback_store,
    )
    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    _settings = get_settings()
    uvicorn.run("backend.main:app", host=_settings.host, port=_settings.port)
