import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Any

from fastapi import FastAPI

from chasm import __version__
from chasm.api.deps import close_transports, get_settings
from chasm.app_shell.config import configure_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler for startup/shutdown."""
    # Load config on startup (fail-fast)
    settings = get_settings()
    configure_logging(settings.log_level)
    logger.info(
        "Publishing to %s with content root %r", settings.github_api_url, settings.content_root
    )

    yield

    close_transports()


app = FastAPI(
    title="Chasm Publishing API",
    version=__version__,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)

# --- Routers ---
from chasm.api.routes import publish  # noqa: E402

app.include_router(publish.router, tags=["Publish"])


@app.get("/health")
def health_check() -> dict[str, Any]:
    """Health check endpoint."""
    return {"status": "ok", "service": "api"}
