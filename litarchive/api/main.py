import logging
import sys
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Any

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from litarchive import __version__
from litarchive.adapters.sqlite.migrator import SQLiteMigrator
from litarchive.api.deps import get_settings
from litarchive.api.errors import register_error_handlers
from litarchive.rules.loader import load_rules

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler for startup/shutdown."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    settings = get_settings()

    # Load rules and migrate on startup (fail-fast)
    try:
        load_rules(settings.rules_path)
        logger.info("Rules loaded from %s", settings.rules_path)
        settings.data_dir.mkdir(parents=True, exist_ok=True)
        applied = SQLiteMigrator(settings.db_path).run_migrations()
        logger.info("Database ready at %s (%d migrations applied)", settings.db_path, len(applied))
    except Exception:
        logger.critical("Startup failed", exc_info=True)
        sys.exit(1)

    yield


app = FastAPI(
    title="Literary Archive API",
    version=__version__,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)

register_error_handlers(app)

# --- Routers ---
from litarchive.api.routes import admin_content, moderation, public, submit  # noqa: E402

app.include_router(admin_content.router, prefix="/api/admin/content", tags=["Admin Content"])
app.include_router(moderation.router, prefix="/api/admin/moderation", tags=["Moderation"])
app.include_router(submit.router, prefix="/api/submit", tags=["Submissions"])
app.include_router(public.router, prefix="/api/public", tags=["Public"])


# CORS (Allow Frontend)
origins = [
    "http://localhost:3000",
    "http://127.0.0.1:3000",
]

app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/health")
def health_check() -> dict[str, Any]:
    """Health check endpoint."""
    return {"status": "ok", "service": "api"}
