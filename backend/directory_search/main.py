"""FastAPI application factory."""

import logging
from contextlib import asynccontextmanager
from collections.abc import AsyncIterator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from directory_search.config import get_settings
from directory_search.infrastructure.database import Base, engine
from directory_search.infrastructure.keywords.yaml_keyword_loader import get_keyword_dictionaries
from directory_search.infrastructure.logging.log_config import setup_logging
from directory_search.presentation.api.router import router as api_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan: logging, tables, keyword dictionaries."""
    settings = get_settings()
    setup_logging()

    # 1. Create directory tables when missing
    try:
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
    except Exception:
        # Searches still answer (with empty results) while the database is down
        logger.exception("Could not create directory tables, continuing without them")

    # 2. Load keyword dictionaries once; a malformed file must stop startup
    dictionaries = get_keyword_dictionaries()
    logger.info(
        "Smart search ready: env=%s timeout=%.1fs industries=%d locations=%d company_sizes=%d",
        settings.app_env,
        settings.search_timeout_seconds,
        len(dictionaries.industries),
        len(dictionaries.locations),
        len(dictionaries.company_sizes),
    )

    yield

    await engine.dispose()


def create_app() -> FastAPI:
    """Factory function that builds and configures the FastAPI application."""
    settings = get_settings()

    app = FastAPI(
        title=settings.app_title,
        version=settings.app_version,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(api_router)

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "directory_search.main:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
    )
