"""FastAPI application entry point."""
from contextlib import asynccontextmanager
from collections.abc import AsyncGenerator

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from src.api.routes import health, wizard
from src.config import configure_logging, settings

logger = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    logger.info(
        "listing_wizard_starting",
        marketplace_tabs=[t.value for t in settings.marketplace_tabs],
        strict_tab_sequence=settings.strict_tab_sequence,
    )
    yield
    logger.info("listing_wizard_stopping")


def create_app() -> FastAPI:
    configure_logging(settings.log_level)
    app = FastAPI(
        title="Listing Wizard",
        description="Sequencing and persistence flow for the marketplace listing wizard.",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(health.router)
    app.include_router(wizard.router)

    return app


app = create_app()
