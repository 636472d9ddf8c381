"""FastAPI application factory."""

import os
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from config.config import Config
from config.messages import MessageCatalog
from orchestrator.factory import create_pipeline
from server.middleware import RequestIDMiddleware
from server.routes import health, search, webhook
from tools.telegram.client import TelegramClient
from tools.telegram.handlers import TelegramUpdateHandler
from utils.logger import get_logger

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan event handler for startup/shutdown logic."""
    config: Config = app.state.config
    logger.info(f"FastAPI server starting up ({config.get_provider_info()})")

    missing = config.missing_keys()
    if not config.TELEGRAM_BOT_TOKEN:
        missing.append("TELEGRAM_BOT_TOKEN")
    if missing:
        logger.warning(f"Missing environment variables: {missing}")

    yield

    logger.info("FastAPI server shutting down")


def create_app(config: Config | None = None, catalog: MessageCatalog | None = None) -> FastAPI:
    """Factory function to create FastAPI application."""
    config = config or Config()
    catalog = catalog or MessageCatalog.from_yaml()

    app = FastAPI(
        title="FindOrigin API",
        description="Finds and ranks the likely web sources of a piece of text",
        version="1.0.0",
        lifespan=lifespan,
    )

    telegram_client = TelegramClient(
        bot_token=config.TELEGRAM_BOT_TOKEN,
        api_url=config.TELEGRAM_API_URL,
        timeout_s=config.PROVIDER_TIMEOUT_S,
    )
    pipeline = create_pipeline(config, post_extractor=telegram_client.extract_post_text)

    app.state.config = config
    app.state.catalog = catalog
    app.state.pipeline = pipeline
    app.state.update_handler = TelegramUpdateHandler(pipeline, telegram_client, catalog)

    app.add_middleware(RequestIDMiddleware)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
    )

    # API routes first so /api/* and /health take precedence over static files
    app.include_router(health.router)
    app.include_router(search.router)
    app.include_router(webhook.router)

    # Serve the web form from the /frontend directory at root path
    frontend_dir = os.path.join(os.path.dirname(os.path.dirname(__file__)), "frontend")
    if os.path.isdir(frontend_dir):
        app.mount("/", StaticFiles(directory=frontend_dir, html=True), name="frontend")
    else:
        logger.warning(f"Frontend directory not found at {frontend_dir}; skipping static mount")

    return app
