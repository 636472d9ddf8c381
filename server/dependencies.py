"""FastAPI dependencies giving routes access to the per-process pipeline objects.

Everything is built once in ``create_app`` and stored on ``app.state``; tests
swap any of them through ``app.dependency_overrides``.
"""

from fastapi import Request

from config.config import Config
from config.messages import MessageCatalog
from orchestrator.core import SourcePipeline
from tools.telegram.handlers import TelegramUpdateHandler


def get_config(request: Request) -> Config:
    return request.app.state.config


def get_catalog(request: Request) -> MessageCatalog:
    return request.app.state.catalog


def get_pipeline(request: Request) -> SourcePipeline:
    return request.app.state.pipeline


def get_update_handler(request: Request) -> TelegramUpdateHandler:
    return request.app.state.update_handler
