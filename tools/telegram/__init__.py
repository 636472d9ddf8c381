"""Telegram chat-bot transport for FindOrigin."""

from .client import PostExtractionUnsupportedError, TelegramClient, TelegramDeliveryError
from .handlers import TelegramUpdateHandler
from .types import TelegramChat, TelegramMessage, TelegramUpdate

__all__ = [
    "PostExtractionUnsupportedError",
    "TelegramChat",
    "TelegramClient",
    "TelegramDeliveryError",
    "TelegramMessage",
    "TelegramUpdate",
    "TelegramUpdateHandler",
]
