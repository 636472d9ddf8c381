"""Pydantic models for the subset of the Telegram Bot API update we consume."""

from pydantic import BaseModel, ConfigDict


class TelegramChat(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: int
    type: str | None = None
    title: str | None = None
    username: str | None = None


class TelegramMessage(BaseModel):
    model_config = ConfigDict(extra="ignore")

    message_id: int | None = None
    chat: TelegramChat | None = None
    text: str | None = None
    caption: str | None = None
    forward_from_chat: TelegramChat | None = None
    forward_from_message_id: int | None = None


class TelegramUpdate(BaseModel):
    model_config = ConfigDict(extra="ignore")

    update_id: int | None = None
    message: TelegramMessage | None = None
    edited_message: TelegramMessage | None = None
    callback_query: dict | None = None

    @property
    def effective_message(self) -> TelegramMessage | None:
        return self.message or self.edited_message
