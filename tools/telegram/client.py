"""Telegram Bot API client: message delivery and (unsupported) post extraction."""

import httpx

from utils.logger import get_logger

logger = get_logger(__name__)

# Bot API hard limit for sendMessage text
MAX_MESSAGE_LENGTH = 4096


class TelegramDeliveryError(Exception):
    """sendMessage failed (network, HTTP status, or ok=false)."""


class PostExtractionUnsupportedError(Exception):
    """The Bot API cannot read arbitrary channel posts."""


class TelegramClient:
    def __init__(
        self,
        bot_token: str | None,
        api_url: str = "https://api.telegram.org/bot",
        timeout_s: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """
        Args:
            bot_token: Bot token from @BotFather
            api_url: Bot API prefix; the token is appended directly
            timeout_s: Per-request timeout in seconds
            transport: Optional httpx transport (tests inject ``httpx.MockTransport``)
        """
        self.bot_token = bot_token
        self.api_url = api_url.rstrip("/")
        self.timeout_s = timeout_s
        self._transport = transport

    def _method_url(self, method: str) -> str:
        if not self.bot_token:
            raise TelegramDeliveryError("TELEGRAM_BOT_TOKEN is not set")
        return f"{self.api_url}{self.bot_token}/{method}"

    async def send_message(self, chat_id: int, text: str, parse_mode: str | None = None) -> dict:
        """
        Send a plain-text message to a chat.

        Raises:
            TelegramDeliveryError: If Telegram did not accept the message
        """
        if len(text) > MAX_MESSAGE_LENGTH:
            text = text[: MAX_MESSAGE_LENGTH - 3] + "..."

        body: dict = {"chat_id": chat_id, "text": text}
        if parse_mode:
            body["parse_mode"] = parse_mode

        url = self._method_url("sendMessage")
        try:
            async with httpx.AsyncClient(timeout=self.timeout_s, transport=self._transport) as client:
                response = await client.post(url, json=body)
        except httpx.HTTPError as e:
            logger.error(
                "Telegram sendMessage request failed",
                extra={"extra_fields": {"chat_id": chat_id, "error": str(e)}},
            )
            raise TelegramDeliveryError(f"Request failed: {e}") from e

        try:
            data = response.json()
        except ValueError:
            data = {"ok": False, "description": response.text[:200]}

        if response.status_code >= 300 or not data.get("ok"):
            logger.error(
                "Telegram sendMessage rejected",
                extra={
                    "extra_fields": {
                        "chat_id": chat_id,
                        "status_code": response.status_code,
                        "error_code": data.get("error_code"),
                        "description": data.get("description"),
                    }
                },
            )
            raise TelegramDeliveryError(
                f"Telegram API error: {data.get('error_code', response.status_code)} - {data.get('description')}"
            )

        return data

    def extract_post_text(self, url: str) -> str:
        """Reading channel posts needs a user session, which a bot does not have."""
        raise PostExtractionUnsupportedError(f"Post extraction is not supported: {url}")
