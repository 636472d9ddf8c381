"""Route incoming Telegram messages to static replies or the source pipeline."""

from config.messages import MessageCatalog
from orchestrator.core import SourcePipeline
from utils.logger import get_logger

from .client import TelegramClient, TelegramDeliveryError
from .formatting import format_outcome_message
from .types import TelegramMessage

logger = get_logger(__name__)

START_COMMAND = "/start"
HELP_COMMAND = "/help"


def parse_command(text: str | None) -> str | None:
    """First token of a slash-prefixed text, e.g. ``/help`` for ``/help me``."""
    if not text or not text.startswith("/"):
        return None
    return text.split()[0]


class TelegramUpdateHandler:
    def __init__(self, pipeline: SourcePipeline, client: TelegramClient, catalog: MessageCatalog):
        self.pipeline = pipeline
        self.client = client
        self.catalog = catalog

    async def handle_message(self, message: TelegramMessage) -> None:
        """Process one message end to end. Never raises."""
        if message.chat is None:
            logger.warning("Message without chat id ignored")
            return
        chat_id = message.chat.id

        command = parse_command(message.text)
        if command == START_COMMAND:
            await self._deliver(chat_id, self.catalog.greeting)
            return
        if command == HELP_COMMAND:
            await self._deliver(chat_id, self.catalog.help)
            return

        # Unknown commands are treated as ordinary text
        async def notify(stage: str) -> None:
            await self.client.send_message(chat_id, self.catalog.progress[stage])

        outcome = await self.pipeline.run(message.text, message.caption, notify=notify)
        await self._deliver(chat_id, format_outcome_message(outcome, self.catalog))

    async def _deliver(self, chat_id: int, text: str) -> None:
        try:
            await self.client.send_message(chat_id, text)
        except TelegramDeliveryError as e:
            logger.error(f"Failed to deliver message to chat {chat_id}: {e}")
