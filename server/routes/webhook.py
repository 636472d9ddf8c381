"""Telegram webhook: acknowledge fast, process in the background."""

from datetime import datetime, timezone

from fastapi import APIRouter, BackgroundTasks, Depends, Request, status
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from server.dependencies import get_update_handler
from server.schemas.responses import WebhookAckDTO, WebhookStatusDTO
from server.utils import redact_sensitive_headers
from tools.telegram.handlers import TelegramUpdateHandler
from tools.telegram.types import TelegramUpdate
from utils.logger import get_logger

logger = get_logger(__name__)

router = APIRouter(prefix="/api", tags=["Webhook"])


def _reject(error: str) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=WebhookAckDTO(ok=False, error=error).model_dump(exclude_none=True),
    )


@router.get("/webhook", response_model=WebhookStatusDTO)
async def webhook_status():
    return WebhookStatusDTO(
        status="ok",
        message="FindOrigin bot webhook is running",
        timestamp=datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
    )


@router.post("/webhook", response_model=WebhookAckDTO, response_model_exclude_none=True)
async def receive_update(
    http_request: Request,
    background_tasks: BackgroundTasks,
    handler: TelegramUpdateHandler = Depends(get_update_handler),
):
    request_id = getattr(http_request.state, "request_id", "unknown")

    try:
        payload = await http_request.json()
    except ValueError:
        payload = None

    if not isinstance(payload, dict):
        logger.warning(
            "Empty or invalid webhook body",
            extra={
                "extra_fields": {
                    "request_id": request_id,
                    "headers": redact_sensitive_headers(dict(http_request.headers)),
                }
            },
        )
        return _reject("Invalid update")

    try:
        update = TelegramUpdate.model_validate(payload)
    except ValidationError as e:
        logger.warning(f"Webhook update failed validation: {e.error_count()} errors")
        return _reject("Invalid update")

    message = update.effective_message
    if message is None:
        logger.info(f"Update {update.update_id} has no message, skipping")
        return WebhookAckDTO(ok=True, message="Update received but not processed")

    if message.chat is None:
        logger.warning(f"Update {update.update_id} has a message without chat id")
        return _reject("No chat ID")

    logger.info(
        "Webhook message accepted",
        extra={"extra_fields": {"request_id": request_id, "update_id": update.update_id, "chat_id": message.chat.id}},
    )
    background_tasks.add_task(handler.handle_message, message)
    return WebhookAckDTO(ok=True)
