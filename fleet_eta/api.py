"""HTTP surface: ETA endpoint, health check and Telegram webhook."""

import logging
from typing import Any

from fastapi import Depends, FastAPI, Request
from fastapi.responses import JSONResponse

from fleet_eta.config import settings
from fleet_eta.models import EtaRequest
from fleet_eta.pipeline import EtaPipeline
from fleet_eta.tools import TelegramNotifier
from fleet_eta.tools.base import ChatNotifier

logger = logging.getLogger(__name__)

app = FastAPI(title="Fleet ETA", version="0.1.0")


def get_pipeline() -> EtaPipeline:
    return EtaPipeline.from_settings(settings)


def get_notifier() -> ChatNotifier:
    return TelegramNotifier(settings)


@app.get("/health")
def health():
    return {"ok": True}


@app.post("/eta")
async def eta(body: EtaRequest, pipeline: EtaPipeline = Depends(get_pipeline)):
    result = await pipeline.execute(body)
    return JSONResponse(result.to_payload(), status_code=result.status)


@app.post("/telegram/webhook")
async def telegram_webhook(
    request: Request,
    pipeline: EtaPipeline = Depends(get_pipeline),
    notifier: ChatNotifier = Depends(get_notifier),
):
    """Answer a chat message with the ETA summary (or the error detail)."""
    try:
        update: Any = await request.json()
    except ValueError:
        logger.warning("Ignoring webhook call with an invalid JSON body")
        return {"ok": True}

    if not isinstance(update, dict):
        return {"ok": True}

    message = update.get("message") or update.get("edited_message")
    if not isinstance(message, dict):
        return {"ok": True}

    chat = message.get("chat")
    chat_id = chat.get("id") if isinstance(chat, dict) else None
    text = message.get("text")
    if chat_id is None or not isinstance(text, str) or not text.strip():
        return {"ok": True}

    result = await pipeline.execute(EtaRequest(query=text.strip()))
    # Sent without parse_mode, so the reply must be plain text
    await notifier.send_message(chat_id, result.format_summary(markdown=False))

    # Telegram retries non-2xx deliveries, so always acknowledge
    return {"ok": True}
