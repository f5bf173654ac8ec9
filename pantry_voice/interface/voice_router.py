"""Voice interpretation endpoints."""

import logging
from datetime import datetime

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel, Field

from pantry_voice.core.config import Constants, settings
from pantry_voice.core.errors import InventoryUnavailableError
from pantry_voice.core.lexicon import get_lexicon
from pantry_voice.domain.food import FoodItem
from pantry_voice.domain.voice import SessionOutcome
from pantry_voice.services import interpreter, inventory_client, inventory_stats, reminder_service


router = APIRouter(prefix="/voice", tags=["voice"])
logger = logging.getLogger(__name__)


class InterpretRequest(BaseModel):
    """Transcript produced by a client-side speech recognizer."""

    transcript: str = Field(..., min_length=1, description="Recognized text")


async def _fetch_items_or_503() -> list[FoodItem]:
    try:
        return await inventory_client.list_food_items()
    except InventoryUnavailableError as e:
        logger.warning("Inventory unavailable: %s", e)
        raise HTTPException(status_code=Constants.HTTP_SERVICE_UNAVAILABLE, detail="Inventory unavailable") from e


@router.post("/interpret")
async def interpret(request: InterpretRequest) -> SessionOutcome:
    """Interpret a transcript as an expiry query or a new item draft.

    Query failures come back as a normal result with an error kind, so this
    endpoint answers 200 for every transcript.
    """
    return await interpreter.interpret_transcript(
        request.transcript,
        fetch_items=inventory_client.list_food_items,
        now=datetime.now(),
        lexicon=get_lexicon(settings.speech_locale),
        settings=settings,
    )


@router.get("/stats")
async def stats() -> inventory_stats.InventorySummary:
    """Freshness counts and category/location breakdowns of the inventory."""
    items = await _fetch_items_or_503()
    return inventory_stats.summarize(items, datetime.now(), get_lexicon(settings.speech_locale))


@router.get("/reminders")
async def reminders() -> list[reminder_service.ExpiryReminder]:
    """Reminders for items expiring today or tomorrow."""
    items = await _fetch_items_or_503()
    return reminder_service.collect_reminders(items, datetime.now(), get_lexicon(settings.speech_locale))
