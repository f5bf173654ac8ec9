"""Build food item drafts from spoken creation commands."""

import logging
from datetime import date

from pantry_voice.core.config import Settings
from pantry_voice.core.entity_extractor import extract_entities
from pantry_voice.core.lexicon import Lexicon
from pantry_voice.core.logging import span
from pantry_voice.domain.food import FoodCategory, FoodItemCreate, FoodItemDraft
from pantry_voice.domain.voice import AutoSubmitPlan


logger = logging.getLogger(__name__)


def build(utterance: str, lexicon: Lexicon) -> FoodItemDraft:
    """Build a draft from whatever the extractor recognized.

    Partial drafts are valid results. The category follows the name lookup
    table and is only set when a name was found.

    Args:
        utterance: Transcribed command (e.g., "latte che scade tra 5 giorni")
        lexicon: Locale tables

    Returns:
        FoodItemDraft with every recognized field set
    """
    with span("command_builder.build"):
        entities = extract_entities(utterance, lexicon)
        draft = FoodItemDraft(
            name=entities.name,
            category=entities.category,
            days_to_expiry=entities.days_to_expiry,
            location=entities.location,
        )
        logger.debug("Built draft from utterance", extra={"draft": draft.model_dump(exclude_none=True)})
        return draft


def plan_auto_submit(draft: FoodItemDraft, settings: Settings) -> AutoSubmitPlan:
    """Decide whether and when a draft is submitted without user action.

    A name is required. With a shelf-life the short delay applies, without one
    the longer delay leaves room for manual correction.
    """
    if not draft.name:
        return AutoSubmitPlan(eligible=False)
    if draft.days_to_expiry:
        return AutoSubmitPlan(eligible=True, delay_seconds=settings.auto_submit_delay_seconds)
    return AutoSubmitPlan(eligible=True, delay_seconds=settings.partial_auto_submit_delay_seconds)


def complete_draft(draft: FoodItemDraft, settings: Settings, *, today: date) -> FoodItemCreate:
    """Fill the fields a draft is missing with defaults before persistence.

    Args:
        draft: Draft from build()
        settings: Source of the default shelf-life and location
        today: Preparation date used when the draft has none

    Returns:
        FoodItemCreate ready for the inventory API

    Raises:
        ValueError: If the draft has no name
    """
    if not draft.name:
        msg = "Cannot complete a draft without a name"
        raise ValueError(msg)

    return FoodItemCreate(
        name=draft.name,
        category=str(draft.category or FoodCategory.OTHER),
        preparation_date=draft.preparation_date or today,
        days_to_expiry=draft.days_to_expiry or settings.default_days_to_expiry,
        location=str(draft.location or settings.default_location),
    )
