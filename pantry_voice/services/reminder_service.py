"""Expiry reminders for items expiring today or tomorrow.

Builds reminder payloads only; delivering them (push, chat, e-mail) is up to
the caller.
"""

import logging
from collections.abc import Sequence
from datetime import datetime

from pydantic import BaseModel, Field

from pantry_voice.core import expiry
from pantry_voice.core.lexicon import Lexicon
from pantry_voice.core.logging import span
from pantry_voice.domain.food import FoodItem


logger = logging.getLogger(__name__)


class ExpiryReminder(BaseModel):
    """A reminder about one item."""

    item_id: str | int
    title: str
    body: str
    tag: str = Field(..., description="Stable key so a client can replace rather than stack reminders")
    urgent: bool = Field(default=False, description="True for items expiring today")


def calendar_days_left(item: FoodItem, now: datetime) -> int:
    """Whole calendar days between today and the expiry date."""
    return (expiry.expiry_date(item.preparation_date, item.days_to_expiry) - now.date()).days


def collect_reminders(items: Sequence[FoodItem], now: datetime, lexicon: Lexicon) -> list[ExpiryReminder]:
    """Build reminders for items whose expiry date is today or tomorrow.

    Args:
        items: Current inventory
        now: Evaluation moment
        lexicon: Locale tables holding the reminder sentences

    Returns:
        Reminders in inventory order
    """
    with span("reminder_service.collect_reminders"):
        responses = lexicon.responses
        reminders = []

        for item in items:
            days_left = calendar_days_left(item, now)
            if days_left == 0:
                reminders.append(
                    ExpiryReminder(
                        item_id=item.id,
                        title=responses.reminder_today_title,
                        body=responses.reminder_today_body.format(name=item.name),
                        tag=f"expiry-today-{item.id}",
                        urgent=True,
                    )
                )
            elif days_left == 1:
                reminders.append(
                    ExpiryReminder(
                        item_id=item.id,
                        title=responses.reminder_tomorrow_title,
                        body=responses.reminder_tomorrow_body.format(name=item.name),
                        tag=f"expiry-tomorrow-{item.id}",
                    )
                )

        logger.debug(f"Collected {len(reminders)} expiry reminders from {len(items)} items")
        return reminders
