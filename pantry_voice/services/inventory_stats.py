"""Inventory overview: freshness counts and category/location breakdowns."""

from collections import Counter
from collections.abc import Sequence
from datetime import datetime

from pydantic import BaseModel, Field

from pantry_voice.core import expiry
from pantry_voice.core.lexicon import Lexicon
from pantry_voice.core.logging import span
from pantry_voice.domain.food import ExpiryStatus, FoodItem


class InventorySummary(BaseModel):
    """Counts derived from the current inventory. Never stored."""

    total_items: int
    expired: int = 0
    expiring: int = 0
    fresh: int = 0
    categories_count: int = Field(0, description="Distinct non-empty categories")
    locations_count: int = Field(0, description="Distinct locations, missing counted once")
    by_category: dict[str, int] = Field(default_factory=dict, description="Most common first")
    by_location: dict[str, int] = Field(default_factory=dict, description="Most common first")


def summarize(items: Sequence[FoodItem], now: datetime, lexicon: Lexicon) -> InventorySummary:
    """Count items by status badge, category and location.

    Args:
        items: Current inventory
        now: Evaluation moment
        lexicon: Source of the label for items without a category

    Returns:
        InventorySummary for the given items
    """
    with span("inventory_stats.summarize"):
        statuses = Counter(expiry.status(item.preparation_date, item.days_to_expiry, now) for item in items)
        categories = Counter(item.category or lexicon.responses.missing_category for item in items)
        locations = Counter(item.location or "" for item in items)

        return InventorySummary(
            total_items=len(items),
            expired=statuses[ExpiryStatus.EXPIRED],
            expiring=statuses[ExpiryStatus.EXPIRING],
            fresh=statuses[ExpiryStatus.FRESH],
            categories_count=len({item.category for item in items if item.category}),
            locations_count=len(locations),
            by_category=dict(categories.most_common()),
            by_location=dict(locations.most_common()),
        )
