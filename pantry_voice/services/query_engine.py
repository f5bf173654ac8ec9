"""Answer spoken expiry questions against the current inventory."""

import asyncio
import logging
from collections.abc import Awaitable, Callable, Sequence
from dataclasses import dataclass, field
from datetime import datetime

from pantry_voice.core import expiry
from pantry_voice.core.config import Constants
from pantry_voice.core.errors import classify_inventory_error
from pantry_voice.core.intent_classifier import query_kind_for
from pantry_voice.core.lexicon import Lexicon
from pantry_voice.core.logging import span
from pantry_voice.domain.food import FoodItem
from pantry_voice.domain.voice import QueryKind, QueryResult, QueryResultKind


logger = logging.getLogger(__name__)

ItemSource = Callable[[], Awaitable[Sequence[FoodItem]]]


@dataclass
class QueryBuckets:
    """Items grouped by proximity to expiry. Recomputed per query."""

    expiring_today: list[FoodItem] = field(default_factory=list)
    expiring_tomorrow: list[FoodItem] = field(default_factory=list)
    expiring_soon: list[FoodItem] = field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.expiring_today) + len(self.expiring_tomorrow) + len(self.expiring_soon)


def bucket_items(items: Sequence[FoodItem], now: datetime) -> QueryBuckets:
    """Partition items by days remaining (query policy).

    today: <= 0 (expired items included), tomorrow: 1, soon: 2 up to the soon window.
    """
    buckets = QueryBuckets()
    for item in items:
        remaining = expiry.days_remaining(item.preparation_date, item.days_to_expiry, now)
        if remaining <= 0:
            buckets.expiring_today.append(item)
        elif remaining == 1:
            buckets.expiring_tomorrow.append(item)
        elif remaining <= Constants.QUERY_SOON_WINDOW_DAYS:
            buckets.expiring_soon.append(item)
    return buckets


def _names(items: list[FoodItem], lexicon: Lexicon) -> str:
    return lexicon.responses.list_separator.join(item.name for item in items)


def render_answer(kind: QueryKind, buckets: QueryBuckets, lexicon: Lexicon) -> QueryResult:
    """Render the natural-language message and summary for a query window."""
    responses = lexicon.responses

    if kind == QueryKind.TODAY:
        if not buckets.expiring_today:
            message, summary = responses.nothing_today, responses.nothing_today_summary
        else:
            message = responses.today_list.format(names=_names(buckets.expiring_today, lexicon))
            summary = responses.today_summary.format(count=len(buckets.expiring_today))

    elif kind == QueryKind.TOMORROW:
        if not buckets.expiring_tomorrow:
            message, summary = responses.nothing_tomorrow, responses.nothing_tomorrow_summary
        else:
            message = responses.tomorrow_list.format(names=_names(buckets.expiring_tomorrow, lexicon))
            summary = responses.tomorrow_summary.format(count=len(buckets.expiring_tomorrow))

    elif buckets.total == 0:
        message, summary = responses.all_fresh, responses.all_fresh_summary

    else:
        parts = []
        if buckets.expiring_today:
            parts.append(responses.general_today_line.format(names=_names(buckets.expiring_today, lexicon)))
        if buckets.expiring_tomorrow:
            parts.append(responses.general_tomorrow_line.format(names=_names(buckets.expiring_tomorrow, lexicon)))
        if buckets.expiring_soon:
            parts.append(responses.general_soon_line.format(names=_names(buckets.expiring_soon, lexicon)))
        message = responses.line_separator.join(parts)
        summary = responses.general_summary.format(count=buckets.total)

    return QueryResult(kind=QueryResultKind.EXPIRY_CHECK, message=message, summary=summary)


def answer(
    utterance: str,
    items: Sequence[FoodItem],
    now: datetime,
    lexicon: Lexicon,
    *,
    kind: QueryKind | None = None,
) -> QueryResult:
    """Answer a query over an already fetched item list.

    Args:
        utterance: Transcribed question, used to pick the window when kind is None
        items: Current inventory
        now: Evaluation moment
        lexicon: Locale tables
        kind: Window from the intent classifier, if already known

    Returns:
        QueryResult of kind EXPIRY_CHECK
    """
    query_kind = kind or query_kind_for(utterance.lower(), lexicon)
    buckets = bucket_items(items, now)
    logger.debug(
        "Bucketed %d items: today=%d tomorrow=%d soon=%d",
        len(items),
        len(buckets.expiring_today),
        len(buckets.expiring_tomorrow),
        len(buckets.expiring_soon),
    )
    return render_answer(query_kind, buckets, lexicon)


def query_failure(lexicon: Lexicon) -> QueryResult:
    """Fixed apology returned when the inventory cannot be read."""
    return QueryResult(
        kind=QueryResultKind.ERROR,
        message=lexicon.responses.query_error,
        summary=lexicon.responses.query_error_summary,
    )


async def answer_query(
    utterance: str,
    *,
    fetch_items: ItemSource,
    now: datetime,
    lexicon: Lexicon,
    kind: QueryKind | None = None,
    timeout_seconds: float | None = None,
) -> QueryResult:
    """Fetch the inventory and answer a query. Never raises.

    Any failure of the inventory collaborator, including a timeout, becomes an
    ERROR result with a fixed apology. So does an item whose expiry date falls
    outside the calendar.

    Args:
        utterance: Transcribed question
        fetch_items: Coroutine factory returning the current inventory
        now: Evaluation moment
        lexicon: Locale tables
        kind: Window from the intent classifier, if already known
        timeout_seconds: Upper bound for the inventory fetch

    Returns:
        QueryResult of kind EXPIRY_CHECK or ERROR
    """
    with span("query_engine.answer_query"):
        try:
            items = await asyncio.wait_for(fetch_items(), timeout=timeout_seconds)
        except Exception as e:
            logger.warning(
                "Inventory fetch failed while answering query",
                extra={"error_category": classify_inventory_error(e), "error": str(e)},
            )
            return query_failure(lexicon)

        try:
            return answer(utterance, items, now, lexicon, kind=kind)
        except (OverflowError, ValueError) as e:
            logger.warning("Could not compute expiry for inventory items", extra={"error": str(e)})
            return query_failure(lexicon)
