"""Expiry computations shared by voice queries and inventory views.

Two policies coexist:

- The status badge (``status``) counts whole days elapsed since preparation,
  rounded up, and calls an item "expiring" within
  ``Constants.EXPIRING_BADGE_WINDOW_DAYS`` of its shelf-life.
- Voice queries (``days_remaining``) take the ceiling of the time left until the
  expiry moment and treat up to ``Constants.QUERY_SOON_WINDOW_DAYS`` as "soon".

Every function takes ``now`` explicitly. The preparation date is read as
midnight in ``now``'s timezone (naive when ``now`` is naive).
"""

import math
from datetime import date, datetime, time, timedelta

from pantry_voice.core.config import Constants
from pantry_voice.core.lexicon import Lexicon
from pantry_voice.domain.food import ExpiryAssessment, ExpiryStatus, FoodItem


_SECONDS_PER_DAY = 86400


def _start_of(day: date, now: datetime) -> datetime:
    return datetime.combine(day, time.min, tzinfo=now.tzinfo)


def expiry_date(preparation_date: date, days_to_expiry: int) -> date:
    """Calendar date on which the item expires."""
    return preparation_date + timedelta(days=days_to_expiry)


def days_remaining(preparation_date: date, days_to_expiry: int, now: datetime) -> int:
    """Whole days left until expiry, rounded up.

    An item expiring later today reads as 0, not -1. Negative once expired.
    """
    expires_at = _start_of(expiry_date(preparation_date, days_to_expiry), now)
    return math.ceil((expires_at - now).total_seconds() / _SECONDS_PER_DAY)


def days_elapsed(preparation_date: date, now: datetime) -> int:
    """Whole days since preparation, rounded up."""
    return math.ceil((now - _start_of(preparation_date, now)).total_seconds() / _SECONDS_PER_DAY)


def days_until_expiry(preparation_date: date, days_to_expiry: int, now: datetime) -> int:
    """Shelf-life minus elapsed days, the figure shown on status badges."""
    return days_to_expiry - days_elapsed(preparation_date, now)


def status(preparation_date: date, days_to_expiry: int, now: datetime) -> ExpiryStatus:
    """Classify an item as fresh, expiring or expired (badge policy)."""
    elapsed = days_elapsed(preparation_date, now)
    if elapsed >= days_to_expiry:
        return ExpiryStatus.EXPIRED
    if elapsed >= days_to_expiry - Constants.EXPIRING_BADGE_WINDOW_DAYS:
        return ExpiryStatus.EXPIRING
    return ExpiryStatus.FRESH


def assess(item: FoodItem, now: datetime) -> ExpiryAssessment:
    """Compute every derived expiry figure for one item."""
    return ExpiryAssessment(
        status=status(item.preparation_date, item.days_to_expiry, now),
        days_remaining=days_remaining(item.preparation_date, item.days_to_expiry, now),
        days_until_expiry=days_until_expiry(item.preparation_date, item.days_to_expiry, now),
        expiry_date=expiry_date(item.preparation_date, item.days_to_expiry),
    )


def describe(item: FoodItem, now: datetime, lexicon: Lexicon) -> str:
    """Render the status badge text for an item."""
    assessment = assess(item, now)
    days = abs(assessment.days_until_expiry)
    responses = lexicon.responses

    if assessment.status == ExpiryStatus.EXPIRED:
        return responses.expired_badge.format(days=days)
    if assessment.status == ExpiryStatus.EXPIRING:
        return responses.expiring_badge.format(days=days)
    return responses.fresh_badge.format(days=days)
