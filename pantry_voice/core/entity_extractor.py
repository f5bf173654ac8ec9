"""Lexicon-driven entity extraction from transcribed food commands.

Best effort, order sensitive, not a grammar: ambiguous sentences may yield a
wrong or partial result, and the caller recovers through manual correction.
"""

import re

from pydantic import BaseModel

from pantry_voice.core.config import Constants
from pantry_voice.core.lexicon import Lexicon
from pantry_voice.domain.food import FoodCategory, StorageLocation


class ExtractedEntities(BaseModel):
    """Entities recognized in one utterance. Unrecognized fields stay None."""

    days_to_expiry: int | None = None
    name: str | None = None
    category: FoodCategory | None = None
    location: StorageLocation | None = None


def _first_match(patterns: list[str], text: str) -> re.Match[str] | None:
    for pattern in patterns:
        match = re.search(pattern, text, re.IGNORECASE)
        if match:
            return match
    return None


def _month_patterns(lexicon: Lexicon, number: str) -> list[str]:
    return [rf"{number}\s*{lexicon.month_unit}"]


def _day_patterns(lexicon: Lexicon, number: str) -> list[str]:
    patterns = [rf"{number}\s*{lexicon.day_unit}"]
    patterns.extend(rf"\b{cue}\s+{number}" for cue in lexicon.duration_cues)
    return patterns


def _number_word(word: str) -> str:
    return rf"\b({re.escape(word)})"


def _extract_months(text: str, lexicon: Lexicon) -> int:
    match = _first_match(_month_patterns(lexicon, r"(\d+)"), text)
    if match:
        return int(match.group(1)) * Constants.MONTH_LENGTH_DAYS

    for word, value in lexicon.number_words:
        if _first_match(_month_patterns(lexicon, _number_word(word)), text):
            return value * Constants.MONTH_LENGTH_DAYS

    return 0


def _extract_days(text: str, lexicon: Lexicon) -> int:
    match = _first_match(_day_patterns(lexicon, r"(\d+)"), text)
    if match:
        return int(match.group(1))

    for word, value in lexicon.number_words:
        if _first_match(_day_patterns(lexicon, _number_word(word)), text):
            return value

    return 0


def extract_days_to_expiry(text: str, lexicon: Lexicon) -> int | None:
    """Extract a shelf-life in days.

    Month counts win over day counts and are converted at 30 days per month.
    Digits are tried before number words. Zero counts as not found.
    """
    days = _extract_months(text, lexicon)
    if days == 0:
        days = _extract_days(text, lexicon)
    return days if days > 0 else None


def extract_name(text: str, lexicon: Lexicon) -> str | None:
    """Extract a food name.

    Priority: longest known food name contained in the text (earlier table
    entries win ties) > first word longer than two characters that is not a
    stop word.
    """
    longest = ""
    for food in lexicon.food_names:
        if food in text and len(food) > len(longest):
            longest = food
    if longest:
        return longest

    for word in text.split(" "):
        if len(word) > 2 and word not in lexicon.stop_words:
            return word

    return None


def extract_location(text: str, lexicon: Lexicon) -> StorageLocation | None:
    """Map storage keywords to a location. The first matching group wins."""
    for keywords, location in lexicon.location_groups:
        if any(keyword in text for keyword in keywords):
            return location
    return None


def extract_entities(text: str, lexicon: Lexicon) -> ExtractedEntities:
    """Extract shelf-life, name, category and location from an utterance.

    Args:
        text: Transcribed utterance (lower-cased here if it is not already)
        lexicon: Locale tables

    Returns:
        ExtractedEntities with every recognized field set
    """
    lowered = text.lower()
    name = extract_name(lowered, lexicon)

    return ExtractedEntities(
        days_to_expiry=extract_days_to_expiry(lowered, lexicon),
        name=name,
        category=lexicon.category_for(name) if name else None,
        location=extract_location(lowered, lexicon),
    )
