"""Classify utterances as inventory queries or item creation commands."""

import re

from pantry_voice.core.lexicon import Lexicon
from pantry_voice.domain.voice import IntentKind, QueryKind, UtteranceIntent


def matches_query_template(text: str, lexicon: Lexicon) -> bool:
    """Return True if any query template matches. The scan stops at the first hit."""
    return any(re.search(template, text, re.IGNORECASE) for template in lexicon.query_templates)


def query_kind_for(text: str, lexicon: Lexicon) -> QueryKind:
    """Pick the expiry window a query asks about. "Today" takes precedence over "tomorrow"."""
    if any(keyword in text for keyword in lexicon.today_keywords):
        return QueryKind.TODAY
    if any(keyword in text for keyword in lexicon.tomorrow_keywords):
        return QueryKind.TOMORROW
    return QueryKind.GENERAL


def classify(text: str, lexicon: Lexicon) -> UtteranceIntent:
    """Classify an utterance.

    Args:
        text: Transcribed utterance
        lexicon: Locale tables holding the query templates

    Returns:
        QUERY intent with its window when a template matches, COMMAND otherwise
    """
    lowered = text.lower()
    if matches_query_template(lowered, lexicon):
        return UtteranceIntent(kind=IntentKind.QUERY, query_kind=query_kind_for(lowered, lexicon))
    return UtteranceIntent(kind=IntentKind.COMMAND)
