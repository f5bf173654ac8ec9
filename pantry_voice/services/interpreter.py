"""Turn one transcript into a query answer or an item draft."""

import logging
from datetime import datetime

from pantry_voice.core.config import Settings
from pantry_voice.core.errors import VoiceErrorKind, build_error_response
from pantry_voice.core.intent_classifier import classify
from pantry_voice.core.lexicon import Lexicon
from pantry_voice.core.logging import span
from pantry_voice.domain.voice import OutcomeKind, QueryResultKind, SessionOutcome
from pantry_voice.services import command_builder, query_engine
from pantry_voice.services.query_engine import ItemSource


logger = logging.getLogger(__name__)


async def interpret_transcript(
    transcript: str,
    *,
    fetch_items: ItemSource,
    now: datetime,
    lexicon: Lexicon,
    settings: Settings,
) -> SessionOutcome:
    """Classify a transcript and run the query or command path.

    Never raises for user-visible failures: an unreachable inventory yields a
    QUERY_RESULT whose result kind is ERROR, and a command without a food name
    yields UNRECOGNIZED with the partial draft attached for manual completion.

    Args:
        transcript: Text returned by speech recognition
        fetch_items: Coroutine factory returning the current inventory
        now: Evaluation moment for expiry computations
        lexicon: Locale tables
        settings: Auto-submit delays and inventory timeout

    Returns:
        SessionOutcome of kind QUERY_RESULT, DRAFT or UNRECOGNIZED
    """
    with span("interpreter.interpret_transcript"):
        text = transcript.strip().lower()
        intent = classify(text, lexicon)
        logger.info("Classified utterance", extra={"intent": intent.kind, "query_kind": intent.query_kind})

        if intent.is_query:
            result = await query_engine.answer_query(
                text,
                fetch_items=fetch_items,
                now=now,
                lexicon=lexicon,
                kind=intent.query_kind,
                timeout_seconds=settings.inventory_api_timeout_seconds,
            )
            error = None
            if result.kind == QueryResultKind.ERROR:
                error = build_error_response(VoiceErrorKind.QUERY_COLLABORATOR_FAILURE, lexicon)
            return SessionOutcome(
                kind=OutcomeKind.QUERY_RESULT,
                transcript=transcript,
                intent=intent,
                query_result=result,
                error=error,
            )

        draft = command_builder.build(text, lexicon)
        plan = command_builder.plan_auto_submit(draft, settings)

        if not draft.name:
            return SessionOutcome(
                kind=OutcomeKind.UNRECOGNIZED,
                transcript=transcript,
                intent=intent,
                draft=draft,
                auto_submit=plan,
                error=build_error_response(VoiceErrorKind.UNRECOGNIZED, lexicon, transcript=transcript),
            )

        return SessionOutcome(
            kind=OutcomeKind.DRAFT,
            transcript=transcript,
            intent=intent,
            draft=draft,
            auto_submit=plan,
        )
