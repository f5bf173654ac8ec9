"""Voice listening session state machine.

One controller owns at most one listening session. States move
IDLE -> LISTENING -> PROCESSING -> IDLE; cancellation and recognition errors
go straight from LISTENING back to IDLE. Every terminal event is reported to
the caller as a SessionOutcome, never raised.
"""

import asyncio
import logging
from collections.abc import Awaitable, Callable, Coroutine
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Protocol

from pantry_voice.core.config import Settings
from pantry_voice.core.errors import VoiceErrorKind, build_error_response
from pantry_voice.core.lexicon import Lexicon, get_lexicon
from pantry_voice.core.logging import log_with_context, span
from pantry_voice.domain.food import FoodItemDraft
from pantry_voice.domain.voice import OutcomeKind, SessionOutcome, SessionState
from pantry_voice.services.interpreter import interpret_transcript
from pantry_voice.services.query_engine import ItemSource


logger = logging.getLogger(__name__)


class SpeechRecognizer(Protocol):
    """Platform speech recognition capability, single-shot."""

    def start(self, *, locale: str, continuous: bool, interim_results: bool, max_alternatives: int) -> None:
        """Begin capturing audio. Events are reported through RecognitionEvents."""

    def stop(self) -> None:
        """Stop capturing and release microphone handles."""


@dataclass(frozen=True)
class RecognitionEvents:
    """Callbacks bound to one listening session."""

    session_id: int
    on_start: Callable[[], None]
    on_result: Callable[[str], Awaitable[SessionOutcome | None]]
    on_error: Callable[[str], SessionOutcome | None]
    on_end: Callable[[], None]


RecognizerFactory = Callable[[RecognitionEvents], SpeechRecognizer]
DraftSink = Callable[[FoodItemDraft], Awaitable[object]]
OutcomeListener = Callable[[SessionOutcome], None]


ALLOWED_TRANSITIONS: dict[SessionState, set[SessionState]] = {
    SessionState.IDLE: {SessionState.LISTENING},
    SessionState.LISTENING: {SessionState.PROCESSING, SessionState.IDLE},
    SessionState.PROCESSING: {SessionState.IDLE},
}


class _ListeningSession:
    """Resources held by one listening session."""

    def __init__(self, session_id: int) -> None:
        self.session_id = session_id
        self.recognizer: SpeechRecognizer | None = None
        self._released = False

    def release(self) -> bool:
        """Stop the recognizer once. Returns False if already released."""
        if self._released:
            return False
        self._released = True
        if self.recognizer is not None:
            self.recognizer.stop()
        return True


class VoiceSessionController:
    """Orchestrates listening sessions end to end.

    Instances share no state, so several controllers can run side by side.
    """

    def __init__(
        self,
        *,
        recognizer_factory: RecognizerFactory | None,
        fetch_items: ItemSource,
        submit_draft: DraftSink,
        settings: Settings,
        on_outcome: OutcomeListener | None = None,
        lexicon: Lexicon | None = None,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self._recognizer_factory = recognizer_factory
        self._fetch_items = fetch_items
        self._submit_draft = submit_draft
        self._settings = settings
        self._on_outcome = on_outcome
        self._lexicon = lexicon or get_lexicon(settings.speech_locale)
        self._clock = clock

        self._state = SessionState.IDLE
        self._session: _ListeningSession | None = None
        self._next_session_id = 1
        self._pending_submits: set[asyncio.Task[None]] = set()

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def active_session_id(self) -> int | None:
        return self._session.session_id if self._session else None

    @property
    def has_pending_submit(self) -> bool:
        return any(not task.done() for task in self._pending_submits)

    def start(self) -> bool:
        """Start a listening session.

        An active session is stopped first. Starting while a transcript is
        being processed is refused.

        Returns:
            True if the recognizer is now listening
        """
        with span("session_controller.start"):
            if self._state == SessionState.PROCESSING:
                logger.warning("Ignoring start request while processing a transcript")
                return False

            if self._state == SessionState.LISTENING:
                log_with_context(
                    logger, "info", "Replacing active listening session", session_id=self.active_session_id
                )
                self._close_session()

            if self._recognizer_factory is None:
                logger.warning("Speech recognition is not available on this platform")
                self._emit(self._error_outcome(VoiceErrorKind.CAPABILITY_UNAVAILABLE))
                return False

            session = _ListeningSession(self._next_session_id)
            self._next_session_id += 1
            self._session = session
            self._transition(SessionState.LISTENING)

            try:
                session.recognizer = self._recognizer_factory(self._bind_events(session.session_id))
                session.recognizer.start(
                    locale=self._settings.speech_locale,
                    continuous=False,
                    interim_results=False,
                    max_alternatives=1,
                )
            except Exception:
                logger.exception("Failed to acquire speech recognition")
                self._close_session()
                self._emit(self._error_outcome(VoiceErrorKind.CAPABILITY_UNAVAILABLE))
                return False

            log_with_context(
                logger, "info", "Listening session started", session_id=session.session_id,
                locale=self._settings.speech_locale,
            )
            return True

    def cancel(self) -> None:
        """Stop listening immediately and discard anything heard so far."""
        if self._state != SessionState.LISTENING:
            logger.debug("Cancel ignored in state %s", self._state)
            return
        log_with_context(logger, "info", "Listening session cancelled", session_id=self.active_session_id)
        self._close_session()

    def cancel_pending_submit(self) -> int:
        """Cancel scheduled auto-submissions so the user can edit the draft.

        Returns:
            Number of submissions cancelled
        """
        cancelled = 0
        for task in list(self._pending_submits):
            if not task.done():
                task.cancel()
                cancelled += 1
        self._pending_submits.clear()
        return cancelled

    def _bind_events(self, session_id: int) -> RecognitionEvents:
        return RecognitionEvents(
            session_id=session_id,
            on_start=lambda: self._handle_start(session_id),
            on_result=lambda transcript: self._handle_result(session_id, transcript),
            on_error=lambda code: self._handle_error(session_id, code),
            on_end=lambda: self._handle_end(session_id),
        )

    def _current(self, session_id: int) -> _ListeningSession | None:
        """Return the session if it is the one still listening."""
        session = self._session
        if session is None or session.session_id != session_id or self._state != SessionState.LISTENING:
            return None
        return session

    def _handle_start(self, session_id: int) -> None:
        if self._current(session_id):
            log_with_context(logger, "debug", "Recognizer reported start", session_id=session_id)

    def _handle_result(self, session_id: int, transcript: str) -> Coroutine[Any, Any, SessionOutcome | None]:
        """Stop listening as soon as the result arrives, then hand back the interpretation.

        The returned coroutine must be awaited (or scheduled) to emit the outcome. An end
        event that arrives before it runs finds the session already processing.
        """
        session = self._current(session_id)
        if session is None:
            log_with_context(logger, "debug", "Ignoring result from stale session", session_id=session_id)
            return self._no_outcome()

        session.release()
        self._transition(SessionState.PROCESSING)
        return self._process_transcript(session_id, transcript)

    async def _no_outcome(self) -> None:
        return None

    async def _process_transcript(self, session_id: int, transcript: str) -> SessionOutcome:
        with span("session_controller.process_transcript"):
            try:
                outcome = await interpret_transcript(
                    transcript,
                    fetch_items=self._fetch_items,
                    now=self._clock(),
                    lexicon=self._lexicon,
                    settings=self._settings,
                )
            finally:
                self._session = None
                self._transition(SessionState.IDLE)

            if outcome.kind == OutcomeKind.DRAFT and outcome.draft and outcome.auto_submit:
                plan = outcome.auto_submit
                if plan.eligible and plan.delay_seconds is not None:
                    self._schedule_submit(outcome.draft, plan.delay_seconds)

            log_with_context(
                logger, "info", "Listening session processed", session_id=session_id, outcome=outcome.kind
            )
            self._emit(outcome)
            return outcome

    def _handle_error(self, session_id: int, code: str) -> SessionOutcome | None:
        if self._current(session_id) is None:
            log_with_context(logger, "debug", "Ignoring error from stale session", session_id=session_id, code=code)
            return None

        log_with_context(logger, "warning", "Speech recognition failed", session_id=session_id, code=code)
        self._close_session()
        outcome = self._error_outcome(VoiceErrorKind.RECOGNITION_FAILED)
        self._emit(outcome)
        return outcome

    def _handle_end(self, session_id: int) -> None:
        if self._current(session_id) is None:
            return
        # Ended without a result or an error: nothing was heard.
        log_with_context(logger, "info", "Recognizer ended without a result", session_id=session_id)
        self._close_session()

    def _close_session(self) -> None:
        if self._session is not None:
            self._session.release()
            self._session = None
        if self._state != SessionState.IDLE:
            self._transition(SessionState.IDLE)

    def _transition(self, target: SessionState) -> None:
        if target not in ALLOWED_TRANSITIONS[self._state]:
            msg = f"Cannot transition voice session from {self._state} to {target}"
            raise ValueError(msg)
        logger.debug("Voice session %s -> %s", self._state, target)
        self._state = target

    def _schedule_submit(self, draft: FoodItemDraft, delay_seconds: float) -> None:
        task = asyncio.get_running_loop().create_task(self._submit_after(draft, delay_seconds))
        self._pending_submits.add(task)
        task.add_done_callback(self._pending_submits.discard)

    async def _submit_after(self, draft: FoodItemDraft, delay_seconds: float) -> None:
        await asyncio.sleep(delay_seconds)
        try:
            await self._submit_draft(draft)
            logger.info(f"Auto-submitted draft: {draft.name}")
        except Exception:
            logger.exception("Auto-submit failed for draft %s", draft.name)

    def _error_outcome(self, kind: VoiceErrorKind) -> SessionOutcome:
        return SessionOutcome(kind=OutcomeKind.ERROR, error=build_error_response(kind, self._lexicon))

    def _emit(self, outcome: SessionOutcome) -> None:
        if self._on_outcome is not None:
            self._on_outcome(outcome)
