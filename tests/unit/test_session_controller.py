"""Unit tests for the voice listening session state machine."""

import asyncio
from unittest.mock import AsyncMock, MagicMock

import pytest

from pantry_voice.core.errors import InventoryUnavailableError, VoiceErrorKind
from pantry_voice.domain.voice import OutcomeKind, QueryResultKind, SessionState
from pantry_voice.services.session_controller import VoiceSessionController
from tests.unit.mocks import NOW, FakeRecognizerFactory, item_expiring_in


@pytest.fixture
def fetch_items():
    """Inventory collaborator with one item expiring today."""
    return AsyncMock(return_value=[item_expiring_in("latte", 0)])


@pytest.fixture
def submit_draft():
    """Draft persistence collaborator."""
    return AsyncMock(return_value={"id": "99"})


@pytest.fixture
def outcomes():
    """Collected outcomes, in emission order."""
    return []


@pytest.fixture
def make_controller(recognizer_factory, fetch_items, submit_draft, outcomes, test_settings):
    """Factory for controllers wired to the fakes above."""

    def _make(**overrides) -> VoiceSessionController:
        kwargs = {
            "recognizer_factory": recognizer_factory,
            "fetch_items": fetch_items,
            "submit_draft": submit_draft,
            "settings": test_settings,
            "on_outcome": outcomes.append,
            "clock": lambda: NOW,
        }
        kwargs.update(overrides)
        return VoiceSessionController(**kwargs)

    return _make


@pytest.mark.unit
class TestStart:
    """Tests for starting listening sessions."""

    def test_start_listens(self, make_controller, recognizer_factory):
        """Test start acquires a recognizer configured for one final result."""
        controller = make_controller()

        assert controller.start()

        assert controller.state == SessionState.LISTENING
        assert controller.active_session_id == 1
        assert recognizer_factory.last.start_calls == [
            {"locale": "it-IT", "continuous": False, "interim_results": False, "max_alternatives": 1}
        ]

    def test_capability_absent(self, make_controller, outcomes):
        """Test a missing recognizer reports CAPABILITY_UNAVAILABLE and stays idle."""
        controller = make_controller(recognizer_factory=None)

        assert not controller.start()

        assert controller.state == SessionState.IDLE
        assert len(outcomes) == 1
        assert outcomes[0].kind == OutcomeKind.ERROR
        assert outcomes[0].error.kind == VoiceErrorKind.CAPABILITY_UNAVAILABLE

    def test_permission_denied(self, make_controller, outcomes):
        """Test a factory failure reports CAPABILITY_UNAVAILABLE and stays idle."""
        controller = make_controller(recognizer_factory=FakeRecognizerFactory(deny_permission=True))

        assert not controller.start()

        assert controller.state == SessionState.IDLE
        assert controller.active_session_id is None
        assert outcomes[0].error.kind == VoiceErrorKind.CAPABILITY_UNAVAILABLE

    def test_recognizer_start_failure_releases_it(self, make_controller, outcomes):
        """Test a recognizer that fails to start is stopped exactly once."""
        factory = FakeRecognizerFactory(fail_on_start=True)
        controller = make_controller(recognizer_factory=factory)

        assert not controller.start()

        assert controller.state == SessionState.IDLE
        assert factory.last.stop_calls == 1
        assert outcomes[0].error.kind == VoiceErrorKind.CAPABILITY_UNAVAILABLE

    def test_restart_replaces_active_session(self, make_controller, recognizer_factory):
        """Test starting again stops the previous recognizer exactly once."""
        controller = make_controller()
        controller.start()
        first = recognizer_factory.last

        assert controller.start()

        second = recognizer_factory.last
        assert first is not second
        assert first.stop_calls == 1
        assert second.stop_calls == 0
        assert controller.state == SessionState.LISTENING
        assert controller.active_session_id == 2

    async def test_stale_result_is_ignored(self, make_controller, recognizer_factory, outcomes, fetch_items):
        """Test a late result from a replaced session has no effect."""
        controller = make_controller()
        controller.start()
        first = recognizer_factory.last
        controller.start()

        result = await first.events.on_result("cosa scade oggi")

        assert result is None
        assert outcomes == []
        fetch_items.assert_not_awaited()
        assert first.stop_calls == 1
        assert controller.state == SessionState.LISTENING


@pytest.mark.unit
class TestResults:
    """Tests for final recognition results."""

    async def test_query_result(self, make_controller, recognizer_factory, outcomes):
        """Test a query is answered and the session returns to idle."""
        controller = make_controller()
        controller.start()
        recognizer = recognizer_factory.last

        outcome = await recognizer.events.on_result("Cosa scade oggi?")

        assert outcome.kind == OutcomeKind.QUERY_RESULT
        assert outcome.query_result.message == "⚠️ Oggi scade: latte"
        assert outcomes == [outcome]
        assert controller.state == SessionState.IDLE
        assert controller.active_session_id is None
        assert recognizer.stop_calls == 1

    async def test_end_right_after_result_keeps_transcript(self, make_controller, recognizer_factory, outcomes):
        """Test an end event fired before the result is processed does not drop the transcript."""
        controller = make_controller()
        controller.start()
        recognizer = recognizer_factory.last

        task = asyncio.create_task(recognizer.events.on_result("cosa scade oggi"))
        recognizer.events.on_end()
        outcome = await task

        assert outcome.kind == OutcomeKind.QUERY_RESULT
        assert [o.kind for o in outcomes] == [OutcomeKind.QUERY_RESULT]
        assert recognizer.stop_calls == 1
        assert controller.state == SessionState.IDLE

    async def test_result_stops_recognizer_before_processing(self, make_controller, recognizer_factory):
        """Test receiving a result releases the recognizer before interpretation runs."""
        controller = make_controller()
        controller.start()
        recognizer = recognizer_factory.last

        pending = recognizer.events.on_result("cosa scade oggi")

        assert recognizer.stop_calls == 1
        assert controller.state == SessionState.PROCESSING

        outcome = await pending

        assert outcome.kind == OutcomeKind.QUERY_RESULT
        assert controller.state == SessionState.IDLE

    async def test_query_collaborator_failure(self, make_controller, recognizer_factory, outcomes):
        """Test an inventory failure still returns the session to idle."""
        fetch_items = AsyncMock(side_effect=InventoryUnavailableError("Inventory returned status 503"))
        controller = make_controller(fetch_items=fetch_items)
        controller.start()

        outcome = await recognizer_factory.last.events.on_result("cosa scade domani")

        assert outcome.query_result.kind == QueryResultKind.ERROR
        assert outcome.error.kind == VoiceErrorKind.QUERY_COLLABORATOR_FAILURE
        assert controller.state == SessionState.IDLE

    async def test_draft_is_auto_submitted(self, make_controller, recognizer_factory, submit_draft, test_settings):
        """Test an eligible draft is handed to the persistence collaborator after the delay."""
        settings = test_settings.model_copy(update={"auto_submit_delay_seconds": 0.0})
        controller = make_controller(settings=settings)
        controller.start()

        outcome = await recognizer_factory.last.events.on_result("latte che scade tra 5 giorni")
        await asyncio.sleep(0.05)

        assert outcome.kind == OutcomeKind.DRAFT
        submit_draft.assert_awaited_once_with(outcome.draft)
        assert not controller.has_pending_submit

    async def test_name_only_draft_uses_long_delay(self, make_controller, recognizer_factory, submit_draft):
        """Test a draft without shelf-life is scheduled with the longer delay."""
        controller = make_controller()
        controller.start()

        outcome = await recognizer_factory.last.events.on_result("aggiungi mozzarella")

        assert outcome.auto_submit.delay_seconds == 1.0
        assert controller.has_pending_submit
        submit_draft.assert_not_awaited()
        assert controller.cancel_pending_submit() == 1

    async def test_unrecognized_never_submits(self, make_controller, recognizer_factory, submit_draft, outcomes):
        """Test a draft without a name is reported and never submitted."""
        controller = make_controller()
        controller.start()

        outcome = await recognizer_factory.last.events.on_result("tra 3 giorni")
        await asyncio.sleep(0.05)

        assert outcome.kind == OutcomeKind.UNRECOGNIZED
        assert outcome.error.kind == VoiceErrorKind.UNRECOGNIZED
        assert not controller.has_pending_submit
        submit_draft.assert_not_awaited()
        assert controller.state == SessionState.IDLE

    async def test_cancel_pending_submit(self, make_controller, recognizer_factory, submit_draft):
        """Test a scheduled submission can be cancelled for manual editing."""
        controller = make_controller()
        controller.start()
        await recognizer_factory.last.events.on_result("latte che scade tra 5 giorni")

        assert controller.has_pending_submit
        assert controller.cancel_pending_submit() == 1

        await asyncio.sleep(0.6)
        submit_draft.assert_not_awaited()
        assert controller.cancel_pending_submit() == 0

    async def test_submit_failure_is_logged_not_raised(self, make_controller, recognizer_factory, test_settings):
        """Test a failing persistence collaborator does not break the controller."""
        settings = test_settings.model_copy(update={"auto_submit_delay_seconds": 0.0})
        submit_draft = AsyncMock(side_effect=InventoryUnavailableError("Inventory rejected item"))
        controller = make_controller(settings=settings, submit_draft=submit_draft)
        controller.start()

        await recognizer_factory.last.events.on_result("pane tra 2 giorni")
        await asyncio.sleep(0.05)

        submit_draft.assert_awaited_once()
        assert controller.state == SessionState.IDLE
        assert controller.start()

    async def test_start_refused_while_processing(self, make_controller, recognizer_factory):
        """Test start is refused while a transcript is being processed."""
        release = asyncio.Event()

        async def slow_fetch():
            await release.wait()
            return []

        controller = make_controller(fetch_items=slow_fetch)
        controller.start()
        task = asyncio.create_task(recognizer_factory.last.events.on_result("cosa scade oggi"))
        await asyncio.sleep(0)

        assert controller.state == SessionState.PROCESSING
        assert not controller.start()
        assert len(recognizer_factory.created) == 1

        release.set()
        outcome = await task

        assert outcome.kind == OutcomeKind.QUERY_RESULT
        assert controller.state == SessionState.IDLE


@pytest.mark.unit
class TestCancelAndErrors:
    """Tests for cancellation, recognition errors and silent endings."""

    async def test_cancel(self, make_controller, recognizer_factory, outcomes, fetch_items):
        """Test cancel stops the recognizer and discards later events."""
        controller = make_controller()
        controller.start()
        recognizer = recognizer_factory.last

        controller.cancel()

        assert controller.state == SessionState.IDLE
        assert recognizer.stop_calls == 1
        assert await recognizer.events.on_result("cosa scade oggi") is None
        recognizer.events.on_end()
        assert recognizer.stop_calls == 1
        assert outcomes == []
        fetch_items.assert_not_awaited()

    def test_cancel_when_idle_is_a_no_op(self, make_controller):
        """Test cancel without an active session changes nothing."""
        controller = make_controller()

        controller.cancel()

        assert controller.state == SessionState.IDLE

    def test_recognition_error(self, make_controller, recognizer_factory, outcomes):
        """Test a recognizer error reports RECOGNITION_FAILED and releases the recognizer."""
        controller = make_controller()
        controller.start()
        recognizer = recognizer_factory.last

        outcome = recognizer.events.on_error("no-speech")

        assert outcome.kind == OutcomeKind.ERROR
        assert outcome.error.kind == VoiceErrorKind.RECOGNITION_FAILED
        assert outcome.error.message == "Errore riconoscimento"
        assert outcomes == [outcome]
        assert controller.state == SessionState.IDLE
        assert recognizer.stop_calls == 1

    def test_end_without_result(self, make_controller, recognizer_factory, outcomes):
        """Test a session ending silently returns to idle without an outcome."""
        controller = make_controller()
        controller.start()
        recognizer = recognizer_factory.last

        recognizer.events.on_start()
        recognizer.events.on_end()

        assert controller.state == SessionState.IDLE
        assert recognizer.stop_calls == 1
        assert outcomes == []

    async def test_end_after_result_does_not_stop_twice(self, make_controller, recognizer_factory):
        """Test the end event that follows a result is ignored."""
        controller = make_controller()
        controller.start()
        recognizer = recognizer_factory.last

        await recognizer.events.on_result("cosa scade oggi")
        recognizer.events.on_end()

        assert recognizer.stop_calls == 1

    def test_controllers_are_independent(self, fetch_items, submit_draft, test_settings):
        """Test two controllers do not share sessions."""
        first_factory, second_factory = FakeRecognizerFactory(), FakeRecognizerFactory()
        listener = MagicMock()
        first = VoiceSessionController(
            recognizer_factory=first_factory,
            fetch_items=fetch_items,
            submit_draft=submit_draft,
            settings=test_settings,
            on_outcome=listener,
        )
        second = VoiceSessionController(
            recognizer_factory=second_factory,
            fetch_items=fetch_items,
            submit_draft=submit_draft,
            settings=test_settings,
        )

        first.start()
        second.start()
        first.cancel()

        assert first.state == SessionState.IDLE
        assert second.state == SessionState.LISTENING
        assert second_factory.last.stop_calls == 0
        listener.assert_not_called()
