"""Pytest configuration and fixtures for unit tests."""

from datetime import datetime

import pytest

from pantry_voice.core.config import Settings
from pantry_voice.core.lexicon import ITALIAN, Lexicon
from tests.unit.mocks import NOW, FakeRecognizerFactory


@pytest.fixture
def now() -> datetime:
    """Fixed evaluation moment (2024-06-15 10:00, naive)."""
    return NOW


@pytest.fixture
def lexicon() -> Lexicon:
    """Italian lexicon."""
    return ITALIAN


@pytest.fixture
def test_settings() -> Settings:
    """Settings with the production defaults, independent of the environment."""
    return Settings(
        _env_file=None,
        inventory_api_url="http://inventory.test",
        inventory_api_key=None,
        speech_locale="it-IT",
        auto_submit_delay_seconds=0.5,
        partial_auto_submit_delay_seconds=1.0,
    )


@pytest.fixture
def recognizer_factory() -> FakeRecognizerFactory:
    """Provides a fresh recognizer factory for each test."""
    return FakeRecognizerFactory()
