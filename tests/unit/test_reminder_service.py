"""Unit tests for expiry reminders."""

import pytest

from pantry_voice.services.reminder_service import calendar_days_left, collect_reminders
from tests.unit.mocks import item_expiring_in


@pytest.mark.unit
class TestCollectReminders:
    """Tests for collect_reminders."""

    def test_today_and_tomorrow(self, now, lexicon):
        """Test reminders are built for items expiring today or tomorrow only."""
        items = [
            item_expiring_in("latte", 0, item_id="1"),
            item_expiring_in("pane", 1, item_id="2"),
            item_expiring_in("riso", 2, item_id="3"),
            item_expiring_in("yogurt", -1, item_id="4"),
        ]

        reminders = collect_reminders(items, now, lexicon)

        assert [reminder.item_id for reminder in reminders] == ["1", "2"]

        today, tomorrow = reminders
        assert today.tag == "expiry-today-1"
        assert today.urgent
        assert today.title == "🚨 Alimento in scadenza oggi!"
        assert today.body == "latte scade oggi. Consumalo presto!"

        assert tomorrow.tag == "expiry-tomorrow-2"
        assert not tomorrow.urgent
        assert tomorrow.body == "pane scade domani. Pianifica di consumarlo!"

    def test_calendar_days_ignore_time_of_day(self, now):
        """Test the day count compares calendar dates, not moments."""
        assert calendar_days_left(item_expiring_in("latte", 1), now) == 1
        assert calendar_days_left(item_expiring_in("latte", 1), now.replace(hour=23, minute=59)) == 1

    def test_no_items(self, now, lexicon):
        """Test an empty inventory yields no reminders."""
        assert collect_reminders([], now, lexicon) == []
