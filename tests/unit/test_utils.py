"""Tests for time helpers and settings validation."""

from datetime import UTC, date, datetime
from zoneinfo import ZoneInfo

import pytest
from pydantic import ValidationError

from learnlog.config import Settings
from learnlog.utils import ensure_utc, local_today


class TestLocalToday:
    def test_date_rolls_over_in_reference_zone(self):
        instant = datetime(2025, 1, 15, 15, 30, tzinfo=UTC)
        assert local_today(ZoneInfo("Asia/Tokyo"), instant) == date(2025, 1, 16)
        assert local_today(ZoneInfo("UTC"), instant) == date(2025, 1, 15)

    def test_naive_instants_are_utc(self):
        assert ensure_utc(datetime(2025, 1, 15, 10, 0)) == datetime(2025, 1, 15, 10, 0, tzinfo=UTC)


class TestSettings:
    def test_unknown_timezone_rejected(self):
        with pytest.raises(ValidationError):
            Settings(NOTE_TIMEZONE="Mars/Olympus_Mons", ENVIRONMENT="test")

    def test_jwt_mode_requires_secret(self):
        with pytest.raises(ValidationError):
            Settings(AUTH_MODE="jwt", SECRET_KEY="", ENVIRONMENT="test")

    def test_mock_mode_forbidden_in_production(self):
        with pytest.raises(ValidationError):
            Settings(AUTH_MODE="mock", ENVIRONMENT="production")

    def test_note_zone(self):
        assert Settings(NOTE_TIMEZONE="Europe/Paris", ENVIRONMENT="test").note_zone == ZoneInfo(
            "Europe/Paris"
        )
