"""Tests for request validation of journal payloads and parameters."""

from datetime import date
from uuid import UUID

import pytest

from learnlog.application.journal.dtos import UNSET
from learnlog.domain.common.value_objects.ids import LogId, ThemeId
from learnlog.domain.journal.entities import MetaNoteCategory
from learnlog.exceptions import RequestValidationFailedError
from learnlog.infrastructure.journal.validation import (
    parse_flag,
    validate_category_param,
    validate_date_param,
    validate_limit,
    validate_log_create,
    validate_log_patch,
    validate_note_create,
    validate_note_patch,
    validate_theme_create,
    validate_theme_patch,
    validate_uuid_param,
)

THEME_ID = "0190a1b2-c3d4-7e5f-8a9b-0c1d2e3f4a5b"
LOG_ID = "0190a1b2-c3d4-7e5f-8a9b-0c1d2e3f4a5c"


class TestThemeValidation:
    def test_valid_create(self):
        data = validate_theme_create({"name": "Rust", "goal": "Book", "isCompleted": True}).unwrap()
        assert data.name == "Rust"
        assert data.is_completed is True
        assert data.short_name is None

    def test_not_an_object(self):
        result = validate_theme_create("name=Rust")
        assert result.field_errors == {"body": "Request body must be a JSON object"}

    def test_collects_field_errors(self):
        result = validate_theme_create({"name": "", "goal": 1, "isCompleted": 1})
        assert not result.is_valid
        assert set(result.field_errors) == {"name", "goal", "isCompleted"}
        assert result.first_error == "name is required and must be a non-empty string"

    def test_unwrap_raises_with_all_errors(self):
        with pytest.raises(RequestValidationFailedError) as exc_info:
            validate_theme_create({}).unwrap()
        assert exc_info.value.message == "name is required and must be a non-empty string"
        assert set(exc_info.value.field_errors) == {"name", "goal"}

    def test_patch_tracks_provided_fields(self):
        patch = validate_theme_patch({"shortName": None}).unwrap()
        assert patch.changes() == {"short_name": None}
        assert patch.name is UNSET

    def test_patch_boolean_is_strict(self):
        result = validate_theme_patch({"isCompleted": "true"})
        assert result.field_errors == {"isCompleted": "isCompleted must be a boolean"}

    def test_empty_patch(self):
        result = validate_theme_patch({})
        assert result.field_errors == {"body": "At least one field must be provided"}


class TestLogValidation:
    def test_valid_create(self):
        data = validate_log_create(
            {"themeId": THEME_ID, "date": "2024-02-29", "summary": "s", "tags": ["a"]}
        ).unwrap()
        assert data.theme_id == ThemeId(UUID(THEME_ID))
        assert data.date == date(2024, 2, 29)
        assert data.tags == ["a"]

    def test_uppercase_uuid_accepted(self):
        data = validate_log_create(
            {"themeId": THEME_ID.upper(), "date": "2024-01-01", "summary": "s"}
        ).unwrap()
        assert data.theme_id.value == UUID(THEME_ID)

    @pytest.mark.parametrize(
        ("raw", "message"),
        [
            ("2023-02-29", "date must be a valid date"),
            ("2023-2-1", "date must be in YYYY-MM-DD format"),
            ("2023-02-01T00:00:00", "date must be in YYYY-MM-DD format"),
        ],
    )
    def test_dates(self, raw, message):
        result = validate_log_create({"themeId": THEME_ID, "date": raw, "summary": "s"})
        assert result.field_errors == {"date": message}

    def test_patch_null_details_clears(self):
        patch = validate_log_patch({"details": None}).unwrap()
        assert patch.changes() == {"details": None}

    def test_patch_null_summary_rejected(self):
        result = validate_log_patch({"summary": None})
        assert result.field_errors == {"summary": "summary must be a non-empty string"}


class TestNoteValidation:
    def test_valid_create(self):
        data = validate_note_create(
            {
                "category": "EMOTION",
                "body": "b",
                "themeIds": [THEME_ID, THEME_ID],
                "relatedLogId": LOG_ID,
            }
        ).unwrap()
        assert data.category is MetaNoteCategory.EMOTION
        assert data.theme_ids == [ThemeId(UUID(THEME_ID))]
        assert data.related_log_id == LogId(UUID(LOG_ID))

    def test_null_related_log(self):
        data = validate_note_create({"category": "INSIGHT", "body": "b", "relatedLogId": None})
        assert data.unwrap().related_log_id is None

    def test_patch_related_log_null_is_a_change(self):
        patch = validate_note_patch({"relatedLogId": None}).unwrap()
        assert patch.changes() == {"related_log_id": None}

    def test_patch_theme_ids_empty_list_is_a_change(self):
        patch = validate_note_patch({"themeIds": []}).unwrap()
        assert patch.changes() == {"theme_ids": []}

    def test_patch_ignores_note_date(self):
        result = validate_note_patch({"noteDate": "2025-01-01"})
        assert result.field_errors == {"body": "At least one field must be provided"}


class TestParameters:
    @pytest.mark.parametrize(("raw", "expected"), [(None, 50), ("", 50), ("1", 1), ("200", 200)])
    def test_limit(self, raw, expected):
        assert validate_limit(raw).unwrap() == expected

    @pytest.mark.parametrize("raw", ["0", "201", "1.5", "ten"])
    def test_invalid_limit(self, raw):
        assert validate_limit(raw).field_errors == {"limit": "limit must be between 1 and 200"}

    def test_uuid_param(self):
        assert validate_uuid_param(THEME_ID).unwrap() == UUID(THEME_ID)
        assert validate_uuid_param("123").field_errors == {"id": "id must be a valid UUID"}
        assert validate_uuid_param(THEME_ID.replace("-", "")).field_errors

    def test_date_param(self):
        assert validate_date_param("2025-01-15", "start").unwrap() == date(2025, 1, 15)
        assert validate_date_param("15/01/2025", "start").field_errors == {
            "start": "start must be in YYYY-MM-DD format"
        }

    def test_category_param(self):
        assert validate_category_param("QUESTION").unwrap() is MetaNoteCategory.QUESTION
        assert not validate_category_param("question").is_valid

    @pytest.mark.parametrize(("raw", "expected"), [("true", True), ("True", False), ("1", False)])
    def test_flag(self, raw, expected):
        assert parse_flag(raw) is expected
