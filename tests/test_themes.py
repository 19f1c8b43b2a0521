"""Tests for theme API endpoints."""

from typing import Any

import pytest
from fastapi import status
from fastapi.testclient import TestClient
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import Session

from conftest import USER_A, CreateFunc, insert_theme, load_row
from learnlog import models
from learnlog.domain.common.resource_state import ResourceState
from learnlog.infrastructure.journal.repositories import ThemeRepository

MISSING_ID = "00000000-0000-0000-0000-0000000000ff"


class TestCreateTheme:
    """Test suite for POST /themes."""

    def test_create_theme_success(self, client: TestClient) -> None:
        response = client.post(
            "/themes",
            json={"name": "Rust", "goal": "Read the Rust book", "shortName": "rs"},
        )

        assert response.status_code == status.HTTP_201_CREATED
        data = response.json()
        assert data["name"] == "Rust"
        assert data["goal"] == "Read the Rust book"
        assert data["shortName"] == "rs"
        assert data["isCompleted"] is False
        assert data["state"] == "ACTIVE"
        assert data["ownerId"] == str(USER_A)
        assert data["createdAt"] is not None
        assert data["stateChangedAt"] is not None

    def test_blank_short_name_is_stored_as_null(self, client: TestClient) -> None:
        response = client.post("/themes", json={"name": "Go", "goal": "Concurrency", "shortName": " "})
        assert response.status_code == status.HTTP_201_CREATED
        assert response.json()["shortName"] is None

    def test_unknown_fields_are_ignored(self, client: TestClient) -> None:
        response = client.post(
            "/themes",
            json={"name": "Go", "goal": "Concurrency", "ownerId": MISSING_ID, "state": "DELETED"},
        )
        assert response.status_code == status.HTTP_201_CREATED
        data = response.json()
        assert data["ownerId"] == str(USER_A)
        assert data["state"] == "ACTIVE"

    @pytest.mark.parametrize(
        ("payload", "message"),
        [
            ({"goal": "g"}, "name is required and must be a non-empty string"),
            ({"name": "  ", "goal": "g"}, "name is required and must be a non-empty string"),
            ({"name": "n"}, "goal is required and must be a non-empty string"),
            ({"name": "n", "goal": 3}, "goal is required and must be a non-empty string"),
            ({"name": "n", "goal": "g", "isCompleted": "yes"}, "isCompleted must be a boolean"),
            ({"name": "n", "goal": "g", "shortName": 1}, "shortName must be a string or null"),
        ],
    )
    def test_create_theme_validation(
        self, client: TestClient, payload: dict[str, Any], message: str
    ) -> None:
        response = client.post("/themes", json=payload)
        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json() == {"error": {"code": "BadRequest", "message": message}}


class TestListThemes:
    """Test suite for GET /themes."""

    def test_lists_oldest_first(self, client: TestClient, create_theme: CreateFunc) -> None:
        first = create_theme(name="First")
        second = create_theme(name="Second")

        response = client.get("/themes")

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert [item["id"] for item in data["items"]] == [first["id"], second["id"]]
        assert data["nextCursor"] is None

    def test_completed_hidden_by_default(
        self, client: TestClient, create_theme: CreateFunc
    ) -> None:
        open_theme = create_theme(name="Open")
        done = create_theme(name="Done", isCompleted=True)

        default_ids = [t["id"] for t in client.get("/themes").json()["items"]]
        all_ids = [t["id"] for t in client.get("/themes?includeCompleted=true").json()["items"]]

        assert default_ids == [open_theme["id"]]
        assert all_ids == [open_theme["id"], done["id"]]

    def test_only_literal_true_enables_flag(
        self, client: TestClient, create_theme: CreateFunc
    ) -> None:
        create_theme(name="Done", isCompleted=True)
        response = client.get("/themes?includeCompleted=1")
        assert response.json()["items"] == []

    def test_archived_hidden_by_default(
        self, client: TestClient, db_session: Session, create_theme: CreateFunc
    ) -> None:
        active = create_theme(name="Active")
        archived = insert_theme(db_session, state=ResourceState.ARCHIVED)

        default_ids = [t["id"] for t in client.get("/themes").json()["items"]]
        archived_ids = [t["id"] for t in client.get("/themes?includeArchived=true").json()["items"]]

        assert default_ids == [active["id"]]
        assert str(archived.id) in archived_ids

    def test_archived_theme_is_readable(self, client: TestClient, db_session: Session) -> None:
        archived = insert_theme(db_session, state=ResourceState.ARCHIVED)
        response = client.get(f"/themes/{archived.id}")
        assert response.status_code == status.HTTP_200_OK
        assert response.json()["state"] == "ARCHIVED"

    def test_deleted_never_listed(self, client: TestClient, create_theme: CreateFunc) -> None:
        theme = create_theme()
        client.delete(f"/themes/{theme['id']}")

        response = client.get("/themes?includeCompleted=true&includeArchived=true")
        assert response.json()["items"] == []

    @pytest.mark.parametrize("limit", ["0", "201", "abc", "-1"])
    def test_invalid_limit(self, client: TestClient, limit: str) -> None:
        response = client.get(f"/themes?limit={limit}")
        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["error"]["message"] == "limit must be between 1 and 200"

    def test_invalid_cursor(self, client: TestClient) -> None:
        response = client.get("/themes?cursor=not-a-cursor")
        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["error"]["message"] == "Invalid cursor format"


class TestGetAndUpdateTheme:
    """Test suite for GET and PATCH /themes/{id}."""

    def test_get_theme(self, client: TestClient, create_theme: CreateFunc) -> None:
        theme = create_theme()
        response = client.get(f"/themes/{theme['id']}")
        assert response.status_code == status.HTTP_200_OK
        assert response.json() == theme

    def test_get_invalid_id(self, client: TestClient) -> None:
        response = client.get("/themes/123")
        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["error"]["message"] == "id must be a valid UUID"

    def test_get_missing_theme(self, client: TestClient) -> None:
        response = client.get(f"/themes/{MISSING_ID}")
        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.json() == {"error": {"code": "NotFound", "message": "Theme not found"}}

    def test_patch_updates_only_given_fields(
        self, client: TestClient, create_theme: CreateFunc
    ) -> None:
        theme = create_theme(shortName="rs")

        response = client.patch(f"/themes/{theme['id']}", json={"isCompleted": True})

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["isCompleted"] is True
        assert data["name"] == theme["name"]
        assert data["shortName"] == "rs"
        assert data["createdAt"] == theme["createdAt"]

    def test_patch_null_short_name_clears_it(
        self, client: TestClient, create_theme: CreateFunc
    ) -> None:
        theme = create_theme(shortName="rs")
        response = client.patch(f"/themes/{theme['id']}", json={"shortName": None})
        assert response.status_code == status.HTTP_200_OK
        assert response.json()["shortName"] is None

    def test_patch_rejects_null_name(self, client: TestClient, create_theme: CreateFunc) -> None:
        theme = create_theme()
        response = client.patch(f"/themes/{theme['id']}", json={"name": None})
        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["error"]["message"] == "name must be a non-empty string"

    def test_empty_patch(self, client: TestClient, create_theme: CreateFunc) -> None:
        theme = create_theme()
        response = client.patch(f"/themes/{theme['id']}", json={"unknown": 1})
        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["error"]["message"] == "At least one field must be provided"

    def test_patch_missing_theme(self, client: TestClient) -> None:
        response = client.patch(f"/themes/{MISSING_ID}", json={"name": "x"})
        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_patch_deleted_theme(self, client: TestClient, create_theme: CreateFunc) -> None:
        theme = create_theme()
        client.delete(f"/themes/{theme['id']}")
        response = client.patch(f"/themes/{theme['id']}", json={"name": "x"})
        assert response.status_code == status.HTTP_404_NOT_FOUND


class TestDeleteTheme:
    """Test suite for DELETE /themes/{id} and its cascade."""

    def test_delete_theme(
        self, client: TestClient, db_session: Session, create_theme: CreateFunc
    ) -> None:
        theme = create_theme()

        response = client.delete(f"/themes/{theme['id']}")

        assert response.status_code == status.HTTP_204_NO_CONTENT
        assert response.content == b""
        assert client.get(f"/themes/{theme['id']}").status_code == status.HTTP_404_NOT_FOUND
        row = load_row(db_session, models.Theme, theme["id"])
        assert row.state == ResourceState.DELETED

    def test_delete_twice_is_not_found(self, client: TestClient, create_theme: CreateFunc) -> None:
        theme = create_theme()
        assert client.delete(f"/themes/{theme['id']}").status_code == status.HTTP_204_NO_CONTENT
        assert client.delete(f"/themes/{theme['id']}").status_code == status.HTTP_404_NOT_FOUND

    def test_delete_archived_theme(self, client: TestClient, db_session: Session) -> None:
        archived = insert_theme(db_session, state=ResourceState.ARCHIVED)
        response = client.delete(f"/themes/{archived.id}")
        assert response.status_code == status.HTTP_204_NO_CONTENT

    def test_delete_cascades_to_logs_and_linked_notes(
        self,
        client: TestClient,
        db_session: Session,
        create_theme: CreateFunc,
        create_log: CreateFunc,
        create_note: CreateFunc,
    ) -> None:
        theme = create_theme(name="Doomed")
        other = create_theme(name="Survivor")
        log = create_log(theme["id"])
        other_log = create_log(other["id"])
        linked = create_note(themeIds=[theme["id"]])
        shared = create_note(themeIds=[theme["id"], other["id"]])
        unlinked = create_note(themeIds=[other["id"]])

        response = client.delete(f"/themes/{theme['id']}")
        assert response.status_code == status.HTTP_204_NO_CONTENT

        theme_row = load_row(db_session, models.Theme, theme["id"])
        log_row = load_row(db_session, models.LearningLogEntry, log["id"])
        linked_row = load_row(db_session, models.MetaNote, linked["id"])
        shared_row = load_row(db_session, models.MetaNote, shared["id"])
        assert theme_row.state == ResourceState.DELETED
        assert log_row.state == ResourceState.DELETED
        assert linked_row.state == ResourceState.DELETED
        assert shared_row.state == ResourceState.DELETED
        # One timestamp for the whole cascade
        assert (
            log_row.state_changed_at
            == linked_row.state_changed_at
            == theme_row.state_changed_at
        )

        assert client.get(f"/logs/{other_log['id']}").status_code == status.HTTP_200_OK
        assert client.get(f"/notes/{unlinked['id']}").status_code == status.HTTP_200_OK
        assert client.get(f"/logs/{log['id']}").status_code == status.HTTP_404_NOT_FOUND
        assert client.get(f"/notes/{shared['id']}").status_code == status.HTTP_404_NOT_FOUND

    def test_failed_cascade_rolls_back(
        self,
        client: TestClient,
        db_session: Session,
        create_theme: CreateFunc,
        create_log: CreateFunc,
        create_note: CreateFunc,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        theme = create_theme()
        log = create_log(theme["id"])
        note = create_note(themeIds=[theme["id"]])

        def fail(*args: Any, **kwargs: Any) -> int:  # noqa: ANN401
            raise OperationalError("UPDATE meta_notes", {}, Exception("disk I/O error"))

        monkeypatch.setattr(ThemeRepository, "_delete_linked_notes", fail)

        response = client.delete(f"/themes/{theme['id']}")

        assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
        assert response.json() == {
            "error": {"code": "InternalServerError", "message": "Failed to delete theme"}
        }
        assert load_row(db_session, models.Theme, theme["id"]).state == ResourceState.ACTIVE
        assert (
            load_row(db_session, models.LearningLogEntry, log["id"]).state
            == ResourceState.ACTIVE
        )
        assert load_row(db_session, models.MetaNote, note["id"]).state == ResourceState.ACTIVE
