"""Tests for meta note API endpoints."""

from zoneinfo import ZoneInfo

import pytest
from fastapi import status
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from conftest import USER_B, CreateFunc, insert_theme
from learnlog.utils import local_today

MISSING_ID = "00000000-0000-0000-0000-0000000000ff"
TOKYO = ZoneInfo("Asia/Tokyo")


class TestCreateNote:
    """Test suite for POST /notes."""

    def test_create_note_dated_in_reference_timezone(self, client: TestClient) -> None:
        before = local_today(TOKYO)
        response = client.post(
            "/notes",
            json={"category": "QUESTION", "body": "Why Pin?", "noteDate": "1999-01-01"},
        )
        after = local_today(TOKYO)

        assert response.status_code == status.HTTP_201_CREATED
        data = response.json()
        assert data["category"] == "QUESTION"
        assert data["body"] == "Why Pin?"
        assert data["noteDate"] in {before.isoformat(), after.isoformat()}
        assert data["themeIds"] == []
        assert data["relatedLogId"] is None

    def test_theme_ids_keep_order_without_duplicates(
        self, client: TestClient, create_theme: CreateFunc
    ) -> None:
        first = create_theme(name="First")
        second = create_theme(name="Second")

        response = client.post(
            "/notes",
            json={
                "category": "INSIGHT",
                "body": "b",
                "themeIds": [second["id"], first["id"], second["id"]],
            },
        )

        assert response.status_code == status.HTTP_201_CREATED
        assert response.json()["themeIds"] == [second["id"], first["id"]]

    def test_related_log(
        self, client: TestClient, create_theme: CreateFunc, create_log: CreateFunc
    ) -> None:
        log = create_log(create_theme()["id"])
        response = client.post(
            "/notes", json={"category": "EMOTION", "body": "Proud", "relatedLogId": log["id"]}
        )
        assert response.status_code == status.HTTP_201_CREATED
        assert response.json()["relatedLogId"] == log["id"]

    def test_unknown_theme_reference(self, client: TestClient) -> None:
        response = client.post(
            "/notes", json={"category": "INSIGHT", "body": "b", "themeIds": [MISSING_ID]}
        )
        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["error"]["message"] == "Referenced theme or log not found"

    def test_foreign_theme_reference(self, client: TestClient, db_session: Session) -> None:
        foreign = insert_theme(db_session, owner_id=USER_B)
        response = client.post(
            "/notes", json={"category": "INSIGHT", "body": "b", "themeIds": [str(foreign.id)]}
        )
        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_unknown_log_reference(self, client: TestClient) -> None:
        response = client.post(
            "/notes", json={"category": "INSIGHT", "body": "b", "relatedLogId": MISSING_ID}
        )
        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["error"]["message"] == "Referenced theme or log not found"

    @pytest.mark.parametrize(
        ("payload", "message"),
        [
            ({"body": "b"}, "category must be one of: INSIGHT, QUESTION, EMOTION"),
            ({"category": "insight", "body": "b"}, "category must be one of: INSIGHT, QUESTION, EMOTION"),
            ({"category": "INSIGHT"}, "body is required and must be a non-empty string"),
            ({"category": "INSIGHT", "body": "b", "themeIds": "x"}, "themeIds must be an array"),
            (
                {"category": "INSIGHT", "body": "b", "themeIds": ["x"]},
                "themeIds must be an array of valid UUIDs",
            ),
            (
                {"category": "INSIGHT", "body": "b", "relatedLogId": "x"},
                "relatedLogId must be a valid UUID",
            ),
        ],
    )
    def test_create_note_validation(
        self, client: TestClient, payload: dict, message: str
    ) -> None:
        response = client.post("/notes", json=payload)
        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json() == {"error": {"code": "BadRequest", "message": message}}


class TestListNotes:
    """Test suite for GET /notes."""

    def test_filter_by_category(self, client: TestClient, create_note: CreateFunc) -> None:
        create_note(category="INSIGHT")
        question = create_note(category="QUESTION")

        items = client.get("/notes?category=QUESTION").json()["items"]

        assert [item["id"] for item in items] == [question["id"]]

    def test_newest_first_within_a_day(self, client: TestClient, create_note: CreateFunc) -> None:
        first = create_note(body="one")
        second = create_note(body="two")

        items = client.get("/notes").json()["items"]

        assert [item["id"] for item in items] == [second["id"], first["id"]]

    def test_filter_by_theme(
        self, client: TestClient, create_theme: CreateFunc, create_note: CreateFunc
    ) -> None:
        theme = create_theme()
        linked = create_note(themeIds=[theme["id"]])
        create_note()

        items = client.get(f"/notes?themeId={theme['id']}").json()["items"]

        assert [item["id"] for item in items] == [linked["id"]]

    def test_date_range(self, client: TestClient, create_note: CreateFunc) -> None:
        create_note()
        assert client.get("/notes?end=2000-01-01").json()["items"] == []
        assert len(client.get("/notes?start=2000-01-01").json()["items"]) == 1

    def test_invalid_category(self, client: TestClient) -> None:
        response = client.get("/notes?category=IDEA")
        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert (
            response.json()["error"]["message"]
            == "category must be one of: INSIGHT, QUESTION, EMOTION"
        )


class TestGetNote:
    """Test suite for GET /notes/{id}."""

    def test_get_note_details(
        self,
        client: TestClient,
        create_theme: CreateFunc,
        create_log: CreateFunc,
        create_note: CreateFunc,
    ) -> None:
        theme = create_theme(name="Rust")
        log = create_log(theme["id"], summary="Ownership")
        note = create_note(themeIds=[theme["id"]], relatedLogId=log["id"])

        response = client.get(f"/notes/{note['id']}")

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["themes"] == [{"id": theme["id"], "name": "Rust"}]
        assert data["relatedLog"] == {
            "id": log["id"],
            "themeId": theme["id"],
            "date": log["date"],
            "summary": "Ownership",
        }

    def test_get_missing_note(self, client: TestClient) -> None:
        response = client.get(f"/notes/{MISSING_ID}")
        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.json() == {"error": {"code": "NotFound", "message": "Note not found"}}


class TestUpdateNote:
    """Test suite for PATCH /notes/{id}."""

    def test_replace_theme_links(
        self, client: TestClient, create_theme: CreateFunc, create_note: CreateFunc
    ) -> None:
        old = create_theme(name="Old")
        new = create_theme(name="New")
        note = create_note(themeIds=[old["id"]])

        response = client.patch(f"/notes/{note['id']}", json={"themeIds": [new["id"]]})

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["themeIds"] == [new["id"]]
        old_notes = client.get(f"/notes?themeId={old['id']}").json()["items"]
        assert old_notes == []

    def test_empty_theme_ids_unlinks_all(
        self, client: TestClient, create_theme: CreateFunc, create_note: CreateFunc
    ) -> None:
        note = create_note(themeIds=[create_theme()["id"]])
        response = client.patch(f"/notes/{note['id']}", json={"themeIds": []})
        assert response.json()["themeIds"] == []

    def test_null_related_log_unlinks(
        self,
        client: TestClient,
        create_theme: CreateFunc,
        create_log: CreateFunc,
        create_note: CreateFunc,
    ) -> None:
        log = create_log(create_theme()["id"])
        note = create_note(relatedLogId=log["id"])

        response = client.patch(f"/notes/{note['id']}", json={"relatedLogId": None})

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["relatedLogId"] is None

    def test_note_date_is_immutable(self, client: TestClient, create_note: CreateFunc) -> None:
        note = create_note()
        response = client.patch(
            f"/notes/{note['id']}", json={"body": "edited", "noteDate": "1999-01-01"}
        )
        data = response.json()
        assert data["body"] == "edited"
        assert data["noteDate"] == note["noteDate"]

    def test_patch_with_unknown_theme(self, client: TestClient, create_note: CreateFunc) -> None:
        note = create_note()
        response = client.patch(f"/notes/{note['id']}", json={"themeIds": [MISSING_ID]})
        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_patch_rejects_null_category(self, client: TestClient, create_note: CreateFunc) -> None:
        note = create_note()
        response = client.patch(f"/notes/{note['id']}", json={"category": None})
        assert response.status_code == status.HTTP_400_BAD_REQUEST


class TestDeleteNote:
    """Test suite for DELETE /notes/{id}."""

    def test_delete_note(self, client: TestClient, create_note: CreateFunc) -> None:
        note = create_note()
        assert client.delete(f"/notes/{note['id']}").status_code == status.HTTP_204_NO_CONTENT
        assert client.get(f"/notes/{note['id']}").status_code == status.HTTP_404_NOT_FOUND
        assert client.delete(f"/notes/{note['id']}").status_code == status.HTTP_404_NOT_FOUND
