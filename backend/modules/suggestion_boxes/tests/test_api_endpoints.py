# backend/modules/suggestion_boxes/tests/test_api_endpoints.py

import csv
import io
import pytest
from datetime import datetime, timedelta

from fastapi.testclient import TestClient

from modules.suggestion_boxes.models.box_models import Suggestion, SuggestionBox
from modules.suggestion_boxes.services.access_control import INVALID_RATING


def _create_box(client, headers, **overrides):
    payload = {"title": "Team feedback"}
    payload.update(overrides)
    response = client.post("/suggestion-boxes", json=payload, headers=headers)
    assert response.status_code == 200
    return response.json()["box"]


def _parse_timestamp(value):
    return datetime.fromisoformat(value.replace("Z", "+00:00"))


def _submit(client, box_id, content="Great app", **extra):
    payload = {"boxId": box_id, "content": content}
    payload.update(extra)
    response = client.post("/suggestions", json=payload)
    assert response.status_code == 200
    return response.json()["suggestion"]


class TestSuggestionBoxesAPI:
    """Test cases for /suggestion-boxes"""

    def test_create_box_success(self, client: TestClient, headers_a, admin_a):
        response = client.post(
            "/suggestion-boxes",
            json={"title": "Office", "description": "Ideas for the office", "color": "#10B981"},
            headers=headers_a,
        )

        assert response.status_code == 200
        box = response.json()["box"]
        assert box["title"] == "Office"
        assert box["description"] == "Ideas for the office"
        assert box["color"] == "#10B981"
        assert box["owner_id"] == admin_a.id
        assert "id" in box
        assert "created_at" in box
        assert "updated_at" in box

    def test_create_box_defaults(self, client: TestClient, headers_a):
        box = _create_box(client, headers_a)

        assert box["description"] == ""
        assert box["color"] == "#3B82F6"

    def test_create_box_unauthorized(self, client: TestClient):
        response = client.post("/suggestion-boxes", json={"title": "Nope"})

        assert response.status_code == 401
        assert response.json() == {"error": "Unauthorized"}

    def test_create_box_unauthorized_before_validation(self, client: TestClient):
        response = client.post("/suggestion-boxes", json={})

        assert response.status_code == 401

    def test_create_box_invalid_token(self, client: TestClient):
        response = client.post(
            "/suggestion-boxes",
            json={"title": "Nope"},
            headers={"Authorization": "Bearer not-a-token"},
        )

        assert response.status_code == 401

    def test_create_box_missing_title(self, client: TestClient, headers_a):
        response = client.post("/suggestion-boxes", json={}, headers=headers_a)

        assert response.status_code == 400
        assert response.json() == {"error": "title is required"}

    def test_create_box_blank_title(self, client: TestClient, headers_a):
        response = client.post("/suggestion-boxes", json={"title": "  "}, headers=headers_a)

        assert response.status_code == 400
        assert response.json()["error"] == "Title is required"

    def test_create_box_invalid_color(self, client: TestClient, headers_a):
        response = client.post(
            "/suggestion-boxes", json={"title": "Box", "color": "blue"}, headers=headers_a
        )

        assert response.status_code == 400

    def test_create_box_owner_not_settable(self, client: TestClient, headers_a, admin_b):
        response = client.post(
            "/suggestion-boxes",
            json={"title": "Box", "owner_id": admin_b.id},
            headers=headers_a,
        )

        assert response.status_code == 400
        assert "owner_id" in response.json()["error"]

    def test_list_boxes_only_own(self, client: TestClient, headers_a, headers_b):
        _create_box(client, headers_a, title="Mine")
        _create_box(client, headers_b, title="Theirs")

        response = client.get("/suggestion-boxes", headers=headers_a)

        assert response.status_code == 200
        assert [box["title"] for box in response.json()["boxes"]] == ["Mine"]

    def test_list_boxes_unauthorized(self, client: TestClient):
        response = client.get("/suggestion-boxes")

        assert response.status_code == 401

    def test_timestamps_carry_utc_offset(self, client: TestClient, headers_a):
        box = _create_box(client, headers_a)
        suggestion = _submit(client, box["id"])
        listed = client.get("/suggestion-boxes", headers=headers_a).json()["boxes"][0]

        for value in (
            box["created_at"],
            box["updated_at"],
            listed["created_at"],
            suggestion["created_at"],
        ):
            assert _parse_timestamp(value).utcoffset() == timedelta(0)

    def test_get_box_public(self, client: TestClient, headers_a):
        box = _create_box(client, headers_a)

        response = client.get(f"/suggestion-boxes/{box['id']}")

        assert response.status_code == 200
        assert response.json()["box"]["id"] == box["id"]

    def test_get_box_not_found(self, client: TestClient):
        response = client.get("/suggestion-boxes/does-not-exist")

        assert response.status_code == 404
        assert "not found" in response.json()["error"].lower()

    def test_submission_link(self, client: TestClient, headers_a):
        box = _create_box(client, headers_a)

        response = client.get(
            f"/suggestion-boxes/{box['id']}/link",
            params={"origin": "https://boxes.example.com"},
        )

        assert response.status_code == 200
        assert response.json() == {
            "box_id": box["id"],
            "url": f"https://boxes.example.com/submit/{box['id']}",
        }

    def test_update_box_success(self, client: TestClient, headers_a):
        box = _create_box(client, headers_a, description="Old", color="#000000")

        response = client.put(
            f"/suggestion-boxes/{box['id']}",
            json={"title": "Renamed"},
            headers=headers_a,
        )

        assert response.status_code == 200
        updated = response.json()["box"]
        assert updated["title"] == "Renamed"
        assert updated["description"] == ""
        assert updated["color"] == "#3B82F6"

    def test_update_box_forbidden(self, client: TestClient, headers_a, headers_b):
        box = _create_box(client, headers_a)

        response = client.put(
            f"/suggestion-boxes/{box['id']}", json={"title": "Hijack"}, headers=headers_b
        )

        assert response.status_code == 403
        assert response.json() == {"error": "Forbidden"}

    def test_update_missing_box_forbidden(self, client: TestClient, headers_a):
        response = client.put(
            "/suggestion-boxes/missing", json={"title": "Ghost"}, headers=headers_a
        )

        assert response.status_code == 403

    def test_update_box_unauthorized(self, client: TestClient, headers_a):
        box = _create_box(client, headers_a)

        response = client.put(f"/suggestion-boxes/{box['id']}", json={"title": "X"})

        assert response.status_code == 401

    def test_delete_box_success(self, client: TestClient, db_session, headers_a):
        box = _create_box(client, headers_a)
        _submit(client, box["id"])

        response = client.delete(f"/suggestion-boxes/{box['id']}", headers=headers_a)

        assert response.status_code == 200
        assert response.json() == {"success": True}
        assert db_session.query(SuggestionBox).filter_by(id=box["id"]).count() == 0
        assert db_session.query(Suggestion).filter_by(box_id=box["id"]).count() == 0

    def test_delete_box_forbidden(self, client: TestClient, headers_a, headers_b):
        box = _create_box(client, headers_a)

        response = client.delete(f"/suggestion-boxes/{box['id']}", headers=headers_b)

        assert response.status_code == 403
        assert client.get(f"/suggestion-boxes/{box['id']}").status_code == 200


class TestSuggestionsAPI:
    """Test cases for /suggestions"""

    def test_submit_without_authentication(self, client: TestClient, headers_a):
        box = _create_box(client, headers_a)

        response = client.post(
            "/suggestions", json={"boxId": box["id"], "content": "More coffee", "rating": 4}
        )

        assert response.status_code == 200
        suggestion = response.json()["suggestion"]
        assert suggestion["box_id"] == box["id"]
        assert suggestion["content"] == "More coffee"
        assert suggestion["rating"] == 4
        assert suggestion["admin_rating"] is None
        assert suggestion["is_anonymous"] is True

    def test_submit_zero_rating_means_none(self, client: TestClient, headers_a):
        box = _create_box(client, headers_a)

        suggestion = _submit(client, box["id"], rating=0)

        assert suggestion["rating"] is None

    def test_submit_invalid_rating(self, client: TestClient, headers_a):
        box = _create_box(client, headers_a)

        response = client.post(
            "/suggestions", json={"boxId": box["id"], "content": "Hi", "rating": 6}
        )

        assert response.status_code == 400
        assert response.json() == {"error": INVALID_RATING}

    def test_submit_missing_content(self, client: TestClient, headers_a):
        box = _create_box(client, headers_a)

        response = client.post("/suggestions", json={"boxId": box["id"]})

        assert response.status_code == 400
        assert response.json() == {"error": "content is required"}

    def test_submit_blank_content(self, client: TestClient, headers_a):
        box = _create_box(client, headers_a)

        response = client.post("/suggestions", json={"boxId": box["id"], "content": " "})

        assert response.status_code == 400
        assert response.json() == {"error": "Content is required"}

    def test_submit_missing_box_id(self, client: TestClient):
        response = client.post("/suggestions", json={"content": "Orphan"})

        assert response.status_code == 400
        assert response.json() == {"error": "boxId is required"}

    @pytest.mark.parametrize("rating", [True, False, "4", 4.5])
    def test_submit_rating_must_be_integer(self, client: TestClient, db_session, headers_a, rating):
        box = _create_box(client, headers_a)

        response = client.post(
            "/suggestions", json={"boxId": box["id"], "content": "Hi", "rating": rating}
        )

        assert response.status_code == 400
        assert "rating" in response.json()["error"]
        assert db_session.query(Suggestion).count() == 0

    def test_submit_unknown_box(self, client: TestClient):
        response = client.post("/suggestions", json={"boxId": "missing", "content": "Hi"})

        assert response.status_code == 404

    def test_submit_cannot_claim_identity(self, client: TestClient, headers_a):
        box = _create_box(client, headers_a)

        response = client.post(
            "/suggestions",
            json={"boxId": box["id"], "content": "Hi", "isAnonymous": False},
        )

        assert response.status_code == 400
        assert response.json() == {"error": "Unknown field: isAnonymous"}

    def test_list_suggestions_owner(self, client: TestClient, headers_a):
        box = _create_box(client, headers_a)
        _submit(client, box["id"], "One")

        response = client.get(f"/suggestions/{box['id']}", headers=headers_a)

        assert response.status_code == 200
        assert [s["content"] for s in response.json()["suggestions"]] == ["One"]

    def test_list_suggestions_forbidden(self, client: TestClient, headers_a, headers_b):
        box = _create_box(client, headers_a)

        response = client.get(f"/suggestions/{box['id']}", headers=headers_b)

        assert response.status_code == 403

    def test_list_suggestions_unauthorized(self, client: TestClient, headers_a):
        box = _create_box(client, headers_a)

        response = client.get(f"/suggestions/{box['id']}")

        assert response.status_code == 401

    def test_list_suggestions_missing_box(self, client: TestClient, headers_a):
        response = client.get("/suggestions/missing", headers=headers_a)

        assert response.status_code == 403

    def test_rate_suggestion_success(self, client: TestClient, headers_a):
        box = _create_box(client, headers_a)
        suggestion = _submit(client, box["id"], rating=2)

        response = client.post(
            f"/suggestions/{suggestion['id']}/rate", json={"rating": 5}, headers=headers_a
        )

        assert response.status_code == 200
        rated = response.json()["suggestion"]
        assert rated["admin_rating"] == 5
        assert rated["rating"] == 2

    def test_rate_suggestion_out_of_range(self, client: TestClient, headers_a):
        box = _create_box(client, headers_a)
        suggestion = _submit(client, box["id"])

        response = client.post(
            f"/suggestions/{suggestion['id']}/rate", json={"rating": 0}, headers=headers_a
        )

        assert response.status_code == 400
        assert response.json() == {"error": INVALID_RATING}

    @pytest.mark.parametrize("rating", [True, "4", 4.5])
    def test_rate_suggestion_requires_integer(self, client: TestClient, headers_a, rating):
        box = _create_box(client, headers_a)
        suggestion = _submit(client, box["id"])

        response = client.post(
            f"/suggestions/{suggestion['id']}/rate", json={"rating": rating}, headers=headers_a
        )

        assert response.status_code == 400
        listed = client.get(f"/suggestions/{box['id']}", headers=headers_a).json()
        assert listed["suggestions"][0]["admin_rating"] is None

    def test_rate_suggestion_missing_rating(self, client: TestClient, headers_a):
        box = _create_box(client, headers_a)
        suggestion = _submit(client, box["id"])

        response = client.post(
            f"/suggestions/{suggestion['id']}/rate", json={}, headers=headers_a
        )

        assert response.status_code == 400

    def test_rate_suggestion_not_found(self, client: TestClient, headers_a):
        response = client.post(
            "/suggestions/missing/rate", json={"rating": 3}, headers=headers_a
        )

        assert response.status_code == 404

    def test_rate_suggestion_forbidden(self, client: TestClient, headers_a, headers_b):
        box = _create_box(client, headers_a)
        suggestion = _submit(client, box["id"])

        response = client.post(
            f"/suggestions/{suggestion['id']}/rate", json={"rating": 3}, headers=headers_b
        )

        assert response.status_code == 403

    def test_rate_suggestion_unauthorized(self, client: TestClient, headers_a):
        box = _create_box(client, headers_a)
        suggestion = _submit(client, box["id"])

        response = client.post(f"/suggestions/{suggestion['id']}/rate", json={"rating": 3})

        assert response.status_code == 401


class TestExportAPI:
    """Test cases for /export"""

    def test_export_csv(self, client: TestClient, headers_a):
        box = _create_box(client, headers_a)
        _submit(client, box["id"], 'He said "hi"', rating=3)

        response = client.get(f"/export/{box['id']}", headers=headers_a)

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/csv")
        assert (
            response.headers["content-disposition"]
            == f'attachment; filename="suggestions-{box["id"]}.csv"'
        )
        lines = response.text.split("\n")
        assert lines[0] == "ID,Content,Rating,Admin Rating,Anonymous,Created At"
        assert '"He said ""hi"""' in lines[1]
        assert not response.text.endswith("\n")

    def test_export_forbidden(self, client: TestClient, headers_a, headers_b):
        box = _create_box(client, headers_a)

        response = client.get(f"/export/{box['id']}", headers=headers_b)

        assert response.status_code == 403

    def test_export_unauthorized(self, client: TestClient, headers_a):
        box = _create_box(client, headers_a)

        response = client.get(f"/export/{box['id']}")

        assert response.status_code == 401


class TestEndToEnd:
    """Owner creates a box, the public submits, the owner reviews and exports"""

    def test_full_flow(self, client: TestClient, headers_a, headers_b):
        box = _create_box(client, headers_a, title="All hands")

        public = client.get(f"/suggestion-boxes/{box['id']}")
        assert public.json()["box"]["title"] == "All hands"

        first = _submit(client, box["id"], "Shorter meetings", rating=4)
        _submit(client, box["id"], "Longer lunch")

        rated = client.post(
            f"/suggestions/{first['id']}/rate", json={"rating": 5}, headers=headers_a
        )
        assert rated.status_code == 200

        listed = client.get(f"/suggestions/{box['id']}", headers=headers_a)
        suggestions = {s["id"]: s for s in listed.json()["suggestions"]}
        assert len(suggestions) == 2
        assert suggestions[first["id"]]["admin_rating"] == 5

        assert client.get(f"/export/{box['id']}", headers=headers_b).status_code == 403

        exported = client.get(f"/export/{box['id']}", headers=headers_a)
        rows = list(csv.reader(io.StringIO(exported.text)))
        assert len(rows) == 3
        by_id = {row[0]: row for row in rows[1:]}
        assert by_id[first["id"]][1:5] == ["Shorter meetings", "4", "5", "true"]

        deleted = client.delete(f"/suggestion-boxes/{box['id']}", headers=headers_a)
        assert deleted.json() == {"success": True}
        assert client.get(f"/suggestion-boxes/{box['id']}").status_code == 404
        assert client.get("/suggestion-boxes", headers=headers_a).json() == {"boxes": []}


class TestServiceEndpoints:
    def test_health(self, client: TestClient):
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "ok"}

    def test_unknown_route_uses_error_envelope(self, client: TestClient):
        response = client.get("/no-such-route")

        assert response.status_code == 404
        assert "error" in response.json()
