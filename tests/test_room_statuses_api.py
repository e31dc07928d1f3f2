"""Tests for the /room-statuses endpoints with the database patched out."""

from datetime import date
from unittest.mock import MagicMock, patch

import pytest
from fastapi.testclient import TestClient

from helpers import make_status
from innkeep.api.factory import create_app
from innkeep.domain.room_status import RoomStatusNotFoundError

REPO = "innkeep.infra.repositories.room_status_repository"


@pytest.fixture
def client():
    return TestClient(create_app(role="public"))


@pytest.fixture
def db():
    """Patch txn and the repository calls; yields the mocks."""
    with (
        patch("innkeep.infra.db.txn", return_value=MagicMock()),
        patch(f"{REPO}.get_room_status") as get_status,
        patch(f"{REPO}.save_room_status") as save_status,
        patch(f"{REPO}.append_cleaning_entry") as append_entry,
    ):
        yield {"get": get_status, "save": save_status, "append": append_entry}


def test_list_statuses(client):
    statuses = [make_status("DESERT ROSE"), make_status("CORAL", status="maintenance")]
    with (
        patch("innkeep.infra.db.txn", return_value=MagicMock()),
        patch(f"{REPO}.list_room_statuses", return_value=statuses) as list_statuses,
    ):
        response = client.get("/room-statuses")

    assert response.status_code == 200
    assert list_statuses.call_args.kwargs == {"with_history": True}
    assert [s["room_name"] for s in response.json()] == ["DESERT ROSE", "CORAL"]


class TestMaintenance:
    def test_start(self, client, db):
        db["get"].return_value = make_status()
        response = client.post(
            "/room-statuses/DESERT ROSE/maintenance",
            json={"start_date": "2025-06-01", "end_date": "2025-06-05", "reason": "Leak"},
        )

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "maintenance"
        assert body["maintenance_window"] == {"start_date": "2025-06-01", "end_date": "2025-06-05"}
        saved = db["save"].call_args.args[1]
        assert saved.maintenance_window.end_date == date(2025, 6, 5)

    def test_inverted_window_is_422(self, client, db):
        db["get"].return_value = make_status()
        response = client.post(
            "/room-statuses/DESERT ROSE/maintenance",
            json={"start_date": "2025-06-05", "end_date": "2025-06-01"},
        )
        assert response.status_code == 422
        db["save"].assert_not_called()

    def test_occupied_room_is_409(self, client, db):
        db["get"].return_value = make_status(status="occupied")
        response = client.post("/room-statuses/DESERT ROSE/maintenance", json={})
        assert response.status_code == 409

    def test_unknown_room_is_404(self, client, db):
        db["get"].side_effect = RoomStatusNotFoundError("NOWHERE")
        response = client.post("/room-statuses/NOWHERE/maintenance", json={})
        assert response.status_code == 404

    def test_complete(self, client, db):
        db["get"].return_value = make_status(status="maintenance")
        response = client.post("/room-statuses/DESERT ROSE/maintenance/complete")
        assert response.status_code == 200
        assert response.json()["status"] == "available"
        assert response.json()["housekeeping_status"] == "dirty"


class TestCleaning:
    def test_log_cleaning(self, client, db):
        db["get"].return_value = make_status(housekeeping="dirty")
        response = client.post(
            "/room-statuses/DESERT ROSE/cleaning",
            json={"type": "checkout_cleaning", "staff_name": "Amina", "cleaned_at": "2025-06-03T09:00:00Z"},
        )

        assert response.status_code == 201
        body = response.json()
        assert body["housekeeping_status"] == "clean"
        assert body["cleaning_history"][0]["staff_name"] == "Amina"
        room_name, entry = db["append"].call_args.args[1:]
        assert room_name == "DESERT ROSE"
        assert entry.type.value == "checkout_cleaning"

    def test_unknown_type_rejected(self, client, db):
        response = client.post("/room-statuses/DESERT ROSE/cleaning", json={"type": "polish"})
        assert response.status_code == 422
        db["get"].assert_not_called()


class TestHousekeeping:
    def test_patch(self, client, db):
        db["get"].return_value = make_status()
        with patch("innkeep.api.routes.room_statuses.logger") as mock_logger:
            response = client.patch(
                "/room-statuses/DESERT ROSE/housekeeping",
                json={"housekeeping_status": "needs_attention"},
            )

        assert response.status_code == 200
        assert response.json()["housekeeping_status"] == "needs_attention"
        fields = mock_logger.info.call_args.kwargs["extra"]["extra_fields"]
        assert fields["room_name"] == "DESERT ROSE"
        assert fields["housekeeping_status"] == "needs_attention"
