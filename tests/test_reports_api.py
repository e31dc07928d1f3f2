"""Tests for the /reports endpoints."""

from datetime import date
from unittest.mock import MagicMock, patch

import pytest
from fastapi.testclient import TestClient

from helpers import make_booking, make_entry
from innkeep.api.factory import create_app

ROUTE = "innkeep.api.routes.reports"


@pytest.fixture
def client():
    return TestClient(create_app(role="public"))


class TestDailyReport:
    def test_report_for_date(self, client):
        bookings = [
            make_booking(f"bk-{i}", room=f"R{i}", check_in="2025-06-02", check_out="2025-06-05")
            for i in range(8)
        ]
        entries = [make_entry("Room Charge", "1000.00"), make_entry("Tax", "180.00")]
        with patch(f"{ROUTE}._load_daily_inputs", return_value=(bookings, entries, 15)) as load:
            response = client.get("/reports/daily", params={"target_date": "2025-06-03"})

        assert response.status_code == 200
        load.assert_called_once_with(date(2025, 6, 3))
        body = response.json()
        assert body["date"] == "2025-06-03"
        assert body["rooms"]["rented"] == 8
        assert body["rooms"]["vacant"] == 7
        assert body["guests"]["in_house"] == 16
        assert float(body["revenue"]["adr"]) == 125.0
        assert float(body["revenue"]["rev_par"]) == 66.67
        assert float(body["revenue"]["total_revenue"]) == 1180.0

    def test_defaults_to_hotel_today(self, client):
        with (
            patch(f"{ROUTE}.hotel_today", return_value=date(2025, 6, 10)),
            patch(f"{ROUTE}._load_daily_inputs", return_value=([], [], 0)) as load,
        ):
            response = client.get("/reports/daily")

        assert response.status_code == 200
        load.assert_called_once_with(date(2025, 6, 10))
        assert float(response.json()["rooms"]["occupancy_percentage"]) == 0.0


class TestTrends:
    def test_window(self, client):
        entries = [make_entry("Room Charge", "100", day=date(2025, 6, 3))]
        summaries = [(date(2025, 6, 2), 4)]
        with patch(f"{ROUTE}._load_trend_inputs", return_value=(entries, summaries, 8)) as load:
            response = client.get("/reports/trends", params={"end_date": "2025-06-03", "days": 3})

        assert response.status_code == 200
        load.assert_called_once_with(date(2025, 6, 1), date(2025, 6, 3))
        body = response.json()
        assert body["from"] == "2025-06-01"
        assert body["to"] == "2025-06-03"
        assert len(body["revenue"]) == 3
        assert float(body["revenue"][-1]["income"]) == 100.0
        assert float(body["occupancy"][0]["occupancy_rate"]) == 50.0

    def test_range_limit(self, client, monkeypatch):
        monkeypatch.setenv("MAX_RANGE_DAYS", "30")
        with patch(f"{ROUTE}._load_trend_inputs") as load:
            response = client.get("/reports/trends", params={"days": 31})

        assert response.status_code == 422
        load.assert_not_called()

    def test_days_must_be_positive(self, client):
        assert client.get("/reports/trends", params={"days": 0}).status_code == 422


class TestTrendInputs:
    def test_audits_loaded_for_requested_window(self, client):
        cur = MagicMock()
        txn = MagicMock()
        txn.return_value.__enter__.return_value = cur
        repos = "innkeep.infra.repositories"
        with (
            patch("innkeep.infra.db.txn", txn),
            patch(f"{repos}.ledger_repository.list_ledger_entries", return_value=[]),
            patch(f"{repos}.rooms_repository.count_active_rooms", return_value=10),
            patch(
                f"{repos}.night_audit_repository.list_completed_audits",
                return_value=[(date(2025, 1, 3), 6)],
            ) as audits,
        ):
            response = client.get("/reports/trends", params={"end_date": "2025-01-07", "days": 7})

        assert response.status_code == 200
        audits.assert_called_once_with(cur, date(2025, 1, 1), date(2025, 1, 7))
        assert response.json()["occupancy"] == [
            {"date": "2025-01-03", "name": "Fri", "occupancy_rate": 60.0}
        ]
