"""
Tests for the FastAPI web application.
"""

import json
from datetime import date
from unittest.mock import patch

import pytest
from fastapi.testclient import TestClient

from daily_habits.app import app

TODAY = date(2024, 1, 3)


@pytest.fixture
def client():
    """Create a test client for the FastAPI app."""
    return TestClient(app)


@pytest.fixture
def habits_file(tmp_path, monkeypatch):
    """Habits file with two sample habits."""
    path = tmp_path / "habits.json"
    path.write_text(
        json.dumps(
            [
                {"name": "read", "streak": 0, "history": ["2024-01-02", "2024-01-03"]},
                {"name": "run", "streak": 0, "history": ["2024-01-03"]},
            ]
        )
    )
    monkeypatch.setenv("HABITS_PATH", str(path))
    return path


@pytest.fixture(autouse=True)
def fixed_today():
    with patch("daily_habits.app.get_today", return_value=TODAY), patch(
        "daily_habits.streak_calculator.get_today", return_value=TODAY
    ):
        yield


class TestHealthEndpoint:
    """Tests for the /health endpoint."""

    def test_health_returns_ok(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json() == {"status": "ok"}


class TestHabitsEndpoint:
    """Tests for the /api/habits endpoints."""

    def test_lists_habits_with_streaks(self, client, habits_file):
        response = client.get("/api/habits")

        assert response.status_code == 200
        data = response.json()
        assert [h["name"] for h in data] == ["read", "run"]
        assert data[0]["streak"] == {
            "current": 2,
            "longest": 2,
            "active": True,
            "last_entry": "2024-01-03",
        }

    def test_get_single_habit(self, client, habits_file):
        response = client.get("/api/habits/run")

        assert response.status_code == 200
        assert response.json()["history"] == ["2024-01-03"]

    def test_unknown_habit_is_404(self, client, habits_file):
        response = client.get("/api/habits/swim")
        assert response.status_code == 404

    def test_corrupt_file_is_500(self, client, habits_file):
        habits_file.write_text("not json")
        response = client.get("/api/habits")

        assert response.status_code == 500
        assert "Corrupt habits file" in response.json()["detail"]

    def test_undecodable_file_is_500(self, client, habits_file):
        habits_file.write_bytes(b"\xff\xfe")
        response = client.get("/api/habits")

        assert response.status_code == 500
        assert "Corrupt habits file" in response.json()["detail"]

    def test_does_not_modify_file(self, client, habits_file):
        before = habits_file.read_text()
        client.get("/api/habits")
        assert habits_file.read_text() == before


class TestHeatmapEndpoint:
    """Tests for the /api/heatmap endpoint."""

    def test_blends_all_habits_by_default(self, client, habits_file):
        response = client.get("/api/heatmap", params={"width": 20})

        assert response.status_code == 200
        data = response.json()
        assert data["today"] == "2024-01-03"
        assert data["habits"] == ["read", "run"]
        assert data["columns"] == 10
        assert data["cells"] == [
            {"x": 18, "y": 2, "intensity": 255, "date": "2024-01-03"},
            {"x": 18, "y": 1, "intensity": 127, "date": "2024-01-02"},
        ]
        assert data["blank"] == [{"x": 18, "y": y} for y in range(3, 7)]

    def test_selected_habit(self, client, habits_file):
        response = client.get("/api/heatmap", params={"names": ["run"], "width": 20})

        data = response.json()
        assert data["habits"] == ["run"]
        assert [cell["intensity"] for cell in data["cells"]] == [255]

    def test_no_matching_habits_is_404(self, client, habits_file):
        response = client.get("/api/heatmap", params={"names": ["swim"]})
        assert response.status_code == 404

    def test_width_must_hold_a_column(self, client, habits_file):
        response = client.get("/api/heatmap", params={"width": 1})
        assert response.status_code == 422
