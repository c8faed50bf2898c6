"""
Integration tests for Content API endpoints.

Tests the /content/* dashboard endpoints with fake repository dependencies.
"""
from unittest.mock import patch

import pytest
from fastapi.testclient import TestClient

from backend.main import app
from api.deps import get_exercise_catalog_repo
from tests.fakes import FakeExerciseCatalogRepository, create_catalog_repo, make_exercise, make_method


@pytest.fixture
def catalog_repo() -> FakeExerciseCatalogRepository:
    """Two finished exercises, one with gaps, one malformed document."""
    repo = create_catalog_repo(num_exercises=2)
    repo.seed(
        [
            make_exercise(
                "squat",
                name="סקוואט",
                methods=[
                    make_method("Park", ["park"], lifestyleTags=["parent"]),
                    make_method(
                        "Gym",
                        ["gym"],
                        video="https://cdn/gym.mp4",
                        workflow={"filmed": True, "audio": False, "edited": False, "uploaded": False},
                    ),
                ],
                requiredLocations=["park", "office"],
                movementGroup="squat",
            ),
            {"id": "zz-broken", "execution_methods": {"0": {}}},
        ]
    )
    return repo


@pytest.fixture
def client(catalog_repo):
    """TestClient with fake catalog repository."""
    app.dependency_overrides[get_exercise_catalog_repo] = lambda: catalog_repo

    yield TestClient(app)

    app.dependency_overrides.clear()


# =============================================================================
# Matrix Endpoint Tests
# =============================================================================


@pytest.mark.integration
class TestContentMatrixEndpoint:
    """Tests for GET /content/matrix."""

    def test_matrix(self, client):
        response = client.get("/content/matrix")

        assert response.status_code == 200
        data = response.json()
        assert data["count"] == 3
        assert data["malformedIds"] == ["zz-broken"]
        # park without media, office missing
        assert data["totalCriticalGaps"] == 2
        # gym filmed but not edited
        assert data["totalWorkflowGaps"] == 1

    def test_matrix_row_shape(self, client):
        rows = client.get("/content/matrix").json()["rows"]
        squat = next(row for row in rows if row["exerciseId"] == "squat")

        assert squat["name"] == "סקוואט"
        assert squat["criticalGapCount"] == 2
        assert [entry["methodName"] for entry in squat["locations"]["park"]] == ["Park"]
        assert squat["locations"]["gym"][0]["productionStatus"] == "in_post_production"
        messages = [gap["message"] for gap in squat["gapsDetailed"]]
        assert "office: missing required execution method" in messages

    def test_matrix_filter(self, client):
        data = client.get("/content/matrix", params={"lifestyle_tag": "parent"}).json()
        assert [row["exerciseId"] for row in data["rows"]] == ["squat"]

    def test_matrix_filter_repeated_params(self, client):
        """Repeated values of one dimension are alternatives."""
        data = client.get(
            "/content/matrix", params=[("location", "office"), ("location", "gym")]
        ).json()
        assert [row["exerciseId"] for row in data["rows"]] == ["squat"]

    def test_matrix_invalid_location_returns_422(self, client):
        response = client.get("/content/matrix", params={"location": "moon"})
        assert response.status_code == 422

    def test_matrix_without_database_returns_503(self):
        """Without Supabase credentials the dashboard is unavailable."""
        with patch("api.deps.get_supabase_client", return_value=None):
            response = TestClient(app).get("/content/matrix")
        assert response.status_code == 503


# =============================================================================
# Tasks Endpoint Tests
# =============================================================================


@pytest.mark.integration
class TestContentTasksEndpoint:
    """Tests for GET /content/tasks."""

    def test_tasks(self, client):
        response = client.get("/content/tasks")

        assert response.status_code == 200
        data = response.json()
        assert data["total"] == 2
        assert [t["methodName"] for t in data["tasks"]["forFilming"]] == ["Park"]
        assert [t["methodName"] for t in data["tasks"]["forAudio"]] == ["Gym"]
        assert data["tasks"]["forEditing"] == []
        assert data["tasks"]["forUpload"] == []


# =============================================================================
# Smart Swap Endpoint Tests
# =============================================================================


@pytest.mark.integration
class TestSmartSwapEndpoint:
    """Tests for GET /content/smart-swap."""

    def test_smart_swap(self, client):
        data = client.get("/content/smart-swap").json()

        assert [e["exerciseId"] for e in data["missing"]] == ["squat"]
        assert data["autoAssignable"] == [
            {
                "exerciseId": "squat",
                "name": "סקוואט",
                "movementGroup": "squat",
                "suggestedId": "pistol_squat",
            }
        ]
        assert data["manualOnly"] == []
        assert data["baseMovementIds"] == ["push_up"]


# =============================================================================
# Batch Workflow Endpoint Tests
# =============================================================================


@pytest.mark.integration
class TestBatchWorkflowEndpoint:
    """Tests for POST /content/workflow/batch."""

    def test_batch(self, client, catalog_repo):
        response = client.post(
            "/content/workflow/batch",
            json={
                "updates": [
                    {"exerciseId": "squat", "methodIndex": 0, "step": "filmed"},
                    {"exerciseId": "squat", "methodIndex": 1, "step": "audio"},
                    {"exerciseId": "missing", "methodIndex": 0, "step": "filmed"},
                ]
            },
        )

        assert response.status_code == 200
        data = response.json()
        assert data["success"] == 2
        assert data["failed"] == 1
        assert data["errors"] == ["missing[0]: Exercise not found: missing"]
        methods = catalog_repo.stored("squat")["execution_methods"]
        assert methods[0]["workflow"]["filmed"] is True
        assert methods[1]["workflow"]["audio"] is True

    def test_empty_batch_returns_422(self, client):
        response = client.post("/content/workflow/batch", json={"updates": []})
        assert response.status_code == 422
