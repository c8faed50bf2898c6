"""
Unit tests for UpdateMethodWorkflowUseCase.

Tests for:
- Single step updates and derived production status
- Error mapping (not found, bad index, order, store failure)
- Batch updates continuing past failures
- Stored documents keeping fields the model does not know
"""

import logging
from datetime import datetime, timezone

import pytest

from application.use_cases import (
    UpdateMethodWorkflowUseCase,
    WorkflowUpdate,
)
from domain.models import ProductionStatus, WorkflowStep
from tests.fakes import FakeExerciseCatalogRepository, make_exercise, make_method

NOW = datetime(2024, 6, 1, 12, 0, tzinfo=timezone.utc)


# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture
def catalog_repo() -> FakeExerciseCatalogRepository:
    """Catalog with one two-method exercise carrying extra stats."""
    return FakeExerciseCatalogRepository(
        [
            make_exercise(
                "pull-up",
                name="מתח",
                methods=[
                    make_method("Park bar", ["park"], video="https://cdn/park.mp4", coachNote="grip"),
                    make_method("Door bar", ["home"]),
                ],
                stats={"views": 12},
            )
        ]
    )


@pytest.fixture
def use_case(catalog_repo) -> UpdateMethodWorkflowUseCase:
    return UpdateMethodWorkflowUseCase(catalog_repo=catalog_repo, clock=lambda: NOW)


# =============================================================================
# Single Update Tests
# =============================================================================


@pytest.mark.unit
class TestExecute:
    """Tests for single workflow updates."""

    def test_mark_filmed(self, use_case):
        """Marking filmed moves the method to post-production."""
        result = use_case.mark_filmed("pull-up", 0)

        assert result.success is True
        assert result.workflow.filmed is True
        assert result.workflow.filmed_at == NOW
        assert result.production_status == ProductionStatus.IN_POST_PRODUCTION

    def test_update_is_persisted(self, use_case, catalog_repo):
        """The stored document carries the new workflow."""
        use_case.execute("pull-up", 1, WorkflowStep.FILMED, True)

        stored = catalog_repo.stored("pull-up")
        workflow = stored["execution_methods"][1]["workflow"]
        assert workflow["filmed"] is True
        assert workflow["filmedAt"].startswith("2024-06-01T12:00:00")
        assert stored["execution_methods"][0]["workflow"]["filmed"] is False

    def test_unknown_fields_survive(self, use_case, catalog_repo):
        """Fields outside the model are kept on write."""
        use_case.mark_filmed("pull-up", 0)

        stored = catalog_repo.stored("pull-up")
        assert stored["stats"] == {"views": 12}
        assert stored["execution_methods"][0]["coachNote"] == "grip"

    def test_step_given_as_string(self, use_case):
        """Steps may be passed by value."""
        result = use_case.execute("pull-up", 0, "audio", True)
        assert result.success is True
        assert result.workflow.audio is True

    def test_clearing_a_step(self, use_case):
        """Un-completing a step clears its flag and timestamp."""
        use_case.mark_filmed("pull-up", 0)
        result = use_case.execute("pull-up", 0, WorkflowStep.FILMED, False)
        assert result.workflow.filmed is False
        assert result.workflow.filmed_at is None


# =============================================================================
# Error Tests
# =============================================================================


@pytest.mark.unit
class TestExecuteErrors:
    """Tests for rejected workflow updates."""

    def test_exercise_not_found(self, use_case):
        result = use_case.mark_filmed("missing", 0)
        assert result.success is False
        assert result.error_type == "not_found"

    def test_method_index_out_of_range(self, use_case):
        result = use_case.mark_filmed("pull-up", 5)
        assert result.success is False
        assert result.error_type == "invalid_index"
        assert "index 5" in result.error

    def test_store_failure(self, use_case, catalog_repo):
        """A failed write reports store_error."""
        catalog_repo.fail_writes = True
        result = use_case.mark_filmed("pull-up", 0)
        assert result.success is False
        assert result.error_type == "store_error"

    def test_malformed_document(self, catalog_repo):
        """A document whose methods are not a list cannot be updated."""
        catalog_repo.seed([{"id": "broken", "execution_methods": "nope"}])
        use_case = UpdateMethodWorkflowUseCase(catalog_repo=catalog_repo)
        result = use_case.mark_filmed("broken", 0)
        assert result.error_type == "malformed"

    def test_enforced_order(self, catalog_repo):
        """With ordering enabled, skipping a step is rejected and nothing is written."""
        use_case = UpdateMethodWorkflowUseCase(catalog_repo=catalog_repo, enforce_order=True)
        result = use_case.execute("pull-up", 0, WorkflowStep.UPLOADED, True)
        assert result.success is False
        assert result.error_type == "workflow_order"
        assert catalog_repo.writes == []

    def test_permissive_by_default(self, use_case):
        """Without ordering, out-of-order updates are accepted."""
        result = use_case.execute("pull-up", 0, WorkflowStep.UPLOADED, True)
        assert result.success is True

    def test_permissive_update_logs_out_of_order_steps(self, use_case, caplog):
        """Accepted out-of-order updates are reported in the log."""
        with caplog.at_level(logging.WARNING):
            use_case.execute("pull-up", 0, WorkflowStep.UPLOADED, True)
        assert "out of order" in caplog.text
        assert "uploaded" in caplog.text

    def test_in_order_update_logs_nothing(self, use_case, caplog):
        with caplog.at_level(logging.WARNING):
            use_case.mark_filmed("pull-up", 0)
        assert "out of order" not in caplog.text

    def test_localized_method_name_written_in_configured_language(self, catalog_repo):
        """Localized names collapse to the language the use case was built with."""
        catalog_repo.seed(
            [
                make_exercise(
                    "dips",
                    methods=[make_method({"he": "מקבילים", "en": "Parallel bars"}, ["park"])],
                )
            ]
        )
        use_case = UpdateMethodWorkflowUseCase(catalog_repo=catalog_repo, language="en")

        use_case.mark_filmed("dips", 0)

        assert catalog_repo.stored("dips")["execution_methods"][0]["methodName"] == "Parallel bars"


# =============================================================================
# Batch Tests
# =============================================================================


@pytest.mark.unit
class TestExecuteBatch:
    """Tests for batch workflow updates."""

    def test_batch_continues_past_failures(self, use_case):
        """Failures are counted and described; other updates still apply."""
        batch = use_case.execute_batch(
            [
                WorkflowUpdate("pull-up", 0, WorkflowStep.FILMED),
                WorkflowUpdate("missing", 0, WorkflowStep.FILMED),
                WorkflowUpdate("pull-up", 9, WorkflowStep.FILMED),
                WorkflowUpdate("pull-up", 1, WorkflowStep.AUDIO),
            ]
        )

        assert batch.success == 2
        assert batch.failed == 2
        assert batch.errors[0] == "missing[0]: Exercise not found: missing"
        assert batch.errors[1].startswith("pull-up[9]: ")
        assert len(batch.results) == 4

    def test_batch_updates_compose(self, use_case, catalog_repo):
        """Updates to the same method build on each other."""
        use_case.execute_batch(
            [
                WorkflowUpdate("pull-up", 0, WorkflowStep.FILMED),
                WorkflowUpdate("pull-up", 0, WorkflowStep.AUDIO),
            ]
        )
        workflow = catalog_repo.stored("pull-up")["execution_methods"][0]["workflow"]
        assert workflow["filmed"] is True
        assert workflow["audio"] is True

    def test_empty_batch(self, use_case):
        batch = use_case.execute_batch([])
        assert (batch.success, batch.failed, batch.errors) == (0, 0, [])
