"""Tests for the status state machine."""

import pytest
from datetime import date, datetime

from maintenance_tracker.core.status_engine import ALLOWED_TRANSITIONS, StatusEngine
from maintenance_tracker.exceptions import (
    ImmutableRecordError,
    InvalidTransitionError,
    ValidationError,
)
from maintenance_tracker.models.task import Frequency, Priority, TaskStatus

NOW = datetime(2024, 6, 3, 10, 30)


@pytest.fixture
def engine():
    return StatusEngine(clock=lambda: NOW)


@pytest.fixture
def completed_task(make_task):
    return make_task(status=TaskStatus.COMPLETED, completion_date=NOW, actual_duration=1.5)


def _invariant_holds(task):
    return (task.completion_date is not None) == (task.status == TaskStatus.COMPLETED)


class TestTransitionTable:
    """Tests for the allowed edges."""

    @pytest.mark.parametrize("current,target", [
        (TaskStatus.SCHEDULED, TaskStatus.IN_PROGRESS),
        (TaskStatus.SCHEDULED, TaskStatus.CANCELLED),
        (TaskStatus.SCHEDULED, TaskStatus.PARTIAL),
        (TaskStatus.IN_PROGRESS, TaskStatus.CANCELLED),
        (TaskStatus.IN_PROGRESS, TaskStatus.PARTIAL),
        (TaskStatus.PARTIAL, TaskStatus.IN_PROGRESS),
        (TaskStatus.PARTIAL, TaskStatus.CANCELLED),
    ])
    def test_allowed_edges(self, engine, make_task, current, target):
        task = make_task(status=current)
        updated = engine.transition(task, target)

        assert updated.status == target
        assert _invariant_holds(updated)
        assert task.status == current  # original untouched

    @pytest.mark.parametrize("current,target", [
        (TaskStatus.IN_PROGRESS, TaskStatus.SCHEDULED),
        (TaskStatus.PARTIAL, TaskStatus.SCHEDULED),
        (TaskStatus.SCHEDULED, TaskStatus.SCHEDULED),
        (TaskStatus.PARTIAL, TaskStatus.PARTIAL),
    ])
    def test_rejected_edges(self, engine, make_task, current, target):
        with pytest.raises(InvalidTransitionError):
            engine.transition(make_task(status=current), target)

    @pytest.mark.parametrize("target", list(TaskStatus))
    def test_completed_is_terminal(self, engine, completed_task, target):
        with pytest.raises(InvalidTransitionError):
            engine.transition(completed_task, target, {"actual_duration": 1})

    @pytest.mark.parametrize("target", list(TaskStatus))
    def test_cancelled_is_terminal(self, engine, make_task, target):
        with pytest.raises(InvalidTransitionError):
            engine.transition(make_task(status=TaskStatus.CANCELLED), target, {"actual_duration": 1})

    def test_unknown_target_status(self, engine, make_task):
        with pytest.raises(InvalidTransitionError):
            engine.transition(make_task(), "archived")

    def test_string_target_accepted(self, engine, make_task):
        assert engine.transition(make_task(), "in-progress").status == TaskStatus.IN_PROGRESS

    def test_table_has_no_terminal_exits(self):
        assert ALLOWED_TRANSITIONS[TaskStatus.COMPLETED] == frozenset()
        assert ALLOWED_TRANSITIONS[TaskStatus.CANCELLED] == frozenset()

    def test_partial_keeps_notes_only(self, engine, make_task):
        updated = engine.transition(
            make_task(),
            TaskStatus.PARTIAL,
            {"notes": "Replaced one of two filters", "priority": "critical", "scheduled_date": "2030-01-01"},
        )

        assert updated.notes == "Replaced one of two filters"
        assert updated.priority == Priority.MEDIUM
        assert updated.scheduled_date == date(2024, 6, 3)

    def test_cancel_ignores_fields(self, engine, make_task):
        updated = engine.transition(make_task(notes="keep"), TaskStatus.CANCELLED, {"notes": "dropped"})
        assert updated.notes == "keep"

    def test_transition_to_completed_uses_complete(self, engine, make_task):
        updated = engine.transition(
            make_task(status=TaskStatus.PARTIAL),
            TaskStatus.COMPLETED,
            {"actual_duration": 2, "notes": "done"},
        )

        assert updated.status == TaskStatus.COMPLETED
        assert updated.completion_date == NOW
        assert updated.actual_duration == 2.0

    def test_transition_to_completed_requires_duration(self, engine, make_task):
        with pytest.raises(ValidationError):
            engine.transition(make_task(), TaskStatus.COMPLETED, {"notes": "done"})


class TestComplete:
    """Tests for StatusEngine.complete."""

    @pytest.mark.parametrize("status", [TaskStatus.SCHEDULED, TaskStatus.IN_PROGRESS, TaskStatus.PARTIAL])
    def test_complete_sets_fields(self, engine, make_task, status):
        task = make_task(status=status)
        completed = engine.complete(task, 1.5, "Seals replaced")

        assert completed.status == TaskStatus.COMPLETED
        assert completed.completion_date == NOW
        assert completed.actual_duration == 1.5
        assert completed.notes == "Seals replaced"
        assert _invariant_holds(completed)

    def test_complete_keeps_existing_notes_without_new_ones(self, engine, make_task):
        completed = engine.complete(make_task(notes="Bring gasket kit"), 1)
        assert completed.notes == "Bring gasket kit"

    def test_complete_cancelled_fails_without_mutation(self, engine, make_task):
        task = make_task(status=TaskStatus.CANCELLED)
        with pytest.raises(InvalidTransitionError):
            engine.complete(task, 1.0, "late")

        assert task.status == TaskStatus.CANCELLED
        assert task.completion_date is None
        assert task.actual_duration is None

    def test_complete_twice_fails(self, engine, completed_task):
        with pytest.raises(InvalidTransitionError):
            engine.complete(completed_task, 2.0)

    @pytest.mark.parametrize("duration", [None, 0, -1, "2", True, float("nan"), float("inf")])
    def test_complete_requires_positive_duration(self, engine, make_task, duration):
        with pytest.raises(ValidationError):
            engine.complete(make_task(), duration)

    def test_requires_follow_up(self, engine, make_task):
        weekly = engine.complete(make_task(frequency=Frequency.WEEKLY), 1)
        one_off = engine.complete(make_task(), 1)

        assert StatusEngine.requires_follow_up(weekly)
        assert not StatusEngine.requires_follow_up(one_off)
        assert not StatusEngine.requires_follow_up(make_task(frequency=Frequency.WEEKLY))


class TestEdit:
    """Tests for StatusEngine.edit."""

    def test_edit_fields(self, engine, make_task):
        updated = engine.edit(make_task(), {
            "scheduled_date": "2024-07-01",
            "priority": "high",
            "assigned_to": "alex",
        })

        assert updated.scheduled_date == date(2024, 7, 1)
        assert updated.priority == Priority.HIGH
        assert updated.assigned_to == "alex"
        assert updated.status == TaskStatus.SCHEDULED

    def test_edit_partial_task_allowed(self, engine, make_task):
        updated = engine.edit(make_task(status=TaskStatus.PARTIAL), {"notes": "Parts ordered"})
        assert updated.notes == "Parts ordered"

    def test_edit_completed_fails(self, engine, completed_task):
        with pytest.raises(ImmutableRecordError):
            engine.edit(completed_task, {"notes": "changed"})

    def test_edit_cancelled_fails(self, engine, make_task):
        with pytest.raises(ImmutableRecordError):
            engine.edit(make_task(status=TaskStatus.CANCELLED), {"priority": "low"})

    def test_edit_rejects_status(self, engine, make_task):
        with pytest.raises(ValidationError):
            engine.edit(make_task(), {"status": "completed"})

    @pytest.mark.parametrize("field", ["id", "type", "completion_date", "actual_duration", "follow_up_of"])
    def test_edit_rejects_protected_fields(self, engine, make_task, field):
        with pytest.raises(ValidationError):
            engine.edit(make_task(), {field: "x"})

    def test_edit_rejects_unknown_fields(self, engine, make_task):
        with pytest.raises(ValidationError):
            engine.edit(make_task(), {"colour": "red"})

    def test_edit_rejects_bad_date(self, engine, make_task):
        with pytest.raises(ValidationError):
            engine.edit(make_task(), {"scheduled_date": "next tuesday"})

    def test_edit_frequency_away_from_custom_clears_days(self, engine, make_task):
        task = make_task(frequency=Frequency.CUSTOM, custom_days=10)
        updated = engine.edit(task, {"frequency": "monthly"})

        assert updated.frequency == Frequency.MONTHLY
        assert updated.custom_days is None

    def test_edit_to_custom_requires_days(self, engine, make_task):
        with pytest.raises(ValidationError):
            engine.edit(make_task(), {"frequency": "custom"})

        updated = engine.edit(make_task(), {"frequency": "custom", "custom_days": 14})
        assert updated.custom_days == 14

    def test_edit_cannot_clear_equipment(self, engine, make_task):
        with pytest.raises(ValidationError):
            engine.edit(make_task(), {"equipment_id": ""})
