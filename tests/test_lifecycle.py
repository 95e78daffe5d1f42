import re

import pytest

from substation_backend.lifecycle import (
    COMPLETION_WARNING,
    ChecklistIncompleteError,
    TaskLifecycle,
    TaskPhase,
    TaskStateError,
    UnknownChecklistItemError,
    format_duration,
)
from substation_backend.report import DEFAULT_NOTES, DEFAULT_RESULT


def _check_all(lifecycle: TaskLifecycle, skip: int = 0) -> None:
    items = lifecycle.task.maintenance_items
    for item in items[: len(items) - skip]:
        lifecycle.toggle_checklist_item(item.id)


def test_start_task_moves_idle_to_in_progress(a205, clock) -> None:
    lifecycle = TaskLifecycle(clock)
    assert lifecycle.phase == TaskPhase.IDLE
    assert lifecycle.duration() == "00:00:00"

    task = lifecycle.start_task(a205)

    assert lifecycle.phase == TaskPhase.IN_PROGRESS
    assert task.start_time == clock.now
    assert task.end_time is None
    assert task.report is None
    assert len(task.inspection_items) == 15
    assert len(task.maintenance_items) == 12


def test_start_task_requires_idle(alerts, clock) -> None:
    lifecycle = TaskLifecycle(clock)
    lifecycle.start_task(alerts[0])

    with pytest.raises(TaskStateError):
        lifecycle.start_task(alerts[1])
    assert lifecycle.task.alert.id == "A-205"


def test_double_toggle_restores_item(a205, clock) -> None:
    lifecycle = TaskLifecycle(clock)
    lifecycle.start_task(a205)

    item = lifecycle.toggle_checklist_item("load-test")
    assert item.checked is True
    item = lifecycle.toggle_checklist_item("load-test")
    assert item.checked is False
    assert lifecycle.phase == TaskPhase.IN_PROGRESS


def test_toggle_unknown_item_raises(a205, clock) -> None:
    lifecycle = TaskLifecycle(clock)
    lifecycle.start_task(a205)

    with pytest.raises(UnknownChecklistItemError):
        lifecycle.toggle_checklist_item("does-not-exist")


def test_toggle_requires_running_task(a205, clock) -> None:
    lifecycle = TaskLifecycle(clock)
    with pytest.raises(TaskStateError):
        lifecycle.toggle_checklist_item("load-test")


def test_checking_every_item_makes_task_ready_and_unchecking_reverts(a205, clock) -> None:
    lifecycle = TaskLifecycle(clock)
    lifecycle.start_task(a205)

    _check_all(lifecycle)
    assert lifecycle.phase == TaskPhase.READY_TO_COMPLETE
    assert lifecycle.all_checklist_items_completed

    lifecycle.toggle_checklist_item("final-inspection")
    assert lifecycle.phase == TaskPhase.IN_PROGRESS


def test_complete_task_blocked_with_one_item_unchecked(a205, clock) -> None:
    lifecycle = TaskLifecycle(clock)
    lifecycle.start_task(a205)
    _check_all(lifecycle, skip=1)

    with pytest.raises(ChecklistIncompleteError) as excinfo:
        lifecycle.complete_task()

    assert str(excinfo.value) == COMPLETION_WARNING
    assert lifecycle.phase == TaskPhase.IN_PROGRESS
    assert lifecycle.is_task_completed is False
    assert lifecycle.task.end_time is None


def test_complete_task_succeeds_when_all_checked(a205, clock) -> None:
    lifecycle = TaskLifecycle(clock)
    lifecycle.start_task(a205)
    _check_all(lifecycle)
    clock.advance(minutes=42, seconds=7)

    task = lifecycle.complete_task()

    assert lifecycle.phase == TaskPhase.COMPLETED
    assert task.end_time == clock.now
    assert lifecycle.duration() == "00:42:07"


def test_completed_task_rejects_toggles_and_second_completion(a205, clock) -> None:
    lifecycle = TaskLifecycle(clock)
    lifecycle.start_task(a205)
    _check_all(lifecycle)
    lifecycle.complete_task()

    with pytest.raises(TaskStateError):
        lifecycle.toggle_checklist_item("load-test")
    with pytest.raises(TaskStateError):
        lifecycle.complete_task()


def test_duration_runs_then_freezes(a205, clock) -> None:
    lifecycle = TaskLifecycle(clock)
    lifecycle.start_task(a205)

    readings = []
    for _ in range(3):
        clock.advance(seconds=61)
        readings.append(lifecycle.duration())

    assert readings == ["00:01:01", "00:02:02", "00:03:03"]
    assert all(re.fullmatch(r"\d{2}:\d{2}:\d{2}", value) for value in readings)

    _check_all(lifecycle)
    lifecycle.complete_task()
    frozen = lifecycle.duration()
    clock.advance(hours=2)
    assert lifecycle.duration() == frozen


def test_format_duration_pads_and_keeps_long_hours(clock) -> None:
    start = clock.now
    clock.advance(hours=101, minutes=2, seconds=3)
    assert format_duration(start, clock.now) == "101:02:03"
    assert format_duration(clock.now, start) == "00:00:00"


def test_end_task_clears_everything_from_any_phase(a205, clock) -> None:
    lifecycle = TaskLifecycle(clock)
    lifecycle.end_task()
    assert lifecycle.phase == TaskPhase.IDLE

    lifecycle.start_task(a205)
    lifecycle.toggle_checklist_item("load-test")
    lifecycle.end_task()

    assert lifecycle.phase == TaskPhase.IDLE
    assert lifecycle.task is None
    assert lifecycle.snapshot()["maintenance_checklist"]["total"] == 0


def test_new_task_does_not_carry_progress_across_alerts(alerts, clock) -> None:
    lifecycle = TaskLifecycle(clock)
    lifecycle.start_task(alerts[0])
    lifecycle.toggle_checklist_item("load-test")
    lifecycle.toggle_inspection_item("station")
    lifecycle.end_task()

    task = lifecycle.start_task(alerts[1])
    assert not any(item.checked for item in task.maintenance_items)
    assert not any(item.checked for item in task.inspection_items)


def test_inspection_submission_requires_full_progress(a205, clock) -> None:
    lifecycle = TaskLifecycle(clock)
    lifecycle.start_task(a205)

    with pytest.raises(ChecklistIncompleteError):
        lifecycle.submit_inspection_checklist()

    for item in list(lifecycle.task.inspection_items):
        lifecycle.toggle_inspection_item(item.id)
    assert lifecycle.inspection_progress() == 100

    record = lifecycle.submit_inspection_checklist()
    assert record["station_id"] == "A-205"
    assert record["completion_rate"] == 100
    assert len(record["items"]) == 15
    assert lifecycle.task.checklist_submitted is True

    with pytest.raises(TaskStateError):
        lifecycle.toggle_inspection_item("station")


def test_reset_inspection_checklist_regenerates_items(a205, clock) -> None:
    lifecycle = TaskLifecycle(clock)
    lifecycle.start_task(a205)
    for item in list(lifecycle.task.inspection_items):
        lifecycle.toggle_inspection_item(item.id)
    lifecycle.submit_inspection_checklist()

    items = lifecycle.reset_inspection_checklist()

    assert len(items) == 15
    assert lifecycle.inspection_progress() == 0
    assert lifecycle.task.checklist_submitted is False


def test_generate_report_requires_completed_task(a205, clock) -> None:
    lifecycle = TaskLifecycle(clock)
    lifecycle.start_task(a205)

    with pytest.raises(TaskStateError):
        lifecycle.generate_report("John Smith")

    _check_all(lifecycle)
    lifecycle.complete_task()
    report = lifecycle.generate_report("John Smith")

    assert lifecycle.task.report == report
    assert DEFAULT_RESULT in report
    assert DEFAULT_NOTES in report


def test_recorded_outcome_appears_in_report(a205, clock) -> None:
    lifecycle = TaskLifecycle(clock)
    lifecycle.start_task(a205)
    _check_all(lifecycle)
    lifecycle.complete_task()
    lifecycle.record_outcome("Arrester insulator replaced.", "Spare insulator requested.")

    report = lifecycle.generate_report("Jane Doe")

    assert "Arrester insulator replaced." in report
    assert "Spare insulator requested." in report
    assert "- **Technician**: Jane Doe" in report
    assert DEFAULT_RESULT not in report
