# substation_backend/lifecycle.py
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Callable, List, Optional

from substation_backend.checklist import (
    checked_count,
    generate_inspection_checklist,
    generate_maintenance_checklist,
    items_by_phase,
    progress_percent,
)
from substation_backend.models import Alert, ChecklistItem, MaintenanceChecklistItem
from substation_backend.report import ReportSection, build_report_sections, compose_report

COMPLETION_WARNING = "Please complete all maintenance checklist items before ending the task!"
INSPECTION_WARNING = "Please check every inspection item before submitting the checklist."


class TaskPhase(str, Enum):
    IDLE = "idle"
    IN_PROGRESS = "in_progress"
    READY_TO_COMPLETE = "ready_to_complete"
    COMPLETED = "completed"


class LifecycleError(Exception):
    pass


class TaskStateError(LifecycleError):
    """Operation is not allowed in the current phase."""


class ChecklistIncompleteError(LifecycleError):
    """Some checklist items are still unchecked; nothing was changed."""


class UnknownChecklistItemError(LifecycleError):
    pass


def format_duration(start: datetime, end: datetime) -> str:
    seconds = max(int((end - start).total_seconds()), 0)
    hours, remainder = divmod(seconds, 3600)
    minutes, seconds = divmod(remainder, 60)
    return f"{hours:02d}:{minutes:02d}:{seconds:02d}"


@dataclass
class MaintenanceTask:
    alert: Alert
    start_time: datetime
    inspection_items: List[ChecklistItem]
    maintenance_items: List[MaintenanceChecklistItem]
    end_time: Optional[datetime] = None
    result: str = ""
    notes: str = ""
    report: Optional[str] = None
    checklist_submitted: bool = False


class TaskLifecycle:
    """
    Maintenance task state machine.

    idle -> in_progress -> ready_to_complete -> completed -> idle. Toggling a
    maintenance checklist item moves between in_progress and
    ready_to_complete; end_task returns to idle from anywhere.
    """

    def __init__(self, clock: Callable[[], datetime] = datetime.now):
        self._clock = clock
        self.phase = TaskPhase.IDLE
        self.task: Optional[MaintenanceTask] = None

    @property
    def is_task_started(self) -> bool:
        return self.phase != TaskPhase.IDLE

    @property
    def is_task_completed(self) -> bool:
        return self.phase == TaskPhase.COMPLETED

    @property
    def all_checklist_items_completed(self) -> bool:
        if self.task is None or not self.task.maintenance_items:
            return False
        return checked_count(self.task.maintenance_items) == len(self.task.maintenance_items)

    def _require(self, *phases: TaskPhase) -> MaintenanceTask:
        if self.phase not in phases or self.task is None:
            allowed = ", ".join(phase.value for phase in phases)
            raise TaskStateError(f"Not allowed while task is {self.phase.value} (expected {allowed})")
        return self.task

    def _require_task(self) -> MaintenanceTask:
        return self._require(TaskPhase.IN_PROGRESS, TaskPhase.READY_TO_COMPLETE, TaskPhase.COMPLETED)

    # === Core transitions ===
    def start_task(self, alert: Alert) -> MaintenanceTask:
        self._require(TaskPhase.IDLE)
        self.task = MaintenanceTask(
            alert=alert,
            start_time=self._clock(),
            inspection_items=generate_inspection_checklist(alert),
            maintenance_items=generate_maintenance_checklist(alert),
        )
        self.phase = TaskPhase.IN_PROGRESS
        return self.task

    def toggle_checklist_item(self, item_id: str) -> MaintenanceChecklistItem:
        task = self._require(TaskPhase.IN_PROGRESS, TaskPhase.READY_TO_COMPLETE)
        item = _find_item(task.maintenance_items, item_id)
        item.checked = not item.checked

        if self.all_checklist_items_completed:
            self.phase = TaskPhase.READY_TO_COMPLETE
        else:
            self.phase = TaskPhase.IN_PROGRESS
        return item

    def complete_task(self) -> MaintenanceTask:
        if self.phase == TaskPhase.IN_PROGRESS:
            raise ChecklistIncompleteError(COMPLETION_WARNING)
        task = self._require(TaskPhase.READY_TO_COMPLETE)
        if not self.all_checklist_items_completed:
            raise ChecklistIncompleteError(COMPLETION_WARNING)

        task.end_time = self._clock()
        self.phase = TaskPhase.COMPLETED
        return task

    def end_task(self) -> None:
        self.task = None
        self.phase = TaskPhase.IDLE

    def duration(self) -> str:
        if self.task is None:
            return "00:00:00"
        end = self.task.end_time or self._clock()
        return format_duration(self.task.start_time, end)

    # === Inspection checklist ===
    def toggle_inspection_item(self, item_id: str) -> ChecklistItem:
        task = self._require_task()
        if task.checklist_submitted:
            raise TaskStateError("Inspection checklist has already been submitted")
        item = _find_item(task.inspection_items, item_id)
        item.checked = not item.checked
        return item

    def inspection_progress(self) -> int:
        if self.task is None:
            return 0
        return progress_percent(self.task.inspection_items)

    def submit_inspection_checklist(self) -> dict:
        task = self._require_task()
        if task.checklist_submitted:
            raise TaskStateError("Inspection checklist has already been submitted")
        if self.inspection_progress() < 100:
            raise ChecklistIncompleteError(INSPECTION_WARNING)

        task.checklist_submitted = True
        return {
            "station_id": task.alert.station_info.number,
            "timestamp": self._clock().isoformat(),
            "items": [item.model_dump() for item in task.inspection_items],
            "completion_rate": self.inspection_progress(),
        }

    def reset_inspection_checklist(self) -> List[ChecklistItem]:
        task = self._require_task()
        task.inspection_items = generate_inspection_checklist(task.alert)
        task.checklist_submitted = False
        return task.inspection_items

    # === Outcome and report ===
    def record_outcome(self, result: str, notes: str) -> None:
        task = self._require_task()
        task.result = result
        task.notes = notes

    def report_sections(self, technician: str, report_date: Optional[datetime] = None) -> List[ReportSection]:
        task = self._require(TaskPhase.COMPLETED)
        return build_report_sections(
            task.alert,
            start_time=task.start_time,
            end_time=task.end_time,
            duration=self.duration(),
            result=task.result,
            notes=task.notes,
            technician=technician,
            report_date=report_date or self._clock(),
        )

    def generate_report(self, technician: str, generated_at: Optional[datetime] = None) -> str:
        generated_at = generated_at or self._clock()
        sections = self.report_sections(technician, generated_at)
        self.task.report = compose_report(sections, generated_at)
        return self.task.report

    def snapshot(self) -> dict:
        task = self.task
        if task is None:
            return {
                "phase": self.phase.value,
                "is_task_started": False,
                "is_task_completed": False,
                "alert": None,
                "start_time": None,
                "end_time": None,
                "duration": self.duration(),
                "result": "",
                "notes": "",
                "report": None,
                "inspection_checklist": {"items": [], "progress": 0, "submitted": False},
                "maintenance_checklist": {
                    "items": [],
                    "phases": items_by_phase([]),
                    "completed": 0,
                    "total": 0,
                    "all_completed": False,
                },
            }

        return {
            "phase": self.phase.value,
            "is_task_started": self.is_task_started,
            "is_task_completed": self.is_task_completed,
            "alert": task.alert.model_dump(by_alias=True),
            "start_time": task.start_time.isoformat(),
            "end_time": task.end_time.isoformat() if task.end_time else None,
            "duration": self.duration(),
            "result": task.result,
            "notes": task.notes,
            "report": task.report,
            "inspection_checklist": {
                "items": [item.model_dump() for item in task.inspection_items],
                "progress": self.inspection_progress(),
                "submitted": task.checklist_submitted,
            },
            "maintenance_checklist": {
                "items": [item.model_dump() for item in task.maintenance_items],
                "phases": {
                    phase: [item.model_dump() for item in items]
                    for phase, items in items_by_phase(task.maintenance_items).items()
                },
                "completed": checked_count(task.maintenance_items),
                "total": len(task.maintenance_items),
                "all_completed": self.all_checklist_items_completed,
            },
        }


def _find_item(items, item_id: str):
    for item in items:
        if item.id == item_id:
            return item
    raise UnknownChecklistItemError(f"Checklist item not found: {item_id}")
