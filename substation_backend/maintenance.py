# substation_backend/maintenance.py
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import Response

from substation_backend.alerts import AlertLoadError
from substation_backend.config import alert_refresh_delay, technician_name
from substation_backend.dependencies import DashboardSession, get_session
from substation_backend.lifecycle import (
    ChecklistIncompleteError,
    LifecycleError,
    TaskPhase,
    UnknownChecklistItemError,
)
from substation_backend.models import OutcomeSchema, StartTaskRequest
from substation_backend.pdf_export import ReportExportError, export_pdf

router = APIRouter()


def _http_error(e: LifecycleError) -> HTTPException:
    if isinstance(e, ChecklistIncompleteError):
        return HTTPException(status_code=400, detail=str(e))
    if isinstance(e, UnknownChecklistItemError):
        return HTTPException(status_code=404, detail=str(e))
    return HTTPException(status_code=409, detail=str(e))


# --- Current task state (polled by the dashboard for the running duration) ---
@router.get("")
def get_task(session: DashboardSession = Depends(get_session)):
    return session.lifecycle.snapshot()


# --- Alert announced by the notification banner ---
@router.get("/incoming")
def get_incoming_alert(session: DashboardSession = Depends(get_session)):
    try:
        alert = session.incoming_alert()
    except AlertLoadError as e:
        print(f"Failed to load alerts: {str(e)}")
        raise HTTPException(status_code=503, detail="Failed to load alerts")
    if alert is None:
        raise HTTPException(status_code=404, detail="No alerts available")
    return alert.model_dump(by_alias=True)


# --- Start a task, either for a given alert or for the next refreshed alert ---
# Plain def: alert loading and the refresh delay block, so this runs in the threadpool
@router.post("/start")
def start_task(
    payload: Optional[StartTaskRequest] = None,
    session: DashboardSession = Depends(get_session),
):
    alert_id = payload.alert_id if payload else None
    try:
        if alert_id:
            session.start_alert(alert_id)
        else:
            session.refresh_and_start(alert_refresh_delay())
    except KeyError:
        raise HTTPException(status_code=404, detail=f"Alert {alert_id} not found")
    except AlertLoadError as e:
        print(f"Failed to load alerts: {str(e)}")
        raise HTTPException(status_code=503, detail="Failed to load alerts")
    except LifecycleError as e:
        raise _http_error(e)

    return session.lifecycle.snapshot()


# --- Maintenance checklist toggle (gates task completion) ---
@router.post("/checklist/{item_id}/toggle")
def toggle_maintenance_item(item_id: str, session: DashboardSession = Depends(get_session)):
    try:
        item = session.lifecycle.toggle_checklist_item(item_id)
    except LifecycleError as e:
        raise _http_error(e)

    snapshot = session.lifecycle.snapshot()
    return {
        "item": item.model_dump(),
        "phase": snapshot["phase"],
        "maintenance_checklist": snapshot["maintenance_checklist"],
    }


# --- Equipment inspection checklist ---
@router.post("/inspection/{item_id}/toggle")
def toggle_inspection_item(item_id: str, session: DashboardSession = Depends(get_session)):
    try:
        item = session.lifecycle.toggle_inspection_item(item_id)
    except LifecycleError as e:
        raise _http_error(e)
    return {"item": item.model_dump(), "progress": session.lifecycle.inspection_progress()}


@router.post("/inspection/submit")
def submit_inspection_checklist(session: DashboardSession = Depends(get_session)):
    try:
        record = session.lifecycle.submit_inspection_checklist()
    except LifecycleError as e:
        raise _http_error(e)

    record["completed_by"] = technician_name()
    print(f"Inspection checklist submitted for station {record['station_id']}: {record['completion_rate']}%")
    return {"message": "Inspection checklist submitted", "submission": record}


@router.post("/inspection/reset")
def reset_inspection_checklist(session: DashboardSession = Depends(get_session)):
    try:
        items = session.lifecycle.reset_inspection_checklist()
    except LifecycleError as e:
        raise _http_error(e)
    return {"items": [item.model_dump() for item in items], "progress": 0, "submitted": False}


# --- Complete / end ---
@router.post("/complete")
def complete_task(session: DashboardSession = Depends(get_session)):
    try:
        session.lifecycle.complete_task()
    except LifecycleError as e:
        raise _http_error(e)
    return session.lifecycle.snapshot()


@router.post("/end")
def end_task(session: DashboardSession = Depends(get_session)):
    session.lifecycle.end_task()
    return session.lifecycle.snapshot()


# --- Technician result and notes ---
@router.put("/outcome")
def record_outcome(data: OutcomeSchema, session: DashboardSession = Depends(get_session)):
    try:
        session.lifecycle.record_outcome(data.result, data.notes)
    except LifecycleError as e:
        raise _http_error(e)
    return {"message": "Maintenance outcome saved"}


# --- Report ---
@router.post("/report")
def generate_report(session: DashboardSession = Depends(get_session)):
    try:
        report = session.lifecycle.generate_report(technician_name())
    except LifecycleError as e:
        raise _http_error(e)
    return {"report": report}


@router.get("/report/pdf")
def download_report_pdf(session: DashboardSession = Depends(get_session)):
    lifecycle = session.lifecycle
    if lifecycle.phase != TaskPhase.COMPLETED or lifecycle.task.report is None:
        raise HTTPException(status_code=409, detail="Generate the maintenance report before exporting it")

    sections = lifecycle.report_sections(technician_name())
    try:
        filename, content = export_pdf(sections, lifecycle.task.alert.station_info.number)
    except ReportExportError:
        raise HTTPException(status_code=500, detail="PDF generation failed. Please try again.")

    return Response(
        content=content,
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
