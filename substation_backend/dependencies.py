# substation_backend/dependencies.py
import threading
import time
from datetime import datetime
from typing import Callable, List, Optional

from fastapi import Request

from substation_backend.alerts import AlertLoadError, load_alerts
from substation_backend.chat import ChatAssistant
from substation_backend.lifecycle import TaskLifecycle, TaskPhase, TaskStateError
from substation_backend.models import Alert


class DashboardSession:
    """The single technician workspace: loaded alerts, current task and chat."""

    def __init__(
        self,
        clock: Callable[[], datetime] = datetime.now,
        alert_loader: Callable[[], List[Alert]] = load_alerts,
    ):
        self._alert_loader = alert_loader
        # Sync routes run in the threadpool; starts must not interleave
        self._start_lock = threading.Lock()
        self.alerts: List[Alert] = []
        # Index of the alert the current (or last) task was started for
        self.current_alert_index = -1
        self.lifecycle = TaskLifecycle(clock)
        self.chat = ChatAssistant(clock)

    def get_alerts(self, reload: bool = False) -> List[Alert]:
        if reload or not self.alerts:
            self.alerts = self._alert_loader()
        return self.alerts

    def incoming_alert(self) -> Optional[Alert]:
        """Alert announced by the dashboard notification while no task runs"""
        alerts = self.get_alerts()
        if not alerts:
            return None
        return alerts[(self.current_alert_index + 1) % len(alerts)]

    def start_alert(self, alert_id: str) -> Alert:
        with self._start_lock:
            alerts = self.get_alerts()
            for index, alert in enumerate(alerts):
                if alert.id == alert_id:
                    self.lifecycle.start_task(alert)
                    self.current_alert_index = index
                    return alert
        raise KeyError(alert_id)

    def refresh_and_start(self, delay: float) -> Alert:
        """
        Simulated alert refresh: wait, switch to the next alert, start a task
        for it. Blocks for the delay, so call it from a worker thread.
        """
        with self._start_lock:
            if self.lifecycle.phase != TaskPhase.IDLE:
                raise TaskStateError("A maintenance task is already in progress")
            alerts = self.get_alerts()
            if not alerts:
                raise AlertLoadError("No alerts available")

            if delay > 0:
                time.sleep(delay)

            next_index = (self.current_alert_index + 1) % len(alerts)
            alert = alerts[next_index]
            self.lifecycle.start_task(alert)
            self.current_alert_index = next_index
            return alert


def get_session(request: Request) -> DashboardSession:
    if not hasattr(request.app.state, "session"):
        request.app.state.session = DashboardSession()
    return request.app.state.session
