"""
Structured simulation events and the text sink that renders them.
"""
from __future__ import annotations

import sys
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, TextIO

from .clock import format_time_of_day
from .jobs import Job

JOB_CREATED = "job_created"
JOB_QUEUED = "job_queued"
JOB_STARTED = "job_started"
JOB_FINISHED = "job_finished"


@dataclass(frozen=True)
class SimEvent:
    kind: str  # JOB_CREATED | JOB_QUEUED | JOB_STARTED | JOB_FINISHED
    t_ms: int
    job_id: int
    pages: int
    printer_id: Optional[int] = None

    @property
    def job_label(self) -> str:
        return f"Job {self.job_id} ({self.pages} Pages)"


Listener = Callable[[SimEvent], None]


class EventLog:
    """Keeps every event in emission order and fans each one out to listeners."""

    def __init__(self) -> None:
        self.events: List[SimEvent] = []
        self._listeners: List[Listener] = []

    def subscribe(self, listener: Listener) -> None:
        self._listeners.append(listener)

    def emit(self, kind: str, t_ms: int, job: Job, printer_id: Optional[int] = None) -> SimEvent:
        event = SimEvent(kind=kind, t_ms=int(t_ms), job_id=job.id, pages=job.pages, printer_id=printer_id)
        self.events.append(event)
        for listener in self._listeners:
            listener(event)
        return event

    def of_kind(self, kind: str) -> List[SimEvent]:
        return [e for e in self.events if e.kind == kind]

    def for_job(self, job_id: int) -> List[SimEvent]:
        return [e for e in self.events if e.job_id == job_id]


_PRINTER_VERBS = {
    JOB_QUEUED: "added job to the queue",
    JOB_STARTED: "started printing",
    JOB_FINISHED: "finished printing",
}


def format_event(event: SimEvent) -> str:
    t = format_time_of_day(event.t_ms)
    if event.kind == JOB_CREATED:
        return f"{t} created {event.job_label}"
    verb = _PRINTER_VERBS[event.kind]
    return f"{t} Printer {event.printer_id} {verb} {event.job_label}"


def format_final_report(report: Dict[str, Any]) -> str:
    """Render the end-of-run printer status block."""
    lines = [
        "",
        f"Simulation ended at {report['summary']['end_time_of_day']}.",
        "Status of Printers:",
    ]
    for p in report["printers"]:
        remaining = p["remaining_jobs"]
        if not remaining:
            queue_desc = "No jobs remaining."
        else:
            parts = []
            for i, rj in enumerate(remaining):
                if i == 0:
                    parts.append(f"Job {rj['job_id']} ({rj['pages']} Pages, {rj['remaining_pages']} Remaining)")
                else:
                    parts.append(f"Job {rj['job_id']} ({rj['pages']} Pages)")
            queue_desc = ", ".join(parts)
        lines.append(f"{p['name']} - Total pages left: {p['total_pages_left']}, {queue_desc}")
    return "\n".join(lines)


class TextSink:
    """Write-only text output: one line per event, plus the final report block."""

    def __init__(self, stream: Optional[TextIO] = None, show_events: bool = True) -> None:
        self.stream = stream if stream is not None else sys.stdout
        self.show_events = show_events

    def __call__(self, event: SimEvent) -> None:
        if self.show_events:
            print(format_event(event), file=self.stream)

    def write_report(self, report: Dict[str, Any]) -> None:
        print(format_final_report(report), file=self.stream)
