"""
Printer model: a FIFO queue of jobs worked through at a fixed sheet rate.

A printer is advanced once per simulated second via `tick(now_ms)`. Progress on
the head job is derived from the time since it started, not accumulated, so a
tick that lands late still yields the right page count.
"""
from __future__ import annotations

from collections import deque
from enum import Enum
from typing import Deque, List, Tuple

from .clock import MS_PER_MINUTE
from .errors import InvalidConfiguration, InvariantViolation
from .events import JOB_FINISHED, JOB_QUEUED, JOB_STARTED, EventLog
from .jobs import Job

DEFAULT_SHEETS_PER_MINUTE = 7


def ms_per_sheet(sheets_per_minute: int) -> int:
    if sheets_per_minute < 1:
        raise InvalidConfiguration(f"sheets_per_minute must be >= 1, got {sheets_per_minute}")
    ms = MS_PER_MINUTE // int(sheets_per_minute)
    if ms < 1:
        raise InvalidConfiguration(f"sheets_per_minute must be <= {MS_PER_MINUTE}, got {sheets_per_minute}")
    return ms


class PrinterState(str, Enum):
    IDLE = "idle"
    STARTING = "starting"
    PRINTING = "printing"


class Printer:
    def __init__(self, id_: int, events: EventLog, sheets_per_minute: int = DEFAULT_SHEETS_PER_MINUTE) -> None:
        self.id = id_
        self.events = events
        self.ms_per_sheet = ms_per_sheet(sheets_per_minute)

        self.queue: Deque[Job] = deque()
        self.printing: bool = False
        self.job_start_ms: int = 0
        # Pages printed for the head job only
        self.pages_printed: int = 0
        # Pages of every queued job, in-progress one included, not reduced by pages_printed
        self._total_pages_queued: int = 0

        self.jobs_completed: int = 0
        self.pages_completed: int = 0

    @property
    def name(self) -> str:
        return f"Printer {self.id}"

    @property
    def state(self) -> PrinterState:
        if not self.queue:
            return PrinterState.IDLE
        return PrinterState.PRINTING if self.printing else PrinterState.STARTING

    @property
    def pages_printed_total(self) -> int:
        """Pages physically printed so far, including partial progress on the head job."""
        return self.pages_completed + self.pages_printed

    def has_jobs(self) -> bool:
        return len(self.queue) > 0

    def enqueue(self, job: Job, now_ms: int) -> None:
        self.queue.append(job)
        self._total_pages_queued += job.pages
        self.events.emit(JOB_QUEUED, now_ms, job, printer_id=self.id)
        if len(self.queue) == 1:
            self.attempt_start_next(now_ms)

    def attempt_start_next(self, now_ms: int) -> None:
        if not self.queue or self.printing:
            return
        self.job_start_ms = int(now_ms)
        self.printing = True
        self.pages_printed = 0
        self.events.emit(JOB_STARTED, now_ms, self.queue[0], printer_id=self.id)

    def tick(self, now_ms: int) -> None:
        if not self.queue:
            return

        head = self.queue[0]
        self.pages_printed = min(int((now_ms - self.job_start_ms) // self.ms_per_sheet), head.pages)

        if self.pages_printed == head.pages:
            self.events.emit(JOB_FINISHED, now_ms, head, printer_id=self.id)
            self._total_pages_queued -= head.pages
            if self._total_pages_queued < 0:
                raise InvariantViolation(f"{self.name} has negative queued pages ({self._total_pages_queued})")
            self.queue.popleft()
            self.jobs_completed += 1
            self.pages_completed += head.pages
            self.printing = False
            self.pages_printed = 0
            self.attempt_start_next(now_ms)

    def pages_left_on_current(self) -> int:
        if not self.queue:
            return 0
        return self.queue[0].pages - self.pages_printed

    def total_pages_remaining(self) -> int:
        if not self.queue:
            return 0
        return self._total_pages_queued - self.pages_printed

    def drain_remaining_jobs_for_report(self) -> List[Tuple[Job, int]]:
        """Remove every queued job, returning (job, pages still to print).

        End-of-run reporting only: the printer is left empty afterwards.
        """
        remaining: List[Tuple[Job, int]] = []
        first = True
        while self.queue:
            job = self.queue.popleft()
            remaining.append((job, job.pages - self.pages_printed if first else job.pages))
            first = False
        self._total_pages_queued = 0
        self.pages_printed = 0
        self.printing = False
        return remaining
