"""
Job arrivals and least-loaded routing.
"""
from __future__ import annotations

from typing import List, Sequence

import numpy as np

from .errors import InvalidConfiguration
from .events import JOB_CREATED, EventLog
from .jobs import Job, JobFactory, random_page_count
from .printer import Printer

DEFAULT_ARRIVAL_INTERVAL_MS = 30_000


def select_printer(printers: Sequence[Printer]) -> Printer:
    """Pick the printer for a new job.

    The first printer with an empty queue wins outright. Failing that, the
    printer with the fewest total pages remaining; on a tie the lowest index.
    """
    if not printers:
        raise InvalidConfiguration("no printers to route to")
    selected = printers[0]
    for i, printer in enumerate(printers):
        if not printer.has_jobs():
            return printer
        if i == 0:
            continue
        if printer.total_pages_remaining() < selected.total_pages_remaining():
            selected = printer
    return selected


class Dispatcher:
    def __init__(
        self,
        printers: Sequence[Printer],
        job_factory: JobFactory,
        events: EventLog,
        rng: np.random.Generator,
        interval_ms: int = DEFAULT_ARRIVAL_INTERVAL_MS,
        start_ms: int = 0,
    ) -> None:
        if interval_ms <= 0:
            raise InvalidConfiguration(f"arrival interval must be > 0 ms, got {interval_ms}")
        self.printers = list(printers)
        self.job_factory = job_factory
        self.events = events
        self.rng = rng
        self.interval_ms = int(interval_ms)
        # Schedule is anchored at simulation start; first arrival is one interval in
        self.next_arrival_ms = int(start_ms)

    def maybe_generate_arrival(self, now_ms: int) -> List[Job]:
        created: List[Job] = []
        while now_ms - self.next_arrival_ms >= self.interval_ms:
            self.next_arrival_ms += self.interval_ms
            job = self.job_factory.create_job(random_page_count(self.rng))
            self.events.emit(JOB_CREATED, now_ms, job)
            select_printer(self.printers).enqueue(job, now_ms)
            created.append(job)
        return created
