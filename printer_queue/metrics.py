"""
Metrics collection and the end-of-run report.
"""
from __future__ import annotations

from collections import Counter
from typing import Any, Dict, List, Optional, Sequence

import numpy as np

from .clock import MS_PER_SECOND, format_time_of_day
from .events import JOB_CREATED, JOB_FINISHED, JOB_STARTED, SimEvent
from .jobs import SizeTier, size_tier_for
from .printer import Printer

PERCENTILES = [100, 99, 90, 80, 50]


def percentile(values: List[float], p: float) -> float:
    if not values:
        return float("nan")
    return float(np.percentile(values, p))


class MetricsCollector:
    """Listens to the event log and keeps per-job timing and size counts."""

    def __init__(self) -> None:
        self.tier_hist: Counter = Counter()
        self.jobs_created: int = 0
        self.pages_created: int = 0

        self._created_ms: Dict[int, int] = {}
        # Seconds from creation to start, and from creation to finish
        self.wait_times_s: List[float] = []
        self.turnaround_times_s: List[float] = []

        self.sim_elapsed_ms: float = 0.0
        self.end_ms: float = 0.0
        self.wall_runtime_seconds: Optional[float] = None

    def __call__(self, event: SimEvent) -> None:
        if event.kind == JOB_CREATED:
            self.jobs_created += 1
            self.pages_created += event.pages
            self.tier_hist[size_tier_for(event.pages).value] += 1
            self._created_ms[event.job_id] = event.t_ms
        elif event.kind == JOB_STARTED:
            created = self._created_ms.get(event.job_id)
            if created is not None:
                self.wait_times_s.append((event.t_ms - created) / MS_PER_SECOND)
        elif event.kind == JOB_FINISHED:
            created = self._created_ms.pop(event.job_id, None)
            if created is not None:
                self.turnaround_times_s.append((event.t_ms - created) / MS_PER_SECOND)

    def build_report(self, printers: Sequence[Printer]) -> Dict[str, Any]:
        """Build the report dict. Drains every printer's queue."""
        printer_entries: List[Dict[str, Any]] = []
        for printer in printers:
            # Read totals before draining; draining empties the printer
            total_left = printer.total_pages_remaining()
            printed = printer.pages_printed_total
            remaining = printer.drain_remaining_jobs_for_report()
            printer_entries.append({
                "id": printer.id,
                "name": printer.name,
                "total_pages_left": int(total_left),
                "pages_printed": int(printed),
                "jobs_completed": int(printer.jobs_completed),
                "remaining_jobs": [
                    {"job_id": job.id, "pages": job.pages, "remaining_pages": int(left)}
                    for job, left in remaining
                ],
            })

        tier_hist = {tier.value: int(self.tier_hist.get(tier.value, 0)) for tier in SizeTier}
        report = {
            "summary": {
                "sim_elapsed_ms": int(self.sim_elapsed_ms),
                "end_time_of_day": format_time_of_day(self.end_ms),
                "jobs_created": int(self.jobs_created),
                "pages_created": int(self.pages_created),
                "jobs_completed": sum(p["jobs_completed"] for p in printer_entries),
                "pages_printed": sum(p["pages_printed"] for p in printer_entries),
                "pages_left": sum(p["total_pages_left"] for p in printer_entries),
                "wall_runtime_seconds": None if self.wall_runtime_seconds is None else float(self.wall_runtime_seconds),
            },
            "size_tier_histogram": tier_hist,
            "wait_time_percentiles_s": {f"p{int(p)}": percentile(self.wait_times_s, p) for p in PERCENTILES},
            "turnaround_percentiles_s": {f"p{int(p)}": percentile(self.turnaround_times_s, p) for p in PERCENTILES},
            "printers": printer_entries,
        }
        return report

    @staticmethod
    def report_markdown(report: Dict[str, Any]) -> str:
        def dict_to_table(d: Dict[str, Any]) -> str:
            keys_str = [str(k) for k in d.keys()]
            return (
                "| " + " | ".join(keys_str) + " |\n" +
                "| " + " | ".join(["---"] * len(keys_str)) + " |\n" +
                "| " + " | ".join(str(v) for v in d.values()) + " |\n"
            )

        md = []
        md.append("# Printer Queue Simulation Report\n")
        md.append("## Run Summary\n")
        md.append(dict_to_table(report["summary"]))
        md.append("\n## Job Size Tiers\n")
        md.append(dict_to_table(report["size_tier_histogram"]))
        md.append("\n## Queue Wait (s) (percentiles)\n")
        md.append(dict_to_table(report["wait_time_percentiles_s"]))
        md.append("\n## Turnaround (s) (percentiles)\n")
        md.append(dict_to_table(report["turnaround_percentiles_s"]))

        md.append("\n## Printers\n")
        for p in report["printers"]:
            md.append(f"\n### {p['name']}\n")
            md.append(dict_to_table({
                "total_pages_left": p["total_pages_left"],
                "pages_printed": p["pages_printed"],
                "jobs_completed": p["jobs_completed"],
            }))
            if p["remaining_jobs"]:
                md.append("\n| job | pages | remaining |\n| --- | --- | --- |\n")
                for rj in p["remaining_jobs"]:
                    md.append(f"| {rj['job_id']} | {rj['pages']} | {rj['remaining_pages']} |\n")
            else:
                md.append("\n_No jobs remaining._\n")
        return "".join(md)
