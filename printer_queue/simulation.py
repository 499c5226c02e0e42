"""
Simulation driver.

Real time comes from a SimPy environment: `simpy.rt.RealtimeEnvironment` paces
the loop against the wall clock, a plain `simpy.Environment` runs the same loop
on synthetic real time as fast as possible (deterministic for a fixed seed).
Either way the Clock turns real seconds into simulated seconds, and every
simulated second ticks all printers and then checks for an arrival.
"""
from __future__ import annotations

import math
import time
from typing import Any, Dict, List, Optional

import numpy as np
import simpy
from simpy.rt import RealtimeEnvironment

from .clock import MS_PER_SECOND, Clock, current_time_of_day_ms, parse_time_of_day
from .dispatcher import DEFAULT_ARRIVAL_INTERVAL_MS, Dispatcher
from .errors import InvalidConfiguration
from .events import EventLog, TextSink
from .jobs import JobFactory
from .metrics import MetricsCollector
from .printer import DEFAULT_SHEETS_PER_MINUTE, Printer


def _config_int(value: Any, name: str, minimum: int) -> int:
    # bool is an int subclass; 2.0 is accepted, 2.7 is not
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise InvalidConfiguration(f"{name} must be an integer, got {value!r}")
    if isinstance(value, float) and not value.is_integer():
        raise InvalidConfiguration(f"{name} must be an integer, got {value!r}")
    if value < minimum:
        raise InvalidConfiguration(f"{name} must be >= {minimum}, got {value!r}")
    return int(value)


def _config_float(value: Any, name: str) -> float:
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise InvalidConfiguration(f"{name} must be a number, got {value!r}") from None
    if not math.isfinite(number):
        raise InvalidConfiguration(f"{name} must be finite, got {value!r}")
    return number


class Simulation:
    def __init__(
        self,
        config: Dict[str, Any],
        sink: Optional[TextSink] = None,
        env: Optional[simpy.Environment] = None,
    ) -> None:
        self.config = config
        sim_cfg = config.get("simulation", {})
        self.seed: Optional[int] = sim_cfg.get("seed")
        self.num_printers = _config_int(sim_cfg.get("printers", 4), "printers", 1)
        self.speed = _config_float(sim_cfg.get("speed", 300), "speed")
        duration_s = _config_float(sim_cfg.get("duration_s", 1800), "duration_s")
        if duration_s < 0:
            raise InvalidConfiguration(f"duration_s must be >= 0, got {duration_s}")
        self.duration_ms = int(duration_s * MS_PER_SECOND)
        # Real seconds slept between loop iterations
        self.poll_interval_s = _config_float(sim_cfg.get("poll_interval_ms", 1), "poll_interval_ms") / MS_PER_SECOND
        if self.poll_interval_s <= 0:
            raise InvalidConfiguration("poll_interval_ms must be > 0")
        start_time = sim_cfg.get("start_time")
        start_ms = parse_time_of_day(start_time) if start_time is not None else current_time_of_day_ms()

        sheets_per_minute = _config_int(
            config.get("printer", {}).get("sheets_per_minute", DEFAULT_SHEETS_PER_MINUTE), "sheets_per_minute", 1
        )
        interval_s = _config_float(
            config.get("arrivals", {}).get("interval_s", DEFAULT_ARRIVAL_INTERVAL_MS / MS_PER_SECOND), "interval_s"
        )
        interval_ms = int(interval_s * MS_PER_SECOND)

        self.rng = np.random.default_rng(self.seed)
        if env is None:
            if sim_cfg.get("realtime", True):
                env = RealtimeEnvironment(factor=1.0, strict=False)
            else:
                env = simpy.Environment()
        self.env = env

        self.clock = Clock(self.speed, start_ms=start_ms, real_time_anchor=float(self.env.now))

        # Listener order: metrics, then sink
        self.events = EventLog()
        self.metrics = MetricsCollector()
        self.events.subscribe(self.metrics)
        self.sink = sink
        if sink is not None:
            self.events.subscribe(sink)

        self.job_factory = JobFactory()
        self.printers: List[Printer] = [
            Printer(i, self.events, sheets_per_minute=sheets_per_minute) for i in range(self.num_printers)
        ]
        self.dispatcher = Dispatcher(
            printers=self.printers,
            job_factory=self.job_factory,
            events=self.events,
            rng=self.rng,
            interval_ms=interval_ms,
            start_ms=start_ms,
        )

    @property
    def finished(self) -> bool:
        return self.clock.elapsed_ms >= self.duration_ms

    def _process_ticks(self) -> int:
        ticks = 0
        for now_ms in self.clock.drain_ticks():
            for printer in self.printers:
                printer.tick(now_ms)
            self.dispatcher.maybe_generate_arrival(now_ms)
            ticks += 1
        return ticks

    def step(self, real_elapsed: float) -> int:
        """Advance by a real-time delta and process every simulated second it covers.

        Returns the number of simulated seconds processed.
        """
        self.clock.advance(real_elapsed)
        return self._process_ticks()

    def _driver(self):
        while True:
            self.clock.sync(float(self.env.now))
            self._process_ticks()
            if self.finished:
                return
            yield self.env.timeout(self.poll_interval_s)

    def run(self) -> Dict[str, Any]:
        wall_start = time.time()
        if isinstance(self.env, RealtimeEnvironment):
            # Re-anchor wall time to the start of the run
            self.env.sync()
        self.env.run(until=self.env.process(self._driver()))

        self.metrics.sim_elapsed_ms = self.clock.elapsed_ms
        self.metrics.end_ms = self.clock.simulated_ms
        self.metrics.wall_runtime_seconds = time.time() - wall_start

        report = self.metrics.build_report(self.printers)
        if self.sink is not None:
            self.sink.write_report(report)
        return report
