#!/usr/bin/env python3
"""
printer-queue simulation

Simulates a pool of printers fed by a load-balancing dispatcher:
- A new job of random size arrives every 30 simulated seconds
- Jobs go to the first idle printer, else to the printer with the fewest
  pages left to print (lowest index on ties)
- Each printer prints 7 sheets per simulated minute, jobs in FIFO order

Key features:
- Configurable printer count, speed, duration and rates via JSON config
- Wall-clock paced run (default) or a fast run on synthetic time (--fast)
- One console line per event, final printer status block
- End-of-run report written as JSON and Markdown

Note:
- Simulated time units are milliseconds throughout; the SimPy environment
  measures real seconds
"""
from __future__ import annotations

import argparse
import json
import os
from typing import Any, Dict, List, Optional

from .errors import InvalidConfiguration
from .events import TextSink
from .metrics import MetricsCollector
from .simulation import Simulation


def ensure_dir(path: str) -> None:
    os.makedirs(path, exist_ok=True)


# -----------------------------
# Config
# -----------------------------
DEFAULT_CONFIG = {
    "simulation": {
        "seed": None,
        "printers": 4,
        "speed": 300,  # simulated seconds per real second
        "duration_s": 30 * 60,
        "start_time": None,  # HH:MM:SS, None = current local time of day
        "realtime": True,
        "poll_interval_ms": 1,
    },
    "printer": {
        "sheets_per_minute": 7,
    },
    "arrivals": {
        "interval_s": 30,
    },
    "reporting": {
        "output_dir": "reports",
        "writers": ["json", "markdown"],
        "events": True,
    },
}


def load_config(path: Optional[str]) -> Dict[str, Any]:
    cfg = json.loads(json.dumps(DEFAULT_CONFIG))  # deep copy
    if path:
        with open(path, "r") as f:
            user_cfg = json.load(f)

        def merge(a: Dict[str, Any], b: Dict[str, Any]) -> Dict[str, Any]:
            out = dict(a)
            for k, v in b.items():
                if isinstance(v, dict) and isinstance(out.get(k), dict):
                    out[k] = merge(out[k], v)
                else:
                    out[k] = v
            return out
        cfg = merge(cfg, user_cfg)
    return cfg


def write_reports(report: Dict[str, Any], config: Dict[str, Any]) -> List[str]:
    rep_cfg = config.get("reporting", {})
    writers = rep_cfg.get("writers", ["json", "markdown"])
    if not writers:
        return []
    outdir = rep_cfg.get("output_dir", "reports")
    ensure_dir(outdir)
    written = []
    if "json" in writers:
        path = os.path.join(outdir, "report.json")
        with open(path, "w") as f:
            json.dump(report, f, indent=2)
        print(f"Wrote JSON report: {path}")
        written.append(path)
    if "markdown" in writers:
        path = os.path.join(outdir, "report.md")
        with open(path, "w") as f:
            f.write(MetricsCollector.report_markdown(report))
        print(f"Wrote Markdown report: {path}")
        written.append(path)
    return written


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="printer-queue simulation")
    parser.add_argument("--config", type=str, help="Path to JSON config", default=None)
    parser.add_argument("--seed", type=int, help="Override RNG seed")
    parser.add_argument("--printers", type=int, help="Override number of printers")
    parser.add_argument("--speed", type=float, help="Override simulated seconds per real second")
    parser.add_argument("--duration", type=float, help="Override simulated seconds to run")
    parser.add_argument("--start-time", type=str, help="Simulated start time of day, HH:MM:SS")
    parser.add_argument("--fast", action="store_true", help="Run on synthetic time instead of the wall clock")
    parser.add_argument("--quiet", action="store_true", help="Do not print one line per event")
    parser.add_argument("--output-dir", type=str, help="Override report output dir")
    args = parser.parse_args(argv)

    cfg = load_config(args.config)
    sim_cfg = cfg.setdefault("simulation", {})
    if args.seed is not None:
        sim_cfg["seed"] = int(args.seed)
    if args.printers is not None:
        sim_cfg["printers"] = args.printers
    if args.speed is not None:
        sim_cfg["speed"] = args.speed
    if args.duration is not None:
        sim_cfg["duration_s"] = args.duration
    if args.start_time:
        sim_cfg["start_time"] = args.start_time
    if args.fast:
        sim_cfg["realtime"] = False
    if args.quiet:
        cfg.setdefault("reporting", {})["events"] = False
    if args.output_dir:
        cfg.setdefault("reporting", {})["output_dir"] = args.output_dir

    sink = TextSink(show_events=bool(cfg.get("reporting", {}).get("events", True)))
    try:
        sim = Simulation(cfg, sink=sink)
    except InvalidConfiguration as e:
        parser.error(str(e))
    report = sim.run()
    write_reports(report, cfg)

    # Also print a concise summary
    print(json.dumps(report["summary"], indent=2))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
