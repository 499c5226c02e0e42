import json

import pytest

from printer_queue.cli import DEFAULT_CONFIG, load_config, main


def test_load_config_defaults():
    cfg = load_config(None)
    assert cfg == DEFAULT_CONFIG
    assert cfg is not DEFAULT_CONFIG


def test_load_config_merges_nested(tmp_path):
    path = tmp_path / "cfg.json"
    path.write_text(json.dumps({"simulation": {"printers": 2}, "arrivals": {"interval_s": 10}}))
    cfg = load_config(str(path))
    assert cfg["simulation"]["printers"] == 2
    assert cfg["simulation"]["speed"] == 300
    assert cfg["arrivals"]["interval_s"] == 10


def test_main_fast_run_writes_reports(tmp_path, capsys):
    rc = main([
        "--fast",
        "--seed", "3",
        "--duration", "300",
        "--start-time", "08:00:00",
        "--quiet",
        "--output-dir", str(tmp_path),
    ])
    assert rc == 0

    out = capsys.readouterr().out
    assert "Simulation ended at 08:05:00." in out
    assert "created Job" not in out

    report = json.loads((tmp_path / "report.json").read_text())
    assert report["summary"]["jobs_created"] == 10
    assert len(report["printers"]) == 4
    md = (tmp_path / "report.md").read_text()
    assert md.startswith("# Printer Queue Simulation Report")
    assert "### Printer 0" in md


def test_main_rejects_bad_printer_count(tmp_path):
    with pytest.raises(SystemExit) as exc:
        main(["--fast", "--printers", "0", "--output-dir", str(tmp_path)])
    assert exc.value.code == 2


@pytest.mark.parametrize("speed", ["nan", "inf"])
def test_main_rejects_non_finite_speed(tmp_path, speed):
    with pytest.raises(SystemExit) as exc:
        main(["--fast", "--speed", speed, "--output-dir", str(tmp_path)])
    assert exc.value.code == 2
