"""Tests for the command line runner."""

import json
from dataclasses import replace
from pathlib import Path
from random import Random

import pytest

from adaptnet.config import SimulationConfig
from adaptnet.runner import generate_run_id, main, run_once


class TestGenerateRunId:
    def test_deterministic_for_seed(self) -> None:
        assert generate_run_id(Random(5)) == generate_run_id(Random(5))

    def test_three_words(self) -> None:
        run_id = generate_run_id(Random(1))
        assert len(run_id.split("-")) >= 3


class TestRunOnce:
    def test_appends_summary_line(self, tmp_path: Path, small_config: SimulationConfig) -> None:
        first = run_once(small_config, tmp_path, ["ideal"])
        second = run_once(small_config, tmp_path, ["congestion"])

        lines = (tmp_path / "runs.ndjson").read_text().splitlines()
        assert len(lines) == 2
        assert json.loads(lines[0])["run_id"] == first["run_id"]
        assert json.loads(lines[1])["scenarios"] == ["congestion"]
        assert second["status"] == "success"
        assert second["config"]["seed"] == small_config.seed

    def test_error_is_recorded(self, tmp_path: Path, small_config: SimulationConfig) -> None:
        summary = run_once(small_config, tmp_path, ["bogus"])

        assert summary["status"] == "error"
        assert "bogus" in summary["error"]
        assert summary["metrics"] == {}

    def test_writes_report(self, tmp_path: Path, small_config: SimulationConfig) -> None:
        summary = run_once(small_config, tmp_path, ["ideal"], write_report=True)

        report = json.loads((tmp_path / f"{summary['run_id']}.json").read_text())
        assert report["run_id"] == summary["run_id"]
        assert report["scenarios"][0]["name"] == "ideal"

    def test_creates_output_dir(self, tmp_path: Path, small_config: SimulationConfig) -> None:
        output_dir = tmp_path / "nested" / "out"
        run_once(replace(small_config, ticks_per_scenario=1), output_dir, ["ideal"])
        assert (output_dir / "runs.ndjson").exists()


class TestMain:
    def test_invalid_config_exits_2(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setattr(
            "sys.argv", ["adaptnet", "--nodes", "1", "--output-dir", str(tmp_path)]
        )
        with pytest.raises(SystemExit) as exc_info:
            main()
        assert exc_info.value.code == 2

    def test_successful_run(
        self,
        tmp_path: Path,
        monkeypatch: pytest.MonkeyPatch,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        monkeypatch.setattr(
            "sys.argv",
            [
                "adaptnet",
                "--nodes", "8",
                "--density", "0.4",
                "--ticks-per-scenario", "2",
                "--scenario", "satellite",
                "--output-dir", str(tmp_path),
                "--log-level", "WARNING",
            ],
        )
        main()

        out = capsys.readouterr().out
        assert "OK" in out
        assert "Overall improvement" in out
        assert (tmp_path / "runs.ndjson").exists()

    def test_failed_run_exits_1(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr(
            "sys.argv",
            [
                "adaptnet",
                "--nodes", "6",
                "--ticks-per-scenario", "1",
                "--scenario", "bogus",
                "--output-dir", str(tmp_path),
            ],
        )
        with pytest.raises(SystemExit) as exc_info:
            main()
        assert exc_info.value.code == 1
