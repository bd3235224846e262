"""Command line entry point: run a comparison and append its summary."""

from __future__ import annotations

import json
import sys
import time
from dataclasses import asdict, replace
from datetime import UTC, datetime
from random import Random
from typing import TYPE_CHECKING

import coolname.impl
from loguru import logger

from adaptnet.config import SimulationConfig, validate_config
from adaptnet.report import build_report
from adaptnet.scenarios.comparison import execute_comparison

if TYPE_CHECKING:
    from pathlib import Path


def generate_run_id(rng: Random) -> str:
    coolname.impl.replace_random(rng)
    words = coolname.impl.generate(3)
    return "-".join(words)


def append_summary(path: Path, summary: dict[str, object]) -> None:
    with path.open("a", encoding="utf-8") as f:
        f.write(json.dumps(summary) + "\n")


def configure_logging(level: str) -> None:
    logger.remove()
    logger.add(sys.stderr, level=level.upper())


def run_once(
    config: SimulationConfig,
    output_dir: Path,
    scenario_names: list[str] | None = None,
    write_report: bool = False,
    overview_file: str = "runs.ndjson",
) -> dict[str, object]:
    """Execute one comparison and append its summary line. Returns the summary."""
    run_id = generate_run_id(Random(config.seed))

    output_dir.mkdir(parents=True, exist_ok=True)

    start_time = datetime.now(UTC)
    wall_start = time.monotonic()

    results, error = execute_comparison(config, scenario_names)

    wall_clock = time.monotonic() - wall_start
    end_time = datetime.now(UTC)

    summary: dict[str, object] = {
        "run_id": run_id,
        "seed": config.seed,
        "status": "error" if error is not None else "success",
        "scenarios": results.scenarios if results is not None else [],
        "metrics": results.to_dict() if results is not None else {},
        "config": asdict(config),
        "wall_clock_seconds": round(wall_clock, 2),
        "timestamp_start": start_time.isoformat(),
        "timestamp_end": end_time.isoformat(),
    }
    if error is not None:
        summary["error"] = str(error)
        logger.error("Run {} failed: {}", run_id, error)

    append_summary(output_dir / overview_file, summary)

    if write_report and results is not None and results.simulation is not None:
        report = build_report(results.simulation, run_id)
        report_path = output_dir / f"{run_id}.json"
        report_path.write_text(report.model_dump_json(indent=2), encoding="utf-8")
        logger.info("Report written to {}", report_path)

    return summary


def main() -> None:
    import argparse
    from pathlib import Path

    parser = argparse.ArgumentParser(
        description="Compare network performance with and without protocol adaptation"
    )
    parser.add_argument("--config", type=Path, help="Path to TOML configuration file")
    parser.add_argument("--nodes", type=int, help="Number of nodes")
    parser.add_argument("--density", type=float, help="Connection density in [0, 1]")
    parser.add_argument("--duration", type=float, help="Total wall-clock duration in seconds")
    parser.add_argument(
        "--ticks-per-scenario",
        type=int,
        help="Run a fixed number of ticks per scenario instead of wall-clock time",
    )
    parser.add_argument("--seed", type=int, help="Seed for reproducibility")
    parser.add_argument(
        "--scenario",
        action="append",
        dest="scenarios",
        help="Scenario to run (repeatable, default: all)",
    )
    parser.add_argument(
        "--output-dir",
        type=Path,
        default=Path("adaptnet_output"),
        help="Output directory (default: adaptnet_output)",
    )
    parser.add_argument(
        "--report",
        action="store_true",
        help="Write the full JSON report next to the run summary",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        help="Log level for library output (default: INFO)",
    )

    args = parser.parse_args()
    configure_logging(args.log_level)

    config = SimulationConfig.from_toml(args.config) if args.config else SimulationConfig()

    overrides: dict[str, object] = {}
    if args.nodes is not None:
        overrides["node_count"] = args.nodes
    if args.density is not None:
        overrides["connection_density"] = args.density
    if args.duration is not None:
        overrides["duration"] = args.duration
    if args.ticks_per_scenario is not None:
        overrides["ticks_per_scenario"] = args.ticks_per_scenario
    if args.seed is not None:
        overrides["seed"] = args.seed
    if overrides:
        config = replace(config, **overrides)  # type: ignore[arg-type]

    is_valid, errors = validate_config(config)
    if not is_valid:
        for error in errors:
            print(f"Invalid configuration: {error}", file=sys.stderr)
        sys.exit(2)

    summary = run_once(config, args.output_dir, args.scenarios, write_report=args.report)

    status_display = "OK" if summary["status"] == "success" else summary["status"]
    print(
        f"[{summary['run_id']}] seed={config.seed} ... {status_display} "
        f"({summary['wall_clock_seconds']}s)"
    )

    metrics = summary["metrics"]
    if isinstance(metrics, dict) and metrics:
        overall = metrics["overall"]
        print(f"Overall improvement: {overall['overall']:+.2f}%")
        print(f"Transfer time improvement: {overall['transfer_time']:+.2f}%")

    if summary["status"] != "success":
        sys.exit(1)


if __name__ == "__main__":
    main()
