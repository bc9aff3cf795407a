from __future__ import annotations

import logging
import sys
from pathlib import Path

import typer

from ..data.loader import GridConfigError, SnapshotError, build_grid, load_config, read_snapshot
from ..render.grid_text import csv_grid, write_csv_grid
from ..scheduler.session import SchedulingSession
from ..validate.checks import validate_all
from ..validate.report import format_validation_report, write_validation_report
from .shell import HELP, render_effect, run_commands


def _setup_logging(project_root: Path) -> None:
    logs_dir = project_root / "logs"
    logs_dir.mkdir(parents=True, exist_ok=True)
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(message)s",
        handlers=[
            logging.FileHandler(logs_dir / "timetabler.log", encoding="utf-8"),
            logging.StreamHandler(),
        ],
    )


def open_session(
    project_root: Path,
    *,
    log_level: int | None = None,
    input_path: Path | None = None,
    output_path: Path | None = None,
) -> SchedulingSession:
    _setup_logging(project_root)
    if log_level is not None:
        logging.getLogger().setLevel(log_level)
    config = load_config(project_root)
    grid = build_grid(config)
    catalog, tt = read_snapshot(
        input_path or config.resolve(project_root, "input_path"), grid, config.group_prefix
    )
    return SchedulingSession(
        grid, catalog, tt, output_path or config.resolve(project_root, "output_path")
    )


app = typer.Typer(add_completion=False, help="Module timetable editor")


def _open_or_exit(root: Path, log_level: str, **kwargs) -> SchedulingSession:
    level = getattr(logging, log_level.upper(), logging.INFO)
    try:
        return open_session(root, log_level=level, **kwargs)
    except (SnapshotError, GridConfigError) as exc:
        print(f"Startup failed: {exc}", file=sys.stderr)
        raise typer.Exit(code=1)


@app.command("edit")
def cli_edit(
    root: Path = typer.Option(Path("."), help="Project root holding configs/ and data/"),
    input_path: Path | None = typer.Option(None, "--input", help="Override input snapshot"),
    output_path: Path | None = typer.Option(None, "--output", help="Override output snapshot"),
    log_level: str = typer.Option("WARNING", help="Log level"),
) -> None:
    session = _open_or_exit(root, log_level, input_path=input_path, output_path=output_path)
    for effect in session.initial_effects():
        print(render_effect(effect))
    print(HELP)
    for line in run_commands(session, sys.stdin):
        print(line)


@app.command("validate")
def cli_validate(
    root: Path = typer.Option(Path("."), help="Project root holding configs/ and data/"),
    log_level: str = typer.Option("INFO", help="Log level"),
) -> None:
    session = _open_or_exit(root, log_level)
    report = validate_all(session.tt, session.grid, session.catalog)
    write_validation_report(report, root / "outputs")
    print(format_validation_report(report))
    if report["clash_count"]:
        raise typer.Exit(code=1)


@app.command("export-csv")
def cli_export_csv(
    root: Path = typer.Option(Path("."), help="Project root holding configs/ and data/"),
    log_level: str = typer.Option("INFO", help="Log level"),
) -> None:
    session = _open_or_exit(root, log_level)
    csv = csv_grid(session.tt, session.grid)
    write_csv_grid(csv, root / "outputs")
    print(csv, end="")


if __name__ == "__main__":
    app()
