from __future__ import annotations

import shutil
from pathlib import Path

from typer.testing import CliRunner

from timetabler.cli.main import app
from timetabler.cli.shell import parse_command, run_commands
from timetabler.scheduler.events import PressSlot

ROOT = Path(__file__).resolve().parents[1]
runner = CliRunner()


def make_project(tmp_path: Path) -> Path:
    shutil.copytree(ROOT / "configs", tmp_path / "configs")
    shutil.copytree(ROOT / "data", tmp_path / "data", ignore=shutil.ignore_patterns("ModulesOut.txt"))
    return tmp_path


def test_parse_command() -> None:
    assert parse_command("s MonAM A") == PressSlot("MonAM", "A")
    assert parse_command("   ") is None
    assert parse_command("show") == "show"


def test_edit_session_moves_module_and_saves(tmp_path: Path) -> None:
    root = make_project(tmp_path)
    result = runner.invoke(
        app,
        ["edit", "--root", str(root)],
        input="m CS1102\ne\nm CS1102\ns MonPM A\nbogus\ne\nq\n",
    )
    assert result.exit_code == 0, result.output
    assert "Changes saved to ModulesOut.txt." in result.output
    assert "bad command" in result.output
    out = (root / "data" / "ModulesOut.txt").read_text(encoding="utf-8")
    assert "CS1102 ComputerSystems MonPM A 80" in out


def test_end_of_input_saves_while_editing(tmp_path: Path) -> None:
    root = make_project(tmp_path)
    result = runner.invoke(app, ["edit", "--root", str(root)], input="e\nm CS1101\n")
    assert result.exit_code == 0, result.output
    out = (root / "data" / "ModulesOut.txt").read_text(encoding="utf-8")
    # held module went back to where it started
    assert "CS1101 Programming1 MonAM A 95" in out


def test_validate_sample_data_is_clash_free(tmp_path: Path) -> None:
    root = make_project(tmp_path)
    result = runner.invoke(app, ["validate", "--root", str(root)])
    assert result.exit_code == 0, result.output
    assert "clash_count: 0" in result.output
    assert (root / "outputs" / "validation.json").exists()


def test_export_csv(tmp_path: Path) -> None:
    root = make_project(tmp_path)
    result = runner.invoke(app, ["export-csv", "--root", str(root)])
    assert result.exit_code == 0, result.output
    assert "MonAM,A,100,CS1101,Programming1,95" in result.output
    assert (root / "outputs" / "timetable.csv").exists()


def test_bad_snapshot_aborts_startup(tmp_path: Path) -> None:
    root = make_project(tmp_path)
    (root / "data" / "ModulesIn.txt").write_text("CS1101 broken\n", encoding="utf-8")
    result = runner.invoke(app, ["validate", "--root", str(root)])
    assert result.exit_code == 1


def test_shell_show_marks_valid_slots(tmp_path: Path) -> None:
    root = make_project(tmp_path)
    from timetabler.cli.main import open_session

    session = open_session(root)
    lines = list(run_commands(session, ["e", "m PH2102", "show", "q"]))
    assert any(line.startswith("holding PH2102") for line in lines)
    assert any("*" in line for line in lines)
    assert session.closed
