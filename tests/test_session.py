from pathlib import Path

from timetabler.models import Module, ModuleCatalog, SlotGrid, Timetable
from timetabler.scheduler.events import (
    CommitFailed,
    CommitSaved,
    MarkScheduled,
    MarkUnscheduled,
    PressItem,
    PressSlot,
    RequestShutdown,
    SetButtonsEnabled,
    ToggleEditMode,
)
from timetabler.scheduler.session import SchedulingSession


def make_session(output_path: Path) -> SchedulingSession:
    grid = SlotGrid(["MonAM", "MonPM"], ["A", "B"], [100, 40])
    catalog = ModuleCatalog(
        [Module.from_record("CS1101", "Programming1", 80), Module.from_record("MA1101", "Calculus", 30)]
    )
    tt = Timetable()
    tt.place(catalog.get("MA1101"), grid.slot_at("MonPM", "B"))
    return SchedulingSession(grid, catalog, tt, output_path)


def test_initial_effects_describe_every_module(tmp_path: Path) -> None:
    session = make_session(tmp_path / "out.txt")
    effects = session.initial_effects()
    assert effects[0] == SetButtonsEnabled(False)
    assert MarkUnscheduled("CS1101", "CS1101  80  -  ?????  ?") in effects
    assert any(isinstance(e, MarkScheduled) and e.code == "MA1101" for e in effects)


def test_presses_ignored_outside_edit_mode(tmp_path: Path) -> None:
    session = make_session(tmp_path / "out.txt")
    assert session.handle(PressItem("CS1101")) == []
    assert session.selection.idle


def test_leaving_edit_mode_puts_back_held_module_and_saves(tmp_path: Path) -> None:
    out = tmp_path / "out.txt"
    session = make_session(out)
    assert session.handle(ToggleEditMode()) == [SetButtonsEnabled(True)]
    session.handle(PressItem("MA1101"))
    assert session.tt.get(session.grid.slot_at("MonPM", "B")) is None
    effects = session.handle(ToggleEditMode())
    assert CommitSaved(out) in effects
    assert effects[-1] == SetButtonsEnabled(False)
    assert session.selection.idle
    assert not session.editing
    assert out.read_text(encoding="utf-8") == (
        "CS1101 Programming1 ????? ? 80\n" "MA1101 Calculus MonPM B 30\n"
    )


def test_move_then_save(tmp_path: Path) -> None:
    out = tmp_path / "out.txt"
    session = make_session(out)
    session.handle(ToggleEditMode())
    session.handle(PressItem("CS1101"))
    session.handle(PressSlot("MonAM", "A"))
    session.handle(ToggleEditMode())
    assert "CS1101 Programming1 MonAM A 80" in out.read_text(encoding="utf-8")


def test_failed_commit_keeps_editing_and_timetable(tmp_path: Path) -> None:
    blocker = tmp_path / "blocker"
    blocker.write_text("not a directory", encoding="utf-8")
    session = make_session(blocker / "out.txt")
    session.handle(ToggleEditMode())
    before = dict(session.tt.cells)
    effects = session.handle(ToggleEditMode())
    assert isinstance(effects[-1], CommitFailed)
    assert session.editing
    assert session.tt.cells == before
    # user can keep editing
    assert session.handle(PressItem("CS1101"))


def test_shutdown_saves_only_while_editing(tmp_path: Path) -> None:
    out = tmp_path / "out.txt"
    session = make_session(out)
    assert session.handle(RequestShutdown()) == []
    assert session.closed
    assert not out.exists()

    session = make_session(out)
    session.handle(ToggleEditMode())
    session.handle(PressItem("CS1101"))
    effects = session.handle(RequestShutdown())
    assert CommitSaved(out) in effects
    assert session.closed
    assert "CS1101 Programming1 ????? ? 80" in out.read_text(encoding="utf-8")
    assert session.handle(ToggleEditMode()) == []
