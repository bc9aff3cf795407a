from __future__ import annotations

from typing import Iterable, Iterator, Set

from ..models.slot import Slot
from ..render.grid_text import grid_table
from ..scheduler.events import (
    ClearHighlights,
    CommitFailed,
    CommitSaved,
    Effect,
    Event,
    Highlight,
    MarkScheduled,
    MarkUnscheduled,
    PressItem,
    PressSlot,
    RequestShutdown,
    SetButtonsEnabled,
    ToggleEditMode,
)
from ..scheduler.selection import UnknownTargetError
from ..scheduler.session import SchedulingSession

HELP = """commands:
  m <code>         press a module
  s <time> <room>  press a slot
  e                start editing / save changes
  show             print the timetable
  list             print every module
  q                quit (saves if editing)"""


class ShellError(ValueError):
    pass


def parse_command(line: str) -> Event | str | None:
    parts = line.split()
    if not parts:
        return None
    cmd, args = parts[0].lower(), parts[1:]
    if cmd in {"m", "module"} and len(args) == 1:
        return PressItem(args[0])
    if cmd in {"s", "slot"} and len(args) == 2:
        return PressSlot(args[0], args[1])
    if cmd in {"e", "edit"} and not args:
        return ToggleEditMode()
    if cmd in {"q", "quit", "exit"} and not args:
        return RequestShutdown()
    if cmd in {"show", "list", "help", "?"} and not args:
        return cmd
    raise ShellError(f"bad command: {line.strip()!r} (try 'help')")


def render_effect(effect: Effect) -> str:
    if isinstance(effect, Highlight):
        targets = " ".join(sorted(f"{s.time}/{s.room}" for s in effect.slots))
        return f"holding {effect.code}; valid: {targets or '(none)'}"
    if isinstance(effect, MarkScheduled):
        return f"scheduled {effect.text}"
    if isinstance(effect, MarkUnscheduled):
        return f"unscheduled {effect.text}"
    if isinstance(effect, ClearHighlights):
        return "cleared highlights"
    if isinstance(effect, SetButtonsEnabled):
        return "editing on" if effect.enabled else "editing off"
    if isinstance(effect, CommitSaved):
        return f"Changes saved to {effect.path.name}."
    if isinstance(effect, CommitFailed):
        return f"Save failed: {effect.reason}"
    return repr(effect)


def run_commands(session: SchedulingSession, commands: Iterable[str]) -> Iterator[str]:
    """Feed text commands to the session and yield the lines to print.

    End of input counts as a shutdown request.
    """
    highlighted: Set[Slot] = set()
    for line in commands:
        try:
            parsed = parse_command(line)
        except ShellError as exc:
            yield str(exc)
            continue
        if parsed is None:
            continue
        if parsed in {"help", "?"}:
            yield HELP
            continue
        if parsed == "show":
            yield grid_table(session.tt, session.grid, highlighted)
            continue
        if parsed == "list":
            for effect in session.initial_effects()[1:]:
                yield render_effect(effect)
            continue
        try:
            effects = session.handle(parsed)
        except UnknownTargetError as exc:
            yield str(exc)
            continue
        for effect in effects:
            if isinstance(effect, Highlight):
                highlighted = set(effect.slots)
            elif isinstance(effect, ClearHighlights):
                highlighted = set()
            yield render_effect(effect)
        if session.closed:
            return
    for effect in session.handle(RequestShutdown()):
        yield render_effect(effect)
