from __future__ import annotations

import logging
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Tuple

from ..models.catalog import ModuleCatalog
from ..models.grid import SlotGrid
from ..models.module import DEFAULT_GROUP_PREFIX, Module
from ..models.timetable import Timetable
from ..scheduler.placement import assign

TIME_PLACEHOLDER = "?????"
ROOM_PLACEHOLDER = "?"


class SnapshotError(ValueError):
    """The input snapshot cannot produce a complete catalog and timetable."""


class GridConfigError(ValueError):
    """The configured grid cannot be built."""


@dataclass
class TimetableConfig:
    times: List[str] = field(
        default_factory=lambda: [
            "MonAM",
            "MonPM",
            "TueAM",
            "TuePM",
            "WedAM",
            "WedPM",
            "ThuAM",
            "ThuPM",
            "FriAM",
            "FriPM",
        ]
    )
    rooms: List[str] = field(default_factory=lambda: ["A", "B", "C", "D", "E", "F", "G", "H"])
    capacities: List[int] = field(default_factory=lambda: [100, 100, 60, 60, 60, 30, 30, 30])
    group_prefix: int = DEFAULT_GROUP_PREFIX
    input_path: str = "data/ModulesIn.txt"
    output_path: str = "data/ModulesOut.txt"

    def resolve(self, root: Path, name: str) -> Path:
        p = Path(getattr(self, name))
        return p if p.is_absolute() else root / p


def load_config(project_root: Path) -> TimetableConfig:
    """Load configs/timetable.toml if present, else defaults.

    Recognised tables: [grid] times/rooms/capacities, [modules] group_prefix,
    [files] input/output. Missing keys keep their defaults.
    """
    logger = logging.getLogger(__name__)
    base = TimetableConfig()
    cfg = project_root / "configs" / "timetable.toml"
    if not cfg.exists():
        return base
    try:
        data: Dict[str, Any] = tomllib.loads(cfg.read_text(encoding="utf-8"))
    except (OSError, tomllib.TOMLDecodeError) as exc:
        logger.warning(f"Ignoring unreadable config {cfg}: {exc}")
        return base
    grid = data.get("grid", {})
    modules = data.get("modules", {})
    files = data.get("files", {})
    try:
        loaded = TimetableConfig(
            times=[str(t) for t in grid.get("times", base.times)],
            rooms=[str(r) for r in grid.get("rooms", base.rooms)],
            capacities=[int(c) for c in grid.get("capacities", base.capacities)],
            group_prefix=int(modules.get("group_prefix", base.group_prefix)),
            input_path=str(files.get("input", base.input_path)),
            output_path=str(files.get("output", base.output_path)),
        )
    except (TypeError, ValueError) as exc:
        raise GridConfigError(f"{cfg}: {exc}") from exc
    return loaded


def build_grid(config: TimetableConfig) -> SlotGrid:
    if config.group_prefix <= 0:
        raise GridConfigError(f"group_prefix must be positive, got {config.group_prefix}")
    try:
        return SlotGrid(config.times, config.rooms, config.capacities)
    except ValueError as exc:
        raise GridConfigError(str(exc)) from exc


def parse_record(
    line: str, line_no: int, grid: SlotGrid, group_prefix: int
) -> Tuple[Module, Tuple[str, str] | None]:
    fields = line.split()
    if len(fields) != 5:
        raise SnapshotError(f"line {line_no}: expected 5 fields, got {len(fields)}")
    code, name, time, room, size_raw = fields
    try:
        size = int(size_raw)
    except ValueError:
        raise SnapshotError(f"line {line_no}: size {size_raw!r} is not an integer") from None
    try:
        module = Module.from_record(code, name, size, group_prefix)
    except ValueError as exc:
        raise SnapshotError(f"line {line_no}: {exc}") from None
    unscheduled = (time == TIME_PLACEHOLDER, room == ROOM_PLACEHOLDER)
    if all(unscheduled):
        return module, None
    if any(unscheduled):
        raise SnapshotError(f"line {line_no}: {code} has only one of time/room set")
    if grid.get(time, room) is None:
        raise SnapshotError(f"line {line_no}: {code} references unknown slot {time} {room}")
    return module, (time, room)


def read_snapshot(
    path: Path, grid: SlotGrid, group_prefix: int = DEFAULT_GROUP_PREFIX
) -> Tuple[ModuleCatalog, Timetable]:
    """Build the catalog and the initial timetable from a snapshot file.

    Placements are trusted: capacity and group rules are not re-checked here.
    """
    logger = logging.getLogger(__name__)
    try:
        with path.open("r", encoding="utf-8") as f:
            lines = f.read().splitlines()
    except OSError as exc:
        raise SnapshotError(f"cannot read snapshot {path}: {exc}") from exc

    modules: List[Module] = []
    placements: List[Tuple[Module, Tuple[str, str]]] = []
    for i, line in enumerate(lines, start=1):
        if not line.strip():
            continue
        module, where = parse_record(line, i, grid, group_prefix)
        modules.append(module)
        if where is not None:
            placements.append((module, where))
    try:
        catalog = ModuleCatalog(modules)
    except ValueError as exc:
        raise SnapshotError(f"{path}: {exc}") from exc

    tt = Timetable()
    for module, (time, room) in placements:
        slot = grid.slot_at(time, room)
        previous = tt.get(slot)
        if previous is not None:
            logger.warning(
                f"{module.code} replaces {previous.code} in {slot}; {previous.code} left unscheduled"
            )
        assign(tt, module, slot)
    logger.info(f"Loaded {len(catalog)} modules ({len(placements)} scheduled) from {path}")
    return catalog, tt
