from __future__ import annotations

import csv
import io
from pathlib import Path
from typing import AbstractSet, List

from ..models.grid import SlotGrid
from ..models.module import Module
from ..models.slot import Slot
from ..models.timetable import Timetable


def description_line(module: Module, slot: Slot | None) -> str:
    where = "?????  ?" if slot is None else f"{slot.time}  {slot.room}"
    return f"{module.code}  {module.size}  -  {where}"


def grid_table(tt: Timetable, grid: SlotGrid, highlighted: AbstractSet[Slot] = frozenset()) -> str:
    # Highlighted (valid target) cells are marked with "*"
    headers = [f"{r} ({grid.capacities[r]})" for r in grid.rooms]
    width = max([len(m.code) for _, m in tt.all()] + [len(h) for h in headers]) + 1
    label_w = max(len(t) for t in grid.times) + 1
    lines: List[str] = []
    header = " " * label_w + "".join(h.ljust(width) for h in headers)
    lines.append(header.rstrip())
    for row in grid.rows:
        cells = []
        for s in row:
            m = tt.get(s)
            text = m.code if m is not None else ("*" if s in highlighted else ".")
            cells.append(text.ljust(width))
        lines.append((row[0].time.ljust(label_w) + "".join(cells)).rstrip())
    return "\n".join(lines)


def csv_grid(tt: Timetable, grid: SlotGrid) -> str:
    buf = io.StringIO()
    writer = csv.writer(buf, lineterminator="\n")
    writer.writerow(["Time", "Room", "Capacity", "Module", "Name", "Size"])
    for s in grid.slots():
        m = tt.get(s)
        if m is None:
            # Leave empty if not placed
            writer.writerow([s.time, s.room, s.capacity, "", "", ""])
        else:
            writer.writerow([s.time, s.room, s.capacity, m.code, m.name, m.size])
    return buf.getvalue()


def write_csv_grid(text: str, outputs_dir: Path) -> Path:
    outputs_dir.mkdir(parents=True, exist_ok=True)
    path = outputs_dir / "timetable.csv"
    with path.open("w", encoding="utf-8") as f:
        f.write(text)
    return path
