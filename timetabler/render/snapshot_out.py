from __future__ import annotations

import logging
from pathlib import Path
from typing import List

from ..data.loader import ROOM_PLACEHOLDER, TIME_PLACEHOLDER
from ..models.catalog import ModuleCatalog
from ..models.module import Module
from ..models.timetable import Timetable


class CommitError(OSError):
    """Writing the output snapshot failed; the timetable is unchanged."""


def output_line(module: Module, tt: Timetable) -> str:
    slot = tt.slot_of(module)
    if slot is None:
        where = f"{TIME_PLACEHOLDER} {ROOM_PLACEHOLDER}"
    else:
        where = f"{slot.time} {slot.room}"
    return f"{module.code} {module.name} {where} {module.size}"


def snapshot_text(catalog: ModuleCatalog, tt: Timetable) -> str:
    lines: List[str] = [output_line(m, tt) for m in catalog]
    return "\n".join(lines) + "\n"


def write_snapshot(catalog: ModuleCatalog, tt: Timetable, path: Path) -> Path:
    logger = logging.getLogger(__name__)
    text = snapshot_text(catalog, tt)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open("w", encoding="utf-8") as f:
            f.write(text)
    except OSError as exc:
        logger.error(f"Could not write snapshot {path}: {exc}")
        raise CommitError(f"cannot write {path}: {exc}") from exc
    logger.info(f"Saved {len(catalog)} modules to {path}")
    return path
