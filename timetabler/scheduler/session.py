from __future__ import annotations

import logging
from pathlib import Path
from typing import List

from ..models.catalog import ModuleCatalog
from ..models.grid import SlotGrid
from ..models.timetable import Timetable
from ..render.grid_text import description_line
from ..render.snapshot_out import CommitError, write_snapshot
from .events import (
    CommitFailed,
    CommitSaved,
    Effect,
    Event,
    MarkScheduled,
    MarkUnscheduled,
    PressItem,
    PressSlot,
    RequestShutdown,
    SetButtonsEnabled,
    ToggleEditMode,
)
from .selection import SelectionMachine


class SchedulingSession:
    """One editing session over a loaded grid, catalog and timetable.

    Press events only reach the selection machine while editing is on.
    Leaving edit mode (or shutting down while editing) puts any held module
    back and writes the output snapshot.
    """

    def __init__(
        self,
        grid: SlotGrid,
        catalog: ModuleCatalog,
        tt: Timetable,
        output_path: Path,
    ):
        self.grid = grid
        self.catalog = catalog
        self.tt = tt
        self.output_path = output_path
        self.selection = SelectionMachine(grid, catalog, tt)
        self.editing = False
        self.closed = False
        self.logger = logging.getLogger(__name__)

    def initial_effects(self) -> List[Effect]:
        effects: List[Effect] = [SetButtonsEnabled(False)]
        for m in self.catalog:
            slot = self.tt.slot_of(m)
            if slot is None:
                effects.append(MarkUnscheduled(m.code, description_line(m, None)))
            else:
                effects.append(MarkScheduled(m.code, slot, description_line(m, slot)))
        return effects

    def handle(self, event: Event) -> List[Effect]:
        if self.closed:
            return []
        if isinstance(event, (PressItem, PressSlot)):
            if not self.editing:
                self.logger.debug(f"Ignored {event} outside edit mode")
                return []
            return self.selection.dispatch(event)
        if isinstance(event, ToggleEditMode):
            return self.toggle_edit_mode()
        if isinstance(event, RequestShutdown):
            return self.shutdown()
        raise TypeError(f"unknown event {event!r}")

    def toggle_edit_mode(self) -> List[Effect]:
        if not self.editing:
            self.editing = True
            self.logger.info("Editing enabled")
            return [SetButtonsEnabled(True)]
        effects = self.selection.deselect()
        result = self.commit()
        effects.append(result)
        if isinstance(result, CommitSaved):
            self.editing = False
            effects.append(SetButtonsEnabled(False))
            self.logger.info("Editing disabled")
        return effects

    def shutdown(self) -> List[Effect]:
        if not self.editing:
            self.closed = True
            return []
        effects = self.selection.deselect()
        result = self.commit()
        effects.append(result)
        if isinstance(result, CommitSaved):
            self.editing = False
            self.closed = True
        return effects

    def commit(self) -> Effect:
        # Callers deselect first so no module is off the timetable mid-move
        try:
            path = write_snapshot(self.catalog, self.tt, self.output_path)
        except CommitError as exc:
            return CommitFailed(self.output_path, str(exc))
        return CommitSaved(path)
