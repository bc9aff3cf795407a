"""Single-selection pick up / put down controller.

At most one module is "in hand" at a time. Picking a module up takes it off
the timetable and remembers where it was; putting it down places it in a
legal slot; deselecting returns it to where it came from. Between completed
moves the machine is always idle.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List

from ..models.catalog import ModuleCatalog
from ..models.grid import SlotGrid
from ..models.module import Module
from ..models.slot import Slot
from ..models.timetable import Timetable
from ..render.grid_text import description_line
from .events import (
    ClearHighlights,
    Effect,
    Event,
    Highlight,
    MarkScheduled,
    MarkUnscheduled,
    PressItem,
    PressSlot,
)
from .placement import assign, blocking_reason, valid_slots_for


class UnknownTargetError(LookupError):
    """An event named a module code or slot that does not exist."""


@dataclass(frozen=True)
class Selection:
    module: Module
    origin: Slot | None


class SelectionMachine:
    def __init__(self, grid: SlotGrid, catalog: ModuleCatalog, tt: Timetable):
        self.grid = grid
        self.catalog = catalog
        self.tt = tt
        self.held: Selection | None = None
        self.logger = logging.getLogger(__name__)

    @property
    def idle(self) -> bool:
        return self.held is None

    def dispatch(self, event: Event) -> List[Effect]:
        if isinstance(event, PressItem):
            module = self.catalog.get(event.code)
            if module is None:
                raise UnknownTargetError(f"unknown module {event.code}")
            return self.press_module(module)
        if isinstance(event, PressSlot):
            slot = self.grid.get(event.time, event.room)
            if slot is None:
                raise UnknownTargetError(f"unknown slot {event.time} {event.room}")
            return self.press_slot(slot)
        raise TypeError(f"selection cannot handle {type(event).__name__}")

    def press_module(self, module: Module) -> List[Effect]:
        if self.held is None:
            return self._pick_up(module)
        if self.held.module == module:
            return self.deselect()
        effects = self.deselect()
        effects.extend(self._pick_up(module))
        return effects

    def press_slot(self, slot: Slot) -> List[Effect]:
        occupant = self.tt.get(slot)
        if self.held is None:
            return self.press_module(occupant) if occupant is not None else []
        held = self.held
        reason = blocking_reason(self.tt, self.grid, held.module, slot)
        if reason is None:
            return self._put_down(held.module, slot, held.origin)
        self.logger.debug(f"Rejected {held.module.code} -> {slot}: {reason}")
        if occupant is not None:
            # A refused drop onto an occupied slot picks up the occupant instead
            return self.press_module(occupant)
        return []

    def deselect(self) -> List[Effect]:
        held = self.held
        if held is None:
            return []
        if held.origin is not None:
            return self._put_down(held.module, held.origin, held.origin)
        self.held = None
        self.logger.info(f"Returned {held.module.code} to unscheduled")
        return [
            MarkUnscheduled(held.module.code, description_line(held.module, None)),
            ClearHighlights(),
        ]

    def _pick_up(self, module: Module) -> List[Effect]:
        origin = self.tt.slot_of(module)
        if origin is not None:
            self.tt.place(None, origin)
        self.held = Selection(module, origin)
        valid = valid_slots_for(self.tt, self.grid, module)
        self.logger.info(
            f"Picked up {module.code} from {origin or 'unscheduled'} ({len(valid)} valid slots)"
        )
        return [Highlight(module.code, valid)]

    def _put_down(self, module: Module, slot: Slot, origin: Slot | None) -> List[Effect]:
        assign(self.tt, module, slot)
        self.held = None
        self.logger.info(f"Placed {module.code} in {slot}")
        vacated = origin if origin != slot else None
        return [
            MarkScheduled(module.code, slot, description_line(module, slot), vacated),
            ClearHighlights(),
        ]
