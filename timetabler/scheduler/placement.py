from __future__ import annotations

from typing import FrozenSet

from ..models.grid import SlotGrid
from ..models.module import Module
from ..models.slot import Slot
from ..models.timetable import Timetable

OCCUPIED = "occupied"
CAPACITY = "capacity"
GROUP = "group"


def blocking_reason(tt: Timetable, grid: SlotGrid, module: Module, slot: Slot) -> str | None:
    """Return the first rule that stops `module` going into `slot`, or None."""
    current = tt.get(slot)
    if current is not None and current != module:
        return OCCUPIED
    if module.size > slot.capacity:
        return CAPACITY
    # Same subject/year may not run twice at one time: scan the whole row
    for other in grid.row(slot.time):
        m = tt.get(other)
        if m is None or m.group_key != module.group_key:
            continue
        if m == module and other == slot:
            continue
        return GROUP
    return None


def can_place(tt: Timetable, grid: SlotGrid, module: Module, slot: Slot) -> bool:
    return blocking_reason(tt, grid, module, slot) is None


def valid_slots_for(tt: Timetable, grid: SlotGrid, module: Module) -> FrozenSet[Slot]:
    # Callers moving a module must take it off the timetable first
    return frozenset(s for s in grid.slots() if can_place(tt, grid, module, s))


def assign(tt: Timetable, module: Module, slot: Slot) -> Slot | None:
    """Put `module` into `slot`, first clearing any other slot that holds it.

    Returns the slot that was cleared, if any.
    """
    previous = tt.slot_of(module)
    if previous is not None and previous != slot:
        tt.place(None, previous)
    tt.place(module, slot)
    return previous if previous != slot else None
