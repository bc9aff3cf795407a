from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterable, Set, Tuple

from .module import Module
from .slot import Slot


@dataclass
class Timetable:
    cells: Dict[Slot, Module] = field(default_factory=dict)

    def place(self, module: Module | None, slot: Slot) -> None:
        # Does not clear other slots holding the module; see scheduler.placement.assign
        if module is None:
            self.cells.pop(slot, None)
        else:
            self.cells[slot] = module

    def get(self, slot: Slot) -> Module | None:
        return self.cells.get(slot)

    def slot_of(self, module: Module) -> Slot | None:
        for slot, m in self.cells.items():
            if m == module:
                return slot
        return None

    def occupied_slots(self) -> Set[Slot]:
        return set(self.cells)

    def all(self) -> Iterable[Tuple[Slot, Module]]:
        return self.cells.items()
