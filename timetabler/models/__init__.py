# Re-export common types
from .catalog import ModuleCatalog
from .grid import SlotGrid
from .module import Module
from .slot import Slot
from .timetable import Timetable

__all__ = [
    "Slot",
    "SlotGrid",
    "Module",
    "ModuleCatalog",
    "Timetable",
]
