"""Input events consumed by the editor and the effects it reports back.

The presentation layer turns button presses into events and renders the
returned effects; nothing in the scheduler talks to a display directly.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import FrozenSet, Union

from ..models.slot import Slot


@dataclass(frozen=True)
class PressItem:
    code: str


@dataclass(frozen=True)
class PressSlot:
    time: str
    room: str


@dataclass(frozen=True)
class ToggleEditMode:
    pass


@dataclass(frozen=True)
class RequestShutdown:
    pass


Event = Union[PressItem, PressSlot, ToggleEditMode, RequestShutdown]


@dataclass(frozen=True)
class Highlight:
    code: str
    slots: FrozenSet[Slot]


@dataclass(frozen=True)
class MarkScheduled:
    code: str
    slot: Slot
    text: str
    vacated: Slot | None = None  # slot the module left, to be blanked


@dataclass(frozen=True)
class MarkUnscheduled:
    code: str
    text: str


@dataclass(frozen=True)
class ClearHighlights:
    pass


@dataclass(frozen=True)
class SetButtonsEnabled:
    enabled: bool


@dataclass(frozen=True)
class CommitSaved:
    path: Path


@dataclass(frozen=True)
class CommitFailed:
    path: Path
    reason: str


Effect = Union[
    Highlight,
    MarkScheduled,
    MarkUnscheduled,
    ClearHighlights,
    SetButtonsEnabled,
    CommitSaved,
    CommitFailed,
]
