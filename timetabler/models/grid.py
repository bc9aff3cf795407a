from __future__ import annotations

from typing import Dict, Iterable, Iterator, List, Sequence, Tuple

from .slot import Slot


class SlotGrid:
    """Fixed time x room grid of slots, built once and never resized.

    Rows are time-codes and columns are rooms; every slot in a column shares
    the room's capacity.
    """

    def __init__(self, times: Sequence[str], rooms: Sequence[str], capacities: Sequence[int]):
        if not times or not rooms:
            raise ValueError("grid needs at least one time-code and one room")
        if len(rooms) != len(capacities):
            raise ValueError(f"{len(rooms)} rooms but {len(capacities)} capacities")
        if len(set(times)) != len(times):
            raise ValueError("duplicate time-codes in grid")
        if len(set(rooms)) != len(rooms):
            raise ValueError("duplicate rooms in grid")
        self.times: Tuple[str, ...] = tuple(times)
        self.rooms: Tuple[str, ...] = tuple(rooms)
        self.capacities: Dict[str, int] = dict(zip(rooms, capacities))
        self.rows: List[List[Slot]] = [
            [Slot(t, r, c) for r, c in zip(rooms, capacities)] for t in times
        ]
        self._by_key: Dict[Tuple[str, str], Slot] = {
            (s.time, s.room): s for row in self.rows for s in row
        }

    def __iter__(self) -> Iterator[Slot]:
        return self.slots()

    def __len__(self) -> int:
        return len(self._by_key)

    def slots(self) -> Iterator[Slot]:
        for row in self.rows:
            yield from row

    def get(self, time: str, room: str) -> Slot | None:
        return self._by_key.get((time, room))

    def slot_at(self, time: str, room: str) -> Slot:
        slot = self.get(time, room)
        if slot is None:
            raise KeyError(f"no slot at {time} {room}")
        return slot

    def row(self, time: str) -> Iterable[Slot]:
        return self.rows[self.times.index(time)]
