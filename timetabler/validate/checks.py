from __future__ import annotations

from collections import Counter, defaultdict
from typing import Dict, List

from ..models.catalog import ModuleCatalog
from ..models.grid import SlotGrid
from ..models.timetable import Timetable


def validate_all(tt: Timetable, grid: SlotGrid, catalog: ModuleCatalog) -> Dict[str, object]:
    report: Dict[str, object] = {}
    violations_by_rule: Dict[str, List[str]] = defaultdict(list)

    # Module in more than one slot
    placed = Counter(m.code for _, m in tt.all())
    for code, count in sorted(placed.items()):
        if count > 1:
            violations_by_rule["double_booked"].append(f"{code} x{count}")

    # Capacity
    for slot, m in tt.all():
        if m.size > slot.capacity:
            violations_by_rule["capacity"].append(f"{m.code} ({m.size}) in {slot} ({slot.capacity})")

    # Same group twice at one time
    for time in grid.times:
        groups: Dict[str, List[str]] = defaultdict(list)
        for slot in grid.row(time):
            m = tt.get(slot)
            if m is not None and m.code not in groups[m.group_key]:
                groups[m.group_key].append(m.code)
        for key, codes in groups.items():
            if len(codes) > 1:
                violations_by_rule["group_conflict"].append(f"{time}:{key}:{'/'.join(codes)}")

    report["clash_count"] = sum(len(v) for v in violations_by_rule.values())
    report["violations_by_rule"] = dict(violations_by_rule)
    report["scheduled_count"] = len(placed)
    report["unscheduled"] = [m.code for m in catalog if m.code not in placed]
    return report
