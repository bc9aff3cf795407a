from __future__ import annotations

import json
from pathlib import Path
from typing import Dict


def write_validation_report(
    report: Dict[str, object], outputs_dir: Path, filename: str = "validation.json"
) -> Path:
    outputs_dir.mkdir(parents=True, exist_ok=True)
    path = outputs_dir / filename
    with path.open("w", encoding="utf-8") as f:
        json.dump(report, f, indent=2, sort_keys=True)
        f.write("\n")
    return path


def format_validation_report(report: Dict[str, object]) -> str:
    lines: list[str] = []
    lines.append(f"clash_count: {report.get('clash_count')}")
    violations = report.get("violations_by_rule", {})
    lines.append("violations_by_rule:")
    if isinstance(violations, dict):
        for k, v in violations.items():
            lines.append(f"  - {k}: {len(v)}")
            for item in v:
                lines.append(f"      {item}")
    lines.append(f"scheduled: {report.get('scheduled_count')}")
    unscheduled = report.get("unscheduled", [])
    lines.append(f"unscheduled: {len(unscheduled)} modules")
    if isinstance(unscheduled, list) and unscheduled:
        lines.append("  " + " ".join(unscheduled))
    return "\n".join(lines)
