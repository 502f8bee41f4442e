"""Plan export utilities."""

import json
from pathlib import Path
from typing import Any, Dict

import yaml

from .script import CompiledPlan


def plan_to_dict(plan: CompiledPlan) -> Dict[str, Any]:
    """Convert a plan to plain data, preserving script order."""
    return {
        "scripts": [script.to_dict() for script in plan.scripts],
        "knownEntrypoints": list(plan.known_entrypoints),
    }


def export_json(plan: CompiledPlan, output_path: Path, indent: int = 2) -> None:
    """Export a plan to JSON with pretty formatting."""
    with open(output_path, "w") as f:
        json.dump(plan_to_dict(plan), f, indent=indent, ensure_ascii=False)


def export_yaml(plan: CompiledPlan, output_path: Path) -> None:
    """Export a plan to YAML, keeping script order."""
    with open(output_path, "w") as f:
        yaml.safe_dump(plan_to_dict(plan), f, sort_keys=False)


def export_plan(plan: CompiledPlan, output_path: Path) -> None:
    """Export a plan, choosing the format from the file suffix."""
    if Path(output_path).suffix.lower() in (".yaml", ".yml"):
        export_yaml(plan, output_path)
    else:
        export_json(plan, output_path)


def format_plan_summary(plan: CompiledPlan) -> str:
    """Format a human-readable summary of a compiled plan."""
    lines = ["Compiled Plan Summary", "=" * 50, ""]

    for position, script in enumerate(plan.scripts, start=1):
        lines.append(f"{position:>2}. {script.id}  [{script.type.value}]")
        lines.append(f"      cmd: {script.command}")
        if script.args is not None:
            details = ", ".join(f"{k}={v}" for k, v in script.args.to_dict().items())
            lines.append(f"      args: {details}")
        if script.watch_command:
            lines.append(f"      watch: {script.watch_command}")
        if script.plugin is not None:
            lines.append(f"      plugin: {script.plugin.name}")

    lines.append("")
    entrypoints = ", ".join(plan.known_entrypoints) or "(none)"
    lines.append(f"Known entrypoints: {entrypoints}")
    return "\n".join(lines)
