"""Rich tables and JSON export for Mod step listings."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from pydantic import BaseModel
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from modkit.core.mod import Mod


class StepReport(BaseModel):
    """Flat listing of the leaf steps a Mod runs, in order."""

    model_config = {"frozen": True, "extra": "forbid"}

    name: str
    steps: tuple[str, ...] = ()
    step_count: int = 0


def mod_report(mod: Mod[Any]) -> StepReport:
    return StepReport(name=mod.name, steps=mod.steps, step_count=len(mod.steps))


def render_steps_table(mod: Mod[Any], console: Console | None = None) -> None:
    """Print a Rich table listing the steps of a Mod."""
    if console is None:
        console = Console()

    report = mod_report(mod)
    console.print(f"\n[bold]Mod:[/bold] {escape(report.name)}")

    if not report.steps:
        console.print("  [dim]identity (no steps)[/dim]")
        return

    table = Table(title=f"Steps ({report.step_count})")
    table.add_column("#", justify="right", style="dim")
    table.add_column("Step")
    for i, step in enumerate(report.steps, 1):
        table.add_row(str(i), escape(step))

    console.print(table)


def steps_to_json(mod: Mod[Any]) -> dict:
    """Convert a Mod's step listing to a JSON-serializable dict."""
    return mod_report(mod).model_dump(mode="json")


def export_steps_json(mod: Mod[Any], path: str | Path) -> None:
    """Write a Mod's step listing to a JSON file."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(steps_to_json(mod), indent=2))
