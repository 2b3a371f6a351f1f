"""CLI entry point using Typer."""

from __future__ import annotations

import importlib
import json
import logging
from pathlib import Path
from typing import Any

import typer
from pydantic import BaseModel

from modkit.core.mod import Mod

logger = logging.getLogger(__name__)

app = typer.Typer(name="modkit", help="Inspect and apply composable Mods")


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    """Composable item modifications."""
    if verbose:
        from rich.console import Console
        from rich.logging import RichHandler

        pkg_logger = logging.getLogger("modkit")
        pkg_logger.setLevel(logging.DEBUG)
        if not any(isinstance(h, RichHandler) for h in pkg_logger.handlers):
            pkg_logger.addHandler(RichHandler(console=Console(stderr=True), show_path=False))


def load_mod(target: str) -> Mod[Any]:
    """Resolve a ``package.module:attribute`` reference to a Mod.

    Raises ValueError for malformed references, ImportError/AttributeError
    when the reference does not resolve, and TypeError when it resolves to
    something other than a Mod.
    """
    module_name, sep, attr_path = target.partition(":")
    if not sep or not module_name or not attr_path:
        raise ValueError(f"Target must look like 'package.module:attribute', got {target!r}")

    obj: Any = importlib.import_module(module_name)
    for attr in attr_path.split("."):
        obj = getattr(obj, attr)

    if not isinstance(obj, Mod):
        raise TypeError(f"{target} is a {type(obj).__name__}, not a Mod")
    logger.debug("Resolved %s to %r", target, obj)
    return obj


def _load_or_exit(target: str) -> Mod[Any]:
    try:
        return load_mod(target)
    except (ValueError, ImportError, AttributeError, TypeError) as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)


@app.command("inspect")
def inspect_mod(
    target: str = typer.Argument(..., help="Mod reference, e.g. myapp.styles:primary_button"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
    output: Path | None = typer.Option(None, "--output", "-o", help="Also write JSON to this file"),
) -> None:
    """List the steps a Mod runs, in order."""
    from modkit.reports.render_steps import (
        export_steps_json,
        render_steps_table,
        steps_to_json,
    )

    mod = _load_or_exit(target)

    if json_output:
        typer.echo(json.dumps(steps_to_json(mod), indent=2))
    else:
        render_steps_table(mod)

    if output is not None:
        export_steps_json(mod, output)
        logger.debug("Wrote step listing to %s", output)


@app.command("apply")
def apply_mod(
    target: str = typer.Argument(..., help="Mod reference, e.g. myapp.records:upper_name"),
    item: str = typer.Argument(..., help="Item as JSON"),
) -> None:
    """Apply a Mod to a copy of a JSON item and print the result as JSON."""
    mod = _load_or_exit(target)

    try:
        value = json.loads(item)
    except json.JSONDecodeError as e:
        typer.echo(f"Error: invalid JSON item: {e}", err=True)
        raise typer.Exit(code=1)

    logger.debug("Applying %r to %r", mod, value)
    result = mod.applied(value)
    if isinstance(result, BaseModel):
        result = result.model_dump(mode="json")
    typer.echo(json.dumps(result, indent=2, default=str))
