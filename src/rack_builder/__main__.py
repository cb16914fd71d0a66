"""Rack Builder CLI.

Usage:
    python -m rack_builder <command> <params.json> [options]

Pass '-' instead of a parameters file to use the default rack.
Every command prints a single JSON object to stdout. Parameter edits go
through 'apply' with a JSON patch; nothing is written back to disk.
"""
from __future__ import annotations

import json
import logging
import sys
from pathlib import Path
from typing import Optional

import typer
from pydantic import ValidationError

from rack_builder.edits import apply_updates, parse_updates
from rack_builder.engine import LayoutEngine
from rack_builder.generators.envelope import resolve_envelope
from rack_builder.models.params import RackParams
from rack_builder.validators.containment import validate_layout
from rack_builder.validators.issues import LayoutIssue

app = typer.Typer(
    name="rack_builder",
    help="Rack Builder — parametric tiered rack layout inside a corridor.",
    no_args_is_help=True,
)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _load_params(source: str) -> RackParams:
    """Load parameters from a JSON file, or defaults for '-'."""
    if source == "-":
        return RackParams()
    path = Path(source)
    if not path.exists():
        _output({"ok": False, "error": f"Parameters file not found: {path}"})
        raise typer.Exit(1)
    try:
        return RackParams.load(path)
    except (ValidationError, ValueError) as e:
        _output({"ok": False, "error": f"Invalid parameters: {e}"})
        raise typer.Exit(1)


def _issues_json(issues: list[LayoutIssue]) -> dict:
    """Summarise issues by severity."""
    return {
        "clamps": sum(1 for i in issues if i.severity == "clamp"),
        "suppressed": sum(1 for i in issues if i.severity == "suppressed"),
        "nonconforming": sum(1 for i in issues if i.severity == "nonconforming"),
        "errors": sum(1 for i in issues if i.severity == "error"),
        "details": [i.to_dict() for i in issues],
    }


def _output(data: dict) -> None:
    """Print JSON output to stdout."""
    typer.echo(json.dumps(data, indent=2, ensure_ascii=False))


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log engine activity to stderr"),
):
    """Parametric rack layout engine."""
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            stream=sys.stderr,
            format="%(levelname)s %(name)s: %(message)s",
        )


# ---------------------------------------------------------------------------
# Read-only commands
# ---------------------------------------------------------------------------

@app.command()
def version() -> None:
    """Show version."""
    from rack_builder import __version__

    typer.echo(f"rack-builder v{__version__}")


@app.command()
def defaults():
    """Print the default parameter aggregate (flat form)."""
    _output({"ok": True, "params": RackParams().to_flat()})


@app.command()
def show(params_file: str = typer.Argument(..., help="Parameters JSON file or '-'")):
    """Print the parameter aggregate after constraint propagation."""
    engine = LayoutEngine(_load_params(params_file))
    result = engine.propagator.propagate()
    _output({
        "ok": True,
        "params": engine.params.to_flat(),
        "issues": _issues_json(result.issues),
    })


@app.command()
def layout(
    params_file: str = typer.Argument(..., help="Parameters JSON file or '-'"),
    shell: bool = typer.Option(False, "--shell", help="Include corridor shell primitives"),
):
    """Propagate constraints and print the placed geometry."""
    engine = LayoutEngine(_load_params(params_file), include_shell=shell)
    result = engine.rebuild()
    data = result.model_dump(mode="json", exclude={"issues"})
    _output({
        "ok": True,
        **data,
        "counts": {
            kind: sum(1 for p in result.primitives if p.kind.value == kind)
            for kind in sorted({p.kind.value for p in result.primitives})
        },
        "issues": _issues_json(result.issues),
    })


@app.command()
def levels(params_file: str = typer.Argument(..., help="Parameters JSON file or '-'")):
    """Print the beam level stack."""
    engine = LayoutEngine(_load_params(params_file))
    result = engine.propagator.propagate()
    _output({
        "ok": True,
        "levels": result.stack.levels,
        "roof_level": result.stack.roof_level,
        "tier_bottoms": result.stack.tier_bottoms,
        "total_height": result.stack.total_height,
    })


@app.command()
def envelope(
    params_file: str = typer.Argument(..., help="Parameters JSON file or '-'"),
    tier: int = typer.Argument(..., help="Tier index (1 = top)"),
):
    """Print one tier's clear envelope."""
    params = _load_params(params_file)
    LayoutEngine(params).propagator.propagate()
    try:
        env = resolve_envelope(tier, params.rack, params.tier_heights)
    except ValueError as e:
        _output({"ok": False, "error": str(e)})
        raise typer.Exit(1)
    _output({
        "ok": True,
        "envelope": env.model_dump(),
        "clear_height_in": env.clear_height_in,
        "depth_clearance_in": env.depth_clearance_in,
    })


@app.command()
def check(params_file: str = typer.Argument(..., help="Parameters JSON file or '-'")):
    """Rebuild and run the containment checks."""
    engine = LayoutEngine(_load_params(params_file))
    result = engine.rebuild()
    errors = validate_layout(engine.params, result)
    _output({
        "ok": not errors,
        "issues": _issues_json(result.issues),
        "validation": _issues_json(errors),
    })
    if errors:
        raise typer.Exit(1)


# ---------------------------------------------------------------------------
# Apply command (modifications)
# ---------------------------------------------------------------------------

@app.command()
def apply(
    params_file: str = typer.Argument(..., help="Parameters JSON file or '-'"),
    updates_json: Optional[str] = typer.Argument(None, help="JSON object of changes"),
    file: Optional[str] = typer.Option(None, "--file", "-f", help="Read changes from JSON file"),
    stdin: bool = typer.Option(False, "--stdin", help="Read changes from stdin"),
):
    """Apply a parameter patch, propagate, and print the resulting parameters."""
    if stdin:
        raw = sys.stdin.read()
    elif file:
        raw = Path(file).read_text()
    elif updates_json:
        raw = updates_json
    else:
        _output({"ok": False, "error": "Provide changes as argument, --file, or --stdin"})
        raise typer.Exit(1)

    params = _load_params(params_file)
    try:
        ignored = apply_updates(params, parse_updates(raw))
    except ValueError as e:
        _output({"ok": False, "error": str(e)})
        raise typer.Exit(1)

    engine = LayoutEngine(params)
    result = engine.rebuild()
    _output({
        "ok": True,
        "ignored": ignored,
        "params": params.to_flat(),
        "primitives": len(result.primitives),
        "issues": _issues_json(result.issues),
    })


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------

if __name__ == "__main__":
    app()
