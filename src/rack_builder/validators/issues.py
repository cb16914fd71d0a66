"""Layout issues reported by the engine.

Nothing in the layout engine is fatal. Range problems are clamped,
degenerate elements are dropped, and each such event is reported as a
LayoutIssue so callers can show what was adjusted.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass


@dataclass
class LayoutIssue:
    """A single non-fatal layout issue."""

    severity: str  # "clamp" | "suppressed" | "nonconforming" | "error"
    element_type: str  # "Corridor", "RackFrame", "Tier", "Post", "Duct", "Pipe", ...
    element_id: str  # e.g. "rack", "tier 2", "tier 2 pipe 1"
    message: str
    field: str = ""
    tier: int | None = None

    def to_dict(self) -> dict:
        return asdict(self)
