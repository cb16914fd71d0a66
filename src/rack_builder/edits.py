"""Structured parameter patches.

Editing surfaces (sliders, a chat assistant) describe changes as a JSON
object holding only the keys to change, e.g.::

    {"depth": 5, "tierCount": 3}
    {"tier": 2, "ductEnabled": true, "ductWidths": 20}
    {"tier": 1, "pipesPerTier": [{"diam": 4, "side": -6, "vert": 2}]}

Keys may be camelCase (flat aggregate) or snake_case. Patches are applied
without clamping; run the propagator afterwards.
"""

from __future__ import annotations

import json
import logging
import re
from typing import Any

from pydantic import BaseModel, TypeAdapter

from rack_builder.models.params import CORRIDOR_KEYS, RACK_KEYS, PipeSpec, RackParams, Tier

logger = logging.getLogger(__name__)

TOP_LEVEL_KEYS: dict[str, tuple[str, str]] = {
    **{key: ("corridor", name) for key, name in CORRIDOR_KEYS.items()},
    **{key: ("rack", name) for key, name in RACK_KEYS.items()},
}
PER_TIER_KEYS = {
    "tierHeights",
    "ductEnabled",
    "ductWidths",
    "ductHeights",
    "ductOffsets",
    "pipeEnabled",
    "pipesPerTier",
    "pipeCount",
}


def parse_updates(text: str) -> dict[str, Any]:
    """Parse a JSON patch object.

    Handles JSON wrapped in markdown code fences.
    """
    text = text.strip()
    if text.startswith("```"):
        lines = [l for l in text.split("\n") if not l.strip().startswith("```")]
        text = "\n".join(lines)

    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON: {e}") from e
    if not isinstance(data, dict):
        raise ValueError(f"Expected a JSON object, got {type(data).__name__}")
    return data


def apply_updates(params: RackParams, updates: dict[str, Any]) -> list[str]:
    """Apply a patch to params in place.

    Order: tierCount first (so a patch can add a tier and fill it), then
    top-level keys, then per-tier keys on the tier named by ``"tier"``.

    Returns:
        Keys that were not recognised and therefore ignored.

    Raises:
        ValueError: per-tier keys without a valid ``"tier"``, or a value
            of the wrong type.
    """
    pending = {_camel(k): v for k, v in updates.items()}
    ignored: list[str] = []

    tier_index = pending.pop("tier", None)
    if "tierCount" in pending:
        count = TypeAdapter(int).validate_python(pending.pop("tierCount"))
        params.resize_tiers(count)
        logger.debug("Tier count set to %d", count)

    per_tier = {k: pending.pop(k) for k in list(pending) if k in PER_TIER_KEYS}

    for key, value in pending.items():
        target = TOP_LEVEL_KEYS.get(key)
        if target is None:
            logger.info("Ignoring unknown parameter %r", key)
            ignored.append(key)
            continue
        section, name = target
        _set_validated(getattr(params, section), name, value)

    if per_tier:
        if tier_index is None:
            raise ValueError(
                f"Per-tier keys {sorted(per_tier)} need a 'tier' (1-based index)"
            )
        tier = params.tier(TypeAdapter(int).validate_python(tier_index))
        for key, value in per_tier.items():
            _apply_tier_key(tier, key, value)

    return ignored


def _apply_tier_key(tier: Tier, key: str, value: Any) -> None:
    if key == "tierHeights":
        _set_validated(tier, "height", value)
    elif key == "ductEnabled":
        _set_validated(tier.duct, "enabled", value)
    elif key == "ductWidths":
        _set_validated(tier.duct, "width", value)
    elif key == "ductHeights":
        _set_validated(tier.duct, "height", value)
    elif key == "ductOffsets":
        _set_validated(tier.duct, "offset", value)
    elif key == "pipeEnabled":
        _set_validated(tier, "pipes_enabled", value)
    elif key == "pipesPerTier":
        tier.pipes = TypeAdapter(list[PipeSpec]).validate_python(value)
    elif key == "pipeCount":
        tier.resize_pipes(TypeAdapter(int).validate_python(value))


def _set_validated(model: BaseModel, name: str, value: Any) -> None:
    """Type-check a single value against the field annotation, then assign."""
    annotation = type(model).model_fields[name].annotation
    setattr(model, name, TypeAdapter(annotation).validate_python(value))


def _camel(key: str) -> str:
    """snake_case → camelCase; camelCase keys pass through."""
    return re.sub(r"_([a-z])", lambda m: m.group(1).upper(), key)
