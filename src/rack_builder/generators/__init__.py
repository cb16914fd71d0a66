"""Layout generation.

Pure functions from parameters to placed geometry:
- Level stacker: tier heights → beam levels
- Frame assembler: levels → posts and beams
- Tier envelope: usable space per tier
- Duct / pipe resolvers: clamped utility placement per tier
- Shell: corridor floor, ceiling, roof and walls
"""

from rack_builder.generators.levels import stack_levels
from rack_builder.generators.envelope import resolve_envelope, resolve_envelopes
from rack_builder.generators.frame import assemble_frame
from rack_builder.generators.ducts import DuctPlacement, resolve_duct
from rack_builder.generators.pipes import PipePlacement, resolve_pipe, resolve_pipes
from rack_builder.generators.shell import build_shell

__all__ = [
    "stack_levels",
    "resolve_envelope",
    "resolve_envelopes",
    "assemble_frame",
    "DuctPlacement",
    "resolve_duct",
    "PipePlacement",
    "resolve_pipe",
    "resolve_pipes",
    "build_shell",
]
