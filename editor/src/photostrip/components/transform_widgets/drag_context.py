"""Drag context dataclass for the transform controller.

One object holds everything an interaction needs between pointer-down and
pointer-up, instead of a spread of initial_* fields.
"""

from dataclasses import dataclass, field
from typing import Optional

from photostrip.models.transform import InteractionKind, Transform, Vec2


@dataclass
class TransformSession:
    """Snapshot taken at pointer-down for one drag, resize or rotate.

    Every pointer-move computes the new transform from this snapshot, never
    from the previous move, so rounding error cannot accumulate.
    """
    kind: InteractionKind
    start: Transform  # Object transform at pointer-down
    start_pointer: Vec2  # Pointer position at pointer-down
    drag_offset: Vec2 = field(default_factory=lambda: Vec2(0.0, 0.0))  # Grab point relative to top-left
    start_font_size: Optional[int] = None  # Text labels only
    moved: bool = False
