"""
Photo Strip Editor - Transform Widget Components

This package contains the transform handle architecture:
- handles.py: ABC-based handle classes (CornerHandle, RotationHandle, BodyHandle)
- modes.py: Mode classes defining the active handle set (BboxMode)
- drag_context.py: TransformSession snapshot for one interaction
"""

from .handles import Handle, CornerHandle, RotationHandle, BodyHandle
from .modes import TransformMode, BboxMode
from .drag_context import TransformSession

__all__ = [
    'Handle', 'CornerHandle', 'RotationHandle', 'BodyHandle',
    'TransformMode', 'BboxMode',
    'TransformSession',
]
