"""
Photo Strip Editor - Data Models

Draggable objects (stickers, text labels), strokes, strip layouts and the
scene that owns them. This is the MODEL in MVC architecture.
"""

from .transform import Vec2, Transform, InteractionKind
from .draggable import DraggableObject, Sticker, TextLabel, object_from_dict
from .stroke import Stroke
from .layout import Slot, FrameOption, StripLayout, get_layout
from .scene import Scene, ZOrderList

__all__ = [
    'Vec2', 'Transform', 'InteractionKind',
    'DraggableObject', 'Sticker', 'TextLabel', 'object_from_dict',
    'Stroke',
    'Slot', 'FrameOption', 'StripLayout', 'get_layout',
    'Scene', 'ZOrderList',
]
