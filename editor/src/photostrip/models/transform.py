"""Transform data structures for coordinate and state representation."""
from dataclasses import dataclass
from enum import Enum


@dataclass
class Vec2:
    """2D vector for coordinate pairs in strip pixels (Y-down)."""
    x: float
    y: float

    def __iter__(self):
        """Allow tuple unpacking: x, y = vec2"""
        return iter((self.x, self.y))


class InteractionKind(str, Enum):
    """What a pointer interaction on an object is doing."""
    NONE = 'none'
    DRAG = 'drag'
    RESIZE_TOP_LEFT = 'resize-tl'
    RESIZE_TOP_RIGHT = 'resize-tr'
    RESIZE_BOTTOM_LEFT = 'resize-bl'
    RESIZE_BOTTOM_RIGHT = 'resize-br'
    ROTATE = 'rotate'

    @property
    def is_resize(self):
        return self.value.startswith('resize')


@dataclass(frozen=True)
class Transform:
    """Transform state of a draggable object.

    Position is the top-left of the unrotated box, size in pixels, angle in
    radians pivoting on the box center.
    """
    x: float
    y: float
    width: float
    height: float
    angle: float = 0.0

    @classmethod
    def of(cls, obj):
        """Capture the transform of any object with x/y/width/height/angle."""
        return cls(obj.x, obj.y, obj.width, obj.height, obj.angle)

    @property
    def center(self):
        return Vec2(self.x + self.width / 2, self.y + self.height / 2)

    def apply_to(self, obj):
        """Write this transform onto obj."""
        obj.x = self.x
        obj.y = self.y
        obj.width = self.width
        obj.height = self.height
        obj.angle = self.angle
