"""Transform modes - defines which handles are active and how they are probed."""

import math

from photostrip.models.transform import InteractionKind
from photostrip.utils.geometry import HANDLE_KINDS, box_center, to_local
from .handles import BodyHandle, CornerHandle, RotationHandle


class TransformMode:
    """Base class for transform modes."""

    def __init__(self):
        self.handles = {}  # InteractionKind -> handle object
        self.body = BodyHandle()

    def get_handles(self):
        """Return all handles for this mode."""
        return self.handles

    def handle_for(self, kind):
        """Handle object that implements an interaction kind."""
        if kind == InteractionKind.DRAG:
            return self.body
        return self.handles.get(kind)

    def get_handle_at_pos(self, x, y, obj):
        """Find which handle (if any) of obj is at (x, y).

        Returns:
            Handle object or None
        """
        local_x, local_y = to_local(x, y, obj)
        # Corners before rotate, same order as the geometry kernel
        for kind in HANDLE_KINDS:
            handle = self.handles.get(kind)
            if handle and handle.hit_test(local_x, local_y, obj.width, obj.height):
                return handle
        return None

    def draw(self, painter, obj):
        """Draw selection chrome for obj, rotated with it."""
        center_x, center_y = box_center(obj)
        painter.save()
        painter.translate(center_x, center_y)
        painter.rotate(math.degrees(obj.angle))
        painter.translate(-center_x, -center_y)

        self.body.draw(painter, obj)
        for handle in self.handles.values():
            handle.draw(painter, obj)

        painter.restore()


class BboxMode(TransformMode):
    """Bounding box with four corner resize handles and a rotate handle."""

    def __init__(self):
        super().__init__()

        self.handles = {
            InteractionKind.RESIZE_TOP_LEFT: CornerHandle('tl'),
            InteractionKind.RESIZE_TOP_RIGHT: CornerHandle('tr'),
            InteractionKind.RESIZE_BOTTOM_LEFT: CornerHandle('bl'),
            InteractionKind.RESIZE_BOTTOM_RIGHT: CornerHandle('br'),
            InteractionKind.ROTATE: RotationHandle(),
        }
