"""Transform handle system - ABC-based handle architecture.

Each handle type is a class that knows:
- How to draw itself (in the object's local, unrotated frame)
- How to test if a local point hits it
- How a pointer drag changes the object
- Which cursor to show while hovering it

Hit zones come from the geometry kernel so hit-testing and drawing always agree.
"""

from abc import ABC, abstractmethod

from PyQt5.QtCore import QPointF, QRectF, Qt
from PyQt5.QtGui import QPen, QBrush, QColor

from photostrip.constants import (
    HANDLE_SIZE, ROTATE_HANDLE_RADIUS, MIN_OBJECT_SIZE, MIN_FONT_SIZE,
    SELECTION_COLOR, SELECTION_LINE_WIDTH, SELECTION_DASH,
    HANDLE_FILL_COLOR, HANDLE_STROKE_COLOR,
)
from photostrip.models.draggable import Sticker, TextLabel
from photostrip.models.transform import InteractionKind
from photostrip.utils.geometry import (
    handle_anchor, in_handle_zone, point_in_rotated_rect, rotate_vector, signed_angle,
)


def _handle_pen():
    return QPen(QColor(HANDLE_STROKE_COLOR), 1)


def _handle_brush():
    return QBrush(QColor(HANDLE_FILL_COLOR))


class Handle(ABC):
    """Abstract base class for transform handles."""

    kind = InteractionKind.NONE

    @abstractmethod
    def hit_test(self, local_x, local_y, width, height) -> bool:
        """Test if a point in local top-left-origin coordinates hits this handle."""

    @abstractmethod
    def draw(self, painter, obj):
        """Draw this handle. The painter is already rotated about the object's center."""

    @abstractmethod
    def drag(self, obj, session, pointer_x, pointer_y):
        """Apply a pointer move to obj.

        Args:
            obj: The selected draggable object (mutated in place)
            session: TransformSession captured at pointer-down
            pointer_x, pointer_y: Current pointer in strip pixels
        """

    @abstractmethod
    def get_cursor(self):
        """Qt cursor shape to show when hovering this handle."""


class CornerHandle(Handle):
    """Corner handle: resize with the opposite corner pinned."""

    # corner_type -> (interaction kind, sign_x, sign_y)
    # Signs say which way a positive local delta grows the box.
    CORNERS = {
        'tl': (InteractionKind.RESIZE_TOP_LEFT, -1, -1),
        'tr': (InteractionKind.RESIZE_TOP_RIGHT, 1, -1),
        'bl': (InteractionKind.RESIZE_BOTTOM_LEFT, -1, 1),
        'br': (InteractionKind.RESIZE_BOTTOM_RIGHT, 1, 1),
    }

    def __init__(self, corner_type, handle_size=HANDLE_SIZE):
        """
        Args:
            corner_type: 'tl', 'tr', 'bl', 'br'
            handle_size: Side of the square zone in pixels
        """
        self.corner_type = corner_type
        self.handle_size = handle_size
        self.kind, self.sign_x, self.sign_y = self.CORNERS[corner_type]

    def hit_test(self, local_x, local_y, width, height):
        return in_handle_zone(self.kind, local_x, local_y, width, height)

    def draw(self, painter, obj):
        anchor_x, anchor_y = handle_anchor(self.kind, obj.width, obj.height)
        half = self.handle_size / 2
        painter.setPen(_handle_pen())
        painter.setBrush(_handle_brush())
        painter.drawRect(QRectF(obj.x + anchor_x - half, obj.y + anchor_y - half,
                                self.handle_size, self.handle_size))

    def drag(self, obj, session, pointer_x, pointer_y):
        """Resize from this corner.

        The pointer delta is rotated into the snapshot's local frame, applied
        to this corner, then the new center is found by rotating the size
        change back into world space. That keeps the opposite corner exactly
        where it was for any rotation.
        """
        start = session.start
        local_dx, local_dy = rotate_vector(pointer_x - session.start_pointer.x,
                                           pointer_y - session.start_pointer.y,
                                           -start.angle)

        new_w = start.width + self.sign_x * local_dx
        new_h = start.height + self.sign_y * local_dy

        ratio = obj.aspect_ratio if isinstance(obj, Sticker) else None
        if ratio:
            # Follow whichever axis moved more
            if abs(new_w - start.width) > abs(new_h - start.height):
                new_h = new_w / ratio
            else:
                new_w = new_h * ratio
            # Floor both sides without breaking the ratio
            new_w = max(new_w, MIN_OBJECT_SIZE, MIN_OBJECT_SIZE * ratio)
            new_h = new_w / ratio
        else:
            new_w = max(new_w, MIN_OBJECT_SIZE)
            new_h = max(new_h, MIN_OBJECT_SIZE)

        shift_x, shift_y = rotate_vector(self.sign_x * (new_w - start.width) / 2,
                                         self.sign_y * (new_h - start.height) / 2,
                                         start.angle)
        center = start.center
        obj.width = new_w
        obj.height = new_h
        obj.x = center.x + shift_x - new_w / 2
        obj.y = center.y + shift_y - new_h / 2

        if isinstance(obj, TextLabel):
            # Scaled from the size at pointer-down so moves never compound
            base_size = session.start_font_size or obj.size
            obj.size = max(MIN_FONT_SIZE, round(base_size * new_h / (start.height or 1)))

    def get_cursor(self):
        if self.corner_type in ('tl', 'br'):
            return Qt.SizeFDiagCursor
        return Qt.SizeBDiagCursor


class RotationHandle(Handle):
    """Rotation handle (circle above the top edge)."""

    kind = InteractionKind.ROTATE

    def __init__(self, radius=ROTATE_HANDLE_RADIUS):
        self.radius = radius

    def hit_test(self, local_x, local_y, width, height):
        return in_handle_zone(self.kind, local_x, local_y, width, height)

    def draw(self, painter, obj):
        anchor_x, anchor_y = handle_anchor(self.kind, obj.width, obj.height)
        handle_center = QPointF(obj.x + anchor_x, obj.y + anchor_y)

        painter.setPen(_handle_pen())
        painter.setBrush(_handle_brush())
        painter.drawEllipse(handle_center, float(self.radius), float(self.radius))

        # Connector from the top-center edge to the bottom of the circle
        painter.drawLine(QPointF(obj.x + obj.width / 2, obj.y),
                         QPointF(handle_center.x(), handle_center.y() + self.radius))

    def drag(self, obj, session, pointer_x, pointer_y):
        """Rotate about the snapshot center by the angle swept since pointer-down."""
        center = session.start.center
        sweep = signed_angle(session.start_pointer.x - center.x,
                             session.start_pointer.y - center.y,
                             pointer_x - center.x,
                             pointer_y - center.y)
        obj.angle = session.start.angle + sweep

    def get_cursor(self):
        return Qt.CrossCursor


class BodyHandle(Handle):
    """Whole box: translation, plus the dashed selection outline."""

    kind = InteractionKind.DRAG

    def hit_test(self, local_x, local_y, width, height):
        return 0 <= local_x <= width and 0 <= local_y <= height

    def contains(self, obj, x, y):
        """World-space body test used for the topmost-first scan."""
        return point_in_rotated_rect(x, y, obj)

    def draw(self, painter, obj):
        pen = QPen(QColor(SELECTION_COLOR), SELECTION_LINE_WIDTH)
        # Qt dash pattern is in units of pen width
        pen.setDashPattern([d / SELECTION_LINE_WIDTH for d in SELECTION_DASH])
        painter.setPen(pen)
        painter.setBrush(Qt.NoBrush)
        painter.drawRect(QRectF(obj.x, obj.y, obj.width, obj.height))

    def drag(self, obj, session, pointer_x, pointer_y):
        """Keep the grab point under the pointer. Only x/y change."""
        obj.x = pointer_x - session.drag_offset.x
        obj.y = pointer_y - session.drag_offset.y

    def get_cursor(self):
        return Qt.OpenHandCursor
