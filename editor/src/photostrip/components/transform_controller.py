"""
Transform Controller - pointer state machine for draggable objects

Drives select / drag / resize / rotate / freehand drawing from three events:
pointer_down, pointer_move and pointer_up. Handle geometry and the per-handle
math live in ``transform_widgets``; this module decides which handle owns an
interaction and keeps the session snapshot.

Every method takes the editor session it acts on, so one controller never
holds scene state of its own beyond the active interaction.
"""

import logging
from enum import Enum

from PyQt5.QtCore import Qt

from photostrip.models.draggable import TextLabel
from photostrip.models.stroke import Stroke
from photostrip.models.transform import InteractionKind, Transform, Vec2
from photostrip.components.transform_widgets import BboxMode, TransformSession

logger = logging.getLogger(__name__)


class InteractionState(Enum):
    IDLE = 'idle'
    DRAGGING = 'dragging'
    RESIZING = 'resizing'
    ROTATING = 'rotating'
    DRAWING = 'drawing'


def _state_for(kind):
    if kind == InteractionKind.DRAG:
        return InteractionState.DRAGGING
    if kind == InteractionKind.ROTATE:
        return InteractionState.ROTATING
    if kind.is_resize:
        return InteractionState.RESIZING
    return InteractionState.IDLE


class TransformController:
    """Single active interaction at a time; a new pointer-down replaces any old one."""

    def __init__(self, mode=None):
        self.mode = mode or BboxMode()
        self.state = InteractionState.IDLE
        self.session = None  # TransformSession while dragging/resizing/rotating
        self.active_stroke = None  # Stroke while drawing

    @property
    def is_active(self):
        return self.state != InteractionState.IDLE

    # ========================================
    # Pointer events
    # ========================================

    def pointer_down(self, editor, x, y):
        """Start an interaction at (x, y).

        Returns:
            True if the scene or selection changed and a redraw is needed
        """
        scene = editor.scene
        self.session = None
        self.active_stroke = None

        if editor.draw_mode:
            stroke = Stroke(color=editor.brush_color, size=editor.brush_size)
            stroke.add_point(x, y)
            scene.strokes.append(stroke)
            self.active_stroke = stroke
            self.state = InteractionState.DRAWING
            logger.debug("Stroke started at (%.1f, %.1f)", x, y)
            return True

        selected = scene.selected
        if selected is not None:
            handle = self.mode.get_handle_at_pos(x, y, selected)
            if handle is not None:
                self._begin(handle.kind, selected, x, y)
                logger.debug("%s started on %s %s", handle.kind.value, selected.kind, selected.uuid)
                return True

        for obj in scene.objects_topmost_first():
            if self.mode.body.contains(obj, x, y):
                scene.select(obj)
                scene.promote_to_front(obj)
                self._begin(InteractionKind.DRAG, obj, x, y)
                logger.debug("Selected %s %s", obj.kind, obj.uuid)
                return True

        had_selection = selected is not None
        scene.clear_selection()
        self.state = InteractionState.IDLE
        return had_selection

    def pointer_move(self, editor, x, y):
        """Continue the active interaction. No-op without one.

        Returns:
            True if anything changed
        """
        if self.state == InteractionState.IDLE:
            return False

        if self.state == InteractionState.DRAWING:
            if self.active_stroke is None:
                return False
            self.active_stroke.add_point(x, y)
            return True

        obj = editor.scene.selected
        if self.session is None or obj is None:
            return False

        handle = self.mode.handle_for(self.session.kind)
        if handle is None:
            return False
        handle.drag(obj, self.session, x, y)
        self.session.moved = True
        return True

    def pointer_up(self, editor):
        """End the active interaction. Strokes are kept; the session is dropped."""
        if self.state == InteractionState.IDLE and self.session is None:
            return False

        if self.state == InteractionState.DRAWING:
            logger.debug("Stroke finished")
        elif self.session is not None and self.session.moved:
            obj = editor.scene.selected
            if obj is not None:
                logger.debug("%s finished on %s %s: x=%.1f y=%.1f w=%.1f h=%.1f angle=%.3f",
                             self.session.kind.value, obj.kind, obj.uuid,
                             obj.x, obj.y, obj.width, obj.height, obj.angle)

        self.cancel()
        return True

    def cancel(self):
        """Drop any interaction without touching the scene."""
        self.session = None
        self.active_stroke = None
        self.state = InteractionState.IDLE

    # ========================================
    # Hover
    # ========================================

    def cursor_at(self, editor, x, y):
        """Qt cursor shape for the pointer at (x, y)."""
        if editor.draw_mode:
            return Qt.CrossCursor

        if self.session is not None:
            if self.session.kind == InteractionKind.DRAG:
                return Qt.ClosedHandCursor
            handle = self.mode.handle_for(self.session.kind)
            if handle is not None:
                return handle.get_cursor()

        selected = editor.scene.selected
        if selected is not None:
            handle = self.mode.get_handle_at_pos(x, y, selected)
            if handle is not None:
                return handle.get_cursor()
            if self.mode.body.contains(selected, x, y):
                return self.mode.body.get_cursor()

        return Qt.ArrowCursor

    # ========================================
    # Internal
    # ========================================

    def _begin(self, kind, obj, x, y):
        self.session = TransformSession(
            kind=kind,
            start=Transform.of(obj),
            start_pointer=Vec2(x, y),
            drag_offset=Vec2(x - obj.x, y - obj.y),
            start_font_size=obj.size if isinstance(obj, TextLabel) else None,
        )
        self.state = _state_for(kind)
