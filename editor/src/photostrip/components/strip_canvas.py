"""
Strip Canvas - interactive editing surface for one EditorSession

Maps widget pixels to strip pixels (the strip is scaled to fit and centered),
forwards mouse input to the session and repaints before each handler returns.
"""

import logging

from PyQt5.QtCore import QPointF, QRectF, QSize, Qt
from PyQt5.QtGui import QColor, QPainter
from PyQt5.QtWidgets import QSizePolicy, QWidget

logger = logging.getLogger(__name__)

CANVAS_BACKGROUND = '#2B2B2B'


class StripCanvas(QWidget):
    """Live editing canvas. Selection chrome is shown here, never in exports."""

    def __init__(self, session, parent=None):
        super().__init__(parent)
        self.session = session
        self.setMouseTracking(True)
        self.setFocusPolicy(Qt.StrongFocus)
        self.setSizePolicy(QSizePolicy.Expanding, QSizePolicy.Expanding)

        session.changed.connect(self.update)
        session.assetLoaded.connect(self._on_asset_loaded)

    def sizeHint(self):
        return QSize(self.session.layout.width, self.session.layout.height)

    # ========================================
    # Coordinates
    # ========================================

    def _view_transform(self):
        """(scale, offset_x, offset_y) placing the strip centered in the widget."""
        strip_w, strip_h = self.session.layout.size
        if self.width() <= 0 or self.height() <= 0:
            return 1.0, 0.0, 0.0
        scale = min(self.width() / strip_w, self.height() / strip_h)
        offset_x = (self.width() - strip_w * scale) / 2
        offset_y = (self.height() - strip_h * scale) / 2
        return scale, offset_x, offset_y

    def widget_to_strip(self, pos):
        """Map a widget point to strip pixels."""
        scale, offset_x, offset_y = self._view_transform()
        return (pos.x() - offset_x) / scale, (pos.y() - offset_y) / scale

    def strip_to_widget(self, x, y):
        scale, offset_x, offset_y = self._view_transform()
        return QPointF(x * scale + offset_x, y * scale + offset_y)

    # ========================================
    # Painting
    # ========================================

    def paintEvent(self, event):
        painter = QPainter(self)
        try:
            painter.fillRect(self.rect(), QColor(CANVAS_BACKGROUND))
            scale, offset_x, offset_y = self._view_transform()
            painter.translate(offset_x, offset_y)
            painter.scale(scale, scale)
            strip_w, strip_h = self.session.layout.size
            painter.setClipRect(QRectF(0, 0, strip_w, strip_h))
            self.session.render(painter, show_selection=True)
        finally:
            painter.end()

    def _on_asset_loaded(self, source_id):
        logger.debug("Repaint for loaded asset %s", source_id)
        self.update()

    # ========================================
    # Mouse
    # ========================================

    def mousePressEvent(self, event):
        if event.button() != Qt.LeftButton:
            super().mousePressEvent(event)
            return
        x, y = self.widget_to_strip(event.pos())
        self.session.pointer_down(x, y)
        self._update_cursor(x, y)
        self.repaint()
        event.accept()

    def mouseMoveEvent(self, event):
        x, y = self.widget_to_strip(event.pos())
        if self.session.controller.is_active:
            self.session.pointer_move(x, y)
            self.repaint()
        self._update_cursor(x, y)
        event.accept()

    def mouseReleaseEvent(self, event):
        if event.button() != Qt.LeftButton:
            super().mouseReleaseEvent(event)
            return
        x, y = self.widget_to_strip(event.pos())
        self.session.pointer_up(x, y)
        self._update_cursor(x, y)
        self.repaint()
        event.accept()

    def leaveEvent(self, event):
        # The button may be released outside the widget
        if self.session.controller.is_active:
            self.session.pointer_up()
            self.repaint()
        self.unsetCursor()
        super().leaveEvent(event)

    def _update_cursor(self, x, y):
        self.setCursor(self.session.cursor_at(x, y))

    # ========================================
    # Keyboard
    # ========================================

    def keyPressEvent(self, event):
        key = event.key()
        if key in (Qt.Key_Delete, Qt.Key_Backspace):
            if self.session.remove_selected():
                self.repaint()
            event.accept()
            return
        if key == Qt.Key_D:
            self.session.toggle_draw_mode()
            self.repaint()
            event.accept()
            return
        super().keyPressEvent(event)
