"""Scene renderer - draws a strip with QPainter.

Draw order is fixed:
    background -> frame artwork -> photos -> stickers -> text labels ->
    freehand strokes -> date stamp -> title -> selection chrome

Selection chrome is only drawn when asked for (the live canvas). Assets that
are still decoding are skipped for this pass; the asset store's completion
notification triggers the next one. Failed assets become placeholders.
"""

import datetime
import logging
import math

from PyQt5.QtCore import QPointF, QRectF, Qt
from PyQt5.QtGui import QColor, QFontMetricsF, QPainter, QPainterPath, QPen

from photostrip.constants import (
    DATE_BOTTOM_PADDING, DATE_COLOR, DATE_FONT_FAMILIES, DATE_FONT_SIZE, DATE_FORMAT,
    PLACEHOLDER_FILL, PLACEHOLDER_FONT_FAMILIES, PLACEHOLDER_FONT_SIZE, PLACEHOLDER_TEXT_COLOR,
    TITLE_BOTTOM_OFFSET, TITLE_COLOR, TITLE_FONT_FAMILIES, TITLE_FONT_SIZE, TITLE_SHADOW_COLOR,
)
from photostrip.errors import AssetLoadFailure
from photostrip.models.draggable import Sticker, TextLabel
from photostrip.services.text_metrics import QtTextMeasurer, font_for_label, make_font
from photostrip.utils.geometry import box_center

logger = logging.getLogger(__name__)


def center_crop_rect(image_width, image_height, target_width, target_height):
    """Largest source rect with the target's aspect ratio, centered in the image."""
    target_ratio = target_width / target_height
    image_ratio = image_width / image_height
    if image_ratio > target_ratio:
        crop_w = image_height * target_ratio
        return QRectF((image_width - crop_w) / 2, 0, crop_w, image_height)
    crop_h = image_width / target_ratio
    return QRectF(0, (image_height - crop_h) / 2, image_width, crop_h)


class SceneRenderer:
    """Draws layout, photos and scene onto a paint device or painter."""

    def __init__(self, assets, measurer=None, date_provider=None):
        """
        Args:
            assets: AssetStore holding photos, stickers and frames
            measurer: QtTextMeasurer used to refresh text boxes
            date_provider: Callable returning the date to stamp (defaults to today)
        """
        self.assets = assets
        self.measurer = measurer or QtTextMeasurer()
        self.date_provider = date_provider or datetime.date.today
        self._reported_failures = set()

    def render(self, target, layout, scene, photos=(), show_selection=False, mode=None):
        """Render one full pass.

        Args:
            target: QPaintDevice (QImage, QWidget) or an active QPainter
            layout: StripLayout giving the canvas size and photo slots
            scene: Scene with objects, strokes, frame and title
            photos: Asset ids of the captured photos, one per slot
            show_selection: Draw selection chrome for scene.selected
            mode: TransformMode that draws the chrome

        Returns:
            Set of asset ids skipped because they are still loading
        """
        own_painter = not isinstance(target, QPainter)
        painter = QPainter(target) if own_painter else target
        pending = set()
        try:
            painter.setRenderHint(QPainter.Antialiasing, True)
            painter.setRenderHint(QPainter.SmoothPixmapTransform, True)
            painter.setRenderHint(QPainter.TextAntialiasing, True)

            self._draw_background(painter, layout)
            self._draw_frame(painter, layout, scene.frame_source, pending)
            self._draw_photos(painter, layout, photos, pending)
            for sticker in scene.stickers:
                self._draw_object(painter, sticker, pending)
            for label in scene.texts:
                self._draw_object(painter, label, pending)
            self._draw_strokes(painter, scene.strokes)
            self._draw_date(painter, layout)
            self._draw_title(painter, layout, scene.title)

            if show_selection and mode is not None and scene.selected is not None:
                mode.draw(painter, scene.selected)
        finally:
            if own_painter:
                painter.end()

        if pending:
            logger.debug("Deferred %d loading asset(s): %s", len(pending), sorted(pending))
        return pending

    # ========================================
    # Assets
    # ========================================

    def _lookup(self, source_id, pending):
        """QImage for source_id; None if loading (recorded) or failed (raises)."""
        image = self.assets.get(source_id)
        if image is None:
            pending.add(source_id)
        return image

    def _report_failure(self, error):
        if error.source_id not in self._reported_failures:
            self._reported_failures.add(error.source_id)
            logger.warning("Drawing placeholder: %s", error)

    def _draw_placeholder(self, painter, rect):
        painter.fillRect(rect, QColor(PLACEHOLDER_FILL))
        painter.setPen(QColor(PLACEHOLDER_TEXT_COLOR))
        painter.setFont(make_font(PLACEHOLDER_FONT_FAMILIES, PLACEHOLDER_FONT_SIZE))
        painter.drawText(rect, Qt.AlignCenter, "Error")

    # ========================================
    # Layers
    # ========================================

    def _draw_background(self, painter, layout):
        painter.fillRect(QRectF(0, 0, layout.width, layout.height), QColor(layout.background))

    def _draw_frame(self, painter, layout, frame_source, pending):
        if not frame_source:
            return
        try:
            image = self._lookup(frame_source, pending)
        except AssetLoadFailure as e:
            # Background already filled
            self._report_failure(e)
            return
        if image is not None:
            painter.drawImage(QRectF(0, 0, layout.width, layout.height), image)

    def _draw_photos(self, painter, layout, photos, pending):
        for index, source_id in enumerate(photos):
            if index >= len(layout.slots):
                logger.warning("No slot for photo %d in %s-photo layout", index + 1, layout.key)
                break
            slot = layout.slots[index]
            target = QRectF(slot.x, slot.y, slot.width, slot.height)
            try:
                image = self._lookup(source_id, pending)
            except AssetLoadFailure as e:
                self._report_failure(e)
                self._draw_placeholder(painter, target)
                continue
            if image is None or image.isNull():
                continue
            source = center_crop_rect(image.width(), image.height(), slot.width, slot.height)
            painter.drawImage(target, image, source)

    def _draw_object(self, painter, obj, pending):
        if isinstance(obj, TextLabel):
            # Boxes follow the current content and style
            self.measurer.apply(obj)

        center_x, center_y = box_center(obj)
        painter.save()
        painter.translate(center_x, center_y)
        painter.rotate(math.degrees(obj.angle))
        painter.translate(-center_x, -center_y)
        try:
            if isinstance(obj, Sticker):
                self._draw_sticker(painter, obj, pending)
            elif isinstance(obj, TextLabel):
                self._draw_text(painter, obj)
            else:
                raise TypeError(f"Unhandled draggable object kind: {type(obj).__name__}")
        finally:
            painter.restore()

    def _draw_sticker(self, painter, sticker, pending):
        rect = QRectF(sticker.x, sticker.y, sticker.width, sticker.height)
        try:
            image = self._lookup(sticker.source_id, pending)
        except AssetLoadFailure as e:
            self._report_failure(e)
            self._draw_placeholder(painter, rect)
            return
        if image is not None:
            painter.drawImage(rect, image)

    def _draw_text(self, painter, label):
        qfont = font_for_label(label)
        metrics = QFontMetricsF(qfont)
        text_width = metrics.horizontalAdvance(label.content)

        if label.align == 'center':
            start_x = label.x + label.width / 2 - text_width / 2
        elif label.align == 'right':
            start_x = label.x + label.width - text_width
        else:
            start_x = label.x

        # Vertically centered on the box middle
        middle_y = label.y + label.height / 2
        baseline_y = middle_y + (metrics.ascent() - metrics.descent()) / 2

        color = QColor(label.color)
        painter.setFont(qfont)
        painter.setPen(color)
        painter.drawText(QPointF(start_x, baseline_y), label.content)

        if label.underline:
            thickness = label.size / 15
            underline_y = middle_y + label.size / 2 - thickness / 2
            pen = QPen(color, thickness)
            pen.setCapStyle(Qt.FlatCap)
            painter.setPen(pen)
            painter.drawLine(QPointF(start_x, underline_y), QPointF(start_x + text_width, underline_y))

    def _draw_strokes(self, painter, strokes):
        for stroke in strokes:
            if not stroke.points:
                continue
            pen = QPen(QColor(stroke.color), stroke.size)
            pen.setCapStyle(Qt.RoundCap)
            pen.setJoinStyle(Qt.RoundJoin)
            painter.setPen(pen)
            painter.setBrush(Qt.NoBrush)

            first = stroke.points[0]
            if len(stroke.points) == 1:
                painter.drawPoint(QPointF(first.x, first.y))
                continue
            path = QPainterPath(QPointF(first.x, first.y))
            for point in stroke.points[1:]:
                path.lineTo(point.x, point.y)
            painter.drawPath(path)

    # ========================================
    # Fixed overlays
    # ========================================

    def _draw_date(self, painter, layout):
        text = self.date_provider().strftime(DATE_FORMAT)
        qfont = make_font(DATE_FONT_FAMILIES, DATE_FONT_SIZE)
        metrics = QFontMetricsF(qfont)
        width = metrics.horizontalAdvance(text)
        # Bottom of the text box sits DATE_BOTTOM_PADDING above the edge
        baseline_y = layout.height - DATE_BOTTOM_PADDING - metrics.descent()

        painter.setFont(qfont)
        painter.setPen(QColor(DATE_COLOR))
        painter.drawText(QPointF(layout.width / 2 - width / 2, baseline_y), text)

    def _draw_title(self, painter, layout, title):
        if not title:
            return
        qfont = make_font(TITLE_FONT_FAMILIES, TITLE_FONT_SIZE)
        metrics = QFontMetricsF(qfont)
        width = metrics.horizontalAdvance(title)
        x = layout.width / 2 - width / 2
        baseline_y = layout.height - TITLE_BOTTOM_OFFSET + (metrics.ascent() - metrics.descent()) / 2

        painter.setFont(qfont)
        painter.setPen(QColor(*TITLE_SHADOW_COLOR))
        painter.drawText(QPointF(x + 1, baseline_y + 1), title)
        painter.setPen(QColor(TITLE_COLOR))
        painter.drawText(QPointF(x, baseline_y), title)
