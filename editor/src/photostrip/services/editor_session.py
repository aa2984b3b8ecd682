"""
Photo Strip Editor - Editor Session

One editing session over one strip: layout, photos, scene, drawing tools,
asset loading and the transform controller. Everything the UI does goes
through a session; there is no module-level editor state, so any number of
sessions can live side by side.

All mutation happens on the thread that owns the session (the GUI thread).
Decoding runs on the asset store's workers; finished assets are folded into
the scene by ``process_loaded_assets()``, which every render calls first.
"""

import logging

from PyQt5.QtCore import QObject, pyqtSignal
from PyQt5.QtGui import QImage

from photostrip.constants import DEFAULT_STICKER_WIDTH, MIN_FONT_SIZE, TEXT_ALIGNMENTS
from photostrip.errors import AssetLoadFailure
from photostrip.models.draggable import Sticker, TextLabel
from photostrip.models.layout import get_layout
from photostrip.models.scene import Scene
from photostrip.components.transform_controller import TransformController
from photostrip.services.asset_store import AssetStore
from photostrip.services.config import EditorConfig
from photostrip.services.scene_renderer import SceneRenderer
from photostrip.services.text_metrics import QtTextMeasurer

logger = logging.getLogger(__name__)


def photo_asset_id(index):
    return f"photo:{index}"


def _positive_int(value):
    """value as an int > 0, or None."""
    if isinstance(value, bool):
        return None
    try:
        number = int(value)
    except (TypeError, ValueError):
        return None
    return number if number > 0 else None


def _non_empty_str(value):
    return isinstance(value, str) and bool(value.strip())


def _clean_text_value(key, value):
    """Validate one text style value.

    Returns:
        (valid, value) with size floored at MIN_FONT_SIZE and flags as bools
    """
    if key == 'size':
        size = _positive_int(value)
        if size is None:
            return False, value
        return True, max(MIN_FONT_SIZE, size)
    if key == 'align':
        return value in TEXT_ALIGNMENTS, value
    if key in ('bold', 'italic', 'underline'):
        return True, bool(value)
    # content, color, font
    return _non_empty_str(value), value


class EditorSession(QObject):
    """Scene, tools and interaction state for one photo strip."""

    # Emitted after any change that needs a redraw
    changed = pyqtSignal()
    # Emitted when an asset finishes (loaded or failed)
    assetLoaded = pyqtSignal(str)

    def __init__(self, photo_count=None, config=None, assets=None, measurer=None,
                 date_provider=None, parent=None):
        super().__init__(parent)
        self.config = config or EditorConfig()
        self.layout = get_layout(photo_count if photo_count is not None else self.config.photo_count)
        self.scene = Scene()
        self.photos = []  # Asset ids, one per filled slot

        self.assets = assets or AssetStore(max_workers=self.config.asset_workers)
        self.assets.loaded.connect(self.assetLoaded)
        self.assets.failed.connect(self._on_asset_failed)
        self.measurer = measurer or QtTextMeasurer()
        self.renderer = SceneRenderer(self.assets, self.measurer, date_provider)
        self.controller = TransformController()

        self.draw_mode = False
        self.brush_color = self.config.brush_color
        self.brush_size = self.config.brush_size

    @property
    def interaction_state(self):
        return self.controller.state

    @property
    def selected(self):
        return self.scene.selected

    # ========================================
    # Discrete mutations
    # ========================================

    def add_sticker(self, source_id, source=None):
        """Add a sticker centered on the strip and select it.

        Returns:
            The new Sticker, or None if its image failed to load
        """
        self.assets.load(source_id, source)
        try:
            size = self.assets.natural_size(source_id)
        except AssetLoadFailure as e:
            logger.warning("Sticker not added: %s", e)
            return None

        sticker = Sticker(source_id=source_id)
        if size is None:
            # Still decoding; sized properly once it arrives
            sticker.width = sticker.height = DEFAULT_STICKER_WIDTH
        else:
            self._apply_natural_size(sticker, size, DEFAULT_STICKER_WIDTH)
        sticker.x = (self.layout.width - sticker.width) / 2
        sticker.y = (self.layout.height - sticker.height) / 2

        self._add_and_select(sticker)
        logger.debug("Sticker added: %s (%s)", source_id, "pending" if size is None else "%dx%d" % size)
        return sticker

    def add_text(self, content, style=None):
        """Add a text label centered on the strip and select it.

        Args:
            content: Label text; whitespace-only text is rejected
            style: Optional overrides of the default text style

        Returns:
            The new TextLabel, or None if content was empty
        """
        if not content or not content.strip():
            logger.debug("Empty text not added")
            return None

        settings = {}
        for key, value in dict(self.config.text_style, **(style or {})).items():
            if key == 'content' or key not in TextLabel.EDITABLE:
                continue
            valid, value = _clean_text_value(key, value)
            if valid:
                settings[key] = value
            else:
                logger.warning("Ignoring invalid text %s %r", key, value)
        label = TextLabel(content=content, **settings)
        self.measurer.apply(label)
        label.x = (self.layout.width - label.width) / 2
        label.y = (self.layout.height - label.height) / 2

        self._add_and_select(label)
        logger.debug("Text added: %r", content)
        return label

    def remove_selected(self):
        """Remove the selected object. Returns False if nothing was selected."""
        obj = self.scene.selected
        if obj is None:
            return False
        self.controller.cancel()
        self.scene.remove(obj)
        logger.debug("Removed %s %s", obj.kind, obj.uuid)
        self.changed.emit()
        return True

    def set_selected_property(self, key, value):
        """Edit a style property of the selected text label.

        Returns:
            False (and changes nothing) when no text label is selected, the key
            is not editable or the value is invalid
        """
        label = self.scene.selected
        if not isinstance(label, TextLabel) or key not in TextLabel.EDITABLE:
            return False
        valid, value = _clean_text_value(key, value)
        if not valid:
            return False

        setattr(label, key, value)
        if key in TextLabel.METRIC_PROPERTIES:
            self.measurer.apply(label)
        self.changed.emit()
        return True

    def set_frame(self, source_id, source=None):
        """Select frame artwork (None clears it)."""
        self.scene.frame_source = source_id
        if source_id:
            self.assets.load(source_id, source)
        self.changed.emit()

    def set_title(self, title):
        self.scene.title = title or ''
        self.changed.emit()

    def set_photos(self, sources, post_process=None):
        """Load captured photos into the layout slots, in order.

        Args:
            sources: Paths, encoded bytes or PIL images
            post_process: Optional callable applied to each decoded PIL image
        """
        sources = list(sources)
        if len(sources) > len(self.layout.slots):
            logger.warning("%d photos for a %d-slot layout, extra photos ignored",
                           len(sources), len(self.layout.slots))
            sources = sources[:len(self.layout.slots)]

        for old_id in self.photos:
            self.assets.forget(old_id)
        self.photos = []
        for index, source in enumerate(sources):
            asset_id = photo_asset_id(index)
            self.assets.load(asset_id, source, post_process)
            self.photos.append(asset_id)
        self.changed.emit()

    def reset_scene(self):
        """Remove every sticker, text label and stroke."""
        self.controller.cancel()
        self.scene.reset()
        self.changed.emit()

    # ========================================
    # Drawing tools
    # ========================================

    def toggle_draw_mode(self):
        """Enter or leave freehand drawing. Entering clears the selection."""
        self.controller.cancel()
        self.draw_mode = not self.draw_mode
        if self.draw_mode:
            self.scene.clear_selection()
        logger.debug("Draw mode %s", "on" if self.draw_mode else "off")
        self.changed.emit()
        return self.draw_mode

    def set_brush(self, color=None, size=None):
        """Change the brush.

        In draw mode the stroke being drawn (or a last stroke that is still a
        single dot) takes the new brush too; otherwise it applies to the next one.

        Returns:
            False (and changes nothing) if color or size is invalid
        """
        if size is not None:
            size = _positive_int(size)
            if size is None:
                return False
        if color is not None and not _non_empty_str(color):
            return False

        if color is not None:
            self.brush_color = color
        if size is not None:
            self.brush_size = size

        if self.draw_mode and self.scene.strokes:
            last = self.scene.strokes[-1]
            if last is self.controller.active_stroke or len(last.points) == 1:
                last.color = self.brush_color
                last.size = self.brush_size
        self.changed.emit()
        return True

    def clear_drawings(self):
        self.controller.active_stroke = None
        self.scene.strokes.clear()
        self.changed.emit()

    # ========================================
    # Pointer interaction
    # ========================================

    def pointer_down(self, x, y):
        if self.controller.pointer_down(self, x, y):
            self.changed.emit()

    def pointer_move(self, x, y):
        if self.controller.pointer_move(self, x, y):
            self.changed.emit()

    def pointer_up(self, x=None, y=None):
        if self.controller.pointer_up(self):
            self.changed.emit()

    def cursor_at(self, x, y):
        return self.controller.cursor_at(self, x, y)

    # ========================================
    # Assets
    # ========================================

    def _on_asset_failed(self, source_id, error_message):
        # Repaint so the placeholder replaces the empty slot
        self.assetLoaded.emit(source_id)

    def process_loaded_assets(self):
        """Fold finished asset loads into the scene.

        Provisional stickers get their natural size, keeping their center.

        Returns:
            List of source ids that finished since the last call
        """
        loaded = self.assets.drain_loaded()
        # Checked against the store, not the queue: the queue can trail the futures
        for sticker in self.scene.stickers:
            if sticker.aspect_ratio is None:
                self._finalize_sticker(sticker)
        return loaded

    # ========================================
    # Rendering
    # ========================================

    def render(self, surface, show_selection=True):
        """Draw the strip onto surface (a paint device or active QPainter).

        Selection chrome is drawn only with show_selection and outside draw mode.
        """
        self.process_loaded_assets()
        return self.renderer.render(
            surface, self.layout, self.scene, self.photos,
            show_selection=show_selection and not self.draw_mode,
            mode=self.controller.mode,
        )

    def export_composite(self):
        """Render the finished strip without selection chrome.

        Blocks until every requested asset has finished loading. The selection
        is cleared for the render and restored afterwards.

        Returns:
            QImage of the full strip
        """
        self.assets.wait_all()
        self.process_loaded_assets()

        selected = self.scene.selected
        self.scene.clear_selection()
        try:
            image = QImage(self.layout.width, self.layout.height, QImage.Format_ARGB32)
            image.fill(0)
            self.renderer.render(image, self.layout, self.scene, self.photos, show_selection=False)
        finally:
            if selected is not None and self.scene.contains(selected):
                self.scene.select(selected)
        logger.debug("Exported %dx%d composite", self.layout.width, self.layout.height)
        return image

    # ========================================
    # Internal
    # ========================================

    def _add_and_select(self, obj):
        self.controller.cancel()
        self.scene.add(obj)
        self.scene.select(obj)
        self.changed.emit()

    def _finalize_sticker(self, sticker):
        """Give a provisional sticker its natural ratio once its image is in."""
        try:
            size = self.assets.natural_size(sticker.source_id)
        except AssetLoadFailure:
            # Stays a placeholder box
            return
        if size is None:
            return
        center_x, center_y = sticker.center
        self._apply_natural_size(sticker, size, sticker.width)
        sticker.x = center_x - sticker.width / 2
        sticker.y = center_y - sticker.height / 2
        logger.debug("Sticker %s sized to %dx%d", sticker.source_id, *size)

    @staticmethod
    def _apply_natural_size(sticker, size, width):
        natural_w, natural_h = size
        sticker.original_width = natural_w
        sticker.original_height = natural_h
        sticker.width = width
        sticker.height = width * natural_h / natural_w

    def shutdown(self):
        self.assets.shutdown()
