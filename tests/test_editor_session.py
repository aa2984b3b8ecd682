"""
Tests for EditorSession discrete operations.

Covers:
- add_sticker (natural ratio, provisional while loading, failed image)
- add_text (defaults, style overrides, empty text rejected)
- remove_selected / set_selected_property and their no-op results
- Draw mode, brush changes, clear drawings
- Frame, title, photos and scene reset
- Change notifications
"""
import threading

import pytest

from conftest import png_bytes
from photostrip.components.transform_controller import InteractionState
from photostrip.models.draggable import Sticker, TextLabel
from photostrip.services.config import EditorConfig
from photostrip.services.editor_session import EditorSession


def _gate_asset(session, source_id, data):
    """Start loading source_id but hold it until the returned event is set."""
    gate = threading.Event()

    def hold(img):
        gate.wait(5)
        return img

    session.assets.load(source_id, data, post_process=hold)
    return gate


# ══════════════════════════════════════════════════════════════════════════
# Stickers
# ══════════════════════════════════════════════════════════════════════════

class TestAddSticker:

    def test_sticker_sized_from_natural_ratio(self, session, red_png):
        session.assets.load("star", red_png).result(timeout=5)
        sticker = session.add_sticker("star")

        assert sticker.width == 100
        assert sticker.height == 50
        assert (sticker.original_width, sticker.original_height) == (40, 20)
        assert sticker.center == (session.layout.width / 2, session.layout.height / 2)
        assert session.scene.selected is sticker

    def test_provisional_sticker_finalized_on_load(self, session, red_png):
        gate = _gate_asset(session, "star", red_png)
        sticker = session.add_sticker("star")

        assert (sticker.width, sticker.height) == (100, 100)
        assert sticker.aspect_ratio is None
        center = sticker.center

        # Moved while still loading; the center it ends up at is kept
        sticker.x += 30
        center = (center[0] + 30, center[1])

        gate.set()
        session.assets.wait_all(timeout=5)
        session.process_loaded_assets()

        assert sticker.aspect_ratio == 2.0
        assert (sticker.width, sticker.height) == (100, 50)
        assert sticker.center == pytest.approx(center)

    def test_failed_sticker_not_added(self, session):
        session.assets.load("broken", b"junk")
        session.assets.wait_all(timeout=5)
        assert session.add_sticker("broken") is None
        assert session.scene.objects() == []

    def test_sticker_from_path(self, session, tmp_path):
        path = tmp_path / "heart.png"
        path.write_bytes(png_bytes(30, 60))
        sticker = session.add_sticker(str(path))
        session.assets.wait_all(timeout=5)
        session.process_loaded_assets()
        assert sticker.width / sticker.height == pytest.approx(0.5)


# ══════════════════════════════════════════════════════════════════════════
# Text
# ══════════════════════════════════════════════════════════════════════════

class TestAddText:

    def test_defaults_and_measurement(self, session):
        label = session.add_text("Hello")
        assert label.size == 30
        assert label.color == '#333333'
        assert label.font == "'Poppins', sans-serif"
        # Stub metrics: 15px per character at size 30
        assert (label.width, label.height) == (75, 30)
        assert label.center == (session.layout.width / 2, session.layout.height / 2)
        assert session.scene.selected is label

    def test_style_overrides(self, session):
        label = session.add_text("Hi", {'color': '#FFFFFF', 'size': 40, 'bold': True})
        assert (label.color, label.size, label.bold) == ('#FFFFFF', 40, True)
        assert label.align == 'center'

    @pytest.mark.parametrize("content", ["", "   ", "\n\t"])
    def test_empty_text_rejected(self, session, content):
        assert session.add_text(content) is None
        assert session.scene.objects() == []

    @pytest.mark.parametrize("size", [0, -4, 'big', None, True])
    def test_invalid_size_falls_back_to_default(self, session, size):
        label = session.add_text("Hi", {'size': size})
        assert label.size == 30
        assert label.height == 30

    def test_small_size_floored(self, session):
        label = session.add_text("Hi", {'size': 3})
        assert label.size == 10

    @pytest.mark.parametrize("style", [
        {'align': 'justify'},
        {'color': ''},
        {'font': 12},
    ])
    def test_invalid_style_values_dropped(self, session, style):
        label = session.add_text("Hi", style)
        assert (label.align, label.color, label.font) == ('center', '#333333',
                                                          "'Poppins', sans-serif")

    def test_resize_after_bad_size(self, session):
        label = session.add_text("Hello", {'size': 0})
        session.pointer_down(label.x, label.y)
        assert session.interaction_state == InteractionState.RESIZING
        session.pointer_move(label.x - 10, label.y - 10)
        session.pointer_up()
        assert label.size >= 10
        assert label.height >= 20

    def test_config_text_style_used(self, qapp, stub_measurer):
        config = EditorConfig(text_style={'color': '#123456', 'size': 20})
        editor = EditorSession(photo_count=1, config=EditorConfig.from_dict(config.to_dict()),
                               measurer=stub_measurer)
        try:
            label = editor.add_text("x")
            assert (label.color, label.size) == ('#123456', 20)
        finally:
            editor.shutdown()

    def test_real_font_measurement(self, qt_session):
        from PyQt5.QtGui import QFontDatabase
        if not QFontDatabase().families():
            pytest.skip("no fonts installed")
        short = qt_session.add_text("Hi")
        longer = qt_session.add_text("Hello there")
        assert longer.width > short.width > 0
        assert short.height == 30


# ══════════════════════════════════════════════════════════════════════════
# Remove / edit
# ══════════════════════════════════════════════════════════════════════════

class TestSelectionOperations:

    def test_remove_selected(self, session):
        label = session.add_text("bye")
        assert session.remove_selected() is True
        assert not session.scene.contains(label)
        assert session.scene.selected is None

    def test_remove_without_selection(self, session):
        session.add_text("stay")
        session.scene.clear_selection()
        assert session.remove_selected() is False
        assert len(session.scene.texts) == 1

    def test_set_property_updates_and_remeasures(self, session):
        label = session.add_text("abc")
        assert session.set_selected_property('size', 60) is True
        assert label.size == 60
        assert (label.width, label.height) == (90, 60)

        assert session.set_selected_property('content', "abcdef") is True
        assert label.width == 180

    def test_color_change_keeps_box(self, session):
        label = session.add_text("abc")
        box = (label.x, label.y, label.width, label.height)
        assert session.set_selected_property('color', '#00FF00') is True
        assert (label.x, label.y, label.width, label.height) == box

    def test_set_property_without_selection(self, session):
        label = session.add_text("abc")
        session.scene.clear_selection()
        assert session.set_selected_property('color', '#000000') is False
        assert label.color == '#333333'

    def test_set_property_on_sticker_rejected(self, session, red_png):
        session.assets.load("star", red_png).result(timeout=5)
        session.add_sticker("star")
        assert session.set_selected_property('color', '#000000') is False

    @pytest.mark.parametrize("key,value", [
        ('align', 'justify'),
        ('size', 'big'),
        ('size', 0),
        ('content', '  '),
        ('x', 10),
        ('uuid', 'abc'),
    ])
    def test_invalid_edits_rejected(self, session, key, value):
        label = session.add_text("abc")
        before = label.to_dict()
        assert session.set_selected_property(key, value) is False
        assert label.to_dict() == before


# ══════════════════════════════════════════════════════════════════════════
# Drawing tools
# ══════════════════════════════════════════════════════════════════════════

class TestDrawingTools:

    def test_entering_draw_mode_deselects(self, session):
        session.add_text("abc")
        assert session.toggle_draw_mode() is True
        assert session.scene.selected is None
        assert session.toggle_draw_mode() is False

    def test_brush_applies_to_next_stroke(self, session):
        session.toggle_draw_mode()
        session.pointer_down(10, 10)
        session.pointer_move(20, 20)
        session.pointer_up()
        session.set_brush(color='#0000FF', size=9)

        first = session.scene.strokes[0]
        assert (first.color, first.size) == ('#FF0000', 5)
        session.pointer_down(50, 50)
        second = session.scene.strokes[1]
        assert (second.color, second.size) == ('#0000FF', 9)

    def test_brush_updates_stroke_in_progress(self, session):
        session.toggle_draw_mode()
        session.pointer_down(10, 10)
        session.pointer_move(20, 20)
        session.set_brush(color='#00FF00')
        assert session.scene.strokes[0].color == '#00FF00'

    def test_brush_updates_single_dot_stroke(self, session):
        session.toggle_draw_mode()
        session.pointer_down(10, 10)
        session.pointer_up()
        session.set_brush(size=12)
        assert session.scene.strokes[0].size == 12

    @pytest.mark.parametrize("kwargs", [
        {'size': 'x'},
        {'size': 0},
        {'color': ''},
        {'color': '#00FF00', 'size': -1},
    ])
    def test_invalid_brush_rejected(self, session, kwargs):
        assert session.set_brush(**kwargs) is False
        assert (session.brush_color, session.brush_size) == ('#FF0000', 5)

    def test_clear_drawings(self, session):
        session.toggle_draw_mode()
        session.pointer_down(10, 10)
        session.pointer_up()
        session.clear_drawings()
        assert session.scene.strokes == []


# ══════════════════════════════════════════════════════════════════════════
# Strip settings
# ══════════════════════════════════════════════════════════════════════════

class TestStripSettings:

    def test_layout_from_photo_count(self, qapp):
        editor = EditorSession(photo_count=6)
        try:
            assert editor.layout.key == '6'
        finally:
            editor.shutdown()

    def test_invalid_photo_count_falls_back(self, qapp):
        editor = EditorSession(photo_count=5)
        try:
            assert editor.layout.key == '3'
        finally:
            editor.shutdown()

    def test_set_photos_limits_to_slots(self, session, red_png):
        session.set_photos([red_png] * 5)
        assert session.photos == ['photo:0', 'photo:1', 'photo:2']

    def test_set_photos_post_process(self, session, red_png):
        session.set_photos([red_png], post_process=lambda img: img.resize((10, 10)))
        session.assets.wait_all(timeout=5)
        assert session.assets.natural_size('photo:0') == (10, 10)

    def test_set_photos_replaces_previous(self, session, red_png, blue_png):
        session.set_photos([red_png])
        session.assets.wait_all(timeout=5)
        session.set_photos([blue_png])
        session.assets.wait_all(timeout=5)
        assert session.assets.natural_size('photo:0') == (60, 60)

    def test_frame_and_title(self, session):
        session.set_frame("assets/frame.png")
        session.set_title("PROM NIGHT")
        assert session.scene.frame_source == "assets/frame.png"
        assert session.scene.title == "PROM NIGHT"
        session.set_frame(None)
        assert session.scene.frame_source is None

    def test_reset_scene(self, session):
        session.add_text("abc")
        session.toggle_draw_mode()
        session.pointer_down(1, 1)
        session.reset_scene()
        assert session.scene.objects() == []
        assert session.scene.strokes == []
        assert session.interaction_state == InteractionState.IDLE


# ══════════════════════════════════════════════════════════════════════════
# Notifications
# ══════════════════════════════════════════════════════════════════════════

class TestNotifications:

    def test_changed_emitted_on_mutation(self, session, qtbot):
        with qtbot.waitSignal(session.changed, timeout=1000):
            session.add_text("abc")
        with qtbot.waitSignal(session.changed, timeout=1000):
            session.pointer_down(200, 390)

    def test_asset_loaded_signal(self, session, red_png, qtbot):
        with qtbot.waitSignal(session.assetLoaded, timeout=5000) as blocker:
            session.set_photos([red_png])
        assert blocker.args == ['photo:0']

    def test_asset_loaded_signal_on_failure(self, session, qtbot):
        with qtbot.waitSignal(session.assetLoaded, timeout=5000) as blocker:
            session.set_frame("broken-frame", b"junk")
        assert blocker.args == ['broken-frame']

    def test_objects_are_plain_variants(self, session, red_png):
        session.assets.load("s", red_png).result(timeout=5)
        session.add_sticker("s")
        session.add_text("t")
        kinds = {type(obj) for obj in session.scene.objects()}
        assert kinds == {Sticker, TextLabel}
