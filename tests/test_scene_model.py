"""
Tests for the draggable object model and the scene.

Covers:
- Sticker aspect ratio and TextLabel defaults / validation
- Closed variant dispatch (unknown kinds rejected)
- ZOrderList identity semantics and promote_to_front
- Scene add / remove / select / reset
- Snapshot and restore
"""
import unittest

import pytest

from photostrip.models.draggable import DraggableObject, Sticker, TextLabel, object_from_dict
from photostrip.models.scene import Scene, ZOrderList
from photostrip.models.stroke import Stroke
from photostrip.models.transform import Transform


# ══════════════════════════════════════════════════════════════════════════
# Objects
# ══════════════════════════════════════════════════════════════════════════

class TestDraggableObjects(unittest.TestCase):

    def test_sticker_aspect_ratio(self):
        sticker = Sticker(source_id="star", original_width=200, original_height=100)
        self.assertEqual(sticker.aspect_ratio, 2.0)

    def test_sticker_without_natural_size_has_no_ratio(self):
        self.assertIsNone(Sticker(source_id="star").aspect_ratio)

    def test_text_defaults(self):
        label = TextLabel(content="Hello")
        self.assertEqual(label.color, '#333333')
        self.assertEqual(label.size, 30)
        self.assertEqual(label.align, 'center')
        self.assertFalse(label.bold or label.italic or label.underline)

    def test_text_invalid_align_falls_back(self):
        self.assertEqual(TextLabel(content="x", align='justify').align, 'center')

    def test_unique_uuids(self):
        self.assertNotEqual(Sticker().uuid, Sticker().uuid)

    def test_objects_compare_by_identity(self):
        a = TextLabel(content="same")
        b = TextLabel(content="same", uuid=a.uuid)
        self.assertNotEqual(a, b)

    def test_center(self):
        self.assertEqual(Sticker(x=10, y=20, width=30, height=40).center, (25, 40))

    def test_transform_snapshot_and_apply(self):
        sticker = Sticker(x=1, y=2, width=3, height=4, angle=0.5)
        snap = Transform.of(sticker)
        sticker.x = 99
        snap.apply_to(sticker)
        self.assertEqual((sticker.x, sticker.y, sticker.width, sticker.height, sticker.angle),
                         (1, 2, 3, 4, 0.5))
        self.assertEqual(tuple(snap.center), (2.5, 4.0))

    def test_dict_round_trip_keeps_fields(self):
        label = TextLabel(x=5, y=6, width=70, height=30, angle=0.1, content="Hi",
                          color="#FFFFFF", bold=True, align='right')
        restored = object_from_dict(label.to_dict())
        self.assertIsInstance(restored, TextLabel)
        self.assertEqual(restored.to_dict(), label.to_dict())

    def test_unknown_type_rejected(self):
        with self.assertRaises(ValueError):
            object_from_dict({'type': 'shape', 'x': 0})


# ══════════════════════════════════════════════════════════════════════════
# ZOrderList
# ══════════════════════════════════════════════════════════════════════════

class TestZOrderList:

    def test_insertion_order(self):
        a, b, c = Sticker(), Sticker(), Sticker()
        items = ZOrderList([a, b, c])
        assert list(items) == [a, b, c]
        assert list(reversed(items)) == [c, b, a]

    def test_promote_to_front_moves_to_end(self):
        a, b, c = Sticker(), Sticker(), Sticker()
        items = ZOrderList([a, b, c])
        items.promote_to_front(a)
        assert list(items) == [b, c, a]

    def test_promote_front_most_is_noop(self):
        a, b = Sticker(), Sticker()
        items = ZOrderList([a, b])
        items.promote_to_front(b)
        assert list(items) == [a, b]

    def test_membership_is_by_identity(self):
        a = TextLabel(content="x")
        twin = TextLabel(content="x", uuid=a.uuid)
        items = ZOrderList([a])
        assert a in items
        assert twin not in items

    def test_remove_missing_raises(self):
        with pytest.raises(ValueError):
            ZOrderList().remove(Sticker())

    def test_iteration_is_safe_while_mutating(self):
        a, b = Sticker(), Sticker()
        items = ZOrderList([a, b])
        for item in items:
            items.remove(item)
        assert len(items) == 0


# ══════════════════════════════════════════════════════════════════════════
# Scene
# ══════════════════════════════════════════════════════════════════════════

class TestScene:

    @pytest.fixture
    def scene(self):
        return Scene()

    def test_objects_go_to_their_collection(self, scene):
        sticker = scene.add(Sticker())
        label = scene.add(TextLabel(content="hi"))
        assert list(scene.stickers) == [sticker]
        assert list(scene.texts) == [label]

    def test_draw_order_stickers_below_text(self, scene):
        label = scene.add(TextLabel(content="hi"))
        sticker = scene.add(Sticker())
        assert scene.objects() == [sticker, label]
        assert scene.objects_topmost_first() == [label, sticker]

    def test_unknown_kind_raises_type_error(self, scene):
        with pytest.raises(TypeError):
            scene.add(DraggableObject())

    def test_select_requires_membership(self, scene):
        with pytest.raises(ValueError):
            scene.select(Sticker())

    def test_remove_clears_selection(self, scene):
        sticker = scene.add(Sticker())
        scene.select(sticker)
        scene.remove(sticker)
        assert scene.selected is None
        assert not scene.contains(sticker)

    def test_remove_other_keeps_selection(self, scene):
        a = scene.add(Sticker())
        b = scene.add(Sticker())
        scene.select(a)
        scene.remove(b)
        assert scene.selected is a

    def test_promote_to_front_within_own_collection(self, scene):
        a = scene.add(TextLabel(content="a"))
        b = scene.add(TextLabel(content="b"))
        sticker = scene.add(Sticker())
        scene.promote_to_front(a)
        assert list(scene.texts) == [b, a]
        # Stickers still draw below every label
        assert scene.objects() == [sticker, b, a]

    def test_find_by_uuid(self, scene):
        label = scene.add(TextLabel(content="a"))
        assert scene.find(label.uuid) is label
        assert scene.find("missing") is None

    def test_reset_keeps_frame_and_title(self, scene):
        scene.add(Sticker())
        scene.strokes.append(Stroke())
        scene.frame_source = "frame.png"
        scene.title = "PARTY"
        scene.reset()
        assert scene.objects() == []
        assert scene.strokes == []
        assert scene.frame_source == "frame.png"
        assert scene.title == "PARTY"

    def test_snapshot_restore(self, scene):
        sticker = scene.add(Sticker(x=1, y=2, width=100, height=50, source_id="star",
                                    original_width=200, original_height=100))
        scene.add(TextLabel(content="Hello", x=3, y=4, width=75, height=30))
        stroke = Stroke(color="#00FF00", size=8)
        stroke.add_point(1, 1)
        stroke.add_point(5, 6)
        scene.strokes.append(stroke)
        scene.title = "GRAD"
        scene.select(sticker)

        snapshot = scene.snapshot()
        restored = Scene.restore(snapshot)

        assert restored.snapshot() == snapshot
        assert restored.selected is not None
        assert restored.selected.uuid == sticker.uuid
        assert restored.selected is not sticker
        assert [tuple(p) for p in restored.strokes[0].points] == [(1, 1), (5, 6)]
