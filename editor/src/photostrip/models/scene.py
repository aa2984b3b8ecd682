"""
Photo Strip Editor - Scene Model

The scene owns every overlay on the strip:
- stickers and text labels, each in its own z-ordered collection
- freehand strokes
- the current selection (a reference into one of the collections)
- frame artwork and title

Z-order is explicit. Collections are drawn first to last, stickers below text,
and ``promote_to_front`` moves an object to the end of its own collection.
"""

import logging
from typing import Generic, Iterator, List, Optional, TypeVar

from photostrip.models.draggable import DraggableObject, Sticker, TextLabel, object_from_dict
from photostrip.models.stroke import Stroke

logger = logging.getLogger(__name__)

T = TypeVar('T')


class ZOrderList(Generic[T]):
    """Insertion-ordered collection; the last item is the front-most."""

    def __init__(self, items=None):
        self._items: List[T] = list(items or [])

    def __iter__(self) -> Iterator[T]:
        return iter(list(self._items))

    def __reversed__(self) -> Iterator[T]:
        return iter(list(reversed(self._items)))

    def __len__(self):
        return len(self._items)

    def __contains__(self, item):
        return any(existing is item for existing in self._items)

    def __getitem__(self, index) -> T:
        return self._items[index]

    def index(self, item):
        for i, existing in enumerate(self._items):
            if existing is item:
                return i
        raise ValueError("item not in z-order list")

    def append(self, item: T):
        self._items.append(item)

    def remove(self, item: T):
        del self._items[self.index(item)]

    def promote_to_front(self, item: T):
        """Move item to the end of the list (drawn last, hit-tested first)."""
        i = self.index(item)
        if i != len(self._items) - 1:
            self._items.append(self._items.pop(i))

    def clear(self):
        self._items.clear()


class Scene:
    """Authoritative object collections plus selection."""

    def __init__(self):
        self.stickers: ZOrderList[Sticker] = ZOrderList()
        self.texts: ZOrderList[TextLabel] = ZOrderList()
        self.strokes: List[Stroke] = []
        self.selected: Optional[DraggableObject] = None
        self.frame_source: Optional[str] = None
        self.title: str = ''

    # ========================================
    # Collections
    # ========================================

    def collection_for(self, obj):
        """The z-order list that owns objects of obj's kind."""
        if isinstance(obj, Sticker):
            return self.stickers
        if isinstance(obj, TextLabel):
            return self.texts
        raise TypeError(f"Unhandled draggable object kind: {type(obj).__name__}")

    def add(self, obj):
        self.collection_for(obj).append(obj)
        return obj

    def remove(self, obj):
        """Remove obj, clearing the selection if it pointed at obj."""
        self.collection_for(obj).remove(obj)
        if self.selected is obj:
            self.selected = None

    def contains(self, obj):
        return obj in self.collection_for(obj)

    def objects(self):
        """All draggable objects in draw order (back to front)."""
        return list(self.stickers) + list(self.texts)

    def objects_topmost_first(self):
        """All draggable objects in hit-test order (front to back)."""
        return list(reversed(self.objects()))

    def promote_to_front(self, obj):
        self.collection_for(obj).promote_to_front(obj)

    def find(self, uuid):
        for obj in self.objects():
            if obj.uuid == uuid:
                return obj
        return None

    # ========================================
    # Selection
    # ========================================

    def select(self, obj):
        if obj is not None and not self.contains(obj):
            raise ValueError("Cannot select an object that is not in the scene")
        self.selected = obj

    def clear_selection(self):
        self.selected = None

    # ========================================
    # Reset / snapshot
    # ========================================

    def reset(self):
        """Remove every object and stroke; keep frame and title."""
        self.stickers.clear()
        self.texts.clear()
        self.strokes.clear()
        self.selected = None

    def snapshot(self):
        """Plain-data copy of the scene for external persistence."""
        return {
            'stickers': [s.to_dict() for s in self.stickers],
            'texts': [t.to_dict() for t in self.texts],
            'strokes': [s.to_dict() for s in self.strokes],
            'selected': self.selected.uuid if self.selected else None,
            'frame_source': self.frame_source,
            'title': self.title,
        }

    @classmethod
    def restore(cls, data):
        """Rebuild a scene from ``snapshot()`` output."""
        scene = cls()
        for item in list(data.get('stickers', [])) + list(data.get('texts', [])):
            scene.add(object_from_dict(item))
        scene.strokes = [Stroke.from_dict(s) for s in data.get('strokes', [])]
        scene.frame_source = data.get('frame_source')
        scene.title = data.get('title', '')
        selected_uuid = data.get('selected')
        if selected_uuid:
            scene.selected = scene.find(selected_uuid)
        logger.debug("Restored scene with %d stickers, %d texts, %d strokes",
                     len(scene.stickers), len(scene.texts), len(scene.strokes))
        return scene
