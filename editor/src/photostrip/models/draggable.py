"""
Photo Strip Editor - Draggable Object Model

Overlay objects the user can move, resize and rotate on the strip. The set of
variants is closed: ``Sticker`` and ``TextLabel``. Code that branches on the
variant goes through ``isinstance`` and raises ``TypeError`` for anything else,
so adding a third kind fails loudly at every dispatch site.

Objects compare by identity. The scene's selection is a reference to one of
them, never a copy.
"""

import uuid as uuid_module
from dataclasses import dataclass, field

from photostrip.constants import DEFAULT_TEXT_SETTINGS, TEXT_ALIGNMENTS


def _new_uuid():
    return str(uuid_module.uuid4())


@dataclass(eq=False)
class DraggableObject:
    """Shared transform fields of every overlay object.

    x, y: top-left of the unrotated bounding box
    angle: radians, pivot at the box center
    """
    x: float = 0.0
    y: float = 0.0
    width: float = 0.0
    height: float = 0.0
    angle: float = 0.0
    uuid: str = field(default_factory=_new_uuid)

    kind = 'draggable'

    @property
    def center(self):
        return self.x + self.width / 2, self.y + self.height / 2

    def _transform_dict(self):
        return {
            'type': self.kind,
            'uuid': self.uuid,
            'x': self.x,
            'y': self.y,
            'width': self.width,
            'height': self.height,
            'angle': self.angle,
        }


@dataclass(eq=False)
class Sticker(DraggableObject):
    """Image overlay. Resizing keeps width/height at the native ratio."""
    source_id: str = ''
    original_width: int = 0
    original_height: int = 0

    kind = 'sticker'

    @property
    def aspect_ratio(self):
        """Native width/height ratio, or None while the image size is unknown."""
        if self.original_width and self.original_height:
            return self.original_width / self.original_height
        return None

    def to_dict(self):
        data = self._transform_dict()
        data.update({
            'source_id': self.source_id,
            'original_width': self.original_width,
            'original_height': self.original_height,
        })
        return data


@dataclass(eq=False)
class TextLabel(DraggableObject):
    """Text overlay.

    width/height are measured from content and font, not set independently.
    They are refreshed whenever content, font, size or style changes and on
    every render.
    """
    content: str = ''
    color: str = DEFAULT_TEXT_SETTINGS['color']
    font: str = DEFAULT_TEXT_SETTINGS['font']
    size: int = DEFAULT_TEXT_SETTINGS['size']
    align: str = DEFAULT_TEXT_SETTINGS['align']
    bold: bool = DEFAULT_TEXT_SETTINGS['bold']
    italic: bool = DEFAULT_TEXT_SETTINGS['italic']
    underline: bool = DEFAULT_TEXT_SETTINGS['underline']

    kind = 'text'

    # Properties editable through EditorSession.set_selected_property
    EDITABLE = ('content', 'color', 'font', 'size', 'align', 'bold', 'italic', 'underline')
    # Properties that change the measured box
    METRIC_PROPERTIES = ('content', 'font', 'size', 'bold', 'italic')

    def __post_init__(self):
        if self.align not in TEXT_ALIGNMENTS:
            self.align = DEFAULT_TEXT_SETTINGS['align']

    def to_dict(self):
        data = self._transform_dict()
        data.update({
            'content': self.content,
            'color': self.color,
            'font': self.font,
            'size': self.size,
            'align': self.align,
            'bold': self.bold,
            'italic': self.italic,
            'underline': self.underline,
        })
        return data


OBJECT_TYPES = {
    Sticker.kind: Sticker,
    TextLabel.kind: TextLabel,
}


def object_from_dict(data):
    """Rebuild a draggable object from its ``to_dict()`` form.

    Raises:
        ValueError: unknown ``type`` tag
    """
    data = dict(data)
    kind = data.pop('type', None)
    cls = OBJECT_TYPES.get(kind)
    if cls is None:
        raise ValueError(f"Unknown draggable object type: {kind!r}")
    return cls(**data)
