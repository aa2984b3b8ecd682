"""Freehand drawing strokes."""
from dataclasses import dataclass, field
from typing import List

from photostrip.constants import DEFAULT_BRUSH_COLOR, DEFAULT_BRUSH_SIZE
from photostrip.models.transform import Vec2


@dataclass(eq=False)
class Stroke:
    """A polyline drawn with one brush color and width."""
    color: str = DEFAULT_BRUSH_COLOR
    size: int = DEFAULT_BRUSH_SIZE
    points: List[Vec2] = field(default_factory=list)

    def add_point(self, x, y):
        self.points.append(Vec2(x, y))

    def to_dict(self):
        return {
            'color': self.color,
            'size': self.size,
            'points': [[p.x, p.y] for p in self.points],
        }

    @classmethod
    def from_dict(cls, data):
        return cls(
            color=data.get('color', DEFAULT_BRUSH_COLOR),
            size=data.get('size', DEFAULT_BRUSH_SIZE),
            points=[Vec2(x, y) for x, y in data.get('points', [])],
        )
