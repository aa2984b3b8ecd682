"""Strip layouts: canvas size, photo slots and available frame artwork."""
import logging
from dataclasses import dataclass
from typing import List, Tuple

from photostrip.constants import STRIP_LAYOUT_CONFIGS, DEFAULT_LAYOUT_KEY, DEFAULT_BACKGROUND

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Slot:
    """Destination rectangle for one captured photo."""
    x: float
    y: float
    width: float
    height: float

    @property
    def aspect_ratio(self):
        return self.width / self.height


@dataclass(frozen=True)
class FrameOption:
    """Selectable frame artwork for a layout."""
    id: str
    src: str
    name: str


@dataclass(frozen=True)
class StripLayout:
    """Pixel geometry of one strip layout."""
    key: str
    width: int
    height: int
    slots: Tuple[Slot, ...]
    frames: Tuple[FrameOption, ...]
    background: str = DEFAULT_BACKGROUND

    @property
    def photo_count(self):
        return len(self.slots)

    @property
    def size(self):
        return self.width, self.height


def _build_layout(key, config):
    return StripLayout(
        key=key,
        width=config['strip_width'],
        height=config['strip_height'],
        slots=tuple(Slot(**slot) for slot in config['slots']),
        frames=tuple(FrameOption(**frame) for frame in config['frames']),
        background=config.get('background', DEFAULT_BACKGROUND),
    )


LAYOUTS = {key: _build_layout(key, config) for key, config in STRIP_LAYOUT_CONFIGS.items()}


def available_photo_counts() -> List[int]:
    return sorted(int(key) for key in LAYOUTS)


def get_layout(photo_count) -> StripLayout:
    """Layout for a photo count, falling back to the default layout.

    Accepts ints or numeric strings. Missing, non-numeric and unsupported counts
    (5, or anything outside 1-6) all give the default layout.
    """
    try:
        key = str(int(photo_count))
    except (TypeError, ValueError):
        key = None

    layout = LAYOUTS.get(key)
    if layout is None:
        logger.warning("No strip layout for photo count %r, using %s-photo layout",
                       photo_count, DEFAULT_LAYOUT_KEY)
        layout = LAYOUTS[DEFAULT_LAYOUT_KEY]
    return layout
