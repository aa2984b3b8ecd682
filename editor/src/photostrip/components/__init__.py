"""UI components for the Photo Strip Editor

This package contains the interactive pieces of the editor:
- transform_widgets: handle classes, transform modes and the session snapshot
- transform_controller: pointer state machine (select, drag, resize, rotate, draw)
- strip_canvas: QWidget that hosts an EditorSession
"""

from .transform_controller import InteractionState, TransformController
from .strip_canvas import StripCanvas

__all__ = [
    'InteractionState',
    'TransformController',
    'StripCanvas',
]
