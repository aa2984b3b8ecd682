"""
Photo Strip Editor

Composites captured photos onto a printable strip and lets the user decorate it
with stickers, text labels and freehand drawing.

Packages:
- models: draggable objects, strokes, layouts and the scene
- components: transform controller, handle system and the canvas widget
- services: editor session, asset store, renderer and configuration
- utils: geometry kernel and logging helpers
"""

__version__ = "1.0.0"
