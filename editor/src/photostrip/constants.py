"""
Photo Strip Editor - Constants and Configuration

This module contains all constant values used throughout the application:
- Strip layouts (canvas size, photo slots, frame artwork)
- Default text and brush settings
- Transform handle sizes and size floors
- Fixed overlay styling (date stamp, title, selection chrome)
"""

# ======================================================================
# STRIP LAYOUTS
# ======================================================================
# Keyed by photo count. Slots are {x, y, width, height} in strip pixels.

PHOTO_SIDE_PADDING = 40
PHOTO_SLOT_WIDTH = 320
GAP_BETWEEN_PHOTOS = 20
TOP_PADDING = 40
BOTTOM_SPACE_FOR_LOGO = 150

DEFAULT_BACKGROUND = '#CCCCCC'


def _column(x, count, slot_height):
    """Vertical column of equally sized slots starting at the top padding."""
    return [
        {'x': x, 'y': TOP_PADDING + i * (slot_height + GAP_BETWEEN_PHOTOS),
         'width': PHOTO_SLOT_WIDTH, 'height': slot_height}
        for i in range(count)
    ]


def _strip_height(count, slot_height):
    return TOP_PADDING + slot_height * count + GAP_BETWEEN_PHOTOS * (count - 1) + BOTTOM_SPACE_FOR_LOGO


STRIP_LAYOUT_CONFIGS = {
    '1': {
        'strip_width': 400,
        'strip_height': _strip_height(1, 240),
        'slots': _column(PHOTO_SIDE_PADDING, 1, 240),
        'frames': [
            {'id': 'option1', 'src': 'assets/strip-frame-1-photos-option1.png', 'name': 'Original Single'},
            {'id': 'option2', 'src': 'assets/strip-frame-1-photos-option2.png', 'name': 'Clean White'},
            {'id': 'option3', 'src': 'assets/strip-frame-1-photos-option3.png', 'name': 'Styled Border'},
        ],
    },
    '2': {
        'strip_width': 400,
        'strip_height': _strip_height(2, 240),
        'slots': _column(PHOTO_SIDE_PADDING, 2, 240),
        'frames': [
            {'id': 'option1', 'src': 'assets/strip-frame-2-photos-option1.png', 'name': 'Silver Grey'},
            {'id': 'option2', 'src': 'assets/strip-frame-2-photos-option2.png', 'name': 'Classic White'},
            {'id': 'option3', 'src': 'assets/strip-frame-2-photos-option3.png', 'name': 'Light Sky Blue'},
            {'id': 'option4', 'src': 'assets/strip-frame-2-photos-option4.png', 'name': 'Off-White'},
            {'id': 'option5', 'src': 'assets/strip-frame-2-photos-option5.png', 'name': 'Periwinkle'},
            {'id': 'option6', 'src': 'assets/strip-frame-2-photos-option6.png', 'name': 'Blush Pink'},
        ],
    },
    '3': {
        'strip_width': 400,
        'strip_height': _strip_height(3, 220),
        'slots': _column(PHOTO_SIDE_PADDING, 3, 220),
        'frames': [
            {'id': 'option1', 'src': 'assets/strip-frame-3-photos-option1.png', 'name': 'Classic White'},
            {'id': 'option2', 'src': 'assets/strip-frame-3-photos-option2.png', 'name': 'Periwinkle'},
            {'id': 'option3', 'src': 'assets/strip-frame-3-photos-option3.png', 'name': 'Blush Pink'},
            {'id': 'option4', 'src': 'assets/strip-frame-3-photos-option4.png', 'name': 'Silver Grey'},
            {'id': 'option5', 'src': 'assets/strip-frame-3-photos-option5.png', 'name': 'Off-White'},
            {'id': 'option6', 'src': 'assets/strip-frame-3-photos-option6.png', 'name': 'Light Sky Blue'},
        ],
    },
    '4': {
        'strip_width': 400,
        'strip_height': _strip_height(4, 226),
        'slots': _column(PHOTO_SIDE_PADDING, 4, 226),
        'frames': [
            {'id': 'option1', 'src': 'assets/strip-frame-4-photos-option1.png', 'name': 'Blush Pink'},
            {'id': 'option2', 'src': 'assets/strip-frame-4-photos-option2.png', 'name': 'Classic White'},
            {'id': 'option3', 'src': 'assets/strip-frame-4-photos-option3.png', 'name': 'Light Sky Blue'},
            {'id': 'option4', 'src': 'assets/strip-frame-4-photos-option4.png', 'name': 'Off-White'},
            {'id': 'option5', 'src': 'assets/strip-frame-4-photos-option5.png', 'name': 'Silver Grey'},
            {'id': 'option6', 'src': 'assets/strip-frame-4-photos-option6.png', 'name': 'Periwinkle'},
        ],
    },
    # Two columns
    '6': {
        'strip_width': 760,
        'strip_height': _strip_height(3, 220),
        'slots': _column(PHOTO_SIDE_PADDING, 3, 220) + _column(400, 3, 220),
        'frames': [
            {'id': 'option1', 'src': 'assets/strip-frame-6-photos-option1.png', 'name': 'Light Sky Blue'},
            {'id': 'option2', 'src': 'assets/strip-frame-6-photos-option2.png', 'name': 'Classic White'},
            {'id': 'option3', 'src': 'assets/strip-frame-6-photos-option3.png', 'name': 'Off-White'},
            {'id': 'option4', 'src': 'assets/strip-frame-6-photos-option4.png', 'name': 'Silver Grey'},
            {'id': 'option5', 'src': 'assets/strip-frame-6-photos-option5.png', 'name': 'Blush Pink'},
            {'id': 'option6', 'src': 'assets/strip-frame-6-photos-option6.png', 'name': 'Periwinkle'},
        ],
    },
}

# Layout used when the requested photo count has no layout
DEFAULT_LAYOUT_KEY = '3'

# ======================================================================
# DEFAULT TEXT / BRUSH SETTINGS
# ======================================================================

DEFAULT_TEXT_SETTINGS = {
    'color': '#333333',
    'font': "'Poppins', sans-serif",
    'size': 30,
    'align': 'center',
    'bold': False,
    'italic': False,
    'underline': False,
}

TEXT_ALIGNMENTS = ('left', 'center', 'right')

DEFAULT_BRUSH_COLOR = '#FF0000'
DEFAULT_BRUSH_SIZE = 5

# ======================================================================
# OBJECT SIZE CONSTRAINTS
# ======================================================================

MIN_OBJECT_SIZE = 20        # Width/height floor after any resize (px)
MIN_FONT_SIZE = 10          # Font size floor when resizing text (px)
DEFAULT_STICKER_WIDTH = 100

# ======================================================================
# TRANSFORM HANDLES
# ======================================================================
# All sizes in strip pixels, measured in the object's local (unrotated) space

HANDLE_SIZE = 30                    # Corner square side
ROTATE_HANDLE_RADIUS = 15           # Rotate circle radius
ROTATE_HANDLE_OFFSET = 30           # Rotate circle center above the top edge

SELECTION_COLOR = '#00FFFF'
SELECTION_LINE_WIDTH = 2
SELECTION_DASH = [5, 5]
HANDLE_FILL_COLOR = '#FFFFFF'
HANDLE_STROKE_COLOR = '#000000'

# ======================================================================
# FIXED OVERLAYS
# ======================================================================

DATE_FONT_FAMILIES = ['Lato', 'sans-serif']
DATE_FONT_SIZE = 21
DATE_COLOR = '#333333'
DATE_BOTTOM_PADDING = 15
DATE_FORMAT = '%Y.%m.%d'

TITLE_FONT_FAMILIES = ['Bebas Neue', 'sans-serif']
TITLE_FONT_SIZE = 35
TITLE_COLOR = '#000000'
TITLE_SHADOW_COLOR = (255, 255, 255, 128)
TITLE_BOTTOM_OFFSET = 85

PLACEHOLDER_FILL = '#CCCCCC'
PLACEHOLDER_TEXT_COLOR = '#FF0000'
PLACEHOLDER_FONT_FAMILIES = ['Arial', 'sans-serif']
PLACEHOLDER_FONT_SIZE = 12

# ======================================================================
# ASSET LOADING
# ======================================================================

ASSET_LOADER_WORKERS = 2

# ======================================================================
# CONFIG FILE
# ======================================================================

CONFIG_DIR_NAME = '.photostrip'
CONFIG_FILE_NAME = 'config.json'
