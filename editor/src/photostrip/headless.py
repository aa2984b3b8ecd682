"""Headless strip renderer - CLI entry point.

Composites captured photos onto a strip layout with optional frame, title,
stickers and text labels, and writes the export image as PNG. No window is
opened; Qt runs on the offscreen platform unless one is already configured.

Usage:
    photostrip-render photo1.jpg photo2.jpg photo3.jpg -o strip.png

Examples:
    photostrip-render a.jpg b.jpg c.jpg d.jpg -n 4 --frame option2
    photostrip-render a.jpg --count 1 --title "GRADUATION" --text "Class of 2026"
    photostrip-render a.jpg b.jpg c.jpg --sticker star.png -v
"""

import argparse
import logging
import os
import sys

from photostrip.utils.logger import configure_logging

logger = logging.getLogger(__name__)

TEXT_LINE_SPACING = 1.5


def resolve_frame(layout, frame):
    """Frame option id for the layout, or a path used as is."""
    if not frame:
        return None
    for option in layout.frames:
        if option.id == frame:
            return option.src
    return frame


def build_session(args):
    """Create and populate an EditorSession from parsed arguments."""
    from photostrip.services.config import load_config
    from photostrip.services.editor_session import EditorSession

    config = load_config(args.config) if args.config else None
    session = EditorSession(photo_count=args.count, config=config)
    session.set_photos([os.path.abspath(p) for p in args.photos])

    frame_source = resolve_frame(session.layout, args.frame)
    if frame_source:
        session.set_frame(frame_source)
    if args.title:
        session.set_title(args.title)

    for path in args.sticker:
        session.add_sticker(os.path.abspath(path))

    style = {}
    if args.text_color:
        style['color'] = args.text_color
    if args.text_size:
        style['size'] = args.text_size
    for index, content in enumerate(args.text):
        label = session.add_text(content, style)
        if label is not None:
            # Stack extra labels below the first
            label.y += index * label.height * TEXT_LINE_SPACING

    session.scene.clear_selection()
    return session


def main(argv=None):
    parser = argparse.ArgumentParser(
        description='Render a photo strip to a PNG image (headless).',
    )
    parser.add_argument(
        'photos',
        nargs='*',
        help='Captured photo files, in slot order.',
    )
    parser.add_argument(
        '-o', '--output',
        default='strip.png',
        help='Output PNG path (default: strip.png).',
    )
    parser.add_argument(
        '-n', '--count',
        type=int,
        default=None,
        help='Layout photo count: 1, 2, 3, 4 or 6 (default: number of photos).',
    )
    parser.add_argument(
        '--frame',
        help='Frame option id of the layout (e.g. option2) or an image path.',
    )
    parser.add_argument(
        '--title',
        default='',
        help='Strip title drawn above the date.',
    )
    parser.add_argument(
        '--text',
        action='append',
        default=[],
        help='Text label to add (repeatable).',
    )
    parser.add_argument('--text-color', help='Text label color, e.g. #FFFFFF.')
    parser.add_argument('--text-size', type=int, help='Text label size in pixels.')
    parser.add_argument(
        '--sticker',
        action='append',
        default=[],
        help='Sticker image to add at the strip center (repeatable).',
    )
    parser.add_argument('--config', help='Editor config JSON to take defaults from.')
    parser.add_argument(
        '-v', '--verbose',
        action='store_true',
        help='Enable verbose logging.',
    )
    args = parser.parse_args(argv)

    configure_logging(args.verbose)

    if args.count is None:
        args.count = len(args.photos) or None

    missing = [p for p in args.photos + args.sticker if not os.path.isfile(p)]
    if missing:
        for path in missing:
            print(f"Error: Input file not found: {path}")
        return 1

    os.environ.setdefault('QT_QPA_PLATFORM', 'offscreen')
    from PyQt5.QtGui import QGuiApplication
    app = QGuiApplication.instance() or QGuiApplication(sys.argv[:1])  # noqa: F841 (fonts need an app)

    session = build_session(args)
    try:
        image = session.export_composite()
    finally:
        session.shutdown()

    output_path = os.path.abspath(args.output)
    out_dir = os.path.dirname(output_path)
    if out_dir:
        os.makedirs(out_dir, exist_ok=True)
    if not image.save(output_path, 'PNG'):
        print(f"Error: Could not write {output_path}")
        return 1

    print(f"Rendered {session.layout.width}x{session.layout.height} strip to {output_path}")
    return 0


if __name__ == '__main__':
    sys.exit(main())
