"""Photo strip editor window.

Usage:
    photostrip photo1.jpg photo2.jpg photo3.jpg [-n COUNT] [--frame ID] [--title TEXT]
"""

import argparse
import logging
import os
import sys

from PyQt5.QtWidgets import QApplication, QMainWindow

from photostrip import __version__
from photostrip.components.strip_canvas import StripCanvas
from photostrip.headless import resolve_frame
from photostrip.services.config import load_config
from photostrip.services.editor_session import EditorSession
from photostrip.utils.logger import configure_logging, set_main_window

logger = logging.getLogger(__name__)


class StripEditorWindow(QMainWindow):
    """Main window hosting one strip canvas."""

    def __init__(self, session, parent=None):
        super().__init__(parent)
        self.session = session
        self.setWindowTitle(f"Photo Strip Editor {__version__}")

        self.canvas = StripCanvas(session, self)
        self.setCentralWidget(self.canvas)
        self.resize(self.canvas.sizeHint())

        set_main_window(self)

    def closeEvent(self, event):
        self.session.shutdown()
        set_main_window(None)
        super().closeEvent(event)


def main(argv=None):
    parser = argparse.ArgumentParser(description='Edit a photo strip.')
    parser.add_argument('photos', nargs='*', help='Captured photo files, in slot order.')
    parser.add_argument('-n', '--count', type=int, default=None,
                        help='Layout photo count: 1, 2, 3, 4 or 6.')
    parser.add_argument('--frame', help='Frame option id of the layout or an image path.')
    parser.add_argument('--title', default='', help='Strip title.')
    parser.add_argument('-v', '--verbose', action='store_true', help='Enable verbose logging.')
    args = parser.parse_args(argv)

    configure_logging(args.verbose)

    app = QApplication.instance() or QApplication(sys.argv[:1])

    config = load_config()
    count = args.count if args.count is not None else (len(args.photos) or None)
    session = EditorSession(photo_count=count, config=config)
    session.set_photos([os.path.abspath(p) for p in args.photos])
    frame_source = resolve_frame(session.layout, args.frame)
    if frame_source:
        session.set_frame(frame_source)
    session.set_title(args.title)

    window = StripEditorWindow(session)
    window.show()
    return app.exec_()


if __name__ == '__main__':
    sys.exit(main())
