"""
Shared fixtures for Photo Strip Editor tests.

Provides in-memory images, a deterministic text measurer and ready-made
editor sessions.
"""
import sys
import os
import datetime
import io

import numpy as np
import pytest

# Ensure editor/src is on the path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'editor', 'src'))

# No display needed for any test
os.environ.setdefault('QT_QPA_PLATFORM', 'offscreen')


FIXED_DATE = datetime.date(2026, 3, 14)


class StubMeasurer:
    """Text measurer with fixed metrics: half the font size per character."""

    def measure(self, label):
        return len(label.content) * label.size * 0.5, float(label.size)

    def apply(self, label):
        label.width, label.height = self.measure(label)
        return label


def png_bytes(width, height, color=(255, 0, 0)):
    """Encode a solid-color PNG."""
    from PIL import Image
    buffer = io.BytesIO()
    Image.new('RGB', (width, height), color).save(buffer, format='PNG')
    return buffer.getvalue()


def qimage_array(image):
    """Copy a QImage's pixels into a (height, width, 4) uint8 array."""
    from PyQt5.QtGui import QImage
    image = image.convertToFormat(QImage.Format_RGBA8888)
    ptr = image.constBits()
    ptr.setsize(image.sizeInBytes())
    data = np.frombuffer(ptr, dtype=np.uint8).copy()
    return data.reshape(image.height(), image.bytesPerLine())[:, :image.width() * 4].reshape(
        image.height(), image.width(), 4)


def pixel_rgb(image, x, y):
    from PyQt5.QtGui import QColor
    color = QColor(image.pixel(int(x), int(y)))
    return color.red(), color.green(), color.blue()


# ── Fixtures ─────────────────────────────────────────────────────────────

@pytest.fixture
def stub_measurer():
    return StubMeasurer()


@pytest.fixture
def session(qapp, stub_measurer):
    """3-photo session with a fixed date and deterministic text metrics"""
    from photostrip.services.editor_session import EditorSession
    editor = EditorSession(photo_count=3, measurer=stub_measurer,
                           date_provider=lambda: FIXED_DATE)
    yield editor
    editor.shutdown()


@pytest.fixture
def qt_session(qapp):
    """3-photo session measuring text with real Qt fonts"""
    from photostrip.services.editor_session import EditorSession
    editor = EditorSession(photo_count=3, date_provider=lambda: FIXED_DATE)
    yield editor
    editor.shutdown()


@pytest.fixture
def red_png():
    return png_bytes(40, 20, (255, 0, 0))


@pytest.fixture
def blue_png():
    return png_bytes(60, 60, (0, 0, 255))
