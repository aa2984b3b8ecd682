"""Asset store - background image decoding for photos, stickers and frames.

Pattern: Background loading with QRunnable workers on a QThreadPool

Images are decoded with Pillow and converted to ``QImage`` (RGBA8888) through
a NumPy buffer. Each request is backed by a ``concurrent.futures.Future`` that
the worker resolves; nothing on the GUI thread waits on one except
``wait_all`` (used by export).

Completion leaves the worker through ``AssetLoadSignals`` and is delivered
on the store's thread (queued connection), where the source id is queued for
``drain_loaded()`` and ``loaded`` / ``failed`` are emitted.
"""

import io
import logging
from concurrent.futures import Future, wait
from typing import Dict, List, Optional, Tuple

import numpy as np
from PIL import Image
from PyQt5.QtCore import QObject, QRunnable, QThreadPool, pyqtSignal, pyqtSlot
from PyQt5.QtGui import QImage

from photostrip.constants import ASSET_LOADER_WORKERS
from photostrip.errors import AssetLoadFailure

logger = logging.getLogger(__name__)


def pil_to_qimage(img):
    """Convert a Pillow image to a QImage that owns its pixel data."""
    rgba = np.ascontiguousarray(np.array(img.convert('RGBA'), dtype=np.uint8))
    height, width = rgba.shape[:2]
    buffer = rgba.tobytes()
    return QImage(buffer, width, height, width * 4, QImage.Format_RGBA8888).copy()


def open_image(source):
    """Open a path, raw encoded bytes or an existing Pillow image."""
    if isinstance(source, Image.Image):
        return source.copy()
    if isinstance(source, (bytes, bytearray)):
        img = Image.open(io.BytesIO(source))
    else:
        img = Image.open(source)
    img.load()
    return img


def decode_image(source_id, source, post_process=None):
    """Decode one asset. Runs on a worker thread.

    Raises:
        AssetLoadFailure: the source cannot be opened or decoded, or the
            post-process hook failed
    """
    try:
        img = open_image(source)
        if post_process is not None:
            img = post_process(img)
        return pil_to_qimage(img)
    except Exception as e:
        raise AssetLoadFailure(source_id, str(e)) from e


class AssetLoadSignals(QObject):
    """Signals for AssetLoadTask"""

    load_complete = pyqtSignal(str)  # source_id
    load_failed = pyqtSignal(str, str)  # source_id, error_message


class AssetLoadTask(QRunnable):
    """Decode one asset and resolve its future.

    Usage:
        task = AssetLoadTask(source_id, source, post_process, future)
        thread_pool.start(task)
    """

    def __init__(self, source_id, source, post_process, future):
        super().__init__()
        self.source_id = source_id
        self.source = source
        self.post_process = post_process
        self.future = future
        self.signals = AssetLoadSignals()

    def run(self):
        # False when the store cancelled the request before it started
        if not self.future.set_running_or_notify_cancel():
            return
        try:
            image = decode_image(self.source_id, self.source, self.post_process)
        except AssetLoadFailure as e:
            self.future.set_exception(e)
            self.signals.load_failed.emit(self.source_id, str(e))
            return
        self.future.set_result(image)
        self.signals.load_complete.emit(self.source_id)


class AssetStore(QObject):
    """Decoded images keyed by opaque source id.

    Requests, lookups and completion handling all happen on the thread that
    owns the store; only decoding runs on the pool.
    """

    # Signals
    loaded = pyqtSignal(str)  # source_id
    failed = pyqtSignal(str, str)  # source_id, error_message

    def __init__(self, max_workers=ASSET_LOADER_WORKERS, parent=None):
        super().__init__(parent)
        self.thread_pool = QThreadPool(self)
        self.thread_pool.setMaxThreadCount(max_workers)

        self._futures: Dict[str, Future] = {}
        self._loaded: List[str] = []
        self._closed = False

    # ========================================
    # Requests
    # ========================================

    def load(self, source_id, source=None, post_process=None):
        """Start decoding source_id unless it was already requested.

        Args:
            source_id: Opaque id the asset is looked up by
            source: Path, encoded bytes or PIL image (defaults to source_id as a path)
            post_process: Optional callable taking and returning a PIL image

        Returns:
            concurrent.futures.Future resolving to a QImage. After shutdown
            the future is already cancelled.
        """
        future = self._futures.get(source_id)
        if future is not None:
            return future

        future = Future()
        self._futures[source_id] = future
        if self._closed:
            future.cancel()
            logger.debug("Store shut down, not loading %s", source_id)
            return future

        task = AssetLoadTask(source_id, source if source is not None else source_id,
                             post_process, future)
        task.signals.load_complete.connect(self._on_load_complete)
        task.signals.load_failed.connect(self._on_load_failed)
        self.thread_pool.start(task)
        logger.debug("Loading asset %s", source_id)
        return future

    def forget(self, source_id):
        """Drop a cached asset so the next load decodes it again."""
        self._futures.pop(source_id, None)

    def is_requested(self, source_id):
        return source_id in self._futures

    # ========================================
    # Lookups
    # ========================================

    def get(self, source_id) -> Optional[QImage]:
        """Decoded image, or None while it is still loading.

        Raises:
            AssetLoadFailure: decoding failed, the request was cancelled by
                shutdown, or the id was never requested
        """
        future = self._futures.get(source_id)
        if future is None:
            raise AssetLoadFailure(source_id, "not requested")
        if future.cancelled():
            raise AssetLoadFailure(source_id, "cancelled")
        if not future.done():
            return None
        # AssetLoadFailure from the worker propagates as is
        return future.result()

    def natural_size(self, source_id) -> Optional[Tuple[int, int]]:
        """(width, height) of a loaded image, None while loading."""
        image = self.get(source_id)
        if image is None:
            return None
        return image.width(), image.height()

    def wait_all(self, timeout=None):
        """Block until every requested asset finished (loaded, failed or cancelled)."""
        futures = list(self._futures.values())
        if futures:
            wait(futures, timeout=timeout)

    # ========================================
    # Completion
    # ========================================

    def drain_loaded(self):
        """Source ids that finished since the last call, oldest first."""
        loaded, self._loaded = self._loaded, []
        return loaded

    @pyqtSlot(str)
    def _on_load_complete(self, source_id):
        if self._closed:
            return
        logger.debug("Loaded asset %s", source_id)
        self._loaded.append(source_id)
        self.loaded.emit(source_id)

    @pyqtSlot(str, str)
    def _on_load_failed(self, source_id, error_message):
        if self._closed:
            return
        logger.warning("%s", error_message)
        self._loaded.append(source_id)
        self.failed.emit(source_id, error_message)

    @property
    def is_shut_down(self):
        return self._closed

    def shutdown(self, wait_for_pending=False):
        """Stop loading. Requests not yet started are cancelled.

        No completion is reported after this call, including for decodes
        that were already running.
        """
        if self._closed:
            return
        self._closed = True
        self.thread_pool.clear()
        cancelled = sum(1 for future in self._futures.values() if future.cancel())
        if cancelled:
            logger.debug("Cancelled %d pending asset loads", cancelled)
        if wait_for_pending:
            self.thread_pool.waitForDone()
