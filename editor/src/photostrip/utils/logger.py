"""Logging setup and error reporting for the entry points"""
import logging
import sys

from PyQt5.QtWidgets import QMessageBox

logger = logging.getLogger(__name__)

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

# True when running from source, False in a frozen build
DEBUG_MODE = not getattr(sys, 'frozen', False)

_main_window = None


def configure_logging(verbose=False):
    """Root logging to stdout: WARNING, or DEBUG when verbose."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format=LOG_FORMAT,
        handlers=[logging.StreamHandler(sys.stdout)],
    )


def set_main_window(window):
    """Window that error popups are parented to (None to stop popups)."""
    global _main_window
    _main_window = window


def loggerRaise(e: Exception, user_message: str = None, title: str = "Error"):
    """Report e, then re-raise it.

    From source the exception is raised untouched. In a frozen build the
    traceback is logged and, when a window is registered, user_message is
    shown in a critical message box first.
    """
    if DEBUG_MODE:
        raise e

    message = user_message or str(e)
    logger.error(message, exc_info=e)
    if _main_window is not None:
        QMessageBox.critical(_main_window, title, message)
    raise e
