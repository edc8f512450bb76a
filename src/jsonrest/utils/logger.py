"""
Logging helpers

Modules log through ``logging.getLogger(__name__)``; the package logger
carries a NullHandler so nothing is printed unless the application, or a
client created with ``debug=True``, installs a handler.

Debug output is shared: every debug client acquires it on creation and
releases it on close. The handler is removed and the package logger level
reset once the last one is released.
"""

import logging
import sys
import threading
from typing import Optional, TextIO

PACKAGE_LOGGER = "jsonrest"

DEBUG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"

_debug_handler: Optional[logging.Handler] = None
_debug_users = 0
_lock = threading.Lock()


def enable_debug_output(stream: Optional[TextIO] = None) -> logging.Handler:
    """
    Send package diagnostics to stderr (or ``stream``) at DEBUG level

    Calling it again returns the already installed handler. Each call
    should be paired with release_debug_output.
    """
    global _debug_handler, _debug_users

    logger = logging.getLogger(PACKAGE_LOGGER)
    with _lock:
        if _debug_handler is None:
            _debug_handler = logging.StreamHandler(stream or sys.stderr)
            _debug_handler.setFormatter(logging.Formatter(DEBUG_FORMAT))
            _debug_handler.setLevel(logging.DEBUG)
            logger.addHandler(_debug_handler)
        _debug_users += 1
        logger.setLevel(logging.DEBUG)
        return _debug_handler


def _reset(logger: logging.Logger) -> None:
    global _debug_handler, _debug_users

    if _debug_handler is not None:
        logger.removeHandler(_debug_handler)
        _debug_handler = None
    _debug_users = 0
    logger.setLevel(logging.NOTSET)


def release_debug_output() -> None:
    """Drop one enable_debug_output call; the last one removes the handler"""
    global _debug_users

    with _lock:
        if _debug_users > 1:
            _debug_users -= 1
        else:
            _reset(logging.getLogger(PACKAGE_LOGGER))


def disable_debug_output() -> None:
    """Remove the handler installed by enable_debug_output right away"""
    with _lock:
        _reset(logging.getLogger(PACKAGE_LOGGER))
