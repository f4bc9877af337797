"""
Centralized logging configuration for nook-sitemap
统一日志配置模块

Console output goes to stdout by default. Commands that print a document to
stdout switch the console to stderr with ``console_to("stderr")`` for the
duration of the command.
"""
from __future__ import annotations

import logging
import sys
from contextlib import contextmanager
from typing import Iterator, Optional

PACKAGE_LOGGER = "nook_sitemap"


class ConsoleHandler(logging.StreamHandler):
    """StreamHandler bound to ``sys.stdout``/``sys.stderr`` by name.

    The stream is looked up on every emit, so replacing ``sys.stdout`` (test
    capture, redirection) is picked up.
    """

    def __init__(self, target: str = "stdout"):
        super().__init__()
        self.target = target

    @property
    def stream(self):
        return getattr(sys, self.target)

    @stream.setter
    def stream(self, value):
        # StreamHandler.__init__ assigns a stream; the target name wins
        pass


_logger: Optional[logging.Logger] = None
_console: Optional[ConsoleHandler] = None


def _configure_root() -> logging.Logger:
    global _logger, _console

    if _logger is None:
        _logger = logging.getLogger(PACKAGE_LOGGER)
        _logger.setLevel(logging.INFO)

        _console = ConsoleHandler("stdout")
        _console.setLevel(logging.INFO)
        # Format: [LEVEL] message
        _console.setFormatter(logging.Formatter("[%(levelname)s] %(message)s"))
        _logger.addHandler(_console)

    return _logger


def get_logger(name: str = PACKAGE_LOGGER) -> logging.Logger:
    """
    Get a logger under the package namespace.

    Module loggers (``nook_sitemap.sitemap`` etc.) propagate to the package
    logger, which owns the only console handler.
    """
    root = _configure_root()
    if name == PACKAGE_LOGGER:
        return root
    return logging.getLogger(name)


def set_log_level(level: int | str) -> None:
    """
    Set the package log level.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
               or integer level
    """
    logger = _configure_root()
    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.INFO)
    logger.setLevel(level)
    for handler in logger.handlers:
        handler.setLevel(level)


@contextmanager
def console_to(target: str) -> Iterator[None]:
    """Temporarily send console log output to ``target`` ("stdout" or "stderr")."""
    if target not in ("stdout", "stderr"):
        raise ValueError(f"Unknown console target: {target!r}")
    _configure_root()
    previous = _console.target
    _console.target = target
    try:
        yield
    finally:
        _console.target = previous
