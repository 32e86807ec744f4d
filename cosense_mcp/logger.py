"""
Server logging — files only, NEVER stdout (would corrupt MCP protocol)

Every module logs through a child of the "cosense" logger. The handlers
hang off that parent and are installed once at startup by
configure_logging(), using the directory and level from CosenseSettings.
Records emitted before that (or in tests that never configure) are dropped.
"""

import logging
import os
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Union

ROOT_LOGGER = "cosense"
LOG_FILE_NAME = "cosense-mcp.log"
ERROR_LOG_NAME = "cosense-mcp-errors.log"

_FORMAT = "%(asctime)s %(levelname)-5s [%(name)s] %(message)s"
_MAX_BYTES = 10 * 1024 * 1024
_BACKUP_COUNT = 3

_root = logging.getLogger(ROOT_LOGGER)
_root.addHandler(logging.NullHandler())
_root.propagate = False  # the root logger might have stdout handlers


def _rotating_file(path: Path, level: int) -> RotatingFileHandler:
    # Titles and keywords may hold lone surrogates; escape rather than drop
    handler = RotatingFileHandler(
        path,
        maxBytes=_MAX_BYTES,
        backupCount=_BACKUP_COUNT,
        encoding="utf-8",
        errors="backslashreplace",
    )
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
    # Log lines carry page titles and search keywords
    os.chmod(path, 0o600)
    return handler


def configure_logging(log_dir: Union[str, Path], level: str = "INFO") -> logging.Logger:
    """
    Send all server logging to ``log_dir``.

    Writes everything at ``level`` and above to cosense-mcp.log, and
    errors again to cosense-mcp-errors.log. Calling it a second time
    replaces the previous handlers.
    """
    log_dir = Path(log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)

    for handler in list(_root.handlers):
        _root.removeHandler(handler)
        handler.close()

    _root.setLevel(level)
    _root.addHandler(_rotating_file(log_dir / LOG_FILE_NAME, logging.DEBUG))
    _root.addHandler(_rotating_file(log_dir / ERROR_LOG_NAME, logging.ERROR))
    return _root


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(f"{ROOT_LOGGER}.{name}")
