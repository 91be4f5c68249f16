"""Logging handle for one launch.

``setup_logging`` builds the ``moddev`` logger and returns it; the CLI hands
that logger to the launcher, which passes a child of it to each component.
"""

from __future__ import annotations

import logging
import os
import sys
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Mapping

ROOT_LOGGER = "moddev"
_FORMAT = "ts=%(asctime)s level=%(levelname)s logger=%(name)s msg=%(message)s"


class _StderrHandler(logging.StreamHandler):
    """Stream handler that writes to the current ``sys.stderr``."""

    def __init__(self) -> None:
        super().__init__(sys.stderr)

    def emit(self, record: logging.LogRecord) -> None:
        self.stream = sys.stderr
        super().emit(record)


class _LaunchFileHandler(logging.FileHandler):
    pass


@dataclass(frozen=True)
class LogSettings:
    level: int = logging.INFO
    file_path: Path | None = None

    @property
    def file_level(self) -> int:
        # The log file always keeps the launch stages, even when stderr is quiet.
        return min(self.level, logging.INFO)

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "LogSettings":
        env = os.environ if environ is None else environ
        level_name = env.get("MODDEV_LOG_LEVEL", "").strip().upper()
        level = logging.getLevelName(level_name) if level_name else logging.INFO
        if not isinstance(level, int):
            level = logging.INFO
        file_raw = env.get("MODDEV_LOG_FILE", "").strip()
        file_path = Path(file_raw).expanduser().resolve() if file_raw else None
        return cls(level=level, file_path=file_path)


def get_logger(name: str) -> logging.Logger:
    """Return a child logger under the ``moddev`` namespace."""
    return logging.getLogger(f"{ROOT_LOGGER}.{name}")


def _drop_launch_handlers(root: logging.Logger) -> None:
    for handler in list(root.handlers):
        if isinstance(handler, (_StderrHandler, _LaunchFileHandler)):
            root.removeHandler(handler)
            handler.close()


def setup_logging(
    *,
    level: int | None = None,
    environ: Mapping[str, str] | None = None,
) -> logging.Logger:
    """Configure and return the ``moddev`` logger for this launch.

    *level* overrides ``MODDEV_LOG_LEVEL`` (default INFO). When
    ``MODDEV_LOG_FILE`` is set, records are also appended to that file.
    Calling this again replaces the handlers from the previous call.
    """
    settings = LogSettings.from_env(environ)
    if level is not None:
        settings = replace(settings, level=level)

    root = logging.getLogger(ROOT_LOGGER)
    _drop_launch_handlers(root)
    formatter = logging.Formatter(_FORMAT)

    stderr_handler = _StderrHandler()
    stderr_handler.setFormatter(formatter)
    stderr_handler.setLevel(settings.level)
    root.addHandler(stderr_handler)
    effective_level = settings.level

    if settings.file_path is not None:
        settings.file_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = _LaunchFileHandler(settings.file_path, encoding="utf-8")
        file_handler.setFormatter(formatter)
        file_handler.setLevel(settings.file_level)
        root.addHandler(file_handler)
        effective_level = min(effective_level, settings.file_level)

    root.setLevel(effective_level)
    return root
