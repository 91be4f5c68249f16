"""Merge several compiled-output directories into one canonical directory."""

from __future__ import annotations

import logging
import shutil
from pathlib import Path
from typing import Sequence

from moddev._logging import get_logger
from moddev.search_path import SearchPath, path_key

CANONICAL_DIR_NAME = "classes"


def choose_canonical_dir(dirs: Sequence[Path]) -> Path:
    """Pick the first directory literally named ``classes``, else the last one."""
    if not dirs:
        raise ValueError("choose_canonical_dir requires at least one directory")
    for directory in dirs:
        if directory.name == CANONICAL_DIR_NAME:
            return directory
    return dirs[-1]


def merge_tree(source: Path, base: Path) -> int:
    """Copy every descendant of *source* under *base*; returns files copied.

    Files with the same relative path are overwritten.
    """
    copied = 0
    for path in sorted(source.rglob("*")):
        target = base / path.relative_to(source)
        if path.is_dir():
            target.mkdir(parents=True, exist_ok=True)
        else:
            target.parent.mkdir(parents=True, exist_ok=True)
            shutil.copyfile(path, target)
            copied += 1
    return copied


def condense_directories(
    dirs: Sequence[str | Path],
    search_path: SearchPath,
    *,
    log: logging.Logger | None = None,
) -> Path | None:
    """Condense *dirs* into the canonical directory.

    Returns the canonical directory, or ``None`` when fewer than two
    directories were given. Filesystem errors stop the merge and are logged;
    they are never raised.
    """
    log = log or get_logger("condense")
    paths = [Path(item) for item in dirs]
    if len(paths) < 2:
        return None

    base = choose_canonical_dir(paths)
    base_key = path_key(base)
    log.debug("condense_start base=%s dirs=%d", base, len(paths))
    try:
        for directory in paths:
            if path_key(directory) == base_key:
                continue
            search_path.discard(directory)
            copied = merge_tree(directory, base)
            log.debug(
                "condense_merged source=%s base=%s files=%d", directory, base, copied
            )
    except OSError:
        log.info("Error when condensing mod output directories", exc_info=True)
    return base
