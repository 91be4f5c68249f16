from __future__ import annotations

import importlib
import logging
import os
import sys
from pathlib import Path
from typing import Iterable, Iterator, MutableSequence

from moddev._logging import get_logger


def path_key(path: str | Path) -> str:
    return os.path.normcase(os.path.abspath(os.fspath(path)))


def _insert_into(target: MutableSequence[str], entry: Path, *, position: int) -> None:
    wanted = path_key(entry)
    if any(path_key(item) == wanted for item in target):
        return
    target.insert(min(position, len(target)), str(entry))


class SearchPath:
    """Ordered set of directories the import system consults.

    A search path may be bound to a live path list (normally ``sys.path``);
    entries discarded afterwards disappear from that list too.
    """

    def __init__(
        self,
        entries: Iterable[str | Path] = (),
        *,
        log: logging.Logger | None = None,
    ):
        self._entries: list[Path] = []
        self._target: MutableSequence[str] | None = None
        self.log = log or get_logger("search_path")
        for entry in entries:
            self.add(entry)

    def __iter__(self) -> Iterator[Path]:
        return iter(list(self._entries))

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, path: object) -> bool:
        if not isinstance(path, (str, Path)):
            return False
        wanted = path_key(path)
        return any(path_key(entry) == wanted for entry in self._entries)

    @property
    def entries(self) -> tuple[Path, ...]:
        return tuple(self._entries)

    @property
    def bound(self) -> bool:
        return self._target is not None

    def add(self, path: str | Path) -> bool:
        candidate = Path(path)
        if candidate in self:
            return False
        self._entries.append(candidate)
        if self._target is not None:
            _insert_into(self._target, candidate, position=len(self._entries) - 1)
        return True

    def discard(self, path: str | Path) -> bool:
        wanted = path_key(path)
        kept = [entry for entry in self._entries if path_key(entry) != wanted]
        removed = len(kept) != len(self._entries)
        self._entries = kept
        if self._target is not None:
            stale = [item for item in self._target if path_key(item) == wanted]
            for item in stale:
                self._target.remove(item)
                sys.path_importer_cache.pop(item, None)
            removed = removed or bool(stale)
        if removed:
            self.log.debug("search_path_discard path=%s", path)
        return removed

    def bind(self, target: MutableSequence[str] | None = None) -> None:
        """Insert every entry at the front of *target*, keeping their order."""
        live = sys.path if target is None else target
        self._target = live
        for position, entry in enumerate(self._entries):
            _insert_into(live, entry, position=position)

    def refresh(self) -> None:
        importlib.invalidate_caches()
