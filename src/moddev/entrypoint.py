"""Entry-point resolution and dispatch.

Symbols are resolved at invocation time, in this order: names registered on
the :class:`EntryPointRegistry`, installed plugins published under the
``moddev.entry_points`` group, and finally a dynamic import of the symbol.
"""

from __future__ import annotations

import importlib
import inspect
import logging
import types
from importlib import metadata
from typing import Callable, Sequence

from moddev._logging import get_logger
from moddev.models import (
    EntryPointCallable,
    EntryPointNotFoundError,
    EntryPointRef,
    ResolvedEntryPoint,
)

PLUGIN_GROUP = "moddev.entry_points"


def _import_module(name: str) -> types.ModuleType | None:
    try:
        return importlib.import_module(name)
    except ModuleNotFoundError as exc:
        # Only swallow the miss for this module (or a parent package); a
        # missing dependency inside the module is a real failure.
        missing = exc.name
        if missing is not None and (name == missing or name.startswith(missing + ".")):
            return None
        raise


def _walk_attributes(symbol: str, obj: object, path: Sequence[str]) -> object:
    for part in path:
        try:
            obj = getattr(obj, part)
        except AttributeError:
            raise EntryPointNotFoundError(
                symbol, f"no attribute '{part}' on {obj!r}"
            ) from None
    return obj


def import_symbol(symbol: str) -> object:
    """Import ``pkg.mod``, ``pkg.mod.Attr`` or ``pkg.mod:attr.path``."""
    text = symbol.strip()
    if not text:
        raise EntryPointNotFoundError(symbol, "empty symbol name")

    if ":" in text:
        module_name, _, attr_path = text.partition(":")
        module = _import_module(module_name)
        if module is None:
            raise EntryPointNotFoundError(symbol, f"no module named '{module_name}'")
        return _walk_attributes(symbol, module, [p for p in attr_path.split(".") if p])

    parts = text.split(".")
    for split in range(len(parts), 0, -1):
        module = _import_module(".".join(parts[:split]))
        if module is not None:
            return _walk_attributes(symbol, module, parts[split:])
    raise EntryPointNotFoundError(symbol, f"no module named '{parts[0]}'")


def _accepts_single_argument(func: Callable[..., object]) -> bool:
    try:
        signature = inspect.signature(func)
    except (TypeError, ValueError):
        return True
    try:
        signature.bind([])
    except TypeError:
        return False
    return True


def locate_main(ref: EntryPointRef, target: object) -> EntryPointCallable:
    if isinstance(target, (type, types.ModuleType)):
        func = getattr(target, ref.method, None)
        if func is None:
            raise EntryPointNotFoundError(
                ref.symbol, f"no callable '{ref.method}' on {target!r}"
            )
    else:
        func = target
    if not callable(func):
        raise EntryPointNotFoundError(
            ref.symbol, f"'{ref.method}' on {target!r} is not callable"
        )
    if not _accepts_single_argument(func):
        raise EntryPointNotFoundError(
            ref.symbol, f"'{ref.method}' does not accept a single argument list"
        )
    return func


class EntryPointRegistry:
    def __init__(
        self,
        *,
        plugin_group: str | None = PLUGIN_GROUP,
        log: logging.Logger | None = None,
    ):
        self._entries: dict[str, object] = {}
        self.plugin_group = plugin_group
        self.log = log or get_logger("entrypoint")

    def __contains__(self, name: object) -> bool:
        return name in self._entries

    def register(self, name: str, target: object | None = None):
        """Register *target* under *name*; usable as a decorator."""
        if target is None:

            def _decorator(obj: object) -> object:
                self._entries[name] = obj
                return obj

            return _decorator
        self._entries[name] = target
        return target

    def _plugin(self, name: str) -> object | None:
        if not self.plugin_group:
            return None
        for entry in metadata.entry_points(group=self.plugin_group):
            if entry.name == name:
                return entry.load()
        return None

    def resolve(self, ref: EntryPointRef | str) -> ResolvedEntryPoint:
        if isinstance(ref, str):
            ref = EntryPointRef(symbol=ref)
        if ref.symbol in self._entries:
            target, source = self._entries[ref.symbol], "registry"
        else:
            target = self._plugin(ref.symbol)
            source = "plugin"
            if target is None:
                target, source = import_symbol(ref.symbol), "import"
        func = locate_main(ref, target)
        self.log.debug("entry_point_resolved symbol=%s source=%s", ref.symbol, source)
        return ResolvedEntryPoint(ref=ref, target=target, func=func, source=source)


def invoke(entry_point: ResolvedEntryPoint, arguments: Sequence[str]) -> object:
    """Call the entry point synchronously; its exceptions propagate."""
    return entry_point.func(list(arguments))
