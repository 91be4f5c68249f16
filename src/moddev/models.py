from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Callable

EntryPointCallable = Callable[[list[str]], object]


class LauncherError(RuntimeError):
    """Base error for launcher failures."""


class ConfigError(LauncherError):
    """Raised when launch configuration is missing or invalid."""


class EntryPointNotFoundError(LauncherError):
    """Raised when an entry-point symbol or its ``main`` cannot be resolved."""

    def __init__(self, symbol: str, reason: str):
        super().__init__(f"Entry point '{symbol}' not found: {reason}")
        self.symbol = symbol
        self.reason = reason


@dataclass(frozen=True)
class EntryPointRef:
    symbol: str
    method: str = "main"

    @property
    def label(self) -> str:
        return f"{self.symbol}#{self.method}"


@dataclass(frozen=True)
class ResolvedEntryPoint:
    ref: EntryPointRef
    target: object
    func: EntryPointCallable
    source: str  # registry | plugin | import


@dataclass(frozen=True)
class LaunchPlan:
    entry_point: ResolvedEntryPoint
    arguments: tuple[str, ...]
    canonical_dir: Path | None
    search_path: tuple[Path, ...]
    properties: dict[str, str]


def exit_code_for(result: object) -> int:
    if result is None:
        return 0
    if isinstance(result, bool):
        return int(result)
    if isinstance(result, int):
        return result
    return 1


def split_paths(raw: str | None, sep: str = ";") -> list[Path]:
    if not raw:
        return []
    return [Path(part.strip()) for part in raw.split(sep) if part.strip()]
