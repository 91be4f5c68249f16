from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping

import yaml

from moddev.models import ConfigError, split_paths

DEFAULTS_FILE_ENV = "MODDEV_DEFAULTS_FILE"
_TRUTHY = {"1", "true", "yes", "on"}


def getenv(environ: Mapping[str, str], name: str) -> str | None:
    value = environ.get(name)
    return value if value else None


def env_flag(environ: Mapping[str, str], name: str) -> bool:
    value = getenv(environ, name)
    return value is not None and value.strip().lower() in _TRUTHY


@dataclass(frozen=True)
class LaunchConfig:
    main_class: str
    natives_directory: str | None = None
    mcp_mappings: str | None = None
    mc_version: str | None = None
    mcp_to_srg: str | None = None
    tweak_class: str | None = None
    mod_classes: tuple[Path, ...] = ()
    asset_index: str | None = None
    assets_dir: str | None = None
    defaults_file: Path | None = None
    show_summary: bool = False

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "LaunchConfig":
        env = os.environ if environ is None else environ
        main_class = getenv(env, "mainClass")
        if main_class is None:
            raise ConfigError("Must specify mainClass environment variable")
        defaults_file = getenv(env, DEFAULTS_FILE_ENV)
        return cls(
            main_class=main_class,
            natives_directory=getenv(env, "nativesDirectory"),
            mcp_mappings=getenv(env, "MCP_MAPPINGS"),
            mc_version=getenv(env, "MC_VERSION"),
            mcp_to_srg=getenv(env, "MCP_TO_SRG"),
            tweak_class=getenv(env, "tweakClass"),
            mod_classes=tuple(split_paths(getenv(env, "MOD_CLASSES"))),
            asset_index=getenv(env, "assetIndex"),
            assets_dir=getenv(env, "assetDirectory"),
            defaults_file=(
                Path(defaults_file).expanduser().resolve() if defaults_file else None
            ),
            show_summary=env_flag(env, "MODDEV_SUMMARY"),
        )


def _render_value(value: Any, *, label: str) -> str | None:
    if value is None:
        return None
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (str, int, float)):
        return str(value)
    raise ConfigError(f"{label} must be a scalar or null")


def load_default_arguments(path: str | Path) -> dict[str, str | None]:
    """Read the ``arguments`` mapping of a defaults YAML file, in file order."""
    resolved_path = Path(path).expanduser().resolve()
    if not resolved_path.exists():
        raise ConfigError(f"Defaults file not found: {resolved_path}")

    try:
        loaded = yaml.safe_load(resolved_path.read_text(encoding="utf-8"))
    except yaml.YAMLError as exc:
        raise ConfigError(
            f"Invalid YAML in defaults file {resolved_path}: {exc}"
        ) from exc
    if loaded is None:
        loaded = {}
    if not isinstance(loaded, dict):
        raise ConfigError(f"Defaults file root must be a mapping: {resolved_path}")

    raw_arguments = loaded.get("arguments", {})
    if raw_arguments is None:
        raw_arguments = {}
    if not isinstance(raw_arguments, dict):
        raise ConfigError(f"'arguments' must be a mapping in {resolved_path}")

    parsed: dict[str, str | None] = {}
    for name, value in raw_arguments.items():
        if not isinstance(name, str) or not name.strip():
            raise ConfigError(
                f"Argument names must be non-empty strings: {resolved_path}"
            )
        trimmed = name.strip()
        if trimmed.startswith("-"):
            raise ConfigError(
                f"Argument name '{trimmed}' must not start with '-': {resolved_path}"
            )
        parsed[trimmed] = _render_value(value, label=f"arguments.{trimmed}")
    return parsed


def merge_default_arguments(
    base: Mapping[str, str | None], overrides: Mapping[str, str | None]
) -> dict[str, str | None]:
    merged = dict(base)
    merged.update(overrides)
    return merged
