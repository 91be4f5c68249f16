"""Legacy mapping properties consumed by the external deobfuscation tooling."""

from __future__ import annotations

import logging
from pathlib import Path

from moddev._logging import get_logger
from moddev.config import LaunchConfig

PROPERTY_PREFIX = "net.minecraftforge.gradle.GradleStart."
SRG_DIR = PROPERTY_PREFIX + "srgDir"
CSV_DIR = PROPERTY_PREFIX + "csvDir"
SRG_SRG_MCP = PROPERTY_PREFIX + "srg.srg-mcp"
_SRG_FILES = ("notch-srg", "notch-mcp", "srg-mcp", "mcp-srg", "mcp-notch")


def parse_mapping_channel(value: str) -> tuple[str, str]:
    """Split ``snapshot_20180609-1.12`` into ``("mcp_snapshot", "20180609")``."""
    channel, sep, rest = value.partition("_")
    if not sep or not channel or not rest:
        raise ValueError(f"Malformed mapping value '{value}'")
    mapping_id = rest.split("_")[0].split("-")[0]
    if not mapping_id:
        raise ValueError(f"Malformed mapping value '{value}'")
    return f"mcp_{channel}", mapping_id


def mapping_cache_root(home: Path, channel: str, mapping_id: str) -> Path:
    return (
        home / ".gradle" / "caches" / "minecraft" / "de" / "oceanlabs" / "mcp"
        / channel / mapping_id
    )


def legacy_mapping_properties(
    config: LaunchConfig,
    *,
    home: Path | None = None,
    log: logging.Logger | None = None,
) -> dict[str, str]:
    log = log or get_logger("mappings")
    properties: dict[str, str] = {}

    if config.mcp_mappings:
        try:
            channel, mapping_id = parse_mapping_channel(config.mcp_mappings)
        except ValueError as exc:
            log.info("Skipping legacy mapping setup: %s", exc)
        else:
            root = mapping_cache_root(home or Path.home(), channel, mapping_id)
            properties[SRG_DIR] = str((root / "srgs").resolve())
            if config.mc_version:
                srgs = root / config.mc_version / "srgs"
                for name in _SRG_FILES:
                    key = f"{PROPERTY_PREFIX}srg.{name}"
                    properties[key] = str((srgs / f"{name}.srg").resolve())
            properties[CSV_DIR] = str(root.resolve())

    if config.mcp_to_srg:
        log.info("Srg2Mcp: %s", config.mcp_to_srg)
        properties[SRG_SRG_MCP] = config.mcp_to_srg
    return properties
