from __future__ import annotations

from pathlib import Path

import pytest

from moddev.config import (
    LaunchConfig,
    load_default_arguments,
    merge_default_arguments,
)
from moddev.mappings import (
    CSV_DIR,
    SRG_DIR,
    SRG_SRG_MCP,
    legacy_mapping_properties,
    parse_mapping_channel,
)
from moddev.models import ConfigError


def _write(path: Path, content: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content.strip() + "\n", encoding="utf-8")


def test_from_env_requires_main_class() -> None:
    with pytest.raises(ConfigError, match="mainClass"):
        LaunchConfig.from_env({})
    with pytest.raises(ConfigError, match="mainClass"):
        LaunchConfig.from_env({"mainClass": ""})


def test_from_env_reads_values_and_treats_empty_as_unset(tmp_path: Path) -> None:
    config = LaunchConfig.from_env(
        {
            "mainClass": "demo.Main",
            "nativesDirectory": "",
            "tweakClass": "demo.Tweaker",
            "MOD_CLASSES": f" {tmp_path / 'a'} ;;{tmp_path / 'classes'};",
            "MC_VERSION": "1.12.2",
            "MODDEV_SUMMARY": "Yes",
        }
    )
    assert config.main_class == "demo.Main"
    assert config.natives_directory is None
    assert config.tweak_class == "demo.Tweaker"
    assert config.mod_classes == (tmp_path / "a", tmp_path / "classes")
    assert config.mc_version == "1.12.2"
    assert config.defaults_file is None
    assert config.show_summary is True


def test_load_default_arguments_keeps_file_order(tmp_path: Path) -> None:
    defaults = tmp_path / "defaults.yaml"
    _write(
        defaults,
        """
arguments:
  username: Dev
  width: 854
  fullscreen: false
  password: null
""",
    )
    assert list(load_default_arguments(defaults).items()) == [
        ("username", "Dev"),
        ("width", "854"),
        ("fullscreen", "false"),
        ("password", None),
    ]


def test_merge_default_arguments_replaces_in_place_and_appends() -> None:
    merged = merge_default_arguments(
        {"version": "1.0", "username": None}, {"username": "Dev", "width": "854"}
    )
    assert list(merged.items()) == [
        ("version", "1.0"),
        ("username", "Dev"),
        ("width", "854"),
    ]


@pytest.mark.parametrize(
    "content, message",
    [
        ("- a\n- b", "root must be a mapping"),
        ("arguments: [a]", "'arguments' must be a mapping"),
        ("arguments:\n  --username: x", "must not start with"),
        ("arguments:\n  username: [x]", "must be a scalar"),
        ("arguments: {", "Invalid YAML"),
    ],
)
def test_load_default_arguments_rejects_invalid_files(
    tmp_path: Path, content: str, message: str
) -> None:
    defaults = tmp_path / "defaults.yaml"
    defaults.write_text(content, encoding="utf-8")
    with pytest.raises(ConfigError, match=message):
        load_default_arguments(defaults)


def test_load_default_arguments_missing_file(tmp_path: Path) -> None:
    with pytest.raises(ConfigError, match="not found"):
        load_default_arguments(tmp_path / "missing.yaml")


def test_parse_mapping_channel() -> None:
    assert parse_mapping_channel("snapshot_20180609-1.12") == (
        "mcp_snapshot",
        "20180609",
    )
    assert parse_mapping_channel("stable_39") == ("mcp_stable", "39")
    assert parse_mapping_channel("stable_39_x-1.12") == ("mcp_stable", "39")
    with pytest.raises(ValueError):
        parse_mapping_channel("snapshot")


def test_legacy_mapping_properties_layout(tmp_path: Path) -> None:
    config = LaunchConfig(
        main_class="demo.Main",
        mcp_mappings="snapshot_20180609-1.12",
        mc_version="1.12.2",
    )
    properties = legacy_mapping_properties(config, home=tmp_path)
    root = tmp_path / ".gradle/caches/minecraft/de/oceanlabs/mcp/mcp_snapshot/20180609"
    assert properties[SRG_DIR] == str((root / "srgs").resolve())
    assert properties[CSV_DIR] == str(root.resolve())
    assert properties[SRG_SRG_MCP] == str(
        (root / "1.12.2" / "srgs" / "srg-mcp.srg").resolve()
    )
    assert len(properties) == 7


def test_legacy_mapping_redirect_overrides_and_bad_value_is_logged(
    tmp_path: Path, caplog
) -> None:
    config = LaunchConfig(
        main_class="demo.Main",
        mcp_mappings="garbage",
        mcp_to_srg="/custom/srg-mcp.srg",
    )
    with caplog.at_level("INFO", logger="moddev.mappings"):
        properties = legacy_mapping_properties(config, home=tmp_path)
    assert properties == {SRG_SRG_MCP: "/custom/srg-mcp.srg"}
    assert "Malformed mapping value 'garbage'" in caplog.text
