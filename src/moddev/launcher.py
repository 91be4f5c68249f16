from __future__ import annotations

import logging
import os
import sys
from pathlib import Path
from typing import Mapping, MutableMapping, MutableSequence, Sequence

from moddev._logging import get_logger
from moddev.arguments import ArgumentAssembler
from moddev.condense import condense_directories
from moddev.config import LaunchConfig, load_default_arguments, merge_default_arguments
from moddev.entrypoint import EntryPointRegistry, invoke
from moddev.mappings import legacy_mapping_properties
from moddev.models import EntryPointRef, LaunchPlan, exit_code_for
from moddev.search_path import SearchPath


class Launcher:
    """Prepare the environment, then hand control to the configured entry point.

    Stages run strictly in order: read config, configure environment
    mappings, assemble arguments, condense output directories, resolve and
    invoke the entry point. A missing ``mainClass`` aborts before anything
    else happens.
    """

    name = "generic"

    def __init__(
        self,
        *,
        environ: MutableMapping[str, str] | None = None,
        registry: EntryPointRegistry | None = None,
        path_list: MutableSequence[str] | None = None,
        home: Path | None = None,
        log: logging.Logger | None = None,
    ):
        self.environ = os.environ if environ is None else environ
        self.log = log or get_logger("launcher")
        self.registry = registry or EntryPointRegistry(
            log=self.log.getChild("entrypoint")
        )
        self.path_list = sys.path if path_list is None else path_list
        self.home = home
        self.properties: dict[str, str] = {}
        self.config: LaunchConfig | None = None

    def getenv(self, name: str) -> str | None:
        value = self.environ.get(name)
        return value if value else None

    def default_arguments(self, config: LaunchConfig) -> dict[str, str | None]:
        return {}

    def handle_natives(self, path: str) -> None:
        pass

    def read_config(self) -> LaunchConfig:
        config = LaunchConfig.from_env(self.environ)
        self.log.info("Main Class: %s", config.main_class)
        self.config = config
        return config

    def configure_environment(self, config: LaunchConfig) -> dict[str, str]:
        if config.natives_directory:
            self.log.info("Natives: %s", config.natives_directory)
            self.handle_natives(config.natives_directory)
        self.properties = legacy_mapping_properties(
            config, home=self.home, log=self.log.getChild("mappings")
        )
        self.publish_properties(self.properties)
        return self.properties

    def resolve_defaults(self, config: LaunchConfig) -> dict[str, str | None]:
        defaults = self.default_arguments(config)
        if config.defaults_file is not None:
            defaults = merge_default_arguments(
                defaults, load_default_arguments(config.defaults_file)
            )
        return defaults

    def assemble_arguments(
        self, config: LaunchConfig, argv: Sequence[str]
    ) -> list[str]:
        assembler = ArgumentAssembler(
            self.resolve_defaults(config),
            tweak_class=config.tweak_class,
            log=self.log.getChild("arguments"),
        )
        return assembler.assemble(argv)

    def condense(self, config: LaunchConfig) -> tuple[SearchPath, Path | None]:
        search_path = SearchPath(
            config.mod_classes, log=self.log.getChild("search_path")
        )
        search_path.bind(self.path_list)
        base = condense_directories(
            config.mod_classes, search_path, log=self.log.getChild("condense")
        )
        search_path.refresh()
        return search_path, base

    def prepare(self, argv: Sequence[str]) -> LaunchPlan:
        config = self.read_config()
        properties = self.configure_environment(config)
        arguments = self.assemble_arguments(config, argv)
        search_path, base = self.condense(config)
        entry_point = self.registry.resolve(EntryPointRef(symbol=config.main_class))
        return LaunchPlan(
            entry_point=entry_point,
            arguments=tuple(arguments),
            canonical_dir=base,
            search_path=search_path.entries,
            properties=dict(properties),
        )

    def publish_properties(self, properties: Mapping[str, str]) -> None:
        for key, value in properties.items():
            self.environ[key] = value

    def invoke(self, plan: LaunchPlan) -> int:
        self.log.info("Invoking %s", plan.entry_point.ref.label)
        return exit_code_for(invoke(plan.entry_point, plan.arguments))

    def start(self, argv: Sequence[str]) -> int:
        return self.invoke(self.prepare(argv))


def _native_library_variable() -> str:
    if sys.platform.startswith("win"):
        return "PATH"
    if sys.platform == "darwin":
        return "DYLD_LIBRARY_PATH"
    return "LD_LIBRARY_PATH"


class ClientLauncher(Launcher):
    name = "client"

    def default_arguments(self, config: LaunchConfig) -> dict[str, str | None]:
        return {
            "version": config.mc_version,
            "assetIndex": config.asset_index,
            "assetsDir": config.assets_dir,
            "accessToken": "FML",
            "userProperties": "{}",
            "username": None,
            "password": None,
        }

    def handle_natives(self, path: str) -> None:
        variable = _native_library_variable()
        current = self.getenv(variable)
        entries = [path]
        if current:
            entries.extend(item for item in current.split(os.pathsep) if item != path)
        self.environ[variable] = os.pathsep.join(entries)


class ServerLauncher(Launcher):
    name = "server"


LAUNCHERS: dict[str, type[Launcher]] = {
    cls.name: cls for cls in (Launcher, ClientLauncher, ServerLauncher)
}
