"""Development launcher for modded applications."""

from moddev.entrypoint import EntryPointRegistry
from moddev.launcher import ClientLauncher, Launcher, ServerLauncher

__all__ = ["ClientLauncher", "EntryPointRegistry", "Launcher", "ServerLauncher"]
