from __future__ import annotations

import sys
import time
from typing import Sequence

from rich.console import Console
from rich.table import Table

from moddev._logging import setup_logging
from moddev.arguments import render_for_log
from moddev.launcher import LAUNCHERS, Launcher
from moddev.models import ConfigError, EntryPointNotFoundError, LaunchPlan


def _console() -> Console:
    return Console(stderr=True, highlight=False, markup=False)


def _render_launch_summary(launcher: Launcher, plan: LaunchPlan) -> None:
    table = Table(title="Launch Summary", show_header=False)
    table.add_column("Field", style="bold cyan")
    table.add_column("Value")
    table.add_row("Launcher", launcher.name)
    table.add_row("Entry Point", plan.entry_point.ref.label)
    table.add_row("Resolved Via", plan.entry_point.source)
    table.add_row(
        "Canonical Dir", "-" if plan.canonical_dir is None else str(plan.canonical_dir)
    )
    table.add_row(
        "Search Path", "\n".join(str(entry) for entry in plan.search_path) or "-"
    )
    table.add_row("Properties", str(len(plan.properties)))
    table.add_row("Arguments", render_for_log(plan.arguments))
    _console().print(table)


def run(launcher_name: str, argv: Sequence[str] | None = None) -> int:
    log = setup_logging()
    cli_log = log.getChild("cli")
    raw_argv = list(argv) if argv is not None else sys.argv[1:]
    launcher = LAUNCHERS[launcher_name](log=log.getChild("launcher"))
    started = time.perf_counter()
    cli_log.info("cli_launch_start launcher=%s argc=%d", launcher_name, len(raw_argv))

    plan: LaunchPlan | None = None
    exit_code = 1
    try:
        plan = launcher.prepare(raw_argv)
    except ConfigError as exc:
        cli_log.error(
            "cli_launch_error launcher=%s kind=config error=%s", launcher_name, exc
        )
        print(f"[config error] {exc}", file=sys.stderr)
        exit_code = 2
    except EntryPointNotFoundError as exc:
        cli_log.error(
            "cli_launch_error launcher=%s kind=entry_point error=%s", launcher_name, exc
        )
        print(f"[entry point error] {exc}", file=sys.stderr)
        exit_code = 1
    except KeyboardInterrupt:
        cli_log.error("cli_launch_error launcher=%s kind=interrupted", launcher_name)
        print("\n[interrupted]", file=sys.stderr)
        exit_code = 130
    finally:
        cli_log.info(
            "cli_launch_prepared launcher=%s ok=%s duration_sec=%.3f",
            launcher_name,
            plan is not None,
            time.perf_counter() - started,
        )

    if plan is None:
        return exit_code

    if launcher.config is not None and launcher.config.show_summary:
        _render_launch_summary(launcher, plan)
    # Entry-point failures are not caught: they end the process as-is.
    exit_code = launcher.invoke(plan)
    cli_log.info(
        "cli_launch_end launcher=%s exit_code=%s duration_sec=%.3f",
        launcher_name,
        exit_code,
        time.perf_counter() - started,
    )
    return exit_code


def main(argv: Sequence[str] | None = None) -> int:
    return run("generic", argv)


def main_client(argv: Sequence[str] | None = None) -> int:
    return run("client", argv)


def main_server(argv: Sequence[str] | None = None) -> int:
    return run("server", argv)


if __name__ == "__main__":
    raise SystemExit(main())
