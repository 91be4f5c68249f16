#!/usr/bin/env python3
"""Stand-in application entry point for trying the launcher by hand.

    mainClass=dummy_mod_app MOD_CLASSES="build/a/out;build/b/classes" \
        PYTHONPATH=examples/common moddev-client --username dev extra

Prints the ``--name value`` pairs it received as JSON and the positional
extras separately. ``DUMMY_EXIT_CODE`` selects the returned exit code.
"""

from __future__ import annotations

import json
import os
import sys
from typing import Any


def _split_arguments(argv: list[str]) -> tuple[dict[str, Any], list[str]]:
    options: dict[str, Any] = {}
    positionals: list[str] = []
    index = 0
    while index < len(argv):
        token = argv[index]
        index += 1
        if token.startswith("--") and index < len(argv):
            options[token[2:]] = argv[index]
            index += 1
            continue
        positionals.append(token)
    return options, positionals


def main(argv: list[str]) -> int:
    options, positionals = _split_arguments(argv)
    options.pop("accessToken", None)
    options.pop("password", None)
    print("RESOLVED_OPTIONS_JSON=" + json.dumps(options, sort_keys=True))
    if positionals:
        print("POSITIONAL_ARGS_JSON=" + json.dumps(positionals))
    return int(os.environ.get("DUMMY_EXIT_CODE", "0"))


if __name__ == "__main__":
    raise SystemExit(main(sys.argv[1:]))
