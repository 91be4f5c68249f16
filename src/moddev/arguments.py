"""Forwarded argument assembly.

The launcher owns no options of its own: every token on the command line is
either an override for one of the recognized default arguments or an extra
that is passed through to the entry point untouched.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable, Mapping, Sequence

from moddev._logging import get_logger

REDACTED = "{REDACTED}"
SENSITIVE_KEYS = frozenset({"accesstoken", "password"})
TWEAK_CLASS_FLAG = "tweakClass"


@dataclass
class ParsedArguments:
    values: dict[str, str | None]
    extras: list[str] = field(default_factory=list)
    overridden: list[str] = field(default_factory=list)


def _is_sensitive(key: str) -> bool:
    return key.lower() in SENSITIVE_KEYS


def parse_cli(
    defaults: Mapping[str, str | None], tokens: Sequence[str]
) -> ParsedArguments:
    """Bind ``--name value`` / ``--name=value`` for recognized names.

    Unrecognized options and their values, a recognized flag with no value
    left, and everything after a bare ``--`` become positional extras.
    """
    values: dict[str, str | None] = dict(defaults)
    extras: list[str] = []
    overridden: list[str] = []

    index = 0
    count = len(tokens)
    while index < count:
        token = str(tokens[index])
        index += 1
        if token == "--":
            extras.extend(str(item) for item in tokens[index:])
            break
        if not token.startswith("--") or len(token) == 2:
            extras.append(token)
            continue

        name, has_inline, inline_value = token[2:].partition("=")
        if name not in values:
            extras.append(token)
            continue
        if has_inline:
            value = inline_value
        elif index < count:
            value = str(tokens[index])
            index += 1
        else:
            extras.append(token)
            continue

        values[name] = value
        if name not in overridden:
            overridden.append(name)

    return ParsedArguments(values=values, extras=extras, overridden=overridden)


def build_argument_list(
    values: Mapping[str, str | None],
    extras: Iterable[str],
    *,
    tweak_class: str | None = None,
) -> list[str]:
    out: list[str] = []
    for key, value in values.items():
        if value:
            out.extend((f"--{key}", value))
    if tweak_class:
        out.extend((f"--{TWEAK_CLASS_FLAG}", tweak_class))
    out.extend(extras)
    return out


def render_for_log(arguments: Sequence[str]) -> str:
    """Render *arguments* as ``[a, b, c]`` with secret values replaced."""
    rendered: list[str] = []
    index = 0
    while index < len(arguments):
        token = arguments[index]
        index += 1
        if token.startswith("--"):
            name, has_inline, _ = token[2:].partition("=")
            if _is_sensitive(name):
                if has_inline:
                    rendered.append(f"--{name}={REDACTED}")
                    continue
                rendered.append(token)
                if index < len(arguments):
                    rendered.append(REDACTED)
                    index += 1
                continue
        rendered.append(token)
    return "[" + ", ".join(rendered) + "]"


class ArgumentAssembler:
    def __init__(
        self,
        defaults: Mapping[str, str | None],
        *,
        tweak_class: str | None = None,
        log: logging.Logger | None = None,
    ):
        self.defaults = dict(defaults)
        self.tweak_class = tweak_class
        self.log = log or get_logger("arguments")

    def assemble(self, tokens: Sequence[str]) -> list[str]:
        parsed = parse_cli(self.defaults, tokens)
        for key in parsed.overridden:
            if not _is_sensitive(key):
                self.log.info("%s: %s", key, parsed.values[key])
        self.log.info("Extra: %s", render_for_log(parsed.extras))
        arguments = build_argument_list(
            parsed.values, parsed.extras, tweak_class=self.tweak_class
        )
        self.log.info("Running with arguments: %s", render_for_log(arguments))
        return arguments
