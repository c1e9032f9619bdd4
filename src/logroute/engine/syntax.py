"""syslog-ng configuration syntax primitives.

Small string builders shared by every renderer. Values are embedded
verbatim: strings are wrapped in double quotes with no escaping, booleans
become yes/no, integers are written bare. Absent (None) options render as
nothing so callers can pass every optional field unconditionally.

    option("port", 601)                  -> port(601)
    option("transport", "tcp")           -> transport("tcp")
    option("flags", ["a", "b"])          -> flags("a" "b")
    option("reliable", True)             -> reliable(yes)
    option("template", None)             -> ""
    call("syslog", '"host"', "", "x(1)") -> syslog("host" x(1))
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence

INDENT = "    "


class Raw(str):
    """A value emitted without quoting (e.g. value-pairs selectors)."""


def quote(text: str) -> str:
    return f'"{text}"'


def literal(value: bool | int | str | Sequence[str]) -> str:
    """Render a single option value."""
    # bool before int: bool is an int subclass
    if isinstance(value, bool):
        return "yes" if value else "no"
    if isinstance(value, int):
        return str(value)
    if isinstance(value, Raw):
        return str(value)
    if isinstance(value, str):
        return quote(value)
    return " ".join(quote(item) for item in value)


def option(name: str, value: bool | int | str | Sequence[str] | None) -> str:
    """Render ``name(value)``, or "" when the value is absent.

    Empty lists count as absent.
    """
    if value is None:
        return ""
    if isinstance(value, (list, tuple)) and not value:
        return ""
    return f"{name}({literal(value)})"


def call(name: str, *args: str) -> str:
    """Render ``name(arg1 arg2 ...)`` skipping empty arguments."""
    return f"{name}({' '.join(arg for arg in args if arg)})"


def nested(name: str, *args: str) -> str:
    """Render a sub-option group, or "" when every argument is empty."""
    if not any(args):
        return ""
    return call(name, *args)


def statement(text: str, depth: int = 1) -> str:
    """One indented statement line terminated by ';'."""
    return f"{INDENT * depth}{text};"


def block(keyword: str, identifier: str | None, lines: Iterable[str]) -> str:
    """Render a top-level block with its already-indented body lines.

    Returns:
        ``keyword "identifier" {`` ... ``};`` with a trailing newline, or an
        anonymous ``keyword {`` ... ``};`` when identifier is None.
    """
    header = f'{keyword} "{identifier}" {{' if identifier is not None else f"{keyword} {{"
    return "\n".join([header, *lines, "};"]) + "\n"
