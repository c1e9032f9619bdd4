"""Document preamble: version and include pragmas, global options, source.

Each function returns one document section; the orchestrator separates
sections with a blank line.
"""

from __future__ import annotations

from logroute.contracts.pipeline import GlobalOptions
from logroute.engine.syntax import INDENT, block, option, statement

CONFIG_VERSION = "3.37"
INCLUDE_LIBRARY = "scl.conf"
SOURCE_NAME = "main_input"
JSON_KEY_PREFIX = "json."

# stats_freq of 0 (or absent) means "unset" here, not "disabled"
DEFAULT_STATS_FREQ = 10


def render_version() -> str:
    return f"@version: {CONFIG_VERSION}\n"


def render_include() -> str:
    return f'@include "{INCLUDE_LIBRARY}"\n'


def render_options(options: GlobalOptions | None) -> str | None:
    """Render the global options block.

    Returns:
        The options block, or None when no option is declared
    """
    if options is None or options.is_empty:
        return None
    stats_freq = options.stats_freq or DEFAULT_STATS_FREQ
    lines = [
        line
        for line in (
            option("stats_level", options.stats_level),
            option("stats_freq", stats_freq),
        )
        if line
    ]
    return block("options", None, [statement(line) for line in lines])


def render_source(port: int) -> str:
    """Render the shared network source with its JSON parser."""
    inner = INDENT * 2
    lines = [
        f"{INDENT}channel {{",
        f"{inner}source {{",
        statement(f'network(flags("no-parse") port({port}) transport("tcp"))', depth=3),
        f"{inner}}};",
        f"{inner}parser {{",
        statement(f'json-parser(prefix("{JSON_KEY_PREFIX}"))', depth=3),
        f"{inner}}};",
        f"{INDENT}}};",
    ]
    return block("source", SOURCE_NAME, lines)


def render_preamble(options: GlobalOptions | None, port: int) -> list[str]:
    """All preamble sections, in document order."""
    sections = [render_version(), render_include()]
    options_block = render_options(options)
    if options_block is not None:
        sections.append(options_block)
    sections.append(render_source(port))
    return sections
