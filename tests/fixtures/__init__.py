# tests/fixtures/__init__.py
"""Shared test data for logroute tests.

Available helpers:
- PREAMBLE: Document preamble rendered over port 601
- syslog_output / flow / regexp: Terse resource builders
"""

from tests.fixtures.documents import PREAMBLE, flow, regexp, syslog_output

__all__ = [
    "PREAMBLE",
    "flow",
    "regexp",
    "syslog_output",
]
