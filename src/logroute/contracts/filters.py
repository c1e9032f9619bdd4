"""Filter chain models.

A flow's filter chain is an ordered list of filters. Each filter carries an
optional user-supplied ``id`` and exactly one operation, selected by key:

    - id: remove message          # optional; defaults to list position
      rewrite:
        - unset: {field: MESSAGE}
    - parser:
        regexp:
          patterns: [".*test_field -> (?<test_field>.*)$"]
          prefix: .regexp.
    - match:
        regexp: {pattern: nginx, value: kubernetes.labels.app}

Filters execute sequentially in the daemon, so declaration order is kept.
"""

from __future__ import annotations

from pydantic import Field

from logroute.contracts.base import ResourceModel
from logroute.contracts.conditions import ConditionExpr

# =============================================================================
# Rewrite rules
# =============================================================================


class SetConfig(ResourceModel):
    """Set a field to a fixed value."""

    field: str
    value: str
    condition: ConditionExpr | None = None


class UnsetConfig(ResourceModel):
    """Remove a field."""

    field: str
    condition: ConditionExpr | None = None


class RenameConfig(ResourceModel):
    """Rename a field."""

    old_field: str = Field(alias="oldFieldName")
    new_field: str = Field(alias="newFieldName")
    condition: ConditionExpr | None = None


class SubstConfig(ResourceModel):
    """Substitute a pattern inside a field."""

    pattern: str
    replace: str
    field: str
    flags: list[str] = Field(default_factory=list)
    type: str | None = None
    condition: ConditionExpr | None = None


class GroupUnsetConfig(ResourceModel):
    """Remove every field matching a glob pattern."""

    pattern: str
    condition: ConditionExpr | None = None


class SetRule(ResourceModel):
    set: SetConfig


class UnsetRule(ResourceModel):
    unset: UnsetConfig


class RenameRule(ResourceModel):
    rename: RenameConfig


class SubstRule(ResourceModel):
    subst: SubstConfig


class GroupUnsetRule(ResourceModel):
    groupunset: GroupUnsetConfig


RewriteRule = SetRule | UnsetRule | RenameRule | SubstRule | GroupUnsetRule

# =============================================================================
# Parsers
# =============================================================================


class RegexpParser(ResourceModel):
    """Extract fields with named capture groups."""

    patterns: list[str] = Field(min_length=1)
    prefix: str | None = None
    template: str | None = None
    flags: list[str] = Field(default_factory=list)


class SyslogParser(ResourceModel):
    """Parse the message body as a syslog message."""

    flags: list[str] = Field(default_factory=list)


class RegexpParserConfig(ResourceModel):
    regexp: RegexpParser


class SyslogParserConfig(ResourceModel):
    syslog_parser: SyslogParser = Field(alias="syslog-parser")


ParserConfig = RegexpParserConfig | SyslogParserConfig

# =============================================================================
# Filters
# =============================================================================


class MatchFilter(ResourceModel):
    """Drop records that do not satisfy the condition."""

    id: str | None = None
    match: ConditionExpr


class RewriteFilter(ResourceModel):
    """Apply one or more rewrite rules, in order."""

    id: str | None = None
    rewrite: list[RewriteRule] = Field(min_length=1)


class ParserFilter(ResourceModel):
    """Run a parser over the record."""

    id: str | None = None
    parser: ParserConfig


FilterSpec = MatchFilter | RewriteFilter | ParserFilter
