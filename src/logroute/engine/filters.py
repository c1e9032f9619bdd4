"""Filter chain rendering.

Each filter in a flow becomes one named block whose keyword (filter,
rewrite, parser) is also the keyword used to reference it from the flow's
log block. Adding a filter kind means adding one case to render_filter and
its keyword; the flow assembler only sees RenderedFilter.
"""

from __future__ import annotations

from dataclasses import dataclass

from logroute.contracts.conditions import ConditionExpr
from logroute.contracts.filters import (
    FilterSpec,
    GroupUnsetRule,
    MatchFilter,
    ParserConfig,
    ParserFilter,
    RegexpParserConfig,
    RenameRule,
    RewriteFilter,
    RewriteRule,
    SetRule,
    SubstRule,
    SyslogParserConfig,
    UnsetRule,
)
from logroute.engine.expressions import translate
from logroute.engine.syntax import block, call, option, quote, statement


@dataclass(frozen=True, slots=True)
class RenderedFilter:
    """A rendered filter block and how to reference it.

    Attributes:
        identifier: Block identifier
        keyword: Block keyword, reused for the reference (filter/rewrite/parser)
        text: Full block text, newline terminated
    """

    identifier: str
    keyword: str
    text: str

    @property
    def reference(self) -> str:
        """Reference statement for the flow's log block."""
        return f'{self.keyword}("{self.identifier}")'


def _condition(expr: ConditionExpr | None) -> str:
    if expr is None:
        return ""
    return f"condition({translate(expr)})"


def render_rewrite_rule(rule: RewriteRule) -> str:
    """Render one rewrite rule as a statement body (without ';')."""
    match rule:
        case SetRule(set=cfg):
            return call("set", quote(cfg.value), option("value", cfg.field), _condition(cfg.condition))
        case UnsetRule(unset=cfg):
            return call("unset", option("value", cfg.field), _condition(cfg.condition))
        case RenameRule(rename=cfg):
            return call("rename", quote(cfg.old_field), quote(cfg.new_field), _condition(cfg.condition))
        case SubstRule(subst=cfg):
            return call(
                "subst",
                quote(cfg.pattern),
                quote(cfg.replace),
                option("value", cfg.field),
                option("flags", cfg.flags),
                option("type", cfg.type),
                _condition(cfg.condition),
            )
        case GroupUnsetRule(groupunset=cfg):
            return call("groupunset", option("values", cfg.pattern), _condition(cfg.condition))
    raise TypeError(f"unsupported rewrite rule: {type(rule).__name__}")


def render_parser(parser: ParserConfig) -> str:
    """Render a parser as a statement body (without ';')."""
    match parser:
        case RegexpParserConfig(regexp=cfg):
            return call(
                "regexp-parser",
                option("patterns", cfg.patterns),
                option("prefix", cfg.prefix),
                option("template", cfg.template),
                option("flags", cfg.flags),
            )
        case SyslogParserConfig(syslog_parser=cfg):
            return call("syslog-parser", option("flags", cfg.flags))
    raise TypeError(f"unsupported parser: {type(parser).__name__}")


def render_filter(spec: FilterSpec, identifier: str) -> RenderedFilter:
    """Render one filter of a chain under the given identifier."""
    match spec:
        case MatchFilter(match=expr):
            keyword = "filter"
            lines = [statement(translate(expr))]
        case RewriteFilter(rewrite=rules):
            keyword = "rewrite"
            lines = [statement(render_rewrite_rule(rule)) for rule in rules]
        case ParserFilter(parser=parser):
            keyword = "parser"
            lines = [statement(render_parser(parser))]
        case _:
            raise TypeError(f"unsupported filter: {type(spec).__name__}")
    return RenderedFilter(identifier=identifier, keyword=keyword, text=block(keyword, identifier, lines))
