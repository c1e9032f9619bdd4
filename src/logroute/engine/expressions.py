"""Condition tree to syslog-ng filter expression translation.

    regexp  ->  match("<pattern>" template(..) value("<field>") type(..) flags(..))
    not     ->  (not <child>)
    and/or  ->  (<child1> and <child2> ...)

Children keep their declaration order and nesting is never flattened, so
the tree's shape is the only source of precedence in the output.
"""

from __future__ import annotations

from logroute.contracts.conditions import (
    AndCondition,
    ConditionExpr,
    NotCondition,
    OrCondition,
    RegexpCondition,
    RegexpMatch,
)
from logroute.contracts.errors import MalformedExpressionError
from logroute.engine.syntax import call, option, quote


def render_match(leaf: RegexpMatch) -> str:
    return call(
        "match",
        quote(leaf.pattern),
        option("template", leaf.template),
        option("value", leaf.value),
        option("type", leaf.type),
        option("flags", leaf.flags),
    )


def _join(operator: str, children: list[ConditionExpr]) -> str:
    if not children:
        raise MalformedExpressionError(f"'{operator}' condition has no operands")
    return "(" + f" {operator} ".join(translate(child) for child in children) + ")"


def translate(expr: ConditionExpr) -> str:
    """Translate a condition tree into filter expression syntax.

    Raises:
        MalformedExpressionError: If a node has no populated variant
    """
    match expr:
        case RegexpCondition(regexp=leaf):
            return render_match(leaf)
        case NotCondition(not_=child):
            return f"(not {translate(child)})"
        case AndCondition(and_=children):
            return _join("and", children)
        case OrCondition(or_=children):
            return _join("or", children)
        case _:
            raise MalformedExpressionError(f"condition node has no populated variant: {expr!r}")
