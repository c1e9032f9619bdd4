"""Boolean condition trees used as flow gates and rewrite guards.

A condition is one of four variants, selected by its payload key:

    regexp:                 # leaf - pattern match against a field
      pattern: nginx
      value: kubernetes.labels.app
    not: {...}              # negation of one child
    and: [{...}, {...}]     # conjunction, children in order
    or: [{...}, {...}]      # disjunction, children in order

Nesting is the only precedence mechanism and depth is unbounded.
"""

from __future__ import annotations

from pydantic import Field

from logroute.contracts.base import ResourceModel


class RegexpMatch(ResourceModel):
    """Pattern match against a message field or template."""

    pattern: str
    template: str | None = None
    value: str | None = None
    type: str | None = None
    flags: list[str] = Field(default_factory=list)


class RegexpCondition(ResourceModel):
    regexp: RegexpMatch


class NotCondition(ResourceModel):
    not_: ConditionExpr = Field(alias="not")


class AndCondition(ResourceModel):
    and_: list[ConditionExpr] = Field(alias="and")


class OrCondition(ResourceModel):
    or_: list[ConditionExpr] = Field(alias="or")


ConditionExpr = RegexpCondition | NotCondition | AndCondition | OrCondition

NotCondition.model_rebuild()
AndCondition.model_rebuild()
OrCondition.model_rebuild()
