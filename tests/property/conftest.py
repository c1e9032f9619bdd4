# tests/property/conftest.py
"""Shared Hypothesis strategies for property-based tests.

Strategy Categories:
- Resource names (namespace/name-like identifiers)
- Condition trees (recursive regexp/not/and/or)
- Flows with filter chains and output references

Usage:
    from tests.property.conftest import condition_trees, resource_names

    @given(expr=condition_trees)
    def test_translate_is_total(expr) -> None:
        ...
"""

from __future__ import annotations

from hypothesis import strategies as st

from logroute.contracts import (
    AndCondition,
    MatchFilter,
    NotCondition,
    OrCondition,
    RegexpCondition,
    RegexpMatch,
    RewriteFilter,
    SetConfig,
    SetRule,
)

# =============================================================================
# Names
# =============================================================================

# Kubernetes-style names: lowercase alphanumerics and dashes, no underscore
resource_names = st.from_regex(r"[a-z][a-z0-9-]{0,15}", fullmatch=True)

# Pattern text without quotes or parentheses, so leaves can be counted in output
patterns = st.text(
    min_size=1,
    max_size=30,
    alphabet=st.characters(categories=("L", "N", "P", "S"), exclude_characters='"()'),
)


# =============================================================================
# Conditions
# =============================================================================

regexp_leaves = st.builds(
    lambda pattern, value: RegexpCondition(regexp=RegexpMatch(pattern=pattern, value=value)),
    patterns,
    st.none() | resource_names,
)

condition_trees = st.recursive(
    regexp_leaves,
    lambda children: (
        st.builds(lambda child: NotCondition(not_=child), children)
        | st.builds(lambda items: AndCondition(and_=items), st.lists(children, min_size=1, max_size=4))
        | st.builds(lambda items: OrCondition(or_=items), st.lists(children, min_size=1, max_size=4))
    ),
    max_leaves=20,
)


# =============================================================================
# Filters
# =============================================================================

filter_specs = st.one_of(
    st.builds(lambda expr: MatchFilter(match=expr), condition_trees),
    st.builds(
        lambda field, value: RewriteFilter(rewrite=[SetRule(set=SetConfig(field=field, value=value))]),
        resource_names,
        patterns,
    ),
)

filter_chains = st.lists(filter_specs, max_size=8)
