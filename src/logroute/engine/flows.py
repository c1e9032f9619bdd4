"""Flow assembly.

A flow renders as its optional root match filter, its filter-chain blocks,
and one log block wiring everything together in a fixed order:

    log {
        source("main_input");
        filter {                                  # namespaced flows only
            match("<ns>" value("json.kubernetes.namespace_name") type("string"));
        };
        filter("<flow id>_match");                # if the flow has a match
        rewrite("<flow id>_filters_0");           # filter chain, in order
        destination("output_<ns>_<name>");        # local refs, then global refs
    };
"""

from __future__ import annotations

from collections.abc import Mapping

from logroute.contracts.conditions import RegexpMatch
from logroute.contracts.errors import DanglingReferenceError
from logroute.contracts.pipeline import ClusterFlowSpec, FlowSpec
from logroute.core import identifiers
from logroute.core.identifiers import IdentifierRegistry
from logroute.engine.expressions import render_match, translate
from logroute.engine.filters import render_filter
from logroute.engine.preamble import JSON_KEY_PREFIX, SOURCE_NAME
from logroute.engine.syntax import INDENT, block, statement

NAMESPACE_FIELD = f"{JSON_KEY_PREFIX}kubernetes.namespace_name"


def namespace_filter(namespace: str) -> list[str]:
    """Lines of the built-in anonymous filter scoping a flow to its namespace."""
    leaf = render_match(RegexpMatch(pattern=namespace, value=NAMESPACE_FIELD, type="string"))
    return [
        f"{INDENT}filter {{",
        statement(leaf, depth=2),
        f"{INDENT}}};",
    ]


def _destination_refs(
    flow: FlowSpec | ClusterFlowSpec,
    local_outputs: Mapping[tuple[str, str], str],
    cluster_outputs: Mapping[str, str],
) -> list[str]:
    refs: list[str] = []
    if isinstance(flow, FlowSpec):
        for ref in flow.local_output_refs:
            try:
                refs.append(local_outputs[(flow.namespace, ref)])
            except KeyError:
                raise DanglingReferenceError(flow.qualified_name, ref, "local") from None
    for ref in flow.global_output_refs:
        try:
            refs.append(cluster_outputs[ref])
        except KeyError:
            raise DanglingReferenceError(flow.qualified_name, ref, "global") from None
    return refs


def render_flow(
    flow: FlowSpec | ClusterFlowSpec,
    *,
    local_outputs: Mapping[tuple[str, str], str],
    cluster_outputs: Mapping[str, str],
    registry: IdentifierRegistry,
) -> str:
    """Render a flow's blocks and its log block.

    Args:
        flow: Namespaced or cluster flow
        local_outputs: (namespace, name) -> identifier of declared outputs
        cluster_outputs: name -> identifier of declared cluster outputs
        registry: Identifier registry of the current render

    Raises:
        DanglingReferenceError: If an output reference is not declared
        IdentifierCollisionError: If a block identifier is already taken
        MalformedExpressionError: If a condition node is empty
    """
    namespaced = isinstance(flow, FlowSpec)
    if namespaced:
        owner_id = identifiers.flow_id(flow.namespace, flow.name)
        owner = f"flow '{flow.qualified_name}'"
    else:
        owner_id = identifiers.cluster_flow_id(flow.namespace, flow.name)
        owner = f"cluster flow '{flow.qualified_name}'"

    # Validate references before doing any work
    destinations = _destination_refs(flow, local_outputs, cluster_outputs)

    blocks: list[str] = []
    log_lines = [statement(f'source("{SOURCE_NAME}")')]
    if namespaced:
        log_lines.extend(namespace_filter(flow.namespace))

    if flow.match is not None:
        match_id = registry.claim(identifiers.match_id(owner_id), f"{owner} match")
        blocks.append(block("filter", match_id, [statement(translate(flow.match))]))
        log_lines.append(statement(f'filter("{match_id}")'))

    for index, spec in enumerate(flow.filters):
        filter_id = registry.claim(identifiers.filter_id(owner_id, spec.id, index), f"{owner} filter #{index}")
        rendered = render_filter(spec, filter_id)
        blocks.append(rendered.text)
        log_lines.append(statement(rendered.reference))

    log_lines.extend(statement(f'destination("{ref}")') for ref in destinations)
    blocks.append(block("log", None, log_lines))
    return "".join(blocks)
