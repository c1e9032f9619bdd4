"""Render entry point.

Sequences the preamble, every output, then every flow, into one document:

    @version / @include / options / source     (preamble)
    destination blocks                         (outputs, then cluster outputs)
    filter / rewrite / parser / log blocks     (flows, then cluster flows)

Sections are separated by a single blank line. The whole document is built
in memory first; the sink is only written once rendering has succeeded.
"""

from __future__ import annotations

import io
from typing import TextIO

from logroute.contracts.errors import MissingSpecError
from logroute.contracts.pipeline import PipelineSpec
from logroute.core import identifiers
from logroute.core.identifiers import IdentifierRegistry
from logroute.engine.destinations import render_destination
from logroute.engine.flows import render_flow
from logroute.engine.preamble import render_preamble

SECTION_SEPARATOR = "\n"


def build_document(pipeline: PipelineSpec) -> str:
    """Render a pipeline into configuration text.

    Raises:
        MissingSpecError: If the pipeline has no syslog-ng section
        DanglingReferenceError: If a flow references an undeclared output
        SecretResolutionError: If a secret reference cannot be resolved
        MalformedExpressionError: If a condition node is empty
        IdentifierCollisionError: If two blocks share an identifier, or two
            cluster outputs share a name
    """
    if pipeline.syslog_ng is None:
        name = f"{pipeline.namespace}/{pipeline.name}" if pipeline.namespace or pipeline.name else "<unnamed>"
        raise MissingSpecError(f"logging resource '{name}' has no syslog-ng specification")

    registry = IdentifierRegistry()
    factory = pipeline.secret_resolver_factory
    sections = render_preamble(pipeline.syslog_ng.global_options, pipeline.source_port)

    local_outputs: dict[tuple[str, str], str] = {}
    for output in pipeline.outputs:
        identifier = registry.claim(
            identifiers.output_id(output.namespace, output.name),
            f"output '{output.namespace}/{output.name}'",
        )
        rendered = render_destination(output, factory.resolver_for_namespace(output.namespace), identifier)
        local_outputs[(output.namespace, output.name)] = rendered.identifier
        sections.append(rendered.text)

    # Global refs address cluster outputs by name alone
    global_names = IdentifierRegistry()
    cluster_outputs: dict[str, str] = {}
    for output in pipeline.cluster_outputs:
        owner = f"cluster output '{output.namespace}/{output.name}'"
        global_names.claim(output.name, owner)
        identifier = registry.claim(identifiers.cluster_output_id(output.namespace, output.name), owner)
        rendered = render_destination(output, factory.resolver_for_namespace(output.namespace), identifier)
        cluster_outputs[output.name] = rendered.identifier
        sections.append(rendered.text)

    for flow in [*pipeline.flows, *pipeline.cluster_flows]:
        sections.append(
            render_flow(
                flow,
                local_outputs=local_outputs,
                cluster_outputs=cluster_outputs,
                registry=registry,
            )
        )

    return SECTION_SEPARATOR.join(sections)


def render(pipeline: PipelineSpec, out: TextIO) -> None:
    """Render a pipeline and write it to ``out``.

    Nothing is written when rendering fails; see build_document for errors.
    """
    document = build_document(pipeline)
    out.write(document)


def render_to_string(pipeline: PipelineSpec) -> str:
    buffer = io.StringIO()
    render(pipeline, buffer)
    return buffer.getvalue()
