"""Pipeline root models.

PipelineDocument is the on-disk (YAML) form of a pipeline. PipelineSpec is
the per-render input: the document's resources plus the ingestion port and
the secret resolver capability. Neither is mutated while rendering.

Example YAML:
    namespace: logging
    name: cluster-logging
    syslogNGSpec:
      globalOptions:
        stats_level: 3
    outputs:
      - namespace: default
        name: test-syslog-out
        syslog: {host: test.local, transport: tcp}
    flows:
      - namespace: default
        name: test-flow
        match:
          regexp: {pattern: nginx, value: kubernetes.labels.app}
        localOutputRefs: [test-syslog-out]
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field

from pydantic import Field

from logroute.contracts.base import ResourceModel
from logroute.contracts.conditions import ConditionExpr
from logroute.contracts.filters import FilterSpec
from logroute.contracts.outputs import OutputSpec
from logroute.contracts.secrets import SecretResolverFactory


class GlobalOptions(ResourceModel):
    """Daemon-wide tuning options.

    None means the option was not declared. An explicit 0 is kept as 0 here;
    the preamble renderer decides what zero means for each option.
    """

    stats_level: int | None = Field(default=None, ge=0)
    stats_freq: int | None = Field(default=None, ge=0)

    @property
    def is_empty(self) -> bool:
        """True when no option is declared."""
        return self.stats_level is None and self.stats_freq is None


class SyslogNGSpec(ResourceModel):
    """The syslog-ng section of the logging resource."""

    global_options: GlobalOptions | None = Field(default=None, alias="globalOptions")


class FlowSpec(ResourceModel):
    """Namespaced routing rule.

    Records are pre-filtered to the flow's own namespace before the match
    condition and filter chain run.
    """

    namespace: str = ""
    name: str
    match: ConditionExpr | None = None
    filters: list[FilterSpec] = Field(default_factory=list)
    local_output_refs: list[str] = Field(default_factory=list, alias="localOutputRefs")
    global_output_refs: list[str] = Field(default_factory=list, alias="globalOutputRefs")

    @property
    def qualified_name(self) -> str:
        return f"{self.namespace}/{self.name}"


class ClusterFlowSpec(ResourceModel):
    """Cluster-wide routing rule; sees records from every namespace."""

    namespace: str = ""
    name: str
    match: ConditionExpr | None = None
    filters: list[FilterSpec] = Field(default_factory=list)
    global_output_refs: list[str] = Field(default_factory=list, alias="globalOutputRefs")

    @property
    def qualified_name(self) -> str:
        return f"{self.namespace}/{self.name}"


class PipelineDocument(ResourceModel):
    """A complete pipeline as loaded from a file."""

    namespace: str = ""
    name: str = ""
    source_port: int | None = Field(default=None, ge=1, le=65535)
    syslog_ng: SyslogNGSpec | None = Field(default=None, alias="syslogNGSpec")
    outputs: list[OutputSpec] = Field(default_factory=list)
    flows: list[FlowSpec] = Field(default_factory=list)
    cluster_outputs: list[OutputSpec] = Field(default_factory=list, alias="clusterOutputs")
    cluster_flows: list[ClusterFlowSpec] = Field(default_factory=list, alias="clusterFlows")

    def to_spec(self, secret_resolver_factory: SecretResolverFactory, *, source_port: int) -> PipelineSpec:
        """Bind this document to a resolver for rendering.

        Args:
            secret_resolver_factory: Capability used to resolve secret references
            source_port: Ingestion port, used when the document does not set one

        Returns:
            PipelineSpec ready to pass to render()
        """
        return PipelineSpec(
            namespace=self.namespace,
            name=self.name,
            source_port=self.source_port if self.source_port is not None else source_port,
            syslog_ng=self.syslog_ng,
            outputs=tuple(self.outputs),
            flows=tuple(self.flows),
            cluster_outputs=tuple(self.cluster_outputs),
            cluster_flows=tuple(self.cluster_flows),
            secret_resolver_factory=secret_resolver_factory,
        )


@dataclass(frozen=True, slots=True)
class PipelineSpec:
    """Everything one render call needs.

    Attributes:
        namespace: Namespace of the owning logging resource
        name: Name of the owning logging resource
        source_port: Port the shared network source listens on
        syslog_ng: The syslog-ng section; None aborts the render
        outputs: Namespaced outputs, addressed by flows' local refs
        flows: Namespaced flows, rendered in this order
        cluster_outputs: Cluster outputs, addressed by global refs
        cluster_flows: Cluster flows, rendered after namespaced flows
        secret_resolver_factory: Injected secret resolution capability
    """

    secret_resolver_factory: SecretResolverFactory
    source_port: int
    syslog_ng: SyslogNGSpec | None
    namespace: str = ""
    name: str = ""
    outputs: Sequence[OutputSpec] = field(default_factory=tuple)
    flows: Sequence[FlowSpec] = field(default_factory=tuple)
    cluster_outputs: Sequence[OutputSpec] = field(default_factory=tuple)
    cluster_flows: Sequence[ClusterFlowSpec] = field(default_factory=tuple)
