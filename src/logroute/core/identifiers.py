"""Block identifier construction.

Every named block in a rendered document (destinations, flow match filters,
filter-chain blocks) gets an identifier built from its role, the owning
resource's namespace and name, and an optional disambiguator:

    output_default_test-syslog-out
    flow_default_test-flow_match
    flow_default_test-flow_filters_0
    flow_default_test-flow_filters_remove message

Parts are joined with "_" verbatim. Nothing is escaped or sanitized, so two
different inputs can concatenate to the same string; IdentifierRegistry
catches that within a single render.
"""

from __future__ import annotations

from logroute.contracts.errors import IdentifierCollisionError

DELIMITER = "_"

ROLE_OUTPUT = "output"
ROLE_CLUSTER_OUTPUT = "clusteroutput"
ROLE_FLOW = "flow"
ROLE_CLUSTER_FLOW = "clusterflow"


def name(role: str, namespace: str, resource_name: str, *suffixes: str | int) -> str:
    """Join role, namespace, resource name and suffixes into an identifier.

    Integer suffixes render in decimal; string suffixes are kept verbatim,
    embedded spaces included.
    """
    return DELIMITER.join([role, namespace, resource_name, *(str(suffix) for suffix in suffixes)])


def output_id(namespace: str, output_name: str) -> str:
    return name(ROLE_OUTPUT, namespace, output_name)


def cluster_output_id(namespace: str, output_name: str) -> str:
    return name(ROLE_CLUSTER_OUTPUT, namespace, output_name)


def flow_id(namespace: str, flow_name: str) -> str:
    return name(ROLE_FLOW, namespace, flow_name)


def cluster_flow_id(namespace: str, flow_name: str) -> str:
    return name(ROLE_CLUSTER_FLOW, namespace, flow_name)


def match_id(owner_id: str) -> str:
    """Identifier of a flow's root match filter."""
    return f"{owner_id}{DELIMITER}match"


def filter_id(owner_id: str, explicit_id: str | None, index: int) -> str:
    """Identifier of one filter in a flow's chain.

    Args:
        owner_id: The flow's identifier (flow_<ns>_<name>)
        explicit_id: User-supplied filter ID, if any
        index: Zero-based position of the filter in the chain

    Returns:
        <owner_id>_filters_<explicit_id or index>
    """
    suffix: str | int = explicit_id if explicit_id is not None else index
    return DELIMITER.join([owner_id, "filters", str(suffix)])


class IdentifierRegistry:
    """Tracks identifiers emitted during one render.

    A fresh registry is created per render call; it is never shared.
    """

    def __init__(self) -> None:
        self._owners: dict[str, str] = {}

    def claim(self, identifier: str, owner: str) -> str:
        """Record ``identifier`` as produced by ``owner``.

        Returns:
            The identifier, for chaining

        Raises:
            IdentifierCollisionError: If the identifier was already claimed
        """
        if identifier in self._owners:
            raise IdentifierCollisionError(identifier, self._owners[identifier], owner)
        self._owners[identifier] = owner
        return identifier

    def __contains__(self, identifier: object) -> bool:
        return identifier in self._owners

    def __len__(self) -> int:
        return len(self._owners)
