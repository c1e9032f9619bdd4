"""Render error taxonomy.

Every error raised while compiling a pipeline derives from RenderError.
All of them are terminal for the current render call: nothing is written
to the output sink and the caller decides whether to try again.
"""

from __future__ import annotations


class RenderError(Exception):
    """Base class for errors that abort a render."""


class MissingSpecError(RenderError):
    """Raised when the pipeline carries no syslog-ng specification section."""


class DanglingReferenceError(RenderError):
    """Raised when a flow references an output that was not declared.

    Attributes:
        flow: Identity of the flow holding the reference ("namespace/name")
        reference: The output name that could not be resolved
        kind: "local" for namespaced outputs, "global" for cluster outputs
    """

    def __init__(self, flow: str, reference: str, kind: str = "local") -> None:
        self.flow = flow
        self.reference = reference
        self.kind = kind
        super().__init__(f"flow '{flow}' references undeclared {kind} output '{reference}'")


class SecretResolutionError(RenderError):
    """Raised when a secret reference cannot be resolved.

    The underlying store error is chained via __cause__.

    Attributes:
        namespace: Namespace the secret was looked up in
        name: Secret name
        key: Key within the secret
    """

    def __init__(self, namespace: str, name: str, key: str, reason: str = "") -> None:
        self.namespace = namespace
        self.name = name
        self.key = key
        message = f"cannot resolve secret '{namespace}/{name}' key '{key}'"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class MalformedExpressionError(RenderError):
    """Raised when a condition node has no populated variant."""


class IdentifierCollisionError(RenderError):
    """Raised when two rendered blocks would share one identifier.

    Attributes:
        identifier: The colliding block identifier
        first_owner: Description of the block that claimed it first
        second_owner: Description of the block that tried to claim it again
    """

    def __init__(self, identifier: str, first_owner: str, second_owner: str) -> None:
        self.identifier = identifier
        self.first_owner = first_owner
        self.second_owner = second_owner
        super().__init__(f"identifier '{identifier}' produced by both {first_owner} and {second_owner}")
