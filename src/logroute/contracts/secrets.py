"""Secret reference models.

A secret-valued option either carries its value inline or points at a key
of a namespaced secret that the daemon receives as a mounted file:

    ca_file:
      mountFrom:
        secretKeyRef:
          name: my-secret
          key: tls.crt

Externally sourced secrets are never embedded in the rendered document;
only the mount path is.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Protocol

from pydantic import Field, model_validator

from logroute.contracts.base import ResourceModel


class SecretKeySelector(ResourceModel):
    """Selects one key of a named secret."""

    name: str
    key: str


class SecretSource(ResourceModel):
    secret_key_ref: SecretKeySelector = Field(alias="secretKeyRef")


class SecretRef(ResourceModel):
    """Inline value or reference to a mounted secret key."""

    value: str | None = None
    mount_from: SecretSource | None = Field(default=None, alias="mountFrom")

    @model_validator(mode="after")
    def validate_exactly_one_source(self) -> SecretRef:
        """Exactly one of value or mountFrom must be set."""
        if (self.value is None) == (self.mount_from is None):
            raise ValueError("secret must set exactly one of 'value' or 'mountFrom'")
        return self


@dataclass(frozen=True, slots=True)
class MountedSecret:
    """A secret key the daemon needs mounted at ``path``.

    Collected during a render so the caller can build the secret volume.
    The value is kept out of repr().
    """

    namespace: str
    name: str
    key: str
    path: str
    value: bytes = field(repr=False)


class SecretResolver(Protocol):
    """Resolves secret references within one namespace."""

    def resolve(self, ref: SecretRef) -> str:
        """Return the inline value or the mount path for ``ref``.

        Raises:
            SecretResolutionError: If the referenced secret cannot be read
        """
        ...


class SecretResolverFactory(Protocol):
    """Capability injected per render to obtain namespace-scoped resolvers."""

    def resolver_for_namespace(self, namespace: str) -> SecretResolver:
        """Return a resolver that looks secrets up in ``namespace``."""
        ...
