"""Secret store backends and the mount-path resolver.

Secret-valued destination options (TLS material, passwords) are never
inlined when they come from a secret store. Instead the resolver records
that the key must be mounted into the daemon's container and returns the
path it will be mounted at:

    <mount_root>/<namespace>-<secret name>-<key>

Usage:
    from logroute.core.security.secret_loader import (
        DirectorySecretStore,
        MountingSecretResolverFactory,
    )

    factory = MountingSecretResolverFactory(
        store=DirectorySecretStore(Path("/var/run/secrets/logging")),
        mount_root="/etc/syslog-ng/secret",
    )
    path = factory.resolver_for_namespace("default").resolve(ref)
    # factory.mounts now lists what the caller must mount

Lookups are synchronous and uncached: each reference hits the store once.
"""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
from typing import Protocol

from logroute.contracts.errors import SecretResolutionError
from logroute.contracts.secrets import MountedSecret, SecretRef
from logroute.core.logging import get_logger

logger = get_logger(__name__)

DEFAULT_MOUNT_ROOT = "/etc/syslog-ng/secret"


class SecretNotFoundError(Exception):
    """Raised when a secret does not exist in a store."""

    pass


class SecretStore(Protocol):
    """Protocol for secret storage backends.

    Backends raise SecretNotFoundError for a missing secret. The resolver
    wraps that and any other backend failure in SecretResolutionError.
    """

    def get_secret(self, namespace: str, name: str) -> Mapping[str, bytes]:
        """Load every key of a secret.

        Args:
            namespace: Namespace the secret lives in
            name: Secret name

        Returns:
            Mapping of key to raw value

        Raises:
            SecretNotFoundError: If the secret doesn't exist in this store
        """
        ...


class InMemorySecretStore:
    """Secrets held in a dict, keyed by (namespace, name).

    Intended for tests and for embedding callers that already fetched
    their secrets.
    """

    def __init__(self, secrets: Mapping[tuple[str, str], Mapping[str, bytes | str]] | None = None) -> None:
        self._secrets: dict[tuple[str, str], dict[str, bytes]] = {}
        for (namespace, name), data in (secrets or {}).items():
            self.add(namespace, name, data)

    def add(self, namespace: str, name: str, data: Mapping[str, bytes | str]) -> None:
        """Register (or replace) a secret."""
        self._secrets[(namespace, name)] = {key: value.encode() if isinstance(value, str) else value for key, value in data.items()}

    def get_secret(self, namespace: str, name: str) -> Mapping[str, bytes]:
        try:
            return self._secrets[(namespace, name)]
        except KeyError:
            raise SecretNotFoundError(f"Secret '{namespace}/{name}' not found") from None


class DirectorySecretStore:
    """Secrets laid out on disk as ``<root>/<namespace>/<name>/<key>``.

    This matches how projected secret volumes look inside a container, so a
    controller can point the store at its own mounted secrets.
    """

    def __init__(self, root: Path) -> None:
        self._root = root

    def get_secret(self, namespace: str, name: str) -> Mapping[str, bytes]:
        """Read every regular file in the secret's directory.

        Hidden entries (projected volumes keep ``..data`` symlinks) are skipped.

        Raises:
            SecretNotFoundError: If the secret directory doesn't exist
            PermissionError: If the directory or a key file cannot be read
        """
        secret_dir = self._root / namespace / name
        if not secret_dir.is_dir():
            raise SecretNotFoundError(f"Secret '{namespace}/{name}' not found under {self._root}")

        data: dict[str, bytes] = {}
        for entry in sorted(secret_dir.iterdir()):
            if entry.name.startswith(".") or not entry.is_file():
                continue
            data[entry.name] = entry.read_bytes()

        logger.debug("secret_loaded", namespace=namespace, secret=name, keys=sorted(data))
        return data


def mount_path(mount_root: str, namespace: str, name: str, key: str) -> str:
    """Path a secret key is mounted at inside the daemon's container."""
    return f"{mount_root}/{namespace}-{name}-{key}"


class MountedSecretResolver:
    """Resolves secret references within one namespace.

    Inline values are returned unchanged. Store references are looked up
    (to fail early if they don't exist), recorded in ``mounts``, and replaced
    by their mount path.
    """

    def __init__(self, store: SecretStore, namespace: str, mount_root: str, mounts: list[MountedSecret]) -> None:
        self._store = store
        self._namespace = namespace
        self._mount_root = mount_root
        self._mounts = mounts

    def resolve(self, ref: SecretRef) -> str:
        """Return the inline value or the mount path for ``ref``.

        Raises:
            SecretResolutionError: If the secret or key cannot be read
        """
        if ref.value is not None:
            return ref.value

        # SecretRef guarantees mount_from is set when value is not
        assert ref.mount_from is not None
        selector = ref.mount_from.secret_key_ref

        try:
            data = self._store.get_secret(self._namespace, selector.name)
        except Exception as e:
            raise SecretResolutionError(self._namespace, selector.name, selector.key, str(e)) from e

        if selector.key not in data:
            raise SecretResolutionError(self._namespace, selector.name, selector.key, "key not present in secret")

        path = mount_path(self._mount_root, self._namespace, selector.name, selector.key)
        self._mounts.append(
            MountedSecret(
                namespace=self._namespace,
                name=selector.name,
                key=selector.key,
                path=path,
                value=data[selector.key],
            )
        )
        return path


class MountingSecretResolverFactory:
    """SecretResolverFactory backed by a SecretStore.

    Collects every mount requested through its resolvers in ``mounts``,
    in the order they were resolved. Use one factory per render.
    """

    def __init__(self, store: SecretStore, mount_root: str = DEFAULT_MOUNT_ROOT) -> None:
        self._store = store
        self._mount_root = mount_root.rstrip("/")
        self.mounts: list[MountedSecret] = []

    def resolver_for_namespace(self, namespace: str) -> MountedSecretResolver:
        return MountedSecretResolver(self._store, namespace, self._mount_root, self.mounts)
