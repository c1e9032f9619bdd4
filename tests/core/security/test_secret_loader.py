# tests/core/security/test_secret_loader.py
"""Tests for secret stores and the mount-path resolver.

This module tests:
1. InMemorySecretStore and DirectorySecretStore lookups
2. MountedSecretResolver inline values, mount paths and failures
3. MountingSecretResolverFactory mount collection
"""

from __future__ import annotations

from pathlib import Path

import pytest


def _mounted(name: str, key: str):
    from logroute.contracts import SecretRef

    return SecretRef.model_validate({"mountFrom": {"secretKeyRef": {"name": name, "key": key}}})


class TestInMemorySecretStore:
    """Dict-backed store."""

    def test_returns_bytes_for_str_values(self) -> None:
        from logroute.core.security.secret_loader import InMemorySecretStore

        store = InMemorySecretStore({("default", "s"): {"k": "v"}})

        assert store.get_secret("default", "s") == {"k": b"v"}

    def test_missing_secret_raises(self) -> None:
        from logroute.core.security.secret_loader import InMemorySecretStore, SecretNotFoundError

        store = InMemorySecretStore()

        with pytest.raises(SecretNotFoundError, match="default/missing"):
            store.get_secret("default", "missing")

    def test_secrets_are_namespaced(self) -> None:
        from logroute.core.security.secret_loader import InMemorySecretStore, SecretNotFoundError

        store = InMemorySecretStore()
        store.add("team-a", "s", {"k": b"v"})

        with pytest.raises(SecretNotFoundError):
            store.get_secret("team-b", "s")


class TestDirectorySecretStore:
    """On-disk <root>/<namespace>/<name>/<key> layout."""

    def test_reads_key_files(self, tmp_path: Path) -> None:
        from logroute.core.security.secret_loader import DirectorySecretStore

        secret_dir = tmp_path / "default" / "my-secret"
        secret_dir.mkdir(parents=True)
        (secret_dir / "tls.crt").write_bytes(b"cert")
        (secret_dir / "tls.key").write_bytes(b"key")

        data = DirectorySecretStore(tmp_path).get_secret("default", "my-secret")

        assert data == {"tls.crt": b"cert", "tls.key": b"key"}

    def test_skips_hidden_entries(self, tmp_path: Path) -> None:
        from logroute.core.security.secret_loader import DirectorySecretStore

        secret_dir = tmp_path / "default" / "my-secret"
        (secret_dir / "..data").mkdir(parents=True)
        (secret_dir / ".hidden").write_bytes(b"x")
        (secret_dir / "tls.crt").write_bytes(b"cert")

        data = DirectorySecretStore(tmp_path).get_secret("default", "my-secret")

        assert list(data) == ["tls.crt"]

    def test_missing_directory_raises(self, tmp_path: Path) -> None:
        from logroute.core.security.secret_loader import DirectorySecretStore, SecretNotFoundError

        with pytest.raises(SecretNotFoundError):
            DirectorySecretStore(tmp_path).get_secret("default", "nope")


class TestMountedSecretResolver:
    """Resolution of secret references to values or mount paths."""

    def test_inline_value_returned_unchanged(self, resolver_factory) -> None:
        from logroute.contracts import SecretRef

        resolver = resolver_factory.resolver_for_namespace("default")

        assert resolver.resolve(SecretRef(value="hunter2")) == "hunter2"
        assert resolver_factory.mounts == []

    def test_mounted_secret_resolves_to_path(self, resolver_factory) -> None:
        resolver = resolver_factory.resolver_for_namespace("default")

        path = resolver.resolve(_mounted("my-secret", "tls.crt"))

        assert path == "/etc/syslog-ng/secret/default-my-secret-tls.crt"

    def test_mount_recorded_with_value(self, resolver_factory) -> None:
        resolver = resolver_factory.resolver_for_namespace("default")
        resolver.resolve(_mounted("my-secret", "tls.crt"))

        [mount] = resolver_factory.mounts
        assert mount.namespace == "default"
        assert mount.name == "my-secret"
        assert mount.key == "tls.crt"
        assert mount.path == "/etc/syslog-ng/secret/default-my-secret-tls.crt"
        assert mount.value == b"asdf"

    def test_mount_repr_hides_value(self, resolver_factory) -> None:
        resolver_factory.resolver_for_namespace("default").resolve(_mounted("my-secret", "tls.crt"))

        assert "asdf" not in repr(resolver_factory.mounts[0])

    def test_lookup_scoped_to_resolver_namespace(self, resolver_factory) -> None:
        """A secret in another namespace is not visible."""
        from logroute.contracts.errors import SecretResolutionError

        resolver = resolver_factory.resolver_for_namespace("other")

        with pytest.raises(SecretResolutionError) as exc_info:
            resolver.resolve(_mounted("my-secret", "tls.crt"))

        assert exc_info.value.namespace == "other"
        assert exc_info.value.name == "my-secret"

    def test_missing_secret_chains_cause(self, resolver_factory) -> None:
        from logroute.contracts.errors import SecretResolutionError
        from logroute.core.security.secret_loader import SecretNotFoundError

        resolver = resolver_factory.resolver_for_namespace("default")

        with pytest.raises(SecretResolutionError) as exc_info:
            resolver.resolve(_mounted("absent", "k"))

        assert isinstance(exc_info.value.__cause__, SecretNotFoundError)

    def test_missing_key_raises(self, resolver_factory) -> None:
        from logroute.contracts.errors import SecretResolutionError

        resolver = resolver_factory.resolver_for_namespace("default")

        with pytest.raises(SecretResolutionError, match="key not present"):
            resolver.resolve(_mounted("my-secret", "tls.key"))

        assert resolver_factory.mounts == []

    def test_store_io_error_wrapped(self) -> None:
        from logroute.contracts.errors import SecretResolutionError
        from logroute.core.security.secret_loader import MountingSecretResolverFactory

        class BrokenStore:
            def get_secret(self, namespace: str, name: str):
                raise PermissionError("denied")

        factory = MountingSecretResolverFactory(store=BrokenStore())

        with pytest.raises(SecretResolutionError, match="denied") as exc_info:
            factory.resolver_for_namespace("default").resolve(_mounted("s", "k"))

        assert isinstance(exc_info.value.__cause__, PermissionError)

    def test_store_client_error_wrapped(self) -> None:
        """Backend exceptions outside the OSError hierarchy are wrapped too."""
        from logroute.contracts.errors import SecretResolutionError
        from logroute.core.security.secret_loader import MountingSecretResolverFactory

        class ApiForbidden(Exception):
            pass

        class DenyingStore:
            def get_secret(self, namespace: str, name: str):
                raise ApiForbidden("secrets is forbidden")

        factory = MountingSecretResolverFactory(store=DenyingStore())

        with pytest.raises(SecretResolutionError, match="secrets is forbidden") as exc_info:
            factory.resolver_for_namespace("default").resolve(_mounted("s", "k"))

        assert isinstance(exc_info.value.__cause__, ApiForbidden)
        assert exc_info.value.namespace == "default"
        assert factory.mounts == []


class TestMountingSecretResolverFactory:
    """Mount root handling and mount collection."""

    def test_trailing_slash_stripped(self) -> None:
        from logroute.core.security.secret_loader import InMemorySecretStore, MountingSecretResolverFactory

        store = InMemorySecretStore({("ns", "s"): {"k": b"v"}})
        factory = MountingSecretResolverFactory(store=store, mount_root="/run/secrets/")

        assert factory.resolver_for_namespace("ns").resolve(_mounted("s", "k")) == "/run/secrets/ns-s-k"

    def test_mounts_collected_across_namespaces_in_order(self) -> None:
        from logroute.core.security.secret_loader import InMemorySecretStore, MountingSecretResolverFactory

        store = InMemorySecretStore({("a", "s"): {"k": b"1"}, ("b", "s"): {"k": b"2"}})
        factory = MountingSecretResolverFactory(store=store)

        factory.resolver_for_namespace("b").resolve(_mounted("s", "k"))
        factory.resolver_for_namespace("a").resolve(_mounted("s", "k"))

        assert [m.path for m in factory.mounts] == [
            "/etc/syslog-ng/secret/b-s-k",
            "/etc/syslog-ng/secret/a-s-k",
        ]
