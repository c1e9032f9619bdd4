"""Secret handling for logroute.

Exports:
- SecretStore backends: InMemorySecretStore, DirectorySecretStore
- MountedSecretResolver / MountingSecretResolverFactory: resolve secret
  references to inline values or mount paths
- SecretNotFoundError: Raised by stores for missing secrets
"""

from logroute.core.security.secret_loader import (
    DEFAULT_MOUNT_ROOT,
    DirectorySecretStore,
    InMemorySecretStore,
    MountedSecretResolver,
    MountingSecretResolverFactory,
    SecretNotFoundError,
    SecretStore,
    mount_path,
)

__all__ = [
    "DEFAULT_MOUNT_ROOT",
    "DirectorySecretStore",
    "InMemorySecretStore",
    "MountedSecretResolver",
    "MountingSecretResolverFactory",
    "SecretNotFoundError",
    "SecretStore",
    "mount_path",
]
