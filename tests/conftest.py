# tests/conftest.py
"""Shared test fixtures and helpers.

Fixtures:
- secret_store: In-memory secret store seeded with a TLS secret
- resolver_factory: MountingSecretResolverFactory over secret_store
- make_pipeline: Builds a PipelineSpec from resources with sensible defaults

Expected document fragments live in tests/fixtures/documents.py.

Hypothesis Configuration:
- "ci" profile: Fast tests for CI (100 examples) - default
- "nightly" profile: Thorough tests (1000 examples)
- "debug" profile: Minimal tests with verbose output (10 examples)

Set profile via environment variable:
    HYPOTHESIS_PROFILE=nightly pytest tests/property/
"""

import os
from collections.abc import Callable, Sequence
from typing import Any

import pytest
from hypothesis import Phase, Verbosity, settings

from logroute.contracts import (
    ClusterFlowSpec,
    FlowSpec,
    GlobalOptions,
    OutputSpec,
    PipelineSpec,
    SyslogNGSpec,
)
from logroute.core.security.secret_loader import InMemorySecretStore, MountingSecretResolverFactory

MOUNT_ROOT = "/etc/syslog-ng/secret"


@pytest.fixture
def secret_store() -> InMemorySecretStore:
    """Store holding default/my-secret with a tls.crt key."""
    return InMemorySecretStore({("default", "my-secret"): {"tls.crt": "asdf"}})


@pytest.fixture
def resolver_factory(secret_store: InMemorySecretStore) -> MountingSecretResolverFactory:
    return MountingSecretResolverFactory(store=secret_store, mount_root=MOUNT_ROOT)


@pytest.fixture
def make_pipeline(resolver_factory: MountingSecretResolverFactory) -> Callable[..., PipelineSpec]:
    """Factory for PipelineSpec with an empty syslog-ng section and port 601."""

    def _make(
        *,
        outputs: Sequence[OutputSpec] = (),
        flows: Sequence[FlowSpec] = (),
        cluster_outputs: Sequence[OutputSpec] = (),
        cluster_flows: Sequence[ClusterFlowSpec] = (),
        global_options: GlobalOptions | None = None,
        source_port: int = 601,
        **overrides: Any,
    ) -> PipelineSpec:
        fields: dict[str, Any] = {
            "namespace": "logging",
            "name": "test",
            "source_port": source_port,
            "syslog_ng": SyslogNGSpec(global_options=global_options),
            "outputs": tuple(outputs),
            "flows": tuple(flows),
            "cluster_outputs": tuple(cluster_outputs),
            "cluster_flows": tuple(cluster_flows),
            "secret_resolver_factory": resolver_factory,
        }
        fields.update(overrides)
        return PipelineSpec(**fields)

    return _make


# =============================================================================
# Hypothesis Configuration
# =============================================================================

settings.register_profile(
    "ci",
    max_examples=100,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    deadline=None,  # Disable deadline for CI (timing varies)
)

settings.register_profile(
    "nightly",
    max_examples=1000,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    deadline=None,
)

settings.register_profile(
    "debug",
    max_examples=10,
    verbosity=Verbosity.verbose,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    deadline=None,
)

settings.load_profile(os.getenv("HYPOTHESIS_PROFILE", "ci"))
