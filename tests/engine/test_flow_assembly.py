"""Tests for flow assembly and log block wiring."""

import pytest

from tests.fixtures import flow, regexp
from tests.fixtures.documents import namespace_filter


def _render(spec, *, local=None, cluster=None, registry=None) -> str:
    from logroute.core.identifiers import IdentifierRegistry
    from logroute.engine.flows import render_flow

    return render_flow(
        spec,
        local_outputs=local or {},
        cluster_outputs=cluster or {},
        registry=registry if registry is not None else IdentifierRegistry(),
    )


class TestNamespaceFilter:
    """Built-in namespace scoping."""

    def test_lines(self) -> None:
        from logroute.engine.flows import namespace_filter as render_namespace_filter

        assert "\n".join(render_namespace_filter("default")) + "\n" == namespace_filter("default")


class TestRenderFlow:
    """Block order and log block contents."""

    def test_bare_flow(self) -> None:
        text = _render(flow("f"))

        assert text == 'log {\n    source("main_input");\n' + namespace_filter("default") + "};\n"

    def test_full_ordering(self) -> None:
        from logroute.contracts import MatchFilter, RewriteFilter

        spec = flow(
            "test-flow",
            match=regexp("nginx", value="kubernetes.labels.app"),
            filters=[
                RewriteFilter.model_validate({"rewrite": [{"set": {"field": "cluster", "value": "test-cluster"}}]}),
                MatchFilter(id="only-errors", match=regexp("error")),
            ],
            local_output_refs=["b", "a"],
            global_output_refs=["central"],
        )

        text = _render(
            spec,
            local={("default", "a"): "output_default_a", ("default", "b"): "output_default_b"},
            cluster={"central": "clusteroutput_logging_central"},
        )

        assert text == (
            'filter "flow_default_test-flow_match" {\n'
            '    match("nginx" value("kubernetes.labels.app"));\n'
            "};\n"
            'rewrite "flow_default_test-flow_filters_0" {\n'
            '    set("test-cluster" value("cluster"));\n'
            "};\n"
            'filter "flow_default_test-flow_filters_only-errors" {\n'
            '    match("error");\n'
            "};\n"
            "log {\n"
            '    source("main_input");\n'
            + namespace_filter("default")
            + '    filter("flow_default_test-flow_match");\n'
            '    rewrite("flow_default_test-flow_filters_0");\n'
            '    filter("flow_default_test-flow_filters_only-errors");\n'
            '    destination("output_default_b");\n'
            '    destination("output_default_a");\n'
            '    destination("clusteroutput_logging_central");\n'
            "};\n"
        )

    def test_index_counts_every_filter(self) -> None:
        """Positions are list indices, including filters that carry an ID."""
        from logroute.contracts import MatchFilter

        spec = flow("f", filters=[MatchFilter(id="named", match=regexp("a")), MatchFilter(match=regexp("b"))])

        text = _render(spec)

        assert 'filter "flow_default_f_filters_named"' in text
        assert 'filter "flow_default_f_filters_1"' in text

    def test_local_refs_resolve_in_flow_namespace(self) -> None:
        from logroute.contracts import DanglingReferenceError

        spec = flow("f", namespace="team-a", local_output_refs=["out"])

        with pytest.raises(DanglingReferenceError) as exc_info:
            _render(spec, local={("team-b", "out"): "output_team-b_out"})

        assert exc_info.value.flow == "team-a/f"
        assert exc_info.value.reference == "out"
        assert exc_info.value.kind == "local"

    def test_dangling_global_ref(self) -> None:
        from logroute.contracts import DanglingReferenceError

        with pytest.raises(DanglingReferenceError) as exc_info:
            _render(flow("f", global_output_refs=["missing"]))

        assert exc_info.value.kind == "global"

    def test_dangling_ref_claims_nothing(self) -> None:
        from logroute.contracts import DanglingReferenceError
        from logroute.core.identifiers import IdentifierRegistry

        registry = IdentifierRegistry()
        spec = flow("f", match=regexp("x"), local_output_refs=["missing"])

        with pytest.raises(DanglingReferenceError):
            _render(spec, registry=registry)

        assert len(registry) == 0

    def test_identifier_collision(self) -> None:
        from logroute.contracts import IdentifierCollisionError, MatchFilter
        from logroute.core.identifiers import IdentifierRegistry

        registry = IdentifierRegistry()
        _render(flow("a_b", namespace="x", filters=[MatchFilter(match=regexp("p"))]), registry=registry)

        with pytest.raises(IdentifierCollisionError):
            _render(flow("b", namespace="x_a", filters=[MatchFilter(match=regexp("p"))]), registry=registry)


class TestClusterFlow:
    """Cluster flows see every namespace."""

    def test_cluster_flow(self) -> None:
        from logroute.contracts import ClusterFlowSpec

        spec = ClusterFlowSpec(
            namespace="logging",
            name="all",
            match=regexp("error"),
            global_output_refs=["central"],
        )

        text = _render(spec, cluster={"central": "clusteroutput_logging_central"})

        assert text == (
            'filter "clusterflow_logging_all_match" {\n'
            '    match("error");\n'
            "};\n"
            "log {\n"
            '    source("main_input");\n'
            '    filter("clusterflow_logging_all_match");\n'
            '    destination("clusteroutput_logging_central");\n'
            "};\n"
        )
        assert "json.kubernetes.namespace_name" not in text
