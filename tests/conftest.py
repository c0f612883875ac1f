import pytest

from graphanalytics.modules import logger as _logger
from graphanalytics.modules.graph import (
    NO_SRPM_PATH,
    NodeState,
    NodeType,
    PkgGraph,
    PkgNode,
    VersionedPkg,
)

SCENARIO_DOT = """
digraph pkgs {
  node [shape=box];
  "libfoo-run" [type="Run", state="Unresolved", pkg="libfoo"];
  "bar-build" [type="Build", state="Build", pkg="bar", version="1.0", srpm="SRPMS/bar-1.0.src.rpm"];
  "all-goal" [type="Goal", state="Meta", pkg="ALL"];
  "bar-build" -> "libfoo-run";
  "all-goal" -> "bar-build";
}
"""


def make_node(node_id, node_type, state, pkg=None, srpm=NO_SRPM_PATH):
    return PkgNode(
        node_id=node_id,
        type=node_type,
        state=state,
        versioned_pkg=VersionedPkg(name=pkg or node_id),
        srpm_path=srpm,
    )


def make_graph(nodes, edges):
    pkg_graph = PkgGraph()
    for node in nodes:
        pkg_graph.add_node(node)
    for dependent, dependency in edges:
        pkg_graph.add_edge(dependent, dependency)
    return pkg_graph.freeze()


@pytest.fixture(autouse=True)
def fresh_logger():
    _logger.reset()
    yield
    _logger.reset()


@pytest.fixture
def scenario_graph():
    """libfoo is unresolved, bar (built from bar-1.0.src.rpm) needs it, a goal needs bar."""
    return make_graph(
        [
            make_node("A", NodeType.RUN, NodeState.UNRESOLVED, pkg="libfoo"),
            make_node("B", NodeType.BUILD, NodeState.BUILD, pkg="bar", srpm="SRPMS/bar-1.0.src.rpm"),
            make_node("C", NodeType.GOAL, NodeState.META, pkg="ALL"),
        ],
        [("B", "A"), ("C", "B")],
    )


@pytest.fixture
def scenario_dot(tmp_path):
    path = tmp_path / "graph.dot"
    path.write_text(SCENARIO_DOT, encoding="utf-8")
    return path
