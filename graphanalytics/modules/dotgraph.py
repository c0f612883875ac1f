# graphanalytics/modules/dotgraph.py
"""
Load a package graph from a DOT file.

Expected shape:

    digraph pkgs {
      "libfoo-run" [type="Run", state="Unresolved", pkg="libfoo", version="1.2"];
      "bar-build"  [type="Build", state="Build", pkg="bar", srpm="SRPMS/bar-1.0.src.rpm"];
      "bar-build" -> "libfoo-run";
    }

An edge "a" -> "b" means a requires b. Anything that keeps us from building
a complete graph raises GraphUnavailableError.
"""

from __future__ import annotations

import os
from typing import Any, Dict, List, Tuple

import pydot

from graphanalytics.modules.graph import (
    NO_SRPM_PATH,
    GraphAnalyticsError,
    NodeState,
    NodeType,
    PkgGraph,
    PkgNode,
    VersionedPkg,
    parse_enum,
)

# default attribute statements, not real nodes
PSEUDO_NODES = {"node", "edge", "graph"}


class GraphUnavailableError(GraphAnalyticsError):
    pass


def _unquote(value: Any) -> str:
    text = "" if value is None else str(value).strip()
    if len(text) >= 2 and text[0] == text[-1] == '"':
        text = text[1:-1]
    return text.replace('\\"', '"')


def _node_from_attrs(node_id: str, attrs: Dict[str, str]) -> PkgNode:
    try:
        node_type = parse_enum(NodeType, attrs.get("type") or NodeType.UNKNOWN.value)
        node_state = parse_enum(NodeState, attrs.get("state") or NodeState.UNKNOWN.value)
    except ValueError as e:
        raise GraphUnavailableError(f"Node '{node_id}': {e}") from e

    return PkgNode(
        node_id=node_id,
        type=node_type,
        state=node_state,
        versioned_pkg=VersionedPkg(name=attrs.get("pkg") or node_id, version=attrs.get("version", "")),
        srpm_path=attrs.get("srpm") or NO_SRPM_PATH,
    )


def _walk_statements(dot_graph, node_attrs: Dict[str, Dict[str, str]], edges: List[Tuple[str, str]]):
    """Collect node and edge statements of a graph and all of its subgraphs."""
    for dot_node in dot_graph.get_nodes():
        node_id = _unquote(dot_node.get_name())
        if node_id in PSEUDO_NODES:
            continue
        # repeated statements merge, later attributes win
        attrs = node_attrs.setdefault(node_id, {})
        attrs.update({k: _unquote(v) for k, v in dot_node.get_attributes().items()})

    for dot_edge in dot_graph.get_edges():
        edges.append((_unquote(dot_edge.get_source()), _unquote(dot_edge.get_destination())))

    for subgraph in dot_graph.get_subgraph_list():
        _walk_statements(subgraph, node_attrs, edges)


def graph_from_pydot(dot_graph) -> PkgGraph:
    """Convert a parsed pydot digraph into a frozen PkgGraph."""
    if dot_graph.get_type() != "digraph":
        raise GraphUnavailableError(f"Expected a digraph, got '{dot_graph.get_type()}'")

    node_attrs: Dict[str, Dict[str, str]] = {}
    edges: List[Tuple[str, str]] = []
    _walk_statements(dot_graph, node_attrs, edges)

    pkg_graph = PkgGraph()
    for node_id, attrs in node_attrs.items():
        pkg_graph.add_node(_node_from_attrs(node_id, attrs))

    for source, target in edges:
        for node_id in (source, target):
            if node_id not in pkg_graph:
                raise GraphUnavailableError(f"Edge {source} -> {target} references undeclared node '{node_id}'")
        pkg_graph.add_edge(source, target)

    return pkg_graph.freeze()


def _first_graph(graphs: List[Any] | None, origin: str):
    if not graphs:
        raise GraphUnavailableError(f"No graph found in {origin}")
    return graphs[0]


def read_dot_graph_file(path: str) -> PkgGraph:
    if not os.path.isfile(path):
        raise GraphUnavailableError(f"Graph file not found: {path}")
    try:
        graphs = pydot.graph_from_dot_file(path, encoding="utf-8")
    except OSError as e:
        raise GraphUnavailableError(f"Unable to read {path}: {e}") from e
    except Exception as e:
        # parse error types differ between pydot releases
        raise GraphUnavailableError(f"Unable to parse {path}: {e}") from e
    return graph_from_pydot(_first_graph(graphs, path))


def read_dot_graph_string(data: str) -> PkgGraph:
    try:
        graphs = pydot.graph_from_dot_data(data)
    except Exception as e:
        raise GraphUnavailableError(f"Unable to parse DOT data: {e}") from e
    return graph_from_pydot(_first_graph(graphs, "DOT data"))


def graph_summary(pkg_graph: PkgGraph) -> Dict[str, int]:
    return {
        "nodes": len(pkg_graph),
        "edges": pkg_graph.edge_count(),
        "unresolved": sum(1 for n in pkg_graph.all_nodes() if n.state == NodeState.UNRESOLVED),
    }
