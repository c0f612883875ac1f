# graphanalytics/modules/reports.py
"""
Report generators.

Each generator walks the whole graph, anchoring on every node once, and
collects (key, name) pairs in its own Aggregator:

 - direct unresolved: unresolved run nodes -> their immediate dependents
 - indirect unresolved: unresolved nodes -> every package transitively needing them
 - direct closest: SRPMs -> their unmet immediate build requirements
 - indirect closest: SRPMs -> every unmet requirement in their closure

Generators share nothing but the (frozen) graph, so they can run on a pool.
"""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Callable, List

from graphanalytics.modules.aggregate import Aggregator
from graphanalytics.modules.graph import NodeState, NodeType, PkgGraph, PkgNode
from graphanalytics.modules.ranking import RankedPair, rank
from graphanalytics.modules.resolver import dependency_name, srpm_name

DEFAULT_MAX_RESULTS = 10
DEFAULT_WORKERS = 4

UNMET_STATES = (NodeState.BUILD, NodeState.UNRESOLVED)


def directly_most_unresolved(pkg_graph: PkgGraph) -> Aggregator:
    unresolved_dependents = Aggregator()

    for node in pkg_graph.all_run_nodes():
        if node.state != NodeState.UNRESOLVED:
            continue

        pkg_name = node.versioned_pkg.name
        for dependent in pkg_graph.dependents(node):
            # goal nodes are synthetic targets, not blocked packages
            if dependent.type == NodeType.GOAL:
                continue
            unresolved_dependents.insert_if_missing(pkg_name, dependency_name(dependent))

    return unresolved_dependents


def indirectly_most_unresolved(pkg_graph: PkgGraph) -> Aggregator:
    unresolved_dependents = Aggregator()

    for node in pkg_graph.all_nodes():
        if node.type not in (NodeType.RUN, NodeType.BUILD):
            continue
        if node.state == NodeState.UNRESOLVED:
            continue

        dependent_name = dependency_name(node)
        for dependency in pkg_graph.breadth_first(node):
            if dependency.state == NodeState.UNRESOLVED:
                unresolved_dependents.insert_if_missing(dependency.versioned_pkg.name, dependent_name)

    return unresolved_dependents


def _build_anchors(pkg_graph: PkgGraph) -> List[PkgNode]:
    return [
        node for node in pkg_graph.all_nodes()
        if node.type == NodeType.BUILD and node.state != NodeState.UNRESOLVED
    ]


def _is_unmet(dependency: PkgNode, anchor_srpm: str) -> bool:
    if dependency.state not in UNMET_STATES:
        return False
    # requirements provided by the same srpm don't block it
    return srpm_name(dependency) != anchor_srpm


def directly_closest_to_unblocked(pkg_graph: PkgGraph) -> Aggregator:
    srpms_blocked_by = Aggregator()

    for node in _build_anchors(pkg_graph):
        pkg_srpm = srpm_name(node)
        for dependency in pkg_graph.dependencies(node):
            if _is_unmet(dependency, pkg_srpm):
                srpms_blocked_by.insert_if_missing(pkg_srpm, dependency_name(dependency))

    return srpms_blocked_by


def indirectly_closest_to_unblocked(pkg_graph: PkgGraph) -> Aggregator:
    srpms_blocked_by = Aggregator()

    for node in _build_anchors(pkg_graph):
        pkg_srpm = srpm_name(node)
        # filtered nodes are skipped but still walked through
        for dependency in pkg_graph.breadth_first(node):
            if _is_unmet(dependency, pkg_srpm):
                srpms_blocked_by.insert_if_missing(pkg_srpm, dependency_name(dependency))

    return srpms_blocked_by


@dataclass(frozen=True)
class ReportKind:
    title: str
    description: str
    inverse: bool
    generate: Callable[[PkgGraph], Aggregator]


@dataclass
class Report:
    title: str
    description: str
    inverse: bool
    entries: List[RankedPair] = field(default_factory=list)
    total: int = 0


# presentation order
REPORT_KINDS = [
    ReportKind("[DIRECT] Most common unresolved dependencies",
               "direct dependents", False, directly_most_unresolved),
    ReportKind("[DIRECT] SRPMs closest to being ready to build",
               "unmet dependencies", True, directly_closest_to_unblocked),
    ReportKind("[INDIRECT] Most common unresolved dependencies",
               "total dependents", False, indirectly_most_unresolved),
    ReportKind("[INDIRECT] SRPMs closest to being ready to build",
               "total unmet dependencies", True, indirectly_closest_to_unblocked),
]


def build_report(pkg_graph: PkgGraph, kind: ReportKind, max_results: int = DEFAULT_MAX_RESULTS) -> Report:
    data = kind.generate(pkg_graph)
    return Report(
        title=kind.title,
        description=kind.description,
        inverse=kind.inverse,
        entries=rank(data, max_results, inverse=kind.inverse),
        total=len(data),
    )


def analyze_graph(pkg_graph: PkgGraph,
                  max_results: int = DEFAULT_MAX_RESULTS,
                  workers: int = DEFAULT_WORKERS) -> List[Report]:
    """
    Run every report over the graph. Reports come back in presentation
    order whatever order the workers finish in.
    """
    if max_results < 0:
        raise ValueError(f"max_results must be >= 0, got {max_results}")
    if workers < 1:
        raise ValueError(f"workers must be >= 1, got {workers}")

    if workers == 1:
        return [build_report(pkg_graph, kind, max_results) for kind in REPORT_KINDS]

    with ThreadPoolExecutor(max_workers=min(workers, len(REPORT_KINDS))) as ex:
        futures = [ex.submit(build_report, pkg_graph, kind, max_results) for kind in REPORT_KINDS]
        return [fut.result() for fut in futures]
