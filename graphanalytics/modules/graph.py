# graphanalytics/modules/graph.py
"""
In-memory package dependency graph.

Edges point from the dependent to the dependency ("a -> b" means a requires b).
The graph is built once by the loader, frozen, and then only read.
"""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Iterator, List

NO_SRPM_PATH = "<NO_SRPM_PATH>"


class GraphAnalyticsError(Exception):
    pass


class GraphFrozenError(GraphAnalyticsError):
    pass


class NodeType(Enum):
    UNKNOWN = "Unknown"
    META = "Meta"
    RUN = "Run"
    BUILD = "Build"
    GOAL = "Goal"
    REMOTE = "Remote"
    PURE_META = "PureMeta"
    PREBUILT = "PreBuilt"


class NodeState(Enum):
    UNKNOWN = "Unknown"
    META = "Meta"
    BUILD = "Build"
    BUILD_ERROR = "BuildError"
    UP_TO_DATE = "UpToDate"
    UNRESOLVED = "Unresolved"
    CACHED = "Cached"


def parse_enum(enum_cls, raw: str):
    """Case-insensitive lookup by value ("run", "Run", "RUN" all match)."""
    wanted = raw.strip().lower()
    for member in enum_cls:
        if member.value.lower() == wanted:
            return member
    raise ValueError(f"Unknown {enum_cls.__name__} '{raw}'")


@dataclass(frozen=True)
class VersionedPkg:
    name: str
    version: str = ""


@dataclass(frozen=True)
class PkgNode:
    node_id: str
    type: NodeType
    state: NodeState
    versioned_pkg: VersionedPkg
    srpm_path: str = NO_SRPM_PATH

    def __str__(self):
        return f"{self.versioned_pkg.name}({self.type.value}, {self.state.value})"


@dataclass
class PkgGraph:
    """
    Nodes by id plus forward (dependencies) and backward (dependents) adjacency.
    Adjacency lists keep insertion order so iteration is deterministic.
    """

    nodes: Dict[str, PkgNode] = field(default_factory=dict, init=False)
    _from: Dict[str, List[str]] = field(default_factory=dict, init=False, repr=False)
    _to: Dict[str, List[str]] = field(default_factory=dict, init=False, repr=False)
    _frozen: bool = field(default=False, init=False, repr=False)

    def _check_mutable(self):
        if self._frozen:
            raise GraphFrozenError("Graph is frozen and cannot be modified")

    def add_node(self, node: PkgNode) -> PkgNode:
        self._check_mutable()
        if node.node_id in self.nodes:
            raise ValueError(f"Duplicate node: {node.node_id}")
        self.nodes[node.node_id] = node
        self._from[node.node_id] = []
        self._to[node.node_id] = []
        return node

    def add_edge(self, dependent_id: str, dependency_id: str):
        self._check_mutable()
        if dependent_id not in self.nodes:
            raise ValueError(f"Unknown source node: {dependent_id}")
        if dependency_id not in self.nodes:
            raise ValueError(f"Unknown target node: {dependency_id}")
        if dependency_id in self._from[dependent_id]:
            return
        self._from[dependent_id].append(dependency_id)
        self._to[dependency_id].append(dependent_id)

    def freeze(self) -> "PkgGraph":
        self._frozen = True
        return self

    @property
    def frozen(self) -> bool:
        return self._frozen

    # -------------------------
    # read access
    # -------------------------
    def all_nodes(self) -> List[PkgNode]:
        return list(self.nodes.values())

    def all_run_nodes(self) -> List[PkgNode]:
        return [n for n in self.nodes.values() if n.type == NodeType.RUN]

    def node(self, node_id: str) -> PkgNode:
        return self.nodes[node_id]

    def dependencies(self, node: PkgNode) -> Iterator[PkgNode]:
        """Nodes `node` has an edge to (what it requires)."""
        for node_id in self._from.get(node.node_id, []):
            yield self.nodes[node_id]

    def dependents(self, node: PkgNode) -> Iterator[PkgNode]:
        """Nodes with an edge into `node` (who requires it)."""
        for node_id in self._to.get(node.node_id, []):
            yield self.nodes[node_id]

    def edge_count(self) -> int:
        return sum(len(deps) for deps in self._from.values())

    def breadth_first(self, start: PkgNode) -> Iterator[PkgNode]:
        """
        Walk every node reachable from `start` along dependency edges,
        `start` included, each node exactly once.
        """
        visited = {start.node_id}
        queue = deque([start.node_id])
        while queue:
            node_id = queue.popleft()
            yield self.nodes[node_id]
            for dep_id in self._from.get(node_id, []):
                if dep_id in visited:
                    continue
                visited.add(dep_id)
                queue.append(dep_id)

    def __len__(self):
        return len(self.nodes)

    def __contains__(self, node_id):
        return node_id in self.nodes
