"""Dependency Graph - Assembles extracted edges into a frozen file-level graph."""

import logging
from dataclasses import dataclass
from typing import List, Dict, Optional, Iterable, Tuple, Any
from enum import Enum

import networkx as nx

logger = logging.getLogger(__name__)


class EdgeKind(Enum):
    """Kinds of file-to-file relationships."""
    IMPORT = "import"  # best-effort module guess, never authoritative
    EXTENDS = "extends"
    IMPLEMENTS = "implements"
    CALLS = "calls"
    USES = "uses"


class EdgeSeverity(Enum):
    """How strongly the source file is coupled to the target file."""
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


@dataclass(frozen=True)
class Edge:
    """A directed dependency: `source` depends on `target`."""
    source: str
    target: str
    kind: EdgeKind
    element: str  # symbol or module name
    severity: EdgeSeverity
    line: Optional[int] = None
    confidence: float = 1.0
    verified: bool = True

    def to_dict(self) -> Dict[str, Any]:
        return {
            'from': self.source,
            'to': self.target,
            'kind': self.kind.value,
            'element': self.element,
            'line': self.line,
            'severity': self.severity.value,
            'confidence': self.confidence,
            'verified': self.verified,
        }


class DependencyGraph:
    """Read-only view over a set of edges.

    Holds three views built once from the edge sequence:

    * ``adjacency``: source file -> target files, sources ordered by their
      first appearance as an edge source, targets in edge order with
      duplicates kept (one entry per edge).
    * ``affected_files``: target file -> files holding an edge into it.
    * ``graph``: a frozen ``networkx.MultiDiGraph`` with one multi-edge per
      ``Edge``, used for analytics.
    """

    def __init__(self, edges: Iterable[Edge]):
        self._edges: Tuple[Edge, ...] = tuple(edges)
        self._adjacency: Dict[str, List[str]] = {}
        self._affected: Dict[str, List[str]] = {}

        graph = nx.MultiDiGraph()
        for edge in self._edges:
            self._adjacency.setdefault(edge.source, []).append(edge.target)
            self._affected.setdefault(edge.target, []).append(edge.source)
            graph.add_edge(edge.source, edge.target,
                           kind=edge.kind.value, element=edge.element,
                           severity=edge.severity.value)

        self._graph = nx.freeze(graph)
        logger.debug("Assembled dependency graph: %d files, %d edges",
                     graph.number_of_nodes(), len(self._edges))

    @property
    def edges(self) -> Tuple[Edge, ...]:
        return self._edges

    @property
    def graph(self) -> nx.MultiDiGraph:
        return self._graph

    @property
    def adjacency(self) -> Dict[str, Tuple[str, ...]]:
        return {source: tuple(targets) for source, targets in self._adjacency.items()}

    @property
    def affected_files(self) -> Dict[str, Tuple[str, ...]]:
        return {target: tuple(sources) for target, sources in self._affected.items()}

    @property
    def files(self) -> List[str]:
        """All files touching at least one edge, in order of first appearance."""
        return list(self._graph.nodes())

    def successors(self, file_path: str) -> Tuple[str, ...]:
        """Get the files the given file points to (one entry per edge)."""
        return tuple(self._adjacency.get(file_path, ()))

    def dependents(self, file_path: str) -> Tuple[str, ...]:
        """Get the files that hold an edge into the given file."""
        return tuple(self._affected.get(file_path, ()))

    def has_edge(self, source: str, target: str) -> bool:
        return target in self._adjacency.get(source, ())

    def __len__(self) -> int:
        return len(self._edges)

    def __repr__(self) -> str:
        return f"DependencyGraph(files={self._graph.number_of_nodes()}, edges={len(self._edges)})"


def build_dependency_graph(*edge_groups: Iterable[Edge]) -> DependencyGraph:
    """Concatenate edge groups in the given order and assemble the graph."""
    edges: List[Edge] = []
    for group in edge_groups:
        edges.extend(group)
    return DependencyGraph(edges)
