"""Dependency Tracker - Finds dependency chains, circular dependencies and change impact."""

from dataclasses import dataclass, field
from typing import List, Dict, Set, Iterable, Tuple, Any
import logging

import networkx as nx

from .dependency_graph import DependencyGraph, EdgeSeverity

logger = logging.getLogger(__name__)

SEVERITY_WEIGHTS = {
    EdgeSeverity.HIGH: 3,
    EdgeSeverity.MEDIUM: 2,
    EdgeSeverity.LOW: 1,
}


@dataclass(frozen=True)
class DependencyChain:
    """A simple path through the dependency graph."""
    files: Tuple[str, ...]
    critical: bool
    description: str
    circular: bool = False

    @property
    def depth(self) -> int:
        return len(self.files)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'files': list(self.files),
            'depth': self.depth,
            'critical': self.critical,
            'circular': self.circular,
            'description': self.description,
        }


@dataclass
class ImpactScope:
    """Scope of impact for a change."""
    changed_files: List[str]
    direct_impacts: List[str]
    indirect_impacts: List[str]
    impact_depth: int
    affected_files: Set[str] = field(default_factory=set)
    critical_paths: List[DependencyChain] = field(default_factory=list)

    @property
    def total_impacts(self) -> int:
        return len(self.direct_impacts) + len(self.indirect_impacts)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'changed_files': list(self.changed_files),
            'direct_impacts': list(self.direct_impacts),
            'indirect_impacts': list(self.indirect_impacts),
            'total_impacts': self.total_impacts,
            'impact_depth': self.impact_depth,
            'critical_paths': [chain.to_dict() for chain in self.critical_paths],
        }


@dataclass
class Hotspot:
    """A file many others are coupled to."""
    file: str
    dependents: int
    dependencies: int
    coupling_weight: int  # sum of incoming edge severity weights
    centrality: float

    @property
    def high_risk(self) -> bool:
        return self.centrality > 0.1

    def to_dict(self) -> Dict[str, Any]:
        return {
            'file': self.file,
            'dependents': self.dependents,
            'dependencies': self.dependencies,
            'coupling_weight': self.coupling_weight,
            'centrality': round(self.centrality, 4),
            'high_risk': self.high_risk,
        }


class DependencyTracker:
    """Graph algorithms over an assembled dependency graph."""

    def __init__(self, min_chain_depth: int = 3, critical_chain_depth: int = 5):
        self.min_chain_depth = min_chain_depth
        self.critical_chain_depth = critical_chain_depth

    def find_dependency_chains(self, graph: DependencyGraph) -> List[DependencyChain]:
        """Find one deepest-first chain per unvisited start file.

        Starts are taken in adjacency order. Each file is used as a search
        start at most once, but may sit inside chains found from other starts.
        The successor policy is greedy: the first successor whose chain is
        strictly longer than the current path is taken and the rest are
        not explored. This is not a global longest-path search.
        """
        adjacency = graph.adjacency
        visited: Set[str] = set()
        chains = []

        for start in adjacency:
            if start in visited:
                continue

            path = self._walk_chain(start, adjacency, visited)
            if len(path) >= self.min_chain_depth:
                chains.append(DependencyChain(
                    files=path,
                    critical=len(path) > self.critical_chain_depth,
                    description=f"Dependency chain: {' -> '.join(path)}",
                ))

        logger.debug("Found %d dependency chains", len(chains))
        return chains

    def _walk_chain(self, start: str, adjacency: Dict[str, Tuple[str, ...]],
                    visited: Set[str]) -> Tuple[str, ...]:
        """Extend a path from `start` until no successor can be entered.

        A successor that is neither visited nor on the path always yields a
        strictly longer chain, so the first such successor is taken and the
        walk never backtracks.
        """
        path = [start]
        on_path = {start}
        visited.add(start)

        current = start
        while True:
            for successor in adjacency.get(current, ()):
                if successor not in visited and successor not in on_path:
                    break
            else:
                return tuple(path)

            visited.add(successor)
            on_path.add(successor)
            path.append(successor)
            current = successor

    def detect_circular_dependencies(self, graph: DependencyGraph,
                                     unique_pairs: bool = False) -> List[DependencyChain]:
        """Detect direct two-file cycles (A -> B and B -> A).

        Every edge A -> B whose target points back at A yields one circular
        chain, so a reciprocal pair is reported from both sides. With
        `unique_pairs` each unordered pair is reported once. Longer cycles
        are not reported here; see find_cycle_components.
        """
        adjacency = graph.adjacency
        seen: Set[frozenset] = set()
        cycles = []

        for source, targets in adjacency.items():
            for target in targets:
                if source not in adjacency.get(target, ()):
                    continue
                if unique_pairs:
                    pair = frozenset((source, target))
                    if pair in seen:
                        continue
                    seen.add(pair)

                cycles.append(DependencyChain(
                    files=(source, target),
                    critical=True,
                    circular=True,
                    description=f"Circular dependency: {source} <-> {target}",
                ))

        logger.debug("Found %d circular dependencies", len(cycles))
        return cycles

    def find_cycle_components(self, graph: DependencyGraph) -> List[DependencyChain]:
        """Find groups of more than two files that depend on each other in a loop."""
        order = {file_path: index for index, file_path in enumerate(graph.files)}
        simple_graph = nx.DiGraph(graph.graph)

        components = []
        for component in nx.strongly_connected_components(simple_graph):
            if len(component) <= 2:
                continue
            files = tuple(sorted(component, key=order.__getitem__))
            components.append(DependencyChain(
                files=files,
                critical=True,
                circular=True,
                description=f"Circular dependency group: {', '.join(files)}",
            ))

        components.sort(key=lambda chain: order[chain.files[0]])
        return components

    def calculate_impact_scope(self, changed_files: Iterable[str], graph: DependencyGraph,
                               chains: Iterable[DependencyChain] = (),
                               max_depth: int = 10) -> ImpactScope:
        """Walk the affected-files index outwards from the changed files."""
        changed = list(dict.fromkeys(changed_files))
        affected_files = set(changed)
        direct_impacts: List[str] = []
        indirect_impacts: List[str] = []

        frontier = changed
        depth = 0
        while frontier and depth < max_depth:
            next_frontier = []
            for current_file in frontier:
                for dependent in graph.dependents(current_file):
                    if dependent in affected_files:
                        continue
                    affected_files.add(dependent)
                    next_frontier.append(dependent)
                    if depth == 0:
                        direct_impacts.append(dependent)
                    else:
                        indirect_impacts.append(dependent)

            if not next_frontier:
                break
            depth += 1
            frontier = next_frontier

        critical_paths = self._find_critical_paths(changed, chains)

        return ImpactScope(
            changed_files=changed,
            direct_impacts=direct_impacts,
            indirect_impacts=indirect_impacts,
            impact_depth=depth,
            affected_files=affected_files,
            critical_paths=critical_paths,
        )

    def _find_critical_paths(self, changed_files: List[str],
                             chains: Iterable[DependencyChain]) -> List[DependencyChain]:
        """Chains passing through a changed file, longest first."""
        changed = set(changed_files)
        critical_paths = [chain for chain in chains if changed.intersection(chain.files)]
        critical_paths.sort(key=lambda chain: chain.depth, reverse=True)
        return critical_paths[:10]

    def find_dependency_hotspots(self, graph: DependencyGraph, limit: int = 10) -> List[Hotspot]:
        """Rank depended-upon files by severity-weighted incoming coupling.

        Ties are broken by number of dependent files, then by first
        appearance in the graph.
        """
        order = {file_path: index for index, file_path in enumerate(graph.files)}
        centrality = nx.betweenness_centrality(nx.DiGraph(graph.graph))

        coupling: Dict[str, int] = {}
        for edge in graph.edges:
            coupling[edge.target] = coupling.get(edge.target, 0) + SEVERITY_WEIGHTS[edge.severity]

        hotspots = [
            Hotspot(
                file=file_path,
                dependents=len(set(graph.dependents(file_path))),
                dependencies=len(set(graph.successors(file_path))),
                coupling_weight=weight,
                centrality=centrality.get(file_path, 0.0),
            )
            for file_path, weight in coupling.items()
        ]
        hotspots.sort(key=lambda h: (-h.coupling_weight, -h.dependents, order[h.file]))
        return hotspots[:limit]
