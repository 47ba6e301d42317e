"""Dependency Mapper - Orchestrates edge extraction, graph assembly and the dependency report."""

from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import List, Dict, Optional, Iterable, Any
import logging

from .symbols import Symbol, CallerLookup
from .dependency_graph import DependencyGraph, Edge, EdgeKind, build_dependency_graph
from .import_extractor import ImportEdgeExtractor
from .inheritance_extractor import InheritanceEdgeExtractor
from .call_extractor import CallEdgeExtractor
from .constant_usage_analyzer import ConstantUsage, ConstantUsageAnalyzer
from .dependency_tracker import DependencyTracker, DependencyChain, ImpactScope, Hotspot

logger = logging.getLogger(__name__)

NO_DEPENDENCIES_SUMMARY = "No cross-file dependencies detected"


@dataclass
class MapperConfiguration:
    """Configuration for dependency mapping."""
    source_suffix: Optional[str] = None  # None: most common suffix among PR files
    min_chain_depth: int = 3
    critical_chain_depth: int = 5
    extract_threshold: int = 3
    parallel_extraction: bool = False
    max_workers: Optional[int] = None
    include_cycle_components: bool = False
    unique_cycle_pairs: bool = False


@dataclass
class DependencyMap:
    """Complete result of one dependency mapping run."""
    edges: List[Edge]
    chains: List[DependencyChain]
    constants: List[ConstantUsage]
    cycles: List[DependencyChain]
    affected_files: Dict[str, List[str]]
    summary: str
    graph: DependencyGraph
    cycle_components: List[DependencyChain] = field(default_factory=list)
    tracker: DependencyTracker = field(default_factory=DependencyTracker, repr=False)

    def edges_of_kind(self, kind: EdgeKind) -> List[Edge]:
        return [edge for edge in self.edges if edge.kind == kind]

    def impact_scope(self, changed_files: Iterable[str], max_depth: int = 10) -> ImpactScope:
        """Files impacted, directly or transitively, by changing the given files."""
        return self.tracker.calculate_impact_scope(
            changed_files, self.graph, self.chains, max_depth=max_depth
        )

    def hotspots(self, limit: int = 10) -> List[Hotspot]:
        return self.tracker.find_dependency_hotspots(self.graph, limit=limit)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'summary': self.summary,
            'edges': [edge.to_dict() for edge in self.edges],
            'chains': [chain.to_dict() for chain in self.chains],
            'cycles': [chain.to_dict() for chain in self.cycles],
            'cycle_components': [chain.to_dict() for chain in self.cycle_components],
            'constants': [constant.to_dict() for constant in self.constants],
            'affected_files': {target: list(sources)
                               for target, sources in self.affected_files.items()},
        }


class DependencyMapper:
    """Maps cross-file dependencies for a pull request.

    Each call to ``map_dependencies`` builds a fresh graph; nothing is shared
    between runs.
    """

    def __init__(self, caller_lookup: Optional[CallerLookup] = None,
                 configuration: Optional[MapperConfiguration] = None):
        self.config = configuration or MapperConfiguration()

        self.import_extractor = ImportEdgeExtractor(source_suffix=self.config.source_suffix)
        self.inheritance_extractor = InheritanceEdgeExtractor()
        self.call_extractor = CallEdgeExtractor(caller_lookup)
        self.constant_analyzer = ConstantUsageAnalyzer(extract_threshold=self.config.extract_threshold)
        self.tracker = DependencyTracker(
            min_chain_depth=self.config.min_chain_depth,
            critical_chain_depth=self.config.critical_chain_depth,
        )

    def map_dependencies(self, pr_symbols: List[Symbol], pr_files: Dict[str, str],
                         baseline_symbols: List[Symbol]) -> DependencyMap:
        """Map dependencies across files."""
        known_files = [symbol.file for symbol in baseline_symbols]
        known_files.extend(symbol.file for symbol in pr_symbols)

        # Results are merged in this order, parallel or not
        tasks = [
            (self.import_extractor.extract, (pr_files, known_files)),
            (self.inheritance_extractor.extract, (pr_symbols, baseline_symbols)),
            (self.call_extractor.extract, (pr_symbols,)),
            (self.constant_analyzer.analyze, (baseline_symbols,)),
        ]
        import_edges, inheritance_edges, call_edges, constants = self._run_extractors(tasks)

        graph = build_dependency_graph(import_edges, inheritance_edges, call_edges)
        chains = self.tracker.find_dependency_chains(graph)
        cycles = self.tracker.detect_circular_dependencies(
            graph, unique_pairs=self.config.unique_cycle_pairs
        )
        cycle_components = []
        if self.config.include_cycle_components:
            cycle_components = self.tracker.find_cycle_components(graph)

        edges = list(graph.edges)
        logger.debug("Mapped %d edges, %d chains, %d cycles, %d constants",
                     len(edges), len(chains), len(cycles), len(constants))

        return DependencyMap(
            edges=edges,
            chains=chains,
            constants=constants,
            cycles=cycles,
            affected_files={target: list(sources)
                            for target, sources in graph.affected_files.items()},
            summary=self.generate_summary(edges, chains, cycles, constants),
            graph=graph,
            cycle_components=cycle_components,
            tracker=self.tracker,
        )

    def _run_extractors(self, tasks) -> List[Any]:
        if not self.config.parallel_extraction:
            return [func(*args) for func, args in tasks]

        with ThreadPoolExecutor(max_workers=self.config.max_workers) as executor:
            futures = [executor.submit(func, *args) for func, args in tasks]
            return [future.result() for future in futures]

    def generate_summary(self, edges: List[Edge], chains: List[DependencyChain],
                         cycles: List[DependencyChain], constants: List[ConstantUsage]) -> str:
        if not edges:
            return NO_DEPENDENCIES_SUMMARY

        return (
            f"Dependency map: {len(edges)} dependency(ies), {len(chains)} chain(s), "
            f"{len(cycles)} circular dependency(ies), {len(constants)} constant(s)"
        )

    def get_dependency_report(self, dependency_map: DependencyMap) -> str:
        """Generate a plain-text dependency report."""
        lines = [
            "Dependency Map Report",
            "=" * 50,
            dependency_map.summary,
        ]

        if dependency_map.chains:
            lines.append("\nDependency Chains:")
            for i, chain in enumerate(dependency_map.chains, 1):
                marker = " (critical)" if chain.critical else ""
                lines.append(f"   {i}. {' -> '.join(chain.files)}{marker}")

        lines.append("\nCircular Dependencies:")
        if dependency_map.cycles:
            for i, cycle in enumerate(dependency_map.cycles, 1):
                lines.append(f"   {i}. {' <-> '.join(cycle.files)}")
        else:
            lines.append("   None detected")

        if dependency_map.constants:
            lines.append("\nShared Constants:")
            for constant in dependency_map.constants:
                action = "extract" if constant.should_extract else "watch"
                lines.append(f"   {constant.name} = {constant.value} "
                             f"({constant.count} files, {action})")

        return "\n".join(lines)
