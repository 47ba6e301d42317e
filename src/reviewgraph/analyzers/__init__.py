"""Cross-file dependency analysis."""

from .symbols import Symbol, SymbolType, CallSite, CallerLookup, CallRelationship, CallIndex
from .dependency_graph import (
    DependencyGraph, Edge, EdgeKind, EdgeSeverity, build_dependency_graph
)
from .import_extractor import ImportEdgeExtractor
from .inheritance_extractor import InheritanceEdgeExtractor
from .call_extractor import CallEdgeExtractor
from .constant_usage_analyzer import ConstantUsage, ConstantUsageAnalyzer
from .dependency_tracker import DependencyTracker, DependencyChain, ImpactScope, Hotspot
from .dependency_mapper import DependencyMapper, DependencyMap, MapperConfiguration

__all__ = [
    "Symbol", "SymbolType", "CallSite", "CallerLookup", "CallRelationship", "CallIndex",
    "DependencyGraph", "Edge", "EdgeKind", "EdgeSeverity", "build_dependency_graph",
    "ImportEdgeExtractor", "InheritanceEdgeExtractor", "CallEdgeExtractor",
    "ConstantUsage", "ConstantUsageAnalyzer",
    "DependencyTracker", "DependencyChain", "ImpactScope", "Hotspot",
    "DependencyMapper", "DependencyMap", "MapperConfiguration",
]
