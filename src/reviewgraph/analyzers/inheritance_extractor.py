"""Inheritance Extractor - Links subclasses and implementors to the files declaring their parents."""

import logging
from typing import List, Dict, Optional

from .dependency_graph import Edge, EdgeKind, EdgeSeverity
from .symbols import Symbol, SymbolType

logger = logging.getLogger(__name__)


class InheritanceEdgeExtractor:
    """Resolves `extends`/`implements` names against the baseline symbol table."""

    def extract(self, pr_symbols: List[Symbol], baseline_symbols: List[Symbol]) -> List[Edge]:
        index = self._build_type_index(baseline_symbols)
        edges = []

        for symbol in pr_symbols:
            if symbol.type not in (SymbolType.CLASS, SymbolType.INTERFACE):
                continue

            if symbol.extends:
                # Classes extend classes, interfaces extend interfaces
                parent = self._lookup(index, symbol.type, symbol.extends)
                edge = self._make_edge(symbol, parent, EdgeKind.EXTENDS, symbol.extends)
                if edge:
                    edges.append(edge)

            for interface_name in symbol.implements:
                parent = self._lookup(index, SymbolType.INTERFACE, interface_name)
                edge = self._make_edge(symbol, parent, EdgeKind.IMPLEMENTS, interface_name)
                if edge:
                    edges.append(edge)

        logger.debug("Inheritance extractor produced %d edges", len(edges))
        return edges

    def _build_type_index(self, symbols: List[Symbol]) -> Dict[SymbolType, Dict[str, Symbol]]:
        """Index class and interface declarations by name; first declaration wins."""
        index: Dict[SymbolType, Dict[str, Symbol]] = {
            SymbolType.CLASS: {},
            SymbolType.INTERFACE: {},
        }
        for symbol in symbols:
            if symbol.type in index:
                index[symbol.type].setdefault(symbol.name, symbol)
        return index

    def _lookup(self, index: Dict[SymbolType, Dict[str, Symbol]], symbol_type: SymbolType,
                name: str) -> Optional[Symbol]:
        return index[symbol_type].get(name)

    def _make_edge(self, symbol: Symbol, parent: Optional[Symbol], kind: EdgeKind,
                   element: str) -> Optional[Edge]:
        if parent is None or parent.file == symbol.file:
            return None

        return Edge(
            source=symbol.file,
            target=parent.file,
            kind=kind,
            element=element,
            severity=EdgeSeverity.HIGH,
            line=symbol.start_line,
        )
