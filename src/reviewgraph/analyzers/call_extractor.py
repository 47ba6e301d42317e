"""Call Extractor - Adds caller-file to callee-file edges for the PR's methods and functions."""

import logging
from typing import List, Optional

from .dependency_graph import Edge, EdgeKind, EdgeSeverity
from .symbols import Symbol, CallerLookup

logger = logging.getLogger(__name__)


class CallEdgeExtractor:
    """Asks the caller lookup who calls each PR method or function.

    Lookups are by plain name, so overloaded or shadowed names in other
    files produce edges too.
    """

    def __init__(self, caller_lookup: Optional[CallerLookup] = None):
        self.caller_lookup = caller_lookup

    def extract(self, pr_symbols: List[Symbol]) -> List[Edge]:
        if self.caller_lookup is None:
            return []

        edges = []
        for symbol in pr_symbols:
            if not symbol.is_callable:
                continue

            for call_site in self.caller_lookup.find_callers(symbol.name):
                if call_site.file == symbol.file:
                    continue

                edges.append(Edge(
                    source=call_site.file,
                    target=symbol.file,
                    kind=EdgeKind.CALLS,
                    element=symbol.name,
                    severity=EdgeSeverity.HIGH,
                    line=call_site.line,
                ))

        logger.debug("Call extractor produced %d edges", len(edges))
        return edges
