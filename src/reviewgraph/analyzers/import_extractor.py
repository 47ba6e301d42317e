"""Import Extractor - Builds best-effort file dependencies from import statements."""

from collections import Counter
from typing import List, Dict, Optional, Iterable
import logging
import os
import re

from .dependency_graph import Edge, EdgeKind, EdgeSeverity

logger = logging.getLogger(__name__)


class ImportEdgeExtractor:
    """Turns `import [static] a.b.C` lines into edges towards a guessed file.

    The target is guessed from the last dotted segment plus a source suffix,
    so `import com.acme.util.Helper;` points at `Helper.java`. This is a
    naming heuristic, not a module resolver: edges are marked unverified.
    """

    IMPORT_PATTERN = re.compile(
        r'^[ \t]*import[ \t]+(?:static[ \t]+)?(\w+(?:\.\w+)*)(\.\*)?[ \t]*;?',
        re.MULTILINE,
    )
    DEFAULT_SUFFIX = '.java'
    RESOLVED_CONFIDENCE = 0.8
    GUESSED_CONFIDENCE = 0.5

    def __init__(self, source_suffix: Optional[str] = None):
        self.source_suffix = source_suffix

    def extract(self, pr_files: Dict[str, str], known_files: Iterable[str] = ()) -> List[Edge]:
        """Extract import edges from every PR file."""
        suffix = self.source_suffix or self.detect_source_suffix(pr_files.keys())
        file_name_map = self._build_file_name_map(list(pr_files.keys()) + list(known_files))

        edges = []
        for file_path, content in pr_files.items():
            edges.extend(self._parse_file_imports(file_path, content or "", suffix, file_name_map))

        logger.debug("Import extractor produced %d edges (suffix %s)", len(edges), suffix)
        return edges

    def detect_source_suffix(self, file_paths: Iterable[str]) -> str:
        """Pick the most common file suffix, first seen wins ties."""
        suffixes = Counter(
            os.path.splitext(path)[1] for path in file_paths
            if os.path.splitext(path)[1]
        )
        if not suffixes:
            return self.DEFAULT_SUFFIX
        return suffixes.most_common(1)[0][0]

    def guess_target_file(self, module_name: str, suffix: str) -> Optional[str]:
        """Guess the file name providing a dotted module path."""
        class_name = module_name.split('.')[-1]
        if not class_name:
            return None
        return f"{class_name}{suffix}"

    def _build_file_name_map(self, file_paths: List[str]) -> Dict[str, str]:
        """Build mapping from base file names to the first known path (sorted)."""
        file_name_map = {}
        for file_path in sorted(set(file_paths)):
            file_name_map.setdefault(os.path.basename(file_path), file_path)
        return file_name_map

    def _parse_file_imports(self, file_path: str, content: str, suffix: str,
                            file_name_map: Dict[str, str]) -> List[Edge]:
        edges = []

        for match in self.IMPORT_PATTERN.finditer(content):
            module_name, wildcard = match.group(1), match.group(2)
            if wildcard:
                # Package import, no single file to point at
                continue

            guessed = self.guess_target_file(module_name, suffix)
            if not guessed:
                continue

            target_file = file_name_map.get(guessed)
            confidence = self.RESOLVED_CONFIDENCE
            if target_file is None:
                target_file = guessed
                confidence = self.GUESSED_CONFIDENCE

            if target_file == file_path:
                continue

            edges.append(Edge(
                source=file_path,
                target=target_file,
                kind=EdgeKind.IMPORT,
                element=module_name,
                severity=EdgeSeverity.MEDIUM,
                line=content.count('\n', 0, match.start()) + 1,
                confidence=confidence,
                verified=False,
            ))

        return edges
