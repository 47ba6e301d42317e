"""Review snapshot loading - PR files, symbol tables and call relationships from JSON."""

import json
import logging
from dataclasses import dataclass, field
from typing import List, Dict, Any

from ..analyzers.symbols import Symbol, CallIndex

logger = logging.getLogger(__name__)


class SnapshotError(Exception):
    """Raised when a review snapshot cannot be read or is malformed."""


@dataclass
class ReviewSnapshot:
    """Everything the dependency mapper needs for one pull request."""
    pr_files: Dict[str, str] = field(default_factory=dict)
    pr_symbols: List[Symbol] = field(default_factory=list)
    baseline_symbols: List[Symbol] = field(default_factory=list)
    calls: List[Dict[str, Any]] = field(default_factory=list)

    def call_index(self) -> CallIndex:
        return CallIndex.from_dicts(self.calls)

    @classmethod
    def from_dict(cls, data: Any) -> 'ReviewSnapshot':
        if not isinstance(data, dict):
            raise SnapshotError("Snapshot must be a JSON object")

        pr_files = data.get('pr_files') or {}
        if not isinstance(pr_files, dict):
            raise SnapshotError("'pr_files' must map file paths to contents")

        calls = data.get('calls') or []
        for call in calls:
            if not isinstance(call, dict) or 'callee' not in call or 'file' not in call:
                raise SnapshotError(f"Malformed call relationship: {call!r}")

        return cls(
            pr_files={str(path): content or "" for path, content in pr_files.items()},
            pr_symbols=cls._parse_symbols(data.get('pr_symbols') or [], 'pr_symbols'),
            baseline_symbols=cls._parse_symbols(data.get('baseline_symbols') or [],
                                                'baseline_symbols'),
            calls=list(calls),
        )

    @staticmethod
    def _parse_symbols(items: Any, section: str) -> List[Symbol]:
        if not isinstance(items, list):
            raise SnapshotError(f"'{section}' must be a list")

        symbols = []
        for item in items:
            if not isinstance(item, dict):
                raise SnapshotError(f"Malformed symbol in '{section}': {item!r}")
            try:
                symbols.append(Symbol.from_dict(item))
            except (ValueError, TypeError) as e:
                raise SnapshotError(f"Malformed symbol in '{section}': {e}") from e
        return symbols


def load_snapshot(path: str) -> ReviewSnapshot:
    """Load a review snapshot from a JSON file."""
    try:
        with open(path, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise SnapshotError(f"Invalid JSON in {path}: {e}") from e
    except (OSError, UnicodeDecodeError) as e:
        raise SnapshotError(f"Cannot read {path}: {e}") from e

    snapshot = ReviewSnapshot.from_dict(data)
    logger.debug("Loaded snapshot %s: %d PR files, %d PR symbols, %d baseline symbols",
                 path, len(snapshot.pr_files), len(snapshot.pr_symbols),
                 len(snapshot.baseline_symbols))
    return snapshot
