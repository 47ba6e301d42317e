"""Constant Usage Analyzer - Finds static constants declared across several files."""

from dataclasses import dataclass
from typing import List, Dict, Any
import logging
import re

from .symbols import Symbol

logger = logging.getLogger(__name__)

UNKNOWN_VALUE = "unknown"


@dataclass(frozen=True)
class ConstantUsage:
    """A static constant name declared in more than one file."""
    name: str
    value: str
    files: tuple
    extract_threshold: int = 3

    @property
    def count(self) -> int:
        return len(self.files)

    @property
    def should_extract(self) -> bool:
        """Centralize the constant once it is repeated in enough files."""
        return self.count >= self.extract_threshold

    def to_dict(self) -> Dict[str, Any]:
        return {
            'name': self.name,
            'value': self.value,
            'files': list(self.files),
            'count': self.count,
            'should_extract': self.should_extract,
        }


class ConstantUsageAnalyzer:
    """Groups baseline static constants by name across files."""

    VALUE_PATTERN = re.compile(r'=\s*([^;]+)')

    def __init__(self, min_files: int = 2, extract_threshold: int = 3):
        self.min_files = min_files
        self.extract_threshold = extract_threshold

    def analyze(self, baseline_symbols: List[Symbol]) -> List[ConstantUsage]:
        constant_map: Dict[str, Dict[str, Any]] = {}

        for symbol in baseline_symbols:
            if not symbol.is_static_constant:
                continue

            entry = constant_map.setdefault(symbol.name, {
                'value': self.extract_value(symbol.code),
                'files': [],
            })
            if symbol.file not in entry['files']:
                entry['files'].append(symbol.file)

        constants = [
            ConstantUsage(
                name=name,
                value=data['value'],
                files=tuple(data['files']),
                extract_threshold=self.extract_threshold,
            )
            for name, data in constant_map.items()
            if len(data['files']) >= self.min_files
        ]

        logger.debug("Constant analyzer found %d shared constants", len(constants))
        return constants

    def extract_value(self, code: Any) -> str:
        """Get the literal text after the first `=` up to `;`, or the unknown placeholder."""
        if not isinstance(code, str):
            return UNKNOWN_VALUE

        match = self.VALUE_PATTERN.search(code)
        if not match:
            return UNKNOWN_VALUE

        value = match.group(1).strip()
        return value or UNKNOWN_VALUE
