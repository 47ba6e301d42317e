"""Symbols - Extracted code declarations and the call-site lookup used to resolve callers."""

from dataclasses import dataclass, field
from typing import List, Dict, Optional, Any, Protocol
from enum import Enum


class SymbolType(Enum):
    """Kinds of extracted declarations."""
    CLASS = "class"
    INTERFACE = "interface"
    METHOD = "method"
    FUNCTION = "function"
    FIELD = "field"
    CONSTRUCTOR = "constructor"
    VARIABLE = "variable"
    ENUM = "enum"


@dataclass
class Symbol:
    """A declaration produced by the symbol extractor."""
    name: str
    type: SymbolType
    file: str
    start_line: int = 0
    end_line: Optional[int] = None
    extends: Optional[str] = None
    implements: List[str] = field(default_factory=list)
    is_static: bool = False
    is_constant: bool = False
    code: Optional[str] = None

    @property
    def is_callable(self) -> bool:
        return self.type in (SymbolType.METHOD, SymbolType.FUNCTION)

    @property
    def is_static_constant(self) -> bool:
        return self.type == SymbolType.FIELD and self.is_static and self.is_constant

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Symbol':
        """Build a symbol from extractor output (snake_case or camelCase keys)."""
        def pick(*keys, default=None):
            for key in keys:
                if key in data and data[key] is not None:
                    return data[key]
            return default

        try:
            symbol_type = SymbolType(str(pick('type', default='')).lower())
        except ValueError:
            raise ValueError(f"Unknown symbol type: {data.get('type')!r}")

        if 'name' not in data or 'file' not in data:
            raise ValueError(f"Symbol requires 'name' and 'file': {data!r}")

        return cls(
            name=data['name'],
            type=symbol_type,
            file=data['file'],
            start_line=int(pick('start_line', 'startLine', default=0)),
            end_line=pick('end_line', 'endLine'),
            extends=pick('extends'),
            implements=list(pick('implements', default=[])),
            is_static=bool(pick('is_static', 'isStatic', default=False)),
            is_constant=bool(pick('is_constant', 'isConstant', default=False)),
            code=pick('code'),
        )


@dataclass
class CallSite:
    """A location that calls a symbol."""
    file: str
    line: int
    caller: Optional[str] = None


class CallerLookup(Protocol):
    """Anything that can answer "who calls symbol X"."""

    def find_callers(self, symbol_name: str) -> List[CallSite]:
        ...


@dataclass
class CallRelationship:
    """A caller -> callee relationship recorded by the indexer."""
    caller: str
    callee: str
    file: str
    line: int


class CallIndex:
    """In-memory call-site lookup keyed by plain symbol name."""

    def __init__(self, relationships: Optional[List[CallRelationship]] = None):
        self._by_callee: Dict[str, List[CallRelationship]] = {}
        self._by_caller: Dict[str, List[CallRelationship]] = {}
        for relationship in relationships or []:
            self.add(relationship)

    def add(self, relationship: CallRelationship):
        self._by_callee.setdefault(relationship.callee, []).append(relationship)
        self._by_caller.setdefault(relationship.caller, []).append(relationship)

    def find_callers(self, symbol_name: str) -> List[CallSite]:
        """Get the call sites that reference the given name, in insertion order."""
        return [
            CallSite(file=rel.file, line=rel.line, caller=rel.caller)
            for rel in self._by_callee.get(symbol_name, [])
        ]

    def find_callees(self, symbol_name: str) -> List[CallRelationship]:
        return list(self._by_caller.get(symbol_name, []))

    def __len__(self) -> int:
        return sum(len(rels) for rels in self._by_callee.values())

    @classmethod
    def from_dicts(cls, items: List[Dict[str, Any]]) -> 'CallIndex':
        return cls([
            CallRelationship(
                caller=item.get('caller', ''),
                callee=item['callee'],
                file=item['file'],
                line=int(item.get('line', 0)),
            )
            for item in items
        ])
