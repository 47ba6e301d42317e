"""Shared fixtures for reviewgraph tests."""

import json

import pytest

from reviewgraph.analyzers import (
    Symbol, SymbolType, Edge, EdgeKind, EdgeSeverity, CallIndex, CallRelationship
)


@pytest.fixture
def make_symbol():
    """Factory for Symbol values."""
    def _make(name, symbol_type, file, **kwargs):
        if isinstance(symbol_type, str):
            symbol_type = SymbolType(symbol_type)
        return Symbol(name=name, type=symbol_type, file=file, **kwargs)
    return _make


@pytest.fixture
def make_edge():
    """Factory for edges between files; kind defaults to calls."""
    def _make(source, target, kind=EdgeKind.CALLS, element="x", severity=EdgeSeverity.HIGH, **kwargs):
        return Edge(source=source, target=target, kind=kind, element=element,
                    severity=severity, **kwargs)
    return _make


@pytest.fixture
def make_call_index():
    """Factory for a CallIndex from (caller, callee, file, line) tuples."""
    def _make(*calls):
        return CallIndex([CallRelationship(caller, callee, file, line)
                          for caller, callee, file, line in calls])
    return _make


@pytest.fixture
def snapshot_data():
    """A small review snapshot with every kind of dependency."""
    return {
        "pr_files": {
            "src/OrderService.java": (
                "package com.acme.orders;\n"
                "\n"
                "import com.acme.billing.InvoiceClient;\n"
                "import java.util.*;\n"
                "\n"
                "public class OrderService extends BaseService {}\n"
            ),
        },
        "pr_symbols": [
            {"name": "OrderService", "type": "class", "file": "src/OrderService.java",
             "startLine": 6, "extends": "BaseService"},
            {"name": "placeOrder", "type": "method", "file": "src/OrderService.java",
             "startLine": 8},
        ],
        "baseline_symbols": [
            {"name": "BaseService", "type": "class", "file": "src/BaseService.java", "startLine": 1},
            {"name": "InvoiceClient", "type": "class", "file": "src/InvoiceClient.java",
             "startLine": 1},
            {"name": "MAX_RETRIES", "type": "field", "file": "src/A.java", "isStatic": True,
             "isConstant": True, "code": "static final int MAX_RETRIES = 3;"},
            {"name": "MAX_RETRIES", "type": "field", "file": "src/B.java", "isStatic": True,
             "isConstant": True, "code": "static final int MAX_RETRIES = 5;"},
        ],
        "calls": [
            {"caller": "checkout", "callee": "placeOrder", "file": "src/CheckoutController.java",
             "line": 42},
        ],
    }


@pytest.fixture
def snapshot_file(tmp_path, snapshot_data):
    path = tmp_path / "snapshot.json"
    path.write_text(json.dumps(snapshot_data), encoding="utf-8")
    return path
