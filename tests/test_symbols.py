"""Tests for symbols and the in-memory call index."""

import pytest

from reviewgraph.analyzers import Symbol, SymbolType, CallIndex, CallRelationship


class TestSymbol:
    """Test Symbol construction."""

    def test_from_dict_accepts_camel_case(self):
        symbol = Symbol.from_dict({
            "name": "MAX_RETRIES", "type": "field", "file": "A.java",
            "startLine": 7, "isStatic": True, "isConstant": True,
            "code": "static final int MAX_RETRIES = 3;",
        })

        assert symbol.type == SymbolType.FIELD
        assert symbol.start_line == 7
        assert symbol.is_static_constant

    def test_from_dict_accepts_snake_case(self):
        symbol = Symbol.from_dict({
            "name": "Child", "type": "Class", "file": "Child.java",
            "start_line": 3, "extends": "Parent", "implements": ["Runnable"],
        })

        assert symbol.type == SymbolType.CLASS
        assert symbol.extends == "Parent"
        assert symbol.implements == ["Runnable"]

    def test_from_dict_rejects_unknown_type(self):
        with pytest.raises(ValueError):
            Symbol.from_dict({"name": "x", "type": "macro", "file": "x.c"})

    def test_from_dict_requires_name_and_file(self):
        with pytest.raises(ValueError):
            Symbol.from_dict({"name": "x", "type": "function"})

    def test_callable_types(self, make_symbol):
        assert make_symbol("run", "method", "A.java").is_callable
        assert make_symbol("main", "function", "a.py").is_callable
        assert not make_symbol("A", "class", "A.java").is_callable

    def test_static_constant_requires_both_flags(self, make_symbol):
        assert not make_symbol("X", "field", "A.java", is_static=True).is_static_constant
        assert not make_symbol("X", "field", "A.java", is_constant=True).is_static_constant


class TestCallIndex:
    """Test CallIndex lookups."""

    def test_find_callers_in_insertion_order(self):
        index = CallIndex([
            CallRelationship("a", "save", "A.java", 10),
            CallRelationship("b", "load", "B.java", 4),
            CallRelationship("c", "save", "C.java", 2),
        ])

        callers = index.find_callers("save")

        assert [(site.file, site.line) for site in callers] == [("A.java", 10), ("C.java", 2)]
        assert callers[0].caller == "a"
        assert len(index) == 3

    def test_unknown_name_has_no_callers(self):
        assert CallIndex().find_callers("missing") == []

    def test_find_callees(self):
        index = CallIndex.from_dicts([
            {"caller": "main", "callee": "run", "file": "Main.java", "line": 3},
        ])

        assert [rel.callee for rel in index.find_callees("main")] == ["run"]
