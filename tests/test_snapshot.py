"""Tests for review snapshot loading."""

import pytest

from reviewgraph.analyzers import SymbolType
from reviewgraph.core import ReviewSnapshot, SnapshotError, load_snapshot


class TestLoadSnapshot:
    """Test load_snapshot."""

    def test_loads_all_sections(self, snapshot_file):
        snapshot = load_snapshot(str(snapshot_file))

        assert list(snapshot.pr_files) == ["src/OrderService.java"]
        assert [s.name for s in snapshot.pr_symbols] == ["OrderService", "placeOrder"]
        assert snapshot.pr_symbols[0].extends == "BaseService"
        assert snapshot.baseline_symbols[2].type == SymbolType.FIELD
        assert snapshot.baseline_symbols[2].is_static_constant

    def test_call_index(self, snapshot_file):
        index = load_snapshot(str(snapshot_file)).call_index()

        sites = index.find_callers("placeOrder")
        assert [(s.file, s.line) for s in sites] == [("src/CheckoutController.java", 42)]

    def test_missing_sections_default_to_empty(self):
        snapshot = ReviewSnapshot.from_dict({})

        assert snapshot.pr_files == {}
        assert snapshot.pr_symbols == []
        assert snapshot.baseline_symbols == []
        assert len(snapshot.call_index()) == 0

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text("{not json", encoding="utf-8")

        with pytest.raises(SnapshotError, match="Invalid JSON"):
            load_snapshot(str(path))

    def test_missing_file(self, tmp_path):
        with pytest.raises(SnapshotError, match="Cannot read"):
            load_snapshot(str(tmp_path / "missing.json"))

    @pytest.mark.parametrize("data", [
        [],
        {"pr_files": ["A.java"]},
        {"pr_symbols": {"name": "A"}},
        {"baseline_symbols": [{"name": "A", "type": "macro", "file": "A.c"}]},
        {"baseline_symbols": ["A"]},
        {"calls": [{"caller": "a"}]},
    ])
    def test_malformed_snapshot(self, data):
        with pytest.raises(SnapshotError):
            ReviewSnapshot.from_dict(data)
