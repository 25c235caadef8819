import pytest

from stormrank.models import AggregateRow
from stormrank.rank import rank
from stormrank.tidy import TIDY_COLUMNS, display_ranks, reshape, to_frame


def _row(category, a, b):
    return AggregateRow(category, {"a": a, "b": b})


@pytest.fixture
def tied_rows():
    return [_row("A", 1, 1), _row("B", 2, 0), _row("C", 1, 1), _row("D", 1, 2)]


class TestRank:

    def test_primary_then_secondary_then_first_occurrence(self, tied_rows):
        ranked = rank(tied_rows, "a", "b")
        assert [r.category for r in ranked] == ["B", "D", "A", "C"]

    def test_deterministic(self, tied_rows):
        assert rank(tied_rows, "a", "b") == rank(tied_rows, "a", "b")

    def test_truncates(self):
        rows = [_row(f"c{i}", i, 0) for i in range(15)]
        ranked = rank(rows, "a", "b", n=10)
        assert len(ranked) == 10
        assert ranked[0].category == "c14"
        assert ranked[-1].category == "c5"

    def test_fewer_than_n_returns_all(self, tied_rows):
        assert len(rank(tied_rows, "a", "b", n=10)) == 4

    def test_zero_n(self, tied_rows):
        assert rank(tied_rows, "a", "b", n=0) == []

    def test_missing_metric_counts_as_zero(self):
        rows = [AggregateRow("X", {}), AggregateRow("Y", {"a": 1})]
        assert [r.category for r in rank(rows, "a", "b")] == ["Y", "X"]

    def test_input_not_modified(self, tied_rows):
        before = list(tied_rows)
        rank(tied_rows, "a", "b")
        assert tied_rows == before


class TestReshape:

    def test_completeness(self, tied_rows):
        ranked = rank(tied_rows, "a", "b")
        assert len(reshape(ranked, ["a", "b"])) == len(ranked) * 2

    def test_rows_follow_rank_and_metric_order(self, tied_rows):
        tidy = reshape(rank(tied_rows, "a", "b"), ["b", "a"])
        assert [(t.category, t.metric) for t in tidy[:4]] == [("B", "b"), ("B", "a"), ("D", "b"), ("D", "a")]

    def test_display_rank_by_total_ascending(self):
        # ranked by "a" but D has the largest total
        ranked = [_row("B", 5, 0), _row("D", 4, 10), _row("A", 1, 1)]
        ranks = display_ranks(ranked, ["a", "b"])
        assert ranks == {"A": 1, "B": 2, "D": 3}
        tidy = reshape(ranked, ["a", "b"])
        assert {t.category: t.display_rank for t in tidy} == ranks

    def test_equal_totals_keep_rank_order(self):
        ranked = [_row("X", 2, 0), _row("Y", 1, 1)]
        assert display_ranks(ranked, ["a", "b"]) == {"X": 1, "Y": 2}

    def test_empty(self):
        assert reshape([], ["a", "b"]) == []

    def test_to_frame(self, tied_rows):
        df = to_frame(reshape(rank(tied_rows, "a", "b", n=2), ["a", "b"]))
        assert list(df.columns) == TIDY_COLUMNS
        assert len(df) == 4
        assert df.iloc[0]["category"] == "B"
