"""Tests for pairwise numeric correlation."""

import pytest

from insight_engine.models import Dataset
from insight_engine.profiling.correlation import CorrelationAnalyzer, rank_correlations


def make_dataset(columns, rows):
    return Dataset(
        name="corr",
        columns=columns,
        column_types={c: "number" for c in columns},
        rows=rows,
    )


@pytest.fixture
def analyzer():
    return CorrelationAnalyzer()


class TestAnalyze:
    def test_perfect_linear(self, analyzer):
        ds = make_dataset(["x", "y"], [{"x": 1, "y": 2}, {"x": 2, "y": 4}, {"x": 3, "y": 6}])
        pairs = analyzer.analyze(ds)
        assert len(pairs) == 1
        assert pairs[0].x_column == "x" and pairs[0].y_column == "y"
        assert pairs[0].correlation == pytest.approx(1.0, abs=1e-9)

    def test_each_unordered_pair_once(self, analyzer):
        ds = make_dataset(["a", "b", "c"], [{"a": i, "b": i * i, "c": -i} for i in range(5)])
        pairs = analyzer.analyze(ds)
        assert [(p.x_column, p.y_column) for p in pairs] == [("a", "b"), ("a", "c"), ("b", "c")]

    def test_identical_columns_correlate_to_one(self, analyzer):
        ds = make_dataset(["x", "x_copy"], [{"x": v, "x_copy": v} for v in [3, 1, 4, 1, 5, 9]])
        assert analyzer.analyze(ds)[0].correlation == pytest.approx(1.0, abs=1e-9)

    def test_constant_column_is_zero(self, analyzer):
        ds = make_dataset(["x", "k"], [{"x": i, "k": 7} for i in range(5)])
        assert analyzer.analyze(ds)[0].correlation == 0.0

    def test_pairwise_complete_rows_only(self, analyzer):
        rows = [
            {"x": 1, "y": 2},
            {"x": 2, "y": None},
            {"x": None, "y": 100},
            {"x": 3, "y": 6},
            {"x": 4, "y": "n/a"},
            {"x": 5, "y": 10},
        ]
        pair = analyzer.analyze(make_dataset(["x", "y"], rows))[0]
        assert pair.point_count == 3
        assert pair.correlation == pytest.approx(1.0, abs=1e-9)
        assert [(p.x, p.y) for p in pair.scatter_data] == [(1, 2), (3, 6), (5, 10)]

    def test_scatter_cap_does_not_change_r(self):
        rows = [{"x": i, "y": (i % 7) * 3 + i} for i in range(200)]
        ds = make_dataset(["x", "y"], rows)
        capped = CorrelationAnalyzer(config={'max_scatter_points': 10}).analyze(ds)[0]
        full = CorrelationAnalyzer(config={'max_scatter_points': 1000}).analyze(ds)[0]
        assert len(capped.scatter_data) == 10
        assert len(full.scatter_data) == 200
        assert capped.point_count == 200
        assert capped.correlation == full.correlation
        assert capped.scatter_data[0].x == 0.0

    def test_default_scatter_cap(self, analyzer):
        ds = make_dataset(["x", "y"], [{"x": i, "y": 2 * i} for i in range(80)])
        assert len(analyzer.analyze(ds)[0].scatter_data) == 50

    def test_bounds(self, analyzer):
        rows = [{"a": (i * 37) % 11, "b": (i * 13) % 7, "c": i} for i in range(40)]
        for pair in analyzer.analyze(make_dataset(["a", "b", "c"], rows)):
            assert -1.0 <= pair.correlation <= 1.0

    def test_no_pairs(self, analyzer, empty_dataset):
        assert analyzer.analyze(empty_dataset) == []
        assert analyzer.analyze(make_dataset(["x"], [{"x": 1}])) == []

    def test_ignores_non_numeric_columns(self, analyzer, sales_dataset):
        pairs = analyzer.analyze(sales_dataset)
        assert [(p.x_column, p.y_column) for p in pairs] == [("sales", "units")]
        assert pairs[0].correlation == pytest.approx(1.0, abs=1e-9)


class TestRankCorrelations:
    def test_orders_by_absolute_value(self, analyzer):
        rows = [{"a": i, "b": -2 * i, "c": (i * 5) % 3} for i in range(10)]
        ranked = rank_correlations(analyzer.analyze(make_dataset(["a", "b", "c"], rows)))
        strengths = [abs(p.correlation) for p in ranked]
        assert strengths == sorted(strengths, reverse=True)
        assert (ranked[0].x_column, ranked[0].y_column) == ("a", "b")

    def test_limit_and_stable_ties(self, analyzer):
        rows = [{"a": i, "b": i, "c": i} for i in range(5)]
        pairs = analyzer.analyze(make_dataset(["a", "b", "c"], rows))
        ranked = rank_correlations(pairs, limit=2)
        assert [(p.x_column, p.y_column) for p in ranked] == [("a", "b"), ("a", "c")]
