"""Tests for the AI context payload."""

import json

import pytest

from insight_engine.models import Dataset
from insight_engine.summary.context import ContextBuilder
from insight_engine.summary.summarizer import DataSummarizer


@pytest.fixture
def big_dataset():
    rows = [
        {"region": ["East", "West", "North"][i % 3], "sales": i, "cost": i * 0.5 + (i % 4)}
        for i in range(500)
    ]
    return Dataset(
        name="big.csv",
        columns=["region", "sales", "cost"],
        column_types={"region": "string", "sales": "number", "cost": "number"},
        rows=rows,
    )


class TestContextBuilder:
    def test_rows_capped_but_stats_use_all_rows(self, big_dataset):
        summary = DataSummarizer().summarize(big_dataset)
        payload = ContextBuilder().build(big_dataset, summary)

        assert len(payload.rows) == 200
        assert payload.rows_truncated
        assert payload.row_count == 500
        assert payload.column_stats["sales"].count == 500
        assert payload.column_stats["sales"].max == 499.0

    def test_custom_row_cap(self, big_dataset):
        summary = DataSummarizer().summarize(big_dataset)
        payload = ContextBuilder(config={'max_context_rows': 10}).build(big_dataset, summary)
        assert len(payload.rows) == 10

    def test_small_dataset_not_truncated(self, sales_dataset):
        summary = DataSummarizer().summarize(sales_dataset)
        payload = ContextBuilder().build(sales_dataset, summary)
        assert len(payload.rows) == 5
        assert not payload.rows_truncated

    def test_correlation_points_capped(self, big_dataset):
        summary = DataSummarizer().summarize(big_dataset)
        payload = ContextBuilder().build(big_dataset, summary)

        assert len(summary.correlations[0].scatter_data) == 50
        assert len(payload.top_correlations) == 1
        assert len(payload.top_correlations[0].scatter_data) == 20
        assert payload.top_correlations[0].correlation == summary.correlations[0].correlation

    def test_relevant_aggregation(self, sales_dataset):
        summary = DataSummarizer().summarize(sales_dataset)
        builder = ContextBuilder()

        payload = builder.build(sales_dataset, summary, query="total units by product")
        assert payload.relevant_aggregation.description == "sum of units by product"
        assert builder.build(sales_dataset, summary).relevant_aggregation is None

    def test_aggregation_cap(self, sales_dataset):
        summary = DataSummarizer().summarize(sales_dataset)
        payload = ContextBuilder(config={'max_context_aggregations': 4}).build(sales_dataset, summary)
        assert [a.operation for a in payload.aggregations] == ["sum"] * 4

    def test_json_ready(self, sales_dataset):
        summary = DataSummarizer().summarize(sales_dataset)
        payload = ContextBuilder().build(sales_dataset, summary, query="sales by region")
        body = payload.model_dump(mode="json")

        json.dumps(body)
        assert body["rows"][0] == {
            "region": "East",
            "product": "A",
            "sales": 100.0,
            "units": 10.0,
            "order_date": "2024-01-05T00:00:00",
        }
        assert body["summary_text"].startswith('Dataset "sales.csv"')

    def test_empty_dataset(self, empty_dataset):
        summary = DataSummarizer().summarize(empty_dataset)
        payload = ContextBuilder().build(empty_dataset, summary, query="sales")
        assert payload.rows == []
        assert payload.aggregations == []
        assert payload.relevant_aggregation is None
        assert "0 rows" in payload.summary_text
