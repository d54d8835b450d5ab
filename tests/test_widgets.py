"""Tests for the widget registry and the rule-based suggester."""

import pytest

from insight_engine.models import Dataset
from insight_engine.summary.summarizer import DataSummarizer
from insight_engine.widgets.registry import WIDGET_REGISTRY, validate_widget
from insight_engine.widgets.suggester import WidgetSuggester, format_kpi


class TestRegistry:
    def test_known_widgets(self):
        assert set(WIDGET_REGISTRY) == {
            "KPICard", "LineChart", "BarChart", "PieChart",
            "DataTable", "ScatterPlot", "StatCard", "TextBlock",
        }

    def test_read_only(self):
        with pytest.raises(TypeError):
            WIDGET_REGISTRY["Map"] = WIDGET_REGISTRY["KPICard"]

    def test_valid_widget(self):
        instruction = validate_widget("TextBlock", {"title": "Hi", "content": "There"})
        assert instruction.name == "TextBlock"
        assert instruction.props == {"title": "Hi", "content": "There"}

    def test_unknown_widget(self):
        assert validate_widget("Map", {"title": "x"}) is None

    def test_invalid_props(self):
        assert validate_widget("KPICard", {"value": 3}) is None
        assert validate_widget("KPICard", {"title": "x", "value": 3, "color": "pink"}) is None


class TestSuggester:
    def test_sales_by_region(self, region_dataset):
        summary = DataSummarizer().summarize(region_dataset)
        widgets = WidgetSuggester().suggest(region_dataset, summary, "Show sales by region")

        assert [w.name for w in widgets] == [
            "KPICard", "LineChart", "BarChart", "PieChart", "DataTable", "TextBlock",
        ]
        kpi = widgets[0].props
        assert kpi["title"] == "Total sales"
        assert kpi["value"] == "180"
        assert kpi["trend"] == "Avg: 60.0"

        bar = widgets[2].props
        assert bar["x_axis"] == "region"
        assert bar["data"] == [{"region": "East", "sales": 150.0}, {"region": "West", "sales": 30.0}]

        pie = widgets[3].props
        assert pie["data"] == [{"name": "East", "value": 150.0}, {"name": "West", "value": 30.0}]

    def test_bar_request_skips_line_chart_without_dates(self, region_dataset):
        summary = DataSummarizer().summarize(region_dataset)
        widgets = WidgetSuggester().suggest(region_dataset, summary, "bar chart of sales")
        assert "LineChart" not in [w.name for w in widgets]

    def test_scatter_from_top_correlation(self, sales_dataset):
        summary = DataSummarizer().summarize(sales_dataset)
        widgets = WidgetSuggester().suggest(sales_dataset, summary, "correlation")
        scatter = next(w for w in widgets if w.name == "ScatterPlot")
        assert scatter.props["title"] == "sales vs units"
        assert scatter.props["data"][0] == {"x": 100.0, "y": 10.0}

    def test_line_chart_uses_date_axis(self, sales_dataset):
        summary = DataSummarizer().summarize(sales_dataset)
        widgets = WidgetSuggester().suggest(sales_dataset, summary, "")
        line = next(w for w in widgets if w.name == "LineChart")
        assert line.props["x_axis"] == "order_date"
        assert line.props["data"][0] == {"order_date": "2024-01-05T00:00:00", "sales": 100.0}

    def test_table_capped(self):
        rows = [{"a": i, "b": "x"} for i in range(120)]
        ds = Dataset(name="t", columns=["a", "b"], column_types={"a": "number", "b": "string"}, rows=rows)
        summary = DataSummarizer().summarize(ds)
        widgets = WidgetSuggester(config={'max_table_rows': 25}).suggest(ds, summary)
        table = next(w for w in widgets if w.name == "DataTable")
        assert len(table.props["data"]) == 25
        assert table.props["columns"] == ["a", "b"]

    def test_empty_dataset(self, empty_dataset):
        summary = DataSummarizer().summarize(empty_dataset)
        assert WidgetSuggester().suggest(empty_dataset, summary, "sales") == []


def test_format_kpi():
    assert format_kpi(487000) == "487.0K"
    assert format_kpi(999.4) == "999"
