"""
Widget Suggester

Rule-based dashboard for an uploaded dataset, used when the AI service does
not pick widgets itself. Every number shown comes from the DataSummary or
the dataset; chart data for categories comes from the precomputed
aggregations.
"""

from typing import Any, Dict, List, Optional

from ..models import Aggregation, DataSummary, Dataset
from ..aggregation.relevance import RelevanceMatcher
from ..profiling.correlation import rank_correlations
from ..summary.context import to_json_value
from ..summary.text_builder import SummaryTextBuilder
from ..utils.logging_utils import get_logger
from ..utils.stats_utils import coerce_column, coerce_value
from .registry import WidgetInstruction, validate_widget

logger = get_logger(__name__)

KPI_COLORS = ['blue', 'green', 'purple']
LINE_KEYWORDS = ('trend', 'line', 'over time')
PIE_KEYWORDS = ('pie', 'share', 'distribution')
SCATTER_KEYWORDS = ('scatter', 'correlation', 'vs')


def format_kpi(total: float) -> str:
    """Short KPI value: thousands as '12.3K', otherwise a whole number."""
    if abs(total) >= 1000:
        return f"{total / 1000:.1f}K"
    return f"{total:.0f}"


class WidgetSuggester:
    """
    Suggests dashboard widgets for a dataset and a request.

    Example:
        >>> suggester = WidgetSuggester()
        >>> widgets = suggester.suggest(dataset, summary, "show sales by region")
        >>> [w.name for w in widgets]
        ['KPICard', 'LineChart', 'BarChart', 'PieChart', 'DataTable', 'TextBlock']
    """

    def __init__(
        self,
        config: Optional[Dict[str, Any]] = None,
        matcher: Optional[RelevanceMatcher] = None,
        text_builder: Optional[SummaryTextBuilder] = None
    ):
        """
        Initialize the Widget Suggester.

        Args:
            config: Overrides for 'max_kpi_cards', 'max_chart_rows',
                'max_pie_slices', 'max_table_rows', 'max_table_columns'
            matcher: Relevance matcher used to pick the bar chart aggregation
            text_builder: Renderer for the summary text block
        """
        self.config = {
            'max_kpi_cards': 3,
            'max_chart_rows': 200,
            'max_pie_slices': 8,
            'max_table_rows': 50,
            'max_table_columns': 6,
        }

        if config:
            self.config.update(config)

        self.matcher = matcher or RelevanceMatcher()
        self.text_builder = text_builder or SummaryTextBuilder()

    def suggest(
        self,
        dataset: Dataset,
        summary: DataSummary,
        request: str = ''
    ) -> List[WidgetInstruction]:
        """
        Suggest widgets for a request against the active dataset.

        Args:
            dataset: The active dataset
            summary: Its summary
            request: The user's free-text request

        Returns:
            Validated widget instructions (empty for a dataset without rows)
        """
        if dataset.row_count == 0:
            logger.warning(f"No widgets for '{dataset.name}': dataset has no rows")
            return []

        request = (request or '').lower()
        numeric_cols = dataset.columns_of_type('number')
        string_cols = dataset.columns_of_type('string')
        date_cols = dataset.columns_of_type('date')
        label_col = (date_cols or string_cols or dataset.columns)[0]

        widgets = []

        for index, column in enumerate(numeric_cols[:self.config['max_kpi_cards']]):
            widgets.append(self._kpi_card(dataset, summary, column, index))

        if numeric_cols:
            wants_line = any(kw in request for kw in LINE_KEYWORDS) or bool(date_cols)
            if wants_line or 'bar' not in request:
                widgets.append(('LineChart', {
                    'title': f"{numeric_cols[0]} over {label_col}",
                    'data': self._rows(dataset, [label_col, numeric_cols[0]], self.config['max_chart_rows']),
                    'x_axis': label_col,
                    'y_axis': numeric_cols[0],
                    'color': '#3b82f6',
                }))

        bar_source = self._bar_aggregation(summary, request)
        if bar_source is not None:
            widgets.append(('BarChart', {
                'title': bar_source.description.capitalize(),
                'data': [
                    {bar_source.group_by: point.group, bar_source.metric: point.value}
                    for point in bar_source.data
                ],
                'x_axis': bar_source.group_by,
                'y_axis': bar_source.metric,
                'color': '#06b6d4',
            }))

            pie_source = self._pie_aggregation(summary, bar_source)
            wants_pie = any(kw in request for kw in PIE_KEYWORDS)
            if pie_source is not None and (wants_pie or len(widgets) < 4):
                widgets.append(('PieChart', {
                    'title': f"{pie_source.metric} distribution by {pie_source.group_by}",
                    'data': [
                        {'name': point.group, 'value': point.value}
                        for point in pie_source.data[:self.config['max_pie_slices']]
                    ],
                }))

        top = rank_correlations(summary.correlations, 1)
        if top:
            wants_scatter = any(kw in request for kw in SCATTER_KEYWORDS)
            if wants_scatter or len(widgets) < 5:
                pair = top[0]
                widgets.append(('ScatterPlot', {
                    'title': f"{pair.x_column} vs {pair.y_column}",
                    'data': [{'x': p.x, 'y': p.y} for p in pair.scatter_data],
                    'x_label': pair.x_column,
                    'y_label': pair.y_column,
                    'color': '#f59e0b',
                }))

        table_columns = dataset.columns[:self.config['max_table_columns']]
        widgets.append(('DataTable', {
            'title': f"{dataset.name} Data",
            'columns': table_columns,
            'data': self._rows(dataset, table_columns, self.config['max_table_rows']),
        }))

        widgets.append(('TextBlock', {
            'title': "Data Summary",
            'content': self.text_builder.build(summary),
        }))

        instructions = []
        for name, props in widgets:
            instruction = validate_widget(name, props)
            if instruction is not None:
                instructions.append(instruction)

        logger.info(f"Suggested {len(instructions)} widgets for '{dataset.name}'")
        return instructions

    def _kpi_card(self, dataset: Dataset, summary: DataSummary, column: str, index: int) -> tuple:
        values = coerce_column(dataset.column_values(column), 'number').dropna()
        total = float(values.sum())
        stats = summary.column_stats.get(column)
        average = stats.mean if stats is not None else 0.0

        return ('KPICard', {
            'title': f"Total {column}",
            'value': format_kpi(total),
            'trend': f"Avg: {average:.1f}",
            'color': KPI_COLORS[index % len(KPI_COLORS)],
            'is_positive': total >= 0,
        })

    def _bar_aggregation(self, summary: DataSummary, request: str) -> Optional[Aggregation]:
        aggregations = [a for a in summary.precomputed_aggregations if a.data]
        if not aggregations:
            return None
        return self.matcher.best_match(request, aggregations) or aggregations[0]

    @staticmethod
    def _pie_aggregation(summary: DataSummary, bar_source: Aggregation) -> Optional[Aggregation]:
        if bar_source.operation == 'sum':
            return bar_source
        for aggregation in summary.precomputed_aggregations:
            if aggregation.operation == 'sum' and aggregation.data:
                return aggregation
        return None

    @staticmethod
    def _rows(dataset: Dataset, columns: List[str], limit: int) -> List[Dict[str, Any]]:
        return [
            {
                column: to_json_value(coerce_value(row.get(column), dataset.column_types[column]))
                for column in columns
            }
            for row in dataset.rows[:limit]
        ]
