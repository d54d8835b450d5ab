"""
Summary Text Builder

Renders a DataSummary into one bounded block of plain text for the AI
context.

Sections in priority order: dataset shape, numeric columns, categorical
columns (string, then date and boolean), top correlations. Lines are added
in that order until the character budget is reached; everything after the
first line that does not fit is dropped.
"""

from typing import Any, Dict, List, Optional

from ..models import ColumnStats, CorrelationPair, DataSummary
from ..profiling.correlation import rank_correlations
from ..utils.logging_utils import get_logger

logger = get_logger(__name__)


def format_number(value: Optional[float]) -> str:
    """
    Compact human-readable number.

    Example:
        >>> format_number(1234.5)
        '1,234.5'
        >>> format_number(3.0)
        '3'
    """
    if value is None:
        return 'n/a'
    text = f"{value:,.2f}"
    return text.rstrip('0').rstrip('.') if '.' in text else text


class SummaryTextBuilder:
    """
    Builds the natural-language summary of a dataset.

    Example:
        >>> builder = SummaryTextBuilder(config={'max_chars': 2000})
        >>> text = builder.build(summary)
    """

    def __init__(self, config: Optional[Dict[str, Any]] = None):
        """
        Initialize the Summary Text Builder.

        Args:
            config: Overrides for 'max_chars' and 'max_correlations'
        """
        self.config = {
            'max_chars': 3000,
            'max_correlations': 5,
        }

        if config:
            self.config.update(config)

    def build(self, summary: DataSummary) -> str:
        """
        Render the summary text within the character budget.

        Args:
            summary: Summary to render

        Returns:
            Text of at most `max_chars` characters
        """
        max_chars = self.config['max_chars']
        shape = self._shape_line(summary)

        if summary.row_count == 0:
            return (shape + " No data available to summarize.")[:max_chars]

        sections = [
            self._column_lines(summary, ('number',)),
            self._column_lines(summary, ('string', 'date', 'boolean')),
            self._correlation_lines(summary),
        ]

        lines = [shape[:max_chars]]
        length = len(lines[0])
        omitted = 0
        full = False

        for section in sections:
            for line in section:
                if full or length + 1 + len(line) > max_chars:
                    full = True
                    omitted += 1
                    continue
                lines.append(line)
                length += 1 + len(line)

        # A heading with nothing under it is dropped
        if lines[-1] == "Top correlations:":
            lines.pop()
            length -= len("Top correlations:") + 1
            omitted += 1

        if omitted:
            note = f"({omitted} more lines omitted)"
            if length + 1 + len(note) <= max_chars:
                lines.append(note)
            logger.debug(f"Summary text over budget: omitted {omitted} lines")

        return "\n".join(lines)

    def _shape_line(self, summary: DataSummary) -> str:
        return (
            f'Dataset "{summary.dataset_name}": {summary.row_count} rows, '
            f'{summary.column_count} columns.'
        )

    def _column_lines(self, summary: DataSummary, types: tuple) -> List[str]:
        lines = []
        for column_type in types:
            for column, stats in summary.column_stats.items():
                if stats.type == column_type:
                    lines.append(self._column_line(column, stats))
        return lines

    def _column_line(self, column: str, stats: ColumnStats) -> str:
        if stats.count == 0:
            detail = "no values"
        elif stats.type == 'number':
            detail = (
                f"min {format_number(stats.min)}, max {format_number(stats.max)}, "
                f"mean {format_number(stats.mean)}"
            )
        elif stats.type == 'string':
            detail = f"{stats.distinct_count} distinct"
            if stats.top_values:
                top = stats.top_values[0]
                detail += f', top "{top.value}" ({top.count})'
        elif stats.type == 'date':
            detail = f"{stats.min_date[:10]} to {stats.max_date[:10]}"
        else:
            detail = f"{stats.true_count} true, {stats.false_count} false"

        if stats.missing_count:
            detail += f", {stats.missing_count} missing"

        return f"- {column} ({stats.type}): {detail}"

    def _correlation_lines(self, summary: DataSummary) -> List[str]:
        top = rank_correlations(summary.correlations, self.config['max_correlations'])
        if not top:
            return []
        return ["Top correlations:"] + [self._correlation_line(pair) for pair in top]

    @staticmethod
    def _correlation_line(pair: CorrelationPair) -> str:
        return f"- {pair.x_column} vs {pair.y_column}: r={pair.correlation:.2f}"
