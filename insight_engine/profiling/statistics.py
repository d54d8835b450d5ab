"""
Statistics Computer

Per-column descriptive statistics over the full row set.

Numeric columns report the population standard deviation (divide by the
count, not count - 1): the summary describes the uploaded rows themselves,
not a sample drawn from a larger population.
"""

import pandas as pd
from typing import Any, Dict, List, Optional, Sequence

from ..models import ColumnStats, Dataset, TopValue
from ..utils.logging_utils import get_logger
from ..utils.stats_utils import coerce_column, population_std

logger = get_logger(__name__)


class StatisticsComputer:
    """
    Computes ColumnStats for each column of a Dataset.

    Example:
        >>> computer = StatisticsComputer()
        >>> stats = computer.compute_column([1, 2, 3, 4, 5], 'number')
        >>> stats.median
        3.0
    """

    def __init__(self, config: Optional[Dict[str, Any]] = None):
        """
        Initialize the Statistics Computer.

        Args:
            config: Overrides for 'top_k' (most frequent values kept per string column)
        """
        self.config = {
            'top_k': 10,
        }

        if config:
            self.config.update(config)

    def compute_all(self, dataset: Dataset) -> Dict[str, ColumnStats]:
        """
        Compute statistics for every column, in column order.

        A dataset without rows has no statistics.
        """
        if dataset.row_count == 0:
            return {}

        stats = {}
        for column in dataset.columns:
            stats[column] = self.compute_column(
                dataset.column_values(column),
                dataset.column_types[column]
            )
        return stats

    def compute_column(self, values: Sequence[Any], column_type: str) -> ColumnStats:
        """
        Compute statistics for one column.

        Args:
            values: Raw cell values in row order
            column_type: The column's type

        Returns:
            ColumnStats with the fields relevant to the type filled in
        """
        series = coerce_column(values, column_type)
        present = series.dropna()
        base = {
            'type': column_type,
            'count': int(len(present)),
            'missing_count': int(len(series) - len(present)),
        }

        if column_type == 'number':
            base.update(self._numeric_stats(present))
        elif column_type == 'string':
            base.update(self._categorical_stats(present))
        elif column_type == 'date':
            base.update(self._date_stats(present))
        else:
            base.update(self._boolean_stats(present))

        return ColumnStats(**base)

    def _numeric_stats(self, present: pd.Series) -> Dict[str, float]:
        if len(present) == 0:
            return {'min': 0.0, 'max': 0.0, 'mean': 0.0, 'median': 0.0, 'std_dev': 0.0}

        low = float(present.min())
        high = float(present.max())
        # Rounding in the sum can push the mean just outside [min, max]
        mean = min(max(float(present.mean()), low), high)
        median = min(max(float(present.median()), low), high)

        return {
            'min': low,
            'max': high,
            'mean': mean,
            'median': median,
            'std_dev': population_std(present.to_numpy()),
        }

    def _categorical_stats(self, present: pd.Series) -> Dict[str, Any]:
        counts = self.value_counts(present)
        top = [
            TopValue(value=str(value), count=int(count))
            for value, count in counts[:self.config['top_k']]
        ]
        return {
            'distinct_count': len(counts),
            'top_values': top,
        }

    def _date_stats(self, present: pd.Series) -> Dict[str, Any]:
        if len(present) == 0:
            return {}

        earliest = min(present)
        latest = max(present)
        return {
            'min_date': earliest.isoformat(),
            'max_date': latest.isoformat(),
            'date_range_days': int((latest - earliest).days),
        }

    def _boolean_stats(self, present: pd.Series) -> Dict[str, int]:
        true_count = int(sum(1 for value in present if value))
        return {
            'true_count': true_count,
            'false_count': int(len(present) - true_count),
        }

    @staticmethod
    def value_counts(present: pd.Series) -> List[tuple]:
        """
        (value, count) pairs by descending count, ties by first appearance.
        """
        if len(present) == 0:
            return []

        # groupby(sort=False) keeps first-appearance order; sorted() is stable for ties
        counts = present.groupby(present, sort=False).size()
        return sorted(counts.items(), key=lambda item: -item[1])
