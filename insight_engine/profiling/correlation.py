"""
Correlation Analyzer

Pairwise Pearson correlation over the numeric columns of a Dataset.

Each unordered pair is analysed once using only the rows where both
columns are present. Scatter points are capped to bound the payload; the
coefficient always uses every eligible row. The analyzer returns pairs in
column order; `rank_correlations` is the single place that orders them by
strength.
"""

import pandas as pd
from itertools import combinations
from typing import Any, Dict, List, Optional, Sequence

from ..models import CorrelationPair, Dataset, ScatterPoint
from ..utils.logging_utils import get_logger
from ..utils.stats_utils import coerce_column, pearson_correlation

logger = get_logger(__name__)


class CorrelationAnalyzer:
    """
    Computes a CorrelationPair for every pair of numeric columns.

    Example:
        >>> analyzer = CorrelationAnalyzer(config={'max_scatter_points': 20})
        >>> pairs = analyzer.analyze(dataset)
        >>> top = rank_correlations(pairs, limit=5)
    """

    def __init__(self, config: Optional[Dict[str, Any]] = None):
        """
        Initialize the Correlation Analyzer.

        Args:
            config: Overrides for 'max_scatter_points'
        """
        self.config = {
            'max_scatter_points': 50,
        }

        if config:
            self.config.update(config)

    def analyze(self, dataset: Dataset) -> List[CorrelationPair]:
        """
        Correlate every unordered pair of numeric columns.

        Args:
            dataset: Dataset to analyze

        Returns:
            One CorrelationPair per pair, (x, y) in column order
        """
        numeric_cols = dataset.columns_of_type('number')
        if dataset.row_count == 0 or len(numeric_cols) < 2:
            return []

        coerced = {
            column: coerce_column(dataset.column_values(column), 'number')
            for column in numeric_cols
        }

        pairs = []
        for x_col, y_col in combinations(numeric_cols, 2):
            pair = self.correlate(coerced[x_col], coerced[y_col], x_col, y_col)
            logger.debug(f"  r({x_col}, {y_col}) = {pair.correlation:.4f} over {pair.point_count} rows")
            pairs.append(pair)

        return pairs

    def correlate(
        self,
        x: pd.Series,
        y: pd.Series,
        x_column: str,
        y_column: str
    ) -> CorrelationPair:
        """
        Correlate two aligned numeric Series (NaN = missing).

        Rows missing either value are dropped, never imputed.
        """
        eligible = pd.DataFrame({'x': x, 'y': y}).dropna()
        x_values = eligible['x'].to_numpy()
        y_values = eligible['y'].to_numpy()

        limit = self.config['max_scatter_points']
        scatter = [
            ScatterPoint(x=float(xv), y=float(yv))
            for xv, yv in zip(x_values[:limit], y_values[:limit])
        ]

        return CorrelationPair(
            x_column=x_column,
            y_column=y_column,
            correlation=pearson_correlation(x_values, y_values),
            point_count=int(len(eligible)),
            scatter_data=scatter,
        )


def rank_correlations(
    pairs: Sequence[CorrelationPair],
    limit: Optional[int] = None
) -> List[CorrelationPair]:
    """
    Order pairs by |r| descending, keeping analyzer order among ties.

    Args:
        pairs: Pairs as returned by CorrelationAnalyzer.analyze
        limit: Keep at most this many (None = all)

    Returns:
        Ranked list of pairs
    """
    ranked = sorted(pairs, key=lambda pair: abs(pair.correlation), reverse=True)
    if limit is not None:
        ranked = ranked[:limit]
    return ranked
