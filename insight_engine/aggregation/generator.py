"""
Aggregation Generator

Enumerates and computes group-by aggregations (categorical column x numeric
column x operation) for the AI context.

Candidates are generated operation-major: every categorical x numeric pair
with `sum`, then with `avg`, then `count`, `min` and `max`, until
`max_aggregations` is reached. Within an aggregation, groups are ordered by
the first appearance of the group value in the rows.
"""

import pandas as pd
from typing import Any, Dict, List, Optional, Tuple

from ..models import OPERATIONS, Aggregation, AggregationPoint, Dataset
from ..utils.logging_utils import get_logger
from ..utils.stats_utils import coerce_column, first_appearance_order

logger = get_logger(__name__)

DESCRIPTION_TEMPLATE = "{operation} of {metric} by {group_by}"

# pandas reducer for each operation
REDUCERS = {
    'sum': 'sum',
    'avg': 'mean',
    'count': 'count',
    'min': 'min',
    'max': 'max',
}


class AggregationGenerator:
    """
    Builds the precomputed aggregations of a Dataset.

    Example:
        >>> generator = AggregationGenerator(config={'max_aggregations': 10})
        >>> aggregations = generator.generate(dataset)
        >>> aggregations[0].description
        'sum of sales by region'
    """

    def __init__(self, config: Optional[Dict[str, Any]] = None):
        """
        Initialize the Aggregation Generator.

        Args:
            config: Overrides for 'max_aggregations' and 'operations' (priority order)
        """
        self.config = {
            'max_aggregations': 30,
            'operations': list(OPERATIONS),
        }

        if config:
            self.config.update(config)

        unknown = [op for op in self.config['operations'] if op not in REDUCERS]
        if unknown:
            raise ValueError(f"Unknown aggregation operations: {unknown}")

    def plan(self, dataset: Dataset) -> List[Tuple[str, str, str]]:
        """
        Enumerate (group_by, metric, operation) triples in priority order, capped.

        Args:
            dataset: Dataset to plan for

        Returns:
            At most `max_aggregations` triples
        """
        group_cols = dataset.columns_of_type('string')
        metric_cols = dataset.columns_of_type('number')
        limit = self.config['max_aggregations']

        triples = []
        for operation in self.config['operations']:
            for group_by in group_cols:
                for metric in metric_cols:
                    if len(triples) >= limit:
                        return triples
                    triples.append((group_by, metric, operation))

        return triples

    def generate(self, dataset: Dataset) -> List[Aggregation]:
        """
        Plan and compute all aggregations for a Dataset.

        Returns:
            Aggregations in generation order (empty without rows)
        """
        if dataset.row_count == 0:
            return []

        triples = self.plan(dataset)
        if not triples:
            logger.info("No categorical x numeric column pairs to aggregate")
            return []

        groups = {}
        metrics = {}
        for group_by, metric, _ in triples:
            if group_by not in groups:
                groups[group_by] = coerce_column(dataset.column_values(group_by), 'string')
            if metric not in metrics:
                metrics[metric] = coerce_column(dataset.column_values(metric), 'number')

        aggregations = [
            self.compute(groups[group_by], metrics[metric], group_by, metric, operation)
            for group_by, metric, operation in triples
        ]

        logger.info(f"Generated {len(aggregations)} aggregations")
        return aggregations

    def compute(
        self,
        group_values: pd.Series,
        metric_values: pd.Series,
        group_by: str,
        metric: str,
        operation: str
    ) -> Aggregation:
        """
        Compute one aggregation from aligned, already coerced columns.

        Args:
            group_values: String Series (None = missing)
            metric_values: Float Series (NaN = missing)
            group_by: Group column name
            metric: Metric column name
            operation: One of sum, avg, count, min, max

        Returns:
            Aggregation over rows with both values present; groups without
            any such row are omitted
        """
        if operation not in REDUCERS:
            raise ValueError(f"Unknown aggregation operation: {operation}")

        frame = pd.DataFrame({'group': group_values, 'value': metric_values})
        eligible = frame.dropna()

        reduced = eligible.groupby('group', sort=False)['value'].agg(REDUCERS[operation])

        data = [
            AggregationPoint(group=group, value=float(reduced[group]))
            for group in first_appearance_order(group_values)
            if group in reduced.index
        ]

        return Aggregation(
            description=DESCRIPTION_TEMPLATE.format(
                operation=operation, metric=metric, group_by=group_by
            ),
            group_by=group_by,
            metric=metric,
            operation=operation,
            data=data,
        )
