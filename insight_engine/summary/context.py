"""
Context Builder

Assembles the bounded, JSON-ready payload handed to the AI orchestration
layer: column statistics, summary text, the strongest correlations with
capped scatter data, the precomputed aggregations, the aggregation most
relevant to the question and a row-capped slice of the data.

The row cap only bounds this payload. Statistics and aggregations in the
summary are always computed over the full dataset.
"""

import pandas as pd
from typing import Any, Dict, List, Optional
from pydantic import Field

from ..models import (
    Aggregation,
    ColumnStats,
    ColumnType,
    CorrelationPair,
    DataSummary,
    Dataset,
    FrozenModel,
)
from ..aggregation.relevance import RelevanceMatcher
from ..profiling.correlation import rank_correlations
from ..utils.logging_utils import get_logger
from ..utils.stats_utils import coerce_value
from .text_builder import SummaryTextBuilder

logger = get_logger(__name__)


class ContextPayload(FrozenModel):
    """What the orchestration layer serializes into the AI request."""

    dataset_name: str
    row_count: int
    column_count: int
    columns: List[str]
    column_types: Dict[str, ColumnType]
    column_stats: Dict[str, ColumnStats]
    summary_text: str
    top_correlations: List[CorrelationPair]
    aggregations: List[Aggregation]
    relevant_aggregation: Optional[Aggregation] = None
    rows: List[Dict[str, Any]] = Field(default_factory=list)
    rows_truncated: bool = False


def to_json_value(value: Any) -> Any:
    """Make a coerced cell JSON-serializable."""
    if isinstance(value, pd.Timestamp):
        return value.isoformat()
    return value


class ContextBuilder:
    """
    Builds ContextPayloads.

    Example:
        >>> builder = ContextBuilder(config={'max_context_rows': 100})
        >>> payload = builder.build(dataset, summary, query="sales by region")
        >>> body = payload.model_dump(mode="json")
    """

    def __init__(
        self,
        config: Optional[Dict[str, Any]] = None,
        text_builder: Optional[SummaryTextBuilder] = None,
        matcher: Optional[RelevanceMatcher] = None
    ):
        """
        Initialize the Context Builder.

        Args:
            config: Overrides for the payload caps
            text_builder: Summary text renderer (default settings if None)
            matcher: Relevance matcher (default weights if None)
        """
        self.config = {
            'max_context_rows': 200,
            'max_context_correlations': 5,
            'max_context_points': 20,
            'max_context_aggregations': 30,
        }

        if config:
            self.config.update(config)

        self.text_builder = text_builder or SummaryTextBuilder()
        self.matcher = matcher or RelevanceMatcher()

    def build(
        self,
        dataset: Dataset,
        summary: DataSummary,
        query: Optional[str] = None
    ) -> ContextPayload:
        """
        Assemble the payload for one AI request.

        Args:
            dataset: The active dataset
            summary: Its summary
            query: The user's question, used to pick the relevant aggregation

        Returns:
            ContextPayload
        """
        points = self.config['max_context_points']
        top_correlations = [
            pair.model_copy(update={'scatter_data': pair.scatter_data[:points]})
            for pair in rank_correlations(summary.correlations, self.config['max_context_correlations'])
        ]

        relevant = None
        if query:
            relevant = self.matcher.best_match(query, summary.precomputed_aggregations)

        rows = self.data_slice(dataset)

        payload = ContextPayload(
            dataset_name=dataset.name,
            row_count=dataset.row_count,
            column_count=dataset.column_count,
            columns=dataset.columns,
            column_types=dataset.column_types,
            column_stats=summary.column_stats,
            summary_text=self.text_builder.build(summary),
            top_correlations=top_correlations,
            aggregations=summary.precomputed_aggregations[:self.config['max_context_aggregations']],
            relevant_aggregation=relevant,
            rows=rows,
            rows_truncated=len(rows) < dataset.row_count,
        )

        logger.info(
            f"Built context for '{dataset.name}': {len(rows)}/{dataset.row_count} rows, "
            f"{len(payload.aggregations)} aggregations"
        )
        return payload

    def data_slice(self, dataset: Dataset) -> List[Dict[str, Any]]:
        """First `max_context_rows` rows with every cell coerced to its column type."""
        limit = self.config['max_context_rows']
        return [
            {
                column: to_json_value(coerce_value(row.get(column), dataset.column_types[column]))
                for column in dataset.columns
            }
            for row in dataset.rows[:limit]
        ]
