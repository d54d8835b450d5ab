"""
Data Summarizer

Derives the DataSummary of a Dataset:

    Dataset -> types -> column statistics + correlations -> aggregations

A summary is derived once per Dataset object. Calling `summarize` again
with the same object returns the memoised summary; a different object (a
new upload) triggers a fresh computation. Summaries are never mutated.

Irregular data never raises here: unusable cells count as missing and an
empty dataset yields an empty summary.
"""

from typing import Any, Dict, Optional

from ..config import Config, get_config
from ..models import Aggregation, DataSummary, Dataset
from ..aggregation.generator import AggregationGenerator
from ..aggregation.relevance import RelevanceMatcher
from ..profiling.correlation import CorrelationAnalyzer
from ..profiling.statistics import StatisticsComputer
from .text_builder import SummaryTextBuilder
from ..utils.logging_utils import get_logger

logger = get_logger(__name__)


class DataSummarizer:
    """
    Builds and memoises the summary of the active dataset.

    Attributes:
        statistics: Per-column statistics component
        correlations: Numeric correlation component
        aggregations: Group-by aggregation component

    Example:
        >>> summarizer = DataSummarizer()
        >>> summary = summarizer.summarize(dataset)
        >>> summarizer.summarize(dataset) is summary
        True
    """

    def __init__(
        self,
        statistics: Optional[StatisticsComputer] = None,
        correlations: Optional[CorrelationAnalyzer] = None,
        aggregations: Optional[AggregationGenerator] = None
    ):
        self.statistics = statistics or StatisticsComputer()
        self.correlations = correlations or CorrelationAnalyzer()
        self.aggregations = aggregations or AggregationGenerator()

        self._dataset: Optional[Dataset] = None
        self._summary: Optional[DataSummary] = None

    @classmethod
    def from_config(cls, config: Optional[Config] = None) -> "DataSummarizer":
        """Create a summarizer wired from the 'statistics', 'correlation' and 'aggregation' sections."""
        config = config or get_config()
        return cls(
            statistics=StatisticsComputer(config.get_stage_config('statistics')),
            correlations=CorrelationAnalyzer(config.get_stage_config('correlation')),
            aggregations=AggregationGenerator(config.get_stage_config('aggregation')),
        )

    def summarize(self, dataset: Dataset) -> DataSummary:
        """
        Return the summary of a dataset, computing it only for a new dataset object.

        Args:
            dataset: The active dataset

        Returns:
            DataSummary (empty collections for a dataset without rows)
        """
        if self._summary is not None and dataset is self._dataset:
            return self._summary

        summary = self.compute(dataset)

        # Holding the dataset keeps its identity from being reused
        self._dataset = dataset
        self._summary = summary
        return summary

    def compute(self, dataset: Dataset) -> DataSummary:
        """Compute a fresh summary without touching the memo."""
        logger.info(f"Summarizing dataset: {dataset.name}")

        if dataset.row_count == 0:
            logger.warning(f"Dataset '{dataset.name}' has no rows; summary is empty")
            return DataSummary(
                dataset_name=dataset.name,
                row_count=0,
                column_count=dataset.column_count,
                column_types=dataset.column_types,
            )

        summary = DataSummary(
            dataset_name=dataset.name,
            row_count=dataset.row_count,
            column_count=dataset.column_count,
            column_types=dataset.column_types,
            column_stats=self.statistics.compute_all(dataset),
            correlations=self.correlations.analyze(dataset),
            precomputed_aggregations=self.aggregations.generate(dataset),
        )

        logger.info(
            f"  Analyzed {summary.column_count} columns, {summary.row_count} rows: "
            f"{len(summary.correlations)} correlations, "
            f"{len(summary.precomputed_aggregations)} aggregations"
        )
        return summary

    def clear(self) -> None:
        """Forget the memoised summary."""
        self._dataset = None
        self._summary = None


def build_summary_text(summary: DataSummary, config: Optional[Dict[str, Any]] = None) -> str:
    """
    Natural-language summary of a DataSummary, bounded in length.

    Example:
        >>> build_summary_text(summary).splitlines()[0]
        'Dataset "sales": 3 rows, 2 columns.'
    """
    return SummaryTextBuilder(config).build(summary)


def find_relevant_aggregation(
    summary: DataSummary,
    query: str,
    config: Optional[Dict[str, Any]] = None
) -> Optional[Aggregation]:
    """
    The precomputed aggregation most relevant to a question, or None.

    The returned object is the one held in `summary.precomputed_aggregations`.
    """
    return RelevanceMatcher(config).best_match(query, summary.precomputed_aggregations)
