"""
Insight Engine

Wires every component from configuration and holds the active dataset.

Usage:
    engine = InsightEngine()
    engine.load(Dataset.from_records("sales.csv", records))
    engine.summary_text()
    engine.relevant_aggregation("total sales by region")
    engine.context("total sales by region").model_dump(mode="json")
"""

from typing import List, Optional

from .config import Config, get_config
from .models import Aggregation, DataSummary, Dataset
from .aggregation.relevance import RelevanceMatcher
from .profiling.type_inferencer import TypeInferencer
from .summary.context import ContextBuilder, ContextPayload
from .summary.summarizer import DataSummarizer
from .summary.text_builder import SummaryTextBuilder
from .utils.logging_utils import get_logger, setup_logger
from .widgets.registry import WidgetInstruction
from .widgets.suggester import WidgetSuggester

logger = get_logger(__name__)


class InsightEngine:
    """
    Entry point for the orchestration layer.

    Replacing the dataset (a new upload) is the only state change; the
    summary is derived lazily and memoised per dataset object.

    Example:
        >>> engine = InsightEngine()
        >>> engine.load(dataset)
        >>> engine.summary.row_count
        3
    """

    def __init__(self, config: Optional[Config] = None):
        """
        Initialize the engine.

        Args:
            config: Configuration (default: the global configuration)
        """
        self.config = config or get_config()

        log_config = self.config.get_stage_config('logging')
        file_config = log_config.get('file') or {}
        setup_logger(
            'insight_engine',
            log_file=file_config.get('path') if file_config.get('enabled') else None,
            level=log_config.get('level', 'INFO')
        )

        self.type_inferencer = TypeInferencer(self.config.get_stage_config('type_inference'))
        self.matcher = RelevanceMatcher(self.config.get_stage_config('relevance'))
        self.text_builder = SummaryTextBuilder(self.config.get_stage_config('summary_text'))
        self.summarizer = DataSummarizer.from_config(self.config)
        self.context_builder = ContextBuilder(
            self.config.get_stage_config('context'),
            text_builder=self.text_builder,
            matcher=self.matcher,
        )
        self.widget_suggester = WidgetSuggester(
            self.config.get_stage_config('widgets'),
            matcher=self.matcher,
            text_builder=self.text_builder,
        )

        self.dataset: Optional[Dataset] = None

        logger.info("Insight engine initialized")

    def load(self, dataset: Dataset) -> None:
        """Make a dataset the active one, replacing any previous upload."""
        self.dataset = dataset
        logger.info(f"Active dataset: {dataset.name} ({dataset.row_count} rows)")

    def load_records(self, name: str, records: List[dict], columns: Optional[List[str]] = None) -> Dataset:
        """Build a Dataset from parsed records with this engine's type inference and load it."""
        dataset = Dataset.from_records(name, records, columns=columns, inferencer=self.type_inferencer)
        self.load(dataset)
        return dataset

    def _require_dataset(self) -> Dataset:
        if self.dataset is None:
            raise RuntimeError("No dataset loaded")
        return self.dataset

    @property
    def summary(self) -> DataSummary:
        return self.summarizer.summarize(self._require_dataset())

    def summary_text(self) -> str:
        return self.text_builder.build(self.summary)

    def relevant_aggregation(self, query: str) -> Optional[Aggregation]:
        return self.matcher.best_match(query, self.summary.precomputed_aggregations)

    def context(self, query: Optional[str] = None) -> ContextPayload:
        return self.context_builder.build(self._require_dataset(), self.summary, query)

    def suggest_widgets(self, request: str = '') -> List[WidgetInstruction]:
        return self.widget_suggester.suggest(self._require_dataset(), self.summary, request)
