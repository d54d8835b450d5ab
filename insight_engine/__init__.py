"""
Insight Engine

Turns an uploaded tabular dataset into a bounded, machine-consumable
summary for an AI dashboard builder: column types, descriptive statistics,
pairwise correlations, precomputed group-by aggregations and the
aggregation most relevant to a question.
"""

from .models import (
    Aggregation,
    AggregationPoint,
    ColumnStats,
    CorrelationPair,
    DataSummary,
    Dataset,
    ScatterPoint,
    TopValue,
)
from .summary import (
    ContextBuilder,
    ContextPayload,
    DataSummarizer,
    SummaryTextBuilder,
    build_summary_text,
    find_relevant_aggregation,
)
from .engine import InsightEngine

__version__ = "0.1.0"

__all__ = [
    'Aggregation',
    'AggregationPoint',
    'ColumnStats',
    'CorrelationPair',
    'DataSummary',
    'Dataset',
    'ScatterPoint',
    'TopValue',
    'ContextBuilder',
    'ContextPayload',
    'DataSummarizer',
    'SummaryTextBuilder',
    'build_summary_text',
    'find_relevant_aggregation',
    'InsightEngine',
]
