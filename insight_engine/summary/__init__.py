"""
Summary: DataSummary orchestration, summary text and the AI context payload.
"""

from .summarizer import DataSummarizer, build_summary_text, find_relevant_aggregation
from .text_builder import SummaryTextBuilder
from .context import ContextBuilder, ContextPayload

__all__ = [
    'DataSummarizer',
    'build_summary_text',
    'find_relevant_aggregation',
    'SummaryTextBuilder',
    'ContextBuilder',
    'ContextPayload',
]
