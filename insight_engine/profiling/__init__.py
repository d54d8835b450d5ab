"""
Profiling: type inference, column statistics and numeric correlation.
"""

from .type_inferencer import TypeInferencer
from .statistics import StatisticsComputer
from .correlation import CorrelationAnalyzer, rank_correlations

__all__ = ['TypeInferencer', 'StatisticsComputer', 'CorrelationAnalyzer', 'rank_correlations']
