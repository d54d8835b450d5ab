"""
Aggregation: precomputed group-by reductions and query relevance matching.
"""

from .generator import AggregationGenerator
from .relevance import RelevanceMatcher, tokenize

__all__ = ['AggregationGenerator', 'RelevanceMatcher', 'tokenize']
