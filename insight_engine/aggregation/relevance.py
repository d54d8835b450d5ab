"""
Relevance Matcher

Lexical token-overlap scoring that picks the precomputed aggregation most
relevant to a free-text question.

    score = column_weight    * (query tokens naming the group_by or metric column)
          + operation_weight * (query tokens naming the operation or a synonym)

The strictly highest score wins; ties go to the earliest aggregation and a
best score of 0 means no match.
"""

import re
from typing import Any, Dict, FrozenSet, List, Optional, Sequence

from ..models import Aggregation
from ..utils.logging_utils import get_logger

logger = get_logger(__name__)

TOKEN_SPLIT = re.compile(r'[\W_]+')

OPERATION_SYNONYMS: Dict[str, FrozenSet[str]] = {
    'sum': frozenset({'sum', 'total', 'totals'}),
    'avg': frozenset({'avg', 'average', 'averages', 'mean'}),
    'count': frozenset({'count', 'number', 'many', 'frequency'}),
    'min': frozenset({'min', 'minimum', 'lowest', 'smallest', 'least'}),
    'max': frozenset({'max', 'maximum', 'highest', 'largest', 'most', 'top'}),
}


def tokenize(text: str) -> List[str]:
    """
    Lowercase and split on non-alphanumeric characters, dropping empty tokens.

    Example:
        >>> tokenize("Show me SALES by region!")
        ['show', 'me', 'sales', 'by', 'region']
    """
    return [token for token in TOKEN_SPLIT.split(text.lower()) if token]


def column_terms(column: str) -> FrozenSet[str]:
    """Terms a query token may use to name a column: the whole name and its parts."""
    return frozenset({column.lower(), *tokenize(column)})


class RelevanceMatcher:
    """
    Scores aggregations against a query.

    Example:
        >>> matcher = RelevanceMatcher()
        >>> best = matcher.best_match("total sales by region", aggregations)
    """

    def __init__(self, config: Optional[Dict[str, Any]] = None):
        """
        Initialize the Relevance Matcher.

        Args:
            config: Overrides for 'column_weight' and 'operation_weight'
        """
        self.config = {
            'column_weight': 2,
            'operation_weight': 1,
        }

        if config:
            self.config.update(config)

    def score(self, query_tokens: Sequence[str], aggregation: Aggregation) -> int:
        """
        Score one aggregation against already tokenized query text.
        """
        names = column_terms(aggregation.group_by) | column_terms(aggregation.metric)
        synonyms = OPERATION_SYNONYMS.get(aggregation.operation, frozenset({aggregation.operation}))

        column_hits = sum(1 for token in query_tokens if token in names)
        operation_hits = sum(1 for token in query_tokens if token in synonyms)

        return (
            column_hits * self.config['column_weight']
            + operation_hits * self.config['operation_weight']
        )

    def best_match(
        self,
        query: str,
        aggregations: Sequence[Aggregation]
    ) -> Optional[Aggregation]:
        """
        Return the aggregation most relevant to the query.

        Args:
            query: Free-text question
            aggregations: Candidates in generation order

        Returns:
            The highest scoring aggregation (earliest on ties), or None when
            nothing scores above 0
        """
        tokens = tokenize(query or '')
        if not tokens:
            return None

        best = None
        best_score = 0
        for aggregation in aggregations:
            score = self.score(tokens, aggregation)
            if score > best_score:
                best = aggregation
                best_score = score

        if best is not None:
            logger.debug(f"Matched '{query}' to '{best.description}' (score {best_score})")

        return best
