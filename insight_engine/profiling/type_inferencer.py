"""
Type Inferencer

Classifies each column of raw records as number, date, boolean or string.

A column takes the first type, in priority order number -> date ->
boolean -> string, for which at least `type_threshold` of its sampled
non-missing values coerce successfully. Ties at the threshold go to the
earlier type; a column with no usable values is a string column.
"""

from typing import Any, Dict, List, Optional, Sequence

from ..utils.logging_utils import get_logger
from ..utils.stats_utils import coerce_value, is_missing

logger = get_logger(__name__)

TYPE_PRIORITY = ('number', 'date', 'boolean')


class TypeInferencer:
    """
    Infers column types from sampled values.

    Example:
        >>> inferencer = TypeInferencer(config={'type_threshold': 0.9})
        >>> inferencer.infer_column(["1", "2", "x"])
        'string'
    """

    def __init__(self, config: Optional[Dict[str, Any]] = None):
        """
        Initialize the Type Inferencer.

        Args:
            config: Overrides for 'type_threshold' and 'sample_size'
        """
        self.config = {
            'type_threshold': 0.8,
            'sample_size': 500,
        }

        if config:
            self.config.update(config)

    def sample(self, values: Sequence[Any]) -> List[Any]:
        """First `sample_size` non-missing values, in row order."""
        limit = self.config['sample_size']
        sampled = []
        for value in values:
            if is_missing(value):
                continue
            sampled.append(value)
            if limit and len(sampled) >= limit:
                break
        return sampled

    def infer_column(self, values: Sequence[Any]) -> str:
        """
        Infer the type of one column.

        Args:
            values: Raw cell values in row order

        Returns:
            One of 'number', 'date', 'boolean', 'string'
        """
        sampled = self.sample(values)
        if not sampled:
            return 'string'

        threshold = self.config['type_threshold']
        for column_type in TYPE_PRIORITY:
            coercible = sum(1 for v in sampled if coerce_value(v, column_type) is not None)
            if coercible / len(sampled) >= threshold:
                return column_type

        return 'string'

    def infer_types(
        self,
        rows: Sequence[Dict[str, Any]],
        columns: Sequence[str]
    ) -> Dict[str, str]:
        """
        Infer the type of every listed column.

        Args:
            rows: Raw records
            columns: Columns to classify

        Returns:
            Mapping of column name to type, in column order
        """
        column_types = {}
        for column in columns:
            values = [row.get(column) for row in rows]
            column_types[column] = self.infer_column(values)
            if rows and all(is_missing(v) for v in values):
                logger.warning(f"Column '{column}' has no values; defaulting to string")
            else:
                logger.debug(f"  {column}: {column_types[column]}")

        return column_types
