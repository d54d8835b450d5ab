"""Data model for datasets and the summaries derived from them."""

from typing import Any, Dict, List, Literal, Optional
from pydantic import BaseModel, ConfigDict, Field, model_validator


ColumnType = Literal["number", "string", "date", "boolean"]
Operation = Literal["sum", "avg", "count", "min", "max"]

COLUMN_TYPES = ("number", "string", "date", "boolean")
OPERATIONS = ("sum", "avg", "count", "min", "max")


class FrozenModel(BaseModel):
    """Base for immutable values."""
    model_config = ConfigDict(frozen=True)


#### Dataset ####

class Dataset(FrozenModel):
    """An uploaded table: ordered columns, one type per column, flat rows."""

    name: str = Field(description="Display name of the dataset (usually the file name)")
    columns: List[str] = Field(description="Ordered, unique column names")
    column_types: Dict[str, ColumnType] = Field(description="Type of every column")
    rows: List[Dict[str, Any]] = Field(
        default_factory=list,
        description="Records mapping column name to raw value; absent keys are missing"
    )

    @model_validator(mode="after")
    def _check_columns(self) -> "Dataset":
        seen = set()
        duplicates = []
        for column in self.columns:
            if column in seen:
                duplicates.append(column)
            seen.add(column)
        if duplicates:
            raise ValueError(f"Duplicate column names: {duplicates}")

        unknown = [c for c in self.column_types if c not in seen]
        if unknown:
            raise ValueError(f"Types given for unknown columns: {unknown}")

        untyped = [c for c in self.columns if c not in self.column_types]
        if untyped:
            raise ValueError(f"Columns without a type: {untyped}")

        return self

    @classmethod
    def from_records(
        cls,
        name: str,
        rows: List[Dict[str, Any]],
        columns: Optional[List[str]] = None,
        column_types: Optional[Dict[str, str]] = None,
        inferencer: Optional[Any] = None
    ) -> "Dataset":
        """
        Build a Dataset from parsed records, inferring missing column types.

        Args:
            name: Dataset name
            rows: Parsed records
            columns: Column order (default: order of first appearance across records)
            column_types: Known types; any column not listed is inferred
            inferencer: TypeInferencer to use (default: one with default settings)

        Example:
            >>> ds = Dataset.from_records("sales", [{"region": "East", "sales": 100}])
            >>> ds.column_types
            {'region': 'string', 'sales': 'number'}
        """
        from .profiling.type_inferencer import TypeInferencer

        if columns is None:
            columns = []
            seen = set()
            for row in rows:
                for key in row:
                    if key not in seen:
                        seen.add(key)
                        columns.append(key)

        types = dict(column_types or {})
        untyped = [c for c in columns if c not in types]
        if untyped:
            inferencer = inferencer or TypeInferencer()
            types.update(inferencer.infer_types(rows, untyped))

        return cls(
            name=name,
            columns=list(columns),
            column_types={c: types[c] for c in columns},
            rows=rows,
        )

    @property
    def row_count(self) -> int:
        return len(self.rows)

    @property
    def column_count(self) -> int:
        return len(self.columns)

    def columns_of_type(self, column_type: str) -> List[str]:
        """Columns of the given type, in column order."""
        return [c for c in self.columns if self.column_types[c] == column_type]

    def column_values(self, column: str) -> List[Any]:
        """Raw values of one column in row order (None where the key is absent)."""
        return [row.get(column) for row in self.rows]


#### Summary components ####

class TopValue(FrozenModel):
    value: str
    count: int


class ColumnStats(FrozenModel):
    """Descriptive statistics for one column; fields outside its type stay None."""

    type: ColumnType
    count: int = Field(description="Number of present, coercible values")
    missing_count: int = Field(description="Missing or non-coercible values")

    # number
    min: Optional[float] = None
    max: Optional[float] = None
    mean: Optional[float] = None
    median: Optional[float] = None
    std_dev: Optional[float] = Field(default=None, description="Population standard deviation")

    # string
    distinct_count: Optional[int] = None
    top_values: Optional[List[TopValue]] = None

    # date
    min_date: Optional[str] = None
    max_date: Optional[str] = None
    date_range_days: Optional[int] = None

    # boolean
    true_count: Optional[int] = None
    false_count: Optional[int] = None


class ScatterPoint(FrozenModel):
    x: float
    y: float


class CorrelationPair(FrozenModel):
    """Pearson correlation of two numeric columns, reported once per pair."""

    x_column: str
    y_column: str
    correlation: float = Field(ge=-1.0, le=1.0)
    point_count: int = Field(description="Rows where both columns are present")
    scatter_data: List[ScatterPoint] = Field(default_factory=list)


class AggregationPoint(FrozenModel):
    group: str
    value: float


class Aggregation(FrozenModel):
    """A group-by reduction of one numeric column over one categorical column."""

    description: str
    group_by: str
    metric: str
    operation: Operation
    data: List[AggregationPoint] = Field(default_factory=list)


class DataSummary(FrozenModel):
    """Statistical and aggregation digest of a Dataset."""

    dataset_name: str
    row_count: int
    column_count: int
    column_types: Dict[str, ColumnType] = Field(default_factory=dict)
    column_stats: Dict[str, ColumnStats] = Field(default_factory=dict)
    correlations: List[CorrelationPair] = Field(default_factory=list)
    precomputed_aggregations: List[Aggregation] = Field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        """True when there is nothing to show."""
        return not (self.column_stats or self.correlations or self.precomputed_aggregations)
