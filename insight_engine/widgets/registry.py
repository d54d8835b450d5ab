"""
Widget Registry

The dashboard widgets the AI service may choose from, each with the schema
its props must satisfy. The registry is built once at import time and is
read-only.
"""

from types import MappingProxyType
from typing import Any, Dict, List, Literal, Mapping, NamedTuple, Optional, Type, Union
from pydantic import BaseModel, Field, ValidationError

from ..models import FrozenModel
from ..utils.logging_utils import get_logger

logger = get_logger(__name__)


#### Props schemas ####

class KPICardProps(BaseModel):
    title: str
    value: Union[str, float]
    trend: Optional[str] = None
    icon: Optional[Literal["DollarSign", "Users", "TrendingUp", "Star"]] = None
    color: Optional[Literal["blue", "green", "purple", "orange", "red"]] = None
    is_positive: Optional[bool] = None


class LineChartProps(BaseModel):
    title: str
    data: List[Dict[str, Any]] = Field(default_factory=list)
    x_axis: str
    y_axis: str
    color: Optional[str] = None
    height: Optional[int] = None


class BarChartProps(BaseModel):
    title: str
    data: List[Dict[str, Any]] = Field(default_factory=list)
    x_axis: str
    y_axis: str
    color: Optional[str] = None
    height: Optional[int] = None


class PieSlice(BaseModel):
    name: str
    value: float


class PieChartProps(BaseModel):
    title: str
    data: List[PieSlice] = Field(default_factory=list)
    height: Optional[int] = None


class DataTableProps(BaseModel):
    title: str
    columns: List[str] = Field(default_factory=list)
    data: List[Dict[str, Any]] = Field(default_factory=list)
    sortable: Optional[bool] = None


class ScatterPlotProps(BaseModel):
    title: str
    data: List[Dict[str, float]] = Field(default_factory=list)
    x_label: Optional[str] = None
    y_label: Optional[str] = None
    color: Optional[str] = None
    height: Optional[int] = None


class StatCardProps(BaseModel):
    label: str
    value: Union[str, float]
    change: Optional[str] = None
    is_positive: Optional[bool] = None


class TextBlockProps(BaseModel):
    title: str
    content: str


class WidgetSpec(NamedTuple):
    props_schema: Type[BaseModel]
    description: str


WIDGET_REGISTRY: Mapping[str, WidgetSpec] = MappingProxyType({
    'KPICard': WidgetSpec(KPICardProps, "Headline metric with an optional trend"),
    'LineChart': WidgetSpec(LineChartProps, "Trend of one numeric column over an ordered axis"),
    'BarChart': WidgetSpec(BarChartProps, "Comparison of a numeric value across categories"),
    'PieChart': WidgetSpec(PieChartProps, "Share of a total across a few categories"),
    'DataTable': WidgetSpec(DataTableProps, "Tabular view of rows"),
    'ScatterPlot': WidgetSpec(ScatterPlotProps, "Relationship between two numeric columns"),
    'StatCard': WidgetSpec(StatCardProps, "Single labelled statistic"),
    'TextBlock': WidgetSpec(TextBlockProps, "Narrative text such as insights"),
})


class WidgetInstruction(FrozenModel):
    """A widget name with validated props, ready to render."""

    name: str
    props: Dict[str, Any]


def validate_widget(name: str, props: Dict[str, Any]) -> Optional[WidgetInstruction]:
    """
    Validate an AI-chosen widget against the registry.

    Args:
        name: Widget name
        props: Props as produced by the AI service or the suggester

    Returns:
        WidgetInstruction with normalized props, or None when the widget is
        unknown or its props are invalid (logged, never raised)
    """
    spec = WIDGET_REGISTRY.get(name)
    if spec is None:
        logger.warning(f"Widget {name} not found in registry")
        return None

    try:
        validated = spec.props_schema.model_validate(props)
    except ValidationError as e:
        logger.warning(f"Invalid props for widget {name}: {e.error_count()} errors")
        return None

    return WidgetInstruction(name=name, props=validated.model_dump(exclude_none=True))
