"""
Widgets: the read-only widget registry and the rule-based dashboard suggester.
"""

from .registry import WIDGET_REGISTRY, WidgetInstruction, WidgetSpec, validate_widget
from .suggester import WidgetSuggester

__all__ = ['WIDGET_REGISTRY', 'WidgetInstruction', 'WidgetSpec', 'validate_widget', 'WidgetSuggester']
