"""Markup layer: path tracking and validated text over lxml events."""

from .decoding import (
    SourceType,
    attribute_pairs,
    attribute_values,
    element_text,
    is_attribute_only,
    iter_events,
    qualified_name,
    to_text,
    translate_syntax_error,
)
from .path import XPath

__all__ = [
    "SourceType",
    "XPath",
    "attribute_pairs",
    "attribute_values",
    "element_text",
    "is_attribute_only",
    "iter_events",
    "qualified_name",
    "to_text",
    "translate_syntax_error",
]
