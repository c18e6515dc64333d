"""Helpers for declaring Python callables as functions the model can call."""

from .declarations import declare_function, tool_from_functions
from . import schema_sanitizer

__all__ = ["declare_function", "tool_from_functions", "schema_sanitizer"]
