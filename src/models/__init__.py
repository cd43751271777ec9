"""
Models package for htmlinclude

Contains data structures and type definitions for the expansion pipeline.
"""

from .state import IncludeState, pipeline
from .options import Alias, IncludeOptions
from .diagnostics import Diagnostic, DiagnosticKind, ExpansionResult

__all__ = [
    "IncludeState",
    "pipeline",
    "Alias",
    "IncludeOptions",
    "Diagnostic",
    "DiagnosticKind",
    "ExpansionResult",
]
