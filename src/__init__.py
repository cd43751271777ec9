"""
htmlinclude - Recursive <include> expansion for HTML documents

Resolves <include file="..."> directives into a single document, with
scoped {{$variables}}, named and default slots, and class/style merging
onto the included root element.
"""

__version__ = "1.0.0"

from .lib import (
    IncludeExpander,
    expand,
    expand_file,
    fragment_parse,
    reload_isRequired,
    IncludeError,
    CircularIncludeError,
    OptionsError,
    LOG,
    state_connectToLogger,
)
from .models import Alias, IncludeOptions, Diagnostic, DiagnosticKind, ExpansionResult

__all__ = [
    "IncludeExpander",
    "expand",
    "expand_file",
    "fragment_parse",
    "reload_isRequired",
    "IncludeError",
    "CircularIncludeError",
    "OptionsError",
    "Alias",
    "IncludeOptions",
    "Diagnostic",
    "DiagnosticKind",
    "ExpansionResult",
    "LOG",
    "state_connectToLogger",
    "__version__",
]
