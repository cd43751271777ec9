"""
htmlinclude - Recursive <include> expansion for HTML documents

Build-time template expansion: file inclusion, variable interpolation,
slots and root attribute merging.
"""

__version__ = "1.0.0"

from .tree import fragment_parse, Document, Element, TextNode, CommentNode
from .expander import IncludeExpander, expand, expand_file
from .errors import (
    IncludeError,
    DisallowedExtensionError,
    UnreadableFileError,
    CircularIncludeError,
    OptionsError,
)
from .watch import reload_isRequired
from .log import LOG, state_connectToLogger

__all__ = [
    "fragment_parse",
    "Document",
    "Element",
    "TextNode",
    "CommentNode",
    "IncludeExpander",
    "expand",
    "expand_file",
    "IncludeError",
    "DisallowedExtensionError",
    "UnreadableFileError",
    "CircularIncludeError",
    "OptionsError",
    "reload_isRequired",
    "LOG",
    "state_connectToLogger",
    "__version__",
]
