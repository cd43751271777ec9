"""
Exceptions raised while expanding include directives.

Directive-level errors (DisallowedExtensionError, UnreadableFileError) are
caught by the expander, turned into diagnostics and never escape an
expansion call. CircularIncludeError and OptionsError do propagate.
"""

from pathlib import Path
from typing import Optional, Sequence


class IncludeError(Exception):
    """Base class for include expansion failures"""

    def __init__(
        self,
        message: str,
        path: Optional[Path] = None,
        source: Optional[Path] = None,
    ) -> None:
        super().__init__(message)
        self.path = path
        self.source = source


class DisallowedExtensionError(IncludeError):
    """Raised when an include target does not end with an allowed extension"""
    pass


class UnreadableFileError(IncludeError):
    """Raised when an include target cannot be read"""
    pass


class CircularIncludeError(IncludeError):
    """Raised when a file reappears in its own chain of includes"""

    def __init__(self, path: Path, chain: Sequence[Path]) -> None:
        self.chain = list(chain) + [path]
        trail = " -> ".join(str(p) for p in self.chain)
        super().__init__(f"Circular include detected: {trail}", path=path)


class OptionsError(Exception):
    """Raised when an options file cannot be loaded or validated"""
    pass
