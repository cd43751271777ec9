"""
Diagnostic records and expansion results

Non-fatal problems met while expanding a document are collected as
Diagnostic records so callers and tests can inspect them without parsing
log output.
"""

from enum import Enum
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Set


class DiagnosticKind(Enum):
    """
    Kinds of non-fatal directive problems

    A directive with a missing file attribute is dropped silently and an
    unmatched named slot falls back to its own content, so neither has a
    kind here.
    """
    DISALLOWED_EXTENSION = "disallowed-extension"              # directive dropped
    UNREADABLE_FILE = "unreadable-file"                        # directive dropped
    AMBIGUOUS_ATTRIBUTE_TARGET = "ambiguous-attribute-target"  # class/style dropped


@dataclass
class Diagnostic:
    """
    One non-fatal problem met during expansion

    Attributes:
        kind: What went wrong
        message: Human-readable description (same text as the logged warning)
        path: Include target the problem concerns, if resolved
        source: Top-level document the directive was reached from, if known
    """
    kind: DiagnosticKind
    message: str
    path: Optional[Path] = None
    source: Optional[Path] = None


@dataclass
class ExpansionResult:
    """
    Result of expanding one top-level document

    Attributes:
        html: Fully expanded document, with every <include> removed
        diagnostics: Problems met, in the order they occurred
        watchFiles: Absolute paths of every file read (empty when watch is off)
    """
    html: str
    diagnostics: List[Diagnostic] = field(default_factory=list)
    watchFiles: Set[Path] = field(default_factory=set)

    def diagnostics_ofKind(self, kind: DiagnosticKind) -> List[Diagnostic]:
        return [d for d in self.diagnostics if d.kind == kind]
