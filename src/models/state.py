"""
Per-directive state model and pipeline helper

Defines IncludeState, the state bus carried through the stages that turn
one <include> directive into a fragment, and the pipeline() helper for
composing those stages.
"""

from pathlib import Path
from typing import Callable, Dict, Optional, Tuple, TypeVar, TYPE_CHECKING
from dataclasses import dataclass, field

# Forward reference for type hint - avoid circular import
if TYPE_CHECKING:
    from ..lib.tree import Document, Element
    from .diagnostics import ExpansionResult


IS = TypeVar("IS", bound="IncludeState")


@dataclass
class IncludeState:
    """
    State container for expanding a single include directive (state bus pattern).

    Each stage receives the previous stage's state, copies it and fills in
    the fields it is responsible for. A stage that cannot continue raises an
    IncludeError subclass; the expander then drops the directive.

    Pipeline stages and their state additions:
        - Initial: tag, baseDir, inherited, sourceFile, chain, result
        - directive_resolve: fileAttr, localVars, mergedVars, fileRequest, resolvedPath
        - file_load: content
        - content_expand: expandedHtml
        - content_interpolate: fragment
        - slots_merge: slotMap (fragment slots filled in place)
        - attributes_merge: (fragment root attributes updated in place)

    Attributes:
        tag: The <include> element being expanded
        baseDir: Directory relative include paths are resolved against
        inherited: Variable scope handed down by the enclosing include
        sourceFile: Top-level document path, for diagnostics (None if unknown)
        chain: Resolved paths currently being expanded, outermost first
        result: Result of the top-level call (diagnostics, watch set)
        fileAttr: Raw value of the file attribute
        localVars: Variables declared on this tag ($name attributes)
        mergedVars: inherited overridden by localVars
        fileRequest: fileAttr after interpolation with mergedVars
        resolvedPath: Absolute path of the include target
        content: Raw text read from resolvedPath
        expandedHtml: content with its own includes expanded
        fragment: Interpolated expandedHtml parsed into a tree
        slotMap: Slot name to caller-supplied markup
    """

    tag: Optional["Element"] = field(default=None)
    baseDir: Path = field(default=Path("."))
    inherited: Dict[str, str] = field(default_factory=dict)
    sourceFile: Optional[Path] = field(default=None)
    chain: Tuple[Path, ...] = field(default=())
    result: Optional["ExpansionResult"] = field(default=None)

    fileAttr: str = field(default="")
    localVars: Dict[str, str] = field(default_factory=dict)
    mergedVars: Dict[str, str] = field(default_factory=dict)
    fileRequest: str = field(default="")
    resolvedPath: Optional[Path] = field(default=None)
    content: str = field(default="")
    expandedHtml: str = field(default="")
    fragment: Optional["Document"] = field(default=None)
    slotMap: Dict[str, str] = field(default_factory=dict)

    def copy(self: IS) -> IS:
        """
        Creates a shallow copy of the IncludeState instance.

        Returns:
            A new IncludeState instance.
        """
        return type(self)(**self.__dict__)


def pipeline(
    initial_state: IncludeState, *stages: Callable[[IncludeState], IncludeState]
) -> IncludeState:
    """
    Execute a functional pipeline of state transformations.

    Each stage is a function (IncludeState) -> IncludeState that receives
    the output of the previous stage and returns a new state.

    Args:
        initial_state: Starting IncludeState
        *stages: Variable number of stage functions to execute in order

    Returns:
        Final IncludeState after all transformations

    Example:
        final_state = pipeline(
            initial_state,
            directive_resolve,
            file_load,
            content_expand,
        )

    This is equivalent to:
        content_expand(file_load(directive_resolve(initial_state)))

    But reads left-to-right instead of inside-out.
    """
    from functools import reduce
    return reduce(lambda state, stage: stage(state), stages, initial_state)
