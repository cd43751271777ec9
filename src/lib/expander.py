"""
Include expander

Recursively replaces <include file="..."> directives with the expanded
content of the files they name.

Each expansion pass repeats until the document holds no directive:
1. Scan: find the first <include> in document order
2. Resolve: merge variables, interpolate and resolve the file attribute
3. Load: read the target through the reader
4. Recurse: expand the target's own includes with the merged scope
5. Interpolate: substitute {{$vars}} and parse the result
6. Slot merge: fill the fragment's <slot> elements
7. Attribute merge: move pass-through attributes onto the fragment root
8. Replace: splice the fragment in place of the directive

Steps 2-7 run as a pipeline over IncludeState. Problems with a single
directive (disallowed extension, unreadable file) drop that directive and
are recorded as diagnostics; only a circular include aborts expansion.

Example:
    >>> result = expand('<include file="card.html" $title="Hi"></include>',
    ...                 base_dir=Path('site'))
    >>> result.html
    '<div class="card">Hi</div>'
"""

from pathlib import Path
from typing import Callable, Dict, Mapping, Optional, Tuple, cast

from ..config.settings import appsettings
from ..models.diagnostics import Diagnostic, DiagnosticKind, ExpansionResult
from ..models.options import IncludeOptions
from ..models.state import IncludeState, pipeline
from .attributes import rootAttributes_merge
from .errors import (
    CircularIncludeError,
    DisallowedExtensionError,
    IncludeError,
    UnreadableFileError,
)
from .log import LOG, WARN, state_connectToLogger
from .paths import extension_check, path_resolve
from .slots import slotMap_build, slots_fill
from .tree import Document, Element, fragment_parse
from .variables import scopes_merge, vars_extract, variables_interpolate

Reader = Callable[[Path], str]


def file_read(path: Path) -> str:
    """Default reader: the file's text as UTF-8"""
    return path.read_text(encoding='utf-8')


class IncludeExpander:
    """
    Expands include directives in HTML documents

    Responsibilities:
    - Locate <include> directives, one at a time, in document order
    - Resolve, read and recursively expand their targets
    - Interpolate variables, fill slots, merge root attributes
    - Collect diagnostics and the set of files read

    An expander holds no per-document state between expand() calls; the
    diagnostics and watch set of a call live in its ExpansionResult.
    """

    def __init__(
        self,
        options: Optional[IncludeOptions] = None,
        reader: Optional[Reader] = None,
        verbosity: Optional[int] = None,
    ) -> None:
        """
        Initialize expander

        Args:
            options: Expansion options (default: IncludeOptions())
            reader: Callable returning a file's text; must raise OSError,
                    UnicodeDecodeError or ValueError when it cannot read
            verbosity: Logging verbosity (default: appsettings.verbosity)
        """
        self.options = options or IncludeOptions()
        self.reader: Reader = reader or file_read
        self.verbosity = appsettings.verbosity if verbosity is None else verbosity

    def expand(
        self,
        html: str,
        base_dir: Optional[Path] = None,
        source_file: Optional[Path] = None,
        inherited: Optional[Mapping[str, str]] = None,
    ) -> ExpansionResult:
        """
        Expand every include directive of a top-level document

        Args:
            html: Document text
            base_dir: Directory for relative include paths
                      (default: the options' root directory)
            source_file: Path of the document, reported in diagnostics and
                         treated as the first link of the include chain
            inherited: Variables visible to the document's own directives

        Returns:
            ExpansionResult with the expanded html, diagnostics and watch set

        Raises:
            CircularIncludeError: If a file (transitively) includes itself
        """
        state_connectToLogger(self)

        result = ExpansionResult(html="")
        base = base_dir if base_dir is not None else self.options.root_get()
        chain: Tuple[Path, ...] = ()
        if source_file is not None:
            source_file = Path(source_file).absolute()
            chain = (source_file,)

        LOG(f"Expanding includes of {source_file or '(inline document)'}", level=2)
        result.html = self.html_expand(
            html,
            base_dir=Path(base),
            inherited=dict(inherited or {}),
            source_file=source_file,
            chain=chain,
            result=result,
        )
        LOG(
            f"Expansion complete: {len(result.watchFiles)} files read, "
            f"{len(result.diagnostics)} warnings",
            level=2,
        )
        return result

    def html_expand(
        self,
        html: str,
        base_dir: Path,
        inherited: Dict[str, str],
        source_file: Optional[Path],
        chain: Tuple[Path, ...],
        result: ExpansionResult,
    ) -> str:
        """
        Expand one document level; the recursion point of the algorithm

        Returns:
            Serialized document with no <include> left
        """
        document = fragment_parse(html)

        while True:
            tag = document.element_find('include')
            if tag is None:
                break

            if not tag.attr_get('file'):
                LOG("Dropping <include> without file attribute", level=3)
                tag.remove()
                continue

            state = IncludeState(
                tag=tag,
                baseDir=base_dir,
                inherited=inherited,
                sourceFile=source_file,
                chain=chain,
                result=result,
            )
            try:
                state = pipeline(
                    state,
                    self.directive_resolve,
                    self.file_load,
                    self.content_expand,
                    self.content_interpolate,
                    self.slots_merge,
                    self.attributes_merge,
                )
            except (DisallowedExtensionError, UnreadableFileError) as e:
                self.diagnostic_record(result, e)
                tag.remove()
                continue

            fragment = cast(Document, state.fragment)
            tag.replace_with(*fragment.children)

        return document.html()

    def directive_resolve(self, inputstate: IncludeState) -> IncludeState:
        """
        Merge variables and resolve the include target

        Returns:
            IncludeState with fileAttr, localVars, mergedVars, fileRequest
            and resolvedPath set

        Raises:
            DisallowedExtensionError: If the target's suffix is not allowed
            CircularIncludeError: If the target is already being expanded
        """
        state = inputstate.copy()
        tag = cast(Element, state.tag)

        state.fileAttr = tag.attr_get('file') or ''
        state.localVars = vars_extract(tag.attributes)
        state.mergedVars = scopes_merge(state.inherited, state.localVars)
        state.fileRequest = variables_interpolate(
            state.fileAttr, state.mergedVars, self.options.delimiters
        )

        resolved = path_resolve(
            state.fileRequest,
            state.baseDir,
            aliases=self.options.aliases,
            allow_absolute=self.options.allow_absolute_paths,
            root_dir=self.options.root_get(),
        )
        try:
            extension_check(resolved, self.options.extensions)
        except DisallowedExtensionError as e:
            e.source = state.sourceFile
            raise

        if resolved in state.chain:
            raise CircularIncludeError(resolved, state.chain)

        state.resolvedPath = resolved
        LOG(f"Resolved '{state.fileAttr}' to {resolved}", level=3)
        return state

    def file_load(self, inputstate: IncludeState) -> IncludeState:
        """
        Read the include target

        Raises:
            UnreadableFileError: If the reader fails, including paths the
                                 OS rejects outright (embedded NUL byte)
        """
        state = inputstate.copy()
        path = cast(Path, state.resolvedPath)

        try:
            state.content = self.reader(path)
        except (OSError, UnicodeDecodeError, ValueError) as e:
            raise UnreadableFileError(
                f"Error reading file: {path}\n"
                f"↪ referenced in: {state.sourceFile or '(unknown source)'}\n"
                f"  (include: file=\"{state.fileAttr}\"): {e}",
                path=path,
                source=state.sourceFile,
            ) from e

        LOG(f"Loaded: {path}", level=1)
        if self.options.watch:
            cast(ExpansionResult, state.result).watchFiles.add(path)
        return state

    def content_expand(self, inputstate: IncludeState) -> IncludeState:
        """Expand the target's own includes with the merged scope"""
        state = inputstate.copy()
        path = cast(Path, state.resolvedPath)

        state.expandedHtml = self.html_expand(
            state.content,
            base_dir=path.parent,
            inherited=state.mergedVars,
            source_file=state.sourceFile or path,
            chain=state.chain + (path,),
            result=cast(ExpansionResult, state.result),
        )
        return state

    def content_interpolate(self, inputstate: IncludeState) -> IncludeState:
        """Substitute variables into the expanded content and parse it"""
        state = inputstate.copy()
        interpolated = variables_interpolate(
            state.expandedHtml, state.mergedVars, self.options.delimiters
        )
        state.fragment = fragment_parse(interpolated)
        return state

    def slots_merge(self, inputstate: IncludeState) -> IncludeState:
        """Fill the fragment's slots from the directive's templates and body"""
        state = inputstate.copy()

        state.slotMap = slotMap_build(cast(Element, state.tag))
        filled = slots_fill(cast(Document, state.fragment), state.slotMap)
        if filled:
            LOG(f"Filled {filled} slots with {sorted(state.slotMap)}", level=3)
        return state

    def attributes_merge(self, inputstate: IncludeState) -> IncludeState:
        """Move pass-through attributes onto the fragment's single root"""
        state = inputstate.copy()
        tag = cast(Element, state.tag)
        result = cast(ExpansionResult, state.result)

        if not rootAttributes_merge(tag, cast(Document, state.fragment)):
            message = (
                f"Cannot apply class/style: \"{state.fileRequest}\" "
                f"has multiple root elements."
            )
            WARN(message)
            result.diagnostics.append(Diagnostic(
                kind=DiagnosticKind.AMBIGUOUS_ATTRIBUTE_TARGET,
                message=message,
                path=state.resolvedPath,
                source=state.sourceFile,
            ))
        return state

    def diagnostic_record(self, result: ExpansionResult, error: IncludeError) -> None:
        """Log a dropped directive and add it to the result's diagnostics"""
        if isinstance(error, DisallowedExtensionError):
            kind = DiagnosticKind.DISALLOWED_EXTENSION
        else:
            kind = DiagnosticKind.UNREADABLE_FILE
        message = str(error)
        WARN(message)
        result.diagnostics.append(Diagnostic(
            kind=kind,
            message=message,
            path=error.path,
            source=error.source,
        ))


def expand(
    html: str,
    base_dir: Optional[Path] = None,
    options: Optional[IncludeOptions] = None,
    source_file: Optional[Path] = None,
    reader: Optional[Reader] = None,
    verbosity: Optional[int] = None,
) -> ExpansionResult:
    """
    Expand the include directives of an HTML document

    Args:
        html: Document text
        base_dir: Directory for relative include paths (default: root dir)
        options: Expansion options
        source_file: Path of the document, for diagnostics
        reader: Custom file reader
        verbosity: Logging verbosity

    Returns:
        ExpansionResult
    """
    expander = IncludeExpander(options=options, reader=reader, verbosity=verbosity)
    return expander.expand(html, base_dir=base_dir, source_file=source_file)


def expand_file(
    path: Path,
    base_dir: Optional[Path] = None,
    options: Optional[IncludeOptions] = None,
    reader: Optional[Reader] = None,
    verbosity: Optional[int] = None,
) -> ExpansionResult:
    """
    Read and expand a document file

    Like a build tool's HTML entry point, the document's includes resolve
    against base_dir (default: the root directory), not the file's own
    directory.

    Raises:
        OSError: If the document itself cannot be read
        CircularIncludeError: If a file (transitively) includes itself
    """
    expander = IncludeExpander(options=options, reader=reader, verbosity=verbosity)
    html = expander.reader(Path(path))
    return expander.expand(html, base_dir=base_dir, source_file=Path(path))
