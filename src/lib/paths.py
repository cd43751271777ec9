"""
Include path resolution

Turns the (already interpolated) file attribute of an <include> into an
absolute path and validates it against the allowed extensions.

Resolution order:
1. Alias: 'find/rest' with a registered alias becomes 'replacement/rest',
   made absolute against the root directory
2. Rooted: '/rest' is resolved against the root directory
3. Relative: everything else is resolved against the including file's
   directory, forced relative with './' unless absolute paths are allowed

The root directory stands in for the process working directory. Paths are
normalized with os.path.abspath; symlinks are not resolved.
"""

import os
from pathlib import Path
from typing import Iterable, Optional, Sequence

from ..models.options import Alias
from .errors import DisallowedExtensionError


def alias_apply(request: str, aliases: Sequence[Alias]) -> Optional[str]:
    """
    Rewrite request with the first alias whose prefix it starts with

    Args:
        request: Include path as written (after interpolation)
        aliases: Ordered alias rules

    Returns:
        Rewritten path, or None if no alias applies
    """
    for alias in aliases:
        if request.startswith(alias.find + '/'):
            return request.replace(alias.find, alias.replacement, 1)
    return None


def path_resolve(
    request: str,
    base_dir: Path,
    aliases: Sequence[Alias] = (),
    allow_absolute: bool = False,
    root_dir: Optional[Path] = None,
) -> Path:
    """
    Compute the absolute path of an include target

    Args:
        request: Include path (the interpolated file attribute)
        base_dir: Directory of the document containing the include
        aliases: Ordered alias rules
        allow_absolute: Join request to base_dir directly instead of via './'
        root_dir: Working directory for rooted and aliased paths
                  (defaults to the process working directory)

    Returns:
        Absolute, normalized Path

    Example:
        >>> path_resolve('card.html', Path('/site/partials'))
        PosixPath('/site/partials/card.html')
        >>> path_resolve('/card.html', Path('/site/partials'), root_dir=Path('/site'))
        PosixPath('/site/card.html')
    """
    root = root_dir if root_dir is not None else Path.cwd()

    aliased = alias_apply(request, aliases)
    if aliased is not None:
        return Path(os.path.abspath(os.path.join(root, aliased)))

    if request.startswith('/'):
        return Path(os.path.abspath(os.path.join(root, request[1:])))

    if allow_absolute:
        return Path(os.path.abspath(os.path.join(base_dir, request)))
    return Path(os.path.abspath(os.path.join(base_dir, '.' + os.sep + request)))


def extension_check(path: Path, extensions: Iterable[str]) -> Path:
    """
    Validate the suffix of a resolved include path

    The check is a plain string suffix match, so multi-part extensions
    such as '.inc.html' work.

    Returns:
        path unchanged

    Raises:
        DisallowedExtensionError: If no allowed extension matches
    """
    if not any(str(path).endswith(ext) for ext in extensions):
        raise DisallowedExtensionError(
            f"Skipping (extension not allowed): {path}", path=path
        )
    return path
