"""
File-watch support for hosts with hot reload

The host registers ExpansionResult.watchFiles with its file watcher and
asks reload_isRequired() whether a change it observed should trigger a
full page reload.
"""

from pathlib import Path
from typing import Iterable, Optional, Union

from ..models.options import IncludeOptions
from .log import LOG


def reload_isRequired(
    changed_file: Union[str, Path],
    options: IncludeOptions,
    watch_files: Optional[Iterable[Path]] = None,
) -> bool:
    """
    Decide whether a changed file should trigger a full reload

    Args:
        changed_file: Path reported by the host's watcher
        options: Expansion options (watch flag and extensions are used)
        watch_files: Files read by the last expansion; when given, only
                     changes to those files trigger a reload

    Returns:
        True if the host should reload
    """
    if not options.watch:
        return False
    changed = str(changed_file)
    if not any(changed.endswith(ext) for ext in options.extensions):
        return False
    if watch_files is not None:
        watched = {Path(p).absolute() for p in watch_files}
        if Path(changed).absolute() not in watched:
            return False
    LOG(f"File changed: {changed}", level=1)
    return True
