"""
Candidate file discovery for the mapping and verbatim dump tasks.
"""

import logging
import os
from typing import Iterable, List, Sequence

from core.errors import RootNotFound
from core.settings import DEFAULT_EXCLUDE_DIRS, normalize_extension
from mapping.document import CandidateFile

logger = logging.getLogger(__name__)


def sort_key(path: str) -> tuple:
    """Case-insensitive ordering with a case-sensitive tie-break."""
    return (path.lower(), path)


def resolve_root(root_path: str) -> str:
    """Return the absolute root path.

    Raises:
        RootNotFound: If the path is not an existing directory.
    """
    root = os.path.abspath(os.path.expanduser(root_path))
    if not os.path.isdir(root):
        raise RootNotFound(root)
    return root


def discover_files(
    root_path: str,
    extensions: Iterable[str],
    recursive: bool = True,
    exclude_dirs: Sequence[str] = DEFAULT_EXCLUDE_DIRS,
) -> List[CandidateFile]:
    """Find files whose extension is in the allow-list.

    Args:
        root_path: Directory to scan.
        extensions: Allowed extensions, matched case-insensitively.
        recursive: Descend into subdirectories.
        exclude_dirs: Directory names skipped while descending (case-insensitive).

    Returns:
        Candidates with absolute paths, sorted case-insensitively by path.

    Raises:
        RootNotFound: If the root directory does not exist.
    """
    root = resolve_root(root_path)
    allowed = {normalize_extension(ext) for ext in extensions}
    excluded = {name.lower() for name in exclude_dirs}

    logger.info("Discovering %s files in %s", ", ".join(sorted(allowed)), root)

    candidates: List[CandidateFile] = []
    for current, dirs, files in os.walk(root):
        if recursive:
            dirs[:] = [d for d in dirs if d.lower() not in excluded]
        else:
            dirs[:] = []

        for name in files:
            ext = os.path.splitext(name)[1].lower()
            if ext in allowed:
                candidates.append(
                    CandidateFile(full_path=os.path.join(current, name), extension=ext)
                )

    candidates.sort(key=lambda candidate: sort_key(candidate.full_path))
    logger.info("Found %d candidate files", len(candidates))
    return candidates
