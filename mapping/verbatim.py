"""
Verbatim (full code) extract.

Concatenates raw file contents between START/END markers into one text file.
File contents are never altered.
"""

import logging
import os
import re
from typing import Callable, List, Sequence

from core.errors import FileIOError
from core.output_writer import write_output
from core.settings import FullCodeExtractOptions
from core.structured_logging import file_scope, phase_scope
from mapping.discovery import discover_files, resolve_root
from mapping.document import CandidateFile

logger = logging.getLogger(__name__)

START_MARKER = "-----8<----- [FILE START] {path} -----"
END_MARKER = "-----8<----- [FILE END]   {path} -----"

DEFAULT_DUMP_STEM = "FullCodeExtract"

_SRC_MARKER = "/src/"
_INVALID_FILENAME_CHARS = re.compile(r'[<>:"/\\|?*\x00-\x1f]')

RawReader = Callable[[str], str]


def read_raw_text(file_path: str) -> str:
    """Read a file so that writing the result back reproduces its bytes exactly.

    Raises:
        FileIOError: If the file cannot be read.
    """
    try:
        with open(file_path, "r", encoding="utf-8", errors="surrogateescape", newline="") as f:
            return f.read()
    except OSError as exc:
        raise FileIOError(file_path, "read", exc) from exc


def format_header(root: str, include_subdirectories: bool, extensions: Sequence[str]) -> List[str]:
    """Return the header lines describing the dump format."""
    return [
        "### Solution Insight for AI - Full Code Extract",
        "",
        "Format:",
        "Each file is wrapped by two markers, and the content between them is the verbatim file content:",
        START_MARKER.format(path="<FULL_PATH>"),
        END_MARKER.format(path="<FULL_PATH>"),
        "Notes:",
        "- FULL_PATH is the absolute path of the file.",
        "- The code is copied exactly as-is (no normalization or reformatting).",
        f"- File types included: {', '.join(extensions)}",
        "",
        f"Root: {root}",
        f"Include subfolders: {include_subdirectories}",
        "",
    ]


def build_verbatim_dump(
    root: str,
    files: Sequence[CandidateFile],
    include_subdirectories: bool,
    extensions: Sequence[str],
    read_raw: RawReader = read_raw_text,
) -> str:
    """Build the full dump text: header, then one marker-delimited block per file.

    A newline is inserted before the END marker only when the content does not
    already end with one.
    """
    parts: List[str] = ["\n".join(format_header(root, include_subdirectories, extensions)) + "\n"]

    for candidate in files:
        with file_scope(candidate.full_path):
            content = read_raw(candidate.full_path)
            logger.debug("Appending %d characters", len(content))
        parts.append(START_MARKER.format(path=candidate.full_path) + "\n")
        parts.append(content)
        if not content.endswith(("\n", "\r")):
            parts.append("\n")
        parts.append(END_MARKER.format(path=candidate.full_path) + "\n")
        parts.append("\n")

    return "".join(parts)


def output_name_for_path(input_path: str) -> str:
    """Derive the dump file name from the extracted directory.

    Everything up to and including the first ``src`` directory (or, without
    one, the drive/root anchor) is dropped and separators become dots:
    ``/work/Darwin/src/Darwin.Web/Areas/Admin`` -> ``Darwin.Web.Areas.Admin.txt``.
    """
    full = os.path.abspath(input_path).replace("\\", "/").rstrip("/")
    lowered = full.lower()

    idx = lowered.find(_SRC_MARKER)
    if idx >= 0:
        tail = full[idx + len(_SRC_MARKER):]
    else:
        tail = os.path.splitdrive(full)[1]

    stem = ".".join(part for part in tail.split("/") if part)
    stem = _INVALID_FILENAME_CHARS.sub("_", stem)
    if not stem.strip():
        stem = DEFAULT_DUMP_STEM
    return f"{stem}.txt"


def run_full_code_extract(options: FullCodeExtractOptions, output_root: str | None = None) -> str:
    """Dump every matching file under the root into one text file.

    Args:
        options: Root path, subdirectory switch and extensions to include.
        output_root: Directory receiving the dump; defaults to the working directory.

    Returns:
        Absolute path of the written dump.

    Raises:
        RootNotFound: If the root directory does not exist.
        FileIOError: If a file cannot be read or the dump written.
    """
    root = resolve_root(options.root_path)

    with phase_scope("discovery"):
        files = discover_files(
            root,
            options.extensions,
            recursive=options.include_subdirectories,
            exclude_dirs=(),
        )

    with phase_scope("dump"):
        text = build_verbatim_dump(
            root,
            files,
            include_subdirectories=options.include_subdirectories,
            extensions=options.extensions,
        )
        path = write_output(output_root, output_name_for_path(root), text)

    logger.info("Full code extract of %d files written to %s", len(files), path)
    return path
