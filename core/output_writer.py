"""Output file helpers: dated file names and UTF-8 writes under an output root."""

from __future__ import annotations

import os
from datetime import date

from core.errors import FileIOError


def build_dated_file_name(prefix: str, extension: str = "txt", today: date | None = None) -> str:
    """Return ``<prefix>_YYYYMMDD.<extension>`` for the given (or current local) date."""
    stamp = (today or date.today()).strftime("%Y%m%d")
    return f"{prefix}_{stamp}.{extension.lstrip('.')}"


def resolve_output_root(output_root: str | None) -> str:
    """Return the absolute output root, defaulting to the working directory."""
    if output_root is None or not output_root.strip():
        return os.getcwd()
    return os.path.abspath(os.path.expanduser(output_root))


def write_output(output_root: str | None, file_name: str, content: str) -> str:
    """Write ``content`` to ``output_root/file_name`` and return the absolute path.

    The text is written as UTF-8 without BOM and without newline translation,
    so verbatim content keeps its original line endings.

    Raises:
        FileIOError: If the output root cannot be created or the file written.
    """
    root = resolve_output_root(output_root)
    path = os.path.abspath(os.path.join(root, file_name))
    try:
        os.makedirs(root, exist_ok=True)
        with open(path, "w", encoding="utf-8", errors="surrogateescape", newline="") as f:
            f.write(content)
    except OSError as exc:
        raise FileIOError(path, "write", exc) from exc
    return path
