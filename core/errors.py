"""Error taxonomy shared by the extraction and mapping layers.

None of these errors are caught per file: a parse or I/O failure aborts the
whole run so that a mapping document is either complete or not written.
"""

from __future__ import annotations


class InsightError(Exception):
    """Base class for all errors raised by the insight pipeline."""


class RootNotFound(InsightError, FileNotFoundError):
    """Raised when the root directory to scan does not exist."""

    def __init__(self, path: str) -> None:
        super().__init__(f"Root path not found: {path}")
        self.path = path


class ParseError(InsightError):
    """Raised when a C# source file cannot be parsed into a declaration tree."""

    def __init__(self, file_path: str, error_count: int = 0, detail: str | None = None) -> None:
        message = f"Failed to parse {file_path}"
        if error_count:
            message += f" ({error_count} syntax error nodes)"
        if detail:
            message += f": {detail}"
        super().__init__(message)
        self.file_path = file_path
        self.error_count = error_count


class FileIOError(InsightError, OSError):
    """Raised when a source file cannot be read or an output cannot be written."""

    def __init__(self, path: str, action: str, cause: BaseException | None = None) -> None:
        message = f"Cannot {action} {path}"
        if cause is not None:
            message += f": {cause}"
        super().__init__(message)
        self.path = path
        self.action = action
