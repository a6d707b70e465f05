"""
High-level entry points for C# structural extraction.

This module provides the extraction contract for one source text and a
convenience wrapper reading a single file from disk.
"""

import logging
import os
from typing import Dict, List

from core.errors import FileIOError
from extraction.config import (
    CSHARP_EXTENSIONS,
    DEFAULT_INCLUDE_MEMBER_COMMENTS,
    DEFAULT_INCLUDE_TYPE_COMMENTS,
    DEFAULT_STRICT_PARSE,
)
from extraction.models import TypeRecord
from extraction.parser import parse_source
from extraction.traversal import extract_types_from_tree

logger = logging.getLogger(__name__)


class ExtractionStats:
    """Statistics for an extraction run."""

    def __init__(self):
        self.files_parsed = 0
        self.files_listed = 0
        self.types_extracted = 0
        self.members_extracted = 0

    def record(self, types: List[TypeRecord]) -> None:
        """Account for one parsed source file."""
        self.files_parsed += 1
        self.types_extracted += len(types)
        self.members_extracted += sum(len(t.members) for t in types)

    def to_dict(self) -> Dict[str, int]:
        """Convert stats to dictionary."""
        return {
            "files_parsed": self.files_parsed,
            "files_listed": self.files_listed,
            "types_extracted": self.types_extracted,
            "members_extracted": self.members_extracted,
        }

    def __str__(self) -> str:
        """String representation of stats."""
        return (
            f"ExtractionStats(parsed={self.files_parsed}, listed={self.files_listed}, "
            f"types={self.types_extracted}, members={self.members_extracted})"
        )


def extract(
    source_text: str,
    include_type_comments: bool = DEFAULT_INCLUDE_TYPE_COMMENTS,
    include_member_comments: bool = DEFAULT_INCLUDE_MEMBER_COMMENTS,
    file_path: str = "<memory>",
    strict: bool = DEFAULT_STRICT_PARSE,
) -> List[TypeRecord]:
    """Extract type declarations and their members from C# source text.

    Args:
        source_text: Full text of one C# file.
        include_type_comments: Attach cleaned leading comments to types.
        include_member_comments: Attach cleaned leading comments to methods
            and constructors.
        file_path: File identity carried by ParseError and log messages.
        strict: Fail on syntax errors instead of keeping recovered declarations.

    Returns:
        TypeRecords in document order.

    Raises:
        ParseError: If the source cannot be parsed.

    Example:
        >>> types = extract("public class Foo { public void Bar() {} }")
        >>> types[0].signature, types[0].members[0].signature_line
        ('public class Foo', 'public void Bar()')
    """
    tree, source_bytes = parse_source(source_text, file_path=file_path, strict=strict)
    return extract_types_from_tree(
        tree=tree,
        source_bytes=source_bytes,
        include_type_comments=include_type_comments,
        include_member_comments=include_member_comments,
        file_path=file_path,
    )


def read_source_text(file_path: str) -> str:
    """Read a C# source file as text.

    A UTF-8 BOM is dropped and undecodable bytes are replaced, matching how
    C# tooling reads source files.

    Raises:
        FileIOError: If the file cannot be read.
    """
    try:
        with open(file_path, "r", encoding="utf-8-sig", errors="replace") as f:
            return f.read()
    except OSError as exc:
        logger.error("Error reading file %s: %s", file_path, exc)
        raise FileIOError(file_path, "read", exc) from exc


def extract_file(
    file_path: str,
    include_type_comments: bool = DEFAULT_INCLUDE_TYPE_COMMENTS,
    include_member_comments: bool = DEFAULT_INCLUDE_MEMBER_COMMENTS,
    strict: bool = DEFAULT_STRICT_PARSE,
) -> List[TypeRecord]:
    """Extract all type declarations from a single C# source file.

    Args:
        file_path: Absolute or relative path to the .cs file.
        include_type_comments: Attach cleaned leading comments to types.
        include_member_comments: Attach cleaned leading comments to members.
        strict: Fail on syntax errors instead of keeping recovered declarations.

    Returns:
        List of TypeRecords from the file.

    Raises:
        FileIOError: If the file cannot be read.
        ValueError: If the file is not a C# source file.
        ParseError: If the source cannot be parsed.
    """
    file_path = os.path.abspath(file_path)

    ext = os.path.splitext(file_path)[1].lower()
    if ext not in CSHARP_EXTENSIONS:
        raise ValueError(
            f"File {file_path} is not a C# source file. "
            f"Expected one of: {sorted(CSHARP_EXTENSIONS)}"
        )

    source_text = read_source_text(file_path)
    types = extract(
        source_text,
        include_type_comments=include_type_comments,
        include_member_comments=include_member_comments,
        file_path=file_path,
        strict=strict,
    )
    logger.info("Extracted %d types from %s", len(types), file_path)
    return types

