"""
Tree-sitter parser initialization and C# source parsing utilities.

This module provides functions to initialize the C# parser and parse source text.
"""

import logging
from typing import Tuple

import tree_sitter_c_sharp as tscsharp
from tree_sitter import Language, Parser, Tree

from core.errors import ParseError
from extraction.config import ERROR_NODE

# Configure logging
logger = logging.getLogger(__name__)

# Module-level language constant
CSHARP_LANGUAGE = Language(tscsharp.language())


def create_parser() -> Parser:
    """Create and configure a tree-sitter parser for C#.

    Returns:
        A Parser instance configured with the C# language.

    Example:
        >>> parser = create_parser()
        >>> tree = parser.parse(b"class Foo {}")
    """
    parser = Parser(CSHARP_LANGUAGE)
    logger.debug("Created tree-sitter C# parser")
    return parser


def parse_bytes(source: bytes) -> Tree:
    """Parse raw bytes of C# source code.

    Args:
        source: UTF-8 encoded bytes of C# source code.

    Returns:
        A Tree object representing the parsed syntax tree. Syntax errors are
        represented as ERROR/MISSING nodes; this function never rejects input.

    Raises:
        TypeError: If source is not bytes.

    Example:
        >>> tree = parse_bytes(b"class Foo {}")
        >>> tree.root_node.type
        'compilation_unit'
    """
    if not isinstance(source, bytes):
        raise TypeError(f"Source must be bytes, got {type(source).__name__}")

    parser = create_parser()
    tree = parser.parse(source)

    logger.debug("Parsed %d bytes of C# code", len(source))
    return tree


def count_error_nodes(tree: Tree) -> int:
    """Count ERROR and MISSING nodes in a parsed tree."""
    count = 0
    stack = [tree.root_node]
    while stack:
        node = stack.pop()
        if node.type == ERROR_NODE or node.is_missing:
            count += 1
        if node.has_error:
            stack.extend(node.children)
    return count


def parse_source(source_text: str, file_path: str = "<memory>", strict: bool = True) -> Tuple[Tree, bytes]:
    """Parse C# source text into a declaration tree.

    Args:
        source_text: Full text of one C# file.
        file_path: File identity used in log messages and errors.
        strict: Reject trees containing syntax errors.

    Returns:
        A tuple of (Tree, source_bytes) where source_bytes is the UTF-8
        encoding all node byte offsets refer to.

    Raises:
        ParseError: If the text cannot be encoded, or if ``strict`` is set and
            the tree contains syntax errors.
    """
    try:
        source_bytes = source_text.encode("utf-8")
    except UnicodeEncodeError as exc:
        raise ParseError(file_path, detail=str(exc)) from exc

    tree = parse_bytes(source_bytes)

    if tree.root_node.has_error:
        error_count = count_error_nodes(tree)
        if strict:
            logger.error("File %s contains %d syntax error nodes", file_path, error_count)
            raise ParseError(file_path, error_count)
        logger.warning(
            "File %s contains syntax errors (%d error nodes); keeping recovered declarations",
            file_path,
            error_count,
        )

    return tree, source_bytes
