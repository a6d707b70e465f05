"""
Layer 1: Extraction Engine

Tree-sitter-based C# source parser and structural extractor.
Extracts classes, interfaces, structs and records with their methods,
constructors, one-line signatures and cleaned leading comments.
"""

from extraction.models import (
    DeclarationKind,
    MemberRecord,
    TypeKind,
    TypeRecord,
    method_name_from_signature,
)
from extraction.comments import clean_comment, collapse_whitespace, leading_comment_text
from extraction.signatures import (
    build_constructor_signature,
    build_method_signature,
    build_type_signature,
)
from extraction.parser import create_parser, parse_bytes, parse_source, count_error_nodes
from extraction.traversal import classify_node, extract_types_from_tree
from extraction.extractor import (
    extract,
    extract_file,
    read_source_text,
    ExtractionStats,
)

__all__ = [
    # Data models
    "DeclarationKind",
    "MemberRecord",
    "TypeKind",
    "TypeRecord",
    "ExtractionStats",
    "method_name_from_signature",
    # Comment and signature rendering
    "clean_comment",
    "collapse_whitespace",
    "leading_comment_text",
    "build_constructor_signature",
    "build_method_signature",
    "build_type_signature",
    # Low-level parsing
    "create_parser",
    "parse_bytes",
    "parse_source",
    "count_error_nodes",
    # Mid-level extraction
    "classify_node",
    "extract_types_from_tree",
    # High-level orchestration
    "extract",
    "extract_file",
    "read_source_text",
]
