"""
Configuration constants for C# structural extraction.

Defines the tree-sitter-c-sharp node type strings used for declaration
discovery, signature rendering and comment collection.
"""

from typing import Dict, Set

from extraction.models import TypeKind

# Type declarations we extract as TypeRecords
TYPE_DECLARATION_KINDS: Dict[str, TypeKind] = {
    "class_declaration": TypeKind.CLASS,
    "interface_declaration": TypeKind.INTERFACE,
    "struct_declaration": TypeKind.STRUCT,
    "record_declaration": TypeKind.RECORD,
    # Older grammar releases model `record struct` separately
    "record_struct_declaration": TypeKind.RECORD,
}

# Member declarations we extract as MemberRecords
METHOD_NODE: str = "method_declaration"
CONSTRUCTOR_NODE: str = "constructor_declaration"

# Comment node type (includes //, ///, /* */, /** */)
COMMENT_NODE: str = "comment"

# Modifier node type (public, static, async, ...)
MODIFIER_NODE: str = "modifier"

# Anonymous token of `ref struct` declarations
REF_TOKEN: str = "ref"

# Node type tree-sitter uses for unparsable spans
ERROR_NODE: str = "ERROR"

# Attribute list node type ([Obsolete], ...)
ATTRIBUTE_LIST_NODE: str = "attribute_list"

# Generic parameter list (<T, U>) and `where` clauses
TYPE_PARAMETER_LIST_NODE: str = "type_parameter_list"
CONSTRAINT_CLAUSE_NODE: str = "type_parameter_constraints_clause"

# Parameter list node type ((int a, string b = "x"))
PARAMETER_LIST_NODE: str = "parameter_list"

# Preprocessor and region wrappers whose children belong to the enclosing body
TRANSPARENT_WRAPPERS: Set[str] = {
    "preproc_if",
    "preproc_elif",
    "preproc_else",
    "preproc_region",
}

# Field names across grammar releases (newest first)
RETURN_TYPE_FIELDS: tuple = ("returns", "type")

# Fallback keyword for declarations outside the recognized type categories
UNKNOWN_TYPE_KEYWORD: str = "type"

# Primary source extension handed to the extractor
CSHARP_EXTENSIONS: Set[str] = {
    ".cs",
}

# Extraction policy defaults
DEFAULT_INCLUDE_TYPE_COMMENTS: bool = True
DEFAULT_INCLUDE_MEMBER_COMMENTS: bool = False
DEFAULT_STRICT_PARSE: bool = True
