"""
Syntax tree traversal and declaration extraction logic.

This module walks a tree-sitter C# tree in document order, turning every
type declaration into a TypeRecord whose members are the methods and
constructors declared directly in that type's body.
"""

import logging
from typing import Iterator, List, Optional, Tuple

from tree_sitter import Node, Tree

from extraction.comments import collapse_whitespace, leading_comment_text
from extraction.config import (
    CONSTRUCTOR_NODE,
    DEFAULT_INCLUDE_MEMBER_COMMENTS,
    DEFAULT_INCLUDE_TYPE_COMMENTS,
    ERROR_NODE,
    METHOD_NODE,
    MODIFIER_NODE,
    TRANSPARENT_WRAPPERS,
    TYPE_DECLARATION_KINDS,
)
from extraction.models import DeclarationKind, MemberRecord, TypeKind, TypeRecord
from extraction.signatures import (
    build_constructor_signature,
    build_method_signature,
    build_type_signature,
    declaration_name,
    node_text,
)

logger = logging.getLogger(__name__)


def classify_node(node: Node) -> Tuple[DeclarationKind, Optional[TypeKind]]:
    """Classify a syntax node once.

    Returns:
        ``(DeclarationKind.TYPE, kind)`` for type declarations,
        ``(DeclarationKind.METHOD | CONSTRUCTOR, None)`` for members, and
        ``(DeclarationKind.OTHER, None)`` for everything else.
    """
    type_kind = TYPE_DECLARATION_KINDS.get(node.type)
    if type_kind is not None:
        return DeclarationKind.TYPE, type_kind
    if node.type == METHOD_NODE:
        return DeclarationKind.METHOD, None
    if node.type == CONSTRUCTOR_NODE:
        return DeclarationKind.CONSTRUCTOR, None
    return DeclarationKind.OTHER, None


def iter_declaration_nodes(root: Node) -> Iterator[Tuple[Node, DeclarationKind, Optional[TypeKind]]]:
    """Yield every named node in document (pre-)order with its classification.

    Method and constructor bodies are not descended into: C# cannot declare
    types inside them. An explicit stack keeps deeply nested expressions from
    hitting the recursion limit.
    """
    stack = [root]
    while stack:
        node = stack.pop()
        decl_kind, type_kind = classify_node(node)
        yield node, decl_kind, type_kind
        if decl_kind in (DeclarationKind.METHOD, DeclarationKind.CONSTRUCTOR):
            continue
        stack.extend(reversed(node.named_children))


def is_dropped_declaration(node: Node) -> bool:
    """An ERROR span that starts like a declaration (it holds modifiers)."""
    return node.type == ERROR_NODE and any(child.type == MODIFIER_NODE for child in node.children)


def iter_direct_members(type_node: Node) -> Iterator[Tuple[Node, DeclarationKind]]:
    """Yield the methods and constructors declared directly in a type's body.

    Preprocessor and region wrappers are transparent; nested type
    declarations are not entered, so their members stay with them.
    """
    body = type_node.child_by_field_name("body")
    if body is None:
        return

    stack = list(reversed(body.named_children))
    while stack:
        child = stack.pop()
        decl_kind, _ = classify_node(child)
        if decl_kind in (DeclarationKind.METHOD, DeclarationKind.CONSTRUCTOR):
            yield child, decl_kind
        elif child.type in TRANSPARENT_WRAPPERS:
            stack.extend(reversed(child.named_children))


def extract_member_record(
    node: Node,
    decl_kind: DeclarationKind,
    source_bytes: bytes,
    include_member_comments: bool,
) -> MemberRecord:
    """Build the MemberRecord for a method or constructor node."""
    if decl_kind == DeclarationKind.CONSTRUCTOR:
        signature = build_constructor_signature(node, source_bytes)
    else:
        signature = build_method_signature(node, source_bytes)

    comment = leading_comment_text(node, source_bytes) if include_member_comments else None

    return MemberRecord(
        signature_line=signature,
        comment=comment,
        is_constructor=decl_kind == DeclarationKind.CONSTRUCTOR,
        start_line=node.start_point.row + 1,
    )


def extract_type_record(
    node: Node,
    type_kind: TypeKind,
    source_bytes: bytes,
    include_type_comments: bool,
    include_member_comments: bool,
) -> TypeRecord:
    """Build the TypeRecord (with its direct members) for a type declaration node."""
    name = declaration_name(node, source_bytes)
    if not name:
        logger.debug("Type declaration at line %d has no identifier", node.start_point.row + 1)

    comment = leading_comment_text(node, source_bytes) if include_type_comments else None

    members = tuple(
        extract_member_record(member_node, member_kind, source_bytes, include_member_comments)
        for member_node, member_kind in iter_direct_members(node)
    )

    record = TypeRecord(
        name=name,
        kind=type_kind,
        signature=build_type_signature(node, source_bytes, type_kind),
        comment=comment,
        members=members,
        start_line=node.start_point.row + 1,
    )
    logger.debug(
        "Extracted %s %s with %d members at line %d",
        type_kind.label,
        name,
        len(members),
        record.start_line,
    )
    return record


def extract_types_from_tree(
    tree: Tree,
    source_bytes: bytes,
    include_type_comments: bool = DEFAULT_INCLUDE_TYPE_COMMENTS,
    include_member_comments: bool = DEFAULT_INCLUDE_MEMBER_COMMENTS,
    file_path: str = "<memory>",
) -> List[TypeRecord]:
    """Extract all type declarations from a parsed C# tree.

    This is the main entry point for structural extraction. Every type
    declaration anywhere in the file (top level, namespaces, nested types)
    becomes one record, in the order the declarations appear in the text.

    Args:
        tree: The parsed syntax tree.
        source_bytes: The raw source file bytes.
        include_type_comments: Attach cleaned leading comments to types.
        include_member_comments: Attach cleaned leading comments to members.
        file_path: File identity used in log messages.

    Returns:
        List of TypeRecords in document order.
    """
    records: List[TypeRecord] = []
    for node, decl_kind, type_kind in iter_declaration_nodes(tree.root_node):
        if decl_kind == DeclarationKind.TYPE and type_kind is not None:
            records.append(
                extract_type_record(
                    node,
                    type_kind,
                    source_bytes,
                    include_type_comments,
                    include_member_comments,
                )
            )
        elif is_dropped_declaration(node):
            logger.warning(
                "Unparsable declaration at %s line %d was skipped: %s",
                file_path,
                node.start_point.row + 1,
                collapse_whitespace(node_text(node, source_bytes))[:80],
            )
    logger.debug("Extracted %d types from %s", len(records), file_path)
    return records
