"""
Single-line signature rendering for C# declarations.

Signatures are assembled from the declaration's header parts (modifiers,
return type, identifier, generics, parameters, constraints) rather than cut
from the raw text, so they never contain a body or an opening brace.
"""

from typing import List, Optional

from tree_sitter import Node

from extraction.comments import collapse_whitespace
from extraction.config import (
    CONSTRAINT_CLAUSE_NODE,
    MODIFIER_NODE,
    PARAMETER_LIST_NODE,
    REF_TOKEN,
    RETURN_TYPE_FIELDS,
    TYPE_PARAMETER_LIST_NODE,
    UNKNOWN_TYPE_KEYWORD,
)
from extraction.models import TypeKind


def node_text(node: Optional[Node], source_bytes: bytes) -> str:
    """Return the source text of ``node`` (empty string for None)."""
    if node is None:
        return ""
    return source_bytes[node.start_byte:node.end_byte].decode("utf-8", errors="replace")


def _first_child_of_type(node: Node, node_type: str) -> Optional[Node]:
    for child in node.children:
        if child.type == node_type:
            return child
    return None


def declaration_name(node: Node, source_bytes: bytes) -> str:
    """Return the identifier of a declaration node, or "" if it has none."""
    return node_text(node.child_by_field_name("name"), source_bytes)


def modifiers_text(node: Node, source_bytes: bytes) -> str:
    """Join the declaration's modifiers with single spaces, in declared order.

    The ``ref`` of a ``ref struct`` is an anonymous token rather than a
    modifier node; it is kept in place among the modifiers.
    """
    name = node.child_by_field_name("name")
    modifiers = []
    for child in node.children:
        if name is not None and child.start_byte >= name.start_byte:
            break
        if child.type == MODIFIER_NODE or (not child.is_named and child.type == REF_TOKEN):
            modifiers.append(node_text(child, source_bytes))
    return " ".join(modifiers)


def type_parameters_text(node: Node, source_bytes: bytes) -> str:
    """Return the generic parameter list verbatim (``<T, U>``), or ""."""
    type_params = node.child_by_field_name("type_parameters")
    if type_params is None:
        type_params = _first_child_of_type(node, TYPE_PARAMETER_LIST_NODE)
    return node_text(type_params, source_bytes)


def parameter_list_text(node: Node, source_bytes: bytes) -> str:
    """Return the parenthesized parameter list exactly as declared."""
    params = node.child_by_field_name("parameters")
    if params is None:
        params = _first_child_of_type(node, PARAMETER_LIST_NODE)
    return node_text(params, source_bytes) or "()"


def constraint_clauses(node: Node, source_bytes: bytes) -> List[str]:
    """Return each ``where`` clause of the declaration, rendered in full."""
    return [
        collapse_whitespace(node_text(child, source_bytes))
        for child in node.children
        if child.type == CONSTRAINT_CLAUSE_NODE
    ]


def return_type_text(node: Node, source_bytes: bytes) -> str:
    """Return the declared return type of a method."""
    for field_name in RETURN_TYPE_FIELDS:
        return_type = node.child_by_field_name(field_name)
        if return_type is not None:
            return node_text(return_type, source_bytes)
    return ""


def _with_modifiers(modifiers: str, rest: str) -> str:
    return f"{modifiers} {rest}" if modifiers else rest


def build_type_signature(node: Node, source_bytes: bytes, kind: Optional[TypeKind]) -> str:
    """Build ``[modifiers ]<keyword> <identifier>[<type-parameters>]``.

    Args:
        node: A class/interface/struct/record declaration node.
        source_bytes: The raw source file bytes.
        kind: Declaration category; None falls back to the generic keyword.

    Returns:
        Single-line signature, e.g. ``"public sealed class Foo<T>"``.
    """
    keyword = kind.keyword if kind is not None else UNKNOWN_TYPE_KEYWORD
    name = declaration_name(node, source_bytes)
    raw = _with_modifiers(
        modifiers_text(node, source_bytes),
        f"{keyword} {name}{type_parameters_text(node, source_bytes)}",
    )
    return collapse_whitespace(raw)


def build_method_signature(node: Node, source_bytes: bytes) -> str:
    """Build ``[modifiers ]<returnType> <name>[<typeParams>]<params>[ <constraints>]``.

    Example:
        ``public static T Pick<T>(IList<T> items) where T : class``
    """
    header = (
        f"{return_type_text(node, source_bytes)} "
        f"{declaration_name(node, source_bytes)}"
        f"{type_parameters_text(node, source_bytes)}"
        f"{parameter_list_text(node, source_bytes)}"
    )
    constraints = "".join(" " + clause for clause in constraint_clauses(node, source_bytes))
    raw = _with_modifiers(modifiers_text(node, source_bytes), header + constraints)
    return collapse_whitespace(raw)


def build_constructor_signature(node: Node, source_bytes: bytes) -> str:
    """Build ``[modifiers ]<name><params>`` (no return type, no initializer)."""
    raw = _with_modifiers(
        modifiers_text(node, source_bytes),
        f"{declaration_name(node, source_bytes)}{parameter_list_text(node, source_bytes)}",
    )
    return collapse_whitespace(raw)
