"""
Data models for extracted C# declarations.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Tuple


class TypeKind(Enum):
    """Category of a type declaration."""

    CLASS = "Class"
    INTERFACE = "Interface"
    STRUCT = "Struct"
    RECORD = "Record"

    @property
    def label(self) -> str:
        """Serialized kind name (``"Class"``, ``"Interface"``, ...)."""
        return self.value

    @property
    def keyword(self) -> str:
        """Lowercase C# keyword introducing the declaration."""
        return self.value.lower()


class DeclarationKind(Enum):
    """Tagged variant assigned once to every syntax node during traversal."""

    TYPE = "type"
    METHOD = "method"
    CONSTRUCTOR = "constructor"
    OTHER = "other"


def method_name_from_signature(signature_line: str) -> str:
    """Recover a member name from its signature line.

    Takes the last whitespace-delimited token before the first ``(``.

    Example:
        >>> method_name_from_signature("public async Task<Guid> HandleAsync(Guid id)")
        'HandleAsync'
    """
    before_paren = signature_line.split("(", 1)[0]
    tokens = before_paren.split()
    return tokens[-1] if tokens else ""


@dataclass(frozen=True)
class MemberRecord:
    """A method or constructor declared directly inside a type.

    Attributes:
        signature_line: Canonical one-line signature, never containing a body brace.
        comment: Cleaned leading comment, or None when absent or not requested.
        is_constructor: Whether the member is a constructor.
        start_line: 1-indexed line where the declaration starts.
    """

    signature_line: str
    comment: Optional[str] = None
    is_constructor: bool = False
    start_line: int = 0

    @property
    def name(self) -> str:
        return method_name_from_signature(self.signature_line)


@dataclass(frozen=True)
class TypeRecord:
    """One declared type (class, interface, struct or record).

    Attributes:
        name: Type identifier; empty only for malformed input.
        kind: Declaration category.
        signature: Canonical one-line signature; empty string if unrenderable.
        comment: Cleaned leading comment, or None when absent or not requested.
        members: Methods and constructors declared directly in the type body,
            in source order. Nested types are reported as their own records.
        start_line: 1-indexed line where the declaration starts.
    """

    name: str
    kind: TypeKind
    signature: str = ""
    comment: Optional[str] = None
    members: Tuple[MemberRecord, ...] = field(default_factory=tuple)
    start_line: int = 0
