"""
Mapping document model and JSON serialization.
"""

import json
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Tuple

from extraction.models import TypeRecord, method_name_from_signature

MAPPING_SCHEMA: str = "darwin/project-mapping"
MAPPING_SCHEMA_VERSION: str = "1.2"

# Constructors are listed with methods in the mapping
MEMBER_KIND: str = "Method"


@dataclass(frozen=True)
class CandidateFile:
    """A discovered file: absolute path plus lowercase extension (with dot)."""

    full_path: str
    extension: str


@dataclass(frozen=True)
class FileResult:
    """Per-file mapping result.

    Non-source files carry no types and serialize with ``"members": []``.
    """

    file_path: str
    types: Tuple[TypeRecord, ...] = field(default_factory=tuple)

    def member_entries(self) -> List[Dict[str, str]]:
        """Flatten types and members: each type entry is followed by its members."""
        entries: List[Dict[str, str]] = []
        for record in self.types:
            entries.append(
                {
                    "name": record.name,
                    "kind": record.kind.label,
                    "signature": record.signature,
                    "summaryComment": record.comment or "",
                }
            )
            for member in record.members:
                entries.append(
                    {
                        "name": method_name_from_signature(member.signature_line),
                        "kind": MEMBER_KIND,
                        "signature": member.signature_line,
                        "summaryComment": member.comment or "",
                    }
                )
        return entries

    def to_dict(self) -> Dict[str, Any]:
        return {"filePath": self.file_path, "members": self.member_entries()}


def format_utc_timestamp(moment: datetime) -> str:
    """Render an aware or naive-UTC datetime as ISO-8601 with a ``Z`` suffix."""
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc).isoformat().replace("+00:00", "Z")


@dataclass(frozen=True)
class MappingDocument:
    """The whole project map for one run; assembled once, never mutated."""

    root: str
    generated_at_utc: datetime
    files: Tuple[FileResult, ...] = field(default_factory=tuple)
    schema: str = MAPPING_SCHEMA
    schema_version: str = MAPPING_SCHEMA_VERSION

    def to_dict(self) -> Dict[str, Any]:
        return {
            "schema": self.schema,
            "schemaVersion": self.schema_version,
            "generatedAtUtc": format_utc_timestamp(self.generated_at_utc),
            "root": self.root,
            "files": [result.to_dict() for result in self.files],
        }

    def to_json(self) -> str:
        """Serialize with two-space indentation.

        ``ensure_ascii=False`` keeps ``<``, ``>`` and non-ASCII identifiers literal.
        """
        return json.dumps(self.to_dict(), indent=2, ensure_ascii=False)
