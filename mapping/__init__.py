"""Project mapping and full code extract tasks."""

from mapping.document import (
    MAPPING_SCHEMA,
    MAPPING_SCHEMA_VERSION,
    CandidateFile,
    FileResult,
    MappingDocument,
    format_utc_timestamp,
)
from mapping.discovery import discover_files, resolve_root, sort_key
from mapping.aggregator import (
    MAPPING_FILE_PREFIX,
    build_mapping_document,
    map_file,
    run_project_mapping,
)
from mapping.verbatim import (
    END_MARKER,
    START_MARKER,
    build_verbatim_dump,
    output_name_for_path,
    read_raw_text,
    run_full_code_extract,
)

__all__ = [
    "MAPPING_SCHEMA",
    "MAPPING_SCHEMA_VERSION",
    "CandidateFile",
    "FileResult",
    "MappingDocument",
    "format_utc_timestamp",
    "discover_files",
    "resolve_root",
    "sort_key",
    "MAPPING_FILE_PREFIX",
    "build_mapping_document",
    "map_file",
    "run_project_mapping",
    "END_MARKER",
    "START_MARKER",
    "build_verbatim_dump",
    "output_name_for_path",
    "read_raw_text",
    "run_full_code_extract",
]
