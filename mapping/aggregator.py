"""
Project mapping orchestration.

Runs the structural extractor over every discovered source file, lists the
remaining candidates as member-less entries and assembles one mapping
document. Any read or parse failure aborts the run before anything is written.
"""

import logging
from datetime import datetime, timezone
from typing import Callable, List, Optional, Sequence

from core.output_writer import build_dated_file_name, write_output
from core.settings import ProjectMappingOptions, normalize_extension
from core.structured_logging import file_scope, phase_scope
from extraction.extractor import ExtractionStats, extract, read_source_text
from mapping.discovery import discover_files, resolve_root
from mapping.document import CandidateFile, FileResult, MappingDocument

logger = logging.getLogger(__name__)

MAPPING_FILE_PREFIX: str = "ProjectMapping"

SourceReader = Callable[[str], str]


def map_file(
    candidate: CandidateFile,
    read_source: SourceReader,
    options: ProjectMappingOptions,
    stats: Optional[ExtractionStats] = None,
) -> FileResult:
    """Build the FileResult for one candidate.

    Source files are read and extracted; other files are listed without members.

    Raises:
        FileIOError: If the source file cannot be read.
        ParseError: If the source file cannot be parsed.
    """
    source_extensions = {normalize_extension(ext) for ext in options.source_extensions}
    if candidate.extension.lower() not in source_extensions:
        logger.debug("Listing %s without members", candidate.full_path)
        if stats is not None:
            stats.files_listed += 1
        return FileResult(file_path=candidate.full_path)

    source_text = read_source(candidate.full_path)
    types = extract(
        source_text,
        include_type_comments=options.include_type_comments,
        include_member_comments=options.include_member_comments,
        file_path=candidate.full_path,
        strict=options.strict_parse,
    )
    if stats is not None:
        stats.record(types)
    logger.debug("Mapped %d types from %s", len(types), candidate.full_path)
    return FileResult(file_path=candidate.full_path, types=tuple(types))


def build_mapping_document(
    root_path: str,
    candidates: Sequence[CandidateFile],
    read_source: SourceReader = read_source_text,
    options: Optional[ProjectMappingOptions] = None,
    generated_at: Optional[datetime] = None,
    stats: Optional[ExtractionStats] = None,
) -> MappingDocument:
    """Assemble the mapping document for a set of candidate files.

    Args:
        root_path: Absolute root directory recorded in the document.
        candidates: Files to map, already filtered and sorted.
        read_source: Returns the full text of a file by path.
        options: Comment flags, parse strictness and the source extensions.
        generated_at: Generation timestamp; defaults to now (UTC).
        stats: Optional counters updated while mapping.

    Returns:
        The complete MappingDocument, with files in candidate order.

    Raises:
        FileIOError: On the first unreadable source file.
        ParseError: On the first unparsable source file.
    """
    if options is None:
        options = ProjectMappingOptions(root_path=root_path)

    results: List[FileResult] = []
    with phase_scope("extraction"):
        for candidate in candidates:
            with file_scope(candidate.full_path):
                results.append(map_file(candidate, read_source, options, stats))

    return MappingDocument(
        root=root_path,
        generated_at_utc=generated_at or datetime.now(timezone.utc),
        files=tuple(results),
    )


def run_project_mapping(
    options: ProjectMappingOptions,
    output_root: Optional[str] = None,
    generated_at: Optional[datetime] = None,
) -> str:
    """Map a source tree and write ``ProjectMapping_YYYYMMDD.json``.

    Args:
        options: Mapping options, including the root to scan.
        output_root: Directory receiving the JSON file; defaults to the
            working directory.
        generated_at: Generation timestamp; defaults to now (UTC).

    Returns:
        Absolute path of the written JSON file.

    Raises:
        RootNotFound: If the root directory does not exist.
        FileIOError: If a source file cannot be read or the output written.
        ParseError: If a source file cannot be parsed.
    """
    root = resolve_root(options.root_path)

    with phase_scope("discovery"):
        candidates = discover_files(
            root,
            options.candidate_extensions,
            recursive=True,
            exclude_dirs=options.exclude_dirs,
        )

    stats = ExtractionStats()
    document = build_mapping_document(
        root,
        candidates,
        read_source=read_source_text,
        options=options,
        generated_at=generated_at,
        stats=stats,
    )
    logger.info("Mapping complete: %s", stats)

    with phase_scope("serialization"):
        file_name = build_dated_file_name(MAPPING_FILE_PREFIX, "json")
        path = write_output(output_root, file_name, document.to_json())
    logger.info("Mapping written to %s", path)
    return path
