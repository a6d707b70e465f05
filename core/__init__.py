"""Core shared contracts and utilities."""

from core.errors import (
    FileIOError,
    InsightError,
    ParseError,
    RootNotFound,
)
from core.structured_logging import (
    configure_structured_logging,
    file_scope,
    get_run_id,
    phase_scope,
    set_run_id,
)
from core.settings import (
    ConfigValidationError,
    DumpSettings,
    FullCodeExtractOptions,
    InsightSettings,
    MappingSettings,
    PathsSettings,
    ProjectMappingOptions,
    load_settings,
    resolve_strict_config_validation,
)
from core.output_writer import build_dated_file_name, resolve_output_root, write_output
from core.prompting import ConsolePrompter

__all__ = [
    "FileIOError",
    "InsightError",
    "ParseError",
    "RootNotFound",
    "configure_structured_logging",
    "file_scope",
    "get_run_id",
    "phase_scope",
    "set_run_id",
    "ConfigValidationError",
    "DumpSettings",
    "FullCodeExtractOptions",
    "InsightSettings",
    "MappingSettings",
    "PathsSettings",
    "ProjectMappingOptions",
    "load_settings",
    "resolve_strict_config_validation",
    "build_dated_file_name",
    "resolve_output_root",
    "write_output",
    "ConsolePrompter",
]
