"""Settings loading and validation helpers.

Reads ``insight.yml`` (YAML) into frozen settings dataclasses and applies
``INSIGHT_*`` environment overrides. In non-strict mode an unreadable or
ill-typed file degrades to defaults with a warning; in strict mode it raises
``ConfigValidationError``.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field, replace
from typing import Any, Optional

import yaml
from dotenv import load_dotenv

logger = logging.getLogger(__name__)

DEFAULT_SETTINGS_FILE = "insight.yml"

DEFAULT_SOURCE_EXTENSIONS: tuple[str, ...] = (".cs",)
DEFAULT_PLACEHOLDER_EXTENSIONS: tuple[str, ...] = (
    ".cshtml",
    ".html",
    ".htm",
    ".js",
    ".css",
)
DEFAULT_EXCLUDE_DIRS: tuple[str, ...] = (".git", ".vs", "bin", "obj", "node_modules")
DEFAULT_DUMP_EXTENSIONS: tuple[str, ...] = (".cs", ".cshtml")

_ENV_OVERRIDES = {
    "INSIGHT_SOLUTION_ROOT": "solution_root",
    "INSIGHT_DOMAIN_ROOT": "domain_root",
    "INSIGHT_OUTPUT_ROOT": "output_root",
}


class ConfigValidationError(RuntimeError):
    """Raised when strict settings validation fails."""


@dataclass(frozen=True)
class PathsSettings:
    """Default locations offered to the user and used for output."""

    solution_root: Optional[str] = None
    domain_root: Optional[str] = None
    output_root: Optional[str] = None


@dataclass(frozen=True)
class MappingSettings:
    """Project-mapping task defaults."""

    include_type_comments: bool = True
    include_member_comments: bool = False
    strict_parse: bool = True
    source_extensions: tuple[str, ...] = DEFAULT_SOURCE_EXTENSIONS
    placeholder_extensions: tuple[str, ...] = DEFAULT_PLACEHOLDER_EXTENSIONS
    exclude_dirs: tuple[str, ...] = DEFAULT_EXCLUDE_DIRS


@dataclass(frozen=True)
class DumpSettings:
    """Full-code extract task defaults."""

    include_subdirectories: bool = True
    extensions: tuple[str, ...] = DEFAULT_DUMP_EXTENSIONS


@dataclass(frozen=True)
class InsightSettings:
    """Top-level settings payload."""

    paths: PathsSettings = field(default_factory=PathsSettings)
    mapping: MappingSettings = field(default_factory=MappingSettings)
    dump: DumpSettings = field(default_factory=DumpSettings)


@dataclass(frozen=True)
class ProjectMappingOptions:
    """Options for one project-mapping run."""

    root_path: str
    include_type_comments: bool = True
    include_member_comments: bool = False
    strict_parse: bool = True
    source_extensions: tuple[str, ...] = DEFAULT_SOURCE_EXTENSIONS
    placeholder_extensions: tuple[str, ...] = DEFAULT_PLACEHOLDER_EXTENSIONS
    exclude_dirs: tuple[str, ...] = DEFAULT_EXCLUDE_DIRS

    @property
    def candidate_extensions(self) -> tuple[str, ...]:
        """Every extension listed in the map, source files first."""
        return self.source_extensions + tuple(
            ext for ext in self.placeholder_extensions if ext not in self.source_extensions
        )

    @classmethod
    def from_settings(cls, root_path: str, settings: MappingSettings, **overrides: Any) -> "ProjectMappingOptions":
        options = cls(
            root_path=root_path,
            include_type_comments=settings.include_type_comments,
            include_member_comments=settings.include_member_comments,
            strict_parse=settings.strict_parse,
            source_extensions=settings.source_extensions,
            placeholder_extensions=settings.placeholder_extensions,
            exclude_dirs=settings.exclude_dirs,
        )
        overrides = {k: v for k, v in overrides.items() if v is not None}
        return replace(options, **overrides) if overrides else options


@dataclass(frozen=True)
class FullCodeExtractOptions:
    """Options for one full-code extract run."""

    root_path: str
    include_subdirectories: bool = True
    extensions: tuple[str, ...] = DEFAULT_DUMP_EXTENSIONS

    @classmethod
    def from_settings(cls, root_path: str, settings: DumpSettings, **overrides: Any) -> "FullCodeExtractOptions":
        options = cls(
            root_path=root_path,
            include_subdirectories=settings.include_subdirectories,
            extensions=settings.extensions,
        )
        overrides = {k: v for k, v in overrides.items() if v is not None}
        return replace(options, **overrides) if overrides else options


def _env_flag(name: str, default: bool = False) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


def resolve_strict_config_validation(default: bool = False) -> bool:
    """Resolve strict validation mode from ``STRICT_CONFIG_VALIDATION`` env."""
    return _env_flag("STRICT_CONFIG_VALIDATION", default=default)


def _fail(msg: str, strict: bool) -> None:
    if strict:
        raise ConfigValidationError(msg)
    logger.warning("%s; using defaults", msg)


def load_settings_payload(path: str, strict: bool = False) -> dict[str, Any]:
    """Load and parse the YAML settings file.

    In non-strict mode this returns an empty dict on read/parse failures.
    In strict mode this raises ``ConfigValidationError``.
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            payload = yaml.safe_load(f)
    except FileNotFoundError as exc:
        msg = f"Settings file not found: {path}"
        if strict:
            raise ConfigValidationError(msg) from exc
        logger.info("%s; using defaults", msg)
        return {}
    except yaml.YAMLError as exc:
        msg = f"Failed to parse settings YAML at {path}: {exc}"
        if strict:
            raise ConfigValidationError(msg) from exc
        logger.warning("%s; using defaults", msg)
        return {}

    if payload is None:
        return {}

    if not isinstance(payload, dict):
        _fail(f"Unexpected settings payload type: {type(payload).__name__}", strict)
        return {}

    return payload


def _section(payload: dict[str, Any], name: str, strict: bool) -> dict[str, Any]:
    section = payload.get(name, {})
    if section is None:
        return {}
    if not isinstance(section, dict):
        _fail(f"Settings section '{name}' must be a mapping", strict)
        return {}
    return section


def _as_bool(section: dict[str, Any], key: str, default: bool, strict: bool) -> bool:
    value = section.get(key, default)
    if isinstance(value, bool):
        return value
    _fail(f"Setting '{key}' must be true or false, got {value!r}", strict)
    return default


def _as_optional_str(section: dict[str, Any], key: str, strict: bool) -> Optional[str]:
    value = section.get(key)
    if value is None:
        return None
    if isinstance(value, str):
        return value.strip() or None
    _fail(f"Setting '{key}' must be a string, got {value!r}", strict)
    return None


def _as_extensions(
    section: dict[str, Any],
    key: str,
    default: tuple[str, ...],
    strict: bool,
) -> tuple[str, ...]:
    value = section.get(key)
    if value is None:
        return default
    if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
        _fail(f"Setting '{key}' must be a list of strings", strict)
        return default
    return tuple(normalize_extension(item) for item in value if item.strip())


def _as_names(
    section: dict[str, Any],
    key: str,
    default: tuple[str, ...],
    strict: bool,
) -> tuple[str, ...]:
    value = section.get(key)
    if value is None:
        return default
    if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
        _fail(f"Setting '{key}' must be a list of strings", strict)
        return default
    return tuple(item.strip() for item in value if item.strip())


def normalize_extension(ext: str) -> str:
    """Return ``ext`` lowercased with a leading dot."""
    ext = ext.strip().lower()
    return ext if ext.startswith(".") else f".{ext}"


def _apply_env_overrides(paths: PathsSettings) -> PathsSettings:
    overrides: dict[str, str] = {}
    for env_name, attr in _ENV_OVERRIDES.items():
        raw = os.getenv(env_name)
        if raw and raw.strip():
            overrides[attr] = raw.strip()
    if overrides:
        logger.debug("Applying environment overrides: %s", sorted(overrides))
        return replace(paths, **overrides)
    return paths


def load_settings(path: str | None = None, strict: bool | None = None) -> InsightSettings:
    """Load settings from YAML plus ``INSIGHT_*`` environment overrides.

    Args:
        path: Settings file; defaults to ``insight.yml`` in the working directory.
        strict: Raise on invalid settings instead of falling back to defaults.
            Defaults to the ``STRICT_CONFIG_VALIDATION`` environment flag.

    Returns:
        Fully populated ``InsightSettings``.

    Raises:
        ConfigValidationError: In strict mode, if the file is missing,
            unparsable or contains ill-typed values.
    """
    load_dotenv()
    if strict is None:
        strict = resolve_strict_config_validation(default=False)
    settings_path = path or DEFAULT_SETTINGS_FILE
    payload = load_settings_payload(settings_path, strict=strict)

    paths_section = _section(payload, "paths", strict)
    mapping_section = _section(payload, "mapping", strict)
    dump_section = _section(payload, "dump", strict)

    paths = PathsSettings(
        solution_root=_as_optional_str(paths_section, "solution_root", strict),
        domain_root=_as_optional_str(paths_section, "domain_root", strict),
        output_root=_as_optional_str(paths_section, "output_root", strict),
    )
    mapping = MappingSettings(
        include_type_comments=_as_bool(mapping_section, "include_type_comments", True, strict),
        include_member_comments=_as_bool(mapping_section, "include_member_comments", False, strict),
        strict_parse=_as_bool(mapping_section, "strict_parse", True, strict),
        source_extensions=_as_extensions(
            mapping_section, "source_extensions", DEFAULT_SOURCE_EXTENSIONS, strict
        ),
        placeholder_extensions=_as_extensions(
            mapping_section, "placeholder_extensions", DEFAULT_PLACEHOLDER_EXTENSIONS, strict
        ),
        exclude_dirs=_as_names(mapping_section, "exclude_dirs", DEFAULT_EXCLUDE_DIRS, strict),
    )
    dump = DumpSettings(
        include_subdirectories=_as_bool(dump_section, "include_subdirectories", True, strict),
        extensions=_as_extensions(dump_section, "extensions", DEFAULT_DUMP_EXTENSIONS, strict),
    )

    return InsightSettings(paths=_apply_env_overrides(paths), mapping=mapping, dump=dump)
