#!/usr/bin/env python3
"""
Interactive entry point: asks which task to run, where, and with which
switches, then runs project mapping or the full code extract.

Usage:
    python run_insight.py
    python run_insight.py --config insight.yml
"""

import argparse
import enum
import logging
import os
import sys

from core.errors import InsightError
from core.prompting import ConsolePrompter
from core.settings import (
    ConfigValidationError,
    FullCodeExtractOptions,
    InsightSettings,
    ProjectMappingOptions,
    load_settings,
)
from core.structured_logging import configure_structured_logging, set_run_id
from mapping.aggregator import run_project_mapping
from mapping.verbatim import run_full_code_extract

logger = logging.getLogger(__name__)

BANNER = (
    "=============================================\n"
    "  Solution Insight for AI\n"
    "============================================="
)


class TaskKind(enum.Enum):
    PROJECT_MAPPING = "ProjectMapping"
    FULL_CODE_EXTRACT = "FullCodeExtract"


def _default_path(configured: str | None) -> str:
    return configured if configured and configured.strip() else os.getcwd()


def run_interactive(prompter: ConsolePrompter, settings: InsightSettings) -> str:
    """Ask for the task and its inputs, run it and return the written path."""
    task = prompter.ask_choice(
        title="Select a Task",
        description="Choose what you want the app to do.",
        options=[TaskKind.PROJECT_MAPPING, TaskKind.FULL_CODE_EXTRACT],
        default=TaskKind.PROJECT_MAPPING,
        label=lambda kind: kind.value,
    )
    output_root = settings.paths.output_root

    if task is TaskKind.PROJECT_MAPPING:
        root = prompter.ask_path(
            "Enter the path to the .NET solution or root folder",
            _default_path(settings.paths.solution_root),
        )
        include_type_comments = prompter.ask_yes_no("Also extract class comments?", default_yes=True)
        include_member_comments = prompter.ask_yes_no("Also extract method comments?", default_yes=False)
        options = ProjectMappingOptions.from_settings(
            root,
            settings.mapping,
            include_type_comments=include_type_comments,
            include_member_comments=include_member_comments,
        )
        return run_project_mapping(options, output_root=output_root)

    root = prompter.ask_path(
        "Enter the path within your project to extract from",
        _default_path(settings.paths.domain_root),
    )
    include_subdirectories = prompter.ask_yes_no("Include subfolders as well?", default_yes=True)
    options = FullCodeExtractOptions.from_settings(
        root,
        settings.dump,
        include_subdirectories=include_subdirectories,
    )
    return run_full_code_extract(options, output_root=output_root)


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Solution Insight for AI (interactive)")
    parser.add_argument("--config", default=None, help="Settings YAML file. Default: insight.yml")
    parser.add_argument("--verbose", action="store_true", default=False, help="Log per-file progress.")
    parser.add_argument("--log-file", default=None, help="Also write logs to this file.")
    return parser.parse_args(argv)


def main(argv=None) -> None:
    """Main entry point for the interactive runner."""
    args = parse_args(argv)
    configure_structured_logging(
        level=logging.DEBUG if args.verbose else logging.INFO,
        log_file=args.log_file,
    )
    set_run_id()
    print(BANNER)
    print()

    try:
        settings = load_settings(args.config)
        path = run_interactive(ConsolePrompter(), settings)
        print(f"\nAll done. Output written to {path}")

    except (InsightError, ConfigValidationError) as e:
        logger.error("Task failed: %s", e)
        sys.exit(1)
    except Exception as e:
        logger.error("Unexpected failure: %s", e, exc_info=True)
        sys.exit(2)


if __name__ == "__main__":
    main()
