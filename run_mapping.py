#!/usr/bin/env python3
"""
Structural project mapping for a C# source tree.

Parses every ``.cs`` file under the root, lists web assets without members
and writes ``ProjectMapping_YYYYMMDD.json`` into the output root.

Usage:
    python run_mapping.py --root /path/to/solution
    python run_mapping.py --root ./src/Darwin.Domain --member-comments
    python run_mapping.py --root ./src --output-root out --lenient --verbose
"""

import argparse
import logging
import sys
import time

from core.errors import InsightError
from core.settings import ConfigValidationError, ProjectMappingOptions, load_settings
from core.structured_logging import configure_structured_logging, set_run_id

logger = logging.getLogger(__name__)


def parse_args(argv=None) -> argparse.Namespace:
    """Parse command-line arguments.

    Returns:
        Parsed argument namespace.
    """
    parser = argparse.ArgumentParser(
        description="C# Structural Project Mapping",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  python run_mapping.py --root ./src\n"
            "  python run_mapping.py --root ./src --no-type-comments --member-comments\n"
        ),
    )

    parser.add_argument(
        "--root",
        default=None,
        help="Directory to map. Default: paths.solution_root from settings, else the working directory.",
    )
    parser.add_argument(
        "--output-root",
        default=None,
        help="Directory receiving the JSON file. Default: paths.output_root from settings, else the working directory.",
    )
    parser.add_argument(
        "--config",
        default=None,
        help="Settings YAML file. Default: insight.yml",
    )
    parser.add_argument(
        "--type-comments",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Attach the leading comment of each type.",
    )
    parser.add_argument(
        "--member-comments",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Attach the leading comment of each method and constructor.",
    )
    parser.add_argument(
        "--lenient",
        action="store_true",
        default=False,
        help="Keep going on files with syntax errors instead of aborting.",
    )
    parser.add_argument(
        "--strict-config",
        action="store_true",
        default=False,
        help="Fail on missing or invalid settings instead of using defaults.",
    )
    parser.add_argument("--verbose", action="store_true", default=False, help="Log per-file progress.")
    parser.add_argument("--log-file", default=None, help="Also write logs to this file.")

    return parser.parse_args(argv)


def main(argv=None) -> None:
    """Main entry point for project mapping."""
    args = parse_args(argv)
    configure_structured_logging(
        level=logging.DEBUG if args.verbose else logging.INFO,
        log_file=args.log_file,
    )
    run_id = set_run_id()
    logger.info("Project mapping run %s", run_id)

    from mapping.aggregator import run_project_mapping

    try:
        settings = load_settings(args.config, strict=args.strict_config or None)
        root = args.root or settings.paths.solution_root or "."
        options = ProjectMappingOptions.from_settings(
            root,
            settings.mapping,
            include_type_comments=args.type_comments,
            include_member_comments=args.member_comments,
            strict_parse=False if args.lenient else None,
        )

        t0 = time.time()
        path = run_project_mapping(options, output_root=args.output_root or settings.paths.output_root)
        logger.info("Finished in %.2fs: %s", time.time() - t0, path)
        print(path)

    except (InsightError, ConfigValidationError) as e:
        logger.error("Project mapping failed: %s", e)
        sys.exit(1)
    except Exception as e:
        logger.error("Unexpected failure: %s", e, exc_info=True)
        sys.exit(2)


if __name__ == "__main__":
    main()
