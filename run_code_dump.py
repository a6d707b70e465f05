#!/usr/bin/env python3
"""
Full code extract: concatenates every .cs/.cshtml file under a directory
into one marker-delimited text file.

Usage:
    python run_code_dump.py --root /path/to/solution/src/Darwin.Web
    python run_code_dump.py --root ./src --no-subdirectories --output-root out
"""

import argparse
import logging
import sys
import time

from core.errors import InsightError
from core.settings import ConfigValidationError, FullCodeExtractOptions, load_settings
from core.structured_logging import configure_structured_logging, set_run_id

logger = logging.getLogger(__name__)


def parse_args(argv=None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Full Code Extract",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  python run_code_dump.py --root ./src/Darwin.Web\n"
            "  python run_code_dump.py --root ./src --no-subdirectories\n"
        ),
    )

    parser.add_argument(
        "--root",
        default=None,
        help="Directory to dump. Default: paths.domain_root from settings, else the working directory.",
    )
    parser.add_argument(
        "--output-root",
        default=None,
        help="Directory receiving the text file. Default: paths.output_root from settings, else the working directory.",
    )
    parser.add_argument("--config", default=None, help="Settings YAML file. Default: insight.yml")
    parser.add_argument(
        "--no-subdirectories",
        action="store_true",
        default=False,
        help="Only dump files directly inside the root.",
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
    args = parse_args(argv)
    configure_structured_logging(
        level=logging.DEBUG if args.verbose else logging.INFO,
        log_file=args.log_file,
    )
    run_id = set_run_id()
    logger.info("Full code extract run %s", run_id)

    from mapping.verbatim import run_full_code_extract

    try:
        settings = load_settings(args.config, strict=args.strict_config or None)
        root = args.root or settings.paths.domain_root or "."
        options = FullCodeExtractOptions.from_settings(
            root,
            settings.dump,
            include_subdirectories=False if args.no_subdirectories else None,
        )

        t0 = time.time()
        path = run_full_code_extract(options, output_root=args.output_root or settings.paths.output_root)
        logger.info("Finished in %.2fs: %s", time.time() - t0, path)
        print(path)

    except (InsightError, ConfigValidationError) as e:
        logger.error("Full code extract failed: %s", e)
        sys.exit(1)
    except Exception as e:
        logger.error("Unexpected failure: %s", e, exc_info=True)
        sys.exit(2)


if __name__ == "__main__":
    main()
