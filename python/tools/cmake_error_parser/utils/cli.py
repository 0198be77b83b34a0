"""
Command-line interface utilities.

This module provides CLI argument parsing and the main function for command-line
operation.
"""

import argparse
import sys
from typing import List, Optional, Sequence

from loguru import logger

from ..core.errors import CMakeParserError
from ..parsers.patterns import CLASSIFICATIONS
from ..widgets.main_widget import CMakeParserWidget
from ..writers.factory import WriterFactory
from .config import ParserConfig
from .logging_config import setup_logging


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        prog="cmake-error-parser",
        description="Extract diagnostics from CMake console output.",
    )

    parser.add_argument(
        "inputs",
        nargs="*",
        help="Files containing CMake output, '-' for stdin (default: stdin).",
    )

    parser.add_argument(
        "--run",
        nargs=argparse.REMAINDER,
        metavar="CMAKE_ARGS",
        help="Run cmake with the remaining arguments and parse its output.",
    )

    parser.add_argument("--config", help="JSON or TOML configuration file.")

    parser.add_argument(
        "--target", help="Name the diagnostics are recorded under (default: project)."
    )

    parser.add_argument(
        "--output-format",
        choices=["json", "csv", "xml"],
        help="Output format of --output-file (default: json).",
    )

    parser.add_argument(
        "--output-file",
        help="Base name for the output file without extension.",
    )

    parser.add_argument(
        "--output-dir",
        default=".",
        help="Directory for output files (default: current directory).",
    )

    parser.add_argument(
        "--filter",
        nargs="*",
        choices=["error", "warning"],
        help="Filter by diagnostic severity.",
    )

    parser.add_argument(
        "--kind",
        nargs="*",
        choices=sorted(marker.kind.value for marker in CLASSIFICATIONS.values()),
        help="Filter by diagnostic kind.",
    )

    parser.add_argument(
        "--file-pattern", help="Regular expression to filter diagnostics by file name."
    )

    parser.add_argument(
        "--echo", action="store_true", help="Copy the raw output to stdout while parsing."
    )

    parser.add_argument(
        "--stats", action="store_true", help="Print statistics about the diagnostics."
    )

    parser.add_argument(
        "--no-color", action="store_true", help="Disable colorized output."
    )

    parser.add_argument(
        "--verbose", action="store_true", help="Enable verbose logging output."
    )

    parser.add_argument("--log-file", help="Also write the log to this file.")

    return parser.parse_args(argv)


def load_config(args: argparse.Namespace) -> ParserConfig:
    """Load the configuration file, if any, and apply command-line overrides."""
    config = ParserConfig.load_from_file(args.config) if args.config else ParserConfig()

    if args.target:
        config.target = args.target
    if args.output_format:
        config.output_format = args.output_format
    if args.echo:
        config.echo = True
    if args.no_color:
        config.colorize = False
    if args.verbose:
        config.log_level = "DEBUG"

    return config


def main_cli(argv: Optional[Sequence[str]] = None) -> int:
    """Main function for command-line operation."""
    args = parse_args(argv)
    setup_logging("DEBUG" if args.verbose else "INFO", args.log_file)

    try:
        config = load_config(args)
    except CMakeParserError as e:
        logger.error(f"Invalid configuration: {e}")
        return 1

    setup_logging(config.log_level, args.log_file)
    # fragments are forwarded as read, so the echo goes to the binary stream
    widget = CMakeParserWidget(config, sink=sys.stdout.buffer if config.echo else None)
    filters = dict(
        filter_severities=args.filter,
        filter_kinds=args.kind,
        file_pattern=args.file_pattern,
    )

    reports = []
    try:
        if args.run is not None:
            reports.append(widget.parse_from_command(args.run, config.target, **filters))

        inputs: List[str] = list(args.inputs)
        if not inputs and args.run is None:
            inputs = ["-"]
        for name in inputs:
            if name == "-":
                reports.append(
                    widget.parse_from_stream(sys.stdin.buffer, config.target, **filters)
                )
            else:
                reports.append(
                    widget.parse_from_file(name, args.target or name, **filters)
                )
    except (CMakeParserError, OSError) as e:
        logger.error(f"Error processing CMake output: {e}")
        return 1

    for report in reports:
        widget.display_output(report, colorize=config.colorize)

    if args.output_file:
        combined = widget.processor.combine_reports(reports)
        output_path = widget.write_output(
            combined,
            config.output_format,
            WriterFactory.output_path(
                args.output_file, config.output_format, args.output_dir
            ),
        )
        print(f"\nOutput saved to: {output_path}")

    if args.stats:
        widget.display_statistics(reports)

    return 1 if any(report.errors for report in reports) else 0
