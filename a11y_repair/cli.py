#!/usr/bin/env python3
"""
Accessibility Repair CLI

Command-line interface for repairing accessibility defects in HTML/CSS
fragments (WCAG 2.1 AA / 台灣無障礙規範).

Usage:
    a11y-repair page.html [options]
    a11y-repair - < page.html > page.fixed.html
    a11y-repair --list-rules
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import Any, Dict, Optional

from . import __version__
from .config import ConfigError, load_config, parse_config_json, resolve_config
from .engine import repair
from .rules import catalog_to_json

# Exit code when --strict is set and something still needs a human
EXIT_NEEDS_REVIEW = 2


def setup_logging(verbose: bool = False) -> None:
    """Configure logging based on verbosity."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format='%(levelname)s: %(message)s'
    )


def parse_args(args: list = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        prog='a11y-repair',
        description='Repair common accessibility defects in HTML/CSS fragments (WCAG 2.1 AA)',
        epilog='Example: a11y-repair page.html -o page.fixed.html -r report.txt'
    )

    parser.add_argument(
        'input',
        nargs='?',
        type=str,
        help='Input HTML file, or - for stdin'
    )

    parser.add_argument(
        '-o', '--output',
        type=str,
        default=None,
        help='Output file for repaired HTML (default: stdout)'
    )

    parser.add_argument(
        '-r', '--report',
        type=str,
        default=None,
        help='Output file for the issue report (default: stderr, or stdout with -o)'
    )

    parser.add_argument(
        '-f', '--format',
        choices=['json', 'text'],
        default='text',
        help='Report format (default: text)'
    )

    parser.add_argument(
        '-c', '--config',
        type=str,
        default=None,
        help='JSON configuration file (rules, basePx, basePt, removeWidth, placeholders)'
    )

    parser.add_argument(
        '--config-json',
        type=str,
        default=None,
        help='Inline JSON configuration; overrides --config'
    )

    parser.add_argument(
        '-t', '--template',
        type=str,
        default=None,
        help='Sample HTML to learn placeholder wording from'
    )

    parser.add_argument(
        '--strict',
        action='store_true',
        help=f'Exit with {EXIT_NEEDS_REVIEW} when any issue needs manual review'
    )

    parser.add_argument(
        '--list-rules',
        action='store_true',
        help='Print the built-in rule catalog as JSON and exit'
    )

    parser.add_argument(
        '-v', '--verbose',
        action='store_true',
        help='Enable verbose output'
    )

    parser.add_argument(
        '--version',
        action='version',
        version=f'%(prog)s {__version__}'
    )

    return parser.parse_args(args)


def read_config(parsed: argparse.Namespace) -> Dict[str, Any]:
    """
    Load configuration from --config-json or --config.

    Raises:
        ConfigError: If the configuration cannot be read or parsed
    """
    if parsed.config_json is not None:
        return parse_config_json(parsed.config_json)
    if parsed.config:
        return load_config(parsed.config)
    return {}


def read_template(path: Optional[str]) -> Optional[str]:
    """
    Read the placeholder template file, if any.

    Raises:
        ConfigError: If the file cannot be read
    """
    if not path:
        return None
    try:
        with open(path, 'r', encoding='utf-8') as f:
            return f.read()
    except OSError as e:
        raise ConfigError(f"Cannot read template {path}: {e}") from e


def main(args: list = None) -> int:
    """
    Main entry point for CLI.

    Args:
        args: Command-line arguments (default: sys.argv)

    Returns:
        Exit code (0 for success, 1 for error, 2 for --strict review failures)
    """
    parsed = parse_args(args)
    setup_logging(parsed.verbose)

    logger = logging.getLogger(__name__)

    if parsed.list_rules:
        print(catalog_to_json())
        return 0

    if not parsed.input:
        logger.error("No input given (use - to read from stdin)")
        return 1

    try:
        config = resolve_config(read_config(parsed), read_template(parsed.template))
    except ConfigError as e:
        logger.error(f"Invalid configuration: {e}")
        return 1

    # Read input
    if parsed.input == '-':
        html = sys.stdin.read()
    else:
        input_path = Path(parsed.input)
        if not input_path.exists():
            logger.error(f"Input file not found: {input_path}")
            return 1
        with open(input_path, 'r', encoding='utf-8') as f:
            html = f.read()

    if not html.strip():
        logger.error("Input is empty")
        return 1

    try:
        result = repair(html, config)
    except Exception as e:
        logger.error(f"Repair failed: {e}", exc_info=True)
        return 1

    # Write repaired HTML
    if parsed.output:
        with open(parsed.output, 'w', encoding='utf-8') as f:
            f.write(result.repaired_html)
        logger.info(f"Repaired HTML written to: {parsed.output}")
    else:
        sys.stdout.write(result.repaired_html)

    # Write report
    report = result.to_json() if parsed.format == 'json' else result.to_text()
    if parsed.report:
        with open(parsed.report, 'w', encoding='utf-8') as f:
            f.write(report)
        logger.info(f"Report written to: {parsed.report}")
    elif parsed.output:
        print(report)
    else:
        print(report, file=sys.stderr)

    summary = result.summary
    logger.info(
        f"{summary.total_issues} issues: {summary.auto_fixed} auto-fixed, "
        f"{summary.needs_manual_review} need manual review"
    )

    if parsed.strict and summary.needs_manual_review:
        return EXIT_NEEDS_REVIEW
    return 0


if __name__ == '__main__':
    sys.exit(main())
