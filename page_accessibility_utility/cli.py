# Copyright 2025 Amazon.com, Inc. or its affiliates.
# SPDX-License-Identifier: Apache-2.0

"""
Command-line interface for the page_accessibility_utility package.

This module provides the page-a11y command for auditing HTML pages against
WCAG 2.1 from the shell.
"""

import os
import sys
import argparse
import logging
import json
from typing import Any, Dict, List, Optional

from page_accessibility_utility import __version__
from page_accessibility_utility.api import (
    analyze_html_accessibility,
    summarize_result,
    write_json,
)
from page_accessibility_utility.utils.config import ConfigManager, save_config
from page_accessibility_utility.utils.logging_helper import (
    PageAccessibilityError,
    setup_logger,
)
from page_accessibility_utility.utils.report_models import SEVERITY_ORDER, Severity

# Set up module-level logger
logger = setup_logger(__name__)

CHECK_FLAGS = {
    "contrast": "enable_color_contrast_check",
    "keyboard": "enable_keyboard_accessibility_check",
    "aria": "enable_aria_validation",
    "forms": "enable_form_validation",
}


def configure_logging(debug: bool = False, quiet: bool = False) -> None:
    """Configure logging based on debug and quiet flags."""
    if quiet:
        level = logging.ERROR
    elif debug:
        level = logging.DEBUG
    else:
        level = logging.INFO

    logging.basicConfig(level=level)
    logging.getLogger().setLevel(level)
    # Package loggers set their own level when created and log to stdout,
    # which is reserved for reports
    for name in list(logging.Logger.manager.loggerDict):
        if name.startswith("page_accessibility_utility"):
            package_logger = logging.getLogger(name)
            package_logger.setLevel(level)
            for handler in package_logger.handlers:
                if type(handler) is logging.StreamHandler:
                    handler.setStream(sys.stderr)


def _add_audit_arguments(parser: argparse.ArgumentParser) -> None:
    """Add accessibility audit arguments to the audit command parser."""
    parser.add_argument("--input", "-i", required=True, help="Input HTML file path")
    parser.add_argument(
        "--output",
        "-o",
        help="Path for the JSON report. If not provided, the report is printed",
    )
    parser.add_argument("--url", default="", help="URL to record for the page")
    parser.add_argument("--config", "-c", help="Path to configuration file")
    parser.add_argument(
        "--save-config",
        metavar="CONFIG_PATH",
        help="Save the resolved analysis configuration to the specified file path",
    )

    parser.add_argument(
        "--wcag-level",
        choices=["A", "AA", "AAA"],
        help="WCAG conformance level to check against",
    )
    parser.add_argument(
        "--min-contrast-ratio", type=float, help="Minimum contrast ratio for normal text"
    )
    parser.add_argument(
        "--max-scan-time", type=float, help="Target scan time in milliseconds"
    )
    parser.add_argument(
        "--disable-check",
        action="append",
        choices=sorted(CHECK_FLAGS),
        default=[],
        help="Disable a group of checks (can be repeated)",
    )
    parser.add_argument(
        "--sequential",
        action="store_true",
        help="Run the analyzers one after another",
    )
    parser.add_argument(
        "--include-hidden",
        action="store_true",
        help="Also check elements that are not rendered",
    )
    parser.add_argument(
        "--min-severity",
        choices=[severity.value for severity in Severity],
        default=Severity.LOW.value,
        help="Minimum severity level to include in report",
    )
    parser.add_argument(
        "--summary-only",
        action="store_true",
        help="Only include summary information in report",
    )

    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    parser.add_argument(
        "--quiet",
        "-q",
        action="store_true",
        help="Only output reports, suppress other output",
    )


def create_parser() -> argparse.ArgumentParser:
    """Create the command-line argument parser."""
    parser = argparse.ArgumentParser(
        prog="page-a11y",
        description="Audit HTML pages for WCAG 2.1 accessibility issues.",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )

    subparsers = parser.add_subparsers(dest="command", help="Command to execute")

    audit_parser = subparsers.add_parser(
        "audit",
        help="Audit an HTML page for accessibility issues",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    _add_audit_arguments(audit_parser)

    parser.add_argument(
        "--version", action="store_true", help="Show version information"
    )

    return parser


def build_options(args: Dict[str, Any]) -> Dict[str, Any]:
    """Translate parsed arguments into analysis options."""
    options = {}
    if args.get("wcag_level"):
        options["wcag_level"] = args["wcag_level"]
    if args.get("min_contrast_ratio") is not None:
        options["min_contrast_ratio"] = args["min_contrast_ratio"]
    if args.get("max_scan_time") is not None:
        options["max_scan_time"] = args["max_scan_time"]
    if args.get("sequential"):
        options["parallel_analysis"] = False
    if args.get("include_hidden"):
        options["include_hidden_elements"] = True
    for check in args.get("disable_check") or []:
        options[CHECK_FLAGS[check]] = False
    return options


def build_report(result, min_severity: str = "low", summary_only: bool = False) -> Dict[str, Any]:
    """
    Build the report printed or saved by the CLI.

    Issues below min_severity are left out of the issue list; the score and
    counts always describe the full result.
    """
    summary = summarize_result(result)
    if summary_only:
        return {"summary": summary}

    threshold = SEVERITY_ORDER[min_severity]
    issues = [
        issue.model_dump(mode="json")
        for issue in result.aggregated_issues
        if SEVERITY_ORDER[issue.severity] >= threshold
    ]
    return {"summary": summary, "issues": issues}


def save_configuration_from_args(args: Dict[str, Any], manager: ConfigManager) -> None:
    """Save the resolved analysis configuration if --save-config was given."""
    config_path = args.get("save_config")
    if not config_path:
        return

    file_format = "json" if config_path.lower().endswith(".json") else "yaml"
    resolved = manager.get_config(build_options(args), "analysis")
    save_config({"analysis": resolved}, config_path, file_format)
    if not args.get("quiet"):
        # Without --output the report itself goes to stdout
        stream = sys.stdout if args.get("output") else sys.stderr
        print(f"Configuration saved to {config_path}", file=stream)


def run_audit_command(args: Dict[str, Any]) -> int:
    """Run the accessibility audit command."""
    try:
        manager = ConfigManager()
        if args.get("config"):
            logger.info("Loading configuration from %s", args["config"])
            manager.load_file(args["config"])

        save_configuration_from_args(args, manager)

        if not args.get("quiet"):
            logger.info("Auditing HTML for accessibility: %s", args["input"])

        result = analyze_html_accessibility(
            html_path=args["input"],
            options=build_options(args),
            url=args.get("url") or "",
            config_manager=manager,
        )

        report = build_report(
            result,
            min_severity=args.get("min_severity") or Severity.LOW.value,
            summary_only=args.get("summary_only", False),
        )

        output_path = args.get("output")
        if output_path:
            write_json(report, output_path)
            if not args.get("quiet"):
                print(
                    f"Score: {result.overall_score:.1f}, issues: {result.total_issues}. "
                    f"Report saved to {os.path.abspath(output_path)}"
                )
        else:
            print(json.dumps(report, indent=2))

        return 0

    except PageAccessibilityError as e:
        logger.error("Error in accessibility audit: %s", e)
        if not args.get("quiet"):
            print(f"Error: {e}", file=sys.stderr)
        return 1


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the CLI."""
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.version:
        print(f"Page Accessibility Utility v{__version__}")
        return 0

    if args.command is None:
        parser.print_help()
        return 0

    configure_logging(debug=args.debug, quiet=args.quiet)
    args_dict = vars(args)

    try:
        if args_dict["command"] == "audit":
            return run_audit_command(args_dict)
        print("No command specified")
        return 1

    except Exception as e:
        logger.error("Unexpected error: %s", e)
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
