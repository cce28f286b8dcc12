# Copyright 2025 Amazon.com, Inc. or its affiliates.
# SPDX-License-Identifier: Apache-2.0

"""
API for HTML accessibility analysis.

This module provides the synchronous entry point that parses HTML, resolves
configuration, runs the analysis pipeline and optionally saves the report.
"""

import asyncio
import json
import os
from typing import Any, Dict, Optional

from page_accessibility_utility.audit.coordinator import (
    ProgressCallback,
    UnifiedAnalysisCoordinator,
)
from page_accessibility_utility.dom.document import HtmlDocument
from page_accessibility_utility.utils.config import ConfigManager, validate_options
from page_accessibility_utility.utils.logging_helper import (
    AccessibilityAnalysisError,
    ConfigurationError,
    InvalidDocumentError,
    ResourceError,
    handle_exception,
    setup_logger,
)
from page_accessibility_utility.utils.report_models import UnifiedAnalysisResult

# Set up module-level logger
logger = setup_logger(__name__)

OPTION_TYPES = {
    "enable_color_contrast_check": bool,
    "enable_keyboard_accessibility_check": bool,
    "enable_aria_validation": bool,
    "enable_form_validation": bool,
    "include_hidden_elements": bool,
    "parallel_analysis": bool,
    "wcag_level": str,
}


def analyze_html_accessibility(
    html_content: Optional[str] = None,
    html_path: Optional[str] = None,
    options: Optional[Dict[str, Any]] = None,
    output_path: Optional[str] = None,
    url: str = "",
    config_file: Optional[str] = None,
    config_manager: Optional[ConfigManager] = None,
    progress_callback: Optional[ProgressCallback] = None,
) -> UnifiedAnalysisResult:
    """
    Analyze an HTML page for WCAG 2.1 accessibility issues.

    Args:
        html_content: HTML markup to analyze.
        html_path: Path to an HTML file, used when html_content is not given.
        options: Analysis options overriding configured values:
            - enable_color_contrast_check (bool): Run contrast checks. Default: True.
            - enable_keyboard_accessibility_check (bool): Run keyboard and focus checks. Default: True.
            - enable_aria_validation (bool): Run ARIA checks. Default: True.
            - enable_form_validation (bool): Run form checks. Default: True.
            - wcag_level (str): 'A', 'AA' or 'AAA'. Default: 'AA'.
            - max_scan_time (float): Target end-to-end time in ms. Default: 200.
            - min_contrast_ratio (float): Minimum ratio for normal text. Default: 4.5.
            - include_hidden_elements (bool): Check hidden elements too. Default: False.
            - parallel_analysis (bool): Interleave the analyzers. Default: True.
        output_path: Path to save the JSON report.
        url: URL recorded for the page.
        config_file: YAML or JSON configuration file.
        config_manager: Configuration manager to resolve options with.
        progress_callback: Called with a ProgressEvent at each stage boundary.

    Returns:
        UnifiedAnalysisResult for the page.

    Raises:
        InvalidDocumentError: If no usable HTML input was given.
        ConfigurationError: If the options or configuration file are invalid.
        ResourceError: If the input cannot be read or the report cannot be written.
        AccessibilityAnalysisError: If the analysis fails.
    """
    options = options or {}
    try:
        validate_options(options, optional_fields=OPTION_TYPES)

        manager = config_manager or ConfigManager()
        if config_file:
            manager.load_file(config_file)
        config = manager.get_analysis_config(options)

        if html_content is None:
            html_content = _read_html(html_path)
            url = url or f"file://{os.path.abspath(html_path)}"

        document = HtmlDocument.from_html(html_content, url=url)
        coordinator = UnifiedAnalysisCoordinator()
        result = asyncio.run(
            coordinator.analyze_accessibility(document, config, progress_callback)
        )

        if output_path:
            save_report(result, output_path)

        return result

    except (ConfigurationError, InvalidDocumentError, ResourceError):
        raise
    except Exception as e:
        handle_exception(
            e,
            logger,
            custom_message="Error analyzing HTML accessibility",
            custom_exception=AccessibilityAnalysisError,
        )


def _read_html(html_path: Optional[str]) -> str:
    if not html_path:
        raise InvalidDocumentError("Either html_content or html_path must be provided")
    if not os.path.isfile(html_path):
        raise ResourceError(f"HTML file not found: {html_path}")

    try:
        with open(html_path, "r", encoding="utf-8") as f:
            return f.read()
    except (OSError, UnicodeDecodeError) as e:
        raise ResourceError(f"Error reading HTML file {html_path}: {e}") from e


def save_report(result: UnifiedAnalysisResult, output_path: str) -> str:
    """
    Save an analysis result as JSON.

    Returns:
        The path written to

    Raises:
        ResourceError: If the file cannot be written
    """
    return write_json(result.model_dump(mode="json"), output_path)


def write_json(data: Any, output_path: str) -> str:
    """Write JSON data to a file, creating its directory."""
    output_dir = os.path.dirname(os.path.abspath(output_path))
    try:
        os.makedirs(output_dir, exist_ok=True)
        with open(output_path, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2)
    except OSError as e:
        raise ResourceError(f"Error writing report to {output_path}: {e}") from e

    logger.info("Saved accessibility report to %s", output_path)
    return output_path


def summarize_result(result: UnifiedAnalysisResult) -> Dict[str, Any]:
    """Condense a result into its score and counts."""
    return {
        "page_url": result.page_url,
        "overall_score": result.overall_score,
        "coverage": result.coverage,
        "total_issues": result.total_issues,
        "critical_issues": result.critical_issues,
        "high_priority_issues": result.high_priority_issues,
        "medium_priority_issues": result.medium_priority_issues,
        "low_priority_issues": result.low_priority_issues,
        "issues_by_category": {
            category: len(issues) for category, issues in result.issues_by_category.items()
        },
        "analysis_time": round(result.analysis_time, 2),
    }
