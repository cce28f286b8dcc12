# Copyright 2025 Amazon.com, Inc. or its affiliates.
# SPDX-License-Identifier: Apache-2.0

"""
Page Accessibility Package.

This package analyzes the DOM of a web page for WCAG 2.1 accessibility
issues and produces a scored report with suggested fixes.

Main Components:
- DOM analysis and page context extraction
- Rule-set scanning, content structure and visual analysis
- Aggregation, deduplication and compliance scoring
"""

__version__ = "0.1.0"

from page_accessibility_utility.api import analyze_html_accessibility
from page_accessibility_utility.audit.coordinator import UnifiedAnalysisCoordinator
from page_accessibility_utility.dom.document import BaseDocument, HtmlDocument
from page_accessibility_utility.utils.config import AnalysisConfig, ConfigManager
from page_accessibility_utility.utils.logging_helper import (
    AccessibilityAnalysisError,
    AnalysisInProgressError,
    ConfigurationError,
    InvalidDocumentError,
    PageAccessibilityError,
    ResourceError,
)
from page_accessibility_utility.utils.report_models import UnifiedAnalysisResult

__all__ = [
    "__version__",
    "analyze_html_accessibility",
    "UnifiedAnalysisCoordinator",
    "BaseDocument",
    "HtmlDocument",
    "AnalysisConfig",
    "ConfigManager",
    "UnifiedAnalysisResult",
    "PageAccessibilityError",
    "AccessibilityAnalysisError",
    "InvalidDocumentError",
    "AnalysisInProgressError",
    "ConfigurationError",
    "ResourceError",
]
