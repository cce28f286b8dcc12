# Copyright 2025 Amazon.com, Inc. or its affiliates.
# SPDX-License-Identifier: Apache-2.0

"""
HTML Accessibility Analyzers.

This module provides the analyzers that run groups of checks over a page.
"""

from page_accessibility_utility.audit.analyzers.base_analyzer import BaseAnalyzer
from page_accessibility_utility.audit.analyzers.scanner import AccessibilityScanner
from page_accessibility_utility.audit.analyzers.content_structure import ContentStructureAnalyzer
from page_accessibility_utility.audit.analyzers.visual_analysis import VisualAnalysisSystem

__all__ = [
    "BaseAnalyzer",
    "AccessibilityScanner",
    "ContentStructureAnalyzer",
    "VisualAnalysisSystem",
]
