# Copyright 2025 Amazon.com, Inc. or its affiliates.
# SPDX-License-Identifier: Apache-2.0

"""
Accessibility audit module for web pages.

This module provides the analyzers, checks and the coordinator that audit a
page against WCAG 2.1 accessibility standards.
"""

from page_accessibility_utility.audit.color_contrast import ColorContrastEvaluator
from page_accessibility_utility.audit.element_inspector import ElementInspector
from page_accessibility_utility.audit.structure_validator import StructureValidator
from page_accessibility_utility.audit.dom_analyzer import DOMAnalyzer
from page_accessibility_utility.audit.coordinator import UnifiedAnalysisCoordinator

__all__ = [
    "ColorContrastEvaluator",
    "ElementInspector",
    "StructureValidator",
    "DOMAnalyzer",
    "UnifiedAnalysisCoordinator",
]
