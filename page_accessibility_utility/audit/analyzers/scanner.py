# Copyright 2025 Amazon.com, Inc. or its affiliates.
# SPDX-License-Identifier: Apache-2.0

"""
Primary rule-set scanner: alt text, contrast, keyboard access, ARIA, form
labels, heading order, focus management and link purpose.
"""

from page_accessibility_utility.audit.analyzers.base_analyzer import BaseAnalyzer
from page_accessibility_utility.audit.checks import (
    AltTextCheck,
    AriaValidityCheck,
    ColorContrastCheck,
    FocusManagementCheck,
    FormLabelCheck,
    HeadingHierarchyCheck,
    KeyboardAccessCheck,
    LinkPurposeCheck,
)
from page_accessibility_utility.utils.report_models import AccessibilityAnalysis


class AccessibilityScanner(BaseAnalyzer):
    """Run the broad WCAG rule set over a page."""

    name = "AccessibilityScanner"
    issue_prefix = "scanner"
    result_class = AccessibilityAnalysis
    budget_option = "scanner_time_budget"
    checks = (
        AltTextCheck,
        ColorContrastCheck,
        KeyboardAccessCheck,
        AriaValidityCheck,
        FormLabelCheck,
        HeadingHierarchyCheck,
        FocusManagementCheck,
        LinkPurposeCheck,
    )

    def _summarize(self, result, context, inspector) -> None:
        document = context.document
        scope = document.body or document.root
        result.elements_scanned = len(document.select("*", scope)) if scope is not None else 0
