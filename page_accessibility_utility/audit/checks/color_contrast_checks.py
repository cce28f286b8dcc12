# Copyright 2025 Amazon.com, Inc. or its affiliates.
# SPDX-License-Identifier: Apache-2.0

"""
Color contrast accessibility checks.

This module provides checks for sufficient contrast between text and its
background.
"""

import logging

from page_accessibility_utility.audit.base_check import AccessibilityCheck
from page_accessibility_utility.dom.styles import to_pixels
from page_accessibility_utility.utils.report_models import IssueType, Severity, WCAGLevel

logger = logging.getLogger(__name__)

# Ratio deficit beyond which a contrast failure is critical
CRITICAL_DEFICIT = 1.0


class ColorContrastCheck(AccessibilityCheck):
    """Check text contrast against its effective background (WCAG 1.4.3)."""

    config_flag = "enable_color_contrast_check"

    def targets(self):
        return self.text_elements()

    def check(self, targets) -> None:
        """
        Measure each text element against the required ratio.

        Large text uses the relaxed thresholds. Normal text never passes
        below the configured minimum contrast ratio.
        """
        level = self.config.wcag_level
        criteria = ["1.4.6"] if level == WCAGLevel.AAA.value else ["1.4.3"]

        for element in targets:
            style = self.document.computed_style(element)
            font_px = to_pixels(style.get("font-size")) or 16.0
            is_large = self.evaluator.is_large_text(font_px, style.get("font-weight", "400"))

            try:
                background = self.inspector.effective_background(element)
                ratio = self.evaluator.ratio(style.get("color", "#000000"), background)
            except ValueError as e:
                logger.warning("Skipping contrast of %s: %s", self.inspector.xpath(element), e)
                continue

            required = self.evaluator.required_ratio(is_large, level)
            if not is_large:
                required = max(required, self.config.min_contrast_ratio)
            if ratio >= required:
                continue

            deficit = required - ratio
            severity = Severity.CRITICAL if deficit > CRITICAL_DEFICIT else Severity.HIGH
            size_note = "large text" if is_large else "normal text"
            self.add_issue(
                IssueType.INSUFFICIENT_CONTRAST,
                severity,
                element=element,
                description=(
                    f"Contrast ratio {ratio:.2f}:1 between {self.evaluator.to_hex(style.get('color', '#000000'))} "
                    f"and {self.evaluator.to_hex(background)} is below the required {required:g}:1 for {size_note}"
                ),
                confidence=0.85,
                wcag_criteria=criteria,
            )
