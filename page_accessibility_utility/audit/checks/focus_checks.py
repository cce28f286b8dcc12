# Copyright 2025 Amazon.com, Inc. or its affiliates.
# SPDX-License-Identifier: Apache-2.0

"""
Focus management checks.
"""

from page_accessibility_utility.audit.base_check import AccessibilityCheck
from page_accessibility_utility.audit.dom_analyzer import FOCUSABLE_SELECTOR
from page_accessibility_utility.utils.report_models import IssueType, Severity

REPLACEMENT_INDICATORS = ("box-shadow", "border", "border-color", "background-color", "text-decoration")


def _removes_outline(style: dict) -> bool:
    outline = style.get("outline", "").strip().lower()
    if outline in ("none", "0", "0px"):
        return True
    return style.get("outline-style", "").strip().lower() == "none" or style.get(
        "outline-width", ""
    ).strip().lower() in ("0", "0px")


class FocusManagementCheck(AccessibilityCheck):
    """Check focus order and focus visibility (WCAG 2.4.3, 2.4.7)."""

    config_flag = "enable_keyboard_accessibility_check"

    def targets(self):
        return self.included(
            [
                element
                for element in self.find_elements(FOCUSABLE_SELECTOR)
                if self.inspector.is_focusable(element)
            ]
        )

    def check(self, targets) -> None:
        """
        Issues:
            - positive tabindex overriding the natural focus order (medium)
            - focus outline removed with no replacement indicator (high)
        """
        for element in targets:
            tab_index = self.inspector.tab_index(element)
            if tab_index is not None and tab_index > 0:
                self.add_issue(
                    IssueType.FOCUS_MANAGEMENT,
                    Severity.MEDIUM,
                    element=element,
                    description=f"Positive tabindex ({tab_index}) overrides the natural focus order",
                    confidence=0.9,
                    wcag_criteria=["2.4.3"],
                )
                continue

            focus_style = self.document.focus_style(element)
            if _removes_outline(focus_style) or _removes_outline(
                self.document.computed_style(element)
            ):
                if any(prop in focus_style for prop in REPLACEMENT_INDICATORS):
                    continue
                self.add_issue(
                    IssueType.FOCUS_MANAGEMENT,
                    Severity.HIGH,
                    element=element,
                    description="Element lacks a visible focus indicator; its outline is removed",
                    confidence=0.8,
                    wcag_criteria=["2.4.7"],
                )
