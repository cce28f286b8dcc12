# Copyright 2025 Amazon.com, Inc. or its affiliates.
# SPDX-License-Identifier: Apache-2.0

"""
Text presentation checks: minimum text size and links distinguished by
color alone.
"""

from page_accessibility_utility.audit.base_check import AccessibilityCheck
from page_accessibility_utility.dom.styles import to_pixels
from page_accessibility_utility.utils.report_models import IssueType, Severity

MIN_TEXT_PX = 12.0
RUNNING_TEXT_TAGS = {"p", "li", "td", "dd", "blockquote"}


class TextSizeCheck(AccessibilityCheck):
    """Check for text rendered too small to read (WCAG 1.4.4)."""

    def targets(self):
        return self.text_elements()

    def check(self, targets) -> None:
        for element in targets:
            font_px = to_pixels(self.document.computed_style(element).get("font-size"))
            if font_px is None or font_px >= MIN_TEXT_PX:
                continue
            self.add_issue(
                IssueType.TEXT_SIZE,
                Severity.LOW,
                element=element,
                description=f"Text is rendered at {font_px:g}px, below the {MIN_TEXT_PX:g}px minimum",
                confidence=0.6,
            )


class ColorOnlyLinkCheck(AccessibilityCheck):
    """Check for links in running text identified by color only (WCAG 1.4.1)."""

    def targets(self):
        links = []
        for link in self.context.links:
            parent = self.document.parent(link)
            if parent is None or self.document.tag_name(parent) not in RUNNING_TEXT_TAGS:
                continue
            if self.document.own_text(parent):
                links.append(link)
        return self.included(links)

    def check(self, targets) -> None:
        for link in targets:
            style = self.document.computed_style(link)
            if "none" not in style.get("text-decoration", "none").lower():
                continue
            if style.get("font-weight") != self.document.computed_style(self.document.parent(link)).get(
                "font-weight"
            ):
                continue
            self.add_issue(
                IssueType.COLOR_ONLY_INFORMATION,
                Severity.LOW,
                element=link,
                description="Link inside text is distinguished from surrounding text by color alone",
                confidence=0.5,
            )
