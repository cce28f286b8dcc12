# Copyright 2025 Amazon.com, Inc. or its affiliates.
# SPDX-License-Identifier: Apache-2.0


"""
Link accessibility checks.

This module provides checks for link text that describes its purpose.
"""

import re

from page_accessibility_utility.audit.base_check import AccessibilityCheck
from page_accessibility_utility.utils.report_models import IssueType, Severity

GENERIC_LINK_TEXT = {
    "click here",
    "click",
    "here",
    "more",
    "read more",
    "learn more",
    "details",
    "more info",
    "more information",
    "link",
    "this link",
    "this",
    "go",
}
URL_TEXT_RE = re.compile(r"^(https?://|www\.)\S+$", re.I)


class LinkPurposeCheck(AccessibilityCheck):
    """Check for descriptive link text (WCAG 2.4.4)."""

    def targets(self):
        return self.included(self.context.links)

    def check(self, targets) -> None:
        """
        Check if links have descriptive text.

        Issues:
            - link with no accessible name (high)
            - generic text such as "click here" (medium)
            - raw URL used as link text (low)
        """
        for link in targets:
            name = self.inspector.accessible_name(link)
            normalized = re.sub(r"[^\w\s]", "", name).strip().lower()

            if not name:
                self.add_issue(
                    IssueType.LINK_PURPOSE,
                    Severity.HIGH,
                    element=link,
                    description="Link has no text or accessible name",
                    confidence=0.95,
                )
            elif normalized in GENERIC_LINK_TEXT:
                self.add_issue(
                    IssueType.LINK_PURPOSE,
                    Severity.MEDIUM,
                    element=link,
                    description=f"Link text '{name}' does not describe its purpose",
                    confidence=0.8,
                )
            elif URL_TEXT_RE.match(name):
                self.add_issue(
                    IssueType.LINK_PURPOSE,
                    Severity.LOW,
                    element=link,
                    description="Link text is a raw URL",
                    confidence=0.7,
                )
