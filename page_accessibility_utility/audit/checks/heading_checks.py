# Copyright 2025 Amazon.com, Inc. or its affiliates.
# SPDX-License-Identifier: Apache-2.0


"""
Heading structure accessibility checks.

This module provides checks for proper heading structure and content.
"""

from page_accessibility_utility.audit.base_check import AccessibilityCheck
from page_accessibility_utility.audit.dom_analyzer import get_heading_level
from page_accessibility_utility.utils.report_models import IssueType, Severity

SEVERITY_BY_RULE = {
    "first-heading-not-h1": Severity.MEDIUM,
    "skipped-heading-level": Severity.HIGH,
}


class HeadingHierarchyCheck(AccessibilityCheck):
    """Check for proper heading hierarchy (WCAG 1.3.1, 2.4.6)."""

    def targets(self):
        return self.included(self.context.headings)

    def check(self, targets) -> None:
        """
        Check if the document has proper heading hierarchy.

        Issues:
            - first heading is not an h1
            - heading level skipped (e.g. h2 followed by h4)
        """
        levels = [get_heading_level(self.document, heading) for heading in targets]
        for violation in self.validator.validate_heading_sequence(levels):
            self.add_issue(
                IssueType.HEADING_STRUCTURE,
                SEVERITY_BY_RULE[violation.rule],
                element=targets[violation.index],
                description=violation.message,
                confidence=0.95,
            )


class HeadingContentCheck(AccessibilityCheck):
    """Check for proper heading content (WCAG 2.4.6)."""

    def targets(self):
        return self.included(self.context.headings)

    def check(self, targets) -> None:
        for heading in targets:
            if self.inspector.accessible_name(heading):
                continue
            self.add_issue(
                IssueType.HEADING_STRUCTURE,
                Severity.MEDIUM,
                element=heading,
                description="Heading has no text content",
                confidence=0.95,
                wcag_criteria=["2.4.6"],
            )
