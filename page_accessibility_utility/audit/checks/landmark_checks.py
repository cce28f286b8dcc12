# Copyright 2025 Amazon.com, Inc. or its affiliates.
# SPDX-License-Identifier: Apache-2.0

"""
Landmark and page structure checks.

This module provides checks for main landmarks, duplicate landmark labels
and skip navigation links.
"""

from page_accessibility_utility.audit.base_check import AccessibilityCheck
from page_accessibility_utility.audit.dom_analyzer import collect_landmarks, is_skip_link
from page_accessibility_utility.utils.report_models import IssueType, Severity

LANDMARK_SEVERITY = {
    "missing-main": (Severity.MEDIUM, 0.9),
    "multiple-main": (Severity.HIGH, 0.95),
    "unlabeled-duplicate-landmark": (Severity.LOW, 0.9),
}


class LandmarkStructureCheck(AccessibilityCheck):
    """Check landmark presence and uniqueness (WCAG 1.3.1)."""

    def targets(self):
        return self.page_targets()

    def check(self, targets) -> None:
        """
        Issues:
            - page has no main landmark
            - page has more than one main landmark
            - repeated navigation/banner/contentinfo regions without distinct labels
        """
        if not targets:
            return

        pairs = collect_landmarks(self.document, self.inspector)
        landmarks = [info for _, info in pairs]
        for violation in self.validator.validate_landmarks(landmarks):
            severity, confidence = LANDMARK_SEVERITY[violation.rule]
            element = targets[0] if violation.index is None else pairs[violation.index][0]
            self.add_issue(
                IssueType.SEMANTIC_MARKUP,
                severity,
                element=element,
                description=violation.message,
                confidence=confidence,
            )


class SkipLinkCheck(AccessibilityCheck):
    """Check for a skip navigation link when the page has navigation (WCAG 2.4.1)."""

    def targets(self):
        return self.page_targets()

    def check(self, targets) -> None:
        if not targets:
            return

        navigation = [
            element
            for element, info in collect_landmarks(self.document, self.inspector)
            if info.role == "navigation"
        ]
        if not navigation:
            return
        if any(is_skip_link(self.document, link) for link in self.context.links):
            return

        self.add_issue(
            IssueType.SEMANTIC_MARKUP,
            Severity.LOW,
            element=navigation[0],
            description="Page has navigation but no skip link to bypass it",
            confidence=0.7,
            wcag_criteria=["2.4.1"],
        )
