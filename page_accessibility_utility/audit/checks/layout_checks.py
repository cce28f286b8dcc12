# Copyright 2025 Amazon.com, Inc. or its affiliates.
# SPDX-License-Identifier: Apache-2.0

"""
Layout table checks.
"""

from page_accessibility_utility.audit.base_check import AccessibilityCheck
from page_accessibility_utility.utils.report_models import IssueType, Severity


class LayoutTableCheck(AccessibilityCheck):
    """Check that tables are either marked as layout or structured as data (WCAG 1.3.1)."""

    def targets(self):
        return self.included(self.find_elements("table"))

    def check(self, targets) -> None:
        """
        Issues:
            - presentational table that still carries header or caption markup
            - multi-row table with neither header cells nor a caption
        """
        for table in targets:
            role = (self.get_attribute(table, "role") or "").strip().lower()
            has_headers = bool(self.document.select("th", table))
            has_caption = bool(self.document.select("caption", table)) or bool(
                (self.get_attribute(table, "summary") or "").strip()
            )

            if role in ("presentation", "none"):
                if has_headers or has_caption:
                    self.add_issue(
                        IssueType.SEMANTIC_MARKUP,
                        Severity.MEDIUM,
                        element=table,
                        description="Layout table uses data table markup (th or caption)",
                        confidence=0.85,
                    )
                continue

            if len(self.document.select("tr", table)) > 1 and not has_headers and not has_caption:
                self.add_issue(
                    IssueType.SEMANTIC_MARKUP,
                    Severity.MEDIUM,
                    element=table,
                    description=(
                        "Table has no header cells or caption; mark layout tables with "
                        "role=\"presentation\" or add th elements to data tables"
                    ),
                    confidence=0.7,
                )
