# Copyright 2025 Amazon.com, Inc. or its affiliates.
# SPDX-License-Identifier: Apache-2.0

"""
Content structure analysis.

Validates heading hierarchy, landmark regions, skip links and form
accessibility separately from the scanner, so that a failure here does not
affect the scanner's results and each has its own time budget.
"""

from page_accessibility_utility.audit.analyzers.base_analyzer import BaseAnalyzer
from page_accessibility_utility.audit.checks import (
    FormFieldsetCheck,
    FormLabelCheck,
    FormValidationCheck,
    HeadingContentCheck,
    HeadingHierarchyCheck,
    LandmarkStructureCheck,
    SkipLinkCheck,
)
from page_accessibility_utility.audit.dom_analyzer import collect_landmarks
from page_accessibility_utility.utils.report_models import ContentAnalysisResult


class ContentStructureAnalyzer(BaseAnalyzer):
    """Analyze headings, landmarks and forms."""

    name = "ContentStructureAnalyzer"
    issue_prefix = "content"
    result_class = ContentAnalysisResult
    budget_option = "content_time_budget"
    checks = (
        HeadingHierarchyCheck,
        HeadingContentCheck,
        LandmarkStructureCheck,
        SkipLinkCheck,
        FormLabelCheck,
        FormValidationCheck,
        FormFieldsetCheck,
    )

    def _summarize(self, result, context, inspector) -> None:
        result.heading_count = len(context.headings)
        result.landmark_count = len(collect_landmarks(context.document, inspector))
        result.form_control_count = len(context.form_controls)
