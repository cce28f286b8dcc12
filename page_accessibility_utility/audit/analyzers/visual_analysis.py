# Copyright 2025 Amazon.com, Inc. or its affiliates.
# SPDX-License-Identifier: Apache-2.0

"""
Visual analysis: image alternatives, media, layout tables and text
presentation.
"""

from page_accessibility_utility.audit.analyzers.base_analyzer import BaseAnalyzer
from page_accessibility_utility.audit.checks import (
    AltTextQualityCheck,
    ColorOnlyLinkCheck,
    LayoutTableCheck,
    MediaAlternativesCheck,
    TextSizeCheck,
)
from page_accessibility_utility.audit.checks.image_checks import is_decorative_image
from page_accessibility_utility.utils.report_models import VisualAnalysisResult


class VisualAnalysisSystem(BaseAnalyzer):
    """Analyze the visual presentation of a page."""

    name = "VisualAnalysisSystem"
    issue_prefix = "visual"
    result_class = VisualAnalysisResult
    budget_option = "visual_time_budget"
    checks = (
        AltTextQualityCheck,
        MediaAlternativesCheck,
        LayoutTableCheck,
        TextSizeCheck,
        ColorOnlyLinkCheck,
    )

    def _summarize(self, result, context, inspector) -> None:
        document = context.document
        result.image_count = len(context.images)
        result.decorative_image_count = sum(
            1 for image in context.images if is_decorative_image(document, image)
        )
        result.media_count = len(document.select("video, audio"))
        result.table_count = len(document.select("table"))
