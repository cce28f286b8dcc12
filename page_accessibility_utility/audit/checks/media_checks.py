# Copyright 2025 Amazon.com, Inc. or its affiliates.
# SPDX-License-Identifier: Apache-2.0

"""
Media accessibility checks for video and audio elements.
"""

from page_accessibility_utility.audit.base_check import AccessibilityCheck
from page_accessibility_utility.utils.report_models import IssueType, Severity

CAPTION_KINDS = {"captions", "subtitles"}


class MediaAlternativesCheck(AccessibilityCheck):
    """Check captions, descriptions and playback control of media (WCAG 1.2, 1.4.2)."""

    def targets(self):
        return self.included(self.find_elements("video, audio"))

    def check(self, targets) -> None:
        """
        Issues:
            - no captions or subtitles track (critical)
            - video with no audio description track (medium)
            - autoplaying media (medium)
            - media without controls that plays sound (medium)
        """
        for media in targets:
            is_video = self.document.tag_name(media) == "video"
            kinds = {
                (self.get_attribute(track, "kind") or "subtitles").lower()
                for track in self.document.select("track", media)
            }

            if not kinds & CAPTION_KINDS:
                self.add_issue(
                    IssueType.MISSING_LABELS,
                    Severity.CRITICAL,
                    element=media,
                    description=(
                        "Video is missing captions or subtitles"
                        if is_video
                        else "Audio has no captions or transcript track"
                    ),
                    confidence=0.9,
                    wcag_criteria=["1.2.2"] if is_video else ["1.2.1"],
                )
            elif is_video and "descriptions" not in kinds:
                self.add_issue(
                    IssueType.MISSING_LABELS,
                    Severity.MEDIUM,
                    element=media,
                    description="Video has no audio description track for its visual content",
                    confidence=0.7,
                    wcag_criteria=["1.2.5"],
                )

            if self.document.has_attribute(media, "autoplay"):
                self.add_issue(
                    IssueType.FOCUS_MANAGEMENT,
                    Severity.MEDIUM,
                    element=media,
                    description="Media plays automatically; provide a way to pause it or remove autoplay",
                    confidence=0.9,
                    wcag_criteria=["1.4.2"],
                )

            if not self.document.has_attribute(media, "controls") and not self.document.has_attribute(
                media, "muted"
            ):
                self.add_issue(
                    IssueType.KEYBOARD_INACCESSIBLE,
                    Severity.MEDIUM,
                    element=media,
                    description="Media has no controls, so playback cannot be operated from the keyboard",
                    confidence=0.8,
                    wcag_criteria=["2.1.1"],
                )
