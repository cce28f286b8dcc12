# Copyright 2025 Amazon.com, Inc. or its affiliates.
# SPDX-License-Identifier: Apache-2.0


"""
Image accessibility checks.

This module provides checks for the presence and quality of image alt text.
"""

import os
import re
from typing import Any, Optional
from urllib.parse import urlparse

from page_accessibility_utility.audit.base_check import AccessibilityCheck
from page_accessibility_utility.dom.document import BaseDocument
from page_accessibility_utility.utils.report_models import IssueType, Severity

DECORATIVE_CLASS_WORDS = ("decoration", "icon")
DECORATIVE_CONTAINER_WORDS = ("decoration", "ornament", "background")
DECORATIVE_SRC_WORDS = ("decoration", "ornament", "divider", "spacer", "bullet")
SMALL_IMAGE_PX = 20
MAX_ALT_LENGTH = 125

GENERIC_ALT_PATTERNS = [
    re.compile(r"^(image|picture|photo|graphic|img|icon)$"),
    re.compile(r"^(image|picture|photo) of$"),
]
FILENAME_ALT_PATTERNS = [
    re.compile(r"\.(png|jpe?g|gif|svg|webp|bmp|tiff?|ico)$"),
    re.compile(r"^(img|dsc|dscn|pxl|screenshot)[_\- ]?\d+"),
]


def is_decorative_image(document: BaseDocument, image: Any) -> bool:
    """
    Determine if an image is likely decorative.

    Args:
        document: Document the image belongs to
        image: The image element

    Returns:
        True if the image is likely decorative, False otherwise
    """
    role = (document.get_attribute(image, "role") or "").strip().lower()
    if role in ("presentation", "none"):
        return True
    if (document.get_attribute(image, "aria-hidden") or "").lower() == "true":
        return True

    # Small icons and decorations
    class_name = (document.get_attribute(image, "class") or "").lower()
    if any(word in class_name for word in DECORATIVE_CLASS_WORDS):
        rect = document.bounding_rect(image)
        known = [size for size in (rect.width, rect.height) if size is not None]
        if known and all(size <= SMALL_IMAGE_PX for size in known):
            return True

    for ancestor in document.ancestors(image):
        ancestor_class = (document.get_attribute(ancestor, "class") or "").lower()
        if any(word in ancestor_class for word in DECORATIVE_CONTAINER_WORDS):
            return True

    src = (document.get_attribute(image, "src") or "").lower()
    return any(word in src for word in DECORATIVE_SRC_WORDS)


def redundant_alt_confidence(alt: str, src: str = "") -> Optional[float]:
    """
    Score alt text that says nothing about the image.

    Returns:
        0.9 for generic words such as "image", 0.6 for text that looks like
        a file name, None when the alt text seems meaningful
    """
    text = alt.strip().lower()
    if any(pattern.match(text) for pattern in GENERIC_ALT_PATTERNS):
        return 0.9

    if any(pattern.search(text) for pattern in FILENAME_ALT_PATTERNS):
        return 0.6

    if src:
        filename = os.path.basename(urlparse(src).path).lower()
        stem = os.path.splitext(filename)[0]
        # A bare stem only counts while it still reads as a file name
        if filename and (text == filename or (text == stem and " " not in text)):
            return 0.6
    return None


def _has_aria_name(check: AccessibilityCheck, image: Any) -> bool:
    return bool(
        (check.get_attribute(image, "aria-label") or "").strip()
        or (check.get_attribute(image, "aria-labelledby") or "").strip()
    )


class AltTextCheck(AccessibilityCheck):
    """Check that informative images carry alt text (WCAG 1.1.1)."""

    def targets(self):
        return self.included(self.context.images)

    def check(self, targets) -> None:
        """
        Flag images with no alt attribute and no ARIA name.

        Empty alt text is the conventional marker for decorative images and
        is left to the image quality check.
        """
        for image in targets:
            if self.get_attribute(image, "alt") is not None or _has_aria_name(self, image):
                continue
            if is_decorative_image(self.document, image):
                continue

            self.add_issue(
                IssueType.MISSING_ALT_TEXT,
                Severity.HIGH,
                element=image,
                description="Image is missing alternative text",
                confidence=0.95,
            )


class AltTextQualityCheck(AccessibilityCheck):
    """Check alt text quality and decorative image handling (WCAG 1.1.1)."""

    def targets(self):
        return self.included(self.context.images)

    def check(self, targets) -> None:
        """
        Check if images have appropriate alt text.

        Issues:
            - missing alt text on an informative image (critical)
            - empty alt text on an image that does not look decorative (high)
            - generic or file-name alt text (medium)
            - alt text longer than 125 characters (low)
        """
        for image in targets:
            alt = self.get_attribute(image, "alt")
            decorative = is_decorative_image(self.document, image)
            named_by_aria = _has_aria_name(self, image)

            if alt is None:
                if not named_by_aria and not decorative:
                    self.add_issue(
                        IssueType.MISSING_ALT_TEXT,
                        Severity.CRITICAL,
                        element=image,
                        description="Image is missing alternative text. Add descriptive alt text for screen readers.",
                        confidence=0.95,
                    )
                continue

            alt = alt.strip()
            if not alt:
                if not named_by_aria and not decorative:
                    self.add_issue(
                        IssueType.MISSING_ALT_TEXT,
                        Severity.HIGH,
                        element=image,
                        description="Image appears informative but has empty alt text",
                        confidence=0.8,
                    )
                continue

            confidence = redundant_alt_confidence(alt, self.get_attribute(image, "src") or "")
            if confidence is not None:
                self.add_issue(
                    IssueType.MISSING_ALT_TEXT,
                    Severity.MEDIUM,
                    element=image,
                    description=f"Alt text '{alt}' is redundant or non-descriptive",
                    confidence=confidence,
                )
            elif len(alt) > MAX_ALT_LENGTH:
                self.add_issue(
                    IssueType.MISSING_ALT_TEXT,
                    Severity.LOW,
                    element=image,
                    description=f"Alt text is {len(alt)} characters long; consider a shorter description",
                    confidence=0.7,
                )
