# Copyright 2025 Amazon.com, Inc. or its affiliates.
# SPDX-License-Identifier: Apache-2.0

"""
Accessibility checks package.

This package contains all the specific accessibility checks that the
analyzers run.
"""

from page_accessibility_utility.audit.checks.heading_checks import (
    HeadingHierarchyCheck,
    HeadingContentCheck,
)
from page_accessibility_utility.audit.checks.landmark_checks import (
    LandmarkStructureCheck,
    SkipLinkCheck,
)
from page_accessibility_utility.audit.checks.image_checks import (
    AltTextCheck,
    AltTextQualityCheck,
)
from page_accessibility_utility.audit.checks.link_checks import LinkPurposeCheck
from page_accessibility_utility.audit.checks.color_contrast_checks import ColorContrastCheck
from page_accessibility_utility.audit.checks.keyboard_checks import KeyboardAccessCheck
from page_accessibility_utility.audit.checks.focus_checks import FocusManagementCheck
from page_accessibility_utility.audit.checks.aria_checks import AriaValidityCheck
from page_accessibility_utility.audit.checks.form_checks import (
    FormLabelCheck,
    FormValidationCheck,
    FormFieldsetCheck,
)
from page_accessibility_utility.audit.checks.media_checks import MediaAlternativesCheck
from page_accessibility_utility.audit.checks.layout_checks import LayoutTableCheck
from page_accessibility_utility.audit.checks.text_checks import (
    TextSizeCheck,
    ColorOnlyLinkCheck,
)

__all__ = [
    "HeadingHierarchyCheck",
    "HeadingContentCheck",
    "LandmarkStructureCheck",
    "SkipLinkCheck",
    "AltTextCheck",
    "AltTextQualityCheck",
    "LinkPurposeCheck",
    "ColorContrastCheck",
    "KeyboardAccessCheck",
    "FocusManagementCheck",
    "AriaValidityCheck",
    "FormLabelCheck",
    "FormValidationCheck",
    "FormFieldsetCheck",
    "MediaAlternativesCheck",
    "LayoutTableCheck",
    "TextSizeCheck",
    "ColorOnlyLinkCheck",
]
