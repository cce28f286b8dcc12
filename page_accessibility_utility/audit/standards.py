# Copyright 2025 Amazon.com, Inc. or its affiliates.
# SPDX-License-Identifier: Apache-2.0

"""
WCAG standards and criteria information.

This module provides information about WCAG criteria, how issue types map to
criteria and report categories, severity weights, and the ARIA role tables
used by the checks.
"""

from page_accessibility_utility.utils.report_models import IssueCategory, IssueType, Severity

# Severity levels: penalty against the overall score, weight within an analyzer
SEVERITY_LEVELS = {
    Severity.CRITICAL.value: {"penalty": 15, "weight": 4},
    Severity.HIGH.value: {"penalty": 8, "weight": 3},
    Severity.MEDIUM.value: {"penalty": 4, "weight": 2},
    Severity.LOW.value: {"penalty": 1, "weight": 1},
}

# WCAG criteria information
WCAG_CRITERIA = {
    "1.1.1": {
        "name": "Non-text Content",
        "level": "A",
        "description": "All non-text content that is presented to the user has a text alternative that serves the equivalent purpose.",
    },
    "1.2.1": {
        "name": "Audio-only and Video-only (Prerecorded)",
        "level": "A",
        "description": "For prerecorded audio-only and prerecorded video-only media, alternatives are provided.",
    },
    "1.2.2": {
        "name": "Captions (Prerecorded)",
        "level": "A",
        "description": "Captions are provided for all prerecorded audio content in synchronized media.",
    },
    "1.2.5": {
        "name": "Audio Description (Prerecorded)",
        "level": "AA",
        "description": "Audio description is provided for all prerecorded video content in synchronized media.",
    },
    "1.3.1": {
        "name": "Info and Relationships",
        "level": "A",
        "description": "Information, structure, and relationships conveyed through presentation can be programmatically determined.",
    },
    "1.4.1": {
        "name": "Use of Color",
        "level": "A",
        "description": "Color is not used as the only visual means of conveying information.",
    },
    "1.4.2": {
        "name": "Audio Control",
        "level": "A",
        "description": "If audio plays automatically for more than 3 seconds, a mechanism is available to pause or stop it.",
    },
    "1.4.3": {
        "name": "Contrast (Minimum)",
        "level": "AA",
        "description": "The visual presentation of text and images of text has a contrast ratio of at least 4.5:1.",
    },
    "1.4.4": {
        "name": "Resize Text",
        "level": "AA",
        "description": "Text can be resized without assistive technology up to 200 percent without loss of content or functionality.",
    },
    "1.4.6": {
        "name": "Contrast (Enhanced)",
        "level": "AAA",
        "description": "The visual presentation of text and images of text has a contrast ratio of at least 7:1.",
    },
    "2.1.1": {
        "name": "Keyboard",
        "level": "A",
        "description": "All functionality is operable through a keyboard interface.",
    },
    "2.4.1": {
        "name": "Bypass Blocks",
        "level": "A",
        "description": "A mechanism is available to bypass blocks of content that are repeated on multiple Web pages.",
    },
    "2.4.3": {
        "name": "Focus Order",
        "level": "A",
        "description": "Focusable components receive focus in an order that preserves meaning and operability.",
    },
    "2.4.4": {
        "name": "Link Purpose (In Context)",
        "level": "A",
        "description": "The purpose of each link can be determined from the link text alone or from the link text together with its programmatically determined link context.",
    },
    "2.4.6": {
        "name": "Headings and Labels",
        "level": "AA",
        "description": "Headings and labels describe topic or purpose.",
    },
    "2.4.7": {
        "name": "Focus Visible",
        "level": "AA",
        "description": "Any keyboard operable user interface has a mode of operation where the keyboard focus indicator is visible.",
    },
    "3.3.1": {
        "name": "Error Identification",
        "level": "A",
        "description": "If an input error is automatically detected, the item that is in error is identified and the error is described to the user in text.",
    },
    "3.3.2": {
        "name": "Labels or Instructions",
        "level": "A",
        "description": "Labels or instructions are provided when content requires user input.",
    },
    "4.1.2": {
        "name": "Name, Role, Value",
        "level": "A",
        "description": "For all user interface components, the name and role can be programmatically determined.",
    },
}

ISSUE_TYPE_CRITERIA = {
    IssueType.MISSING_ALT_TEXT.value: ["1.1.1"],
    IssueType.INSUFFICIENT_CONTRAST.value: ["1.4.3"],
    IssueType.KEYBOARD_INACCESSIBLE.value: ["2.1.1"],
    IssueType.MISSING_LABELS.value: ["1.3.1", "3.3.2"],
    IssueType.INVALID_ARIA.value: ["4.1.2"],
    IssueType.HEADING_STRUCTURE.value: ["1.3.1", "2.4.6"],
    IssueType.FOCUS_MANAGEMENT.value: ["2.4.3", "2.4.7"],
    IssueType.SEMANTIC_MARKUP.value: ["1.3.1"],
    IssueType.COLOR_ONLY_INFORMATION.value: ["1.4.1"],
    IssueType.TEXT_SIZE.value: ["1.4.4"],
    IssueType.LINK_PURPOSE.value: ["2.4.4"],
    IssueType.FORM_VALIDATION.value: ["3.3.1", "3.3.2"],
}

ISSUE_TYPE_CATEGORIES = {
    IssueType.MISSING_ALT_TEXT.value: IssueCategory.VISUAL.value,
    IssueType.INSUFFICIENT_CONTRAST.value: IssueCategory.VISUAL.value,
    IssueType.COLOR_ONLY_INFORMATION.value: IssueCategory.VISUAL.value,
    IssueType.TEXT_SIZE.value: IssueCategory.VISUAL.value,
    IssueType.HEADING_STRUCTURE.value: IssueCategory.CONTENT.value,
    IssueType.MISSING_LABELS.value: IssueCategory.CONTENT.value,
    IssueType.FORM_VALIDATION.value: IssueCategory.CONTENT.value,
    IssueType.LINK_PURPOSE.value: IssueCategory.CONTENT.value,
    IssueType.KEYBOARD_INACCESSIBLE.value: IssueCategory.INTERACTION.value,
    IssueType.FOCUS_MANAGEMENT.value: IssueCategory.INTERACTION.value,
    IssueType.INVALID_ARIA.value: IssueCategory.STRUCTURE.value,
    IssueType.SEMANTIC_MARKUP.value: IssueCategory.STRUCTURE.value,
}

SUGGESTED_FIXES = {
    IssueType.MISSING_ALT_TEXT.value: "Add descriptive alt text that conveys the purpose of the image, or alt=\"\" if it is purely decorative",
    IssueType.INSUFFICIENT_CONTRAST.value: "Increase the contrast between the text color and its background",
    IssueType.KEYBOARD_INACCESSIBLE.value: "Use a native control, or add tabindex=\"0\" and keyboard event handlers",
    IssueType.MISSING_LABELS.value: "Associate a visible <label> or an aria-label/aria-labelledby with the control",
    IssueType.INVALID_ARIA.value: "Use valid ARIA roles and reference existing element ids",
    IssueType.HEADING_STRUCTURE.value: "Use headings in order without skipping levels, starting with a single h1",
    IssueType.FOCUS_MANAGEMENT.value: "Keep a logical focus order and a visible focus indicator",
    IssueType.SEMANTIC_MARKUP.value: "Use semantic HTML elements and landmarks to convey structure",
    IssueType.COLOR_ONLY_INFORMATION.value: "Convey the information with text, underline or an icon in addition to color",
    IssueType.TEXT_SIZE.value: "Use a font size of at least 12px with relative units so text can be resized",
    IssueType.LINK_PURPOSE.value: "Give the link text that describes its destination",
    IssueType.FORM_VALIDATION.value: "Mark required fields programmatically and associate error messages with their fields",
}

VALID_ARIA_ROLES = {
    "alert", "alertdialog", "application", "article", "banner", "button", "cell",
    "checkbox", "columnheader", "combobox", "complementary", "contentinfo",
    "definition", "dialog", "directory", "document", "feed", "figure", "form",
    "grid", "gridcell", "group", "heading", "img", "link", "list", "listbox",
    "listitem", "log", "main", "marquee", "math", "menu", "menubar", "menuitem",
    "menuitemcheckbox", "menuitemradio", "navigation", "none", "note", "option",
    "presentation", "progressbar", "radio", "radiogroup", "region", "row",
    "rowgroup", "rowheader", "scrollbar", "search", "searchbox", "separator",
    "slider", "spinbutton", "status", "switch", "tab", "table", "tablist",
    "tabpanel", "term", "textbox", "timer", "toolbar", "tooltip", "tree",
    "treegrid", "treeitem",
}

# Roles and tags whose accessible name is mandatory
ROLES_REQUIRING_NAME = {"button", "link", "menuitem", "tab", "option"}
TAGS_REQUIRING_NAME = {"button", "a"}

# Implicit roles of semantic tags
IMPLICIT_ROLES = {
    "main": "main",
    "nav": "navigation",
    "header": "banner",
    "footer": "contentinfo",
    "aside": "complementary",
    "section": "region",
    "article": "article",
    "button": "button",
    "a": "link",
}

LANDMARK_ROLES = {
    "main", "navigation", "banner", "contentinfo", "complementary", "region", "search", "form",
}

# Landmarks that must be distinguishable when they occur more than once
UNIQUELY_LABELED_ROLES = ("navigation", "banner", "contentinfo")

# header/footer inside these elements are not page-level banner/contentinfo
SECTIONING_TAGS = {"article", "aside", "main", "nav", "section"}


def get_criterion_info(criterion_id: str) -> dict:
    """
    Get information about a WCAG criterion.

    Args:
        criterion_id: WCAG criterion ID (e.g., '1.1.1')

    Returns:
        Dictionary with criterion information
    """
    return WCAG_CRITERIA.get(
        criterion_id,
        {
            "name": "Unknown Criterion",
            "level": "Unknown",
            "description": "No description available",
        },
    )


def get_issue_criteria(issue_type: str) -> list:
    """Get the WCAG criteria an issue type violates."""
    return list(ISSUE_TYPE_CRITERIA.get(issue_type, []))


def get_issue_category(issue_type: str) -> str:
    """Get the report category of an issue type."""
    return ISSUE_TYPE_CATEGORIES.get(issue_type, IssueCategory.GENERAL.value)


def get_suggested_fix(issue_type: str) -> str:
    """Get the default remediation advice for an issue type."""
    return SUGGESTED_FIXES.get(issue_type, "Review element for accessibility compliance")


def get_severity_penalty(severity: str) -> int:
    """Get the score penalty for one issue of the given severity."""
    return SEVERITY_LEVELS.get(severity, {"penalty": 0})["penalty"]


def get_severity_weight(severity: str) -> int:
    """Get the analyzer sub-score weight for one issue of the given severity."""
    return SEVERITY_LEVELS.get(severity, {"weight": 0})["weight"]
