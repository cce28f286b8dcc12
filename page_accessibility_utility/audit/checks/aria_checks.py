# Copyright 2025 Amazon.com, Inc. or its affiliates.
# SPDX-License-Identifier: Apache-2.0

"""
ARIA validity checks.

This module checks role values, ID references in ARIA attributes and the
accessible names of controls whose role requires one.
"""

from page_accessibility_utility.audit.base_check import AccessibilityCheck
from page_accessibility_utility.audit.standards import (
    ROLES_REQUIRING_NAME,
    TAGS_REQUIRING_NAME,
    VALID_ARIA_ROLES,
)
from page_accessibility_utility.utils.report_models import SEVERITY_ORDER, IssueType, Severity

# ID-reference attributes and the severity of a dangling reference
ID_REFERENCE_ATTRIBUTES = {
    "aria-labelledby": Severity.HIGH,
    "aria-describedby": Severity.MEDIUM,
    "aria-controls": Severity.MEDIUM,
    "aria-owns": Severity.MEDIUM,
    "aria-activedescendant": Severity.MEDIUM,
    "aria-errormessage": Severity.MEDIUM,
}


class AriaValidityCheck(AccessibilityCheck):
    """Check ARIA roles, references and required names (WCAG 4.1.2)."""

    config_flag = "enable_aria_validation"

    def targets(self):
        targets = []
        for element in self.find_elements("*"):
            tag = self.document.tag_name(element)
            attributes = self.document.attributes(element)
            if (
                "role" in attributes
                or tag == "button"
                or (tag == "a" and "href" in attributes)
                or any(name.startswith("aria-") for name in attributes)
            ):
                targets.append(element)
        return self.included(targets)

    def check(self, targets) -> None:
        """
        Collect every ARIA problem of an element into one issue.

        Issues:
            - role value outside the WCAG 2.1 role set
            - ID reference to an element that does not exist
            - control whose role requires an accessible name but has none
            - focusable element hidden from assistive technology
        """
        for element in targets:
            problems = []

            role_value = (self.get_attribute(element, "role") or "").strip().lower()
            roles = role_value.split()
            if role_value and roles[0] not in VALID_ARIA_ROLES:
                problems.append((Severity.HIGH, f"invalid role '{roles[0]}'"))

            for attribute, severity in ID_REFERENCE_ATTRIBUTES.items():
                value = self.get_attribute(element, attribute)
                if value is None:
                    continue
                missing = [ref for ref in value.split() if self.document.get_element_by_id(ref) is None]
                if missing:
                    problems.append(
                        (severity, f"{attribute} references missing id(s): {', '.join(missing)}")
                    )

            tag = self.document.tag_name(element)
            role = roles[0] if roles else None
            needs_name = role in ROLES_REQUIRING_NAME if role else tag in TAGS_REQUIRING_NAME
            if needs_name and not self.inspector.accessible_name(element):
                problems.append((Severity.HIGH, f"{role or tag} has no accessible name"))

            if (self.get_attribute(element, "aria-hidden") or "").lower() == "true" and (
                self.inspector.is_in_tab_order(element)
            ):
                problems.append((Severity.MEDIUM, "focusable element is hidden with aria-hidden"))

            if not problems:
                continue

            severity = max((severity for severity, _ in problems), key=lambda s: SEVERITY_ORDER[s.value])
            self.add_issue(
                IssueType.INVALID_ARIA,
                severity,
                element=element,
                description="Invalid ARIA usage: " + "; ".join(message for _, message in problems),
                confidence=0.95 if severity == Severity.HIGH else 0.85,
            )
