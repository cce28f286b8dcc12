# Copyright 2025 Amazon.com, Inc. or its affiliates.
# SPDX-License-Identifier: Apache-2.0

"""
Keyboard accessibility checks.

Custom controls built from generic elements need to be reachable with the
Tab key and operable with the keyboard.
"""

from page_accessibility_utility.audit.base_check import AccessibilityCheck
from page_accessibility_utility.utils.report_models import IssueType, Severity

CUSTOM_CONTROL_SELECTOR = (
    '[onclick], [role="button"], [role="link"], [role="menuitem"], [role="checkbox"], '
    '[role="tab"], [role="switch"], [role="option"], [role="radio"], [role="slider"]'
)
NATIVE_CONTROL_TAGS = {"button", "input", "select", "textarea", "summary", "option"}
KEYBOARD_HANDLERS = ("onkeydown", "onkeyup", "onkeypress")


class KeyboardAccessCheck(AccessibilityCheck):
    """Check that custom interactive elements work from the keyboard (WCAG 2.1.1)."""

    config_flag = "enable_keyboard_accessibility_check"

    def targets(self):
        controls = []
        for element in self.find_elements(CUSTOM_CONTROL_SELECTOR):
            tag = self.document.tag_name(element)
            if tag in NATIVE_CONTROL_TAGS:
                continue
            if tag in ("a", "area") and self.document.has_attribute(element, "href"):
                continue
            controls.append(element)
        return self.included(controls)

    def check(self, targets) -> None:
        """
        Check custom controls for tab order membership and key handlers.

        Issues:
            - control that cannot be reached with the Tab key (high)
            - control without keyboard event handlers (medium)
        """
        for element in targets:
            tab_index = self.inspector.tab_index(element)
            has_key_handler = any(
                self.document.has_attribute(element, handler) for handler in KEYBOARD_HANDLERS
            )
            role = self.get_attribute(element, "role") or self.document.tag_name(element)

            if tab_index is None or tab_index < 0:
                self.add_issue(
                    IssueType.KEYBOARD_INACCESSIBLE,
                    Severity.HIGH,
                    element=element,
                    description=(
                        f"Interactive {role} element is not reachable by keyboard; "
                        "it needs a non-negative tabindex"
                    ),
                    confidence=0.9,
                )
            elif not has_key_handler:
                # Listeners added from script are invisible in markup
                self.add_issue(
                    IssueType.KEYBOARD_INACCESSIBLE,
                    Severity.MEDIUM,
                    element=element,
                    description=f"Interactive {role} element has no keyboard event handlers",
                    confidence=0.6,
                )
