# Copyright 2025 Amazon.com, Inc. or its affiliates.
# SPDX-License-Identifier: Apache-2.0

"""
Form accessibility checks.

This module provides checks for form labels, required-field and error
indication, and grouping of related controls.
"""

from typing import Any, Dict, List

from page_accessibility_utility.audit.base_check import AccessibilityCheck
from page_accessibility_utility.utils.report_models import IssueType, Severity

GROUPING_ROLES = {"group", "radiogroup"}


class FormLabelCheck(AccessibilityCheck):
    """Check that form controls have associated labels (WCAG 1.3.1, 3.3.2)."""

    config_flag = "enable_form_validation"

    def targets(self):
        return self.included(
            [control for control in self.context.form_controls if self.validator.needs_label(control)]
        )

    def check(self, targets) -> None:
        for violation in self.validator.validate_form_controls(targets):
            self.add_issue(
                IssueType.MISSING_LABELS,
                Severity.HIGH,
                element=targets[violation.index],
                description=violation.message,
                confidence=0.95,
            )


class FormValidationCheck(AccessibilityCheck):
    """Check required-field and error indication (WCAG 3.3.1, 3.3.2)."""

    config_flag = "enable_form_validation"

    def targets(self):
        return self.included(
            [control for control in self.context.form_controls if self.validator.needs_label(control)]
        )

    def check(self, targets) -> None:
        """
        Issues:
            - field that looks required in its label but is not marked required
            - field marked aria-invalid without an associated error message
        """
        for control in targets:
            is_required = self.document.has_attribute(control, "required") or (
                (self.get_attribute(control, "aria-required") or "").lower() == "true"
            )
            label_text = " ".join(
                self.get_element_text(label) for label in self.inspector.labels_for(control)
            )

            if not is_required and ("*" in label_text or "required" in label_text.lower()):
                self.add_issue(
                    IssueType.FORM_VALIDATION,
                    Severity.MEDIUM,
                    element=control,
                    description="Field is shown as required but is not marked with required or aria-required",
                    confidence=0.75,
                    wcag_criteria=["3.3.2"],
                )
                continue

            invalid = (self.get_attribute(control, "aria-invalid") or "").lower() == "true"
            has_message = self.document.has_attribute(
                control, "aria-describedby"
            ) or self.document.has_attribute(control, "aria-errormessage")
            if invalid and not has_message:
                self.add_issue(
                    IssueType.FORM_VALIDATION,
                    Severity.MEDIUM,
                    element=control,
                    description="Field is marked invalid but no error message is associated with it",
                    confidence=0.85,
                    wcag_criteria=["3.3.1"],
                )


class FormFieldsetCheck(AccessibilityCheck):
    """Check that related radio buttons and checkboxes are grouped (WCAG 1.3.1)."""

    config_flag = "enable_form_validation"

    def targets(self):
        return self.included(
            [
                control
                for control in self.context.form_controls
                if (self.get_attribute(control, "type") or "").lower() in ("radio", "checkbox")
                and self.get_attribute(control, "name")
            ]
        )

    def check(self, targets) -> None:
        groups: Dict[str, List[Any]] = {}
        for control in targets:
            key = f"{(self.get_attribute(control, 'type') or '').lower()}:{self.get_attribute(control, 'name')}"
            groups.setdefault(key, []).append(control)

        for key, controls in groups.items():
            if len(controls) < 2 or any(self._is_grouped(control) for control in controls):
                continue

            control_type = key.split(":", 1)[0]
            self.add_issue(
                IssueType.SEMANTIC_MARKUP,
                Severity.LOW,
                element=controls[0],
                description=(
                    f"Related {control_type} controls named "
                    f"'{self.get_attribute(controls[0], 'name')}' are not grouped in a fieldset"
                ),
                confidence=0.8,
            )

    def _is_grouped(self, control: Any) -> bool:
        for ancestor in self.document.ancestors(control):
            if self.document.tag_name(ancestor) == "fieldset":
                return True
            role = (self.get_attribute(ancestor, "role") or "").strip().lower()
            if role in GROUPING_ROLES:
                return True
        return False
