# Copyright 2025 Amazon.com, Inc. or its affiliates.
# SPDX-License-Identifier: Apache-2.0

"""
Structural rules for headings, landmarks and form labels.

The validator reports violations as StructureViolation records that refer
back to positions in the sequences it was given; checks turn them into
issues on the corresponding elements.
"""

from collections import Counter
from typing import Any, List, Optional, Sequence

from page_accessibility_utility.audit.element_inspector import ElementInspector
from page_accessibility_utility.audit.standards import UNIQUELY_LABELED_ROLES
from page_accessibility_utility.dom.document import BaseDocument
from page_accessibility_utility.utils.report_models import LandmarkInfo, StructureViolation

# Form controls that need a label
LABELABLE_SELECTOR = "input, select, textarea"
UNLABELED_INPUT_TYPES = {"hidden", "submit", "button", "reset", "image"}


class StructureValidator:
    """Validate heading sequences, landmark sets and form-label association."""

    def __init__(self, document: BaseDocument, inspector: Optional[ElementInspector] = None):
        self.document = document
        self.inspector = inspector or ElementInspector(document)

    def validate_heading_sequence(self, levels: Sequence[int]) -> List[StructureViolation]:
        """
        Validate heading levels in document order.

        The first heading must be level 1 and no heading may be more than one
        level deeper than the heading before it. Returning to a shallower
        level is always allowed.

        Args:
            levels: Heading levels (1-6) in document order

        Returns:
            One violation per offending heading
        """
        violations = []
        previous = None
        for index, level in enumerate(levels):
            if previous is None:
                if level != 1:
                    violations.append(
                        StructureViolation(
                            rule="first-heading-not-h1",
                            message=f"First heading is H{level}; the page should start with an H1",
                            index=index,
                            level=level,
                        )
                    )
            elif level > previous + 1:
                violations.append(
                    StructureViolation(
                        rule="skipped-heading-level",
                        message=f"Heading level skipped from H{previous} to H{level}",
                        index=index,
                        level=level,
                        previous_level=previous,
                    )
                )
            previous = level
        return violations

    def validate_landmarks(self, landmarks: Sequence[LandmarkInfo]) -> List[StructureViolation]:
        """
        Validate the set of landmark regions of a page.

        A page needs exactly one main region. Navigation, banner and
        contentinfo regions that occur more than once need distinct labels.

        Args:
            landmarks: Landmarks in document order

        Returns:
            Violations; index is None for page-level violations
        """
        violations = []

        main_indexes = [i for i, landmark in enumerate(landmarks) if landmark.role == "main"]
        if not main_indexes:
            violations.append(
                StructureViolation(
                    rule="missing-main",
                    message="Page has no main landmark",
                    role="main",
                )
            )
        for index in main_indexes[1:]:
            violations.append(
                StructureViolation(
                    rule="multiple-main",
                    message=f"Page has {len(main_indexes)} main landmarks; only one is allowed",
                    index=index,
                    role="main",
                )
            )

        for role in UNIQUELY_LABELED_ROLES:
            indexes = [i for i, landmark in enumerate(landmarks) if landmark.role == role]
            if len(indexes) < 2:
                continue

            labels = Counter(
                (landmarks[i].label or "").strip().lower() for i in indexes
            )
            for index in indexes:
                label = (landmarks[index].label or "").strip().lower()
                if not label:
                    message = f"Multiple {role} landmarks exist and this one has no label"
                elif labels[label] > 1:
                    message = f"Multiple {role} landmarks share the label '{landmarks[index].label}'"
                else:
                    continue
                violations.append(
                    StructureViolation(
                        rule="unlabeled-duplicate-landmark",
                        message=message,
                        index=index,
                        role=role,
                    )
                )

        return violations

    def needs_label(self, control: Any) -> bool:
        """Check whether a form control is one that must carry a label."""
        doc = self.document
        tag = doc.tag_name(control)
        if tag not in ("input", "select", "textarea"):
            return False
        if tag == "input":
            input_type = (doc.get_attribute(control, "type") or "text").lower()
            return input_type not in UNLABELED_INPUT_TYPES
        return True

    def has_associated_label(self, control: Any) -> bool:
        """
        Check whether a form control has a label.

        Accepted associations are an explicit <label for>, a wrapping
        <label>, aria-label and aria-labelledby.
        """
        doc = self.document
        if (doc.get_attribute(control, "aria-label") or "").strip():
            return True
        if (doc.get_attribute(control, "aria-labelledby") or "").strip():
            return True
        return len(self.inspector.labels_for(control)) > 0

    def validate_form_controls(self, controls: Sequence[Any]) -> List[StructureViolation]:
        """
        Validate label association for form controls.

        Args:
            controls: Form controls in document order

        Returns:
            One violation per control that needs a label and has none
        """
        violations = []
        for index, control in enumerate(controls):
            if not self.needs_label(control) or self.has_associated_label(control):
                continue
            violations.append(
                StructureViolation(
                    rule="missing-label",
                    message=f"Form control <{self.document.tag_name(control)}> has no associated label",
                    index=index,
                )
            )
        return violations
