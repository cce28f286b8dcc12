# Copyright 2025 Amazon.com, Inc. or its affiliates.
# SPDX-License-Identifier: Apache-2.0

"""
Element inspection.

Turns document elements into immutable ElementInfo snapshots and answers
the per-element questions every analyzer asks: where is it, can it be seen,
can it be focused, what is its accessible name and what is behind it.
"""

import re
from typing import Any, Dict, List, Optional

from page_accessibility_utility.audit.color_contrast import RGBA, ColorContrastEvaluator
from page_accessibility_utility.dom.document import BaseDocument
from page_accessibility_utility.utils.logging_helper import setup_logger
from page_accessibility_utility.utils.report_models import ElementInfo

# Configure module-level logger
logger = setup_logger(__name__)

TEXT_SNIPPET_LENGTH = 100

NATIVELY_FOCUSABLE_TAGS = {"button", "input", "select", "textarea", "iframe", "summary"}
DISABLEABLE_TAGS = {"button", "input", "select", "textarea", "fieldset", "optgroup", "option"}

_BACKGROUND_TOKEN_RE = re.compile(r"#[0-9a-fA-F]+|(?:rgba?|hsla?)\([^)]*\)|[a-zA-Z]+")


class ElementInspector:
    """Compute normalized facts about elements of one document."""

    def __init__(
        self,
        document: BaseDocument,
        evaluator: Optional[ColorContrastEvaluator] = None,
    ):
        """
        Initialize the inspector.

        Args:
            document: Document the elements belong to
            evaluator: Color evaluator used for background resolution
        """
        self.document = document
        self.evaluator = evaluator or ColorContrastEvaluator()
        self._snapshots: Dict[int, ElementInfo] = {}

    def inspect(self, element: Any) -> ElementInfo:
        """
        Take an immutable snapshot of an element.

        Args:
            element: Document element

        Returns:
            ElementInfo for the element
        """
        key = id(element)
        if key not in self._snapshots:
            doc = self.document
            text = doc.get_text(element)
            self._snapshots[key] = ElementInfo(
                tag_name=doc.tag_name(element),
                id=doc.get_attribute(element, "id") or None,
                class_name=doc.get_attribute(element, "class") or None,
                xpath=self.xpath(element),
                text_content=text[:TEXT_SNIPPET_LENGTH],
                attributes=doc.attributes(element),
                bounding_rect=doc.bounding_rect(element),
            )
        return self._snapshots[key]

    def xpath(self, element: Any) -> str:
        """
        Build an XPath with a 1-indexed same-tag sibling predicate at each level.

        Detached elements get the path from their topmost ancestor.
        """
        doc = self.document
        steps = []
        node = element
        while node is not None:
            name = doc.tag_name(node)
            index = 1 + sum(
                1 for sibling in doc.previous_siblings(node) if doc.tag_name(sibling) == name
            )
            steps.append(f"{name}[{index}]")
            node = doc.parent(node)
        return "/" + "/".join(reversed(steps))

    def is_visible(self, element: Any) -> bool:
        """
        Check whether an element is rendered.

        An element is visible when it is attached, has a non-empty box, is not
        display:none or visibility:hidden, and no ancestor has zero opacity.
        """
        doc = self.document
        if not doc.is_attached(element):
            return False
        if not doc.bounding_rect(element).has_box:
            return False

        style = doc.computed_style(element)
        if style.get("visibility", "visible").lower() in ("hidden", "collapse"):
            return False

        for node in self._self_and_ancestors(element):
            node_style = doc.computed_style(node)
            if node_style.get("display", "").lower() == "none":
                return False
            if _parse_opacity(node_style.get("opacity")) <= 0:
                return False
        return True

    def tab_index(self, element: Any) -> Optional[int]:
        """
        Get the effective tab index.

        Returns:
            The parsed tabindex attribute, 0 for natively focusable elements,
            or None when the element takes no focus
        """
        raw = self.document.get_attribute(element, "tabindex")
        if raw is not None:
            try:
                return int(str(raw).strip())
            except ValueError:
                logger.debug("Ignoring invalid tabindex %r", raw)
        return 0 if self._natively_focusable(element) else None

    def is_focusable(self, element: Any) -> bool:
        """Check whether an element can receive focus by any means."""
        doc = self.document
        tag = doc.tag_name(element)
        if tag in DISABLEABLE_TAGS and doc.has_attribute(element, "disabled"):
            return False
        if tag == "input" and (doc.get_attribute(element, "type") or "").lower() == "hidden":
            return False
        return self.tab_index(element) is not None

    def is_in_tab_order(self, element: Any) -> bool:
        """Check whether sequential keyboard navigation reaches the element."""
        if not self.is_focusable(element):
            return False
        tab_index = self.tab_index(element)
        return tab_index is not None and tab_index >= 0 and self.is_visible(element)

    def aria_attributes(self, element: Any) -> Dict[str, str]:
        """Get the role and aria-* attributes of an element."""
        return {
            name: value
            for name, value in self.document.attributes(element).items()
            if name.startswith("aria-") or name == "role"
        }

    def accessible_name(self, element: Any) -> str:
        """
        Approximate the accessible name of an element.

        Sources are tried in order: aria-labelledby, aria-label, alt for
        images, associated labels for form controls, text content, title.
        """
        doc = self.document

        labelledby = doc.get_attribute(element, "aria-labelledby")
        if labelledby:
            referenced = [doc.get_element_by_id(ref) for ref in labelledby.split()]
            text = " ".join(doc.get_text(ref) for ref in referenced if ref is not None)
            if text.strip():
                return text.strip()

        aria_label = (doc.get_attribute(element, "aria-label") or "").strip()
        if aria_label:
            return aria_label

        tag = doc.tag_name(element)
        if tag in ("img", "area") or (
            tag == "input" and (doc.get_attribute(element, "type") or "").lower() == "image"
        ):
            alt = (doc.get_attribute(element, "alt") or "").strip()
            if alt:
                return alt

        if tag in ("input", "select", "textarea"):
            label_text = " ".join(doc.get_text(label) for label in self.labels_for(element)).strip()
            if label_text:
                return label_text
            if tag == "input" and (doc.get_attribute(element, "type") or "").lower() in (
                "submit", "button", "reset",
            ):
                value = (doc.get_attribute(element, "value") or "").strip()
                if value:
                    return value
        else:
            text = doc.get_text(element)
            if text:
                return text
            # Images inside links and buttons name their container
            for image in doc.select("img[alt]", element):
                alt = (doc.get_attribute(image, "alt") or "").strip()
                if alt:
                    return alt

        return (doc.get_attribute(element, "title") or "").strip()

    def labels_for(self, element: Any) -> List[Any]:
        """Find <label> elements associated explicitly or by nesting."""
        doc = self.document
        labels = []
        element_id = doc.get_attribute(element, "id")
        if element_id:
            labels.extend(
                label
                for label in doc.select("label")
                if doc.get_attribute(label, "for") == element_id
            )
        for ancestor in doc.ancestors(element):
            if doc.tag_name(ancestor) == "label" and not any(label is ancestor for label in labels):
                labels.append(ancestor)
                break
        return labels

    def effective_background(self, element: Any) -> RGBA:
        """
        Resolve the opaque color behind an element.

        Background layers are composited from the element outward until an
        opaque layer is reached; white shows through otherwise.
        """
        layers = []
        for node in self._self_and_ancestors(element):
            layer = self._background_layer(node)
            if layer is not None:
                layers.append(layer)
        return self.evaluator.resolve_background(layers)

    def _background_layer(self, element: Any) -> Optional[RGBA]:
        style = self.document.computed_style(element)
        value = (style.get("background-color") or "transparent").strip()
        if value.lower() != "transparent":
            return self.evaluator.parse_color(value)

        # The background shorthand may carry the color among other tokens
        for token in _BACKGROUND_TOKEN_RE.findall(style.get("background", "")):
            try:
                return self.evaluator.parse_color(token)
            except ValueError:
                continue
        return None

    def _natively_focusable(self, element: Any) -> bool:
        doc = self.document
        tag = doc.tag_name(element)
        if tag in ("a", "area"):
            return doc.has_attribute(element, "href")
        if tag in NATIVELY_FOCUSABLE_TAGS:
            return True
        editable = doc.get_attribute(element, "contenteditable")
        return editable is not None and editable.lower() in ("", "true")

    def _self_and_ancestors(self, element: Any):
        yield element
        yield from self.document.ancestors(element)


def _parse_opacity(value: Optional[str]) -> float:
    if value is None:
        return 1.0
    value = str(value).strip()
    try:
        if value.endswith("%"):
            return float(value[:-1]) / 100.0
        return float(value)
    except ValueError:
        return 1.0
