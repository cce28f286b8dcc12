# Copyright 2025 Amazon.com, Inc. or its affiliates.
# SPDX-License-Identifier: Apache-2.0

"""
Base classes for accessibility checks.

This module provides the foundation for all accessibility checks in the system.
"""

import functools
import logging
from typing import Any, Callable, List, Optional

from page_accessibility_utility.audit.color_contrast import ColorContrastEvaluator
from page_accessibility_utility.audit.element_inspector import ElementInspector
from page_accessibility_utility.audit.structure_validator import StructureValidator
from page_accessibility_utility.dom.document import BaseDocument
from page_accessibility_utility.utils.config import AnalysisConfig
from page_accessibility_utility.utils.report_models import PageContext

# Set up module-level logger
logger = logging.getLogger(__name__)

# Elements whose text is never rendered as page text
NON_TEXT_TAGS = {"script", "style", "template", "noscript", "title", "head"}


def safe_check(check_func):
    """
    Decorator for safely running accessibility checks.

    Catches exceptions and logs them without crashing the entire analysis.
    The wrapped call returns None when the check failed.
    """

    @functools.wraps(check_func)
    def wrapper(*args, **kwargs):
        try:
            return check_func(*args, **kwargs)
        except Exception as e:
            owner = type(args[0]).__name__ if args else check_func.__name__
            logger.error(
                "Error running check %s: %s",
                owner,
                e,
                exc_info=logger.isEnabledFor(logging.DEBUG),
            )
            return None

    return wrapper


class AccessibilityCheck:
    """
    Base class for all accessibility checks.

    A check names the elements it examines in targets() and reports defects
    through the add_issue callback in check(). Checks that can be switched
    off name the AnalysisConfig flag in config_flag.
    """

    config_flag: Optional[str] = None

    def __init__(
        self,
        context: PageContext,
        add_issue_callback: Callable,
        config: AnalysisConfig,
        inspector: ElementInspector,
    ):
        """
        Initialize the accessibility check.

        Args:
            context: Shared page snapshot
            add_issue_callback: Function to call to add an issue
            config: Options of the current analysis
            inspector: Element inspector bound to the page document
        """
        self.context = context
        self.add_issue = add_issue_callback
        self.config = config
        self.inspector = inspector
        self.validator = StructureValidator(context.document, inspector)
        self.target_count: Optional[int] = None

    @property
    def document(self) -> BaseDocument:
        return self.context.document

    @property
    def evaluator(self) -> ColorContrastEvaluator:
        return self.inspector.evaluator

    @safe_check
    def run(self) -> int:
        """
        Run the check over its targets.

        Returns:
            Number of elements processed, or None if the check failed
        """
        targets = self.targets()
        self.target_count = len(targets)
        self.check(targets)
        return len(targets)

    def targets(self) -> List[Any]:
        """
        Elements this check examines.

        This method must be implemented by all subclasses.
        """
        raise NotImplementedError("Subclasses must implement targets()")

    def check(self, targets: List[Any]) -> None:
        """
        Perform the accessibility check.

        This method must be implemented by all subclasses.
        """
        raise NotImplementedError("Subclasses must implement check()")

    def find_elements(self, selector: str) -> List[Any]:
        """Find elements matching the given CSS selector."""
        return self.document.select(selector)

    def element_exists(self, selector: str) -> bool:
        """Check if at least one element matches the given CSS selector."""
        return len(self.find_elements(selector)) > 0

    def get_element_text(self, element: Any) -> str:
        """Get the text content of an element."""
        return self.document.get_text(element)

    def get_attribute(self, element: Any, attribute: str) -> Optional[str]:
        """Get the value of an attribute, or None if not present."""
        return self.document.get_attribute(element, attribute)

    def is_included(self, element: Any) -> bool:
        """Whether an element is in scope given the hidden-element option."""
        return self.config.include_hidden_elements or self.inspector.is_visible(element)

    def included(self, elements: List[Any]) -> List[Any]:
        """Filter elements down to those in scope."""
        return [element for element in elements if self.is_included(element)]

    def page_targets(self) -> List[Any]:
        """
        Target list for page-level checks.

        The body is the only target, and only when it has rendered content.
        """
        doc = self.document
        body = doc.body
        if body is None:
            return []
        has_content = doc.own_text(body) or any(
            doc.computed_style(child).get("display") != "none" for child in doc.children(body)
        )
        return [body] if has_content else []

    def text_elements(self) -> List[Any]:
        """Elements in scope that directly contain rendered text."""
        doc = self.document
        scope = doc.body or doc.root
        if scope is None:
            return []
        candidates = [scope] + doc.select("*", scope)
        return [
            element
            for element in candidates
            if doc.tag_name(element) not in NON_TEXT_TAGS
            and doc.own_text(element)
            and self.is_included(element)
        ]
