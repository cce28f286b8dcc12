# Copyright 2025 Amazon.com, Inc. or its affiliates.
# SPDX-License-Identifier: Apache-2.0

"""
DOM analysis.

Builds the PageContext snapshot and the structural summary (heading tree,
landmarks, focusable elements, semantic flags) that the analyzers share.
Element collections are queried once per scan and reused.
"""

import time
from typing import Any, List, Optional, Tuple

from page_accessibility_utility.audit.color_contrast import ColorContrastEvaluator
from page_accessibility_utility.audit.element_inspector import ElementInspector
from page_accessibility_utility.audit.standards import (
    IMPLICIT_ROLES,
    LANDMARK_ROLES,
    SECTIONING_TAGS,
)
from page_accessibility_utility.dom.document import BaseDocument
from page_accessibility_utility.utils.config import resolve_analysis_config
from page_accessibility_utility.utils.logging_helper import log_exception, setup_logger
from page_accessibility_utility.utils.report_models import (
    DOMAnalysisResult,
    FocusableElementInfo,
    HeadingInfo,
    LandmarkInfo,
    PageContext,
    ScanMetrics,
    SemanticStructure,
)

# Configure module-level logger
logger = setup_logger(__name__)

INTERACTIVE_SELECTOR = (
    'a[href], button, input, select, textarea, [onclick], [onkeydown], [onkeyup], '
    '[tabindex]:not([tabindex="-1"]), [role="button"], [role="link"], [role="menuitem"], '
    '[contenteditable="true"]'
)
HEADING_SELECTOR = 'h1, h2, h3, h4, h5, h6, [role="heading"]'
LANDMARK_SELECTOR = "main, nav, header, footer, aside, section, [role]"
FOCUSABLE_SELECTOR = (
    "a[href], area[href], button, input, select, textarea, iframe, summary, "
    "[tabindex], [contenteditable]"
)
FORM_CONTROL_SELECTOR = "input, select, textarea"
SKIP_LINK_WORDS = ("skip", "jump")


def get_heading_level(document: BaseDocument, element: Any) -> Optional[int]:
    """
    Get the level of a heading element.

    Returns:
        1-6 for <h1>-<h6>, aria-level (default 2) for role="heading",
        or None for anything else
    """
    tag = document.tag_name(element)
    if len(tag) == 2 and tag[0] == "h" and tag[1] in "123456":
        return int(tag[1])

    if (document.get_attribute(element, "role") or "").strip().lower() == "heading":
        try:
            level = int(document.get_attribute(element, "aria-level") or 2)
        except ValueError:
            level = 2
        return min(max(level, 1), 6)
    return None


def get_landmark_role(document: BaseDocument, element: Any) -> Optional[str]:
    """
    Get the landmark role of an element, explicit or implied by its tag.

    header and footer only map to banner and contentinfo when they are not
    nested inside a sectioning element.
    """
    explicit = (document.get_attribute(element, "role") or "").strip().lower().split()
    if explicit:
        return explicit[0] if explicit[0] in LANDMARK_ROLES else None

    tag = document.tag_name(element)
    role = IMPLICIT_ROLES.get(tag)
    if role not in LANDMARK_ROLES:
        return None
    # An unnamed section is not a region landmark
    if tag == "section" and not (
        document.get_attribute(element, "aria-label")
        or document.get_attribute(element, "aria-labelledby")
    ):
        return None
    if tag in ("header", "footer") and any(
        document.tag_name(ancestor) in SECTIONING_TAGS for ancestor in document.ancestors(element)
    ):
        return None
    return role


def is_skip_link(document: BaseDocument, element: Any) -> bool:
    """Check whether a link lets keyboard users bypass repeated content."""
    href = document.get_attribute(element, "href") or ""
    class_name = (document.get_attribute(element, "class") or "").lower()
    if not href.startswith("#") and "skip" not in class_name:
        return False
    text = document.get_text(element).lower()
    return any(word in text for word in SKIP_LINK_WORDS) or "skip" in class_name


def collect_landmarks(
    document: BaseDocument, inspector: ElementInspector
) -> List[Tuple[Any, LandmarkInfo]]:
    """
    Collect landmark regions in document order.

    Returns:
        (element, LandmarkInfo) pairs
    """
    landmarks = []
    for element in document.select(LANDMARK_SELECTOR):
        role = get_landmark_role(document, element)
        if role is None:
            continue

        label = (document.get_attribute(element, "aria-label") or "").strip()
        if not label and document.get_attribute(element, "aria-labelledby"):
            label = inspector.accessible_name(element)
        info = LandmarkInfo(
            element=inspector.inspect(element),
            role=role,
            label=label or None,
            is_implicit=not document.has_attribute(element, "role"),
        )
        landmarks.append((element, info))
    return landmarks


class DOMAnalyzer:
    """Build the shared page snapshot and structural summary."""

    def __init__(self, evaluator: Optional[ColorContrastEvaluator] = None):
        self.evaluator = evaluator or ColorContrastEvaluator()
        self.metrics = ScanMetrics()

    def analyze_page(self, document: BaseDocument, options: Any = None) -> DOMAnalysisResult:
        """
        Analyze the structure of a document.

        Args:
            document: Document to analyze
            options: AnalysisConfig or options dictionary

        Returns:
            DOMAnalysisResult; an empty result with succeeded=False if the
            tree could not be traversed
        """
        config = resolve_analysis_config(options)
        start = time.perf_counter()

        try:
            document.refresh()
            inspector = ElementInspector(document, self.evaluator)
            context = self.create_page_context(document)

            landmarks = [info for _, info in collect_landmarks(document, inspector)]
            result = DOMAnalysisResult(
                page_context=context,
                heading_structure=self._build_heading_structure(context, inspector),
                heading_count=len(context.headings),
                landmarks=landmarks,
                focusable_elements=self._collect_focusable(document, inspector),
                semantic_structure=self._semantic_structure(document, landmarks),
                element_count=len(document.select("*")),
            )
        except Exception as e:
            log_exception(logger, e, "DOM analysis failed")
            result = DOMAnalysisResult.empty(PageContext(url=getattr(document, "url", ""), document=document))

        elapsed = (time.perf_counter() - start) * 1000
        result.analysis_time = elapsed
        if self.metrics.record(elapsed, config.dom_time_budget):
            logger.warning(
                "DOM analysis took %.2fms, exceeding target %.2fms",
                elapsed,
                config.dom_time_budget,
            )
        logger.debug(
            "DOM analysis finished in %.2fms (average %.2fms)",
            elapsed,
            self.metrics.average_scan_time,
        )
        return result

    def create_page_context(self, document: BaseDocument) -> PageContext:
        """Query the element collections once and snapshot them."""
        headings = [
            element
            for element in document.select(HEADING_SELECTOR)
            if get_heading_level(document, element) is not None
        ]
        return PageContext(
            url=document.url,
            title=document.title,
            document=document,
            viewport=document.viewport,
            interactive_elements=document.select(INTERACTIVE_SELECTOR),
            images=document.select("img"),
            forms=document.select("form"),
            headings=headings,
            links=document.select("a[href]"),
            form_controls=document.select(FORM_CONTROL_SELECTOR),
        )

    def _build_heading_structure(
        self, context: PageContext, inspector: ElementInspector
    ) -> List[HeadingInfo]:
        """Nest headings by level order, not by DOM nesting."""
        document = context.document
        roots: List[HeadingInfo] = []
        stack: List[HeadingInfo] = []

        for element in context.headings:
            info = HeadingInfo(
                element=inspector.inspect(element),
                level=get_heading_level(document, element),
                text=document.get_text(element),
            )
            while stack and stack[-1].level >= info.level:
                stack.pop()
            if stack:
                stack[-1].children.append(info)
            else:
                roots.append(info)
            stack.append(info)

        return roots

    def _collect_focusable(
        self, document: BaseDocument, inspector: ElementInspector
    ) -> List[FocusableElementInfo]:
        """Collect focusable elements in sequential navigation order."""
        positive, natural, removed = [], [], []
        for element in document.select(FOCUSABLE_SELECTOR):
            if not inspector.is_focusable(element):
                continue
            tab_index = inspector.tab_index(element)
            info = FocusableElementInfo(
                element=inspector.inspect(element),
                tab_index=tab_index,
                in_tab_order=inspector.is_in_tab_order(element),
            )
            if tab_index > 0:
                positive.append(info)
            elif tab_index == 0:
                natural.append(info)
            else:
                removed.append(info)

        positive.sort(key=lambda info: info.tab_index)
        return positive + natural + removed

    def _semantic_structure(
        self, document: BaseDocument, landmarks: List[LandmarkInfo]
    ) -> SemanticStructure:
        roles = {landmark.role for landmark in landmarks}
        return SemanticStructure(
            has_main="main" in roles,
            has_navigation="navigation" in roles,
            has_header="banner" in roles,
            has_footer="contentinfo" in roles,
            has_aside="complementary" in roles,
            has_skip_links=any(
                is_skip_link(document, link) for link in document.select("a[href]")
            ),
        )
