# Copyright 2025 Amazon.com, Inc. or its affiliates.
# SPDX-License-Identifier: Apache-2.0

"""
Document abstraction consumed by the analysis pipeline.

Analyzers never touch a parser API directly. They query elements, styles,
attributes, geometry and tree relations through a BaseDocument, which makes
it the single interface another host has to implement or mock.
"""

from typing import Any, Dict, Iterator, List, Optional

from bs4 import BeautifulSoup, NavigableString, Tag
from soupsieve import SelectorSyntaxError

from page_accessibility_utility.dom.styles import StyleResolver, to_pixels
from page_accessibility_utility.utils.logging_helper import InvalidDocumentError, setup_logger
from page_accessibility_utility.utils.report_models import BoundingRect, ViewportInfo

# Configure module-level logger
logger = setup_logger(__name__)


class BaseDocument:
    """
    Interface for a tree-shaped document.

    Elements are opaque handles created by the implementation.
    """

    url: str = ""
    viewport: ViewportInfo = ViewportInfo()

    @property
    def root(self) -> Optional[Any]:
        """The document element."""
        raise NotImplementedError("Subclasses must implement root")

    @property
    def body(self) -> Optional[Any]:
        """The body element, if any."""
        raise NotImplementedError("Subclasses must implement body")

    @property
    def title(self) -> str:
        """The document title."""
        raise NotImplementedError("Subclasses must implement title")

    def select(self, selector: str, scope: Any = None) -> List[Any]:
        """Find elements matching a CSS selector in document order."""
        raise NotImplementedError("Subclasses must implement select()")

    def get_element_by_id(self, element_id: str) -> Optional[Any]:
        """Find the element with the given id."""
        raise NotImplementedError("Subclasses must implement get_element_by_id()")

    def tag_name(self, element: Any) -> str:
        """Lower-case tag name of an element."""
        raise NotImplementedError("Subclasses must implement tag_name()")

    def get_attribute(self, element: Any, name: str) -> Optional[str]:
        """Attribute value, or None if the attribute is absent."""
        raise NotImplementedError("Subclasses must implement get_attribute()")

    def attributes(self, element: Any) -> Dict[str, str]:
        """All attributes of an element."""
        raise NotImplementedError("Subclasses must implement attributes()")

    def get_text(self, element: Any) -> str:
        """Whitespace-normalized text content of an element."""
        raise NotImplementedError("Subclasses must implement get_text()")

    def own_text(self, element: Any) -> str:
        """Text of the element's direct text children only."""
        raise NotImplementedError("Subclasses must implement own_text()")

    def computed_style(self, element: Any) -> Dict[str, str]:
        """Computed style properties of an element."""
        raise NotImplementedError("Subclasses must implement computed_style()")

    def focus_style(self, element: Any) -> Dict[str, str]:
        """Style declarations that apply while the element has focus."""
        return {}

    def bounding_rect(self, element: Any) -> BoundingRect:
        """Geometry of an element."""
        raise NotImplementedError("Subclasses must implement bounding_rect()")

    def parent(self, element: Any) -> Optional[Any]:
        """Parent element, or None at the root or for detached elements."""
        raise NotImplementedError("Subclasses must implement parent()")

    def children(self, element: Any) -> List[Any]:
        """Child elements in document order."""
        raise NotImplementedError("Subclasses must implement children()")

    def previous_siblings(self, element: Any) -> List[Any]:
        """Preceding sibling elements, nearest first."""
        raise NotImplementedError("Subclasses must implement previous_siblings()")

    def is_attached(self, element: Any) -> bool:
        """Whether the element is still part of this document."""
        raise NotImplementedError("Subclasses must implement is_attached()")

    def refresh(self) -> None:
        """Drop any cached derived state before a new scan."""

    def has_attribute(self, element: Any, name: str) -> bool:
        """Whether the element carries the attribute."""
        return self.get_attribute(element, name) is not None

    def ancestors(self, element: Any) -> Iterator[Any]:
        """Yield ancestor elements from the parent up to the root."""
        node = self.parent(element)
        while node is not None:
            yield node
            node = self.parent(node)


class HtmlDocument(BaseDocument):
    """BaseDocument backed by a BeautifulSoup tree."""

    def __init__(
        self,
        soup: BeautifulSoup,
        url: str = "",
        viewport: Optional[ViewportInfo] = None,
    ):
        """
        Initialize the document.

        Args:
            soup: Parsed HTML tree
            url: URL the page was loaded from
            viewport: Viewport the page is rendered in
        """
        self.soup = soup
        self.url = url
        self.viewport = viewport or ViewportInfo()
        self.styles = StyleResolver(soup)

    @classmethod
    def from_html(cls, html_content: str, url: str = "", **kwargs) -> "HtmlDocument":
        """Parse an HTML string into a document."""
        return cls(BeautifulSoup(html_content, "html.parser"), url=url, **kwargs)

    @property
    def root(self) -> Optional[Tag]:
        return self.soup.find("html") or next(
            (child for child in self.soup.children if isinstance(child, Tag)), None
        )

    @property
    def body(self) -> Optional[Tag]:
        return self.soup.find("body")

    @property
    def title(self) -> str:
        title_tag = self.soup.find("title")
        return title_tag.get_text(strip=True) if title_tag else ""

    def select(self, selector: str, scope: Optional[Tag] = None) -> List[Tag]:
        try:
            return (scope or self.soup).select(selector)
        except (SelectorSyntaxError, NotImplementedError, ValueError) as e:
            logger.error("Error finding elements with selector '%s': %s", selector, e)
            return []

    def get_element_by_id(self, element_id: str) -> Optional[Tag]:
        if not element_id:
            return None
        return self.soup.find(id=element_id)

    def tag_name(self, element: Tag) -> str:
        return (element.name or "").lower()

    def get_attribute(self, element: Tag, name: str) -> Optional[str]:
        value = element.get(name)
        if isinstance(value, list):
            # Multi-valued attributes such as class come back as lists
            return " ".join(value)
        return value

    def attributes(self, element: Tag) -> Dict[str, str]:
        return {
            name: " ".join(value) if isinstance(value, list) else str(value)
            for name, value in element.attrs.items()
        }

    def get_text(self, element: Tag) -> str:
        return " ".join(element.get_text(" ", strip=True).split())

    def own_text(self, element: Tag) -> str:
        # Comments, CDATA and script/style payloads are NavigableString subclasses
        parts = [str(child) for child in element.children if type(child) is NavigableString]
        return " ".join("".join(parts).split())

    def computed_style(self, element: Tag) -> Dict[str, str]:
        return self.styles.computed_style(element)

    def focus_style(self, element: Tag) -> Dict[str, str]:
        return self.styles.focus_style(element)

    def bounding_rect(self, element: Tag) -> BoundingRect:
        """
        Geometry from explicit width/height attributes or pixel styles.

        There is no layout engine, so unknown dimensions stay None.
        """
        declared = self.styles.declared_style(element)
        dimensions = {}
        for axis in ("width", "height"):
            value = declared.get(axis)
            if value is None or value.strip().endswith("%") or value.strip() == "auto":
                value = self.get_attribute(element, axis)
            pixels = to_pixels(value) if value is not None else None
            dimensions[axis] = pixels
        return BoundingRect(width=dimensions["width"], height=dimensions["height"])

    def parent(self, element: Tag) -> Optional[Tag]:
        node = element.parent
        if node is None or isinstance(node, BeautifulSoup):
            return None
        return node

    def children(self, element: Tag) -> List[Tag]:
        return [child for child in element.children if isinstance(child, Tag)]

    def previous_siblings(self, element: Tag) -> List[Tag]:
        return [sibling for sibling in element.previous_siblings if isinstance(sibling, Tag)]

    def is_attached(self, element: Tag) -> bool:
        node = element
        while node.parent is not None:
            node = node.parent
        return node is self.soup

    def refresh(self) -> None:
        self.styles.refresh()


def ensure_document(document: Any, url: str = "") -> BaseDocument:
    """
    Accept a BaseDocument or a parsed BeautifulSoup tree.

    Raises:
        InvalidDocumentError: For anything else
    """
    if isinstance(document, BaseDocument):
        return document
    if isinstance(document, BeautifulSoup):
        return HtmlDocument(document, url=url)
    raise InvalidDocumentError(
        f"Expected a document or BeautifulSoup tree, got {type(document).__name__}"
    )
