# Copyright 2025 Amazon.com, Inc. or its affiliates.
# SPDX-License-Identifier: Apache-2.0

"""
Computed style resolution for static HTML.

Styles are collected from <style> blocks in document order and from inline
style attributes, which win. Selector specificity is not modelled. Inherited
properties flow from parent to child, var() references are substituted and
font sizes are resolved to pixels.
"""

import re
from typing import Dict, Iterator, List, Optional, Tuple

from bs4 import BeautifulSoup, Tag
from soupsieve import SelectorSyntaxError

from page_accessibility_utility.utils.logging_helper import setup_logger

# Configure module-level logger
logger = setup_logger(__name__)

ROOT_FONT_SIZE = 16.0

INHERITED_PROPERTIES = ("color", "font-size", "font-weight", "font-style", "visibility")

ROOT_DEFAULTS = {
    "color": "#000000",
    "font-size": "16px",
    "font-weight": "400",
    "font-style": "normal",
    "visibility": "visible",
}

HIDDEN_TAGS = {
    "head", "script", "style", "template", "title", "meta", "link", "noscript", "base",
}

INLINE_TAGS = {
    "a", "abbr", "b", "bdi", "bdo", "br", "cite", "code", "data", "dfn", "em", "i",
    "kbd", "label", "mark", "q", "s", "samp", "small", "span", "strong", "sub", "sup",
    "time", "u", "var", "img", "input", "select", "textarea", "button", "svg",
}

TAG_FONT_SCALE = {
    "h1": 2.0, "h2": 1.5, "h3": 1.17, "h4": 1.0, "h5": 0.83, "h6": 0.67, "small": 0.83,
}

BOLD_TAGS = {"h1", "h2", "h3", "h4", "h5", "h6", "b", "strong", "th"}

UNDERLINED_TAGS = {"a", "u", "ins"}

FONT_SIZE_KEYWORDS = {
    "xx-small": 9.0,
    "x-small": 10.0,
    "small": 13.0,
    "medium": 16.0,
    "large": 18.0,
    "x-large": 24.0,
    "xx-large": 32.0,
    "xxx-large": 48.0,
}

FONT_WEIGHT_KEYWORDS = {"normal": "400", "bold": "700", "bolder": "700", "lighter": "300"}

_COMMENT_RE = re.compile(r"/\*.*?\*/", re.S)
_LENGTH_RE = re.compile(r"^(-?\d*\.?\d+)(px|pt|em|rem|%)?$")
_FONT_SIZE_TOKEN_RE = re.compile(r"(\d*\.?\d+(?:px|pt|em|rem|%))")
_FOCUS_PSEUDO_RE = re.compile(r":focus(-visible|-within)?")
_VAR_RE = re.compile(r"var\(\s*(--[\w-]+)\s*(?:,\s*([^)]*))?\)")


def parse_declarations(text: str) -> Dict[str, str]:
    """
    Parse a CSS declaration block into a property map.

    Args:
        text: Declarations such as "color: red; font-size: 12px"

    Returns:
        Dictionary of lower-cased property names to values
    """
    declarations = {}
    for part in (text or "").split(";"):
        if ":" not in part:
            continue
        name, value = part.split(":", 1)
        name = name.strip().lower()
        value = value.replace("!important", "").strip()
        if name and value:
            declarations[name] = value

    # The font shorthand only contributes size and weight
    if "font" in declarations:
        font_value = declarations["font"].lower()
        size_match = _FONT_SIZE_TOKEN_RE.search(font_value)
        if size_match and "font-size" not in declarations:
            declarations["font-size"] = size_match.group(1)
        for token in font_value.split():
            if token in ("bold", "bolder", "lighter") or re.fullmatch(r"[1-9]00", token):
                declarations.setdefault("font-weight", token)
                break
    return declarations


def iter_css_rules(css: str) -> Iterator[Tuple[str, Dict[str, str]]]:
    """
    Yield (selector, declarations) pairs from a stylesheet.

    At-rule blocks such as @media and @font-face are skipped.
    """
    css = _COMMENT_RE.sub("", css or "")
    position = 0
    length = len(css)

    while position < length:
        open_brace = css.find("{", position)
        if open_brace == -1:
            break

        # Statements like @import end with ';' before the next selector
        prelude = css[position:open_brace].split(";")[-1].strip()

        depth = 1
        cursor = open_brace + 1
        while cursor < length and depth:
            if css[cursor] == "{":
                depth += 1
            elif css[cursor] == "}":
                depth -= 1
            cursor += 1

        body = css[open_brace + 1 : cursor - 1]
        position = cursor

        if not prelude or prelude.startswith("@"):
            continue

        declarations = parse_declarations(body)
        for selector in prelude.split(","):
            selector = selector.strip()
            if selector:
                yield selector, declarations


def to_pixels(
    value: Optional[str], parent_px: float = ROOT_FONT_SIZE, root_px: float = ROOT_FONT_SIZE
) -> Optional[float]:
    """
    Convert a CSS length to pixels.

    Args:
        value: CSS length such as "12pt", "1.5em", "120%" or "24"
        parent_px: Font size of the parent, used for em and % units
        root_px: Font size of the root element, used for rem units

    Returns:
        The length in pixels, or None if the value is not a length
    """
    if value is None:
        return None

    value = str(value).strip().lower()
    if value in FONT_SIZE_KEYWORDS:
        return FONT_SIZE_KEYWORDS[value]
    if value == "smaller":
        return parent_px * 0.83
    if value == "larger":
        return parent_px * 1.2

    match = _LENGTH_RE.match(value)
    if not match:
        return None

    number = float(match.group(1))
    unit = match.group(2) or "px"
    if unit == "px":
        return number
    if unit == "pt":
        return number * 4.0 / 3.0
    if unit == "em":
        return number * parent_px
    if unit == "rem":
        return number * root_px
    return number * parent_px / 100.0


def normalize_font_weight(value: str) -> str:
    """Convert keyword font weights to their numeric form."""
    value = str(value).strip().lower()
    return FONT_WEIGHT_KEYWORDS.get(value, value)


class StyleResolver:
    """
    Resolve declared and computed styles for the elements of one soup.

    Results are cached until refresh() is called.
    """

    def __init__(self, soup: BeautifulSoup):
        self.soup = soup
        self._declared: Dict[int, Dict[str, str]] = {}
        self._focus_declared: Dict[int, Dict[str, str]] = {}
        self._computed: Dict[int, Dict[str, str]] = {}
        self._stylesheets_applied = False

    def refresh(self) -> None:
        """Drop cached styles so that the next lookup re-reads the tree."""
        self._declared = {}
        self._focus_declared = {}
        self._computed = {}
        self._stylesheets_applied = False

    def _apply_stylesheets(self) -> None:
        if self._stylesheets_applied:
            return
        self._stylesheets_applied = True

        for style_tag in self.soup.find_all("style"):
            for selector, declarations in iter_css_rules(style_tag.string or style_tag.get_text()):
                target = self._declared
                if _FOCUS_PSEUDO_RE.search(selector):
                    target = self._focus_declared
                    selector = _FOCUS_PSEUDO_RE.sub("", selector).strip() or "*"

                for element in self._select(selector):
                    target.setdefault(id(element), {}).update(declarations)

    def _select(self, selector: str) -> List[Tag]:
        try:
            return self.soup.select(selector)
        except (SelectorSyntaxError, NotImplementedError, ValueError) as e:
            logger.debug("Ignoring unsupported selector '%s': %s", selector, e)
            return []

    def declared_style(self, element: Tag) -> Dict[str, str]:
        """
        Get the styles declared for an element by stylesheets and its style attribute.

        Args:
            element: BeautifulSoup Tag object

        Returns:
            Property map, inline declarations last
        """
        self._apply_stylesheets()
        declared = dict(self._declared.get(id(element), {}))
        declared.update(parse_declarations(element.get("style", "")))
        return declared

    def focus_style(self, element: Tag) -> Dict[str, str]:
        """Get declarations that apply to an element while it has focus."""
        self._apply_stylesheets()
        return dict(self._focus_declared.get(id(element), {}))

    def computed_style(self, element: Tag) -> Dict[str, str]:
        """
        Get the computed style of an element.

        Font sizes are resolved to pixels and inherited properties are
        filled in from the ancestor chain.
        """
        chain = []
        node = element
        while isinstance(node, Tag) and not isinstance(node, BeautifulSoup):
            if id(node) in self._computed:
                break
            chain.append(node)
            node = node.parent

        parent_style = self._computed.get(id(node), ROOT_DEFAULTS) if isinstance(node, Tag) else ROOT_DEFAULTS
        for current in reversed(chain):
            parent_style = self._compute(current, parent_style)
            self._computed[id(current)] = parent_style

        return dict(self._computed.get(id(element), parent_style))

    def _compute(self, element: Tag, parent_style: Dict[str, str]) -> Dict[str, str]:
        name = element.name.lower()
        parent_px = to_pixels(parent_style.get("font-size")) or ROOT_FONT_SIZE

        style = {prop: parent_style.get(prop, ROOT_DEFAULTS[prop]) for prop in INHERITED_PROPERTIES}
        # Custom properties are inherited
        style.update({prop: value for prop, value in parent_style.items() if prop.startswith("--")})
        style["display"] = "inline" if name in INLINE_TAGS else "block"
        style["opacity"] = "1"
        style["background-color"] = "transparent"
        style["text-decoration"] = "underline" if name in UNDERLINED_TAGS else "none"

        if name in HIDDEN_TAGS or element.has_attr("hidden"):
            style["display"] = "none"
        if name == "input" and str(element.get("type", "")).lower() == "hidden":
            style["display"] = "none"
        if name in TAG_FONT_SCALE:
            style["font-size"] = f"{parent_px * TAG_FONT_SCALE[name]:g}px"
        if name in BOLD_TAGS:
            style["font-weight"] = "700"

        declared = self.declared_style(element)
        for prop, value in declared.items():
            if prop.startswith("--"):
                style[prop] = value

        for prop, value in declared.items():
            if prop.startswith("--"):
                continue
            value = _substitute_variables(value, style)
            if not value:
                continue
            keyword = value.lower()
            if keyword == "inherit":
                value = parent_style.get(prop, value)
            elif keyword in ("initial", "unset"):
                if prop in ROOT_DEFAULTS and (keyword == "initial" or prop not in INHERITED_PROPERTIES):
                    style[prop] = ROOT_DEFAULTS[prop]
                continue
            elif keyword == "currentcolor":
                value = parent_style["color"] if prop == "color" else style["color"]
            elif prop == "text-decoration-line":
                prop = "text-decoration"
            style[prop] = value

        font_px = to_pixels(style["font-size"], parent_px)
        if font_px is not None:
            style["font-size"] = f"{font_px:g}px"
        else:
            style["font-size"] = parent_style.get("font-size", ROOT_DEFAULTS["font-size"])
        style["font-weight"] = normalize_font_weight(style["font-weight"])

        return style


def _substitute_variables(value: str, style: Dict[str, str]) -> str:
    """Replace var(--name, fallback) references with custom property values."""
    for _ in range(5):
        if "var(" not in value:
            break
        value = _VAR_RE.sub(
            lambda match: style.get(match.group(1)) or (match.group(2) or "").strip(),
            value,
        )
    return value
