# Copyright 2025 Amazon.com, Inc. or its affiliates.
# SPDX-License-Identifier: Apache-2.0

import pytest
from bs4 import BeautifulSoup

from page_accessibility_utility.dom.document import HtmlDocument, ensure_document
from page_accessibility_utility.dom.styles import parse_declarations, to_pixels
from page_accessibility_utility.utils.logging_helper import InvalidDocumentError


@pytest.mark.parametrize(
    "value,expected",
    [
        ("12px", 12.0),
        ("12pt", 16.0),
        ("1.5em", 24.0),
        ("150%", 24.0),
        ("2rem", 32.0),
        ("large", 18.0),
        ("20", 20.0),
        ("auto", None),
        (None, None),
    ],
)
def test_to_pixels(value, expected):
    assert to_pixels(value) == expected


def test_parse_declarations_expands_font_shorthand():
    declarations = parse_declarations("color: red !important; font: bold 12px/1.5 Arial, sans-serif")

    assert declarations["color"] == "red"
    assert declarations["font-size"] == "12px"
    assert declarations["font-weight"] == "bold"


def test_computed_style_inherits_and_resolves_relative_sizes(make_document):
    document = make_document(
        '<div style="font-size: 10px"><p><span id="target">Text</span></p></div>',
        head="<style>p { color: red; font-size: 2em }</style>",
    )
    span = document.get_element_by_id("target")

    style = document.computed_style(span)
    assert style["font-size"] == "20px"
    assert style["color"] == "red"


def test_computed_style_tag_defaults(make_document):
    document = make_document("<h1>Title</h1><a href='/x'>Link</a><div hidden>Gone</div>")
    h1, link, hidden = document.select("h1, a, div")

    assert document.computed_style(h1)["font-size"] == "32px"
    assert document.computed_style(h1)["font-weight"] == "700"
    assert document.computed_style(link)["text-decoration"] == "underline"
    assert document.computed_style(hidden)["display"] == "none"


def test_computed_style_substitutes_custom_properties(make_document):
    document = make_document(
        "<p>Text</p>",
        head="<style>:root { --fg: #333333 } p { color: var(--fg) } @media print { p { color: red } }</style>",
    )

    assert document.computed_style(document.select("p")[0])["color"] == "#333333"


def test_inline_style_wins_over_stylesheet(make_document):
    document = make_document(
        '<p style="color: blue">Text</p>', head="<style>p { color: red }</style>"
    )

    assert document.computed_style(document.select("p")[0])["color"] == "blue"


def test_focus_rules_are_kept_apart(make_document):
    document = make_document(
        "<a href='/x'>Link</a>", head="<style>a:focus { outline: none }</style>"
    )
    link = document.select("a")[0]

    assert document.focus_style(link) == {"outline": "none"}
    assert "outline" not in document.computed_style(link)


def test_select_with_invalid_selector_returns_empty(make_document):
    document = make_document("<p>Text</p>")

    assert document.select("p[") == []


def test_attribute_access(make_document):
    document = make_document('<div class="a b" data-x="1">Text <!-- note --></div>')
    div = document.select("div")[0]

    assert document.get_attribute(div, "class") == "a b"
    assert document.get_attribute(div, "missing") is None
    assert document.has_attribute(div, "data-x")
    assert document.attributes(div) == {"class": "a b", "data-x": "1"}
    assert document.own_text(div) == "Text"


def test_bounding_rect_uses_explicit_dimensions(make_document):
    document = make_document(
        '<img src="a.png" width="40" height="30"><div style="width: 0">x</div><p>y</p>'
    )
    image, div, paragraph = document.select("img, div, p")

    assert document.bounding_rect(image).width == 40.0
    assert document.bounding_rect(image).height == 30.0
    assert not document.bounding_rect(div).has_box
    assert document.bounding_rect(paragraph).width is None
    assert document.bounding_rect(paragraph).has_box


def test_tree_navigation(make_document):
    document = make_document("<ul><li>One</li><li id='two'>Two</li></ul>")
    second = document.get_element_by_id("two")

    assert document.tag_name(document.parent(second)) == "ul"
    assert [document.tag_name(node) for node in document.ancestors(second)] == [
        "ul",
        "body",
        "html",
    ]
    assert document.parent(document.root) is None
    assert len(document.previous_siblings(second)) == 1
    assert document.title == "Test page"


def test_detached_element_is_not_attached(make_document):
    document = make_document("<div><span id='gone'>x</span></div>")
    span = document.get_element_by_id("gone")

    assert document.is_attached(span)
    span.extract()
    assert not document.is_attached(span)


def test_ensure_document_wraps_soup():
    soup = BeautifulSoup("<html><body><p>x</p></body></html>", "html.parser")

    document = ensure_document(soup, url="https://example.com")
    assert isinstance(document, HtmlDocument)
    assert document.url == "https://example.com"
    assert ensure_document(document) is document


@pytest.mark.parametrize("value", ["<html></html>", None, 42, {"html": "x"}])
def test_ensure_document_rejects_other_input(value):
    with pytest.raises(InvalidDocumentError):
        ensure_document(value)
