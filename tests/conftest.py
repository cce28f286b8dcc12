# Copyright 2025 Amazon.com, Inc. or its affiliates.
# SPDX-License-Identifier: Apache-2.0

import pytest

from page_accessibility_utility.audit.element_inspector import ElementInspector
from page_accessibility_utility.dom.document import HtmlDocument


@pytest.fixture
def make_document():
    """Build a document from a body fragment, with optional head content."""

    def _make(body: str = "", head: str = "", url: str = "https://example.com/page"):
        html = f"<html><head><title>Test page</title>{head}</head><body>{body}</body></html>"
        return HtmlDocument.from_html(html, url=url)

    return _make


@pytest.fixture
def make_inspector():
    def _make(document):
        return ElementInspector(document)

    return _make


@pytest.fixture
def empty_document():
    return HtmlDocument.from_html("<html><body></body></html>")
