# Copyright 2025 Amazon.com, Inc. or its affiliates.
# SPDX-License-Identifier: Apache-2.0

"""
Document access for the analysis pipeline.
"""

from page_accessibility_utility.dom.document import BaseDocument, HtmlDocument, ensure_document
from page_accessibility_utility.dom.styles import StyleResolver

__all__ = ["BaseDocument", "HtmlDocument", "ensure_document", "StyleResolver"]
