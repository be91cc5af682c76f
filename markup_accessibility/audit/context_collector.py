# Copyright 2025 Amazon.com, Inc. or its affiliates.
# SPDX-License-Identifier: Apache-2.0

"""
Context collector for accessibility issues.

This module provides functionality for collecting context information around accessibility issues.
"""

from typing import Dict, Any

from bs4 import Tag

from markup_accessibility.parser import source_span
from markup_accessibility.utils.logging_helper import setup_logger

# Set up module-level logger
logger = setup_logger(__name__)

# Snippets are cut to keep reports readable
MAX_SNIPPET_LENGTH = 500


class ContextCollector:
    """Class for collecting context information around an element."""

    def __init__(self, element: Tag):
        """
        Initialize the context collector.

        Args:
            element: The HTML element to collect context for.
        """
        self.element = element

    def collect(self) -> Dict[str, Any]:
        """
        Collect context information around the element.

        Returns:
            Dictionary containing context information.
        """
        if not isinstance(self.element, Tag):
            return {"error": "Invalid element"}

        context = {
            "element_name": self.element.name,
            "attributes": _plain_attributes(self.element),
            "text_content": self.element.get_text(" ", strip=True)[:MAX_SNIPPET_LENGTH],
            "html_snippet": str(self.element)[:MAX_SNIPPET_LENGTH],
        }

        parent = self.element.parent
        if isinstance(parent, Tag) and parent.name != "[document]":
            context["parent"] = {
                "element_name": parent.name,
                "attributes": _plain_attributes(parent),
            }

        span = source_span(self.element)
        if span:
            context["source"] = span.to_dict()

        context["position"] = self._get_position()
        return context

    def _get_position(self) -> Dict[str, int]:
        """
        Get the index of the element among elements of the same tag.

        Returns:
            Dictionary with 'index' (0-based) and 'total'.
        """
        previous = self.element.find_all_previous(self.element.name)
        following = self.element.find_all_next(self.element.name)
        return {
            "index": len(previous),
            "total": len(previous) + 1 + len(following),
        }


def _plain_attributes(element: Tag) -> Dict[str, str]:
    # Multi-valued attributes (class, rel) come back as lists
    return {
        name: " ".join(value) if isinstance(value, list) else value
        for name, value in element.attrs.items()
    }
