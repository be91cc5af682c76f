# Copyright 2025 Amazon.com, Inc. or its affiliates.
# SPDX-License-Identifier: Apache-2.0

"""
Base classes for accessibility checks.

This module provides the foundation for all accessibility checks in the system.
"""

import functools
from typing import Callable, Optional

from bs4 import BeautifulSoup, Tag

from markup_accessibility.outline import Outline, build_outline, is_hidden
from markup_accessibility.utils.logging_helper import setup_logger

# Set up module-level logger
logger = setup_logger(__name__)


def safe_check(check_func):
    """
    Decorator for safely running accessibility checks.

    Catches exceptions and logs them without crashing the entire audit process.
    """

    @functools.wraps(check_func)
    def wrapper(*args, **kwargs):
        try:
            return check_func(*args, **kwargs)
        except Exception as e:
            logger.error(f"Error in {check_func.__qualname__}: {str(e)}")
            return None

    return wrapper


class AccessibilityCheck:
    """
    Base class for all accessibility checks.

    This class defines the interface that all specific checks must implement.
    """

    def __init__(self, soup: BeautifulSoup, add_issue_callback: Callable):
        """
        Initialize the accessibility check.

        Args:
            soup: BeautifulSoup object of the HTML document
            add_issue_callback: Function to call to add an issue
        """
        self.soup = soup
        self.add_issue = add_issue_callback
        self._outline: Optional[Outline] = None

    def check(self) -> None:
        """
        Perform the accessibility check.

        This method must be implemented by all subclasses.
        """
        raise NotImplementedError("Subclasses must implement check()")

    @property
    def outline(self) -> Outline:
        """Heading outline of the document, built on first use."""
        if self._outline is None:
            self._outline = build_outline(self.soup)
        return self._outline

    @property
    def document_root(self) -> Tag:
        """Element that document-level issues are reported against."""
        return self.soup.find("body") or self.soup.find("html") or self.soup

    def get_element_text(self, element: Tag) -> str:
        """
        Get the text content of an element.

        Args:
            element: BeautifulSoup Tag object

        Returns:
            Text content of the element, whitespace-normalized
        """
        if element is None:
            return ""
        return " ".join(element.get_text(" ", strip=True).split())

    def get_attribute(self, element: Tag, attribute: str) -> Optional[str]:
        """
        Get the value of an attribute on an element.

        Multi-valued attributes such as class are joined with spaces.

        Args:
            element: BeautifulSoup Tag object
            attribute: Name of the attribute

        Returns:
            Value of the attribute, or None if not present
        """
        if element is None:
            return None
        value = element.get(attribute)
        if isinstance(value, list):
            return " ".join(value)
        return value

    def is_hidden(self, element: Tag) -> bool:
        """Check whether an element is hidden from assistive technology."""
        return is_hidden(element)
