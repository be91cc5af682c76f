# Copyright 2025 Amazon.com, Inc. or its affiliates.
# SPDX-License-Identifier: Apache-2.0

"""
Link accessibility remediation strategies.

This module provides remediation strategies for link-related accessibility issues.
"""

from typing import Dict, Any, Optional

from bs4 import BeautifulSoup, Tag

from markup_accessibility.audit.checks.link_checks import NEW_WINDOW_PHRASES, link_name
from markup_accessibility.remediate.remediation_strategies.markup_helpers import (
    ensure_style,
    text_from_filename,
    text_from_href,
)
from markup_accessibility.utils.logging_helper import setup_logger

# Set up module-level logger
logger = setup_logger(__name__)

NEW_WINDOW_TEXT = " (opens in a new window)"

VISUALLY_HIDDEN_CSS = """
.visually-hidden {
    position: absolute;
    width: 1px;
    height: 1px;
    overflow: hidden;
    clip: rect(0 0 0 0);
    white-space: nowrap;
}
"""


def remediate_empty_link_text(
    soup: BeautifulSoup,
    issue: Dict[str, Any],
    element: Optional[Tag] = None,
    options: Optional[Dict[str, Any]] = None,
) -> Optional[str]:
    """
    Give an empty link an aria-label.

    The label comes from the file name of an image inside the link, then
    the destination URL.

    Args:
        soup: The BeautifulSoup object representing the HTML document
        issue: The accessibility issue to remediate
        element: The anchor element

    Returns:
        A message describing the remediation, or None if no remediation was performed
    """
    if link_name(element):
        return "Link already has an accessible name"

    img = element.find("img", src=True)
    label = (
        (text_from_filename(img["src"]) if img else "")
        or text_from_href(element.get("href"))
    )
    if not label:
        logger.warning(f"No label derivable for link: {element.get('href')}")
        return None

    element["aria-label"] = label
    return f"Added aria-label to empty link: {label}"


def remediate_new_window_link_no_warning(
    soup: BeautifulSoup,
    issue: Dict[str, Any],
    element: Optional[Tag] = None,
    options: Optional[Dict[str, Any]] = None,
) -> Optional[str]:
    """
    Append visually hidden "(opens in a new window)" text to a link.

    Returns:
        A message describing the remediation, or None if no remediation was performed
    """
    text = element.get_text(" ", strip=True).lower()
    if any(phrase in text for phrase in NEW_WINDOW_PHRASES):
        return "Link already warns that it opens a new window"

    warning = soup.new_tag("span", attrs={"class": "visually-hidden"})
    warning.string = NEW_WINDOW_TEXT
    element.append(warning)

    # An aria-label would hide the appended text from screen readers
    if element.get("aria-label"):
        element["aria-label"] = element["aria-label"].rstrip() + NEW_WINDOW_TEXT

    ensure_style(soup, ".visually-hidden", VISUALLY_HIDDEN_CSS)
    return "Added new window warning to link"
