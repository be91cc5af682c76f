# Copyright 2025 Amazon.com, Inc. or its affiliates.
# SPDX-License-Identifier: Apache-2.0

"""
Heading accessibility remediation strategies.

This module provides remediation strategies for heading-related accessibility issues.
"""

from typing import Dict, Any, Optional

from bs4 import BeautifulSoup, Tag

from markup_accessibility.outline import HEADING_TAGS, build_outline, heading_level
from markup_accessibility.utils.logging_helper import setup_logger

# Set up module-level logger
logger = setup_logger(__name__)


def _set_level(element: Tag, level: int) -> None:
    if element.name in HEADING_TAGS:
        element.name = f"h{level}"
    else:
        element["aria-level"] = str(level)


def remediate_missing_h1(
    soup: BeautifulSoup,
    issue: Dict[str, Any],
    element: Optional[Tag] = None,
    options: Optional[Dict[str, Any]] = None,
) -> Optional[str]:
    """
    Remediate missing h1 heading in the document.

    The heading text is taken from the document title and inserted at the
    start of the main landmark, or the body when there is none.

    Args:
        soup: The BeautifulSoup object representing the HTML document
        issue: The accessibility issue to remediate

    Returns:
        A message describing the remediation, or None if no remediation was performed
    """
    if build_outline(soup).headings_at(1):
        return "Document already has an h1 heading"

    title_tag = soup.find("title")
    title_text = title_tag.get_text(" ", strip=True) if title_tag else ""
    if not title_text:
        logger.warning("Cannot add h1: document has no title text to use")
        return None

    insertion_point = (
        soup.find("main")
        or soup.find(attrs={"role": "main"})
        or soup.find("body")
    )
    if insertion_point is None:
        logger.warning("Cannot add h1: no main or body element")
        return None

    h1 = soup.new_tag("h1")
    h1.string = title_text
    insertion_point.insert(0, h1)
    return f"Added h1 heading from document title: {title_text}"


def remediate_skipped_heading_level(
    soup: BeautifulSoup,
    issue: Dict[str, Any],
    element: Optional[Tag] = None,
    options: Optional[Dict[str, Any]] = None,
) -> Optional[str]:
    """
    Change a heading's level to one below the preceding heading.

    Deeper headings that follow it, up to the next heading at or above its
    original level, move by the same amount so their nesting is kept.

    Args:
        soup: The BeautifulSoup object representing the HTML document
        issue: The accessibility issue to remediate
        element: The heading that skips a level

    Returns:
        A message describing the remediation, or None if no remediation was performed
    """
    current_level = heading_level(element)
    if current_level is None:
        logger.warning(f"Element is not a heading: {element.name}")
        return None

    headings = build_outline(soup).headings
    index = next(
        (i for i, node in enumerate(headings) if node.element is element), None
    )
    if index is None:
        logger.warning("Heading is not part of the document outline")
        return None

    previous_level = headings[index - 1].level if index > 0 else 0
    target_level = previous_level + 1
    if current_level <= target_level:
        return f"Heading level already follows the previous heading (H{current_level})"

    shift = current_level - target_level
    _set_level(element, target_level)

    moved = 0
    for node in headings[index + 1 :]:
        if node.level <= current_level:
            break
        _set_level(node.element, node.level - shift)
        moved += 1

    message = f"Changed heading level from H{current_level} to H{target_level}"
    if moved:
        message += f" and moved {moved} following heading(s) up by {shift}"
    return message


def remediate_multiple_h1(
    soup: BeautifulSoup,
    issue: Dict[str, Any],
    element: Optional[Tag] = None,
    options: Optional[Dict[str, Any]] = None,
) -> Optional[str]:
    """
    Demote an additional level-1 heading to level 2.

    Returns:
        A message describing the remediation, or None if no remediation was performed
    """
    if heading_level(element) != 1:
        return "Heading is already below level 1"

    _set_level(element, 2)
    return "Demoted additional h1 heading to h2"


def remediate_empty_heading(
    soup: BeautifulSoup,
    issue: Dict[str, Any],
    element: Optional[Tag] = None,
    options: Optional[Dict[str, Any]] = None,
) -> Optional[str]:
    """
    Remove a heading that has no text content.

    Returns:
        A message describing the remediation, or None if no remediation was performed
    """
    if element.get_text(strip=True):
        return "Heading already has text content"

    name = element.name
    element.extract()
    return f"Removed empty {name} heading"
