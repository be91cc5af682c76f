# Copyright 2025 Amazon.com, Inc. or its affiliates.
# SPDX-License-Identifier: Apache-2.0

"""
Image accessibility remediation strategies.

This module provides remediation strategies for image-related accessibility issues.
Alt text is derived from the markup only; describing image content is left to authors.
"""

from typing import Dict, Any, Optional

from bs4 import BeautifulSoup, Tag

from markup_accessibility.audit.checks.image_checks import (
    GENERIC_ALT_PATTERN,
    REDUNDANT_ALT_PATTERN,
    is_decorative_image,
)
from markup_accessibility.remediate.remediation_strategies.markup_helpers import (
    text_from_filename,
)
from markup_accessibility.utils.logging_helper import setup_logger

# Set up module-level logger
logger = setup_logger(__name__)


def remediate_missing_alt_text(
    soup: BeautifulSoup,
    issue: Dict[str, Any],
    element: Optional[Tag] = None,
    options: Optional[Dict[str, Any]] = None,
) -> Optional[str]:
    """
    Remediate missing alt text.

    Decorative images get an empty alt. Other images get alt text built from
    the title attribute or the file name, unless that text would be generic.

    Args:
        soup: The BeautifulSoup object representing the HTML document
        issue: The accessibility issue to remediate
        element: The image element

    Returns:
        A message describing the remediation, or None if no remediation was performed
    """
    if element.has_attr("alt"):
        return "Image already has an alt attribute"

    if is_decorative_image(element):
        element["alt"] = ""
        return "Marked decorative image with empty alt text"

    alt_text = (element.get("title") or "").strip() or text_from_filename(element.get("src"))
    if not alt_text or GENERIC_ALT_PATTERN.match(alt_text):
        logger.warning(f"No meaningful alt text derivable for image: {element.get('src')}")
        return None

    element["alt"] = alt_text
    return f"Added alt text to image: {alt_text}"


def remediate_redundant_alt_text(
    soup: BeautifulSoup,
    issue: Dict[str, Any],
    element: Optional[Tag] = None,
    options: Optional[Dict[str, Any]] = None,
) -> Optional[str]:
    """
    Strip a leading "image of" style phrase from alt text.

    Returns:
        A message describing the remediation, or None if no remediation was performed
    """
    alt_text = (element.get("alt") or "").strip()
    if not REDUNDANT_ALT_PATTERN.match(alt_text):
        return "Alt text already has no redundant prefix"

    cleaned = REDUNDANT_ALT_PATTERN.sub("", alt_text, count=1).strip()
    if not cleaned:
        logger.warning(f"Alt text is only a redundant phrase: '{alt_text}'")
        return None

    cleaned = cleaned[:1].upper() + cleaned[1:]
    element["alt"] = cleaned
    return f"Changed alt text from '{alt_text}' to '{cleaned}'"


def remediate_missing_figcaption(
    soup: BeautifulSoup,
    issue: Dict[str, Any],
    element: Optional[Tag] = None,
    options: Optional[Dict[str, Any]] = None,
) -> Optional[str]:
    """
    Add a figcaption to a figure, using the alt text of its image.

    Returns:
        A message describing the remediation, or None if no remediation was performed
    """
    caption = element.find("figcaption")
    if caption is not None and caption.get_text(strip=True):
        return "Figure already has a caption"

    img = element.find("img", alt=True)
    caption_text = (img["alt"] or "").strip() if img else ""
    if not caption_text:
        logger.warning("Figure has no image alt text to build a caption from")
        return None

    if caption is None:
        caption = soup.new_tag("figcaption")
        element.append(caption)
    caption.string = caption_text
    return f"Added figure caption: {caption_text}"
