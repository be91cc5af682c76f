# Copyright 2025 Amazon.com, Inc. or its affiliates.
# SPDX-License-Identifier: Apache-2.0

"""
Remediation strategies for landmark accessibility issues.

This module provides functions for remediating landmark accessibility issues.
"""

from typing import Dict, Any, Optional

from bs4 import BeautifulSoup, NavigableString, Tag

from markup_accessibility.remediate.remediation_strategies.markup_helpers import (
    ensure_style,
    unique_id,
)
from markup_accessibility.utils.logging_helper import setup_logger

# Set up module-level logger
logger = setup_logger(__name__)

# Body children that stay outside the main landmark
OUTSIDE_MAIN = ["header", "nav", "footer", "script", "style", "noscript", "template"]
OUTSIDE_MAIN_ROLES = ["banner", "navigation", "contentinfo"]

SKIP_LINK_CSS = """
.skip-link {
    position: absolute;
    top: -40px;
    left: 0;
    background: #000;
    color: #fff;
    padding: 8px;
    z-index: 100;
}
.skip-link:focus {
    top: 0;
}
"""


def _stays_outside_main(child) -> bool:
    if isinstance(child, Tag):
        if child.name in OUTSIDE_MAIN:
            return True
        if (child.get("role") or "").lower() in OUTSIDE_MAIN_ROLES:
            return True
        return "skip-link" in (child.get("class") or [])
    return False


def remediate_missing_main_landmark(
    soup: BeautifulSoup,
    issue: Dict[str, Any],
    element: Optional[Tag] = None,
    options: Optional[Dict[str, Any]] = None,
) -> Optional[str]:
    """
    Wrap the body content in a main element.

    Header, navigation and footer blocks stay outside. The main element is
    placed where the first moved block was.

    Args:
        soup: The BeautifulSoup object representing the HTML document
        issue: The accessibility issue to remediate

    Returns:
        A message describing the remediation or None if no remediation was performed
    """
    if soup.find("main") or soup.find(attrs={"role": "main"}):
        return "Main landmark already exists - no remediation needed"

    body = soup.find("body")
    if not body:
        logger.warning("No body element found")
        return None

    children = list(body.children)
    to_move = []
    for child in children:
        if _stays_outside_main(child):
            # Content after a footer is not main content
            if isinstance(child, Tag) and child.name == "footer":
                break
            continue
        to_move.append(child)

    if not any(
        isinstance(child, Tag) or (isinstance(child, NavigableString) and child.strip())
        for child in to_move
    ):
        logger.warning("Body has no content to place in a main landmark")
        return None

    main = soup.new_tag("main")
    to_move[0].insert_before(main)
    for child in to_move:
        main.append(child.extract())

    moved = len([child for child in to_move if isinstance(child, Tag)])
    logger.debug(f"Moved {moved} elements into main landmark")
    return f"Added main landmark around {moved} content elements"


def remediate_missing_skip_link(
    soup: BeautifulSoup,
    issue: Dict[str, Any],
    element: Optional[Tag] = None,
    options: Optional[Dict[str, Any]] = None,
) -> Optional[str]:
    """
    Remediate missing skip link by adding a skip link to the main content.

    The link targets the main landmark, falling back to the first h1. The
    target gets an id when it has none.

    Args:
        soup: The BeautifulSoup object representing the HTML document
        issue: The accessibility issue to remediate

    Returns:
        A message describing the remediation or None if no remediation was performed
    """
    body = soup.find("body")
    if not body:
        logger.warning("No body element found")
        return None

    for link in soup.find_all("a", limit=5):
        href = link.get("href", "")
        if len(href) > 1 and href.startswith("#") and "skip" in link.get_text().lower():
            return "Skip link already exists - no remediation needed"

    target = soup.find("main") or soup.find(attrs={"role": "main"}) or soup.find("h1")
    if target is None:
        logger.warning("No main landmark or h1 to point a skip link at")
        return None

    if not target.get("id"):
        target["id"] = unique_id(soup, "main-content")

    skip_link = soup.new_tag("a", attrs={"href": f"#{target['id']}", "class": "skip-link"})
    skip_link.string = "Skip to main content"
    body.insert(0, skip_link)

    ensure_style(soup, ".skip-link", SKIP_LINK_CSS)
    return f"Added skip link to #{target['id']}"
