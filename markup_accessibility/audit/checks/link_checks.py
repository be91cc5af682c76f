# Copyright 2025 Amazon.com, Inc. or its affiliates.
# SPDX-License-Identifier: Apache-2.0

"""
Link-related accessibility checks.

This module provides checks for proper link accessibility.
"""

import re
from collections import defaultdict
from typing import Dict, List

from bs4 import Tag

from markup_accessibility.audit.base_check import AccessibilityCheck
from markup_accessibility.audit.checks.structure_checks import accessible_label

GENERIC_LINK_TEXTS = [
    "click here",
    "click",
    "here",
    "read more",
    "more",
    "learn more",
    "details",
    "link",
    "this link",
    "this page",
    "this",
    "go",
    "go to",
    "view",
    "view more",
    "see more",
    "see details",
    "continue",
    "continue reading",
]

URL_PATTERNS = [
    r"^https?://",
    r"^www\.",
    r"\.(com|org|net|edu|gov|io)(/|$)",
]

NEW_WINDOW_PHRASES = ["new window", "new tab", "opens in new", "external"]
SCREEN_READER_CLASSES = ["sr-only", "visually-hidden", "screen-reader-text"]
EXTERNAL_ICON_CLASSES = ["external", "new-window", "fa-external-link"]


def link_name(link: Tag) -> str:
    """
    Compute the accessible name of a link.

    Args:
        link: Anchor element

    Returns:
        Name from aria-labelledby/aria-label, text, image alt or title, in that order
    """
    label = accessible_label(link)
    if label:
        return label

    text = " ".join(link.get_text(" ", strip=True).split())
    if text:
        return text

    alts = [img["alt"].strip() for img in link.find_all("img", alt=True)]
    alt_text = " ".join(alt for alt in alts if alt)
    if alt_text:
        return alt_text

    return (link.get("title") or "").strip()


def is_url(text: str) -> bool:
    """Check if text appears to be a URL."""
    return any(re.search(pattern, text, re.IGNORECASE) for pattern in URL_PATTERNS)


def _has_class(element: Tag, class_names: List[str]) -> bool:
    classes = element.get("class") or []
    # Tags created after parsing keep class as a plain string
    if isinstance(classes, str):
        classes = classes.split()
    return any(name in class_names for name in classes)


class LinkTextCheck(AccessibilityCheck):
    """Check for proper link text (WCAG 2.4.4, 2.4.9)."""

    def check(self) -> None:
        """
        Check if links have descriptive text.

        Issues:
            - empty-link-text: When a link has no accessible name
            - generic-link-text: When a link has generic text like "click here" or "read more"
            - url-as-link-text: When a link text is just a URL
            - duplicate-link-text-different-url: When links with same
              text go to different destinations
            - compliant-link-text: When a link has descriptive text
        """
        links_by_text: Dict[str, List[Tag]] = defaultdict(list)

        for link in self.soup.find_all("a", href=True):
            href = link["href"].strip()
            # Bare "#" anchors are script hooks, not navigation
            if not href.strip("#"):
                continue

            name = link_name(link)

            if not name:
                self.add_issue(
                    "empty-link-text",
                    "2.4.4",
                    "critical",
                    element=link,
                    description="Link has no text content",
                    status="needs_remediation",
                )
                continue

            name_lower = name.lower()
            if name_lower in GENERIC_LINK_TEXTS:
                self.add_issue(
                    "generic-link-text",
                    "2.4.4",
                    "major",
                    element=link,
                    description=f"Generic link text: '{name}' is not descriptive",
                    status="needs_remediation",
                )
            elif is_url(name):
                self.add_issue(
                    "url-as-link-text",
                    "2.4.4",
                    "minor",
                    element=link,
                    description=f"URL used as link text: '{name}'",
                    status="needs_remediation",
                )
            else:
                self.add_issue(
                    "compliant-link-text",
                    "2.4.4",
                    "major",
                    element=link,
                    description=f"Link has descriptive text: '{name}'",
                    status="compliant",
                )

            links_by_text[name_lower].append(link)

        for text, links in links_by_text.items():
            destinations = {link["href"].strip() for link in links}
            if len(destinations) < 2:
                continue
            for link in links:
                self.add_issue(
                    "duplicate-link-text-different-url",
                    "2.4.9",
                    "minor",
                    element=link,
                    description=(
                        f"{len(links)} links with text '{text}' "
                        f"go to {len(destinations)} different destinations"
                    ),
                    status="needs_remediation",
                )


class NewWindowLinkCheck(AccessibilityCheck):
    """Check for links that open in new windows (WCAG 3.2.5)."""

    def check(self) -> None:
        """
        Check if links that open in new windows have appropriate warning.

        Issues:
            - new-window-link-no-warning: When a link opens in a new window without warning
            - compliant-new-window-link: When a link opens in a new window with appropriate warning
        """
        for link in self.soup.find_all("a"):
            rel = link.get("rel") or []
            if link.get("target") != "_blank" and "external" not in rel:
                continue

            text = self.get_element_text(link)
            warning_method = self._warning_method(link, text)

            if warning_method:
                self.add_issue(
                    "compliant-new-window-link",
                    "3.2.5",
                    "minor",
                    element=link,
                    description="Link opens in new window with appropriate warning"
                    + f" via {warning_method}: '{text}'",
                    status="compliant",
                )
            else:
                self.add_issue(
                    "new-window-link-no-warning",
                    "3.2.5",
                    "minor",
                    element=link,
                    description=f"Link opens in new window without warning: '{text}'",
                    status="needs_remediation",
                )

    def _warning_method(self, link: Tag, text: str) -> str:
        """
        Find how a link warns that it opens a new window.

        Returns:
            Name of the warning mechanism, or an empty string if there is none
        """
        def warns(value: str) -> bool:
            return any(phrase in value.lower() for phrase in NEW_WINDOW_PHRASES)

        for sr_elem in link.find_all(["span", "div"]):
            if _has_class(sr_elem, SCREEN_READER_CLASSES) and warns(
                sr_elem.get_text(strip=True)
            ):
                return "screen reader text"
        if warns(text):
            return "text content"
        if warns(link.get("aria-label") or ""):
            return "aria-label"
        if warns(link.get("title") or ""):
            return "title attribute"
        for icon in link.find_all("i"):
            if _has_class(icon, EXTERNAL_ICON_CLASSES):
                return "icon"
        return ""
