# Copyright 2025 Amazon.com, Inc. or its affiliates.
# SPDX-License-Identifier: Apache-2.0

"""
Image accessibility checks.

This module provides checks for proper image accessibility.
"""

import re
from typing import Optional

from bs4 import Tag

from markup_accessibility.audit.base_check import AccessibilityCheck

GENERIC_ALT_PATTERN = re.compile(
    r"^(image|img|photo|picture|graphic|icon|diagram|figure|logo|spacer)\s*\d*$",
    re.IGNORECASE,
)
REDUNDANT_ALT_PATTERN = re.compile(
    r"^(an?\s+)?(image|picture|photo|photograph|graphic|icon)\s+of\b\s*",
    re.IGNORECASE,
)
DECORATIVE_SRC_TERMS = ["spacer", "separator", "divider", "bullet", "decoration"]
COMPLEX_SRC_TERMS = ["figure", "diagram", "chart", "graph"]

MAX_ALT_LENGTH = 150


def _dimension(img: Tag, attribute: str) -> Optional[int]:
    value = (img.get(attribute) or "").strip().lower()
    if value.endswith("px"):
        value = value[:-2]
    return int(value) if value.isdigit() else None


def is_decorative_image(img: Tag) -> bool:
    """
    Determine if an image is likely decorative.

    Args:
        img: The image element.

    Returns:
        True if the image is likely decorative, False otherwise.
    """
    if (img.get("role") or "").lower() in ("presentation", "none"):
        return True
    if (img.get("aria-hidden") or "").lower() == "true":
        return True

    width = _dimension(img, "width")
    height = _dimension(img, "height")
    if width is not None and height is not None and width < 20 and height < 20:
        return True

    src = (img.get("src") or "").lower()
    return any(term in src for term in DECORATIVE_SRC_TERMS)


def is_complex_image(img: Tag) -> bool:
    """
    Determine if an image is likely a chart or figure that needs a caption.

    Args:
        img: The image element

    Returns:
        True if the image appears to be a complex figure, False otherwise
    """
    src = (img.get("src") or "").lower()
    if any(term in src for term in COMPLEX_SRC_TERMS):
        return True

    width = _dimension(img, "width")
    height = _dimension(img, "height")
    return width is not None and height is not None and width > 300 and height > 300


class AltTextCheck(AccessibilityCheck):
    """Check for proper alt text on images (WCAG 1.1.1)."""

    def check(self) -> None:
        """
        Check if images have appropriate alt text.

        Issues:
            - missing-alt-text: When an image has no alt attribute
            - empty-alt-text: When a non-decorative image has an empty alt attribute
            - generic-alt-text: When an image has generic alt text like "image"
            - long-alt-text: When alt text exceeds 150 characters
            - redundant-alt-text: When alt text starts with "image of" or similar
            - compliant-alt-text: When an image has proper alt text
        """
        for img in self.soup.find_all("img"):
            if not img.has_attr("alt"):
                self.add_issue(
                    "missing-alt-text",
                    "1.1.1",
                    "critical",
                    element=img,
                    description="Image missing alt text",
                    status="needs_remediation",
                )
                continue

            alt_text = img["alt"].strip()
            if not alt_text:
                if is_decorative_image(img):
                    self.add_issue(
                        "compliant-decorative-image",
                        "1.1.1",
                        "minor",
                        element=img,
                        description="Decorative image properly marked",
                        status="compliant",
                    )
                else:
                    self.add_issue(
                        "empty-alt-text",
                        "1.1.1",
                        "major",
                        element=img,
                        description="Image has empty alt text but is not marked as decorative",
                        status="needs_remediation",
                    )
            elif GENERIC_ALT_PATTERN.match(alt_text):
                self.add_issue(
                    "generic-alt-text",
                    "1.1.1",
                    "major",
                    element=img,
                    description=f"Image has generic alt text: '{alt_text}'",
                    status="needs_remediation",
                )
            elif len(alt_text) > MAX_ALT_LENGTH:
                self.add_issue(
                    "long-alt-text",
                    "1.1.1",
                    "minor",
                    element=img,
                    description=(
                        f"Alt text is {len(alt_text)} characters long "
                        f"(limit {MAX_ALT_LENGTH})"
                    ),
                    status="needs_remediation",
                )
            elif REDUNDANT_ALT_PATTERN.match(alt_text):
                self.add_issue(
                    "redundant-alt-text",
                    "1.1.1",
                    "minor",
                    element=img,
                    description=f"Alt text starts with a redundant phrase: '{alt_text}'",
                    status="needs_remediation",
                )
            else:
                self.add_issue(
                    "compliant-alt-text",
                    "1.1.1",
                    "critical",
                    element=img,
                    description="Image has proper alt text",
                    status="compliant",
                )


class FigureStructureCheck(AccessibilityCheck):
    """Check for proper figure structure (WCAG 1.1.1)."""

    def check(self) -> None:
        """
        Check if figures have captions and complex images sit in figures.

        Issues:
            - missing-figcaption: When a figure has no caption or an empty one
            - improper-figure-structure: When a chart or diagram image is not in a figure
            - compliant-figure-structure: When a figure has proper structure
        """
        for figure in self.soup.find_all("figure"):
            caption = figure.find("figcaption")

            if not caption or not self.get_element_text(caption):
                self.add_issue(
                    "missing-figcaption",
                    "1.1.1",
                    "major",
                    element=figure,
                    description=(
                        "Figure has empty caption" if caption else "Figure missing caption"
                    ),
                    status="needs_remediation",
                )
            else:
                self.add_issue(
                    "compliant-figure-structure",
                    "1.1.1",
                    "major",
                    element=figure,
                    description="Figure has proper structure and caption",
                    status="compliant",
                )

        for img in self.soup.find_all("img"):
            if img.find_parent("figure") or not is_complex_image(img):
                continue
            self.add_issue(
                "improper-figure-structure",
                "1.1.1",
                "minor",
                element=img,
                description=(
                    "Complex image should be wrapped in <figure> element with <figcaption>"
                ),
                status="needs_remediation",
            )
