# Copyright 2025 Amazon.com, Inc. or its affiliates.
# SPDX-License-Identifier: Apache-2.0

"""
Document outline builder.

Builds the heading outline of a document: headings nest under the nearest
preceding heading of a lower level. Sectioning elements are tracked so checks
can tell which sections carry no heading at all.
"""

from dataclasses import dataclass, field
from typing import List, Optional, Tuple, Dict, Any

from bs4 import BeautifulSoup, Tag

from markup_accessibility.parser import element_path

HEADING_TAGS = ["h1", "h2", "h3", "h4", "h5", "h6"]
SECTIONING_TAGS = ["article", "aside", "nav", "section"]


@dataclass
class HeadingNode:
    """A heading and the headings nested under it."""

    level: int
    text: str
    element: Tag
    section: str = "body"
    children: List["HeadingNode"] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "level": self.level,
            "text": self.text,
            "tag": self.element.name,
            "path": element_path(self.element),
            "line": getattr(self.element, "sourceline", None),
            "section": self.section,
            "children": [child.to_dict() for child in self.children],
        }


@dataclass
class SectionInfo:
    """A sectioning element and its first heading, if any."""

    element: Tag
    heading: Optional[HeadingNode] = None


@dataclass
class Outline:
    """Heading outline of a document."""

    roots: List[HeadingNode] = field(default_factory=list)
    headings: List[HeadingNode] = field(default_factory=list)
    sections: List[SectionInfo] = field(default_factory=list)

    def skipped_levels(self) -> List[Tuple[HeadingNode, HeadingNode]]:
        """
        Find headings that jump more than one level deeper than the previous one.

        Returns:
            List of (previous heading, offending heading) pairs
        """
        skipped = []
        for previous, heading in zip(self.headings, self.headings[1:]):
            if heading.level > previous.level + 1:
                skipped.append((previous, heading))
        return skipped

    def headings_at(self, level: int) -> List[HeadingNode]:
        return [heading for heading in self.headings if heading.level == level]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "headings": [root.to_dict() for root in self.roots],
            "sections": [
                {
                    "tag": section.element.name,
                    "path": element_path(section.element),
                    "heading": section.heading.text if section.heading else None,
                }
                for section in self.sections
            ],
        }


def heading_level(element: Tag) -> Optional[int]:
    """
    Get the outline level of an element.

    Args:
        element: Element to inspect

    Returns:
        1-6 for h1-h6 and role="heading" elements, None for anything else
    """
    if not isinstance(element, Tag):
        return None

    if element.name in HEADING_TAGS:
        return int(element.name[1])

    if (element.get("role") or "").strip().lower() == "heading":
        aria_level = (element.get("aria-level") or "").strip()
        if aria_level.isdigit() and 1 <= int(aria_level) <= 6:
            return int(aria_level)
        # role="heading" without a usable aria-level defaults to level 2
        return 2

    return None


def is_hidden(element: Tag) -> bool:
    """Check whether an element or one of its ancestors is hidden from assistive technology."""
    current = element
    while isinstance(current, Tag) and not isinstance(current, BeautifulSoup):
        if current.has_attr("hidden"):
            return True
        if (current.get("aria-hidden") or "").strip().lower() == "true":
            return True
        current = current.parent
    return False


def _section_name(element: Tag) -> str:
    section = element.find_parent(SECTIONING_TAGS)
    return section.name if section else "body"


def build_outline(soup: BeautifulSoup) -> Outline:
    """
    Build the heading outline for a document.

    Args:
        soup: Parsed document

    Returns:
        Outline with nested headings and sectioning information
    """
    outline = Outline()
    stack: List[HeadingNode] = []

    candidates = soup.find_all(
        lambda tag: tag.name in HEADING_TAGS
        or (tag.get("role") or "").strip().lower() == "heading"
    )

    for element in candidates:
        level = heading_level(element)
        if level is None or is_hidden(element):
            continue

        node = HeadingNode(
            level=level,
            text=element.get_text(" ", strip=True),
            element=element,
            section=_section_name(element),
        )
        outline.headings.append(node)

        while stack and stack[-1].level >= level:
            stack.pop()

        if stack:
            stack[-1].children.append(node)
        else:
            outline.roots.append(node)
        stack.append(node)

    for section in soup.find_all(SECTIONING_TAGS):
        first_heading = None
        for node in outline.headings:
            if any(parent is section for parent in node.element.parents):
                first_heading = node
                break
        outline.sections.append(SectionInfo(element=section, heading=first_heading))

    return outline
