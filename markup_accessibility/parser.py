# Copyright 2025 Amazon.com, Inc. or its affiliates.
# SPDX-License-Identifier: Apache-2.0

"""
HTML parsing helpers.

Markup is parsed with BeautifulSoup's ``html.parser`` tree builder, which records
the line and column where each start tag begins. Those positions are kept on the
tags (``sourceline`` / ``sourcepos``) and surface in every reported issue.
"""

import os
import re
from dataclasses import dataclass, asdict
from typing import Optional, Tuple, Union

from bs4 import BeautifulSoup, Tag

from markup_accessibility.utils.logging_helper import (
    setup_logger,
    HTMLParseError,
    ResourceError,
)

# Set up module-level logger
logger = setup_logger(__name__)

_CSS_IDENTIFIER = re.compile(r"^[A-Za-z_][A-Za-z0-9_-]*$")
_PATH_SEGMENT = re.compile(
    r"^(?P<tag>[A-Za-z][A-Za-z0-9:_-]*)"
    r"(?:#(?P<id>[A-Za-z_][A-Za-z0-9_-]*)|:nth-of-type\((?P<index>\d+)\))$"
)


@dataclass
class SourceSpan:
    """Start position of an element in the original markup."""

    line: int
    column: int
    offset: Optional[int] = None

    def to_dict(self):
        return asdict(self)


def parse_html(content: Union[str, bytes]) -> BeautifulSoup:
    """
    Parse markup text into an element tree.

    Args:
        content: HTML markup as text (bytes are decoded as UTF-8)

    Returns:
        BeautifulSoup document

    Raises:
        HTMLParseError: If the content is not text or cannot be parsed
    """
    if isinstance(content, bytes):
        try:
            content = content.decode("utf-8")
        except UnicodeDecodeError as e:
            raise HTMLParseError(f"Markup is not valid UTF-8: {e}") from e

    if not isinstance(content, str):
        raise HTMLParseError(
            f"Expected markup text, got {type(content).__name__}"
        )

    try:
        return BeautifulSoup(content, "html.parser")
    except (AssertionError, ValueError) as e:
        raise HTMLParseError(f"Could not parse markup: {e}") from e


def load_html_file(path: str) -> Tuple[BeautifulSoup, str]:
    """
    Read and parse an HTML file.

    Args:
        path: Path to the HTML file

    Returns:
        Tuple of (parsed document, original text)

    Raises:
        ResourceError: If the file cannot be read
    """
    if not os.path.isfile(path):
        raise ResourceError(f"HTML file not found: {path}")

    try:
        with open(path, "r", encoding="utf-8") as f:
            content = f.read()
    except (OSError, UnicodeDecodeError) as e:
        raise ResourceError(f"Error reading HTML file {path}: {e}") from e

    return parse_html(content), content


def source_span(element: Tag, content: Optional[str] = None) -> Optional[SourceSpan]:
    """
    Get the source position of an element.

    Args:
        element: Parsed tag
        content: Original markup; when given the character offset is computed

    Returns:
        SourceSpan, or None for elements created after parsing
    """
    line = getattr(element, "sourceline", None)
    column = getattr(element, "sourcepos", None)
    if line is None or column is None:
        return None

    offset = None
    if content is not None:
        # html.parser counts lines by "\n" only
        lines = content.split("\n")
        if line <= len(lines):
            offset = sum(len(text) + 1 for text in lines[: line - 1]) + column

    return SourceSpan(line=line, column=column + 1, offset=offset)


def _document_root(element: Tag) -> Tag:
    root = element
    while root.parent is not None:
        root = root.parent
    return root


def element_path(element: Tag) -> str:
    """
    Build a CSS selector path that resolves back to the element.

    The path stops at the nearest ancestor carrying a unique, CSS-safe id;
    every other step uses ``:nth-of-type`` so the path is unambiguous.

    Args:
        element: The HTML element

    Returns:
        CSS selector path
    """
    if not isinstance(element, Tag) or isinstance(element, BeautifulSoup):
        return ""

    root = _document_root(element)
    segments = []
    current = element
    while isinstance(current, Tag) and not isinstance(current, BeautifulSoup):
        element_id = current.get("id")
        if (
            isinstance(element_id, str)
            and _CSS_IDENTIFIER.match(element_id)
            and len(root.find_all(attrs={"id": element_id})) == 1
        ):
            segments.append(f"{current.name}#{element_id}")
            break

        index = len(current.find_previous_siblings(current.name)) + 1
        segments.append(f"{current.name}:nth-of-type({index})")
        current = current.parent

    return " > ".join(reversed(segments))


def find_by_path(soup: BeautifulSoup, path: str) -> Optional[Tag]:
    """
    Resolve a path produced by element_path().

    Paths in any other CSS form are passed to BeautifulSoup's selector engine.

    Args:
        soup: Document to search
        path: Selector path

    Returns:
        The matching element, or None
    """
    if not path:
        return None

    segments = [segment.strip() for segment in path.split(">")]
    matches = [_PATH_SEGMENT.match(segment) for segment in segments]

    if not all(matches):
        try:
            return soup.select_one(path)
        except Exception as e:
            logger.debug("Invalid selector '%s': %s", path, e)
            return None

    current = soup
    for position, match in enumerate(matches):
        tag_name = match.group("tag").lower()
        if match.group("id"):
            if position == 0:
                current = soup.find(tag_name, attrs={"id": match.group("id")})
            else:
                current = current.find(
                    tag_name, attrs={"id": match.group("id")}, recursive=False
                )
        else:
            index = int(match.group("index"))
            children = current.find_all(tag_name, recursive=False)
            current = children[index - 1] if 0 < index <= len(children) else None

        if current is None:
            return None

    return current


def serialize(soup: BeautifulSoup) -> str:
    """Serialize a document back to markup text."""
    return str(soup)
