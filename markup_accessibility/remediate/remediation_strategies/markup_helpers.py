# Copyright 2025 Amazon.com, Inc. or its affiliates.
# SPDX-License-Identifier: Apache-2.0

"""
Helpers shared by remediation strategies for deriving text, ids and styles.
"""

import os
import re
from typing import Optional
from urllib.parse import urlparse

from bs4 import BeautifulSoup

_SEPARATORS = re.compile(r"[-_.+]+")
_TRAILING_DIGITS = re.compile(r"\s*\d+$")


def humanize(value: Optional[str]) -> str:
    """
    Turn an identifier or file name into readable text.

    Example: "contact_email-address" -> "Contact email address"

    Args:
        value: Identifier, attribute value or file name

    Returns:
        Readable text, or an empty string when nothing usable remains
    """
    if not value:
        return ""
    text = " ".join(_SEPARATORS.sub(" ", value).split())
    return text[:1].upper() + text[1:]


def text_from_filename(path: Optional[str]) -> str:
    """
    Derive readable text from the file name part of a path or URL.

    Args:
        path: File path or URL

    Returns:
        Readable text without extension or trailing sequence numbers
    """
    if not path:
        return ""
    name = os.path.basename(urlparse(path).path.rstrip("/"))
    stem, _ = os.path.splitext(name)
    return humanize(_TRAILING_DIGITS.sub("", stem))


def text_from_href(href: Optional[str]) -> str:
    """
    Derive link text from a URL.

    Uses the last path segment, or the host name for site roots.
    """
    if not href:
        return ""
    parsed = urlparse(href)
    if parsed.scheme == "mailto":
        return f"Email {parsed.path}"
    if parsed.scheme == "tel":
        return f"Call {parsed.path}"
    segment = os.path.basename(parsed.path.rstrip("/"))
    if segment:
        return humanize(os.path.splitext(segment)[0])
    if parsed.fragment:
        return humanize(parsed.fragment)
    return parsed.netloc


def unique_id(soup: BeautifulSoup, base: str) -> str:
    """
    Build an id that is not used anywhere in the document.

    Args:
        soup: Document
        base: Preferred id

    Returns:
        base, or base with a -N suffix
    """
    base = re.sub(r"[^A-Za-z0-9_-]+", "-", base).strip("-") or "element"
    if not base[0].isalpha():
        base = f"id-{base}"
    candidate = base
    counter = 2
    while soup.find(attrs={"id": candidate}) is not None:
        candidate = f"{base}-{counter}"
        counter += 1
    return candidate


def ensure_style(soup: BeautifulSoup, selector: str, css: str) -> bool:
    """
    Add a style block to the head unless a rule for the selector already exists.

    Args:
        soup: Document
        selector: CSS selector the rules are for, e.g. ".skip-link"
        css: Style sheet text

    Returns:
        True if a style element was added
    """
    head = soup.find("head")
    if head is None:
        return False

    for style in head.find_all("style"):
        if selector in style.get_text():
            return False

    style = soup.new_tag("style")
    style.string = css
    head.append(style)
    return True
