# Copyright 2025 Amazon.com, Inc. or its affiliates.
# SPDX-License-Identifier: Apache-2.0

"""
Document structure remediation strategies.

This module provides remediation strategies for document-level accessibility issues.
"""

from typing import Dict, Any, Optional

from bs4 import BeautifulSoup, Tag

from markup_accessibility.audit.checks.heading_checks import GENERIC_TITLE_TEXTS
from markup_accessibility.audit.checks.structure_checks import LANGUAGE_TAG_PATTERN
from markup_accessibility.remediate.remediation_strategies.markup_helpers import text_from_filename
from markup_accessibility.utils.logging_helper import setup_logger

# Set up module-level logger
logger = setup_logger(__name__)

MAX_TITLE_LENGTH = 60


def _derive_title(soup: BeautifulSoup, issue: Dict[str, Any]) -> str:
    h1 = soup.find("h1")
    if h1 and h1.get_text(strip=True):
        return " ".join(h1.get_text(" ", strip=True).split())

    meta_description = soup.find("meta", attrs={"name": "description"})
    if meta_description and (meta_description.get("content") or "").strip():
        return meta_description["content"].strip()[:MAX_TITLE_LENGTH]

    location = issue.get("location") or {}
    return text_from_filename(location.get("file_name") or location.get("file_path"))


def remediate_missing_document_title(
    soup: BeautifulSoup,
    issue: Dict[str, Any],
    element: Optional[Tag] = None,
    options: Optional[Dict[str, Any]] = None,
) -> Optional[str]:
    """
    Remediate a missing or empty document title.

    The title text comes from the first h1, then the meta description, then
    the file name.

    Args:
        soup: The BeautifulSoup object representing the HTML document
        issue: The accessibility issue to remediate
        element: Element the issue was reported on (unused)
        options: Remediation options (unused)

    Returns:
        A message describing the remediation, or None if no remediation was performed
    """
    existing_title = soup.find("title")
    if existing_title and existing_title.get_text(strip=True):
        return "Document already has a title"

    title_text = _derive_title(soup, issue)
    if not title_text or title_text.lower() in GENERIC_TITLE_TEXTS:
        logger.warning("No text available to build a document title from")
        return None

    if existing_title:
        existing_title.string = title_text
        return f"Filled empty document title: {title_text}"

    head = soup.find("head")
    if not head:
        html = soup.find("html")
        if not html:
            logger.warning("No html element found, cannot add head")
            return None
        head = soup.new_tag("head")
        html.insert(0, head)

    title_tag = soup.new_tag("title")
    title_tag.string = title_text
    head.append(title_tag)
    return f"Added document title: {title_text}"


def remediate_missing_language(
    soup: BeautifulSoup,
    issue: Dict[str, Any],
    element: Optional[Tag] = None,
    options: Optional[Dict[str, Any]] = None,
) -> Optional[str]:
    """
    Remediate a missing or invalid lang attribute on the HTML element.

    Args:
        soup: The BeautifulSoup object representing the HTML document
        issue: The accessibility issue to remediate
        element: Element the issue was reported on (unused)
        options: Remediation options; 'default_language' sets the code

    Returns:
        A message describing the remediation, or None if no remediation was performed
    """
    html = soup.find("html")
    if not html:
        logger.warning("No html element found")
        return None

    current = (html.get("lang") or "").strip()
    if current and LANGUAGE_TAG_PATTERN.match(current):
        return f"HTML element already has lang attribute: '{current}'"

    lang_code = (options or {}).get("default_language") or "en"
    if not LANGUAGE_TAG_PATTERN.match(lang_code):
        logger.warning(f"Configured default language is not a language tag: {lang_code}")
        return None

    html["lang"] = lang_code
    if current:
        return f"Replaced invalid language attribute '{current}' with lang='{lang_code}'"
    return f"Added language attribute: lang='{lang_code}'"
