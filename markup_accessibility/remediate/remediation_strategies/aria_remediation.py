# Copyright 2025 Amazon.com, Inc. or its affiliates.
# SPDX-License-Identifier: Apache-2.0

"""
ARIA and id remediation strategies.
"""

from typing import Dict, Any, Optional

from bs4 import BeautifulSoup, Tag

from markup_accessibility.audit.checks.aria_checks import is_focusable
from markup_accessibility.remediate.remediation_strategies.markup_helpers import unique_id
from markup_accessibility.utils.logging_helper import setup_logger

# Set up module-level logger
logger = setup_logger(__name__)


def remediate_aria_role(
    soup: BeautifulSoup,
    issue: Dict[str, Any],
    element: Optional[Tag] = None,
    options: Optional[Dict[str, Any]] = None,
) -> Optional[str]:
    """
    Remove an invalid or redundant role attribute.

    Args:
        soup: The BeautifulSoup object representing the HTML document
        issue: The accessibility issue to remediate
        element: Element carrying the role

    Returns:
        A message describing the remediation, or None if no remediation was performed
    """
    if not element.has_attr("role"):
        return "Element already has no role attribute"

    role = element["role"]
    del element["role"]
    return f"Removed role='{role}' from <{element.name}>"


def remediate_aria_hidden_focusable(
    soup: BeautifulSoup,
    issue: Dict[str, Any],
    element: Optional[Tag] = None,
    options: Optional[Dict[str, Any]] = None,
) -> Optional[str]:
    """
    Take a focusable element inside hidden content out of the tab order.

    Returns:
        A message describing the remediation, or None if no remediation was performed
    """
    if not is_focusable(element):
        return "Element is already out of the tab order"

    element["tabindex"] = "-1"
    return f"Added tabindex='-1' to <{element.name}>"


def remediate_duplicate_id(
    soup: BeautifulSoup,
    issue: Dict[str, Any],
    element: Optional[Tag] = None,
    options: Optional[Dict[str, Any]] = None,
) -> Optional[str]:
    """
    Rename a repeated id with a numeric suffix.

    Returns:
        A message describing the remediation, or None if no remediation was performed
    """
    old_id = element.get("id")
    if not old_id:
        logger.warning("Element has no id to rename")
        return None

    first = soup.find(attrs={"id": old_id})
    if first is element:
        return f"id '{old_id}' is already unique"

    new_id = unique_id(soup, old_id)
    element["id"] = new_id
    return f"Renamed duplicate id '{old_id}' to '{new_id}'"
