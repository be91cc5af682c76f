# Copyright 2025 Amazon.com, Inc. or its affiliates.
# SPDX-License-Identifier: Apache-2.0

"""
Form accessibility remediation strategies.

This module provides remediation strategies for form-related accessibility issues.
"""

from typing import Dict, Any, Optional

from bs4 import BeautifulSoup, Tag

from markup_accessibility.audit.checks.form_checks import control_label_text
from markup_accessibility.audit.checks.structure_checks import accessible_label
from markup_accessibility.remediate.remediation_strategies.markup_helpers import (
    humanize,
    unique_id,
)
from markup_accessibility.utils.logging_helper import setup_logger

# Set up module-level logger
logger = setup_logger(__name__)


def remediate_form_control_missing_label(
    soup: BeautifulSoup,
    issue: Dict[str, Any],
    element: Optional[Tag] = None,
    options: Optional[Dict[str, Any]] = None,
) -> Optional[str]:
    """
    Add a label element for an unlabelled form control.

    The label text comes from the placeholder, name or type of the control,
    in that order. The control is given an id when it has none.

    Args:
        soup: The BeautifulSoup object representing the HTML document
        issue: The accessibility issue to remediate
        element: The form control

    Returns:
        A message describing the remediation, or None if no remediation was performed
    """
    if control_label_text(element):
        return "Form control already has a label"

    label_text = humanize(
        element.get("placeholder")
        or element.get("name")
        or (element.get("type") if element.name == "input" else element.name)
        or "text"
    )
    if not label_text:
        logger.warning(f"No label text derivable for <{element.name}>")
        return None

    if not element.get("id"):
        element["id"] = unique_id(soup, element.get("name") or f"{element.name}-field")

    label = soup.new_tag("label", attrs={"for": element["id"]})
    label.string = label_text
    element.insert_before(label)
    return f"Added label '{label_text}' for #{element['id']}"


def remediate_form_required_field_missing_aria(
    soup: BeautifulSoup,
    issue: Dict[str, Any],
    element: Optional[Tag] = None,
    options: Optional[Dict[str, Any]] = None,
) -> Optional[str]:
    """
    Mark a required form control with aria-required="true".

    Returns:
        A message describing the remediation, or None if no remediation was performed
    """
    if element.has_attr("aria-required"):
        return "Form control already has aria-required"

    element["aria-required"] = "true"
    return "Added aria-required='true' to required field"


def remediate_form_fieldset_missing_legend(
    soup: BeautifulSoup,
    issue: Dict[str, Any],
    element: Optional[Tag] = None,
    options: Optional[Dict[str, Any]] = None,
) -> Optional[str]:
    """
    Insert a legend into a fieldset.

    The legend text comes from the fieldset's aria-label, its name, or the
    name shared by all of its controls.

    Returns:
        A message describing the remediation, or None if no remediation was performed
    """
    legend = element.find("legend", recursive=False)
    if legend is not None and legend.get_text(strip=True):
        return "Fieldset already has a legend"

    legend_text = accessible_label(element) or humanize(element.get("name"))
    if not legend_text:
        names = {
            control.get("name")
            for control in element.find_all(["input", "select", "textarea"])
        }
        if len(names) == 1 and None not in names:
            legend_text = humanize(names.pop())

    if not legend_text:
        logger.warning("No legend text derivable for fieldset")
        return None

    if legend is None:
        legend = soup.new_tag("legend")
        element.insert(0, legend)
    legend.string = legend_text
    return f"Added legend to fieldset: {legend_text}"


def remediate_button_missing_name(
    soup: BeautifulSoup,
    issue: Dict[str, Any],
    element: Optional[Tag] = None,
    options: Optional[Dict[str, Any]] = None,
) -> Optional[str]:
    """
    Give a nameless button an aria-label from its title, value or name.

    Returns:
        A message describing the remediation, or None if no remediation was performed
    """
    if element.get("aria-label"):
        return "Button already has an aria-label"

    label = (
        (element.get("title") or "").strip()
        or (element.get("value") or "").strip()
        or humanize(element.get("name"))
    )
    if not label:
        logger.warning(f"No name derivable for <{element.name}> button")
        return None

    element["aria-label"] = label
    return f"Added aria-label to button: {label}"
