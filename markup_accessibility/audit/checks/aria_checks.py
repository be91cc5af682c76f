# Copyright 2025 Amazon.com, Inc. or its affiliates.
# SPDX-License-Identifier: Apache-2.0

"""
ARIA and markup integrity checks.

This module provides checks for ARIA roles, id references and id uniqueness.
"""

from collections import OrderedDict
from typing import Dict, List

from bs4 import Tag

from markup_accessibility.audit.base_check import AccessibilityCheck
from markup_accessibility.audit.standards import (
    ARIA_IDREF_ATTRIBUTES,
    FOCUSABLE_ELEMENTS,
    IMPLICIT_ROLES,
    VALID_ARIA_ROLES,
)


def implicit_role(element: Tag) -> str:
    """Get the implicit ARIA role of an element, or an empty string."""
    if element.name in ("a", "area") and element.has_attr("href"):
        return "link"
    return IMPLICIT_ROLES.get(element.name, "")


def is_focusable(element: Tag) -> bool:
    """
    Check whether an element can receive keyboard focus.

    Args:
        element: Element to inspect

    Returns:
        True for natively focusable elements and elements with a non-negative tabindex
    """
    tabindex = (element.get("tabindex") or "").strip()
    if tabindex.lstrip("-").isdigit():
        return int(tabindex) >= 0

    if element.has_attr("disabled"):
        return False
    if element.has_attr("contenteditable"):
        if (element.get("contenteditable") or "true").lower() != "false":
            return True
    if element.name not in FOCUSABLE_ELEMENTS:
        return False
    if element.name == "a":
        return element.has_attr("href")
    if element.name == "input":
        return (element.get("type") or "").lower() != "hidden"
    return True


class AriaRoleCheck(AccessibilityCheck):
    """Check that role attributes hold valid, non-redundant roles (WCAG 4.1.2)."""

    def check(self) -> None:
        """
        Check role attribute values.

        Issues:
            - invalid-aria-role: When no token of the role attribute is a valid role
            - redundant-aria-role: When the role repeats the element's implicit role
            - compliant-aria-roles: When all explicit roles are valid
        """
        elements = self.soup.find_all(attrs={"role": True})
        if not elements:
            return

        has_issues = False
        for element in elements:
            tokens = (self.get_attribute(element, "role") or "").lower().split()

            if not any(token in VALID_ARIA_ROLES for token in tokens):
                has_issues = True
                self.add_issue(
                    "invalid-aria-role",
                    "4.1.2",
                    "major",
                    element=element,
                    description=f"Invalid ARIA role: '{element.get('role')}'",
                    status="needs_remediation",
                )
            elif tokens == [implicit_role(element)]:
                has_issues = True
                self.add_issue(
                    "redundant-aria-role",
                    "4.1.2",
                    "minor",
                    element=element,
                    description=(
                        f"role='{tokens[0]}' is already implied by <{element.name}>"
                    ),
                    status="needs_remediation",
                )

        if not has_issues:
            self.add_issue(
                "compliant-aria-roles",
                "4.1.2",
                "major",
                element=elements[0],
                description="All ARIA roles are valid",
                status="compliant",
            )


class AriaReferenceCheck(AccessibilityCheck):
    """Check that ARIA id references resolve (WCAG 1.3.1)."""

    def check(self) -> None:
        """
        Check every id referenced from ARIA relationship attributes.

        Issues:
            - aria-reference-missing-target: When a referenced id does not exist
            - compliant-aria-references: When all references resolve
        """
        ids = {
            element["id"]
            for element in self.soup.find_all(attrs={"id": True})
            if isinstance(element["id"], str)
        }

        checked = 0
        has_issues = False
        for element in self.soup.find_all(True):
            for attribute in ARIA_IDREF_ATTRIBUTES:
                value = self.get_attribute(element, attribute)
                if value is None:
                    continue
                checked += 1
                missing = [ref for ref in value.split() if ref not in ids]
                if not missing:
                    continue
                has_issues = True
                self.add_issue(
                    "aria-reference-missing-target",
                    "1.3.1",
                    "major",
                    element=element,
                    description=f"{attribute} references missing id(s): "
                    + ", ".join(f"'{ref}'" for ref in missing),
                    status="needs_remediation",
                    location={"attribute": attribute, "missing_ids": missing},
                )

        if checked and not has_issues:
            self.add_issue(
                "compliant-aria-references",
                "1.3.1",
                "major",
                element=self.document_root,
                description="All ARIA id references resolve",
                status="compliant",
            )


class AriaHiddenFocusableCheck(AccessibilityCheck):
    """Check that hidden content cannot receive focus (WCAG 4.1.2)."""

    def check(self) -> None:
        """
        Check aria-hidden subtrees for focusable elements.

        Issues:
            - aria-hidden-focusable: When a focusable element sits in an aria-hidden subtree
        """
        for container in self.soup.find_all(attrs={"aria-hidden": True}):
            if (container.get("aria-hidden") or "").strip().lower() != "true":
                continue
            # Nested hidden containers are covered by the outermost one
            if container.find_parent(
                lambda tag: (tag.get("aria-hidden") or "").strip().lower() == "true"
            ):
                continue

            for element in [container] + container.find_all(True):
                if is_focusable(element):
                    self.add_issue(
                        "aria-hidden-focusable",
                        "4.1.2",
                        "major",
                        element=element,
                        description=f"Focusable <{element.name}> is inside an "
                        + "aria-hidden='true' subtree",
                        status="needs_remediation",
                    )


class DuplicateIdCheck(AccessibilityCheck):
    """Check that id values are unique (WCAG 4.1.1)."""

    def check(self) -> None:
        """
        Check id attribute uniqueness.

        Issues:
            - duplicate-id: For every element after the first that repeats an id
            - compliant-unique-ids: When all ids are unique
        """
        elements_by_id: Dict[str, List[Tag]] = OrderedDict()
        for element in self.soup.find_all(attrs={"id": True}):
            element_id = self.get_attribute(element, "id")
            if element_id:
                elements_by_id.setdefault(element_id, []).append(element)

        if not elements_by_id:
            return

        has_issues = False
        for element_id, elements in elements_by_id.items():
            for duplicate in elements[1:]:
                has_issues = True
                self.add_issue(
                    "duplicate-id",
                    "4.1.1",
                    "minor",
                    element=duplicate,
                    description=f"id '{element_id}' is used by {len(elements)} elements",
                    status="needs_remediation",
                )

        if not has_issues:
            self.add_issue(
                "compliant-unique-ids",
                "4.1.1",
                "minor",
                element=self.document_root,
                description="All id values are unique",
                status="compliant",
            )
