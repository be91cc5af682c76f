# Copyright 2025 Amazon.com, Inc. or its affiliates.
# SPDX-License-Identifier: Apache-2.0

"""
Document structure accessibility checks.

This module provides checks for document language and landmarks.
"""

import re
from collections import defaultdict
from typing import Dict, List, Optional

from bs4 import Tag

from markup_accessibility.audit.base_check import AccessibilityCheck
from markup_accessibility.audit.standards import LANDMARK_ELEMENTS
from markup_accessibility.utils.logging_helper import setup_logger

# Set up module-level logger
logger = setup_logger(__name__)

# Primary language subtag followed by optional script/region/variant subtags
LANGUAGE_TAG_PATTERN = re.compile(r"^[A-Za-z]{2,3}(-[A-Za-z0-9]{1,8})*$")

# header/footer inside these elements are not banner/contentinfo landmarks
SCOPING_ELEMENTS = ["article", "aside", "main", "nav", "section"]

# Landmark roles that may legitimately appear more than once on a page
REPEATABLE_LANDMARKS = ["navigation", "complementary", "region", "search", "form"]


def accessible_label(element: Tag) -> Optional[str]:
    """
    Get the label an element carries through aria-labelledby or aria-label.

    Args:
        element: Element to inspect

    Returns:
        Label text, or None when the element is unlabelled
    """
    labelledby = element.get("aria-labelledby")
    if labelledby:
        root = element
        while root.parent is not None:
            root = root.parent
        texts = []
        for ref in labelledby.split():
            target = root.find(attrs={"id": ref})
            if target:
                texts.append(target.get_text(" ", strip=True))
        label = " ".join(text for text in texts if text)
        if label:
            return label

    label = (element.get("aria-label") or "").strip()
    return label or None


def landmark_role(element: Tag) -> Optional[str]:
    """
    Get the landmark role of an element, explicit or implicit.

    Args:
        element: Element to inspect

    Returns:
        Landmark role name, or None if the element is not a landmark
    """
    role = (element.get("role") or "").strip().lower()
    if role:
        return role if role in LANDMARK_ELEMENTS else None

    name = element.name
    if name in ("header", "footer"):
        if element.find_parent(SCOPING_ELEMENTS):
            return None
        return "banner" if name == "header" else "contentinfo"
    if name in ("section", "form"):
        # Only labelled sections and forms are exposed as landmarks
        if accessible_label(element):
            return "region" if name == "section" else "form"
        return None

    for landmark, tags in LANDMARK_ELEMENTS.items():
        if name in tags:
            return landmark
    return None


class DocumentLanguageCheck(AccessibilityCheck):
    """Check for document language declaration (WCAG 3.1.1)."""

    def check(self) -> None:
        """
        Check if the document has a language attribute on the html element.

        Issues:
            - missing-document-language: When the html element has no lang attribute
            - invalid-document-language: When the lang attribute is not a language tag
            - compliant-document-language: When the document has a valid language attribute
        """
        html_tag = self.soup.find("html")

        if not html_tag:
            logger.debug("No html element, skipping language check")
            return

        if not html_tag.has_attr("lang"):
            self.add_issue(
                "missing-document-language",
                "3.1.1",
                "critical",
                element=html_tag,
                description="Document missing language attribute on HTML element",
                status="needs_remediation",
            )
            return

        lang = html_tag["lang"].strip()
        if not LANGUAGE_TAG_PATTERN.match(lang):
            self.add_issue(
                "invalid-document-language",
                "3.1.1",
                "major",
                element=html_tag,
                description=f"Document has invalid language code: '{lang}'",
                status="needs_remediation",
            )
        else:
            self.add_issue(
                "compliant-document-language",
                "3.1.1",
                "critical",
                element=html_tag,
                description=f"Document has valid language attribute: '{lang}'",
                status="compliant",
            )


class MainLandmarkCheck(AccessibilityCheck):
    """Check for main landmark (WCAG 1.3.1)."""

    def check(self) -> None:
        """
        Check if the document has a main landmark.

        Issues:
            - missing-main-landmark: When there is no main element or role="main"
            - compliant-main-landmark: When there is a main element or role="main"
        """
        main_element = self.soup.find("main") or self.soup.find(attrs={"role": "main"})

        if not main_element:
            self.add_issue(
                "missing-main-landmark",
                "1.3.1",
                "major",
                element=self.document_root,
                description="Document missing main landmark (main element or role='main')",
                status="needs_remediation",
            )
        else:
            self.add_issue(
                "compliant-main-landmark",
                "1.3.1",
                "major",
                element=main_element,
                description="Document has proper main landmark",
                status="compliant",
            )


class SkipLinkCheck(AccessibilityCheck):
    """Check for skip navigation link (WCAG 2.4.1)."""

    def check(self) -> None:
        """
        Check if the document has a skip navigation link.

        Only the first few links are considered; a skip link has to come
        before the blocks it bypasses.

        Issues:
            - missing-skip-link: When there is no skip navigation link
            - compliant-skip-link: When there is a skip navigation link
        """
        skip_link = None
        for link in self.soup.find_all("a", limit=5):
            href = link.get("href", "")
            text = self.get_element_text(link).lower()

            if len(href) > 1 and href.startswith("#") and (
                "skip" in text or "jump" in text or "content" in text or "main" in text
            ):
                skip_link = link
                break

        if not skip_link:
            self.add_issue(
                "missing-skip-link",
                "2.4.1",
                "major",
                element=self.document_root,
                description="Document missing skip navigation link",
                status="needs_remediation",
            )
        else:
            self.add_issue(
                "compliant-skip-link",
                "2.4.1",
                "major",
                element=skip_link,
                description="Document has proper skip navigation link",
                status="compliant",
            )


class LandmarksCheck(AccessibilityCheck):
    """Check for navigation, banner and contentinfo landmarks (WCAG 1.3.1)."""

    LANDMARKS = [
        ("navigation", "nav", "missing-navigation-landmark", "navigation"),
        ("banner", "header", "missing-header-landmark", "header"),
        ("contentinfo", "footer", "missing-footer-landmark", "footer"),
    ]

    def check(self) -> None:
        """
        Check if the document has proper landmarks for navigation.

        Issues:
            - missing-navigation-landmark: When there is no nav element or role="navigation"
            - missing-header-landmark: When there is no header element or role="banner"
            - missing-footer-landmark: When there is no footer element or role="contentinfo"
            - compliant-*-landmark: When the landmark is present
        """
        for role, tag, issue_type, label in self.LANDMARKS:
            element = self.soup.find(tag) or self.soup.find(attrs={"role": role})

            if not element:
                self.add_issue(
                    issue_type,
                    "1.3.1",
                    "minor",
                    element=self.document_root,
                    description=f"Document missing {label} landmark "
                    + f"({tag} element or role='{role}')",
                    status="needs_remediation",
                )
            else:
                self.add_issue(
                    f"compliant-{label}-landmark",
                    "1.3.1",
                    "minor",
                    element=element,
                    description=f"Document has proper {label} landmark",
                    status="compliant",
                )


class LandmarkUniquenessCheck(AccessibilityCheck):
    """Check that landmarks are unique or distinguishable (WCAG 1.3.1)."""

    SINGLE_LANDMARKS = {
        "main": ("multiple-main-landmarks", "major"),
        "banner": ("multiple-banner-landmarks", "minor"),
        "contentinfo": ("multiple-contentinfo-landmarks", "minor"),
    }

    def check(self) -> None:
        """
        Check landmark uniqueness.

        Issues:
            - multiple-main-landmarks: More than one visible main landmark
            - multiple-banner-landmarks: More than one page-level banner
            - multiple-contentinfo-landmarks: More than one page-level contentinfo
            - duplicate-landmark-label: Same-type landmarks share a label or have none
            - compliant-landmark-uniqueness: When landmarks are unique
        """
        by_role: Dict[str, List[Tag]] = defaultdict(list)
        for element in self.soup.find_all(True):
            role = landmark_role(element)
            if role and not self.is_hidden(element):
                by_role[role].append(element)

        if not by_role:
            return

        has_issues = False

        for role, (issue_type, severity) in self.SINGLE_LANDMARKS.items():
            for extra in by_role.get(role, [])[1:]:
                has_issues = True
                self.add_issue(
                    issue_type,
                    "1.3.1",
                    severity,
                    element=extra,
                    description=f"Additional {role} landmark on the page",
                    status="needs_remediation",
                )

        for role in REPEATABLE_LANDMARKS:
            elements = by_role.get(role, [])
            if len(elements) < 2:
                continue

            seen = set()
            for element in elements:
                label = accessible_label(element)
                key = (label or "").lower()
                if key in seen or not label:
                    has_issues = True
                    self.add_issue(
                        "duplicate-landmark-label",
                        "1.3.1",
                        "minor",
                        element=element,
                        description=(
                            f"{len(elements)} {role} landmarks; this one is "
                            + (f"also labelled '{label}'" if label else "unlabelled")
                        ),
                        status="needs_remediation",
                    )
                seen.add(key)

        if not has_issues:
            first = next(iter(by_role.values()))[0]
            self.add_issue(
                "compliant-landmark-uniqueness",
                "1.3.1",
                "minor",
                element=first,
                description="Landmarks are unique or uniquely labelled",
                status="compliant",
            )
