# Copyright 2025 Amazon.com, Inc. or its affiliates.
# SPDX-License-Identifier: Apache-2.0

"""
Heading structure accessibility checks.

This module provides checks for proper heading structure and content.
"""

from markup_accessibility.audit.base_check import AccessibilityCheck

GENERIC_HEADING_TEXTS = ["heading", "title", "subtitle", "header", "section", "untitled"]
GENERIC_TITLE_TEXTS = ["untitled", "document", "page", "new page", "title", "home"]


class HeadingHierarchyCheck(AccessibilityCheck):
    """Check for proper heading hierarchy (WCAG 1.3.1)."""

    def check(self) -> None:
        """
        Check if the document has proper heading hierarchy.

        Issues:
            - no-headings: When the document has no visible headings
            - no-h1: When the document has no level-1 heading
            - multiple-h1: For every level-1 heading after the first
            - skipped-heading-level: When heading levels are skipped (e.g., h1 to h3)
            - compliant-heading-hierarchy: When the document has proper heading hierarchy
        """
        headings = self.outline.headings

        if not headings:
            self.add_issue(
                "no-headings",
                "1.3.1",
                "major",
                element=self.document_root,
                description="Document has no heading elements",
                status="needs_remediation",
            )
            return

        top_level = self.outline.headings_at(1)
        if not top_level:
            self.add_issue(
                "no-h1",
                "1.3.1",
                "major",
                element=self.document_root,
                description="Document has no main heading (h1)",
                status="needs_remediation",
            )

        for extra in top_level[1:]:
            self.add_issue(
                "multiple-h1",
                "1.3.1",
                "minor",
                element=extra.element,
                description=f"Additional level-1 heading: '{extra.text}'",
                status="needs_remediation",
            )

        skipped = self.outline.skipped_levels()
        for previous, heading in skipped:
            self.add_issue(
                "skipped-heading-level",
                "1.3.1",
                "major",
                element=heading.element,
                description=(
                    f"Heading level skipped from H{previous.level} to H{heading.level}"
                ),
                status="needs_remediation",
            )

        if top_level and not skipped:
            self.add_issue(
                "compliant-heading-hierarchy",
                "1.3.1",
                "major",
                element=headings[0].element,
                description="Document has proper heading hierarchy",
                status="compliant",
            )


class HeadingContentCheck(AccessibilityCheck):
    """Check for proper heading content (WCAG 2.4.6)."""

    def check(self) -> None:
        """
        Check if headings have proper content.

        Issues:
            - empty-heading: When a heading has no text content
            - generic-heading: When a heading has generic text like "Heading"
            - compliant-heading-content: When headings have proper content
        """
        headings = self.outline.headings
        if not headings:
            return

        has_issues = False
        for heading in headings:
            text = heading.text

            if not text:
                # An image inside the heading can still name it
                img = heading.element.find("img", alt=True)
                if img and img["alt"].strip():
                    continue
                has_issues = True
                self.add_issue(
                    "empty-heading",
                    "2.4.6",
                    "major",
                    element=heading.element,
                    description="Heading has no text content",
                    status="needs_remediation",
                )
            elif text.lower() in GENERIC_HEADING_TEXTS:
                has_issues = True
                self.add_issue(
                    "generic-heading",
                    "2.4.6",
                    "minor",
                    element=heading.element,
                    description=f"Heading has generic text: '{text}'",
                    status="needs_remediation",
                )

        if not has_issues:
            self.add_issue(
                "compliant-heading-content",
                "2.4.6",
                "major",
                element=headings[0].element,
                description="Document has proper heading content",
                status="compliant",
            )


class DocumentTitleCheck(AccessibilityCheck):
    """Check for document title (WCAG 2.4.2)."""

    def check(self) -> None:
        """
        Check if the document has a proper title.

        Issues:
            - missing-title: When the document has no title element
            - empty-title: When the title element has no text content
            - generic-title: When the title has generic text like "Untitled"
            - compliant-document-title: When the document has a proper title
        """
        title = self.soup.find("title")

        if not title:
            self.add_issue(
                "missing-title",
                "2.4.2",
                "major",
                element=self.soup.find("head") or self.soup.find("html") or self.document_root,
                description="Document missing title element",
                status="needs_remediation",
            )
            return

        title_text = self.get_element_text(title)

        if not title_text:
            self.add_issue(
                "empty-title",
                "2.4.2",
                "major",
                element=title,
                description="Document has empty title element",
                status="needs_remediation",
            )
        elif title_text.lower() in GENERIC_TITLE_TEXTS:
            self.add_issue(
                "generic-title",
                "2.4.2",
                "minor",
                element=title,
                description=f"Document has generic title: '{title_text}'",
                status="needs_remediation",
            )
        else:
            self.add_issue(
                "compliant-document-title",
                "2.4.2",
                "major",
                element=title,
                description="Document has proper title",
                status="compliant",
            )


class SectionHeadingCheck(AccessibilityCheck):
    """Check that sections and articles start with a heading (WCAG 2.4.10)."""

    def check(self) -> None:
        """
        Check sectioning content for headings.

        Navigation and complementary sections are exempt; they are usually
        identified by their landmark label instead.

        Issues:
            - section-missing-heading: When a section or article has no heading
            - compliant-section-headings: When every section has a heading
        """
        sections = [
            info
            for info in self.outline.sections
            if info.element.name in ("article", "section")
            and not self.is_hidden(info.element)
        ]
        if not sections:
            return

        missing = [info for info in sections if info.heading is None]
        for info in missing:
            self.add_issue(
                "section-missing-heading",
                "2.4.10",
                "minor",
                element=info.element,
                description=f"<{info.element.name}> element has no heading",
                status="needs_remediation",
            )

        if not missing:
            self.add_issue(
                "compliant-section-headings",
                "2.4.10",
                "minor",
                element=sections[0].element,
                description="All sections have headings",
                status="compliant",
            )
