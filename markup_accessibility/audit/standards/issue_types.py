# Copyright 2025 Amazon.com, Inc. or its affiliates.
# SPDX-License-Identifier: Apache-2.0

"""
HTML Accessibility Issue Types.

This module defines the types of accessibility issues that can be detected and remediated.
"""

# Issue type definitions with their associated WCAG criteria, severity levels
# and the fix an author should apply
ISSUE_TYPES = {
    # Headings and titles
    "no-headings": {
        "wcag": "1.3.1",
        "severity": "major",
        "description": "Document has no heading elements",
        "fix": "Mark up section titles with h1-h6 elements.",
    },
    "no-h1": {
        "wcag": "1.3.1",
        "severity": "major",
        "description": "Document has no main heading (h1)",
        "fix": "Add a single h1 that names the page's main topic.",
    },
    "multiple-h1": {
        "wcag": "1.3.1",
        "severity": "minor",
        "description": "Document has more than one h1",
        "fix": "Keep one h1 and demote the others to h2.",
    },
    "skipped-heading-level": {
        "wcag": "1.3.1",
        "severity": "major",
        "description": "Heading level skipped",
        "fix": "Use a heading one level below the previous heading.",
    },
    "empty-heading": {
        "wcag": "2.4.6",
        "severity": "major",
        "description": "Heading has no text content",
        "fix": "Give the heading descriptive text or remove it.",
    },
    "generic-heading": {
        "wcag": "2.4.6",
        "severity": "minor",
        "description": "Heading has generic text",
        "fix": "Rewrite the heading to describe the section's content.",
    },
    "section-missing-heading": {
        "wcag": "2.4.10",
        "severity": "minor",
        "description": "Sectioning element has no heading",
        "fix": "Start the section with a heading, or use a div if it is not a section.",
    },
    "missing-title": {
        "wcag": "2.4.2",
        "severity": "major",
        "description": "Document missing title element",
        "fix": "Add a <title> in the head that describes the page.",
    },
    "empty-title": {
        "wcag": "2.4.2",
        "severity": "major",
        "description": "Document title is empty",
        "fix": "Put descriptive text in the <title> element.",
    },
    "generic-title": {
        "wcag": "2.4.2",
        "severity": "minor",
        "description": "Document title is generic",
        "fix": "Replace the title with one that names the page's topic.",
    },
    # Document structure and landmarks
    "missing-document-language": {
        "wcag": "3.1.1",
        "severity": "critical",
        "description": "Document language not specified",
        "fix": "Add a lang attribute to the html element, e.g. lang=\"en\".",
    },
    "invalid-document-language": {
        "wcag": "3.1.1",
        "severity": "major",
        "description": "Document language code is invalid",
        "fix": "Use a valid BCP 47 language tag in the lang attribute.",
    },
    "missing-main-landmark": {
        "wcag": "1.3.1",
        "severity": "major",
        "description": "No main landmark",
        "fix": "Wrap the primary content in a <main> element.",
    },
    "missing-skip-link": {
        "wcag": "2.4.1",
        "severity": "major",
        "description": "No skip navigation link",
        "fix": "Add a link at the top of the body pointing at the main content.",
    },
    "missing-navigation-landmark": {
        "wcag": "1.3.1",
        "severity": "minor",
        "description": "No navigation landmark",
        "fix": "Wrap navigation links in a <nav> element.",
    },
    "missing-header-landmark": {
        "wcag": "1.3.1",
        "severity": "minor",
        "description": "No banner landmark",
        "fix": "Wrap the site header in a <header> element.",
    },
    "missing-footer-landmark": {
        "wcag": "1.3.1",
        "severity": "minor",
        "description": "No contentinfo landmark",
        "fix": "Wrap the site footer in a <footer> element.",
    },
    "multiple-main-landmarks": {
        "wcag": "1.3.1",
        "severity": "major",
        "description": "More than one visible main landmark",
        "fix": "Keep a single main landmark per page.",
    },
    "multiple-banner-landmarks": {
        "wcag": "1.3.1",
        "severity": "minor",
        "description": "More than one top-level banner landmark",
        "fix": "Keep one page-level header; nest others inside sectioning elements.",
    },
    "multiple-contentinfo-landmarks": {
        "wcag": "1.3.1",
        "severity": "minor",
        "description": "More than one top-level contentinfo landmark",
        "fix": "Keep one page-level footer; nest others inside sectioning elements.",
    },
    "duplicate-landmark-label": {
        "wcag": "1.3.1",
        "severity": "minor",
        "description": "Landmarks of the same type are not distinguished by labels",
        "fix": "Give each landmark of the same type a unique aria-label.",
    },
    # Images
    "missing-alt-text": {
        "wcag": "1.1.1",
        "severity": "critical",
        "description": "Image missing alternative text",
        "fix": "Add an alt attribute describing the image, or alt=\"\" if decorative.",
    },
    "empty-alt-text": {
        "wcag": "1.1.1",
        "severity": "major",
        "description": "Non-decorative image has empty alternative text",
        "fix": "Describe the image in its alt text or mark it as decorative.",
    },
    "generic-alt-text": {
        "wcag": "1.1.1",
        "severity": "major",
        "description": "Image has generic alternative text",
        "fix": "Replace the alt text with a description of the image content.",
    },
    "long-alt-text": {
        "wcag": "1.1.1",
        "severity": "minor",
        "description": "Alternative text is too long",
        "fix": "Shorten the alt text and move detail into a caption or aria-describedby.",
    },
    "redundant-alt-text": {
        "wcag": "1.1.1",
        "severity": "minor",
        "description": "Alternative text starts with a redundant phrase",
        "fix": "Drop phrases like \"image of\"; screen readers announce images already.",
    },
    "missing-figcaption": {
        "wcag": "1.1.1",
        "severity": "major",
        "description": "Figure element missing figcaption",
        "fix": "Add a <figcaption> describing the figure.",
    },
    "improper-figure-structure": {
        "wcag": "1.1.1",
        "severity": "minor",
        "description": "Complex image is not wrapped in a figure",
        "fix": "Wrap the image in <figure> with a <figcaption>.",
    },
    # Links
    "empty-link-text": {
        "wcag": "2.4.4",
        "severity": "critical",
        "description": "Link has no accessible name",
        "fix": "Add link text, or an aria-label naming the destination.",
    },
    "generic-link-text": {
        "wcag": "2.4.4",
        "severity": "major",
        "description": "Link text is not descriptive",
        "fix": "Rewrite the link text to name its destination.",
    },
    "url-as-link-text": {
        "wcag": "2.4.4",
        "severity": "minor",
        "description": "URL used as link text",
        "fix": "Replace the URL with a description of the destination.",
    },
    "duplicate-link-text-different-url": {
        "wcag": "2.4.9",
        "severity": "minor",
        "description": "Links with the same text go to different destinations",
        "fix": "Make link texts unique per destination.",
    },
    "new-window-link-no-warning": {
        "wcag": "3.2.5",
        "severity": "minor",
        "description": "Link opens a new window without warning",
        "fix": "Tell users the link opens a new window.",
    },
    # Tables
    "table-missing-headers": {
        "wcag": "1.3.1",
        "severity": "critical",
        "description": "Data table has no header cells",
        "fix": "Mark up header cells with <th>.",
    },
    "table-missing-scope": {
        "wcag": "1.3.1",
        "severity": "minor",
        "description": "Table header missing scope attribute",
        "fix": "Add scope=\"col\" or scope=\"row\" to header cells.",
    },
    "table-missing-caption": {
        "wcag": "1.3.1",
        "severity": "minor",
        "description": "Complex table missing caption",
        "fix": "Add a <caption> that summarises the table.",
    },
    "table-missing-thead": {
        "wcag": "1.3.1",
        "severity": "minor",
        "description": "Table header row not in thead",
        "fix": "Move the header row into a <thead> element.",
    },
    "layout-table-with-headers": {
        "wcag": "1.3.1",
        "severity": "major",
        "description": "Presentational table uses data table markup",
        "fix": "Remove th/caption from layout tables, or drop role=\"presentation\".",
    },
    # Color
    "insufficient-color-contrast": {
        "wcag": "1.4.3",
        "severity": "major",
        "description": "Insufficient color contrast",
        "fix": "Raise the contrast to 4.5:1 (3:1 for large text).",
    },
    "potential-color-contrast-issue": {
        "wcag": "1.4.3",
        "severity": "minor",
        "description": "Color contrast could not be determined",
        "fix": "Verify the contrast of this element manually.",
    },
    # Forms
    "form-control-missing-label": {
        "wcag": "1.3.1",
        "severity": "critical",
        "description": "Form control has no associated label",
        "fix": "Associate a <label for> with the control, or add aria-labelledby.",
    },
    "form-control-missing-name": {
        "wcag": "1.3.1",
        "severity": "major",
        "description": "Form control missing name attribute",
        "fix": "Add a name attribute to the control.",
    },
    "form-label-empty": {
        "wcag": "3.3.2",
        "severity": "major",
        "description": "Label element has no text",
        "fix": "Put descriptive text in the label.",
    },
    "label-for-missing-target": {
        "wcag": "1.3.1",
        "severity": "major",
        "description": "Label for attribute references no form control",
        "fix": "Point the for attribute at the id of an existing control.",
    },
    "form-required-field-missing-aria": {
        "wcag": "3.3.2",
        "severity": "minor",
        "description": "Required field missing aria-required",
        "fix": "Add aria-required=\"true\" to the control.",
    },
    "form-required-field-not-indicated": {
        "wcag": "3.3.2",
        "severity": "major",
        "description": "Required field not visually indicated",
        "fix": "Mark the label as required, e.g. with \"(required)\" or an explained asterisk.",
    },
    "form-fieldset-missing-legend": {
        "wcag": "1.3.1",
        "severity": "major",
        "description": "Fieldset missing legend",
        "fix": "Add a <legend> as the first child of the fieldset.",
    },
    "form-related-controls-no-fieldset": {
        "wcag": "1.3.1",
        "severity": "major",
        "description": "Related controls not grouped in a fieldset",
        "fix": "Group the controls in a <fieldset> with a <legend>.",
    },
    "button-missing-name": {
        "wcag": "4.1.2",
        "severity": "critical",
        "description": "Button has no accessible name",
        "fix": "Give the button text content or an aria-label.",
    },
    # ARIA and parsing
    "invalid-aria-role": {
        "wcag": "4.1.2",
        "severity": "major",
        "description": "Element uses an unknown or abstract ARIA role",
        "fix": "Use a valid, non-abstract WAI-ARIA role or remove the attribute.",
    },
    "redundant-aria-role": {
        "wcag": "4.1.2",
        "severity": "minor",
        "description": "Explicit role duplicates the element's implicit role",
        "fix": "Remove the redundant role attribute.",
    },
    "aria-reference-missing-target": {
        "wcag": "1.3.1",
        "severity": "major",
        "description": "ARIA attribute references an id that does not exist",
        "fix": "Point the attribute at an existing id or remove it.",
    },
    "aria-hidden-focusable": {
        "wcag": "4.1.2",
        "severity": "major",
        "description": "Focusable element hidden from assistive technology",
        "fix": "Remove aria-hidden, or take the element out of the tab order.",
    },
    "duplicate-id": {
        "wcag": "4.1.1",
        "severity": "minor",
        "description": "id attribute value is not unique",
        "fix": "Give each element a unique id.",
    },
}


def get_issue_info(issue_type):
    """
    Get information about a specific issue type.

    Args:
        issue_type: The issue type (e.g., 'missing-alt-text')

    Returns:
        Dictionary with issue information, or empty dict if not found.
    """
    return ISSUE_TYPES.get(issue_type, {})
