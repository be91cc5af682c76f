# Copyright 2025 Amazon.com, Inc. or its affiliates.
# SPDX-License-Identifier: Apache-2.0

"""
HTML Accessibility Standards.

This module provides constants and utilities for working with WCAG 2.1
accessibility standards and WAI-ARIA role data.
"""

# Define severity levels for accessibility issues
# Higher value = more severe
SEVERITY_LEVELS = {
    "critical": 3,  # Must be fixed - causes accessibility barriers
    "major": 2,  # Should be fixed - significant accessibility issues
    "minor": 1,  # Good to fix - minor accessibility improvements
    "info": 0,  # Informational only - not necessarily an issue
}

# Conformance levels, lowest first
WCAG_LEVELS = ["A", "AA", "AAA"]

# WCAG 2.1 Success Criteria
WCAG_CRITERIA = {
    # Perceivable
    "1.1.1": {"name": "Non-text Content", "level": "A"},
    "1.2.1": {"name": "Audio-only and Video-only (Prerecorded)", "level": "A"},
    "1.2.2": {"name": "Captions (Prerecorded)", "level": "A"},
    "1.2.3": {"name": "Audio Description or Media Alternative", "level": "A"},
    "1.2.4": {"name": "Captions (Live)", "level": "AA"},
    "1.2.5": {"name": "Audio Description", "level": "AA"},
    "1.3.1": {"name": "Info and Relationships", "level": "A"},
    "1.3.2": {"name": "Meaningful Sequence", "level": "A"},
    "1.3.3": {"name": "Sensory Characteristics", "level": "A"},
    "1.3.4": {"name": "Orientation", "level": "AA"},
    "1.3.5": {"name": "Identify Input Purpose", "level": "AA"},
    "1.4.1": {"name": "Use of Color", "level": "A"},
    "1.4.3": {"name": "Contrast (Minimum)", "level": "AA"},
    "1.4.4": {"name": "Resize Text", "level": "AA"},
    "1.4.5": {"name": "Images of Text", "level": "AA"},
    "1.4.6": {"name": "Contrast (Enhanced)", "level": "AAA"},
    "1.4.11": {"name": "Non-text Contrast", "level": "AA"},
    # Operable
    "2.1.1": {"name": "Keyboard", "level": "A"},
    "2.1.2": {"name": "No Keyboard Trap", "level": "A"},
    "2.4.1": {"name": "Bypass Blocks", "level": "A"},
    "2.4.2": {"name": "Page Titled", "level": "A"},
    "2.4.3": {"name": "Focus Order", "level": "A"},
    "2.4.4": {"name": "Link Purpose (In Context)", "level": "A"},
    "2.4.6": {"name": "Headings and Labels", "level": "AA"},
    "2.4.7": {"name": "Focus Visible", "level": "AA"},
    "2.4.9": {"name": "Link Purpose (Link Only)", "level": "AAA"},
    "2.4.10": {"name": "Section Headings", "level": "AAA"},
    "2.5.3": {"name": "Label in Name", "level": "A"},
    # Understandable
    "3.1.1": {"name": "Language of Page", "level": "A"},
    "3.1.2": {"name": "Language of Parts", "level": "AA"},
    "3.2.2": {"name": "On Input", "level": "A"},
    "3.2.5": {"name": "Change on Request", "level": "AAA"},
    "3.3.1": {"name": "Error Identification", "level": "A"},
    "3.3.2": {"name": "Labels or Instructions", "level": "A"},
    # Robust
    "4.1.1": {"name": "Parsing", "level": "A"},
    "4.1.2": {"name": "Name, Role, Value", "level": "A"},
    "4.1.3": {"name": "Status Messages", "level": "AA"},
}

# WAI-ARIA 1.2 roles that may be used in markup (abstract roles excluded)
VALID_ARIA_ROLES = frozenset(
    [
        "alert", "alertdialog", "application", "article", "banner", "blockquote",
        "button", "caption", "cell", "checkbox", "code", "columnheader",
        "combobox", "complementary", "contentinfo", "definition", "deletion",
        "dialog", "directory", "document", "emphasis", "feed", "figure", "form",
        "generic", "grid", "gridcell", "group", "heading", "img", "insertion",
        "link", "list", "listbox", "listitem", "log", "main", "marquee", "math",
        "menu", "menubar", "menuitem", "menuitemcheckbox", "menuitemradio",
        "meter", "navigation", "none", "note", "option", "paragraph",
        "presentation", "progressbar", "radio", "radiogroup", "region", "row",
        "rowgroup", "rowheader", "scrollbar", "search", "searchbox", "separator",
        "slider", "spinbutton", "status", "strong", "subscript", "superscript",
        "switch", "tab", "table", "tablist", "tabpanel", "term", "textbox",
        "time", "timer", "toolbar", "tooltip", "tree", "treegrid", "treeitem",
    ]
)

# Implicit roles of elements where an explicit role of the same name is redundant
IMPLICIT_ROLES = {
    "article": "article",
    "aside": "complementary",
    "button": "button",
    "dialog": "dialog",
    "form": "form",
    "h1": "heading",
    "h2": "heading",
    "h3": "heading",
    "h4": "heading",
    "h5": "heading",
    "h6": "heading",
    "hr": "separator",
    "li": "listitem",
    "main": "main",
    "nav": "navigation",
    "ol": "list",
    "option": "option",
    "progress": "progressbar",
    "select": "combobox",
    "table": "table",
    "textarea": "textbox",
    "ul": "list",
}

# Landmark roles and the elements that carry them implicitly
LANDMARK_ELEMENTS = {
    "banner": ["header"],
    "complementary": ["aside"],
    "contentinfo": ["footer"],
    "form": [],
    "main": ["main"],
    "navigation": ["nav"],
    "region": [],
    "search": ["search"],
}

# ARIA attributes whose values are id references
ARIA_IDREF_ATTRIBUTES = [
    "aria-activedescendant",
    "aria-controls",
    "aria-describedby",
    "aria-details",
    "aria-errormessage",
    "aria-flowto",
    "aria-labelledby",
    "aria-owns",
]

# Elements that are focusable without a tabindex
FOCUSABLE_ELEMENTS = ["a", "button", "input", "select", "textarea", "summary", "iframe"]


def get_criterion_info(criterion_id):
    """
    Get information about a specific WCAG criterion.

    Args:
        criterion_id: The WCAG criterion ID (e.g., '1.1.1')

    Returns:
        Dictionary with criterion information, or empty dict if not found.
    """
    return WCAG_CRITERIA.get(criterion_id, {})


from markup_accessibility.audit.standards.issue_types import (  # noqa: E402
    ISSUE_TYPES,
    get_issue_info,
)

__all__ = [
    "SEVERITY_LEVELS",
    "WCAG_LEVELS",
    "WCAG_CRITERIA",
    "VALID_ARIA_ROLES",
    "IMPLICIT_ROLES",
    "LANDMARK_ELEMENTS",
    "ARIA_IDREF_ATTRIBUTES",
    "FOCUSABLE_ELEMENTS",
    "ISSUE_TYPES",
    "get_criterion_info",
    "get_issue_info",
]
