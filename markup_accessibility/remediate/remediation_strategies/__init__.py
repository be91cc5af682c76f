# Copyright 2025 Amazon.com, Inc. or its affiliates.
# SPDX-License-Identifier: Apache-2.0

"""
Remediation strategies for HTML accessibility issues.

Every strategy has the signature ``(soup, issue, element=None, options=None)``
and returns a message describing the fix, or None when it could not be applied.
"""

from markup_accessibility.remediate.remediation_strategies.document_structure_remediation import (
    remediate_missing_document_title,
    remediate_missing_language,
)
from markup_accessibility.remediate.remediation_strategies.heading_remediation import (
    remediate_missing_h1,
    remediate_skipped_heading_level,
    remediate_multiple_h1,
    remediate_empty_heading,
)
from markup_accessibility.remediate.remediation_strategies.landmark_remediation import (
    remediate_missing_main_landmark,
    remediate_missing_skip_link,
)
from markup_accessibility.remediate.remediation_strategies.image_remediation import (
    remediate_missing_alt_text,
    remediate_redundant_alt_text,
    remediate_missing_figcaption,
)
from markup_accessibility.remediate.remediation_strategies.link_remediation import (
    remediate_empty_link_text,
    remediate_new_window_link_no_warning,
)
from markup_accessibility.remediate.remediation_strategies.table_remediation import (
    remediate_table_missing_headers,
    remediate_table_missing_scope,
    remediate_table_missing_thead,
)
from markup_accessibility.remediate.remediation_strategies.form_remediation import (
    remediate_form_control_missing_label,
    remediate_form_required_field_missing_aria,
    remediate_form_fieldset_missing_legend,
    remediate_button_missing_name,
)
from markup_accessibility.remediate.remediation_strategies.aria_remediation import (
    remediate_aria_role,
    remediate_aria_hidden_focusable,
    remediate_duplicate_id,
)

STRATEGIES = {
    # Document structure
    "missing-title": remediate_missing_document_title,
    "empty-title": remediate_missing_document_title,
    "missing-document-language": remediate_missing_language,
    "invalid-document-language": remediate_missing_language,
    # Headings
    "no-h1": remediate_missing_h1,
    "skipped-heading-level": remediate_skipped_heading_level,
    "multiple-h1": remediate_multiple_h1,
    "empty-heading": remediate_empty_heading,
    # Landmarks
    "missing-main-landmark": remediate_missing_main_landmark,
    "missing-skip-link": remediate_missing_skip_link,
    # Images
    "missing-alt-text": remediate_missing_alt_text,
    "redundant-alt-text": remediate_redundant_alt_text,
    "missing-figcaption": remediate_missing_figcaption,
    # Links
    "empty-link-text": remediate_empty_link_text,
    "new-window-link-no-warning": remediate_new_window_link_no_warning,
    # Tables
    "table-missing-headers": remediate_table_missing_headers,
    "table-missing-scope": remediate_table_missing_scope,
    "table-missing-thead": remediate_table_missing_thead,
    # Forms
    "form-control-missing-label": remediate_form_control_missing_label,
    "form-required-field-missing-aria": remediate_form_required_field_missing_aria,
    "form-fieldset-missing-legend": remediate_form_fieldset_missing_legend,
    "button-missing-name": remediate_button_missing_name,
    # ARIA and ids
    "invalid-aria-role": remediate_aria_role,
    "redundant-aria-role": remediate_aria_role,
    "aria-hidden-focusable": remediate_aria_hidden_focusable,
    "duplicate-id": remediate_duplicate_id,
}

AUTO_FIXABLE_ISSUE_TYPES = frozenset(STRATEGIES)

# Fixed at document level; the reported element is only a location hint
DOCUMENT_LEVEL_ISSUES = frozenset(
    [
        "missing-title",
        "empty-title",
        "missing-document-language",
        "invalid-document-language",
        "no-h1",
        "missing-main-landmark",
        "missing-skip-link",
    ]
)

__all__ = ["STRATEGIES", "AUTO_FIXABLE_ISSUE_TYPES", "DOCUMENT_LEVEL_ISSUES"]
