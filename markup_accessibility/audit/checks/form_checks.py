# Copyright 2025 Amazon.com, Inc. or its affiliates.
# SPDX-License-Identifier: Apache-2.0

"""
Form-related accessibility checks.

This module provides checks for proper form accessibility.
"""

from collections import OrderedDict
from typing import List, Dict, Optional

from bs4 import BeautifulSoup, Tag

from markup_accessibility.audit.base_check import AccessibilityCheck
from markup_accessibility.audit.checks.structure_checks import accessible_label

# Input types that need no label: they are hidden or labelled by their value
UNLABELLED_INPUT_TYPES = ["hidden", "submit", "reset", "button", "image"]

LABELABLE_ELEMENTS = ["input", "select", "textarea", "button", "meter", "output", "progress"]

GROUPING_ROLES = ["group", "radiogroup"]


def form_controls(soup: BeautifulSoup) -> List[Tag]:
    """Get the input, select and textarea elements that need a label."""
    controls = []
    for control in soup.find_all(["input", "select", "textarea"]):
        if control.name == "input":
            input_type = (control.get("type") or "text").lower()
            if input_type in UNLABELLED_INPUT_TYPES:
                continue
        controls.append(control)
    return controls


def associated_labels(control: Tag) -> List[Tag]:
    """
    Find the label elements associated with a form control.

    Args:
        control: Form control

    Returns:
        Labels referencing the control by id, plus a wrapping label
    """
    root = control
    while root.parent is not None:
        root = root.parent

    labels = []
    control_id = control.get("id")
    if control_id:
        labels.extend(root.find_all("label", attrs={"for": control_id}))

    parent_label = control.find_parent("label")
    if parent_label is not None and not any(label is parent_label for label in labels):
        labels.append(parent_label)
    return labels


def control_label_text(control: Tag) -> Optional[str]:
    """
    Compute the label text of a form control.

    Args:
        control: Form control

    Returns:
        Label text from aria-labelledby, aria-label, label elements or title
    """
    label = accessible_label(control)
    if label:
        return label

    texts = [label.get_text(" ", strip=True) for label in associated_labels(control)]
    text = " ".join(text for text in texts if text)
    if text:
        return text

    # Placeholder text disappears on input and does not count as a label
    return (control.get("title") or "").strip() or None


class FormLabelCheck(AccessibilityCheck):
    """Check for proper form labels (WCAG 1.3.1, 3.3.2)."""

    def check(self) -> None:
        """
        Check if form controls have proper labels.

        Issues:
            - form-control-missing-label: When a form control has no associated label
            - form-control-missing-name: When a form control has no name attribute
            - form-label-empty: When a label element has no text content
            - label-for-missing-target: When a label's for attribute matches no control
            - compliant-form-label: When a form control is labelled
        """
        for control in form_controls(self.soup):
            control_type = (
                (control.get("type") or "text").lower()
                if control.name == "input"
                else control.name
            )

            if not control.has_attr("name"):
                self.add_issue(
                    "form-control-missing-name",
                    "1.3.1",
                    "major",
                    element=control,
                    description=f"Form control ({control_type}) missing name attribute",
                    status="needs_remediation",
                )

            if control_label_text(control):
                self.add_issue(
                    "compliant-form-label",
                    "1.3.1",
                    "critical",
                    element=control,
                    description=f"Form control ({control_type}) has an associated label",
                    status="compliant",
                )
            else:
                self.add_issue(
                    "form-control-missing-label",
                    "1.3.1",
                    "critical",
                    element=control,
                    description=f"Form control ({control_type}) has no associated label",
                    status="needs_remediation",
                )

        for label in self.soup.find_all("label"):
            if not self.get_element_text(label):
                self.add_issue(
                    "form-label-empty",
                    "3.3.2",
                    "major",
                    element=label,
                    description="Label element has no text content",
                    status="needs_remediation",
                )

            target_id = label.get("for")
            if target_id is None:
                continue
            target = self.soup.find(attrs={"id": target_id})
            if target is None or target.name not in LABELABLE_ELEMENTS:
                self.add_issue(
                    "label-for-missing-target",
                    "1.3.1",
                    "major",
                    element=label,
                    description=(
                        f"Label for='{target_id}' references "
                        + ("no element" if target is None else f"a <{target.name}> element")
                    ),
                    status="needs_remediation",
                )


class FormRequiredFieldCheck(AccessibilityCheck):
    """Check for proper indication of required form fields (WCAG 3.3.2)."""

    def check(self) -> None:
        """
        Check if required form fields are properly indicated.

        Issues:
            - form-required-field-not-indicated: When a required field is not visually indicated
            - form-required-field-missing-aria: When a required field doesn't have aria-required
        """
        for control in form_controls(self.soup):
            is_required = (
                control.has_attr("required")
                or (control.get("aria-required") or "").lower() == "true"
            )
            if not is_required:
                continue

            if not control.has_attr("aria-required"):
                self.add_issue(
                    "form-required-field-missing-aria",
                    "3.3.2",
                    "minor",
                    element=control,
                    description="Required form field missing aria-required='true' attribute",
                    status="needs_remediation",
                )

            label_text = control_label_text(control) or ""
            if "*" in label_text or "required" in label_text.lower():
                self.add_issue(
                    "compliant-required-field",
                    "3.3.2",
                    "major",
                    element=control,
                    description="Required form field is indicated in its label",
                    status="compliant",
                )
            else:
                self.add_issue(
                    "form-required-field-not-indicated",
                    "3.3.2",
                    "major",
                    element=control,
                    description="Required form field not visually indicated as required",
                    status="needs_remediation",
                )


class FormFieldsetCheck(AccessibilityCheck):
    """Check for proper use of fieldset and legend (WCAG 1.3.1)."""

    def check(self) -> None:
        """
        Check if related form controls are grouped with fieldset and legend.

        Issues:
            - form-fieldset-missing-legend: When a fieldset has no legend
            - form-related-controls-no-fieldset: When radio buttons or checkboxes
              sharing a name are not grouped
        """
        for fieldset in self.soup.find_all("fieldset"):
            legend = fieldset.find("legend", recursive=False)
            if not legend or not self.get_element_text(legend):
                self.add_issue(
                    "form-fieldset-missing-legend",
                    "1.3.1",
                    "major",
                    element=fieldset,
                    description="Fieldset missing legend element or legend has no content",
                    status="needs_remediation",
                )

        for input_type in ("radio", "checkbox"):
            groups: Dict[str, List[Tag]] = OrderedDict()
            for control in self.soup.find_all("input", attrs={"type": input_type}):
                name = control.get("name")
                if name:
                    groups.setdefault(name, []).append(control)

            for name, controls in groups.items():
                if len(controls) < 2 or any(self._is_grouped(c) for c in controls):
                    continue
                self.add_issue(
                    "form-related-controls-no-fieldset",
                    "1.3.1",
                    "major",
                    element=controls[0],
                    description=f"Group of {len(controls)} {input_type} inputs named "
                    + f"'{name}' should be wrapped in fieldset with legend",
                    status="needs_remediation",
                )

    def _is_grouped(self, control: Tag) -> bool:
        if control.find_parent("fieldset"):
            return True
        return control.find_parent(
            lambda tag: (tag.get("role") or "").lower() in GROUPING_ROLES
        ) is not None


class ButtonNameCheck(AccessibilityCheck):
    """Check that buttons have an accessible name (WCAG 4.1.2)."""

    def check(self) -> None:
        """
        Check buttons for an accessible name.

        Issues:
            - button-missing-name: When a button has no text, label, title or value
            - compliant-button-name: When a button has an accessible name
        """
        buttons = self.soup.find_all(
            lambda tag: tag.name == "button"
            or (
                tag.name == "input"
                and (tag.get("type") or "").lower() in ("button", "image")
            )
            or (tag.get("role") or "").strip().lower() == "button"
        )

        for button in buttons:
            if self.is_hidden(button):
                continue
            if self._button_name(button):
                self.add_issue(
                    "compliant-button-name",
                    "4.1.2",
                    "critical",
                    element=button,
                    description="Button has an accessible name",
                    status="compliant",
                )
            else:
                self.add_issue(
                    "button-missing-name",
                    "4.1.2",
                    "critical",
                    element=button,
                    description=f"<{button.name}> button has no accessible name",
                    status="needs_remediation",
                )

    def _button_name(self, button: Tag) -> str:
        label = accessible_label(button)
        if label:
            return label

        if button.name == "input":
            attribute = "alt" if (button.get("type") or "").lower() == "image" else "value"
            value = (button.get(attribute) or "").strip()
        else:
            value = self.get_element_text(button)
            if not value:
                alts = [img["alt"].strip() for img in button.find_all("img", alt=True)]
                value = " ".join(alt for alt in alts if alt)

        return value or (button.get("title") or "").strip()
