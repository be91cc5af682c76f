# Copyright 2025 Amazon.com, Inc. or its affiliates.
# SPDX-License-Identifier: Apache-2.0

"""
Accessibility checks package.

This package contains all the specific accessibility checks that can be performed.
CHECK_REGISTRY lists them in the order the auditor runs them. Issues are
remediated in report order, so the title comes before the checks whose fixes
read it.
"""

from collections import OrderedDict

from markup_accessibility.audit.checks.heading_checks import (
    HeadingHierarchyCheck,
    HeadingContentCheck,
    DocumentTitleCheck,
    SectionHeadingCheck,
)
from markup_accessibility.audit.checks.structure_checks import (
    DocumentLanguageCheck,
    MainLandmarkCheck,
    SkipLinkCheck,
    LandmarksCheck,
    LandmarkUniquenessCheck,
)
from markup_accessibility.audit.checks.image_checks import (
    AltTextCheck,
    FigureStructureCheck,
)
from markup_accessibility.audit.checks.link_checks import (
    LinkTextCheck,
    NewWindowLinkCheck,
)
from markup_accessibility.audit.checks.table_checks import (
    TableHeaderCheck,
    TableStructureCheck,
)
from markup_accessibility.audit.checks.color_contrast_checks import ColorContrastCheck
from markup_accessibility.audit.checks.form_checks import (
    FormLabelCheck,
    FormRequiredFieldCheck,
    FormFieldsetCheck,
    ButtonNameCheck,
)
from markup_accessibility.audit.checks.aria_checks import (
    AriaRoleCheck,
    AriaReferenceCheck,
    AriaHiddenFocusableCheck,
    DuplicateIdCheck,
)

CHECK_REGISTRY = OrderedDict(
    (check.__name__, check)
    for check in [
        DocumentTitleCheck,
        DocumentLanguageCheck,
        HeadingHierarchyCheck,
        HeadingContentCheck,
        SectionHeadingCheck,
        MainLandmarkCheck,
        SkipLinkCheck,
        LandmarksCheck,
        LandmarkUniquenessCheck,
        AltTextCheck,
        FigureStructureCheck,
        LinkTextCheck,
        NewWindowLinkCheck,
        TableHeaderCheck,
        TableStructureCheck,
        ColorContrastCheck,
        FormLabelCheck,
        FormRequiredFieldCheck,
        FormFieldsetCheck,
        ButtonNameCheck,
        AriaRoleCheck,
        AriaReferenceCheck,
        AriaHiddenFocusableCheck,
        DuplicateIdCheck,
    ]
)

__all__ = ["CHECK_REGISTRY"] + list(CHECK_REGISTRY)
