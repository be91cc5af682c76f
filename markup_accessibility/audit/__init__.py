# Copyright 2025 Amazon.com, Inc. or its affiliates.
# SPDX-License-Identifier: Apache-2.0

"""
Accessibility audit module for HTML documents.

This module provides functionality for auditing HTML documents for accessibility issues
against WCAG 2.1 accessibility standards.
"""

from markup_accessibility.audit.auditor import AccessibilityAuditor

__all__ = ["AccessibilityAuditor"]
