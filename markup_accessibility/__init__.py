# Copyright 2025 Amazon.com, Inc. or its affiliates.
# SPDX-License-Identifier: Apache-2.0

"""
Markup Accessibility Package.

This package provides tools for auditing HTML markup for WCAG 2.1 and WAI-ARIA
issues, fixing the issues that have a deterministic fix, and linting the
Markdown skill files that document HTML authoring guidance.

Main Components:
- HTML parsing and heading outline
- HTML accessibility auditing
- HTML accessibility remediation
- Skill file linting
"""

__version__ = "0.3.0"
