# Copyright 2025 Amazon.com, Inc. or its affiliates.
# SPDX-License-Identifier: Apache-2.0

"""
HTML Accessibility Remediation functionality.
"""

from markup_accessibility.remediate.remediation_manager import RemediationManager

__all__ = ["RemediationManager"]
