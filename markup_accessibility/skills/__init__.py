# Copyright 2025 Amazon.com, Inc. or its affiliates.
# SPDX-License-Identifier: Apache-2.0

"""
Linting for Markdown skill files with YAML frontmatter.
"""

from markup_accessibility.skills.frontmatter import split_frontmatter
from markup_accessibility.skills.linter import (
    LINT_RULES,
    lint_skill_file,
    lint_skill_directory,
)

__all__ = ["split_frontmatter", "LINT_RULES", "lint_skill_file", "lint_skill_directory"]
