# Copyright 2025 Amazon.com, Inc. or its affiliates.
# SPDX-License-Identifier: Apache-2.0

"""
Frontmatter parsing for skill files.

Frontmatter is a YAML block delimited by ``---`` lines at the very start of
a Markdown file.
"""

import re
from dataclasses import dataclass
from typing import Any, Optional, Tuple

import yaml

_FRONTMATTER = re.compile(
    r"\A\ufeff?---[ \t]*\r?\n(?P<yaml>.*?)(?:\r?\n)?^---[ \t]*(?:\r?\n|\Z)",
    re.DOTALL | re.MULTILINE,
)


@dataclass
class FrontmatterError:
    """A YAML error in a frontmatter block, with its 1-based file line."""

    message: str
    line: int


def split_frontmatter(raw: str) -> Tuple[Any, str, Optional[FrontmatterError]]:
    """
    Split skill file content into YAML frontmatter and Markdown body.

    Args:
        raw: Full text content of a skill file

    Returns:
        A ``(metadata, body, error)`` tuple. *metadata* is None when the file
        has no frontmatter, ``{}`` for an empty block, and otherwise whatever
        the YAML holds. When the YAML does not parse, *metadata* is None and
        *error* describes the problem. *body* is the text after the closing
        delimiter, unstripped, so line numbers can be recovered from it.
    """
    match = _FRONTMATTER.match(raw)
    if not match:
        return None, raw, None

    body = raw[match.end():]
    try:
        metadata = yaml.safe_load(match.group("yaml"))
    except yaml.YAMLError as e:
        line = 2
        mark = getattr(e, "problem_mark", None)
        if mark is not None:
            # Block starts on the line after the opening delimiter
            line = mark.line + 2
        problem = getattr(e, "problem", None) or str(e)
        return None, body, FrontmatterError(f"Frontmatter is not valid YAML: {problem}", line)

    if metadata is None:
        metadata = {}
    return metadata, body, None


def body_start_line(raw: str, body: str) -> int:
    """Get the 1-based line number on which the body starts."""
    return raw[: len(raw) - len(body)].count("\n") + 1
