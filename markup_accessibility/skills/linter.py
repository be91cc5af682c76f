# Copyright 2025 Amazon.com, Inc. or its affiliates.
# SPDX-License-Identifier: Apache-2.0

"""
Skill file linter.

Checks Markdown skill files for well-formed frontmatter and for consistency
between the error codes a document mentions and the "Error Codes" table that
defines them. Files without frontmatter are treated as reference guides and
only get the body checks.
"""

import os
import re
from collections import OrderedDict
from pathlib import Path
from typing import Dict, Any, List, Optional, Tuple

from markup_accessibility.skills.frontmatter import body_start_line, split_frontmatter
from markup_accessibility.utils.config import as_list
from markup_accessibility.utils.logging_helper import setup_logger, SkillLintError

# Set up module-level logger
logger = setup_logger(__name__)

LINT_RULES = OrderedDict(
    [
        ("SK001", ("error", "Frontmatter YAML does not parse")),
        ("SK002", ("error", "Frontmatter is not a mapping")),
        ("SK003", ("error", "Required frontmatter key is missing")),
        ("SK004", ("error", "Skill name has an invalid format")),
        ("SK005", ("error", "Frontmatter field has the wrong type")),
        ("SK006", ("error", "Retry block is invalid")),
        ("SK007", ("warning", "Error code is referenced but not defined")),
        ("SK008", ("warning", "Skill body is empty")),
        ("SK009", ("warning", "Dependency names an unknown skill")),
        ("SK010", ("error", "Skill name is used by more than one file")),
        ("SK011", ("warning", "Error code is defined more than once")),
        ("SK012", ("error", "Skill file cannot be read")),
    ]
)

# Lowercase alphanumeric and single hyphens, no leading or trailing hyphen
NAME_PATTERN = re.compile(r"^[a-z0-9]([a-z0-9-]*[a-z0-9])?$")
NAME_MAX_LENGTH = 64

FIELD_TYPES = {
    "name": (str, "a string"),
    "description": (str, "a string"),
    "category": (str, "a string"),
    "complexity": (str, "a string"),
    "dependencies": (list, "a list"),
    "parameters": (dict, "a mapping"),
    "retry": (dict, "a mapping"),
}

# Codes such as HB001, A11Y002, FORM003 or E001
ERROR_CODE_PATTERN = re.compile(r"\b(?:[A-Z][A-Z0-9]*[A-Z]|[A-Z])\d{3}\b")
HEADING_PATTERN = re.compile(r"^(#{1,6})\s+(.*?)\s*#*\s*$")
TABLE_ROW_PATTERN = re.compile(r"^\s*\|(.*)\|\s*$")
TABLE_SEPARATOR_PATTERN = re.compile(r"^\s*\|?\s*:?-{3,}")
FENCE_PATTERN = re.compile(r"^\s*(```|~~~)")


def _finding(code: str, message: str, file_path: str, line: Optional[int]) -> Dict[str, Any]:
    return {
        "code": code,
        "severity": LINT_RULES[code][0],
        "message": message,
        "file_path": file_path,
        "line": line,
    }


def _key_line(raw: str, key: str) -> Optional[int]:
    """Find the line of a top-level frontmatter key."""
    pattern = re.compile(rf"^{re.escape(key)}\s*:", re.MULTILINE)
    match = pattern.search(raw)
    return raw.count("\n", 0, match.start()) + 1 if match else None


def parse_error_code_tables(
    body: str, first_line: int = 1
) -> Tuple[Dict[str, List[int]], List[Tuple[str, int]]]:
    """
    Collect error code definitions and references from a Markdown body.

    A definition is a code in the first column of a table under a heading
    that mentions "error codes". Every other occurrence of a code is a
    reference.

    Args:
        body: Markdown text
        first_line: File line number of the first body line

    Returns:
        Tuple of (code -> lines it is defined on, [(code, line) references])
    """
    definitions: Dict[str, List[int]] = OrderedDict()
    references: List[Tuple[str, int]] = []
    in_code_section = False
    in_fence = False

    for offset, text in enumerate(body.splitlines()):
        line = first_line + offset

        if FENCE_PATTERN.match(text):
            in_fence = not in_fence

        heading = None if in_fence else HEADING_PATTERN.match(text)
        if heading:
            in_code_section = "error code" in heading.group(2).lower()

        row = TABLE_ROW_PATTERN.match(text)
        if in_code_section and row and not TABLE_SEPARATOR_PATTERN.match(text):
            cells = row.group(1).split("|")
            defined = ERROR_CODE_PATTERN.fullmatch(cells[0].strip().strip("`*"))
            if defined:
                definitions.setdefault(defined.group(0), []).append(line)
                rest = "|".join(cells[1:])
                references.extend((code, line) for code in ERROR_CODE_PATTERN.findall(rest))
                continue

        references.extend((code, line) for code in ERROR_CODE_PATTERN.findall(text))

    return definitions, references


def _check_metadata(
    metadata: Dict[str, Any],
    raw: str,
    file_path: str,
    required_keys: List[str],
) -> List[Dict[str, Any]]:
    findings = []

    for key in required_keys:
        value = metadata.get(key)
        if value is None or (isinstance(value, str) and not value.strip()):
            findings.append(
                _finding("SK003", f"Required key '{key}' is missing", file_path, 1)
            )

    for key, (expected_type, type_name) in FIELD_TYPES.items():
        value = metadata.get(key)
        if value is not None and not isinstance(value, expected_type):
            findings.append(
                _finding(
                    "SK005",
                    f"Field '{key}' must be {type_name}, got {type(value).__name__}",
                    file_path,
                    _key_line(raw, key),
                )
            )

    dependencies = metadata.get("dependencies")
    if isinstance(dependencies, list):
        for dependency in dependencies:
            if not isinstance(dependency, str):
                findings.append(
                    _finding(
                        "SK005",
                        f"Dependency {dependency!r} must be a skill name string",
                        file_path,
                        _key_line(raw, "dependencies"),
                    )
                )

    name = metadata.get("name")
    if isinstance(name, str) and name:
        if len(name) > NAME_MAX_LENGTH:
            findings.append(
                _finding(
                    "SK004",
                    f"Name '{name}' exceeds {NAME_MAX_LENGTH} characters",
                    file_path,
                    _key_line(raw, "name"),
                )
            )
        if "--" in name or not NAME_PATTERN.match(name):
            findings.append(
                _finding(
                    "SK004",
                    f"Name '{name}' must be lowercase alphanumeric and single hyphens, "
                    "not starting or ending with a hyphen",
                    file_path,
                    _key_line(raw, "name"),
                )
            )

    retry = metadata.get("retry")
    if isinstance(retry, dict):
        findings.extend(
            _finding("SK006", message, file_path, _key_line(raw, "retry"))
            for message in validate_retry(retry)
        )

    return findings


def validate_retry(retry: Dict[str, Any]) -> List[str]:
    """
    Validate a retry block.

    Args:
        retry: Mapping with max_attempts and backoff_ms

    Returns:
        Problems found, empty when the block is valid
    """
    problems = []
    max_attempts = retry.get("max_attempts")
    if max_attempts is not None and (
        isinstance(max_attempts, bool) or not isinstance(max_attempts, int) or max_attempts < 1
    ):
        problems.append(f"retry.max_attempts must be a positive integer, got {max_attempts!r}")
        max_attempts = None

    backoff = retry.get("backoff_ms")
    if backoff is None:
        return problems

    if not isinstance(backoff, list) or not all(
        isinstance(delay, int) and not isinstance(delay, bool) and delay >= 0
        for delay in backoff
    ):
        problems.append("retry.backoff_ms must be a list of non-negative integers")
    elif isinstance(max_attempts, int) and len(backoff) != max_attempts:
        problems.append(
            f"retry.backoff_ms has {len(backoff)} entries but max_attempts is {max_attempts}"
        )
    return problems


def _read(path: str) -> str:
    try:
        with open(path, "r", encoding="utf-8") as f:
            return f.read()
    except (OSError, UnicodeDecodeError) as e:
        raise SkillLintError(f"Error reading skill file {path}: {e}") from e


def lint_skill_text(
    raw: str, file_path: str, options: Optional[Dict[str, Any]] = None
) -> Tuple[Optional[Dict[str, Any]], List[Dict[str, Any]]]:
    """
    Lint skill file text.

    Args:
        raw: Full file content
        file_path: Path reported in findings
        options: Linter options

    Returns:
        Tuple of (frontmatter mapping or None, findings)
    """
    options = options or {}
    required_keys = as_list(options.get("required_keys")) or []
    findings = []

    metadata, body, error = split_frontmatter(raw)
    if error is not None:
        findings.append(_finding("SK001", error.message, file_path, error.line))
    elif metadata is not None and not isinstance(metadata, dict):
        findings.append(
            _finding(
                "SK002",
                f"Frontmatter must be a mapping, got {type(metadata).__name__}",
                file_path,
                1,
            )
        )
        metadata = None
    elif metadata is not None:
        findings.extend(_check_metadata(metadata, raw, file_path, required_keys))

    first_line = body_start_line(raw, body)
    if not body.strip():
        findings.append(_finding("SK008", "Skill body is empty", file_path, first_line))

    if options.get("check_error_codes", True):
        definitions, references = parse_error_code_tables(body, first_line)
        for code, lines in definitions.items():
            for line in lines[1:]:
                findings.append(
                    _finding(
                        "SK011",
                        f"Error code {code} is already defined on line {lines[0]}",
                        file_path,
                        line,
                    )
                )

        # Codes are only checked against a file's own table
        if definitions:
            reported = set()
            for code, line in references:
                if code not in definitions and code not in reported:
                    reported.add(code)
                    findings.append(
                        _finding(
                            "SK007",
                            f"Error code {code} is not defined in the Error Codes table",
                            file_path,
                            line,
                        )
                    )

    return metadata, findings


def lint_skill_file(path: str, options: Optional[Dict[str, Any]] = None) -> List[Dict[str, Any]]:
    """
    Lint a single skill file.

    Args:
        path: Path to a Markdown skill file
        options: Linter options (required_keys, check_error_codes)

    Returns:
        List of findings with code, severity, message, file_path and line

    Raises:
        SkillLintError: If the file cannot be read
    """
    _, findings = lint_skill_text(_read(path), path, options)
    logger.debug(f"Linted {path}: {len(findings)} findings")
    return findings


def lint_skill_directory(path: str, options: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """
    Lint every skill file in a directory tree.

    Adds the cross-file checks: dependencies must name a skill in the
    directory and skill names must be unique. A file that cannot be read is
    reported as SK012 and the other files are still linted.

    Args:
        path: Directory to search
        options: Linter options (required_keys, file_pattern, check_error_codes)

    Returns:
        Dictionary with files, findings and summary

    Raises:
        SkillLintError: If the directory does not exist
    """
    options = options or {}
    if not os.path.isdir(path):
        raise SkillLintError(f"Skill directory not found: {path}")

    pattern = options.get("file_pattern") or "*.md"
    files = sorted(str(file_path) for file_path in Path(path).rglob(pattern) if file_path.is_file())
    logger.debug(f"Found {len(files)} skill files in {path}")

    findings: List[Dict[str, Any]] = []
    skills: List[Tuple[str, str, Dict[str, Any]]] = []

    for file_path in files:
        try:
            raw = _read(file_path)
        except SkillLintError as e:
            logger.warning(str(e))
            findings.append(
                _finding("SK012", f"Cannot read skill file: {e.__cause__}", file_path, None)
            )
            continue
        metadata, file_findings = lint_skill_text(raw, file_path, options)
        findings.extend(file_findings)
        if isinstance(metadata, dict) and isinstance(metadata.get("name"), str):
            skills.append((file_path, raw, metadata))

    first_file_by_name: Dict[str, str] = {}
    for file_path, raw, metadata in skills:
        name = metadata["name"]
        if name in first_file_by_name:
            findings.append(
                _finding(
                    "SK010",
                    f"Skill name '{name}' is already used by {first_file_by_name[name]}",
                    file_path,
                    _key_line(raw, "name"),
                )
            )
        else:
            first_file_by_name[name] = file_path

    for file_path, raw, metadata in skills:
        dependencies = metadata.get("dependencies")
        if not isinstance(dependencies, list):
            continue
        for dependency in dependencies:
            if isinstance(dependency, str) and dependency not in first_file_by_name:
                findings.append(
                    _finding(
                        "SK009",
                        f"Dependency '{dependency}' does not name a skill in {path}",
                        file_path,
                        _key_line(raw, "dependencies"),
                    )
                )

    return {"files": files, "findings": findings, "summary": summarize_findings(files, findings)}


def summarize_findings(files: List[str], findings: List[Dict[str, Any]]) -> Dict[str, Any]:
    """Count findings by severity and by code."""
    by_code: Dict[str, int] = {}
    for finding in findings:
        by_code[finding["code"]] = by_code.get(finding["code"], 0) + 1
    errors = len([f for f in findings if f["severity"] == "error"])
    return {
        "files": len(files),
        "errors": errors,
        "warnings": len(findings) - errors,
        "by_code": dict(sorted(by_code.items())),
    }


def format_lint_text(result: Dict[str, Any]) -> str:
    """
    Render lint results as text, one finding per line.

    Lines have the form ``path:line: CODE severity: message``.
    """
    lines = []
    for finding in result.get("findings", []):
        location = finding["file_path"]
        if finding.get("line"):
            location = f"{location}:{finding['line']}"
        lines.append(
            f"{location}: {finding['code']} {finding['severity']}: {finding['message']}"
        )

    summary = result.get("summary") or {}
    lines.append(
        f"{summary.get('files', 0)} file(s) checked: "
        f"{summary.get('errors', 0)} error(s), {summary.get('warnings', 0)} warning(s)"
    )
    return "\n".join(lines)
