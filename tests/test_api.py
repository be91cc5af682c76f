# Copyright 2025 Amazon.com, Inc. or its affiliates.
# SPDX-License-Identifier: Apache-2.0

import json
import os

import pytest

from conftest import BAD_HTML, GOOD_HTML, write_file

from markup_accessibility.api import (
    _issues_for_file,
    audit_html_accessibility,
    lint_skill_files,
    process_html_accessibility,
    remediate_html_accessibility,
)
from markup_accessibility.parser import parse_html
from markup_accessibility.utils.logging_helper import (
    AccessibilityAuditError,
    AccessibilityRemediationError,
    ConfigurationError,
    SkillLintError,
)


def test_audit_content_without_report():
    result = audit_html_accessibility(html_content=BAD_HTML, options={"detailed": False})

    assert result["summary"]["needs_remediation"] == 14
    assert "report_path" not in result


def test_audit_writes_report(tmp_path, bad_html_file):
    output_path = tmp_path / "reports" / "audit.json"

    result = audit_html_accessibility(
        html_path=str(bad_html_file),
        options={"report_format": "json"},
        output_path=str(output_path),
    )

    assert result["report_path"] == str(output_path)
    saved = json.loads(output_path.read_text(encoding="utf-8"))
    assert saved["summary"]["needs_remediation"] == 14
    assert saved["issues"][0]["location"]["file_name"] == "annual-report.html"


def test_audit_report_format_from_config(tmp_path, monkeypatch):
    monkeypatch.setenv("MARKUP_A11Y_REPORT_REPORT_FORMAT", "text")
    output_path = tmp_path / "audit.txt"

    audit_html_accessibility(html_content=GOOD_HTML, output_path=str(output_path))

    assert output_path.read_text(encoding="utf-8").startswith("ACCESSIBILITY AUDIT REPORT")


def test_audit_missing_path(tmp_path):
    with pytest.raises(AccessibilityAuditError):
        audit_html_accessibility(html_path=str(tmp_path / "missing.html"))


def test_remediate_file(tmp_path, bad_html_file):
    output_path = tmp_path / "out" / "fixed.html"

    result = remediate_html_accessibility(html_path=str(bad_html_file), output_path=str(output_path))

    assert result["issues_processed"] == 14
    assert result["issues_remediated"] == 11
    assert result["skipped_issues"] == 3
    assert result["remediated_html_path"] == str(output_path)
    assert result["summary"]["remediated_issues"] == 11
    assert result["initial_summary"]["needs_remediation"] == 14
    assert result["final_summary"]["needs_remediation"] < 14

    soup = parse_html(output_path.read_text(encoding="utf-8"))
    assert soup.title.string == "Annual report"
    assert soup.find("img")["alt"] == "Team photo"
    assert soup.html["lang"] == "en"


def test_remediate_content_with_options():
    result = remediate_html_accessibility(
        html_content=BAD_HTML,
        options={"issue_types": ["missing-alt-text"], "default_language": "fr"},
    )

    assert result["issues_processed"] == 1
    assert result["issues_remediated"] == 1
    assert result["remediated_html_path"] is None
    assert 'alt="' in result["remediated_html"]
    assert "lang=" not in result["remediated_html"]


def test_remediate_uses_given_audit_report():
    report = audit_html_accessibility(html_content=BAD_HTML, options={"issue_types": ["duplicate-id"]})

    result = remediate_html_accessibility(html_content=BAD_HTML, audit_report=report)

    assert [d["type"] for d in result["details"]] == ["duplicate-id"]
    assert result["initial_summary"] == report["summary"]


def test_remediate_without_input():
    with pytest.raises(AccessibilityRemediationError):
        remediate_html_accessibility()


def test_remediate_directory(tmp_path):
    pages = tmp_path / "pages"
    write_file(pages / "page-1.html", BAD_HTML)
    write_file(pages / "page-2.html", GOOD_HTML)
    output_dir = tmp_path / "fixed"

    result = remediate_html_accessibility(html_path=str(pages), output_path=str(output_dir))

    assert result["issues_processed"] == 14
    assert result["skipped_issues"] == 3
    assert result["issues_remediated"] + result["issues_failed"] == 11
    assert [r["remediated_html_path"] for r in result["file_results"]] == [
        str(output_dir / "page-1.html"),
        str(output_dir / "page-2.html"),
    ]
    assert "remediated_html" not in result["file_results"][0]
    assert (output_dir / "page-1.html").exists()
    assert (output_dir / "page-2.html").exists()


def test_remediate_empty_directory(tmp_path):
    with pytest.raises(AccessibilityRemediationError):
        remediate_html_accessibility(html_path=str(tmp_path))


REQUIRED_FORM = """<html lang="en"><head><title>Sign up</title></head><body><main>
<form><label for="x">Name</label><input {attrs} id="x"></form>
</main></body></html>
"""


def test_remediate_directory_with_audit_report_keeps_issues_per_file(tmp_path):
    pages = tmp_path / "pages"
    write_file(pages / "a.html", REQUIRED_FORM.format(attrs="required"))
    write_file(pages / "b.html", REQUIRED_FORM.format(attrs='type="text"'))
    output_dir = tmp_path / "fixed"

    report = audit_html_accessibility(
        html_path=str(pages), options={"checks": ["FormRequiredFieldCheck"], "detailed": False}
    )
    result = remediate_html_accessibility(
        html_path=str(pages), audit_report=report, output_path=str(output_dir)
    )

    assert result["issues_processed"] == 1
    assert [r["issues_processed"] for r in result["file_results"]] == [1, 0]
    assert 'aria-required="true"' in (output_dir / "a.html").read_text(encoding="utf-8")
    assert "aria-required" not in (output_dir / "b.html").read_text(encoding="utf-8")


def test_issues_for_file_matches_normalized_paths(tmp_path):
    page = str(tmp_path / "pages" / "a.html")
    report = {
        "issues": [
            {"type": "one", "location": {"file_path": page}},
            {"type": "two", "location": {"file_path": str(tmp_path / "pages" / "b.html")}},
        ]
    }
    variant = os.path.join(str(tmp_path), "pages", "..", "pages", ".", "a.html")

    assert [issue["type"] for issue in _issues_for_file(report, variant)] == ["one"]
    assert _issues_for_file({"issues": [{"type": "three", "location": {}}]}, page)[0]["type"] == "three"


def test_process_writes_outputs(tmp_path, bad_html_file):
    output_dir = tmp_path / "processed"

    result = process_html_accessibility(
        str(bad_html_file), str(output_dir), {"report_format": "json"}
    )

    assert result["remediated_html_path"] == str(output_dir / "remediated" / "annual-report.html")
    assert result["report_paths"] == [
        str(output_dir / "audit_report.json"),
        str(output_dir / "remediation_report.json"),
    ]
    assert (output_dir / "remediated" / "annual-report.html").exists()

    remediation = json.loads((output_dir / "remediation_report.json").read_text(encoding="utf-8"))
    assert remediation["issues_remediated"] == 11
    assert "remediated_html" not in remediation
    assert result["audit"]["summary"]["needs_remediation"] == 14


def test_process_text_reports(tmp_path, bad_html_file):
    result = process_html_accessibility(str(bad_html_file), str(tmp_path), {"report_format": "text"})
    assert result["report_paths"][1] == str(tmp_path / "remediation_report.txt")
    assert (tmp_path / "remediation_report.txt").read_text(encoding="utf-8").startswith(
        "ACCESSIBILITY REMEDIATION REPORT"
    )


def test_lint_single_file(tmp_path):
    path = write_file(tmp_path / "skill.md", "---\nname: fixer\n---\n# Fixer\n")

    result = lint_skill_files(str(path))

    assert result["files"] == [str(path)]
    assert [f["message"] for f in result["findings"]] == ["Required key 'description' is missing"]
    assert result["summary"] == {"files": 1, "errors": 1, "warnings": 0, "by_code": {"SK003": 1}}


def test_lint_directory(tmp_path):
    write_file(tmp_path / "one" / "skill.md", "---\nname: one\ndescription: d\n---\n# One\n")
    write_file(tmp_path / "two" / "skill.md", "---\nname: one\ndescription: d\n---\n# Two\n")

    result = lint_skill_files(str(tmp_path))

    assert result["summary"]["files"] == 2
    assert result["summary"]["by_code"] == {"SK010": 1}


def test_lint_missing_path(tmp_path):
    with pytest.raises(SkillLintError):
        lint_skill_files(str(tmp_path / "missing.md"))


def test_option_types_are_validated(tmp_path):
    with pytest.raises(ConfigurationError, match="max_issues"):
        remediate_html_accessibility(html_content=BAD_HTML, options={"max_issues": "5"})
    with pytest.raises(ConfigurationError, match="include_outline"):
        audit_html_accessibility(html_content=BAD_HTML, options={"include_outline": "yes"})
    with pytest.raises(ConfigurationError, match="required_keys"):
        lint_skill_files(str(tmp_path), {"required_keys": 3})


def test_configured_option_types_are_validated(tmp_path, monkeypatch):
    monkeypatch.setenv("MARKUP_A11Y_REMEDIATE_MAX_ISSUES", "many")

    with pytest.raises(ConfigurationError, match="max_issues"):
        remediate_html_accessibility(html_content=BAD_HTML)
