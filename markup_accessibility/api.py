# Copyright 2025 Amazon.com, Inc. or its affiliates.
# SPDX-License-Identifier: Apache-2.0

"""
Public API for markup accessibility auditing, remediation and skill linting.
"""

import os
from typing import Dict, Any, List, Optional

from markup_accessibility.audit.auditor import AccessibilityAuditor
from markup_accessibility.parser import load_html_file, parse_html, serialize
from markup_accessibility.remediate.remediation_manager import RemediationManager
from markup_accessibility.skills.linter import (
    lint_skill_directory,
    lint_skill_file,
    summarize_findings,
)
from markup_accessibility.utils.config import OPTION_TYPES, config_manager, validate_options
from markup_accessibility.utils.logging_helper import (
    setup_logger,
    handle_exception,
    AccessibilityAuditError,
    AccessibilityRemediationError,
    MarkupAccessibilityError,
    ResourceError,
    SkillLintError,
)
from markup_accessibility.utils.report_generator import generate_report
from markup_accessibility.utils.report_models import create_remediation_summary

# Set up module-level logger
logger = setup_logger(__name__)


def audit_html_accessibility(
    html_path: Optional[str] = None,
    html_content: Optional[str] = None,
    options: Optional[Dict[str, Any]] = None,
    output_path: Optional[str] = None,
) -> Dict[str, Any]:
    """
    Audit an HTML document for accessibility issues.

    Args:
        html_path: Path to the HTML file or directory of HTML files.
        html_content: HTML markup to audit instead of a file.
        options: Audit options; 'report_format' selects the saved report format.
        output_path: Path to save the audit report.

    Returns:
        Dictionary containing audit results.

    Raises:
        AccessibilityAuditError: If there is nothing to audit or the audit fails
        ConfigurationError: If an option has the wrong type
    """
    options = dict(options or {})
    report_format = options.pop("report_format", None) or config_manager.get_config(
        section="report"
    ).get("report_format", "json")
    validate_options(
        config_manager.get_config(options, "audit"), optional_fields=OPTION_TYPES["audit"]
    )

    try:
        auditor = AccessibilityAuditor(
            html_path=html_path, html_content=html_content, options=options
        )
        if not auditor.load_html():
            raise AccessibilityAuditError(f"No HTML content found to audit: {html_path}")
        audit_results = auditor.audit()
    except MarkupAccessibilityError:
        raise
    except Exception as e:
        handle_exception(
            e, logger, "Error auditing HTML accessibility", custom_exception=AccessibilityAuditError
        )

    logger.debug("Number of issues: %d", len(audit_results["issues"]))

    if output_path:
        generate_report(
            audit_results,
            output_path=output_path,
            report_format=report_format,
            report_type="accessibility",
        )
        audit_results["report_path"] = output_path
        logger.debug("Saved %s report to: %s", report_format.upper(), output_path)

    return audit_results


def _issues_for_file(audit_report: Dict[str, Any], file_path: Optional[str]) -> List[Dict[str, Any]]:
    """Get the issues of an audit report that belong to one file."""
    issues = audit_report.get("issues", [])
    issue_paths = [(issue.get("location") or {}).get("file_path") for issue in issues]

    # Reports audited from markup text carry no file paths
    if not file_path or not any(issue_paths):
        return issues

    target = os.path.normpath(file_path)
    return [
        issue for issue, path in zip(issues, issue_paths)
        if path and os.path.normpath(path) == target
    ]


def _remediate_markup(
    content: str,
    file_path: Optional[str],
    audit_report: Optional[Dict[str, Any]],
    options: Dict[str, Any],
) -> Dict[str, Any]:
    """
    Audit (when needed), fix and re-audit one document.

    Returns:
        Remediation results with the corrected markup and both audit summaries
    """
    soup = parse_html(content)

    if audit_report is None:
        audit_report = AccessibilityAuditor(options={"detailed": False}).audit_soup(
            soup, file_path=file_path, content=content
        )

    manager = RemediationManager(soup, options)
    results = manager.remediate_issues(_issues_for_file(audit_report, file_path))

    remediated_html = serialize(soup)

    # Re-parse so the final audit sees the markup as it will be read back
    final_report = AccessibilityAuditor(options={"detailed": False}).audit_soup(
        parse_html(remediated_html), file_path=file_path, content=remediated_html
    )

    results.update(
        {
            "html_path": file_path,
            "remediated_html": remediated_html,
            "summary": create_remediation_summary(results).model_dump(mode="json"),
            "initial_summary": audit_report.get("summary"),
            "final_summary": final_report["summary"],
        }
    )
    return results


def _write_markup(markup: str, output_path: str) -> None:
    output_dir = os.path.dirname(output_path)
    try:
        if output_dir:
            os.makedirs(output_dir, exist_ok=True)
        with open(output_path, "w", encoding="utf-8") as f:
            f.write(markup)
    except OSError as e:
        raise ResourceError(f"Error writing remediated HTML to {output_path}: {e}") from e
    logger.info(f"Saved remediated HTML to {output_path}")


def remediate_html_accessibility(
    html_path: Optional[str] = None,
    html_content: Optional[str] = None,
    audit_report: Optional[Dict[str, Any]] = None,
    options: Optional[Dict[str, Any]] = None,
    output_path: Optional[str] = None,
) -> Dict[str, Any]:
    """
    Remediate accessibility issues in an HTML document.

    The document is audited first when no audit report is given, and audited
    again after the fixes are applied.

    Args:
        html_path: Path to the HTML file or directory of HTML files.
        html_content: HTML markup to remediate instead of a file.
        audit_report: Optional audit report from audit_html_accessibility().
        options: Remediation options (max_issues, issue_types, severity_threshold,
            default_language).
        output_path: Path to save the remediated HTML file, or a directory when
            html_path is a directory.

    Returns:
        Dictionary containing remediation results.

    Raises:
        AccessibilityRemediationError: If remediation fails
        ConfigurationError: If an option has the wrong type
    """
    options = config_manager.get_config(options, "remediate")
    validate_options(options, optional_fields=OPTION_TYPES["remediate"])

    try:
        if html_content is None and html_path and os.path.isdir(html_path):
            return _remediate_directory(html_path, audit_report, options, output_path)

        if html_content is None:
            if not html_path:
                raise AccessibilityRemediationError("No HTML content or path provided")
            _, html_content = load_html_file(html_path)

        result = _remediate_markup(html_content, html_path, audit_report, options)
    except MarkupAccessibilityError:
        raise
    except Exception as e:
        handle_exception(
            e,
            logger,
            "Error remediating HTML accessibility",
            custom_exception=AccessibilityRemediationError,
        )

    if output_path:
        _write_markup(result["remediated_html"], output_path)
    result["remediated_html_path"] = output_path

    logger.info(
        f"Remediated {result['issues_remediated']} of {result['issues_processed']} issues"
    )
    return result


def _remediate_directory(
    html_dir: str,
    audit_report: Optional[Dict[str, Any]],
    options: Dict[str, Any],
    output_dir: Optional[str],
) -> Dict[str, Any]:
    """Remediate every HTML file in a directory, writing results into output_dir."""
    html_files = sorted(
        os.path.join(html_dir, file_name)
        for file_name in os.listdir(html_dir)
        if file_name.lower().endswith(".html")
    )
    if not html_files:
        raise AccessibilityRemediationError(f"No HTML files found in directory: {html_dir}")

    logger.debug(f"Found {len(html_files)} HTML files for multi-page remediation")

    totals = {
        "html_path": html_dir,
        "remediated_html_path": output_dir,
        "issues_processed": 0,
        "issues_remediated": 0,
        "issues_failed": 0,
        "skipped_issues": 0,
        "failed_issue_types": [],
        "details": [],
        "file_results": [],
    }
    failed_types = set()

    for html_file in html_files:
        _, content = load_html_file(html_file)
        file_report = None
        if audit_report is not None:
            file_report = dict(audit_report, issues=_issues_for_file(audit_report, html_file))

        result = _remediate_markup(content, html_file, file_report, options)

        if output_dir:
            result["remediated_html_path"] = os.path.join(
                output_dir, os.path.basename(html_file)
            )
            _write_markup(result["remediated_html"], result["remediated_html_path"])

        for key in ["issues_processed", "issues_remediated", "issues_failed", "skipped_issues"]:
            totals[key] += result[key]
        totals["details"].extend(result["details"])
        failed_types.update(result["failed_issue_types"])
        result.pop("remediated_html")
        totals["file_results"].append(result)

    totals["failed_issue_types"] = sorted(failed_types)
    totals["summary"] = create_remediation_summary(totals).model_dump(mode="json")
    return totals


def process_html_accessibility(
    html_path: str,
    output_dir: str,
    options: Optional[Dict[str, Any]] = None,
) -> Dict[str, Any]:
    """
    Audit, remediate and re-audit a document, writing the fixed markup and reports.

    Args:
        html_path: Path to the HTML file or directory of HTML files.
        output_dir: Directory for the remediated markup and the reports.
        options: Options; 'audit' and 'remediate' sub-dictionaries are passed
            to the matching step, 'report_format' selects the report format.

    Returns:
        Dictionary with the audit results, remediation results and report paths.
    """
    options = options or {}
    report_format = options.get("report_format") or config_manager.get_config(
        section="remediate"
    ).get("report_format", "html")
    extension = "txt" if report_format == "text" else report_format

    audit_options = dict(options.get("audit") or {}, report_format=report_format)
    audit_results = audit_html_accessibility(
        html_path=html_path,
        options=audit_options,
        output_path=os.path.join(output_dir, f"audit_report.{extension}"),
    )

    if os.path.isdir(html_path):
        remediated_path = os.path.join(output_dir, "remediated")
    else:
        remediated_path = os.path.join(output_dir, "remediated", os.path.basename(html_path))

    remediation_results = remediate_html_accessibility(
        html_path=html_path,
        audit_report=audit_results,
        options=options.get("remediate"),
        output_path=remediated_path,
    )

    remediation_report_path = os.path.join(output_dir, f"remediation_report.{extension}")
    generate_report(
        {k: v for k, v in remediation_results.items() if k != "remediated_html"},
        output_path=remediation_report_path,
        report_format=report_format,
        report_type="remediation",
    )

    return {
        "audit": audit_results,
        "remediation": remediation_results,
        "remediated_html_path": remediated_path,
        "report_paths": [audit_results["report_path"], remediation_report_path],
    }


def lint_skill_files(path: str, options: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """
    Lint a skill file, or every skill file in a directory.

    Args:
        path: Markdown file or directory of skill files
        options: Linter options (required_keys, file_pattern, check_error_codes)

    Returns:
        Dictionary with the linted files, findings and a summary

    Raises:
        SkillLintError: If the path does not exist
        ConfigurationError: If an option has the wrong type
    """
    options = config_manager.get_config(options, "skills")
    validate_options(options, optional_fields=OPTION_TYPES["skills"])

    if os.path.isdir(path):
        return lint_skill_directory(path, options)

    if not os.path.isfile(path):
        raise SkillLintError(f"Skill file or directory not found: {path}")

    findings = lint_skill_file(path, options)
    return {
        "files": [path],
        "findings": findings,
        "summary": summarize_findings([path], findings),
    }
