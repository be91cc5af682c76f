# Copyright 2025 Amazon.com, Inc. or its affiliates.
# SPDX-License-Identifier: Apache-2.0

"""
Generate reports for accessibility audits and remediations.

This module provides functionality for generating accessibility reports in various formats,
including a unified report that combines audit and remediation data.
"""

import os
import json
from typing import Dict, Any, List

from defusedcsv import csv
from flask import Flask, render_template

from markup_accessibility.utils.logging_helper import setup_logger

# Set up module-level logger
logger = setup_logger(__name__)

REPORT_FORMATS = ["json", "html", "text", "csv"]

# Keys that would pull element trees into a report
_SKIPPED_KEYS = ("parent", "children", "_parent", "_children", "soup", "element_tag")


def generate_report(
    report_data: Dict[str, Any],
    output_path: str,
    report_format: str = "html",
    report_type: str = "accessibility",
) -> Dict[str, Any]:
    """
    Generate a report in the specified format.

    Args:
        report_data: Dictionary containing the report data
        output_path: Path where the report will be saved
        report_format: Type of report to generate ('html', 'json', 'text', or 'csv')
        report_type: Type of report ('accessibility', 'remediation', or 'unified')

    Returns:
        Report data as written
    """
    # Make sure the output directory exists
    output_dir = os.path.dirname(output_path)
    if output_dir:
        os.makedirs(output_dir, exist_ok=True)

    # "unified" is an HTML report
    if report_format == "unified":
        logger.debug("Handling 'unified' as HTML format")
        report_format = "html"

    if report_format == "json":
        return generate_json_report(report_data, output_path)
    elif report_format == "html":
        return generate_html_report(report_data, output_path, report_type)
    elif report_format == "text":
        return generate_text_report(report_data, output_path, report_type)
    elif report_format == "csv":
        return generate_csv_report(report_data, output_path, report_type)
    else:
        logger.warning(f"Unknown report format: {report_format}, using JSON")
        return generate_json_report(report_data, output_path)


def generate_json_report(
    report_data: Dict[str, Any], output_path: str
) -> Dict[str, Any]:
    """
    Generate a JSON report.

    Args:
        report_data: Dictionary containing the report data
        output_path: Path where the report will be saved

    Returns:
        The report data
    """
    serializable_data = prepare_for_json_serialization(report_data)

    with open(output_path, "w", encoding="utf-8") as f:
        json.dump(serializable_data, f, indent=2)

    logger.info(f"Generated JSON report: {output_path}")
    return report_data


def prepare_for_json_serialization(data, depth=20, visited=None):
    """
    Prepare a data structure for JSON serialization by removing circular references and limiting recursion depth.

    Args:
        data: The data to prepare
        depth: Maximum recursion depth (default: 20)
        visited: Set of object IDs to detect circular references (default: None)

    Returns:
        A JSON-serializable version of the data
    """
    if visited is None:
        visited = set()

    if depth <= 0:
        return "Recursion depth exceeded"

    if isinstance(data, (str, int, float, bool, type(None))):
        return data

    if isinstance(data, (list, tuple, set, frozenset)):
        return [prepare_for_json_serialization(item, depth - 1, visited) for item in data]

    if isinstance(data, dict):
        object_id = id(data)
        if object_id in visited:
            return "Circular reference detected"
        visited.add(object_id)

        result = {}
        for key, value in data.items():
            if key in _SKIPPED_KEYS:
                continue
            result[str(key)] = prepare_for_json_serialization(value, depth - 1, visited)
        visited.remove(object_id)
        return result

    # Pydantic models
    if hasattr(data, "model_dump"):
        return prepare_for_json_serialization(data.model_dump(mode="json"), depth - 1, visited)

    # Dates, enums, element trees and anything else
    if hasattr(data, "isoformat"):
        return data.isoformat()
    return str(data)


def report_issues(report_data: Dict[str, Any]) -> List[Dict[str, Any]]:
    """Get the issue records of an audit report or the details of a remediation report."""
    issues = report_data.get("issues")
    if isinstance(issues, list) and issues:
        return issues
    details = report_data.get("details")
    return details if isinstance(details, list) else []


def prepare_unified_report_data(report_data: Dict[str, Any]) -> Dict[str, Any]:
    """
    Prepare data for a unified report that combines audit and remediation information.

    Args:
        report_data: Dictionary containing report data (audit data, remediation data, or both)

    Returns:
        Processed data ready for the unified report template
    """
    unified_data = dict(report_data)
    summary = report_data.get("summary") or {}

    has_remediation = "details" in report_data or "issues_processed" in report_data
    unified_data["has_remediation"] = has_remediation

    for key in ["total_issues", "needs_remediation", "compliant", "score", "conformance_level"]:
        if key in summary:
            unified_data[key] = summary[key]

    issues = report_issues(report_data)
    failures = [i for i in issues if i.get("remediation_status") != "compliant"]

    severity_counts = {"critical": 0, "major": 0, "minor": 0, "info": 0}
    issue_type_counts: Dict[str, int] = {}
    for issue in failures:
        severity = issue.get("severity", "minor")
        if severity in severity_counts:
            severity_counts[severity] += 1
        issue_type = issue.get("type", "unknown")
        issue_type_counts[issue_type] = issue_type_counts.get(issue_type, 0) + 1

    unified_data["severity_counts"] = severity_counts
    unified_data["issue_type_counts"] = dict(
        sorted(issue_type_counts.items(), key=lambda item: (-item[1], item[0]))
    )
    unified_data["failures"] = failures
    unified_data["compliant_count"] = len(issues) - len(failures)
    unified_data.setdefault("total_issues", len(issues))

    if has_remediation:
        unified_data.setdefault("issues_processed", len(issues))
        unified_data.setdefault(
            "issues_remediated",
            len([i for i in issues if i.get("remediation_status") == "remediated"]),
        )
        unified_data.setdefault(
            "issues_failed",
            len([i for i in issues if i.get("remediation_status") == "failed"]),
        )

    return unified_data


def generate_html_report(
    report_data: Dict[str, Any], output_path: str, report_type: str
) -> Dict[str, Any]:
    """
    Generate an HTML report using Flask's render_template.

    Args:
        report_data: Dictionary containing the report data
        output_path: Path where the report will be saved
        report_type: Type of report ('accessibility', 'remediation' or 'unified')

    Returns:
        The report data
    """
    unified_data = prepare_unified_report_data(report_data)
    unified_data["report_type"] = report_type

    try:
        # Templates are resolved relative to this module
        app = Flask(__name__)

        with app.app_context():
            html = render_template("unified_report.html", report=unified_data)

        with open(output_path, "w", encoding="utf-8") as f:
            f.write(html)

        logger.info(f"Generated HTML report: {output_path}")
        return unified_data

    except Exception as e:
        logger.error(f"Failed to generate HTML report with Flask: {e}", exc_info=True)
        logger.warning("Falling back to JSON report since Flask rendering failed")
        return generate_json_report(report_data, output_path)


def _location_text(location: Dict[str, Any]) -> str:
    parts = []
    if location.get("file_name"):
        parts.append(str(location["file_name"]))
    if location.get("line") is not None:
        parts.append(f"line {location['line']}, column {location.get('column')}")
    return ", ".join(parts)


def format_text_report(report_data: Dict[str, Any], report_type: str = None) -> str:
    """
    Render a report as plain text.

    Compliant records are counted in the summary but not listed.

    Args:
        report_data: Audit or remediation report
        report_type: Type of report; detected from the data when omitted

    Returns:
        Report text
    """
    if report_type is None:
        report_type = "remediation" if "details" in report_data else "accessibility"

    text = []
    if report_type == "accessibility":
        text.append("ACCESSIBILITY AUDIT REPORT")
    elif report_type == "unified":
        text.append("ACCESSIBILITY AUDIT & REMEDIATION REPORT")
    else:
        text.append("ACCESSIBILITY REMEDIATION REPORT")
    text.append("=" * 80)
    text.append("")

    text.append("SUMMARY")
    text.append("-" * 80)

    if report_data.get("html_path"):
        text.append(f"File: {report_data['html_path']}")

    summary = report_data.get("summary") or {}
    if "score" in summary:
        text.append(f"Score: {summary['score']}")
        text.append(f"Conformance level: {summary.get('conformance_level', 'none')}")
    if "needs_remediation" in summary:
        text.append(f"Issues needing remediation: {summary['needs_remediation']}")
        text.append(f"Compliant checks: {summary.get('compliant', 0)}")
        text.append(f"Auto-fixable issues: {summary.get('auto_fixable', 0)}")
        counts = summary.get("severity_counts") or {}
        text.append(
            "Severity: "
            + ", ".join(f"{severity} {count}" for severity, count in counts.items())
        )

    for key, label in [
        ("issues_processed", "Issues processed"),
        ("issues_remediated", "Issues remediated"),
        ("issues_failed", "Issues failed"),
        ("skipped_issues", "Issues skipped"),
    ]:
        if key in report_data:
            text.append(f"{label}: {report_data[key]}")

    final_summary = report_data.get("final_summary") or {}
    if "score" in final_summary:
        text.append(
            f"Score after remediation: {final_summary['score']} "
            f"(conformance level: {final_summary.get('conformance_level', 'none')})"
        )

    text.append("")
    text.append("ISSUES")
    text.append("-" * 80)

    issues = [
        issue
        for issue in report_issues(report_data)
        if issue.get("remediation_status") != "compliant"
    ]
    if not issues:
        text.append("No issues found.")
        text.append("")

    for issue in issues:
        location = issue.get("location") or {}
        criterion = f" (WCAG {issue['wcag_criterion']})" if issue.get("wcag_criterion") else ""
        text.append(
            f"[{issue.get('severity', 'unknown')}] {issue.get('type', 'unknown')}{criterion}"
        )
        where = _location_text(location)
        if where:
            text.append(f"  Location: {where}")
        if location.get("path"):
            text.append(f"  Path: {location['path']}")
        text.append(f"  {issue.get('description') or issue.get('message', '')}")

        if "remediation_details" in issue:
            details = issue.get("remediation_details") or {}
            text.append(f"  Status: {issue.get('remediation_status', 'unknown')}")
            if details.get("failure_reason"):
                text.append(f"  Reason: {details['failure_reason']}")
        elif issue.get("suggested_fix"):
            fixable = " (auto-fixable)" if issue.get("auto_fixable") else ""
            text.append(f"  Fix{fixable}: {issue['suggested_fix']}")
        text.append("")

    return "\n".join(text)


def generate_text_report(
    report_data: Dict[str, Any], output_path: str, report_type: str
) -> Dict[str, Any]:
    """
    Generate a text report.

    Args:
        report_data: Dictionary containing the report data
        output_path: Path where the report will be saved
        report_type: Type of report ('accessibility', 'remediation' or 'unified')

    Returns:
        The report data
    """
    with open(output_path, "w", encoding="utf-8") as f:
        f.write(format_text_report(report_data, report_type))

    logger.info(f"Generated text report: {output_path}")
    return report_data


def generate_csv_report(
    report_data: Dict[str, Any], output_path: str, report_type: str
) -> Dict[str, Any]:
    """
    Generate a CSV report using defusedcsv for enhanced security.

    Args:
        report_data: Dictionary containing the report data
        output_path: Path where the report will be saved
        report_type: Type of report ('accessibility' or 'remediation')

    Returns:
        The report data
    """
    issues = report_issues(report_data)
    is_remediation = report_type != "accessibility" and "details" in report_data

    with open(output_path, "w", newline="", encoding="utf-8") as f:
        csv_writer = csv.writer(f)

        if is_remediation:
            csv_writer.writerow(
                ["ID", "Type", "Severity", "Status", "Message", "Path", "Failure Reason"]
            )
        else:
            csv_writer.writerow(
                [
                    "ID",
                    "Type",
                    "Severity",
                    "WCAG",
                    "Level",
                    "Status",
                    "Description",
                    "Path",
                    "Line",
                    "Column",
                    "File Path",
                    "Auto Fixable",
                ]
            )

        for issue in issues:
            location = issue.get("location") or {}
            if is_remediation:
                details = issue.get("remediation_details") or {}
                csv_writer.writerow(
                    [
                        issue.get("id", ""),
                        issue.get("type", "unknown"),
                        issue.get("severity", "unknown"),
                        issue.get("remediation_status", "unknown"),
                        issue.get("message", ""),
                        location.get("path", ""),
                        details.get("failure_reason") or "",
                    ]
                )
            else:
                csv_writer.writerow(
                    [
                        issue.get("id", ""),
                        issue.get("type", "unknown"),
                        issue.get("severity", "unknown"),
                        issue.get("wcag_criterion", ""),
                        issue.get("criterion_level", ""),
                        issue.get("remediation_status", ""),
                        issue.get("description", ""),
                        location.get("path", ""),
                        location.get("line", ""),
                        location.get("column", ""),
                        location.get("file_path", ""),
                        issue.get("auto_fixable", False),
                    ]
                )

    logger.info(f"Generated CSV report: {output_path}")
    return report_data
