# Copyright 2025 Amazon.com, Inc. or its affiliates.
# SPDX-License-Identifier: Apache-2.0

"""
HTML Accessibility Auditor.

This module provides functionality for auditing
HTML content against WCAG 2.1 accessibility standards.
"""

import os
import re
from typing import Dict, List, Any, Optional

from bs4 import BeautifulSoup

from markup_accessibility.audit.base_check import safe_check
from markup_accessibility.audit.checks import CHECK_REGISTRY
from markup_accessibility.audit.standards import (
    SEVERITY_LEVELS,
    get_criterion_info,
    get_issue_info,
)
from markup_accessibility.outline import build_outline
from markup_accessibility.parser import (
    element_path,
    load_html_file,
    parse_html,
    source_span,
)
from markup_accessibility.utils.config import as_list, config_manager
from markup_accessibility.utils.logging_helper import setup_logger, ResourceError

# Set up module-level logger
logger = setup_logger(__name__)

PAGE_FILE_PATTERN = re.compile(r"page[_-]?(\d+)\.html$", re.IGNORECASE)

ISSUE_STATUSES = ["needs_remediation", "remediated", "auto_remediated", "compliant"]


def page_number_from_filename(file_name: Optional[str]) -> Optional[int]:
    """Get the page number from a page-N.html / page_N.html file name."""
    if not file_name:
        return None
    match = PAGE_FILE_PATTERN.search(file_name)
    return int(match.group(1)) if match else None


class AccessibilityAuditor:
    """Class for auditing HTML content for WCAG 2.1 accessibility compliance issues."""

    def __init__(
        self,
        html_path: Optional[str] = None,
        html_content: Optional[str] = None,
        options: Optional[Dict[str, Any]] = None,
    ):
        """
        Initialize the accessibility auditor.

        Args:
            html_path: Path to an HTML file, or a directory of HTML pages.
            html_content: HTML content string to audit instead of a file.
            options: Auditing options:
                - severity_threshold (str): Minimum severity level to report ('critical', 'major', 'minor').
                - detailed (bool): Whether to include detailed context in the report.
                - include_remediated (bool): Whether to include remediated items in
                    report (default: True).
                - checks (list): Names of the checks to run (default: all).
                - issue_types (list): Rule ids to report (default: all).
                - include_outline (bool): Whether to add the heading outline to the report.
        """
        self.html_path = html_path
        self.html_content = html_content
        self.soup: Optional[BeautifulSoup] = None
        self.html_files: List[str] = []

        self.options = config_manager.get_config(options, "audit")

        # Initialize issues list
        self.issues: List[Dict[str, Any]] = []

        # Details of the page being audited, used to locate issues
        self._page: Dict[str, Any] = {}

    def load_html(self) -> bool:
        """
        Load and parse the HTML content.

        Returns:
            True if loading was successful, False otherwise.
        """
        # Case 1: HTML content is directly provided
        if self.html_content is not None:
            self.soup = parse_html(self.html_content)
            return True

        if not self.html_path or not os.path.exists(self.html_path):
            logger.error("No HTML content or valid file path provided")
            return False

        # Case 2: directory of pages (multi-page mode)
        if os.path.isdir(self.html_path):
            logger.debug("HTML path is a directory, looking for HTML files in: %s", self.html_path)
            html_files = sorted(
                os.path.join(self.html_path, file_name)
                for file_name in os.listdir(self.html_path)
                if file_name.lower().endswith(".html")
            )
            if not html_files:
                logger.error("No HTML files found in directory: %s", self.html_path)
                return False

            logger.debug("Found %d HTML files in directory", len(html_files))
            # Pages are parsed one at a time by audit()
            self.html_files = html_files
            return True

        # Case 3: single file
        self.soup, self.html_content = load_html_file(self.html_path)
        return True

    def selected_checks(self) -> List[type]:
        """
        Get the check classes to run, in registry order.

        Returns:
            Check classes named by the 'checks' option, or all registered checks
        """
        names = as_list(self.options.get("checks"))
        if not names:
            return list(CHECK_REGISTRY.values())

        unknown = [name for name in names if name not in CHECK_REGISTRY]
        if unknown:
            logger.warning("Ignoring unknown checks: %s", ", ".join(unknown))
        return [check for name, check in CHECK_REGISTRY.items() if name in names]

    def audit(self) -> Dict[str, Any]:
        """
        Perform a comprehensive accessibility audit on the HTML content.

        Returns:
            Audit report containing identified issues.
        """
        self.issues = []

        if self.soup is None and not self.html_files and not self.load_html():
            # Return an empty report if we couldn't load the HTML
            return self._generate_report()

        if self.html_files:
            logger.debug("Multi-page mode: Processing %d HTML files", len(self.html_files))
            for html_file in self.html_files:
                logger.debug("Processing HTML file: %s", html_file)
                try:
                    page_soup, content = load_html_file(html_file)
                except ResourceError as e:
                    logger.error("Error processing HTML file %s: %s", html_file, str(e))
                    continue
                if self.soup is None:
                    # The outline describes the first readable page
                    self.soup = page_soup
                self._audit_page(page_soup, html_file, content)
        else:
            logger.info("Single page mode: Processing HTML content")
            self._audit_page(self.soup, self.html_path, self.html_content)

        logger.info("Audit completed. Total issues found: %d", len(self.issues))
        return self._generate_report()

    def audit_soup(
        self,
        soup: BeautifulSoup,
        file_path: Optional[str] = None,
        content: Optional[str] = None,
    ) -> Dict[str, Any]:
        """
        Audit an already parsed document.

        Args:
            soup: Parsed document
            file_path: Optional file path for reference
            content: Original markup, used to compute character offsets

        Returns:
            Audit report containing identified issues.
        """
        self.issues = []
        self.soup = soup
        self._audit_page(soup, file_path, content)
        return self._generate_report()

    def _audit_page(
        self,
        soup: BeautifulSoup,
        file_path: Optional[str] = None,
        content: Optional[str] = None,
    ) -> None:
        """
        Audit a single HTML page.

        Args:
            soup: BeautifulSoup object for the HTML page
            file_path: Optional file path for reference
            content: Original markup of the page
        """
        file_name = os.path.basename(file_path) if file_path else None
        page_num = page_number_from_filename(file_name)

        self._page = {
            "file_path": file_path,
            "file_name": file_name,
            "page_number": page_num,
            "content": content,
        }

        logger.debug(
            "Running accessibility checks on %s",
            f"page {page_num}" if page_num is not None
            else f"file {file_name}" if file_name else "(single page)",
        )

        for check_class in self.selected_checks():
            check = check_class(soup, self._add_issue)
            logger.debug("Running check: %s", check_class.__name__)
            safe_check(check.check)()
            logger.debug(
                "Completed check: %s, total issues: %d",
                check_class.__name__,
                len(self.issues),
            )

        self._page = {}

    def _location(self, element) -> Dict[str, Any]:
        """Build the location of an element on the current page."""
        file_name = self._page.get("file_name")
        page_num = self._page.get("page_number")

        location = {
            "path": element_path(element) if element is not None else "",
            "line": None,
            "column": None,
            "page_number": page_num if page_num is not None else 0,
        }

        span = source_span(element, self._page.get("content")) if element is not None else None
        if span is not None:
            location["line"] = span.line
            location["column"] = span.column

        if self._page.get("file_path"):
            location["file_path"] = self._page["file_path"]
            location["file_name"] = file_name

        if page_num is not None and file_name:
            location["description"] = f"File: {file_name} (Page {page_num})"
        elif page_num is not None:
            location["description"] = f"Page {page_num}"
        elif file_name:
            location["description"] = f"File: {file_name}"

        return location

    def _add_issue(
        self,
        issue_type: str,
        wcag_criterion: str,
        severity: str,
        element=None,
        description=None,
        context=None,
        location=None,
        status="needs_remediation",
    ):
        """
        Add an issue to the issues list.

        Args:
            issue_type: Type of issue (e.g., 'missing-alt-text').
            wcag_criterion: WCAG criterion number (e.g., '1.1.1').
            severity: Severity level ('critical', 'major', 'minor', 'info').
            element: The HTML element with the issue.
            description: Description of the issue.
            context: HTML context around the issue.
            location: Extra location details from the check.
            status: Remediation status ('needs_remediation', 'remediated', 'auto_remediated', 'compliant').
        """
        logger.debug(
            "Adding issue: %s, status: %s, severity: %s", issue_type, status, severity
        )

        # Compliant records are always kept; they feed the score
        if status != "compliant":
            issue_types = as_list(self.options.get("issue_types"))
            if issue_types and issue_type not in issue_types:
                logger.debug("Skipping issue not in issue_types filter: %s", issue_type)
                return

            threshold = self.options.get("severity_threshold", "minor")
            min_severity = SEVERITY_LEVELS.get(threshold, 1)
            if SEVERITY_LEVELS.get(severity, 0) < min_severity:
                logger.debug("Skipping issue due to severity threshold: %s", issue_type)
                return

            if (
                not self.options.get("include_remediated", True)
                and status != "needs_remediation"
            ):
                logger.debug("Skipping remediated issue: %s", issue_type)
                return

        # Create a unique ID for the issue
        issue_id = f"issue-{len(self.issues) + 1}"

        detailed = self.options.get("detailed", True)
        if detailed and element is not None and context is None:
            from markup_accessibility.audit.context_collector import ContextCollector

            try:
                context = ContextCollector(element).collect()
            except Exception as e:
                logger.error("Error collecting enhanced context: %s", str(e))
                context = {"element_name": getattr(element, "name", None)}

        merged_location = dict(location or {})
        for key, value in self._location(element).items():
            merged_location.setdefault(key, value)

        from markup_accessibility.remediate.remediation_strategies import (
            AUTO_FIXABLE_ISSUE_TYPES,
        )

        criterion_info = get_criterion_info(wcag_criterion)

        issue = {
            "id": issue_id,
            "type": issue_type,
            "wcag_criterion": wcag_criterion,
            "criterion_name": criterion_info.get("name", ""),
            "criterion_level": criterion_info.get("level", ""),
            "severity": severity,
            "element": getattr(element, "name", None) or "unknown",
            "description": description or f"WCAG {wcag_criterion} issue: {issue_type}",
            "context": context if detailed else None,
            "location": merged_location,
            "remediation_status": status,
            "auto_fixable": status == "needs_remediation"
            and issue_type in AUTO_FIXABLE_ISSUE_TYPES,
            "suggested_fix": get_issue_info(issue_type).get("fix", "")
            if status != "compliant"
            else "",
        }

        self.issues.append(issue)
        logger.debug(
            "Added issue to list: %s, status: %s, total issues: %d",
            issue_type,
            status,
            len(self.issues),
        )

    def _generate_report(self) -> Dict[str, Any]:
        """
        Generate a report based on the identified issues.

        Returns:
            Report containing the summary, issues grouped by page and status, and all issues.
        """
        from markup_accessibility.utils.report_models import create_audit_summary

        issues_by_page: Dict[int, List[Dict[str, Any]]] = {}
        for issue in self.issues:
            page_num = issue["location"].get("page_number", 0)
            issues_by_page.setdefault(page_num, []).append(issue)

        issues_by_status: Dict[str, List[Dict[str, Any]]] = {
            status: [] for status in ISSUE_STATUSES
        }
        for issue in self.issues:
            status = issue.get("remediation_status", "needs_remediation")
            if status in issues_by_status:
                issues_by_status[status].append(issue)

        report = {
            "summary": create_audit_summary(self.issues).model_dump(mode="json"),
            "by_page": {
                page: {
                    "total": len(page_issues),
                    **{
                        status: len(
                            [i for i in page_issues if i["remediation_status"] == status]
                        )
                        for status in ISSUE_STATUSES
                    },
                    "issues": page_issues,
                }
                for page, page_issues in sorted(issues_by_page.items())
            },
            "by_status": issues_by_status,
            "issues": self.issues,
        }

        if self.options.get("include_outline") and self.soup is not None:
            report["outline"] = build_outline(self.soup).to_dict()

        logger.debug("Report summary: %s", report["summary"])
        return report
