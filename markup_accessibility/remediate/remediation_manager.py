# Copyright 2025 Amazon.com, Inc. or its affiliates.
# SPDX-License-Identifier: Apache-2.0

"""
Remediation manager for HTML accessibility issues.

This module provides functionality for managing the remediation of accessibility issues.
"""

from typing import Dict, Any, List, Optional, Callable

from bs4 import BeautifulSoup, Tag

from markup_accessibility.audit.standards import SEVERITY_LEVELS
from markup_accessibility.parser import find_by_path
from markup_accessibility.remediate.remediation_strategies import (
    STRATEGIES,
    DOCUMENT_LEVEL_ISSUES,
)
from markup_accessibility.utils.config import as_list
from markup_accessibility.utils.logging_helper import setup_logger

# Set up module-level logger
logger = setup_logger(__name__)

MAX_SNIPPET_LENGTH = 500


def _snippet(element: Optional[Tag]) -> str:
    if element is None:
        return ""
    return str(element)[:MAX_SNIPPET_LENGTH]


class RemediationManager:
    """Manager for HTML accessibility remediation."""

    def __init__(self, soup: BeautifulSoup, options: Optional[Dict[str, Any]] = None):
        """
        Initialize the remediation manager.

        Args:
            soup: The BeautifulSoup object representing the HTML document
            options: Remediation options
        """
        self.soup = soup
        self.options = options or {}
        self.remediation_strategies = self._get_remediation_strategies()

    def _get_remediation_strategies(self) -> Dict[str, Callable]:
        """
        Get the remediation strategies for different issue types.

        Returns:
            Dictionary mapping issue types to remediation functions
        """
        return dict(STRATEGIES)

    def resolve_element(self, issue: Dict[str, Any]) -> Optional[Tag]:
        """
        Find the element an issue was reported on.

        Args:
            issue: Issue with a location path

        Returns:
            The element, or None if the path no longer resolves
        """
        path = (issue.get("location") or {}).get("path")
        if not path:
            return None
        return find_by_path(self.soup, path)

    def _is_attached(self, element: Tag) -> bool:
        root = element
        while root.parent is not None:
            root = root.parent
        return root is self.soup

    def remediate_issue(
        self, issue: Dict[str, Any], element: Optional[Tag] = None
    ) -> Optional[str]:
        """
        Remediate a single accessibility issue.

        Args:
            issue: The accessibility issue to remediate
            element: Target element; resolved from the issue location when omitted

        Returns:
            A message describing the remediation, or None if no remediation was performed
        """
        issue_type = issue.get("type")

        strategy = self.remediation_strategies.get(issue_type)
        if strategy is None:
            logger.debug(f"No remediation strategy for issue type: {issue_type}")
            return None

        if element is None:
            element = self.resolve_element(issue)
            if element is None and issue_type not in DOCUMENT_LEVEL_ISSUES:
                logger.warning(
                    f"Could not find element for {issue_type} (ID: {issue.get('id', 'N/A')})"
                )
                return None

        try:
            result = strategy(self.soup, issue, element, self.options)
        except Exception as e:
            logger.error(f"Error remediating issue {issue_type}: {e}")
            return None

        if result:
            if "already" in result.lower():
                logger.debug(f"{issue_type}: {result}")
            else:
                logger.debug(f"Remediated {issue_type}: {result}")
        else:
            logger.warning(
                f"Failed to remediate {issue_type} (ID: {issue.get('id', 'N/A')})"
            )
        return result

    def select_issues(self, issues: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
        """
        Apply the issue_types, severity_threshold and max_issues options.

        Compliant records are never selected.

        Args:
            issues: Issues from an audit report

        Returns:
            Issues to process, in report order
        """
        selected = [
            issue
            for issue in issues
            if issue.get("remediation_status", "needs_remediation") == "needs_remediation"
        ]

        issue_types = as_list(self.options.get("issue_types"))
        if issue_types:
            selected = [issue for issue in selected if issue.get("type") in issue_types]

        severity_threshold = self.options.get("severity_threshold") or "minor"
        threshold_level = SEVERITY_LEVELS.get(severity_threshold, 1)
        selected = [
            issue
            for issue in selected
            if SEVERITY_LEVELS.get(issue.get("severity", "minor"), 1) >= threshold_level
        ]

        max_issues = self.options.get("max_issues")
        if max_issues is not None:
            selected = selected[: int(max_issues)]

        return selected

    def remediate_issues(self, issues: List[Dict[str, Any]]) -> Dict[str, Any]:
        """
        Remediate multiple accessibility issues.

        Every target element is resolved before the first fix is applied, so
        fixes that restructure the document do not redirect later issues to
        the wrong element.

        Args:
            issues: List of accessibility issues to remediate

        Returns:
            Dictionary with remediation results
        """
        issues = self.select_issues(issues)
        logger.debug(f"Attempting to remediate {len(issues)} issues")

        results = {
            "issues_processed": len(issues),
            "issues_remediated": 0,
            "issues_failed": 0,
            "skipped_issues": 0,
            "failed_issue_types": [],
            "details": [],
        }
        failed_issue_types = set()

        targets = [(issue, self.resolve_element(issue)) for issue in issues]

        for issue, element in targets:
            issue_type = issue.get("type")
            before_content = _snippet(element)
            failure_reason = None
            result = None

            if issue_type not in self.remediation_strategies:
                failure_reason = "No automatic fix available for this issue type"
            elif element is None and issue_type not in DOCUMENT_LEVEL_ISSUES:
                failure_reason = (
                    "Target element not found: "
                    f"{(issue.get('location') or {}).get('path') or 'no path recorded'}"
                )
            elif (
                element is not None
                and not self._is_attached(element)
                and issue_type not in DOCUMENT_LEVEL_ISSUES
            ):
                failure_reason = "Target element was removed by an earlier fix"
            else:
                result = self.remediate_issue(issue, element)
                if not result:
                    failure_reason = "Unable to apply fix automatically"

            if result:
                status = "remediated"
                results["issues_remediated"] += 1
            elif issue_type not in self.remediation_strategies:
                status = "skipped"
                results["skipped_issues"] += 1
                logger.debug(f"Skipped remediation for {issue_type} (no strategy)")
            else:
                status = "failed"
                results["issues_failed"] += 1
                failed_issue_types.add(issue_type)
                logger.warning(f"Failed to remediate {issue_type}: {failure_reason}")

            after_content = (
                _snippet(element) if element is not None and self._is_attached(element) else ""
            )

            results["details"].append(
                {
                    "id": issue.get("id"),
                    "type": issue_type,
                    "severity": issue.get("severity", "minor"),
                    "message": result or f"Failed to remediate {issue_type}",
                    "remediation_status": status,
                    "remediation_details": {
                        "fix_description": result or "",
                        "before_content": before_content,
                        "after_content": after_content if result else before_content,
                        "failure_reason": failure_reason,
                    },
                    "location": issue.get("location") or {},
                }
            )

        results["failed_issue_types"] = sorted(failed_issue_types)

        logger.debug(
            f"Processed {results['issues_processed']} issues: "
            f"{results['issues_remediated']} remediated, {results['issues_failed']} failed, "
            f"{results['skipped_issues']} skipped"
        )
        return results
