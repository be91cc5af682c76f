# Copyright 2025 Amazon.com, Inc. or its affiliates.
# SPDX-License-Identifier: Apache-2.0

"""
Pydantic models for accessibility audit and remediation reports.

Summaries carry a weighted score and the WCAG conformance level the
document reaches.
"""

from datetime import datetime
from enum import Enum
from typing import Dict, List, Optional, Any, Union

from pydantic import BaseModel, ConfigDict, Field

from markup_accessibility.audit.standards import SEVERITY_LEVELS, WCAG_LEVELS

# Weight of a record in the score; info records do not count
SEVERITY_WEIGHTS = {"critical": 3, "major": 2, "minor": 1, "info": 0}

PASSING_STATUSES = ["compliant", "remediated", "auto_remediated"]


class Severity(str, Enum):
    """Enum for issue severity levels."""

    CRITICAL = "critical"
    MAJOR = "major"
    MINOR = "minor"
    INFO = "info"


class IssueStatus(str, Enum):
    """Enum for audit issue status."""

    NEEDS_REMEDIATION = "needs_remediation"
    REMEDIATED = "remediated"
    AUTO_REMEDIATED = "auto_remediated"
    COMPLIANT = "compliant"


class RemediationStatus(str, Enum):
    """Enum for remediation status."""

    REMEDIATED = "remediated"
    FAILED = "failed"
    SKIPPED = "skipped"


class Location(BaseModel):
    """Model for issue location."""

    model_config = ConfigDict(extra="allow")

    path: Optional[str] = None
    line: Optional[int] = None
    column: Optional[int] = None
    file_path: Optional[str] = None
    file_name: Optional[str] = None
    page_number: int = 0
    description: Optional[str] = None


class AuditIssue(BaseModel):
    """Model for a single audit record, failing or compliant."""

    model_config = ConfigDict(use_enum_values=True)

    id: Optional[str] = None
    type: str
    wcag_criterion: Optional[str] = None
    criterion_name: Optional[str] = None
    criterion_level: Optional[str] = None
    severity: Union[Severity, str] = Severity.MINOR.value
    element: Optional[str] = None
    description: str = ""
    context: Optional[Union[Dict[str, Any], str]] = None
    location: Location = Field(default_factory=Location)
    remediation_status: Union[IssueStatus, str] = IssueStatus.NEEDS_REMEDIATION.value
    auto_fixable: bool = False
    suggested_fix: Optional[str] = None

    @property
    def is_failure(self) -> bool:
        return self.remediation_status == IssueStatus.NEEDS_REMEDIATION.value

    @property
    def is_pass(self) -> bool:
        return self.remediation_status in PASSING_STATUSES


class RemediationDetails(BaseModel):
    """Model for remediation details."""

    fix_description: Optional[str] = None
    before_content: Optional[str] = None
    after_content: Optional[str] = None
    failure_reason: Optional[str] = None


class RemediationIssue(BaseModel):
    """Model for remediation-specific issue details."""

    model_config = ConfigDict(use_enum_values=True)

    id: Optional[str] = None
    type: str
    severity: Union[Severity, str] = Severity.MINOR.value
    message: str = ""
    location: Location = Field(default_factory=Location)
    remediation_status: Union[RemediationStatus, str]
    remediation_details: RemediationDetails = Field(default_factory=RemediationDetails)


class CriterionStats(BaseModel):
    """Counts for one WCAG success criterion."""

    name: str = ""
    level: str = ""
    failed: int = 0
    passed: int = 0


class BaseSummary(BaseModel):
    """Base model for report summaries."""

    total_issues: int
    severity_counts: Dict[str, int] = Field(
        default_factory=lambda: {"critical": 0, "major": 0, "minor": 0, "info": 0}
    )
    issue_type_stats: Dict[str, int] = Field(default_factory=dict)
    generated_at: datetime = Field(default_factory=datetime.now)


class AuditSummary(BaseSummary):
    """Model for audit-specific summary details."""

    needs_remediation: int = 0
    remediated: int = 0
    auto_remediated: int = 0
    compliant: int = 0
    auto_fixable: int = 0
    by_criterion: Dict[str, CriterionStats] = Field(default_factory=dict)
    score: float = 100.0
    conformance_level: str = "none"


class RemediationSummary(BaseSummary):
    """Model for remediation-specific summary details."""

    issues_processed: int = 0
    remediated_issues: int = 0
    failed_issues: int = 0
    skipped_issues: int = 0


def calculate_score(issues: List[AuditIssue]) -> float:
    """
    Calculate the accessibility score of a set of audit records.

    Args:
        issues: Audit records

    Returns:
        Score from 0 to 100; 100 when no record carries weight
    """
    passed = sum(SEVERITY_WEIGHTS.get(i.severity, 0) for i in issues if i.is_pass)
    failed = sum(SEVERITY_WEIGHTS.get(i.severity, 0) for i in issues if i.is_failure)
    if passed + failed == 0:
        return 100.0
    return round(100.0 * passed / (passed + failed), 1)


def conformance_level(issues: List[AuditIssue]) -> str:
    """
    Get the highest WCAG level the audited document conforms to.

    A level is reached when no failing record belongs to a criterion at
    that level or below it.

    Returns:
        "AAA", "AA", "A", or "none"
    """
    failing_levels = {
        issue.criterion_level
        for issue in issues
        if issue.is_failure and SEVERITY_LEVELS.get(issue.severity, 0) > 0
    }

    reached = "none"
    for level in WCAG_LEVELS:
        if level in failing_levels:
            break
        reached = level
    return reached


def create_audit_summary(
    issues: List[Union[AuditIssue, Dict[str, Any]]]
) -> AuditSummary:
    """
    Create an audit summary from a list of audit issues.

    Args:
        issues: List of AuditIssue objects or issue dictionaries

    Returns:
        AuditSummary object with calculated statistics
    """
    issues = [
        issue if isinstance(issue, AuditIssue) else dict_to_audit_issue(issue)
        for issue in issues
    ]

    severity_counts = {"critical": 0, "major": 0, "minor": 0, "info": 0}
    status_counts = {status.value: 0 for status in IssueStatus}
    issue_type_stats: Dict[str, int] = {}
    by_criterion: Dict[str, CriterionStats] = {}

    for issue in issues:
        if issue.severity in severity_counts:
            severity_counts[issue.severity] += 1
        if issue.remediation_status in status_counts:
            status_counts[issue.remediation_status] += 1
        issue_type_stats[issue.type] = issue_type_stats.get(issue.type, 0) + 1

        if issue.wcag_criterion:
            stats = by_criterion.setdefault(
                issue.wcag_criterion,
                CriterionStats(
                    name=issue.criterion_name or "", level=issue.criterion_level or ""
                ),
            )
            if issue.is_failure:
                stats.failed += 1
            elif issue.is_pass:
                stats.passed += 1

    return AuditSummary(
        total_issues=len(issues),
        severity_counts=severity_counts,
        issue_type_stats=issue_type_stats,
        needs_remediation=status_counts[IssueStatus.NEEDS_REMEDIATION.value],
        remediated=status_counts[IssueStatus.REMEDIATED.value],
        auto_remediated=status_counts[IssueStatus.AUTO_REMEDIATED.value],
        compliant=status_counts[IssueStatus.COMPLIANT.value],
        auto_fixable=len([issue for issue in issues if issue.auto_fixable]),
        by_criterion=dict(sorted(by_criterion.items())),
        score=calculate_score(issues),
        conformance_level=conformance_level(issues),
        generated_at=datetime.now(),
    )


def create_remediation_summary(results: Dict[str, Any]) -> RemediationSummary:
    """
    Create a remediation summary from RemediationManager results.

    Args:
        results: Dictionary returned by RemediationManager.remediate_issues()

    Returns:
        RemediationSummary object with calculated statistics
    """
    issues = [dict_to_remediation_issue(detail) for detail in results.get("details", [])]

    severity_counts = {"critical": 0, "major": 0, "minor": 0, "info": 0}
    issue_type_stats: Dict[str, int] = {}
    for issue in issues:
        if issue.severity in severity_counts:
            severity_counts[issue.severity] += 1
        issue_type_stats[issue.type] = issue_type_stats.get(issue.type, 0) + 1

    return RemediationSummary(
        total_issues=len(issues),
        severity_counts=severity_counts,
        issue_type_stats=issue_type_stats,
        issues_processed=results.get("issues_processed", len(issues)),
        remediated_issues=results.get("issues_remediated", 0),
        failed_issues=results.get("issues_failed", 0),
        skipped_issues=results.get("skipped_issues", 0),
        generated_at=datetime.now(),
    )


def dict_to_audit_issue(issue_dict: Dict[str, Any]) -> AuditIssue:
    """
    Convert a dictionary to an AuditIssue object.

    Args:
        issue_dict: Dictionary containing issue data

    Returns:
        AuditIssue object
    """
    data = {key: value for key, value in issue_dict.items() if value is not None}
    data["location"] = Location(**(issue_dict.get("location") or {}))
    data.setdefault("type", "unknown")
    return AuditIssue.model_validate(data)


def dict_to_remediation_issue(issue_dict: Dict[str, Any]) -> RemediationIssue:
    """
    Convert a dictionary to a RemediationIssue object.

    Args:
        issue_dict: Dictionary containing issue data

    Returns:
        RemediationIssue object
    """
    return RemediationIssue(
        id=issue_dict.get("id"),
        type=issue_dict.get("type") or "unknown",
        severity=issue_dict.get("severity", "minor"),
        message=issue_dict.get("message", ""),
        location=Location(**(issue_dict.get("location") or {})),
        remediation_status=issue_dict.get("remediation_status")
        or RemediationStatus.FAILED,
        remediation_details=RemediationDetails(
            **(issue_dict.get("remediation_details") or {})
        ),
    )
