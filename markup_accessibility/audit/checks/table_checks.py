# Copyright 2025 Amazon.com, Inc. or its affiliates.
# SPDX-License-Identifier: Apache-2.0

"""
Table-related accessibility checks.

This module provides checks for proper table accessibility.
"""

from bs4 import Tag

from markup_accessibility.audit.base_check import AccessibilityCheck

LAYOUT_CLASS_PATTERNS = ["layout", "non-data"]


def _span(cell: Tag, attribute: str) -> int:
    value = (cell.get(attribute) or "").strip()
    return int(value) if value.isdigit() else 1


def own_rows(table: Tag):
    """Rows belonging to this table, excluding rows of nested tables."""
    return [row for row in table.find_all("tr") if row.find_parent("table") is table]


def is_layout_table(table: Tag) -> bool:
    """
    Determine if a table is used for layout rather than data.

    Args:
        table: The table element to check

    Returns:
        True if the table appears to be for layout, False otherwise
    """
    if (table.get("role") or "").lower() in ("presentation", "none"):
        return True

    css_classes = " ".join(table.get("class") or []).lower()
    if any(pattern in css_classes for pattern in LAYOUT_CLASS_PATTERNS):
        return True

    if not table.find("th") and not table.find("caption"):
        rows = own_rows(table)
        # A single row or a single column carries no tabular relationships
        if len(rows) <= 1:
            return True
        if len(rows[0].find_all(["td", "th"], recursive=False)) <= 1:
            return True

    return False


def is_complex_table(table: Tag) -> bool:
    """
    Determine if a table is complex (needs additional accessibility features).

    Args:
        table: The table element to check

    Returns:
        True if the table has merged cells, several header rows or many rows
    """
    for cell in table.find_all(["td", "th"]):
        if _span(cell, "rowspan") > 1 or _span(cell, "colspan") > 1:
            return True

    rows = own_rows(table)
    header_rows = [row for row in rows if row.find("th", recursive=False)]
    if len(header_rows) > 1:
        return True

    return len(rows) > 10


class TableHeaderCheck(AccessibilityCheck):
    """Check for proper table headers (WCAG 1.3.1)."""

    def check(self) -> None:
        """
        Check if tables have proper headers.

        Issues:
            - table-missing-headers: When a data table has no header cells
            - table-missing-scope: When table headers don't have scope attributes
            - compliant-table-headers: When every header cell is scoped
        """
        for table in self.soup.find_all("table"):
            if is_layout_table(table):
                continue

            headers = [th for th in table.find_all("th") if th.find_parent("table") is table]
            if not headers:
                self.add_issue(
                    "table-missing-headers",
                    "1.3.1",
                    "critical",
                    element=table,
                    description="Data table has no header cells (th elements)",
                    status="needs_remediation",
                )
                continue

            unscoped = [th for th in headers if not th.has_attr("scope")]
            for header in unscoped:
                self.add_issue(
                    "table-missing-scope",
                    "1.3.1",
                    "minor",
                    element=header,
                    description="Table header missing scope attribute",
                    status="needs_remediation",
                )

            if not unscoped:
                self.add_issue(
                    "compliant-table-headers",
                    "1.3.1",
                    "critical",
                    element=table,
                    description="Table has scoped header cells",
                    status="compliant",
                )


class TableStructureCheck(AccessibilityCheck):
    """Check for proper table structure (WCAG 1.3.1)."""

    def check(self) -> None:
        """
        Check if tables have proper structure.

        Issues:
            - table-missing-caption: When a complex table has no caption
            - table-missing-thead: When a table with a header row doesn't use thead
            - layout-table-with-headers: When a presentational table uses th or caption
        """
        for table in self.soup.find_all("table"):
            if (table.get("role") or "").lower() in ("presentation", "none"):
                if table.find(["th", "caption"]) or table.has_attr("summary"):
                    self.add_issue(
                        "layout-table-with-headers",
                        "1.3.1",
                        "major",
                        element=table,
                        description="Presentational table contains data table markup "
                        + "(th, caption or summary)",
                        status="needs_remediation",
                    )
                continue

            if is_layout_table(table):
                continue

            if is_complex_table(table) and not table.find("caption", recursive=False):
                self.add_issue(
                    "table-missing-caption",
                    "1.3.1",
                    "minor",
                    element=table,
                    description="Complex table missing caption element",
                    status="needs_remediation",
                )

            rows = own_rows(table)
            first_row = rows[0] if rows else None
            if (
                first_row is not None
                and first_row.find("th", recursive=False)
                and not table.find("thead", recursive=False)
            ):
                self.add_issue(
                    "table-missing-thead",
                    "1.3.1",
                    "minor",
                    element=table,
                    description="Table with headers should use thead element",
                    status="needs_remediation",
                )
