# Copyright 2025 Amazon.com, Inc. or its affiliates.
# SPDX-License-Identifier: Apache-2.0

"""
Table accessibility remediation strategies.

This module provides remediation strategies for table-related accessibility issues.
"""

from typing import Dict, Any, List, Optional

from bs4 import BeautifulSoup, Tag

from markup_accessibility.audit.checks.table_checks import own_rows
from markup_accessibility.utils.logging_helper import setup_logger

# Set up module-level logger
logger = setup_logger(__name__)


def infer_scope_from_position(table: Tag, th: Tag) -> str:
    """
    Infer the scope of a header cell from where it sits in the table.

    Cells in the first row or in thead are column headers; a header cell
    leading any other row is a row header.

    Args:
        table: Table containing the cell
        th: Header cell

    Returns:
        "col" or "row"
    """
    row = th.find_parent("tr")
    rows = own_rows(table)
    if row is None or not rows or row is rows[0] or row.find_parent("thead"):
        return "col"

    first_cell = row.find(["td", "th"], recursive=False)
    if first_cell is th and row.find("td", recursive=False) is not None:
        return "row"
    return "col"


def _header_rows(table: Tag) -> List[Tag]:
    """Leading rows that contain only header cells."""
    rows = []
    for row in own_rows(table):
        cells = row.find_all(["td", "th"], recursive=False)
        if cells and all(cell.name == "th" for cell in cells):
            rows.append(row)
        else:
            break
    return rows


def remediate_table_missing_headers(
    soup: BeautifulSoup,
    issue: Dict[str, Any],
    element: Optional[Tag] = None,
    options: Optional[Dict[str, Any]] = None,
) -> Optional[str]:
    """
    Promote the first row of a data table to column headers.

    Args:
        soup: The BeautifulSoup object representing the HTML document
        issue: The accessibility issue to remediate
        element: The table element

    Returns:
        A message describing the remediation, or None if no remediation was performed
    """
    if any(th.find_parent("table") is element for th in element.find_all("th")):
        return "Table already has header cells"

    rows = own_rows(element)
    if not rows:
        logger.warning("Table has no rows")
        return None

    cells = rows[0].find_all("td", recursive=False)
    for cell in cells:
        cell.name = "th"
        cell["scope"] = "col"
    return f"Converted {len(cells)} first-row cells to column headers"


def remediate_table_missing_scope(
    soup: BeautifulSoup,
    issue: Dict[str, Any],
    element: Optional[Tag] = None,
    options: Optional[Dict[str, Any]] = None,
) -> Optional[str]:
    """
    Add a scope attribute to a header cell.

    Returns:
        A message describing the remediation, or None if no remediation was performed
    """
    if element.has_attr("scope"):
        return f"Header cell already has scope='{element['scope']}'"

    table = element.find_parent("table")
    if table is None:
        logger.warning("Header cell is not inside a table")
        return None

    scope = infer_scope_from_position(table, element)
    element["scope"] = scope
    return f"Added scope='{scope}' to header cell"


def remediate_table_missing_thead(
    soup: BeautifulSoup,
    issue: Dict[str, Any],
    element: Optional[Tag] = None,
    options: Optional[Dict[str, Any]] = None,
) -> Optional[str]:
    """
    Move the leading header rows of a table into a thead element.

    Returns:
        A message describing the remediation, or None if no remediation was performed
    """
    if element.find("thead", recursive=False):
        return "Table already has a thead element"

    header_rows = _header_rows(element)
    if not header_rows:
        logger.warning("Table has no leading header row to move into thead")
        return None

    thead = soup.new_tag("thead")
    first_row = header_rows[0]
    group = first_row.parent
    if group is element:
        first_row.insert_before(thead)
    else:
        # Row sits in a tbody/tfoot: thead goes before that group
        group.insert_before(thead)

    for row in header_rows:
        thead.append(row.extract())

    if group is not element and not group.find("tr"):
        group.extract()

    return f"Moved {len(header_rows)} header row(s) into thead"
