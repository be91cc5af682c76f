# Copyright 2025 Amazon.com, Inc. or its affiliates.
# SPDX-License-Identifier: Apache-2.0

import pytest

from conftest import BAD_HTML

from markup_accessibility.audit.auditor import AccessibilityAuditor
from markup_accessibility.outline import HEADING_TAGS, build_outline
from markup_accessibility.parser import element_path, parse_html
from markup_accessibility.remediate.remediation_manager import RemediationManager
from markup_accessibility.remediate.remediation_strategies import (
    AUTO_FIXABLE_ISSUE_TYPES,
    DOCUMENT_LEVEL_ISSUES,
    STRATEGIES,
)
from markup_accessibility.remediate.remediation_strategies.aria_remediation import (
    remediate_aria_hidden_focusable,
    remediate_aria_role,
)
from markup_accessibility.remediate.remediation_strategies.document_structure_remediation import (
    remediate_missing_document_title,
    remediate_missing_language,
)
from markup_accessibility.remediate.remediation_strategies.form_remediation import (
    remediate_button_missing_name,
    remediate_form_fieldset_missing_legend,
    remediate_form_required_field_missing_aria,
)
from markup_accessibility.remediate.remediation_strategies.heading_remediation import (
    remediate_missing_h1,
    remediate_skipped_heading_level,
)
from markup_accessibility.remediate.remediation_strategies.image_remediation import (
    remediate_missing_figcaption,
    remediate_redundant_alt_text,
)
from markup_accessibility.remediate.remediation_strategies.link_remediation import (
    remediate_new_window_link_no_warning,
)
from markup_accessibility.remediate.remediation_strategies.markup_helpers import (
    humanize,
    text_from_filename,
    text_from_href,
    unique_id,
)
from markup_accessibility.remediate.remediation_strategies.table_remediation import (
    remediate_table_missing_scope,
    remediate_table_missing_thead,
)


def _audit_soup(html):
    soup = parse_html(html)
    report = AccessibilityAuditor(options={"detailed": False}).audit_soup(soup, content=html)
    return soup, report["issues"]


def _issue(issue_type, element, severity="major"):
    return {
        "id": "issue-1",
        "type": issue_type,
        "severity": severity,
        "location": {"path": element_path(element)},
    }


# Registry


def test_document_level_issues_have_strategies():
    assert DOCUMENT_LEVEL_ISSUES <= set(STRATEGIES)
    assert AUTO_FIXABLE_ISSUE_TYPES == frozenset(STRATEGIES)


# Helpers


def test_text_helpers():
    assert humanize("contact_email-address") == "Contact email address"
    assert humanize(None) == ""
    assert text_from_filename("/img/team-photo_01.jpg") == "Team photo"
    assert text_from_filename("https://cdn.example.com/a/annual-report.pdf?v=2") == "Annual report"
    assert text_from_href("https://example.com/docs/getting-started.html") == "Getting started"
    assert text_from_href("mailto:help@example.com") == "Email help@example.com"
    assert text_from_href("https://example.com/") == "example.com"
    assert text_from_href("#pricing") == "Pricing"


def test_unique_id():
    soup = parse_html('<p id="note"></p><p id="note-2"></p>')
    assert unique_id(soup, "note") == "note-3"
    assert unique_id(soup, "summary") == "summary"
    assert unique_id(soup, "2024 report") == "id-2024-report"


# Strategies


def test_language_fix_uses_configured_default():
    soup = parse_html('<html lang="en_US"><body></body></html>')

    message = remediate_missing_language(soup, {}, None, {"default_language": "fr"})

    assert soup.html["lang"] == "fr"
    assert "Replaced invalid language attribute 'en_US'" in message
    assert "already" in remediate_missing_language(soup, {}, None, {})


def test_language_fix_rejects_bad_default():
    soup = parse_html("<html><body></body></html>")
    assert remediate_missing_language(soup, {}, None, {"default_language": "not a tag"}) is None
    assert not soup.html.has_attr("lang")


def test_title_from_h1_and_meta_description():
    soup = parse_html("<html><head></head><body><h1>Pricing plans</h1></body></html>")
    assert remediate_missing_document_title(soup, {}) == "Added document title: Pricing plans"
    assert soup.title.string == "Pricing plans"
    assert "already" in remediate_missing_document_title(soup, {})

    soup = parse_html(
        '<html><head><title></title><meta name="description" content="Plans and prices"></head></html>'
    )
    assert remediate_missing_document_title(soup, {}).startswith("Filled empty document title")
    assert soup.title.string == "Plans and prices"


def test_title_is_not_built_from_generic_text():
    soup = parse_html("<html><head></head><body></body></html>")
    issue = {"location": {"file_name": "index.html"}}
    assert remediate_missing_document_title(soup, issue) == "Added document title: Index"

    soup = parse_html("<html><head></head><body></body></html>")
    assert remediate_missing_document_title(soup, {"location": {"file_name": "home.html"}}) is None


def test_missing_h1_needs_title():
    soup = parse_html("<html><head></head><body><p>x</p></body></html>")
    assert remediate_missing_h1(soup, {}) is None

    soup = parse_html("<html><head><title>Guide</title></head><body><main><p>x</p></main></body></html>")
    assert remediate_missing_h1(soup, {}) == "Added h1 heading from document title: Guide"
    assert soup.main.contents[0].name == "h1"


def test_skipped_heading_level_fix():
    soup = parse_html('<h1>A</h1><h4>B</h4><div role="heading" aria-level="5">C</div>')
    h4 = soup.find("h4")
    div = soup.find("div")

    assert remediate_skipped_heading_level(soup, {}, h4) == (
        "Changed heading level from H4 to H2 and moved 1 following heading(s) up by 2"
    )
    assert h4.name == "h2"
    assert div["aria-level"] == "3"
    assert "already" in remediate_skipped_heading_level(soup, {}, div)
    assert "already" in remediate_skipped_heading_level(soup, {}, h4)


def test_skipped_heading_level_fix_keeps_nested_headings():
    soup = parse_html("<h1>A</h1><h3>B</h3><h4>C</h4><h5>D</h5><h3>E</h3><h2>F</h2><h3>G</h3>")
    h3 = soup.find("h3")

    remediate_skipped_heading_level(soup, {}, h3)

    assert [tag.name for tag in soup.find_all(HEADING_TAGS)] == ["h1", "h2", "h3", "h4", "h3", "h2", "h3"]
    assert build_outline(soup).skipped_levels() == []


def test_redundant_alt_text_fix():
    soup = parse_html('<img src="a.png" alt="Image of a cat"><img src="b.png" alt="photo of">')
    cat, bare = soup.find_all("img")

    assert remediate_redundant_alt_text(soup, {}, cat) == "Changed alt text from 'Image of a cat' to 'A cat'"
    assert remediate_redundant_alt_text(soup, {}, bare) is None
    assert "already" in remediate_redundant_alt_text(soup, {}, cat)


def test_figcaption_from_image_alt():
    soup = parse_html('<figure><img src="c.png" alt="Revenue by year"></figure>')
    figure = soup.find("figure")

    assert remediate_missing_figcaption(soup, {}, figure) == "Added figure caption: Revenue by year"
    assert figure.figcaption.string == "Revenue by year"


def test_new_window_warning():
    soup = parse_html(
        '<html><head></head><body><a href="/r" target="_blank" aria-label="Report">R</a></body></html>'
    )
    link = soup.find("a")

    remediate_new_window_link_no_warning(soup, {}, link)

    assert link.find("span", class_="visually-hidden") is not None
    assert link["aria-label"] == "Report (opens in a new window)"
    assert ".visually-hidden" in soup.head.style.string
    assert "already" in remediate_new_window_link_no_warning(soup, {}, link)


def test_table_scope_is_inferred_from_position():
    soup = parse_html(
        "<table><tr><th>Region</th><th>Sales</th></tr><tr><th>North</th><td>1</td></tr></table>"
    )
    col, _, row = soup.find_all("th")

    assert remediate_table_missing_scope(soup, {}, col) == "Added scope='col' to header cell"
    assert remediate_table_missing_scope(soup, {}, row) == "Added scope='row' to header cell"
    assert "already" in remediate_table_missing_scope(soup, {}, row)


def test_table_thead_fix():
    soup = parse_html(
        "<table><tbody><tr><th>A</th><th>B</th></tr><tr><td>1</td><td>2</td></tr></tbody></table>"
    )
    table = soup.find("table")

    assert remediate_table_missing_thead(soup, {}, table) == "Moved 1 header row(s) into thead"
    assert [child.name for child in table.find_all(recursive=False)] == ["thead", "tbody"]
    assert table.tbody.find("th") is None


def test_form_strategies():
    soup = parse_html(
        '<fieldset><input type="radio" name="contact_method"><input type="radio" name="contact_method">'
        '</fieldset><input name="q" required><button title="Close"></button>'
    )

    assert remediate_form_fieldset_missing_legend(soup, {}, soup.fieldset) == (
        "Added legend to fieldset: Contact method"
    )
    assert soup.fieldset.contents[0].name == "legend"

    field = soup.find("input", attrs={"name": "q"})
    remediate_form_required_field_missing_aria(soup, {}, field)
    assert field["aria-required"] == "true"

    button = soup.find("button")
    assert remediate_button_missing_name(soup, {}, button) == "Added aria-label to button: Close"
    assert "already" in remediate_button_missing_name(soup, {}, button)


def test_aria_strategies():
    soup = parse_html('<nav role="navigation"></nav><div aria-hidden="true"><a href="/x">x</a></div>')

    assert remediate_aria_role(soup, {}, soup.nav) == "Removed role='navigation' from <nav>"
    assert not soup.nav.has_attr("role")

    link = soup.find("a")
    remediate_aria_hidden_focusable(soup, {}, link)
    assert link["tabindex"] == "-1"
    assert "already" in remediate_aria_hidden_focusable(soup, {}, link)


# Manager


def test_remediating_a_document():
    soup, issues = _audit_soup(BAD_HTML)
    for issue in issues:
        issue["location"]["file_name"] = "annual-report.html"

    results = RemediationManager(soup).remediate_issues(issues)

    assert results["issues_processed"] == 14
    assert results["issues_remediated"] == 11
    assert results["skipped_issues"] == 3
    assert results["issues_failed"] == 0
    skipped = [d["type"] for d in results["details"] if d["remediation_status"] == "skipped"]
    assert skipped == [
        "missing-navigation-landmark",
        "missing-header-landmark",
        "missing-footer-landmark",
    ]

    assert soup.title.string == "Annual report"
    assert soup.html["lang"] == "en"
    assert soup.main.h1.string == "Annual report"
    assert soup.body.contents[0]["href"] == "#main-content"
    assert soup.find("img")["alt"] == "Team photo"
    assert soup.find("a", href=lambda h: h and "getting-started" in h)["aria-label"] == "Getting started"
    first_row = soup.find("tr")
    assert [cell.name for cell in first_row.find_all(True)] == ["th", "th"]
    assert soup.find("label", attrs={"for": "first_name"}).string == "First name"
    assert [div.get("id") for div in soup.find_all("div", id=True)] == ["dup", "dup-2"]


def test_remediation_details():
    soup, issues = _audit_soup(BAD_HTML)

    results = RemediationManager(soup).remediate_issues(issues)

    image = next(d for d in results["details"] if d["type"] == "missing-alt-text")
    assert image["remediation_status"] == "remediated"
    assert image["message"] == "Added alt text to image: Team photo"
    assert 'alt="Team photo"' in image["remediation_details"]["after_content"]
    assert "alt=" not in image["remediation_details"]["before_content"]
    assert image["remediation_details"]["failure_reason"] is None

    skipped = next(d for d in results["details"] if d["remediation_status"] == "skipped")
    assert skipped["remediation_details"]["failure_reason"] == (
        "No automatic fix available for this issue type"
    )


def test_targets_are_resolved_before_fixes_run():
    html = '<html lang="en"><head><title>T</title></head><body><h1>T</h1><a href="#intro"></a><p id="intro">x</p></body></html>'
    soup, issues = _audit_soup(html)

    RemediationManager(
        soup, {"issue_types": ["missing-skip-link", "empty-link-text"]}
    ).remediate_issues(issues)

    skip_link, original = soup.find_all("a")
    assert skip_link["href"] == "#main-content"
    assert not skip_link.has_attr("aria-label")
    assert original["aria-label"] == "Intro"


def test_element_removed_by_earlier_fix():
    soup = parse_html("<body><h1>Title</h1><h1></h1></body>")
    empty = soup.find_all("h1")[1]
    issues = [_issue("empty-heading", empty), _issue("multiple-h1", empty, "minor")]
    issues[1]["id"] = "issue-2"

    results = RemediationManager(soup).remediate_issues(issues)

    assert [d["remediation_status"] for d in results["details"]] == ["remediated", "failed"]
    assert results["details"][1]["remediation_details"]["failure_reason"] == (
        "Target element was removed by an earlier fix"
    )
    assert results["failed_issue_types"] == ["multiple-h1"]


def test_target_not_found():
    soup = parse_html("<html><body><table></table></body></html>")
    issue = {
        "type": "table-missing-headers",
        "severity": "critical",
        "location": {"path": "html:nth-of-type(1) > body:nth-of-type(1) > table:nth-of-type(3)"},
    }

    results = RemediationManager(soup).remediate_issues([issue])

    assert results["issues_failed"] == 1
    assert results["details"][0]["remediation_details"]["failure_reason"] == (
        "Target element not found: html:nth-of-type(1) > body:nth-of-type(1) > table:nth-of-type(3)"
    )


def test_document_level_fix_without_element():
    soup = parse_html("<html><head></head><body></body></html>")
    issue = {"type": "missing-document-language", "severity": "critical", "location": {}}

    results = RemediationManager(soup).remediate_issues([issue])

    assert results["issues_remediated"] == 1
    assert soup.html["lang"] == "en"


def test_strategy_that_cannot_fix():
    soup, issues = _audit_soup('<body><img src="image.png"></body>')

    results = RemediationManager(soup, {"issue_types": ["missing-alt-text"]}).remediate_issues(issues)

    detail = results["details"][0]
    assert detail["remediation_status"] == "failed"
    assert detail["message"] == "Failed to remediate missing-alt-text"
    assert detail["remediation_details"]["failure_reason"] == "Unable to apply fix automatically"
    assert detail["remediation_details"]["after_content"] == detail["remediation_details"]["before_content"]


@pytest.mark.parametrize(
    "options,expected",
    [
        ({"max_issues": 2}, ["missing-title", "missing-document-language"]),
        (
            {"severity_threshold": "critical", "max_issues": 2},
            ["missing-document-language", "missing-alt-text"],
        ),
        ({"issue_types": "duplicate-id,missing-alt-text"}, ["missing-alt-text", "duplicate-id"]),
    ],
)
def test_issue_selection(options, expected):
    soup, issues = _audit_soup(BAD_HTML)
    assert [i["type"] for i in RemediationManager(soup, options).select_issues(issues)] == expected


def test_compliant_records_are_never_selected():
    soup, issues = _audit_soup(BAD_HTML)
    selected = RemediationManager(soup).select_issues(issues)
    assert all(issue["remediation_status"] == "needs_remediation" for issue in selected)
    assert len(selected) == 14


def test_remediate_issue_returns_none_when_nothing_applies():
    soup = parse_html("<body><p>text</p></body>")
    manager = RemediationManager(soup)
    paragraph = soup.find("p")

    assert manager.remediate_issue({"type": "table-missing-thead"}, paragraph) is None
    assert manager.remediate_issue({"type": "empty-heading", "location": {}}) is None
    assert manager.remediate_issue({"type": "no-such-issue"}, paragraph) is None
