# Copyright 2025 Amazon.com, Inc. or its affiliates.
# SPDX-License-Identifier: Apache-2.0

import pytest

from markup_accessibility.audit.checks.color_contrast_checks import (
    contrast_ratio,
    normalize_color,
)
from markup_accessibility.audit.checks.image_checks import is_decorative_image
from markup_accessibility.audit.checks.table_checks import is_complex_table, is_layout_table
from markup_accessibility.parser import parse_html


def _failures(issues):
    return [issue["type"] for issue in issues if issue["remediation_status"] == "needs_remediation"]


def _passes(issues):
    return [issue["type"] for issue in issues if issue["remediation_status"] == "compliant"]


# Images


@pytest.mark.parametrize(
    "img,expected",
    [
        ('<img src="a.png">', "missing-alt-text"),
        ('<img src="photo.jpg" alt="">', "empty-alt-text"),
        ('<img src="photo.jpg" alt="Image 1">', "generic-alt-text"),
        ('<img src="photo.jpg" alt="' + "a" * 151 + '">', "long-alt-text"),
        ('<img src="photo.jpg" alt="Image of a cat on a sofa">', "redundant-alt-text"),
    ],
)
def test_alt_text_failures(run_audit, img, expected):
    assert _failures(run_audit(f"<body>{img}</body>", checks=["AltTextCheck"])) == [expected]


def test_missing_alt_text_is_critical(run_audit):
    issues = run_audit('<body><img src="a.png"></body>', checks=["AltTextCheck"])
    assert issues[0]["severity"] == "critical"
    assert issues[0]["auto_fixable"] is True


def test_decorative_image_may_have_empty_alt(run_audit):
    issues = run_audit(
        '<body><img src="spacer.gif" alt=""><img src="x.png" alt="" role="presentation">'
        '<img src="dot.png" alt="" width="10" height="10"></body>',
        checks=["AltTextCheck"],
    )
    assert _passes(issues) == ["compliant-decorative-image"] * 3


def test_descriptive_alt_text_is_compliant(run_audit):
    issues = run_audit(
        '<body><img src="team.jpg" alt="Five engineers at the launch"></body>',
        checks=["AltTextCheck"],
    )
    assert _passes(issues) == ["compliant-alt-text"]


def test_is_decorative_image():
    soup = parse_html('<img src="hero.jpg" width="800" height="400"><img aria-hidden="true">')
    hero, hidden = soup.find_all("img")
    assert not is_decorative_image(hero)
    assert is_decorative_image(hidden)


def test_figure_captions(run_audit):
    issues = run_audit(
        '<body><figure><img src="a.png" alt="A"></figure>'
        '<figure><img src="b.png" alt="B"><figcaption> </figcaption></figure>'
        '<figure><img src="c.png" alt="C"><figcaption>Results</figcaption></figure></body>',
        checks=["FigureStructureCheck"],
    )

    assert _failures(issues) == ["missing-figcaption", "missing-figcaption"]
    assert issues[0]["description"] == "Figure missing caption"
    assert issues[1]["description"] == "Figure has empty caption"
    assert _passes(issues) == ["compliant-figure-structure"]


def test_complex_image_outside_figure(run_audit):
    issues = run_audit(
        '<body><img src="sales-chart.png" alt="Sales"><img src="big.png" alt="Map" '
        'width="400" height="400"><img src="logo.png" alt="Logo text"></body>',
        checks=["FigureStructureCheck"],
    )
    assert _failures(issues) == ["improper-figure-structure", "improper-figure-structure"]


# Links


@pytest.mark.parametrize(
    "link,expected",
    [
        ('<a href="/a"></a>', "empty-link-text"),
        ('<a href="/a">Click here</a>', "generic-link-text"),
        ('<a href="https://example.com">https://example.com</a>', "url-as-link-text"),
    ],
)
def test_link_text_failures(run_audit, link, expected):
    assert _failures(run_audit(f"<body>{link}</body>", checks=["LinkTextCheck"])) == [expected]


def test_link_name_sources(run_audit):
    issues = run_audit(
        '<body><a href="/home"><img src="h.png" alt="Home page"></a>'
        '<a href="/x" aria-label="Download the report">PDF</a>'
        '<a href="/y" title="Contact form"></a></body>',
        checks=["LinkTextCheck"],
    )

    assert _failures(issues) == []
    assert [issue["description"] for issue in issues] == [
        "Link has descriptive text: 'Home page'",
        "Link has descriptive text: 'Download the report'",
        "Link has descriptive text: 'Contact form'",
    ]


def test_script_anchors_are_skipped(run_audit):
    assert run_audit('<body><a href="#">Menu</a><a>Name</a></body>', checks=["LinkTextCheck"]) == []


def test_same_text_different_destinations(run_audit):
    issues = run_audit(
        '<body><a href="/a">Read more</a><a href="/b">Read more</a>'
        '<a href="/c">Pricing</a><a href="/c">Pricing</a></body>',
        checks=["LinkTextCheck"],
    )

    assert _failures(issues) == [
        "generic-link-text",
        "generic-link-text",
        "duplicate-link-text-different-url",
        "duplicate-link-text-different-url",
    ]
    assert issues[-1]["wcag_criterion"] == "2.4.9"


@pytest.mark.parametrize(
    "link,method",
    [
        ('<a href="/r" target="_blank">Report <span class="sr-only">(opens in new window)</span></a>',
         "screen reader text"),
        ('<a href="/r" target="_blank">Report (new tab)</a>', "text content"),
        ('<a href="/r" target="_blank" title="Opens in new tab">Report</a>', "title attribute"),
        ('<a href="/r" target="_blank">Report <i class="fa-external-link"></i></a>', "icon"),
    ],
)
def test_new_window_link_with_warning(run_audit, link, method):
    issues = run_audit(f"<body>{link}</body>", checks=["NewWindowLinkCheck"])

    assert _passes(issues) == ["compliant-new-window-link"]
    assert method in issues[0]["description"]


def test_new_window_link_without_warning(run_audit):
    issues = run_audit(
        '<body><a href="/r.pdf" target="_blank">Report</a><a href="https://example.org" '
        'rel="external">Partner</a><a href="/s">Same window</a></body>',
        checks=["NewWindowLinkCheck"],
    )
    assert _failures(issues) == ["new-window-link-no-warning", "new-window-link-no-warning"]


# Tables

TABLE_CHECKS = ["TableHeaderCheck", "TableStructureCheck"]


def test_data_table_without_headers(run_audit):
    issues = run_audit(
        "<body><table><tr><td>Name</td><td>Age</td></tr><tr><td>Ana</td><td>30</td></tr>"
        "</table></body>",
        checks=TABLE_CHECKS,
    )
    assert _failures(issues) == ["table-missing-headers"]
    assert issues[0]["severity"] == "critical"


@pytest.mark.parametrize(
    "table",
    [
        '<table role="presentation"><tr><td>a</td><td>b</td></tr><tr><td>c</td><td>d</td></tr></table>',
        '<table class="layout-grid"><tr><td>a</td><td>b</td></tr><tr><td>c</td><td>d</td></tr></table>',
        "<table><tr><td>a</td><td>b</td></tr></table>",
        "<table><tr><td>a</td></tr><tr><td>b</td></tr></table>",
    ],
)
def test_layout_tables_are_skipped(run_audit, table):
    assert run_audit(f"<body>{table}</body>", checks=TABLE_CHECKS) == []


def test_unscoped_headers_without_thead(run_audit):
    issues = run_audit(
        "<body><table><tr><th>A</th><th>B</th></tr><tr><td>1</td><td>2</td></tr></table></body>",
        checks=TABLE_CHECKS,
    )
    assert _failures(issues) == ["table-missing-scope", "table-missing-scope", "table-missing-thead"]


def test_complex_table_needs_caption(run_audit):
    issues = run_audit(
        '<body><table><thead><tr><th scope="col" colspan="2">Totals</th></tr></thead>'
        "<tr><td>1</td><td>2</td></tr></table></body>",
        checks=TABLE_CHECKS,
    )

    assert _failures(issues) == ["table-missing-caption"]
    assert _passes(issues) == ["compliant-table-headers"]


def test_presentational_table_with_data_markup(run_audit):
    issues = run_audit(
        '<body><table role="presentation"><caption>Layout</caption><tr><td>a</td></tr></table></body>',
        checks=TABLE_CHECKS,
    )
    assert _failures(issues) == ["layout-table-with-headers"]


def test_table_classification_helpers():
    soup = parse_html(
        "<table><tr><td>a</td><td>b</td></tr><tr><td>c</td><td>d</td></tr></table>"
        + "<table>" + "<tr><th>h</th><td>v</td></tr>" * 2 + "</table>"
    )
    simple, two_header_rows = soup.find_all("table")

    assert not is_layout_table(simple)
    assert not is_complex_table(simple)
    assert is_complex_table(two_header_rows)


# Color contrast


def test_color_helpers():
    assert normalize_color("#abc") == "#AABBCC"
    assert normalize_color("rgb(255, 0, 0)") == "#FF0000"
    assert normalize_color("rgba(0, 0, 0, 0.5)") is None
    assert normalize_color("Navy") == "#000080"
    assert normalize_color("var") is None
    assert contrast_ratio("#000000", "#FFFFFF") == pytest.approx(21.0)
    assert contrast_ratio("#777777", "#FFFFFF") == pytest.approx(4.48, abs=0.01)


def test_insufficient_contrast(run_audit):
    issues = run_audit(
        '<body><p style="color:#777777;background-color:#ffffff">Low contrast</p></body>',
        checks=["ColorContrastCheck"],
    )

    assert _failures(issues) == ["insufficient-color-contrast"]
    location = issues[0]["location"]
    assert location["contrast_ratio"] == "4.48:1"
    assert location["required_ratio"] == "4.5:1"
    assert location["is_large_text"] is False


def test_large_text_uses_lower_ratio(run_audit):
    issues = run_audit(
        '<body><h1 style="color:#888888">Heading</h1>'
        '<p style="color:#888888;font-size:24px">Large</p>'
        '<p style="color:#888888">Small</p></body>',
        checks=["ColorContrastCheck"],
    )
    assert _passes(issues) == ["compliant-color-contrast", "compliant-color-contrast"]
    assert _failures(issues) == ["insufficient-color-contrast"]


def test_background_is_inherited(run_audit):
    issues = run_audit(
        '<body><div style="background:#000000"><p style="color:#111111">Dark</p></div></body>',
        checks=["ColorContrastCheck"],
    )

    assert _failures(issues) == ["insufficient-color-contrast"]
    assert issues[0]["element"] == "p"
    assert issues[0]["location"]["background_color"] == "#000000"


def test_unresolvable_color(run_audit):
    issues = run_audit(
        '<body><p style="color: var(--brand)">Brand</p></body>', checks=["ColorContrastCheck"]
    )
    assert _failures(issues) == ["potential-color-contrast-issue"]


def test_malformed_alpha_does_not_stop_the_check(run_audit):
    assert normalize_color("rgba(0, 0, 0, .)") is None
    assert normalize_color("rgba(0, 0, 0, .5)") is None
    assert normalize_color("rgba(0, 0, 0, 1)") == "#000000"

    issues = run_audit(
        '<body><p style="color: rgba(0, 0, 0, .)">Broken</p>'
        '<p style="color:#777777;background-color:#ffffff">Low contrast</p></body>',
        checks=["ColorContrastCheck"],
    )

    assert _failures(issues) == ["potential-color-contrast-issue", "insufficient-color-contrast"]


def test_default_colors_are_not_reported(run_audit):
    assert run_audit("<body><p>Plain text</p></body>", checks=["ColorContrastCheck"]) == []


# Forms


def test_control_without_label_or_name(run_audit):
    issues = run_audit('<body><input type="text" placeholder="Search"></body>', checks=["FormLabelCheck"])
    assert _failures(issues) == ["form-control-missing-name", "form-control-missing-label"]


@pytest.mark.parametrize(
    "markup",
    [
        '<label for="e">Email</label><input id="e" name="e">',
        '<label>Name <input name="n"></label>',
        '<input name="q" aria-label="Search">',
        '<span id="lbl">Query</span><textarea name="q" aria-labelledby="lbl"></textarea>',
        '<select name="s" title="Size"><option>S</option></select>',
    ],
)
def test_labelled_controls(run_audit, markup):
    issues = run_audit(f"<body>{markup}</body>", checks=["FormLabelCheck"])
    assert _failures(issues) == []
    assert _passes(issues) == ["compliant-form-label"]


def test_controls_that_need_no_label(run_audit):
    issues = run_audit(
        '<body><input type="hidden" name="t"><input type="submit" value="Go"></body>',
        checks=["FormLabelCheck"],
    )
    assert issues == []


def test_empty_label(run_audit):
    issues = run_audit(
        '<body><label for="x"></label><input id="x" name="x"></body>', checks=["FormLabelCheck"]
    )
    assert _failures(issues) == ["form-control-missing-label", "form-label-empty"]


def test_label_for_missing_target(run_audit):
    issues = run_audit(
        '<body><label for="nowhere">Phone</label><label for="d">Info</label><div id="d"></div></body>',
        checks=["FormLabelCheck"],
    )

    assert _failures(issues) == ["label-for-missing-target", "label-for-missing-target"]
    assert "no element" in issues[0]["description"]
    assert "<div>" in issues[1]["description"]


def test_required_field_not_indicated(run_audit):
    issues = run_audit(
        '<body><label for="n">Name</label><input id="n" name="n" required></body>',
        checks=["FormRequiredFieldCheck"],
    )
    assert _failures(issues) == ["form-required-field-missing-aria", "form-required-field-not-indicated"]


def test_required_field_indicated(run_audit):
    issues = run_audit(
        '<body><label for="n">Name *</label><input id="n" name="n" required aria-required="true"></body>',
        checks=["FormRequiredFieldCheck"],
    )
    assert _failures(issues) == []
    assert _passes(issues) == ["compliant-required-field"]


def test_fieldsets(run_audit):
    issues = run_audit(
        '<body><fieldset><input type="checkbox" name="ok"></fieldset>'
        '<input type="radio" name="color" value="r"><input type="radio" name="color" value="g">'
        '<div role="radiogroup"><input type="radio" name="size" value="s">'
        '<input type="radio" name="size" value="m"></div></body>',
        checks=["FormFieldsetCheck"],
    )

    assert _failures(issues) == ["form-fieldset-missing-legend", "form-related-controls-no-fieldset"]
    assert "'color'" in issues[1]["description"]


def test_button_names(run_audit):
    issues = run_audit(
        '<body><button></button><input type="image" src="go.png">'
        '<input type="image" src="go.png" alt="Go"><div role="button">Open</div>'
        '<button><img src="s.png" alt="Search"></button><input type="button" value="Send">'
        '<button aria-hidden="true"></button></body>',
        checks=["ButtonNameCheck"],
    )

    assert _failures(issues) == ["button-missing-name", "button-missing-name"]
    assert _passes(issues) == ["compliant-button-name"] * 4


# ARIA


def test_aria_roles(run_audit):
    issues = run_audit(
        '<body><div role="foo">x</div><div role="foo button">y</div>'
        '<nav role="navigation">n</nav><a href="/x" role="link">l</a><a role="link">z</a></body>',
        checks=["AriaRoleCheck"],
    )
    assert _failures(issues) == ["invalid-aria-role", "redundant-aria-role", "redundant-aria-role"]


def test_valid_aria_roles(run_audit):
    issues = run_audit('<body><div role="alert">Saved</div></body>', checks=["AriaRoleCheck"])
    assert _passes(issues) == ["compliant-aria-roles"]


def test_aria_reference_missing_target(run_audit):
    issues = run_audit(
        '<body><span id="a">A</span><div aria-labelledby="a missing">x</div></body>',
        checks=["AriaReferenceCheck"],
    )

    assert _failures(issues) == ["aria-reference-missing-target"]
    assert issues[0]["location"]["attribute"] == "aria-labelledby"
    assert issues[0]["location"]["missing_ids"] == ["missing"]


def test_aria_references_resolve(run_audit):
    issues = run_audit(
        '<body><p id="hint">Hint</p><input name="x" aria-describedby="hint"></body>',
        checks=["AriaReferenceCheck"],
    )
    assert _passes(issues) == ["compliant-aria-references"]


def test_focusable_content_in_hidden_subtree(run_audit):
    issues = run_audit(
        '<body><div aria-hidden="true"><a href="/x">x</a><button tabindex="-1">b</button>'
        '<span>t</span><div aria-hidden="true"><input name="q"></div></div></body>',
        checks=["AriaHiddenFocusableCheck"],
    )

    assert _failures(issues) == ["aria-hidden-focusable", "aria-hidden-focusable"]
    assert [issue["element"] for issue in issues] == ["a", "input"]


def test_duplicate_ids(run_audit):
    issues = run_audit(
        '<body><p id="a">1</p><p id="a">2</p><p id="a">3</p><p id="b">4</p></body>',
        checks=["DuplicateIdCheck"],
    )

    assert _failures(issues) == ["duplicate-id", "duplicate-id"]
    assert "used by 3 elements" in issues[0]["description"]


def test_unique_ids(run_audit):
    issues = run_audit('<body><p id="a">1</p><p id="b">2</p></body>', checks=["DuplicateIdCheck"])
    assert _passes(issues) == ["compliant-unique-ids"]
