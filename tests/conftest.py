# Copyright 2025 Amazon.com, Inc. or its affiliates.
# SPDX-License-Identifier: Apache-2.0

from pathlib import Path

import pytest

from markup_accessibility.audit.auditor import AccessibilityAuditor
from markup_accessibility.utils.config import config_manager


GOOD_HTML = """<!DOCTYPE html>
<html lang="en">
<head>
<meta charset="utf-8">
<title>Quarterly Report</title>
</head>
<body>
<a class="skip-link" href="#main">Skip to main content</a>
<header><p>Example Corp</p></header>
<nav aria-label="Primary"><a href="/about.html">About us</a></nav>
<main id="main">
<h1>Quarterly Report</h1>
<section aria-labelledby="sales-heading">
<h2 id="sales-heading">Sales results</h2>
<img src="sales.png" alt="Sales grew ten percent in the third quarter" width="200" height="100">
<table>
<caption>Sales by region</caption>
<thead><tr><th scope="col">Region</th><th scope="col">Sales</th></tr></thead>
<tbody><tr><th scope="row">North</th><td>100</td></tr></tbody>
</table>
</section>
<form>
<label for="email">Email address</label>
<input type="email" id="email" name="email">
<button type="submit">Subscribe</button>
</form>
</main>
<footer><p>Copyright 2025</p></footer>
</body>
</html>
"""

BAD_HTML = """<html>
<head></head>
<body>
<div>
<h3>Intro</h3>
<img src="team-photo_01.jpg">
<a href="https://example.com/docs/getting-started.html"></a>
<a href="/report.pdf" target="_blank">Annual report</a>
<table>
<tr><td>Name</td><td>Age</td></tr>
<tr><td>Ana</td><td>30</td></tr>
</table>
<input type="text" name="first_name">
<div id="dup">One</div>
<div id="dup">Two</div>
</div>
</body>
</html>
"""


def write_file(path: Path, text: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    return path


@pytest.fixture(autouse=True)
def reset_config():
    config_manager.reset()
    yield
    config_manager.reset()


@pytest.fixture
def good_html() -> str:
    return GOOD_HTML


@pytest.fixture
def bad_html() -> str:
    return BAD_HTML


@pytest.fixture
def bad_html_file(tmp_path: Path) -> Path:
    return write_file(tmp_path / "annual-report.html", BAD_HTML)


@pytest.fixture
def run_audit():
    """Audit markup and return its issue records."""

    def _run(html: str, **options):
        options.setdefault("detailed", False)
        return AccessibilityAuditor(html_content=html, options=options).audit()["issues"]

    return _run
