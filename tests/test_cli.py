# Copyright 2025 Amazon.com, Inc. or its affiliates.
# SPDX-License-Identifier: Apache-2.0

import json
import os

import yaml

from conftest import GOOD_HTML, write_file

from markup_accessibility import __version__
from markup_accessibility.cli import get_default_output_path, main


def test_version(capsys):
    assert main(["--version"]) == 0
    assert f"Markup Accessibility v{__version__}" in capsys.readouterr().out


def test_no_command_prints_help(capsys):
    assert main([]) == 0
    assert "usage:" in capsys.readouterr().out


def test_default_output_paths(tmp_path):
    assert get_default_output_path("site/index.html", "audit") == os.path.join(".", "audit_report.json")
    assert get_default_output_path("index.html", "audit", "text") == os.path.join(".", "audit_report.txt")
    assert get_default_output_path("site/index.html", "remediate") == os.path.join(
        ".", "index_remediated.html"
    )
    assert get_default_output_path(str(tmp_path), "remediate").endswith("_remediated")
    assert get_default_output_path("index.html", "process") == os.path.join(".", "index_processed")


def test_audit_command(tmp_path, bad_html_file, capsys):
    report_path = tmp_path / "audit.json"

    code = main(["audit", "-i", str(bad_html_file), "-o", str(report_path), "-f", "json"])

    assert code == 0
    out = capsys.readouterr().out
    assert "ACCESSIBILITY AUDIT REPORT" in out
    assert f"Report saved to: {report_path}" in out
    assert json.loads(report_path.read_text(encoding="utf-8"))["summary"]["needs_remediation"] == 14


def test_audit_command_into_directory(tmp_path, bad_html_file, capsys):
    output_dir = tmp_path / "reports"
    output_dir.mkdir()

    assert main(["audit", "-i", str(bad_html_file), "-o", str(output_dir), "-f", "text", "-q"]) == 0

    assert (output_dir / "audit_report.txt").exists()
    assert capsys.readouterr().out == ""


def test_audit_fail_on(tmp_path, bad_html_file):
    good = write_file(tmp_path / "good.html", GOOD_HTML)
    report = str(tmp_path / "audit.json")

    assert main(["audit", "-i", str(bad_html_file), "-o", report, "--fail-on", "critical", "-q"]) == 1
    assert main(["audit", "-i", str(good), "-o", report, "--fail-on", "minor", "-q"]) == 0


def test_audit_checks_option(tmp_path, bad_html_file):
    report_path = tmp_path / "audit.json"

    main(["audit", "-i", str(bad_html_file), "-o", str(report_path), "--checks", "AltTextCheck", "-q"])

    issues = json.loads(report_path.read_text(encoding="utf-8"))["issues"]
    assert [issue["type"] for issue in issues] == ["missing-alt-text"]


def test_missing_input_reports_error(tmp_path, capsys):
    code = main(["audit", "-i", str(tmp_path / "missing.html"), "-o", str(tmp_path / "a.json")])

    assert code == 1
    assert "Error:" in capsys.readouterr().out


def test_remediate_command(tmp_path, bad_html_file, capsys):
    output_path = tmp_path / "fixed.html"

    code = main(
        ["remediate", "-i", str(bad_html_file), "-o", str(output_path), "--report-format", "json"]
    )

    assert code == 0
    assert "Issues remediated: 11" in capsys.readouterr().out
    assert output_path.exists()
    report = json.loads((tmp_path / "fixed_report.json").read_text(encoding="utf-8"))
    assert report["issues_processed"] == 14


def test_remediate_command_with_audit_report(tmp_path, bad_html_file):
    audit_path = tmp_path / "audit.json"
    main(["audit", "-i", str(bad_html_file), "-o", str(audit_path), "-q"])

    code = main(
        [
            "remediate",
            "-i", str(bad_html_file),
            "-o", str(tmp_path / "fixed.html"),
            "--audit-report", str(audit_path),
            "--issue-types", "missing-alt-text,duplicate-id",
            "--report-format", "json",
            "-q",
        ]
    )

    assert code == 0
    report = json.loads((tmp_path / "fixed_report.json").read_text(encoding="utf-8"))
    assert [d["type"] for d in report["details"]] == ["missing-alt-text", "duplicate-id"]


def test_remediate_with_unreadable_audit_report(tmp_path, bad_html_file):
    bad_report = write_file(tmp_path / "audit.json", "{not json")
    code = main(
        ["remediate", "-i", str(bad_html_file), "-o", str(tmp_path / "f.html"),
         "--audit-report", str(bad_report), "-q"]
    )
    assert code == 1


def test_process_command(tmp_path, bad_html_file, capsys):
    output_dir = tmp_path / "out"

    code = main(["process", "-i", str(bad_html_file), "-o", str(output_dir), "--report-format", "json"])

    assert code == 0
    out = capsys.readouterr().out
    assert "Issues found: 14" in out
    assert (output_dir / "audit_report.json").exists()
    assert (output_dir / "remediation_report.json").exists()
    assert (output_dir / "remediated" / "annual-report.html").exists()


def test_lint_skills_command(tmp_path, capsys):
    write_file(tmp_path / "good" / "skill.md", "---\nname: good\ndescription: d\n---\n# Good\n")
    write_file(tmp_path / "bad" / "skill.md", "---\nname: Bad_Name\ndescription: d\n---\n# Bad\n")

    code = main(["lint-skills", "-i", str(tmp_path)])

    assert code == 1
    out = capsys.readouterr().out
    assert f"{tmp_path / 'bad' / 'skill.md'}:2: SK004 error:" in out
    assert "2 file(s) checked: 1 error(s), 0 warning(s)" in out


def test_lint_skills_json_output(tmp_path):
    skill = write_file(tmp_path / "skill.md", "---\nname: good\ndescription: d\n---\n# Good\n")
    output = tmp_path / "lint.json"

    assert main(["lint-skills", "-i", str(skill), "-f", "json", "-o", str(output)]) == 0

    result = json.loads(output.read_text(encoding="utf-8"))
    assert result["findings"] == []
    assert result["summary"]["files"] == 1


def test_lint_skills_required_keys_from_config(tmp_path):
    skill = write_file(tmp_path / "skill.md", "---\nname: good\ndescription: d\n---\n# Good\n")
    config = write_file(
        tmp_path / "config.yaml", "skills:\n  required_keys: [name, description, category]\n"
    )

    assert main(["lint-skills", "-i", str(skill), "-c", str(config), "-q"]) == 1
    assert main(["lint-skills", "-i", str(skill), "--required-keys", "name", "-q"]) == 0


def test_save_config(tmp_path, bad_html_file, capsys):
    config_path = tmp_path / "saved.yaml"

    main(
        [
            "audit",
            "-i", str(bad_html_file),
            "-o", str(tmp_path / "audit.json"),
            "--severity", "major",
            "--checks", "AltTextCheck",
            "--save-config", str(config_path),
        ]
    )

    assert f"Configuration saved to {config_path}" in capsys.readouterr().out
    saved = yaml.safe_load(config_path.read_text(encoding="utf-8"))
    assert saved["audit"]["severity_threshold"] == "major"
    assert saved["audit"]["checks"] == ["AltTextCheck"]
    assert saved["skills"]["required_keys"] == ["name", "description"]
    assert set(saved) == {"audit", "remediate", "skills", "report"}


def _open_severities(report_path):
    issues = json.loads(report_path.read_text(encoding="utf-8"))["issues"]
    return {
        issue["severity"]
        for issue in issues
        if issue["remediation_status"] == "needs_remediation"
    }


def test_audit_severity_from_config_file(tmp_path, bad_html_file):
    config = write_file(tmp_path / "cfg.yaml", "audit:\n  severity_threshold: critical\n")
    report_path = tmp_path / "audit.json"

    main(["audit", "-i", str(bad_html_file), "-o", str(report_path), "-c", str(config), "-q"])

    assert _open_severities(report_path) == {"critical"}


def test_audit_severity_from_environment(tmp_path, bad_html_file, monkeypatch):
    monkeypatch.setenv("MARKUP_A11Y_AUDIT_SEVERITY_THRESHOLD", "critical")
    report_path = tmp_path / "audit.json"

    main(["audit", "-i", str(bad_html_file), "-o", str(report_path), "-q"])

    assert _open_severities(report_path) == {"critical"}


def test_audit_severity_flag_overrides_config(tmp_path, bad_html_file):
    config = write_file(tmp_path / "cfg.yaml", "audit:\n  severity_threshold: critical\n")
    report_path = tmp_path / "audit.json"

    main(
        [
            "audit",
            "-i", str(bad_html_file),
            "-o", str(report_path),
            "-c", str(config),
            "--severity", "minor",
            "-q",
        ]
    )

    assert _open_severities(report_path) != {"critical"}


def test_audit_report_format_from_config(tmp_path, bad_html_file, monkeypatch):
    monkeypatch.chdir(tmp_path)
    config = write_file(tmp_path / "cfg.yaml", "report:\n  report_format: text\n")

    assert main(["audit", "-i", str(bad_html_file), "-c", str(config), "-q"]) == 0

    report = tmp_path / "audit_report.txt"
    assert report.exists()
    assert "ACCESSIBILITY AUDIT REPORT" in report.read_text(encoding="utf-8")


def test_remediate_report_format_from_config(tmp_path, bad_html_file):
    config = write_file(tmp_path / "cfg.yaml", "remediate:\n  report_format: json\n")
    output = tmp_path / "fixed.html"

    assert main(["remediate", "-i", str(bad_html_file), "-o", str(output), "-c", str(config), "-q"]) == 0

    assert (tmp_path / "fixed_report.json").exists()


def test_global_options_before_command(tmp_path, bad_html_file, capsys):
    report_path = tmp_path / "audit.json"

    assert main(["--quiet", "audit", "-i", str(bad_html_file), "-o", str(report_path)]) == 0

    assert report_path.exists()
    assert capsys.readouterr().out == ""


def test_unexpected_error_returns_failure(tmp_path, bad_html_file, capsys):
    blocker = write_file(tmp_path / "blocker", "not a directory")

    code = main(["audit", "-i", str(bad_html_file), "-o", str(blocker / "audit.json")])

    assert code == 1
    assert "Error:" in capsys.readouterr().out
