# Copyright 2025 Amazon.com, Inc. or its affiliates.
# SPDX-License-Identifier: Apache-2.0

"""
Command-line interface for the markup_accessibility package.

This module provides a command-line interface for accessibility auditing,
accessibility remediation and skill file linting.
"""

import os
import sys
import argparse
import logging
import json
from typing import Dict, Any, List, Optional

from markup_accessibility import __version__
from markup_accessibility.api import (
    audit_html_accessibility,
    remediate_html_accessibility,
    process_html_accessibility,
    lint_skill_files,
)
from markup_accessibility.audit.standards import SEVERITY_LEVELS
from markup_accessibility.skills.linter import format_lint_text
from markup_accessibility.utils.config import config_manager, save_config, as_list
from markup_accessibility.utils.logging_helper import (
    setup_logger,
    set_package_log_level,
    MarkupAccessibilityError,
    ResourceError,
)
from markup_accessibility.utils.report_generator import (
    REPORT_FORMATS,
    format_text_report,
    generate_report,
)

# Set up module-level logger
logger = setup_logger(__name__)

SEVERITY_CHOICES = ["minor", "major", "critical"]


def get_default_output_path(
    input_path: str, command: str, output_format: str = None
) -> str:
    """Generate default output path based on input path and command."""
    input_base = os.path.splitext(os.path.basename(os.path.normpath(input_path)))[0]

    if command == "audit":
        ext = "txt" if output_format == "text" else output_format or "json"
        return os.path.join(".", f"audit_report.{ext}")
    elif command == "remediate":
        if os.path.isdir(input_path):
            return os.path.join(".", f"{input_base}_remediated")
        return os.path.join(".", f"{input_base}_remediated.html")
    elif command == "process":
        return os.path.join(".", f"{input_base}_processed")

    return os.path.join(".", f"{input_base}_output")


def configure_logging(debug: bool = False, quiet: bool = False) -> None:
    """Configure logging based on debug and quiet flags."""
    if quiet:
        level = logging.ERROR
    elif debug:
        level = logging.DEBUG
    else:
        level = logging.WARNING

    logging.getLogger().setLevel(level)
    set_package_log_level(level if debug or quiet else logging.INFO)


def _add_global_arguments(parser: argparse.ArgumentParser, suppress: bool = False) -> None:
    """
    Add the options accepted before or after the command name.

    Subcommand copies use SUPPRESS defaults so they do not overwrite a value
    given before the command.
    """
    flag_default = argparse.SUPPRESS if suppress else False
    value_default = argparse.SUPPRESS if suppress else None

    parser.add_argument(
        "--debug", action="store_true", default=flag_default, help="Enable debug logging"
    )
    parser.add_argument(
        "--quiet",
        "-q",
        action="store_true",
        default=flag_default,
        help="Only output reports, suppress other output",
    )
    parser.add_argument(
        "--config", "-c", default=value_default, help="Path to configuration file"
    )
    parser.add_argument(
        "--save-config",
        metavar="CONFIG_PATH",
        default=value_default,
        help="Save current configuration to the specified file path",
    )


def _add_standardized_arguments(parser: argparse.ArgumentParser) -> None:
    """Add standardized arguments that are common across all commands."""
    parser.add_argument(
        "--input", "-i", required=True, help="Input file or directory path"
    )
    parser.add_argument(
        "--output",
        "-o",
        help="Output file or directory path. If not provided, uses default based on command",
    )
    _add_global_arguments(parser, suppress=True)


def _add_audit_arguments(parser: argparse.ArgumentParser) -> None:
    """Add accessibility audit arguments to the audit command parser."""
    _add_standardized_arguments(parser)

    parser.add_argument(
        "--format",
        "-f",
        choices=REPORT_FORMATS,
        help="Output format for audit report (default: report.report_format setting)",
    )
    parser.add_argument("--checks", help="Comma-separated list of checks to run")
    parser.add_argument(
        "--severity",
        choices=SEVERITY_CHOICES,
        help="Minimum severity level to include in report (default: audit setting)",
    )
    parser.add_argument(
        "--fail-on",
        choices=SEVERITY_CHOICES,
        help="Exit with status 1 when an issue of this severity or higher is found",
    )
    parser.add_argument(
        "--outline",
        action="store_true",
        help="Include the heading outline in the report",
    )


def _add_remediate_arguments(parser: argparse.ArgumentParser) -> None:
    """Add accessibility remediation arguments to the remediate command parser."""
    _add_standardized_arguments(parser)

    parser.add_argument(
        "--max-issues",
        type=int,
        help="Maximum number of issues to remediate (default: all)",
    )
    parser.add_argument(
        "--severity-threshold",
        choices=SEVERITY_CHOICES,
        help="Minimum severity level of issues to remediate (default: remediate setting)",
    )
    parser.add_argument(
        "--issue-types", help="Comma-separated list of issue types to remediate"
    )
    parser.add_argument(
        "--audit-report", help="Path to audit report JSON file to use for remediation"
    )
    parser.add_argument(
        "--report-format",
        choices=REPORT_FORMATS,
        help="Format for the remediation report (default: remediate.report_format setting)",
    )


def _add_process_arguments(parser: argparse.ArgumentParser) -> None:
    """Add arguments for the full processing pipeline command."""
    _add_standardized_arguments(parser)

    parser.add_argument(
        "--report-format",
        choices=REPORT_FORMATS,
        help="Format for the audit and remediation reports (default: remediate.report_format setting)",
    )
    parser.add_argument(
        "--severity",
        choices=SEVERITY_CHOICES,
        help="Minimum severity level for audit and remediation (default: configured settings)",
    )
    parser.add_argument(
        "--max-issues",
        type=int,
        help="Maximum number of issues to remediate (default: all)",
    )


def _add_lint_arguments(parser: argparse.ArgumentParser) -> None:
    """Add skill linting arguments to the lint-skills command parser."""
    _add_standardized_arguments(parser)

    parser.add_argument(
        "--format",
        "-f",
        choices=["json", "text"],
        default="text",
        help="Output format for lint results",
    )
    parser.add_argument(
        "--required-keys",
        help="Comma-separated list of frontmatter keys every skill must define",
    )


def create_parser() -> argparse.ArgumentParser:
    """Create the command-line argument parser."""
    parser = argparse.ArgumentParser(
        prog="markup-a11y",
        description="Audit HTML markup for accessibility issues, fix them, and lint skill files.",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )

    _add_global_arguments(parser)

    subparsers = parser.add_subparsers(dest="command", help="Command to execute")

    audit_parser = subparsers.add_parser(
        "audit",
        help="Audit HTML for accessibility issues",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    _add_audit_arguments(audit_parser)

    remediate_parser = subparsers.add_parser(
        "remediate",
        help="Remediate accessibility issues in HTML",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    _add_remediate_arguments(remediate_parser)

    process_parser = subparsers.add_parser(
        "process",
        help="Full workflow: audit, remediate and audit again",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    _add_process_arguments(process_parser)

    lint_parser = subparsers.add_parser(
        "lint-skills",
        help="Lint Markdown skill files",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    _add_lint_arguments(lint_parser)

    parser.add_argument(
        "--version", action="store_true", help="Show version information"
    )

    return parser


def parse_arguments(argv: Optional[List[str]] = None) -> Optional[Dict[str, Any]]:
    """
    Parse command-line arguments and load any configuration file.

    Returns:
        Dictionary of arguments, or None when there is no command to run
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.version:
        print(f"Markup Accessibility v{__version__}")
        return None

    if args.command is None:
        parser.print_help()
        return None

    configure_logging(debug=args.debug, quiet=args.quiet)

    args_dict = vars(args)

    if args_dict.get("config"):
        logger.info(f"Loading configuration from {args_dict['config']}")
        config_manager.load_file(args_dict["config"])

    # Formats left unset on the command line come from the configuration
    if args.command == "audit" and not args_dict.get("format"):
        args_dict["format"] = config_manager.get_config(section="report").get(
            "report_format", "json"
        )
    elif args.command in ("remediate", "process") and not args_dict.get("report_format"):
        args_dict["report_format"] = config_manager.get_config(section="remediate").get(
            "report_format", "html"
        )

    # Lint results go to stdout unless a file is named
    if not args_dict.get("output") and args.command != "lint-skills":
        args_dict["output"] = get_default_output_path(
            args_dict["input"], args.command, args_dict.get("format")
        )

    return args_dict


def save_configuration_from_args(args_dict: Dict[str, Any]) -> None:
    """
    Save configuration to file based on command-line arguments.

    Args:
        args_dict: Dictionary of command-line arguments
    """
    config_path = args_dict.get("save_config")
    if not config_path:
        return

    file_format = "json" if config_path.lower().endswith(".json") else "yaml"

    overrides = {"audit": {}, "remediate": {}, "skills": {}}
    command = args_dict.get("command")

    if command in ("audit", "process") and args_dict.get("severity"):
        overrides["audit"]["severity_threshold"] = args_dict["severity"]
    if args_dict.get("checks"):
        overrides["audit"]["checks"] = as_list(args_dict["checks"])
    if args_dict.get("outline"):
        overrides["audit"]["include_outline"] = True

    if args_dict.get("severity_threshold"):
        overrides["remediate"]["severity_threshold"] = args_dict["severity_threshold"]
    elif command == "process" and args_dict.get("severity"):
        overrides["remediate"]["severity_threshold"] = args_dict["severity"]
    if args_dict.get("max_issues") is not None:
        overrides["remediate"]["max_issues"] = args_dict["max_issues"]
    if args_dict.get("issue_types"):
        overrides["remediate"]["issue_types"] = as_list(args_dict["issue_types"])
    if args_dict.get("report_format"):
        overrides["remediate"]["report_format"] = args_dict["report_format"]

    if args_dict.get("required_keys"):
        overrides["skills"]["required_keys"] = as_list(args_dict["required_keys"])

    # Merge with the resolved configuration of each section
    config = {
        section: config_manager.get_config(section_overrides, section)
        for section, section_overrides in overrides.items()
    }
    config["report"] = config_manager.get_config(section="report")

    save_config(config, config_path, file_format=file_format)
    if not args_dict.get("quiet"):
        print(f"Configuration saved to {config_path}")


def _fails_threshold(issues: List[Dict[str, Any]], severity: str) -> bool:
    threshold = SEVERITY_LEVELS.get(severity, 0)
    return any(
        issue.get("remediation_status") == "needs_remediation"
        and SEVERITY_LEVELS.get(issue.get("severity"), 0) >= threshold
        for issue in issues
    )


def run_audit_command(args: Dict[str, Any]) -> int:
    """Run the accessibility audit command."""
    report_format = args.get("format", "json")

    options = {
        "severity_threshold": args.get("severity"),
        "report_format": report_format,
        "checks": as_list(args.get("checks")),
        "include_outline": args.get("outline") or None,
    }

    output_path = args["output"]
    if os.path.isdir(output_path):
        ext = "txt" if report_format == "text" else report_format
        output_path = os.path.join(output_path, f"audit_report.{ext}")

    logger.info(f"Auditing HTML for accessibility: {args['input']}")
    logger.debug(f"Will save audit report to: {output_path}")

    result = audit_html_accessibility(
        html_path=args["input"], options=options, output_path=output_path
    )

    if not args.get("quiet"):
        print(format_text_report(result, "accessibility"))
        print(f"Report saved to: {output_path}")

    if args.get("fail_on") and _fails_threshold(result["issues"], args["fail_on"]):
        logger.info(f"Found issues at or above severity '{args['fail_on']}'")
        return 1
    return 0


def _load_audit_report(path: str) -> Dict[str, Any]:
    try:
        with open(path, "r", encoding="utf-8") as f:
            return json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise ResourceError(f"Error loading audit report {path}: {e}") from e


def run_remediate_command(args: Dict[str, Any]) -> int:
    """Run the accessibility remediation command."""
    options = {
        "max_issues": args.get("max_issues"),
        "severity_threshold": args.get("severity_threshold"),
        "issue_types": as_list(args.get("issue_types")),
    }

    audit_report = None
    if args.get("audit_report"):
        audit_report = _load_audit_report(args["audit_report"])

    logger.info(f"Remediating accessibility issues: {args['input']}")

    result = remediate_html_accessibility(
        html_path=args["input"],
        audit_report=audit_report,
        options=options,
        output_path=args["output"],
    )

    report_format = args.get("report_format") or "html"
    ext = "txt" if report_format == "text" else report_format
    if os.path.isdir(args["input"]):
        report_path = os.path.join(args["output"], f"remediation_report.{ext}")
    else:
        report_path = f"{os.path.splitext(args['output'])[0]}_report.{ext}"

    generate_report(
        {k: v for k, v in result.items() if k != "remediated_html"},
        output_path=report_path,
        report_format=report_format,
        report_type="remediation",
    )

    if not args.get("quiet"):
        print("\nRemediation Results:")
        print(f"  Issues processed: {result.get('issues_processed', 0)}")
        print(f"  Issues remediated: {result.get('issues_remediated', 0)}")
        print(f"  Issues failed: {result.get('issues_failed', 0)}")
        print(f"  Remediated HTML: {result['remediated_html_path']}")
        print(f"  Remediation report: {report_path}")

    return 0


def run_process_command(args: Dict[str, Any]) -> int:
    """Run the full audit and remediation workflow."""
    options = {
        "report_format": args.get("report_format"),
        "audit": {"severity_threshold": args.get("severity")},
        "remediate": {
            "severity_threshold": args.get("severity"),
            "max_issues": args.get("max_issues"),
        },
    }

    result = process_html_accessibility(
        html_path=args["input"], output_dir=args["output"], options=options
    )

    if not args.get("quiet"):
        initial = result["remediation"].get("initial_summary") or {}
        final = result["remediation"].get("final_summary") or {}
        print("\nProcess Results:")
        print(f"  Issues found: {initial.get('needs_remediation', 0)}")
        print(f"  Issues remediated: {result['remediation'].get('issues_remediated', 0)}")
        if final:
            print(f"  Issues remaining: {final.get('needs_remediation', 0)}")
            print(f"  Score: {initial.get('score')} -> {final.get('score')}")
        print(f"  Remediated HTML: {result['remediated_html_path']}")
        for report_path in result["report_paths"]:
            print(f"  Report: {report_path}")

    return 0


def run_lint_command(args: Dict[str, Any]) -> int:
    """Run the skill file linter."""
    options = {"required_keys": as_list(args.get("required_keys"))}

    result = lint_skill_files(args["input"], options)

    if args.get("format") == "json":
        output = json.dumps(result, indent=2)
    else:
        output = format_lint_text(result)

    if args.get("output"):
        with open(args["output"], "w", encoding="utf-8") as f:
            f.write(output)
        logger.info(f"Saved lint results to {args['output']}")
    elif not args.get("quiet") or result["summary"]["errors"]:
        print(output)

    return 1 if result["summary"]["errors"] else 0


COMMANDS = {
    "audit": run_audit_command,
    "remediate": run_remediate_command,
    "process": run_process_command,
    "lint-skills": run_lint_command,
}


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the CLI."""
    quiet = False
    try:
        args = parse_arguments(argv)
        if args is None:
            return 0
        quiet = args.get("quiet", False)

        save_configuration_from_args(args)

        return COMMANDS[args["command"]](args)

    except MarkupAccessibilityError as e:
        logger.error(f"Error running command: {e}")
        if not quiet:
            print(f"Error: {e}")
        return 1
    except Exception as e:
        logger.error(f"Unexpected error: {e}")
        if not quiet:
            print(f"Error: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
