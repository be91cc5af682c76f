# Copyright 2025 Amazon.com, Inc. or its affiliates.
# SPDX-License-Identifier: Apache-2.0

"""
Configuration management utilities for the markup_accessibility package.

This module provides a centralized configuration system that manages default
options, user-provided settings, and environment variables across all modules.
"""

import os
import json
from pathlib import Path
from typing import Dict, Any, Optional
from copy import deepcopy

import yaml

from markup_accessibility.utils.logging_helper import setup_logger, ConfigurationError

# Configure module-level logger
logger = setup_logger(__name__)

CONFIG_SECTIONS = ["audit", "remediate", "report", "skills"]

# Expected option types per section; list options also accept comma-separated strings
OPTION_TYPES = {
    "audit": {
        "severity_threshold": str,
        "detailed": bool,
        "include_remediated": bool,
        "checks": (list, str),
        "issue_types": (list, str),
        "include_outline": bool,
    },
    "remediate": {
        "max_issues": int,
        "issue_types": (list, str),
        "severity_threshold": str,
        "default_language": str,
        "report_format": str,
    },
    "report": {"report_format": str},
    "skills": {
        "required_keys": (list, str),
        "file_pattern": str,
        "check_error_codes": bool,
    },
}


class ConfigManager:
    """
    Centralized configuration manager for markup accessibility components.

    This class handles:
    - Default options
    - User-provided options
    - Environment variables
    - Option merging and cascade
    """

    def __init__(
        self, defaults: Dict[str, Any] = None, env_prefix: str = "MARKUP_A11Y_"
    ):
        """
        Initialize a configuration manager.

        Args:
            defaults: Dictionary of default options
            env_prefix: Prefix for environment variables
        """
        self.defaults = defaults or {}
        self.env_prefix = env_prefix
        self.user_config = {}

    def get_config(
        self, user_options: Dict[str, Any] = None, section: str = None
    ) -> Dict[str, Any]:
        """
        Get the resolved configuration with defaults, environment vars, and user options.

        Args:
            user_options: User-provided option overrides
            section: Optional section name to retrieve (e.g., 'audit', 'remediate')

        Returns:
            Dict with the resolved configuration options
        """
        if section and section in self.defaults:
            config = deepcopy(self.defaults[section])
        else:
            config = deepcopy(self.defaults)

        if section and section in self.user_config:
            config.update(self.user_config[section])
        elif not section:
            config.update(self.user_config)

        self._apply_env_vars(config, section)

        # Runtime options have the highest precedence
        if user_options:
            config.update(
                {key: value for key, value in user_options.items() if value is not None}
            )

        return config

    def update_defaults(
        self, new_defaults: Dict[str, Any], section: str = None
    ) -> None:
        """
        Update default configuration values.

        Args:
            new_defaults: Dictionary of new default values
            section: Optional section to update
        """
        if section:
            self.defaults.setdefault(section, {}).update(new_defaults)
        else:
            self.defaults.update(new_defaults)

    def set_user_config(self, config: Dict[str, Any], section: str = None) -> None:
        """
        Set persistent user configuration.

        Args:
            config: Dictionary of configuration options
            section: Optional section name
        """
        if section:
            self.user_config.setdefault(section, {}).update(config)
        else:
            self.user_config.update(config)

    def load_file(self, file_path: str) -> None:
        """
        Load a configuration file into the stored user configuration.

        Known sections are applied per section, anything else is kept at
        the top level.

        Args:
            file_path: Path to a YAML or JSON configuration file
        """
        config_data = load_config_file(file_path)
        if not isinstance(config_data, dict):
            raise ConfigurationError(
                f"Configuration file must contain a mapping: {file_path}"
            )

        for section in CONFIG_SECTIONS:
            if section in config_data:
                if not isinstance(config_data[section], dict):
                    raise ConfigurationError(
                        f"Configuration section '{section}' must be a mapping"
                    )
                self.set_user_config(config_data[section], section)
                logger.debug(f"Applied configuration for section: {section}")

        top_level = {k: v for k, v in config_data.items() if k not in CONFIG_SECTIONS}
        if top_level:
            self.set_user_config(top_level)
            logger.debug("Applied top-level configuration")

    def reset(self) -> None:
        """Drop all stored user configuration."""
        self.user_config = {}

    def _apply_env_vars(self, config: Dict[str, Any], section: str = None) -> None:
        """
        Apply relevant environment variables to the configuration.

        Args:
            config: Configuration dictionary to update
            section: Optional section name to scope environment variables
        """
        prefix = self.env_prefix
        if section:
            prefix = f"{prefix}{section.upper()}_"

        for env_var, value in os.environ.items():
            if not env_var.startswith(prefix):
                continue

            option_name = env_var[len(prefix) :].lower()

            # Convert to the type of the default, or the declared option type
            existing_type = None
            if config.get(option_name) is not None:
                existing_type = type(config[option_name])
            elif isinstance(OPTION_TYPES.get(section or "", {}).get(option_name), type):
                existing_type = OPTION_TYPES[section][option_name]

            if existing_type is not None:
                try:
                    if existing_type == bool:
                        value = value.lower() in ("true", "1", "yes", "y")
                    elif existing_type == int:
                        value = int(value)
                    elif existing_type == float:
                        value = float(value)
                    elif existing_type == list:
                        value = [item.strip() for item in value.split(",")]
                except (ValueError, TypeError):
                    logger.warning(
                        f"Could not convert environment variable {env_var} to {existing_type.__name__}"
                    )

            config[option_name] = value
            logger.debug(f"Applied environment variable {env_var}")


def _type_name(field_type: Any) -> str:
    if isinstance(field_type, tuple):
        return " or ".join(t.__name__ for t in field_type)
    return field_type.__name__


def validate_options(
    options: Dict[str, Any],
    required_fields: Optional[Dict[str, Any]] = None,
    optional_fields: Optional[Dict[str, Any]] = None,
) -> None:
    """
    Validate configuration options against schemas.

    Args:
        options: The options dictionary to validate
        required_fields: Dictionary mapping field names to expected types
        optional_fields: Dictionary mapping optional field names to expected types

    Raises:
        ConfigurationError: If validation fails
    """
    if required_fields:
        for field, field_type in required_fields.items():
            if field not in options:
                raise ConfigurationError(f"Required field '{field}' is missing")

            if not isinstance(options[field], field_type):
                raise ConfigurationError(
                    f"Field '{field}' has incorrect type. "
                    f"Expected {_type_name(field_type)}, got {type(options[field]).__name__}"
                )

    if optional_fields:
        for field, field_type in optional_fields.items():
            if (
                field in options
                and options[field] is not None
                and not isinstance(options[field], field_type)
            ):
                raise ConfigurationError(
                    f"Field '{field}' has incorrect type. "
                    f"Expected {_type_name(field_type)}, got {type(options[field]).__name__}"
                )


def load_config_file(file_path: str) -> Dict[str, Any]:
    """
    Load configuration from a file.

    Supports YAML (.yaml, .yml) and JSON (.json) formats.

    Args:
        file_path: Path to the configuration file

    Returns:
        Dictionary with configuration options

    Raises:
        ConfigurationError: If file cannot be loaded or parsed
    """
    path = Path(file_path)

    if not path.exists():
        raise ConfigurationError(f"Configuration file not found: {file_path}")

    suffix = path.suffix.lower()
    if suffix not in (".yaml", ".yml", ".json"):
        raise ConfigurationError(
            f"Unsupported configuration file format: {path.suffix}. "
            "Supported formats: YAML (.yaml, .yml), JSON (.json)"
        )

    try:
        with open(path, "r", encoding="utf-8") as f:
            if suffix == ".json":
                return json.load(f)
            return yaml.safe_load(f) or {}
    except (yaml.YAMLError, json.JSONDecodeError) as e:
        raise ConfigurationError(f"Error parsing configuration file: {e}") from e
    except OSError as e:
        raise ConfigurationError(f"Error loading configuration file: {e}") from e


def save_config(config: Dict[str, Any], file_path: str, file_format: str = "yaml") -> None:
    """
    Save configuration to a file.

    Args:
        config: Configuration dictionary
        file_path: Path to save the configuration file
        file_format: File format ('yaml' or 'json')

    Raises:
        ConfigurationError: If file cannot be written
    """
    if file_format.lower() not in ("yaml", "json"):
        raise ConfigurationError(f"Unsupported format: {file_format}")

    try:
        with open(file_path, "w", encoding="utf-8") as f:
            if file_format.lower() == "yaml":
                yaml.safe_dump(config, f, default_flow_style=False)
            else:
                json.dump(config, f, indent=2)
        logger.info(f"Configuration saved to {file_path}")
    except (OSError, yaml.YAMLError, TypeError) as e:
        raise ConfigurationError(f"Error saving configuration: {e}") from e


# Global instance for shared configuration
config_manager = ConfigManager(
    {
        # Accessibility auditing defaults
        "audit": {
            "severity_threshold": "minor",  # minor, major, critical
            "detailed": True,
            "include_remediated": True,
            "checks": None,  # List of check names to run, None = all
            "issue_types": None,  # List of rule ids to report, None = all
            "include_outline": False,
        },
        # Accessibility remediation defaults
        "remediate": {
            "max_issues": None,  # None = all issues
            "issue_types": None,  # List of rule ids to remediate, None = all
            "severity_threshold": "minor",
            "default_language": "en",
            "report_format": "html",
        },
        # Report rendering defaults
        "report": {
            "report_format": "json",
        },
        # Skill file linting defaults
        "skills": {
            "required_keys": ["name", "description"],
            "file_pattern": "*.md",
            "check_error_codes": True,
        },
    }
)


def as_list(value: Any) -> Optional[list]:
    """
    Normalize a list option that may also be given as a comma-separated string.

    Args:
        value: None, a string, or an iterable of strings

    Returns:
        List of non-empty stripped strings, or None when nothing was given
    """
    if value is None:
        return None
    if isinstance(value, str):
        value = value.split(",")
    items = [str(item).strip() for item in value if str(item).strip()]
    return items or None
