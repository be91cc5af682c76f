# Copyright 2025 Amazon.com, Inc. or its affiliates.
# SPDX-License-Identifier: Apache-2.0

"""
Error handling utilities for the markup_accessibility package.

Package exceptions and logger setup. handle_exception logs an unexpected
failure and wraps it in a package exception.
"""

import logging
import sys
from typing import NoReturn, Optional, Type


class MarkupAccessibilityError(Exception):
    """Base exception class for all markup_accessibility errors."""


class HTMLParseError(MarkupAccessibilityError):
    """Raised when markup cannot be parsed into an element tree."""


class AccessibilityAuditError(MarkupAccessibilityError):
    """Raised when there's an error during accessibility auditing."""


class AccessibilityRemediationError(MarkupAccessibilityError):
    """Raised when there's an error during accessibility remediation."""


class ConfigurationError(MarkupAccessibilityError):
    """Raised when there's an error in configuration."""


class ResourceError(MarkupAccessibilityError):
    """Raised when there's an error reading or writing files."""


class SkillLintError(MarkupAccessibilityError):
    """Raised when skill files cannot be linted."""


# Configure module-level logger
logger = logging.getLogger(__name__)


def setup_logger(name: str, level: Optional[int] = None) -> logging.Logger:
    """
    Set up a logger with standardized formatting.

    Args:
        name: The logger name, typically __name__ of the calling module
        level: The logging level (default: INFO if not in debug mode)

    Returns:
        A configured logger instance
    """
    logger_obj = logging.getLogger(name)

    if level is None:
        # Root logger is put in DEBUG by the --debug flag
        if logging.getLogger().level <= logging.DEBUG:
            level = logging.DEBUG
        else:
            level = logging.INFO

        logger.debug(f"Setting logger {name} level to {logging.getLevelName(level)}")

    logger_obj.setLevel(level)
    logger_obj.propagate = True

    if not logger_obj.handlers:
        formatter = logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        )

        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(formatter)
        logger_obj.addHandler(handler)

    return logger_obj


def set_package_log_level(level: int) -> None:
    """
    Apply a logging level to every logger created by this package.

    Args:
        level: The logging level to apply
    """
    for name in list(logging.Logger.manager.loggerDict):
        if name.startswith("markup_accessibility"):
            logger_obj = logging.getLogger(name)
            logger_obj.setLevel(level)
            for handler in logger_obj.handlers:
                handler.setLevel(level)


def handle_exception(
    exc: Exception,
    logger: logging.Logger,
    custom_message: str = None,
    custom_exception: Type[MarkupAccessibilityError] = None,
) -> NoReturn:
    """
    Log an unexpected exception with its traceback and raise it again.

    Args:
        exc: The caught exception
        logger: Logger to use for recording the error
        custom_message: Optional message to include
        custom_exception: Package exception type to raise instead of the original

    Raises:
        The original exception, or custom_exception wrapping it
    """
    message = custom_message if custom_message else str(exc)

    logger.error(f"{message}: {type(exc).__name__} - {exc}", exc_info=True)

    if custom_exception:
        raise custom_exception(message) from exc
    raise exc
