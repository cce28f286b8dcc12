# Copyright 2025 Amazon.com, Inc. or its affiliates.
# SPDX-License-Identifier: Apache-2.0

"""
Error handling utilities for the page_accessibility_utility package.

This module provides standardized error handling mechanisms, including custom
exceptions and error logging utilities to ensure consistent error handling
across all modules.
"""

import logging
import sys
from typing import Optional, Type, Dict, Any


class PageAccessibilityError(Exception):
    """Base exception class for all page_accessibility_utility errors."""



class AccessibilityAnalysisError(PageAccessibilityError):
    """Raised when an accessibility analysis cannot produce a result."""



class InvalidDocumentError(AccessibilityAnalysisError):
    """Raised when the input to an analysis is not a document tree."""



class AnalysisInProgressError(AccessibilityAnalysisError):
    """Raised when a scan is requested while another scan is still running."""



class ConfigurationError(PageAccessibilityError):
    """Raised when there's an error in configuration."""



class ResourceError(PageAccessibilityError):
    """Raised when there's an error reading or writing files."""



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
        # Root logger is put in debug mode by the --debug flag
        if logging.getLogger().level <= logging.DEBUG:
            level = logging.DEBUG
        else:
            level = logging.INFO

        logger.debug("Setting logger %s level to %s", name, logging.getLevelName(level))

    logger_obj.setLevel(level)
    logger_obj.propagate = True

    if not logger_obj.handlers:
        formatter = logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        )
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(formatter)
        logger_obj.addHandler(handler)

    return logger_obj


def log_exception(
    logger: logging.Logger,
    exception: Exception,
    message: str = "An error occurred",
    level: int = logging.ERROR,
    include_traceback: bool = True,
) -> None:
    """
    Log an exception with consistent formatting.

    Args:
        logger: The logger instance to use
        exception: The exception to log
        message: Optional custom message
        level: The logging level to use
        include_traceback: Whether to include the full traceback
    """
    error_type = type(exception).__name__
    log_msg = f"{message}: {error_type} - {exception}"

    if include_traceback:
        logger.log(level, log_msg, exc_info=exception)
    else:
        logger.log(level, log_msg)


def handle_exception(
    exc: Exception,
    logger: logging.Logger,
    custom_message: str = None,
    reraise: bool = True,
    custom_exception: Type[Exception] = None,
    additional_data: Dict[str, Any] = None,
) -> Optional[Dict[str, Any]]:
    """
    Standardized exception handling.

    Args:
        exc: The caught exception
        logger: Logger to use for recording the error
        custom_message: Optional message to include
        reraise: Whether to reraise the exception (possibly wrapped)
        custom_exception: Exception type to raise instead of original
        additional_data: Additional context data to include

    Returns:
        If reraise is False, returns error information as a dict

    Raises:
        The original exception or a wrapped custom exception if reraise is True
    """
    message = custom_message if custom_message else str(exc)

    log_exception(logger, exc, message)

    error_info = {
        "error_type": type(exc).__name__,
        "error_message": str(exc),
        "original_exception": exc,
    }
    if additional_data:
        error_info.update(additional_data)

    if reraise:
        if custom_exception:
            raise custom_exception(message) from exc
        raise exc

    return error_info
