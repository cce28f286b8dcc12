# Copyright 2025 Amazon.com, Inc. or its affiliates.
# SPDX-License-Identifier: Apache-2.0

"""
Configuration management utilities for the page_accessibility_utility package.

This module provides a layered configuration system that manages default
options, user-provided settings, and environment variables. Managers are
created explicitly and handed to the components that need them.
"""

import os
import yaml
import json
from pathlib import Path
from typing import Dict, Any, Optional
from copy import deepcopy

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from page_accessibility_utility.utils.logging_helper import setup_logger, ConfigurationError
from page_accessibility_utility.utils.report_models import WCAGLevel

# Configure module-level logger
logger = setup_logger(__name__)


DEFAULT_CONFIG = {
    "analysis": {
        "enable_color_contrast_check": True,
        "enable_keyboard_accessibility_check": True,
        "enable_aria_validation": True,
        "enable_form_validation": True,
        "wcag_level": "AA",
        "max_scan_time": 200.0,
        "min_contrast_ratio": 4.5,
        "include_hidden_elements": False,
        "parallel_analysis": True,
        "dom_time_budget": 100.0,
        "scanner_time_budget": 100.0,
        "content_time_budget": 100.0,
        "visual_time_budget": 150.0,
    },
}


class AnalysisConfig(BaseModel):
    """Validated options for one analysis run."""

    enable_color_contrast_check: bool = True
    enable_keyboard_accessibility_check: bool = True
    enable_aria_validation: bool = True
    enable_form_validation: bool = True
    wcag_level: WCAGLevel = WCAGLevel.AA
    max_scan_time: float = Field(200.0, gt=0)
    min_contrast_ratio: float = Field(4.5, ge=1.0, le=21.0)
    include_hidden_elements: bool = False
    parallel_analysis: bool = True
    dom_time_budget: float = Field(100.0, gt=0)
    scanner_time_budget: float = Field(100.0, gt=0)
    content_time_budget: float = Field(100.0, gt=0)
    visual_time_budget: float = Field(150.0, gt=0)

    model_config = ConfigDict(use_enum_values=True, extra="ignore")

    @classmethod
    def from_options(cls, options: Optional[Dict[str, Any]] = None) -> "AnalysisConfig":
        """
        Build a validated configuration from a plain options dictionary.

        Raises:
            ConfigurationError: If an option has an invalid value
        """
        try:
            return cls(**(options or {}))
        except ValidationError as e:
            raise ConfigurationError(f"Invalid analysis options: {e}") from e


def resolve_analysis_config(options: Any = None) -> AnalysisConfig:
    """Accept an AnalysisConfig, an options dictionary or None."""
    if isinstance(options, AnalysisConfig):
        return options
    return AnalysisConfig.from_options(options)


class ConfigManager:
    """
    Layered configuration manager for the analysis components.

    This class handles:
    - Default options
    - User-provided options
    - Environment variables
    - Option merging and cascade
    """

    def __init__(
        self, defaults: Dict[str, Any] = None, env_prefix: str = "PAGE_A11Y_"
    ):
        """
        Initialize a configuration manager.

        Args:
            defaults: Dictionary of default options
            env_prefix: Prefix for environment variables
        """
        self.defaults = deepcopy(defaults if defaults is not None else DEFAULT_CONFIG)
        self.env_prefix = env_prefix
        self.user_config = {}

    def get_config(
        self, user_options: Dict[str, Any] = None, section: str = None
    ) -> Dict[str, Any]:
        """
        Get the resolved configuration with defaults, environment vars, and user options.

        Args:
            user_options: User-provided option overrides
            section: Optional section name to retrieve (e.g., 'analysis')

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

        # Runtime options take precedence over everything else
        if user_options:
            config.update(user_options)

        return config

    def get_analysis_config(self, user_options: Dict[str, Any] = None) -> AnalysisConfig:
        """Resolve the 'analysis' section and validate it."""
        return AnalysisConfig.from_options(self.get_config(user_options, "analysis"))

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
        """Store the sections of a configuration file as user configuration."""
        config_data = load_config_file(file_path)
        if not isinstance(config_data, dict):
            raise ConfigurationError(
                f"Configuration file must contain a mapping: {file_path}"
            )

        for section in self.defaults:
            if isinstance(config_data.get(section), dict):
                self.set_user_config(config_data[section], section)
                logger.debug("Applied configuration for section: %s", section)

        top_level = {k: v for k, v in config_data.items() if k not in self.defaults}
        if top_level:
            # Bare options belong to the analysis section
            self.set_user_config(top_level, "analysis")
            logger.debug("Applied top-level configuration")

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

            # Convert to the type of the existing value
            if option_name in config:
                existing_type = type(config[option_name])
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
                        "Could not convert environment variable %s to %s",
                        env_var,
                        existing_type.__name__,
                    )

            config[option_name] = value
            logger.debug("Applied environment variable %s", env_var)


def validate_options(
    options: Dict[str, Any],
    required_fields: Optional[Dict[str, type]] = None,
    optional_fields: Optional[Dict[str, type]] = None,
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
                    f"Expected {field_type.__name__}, got {type(options[field]).__name__}"
                )

    if optional_fields:
        for field, field_type in optional_fields.items():
            if field in options and not isinstance(options[field], field_type):
                raise ConfigurationError(
                    f"Field '{field}' has incorrect type. "
                    f"Expected {field_type.__name__}, got {type(options[field]).__name__}"
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
        logger.info("Configuration saved to %s", file_path)
    except OSError as e:
        raise ConfigurationError(f"Error saving configuration: {e}") from e
