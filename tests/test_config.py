# Copyright 2025 Amazon.com, Inc. or its affiliates.
# SPDX-License-Identifier: Apache-2.0

import json

import pytest
import yaml

from page_accessibility_utility.utils.config import (
    DEFAULT_CONFIG,
    AnalysisConfig,
    ConfigManager,
    load_config_file,
    resolve_analysis_config,
    save_config,
    validate_options,
)
from page_accessibility_utility.utils.logging_helper import ConfigurationError


@pytest.fixture
def manager():
    return ConfigManager()


def test_defaults(manager):
    config = manager.get_analysis_config()

    assert config.wcag_level == "AA"
    assert config.max_scan_time == 200.0
    assert config.min_contrast_ratio == 4.5
    assert config.parallel_analysis
    assert not config.include_hidden_elements
    assert config.enable_color_contrast_check
    assert config.visual_time_budget == 150.0


def test_defaults_are_not_shared(manager):
    manager.update_defaults({"wcag_level": "AAA"}, "analysis")

    assert ConfigManager().get_config(section="analysis")["wcag_level"] == "AA"
    assert DEFAULT_CONFIG["analysis"]["wcag_level"] == "AA"


def test_environment_variables_are_converted(manager, monkeypatch):
    monkeypatch.setenv("PAGE_A11Y_ANALYSIS_MIN_CONTRAST_RATIO", "5.5")
    monkeypatch.setenv("PAGE_A11Y_ANALYSIS_PARALLEL_ANALYSIS", "false")
    monkeypatch.setenv("PAGE_A11Y_ANALYSIS_WCAG_LEVEL", "AAA")

    config = manager.get_analysis_config()
    assert config.min_contrast_ratio == 5.5
    assert config.parallel_analysis is False
    assert config.wcag_level == "AAA"


def test_unconvertible_environment_variable_fails_validation(manager, monkeypatch):
    monkeypatch.setenv("PAGE_A11Y_ANALYSIS_MAX_SCAN_TIME", "fast")

    with pytest.raises(ConfigurationError):
        manager.get_analysis_config()


def test_precedence(manager, monkeypatch):
    manager.set_user_config({"wcag_level": "A", "max_scan_time": 500.0}, "analysis")
    monkeypatch.setenv("PAGE_A11Y_ANALYSIS_MAX_SCAN_TIME", "300")

    config = manager.get_analysis_config({"wcag_level": "AAA"})
    assert config.wcag_level == "AAA"
    assert config.max_scan_time == 300.0


def test_load_yaml_file(manager, tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text(
        "analysis:\n  wcag_level: AAA\n  enable_form_validation: false\ninclude_hidden_elements: true\n"
    )

    manager.load_file(str(path))
    config = manager.get_analysis_config()
    assert config.wcag_level == "AAA"
    assert config.enable_form_validation is False
    assert config.include_hidden_elements is True


def test_load_json_file(tmp_path):
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"analysis": {"min_contrast_ratio": 7.0}}))

    assert load_config_file(str(path)) == {"analysis": {"min_contrast_ratio": 7.0}}


@pytest.mark.parametrize(
    "name,content",
    [
        ("missing.yaml", None),
        ("config.toml", "wcag_level = 'AA'"),
        ("broken.yaml", "analysis: [unclosed"),
        ("broken.json", "{not json"),
    ],
)
def test_load_config_file_errors(tmp_path, name, content):
    path = tmp_path / name
    if content is not None:
        path.write_text(content)

    with pytest.raises(ConfigurationError):
        load_config_file(str(path))


def test_load_file_requires_mapping(manager, tmp_path):
    path = tmp_path / "list.yaml"
    path.write_text("- a\n- b\n")

    with pytest.raises(ConfigurationError):
        manager.load_file(str(path))


@pytest.mark.parametrize(
    "options",
    [
        {"wcag_level": "B"},
        {"max_scan_time": 0},
        {"min_contrast_ratio": 0.5},
        {"min_contrast_ratio": 22},
        {"enable_aria_validation": "sometimes"},
    ],
)
def test_invalid_options(options):
    with pytest.raises(ConfigurationError):
        AnalysisConfig.from_options(options)


def test_resolve_analysis_config_passes_models_through():
    config = AnalysisConfig(wcag_level="AAA")

    assert resolve_analysis_config(config) is config
    assert resolve_analysis_config(None) == AnalysisConfig()
    assert resolve_analysis_config({"unknown_option": 1}) == AnalysisConfig()


@pytest.mark.parametrize("file_format", ["yaml", "json"])
def test_save_config(tmp_path, file_format):
    path = tmp_path / f"saved.{file_format}"
    save_config({"analysis": {"wcag_level": "AA"}}, str(path), file_format)

    loader = yaml.safe_load if file_format == "yaml" else json.loads
    assert loader(path.read_text()) == {"analysis": {"wcag_level": "AA"}}


def test_save_config_rejects_unknown_format(tmp_path):
    with pytest.raises(ConfigurationError):
        save_config({}, str(tmp_path / "x.ini"), "ini")


def test_validate_options():
    validate_options({"a": 1}, required_fields={"a": int}, optional_fields={"b": str})

    with pytest.raises(ConfigurationError, match="missing"):
        validate_options({}, required_fields={"a": int})
    with pytest.raises(ConfigurationError, match="incorrect type"):
        validate_options({"b": 2}, optional_fields={"b": str})
