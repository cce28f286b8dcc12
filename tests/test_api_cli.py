# Copyright 2025 Amazon.com, Inc. or its affiliates.
# SPDX-License-Identifier: Apache-2.0

import json
import logging

import pytest
import yaml

from page_accessibility_utility import __version__
from page_accessibility_utility.api import analyze_html_accessibility, summarize_result
from page_accessibility_utility.cli import build_options, main
from page_accessibility_utility.dom.document import HtmlDocument
from page_accessibility_utility.utils.logging_helper import (
    AccessibilityAnalysisError,
    ConfigurationError,
    InvalidDocumentError,
    ResourceError,
)

PAGE = """<!DOCTYPE html>
<html lang="en">
<head><title>Shop</title></head>
<body>
  <main>
    <h1>Catalog</h1>
    <img src="product.png">
    <p style="color: #999999">Prices include tax.</p>
    <p>See <a href="/terms">https://example.com/terms</a></p>
  </main>
</body>
</html>
"""


@pytest.fixture(autouse=True)
def restore_logging():
    """The CLI adjusts package logger levels and streams; put them back after each test."""
    names = [name for name in logging.Logger.manager.loggerDict if name.startswith("page_accessibility_utility")]
    levels = {name: logging.getLogger(name).level for name in names}
    streams = [
        (handler, handler.stream)
        for name in names
        for handler in logging.getLogger(name).handlers
        if type(handler) is logging.StreamHandler
    ]
    root_level = logging.getLogger().level
    yield
    for name, level in levels.items():
        logging.getLogger(name).setLevel(level)
    # capsys has closed its streams by now, so skip the flush setStream does
    for handler, stream in streams:
        handler.stream = stream
    logging.getLogger().setLevel(root_level)


@pytest.fixture
def page_file(tmp_path):
    path = tmp_path / "page.html"
    path.write_text(PAGE, encoding="utf-8")
    return path


class TestAnalyzeHtmlAccessibility:
    def test_analyze_content(self):
        result = analyze_html_accessibility(html_content=PAGE, url="https://shop.test/")

        assert result.page_url == "https://shop.test/"
        assert result.critical_issues == 2
        assert result.low_priority_issues == 1
        assert result.overall_score == 69.0

    def test_analyze_file_records_file_url(self, page_file):
        result = analyze_html_accessibility(html_path=str(page_file))

        assert result.page_url.startswith("file://")
        assert result.page_url.endswith("page.html")

    def test_report_is_written(self, tmp_path):
        output = tmp_path / "reports" / "report.json"

        result = analyze_html_accessibility(html_content=PAGE, output_path=str(output))
        report = json.loads(output.read_text())
        assert report["overall_score"] == result.overall_score
        assert len(report["aggregated_issues"]) == result.total_issues
        assert set(report["issues_by_category"]) == {"visual", "content", "interaction", "structure", "general"}
        assert "page_context" in report["dom_analysis"]

    def test_options_are_applied(self):
        result = analyze_html_accessibility(
            html_content=PAGE, options={"enable_color_contrast_check": False}
        )

        assert not [i for i in result.aggregated_issues if i.type == "insufficient-contrast"]

    def test_config_file(self, tmp_path):
        config_path = tmp_path / "a11y.yaml"
        config_path.write_text(yaml.safe_dump({"analysis": {"enable_color_contrast_check": False}}))

        result = analyze_html_accessibility(html_content=PAGE, config_file=str(config_path))
        assert result.critical_issues == 1

    def test_progress_callback(self):
        events = []
        analyze_html_accessibility(html_content=PAGE, progress_callback=events.append)

        assert events[-1].percentage == 100.0

    def test_missing_input(self):
        with pytest.raises(InvalidDocumentError):
            analyze_html_accessibility()

    def test_missing_file(self, tmp_path):
        with pytest.raises(ResourceError):
            analyze_html_accessibility(html_path=str(tmp_path / "absent.html"))

    @pytest.mark.parametrize("options", [{"wcag_level": 2}, {"min_contrast_ratio": 0.5}])
    def test_invalid_options(self, options):
        with pytest.raises(ConfigurationError):
            analyze_html_accessibility(html_content=PAGE, options=options)

    def test_unexpected_failure_is_wrapped(self, monkeypatch):
        def broken(cls, *args, **kwargs):
            raise RuntimeError("parser crashed")

        monkeypatch.setattr(HtmlDocument, "from_html", classmethod(broken))

        with pytest.raises(AccessibilityAnalysisError):
            analyze_html_accessibility(html_content=PAGE)

    def test_summarize_result(self):
        summary = summarize_result(analyze_html_accessibility(html_content=PAGE, url="u"))

        assert summary["page_url"] == "u"
        assert summary["total_issues"] == 3
        assert summary["issues_by_category"]["visual"] == 2
        assert summary["issues_by_category"]["content"] == 1


class TestCli:
    def test_version(self, capsys):
        assert main(["--version"]) == 0
        assert capsys.readouterr().out.strip() == f"Page Accessibility Utility v{__version__}"

    def test_no_command_prints_help(self, capsys):
        assert main([]) == 0
        assert "audit" in capsys.readouterr().out

    def test_audit_to_file(self, page_file, tmp_path):
        output = tmp_path / "out" / "report.json"

        assert main(["audit", "-i", str(page_file), "-o", str(output), "--quiet"]) == 0
        report = json.loads(output.read_text())
        assert report["summary"]["total_issues"] == 3
        assert len(report["issues"]) == 3

    def test_audit_to_stdout(self, page_file, capsys):
        assert main(["audit", "-i", str(page_file), "--quiet", "--url", "https://shop.test/"]) == 0

        report = json.loads(capsys.readouterr().out)
        assert report["summary"]["page_url"] == "https://shop.test/"

    def test_audit_to_stdout_keeps_logs_off_the_report(self, page_file, tmp_path, capsys):
        saved = tmp_path / "saved.yaml"

        assert main(["audit", "-i", str(page_file), "--save-config", str(saved)]) == 0

        captured = capsys.readouterr()
        assert json.loads(captured.out)["summary"]["total_issues"] == 3
        assert "Starting accessibility analysis" in captured.err
        assert "Configuration saved" in captured.err

    def test_summary_only(self, page_file, tmp_path):
        output = tmp_path / "report.json"

        main(["audit", "-i", str(page_file), "-o", str(output), "--quiet", "--summary-only"])
        assert list(json.loads(output.read_text())) == ["summary"]

    def test_min_severity(self, page_file, tmp_path):
        output = tmp_path / "report.json"

        main(["audit", "-i", str(page_file), "-o", str(output), "-q", "--min-severity", "critical"])
        report = json.loads(output.read_text())
        assert [issue["severity"] for issue in report["issues"]] == ["critical", "critical"]
        assert report["summary"]["total_issues"] == 3

    def test_disable_check(self, page_file, tmp_path):
        output = tmp_path / "report.json"

        main(["audit", "-i", str(page_file), "-o", str(output), "-q", "--disable-check", "contrast"])
        types = {issue["type"] for issue in json.loads(output.read_text())["issues"]}
        assert "insufficient-contrast" not in types

    def test_save_config(self, page_file, tmp_path):
        output = tmp_path / "report.json"
        saved = tmp_path / "saved.yaml"

        main([
            "audit", "-i", str(page_file), "-o", str(output), "-q",
            "--wcag-level", "AAA", "--save-config", str(saved),
        ])
        assert yaml.safe_load(saved.read_text())["analysis"]["wcag_level"] == "AAA"

    def test_missing_input_file(self, tmp_path):
        assert main(["audit", "-i", str(tmp_path / "absent.html"), "-q"]) == 1

    def test_invalid_config_file(self, page_file, tmp_path):
        config_path = tmp_path / "bad.yaml"
        config_path.write_text("analysis:\n  wcag_level: B\n")

        assert main(["audit", "-i", str(page_file), "-c", str(config_path), "-q"]) == 1

    def test_rejects_unknown_wcag_level(self, page_file):
        with pytest.raises(SystemExit):
            main(["audit", "-i", str(page_file), "--wcag-level", "B"])


def test_build_options():
    options = build_options(
        {
            "wcag_level": "AAA",
            "min_contrast_ratio": 5.0,
            "max_scan_time": None,
            "sequential": True,
            "include_hidden": False,
            "disable_check": ["aria", "forms"],
        }
    )

    assert options == {
        "wcag_level": "AAA",
        "min_contrast_ratio": 5.0,
        "parallel_analysis": False,
        "enable_aria_validation": False,
        "enable_form_validation": False,
    }
