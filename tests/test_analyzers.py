# Copyright 2025 Amazon.com, Inc. or its affiliates.
# SPDX-License-Identifier: Apache-2.0

import logging

import pytest
from bs4 import BeautifulSoup

from page_accessibility_utility.audit.analyzers import (
    AccessibilityScanner,
    ContentStructureAnalyzer,
    VisualAnalysisSystem,
)
from page_accessibility_utility.audit.analyzers.base_analyzer import calculate_sub_score
from page_accessibility_utility.audit.checks import HeadingHierarchyCheck
from page_accessibility_utility.utils.logging_helper import InvalidDocumentError
from page_accessibility_utility.utils.report_models import (
    AccessibilityIssue,
    ElementInfo,
    IssueType,
    Severity,
)


def issues_of(result, issue_type):
    return [issue for issue in result.issues if issue.type == issue_type.value]


def make_issue(severity):
    return AccessibilityIssue(
        id="x-1",
        type=IssueType.SEMANTIC_MARKUP,
        severity=severity,
        element=ElementInfo(tag_name="div", xpath="/html[1]"),
        description="test",
        confidence=1.0,
    )


@pytest.mark.parametrize(
    "severities,total,expected",
    [
        ([], 0, 100.0),
        ([Severity.CRITICAL], 0, 100.0),
        ([], 10, 100.0),
        ([Severity.HIGH], 1, 25.0),
        ([Severity.CRITICAL], 1, 0.0),
        ([Severity.CRITICAL] * 3, 1, 0.0),
        ([Severity.LOW, Severity.MEDIUM], 4, 81.0),
    ],
)
def test_calculate_sub_score(severities, total, expected):
    assert calculate_sub_score([make_issue(s) for s in severities], total) == expected


class TestAccessibilityScanner:
    def test_missing_alt_text(self, make_document):
        result = AccessibilityScanner().scan(make_document('<img src="photo.png">'))

        (issue,) = result.issues
        assert issue.type == "missing-alt-text"
        assert issue.severity == "high"
        assert issue.confidence == 0.95
        assert issue.id == "scanner-1"
        assert issue.source == "AccessibilityScanner"
        assert issue.wcag_criteria == ["1.1.1"]
        assert issue.element.xpath == "/html[1]/body[1]/img[1]"
        assert result.overall_score == 25.0
        assert result.warning_issues == 1
        assert result.issues_by_severity["high"] == [issue]
        assert set(result.issues_by_severity) == {"critical", "high", "medium", "low"}

    def test_decorative_and_described_images_pass(self, make_document):
        document = make_document(
            '<img src="spacer.gif"><img src="a.png" alt=""><img src="b.png" aria-label="Chart">'
            '<img src="c.png" role="presentation">'
        )

        assert issues_of(AccessibilityScanner().scan(document), IssueType.MISSING_ALT_TEXT) == []

    def test_contrast_failures(self, make_document):
        document = make_document(
            '<p style="color: #777777">Almost</p><p style="color: #999999">Faint</p>'
            '<p style="color: #767676">Fine</p><h1 style="color: #777777">Large</h1>'
        )

        issues = issues_of(AccessibilityScanner().scan(document), IssueType.INSUFFICIENT_CONTRAST)
        assert [(issue.element.xpath, issue.severity) for issue in issues] == [
            ("/html[1]/body[1]/p[1]", "high"),
            ("/html[1]/body[1]/p[2]", "critical"),
        ]
        assert issues[0].wcag_criteria == ["1.4.3"]
        assert "4.48:1" in issues[0].description

    def test_contrast_at_aaa(self, make_document):
        document = make_document('<p style="color: #767676">Text</p>')

        (issue,) = AccessibilityScanner().scan(document, {"wcag_level": "AAA"}).issues
        assert issue.severity == "critical"
        assert issue.wcag_criteria == ["1.4.6"]

    def test_contrast_respects_minimum_ratio(self, make_document):
        document = make_document('<p style="color: #767676">Text</p>')

        (issue,) = AccessibilityScanner().scan(document, {"min_contrast_ratio": 5.0}).issues
        assert issue.severity == "high"

    def test_contrast_over_dark_background(self, make_document):
        document = make_document(
            '<div style="background-color: #000000"><p style="color: #333333">Dark</p>'
            '<p style="color: #ffffff">Light</p></div>'
        )

        issues = issues_of(AccessibilityScanner().scan(document), IssueType.INSUFFICIENT_CONTRAST)
        assert [issue.element.xpath for issue in issues] == ["/html[1]/body[1]/div[1]/p[1]"]

    def test_unparseable_color_costs_only_its_element(self, make_document, caplog):
        document = make_document(
            '<p style="color: notacolor">Odd</p><p style="color: rebeccapurple">Named</p>'
            '<p style="color: #777777; background-color: #888888">Low</p>'
        )

        with caplog.at_level(logging.WARNING):
            result = AccessibilityScanner().scan(document)

        issues = issues_of(result, IssueType.INSUFFICIENT_CONTRAST)
        assert [issue.element.xpath for issue in issues] == ["/html[1]/body[1]/p[3]"]
        assert "ColorContrastCheck" in result.checks_run
        assert result.failed_checks == []
        assert result.processed_elements == result.total_elements
        assert "notacolor" in caplog.text

    def test_disabled_contrast_check(self, make_document):
        document = make_document('<p style="color: #999999">Faint</p>')

        result = AccessibilityScanner().scan(document, {"enable_color_contrast_check": False})
        assert result.issues == []
        assert "ColorContrastCheck" not in result.checks_run

    def test_keyboard_access(self, make_document):
        document = make_document(
            '<div id="a" onclick="open()">Open</div>'
            '<div id="b" role="button" tabindex="0">Menu</div>'
            '<div id="c" role="button" tabindex="0" onkeydown="k()">Ok</div>'
            '<a id="d" href="/x" onclick="track()">Native</a>'
        )

        issues = issues_of(AccessibilityScanner().scan(document), IssueType.KEYBOARD_INACCESSIBLE)
        assert [(issue.element.id, issue.severity) for issue in issues] == [
            ("a", "high"),
            ("b", "medium"),
        ]

    def test_aria_problems_are_merged_per_element(self, make_document):
        document = make_document(
            '<div role="bogus" aria-labelledby="missing">x</div>'
            '<div role="tab"></div>'
            '<button aria-hidden="true">Hidden</button>'
        )

        issues = issues_of(AccessibilityScanner().scan(document), IssueType.INVALID_ARIA)
        assert [issue.severity for issue in issues] == ["high", "high", "medium"]
        assert "invalid role 'bogus'" in issues[0].description
        assert "aria-labelledby references missing id(s): missing" in issues[0].description
        assert "tab has no accessible name" in issues[1].description

    def test_link_purpose(self, make_document):
        document = make_document(
            '<a href="/a">Click here</a><a href="/b"></a>'
            '<a href="/c">https://example.com/c</a><a href="/d">Annual report 2024</a>'
        )

        issues = issues_of(AccessibilityScanner().scan(document), IssueType.LINK_PURPOSE)
        assert [issue.severity for issue in issues] == ["medium", "high", "low"]

    def test_focus_management(self, make_document):
        document = make_document(
            '<a id="first" href="/a" tabindex="2">First</a><button id="plain">Plain</button>',
            head="<style>button:focus { outline: none }</style>",
        )

        issues = issues_of(AccessibilityScanner().scan(document), IssueType.FOCUS_MANAGEMENT)
        assert [(issue.element.id, issue.severity) for issue in issues] == [
            ("first", "medium"),
            ("plain", "high"),
        ]

    def test_focus_replacement_indicator(self, make_document):
        document = make_document(
            "<button>Styled</button>",
            head="<style>button:focus { outline: none; box-shadow: 0 0 0 2px blue }</style>",
        )

        assert issues_of(AccessibilityScanner().scan(document), IssueType.FOCUS_MANAGEMENT) == []

    def test_hidden_elements_are_skipped_by_default(self, make_document):
        document = make_document('<div hidden><img src="photo.png"></div>')

        assert AccessibilityScanner().scan(document).issues == []
        assert len(AccessibilityScanner().scan(document, {"include_hidden_elements": True}).issues) == 1

    def test_elements_scanned(self, make_document):
        result = AccessibilityScanner().scan(make_document("<p>a</p><p>b <em>c</em></p>"))

        assert result.elements_scanned == 3

    def test_accepts_beautifulsoup(self):
        soup = BeautifulSoup('<html><body><img src="x.png"></body></html>', "html.parser")

        assert AccessibilityScanner().scan(soup).total_issues == 1

    def test_rejects_non_documents(self):
        with pytest.raises(InvalidDocumentError):
            AccessibilityScanner().scan("<html></html>")


class TestContentStructureAnalyzer:
    def test_skipped_heading_level(self, make_document):
        document = make_document("<main><h1>A</h1><h2>B</h2><h4>C</h4></main>")

        result = ContentStructureAnalyzer().scan(document)
        (issue,) = result.issues
        assert issue.type == "heading-structure"
        assert issue.severity == "high"
        assert issue.element.tag_name == "h4"
        assert issue.id == "content-1"
        assert result.heading_count == 3
        assert result.landmark_count == 1
        assert result.total_elements == 8
        assert result.overall_score == 91.0

    def test_first_heading_not_h1(self, make_document):
        (issue,) = ContentStructureAnalyzer().scan(make_document("<main><h2>A</h2></main>")).issues

        assert issue.severity == "medium"
        assert "First heading is H2" in issue.description

    def test_empty_heading(self, make_document):
        document = make_document("<main><h1>Title</h1><h2></h2></main>")

        issues = ContentStructureAnalyzer().scan(document).issues
        assert [issue.wcag_criteria for issue in issues] == [["2.4.6"]]

    def test_missing_and_multiple_main(self, make_document):
        missing = ContentStructureAnalyzer().scan(make_document("<div>Text</div>"))
        multiple = ContentStructureAnalyzer().scan(make_document("<main>a</main><main>b</main>"))

        assert [(i.severity, i.element.tag_name) for i in missing.issues] == [("medium", "body")]
        assert [(i.severity, i.element.xpath) for i in multiple.issues] == [
            ("high", "/html[1]/body[1]/main[2]")
        ]

    def test_duplicate_navigation_labels(self, make_document):
        document = make_document(
            "<a href='#m'>Skip to content</a><nav><a href='/'>Home</a></nav>"
            "<main id='m'>x</main><nav><a href='/about'>About</a></nav>"
        )

        issues = ContentStructureAnalyzer().scan(document).issues
        assert [(issue.severity, issue.element.tag_name) for issue in issues] == [
            ("low", "nav"),
            ("low", "nav"),
        ]

    def test_skip_link(self, make_document):
        without = make_document("<nav><a href='/'>Home</a></nav><main>x</main>")
        with_skip = make_document(
            "<a href='#main'>Skip to main content</a><nav><a href='/'>Home</a></nav><main id='main'>x</main>"
        )

        (issue,) = ContentStructureAnalyzer().scan(without).issues
        assert issue.wcag_criteria == ["2.4.1"]
        assert issue.element.tag_name == "nav"
        assert ContentStructureAnalyzer().scan(with_skip).issues == []

    def test_form_checks(self, make_document):
        document = make_document(
            "<main><form>"
            "<label>Email *<input type='email' name='email'></label>"
            "<input aria-label='Age' aria-invalid='true'>"
            "<input type='radio' name='size' aria-label='Small'>"
            "<input type='radio' name='size' aria-label='Medium'>"
            "<input name='unlabeled'>"
            "</form></main>"
        )

        result = ContentStructureAnalyzer().scan(document)
        assert [i.wcag_criteria for i in issues_of(result, IssueType.FORM_VALIDATION)] == [
            ["3.3.2"],
            ["3.3.1"],
        ]
        assert len(issues_of(result, IssueType.MISSING_LABELS)) == 1
        (grouping,) = issues_of(result, IssueType.SEMANTIC_MARKUP)
        assert grouping.severity == "low"
        assert result.form_control_count == 5

    def test_grouped_radios_pass(self, make_document):
        document = make_document(
            "<main><fieldset><legend>Size</legend>"
            "<label><input type='radio' name='size'>S</label>"
            "<label><input type='radio' name='size'>M</label>"
            "</fieldset></main>"
        )

        assert ContentStructureAnalyzer().scan(document).issues == []

    def test_disabled_form_checks(self, make_document):
        document = make_document("<main><input name='q'></main>")

        result = ContentStructureAnalyzer().scan(document, {"enable_form_validation": False})
        assert result.issues == []
        assert result.checks_run == [
            "HeadingHierarchyCheck",
            "HeadingContentCheck",
            "LandmarkStructureCheck",
            "SkipLinkCheck",
        ]

    def test_hidden_headings(self, make_document):
        document = make_document("<main><h1>A</h1><h3 hidden>B</h3></main>")

        assert ContentStructureAnalyzer().scan(document).issues == []
        assert len(ContentStructureAnalyzer().scan(document, {"include_hidden_elements": True}).issues) == 1

    def test_failing_check_is_isolated(self, make_document, monkeypatch):
        def broken(self, targets):
            raise RuntimeError("boom")

        monkeypatch.setattr(HeadingHierarchyCheck, "check", broken)
        document = make_document("<main><h1>A</h1><h2>B</h2><h4>C</h4></main>")

        result = ContentStructureAnalyzer().scan(document)
        assert result.failed_checks == ["HeadingHierarchyCheck"]
        assert "HeadingContentCheck" in result.checks_run
        assert result.issues == []
        assert result.total_elements == 8
        assert result.processed_elements == 5

    def test_analyzer_failure_returns_empty_result(self, make_document, monkeypatch):
        def broken(self, result, context, inspector):
            raise RuntimeError("boom")

        monkeypatch.setattr(ContentStructureAnalyzer, "_summarize", broken)

        result = ContentStructureAnalyzer().scan(make_document("<main><h1>A</h1></main>"))
        assert result.issues == []
        assert result.processed_elements == 0
        assert result.total_elements == len(ContentStructureAnalyzer.checks)
        assert result.failed_checks == [check.__name__ for check in ContentStructureAnalyzer.checks]
        assert set(result.issues_by_severity) == {"critical", "high", "medium", "low"}


class TestVisualAnalysisSystem:
    def test_alt_text_quality(self, make_document):
        long_alt = "x" * 130
        document = make_document(
            '<img id="missing" src="photo.png">'
            '<img id="spacer" src="spacer.gif">'
            '<img id="empty" src="chart.png" alt="">'
            '<img id="generic" src="a.png" alt="image">'
            '<img id="filename" src="IMG_1234.jpg" alt="IMG_1234.jpg">'
            f'<img id="long" src="long.png" alt="{long_alt}">'
            '<img id="good" src="team.png" alt="The support team at the 2024 offsite">'
        )

        result = VisualAnalysisSystem().scan(document)
        assert [(i.element.id, i.severity, i.confidence) for i in result.issues] == [
            ("missing", "critical", 0.95),
            ("empty", "high", 0.8),
            ("generic", "medium", 0.9),
            ("filename", "medium", 0.6),
            ("long", "low", 0.7),
        ]
        assert result.image_count == 7
        assert result.decorative_image_count == 1

    def test_alt_text_echoing_the_file_name(self, make_document):
        document = make_document(
            '<img id="worded" src="/img/company-logo.png" alt="Company logo">'
            '<img id="stem" src="/img/hero_banner.jpg" alt="hero_banner">'
            '<img id="full" src="/img/chart-q3.svg?v=2" alt="chart-q3.svg">'
        )

        result = VisualAnalysisSystem().scan(document)
        assert [(i.element.id, i.severity, i.confidence) for i in result.issues] == [
            ("stem", "medium", 0.6),
            ("full", "medium", 0.6),
        ]

    def test_single_missing_alt_scores_zero(self, make_document):
        result = VisualAnalysisSystem().scan(make_document('<img src="x.png">'))

        assert result.overall_score == 0.0
        assert result.critical_issues == 1

    def test_media_alternatives(self, make_document):
        document = make_document(
            '<video id="bare" src="a.mp4" autoplay></video>'
            '<video id="captioned" src="b.mp4" controls><track kind="captions" src="b.vtt"></video>'
            '<audio id="podcast" src="c.mp3" controls></audio>'
        )

        result = VisualAnalysisSystem().scan(document)
        found = [(i.element.id, i.type, i.severity, i.wcag_criteria) for i in result.issues]
        assert found == [
            ("bare", "missing-labels", "critical", ["1.2.2"]),
            ("bare", "focus-management", "medium", ["1.4.2"]),
            ("bare", "keyboard-inaccessible", "medium", ["2.1.1"]),
            ("captioned", "missing-labels", "medium", ["1.2.5"]),
            ("podcast", "missing-labels", "critical", ["1.2.1"]),
        ]
        assert result.media_count == 3

    def test_layout_tables(self, make_document):
        document = make_document(
            '<table id="layout" role="presentation"><tr><th>A</th></tr></table>'
            '<table id="bare"><tr><td>1</td></tr><tr><td>2</td></tr></table>'
            '<table id="data"><caption>Prices</caption><tr><td>1</td></tr><tr><td>2</td></tr></table>'
            '<table id="clean" role="presentation"><tr><td>1</td></tr></table>'
        )

        result = VisualAnalysisSystem().scan(document)
        tables = issues_of(result, IssueType.SEMANTIC_MARKUP)
        assert [(i.element.id, i.confidence) for i in tables] == [("layout", 0.85), ("bare", 0.7)]
        assert result.table_count == 4

    def test_small_text(self, make_document):
        document = make_document(
            '<p style="font-size: 10px">Fine print</p><p style="font-size: 9pt">Also small</p><p>Normal</p>'
        )

        issues = issues_of(VisualAnalysisSystem().scan(document), IssueType.TEXT_SIZE)
        assert [issue.description for issue in issues] == [
            "Text is rendered at 10px, below the 12px minimum",
        ]

    def test_color_only_links(self, make_document):
        document = make_document(
            '<p>Read the <a id="plain" href="/t" style="text-decoration: none">terms</a> first.</p>'
            '<p>Read the <a id="underlined" href="/p">policy</a> too.</p>'
            '<p>See <a id="bold" href="/b" style="text-decoration: none; font-weight: bold">this</a> now.</p>'
            '<nav><a id="menu" href="/m" style="text-decoration: none">Menu</a></nav>'
        )

        issues = issues_of(VisualAnalysisSystem().scan(document), IssueType.COLOR_ONLY_INFORMATION)
        assert [issue.element.id for issue in issues] == ["plain"]

    def test_metrics_and_budget_warning(self, make_document, caplog):
        analyzer = VisualAnalysisSystem()
        document = make_document("<p>x</p>")

        with caplog.at_level(logging.WARNING):
            analyzer.scan(document, {"visual_time_budget": 1e-9})
        analyzer.scan(document)

        assert analyzer.metrics.scan_count == 2
        assert analyzer.metrics.overrun_warnings >= 1
        assert "exceeding target" in caplog.text
