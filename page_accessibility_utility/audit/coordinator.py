# Copyright 2025 Amazon.com, Inc. or its affiliates.
# SPDX-License-Identifier: Apache-2.0

"""
Unified analysis coordinator.

Builds the shared PageContext once, runs the three analyzers over it
(interleaved on the event loop or one after another), then deduplicates
their issues, groups them and computes the overall compliance score.
"""

import asyncio
import time
from typing import Any, Callable, Dict, List, Optional

from page_accessibility_utility.audit.analyzers import (
    AccessibilityScanner,
    BaseAnalyzer,
    ContentStructureAnalyzer,
    VisualAnalysisSystem,
)
from page_accessibility_utility.audit.analyzers.base_analyzer import coverage_counts
from page_accessibility_utility.audit.color_contrast import ColorContrastEvaluator
from page_accessibility_utility.audit.dom_analyzer import DOMAnalyzer
from page_accessibility_utility.audit.standards import get_issue_category, get_severity_penalty
from page_accessibility_utility.dom.document import ensure_document
from page_accessibility_utility.utils.config import AnalysisConfig, resolve_analysis_config
from page_accessibility_utility.utils.logging_helper import (
    AnalysisInProgressError,
    setup_logger,
)
from page_accessibility_utility.utils.report_models import (
    SEVERITY_ORDER,
    AccessibilityIssue,
    AnalyzerResult,
    DOMAnalysisResult,
    IssueCategory,
    ProgressEvent,
    ScanMetrics,
    Severity,
    UnifiedAnalysisResult,
    group_issues_by_severity,
)

# Configure module-level logger
logger = setup_logger(__name__)

ProgressCallback = Callable[[ProgressEvent], Any]

CONTEXT_PROGRESS = 25.0
ANALYZER_PROGRESS = (45.0, 65.0, 85.0)


def deduplicate_issues(issues: List[AccessibilityIssue]) -> List[AccessibilityIssue]:
    """
    Collapse issues that describe the same defect.

    Two issues are the same defect when they share the element XPath and the
    issue type. The higher-confidence issue is kept; on equal confidence the
    more severe one; on a full tie the first one seen.

    Args:
        issues: Issues from all analyzers in analyzer order

    Returns:
        Deduplicated issues in order of first appearance
    """
    kept: Dict[tuple, AccessibilityIssue] = {}
    for issue in issues:
        key = (issue.element.xpath, issue.type)
        current = kept.get(key)
        if current is None or _rank(issue) > _rank(current):
            kept[key] = issue
    return list(kept.values())


def _rank(issue: AccessibilityIssue) -> tuple:
    return (issue.confidence, SEVERITY_ORDER[issue.severity])


def group_issues_by_category(
    issues: List[AccessibilityIssue],
) -> Dict[str, List[AccessibilityIssue]]:
    """Partition issues by report category, keeping every category key."""
    grouped = {category.value: [] for category in IssueCategory}
    for issue in issues:
        grouped[get_issue_category(issue.type)].append(issue)
    return grouped


def calculate_overall_score(issues: List[AccessibilityIssue], coverage: float = 1.0) -> float:
    """
    Calculate the overall compliance score.

    Starts at 100, subtracts a penalty per issue by severity, floors at 0 and
    scales by the fraction of targeted elements that were actually checked.

    Returns:
        Score from 0 to 100 rounded to one decimal
    """
    penalty = sum(get_severity_penalty(issue.severity) for issue in issues)
    score = max(0.0, 100.0 - penalty) * coverage
    return round(score, 1)


def calculate_coverage(results: List[AnalyzerResult]) -> float:
    """Fraction of targeted elements processed; 1.0 when nothing was targeted."""
    processed, total = coverage_counts(results)
    if total == 0:
        return 1.0
    return processed / total


class UnifiedAnalysisCoordinator:
    """
    Run the full analysis pipeline over a document.

    One coordinator handles one scan at a time; entering a second scan while
    one is in flight raises AnalysisInProgressError.
    """

    def __init__(
        self,
        dom_analyzer: Optional[DOMAnalyzer] = None,
        scanner: Optional[BaseAnalyzer] = None,
        content_analyzer: Optional[BaseAnalyzer] = None,
        visual_analyzer: Optional[BaseAnalyzer] = None,
        evaluator: Optional[ColorContrastEvaluator] = None,
    ):
        self.evaluator = evaluator or ColorContrastEvaluator()
        self.dom_analyzer = dom_analyzer or DOMAnalyzer(self.evaluator)
        self.scanner = scanner or AccessibilityScanner(self.evaluator)
        self.content_analyzer = content_analyzer or ContentStructureAnalyzer(self.evaluator)
        self.visual_analyzer = visual_analyzer or VisualAnalysisSystem(self.evaluator)
        self.metrics = ScanMetrics()
        self._scan_in_progress = False

    @property
    def is_scanning(self) -> bool:
        return self._scan_in_progress

    @property
    def analyzers(self) -> List[BaseAnalyzer]:
        return [self.scanner, self.content_analyzer, self.visual_analyzer]

    async def analyze_accessibility(
        self,
        document: Any,
        config: Any = None,
        progress_callback: Optional[ProgressCallback] = None,
    ) -> UnifiedAnalysisResult:
        """
        Analyze a document for accessibility issues.

        Args:
            document: BaseDocument or parsed BeautifulSoup tree
            config: AnalysisConfig or options dictionary
            progress_callback: Called with a ProgressEvent at each stage boundary

        Returns:
            UnifiedAnalysisResult for this scan

        Raises:
            AnalysisInProgressError: If a scan is already running on this coordinator
            InvalidDocumentError: If document is not a document
            ConfigurationError: If the options are invalid
        """
        if self._scan_in_progress:
            raise AnalysisInProgressError("An accessibility scan is already in progress")

        document = ensure_document(document)
        config = resolve_analysis_config(config)

        self._scan_in_progress = True
        start = time.perf_counter()
        try:
            logger.info("Starting accessibility analysis of %s", document.url or "document")
            dom_result = self.dom_analyzer.analyze_page(document, config)
            self._report_progress(
                progress_callback, "context", CONTEXT_PROGRESS, "Page context built"
            )

            # Analyzers rebuild the context themselves when traversal failed
            target = dom_result.page_context if dom_result.succeeded else document
            if config.parallel_analysis:
                results = await self._run_parallel(target, config, progress_callback)
            else:
                results = await self._run_sequential(target, config, progress_callback)

            result = self.aggregate(dom_result, *results)
            result.page_url = document.url
            self._report_progress(
                progress_callback, "aggregation", 100.0, "Aggregation complete"
            )
        finally:
            self._scan_in_progress = False

        elapsed = (time.perf_counter() - start) * 1000
        result.analysis_time = elapsed
        if self.metrics.record(elapsed, config.max_scan_time):
            logger.warning(
                "Accessibility analysis took %.2fms, exceeding target %.2fms",
                elapsed,
                config.max_scan_time,
            )

        logger.info(
            "Accessibility analysis completed in %.2fms. Score: %.1f, issues: %d",
            elapsed,
            result.overall_score,
            result.total_issues,
        )
        logger.debug(
            "Scan count: %d, average scan time: %.2fms",
            self.metrics.scan_count,
            self.metrics.average_scan_time,
        )
        return result

    async def _run_parallel(
        self, target: Any, config: AnalysisConfig, progress_callback: Optional[ProgressCallback]
    ) -> List[AnalyzerResult]:
        completed = []

        async def run(analyzer: BaseAnalyzer) -> AnalyzerResult:
            # Yield so the analyzers interleave on the loop
            await asyncio.sleep(0)
            result = analyzer.scan(target, config)
            completed.append(analyzer)
            self._report_progress(
                progress_callback,
                "analyzers",
                ANALYZER_PROGRESS[len(completed) - 1],
                f"{analyzer.name} completed",
            )
            return result

        return list(await asyncio.gather(*(run(analyzer) for analyzer in self.analyzers)))

    async def _run_sequential(
        self, target: Any, config: AnalysisConfig, progress_callback: Optional[ProgressCallback]
    ) -> List[AnalyzerResult]:
        results = []
        for index, analyzer in enumerate(self.analyzers):
            results.append(analyzer.scan(target, config))
            self._report_progress(
                progress_callback,
                "analyzers",
                ANALYZER_PROGRESS[index],
                f"{analyzer.name} completed",
            )
            await asyncio.sleep(0)
        return results

    def aggregate(
        self,
        dom_result: DOMAnalysisResult,
        accessibility: AnalyzerResult,
        content: AnalyzerResult,
        visual: AnalyzerResult,
    ) -> UnifiedAnalysisResult:
        """
        Combine the analyzer results into one report.

        Returns:
            UnifiedAnalysisResult with deduplicated, grouped issues and the
            coverage-scaled overall score
        """
        combined = accessibility.issues + content.issues + visual.issues
        issues = deduplicate_issues(combined)
        if len(issues) < len(combined):
            logger.debug("Removed %d duplicate issues", len(combined) - len(issues))

        coverage = calculate_coverage([accessibility, content, visual])
        by_severity = group_issues_by_severity(issues)

        return UnifiedAnalysisResult(
            overall_score=calculate_overall_score(issues, coverage),
            dom_analysis=dom_result,
            accessibility_analysis=accessibility,
            content_analysis=content,
            visual_analysis=visual,
            aggregated_issues=issues,
            issues_by_category=group_issues_by_category(issues),
            issues_by_severity=by_severity,
            total_issues=len(issues),
            critical_issues=len(by_severity[Severity.CRITICAL.value]),
            high_priority_issues=len(by_severity[Severity.HIGH.value]),
            medium_priority_issues=len(by_severity[Severity.MEDIUM.value]),
            low_priority_issues=len(by_severity[Severity.LOW.value]),
            coverage=round(coverage, 4),
        )

    def _report_progress(
        self,
        progress_callback: Optional[ProgressCallback],
        stage: str,
        percentage: float,
        current_task: str,
    ) -> None:
        if progress_callback is None:
            return
        try:
            progress_callback(
                ProgressEvent(stage=stage, percentage=percentage, current_task=current_task)
            )
        except Exception as e:
            logger.warning("Progress callback failed at stage %s: %s", stage, e)

    def get_performance_metrics(self) -> ScanMetrics:
        """Get a copy of the coordinator's scan counters."""
        return self.metrics.model_copy()

    def reset_metrics(self) -> None:
        """Zero the counters of the coordinator and of every analyzer."""
        self.metrics.reset()
        self.dom_analyzer.metrics.reset()
        for analyzer in self.analyzers:
            analyzer.metrics.reset()
