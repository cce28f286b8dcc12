# Copyright 2025 Amazon.com, Inc. or its affiliates.
# SPDX-License-Identifier: Apache-2.0

"""
Shared machinery for the analyzers.

An analyzer runs a fixed list of checks over one PageContext. Each check is
isolated: a failing check is logged and skipped, and its targets count as
unprocessed so that coverage reflects the gap. The analyzer turns the
collected issues into a severity-weighted sub-score and records its own
timing against a soft budget.
"""

import time
from typing import Any, List, Optional, Sequence, Tuple, Type

from page_accessibility_utility.audit.base_check import AccessibilityCheck
from page_accessibility_utility.audit.color_contrast import ColorContrastEvaluator
from page_accessibility_utility.audit.dom_analyzer import DOMAnalyzer
from page_accessibility_utility.audit.element_inspector import ElementInspector
from page_accessibility_utility.audit.standards import (
    get_issue_criteria,
    get_severity_weight,
    get_suggested_fix,
)
from page_accessibility_utility.dom.document import ensure_document
from page_accessibility_utility.utils.config import AnalysisConfig, resolve_analysis_config
from page_accessibility_utility.utils.logging_helper import log_exception, setup_logger
from page_accessibility_utility.utils.report_models import (
    AccessibilityIssue,
    AnalyzerResult,
    ElementInfo,
    IssueType,
    PageContext,
    ScanMetrics,
    Severity,
    count_issues,
    group_issues_by_severity,
)

# Configure module-level logger
logger = setup_logger(__name__)

MAX_SEVERITY_WEIGHT = get_severity_weight(Severity.CRITICAL.value)

# Stand-in element for issues that belong to the page as a whole
DOCUMENT_ELEMENT = ElementInfo(tag_name="document", xpath="/")


def calculate_sub_score(issues: List[AccessibilityIssue], total_elements: int) -> float:
    """
    Score an analyzer's issues against the number of elements it examined.

    Args:
        issues: Issues found by the analyzer
        total_elements: Number of elements the checks targeted

    Returns:
        Score from 0 to 100; 100 when nothing was examined
    """
    if total_elements <= 0:
        return 100.0
    weighted = sum(get_severity_weight(issue.severity) for issue in issues)
    return float(max(0, round(100 - weighted / (total_elements * MAX_SEVERITY_WEIGHT) * 100)))


class CheckRun:
    """Issues and coverage collected while running one analyzer's checks."""

    def __init__(self, prefix: str, source: str, inspector: ElementInspector):
        self.prefix = prefix
        self.source = source
        self.inspector = inspector
        self.issues: List[AccessibilityIssue] = []
        self.processed_elements = 0
        self.total_elements = 0
        self.checks_run: List[str] = []
        self.failed_checks: List[str] = []

    def add_issue(
        self,
        issue_type: str,
        severity: str,
        element: Any = None,
        description: str = "",
        confidence: float = 1.0,
        wcag_criteria: Optional[List[str]] = None,
        suggested_fix: Optional[str] = None,
    ) -> AccessibilityIssue:
        """
        Add an issue to the run.

        Args:
            issue_type: One of the IssueType values
            severity: One of the Severity values
            element: Document element the issue is about; None for the page
            description: Description of the issue
            confidence: Detector certainty between 0 and 1
            wcag_criteria: Criteria violated; defaults to those of the issue type
            suggested_fix: Remediation advice; defaults to that of the issue type
        """
        issue_type = IssueType(issue_type).value
        severity = Severity(severity).value

        issue = AccessibilityIssue(
            id=f"{self.prefix}-{len(self.issues) + 1}",
            type=issue_type,
            severity=severity,
            element=self.inspector.inspect(element) if element is not None else DOCUMENT_ELEMENT,
            description=description or f"{issue_type} issue",
            wcag_criteria=wcag_criteria or get_issue_criteria(issue_type),
            suggested_fix=suggested_fix or get_suggested_fix(issue_type),
            confidence=confidence,
            source=self.source,
        )
        self.issues.append(issue)
        logger.debug(
            "Added issue %s: %s (%s) at %s", issue.id, issue_type, severity, issue.element.xpath
        )
        return issue


class BaseAnalyzer:
    """
    Base class for the analyzers.

    Subclasses set the check list, the issue id prefix, the result model and
    the configuration option holding their time budget, and may override
    _summarize() to add analyzer-specific counts.
    """

    name: str = "analyzer"
    issue_prefix: str = "issue"
    result_class: Type[AnalyzerResult] = AnalyzerResult
    budget_option: str = "max_scan_time"
    checks: Sequence[Type[AccessibilityCheck]] = ()

    def __init__(self, evaluator: Optional[ColorContrastEvaluator] = None):
        self.evaluator = evaluator or ColorContrastEvaluator()
        self.metrics = ScanMetrics()

    def scan(self, target: Any, config: Any = None) -> AnalyzerResult:
        """
        Run every enabled check over a page.

        Args:
            target: PageContext built by the DOMAnalyzer, or a document
            config: AnalysisConfig or options dictionary

        Returns:
            Result model of this analyzer; an empty result if the page could
            not be traversed

        Raises:
            InvalidDocumentError: If target is neither a PageContext nor a document
        """
        config = resolve_analysis_config(config)
        if not isinstance(target, PageContext):
            target = ensure_document(target)

        start = time.perf_counter()
        try:
            context = self._page_context(target)
            inspector = ElementInspector(context.document, self.evaluator)
            run = self.run_checks(context, config, inspector)
            result = self.result_class(
                overall_score=calculate_sub_score(run.issues, run.total_elements),
                issues=run.issues,
                issues_by_severity=group_issues_by_severity(run.issues),
                processed_elements=run.processed_elements,
                total_elements=run.total_elements,
                checks_run=run.checks_run,
                failed_checks=run.failed_checks,
                **count_issues(run.issues),
            )
            self._summarize(result, context, inspector)
        except Exception as e:
            log_exception(logger, e, f"{self.name} failed")
            result = self.result_class.empty()
            # Every check counts as one unprocessed unit
            result.total_elements = len(self.checks)
            result.failed_checks = [check.__name__ for check in self.checks]

        elapsed = (time.perf_counter() - start) * 1000
        result.analysis_time = elapsed
        budget = getattr(config, self.budget_option)
        if self.metrics.record(elapsed, budget):
            logger.warning("%s took %.2fms, exceeding target %.2fms", self.name, elapsed, budget)

        logger.debug(
            "%s finished in %.2fms with %d issues (score %.1f)",
            self.name,
            elapsed,
            result.total_issues,
            result.overall_score,
        )
        return result

    def run_checks(
        self, context: PageContext, config: AnalysisConfig, inspector: ElementInspector
    ) -> CheckRun:
        """
        Run the enabled checks, isolating each one.

        Returns:
            CheckRun with the collected issues and coverage counts
        """
        run = CheckRun(self.issue_prefix, self.name, inspector)

        for check_class in self.checks:
            if check_class.config_flag and not getattr(config, check_class.config_flag):
                logger.debug("Skipping disabled check: %s", check_class.__name__)
                continue

            check = check_class(context, run.add_issue, config, inspector)
            logger.debug("Running check: %s", check_class.__name__)
            processed = check.run()
            run.checks_run.append(check_class.__name__)

            if processed is None:
                run.failed_checks.append(check_class.__name__)
                run.total_elements += check.target_count if check.target_count is not None else 1
                continue

            run.processed_elements += processed
            run.total_elements += processed

        return run

    def _page_context(self, target: Any) -> PageContext:
        if isinstance(target, PageContext):
            return target
        target.refresh()
        return DOMAnalyzer(self.evaluator).create_page_context(target)

    def _summarize(
        self, result: AnalyzerResult, context: PageContext, inspector: ElementInspector
    ) -> None:
        """Hook for analyzer-specific counts."""


def coverage_counts(results: List[AnalyzerResult]) -> Tuple[int, int]:
    """Sum processed and total element counts over analyzer results."""
    processed = sum(result.processed_elements for result in results)
    total = sum(result.total_elements for result in results)
    return processed, total
