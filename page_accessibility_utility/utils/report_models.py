# Copyright 2025 Amazon.com, Inc. or its affiliates.
# SPDX-License-Identifier: Apache-2.0

"""
Pydantic models for page analysis snapshots, issues and reports.
"""

from pydantic import BaseModel, ConfigDict, Field
from typing import Dict, List, Optional, Any
from datetime import datetime
from enum import Enum


class Severity(str, Enum):
    """Enum for issue severity levels."""

    CRITICAL = "critical"
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class IssueType(str, Enum):
    """Closed set of issue types the analyzers can emit."""

    MISSING_ALT_TEXT = "missing-alt-text"
    INSUFFICIENT_CONTRAST = "insufficient-contrast"
    KEYBOARD_INACCESSIBLE = "keyboard-inaccessible"
    MISSING_LABELS = "missing-labels"
    INVALID_ARIA = "invalid-aria"
    HEADING_STRUCTURE = "heading-structure"
    FOCUS_MANAGEMENT = "focus-management"
    SEMANTIC_MARKUP = "semantic-markup"
    COLOR_ONLY_INFORMATION = "color-only-information"
    TEXT_SIZE = "text-size"
    LINK_PURPOSE = "link-purpose"
    FORM_VALIDATION = "form-validation"


class IssueCategory(str, Enum):
    """Enum for the report grouping of issue types."""

    VISUAL = "visual"
    CONTENT = "content"
    INTERACTION = "interaction"
    STRUCTURE = "structure"
    GENERAL = "general"


class WCAGLevel(str, Enum):
    """Enum for WCAG conformance levels."""

    A = "A"
    AA = "AA"
    AAA = "AAA"


class ContrastLevel(str, Enum):
    """Enum for the best contrast level a color pair reaches."""

    AAA = "AAA"
    AA = "AA"
    FAIL = "fail"


SEVERITY_ORDER = {
    Severity.LOW.value: 0,
    Severity.MEDIUM.value: 1,
    Severity.HIGH.value: 2,
    Severity.CRITICAL.value: 3,
}


class BoundingRect(BaseModel):
    """
    Model for element geometry.

    Dimensions that cannot be determined are None and count as rendered.
    """

    x: float = 0.0
    y: float = 0.0
    width: Optional[float] = None
    height: Optional[float] = None

    model_config = ConfigDict(frozen=True)

    @property
    def has_box(self) -> bool:
        """Whether the element occupies a non-empty box."""
        return self.width != 0 and self.height != 0


class ElementInfo(BaseModel):
    """Immutable snapshot of an element taken at scan time."""

    tag_name: str
    id: Optional[str] = None
    class_name: Optional[str] = None
    xpath: str
    text_content: str = ""
    attributes: Dict[str, str] = Field(default_factory=dict)
    bounding_rect: BoundingRect = Field(default_factory=BoundingRect)

    model_config = ConfigDict(frozen=True)


class AccessibilityIssue(BaseModel):
    """Model for a single detected accessibility defect."""

    id: str
    type: IssueType
    severity: Severity
    element: ElementInfo
    description: str
    wcag_criteria: List[str] = Field(default_factory=list)
    suggested_fix: str = ""
    timestamp: datetime = Field(default_factory=datetime.now)
    confidence: float = Field(..., ge=0.0, le=1.0)
    source: Optional[str] = None

    model_config = ConfigDict(frozen=True, use_enum_values=True)


class ViewportInfo(BaseModel):
    """Model for the viewport the page was captured in."""

    width: int = 1280
    height: int = 800
    device_pixel_ratio: float = 1.0


class PageContext(BaseModel):
    """
    Read-only snapshot of a page shared by all analyzers of one scan.

    The element collections hold document handles and are not serialized.
    """

    url: str = ""
    title: str = ""
    document: Any = Field(default=None, exclude=True)
    viewport: ViewportInfo = Field(default_factory=ViewportInfo)
    interactive_elements: List[Any] = Field(default_factory=list, exclude=True)
    images: List[Any] = Field(default_factory=list, exclude=True)
    forms: List[Any] = Field(default_factory=list, exclude=True)
    headings: List[Any] = Field(default_factory=list, exclude=True)
    links: List[Any] = Field(default_factory=list, exclude=True)
    form_controls: List[Any] = Field(default_factory=list, exclude=True)
    timestamp: datetime = Field(default_factory=datetime.now)

    model_config = ConfigDict(arbitrary_types_allowed=True, frozen=True)


class HeadingInfo(BaseModel):
    """Model for a heading and the headings nested under it by level."""

    element: ElementInfo
    level: int
    text: str = ""
    children: List["HeadingInfo"] = Field(default_factory=list)


class LandmarkInfo(BaseModel):
    """Model for a landmark region."""

    element: ElementInfo
    role: str
    label: Optional[str] = None
    is_implicit: bool = False


class FocusableElementInfo(BaseModel):
    """Model for an element that can receive keyboard focus."""

    element: ElementInfo
    tab_index: int = 0
    in_tab_order: bool = True


class SemanticStructure(BaseModel):
    """Flags describing the semantic regions a page provides."""

    has_main: bool = False
    has_navigation: bool = False
    has_header: bool = False
    has_footer: bool = False
    has_aside: bool = False
    has_skip_links: bool = False


class DOMAnalysisResult(BaseModel):
    """Model for the shared structural summary built before the analyzers run."""

    page_context: Optional[PageContext] = None
    heading_structure: List[HeadingInfo] = Field(default_factory=list)
    heading_count: int = 0
    landmarks: List[LandmarkInfo] = Field(default_factory=list)
    focusable_elements: List[FocusableElementInfo] = Field(default_factory=list)
    semantic_structure: SemanticStructure = Field(default_factory=SemanticStructure)
    element_count: int = 0
    analysis_time: float = 0.0
    succeeded: bool = True
    timestamp: datetime = Field(default_factory=datetime.now)

    model_config = ConfigDict(arbitrary_types_allowed=True)

    @classmethod
    def empty(cls, page_context: Optional[PageContext] = None) -> "DOMAnalysisResult":
        """Create the well-typed result returned when traversal fails."""
        return cls(page_context=page_context, succeeded=False)


class AnalyzerResult(BaseModel):
    """Base model for the output bundle of one analyzer."""

    overall_score: float = 0.0
    analysis_time: float = 0.0
    issues: List[AccessibilityIssue] = Field(default_factory=list)
    issues_by_severity: Dict[str, List[AccessibilityIssue]] = Field(
        default_factory=dict
    )
    total_issues: int = 0
    critical_issues: int = 0
    warning_issues: int = 0
    info_issues: int = 0
    processed_elements: int = 0
    total_elements: int = 0
    checks_run: List[str] = Field(default_factory=list)
    failed_checks: List[str] = Field(default_factory=list)
    timestamp: datetime = Field(default_factory=datetime.now)

    @classmethod
    def empty(cls) -> "AnalyzerResult":
        """Create the well-typed result returned when an analyzer fails."""
        return cls(issues_by_severity=group_issues_by_severity([]))


class AccessibilityAnalysis(AnalyzerResult):
    """Model for the primary rule-set scan."""

    elements_scanned: int = 0


class ContentAnalysisResult(AnalyzerResult):
    """Model for heading, landmark and form analysis."""

    heading_count: int = 0
    landmark_count: int = 0
    form_control_count: int = 0


class VisualAnalysisResult(AnalyzerResult):
    """Model for image, media and layout analysis."""

    image_count: int = 0
    decorative_image_count: int = 0
    media_count: int = 0
    table_count: int = 0


class UnifiedAnalysisResult(BaseModel):
    """Model for the aggregated result of one coordinator run."""

    overall_score: float = 100.0
    analysis_time: float = 0.0
    dom_analysis: Optional[DOMAnalysisResult] = None
    accessibility_analysis: Optional[AccessibilityAnalysis] = None
    content_analysis: Optional[ContentAnalysisResult] = None
    visual_analysis: Optional[VisualAnalysisResult] = None
    aggregated_issues: List[AccessibilityIssue] = Field(default_factory=list)
    issues_by_category: Dict[str, List[AccessibilityIssue]] = Field(
        default_factory=dict
    )
    issues_by_severity: Dict[str, List[AccessibilityIssue]] = Field(
        default_factory=dict
    )
    total_issues: int = 0
    critical_issues: int = 0
    high_priority_issues: int = 0
    medium_priority_issues: int = 0
    low_priority_issues: int = 0
    coverage: float = 1.0
    page_url: str = ""
    timestamp: datetime = Field(default_factory=datetime.now)

    model_config = ConfigDict(arbitrary_types_allowed=True)


class ProgressEvent(BaseModel):
    """Model for a pipeline progress notification."""

    stage: str
    percentage: float
    current_task: str


class ScanMetrics(BaseModel):
    """Performance counters owned by a single analyzer or coordinator."""

    scan_count: int = 0
    total_scan_time: float = 0.0
    average_scan_time: float = 0.0
    last_scan_time: float = 0.0
    overrun_warnings: int = 0

    def record(self, duration: float, target: float) -> bool:
        """
        Record a scan duration in milliseconds.

        Returns:
            True if the duration exceeded the target
        """
        self.scan_count += 1
        self.total_scan_time += duration
        self.last_scan_time = duration
        self.average_scan_time = self.total_scan_time / self.scan_count
        if duration > target:
            self.overrun_warnings += 1
            return True
        return False

    def reset(self) -> None:
        """Zero all counters."""
        self.scan_count = 0
        self.total_scan_time = 0.0
        self.average_scan_time = 0.0
        self.last_scan_time = 0.0
        self.overrun_warnings = 0


class ColorContrastResult(BaseModel):
    """Model for the evaluation of one foreground/background pair."""

    foreground: str
    background: str
    ratio: float
    level: ContrastLevel
    passes_aa: bool
    passes_aaa: bool
    is_large_text: bool = False
    required_ratio: float

    model_config = ConfigDict(use_enum_values=True)


class StructureViolation(BaseModel):
    """Model for a heading, landmark or form rule violation."""

    rule: str
    message: str
    index: Optional[int] = None
    level: Optional[int] = None
    previous_level: Optional[int] = None
    role: Optional[str] = None


def group_issues_by_severity(
    issues: List[AccessibilityIssue],
) -> Dict[str, List[AccessibilityIssue]]:
    """
    Partition issues by severity, keeping every severity key.

    Args:
        issues: List of AccessibilityIssue objects

    Returns:
        Dictionary mapping severity names to issue lists
    """
    grouped = {severity.value: [] for severity in Severity}
    for issue in issues:
        grouped[issue.severity].append(issue)
    return grouped


def count_issues(issues: List[AccessibilityIssue]) -> Dict[str, int]:
    """
    Count issues the way analyzer results report them.

    Critical issues are counted on their own, high and medium issues are
    warnings, low issues are informational.
    """
    counts = {"total_issues": len(issues), "critical_issues": 0, "warning_issues": 0, "info_issues": 0}
    for issue in issues:
        if issue.severity == Severity.CRITICAL.value:
            counts["critical_issues"] += 1
        elif issue.severity in (Severity.HIGH.value, Severity.MEDIUM.value):
            counts["warning_issues"] += 1
        else:
            counts["info_issues"] += 1
    return counts
