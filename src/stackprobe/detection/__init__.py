"""Project language and framework detection."""

from stackprobe.detection.detector import ProjectDetector, detect_project
from stackprobe.detection.models import DetectionResult, ProjectSummary, RuleOutcome
from stackprobe.detection.rules import DEFAULT_RULES, DetectionRule
from stackprobe.detection.scanner import find_files_by_extension, find_files_by_pattern
from stackprobe.detection.summary import get_project_summary

__all__ = [
    "DEFAULT_RULES",
    "DetectionResult",
    "DetectionRule",
    "ProjectDetector",
    "ProjectSummary",
    "RuleOutcome",
    "detect_project",
    "find_files_by_extension",
    "find_files_by_pattern",
    "get_project_summary",
]
