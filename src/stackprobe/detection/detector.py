"""ProjectDetector orchestrator - runs the ordered rules and builds the summary."""

from __future__ import annotations

import logging
import os
from collections.abc import Sequence
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

from stackprobe.config.settings import DetectionSettings
from stackprobe.detection.models import DetectionResult, ProjectSummary, RuleOutcome
from stackprobe.detection.rules import DEFAULT_RULES, DetectionRule
from stackprobe.detection.scanner import resolve_root
from stackprobe.detection.summary import get_project_summary

logger = logging.getLogger(__name__)


class ProjectDetector:
    """Runs detection rules against a project directory.

    Rules are independent and read-only. With ``parallel`` enabled they are
    evaluated on a thread pool, but outcomes are always merged in rule order
    so the result matches a sequential run.
    """

    def __init__(
        self,
        settings: DetectionSettings | None = None,
        rules: Sequence[DetectionRule] | None = None,
    ) -> None:
        self.settings = settings or DetectionSettings()
        self.rules: tuple[DetectionRule, ...] = tuple(rules) if rules is not None else DEFAULT_RULES

    def detect(self, project_path: str | os.PathLike[str]) -> DetectionResult:
        """Detect languages and frameworks in project_path. Never raises for filesystem state."""
        root = resolve_root(project_path)
        if root is None or not os.path.isdir(root):
            logger.warning("Project path is not a directory: %s", root or project_path)
            return DetectionResult(project_files=ProjectSummary())

        if self.settings.parallel and len(self.rules) > 1:
            with ThreadPoolExecutor(max_workers=self.settings.max_workers) as pool:
                results = list(pool.map(lambda rule: self._run_rule(rule, root), self.rules))
        else:
            results = [self._run_rule(rule, root) for rule in self.rules]

        outcomes = [outcome for outcome in results if outcome is not None]
        logger.debug(
            "Detected %s in %s",
            ", ".join(o.language for o in outcomes) or "nothing",
            root,
        )

        return DetectionResult.from_outcomes(
            outcomes,
            get_project_summary(root),
            dedupe_frameworks=self.settings.dedupe_frameworks,
        )

    def _run_rule(self, rule: DetectionRule, root: Path) -> RuleOutcome | None:
        try:
            return rule.evaluate(root, self.settings.max_depth)
        except Exception as e:
            logger.warning("Detection rule for %s failed: %s", rule.language, e)
            return None


def detect_project(
    target_dir: str | os.PathLike[str],
    settings: DetectionSettings | None = None,
) -> DetectionResult:
    """Detect the languages and frameworks of the project at target_dir."""
    return ProjectDetector(settings).detect(target_dir)
