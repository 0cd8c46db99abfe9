"""Immutable data models produced by project detection."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class _FrozenModel(BaseModel):
    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    def to_dict(self) -> dict[str, Any]:
        """Return the camelCase JSON-ready representation."""
        return self.model_dump(by_alias=True, mode="json")


class ProjectSummary(_FrozenModel):
    """Environment facts found directly under the project root."""

    has_git: bool = False
    has_node_modules: bool = False
    has_venv: bool = False
    has_bundle: bool = False
    config_files: tuple[str, ...] = ()


class RuleOutcome(_FrozenModel):
    """Evidence one detection rule found: its language and any frameworks."""

    language: str = Field(min_length=1)
    frameworks: tuple[str, ...] = ()


class DetectionResult(_FrozenModel):
    """Aggregated result of a single detect_project() call."""

    detected_language: str | None = None
    detected_framework: str | None = None
    all_languages: tuple[str, ...] = ()
    all_frameworks: tuple[str, ...] = ()
    project_files: ProjectSummary = Field(default_factory=ProjectSummary)

    @classmethod
    def from_outcomes(
        cls,
        outcomes: list[RuleOutcome],
        project_files: ProjectSummary,
        *,
        dedupe_frameworks: bool = False,
    ) -> DetectionResult:
        """Merge rule outcomes in evaluation order; first match wins."""
        languages: list[str] = []
        frameworks: list[str] = []
        for outcome in outcomes:
            if outcome.language not in languages:
                languages.append(outcome.language)
            for framework in outcome.frameworks:
                if dedupe_frameworks and framework in frameworks:
                    continue
                frameworks.append(framework)

        return cls(
            detected_language=languages[0] if languages else None,
            detected_framework=frameworks[0] if frameworks else None,
            all_languages=tuple(languages),
            all_frameworks=tuple(frameworks),
            project_files=project_files,
        )
