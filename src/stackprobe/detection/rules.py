"""Ordered language/framework detection rules.

Each rule inspects the project root independently and reports a RuleOutcome
when its language evidence is present. The order of DEFAULT_RULES is the
first-match priority used for the reported language and framework.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable, Sequence
from pathlib import Path
from typing import Any

from stackprobe.detection.markers import (
    contains_any,
    marker_exists,
    read_json_marker,
    read_text_marker,
)
from stackprobe.detection.models import RuleOutcome
from stackprobe.detection.scanner import (
    find_files_by_extension,
    find_files_by_pattern,
    has_files_by_extension,
    has_files_by_pattern,
)

# (dependency names, framework)
PACKAGE_JSON_FRAMEWORKS: list[tuple[tuple[str, ...], str]] = [
    (("react", "@types/react"), "react"),
    (("vue", "@vue/cli"), "vue"),
    (("@angular/core",), "angular"),
    (("express", "fastify", "koa"), "node"),
]

REQUIREMENTS_FRAMEWORKS: list[tuple[str, str]] = [
    ("django", "django"),
    ("flask", "flask"),
    ("fastapi", "fastapi"),
]

# (filename substring, framework)
PYTHON_FILE_FRAMEWORKS: list[tuple[str, str]] = [
    ("settings.py", "django"),
    ("app.py", "flask"),
]

GEMFILE_FRAMEWORKS: list[tuple[str, str]] = [
    ("rails", "rails"),
    ("sinatra", "sinatra"),
]

RAILS_STRUCTURE = ("config/application.rb", "config/routes.rb")
RAKEFILE_RAILS_TASKS = "Rails.application.load_tasks"

# (required needles, any-of needles, framework)
CSPROJ_FRAMEWORKS: list[tuple[tuple[str, ...], tuple[str, ...], str]] = [
    (
        ("Microsoft.AspNetCore",),
        ("Microsoft.AspNetCore.OpenApi", "Swashbuckle.AspNetCore"),
        "aspnet-webapi",
    ),
    ((), ("Microsoft.AspNetCore.Components.Server", ">blazorserver<"), "blazor-server"),
    ((), ("Microsoft.AspNetCore.Components.WebAssembly", ">blazorwasm<"), "blazor-wasm"),
]

BLAZOR_STRUCTURE = ("Components/Pages", "Components")

PROGRAM_CS_FRAMEWORKS: list[tuple[tuple[str, ...], str]] = [
    (("MapBlazorHub", "AddServerSideBlazor"), "blazor-server"),
    (("WebAssembly", "blazorwasm"), "blazor-wasm"),
]

DOTNET_EXTENSIONS = (".cs", ".fs", ".csproj", ".fsproj", ".sln")


class DetectionRule(ABC):
    """A single language check with optional framework sub-checks."""

    language: str

    def evaluate(self, root: Path, max_depth: int) -> RuleOutcome | None:
        """Return the rule's outcome, or None when its language is absent."""
        if not self.has_evidence(root, max_depth):
            return None
        return RuleOutcome(
            language=self.language,
            frameworks=tuple(self.detect_frameworks(root, max_depth)),
        )

    @abstractmethod
    def has_evidence(self, root: Path, max_depth: int) -> bool:
        """Return True if the project contains this rule's language."""

    def detect_frameworks(self, root: Path, max_depth: int) -> list[str]:
        return []

    def __repr__(self) -> str:
        return f"{type(self).__name__}(language={self.language!r})"


class SourceRule(DetectionRule):
    """Language evidenced by source file extensions or root marker files."""

    def __init__(
        self,
        language: str,
        extensions: Sequence[str],
        markers: Sequence[str] = (),
    ) -> None:
        self.language = language
        self.extensions = tuple(extensions)
        self.markers = tuple(markers)

    def has_evidence(self, root: Path, max_depth: int) -> bool:
        if has_files_by_extension(root, self.extensions, max_depth):
            return True
        return any(marker_exists(root / marker) for marker in self.markers)


class JavaScriptRule(DetectionRule):
    """package.json must exist and parse; frameworks come from its dependencies."""

    language = "javascript-typescript"

    # Distinguishes a missing or malformed package.json from a JSON null
    _ABSENT = object()

    def evaluate(self, root: Path, max_depth: int) -> RuleOutcome | None:
        package = read_json_marker(root / "package.json", default=self._ABSENT)
        if package is self._ABSENT:
            return None
        names = _dependency_names(package)
        frameworks = [
            framework
            for deps, framework in PACKAGE_JSON_FRAMEWORKS
            if any(dep in names for dep in deps)
        ]
        return RuleOutcome(language=self.language, frameworks=tuple(frameworks))

    def has_evidence(self, root: Path, max_depth: int) -> bool:
        return read_json_marker(root / "package.json", default=self._ABSENT) is not self._ABSENT


def _dependency_names(package: Any) -> set[str]:
    """Union of dependency and devDependency names; malformed sections are ignored."""
    names: set[str] = set()
    if not isinstance(package, dict):
        return names
    for section in ("dependencies", "devDependencies"):
        deps = package.get(section)
        if isinstance(deps, dict):
            names.update(deps)
    return names


class PythonRule(SourceRule):
    def __init__(self) -> None:
        super().__init__("python", (".py",))

    def detect_frameworks(self, root: Path, max_depth: int) -> list[str]:
        frameworks: list[str] = []

        requirements = read_text_marker(root / "requirements.txt")
        for needle, framework in REQUIREMENTS_FRAMEWORKS:
            if contains_any(requirements, (needle,)):
                frameworks.append(framework)

        for pattern, framework in PYTHON_FILE_FRAMEWORKS:
            if has_files_by_pattern(root, pattern, max_depth):
                frameworks.append(framework)

        return frameworks


class RubyRule(SourceRule):
    def __init__(self) -> None:
        super().__init__("ruby", (".rb",), markers=("Gemfile",))

    def detect_frameworks(self, root: Path, max_depth: int) -> list[str]:
        frameworks: list[str] = []

        gemfile = read_text_marker(root / "Gemfile")
        for needle, framework in GEMFILE_FRAMEWORKS:
            if contains_any(gemfile, (needle,)):
                frameworks.append(framework)

        if any(marker_exists(root / rel) for rel in RAILS_STRUCTURE):
            frameworks.append("rails")

        if contains_any(read_text_marker(root / "Rakefile"), (RAKEFILE_RAILS_TASKS,)):
            frameworks.append("rails")

        return frameworks


class DotNetRule(SourceRule):
    def __init__(self) -> None:
        super().__init__("dotnet", DOTNET_EXTENSIONS)

    def detect_frameworks(self, root: Path, max_depth: int) -> list[str]:
        frameworks: list[str] = []

        for csproj in find_files_by_extension(root, ".csproj", max_depth):
            content = read_text_marker(csproj)
            for required, any_of, framework in CSPROJ_FRAMEWORKS:
                if _contains_all(content, required) and contains_any(content, any_of):
                    frameworks.append(framework)

        if any(marker_exists(root / rel) for rel in BLAZOR_STRUCTURE):
            for program in find_files_by_pattern(root, "Program.cs", max_depth):
                content = read_text_marker(program)
                for needles, framework in PROGRAM_CS_FRAMEWORKS:
                    if contains_any(content, needles):
                        frameworks.append(framework)

        if marker_exists(root / "Controllers"):
            frameworks.append("aspnet-webapi")

        return frameworks


def _contains_all(text: str | None, needles: Iterable[str]) -> bool:
    if text is None:
        return False
    return all(needle in text for needle in needles)


DEFAULT_RULES: tuple[DetectionRule, ...] = (
    JavaScriptRule(),
    PythonRule(),
    RubyRule(),
    SourceRule("rust", (".rs",), markers=("Cargo.toml",)),
    DotNetRule(),
    SourceRule("go", (".go",), markers=("go.mod",)),
)
