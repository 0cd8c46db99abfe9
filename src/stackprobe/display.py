"""Rich output helpers for detection results."""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.console import Console
from rich.table import Table

if TYPE_CHECKING:
    from stackprobe.detection.models import DetectionResult, ProjectSummary

console = Console()

_NOT_DETECTED = "[dim]not detected[/dim]"


def _yes_no(value: bool) -> str:
    return "[green]yes[/green]" if value else "[dim]no[/dim]"


def print_detection_result(result: DetectionResult, *, out: Console | None = None) -> None:
    """Display detected languages and frameworks, then the project summary."""
    out = out or console
    table = Table(title="Project Detection", border_style="blue")
    table.add_column("Property", style="bold")
    table.add_column("Value")
    table.add_row("Language", result.detected_language or _NOT_DETECTED)
    table.add_row("Framework", result.detected_framework or _NOT_DETECTED)
    table.add_row("All languages", ", ".join(result.all_languages) or _NOT_DETECTED)
    table.add_row("All frameworks", ", ".join(result.all_frameworks) or _NOT_DETECTED)
    out.print(table)
    print_project_summary(result.project_files, out=out)


def print_project_summary(summary: ProjectSummary, *, out: Console | None = None) -> None:
    """Display environment facts and the config files present."""
    out = out or console
    table = Table(title="Project Files", border_style="cyan")
    table.add_column("Check", style="bold")
    table.add_column("Present")
    table.add_row("Git repository", _yes_no(summary.has_git))
    table.add_row("node_modules", _yes_no(summary.has_node_modules))
    table.add_row("Virtualenv", _yes_no(summary.has_venv))
    table.add_row("vendor/bundle", _yes_no(summary.has_bundle))
    table.add_row("Config files", "\n".join(summary.config_files) or "[dim]none[/dim]")
    out.print(table)
