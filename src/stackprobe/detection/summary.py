"""Project environment summary: VCS, dependency dirs and config files."""

from __future__ import annotations

import os

from stackprobe.detection.markers import marker_exists
from stackprobe.detection.models import ProjectSummary
from stackprobe.detection.scanner import resolve_root

# Checked literally under the root, in this order. The "*.sln"-style entries
# are not glob-expanded and only match a file with that literal name.
CONFIG_FILE_CHECKLIST: tuple[str, ...] = (
    "package.json",
    "tsconfig.json",
    "webpack.config.js",
    "vite.config.js",
    "requirements.txt",
    "setup.py",
    "pyproject.toml",
    "Pipfile",
    "Gemfile",
    "Gemfile.lock",
    "Rakefile",
    "config.ru",
    "Cargo.toml",
    "go.mod",
    "*.sln",
    "*.csproj",
    "*.fsproj",
    "global.json",
    "nuget.config",
    "Directory.Build.props",
    ".gitignore",
    "README.md",
)

VENV_DIRS = ("venv", ".venv")


def get_project_summary(target_dir: str | os.PathLike[str]) -> ProjectSummary:
    """Report which well-known environment entries exist directly under target_dir."""
    root = resolve_root(target_dir)
    if root is None:
        return ProjectSummary()
    return ProjectSummary(
        has_git=marker_exists(root / ".git"),
        has_node_modules=marker_exists(root / "node_modules"),
        has_venv=any(marker_exists(root / name) for name in VENV_DIRS),
        has_bundle=marker_exists(root / "vendor" / "bundle"),
        config_files=tuple(name for name in CONFIG_FILE_CHECKLIST if marker_exists(root / name)),
    )
