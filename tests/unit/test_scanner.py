"""Unit tests for src/stackprobe/detection/scanner.py."""

from __future__ import annotations

import os
from pathlib import Path
from unittest.mock import patch

import pytest

from stackprobe.detection.scanner import (
    find_files_by_extension,
    find_files_by_pattern,
    has_files_by_extension,
    has_files_by_pattern,
    resolve_root,
)


def _names(paths: list[Path]) -> set[str]:
    return {p.name for p in paths}


# ---------------------------------------------------------------------------
# find_files_by_extension
# ---------------------------------------------------------------------------


class TestFindFilesByExtension:
    def test_finds_files_in_root(self, make_tree):
        root = make_tree({"main.py": "", "README.md": ""})
        assert _names(find_files_by_extension(root, {".py"})) == {"main.py"}

    def test_multiple_extensions(self, make_tree):
        root = make_tree({"a.cs": "", "b.fs": "", "c.txt": ""})
        assert _names(find_files_by_extension(root, [".cs", ".fs"])) == {"a.cs", "b.fs"}

    def test_single_string_extension(self, make_tree):
        root = make_tree({"App.csproj": "", "App.cs": ""})
        assert _names(find_files_by_extension(root, ".csproj")) == {"App.csproj"}

    def test_returns_absolute_paths(self, make_tree):
        root = make_tree({"pkg/mod.py": ""})
        found = find_files_by_extension(root, {".py"})
        assert len(found) == 1
        assert found[0].is_absolute()
        assert found[0] == (root / "pkg" / "mod.py").resolve()

    def test_extension_is_case_sensitive(self, make_tree):
        root = make_tree({"upper.PY": "", "lower.py": ""})
        assert _names(find_files_by_extension(root, {".py"})) == {"lower.py"}

    def test_only_last_suffix_counts(self, make_tree):
        root = make_tree({"archive.py.bak": "", "real.py": ""})
        assert _names(find_files_by_extension(root, {".py"})) == {"real.py"}

    def test_dotfile_has_no_extension(self, make_tree):
        root = make_tree({".py": "", "x.py": ""})
        assert _names(find_files_by_extension(root, {".py"})) == {"x.py"}

    def test_empty_directory(self, tmp_path: Path):
        assert find_files_by_extension(tmp_path, {".py"}) == []

    def test_missing_directory_returns_empty(self, tmp_path: Path):
        assert find_files_by_extension(tmp_path / "nope", {".py"}) == []

    def test_directories_with_matching_suffix_are_not_files(self, make_tree):
        root = make_tree({"weird.py/": ""})
        assert find_files_by_extension(root, {".py"}) == []


# ---------------------------------------------------------------------------
# Depth bound
# ---------------------------------------------------------------------------


class TestDepthBound:
    def test_file_at_max_depth_is_found(self, make_tree):
        # root/a/b/x.py sits two directory levels below the root
        root = make_tree({"a/b/x.py": ""})
        assert _names(find_files_by_extension(root, {".py"}, max_depth=2)) == {"x.py"}

    def test_file_below_max_depth_is_not_found(self, make_tree):
        root = make_tree({"a/b/c/x.py": ""})
        assert find_files_by_extension(root, {".py"}, max_depth=2) == []

    def test_default_depth_is_two(self, make_tree):
        root = make_tree({"a/b/found.py": "", "a/b/c/missed.py": ""})
        assert _names(find_files_by_extension(root, {".py"})) == {"found.py"}

    def test_depth_zero_only_scans_root(self, make_tree):
        root = make_tree({"top.py": "", "sub/nested.py": ""})
        assert _names(find_files_by_extension(root, {".py"}, max_depth=0)) == {"top.py"}

    @pytest.mark.parametrize("max_depth,expected", [(0, {"d0.go"}), (1, {"d0.go", "d1.go"})])
    def test_boundary_per_level(self, make_tree, max_depth, expected):
        root = make_tree({"d0.go": "", "a/d1.go": "", "a/b/d2.go": ""})
        assert _names(find_files_by_extension(root, {".go"}, max_depth=max_depth)) == expected


# ---------------------------------------------------------------------------
# Skipped directories
# ---------------------------------------------------------------------------


class TestSkippedDirectories:
    def test_node_modules_never_scanned(self, make_tree):
        root = make_tree({"node_modules/lib/index.py": "", "node_modules/top.py": ""})
        assert find_files_by_extension(root, {".py"}) == []

    def test_nested_node_modules_never_scanned(self, make_tree):
        root = make_tree({"web/node_modules/x.py": "", "web/app.py": ""})
        assert _names(find_files_by_extension(root, {".py"})) == {"app.py"}

    def test_hidden_directories_skipped(self, make_tree):
        root = make_tree({".venv/lib.py": "", ".git/hooks.py": "", "src/ok.py": ""})
        assert _names(find_files_by_extension(root, {".py"})) == {"ok.py"}

    def test_hidden_files_still_considered(self, make_tree):
        root = make_tree({".hidden.py": ""})
        assert _names(find_files_by_extension(root, {".py"})) == {".hidden.py"}

    def test_unreadable_directory_is_skipped(self, make_tree, deny_access):
        root = make_tree({"locked/secret.py": "", "open/visible.py": ""})
        deny_access(root / "locked")
        assert _names(find_files_by_extension(root, {".py"})) == {"visible.py"}

    def test_listing_error_treated_as_empty_subtree(self, make_tree):
        root = make_tree({"locked/secret.py": "", "open/visible.py": ""})
        real_scandir = os.scandir

        def flaky_scandir(path):
            if Path(path).name == "locked":
                raise PermissionError(13, "Permission denied", str(path))
            return real_scandir(path)

        with patch("stackprobe.detection.scanner.os.scandir", side_effect=flaky_scandir):
            found = find_files_by_extension(root, {".py"})
        assert _names(found) == {"visible.py"}

    @pytest.mark.skipif(not hasattr(os, "symlink"), reason="symlinks unsupported")
    def test_dangling_symlink_is_ignored(self, make_tree):
        root = make_tree({"real.py": ""})
        try:
            os.symlink(root / "missing.py", root / "broken.py")
        except OSError:
            pytest.skip("cannot create symlinks here")
        assert _names(find_files_by_extension(root, {".py"})) == {"real.py"}

    @pytest.mark.skipif(not hasattr(os, "symlink"), reason="symlinks unsupported")
    def test_symlink_loop_bounded_by_depth(self, make_tree):
        root = make_tree({"a/x.rs": ""})
        try:
            os.symlink(root / "a", root / "a" / "loop", target_is_directory=True)
        except OSError:
            pytest.skip("cannot create symlinks here")
        found = find_files_by_extension(root, {".rs"})
        # a/x.rs, a/loop/x.rs; a/loop/loop/x.rs is past the bound
        assert len(found) == 2

    @pytest.mark.skipif(not hasattr(os, "symlink"), reason="symlinks unsupported")
    def test_self_referencing_root_returns_empty(self, tmp_path: Path):
        loop = tmp_path / "loop"
        try:
            os.symlink(loop, loop)
        except OSError:
            pytest.skip("cannot create symlinks here")
        assert find_files_by_extension(loop, {".py"}) == []
        assert has_files_by_pattern(loop, "settings") is False

    def test_unresolvable_root_returns_empty(self, make_tree):
        root = make_tree({"app.py": ""})
        with patch.object(Path, "resolve", side_effect=RuntimeError("Symlink loop")):
            assert resolve_root(root) is None
            assert find_files_by_extension(root, {".py"}) == []

    def test_resolve_root_is_absolute(self, make_tree):
        root = make_tree({"app.py": ""})
        assert resolve_root(root) == root.resolve()


# ---------------------------------------------------------------------------
# find_files_by_pattern
# ---------------------------------------------------------------------------


class TestFindFilesByPattern:
    def test_substring_match(self, make_tree):
        root = make_tree({"proj/settings.py": "", "proj/test_settings.py": "", "other.py": ""})
        assert _names(find_files_by_pattern(root, "settings.py")) == {
            "settings.py",
            "test_settings.py",
        }

    def test_pattern_is_case_sensitive(self, make_tree):
        root = make_tree({"program.cs": ""})
        assert find_files_by_pattern(root, "Program.cs") == []

    def test_pattern_respects_depth(self, make_tree):
        root = make_tree({"a/b/c/app.py": ""})
        assert find_files_by_pattern(root, "app.py") == []
        assert len(find_files_by_pattern(root, "app.py", max_depth=3)) == 1

    def test_pattern_skips_node_modules(self, make_tree):
        root = make_tree({"node_modules/app.py": ""})
        assert find_files_by_pattern(root, "app.py") == []

    def test_no_match(self, make_tree):
        root = make_tree({"main.go": ""})
        assert find_files_by_pattern(root, "app.py") == []


# ---------------------------------------------------------------------------
# Presence helpers
# ---------------------------------------------------------------------------


class TestPresenceHelpers:
    def test_has_files_by_extension(self, make_tree):
        root = make_tree({"src/lib.rs": ""})
        assert has_files_by_extension(root, {".rs"}) is True
        assert has_files_by_extension(root, {".go"}) is False

    def test_has_files_by_pattern(self, make_tree):
        root = make_tree({"src/app.py": ""})
        assert has_files_by_pattern(root, "app.py") is True
        assert has_files_by_pattern(root, "settings.py") is False

    def test_presence_helpers_honor_depth(self, make_tree):
        root = make_tree({"a/b/c/deep.rs": ""})
        assert has_files_by_extension(root, {".rs"}) is False
        assert has_files_by_extension(root, {".rs"}, max_depth=3) is True
