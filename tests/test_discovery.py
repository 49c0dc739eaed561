"""Tests for expanding path arguments into files."""

import pytest

from ts_expect_error.discovery import expand_paths
from ts_expect_error.exceptions import InvalidPathError


def _touch(path):
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text("", encoding="utf-8")
    return path


class TestExpandPaths:
    def test_directory_is_searched_recursively_and_sorted(self, tmp_path):
        _touch(tmp_path / "b.ts")
        _touch(tmp_path / "sub" / "a.tsx")
        _touch(tmp_path / "a.ts")
        names = [p.relative_to(tmp_path).as_posix() for p in expand_paths([tmp_path])]
        assert names == ["a.ts", "b.ts", "sub/a.tsx"]

    def test_other_extensions_skipped(self, tmp_path):
        _touch(tmp_path / "a.js")
        _touch(tmp_path / "README.md")
        _touch(tmp_path / "c.mts")
        assert [p.name for p in expand_paths([tmp_path])] == ["c.mts"]

    def test_custom_extensions(self, tmp_path):
        _touch(tmp_path / "a.ts")
        _touch(tmp_path / "b.tsx")
        assert [p.name for p in expand_paths([tmp_path], extensions=[".tsx"])] == ["b.tsx"]

    def test_excluded_directories(self, tmp_path):
        _touch(tmp_path / "node_modules" / "pkg" / "index.ts")
        _touch(tmp_path / "src" / "index.ts")
        files = list(expand_paths([tmp_path]))
        assert [p.relative_to(tmp_path).as_posix() for p in files] == ["src/index.ts"]

    def test_staged_copies_skipped(self, tmp_path):
        _touch(tmp_path / "demo.ts")
        _touch(tmp_path / "demo.ts-expect-error.ts")
        assert [p.name for p in expand_paths([tmp_path])] == ["demo.ts"]

    def test_explicit_file_always_included(self, tmp_path):
        path = _touch(tmp_path / "notes.txt")
        assert list(expand_paths([path])) == [path]

    def test_missing_path(self, tmp_path):
        with pytest.raises(InvalidPathError):
            list(expand_paths([tmp_path / "missing"]))
