"""Tests for size accounting and formatting."""

from __future__ import annotations

import subprocess

import pytest

import devnest.utils as utils
from devnest.utils import dir_info, dir_size, format_size


class TestDirSize:
    def test_empty_directory(self, tmp_path):
        assert dir_size(tmp_path) == 0

    def test_missing_directory(self, tmp_path):
        assert dir_size(tmp_path / "nope") == 0

    @pytest.mark.parametrize("depth", [0, 1, 5])
    def test_single_file_any_depth(self, tmp_path, depth):
        folder = tmp_path.joinpath(*[f"d{i}" for i in range(depth)])
        folder.mkdir(parents=True, exist_ok=True)
        (folder / "file.bin").write_bytes(b"x" * 10)
        assert dir_size(tmp_path) == 10

    def test_sums_all_files(self, tmp_path):
        (tmp_path / "a").write_bytes(b"a" * 100)
        (tmp_path / "sub").mkdir()
        (tmp_path / "sub" / "b").write_bytes(b"b" * 24)
        assert dir_info(tmp_path) == (124, 2)

    def test_scandir_fallback(self, tmp_path, monkeypatch):
        def no_find(path_str):
            raise FileNotFoundError("find")

        monkeypatch.setattr(utils, "_dir_info_find", no_find)
        (tmp_path / "sub" / "deeper").mkdir(parents=True)
        (tmp_path / "sub" / "deeper" / "f").write_bytes(b"z" * 10)
        (tmp_path / "g").write_bytes(b"z" * 5)
        assert dir_size(tmp_path) == 15

    def test_scandir_skips_unreadable(self, tmp_path):
        (tmp_path / "f").write_bytes(b"z" * 7)
        # A vanished directory on the stack must not abort the walk
        assert utils._dir_info_scandir(tmp_path / "gone") == (0, 0)
        assert utils._dir_info_scandir(tmp_path) == (7, 1)

    def test_symlinks_not_followed(self, tmp_path):
        target = tmp_path / "target"
        target.mkdir()
        (target / "big").write_bytes(b"x" * 1000)
        project = tmp_path / "project"
        project.mkdir()
        (project / "loop").symlink_to(project)
        (project / "link").symlink_to(target)
        (project / "own").write_bytes(b"y" * 3)
        assert utils._dir_info_scandir(project) == (3, 1)


class TestFindWalk:
    def test_partial_output_on_error(self, tmp_path, monkeypatch):
        def fake_run(cmd, **kwargs):
            return subprocess.CompletedProcess(cmd, 1, stdout=b"10\n20\n", stderr=b"Permission denied")

        monkeypatch.setattr(utils.subprocess, "run", fake_run)
        assert dir_info(tmp_path) == (30, 2)

    def test_empty_output_on_error_uses_scandir(self, tmp_path, monkeypatch):
        def fake_run(cmd, **kwargs):
            return subprocess.CompletedProcess(cmd, 1, stdout=b"", stderr=b"find: unknown predicate `-printf'")

        monkeypatch.setattr(utils.subprocess, "run", fake_run)
        (tmp_path / "sub").mkdir()
        (tmp_path / "sub" / "f").write_bytes(b"z" * 12)
        assert dir_info(tmp_path) == (12, 1)

    def test_command_line(self, tmp_path, monkeypatch):
        calls = []

        def fake_run(cmd, **kwargs):
            calls.append(cmd)
            return subprocess.CompletedProcess(cmd, 0, stdout=b"", stderr=b"")

        monkeypatch.setattr(utils.subprocess, "run", fake_run)
        assert dir_info(tmp_path) == (0, 0)
        assert calls == [["find", str(tmp_path), "-type", "f", "-printf", "%s\n"]]


class TestFormatSize:
    @pytest.mark.parametrize(
        "size, expected",
        [
            (0, "0 B"),
            (1023, "1023 B"),
            (1024, "1 KB"),
            (10 * 1024, "10 KB"),
            (1048576, "1 MB"),
            (250 * 1024 * 1024, "250 MB"),
            (1073741824, "1.0 GB"),
            (1610612736, "1.5 GB"),
        ],
    )
    def test_boundaries(self, size, expected):
        assert format_size(size) == expected
