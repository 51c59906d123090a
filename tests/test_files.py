"""Tests for pawprint.host.files — glob reading and writing."""

from __future__ import annotations

from pathlib import Path

from pawprint.host.files import read_files, write_files
from pawprint.host.protocols import SourceFile

from .conftest import write


class TestReadFiles:
    def test_relative_to_base(self, tmp_path: Path) -> None:
        write(tmp_path / "fonts/a.woff", "a")
        write(tmp_path / "fonts/b.woff2", "b")

        files = read_files(tmp_path / "fonts/*.*", tmp_path / "fonts")

        assert files == [
            SourceFile(relative_path="a.woff", data=b"a"),
            SourceFile(relative_path="b.woff2", data=b"b"),
        ]

    def test_recursive(self, tmp_path: Path) -> None:
        write(tmp_path / "img/x.png", "x")
        write(tmp_path / "img/sub/y.png", "y")

        files = read_files(tmp_path / "img/**/*.png", tmp_path / "img")

        assert [f.relative_path for f in files] == ["sub/y.png", "x.png"]

    def test_skips_hidden_and_directories(self, tmp_path: Path) -> None:
        write(tmp_path / "d/.DS_Store", "")
        write(tmp_path / "d/keep.txt", "k")
        (tmp_path / "d/sub.dir").mkdir()

        files = read_files(tmp_path / "d/*", tmp_path / "d")

        assert [f.relative_path for f in files] == ["keep.txt"]

    def test_no_match(self, tmp_path: Path) -> None:
        assert read_files(tmp_path / "nothing/*.*", tmp_path) == []


class TestWriteFiles:
    def test_writes_below_destination(self, tmp_path: Path) -> None:
        files = [
            SourceFile(relative_path="a.txt", data=b"A"),
            SourceFile(relative_path="nested/b.txt", data=b"B"),
        ]

        written = write_files(files, tmp_path / "out")

        assert written == [tmp_path / "out/a.txt", tmp_path / "out/nested/b.txt"]
        assert (tmp_path / "out/nested/b.txt").read_bytes() == b"B"

    def test_overwrites(self, tmp_path: Path) -> None:
        write_files([SourceFile("a.txt", b"old")], tmp_path)
        write_files([SourceFile("a.txt", b"new")], tmp_path)
        assert (tmp_path / "a.txt").read_bytes() == b"new"
