"""Tests for themekit.core.fs."""

from __future__ import annotations

import asyncio
from pathlib import Path

import pytest

from themekit.core import fs


class TestRmdirIfExists:
    def test_missing_dir_is_noop(self, tmp_path: Path):
        asyncio.run(fs.rmdir_if_exists(tmp_path / "nope"))
        assert not (tmp_path / "nope").exists()

    def test_removes_empty_dir(self, tmp_path: Path):
        target = tmp_path / "empty"
        target.mkdir()
        asyncio.run(fs.rmdir_if_exists(target))
        assert not target.exists()

    def test_non_empty_dir_raises(self, tmp_path: Path):
        target = tmp_path / "full"
        target.mkdir()
        (target / "a.css").write_text("a{}", encoding="utf-8")
        with pytest.raises(OSError):
            asyncio.run(fs.rmdir_if_exists(target))


class TestCleanDir:
    def test_missing_dir_is_created_empty(self, tmp_path: Path):
        target = tmp_path / "dist" / "css"
        asyncio.run(fs.clean_dir(target))
        assert target.is_dir()
        assert list(target.iterdir()) == []

    def test_files_are_removed(self, tmp_path: Path):
        target = tmp_path / "css"
        target.mkdir()
        for name in ("a.css", "b.css", "c.css.map"):
            (target / name).write_text("x", encoding="utf-8")
        asyncio.run(fs.clean_dir(target))
        assert target.is_dir()
        assert list(target.iterdir()) == []

    def test_subdirectory_is_an_error(self, tmp_path: Path):
        target = tmp_path / "css"
        (target / "nested").mkdir(parents=True)
        with pytest.raises(OSError):
            asyncio.run(fs.clean_dir(target))

    def test_empty_dir_reports_existence(self, tmp_path: Path):
        assert asyncio.run(fs.empty_dir(tmp_path / "missing")) is False
        assert asyncio.run(fs.empty_dir(tmp_path)) is True


class TestOutputStream:
    def test_unawaited_writes_keep_call_order(self, tmp_path: Path):
        target = tmp_path / "out.scss"
        lines = [f"@import 'part-{i:02d}';\n" for i in range(40)]

        async def scenario() -> None:
            stream = await fs.open_stream(target)
            await asyncio.gather(*(fs.write_to_stream(stream, line) for line in lines))
            await stream.close()

        asyncio.run(scenario())
        assert target.read_text(encoding="utf-8") == "".join(lines)

    def test_write_after_close_raises(self, tmp_path: Path):
        async def scenario() -> None:
            stream = await fs.open_stream(tmp_path / "out.scss")
            await stream.close()
            assert stream.closed
            await stream.write("late\n")

        with pytest.raises(ValueError):
            asyncio.run(scenario())

    def test_write_file(self, tmp_path: Path):
        target = tmp_path / "a.css"
        asyncio.run(fs.write_file(target, ".a { color: red; }\n"))
        assert target.read_text(encoding="utf-8") == ".a { color: red; }\n"
