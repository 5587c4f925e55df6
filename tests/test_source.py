"""Tests for repository listings and content loading."""

from __future__ import annotations

import asyncio
from pathlib import Path

import pytest

from repoctx.config import IndexerConfig
from repoctx.exceptions import MissingFileError
from repoctx.source import LocalRepository, MappingRepository, TreeEntry, fetch_contents


class TestLocalRepository:
    def test_list_tree(self, tmp_project: Path):
        entries = LocalRepository(tmp_project).list_tree()
        files = {e.path for e in entries if e.type == "file"}
        directories = {e.path for e in entries if e.type == "directory"}

        assert "src/auth.js" in files
        assert "tests/auth.test.js" in files
        assert "secrets.js" not in files
        assert not any(p.startswith("node_modules") for p in files | directories)
        assert "logs" not in directories
        assert {"src", "src/services", "src/routes", "tests"} <= directories
        assert [e.path for e in entries] == sorted(e.path for e in entries)

    def test_sizes(self, tmp_project: Path):
        entries = {e.path: e for e in LocalRepository(tmp_project).list_tree()}
        assert entries["README.md"].size == (tmp_project / "README.md").stat().st_size

    def test_size_limit(self, tmp_path: Path):
        (tmp_path / "big.js").write_text("x" * 3000)
        (tmp_path / "small.js").write_text("x")
        repo = LocalRepository(tmp_path, IndexerConfig(max_file_size_kb=1))
        assert [e.path for e in repo.list_tree()] == ["small.js"]

    def test_custom_exclusions(self, tmp_path: Path):
        (tmp_path / "a.js").write_text("a")
        (tmp_path / "a.min.js").write_text("a")
        (tmp_path / "gen").mkdir()
        (tmp_path / "gen" / "b.js").write_text("b")
        repo = LocalRepository(tmp_path, IndexerConfig(exclude_patterns=["*.min.js", "gen"]))
        assert [e.path for e in repo.list_tree()] == ["a.js"]

    @pytest.mark.asyncio
    async def test_load(self, tmp_project: Path):
        repo = LocalRepository(tmp_project)
        assert "export function login" in await repo.load("src/auth.js")

    @pytest.mark.asyncio
    async def test_load_missing(self, tmp_project: Path):
        with pytest.raises(MissingFileError):
            await LocalRepository(tmp_project).load("src/nope.js")


class TestMappingRepository:
    def test_list_tree(self):
        repo = MappingRepository({"src/a/b.js": "b", "c.js": "cc"})
        assert [(e.path, e.type) for e in repo.list_tree()] == [
            ("c.js", "file"),
            ("src", "directory"),
            ("src/a", "directory"),
            ("src/a/b.js", "file"),
        ]

    @pytest.mark.asyncio
    async def test_load_missing(self):
        with pytest.raises(MissingFileError):
            await MappingRepository({}).load("a.js")


class SlowRepository(MappingRepository):
    """Tracks how many loads are in flight at once."""

    def __init__(self, files: dict[str, str]):
        super().__init__(files)
        self.in_flight = 0
        self.peak = 0

    async def load(self, path: str) -> str:
        self.in_flight += 1
        self.peak = max(self.peak, self.in_flight)
        await asyncio.sleep(0.01)
        self.in_flight -= 1
        return await super().load(path)


class TestFetchContents:
    @pytest.mark.asyncio
    async def test_listing_order_and_directories_ignored(self):
        repo = MappingRepository({"b.js": "b", "a.js": "a"})
        entries = [
            TreeEntry(path="b.js"),
            TreeEntry(path="dir", type="directory"),
            TreeEntry(path="a.js"),
        ]
        assert await fetch_contents(entries, repo) == {"b.js": "b", "a.js": "a"}

    @pytest.mark.asyncio
    async def test_missing_files_dropped(self):
        repo = MappingRepository({"a.js": "a"})
        entries = [TreeEntry(path="a.js"), TreeEntry(path="gone.js")]
        assert await fetch_contents(entries, repo) == {"a.js": "a"}

    @pytest.mark.asyncio
    async def test_concurrency_bounded(self):
        files = {f"f{i}.js": str(i) for i in range(20)}
        repo = SlowRepository(files)
        result = await fetch_contents(repo.list_tree(), repo, concurrency=4)
        assert len(result) == 20
        assert 1 < repo.peak <= 4
