"""Repository sources: tree listings and on-demand content loading."""

from __future__ import annotations

import asyncio
import fnmatch
import logging
import os
from pathlib import Path, PurePosixPath
from typing import Callable, Literal, Protocol

from pydantic import BaseModel

from repoctx.config import IndexerConfig
from repoctx.exceptions import MissingFileError

logger = logging.getLogger("repoctx.source")


class TreeEntry(BaseModel):
    """One entry of a repository tree listing."""

    path: str
    type: Literal["file", "directory"] = "file"
    size: int = 0


class ContentLoader(Protocol):
    """Anything that can fetch the text of a repository file."""

    async def load(self, path: str) -> str: ...


class LocalRepository:
    """A repository checked out on the local filesystem.

    Paths in the listing are relative to `root` and use forward slashes.
    Excluded paths (config patterns plus the root `.gitignore`) and files
    above the size limit are left out of the listing.
    """

    def __init__(self, root: str | Path, config: IndexerConfig | None = None) -> None:
        self.root = Path(root).resolve()
        self.config = config or IndexerConfig()

    def list_tree(self) -> list[TreeEntry]:
        entries: list[TreeEntry] = []
        max_size = self.config.max_file_size_kb * 1024
        exclude = self.config.exclude_patterns + _read_gitignore(self.root)

        for dirpath, dirnames, filenames in os.walk(self.root):
            rel_dir = os.path.relpath(dirpath, self.root)

            kept = []
            for d in sorted(dirnames):
                rel = _posix(os.path.join(rel_dir, d) if rel_dir != "." else d)
                if _should_exclude(rel, exclude):
                    continue
                kept.append(d)
                entries.append(TreeEntry(path=rel, type="directory"))
            dirnames[:] = kept

            for filename in sorted(filenames):
                rel = _posix(os.path.join(rel_dir, filename) if rel_dir != "." else filename)
                if _should_exclude(rel, exclude):
                    continue
                try:
                    size = (Path(dirpath) / filename).stat().st_size
                except OSError:
                    continue
                if size > max_size:
                    logger.debug(f"Skipping {rel}: {size} bytes over size limit")
                    continue
                entries.append(TreeEntry(path=rel, type="file", size=size))

        return sorted(entries, key=lambda e: e.path)

    async def load(self, path: str) -> str:
        return await asyncio.to_thread(self._read, path)

    def _read(self, path: str) -> str:
        full_path = self.root / path
        if not full_path.is_file():
            raise MissingFileError(path)
        return full_path.read_text(encoding="utf-8", errors="replace")


class MappingRepository:
    """An in-memory repository built from a path -> text mapping."""

    def __init__(self, files: dict[str, str]) -> None:
        self.files = dict(files)

    def list_tree(self) -> list[TreeEntry]:
        directories: set[str] = set()
        for path in self.files:
            directories.update(str(p) for p in PurePosixPath(path).parents if str(p) != ".")
        entries = [TreeEntry(path=d, type="directory") for d in directories]
        entries += [
            TreeEntry(path=p, type="file", size=len(text.encode("utf-8")))
            for p, text in self.files.items()
        ]
        return sorted(entries, key=lambda e: e.path)

    async def load(self, path: str) -> str:
        try:
            return self.files[path]
        except KeyError:
            raise MissingFileError(path) from None


async def fetch_contents(
    entries: list[TreeEntry],
    loader: ContentLoader,
    concurrency: int = 16,
    progress: Callable[[str, int, int], None] | None = None,
) -> dict[str, str]:
    """Load every file entry, at most `concurrency` at a time.

    A file that cannot be loaded is logged and left out of the result; it
    never fails the whole fetch. The result follows listing order.

    Args:
        entries: Tree listing; directory entries are ignored.
        loader: Source of file text.
        concurrency: Maximum number of loads in flight.
        progress: Optional callback(path, done, total) called as loads finish.
    """
    paths = [e.path for e in entries if e.type == "file"]
    semaphore = asyncio.Semaphore(max(1, concurrency))
    total = len(paths)
    done = 0

    async def fetch(path: str) -> str | None:
        nonlocal done
        async with semaphore:
            try:
                text = await loader.load(path)
            except (MissingFileError, OSError) as e:
                logger.warning(f"Could not load {path}: {e}")
                text = None
        done += 1
        if progress:
            progress(path, done, total)
        return text

    results = await asyncio.gather(*(fetch(p) for p in paths))
    return {path: text for path, text in zip(paths, results) if text is not None}


def _posix(path: str) -> str:
    return path.replace(os.sep, "/")


def _should_exclude(path: str, patterns: list[str]) -> bool:
    """Check if a path matches any exclusion pattern."""
    parts = PurePosixPath(path).parts
    for pattern in patterns:
        if fnmatch.fnmatch(path, pattern):
            return True
        for part in parts:
            if fnmatch.fnmatch(part, pattern):
                return True
    return False


def _read_gitignore(root: Path) -> list[str]:
    """Read .gitignore patterns from the repository root."""
    gitignore = root / ".gitignore"
    if not gitignore.exists():
        return []

    patterns = []
    try:
        for line in gitignore.read_text().splitlines():
            line = line.strip()
            if line and not line.startswith("#"):
                patterns.append(line.rstrip("/"))
    except OSError as e:
        logger.warning(f"Could not read {gitignore}: {e}")
    return patterns
