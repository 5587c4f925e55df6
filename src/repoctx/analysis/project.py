"""Detect project language, manifest facts and framework."""

from __future__ import annotations

import json
import logging
from collections import Counter

from repoctx.analysis.models import ProjectMetadata
from repoctx.exceptions import ManifestParseError

logger = logging.getLogger("repoctx.analysis")

MANIFEST_FILE = "package.json"

# First match wins, in this order, even when several are listed
FRAMEWORK_CHAIN: list[tuple[str, str]] = [
    ("react", "React"),
    ("vue", "Vue"),
    ("angular", "Angular"),
    ("express", "Express"),
    ("next", "Next.js"),
]


def detect_framework(dependencies: dict) -> str | None:
    for package, framework in FRAMEWORK_CHAIN:
        if dependencies.get(package):
            return framework
    return None


def detect_language(paths: list[str]) -> str | None:
    """Most frequent file extension in the listing; ties go to the first seen."""
    counts: Counter[str] = Counter()
    for path in paths:
        filename = path.rsplit("/", 1)[-1]
        if "." not in filename.lstrip("."):
            continue
        counts[filename.rsplit(".", 1)[-1]] += 1
    if not counts:
        return None
    return counts.most_common(1)[0][0]


def parse_manifest(text: str, path: str = MANIFEST_FILE) -> dict:
    """Parse package.json text into a dict, or raise ManifestParseError."""
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise ManifestParseError(path, str(e)) from e
    if not isinstance(data, dict):
        raise ManifestParseError(path, "top-level value is not an object")
    deps = data.get("dependencies") or {}
    if not isinstance(deps, dict):
        raise ManifestParseError(path, "'dependencies' is not an object")
    return data


class ProjectAnalyzer:
    """Fills ProjectMetadata from the file listing and the manifest text."""

    def analyze(self, paths: list[str], manifest_text: str | None = None) -> ProjectMetadata:
        metadata = ProjectMetadata()

        if manifest_text is not None:
            try:
                pkg = parse_manifest(manifest_text)
            except ManifestParseError as e:
                logger.warning(f"{e}; keeping default metadata")
            else:
                deps = pkg.get("dependencies") or {}
                metadata.dependencies = list(deps.keys())
                metadata.framework = detect_framework(deps)
                metadata.name = _optional_str(pkg.get("name"))
                metadata.version = _optional_str(pkg.get("version"))
                metadata.description = _optional_str(pkg.get("description"))

        metadata.language = detect_language(paths)
        return metadata


def _optional_str(value: object) -> str | None:
    return None if value is None else str(value)
