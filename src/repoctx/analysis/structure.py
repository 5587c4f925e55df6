"""Classify repository files by path heuristics and pull out routes."""

from __future__ import annotations

import re

from repoctx.analysis.models import ConfigFile, ModuleInfo, ProjectStructure, Route

MODULE_MARKERS = ("components/", "modules/", "features/")
ENTRY_POINT_MARKERS = ("index.", "main.", "app.", "server.")
ROUTE_MARKERS = ("routes/", "api/", "pages/")
CONFIG_SUFFIXES = (".config.js", ".json")

# Ordered first-match chains: (substring, label)
MODULE_TYPE_CHAIN: list[tuple[str, str]] = [
    ("component", "component"),
    ("service", "service"),
    ("controller", "controller"),
    ("model", "model"),
    ("util", "utility"),
]
CONFIG_TYPE_CHAIN: list[tuple[str, str]] = [
    ("webpack", "webpack"),
    ("babel", "babel"),
    ("eslint", "eslint"),
    ("tsconfig", "typescript"),
    ("package.json", "npm"),
]

_ROUTE_PATTERNS = [
    re.compile(r"app\.(get|post|put|delete|patch)\s*\(['\"]([^'\"]+)['\"]"),
    re.compile(r"router\.(get|post|put|delete|patch)\s*\(['\"]([^'\"]+)['\"]"),
]


def _first_match(path: str, chain: list[tuple[str, str]], default: str) -> str:
    for marker, label in chain:
        if marker in path:
            return label
    return default


def detect_module_type(path: str) -> str:
    return _first_match(path, MODULE_TYPE_CHAIN, "module")


def detect_config_type(path: str) -> str:
    return _first_match(path, CONFIG_TYPE_CHAIN, "config")


def is_module(path: str) -> bool:
    return any(marker in path for marker in MODULE_MARKERS)


def is_entry_point(path: str) -> bool:
    return any(marker in path for marker in ENTRY_POINT_MARKERS)


def is_route_source(path: str) -> bool:
    return any(marker in path for marker in ROUTE_MARKERS)


def is_config(path: str) -> bool:
    return "config" in path or path.endswith(CONFIG_SUFFIXES)


def extract_routes(content: str, file: str = "") -> list[Route]:
    """Express-style `app.<verb>('/path'` then `router.<verb>('/path'` calls."""
    routes: list[Route] = []
    for pattern in _ROUTE_PATTERNS:
        for m in pattern.finditer(content):
            routes.append(Route(method=m.group(1).upper(), path=m.group(2), file=file))
    return routes


def module_name(path: str) -> str:
    """File name without directory or last extension."""
    filename = path.rsplit("/", 1)[-1]
    stem, dot, _ = filename.rpartition(".")
    return stem if dot and stem else filename


class StructureAnalyzer:
    """Builds ProjectStructure from file paths and route-file text."""

    def analyze(self, paths: list[str], files: dict[str, str]) -> ProjectStructure:
        structure = ProjectStructure(tree=list(paths))

        for path in paths:
            if is_module(path):
                structure.modules[module_name(path)] = ModuleInfo(
                    path=path, type=detect_module_type(path)
                )

        structure.entry_points = [p for p in paths if is_entry_point(p)]

        for path in paths:
            if is_route_source(path) and path in files:
                structure.routes.extend(extract_routes(files[path], file=path))

        for path in paths:
            if is_config(path):
                structure.configs[path] = ConfigFile(path=path, type=detect_config_type(path))

        return structure
