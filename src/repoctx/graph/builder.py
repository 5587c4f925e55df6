"""Build a file dependency graph from script sources."""

from __future__ import annotations

import logging
import re

import networkx as nx

from repoctx.graph.models import DependencyNode
from repoctx.indexer.extract import calculate_complexity

logger = logging.getLogger("repoctx.graph")

SCRIPT_EXTENSIONS = (".js", ".ts", ".jsx", ".tsx")

_IMPORT_RE = re.compile(
    r"import\s+(?:(?:\{[^}]*\})|(?:\w+)|(?:\*\s+as\s+\w+))\s+from\s+['\"]([^'\"]+)['\"]"
)
_REQUIRE_RE = re.compile(r"require\(['\"]([^'\"]+)['\"]\)")
_EXPORT_RE = re.compile(r"export\s+(?:default\s+)?(?:const|let|var|function|class)\s+(\w+)")


def is_script(path: str) -> bool:
    return path.endswith(SCRIPT_EXTENSIONS)


def extract_dependencies(content: str) -> dict[str, list[str]]:
    """Pull raw import targets and exported names out of a script.

    Static `import ... from` targets come first, then `require()` targets,
    each in textual order.
    """
    imports = [m.group(1) for m in _IMPORT_RE.finditer(content)]
    imports += [m.group(1) for m in _REQUIRE_RE.finditer(content)]
    exports = [m.group(1) for m in _EXPORT_RE.finditer(content)]
    return {"imports": imports, "exports": exports}


class DependencyGraph:
    """File dependency graph backed by a NetworkX DiGraph.

    Nodes are file paths with `imports`, `exports`, `dependents` and
    `complexity` attributes. An `imports` edge A -> B exists only when one
    of A's raw import targets is exactly the string B. There is no relative
    path resolution and no extension inference, so `./b` never links to
    `b.js` or `./b.js`.
    """

    def __init__(self, graph: nx.DiGraph | None = None) -> None:
        self.graph = graph if graph is not None else nx.DiGraph()

    def __contains__(self, path: object) -> bool:
        return self.graph.has_node(path)

    def __len__(self) -> int:
        return self.graph.number_of_nodes()

    def node(self, path: str) -> DependencyNode | None:
        if not self.graph.has_node(path):
            return None
        data = self.graph.nodes[path]
        return DependencyNode(
            imports=list(data.get("imports", [])),
            exports=list(data.get("exports", [])),
            dependents=list(data.get("dependents", [])),
            complexity=data.get("complexity", 1),
        )

    def complexity_of(self, path: str) -> int:
        """Complexity of a graph file; 0 for files outside the graph."""
        if not self.graph.has_node(path):
            return 0
        return self.graph.nodes[path].get("complexity", 1)

    def dependents_of(self, path: str) -> list[str]:
        if not self.graph.has_node(path):
            return []
        return list(self.graph.nodes[path].get("dependents", []))

    def circular_groups(self) -> list[list[str]]:
        """Groups of files that import each other in a cycle."""
        groups = [
            sorted(component)
            for component in nx.strongly_connected_components(self.graph)
            if len(component) > 1
        ]
        return sorted(groups)

    def get_stats(self) -> dict:
        return {
            "files": self.graph.number_of_nodes(),
            "resolved_imports": self.graph.number_of_edges(),
            "total_imports": sum(
                len(data.get("imports", [])) for _, data in self.graph.nodes(data=True)
            ),
            "circular_groups": len(self.circular_groups()),
        }


class DependencyGraphBuilder:
    """Builds a DependencyGraph from the file-text map."""

    def build(self, files: dict[str, str]) -> DependencyGraph:
        graph = nx.DiGraph()

        for path, content in files.items():
            if not is_script(path):
                continue
            deps = extract_dependencies(content)
            graph.add_node(
                path,
                imports=deps["imports"],
                exports=deps["exports"],
                dependents=[],
                complexity=calculate_complexity(content),
            )

        # Second pass: exact-string resolution of import targets
        for path, data in list(graph.nodes(data=True)):
            for target in data["imports"]:
                if graph.has_node(target):
                    graph.nodes[target]["dependents"].append(path)
                    graph.add_edge(path, target, kind="imports")

        result = DependencyGraph(graph)
        logger.debug(f"Dependency graph built: {result.get_stats()}")
        return result
