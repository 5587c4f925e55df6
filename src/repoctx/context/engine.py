"""The context engine: analysis runs and per-query context assembly."""

from __future__ import annotations

import asyncio
import logging
import threading
from pathlib import Path
from typing import Callable

from repoctx.analysis.health import analyze_health
from repoctx.analysis.models import HealthReport
from repoctx.analysis.patterns import detect_patterns
from repoctx.analysis.project import MANIFEST_FILE, ProjectAnalyzer
from repoctx.analysis.quality import calculate_quality, scan_security
from repoctx.analysis.structure import StructureAnalyzer
from repoctx.config import ProjectConfig
from repoctx.context.compression import CompressionPipeline
from repoctx.context.models import (
    Context,
    HotSpot,
    ProjectSummary,
    RelevantAnalysis,
    RelevantMemory,
    Selection,
    StructureSummary,
)
from repoctx.context.selector import ContentSelector
from repoctx.graph.builder import DependencyGraphBuilder
from repoctx.graph.models import DependencyExcerpt
from repoctx.indexer.core import ContentIndexer
from repoctx.memory.models import Interaction
from repoctx.memory.store import MemoryStore
from repoctx.project import AnalysisState, ProjectContext
from repoctx.search.intent import IntentClassifier, IntentType, QueryIntent
from repoctx.search.relevance import RelevanceScorer
from repoctx.source import ContentLoader, LocalRepository, TreeEntry, fetch_contents

logger = logging.getLogger("repoctx.engine")

HIGH_COMPLEXITY = 10
MAX_HOT_SPOTS = 5
MAX_MAIN_MODULES = 10
MAX_ROUTES = 20


class ContextEngine:
    """Owns the live ProjectContext and the memory store for one repository.

    Usage:
        engine = ContextEngine()
        await engine.analyze_directory("path/to/repo")
        context = engine.build_context("fix the login bug in auth.js")
        print(context.render())
    """

    def __init__(self, config: ProjectConfig | None = None) -> None:
        self.config = config or ProjectConfig()
        self.memory = MemoryStore(self.config.memory)
        self.classifier = IntentClassifier()
        self.compressor = CompressionPipeline()
        self._project = self._new_project()
        self._swap_lock = threading.Lock()

    @property
    def project(self) -> ProjectContext:
        """The current snapshot. Treat it as read-only."""
        return self._project

    def _new_project(self) -> ProjectContext:
        return ProjectContext(memory=self.memory.state, dynamic=self.memory.dynamic)

    # ------------------------------------------------------------------
    # Analysis
    # ------------------------------------------------------------------

    async def analyze(
        self,
        entries: list[TreeEntry],
        loader: ContentLoader,
        progress: Callable[[str, int, int], None] | None = None,
    ) -> ProjectContext:
        """Analyze a repository listing and swap in the resulting snapshot.

        File loads run concurrently; every analysis stage after that runs
        in order over the complete content map.
        """
        logger.info(f"Analyzing repository: {len(entries)} entries")
        files = await fetch_contents(
            entries,
            loader,
            concurrency=self.config.indexer.max_concurrent_fetches,
            progress=progress,
        )
        project = self.analyze_contents(entries, files)
        with self._swap_lock:
            self._project = project
        logger.info(
            f"Analysis complete: {len(project.content.files)} files, "
            f"{len(project.content.functions)} functions, "
            f"{len(project.content.classes)} classes"
        )
        return project

    async def analyze_directory(
        self,
        root: str | Path,
        progress: Callable[[str, int, int], None] | None = None,
    ) -> ProjectContext:
        repo = LocalRepository(root, self.config.indexer)
        entries = await asyncio.to_thread(repo.list_tree)
        return await self.analyze(entries, repo, progress=progress)

    def analyze_contents(
        self, entries: list[TreeEntry], files: dict[str, str]
    ) -> ProjectContext:
        """Run every analysis stage over an already-loaded content map.

        Returns a complete new ProjectContext without installing it.
        """
        paths = [e.path for e in entries if e.type == "file"]

        metadata = ProjectAnalyzer().analyze(paths, files.get(MANIFEST_FILE))
        structure = StructureAnalyzer().analyze(paths, files)
        graph = DependencyGraphBuilder().build(files)
        patterns = detect_patterns(structure, metadata)
        content = ContentIndexer().index(files)
        quality = calculate_quality(content, graph)
        security = scan_security(files)

        return ProjectContext(
            metadata=metadata,
            structure=structure,
            analysis=AnalysisState(
                patterns=patterns,
                dependencies=graph,
                quality=quality,
                smells=quality.code_smells,
                security=security,
            ),
            content=content,
            memory=self.memory.state,
            dynamic=self.memory.dynamic,
        )

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def build_context(
        self,
        query: str,
        max_tokens: int | None = None,
        include_analysis: bool | None = None,
        include_memory: bool | None = None,
        focus_area: str | None = None,
    ) -> Context:
        """Assemble a bounded context for a developer query.

        Unset options fall back to the engine's ContextConfig. The result
        may still be over budget after every compression step; check
        `Context.over_budget`.
        """
        settings = self.config.context
        if max_tokens is None:
            max_tokens = settings.max_tokens
        if include_analysis is None:
            include_analysis = settings.include_analysis
        if include_memory is None:
            include_memory = settings.include_memory

        project = self._project
        if focus_area is not None:
            self.memory.set_focus(focus_area)

        intent = self.classifier.classify(query)
        scorer = RelevanceScorer(
            project.content, project.analysis.dependencies, self.memory.recent_files
        )
        scores = scorer.score(query, intent)
        selector = ContentSelector(project.content, settings.metadata_reserve)
        selection = selector.select(scores, max_tokens)
        logger.debug(
            f"Selected {len(selection.files)} files, {len(selection.functions)} functions, "
            f"{len(selection.classes)} classes ({selection.tokens_used} tokens)"
        )

        context = self._structure_context(project, query, intent, selection)
        if include_analysis:
            context.analysis = self._relevant_analysis(project, intent)
        if include_memory:
            context.memory = RelevantMemory(**self.memory.relevant(query))

        context.token_budget = max_tokens
        context.estimated_tokens = context.estimate_tokens()
        if context.estimated_tokens > max_tokens:
            context = self.compressor.compress(context, max_tokens)
        return context

    def _structure_context(
        self,
        project: ProjectContext,
        query: str,
        intent: QueryIntent,
        selection: Selection,
    ) -> Context:
        meta = project.metadata
        graph = project.analysis.dependencies

        dependencies: dict[str, DependencyExcerpt] = {}
        for f in selection.files:
            node = graph.node(f.path)
            if node is not None:
                dependencies[f.path] = DependencyExcerpt(
                    imports=node.imports, exports=node.exports, complexity=node.complexity
                )

        return Context(
            query=query,
            project=ProjectSummary(
                name=meta.name,
                language=meta.language,
                framework=meta.framework,
                description=meta.description,
            ),
            intent=intent,
            relevant_files=selection.files,
            relevant_functions=selection.functions,
            relevant_classes=selection.classes,
            dependencies=dependencies,
            patterns=list(project.analysis.patterns),
            structure=StructureSummary(
                entry_points=list(project.structure.entry_points),
                main_modules=list(project.structure.modules)[:MAX_MAIN_MODULES],
                routes=project.structure.routes[:MAX_ROUTES],
                total_files=len(project.content.files),
            ),
        )

    def _relevant_analysis(
        self, project: ProjectContext, intent: QueryIntent
    ) -> RelevantAnalysis:
        analysis = RelevantAnalysis()

        if intent.type in (IntentType.DEBUGGING, IntentType.ANALYSIS):
            analysis.quality = project.analysis.quality
            analysis.code_smells = list(project.analysis.smells)

        if intent.type == IntentType.REFACTORING:
            analysis.patterns = list(project.analysis.patterns)
            hot = [
                HotSpot(location=key, complexity=func.complexity)
                for key, func in project.content.functions.items()
                if func.complexity > HIGH_COMPLEXITY
            ]
            hot.sort(key=lambda h: h.complexity, reverse=True)
            analysis.complexity = hot[:MAX_HOT_SPOTS]

        return analysis

    def analyze_project_health(self) -> HealthReport:
        return analyze_health(self._project)

    def update_memory(self, interaction: Interaction) -> None:
        self.memory.update(interaction)
