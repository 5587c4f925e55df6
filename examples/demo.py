#!/usr/bin/env python3
"""Demo: Using repoctx as a Python library.

Analyzes a JavaScript repository, builds contexts for a few queries and
feeds an interaction back into session memory.
"""

import asyncio
import sys
from pathlib import Path

from repoctx.context.engine import ContextEngine
from repoctx.memory.models import Interaction


async def main():
    # Point at any JavaScript/TypeScript repository
    project_root = Path(sys.argv[1] if len(sys.argv) > 1 else ".")

    # 1. Analyze the repository
    print("Analyzing repository...")
    engine = ContextEngine()
    project = await engine.analyze_directory(project_root)

    meta = project.metadata
    print(f"  Name: {meta.name}")
    print(f"  Language: {meta.language}")
    print(f"  Framework: {meta.framework}")
    print(f"  Files: {len(project.content.files)}")
    print(f"  Functions: {len(project.content.functions)}")
    print(f"  Classes: {len(project.content.classes)}")
    print(f"  Routes: {len(project.structure.routes)}")

    # 2. Build contexts under different budgets
    for query, budget in [
        ("fix the login bug in auth.js", 8000),
        ("refactor the user service", 2000),
    ]:
        print(f"\n--- {query} (budget {budget}) ---")
        context = engine.build_context(query, max_tokens=budget)
        print(context.summary())

    # 3. Record what happened so later queries can use it
    engine.update_memory(Interaction(
        query="refactor the user service",
        response="Split persistence out of UserService into a repository pattern",
        files_modified=["src/services/userService.js", "src/services/userRepository.js"],
    ))
    print("\n--- Recent files ---")
    for path in engine.memory.recent_files:
        print(f"  {path}")

    # 4. Project health
    report = engine.analyze_project_health()
    print(f"\n--- Health score: {report.score}/100 ---")
    for rec in report.recommendations:
        print(f"  [{rec.priority.value}] {rec.area}: {rec.action}")


if __name__ == "__main__":
    asyncio.run(main())
