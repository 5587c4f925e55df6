"""Command-line interface for repoctx."""

from __future__ import annotations

import asyncio
import json
import logging
import sys
import time
from pathlib import Path

import click
from pydantic import ValidationError
from rich.logging import RichHandler

from repoctx import __version__
from repoctx.config import (
    ProjectConfig,
    find_project_root,
    load_config,
    save_config,
    set_config_value,
)
from repoctx.context.engine import ContextEngine
from repoctx.exceptions import ConfigError
from repoctx.project import ProjectContext
from repoctx.ui.console import Console

console = Console()


def _get_project_root(path: str | None = None) -> Path:
    """Find the project root or error."""
    if path:
        root = Path(path).resolve()
        if not root.exists():
            console.error(f"Path does not exist: {path}")
            sys.exit(1)
        return root

    root = find_project_root()
    if root is None:
        return Path.cwd().resolve()
    return root


def _load_config(root: Path) -> ProjectConfig:
    try:
        return load_config(root)
    except ConfigError as e:
        console.error(str(e))
        sys.exit(1)


def _run_analysis(engine: ContextEngine, root: Path) -> ProjectContext:
    """Analyze a directory with a progress bar."""
    start_time = time.time()

    with console.loading_progress() as progress:
        task = progress.add_task("Loading files...", total=None)

        def on_progress(file_path: str, current: int, total: int):
            progress.update(
                task, total=total, completed=current,
                description=f"Loaded {file_path}",
            )

        project = asyncio.run(engine.analyze_directory(root, progress=on_progress))

    elapsed = time.time() - start_time
    console.success(f"Analyzed {len(project.content.files)} files in {elapsed:.1f}s")
    return project


@click.group()
@click.version_option(version=__version__, prog_name="repoctx")
@click.option("--verbose", "-v", is_flag=True, help="Show log output.")
def main(verbose: bool):
    """repoctx - relevance-ranked, budgeted context from a source repository."""
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(message)s",
            handlers=[RichHandler(console=console.console, show_path=False)],
        )


@main.command()
@click.option("--path", "-p", default=None, help="Path to the project root.")
@click.option(
    "--budget", "-b", default=None, type=click.IntRange(min=1), help="Default token budget."
)
def init(path: str | None, budget: int | None):
    """Write a default configuration for a repository."""
    root = Path(path or ".").resolve()
    if not root.exists():
        console.error(f"Path does not exist: {root}")
        sys.exit(1)

    console.banner()
    console.info(f"Initializing repoctx for: {root}")

    config = _load_config(root)
    config.name = root.name
    config.root_path = str(root)
    if budget:
        config.context.max_tokens = budget

    save_config(root, config)
    console.success("Configuration saved to .repoctx/")


@main.command()
@click.option("--path", "-p", default=None, help="Path to the project root.")
def analyze(path: str | None):
    """Analyze the repository and show statistics."""
    root = _get_project_root(path)
    engine = ContextEngine(_load_config(root))

    console.banner()
    project = _run_analysis(engine, root)
    console.show_stats(project)


@main.command()
@click.argument("query")
@click.option("--path", "-p", default=None, help="Path to the project root.")
@click.option("--budget", "-b", default=None, type=click.IntRange(min=1), help="Token budget.")
@click.option("--no-analysis", is_flag=True, help="Leave out the analysis block.")
@click.option("--no-memory", is_flag=True, help="Leave out the memory block.")
@click.option("--focus", "-f", default=None, help="Area of the codebase to focus on.")
@click.option("--json", "as_json", is_flag=True, help="Print the context as JSON.")
def context(
    query: str, path: str | None, budget: int | None, no_analysis: bool,
    no_memory: bool, focus: str | None, as_json: bool,
):
    """Build a budgeted context for a natural-language query.

    Examples:

        repoctx context "fix the login bug in auth.js"

        repoctx context "refactor the user service" --budget 4000 --json
    """
    root = _get_project_root(path)
    engine = ContextEngine(_load_config(root))

    if as_json:
        asyncio.run(engine.analyze_directory(root))
    else:
        _run_analysis(engine, root)

    ctx = engine.build_context(
        query,
        max_tokens=budget,
        include_analysis=False if no_analysis else None,
        include_memory=False if no_memory else None,
        focus_area=focus,
    )

    if as_json:
        click.echo(ctx.model_dump_json(indent=2))
        return

    console.show_context_summary(ctx)
    if not ctx.relevant_files and not ctx.relevant_functions:
        console.warning("Nothing in the repository matched the query.")
    console.console.print(ctx.render(), markup=False, highlight=False)


@main.command()
@click.option("--path", "-p", default=None, help="Path to the project root.")
def health(path: str | None):
    """Report project health: strengths, weaknesses, opportunities, risks."""
    root = _get_project_root(path)
    engine = ContextEngine(_load_config(root))
    _run_analysis(engine, root)
    console.show_health(engine.analyze_project_health())


@main.command("config")
@click.argument("action", type=click.Choice(["set", "get", "show"]))
@click.argument("key", required=False)
@click.argument("value", required=False)
@click.option("--path", "-p", default=None, help="Path to the project root.")
def config_cmd(action: str, key: str | None, value: str | None, path: str | None):
    """Manage repoctx configuration."""
    root = _get_project_root(path)
    config = _load_config(root)

    if action == "show":
        console.console.print_json(json.dumps(config.model_dump(), indent=2))
    elif action == "get":
        if not key:
            console.error("Usage: repoctx config get <key>")
            sys.exit(1)
        data = config.model_dump()
        for part in key.split("."):
            if isinstance(data, dict) and part in data:
                data = data[part]
            else:
                console.error(f"Unknown key: {key}")
                sys.exit(1)
        console.console.print(f"{key} = {data}")
    elif action == "set":
        if not key or value is None:
            console.error("Usage: repoctx config set <key> <value>")
            sys.exit(1)
        try:
            parsed_value = json.loads(value)
        except json.JSONDecodeError:
            parsed_value = value
        try:
            config = set_config_value(config, key, parsed_value)
        except KeyError:
            console.error(f"Unknown config key: {key}")
            sys.exit(1)
        except ValidationError as e:
            console.error(f"Invalid value for {key}: {e.errors()[0]['msg']}")
            sys.exit(1)
        save_config(root, config)
        console.success(f"Set {key} = {parsed_value}")


if __name__ == "__main__":
    main()
