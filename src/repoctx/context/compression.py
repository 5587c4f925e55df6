"""Staged lossy compression of an assembled context.

Steps run in a fixed order, from least to most destructive:

  1. strip_comments        - drop block and line comments from file text
  2. collapse_whitespace   - squeeze blank-line runs and space runs
  3. summarize_functions   - placeholder for function bodies over 500 chars
  4. drop_class_bodies     - keep class signatures, replace bodies with a count
  5. abstract_duplicates   - point repeated function bodies at their first copy
  6. drop_low_relevance    - keep the top 60% of files by relevance

The context is re-estimated after every step and the pipeline stops as soon
as it fits. Summarized files are never touched by steps 1 and 2 since their
omission marker must survive.
"""

from __future__ import annotations

import logging
import math
import re
from typing import Callable

from repoctx.context.models import Context

logger = logging.getLogger("repoctx.compression")

LONG_BODY_CHARS = 500
KEEP_FILE_RATIO = 0.6

_BLOCK_COMMENT_RE = re.compile(r"/\*.*?\*/", re.DOTALL)
_LINE_COMMENT_RE = re.compile(r"//.*")
_BLANK_LINES_RE = re.compile(r"\n\s*\n")
_SPACES_RE = re.compile(r"[ \t\f\v]+")


def strip_comments(context: Context) -> None:
    for f in context.relevant_files:
        if not f.summarized:
            text = _BLOCK_COMMENT_RE.sub("", f.content)
            f.content = _LINE_COMMENT_RE.sub("", text)


def collapse_whitespace(context: Context) -> None:
    for f in context.relevant_files:
        if not f.summarized:
            text = _BLANK_LINES_RE.sub("\n", f.content)
            f.content = _SPACES_RE.sub(" ", text)


def summarize_functions(context: Context) -> None:
    for func in context.relevant_functions:
        if len(func.body) > LONG_BODY_CHARS:
            func.body = (
                f"[Function body: {len(func.body)} chars, complexity: {func.complexity}]"
            )
            func.summarized = True


def drop_class_bodies(context: Context) -> None:
    for cls in context.relevant_classes:
        cls.body = ""
        cls.summary = f"Class with {len(cls.methods)} methods"


def abstract_duplicates(context: Context) -> None:
    first_seen: dict[str, str] = {}
    for func in context.relevant_functions:
        if not func.body or func.summarized:
            continue
        original = first_seen.get(func.body)
        if original is None:
            first_seen[func.body] = func.key
        else:
            func.body = f"[Same body as {original}]"
            func.summarized = True


def drop_low_relevance(context: Context) -> None:
    if not context.relevant_files:
        return
    keep = math.floor(len(context.relevant_files) * KEEP_FILE_RATIO)
    ranked = sorted(context.relevant_files, key=lambda f: f.relevance, reverse=True)
    context.relevant_files = ranked[:keep]
    kept = {f.path for f in context.relevant_files}
    context.dependencies = {
        path: dep for path, dep in context.dependencies.items() if path in kept
    }


CompressionStep = Callable[[Context], None]

DEFAULT_STEPS: list[tuple[str, CompressionStep]] = [
    ("strip_comments", strip_comments),
    ("collapse_whitespace", collapse_whitespace),
    ("summarize_functions", summarize_functions),
    ("drop_class_bodies", drop_class_bodies),
    ("abstract_duplicates", abstract_duplicates),
    ("drop_low_relevance", drop_low_relevance),
]


class CompressionPipeline:
    """Applies compression steps to a copy of a context until it fits.

    The input context is never modified. Running out of steps while still
    over budget is not an error; the result is returned with
    `over_budget=True`.
    """

    def __init__(self, steps: list[tuple[str, CompressionStep]] | None = None) -> None:
        self.steps = steps if steps is not None else list(DEFAULT_STEPS)

    def compress(self, context: Context, max_tokens: int) -> Context:
        compressed = context.model_copy(deep=True)
        tokens = compressed.estimate_tokens()
        logger.info(f"Compressing context: {tokens} tokens, budget {max_tokens}")

        for name, step in self.steps:
            if tokens <= max_tokens:
                break
            step(compressed)
            compressed.compression_steps.append(name)
            tokens = compressed.estimate_tokens()
            logger.debug(f"After {name}: {tokens} tokens")

        compressed.estimated_tokens = tokens
        compressed.over_budget = tokens > max_tokens
        if compressed.over_budget:
            logger.warning(
                f"Context still over budget after compression: {tokens} > {max_tokens}"
            )
        return compressed
