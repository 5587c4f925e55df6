"""Greedy, budgeted selection of scored content."""

from __future__ import annotations

from repoctx.context.models import Selection, SelectedFile, TokenEstimator
from repoctx.indexer.models import ContentIndex
from repoctx.search.relevance import CLASS_PREFIX, FUNCTION_PREFIX

DEFAULT_METADATA_RESERVE = 0.2


def summarize_file(content: str, token_budget: int) -> str:
    """Fit `content` into `token_budget` tokens by keeping its head and tail.

    Text that already fits (`token_budget * 4` characters) comes back
    unchanged. Otherwise the first and last `budget_chars // 2` characters
    are kept around a marker that states how many characters were cut.
    """
    max_chars = max(0, token_budget) * TokenEstimator.CHARS_PER_TOKEN
    if len(content) <= max_chars:
        return content

    half = max_chars // 2
    head = content[:half]
    tail = content[len(content) - half:]
    omitted = len(content) - 2 * half
    return f"{head}\n\n[... {omitted} characters omitted ...]\n\n{tail}"


class ContentSelector:
    """Fills a working budget with the highest-scoring items.

    A share of the budget (20% by default) is held back for structural
    metadata. Items are visited in descending score order, ties kept in
    scoring order. Functions and classes are all-or-nothing; a file that
    does not fit whole is replaced by a head+tail summary sized to what is
    left. Selection stops once the working budget is reached.
    """

    def __init__(
        self, index: ContentIndex, metadata_reserve: float = DEFAULT_METADATA_RESERVE
    ) -> None:
        self.index = index
        self.metadata_reserve = metadata_reserve

    def working_budget(self, max_tokens: int) -> int:
        return round(max_tokens * (1 - self.metadata_reserve))

    def select(self, scores: dict[str, int], max_tokens: int) -> Selection:
        budget = self.working_budget(max_tokens)
        selection = Selection(token_budget=budget)
        used = 0

        ranked = sorted(scores.items(), key=lambda item: item[1], reverse=True)

        for key, score in ranked:
            if used >= budget:
                break

            if key.startswith(FUNCTION_PREFIX):
                func = self.index.functions.get(key[len(FUNCTION_PREFIX):])
                if func is None:
                    continue
                tokens = TokenEstimator.estimate_model(func)
                if used + tokens <= budget:
                    selection.functions.append(func.model_copy(deep=True))
                    used += tokens

            elif key.startswith(CLASS_PREFIX):
                cls = self.index.classes.get(key[len(CLASS_PREFIX):])
                if cls is None:
                    continue
                tokens = TokenEstimator.estimate_model(cls)
                if used + tokens <= budget:
                    selection.classes.append(cls.model_copy(deep=True))
                    used += tokens

            else:
                content = self.index.files.get(key)
                if content is None:
                    continue
                tokens = TokenEstimator.estimate(content)
                if used + tokens <= budget:
                    selection.files.append(
                        SelectedFile(path=key, content=content, relevance=score)
                    )
                    used += tokens
                else:
                    summary = summarize_file(content, budget - used)
                    selection.files.append(SelectedFile(
                        path=key, content=summary, relevance=score, summarized=True
                    ))
                    used += TokenEstimator.estimate(summary)

        selection.tokens_used = used
        return selection
