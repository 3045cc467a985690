"""Fuzzy ranking of snippets against the live search query."""

from __future__ import annotations

from dataclasses import replace

from .snippet import Snippet


def fuzzy_score(query: str, candidate: str) -> int | None:
    """Score an in-order character match of ``query`` inside ``candidate``.

    Returns ``None`` when some query character cannot be found after the
    previous one. Consecutive runs and word-boundary hits raise the score;
    gaps and long candidates lower it.
    """
    if not query:
        return 0
    query_folded = query.casefold()
    candidate_folded = candidate.casefold()

    score = 0
    prev_idx = -1
    run = 0
    for needle in query_folded:
        idx = candidate_folded.find(needle, prev_idx + 1)
        if idx < 0:
            return None
        if idx == prev_idx + 1:
            run += 1
            score += 20 + min(16, run * 4)
        else:
            gap = idx - prev_idx - 1
            run = 0
            score -= min(40, gap * 2)
        if idx == 0 or candidate_folded[idx - 1] in "/_- .":
            score += 35
        prev_idx = idx

    score -= len(candidate_folded) // 5
    return score


def token_score(token: str, text: str) -> int:
    """Return the contribution of one query token against one field.

    Misses count as ``0``; any hit counts at least ``1`` so that matching a
    token never ranks below missing it.
    """
    score = fuzzy_score(token, text)
    if score is None:
        return 0
    return max(1, score)


def snippet_score(query: str, snippet: Snippet) -> int:
    """Sum token scores over the command and the description."""
    total = 0
    for token in query.split():
        total += token_score(token, snippet.cmd)
        total += token_score(token, snippet.description)
    return total


def rank_snippets(query: str, snippets: list[Snippet]) -> list[Snippet]:
    """Return re-scored copies of ``snippets`` sorted by descending score.

    The sort is stable, so equal scores (including the all-zero empty query)
    keep their current relative order.
    """
    scored = [replace(snippet, priority=snippet_score(query, snippet)) for snippet in snippets]
    return sorted(scored, key=lambda snippet: -snippet.priority)
