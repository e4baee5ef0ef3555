"""Fuzzy matching and ranking for the line picker.

fzf-style dynamic-programming scorer:
- Every matched character earns a base bonus
- Matches at a word boundary (start of line or after a space) earn more
- Matches following an equal character pair earn a consecutive bonus
- Skipped characters cost a gap penalty (opening a gap costs more)

The score table keeps only two rows; matched positions are rebuilt from a
per-row backpointer table in a single backtrack pass.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from ..models.match import (
    DEFAULT_SCORE_CONFIG,
    NO_MATCH,
    ConsecutiveRule,
    MatchResult,
    RankedItem,
    ScoreConfig,
)

logger = logging.getLogger(__name__)

# Backpointers: which neighbour a cell's positions were taken from
_LEFT = 0
_UP = 1
_MATCH = 2


def _fold(text: str) -> list[str]:
    """Case-fold character by character so indices stay aligned."""
    return [char.casefold() for char in text]


def fuzzy_match(
    pattern: str,
    text: str,
    config: ScoreConfig = DEFAULT_SCORE_CONFIG,
) -> MatchResult:
    """Score how well pattern fuzzily occurs in text.

    Returns:
        MatchResult with matched=True and a positive score on success.
        An empty pattern matches everything with score 0.
    """
    if not pattern:
        return MatchResult(matched=True, score=0, positions=())

    n = len(pattern)
    m = len(text)
    if n > m:
        return NO_MATCH

    folded_pattern = _fold(pattern)
    folded_text = _fold(text)
    adjacent_rule = config.consecutive_rule is ConsecutiveRule.ADJACENT_MATCH

    # Row 0: zero scores, no positions
    prev = [0] * (m + 1)
    prev_last = [-1] * (m + 1)
    trace: list[bytearray] = []

    for i in range(1, n + 1):
        cur = [0] * (m + 1)
        cur_last = [-1] * (m + 1)
        steps = bytearray(m + 1)
        pattern_char = folded_pattern[i - 1]

        for j in range(1, m + 1):
            if pattern_char == folded_text[j - 1]:
                bonus = config.match_bonus

                if j == 1 or text[j - 2] == " ":
                    bonus += config.boundary_bonus

                if adjacent_rule:
                    if j > 1 and prev_last[j - 1] == j - 2:
                        bonus += config.consecutive_bonus
                elif i > 1 and j > 1 and folded_pattern[i - 2] == folded_text[j - 2]:
                    bonus += config.consecutive_bonus

                new_score = prev[j - 1] + bonus
                if new_score > prev[j] + config.gap_start_penalty:
                    cur[j] = new_score
                    cur_last[j] = j - 1
                    steps[j] = _MATCH
                else:
                    cur[j] = prev[j] + config.gap_start_penalty
                    cur_last[j] = prev_last[j]
                    steps[j] = _UP
            else:
                cur[j] = max(
                    cur[j - 1] + config.gap_extend_penalty,
                    prev[j] + config.gap_start_penalty,
                )
                # Positions always come from the left, whichever term won
                cur_last[j] = cur_last[j - 1]
                steps[j] = _LEFT

        trace.append(steps)
        prev = cur
        prev_last = cur_last

    final_score = prev[m]
    if final_score <= 0:
        return NO_MATCH

    return MatchResult(
        matched=True,
        score=final_score,
        positions=_backtrack(trace, n, m),
    )


def _backtrack(trace: list[bytearray], i: int, j: int) -> tuple[int, ...]:
    """Follow backpointers from (i, j) to row 0 or column 0."""
    positions: list[int] = []
    while i > 0 and j > 0:
        step = trace[i - 1][j]
        if step == _MATCH:
            positions.append(j - 1)
            i -= 1
            j -= 1
        elif step == _UP:
            i -= 1
        else:
            j -= 1
    positions.reverse()
    return tuple(positions)


def rank_items(
    query: str,
    candidates: Sequence[str],
    config: ScoreConfig = DEFAULT_SCORE_CONFIG,
) -> list[RankedItem]:
    """Rank candidates by fuzzy match quality.

    Args:
        query: Search string
        candidates: Lines to rank; never mutated

    Returns:
        Matching candidates sorted by score descending. Equal scores keep
        their original order. An empty query returns every candidate
        unscored, in original order.
    """
    if not query:
        return [
            RankedItem(text=text, score=0, positions=(), index=index)
            for index, text in enumerate(candidates)
        ]

    results: list[RankedItem] = []
    for index, text in enumerate(candidates):
        result = fuzzy_match(query, text, config)
        if result.matched:
            results.append(RankedItem(
                text=text,
                score=result.score,
                positions=result.positions,
                index=index,
            ))

    # list.sort is stable: ties stay in candidate order
    results.sort(key=lambda item: -item.score)
    logger.debug(
        f"Ranked {len(candidates)} candidates for {len(query)}-char query: "
        f"{len(results)} matched"
    )
    return results


def rank(
    query: str,
    candidates: Sequence[str],
    config: ScoreConfig = DEFAULT_SCORE_CONFIG,
) -> list[str]:
    """Return the candidate strings of rank_items(), best first."""
    return [item.text for item in rank_items(query, candidates, config)]


def clamp_selection(index: int, length: int) -> int | None:
    """Keep a selection index valid for a list of the given length.

    Returns None for an empty list, 0 when index is out of bounds.
    """
    if length <= 0:
        return None
    if 0 <= index < length:
        return index
    return 0
