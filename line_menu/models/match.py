"""Value types produced by the matcher and ranker."""

from dataclasses import dataclass
from enum import Enum


class ConsecutiveRule(Enum):
    """How the consecutive bonus decides that two matches are adjacent."""

    # Previous pattern char equals previous candidate char
    PREVIOUS_CHARS = "previous_chars"
    # Previous row's chosen match sits immediately to the left
    ADJACENT_MATCH = "adjacent_match"


@dataclass(frozen=True)
class ScoreConfig:
    """Scoring constants for the fuzzy matcher."""

    match_bonus: int = 16
    boundary_bonus: int = 16
    consecutive_bonus: int = 16
    gap_start_penalty: int = -3
    gap_extend_penalty: int = -1
    # Reserved for tuning; not applied by any transition
    non_contiguous_penalty: int = -5
    consecutive_rule: ConsecutiveRule = ConsecutiveRule.PREVIOUS_CHARS


DEFAULT_SCORE_CONFIG = ScoreConfig()


@dataclass(frozen=True)
class MatchResult:
    """Outcome of matching one pattern against one candidate.

    positions index into the original (unfolded) candidate, ascending.
    """

    matched: bool
    score: int = 0
    positions: tuple[int, ...] = ()


NO_MATCH = MatchResult(matched=False)


@dataclass(frozen=True)
class RankedItem:
    """A candidate that survived a rank pass."""

    text: str
    score: int
    positions: tuple[int, ...]
    index: int  # position in the original candidate list
