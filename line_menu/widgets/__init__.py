"""Widgets for line-menu."""

from .candidate_item import CandidateItem
from .status import MatchCounter

__all__ = ["CandidateItem", "MatchCounter"]
