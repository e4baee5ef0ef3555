"""Services for line-menu."""

from line_menu.services.fuzzy import (
    fuzzy_match,
    rank,
    rank_items,
    clamp_selection,
)
from line_menu.services.ranking import RankCoordinator, RankPass
from line_menu.services.config import ConfigManager, MenuConfig, ScoreSettings
from line_menu.services.input import read_candidates, reattach_terminal

__all__ = [
    "fuzzy_match",
    "rank",
    "rank_items",
    "clamp_selection",
    "RankCoordinator",
    "RankPass",
    "ConfigManager",
    "MenuConfig",
    "ScoreSettings",
    "read_candidates",
    "reattach_terminal",
]
