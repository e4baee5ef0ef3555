"""Tests for fuzzy matching and ranking."""

import pytest

from line_menu.models.match import (
    ConsecutiveRule,
    MatchResult,
    RankedItem,
    ScoreConfig,
)
from line_menu.services.fuzzy import (
    clamp_selection,
    fuzzy_match,
    rank,
    rank_items,
)


class TestFuzzyMatchSpecialCases:
    """Degenerate inputs never raise."""

    def test_empty_pattern_matches(self):
        """Empty pattern matches with score 0 and no positions."""
        assert fuzzy_match("", "anything") == MatchResult(matched=True, score=0, positions=())

    def test_empty_pattern_empty_candidate(self):
        assert fuzzy_match("", "") == MatchResult(matched=True, score=0, positions=())

    def test_empty_candidate(self):
        assert not fuzzy_match("a", "").matched

    def test_pattern_longer_than_candidate(self):
        """A pattern longer than the candidate never matches."""
        result = fuzzy_match("abcd", "abc")
        assert not result.matched
        assert result.score == 0
        assert result.positions == ()

    def test_no_common_characters(self):
        result = fuzzy_match("zz", "apple")
        assert not result.matched
        assert result.positions == ()


class TestFuzzyMatchScoring:
    """Scores follow the DP transitions exactly."""

    def test_exact_match(self):
        """Whole-candidate match collects boundary and consecutive bonuses."""
        result = fuzzy_match("abc", "abc")
        assert result == MatchResult(matched=True, score=96, positions=(0, 1, 2))

    def test_scattered_match(self):
        result = fuzzy_match("abc", "axbxc")
        assert result == MatchResult(matched=True, score=62, positions=(0, 2, 4))

    def test_exact_beats_scattered(self):
        assert fuzzy_match("abc", "abc").score > fuzzy_match("abc", "axbxc").score

    def test_boundary_at_start_scores_higher(self):
        """Match starting at index 0 beats the same match mid-word."""
        at_start = fuzzy_match("fo", "foo")
        mid_word = fuzzy_match("fo", "xfoo")
        assert at_start.score == 47
        assert mid_word.score == 31
        assert at_start.score > mid_word.score

    def test_boundary_after_space(self):
        """A character following a space counts as a word start."""
        assert fuzzy_match("b", "a b").score == 32
        assert fuzzy_match("b", "axb").score == 16

    def test_case_insensitive(self):
        upper = fuzzy_match("AB", "xaybz")
        lower = fuzzy_match("ab", "xAYbz")
        assert upper.matched and lower.matched
        assert upper.score == lower.score

    def test_positions_index_original_candidate(self):
        """Positions refer to the unfolded candidate."""
        result = fuzzy_match("é", "CAFÉ")
        assert result == MatchResult(matched=True, score=16, positions=(3,))

    def test_multichar_fold_keeps_indices(self):
        """A character folding to two chars still occupies one index."""
        result = fuzzy_match("ß", "ẞx")
        assert result.matched
        assert result.positions == (0,)

    def test_later_duplicate_starts_new_match(self):
        """A later equal character restarts the match path."""
        result = fuzzy_match("fo", "foo")
        assert result.positions == (0, 2)

    def test_positions_come_from_left_on_mismatch(self):
        """Mismatch cells carry positions from the left neighbour."""
        result = fuzzy_match("ap", "apple pie")
        assert result.score == 57
        assert result.positions == (0, 6)

    def test_match_can_have_no_positions(self):
        """A positive score reached only through gap cells reports no positions."""
        result = fuzzy_match("readme", "main.go")
        assert result.matched
        assert result.score == 23
        assert result.positions == ()

    @pytest.mark.parametrize(
        "pattern,candidate",
        [
            ("ap", "banana split"),
            ("readme", "Readme.md"),
            ("abc", "a b c abc"),
            ("xy", "yx xy"),
        ],
    )
    def test_positions_ascending_and_in_range(self, pattern, candidate):
        result = fuzzy_match(pattern, candidate)
        assert list(result.positions) == sorted(result.positions)
        assert all(0 <= p < len(candidate) for p in result.positions)

    def test_matched_iff_positive_score(self):
        for candidate in ["apple pie", "banana split", "grape juice", "zzz"]:
            result = fuzzy_match("ap", candidate)
            assert result.matched == (result.score > 0)

    def test_does_not_mutate_candidate(self):
        candidate = "Readme.md"
        fuzzy_match("readme", candidate)
        assert candidate == "Readme.md"


class TestScoreConfig:
    """Scoring constants and the consecutive rule."""

    def test_defaults(self):
        config = ScoreConfig()
        assert config.match_bonus == 16
        assert config.boundary_bonus == 16
        assert config.consecutive_bonus == 16
        assert config.gap_start_penalty == -3
        assert config.gap_extend_penalty == -1
        assert config.non_contiguous_penalty == -5
        assert config.consecutive_rule is ConsecutiveRule.PREVIOUS_CHARS

    def test_non_contiguous_penalty_is_dormant(self):
        """Changing the reserved penalty never changes a score."""
        tuned = ScoreConfig(non_contiguous_penalty=-1000)
        for pattern, candidate in [("abc", "axbxc"), ("ap", "banana split"), ("readme", "Readme.md")]:
            assert fuzzy_match(pattern, candidate, tuned) == fuzzy_match(pattern, candidate)

    def test_custom_bonus(self):
        config = ScoreConfig(boundary_bonus=0)
        assert fuzzy_match("b", "a b", config).score == 16

    def test_adjacent_rule_same_for_true_runs(self):
        adjacent = ScoreConfig(consecutive_rule=ConsecutiveRule.ADJACENT_MATCH)
        assert fuzzy_match("fo", "foo", adjacent).score == 47
        assert fuzzy_match("abc", "abc", adjacent).score == 96

    @pytest.mark.parametrize(
        "pattern,candidate",
        [
            ("readme", "Readme.md"),
            ("ap", "apple pie"),
            ("aab", "abab aab"),
            ("ss", "mississippi"),
        ],
    )
    def test_adjacent_rule_never_scores_higher(self, pattern, candidate):
        """The adjacent rule awards a subset of the literal rule's bonuses."""
        adjacent = ScoreConfig(consecutive_rule=ConsecutiveRule.ADJACENT_MATCH)
        assert fuzzy_match(pattern, candidate, adjacent).score <= fuzzy_match(pattern, candidate).score


class TestRank:
    """Tests for ranking a candidate list."""

    def test_empty_query_is_identity(self, fruit_lines):
        assert rank("", fruit_lines) == fruit_lines

    def test_empty_query_returns_new_list(self, fruit_lines):
        result = rank("", fruit_lines)
        assert result is not fruit_lines

    def test_empty_query_items_unscored(self, fruit_lines):
        items = rank_items("", fruit_lines)
        assert [item.score for item in items] == [0, 0, 0]
        assert [item.index for item in items] == [0, 1, 2]

    def test_fruit_scenario(self, fruit_lines):
        """Boundary match first; gapped matches still qualify."""
        items = rank_items("ap", fruit_lines)
        assert [(item.text, item.score) for item in items] == [
            ("apple pie", 57),
            ("grape juice", 41),
            ("banana split", 27),
        ]

    def test_readme_scenario(self, readme_lines):
        """Case-insensitive, exact shorter candidate first."""
        items = rank_items("readme", readme_lines)
        assert [(item.text, item.score) for item in items] == [
            ("README", 192),
            ("Readme.md", 189),
            ("main.go", 23),
        ]

    def test_excludes_non_matches(self):
        assert rank("gr", ["apple pie", "banana split", "grape juice"]) == ["grape juice"]

    def test_ties_keep_original_order(self):
        assert rank("ab", ["xab", "yab"]) == ["xab", "yab"]
        assert rank("ab", ["yab", "xab"]) == ["yab", "xab"]

    def test_idempotent(self, readme_lines):
        snapshot = list(readme_lines)
        assert rank("rd", readme_lines) == rank("rd", readme_lines)
        assert readme_lines == snapshot

    def test_items_keep_original_index(self, readme_lines):
        items = rank_items("readme", readme_lines)
        assert {item.text: item.index for item in items} == {
            "Readme.md": 0,
            "main.go": 1,
            "README": 2,
        }

    def test_rank_matches_rank_items(self, fruit_lines):
        assert rank("ap", fruit_lines) == [item.text for item in rank_items("ap", fruit_lines)]

    def test_items_are_ranked_items(self, fruit_lines):
        item = rank_items("ap", fruit_lines)[0]
        assert item == RankedItem(text="apple pie", score=57, positions=(0, 6), index=0)

    def test_empty_candidate_list(self):
        assert rank("a", []) == []
        assert rank("", []) == []


class TestClampSelection:
    """Selection index clamping after a rank pass."""

    def test_empty_list_has_no_selection(self):
        assert clamp_selection(0, 0) is None
        assert clamp_selection(3, 0) is None

    def test_in_bounds_kept(self):
        assert clamp_selection(2, 5) == 2

    def test_out_of_bounds_reset_to_zero(self):
        assert clamp_selection(5, 5) == 0
        assert clamp_selection(10, 3) == 0

    def test_negative_reset_to_zero(self):
        assert clamp_selection(-1, 3) == 0
