"""
Tests for token and name match classification.
"""

import pytest

from namematch.config.models import AlignedPair, Alignment, AlignmentStatus
from namematch.config.rules import (
    DEFAULT_TOKEN_RULES,
    LengthBandRule,
    NameMatchRule,
    TokenMatchRules,
)
from namematch.core.validator import TokenMatchValidator, classify


class TestClassify:
    """Test the length-scaled token match thresholds."""

    @pytest.mark.parametrize(
        "len_x,len_y,distance,expected",
        [
            (3, 3, 0, True),
            (3, 2, 1, False),
            (2, 1, 0, True),
            (4, 3, 1, True),
            (4, 4, 2, False),
            (6, 5, 2, True),
            (6, 6, 3, False),
            (8, 8, 2, True),
            (8, 8, 3, False),
            (9, 8, 3, True),
            (10, 10, 3, True),
            (10, 10, 4, False),
        ],
    )
    def test_bands(self, len_x, len_y, distance, expected):
        assert classify(len_x, len_y, distance) is expected

    def test_longer_token_decides(self):
        assert classify(3, 6, 2) is True
        assert classify(6, 3, 2) is True

    def test_custom_rules(self):
        """Test a validator with a single permissive band."""
        validator = TokenMatchValidator(
            TokenMatchRules(bands=(LengthBandRule(min_length=0, max_length=None, max_distance=3),))
        )
        assert validator.classify(2, 2, 3) is True
        assert validator.classify(2, 2, 4) is False

    def test_no_applicable_band(self):
        rules = TokenMatchRules(bands=(LengthBandRule(min_length=5, max_length=None, max_distance=1),))
        assert rules.allows(3, 0) is False
        assert DEFAULT_TOKEN_RULES.allows(3, 0) is True

    def test_count_matches(self):
        alignment = Alignment(
            status=AlignmentStatus.ALIGNED,
            total_distance=4,
            pairs=(
                AlignedPair("CHARLES", "CHARLES", 0),
                AlignedPair("ABE", "ABA", 1),
                AlignedPair("SMITH", "SMYTHE", 2),
                AlignedPair("JOHN", "JOHN", 0),
            ),
        )
        assert TokenMatchValidator().count_matches(alignment) == 3

    def test_count_matches_incomparable(self):
        alignment = Alignment(status=AlignmentStatus.INCOMPARABLE)
        assert TokenMatchValidator().count_matches(alignment) == 0


class TestNameMatchRule:
    """Test the overall name match decision."""

    def test_all_tokens_matched(self):
        assert NameMatchRule().is_match(1, 1, 1) is True
        assert NameMatchRule().is_match(3, 3, 3) is True

    def test_match_count_criterion(self):
        assert NameMatchRule().is_match(3, 2, 2) is True
        assert NameMatchRule().is_match(3, 1, 1) is False
        assert NameMatchRule(n_match_crit=3).is_match(4, 3, 2) is False

    def test_incomparable_never_matches(self):
        assert NameMatchRule().is_match(0, 2, 0, comparable=False) is False
        assert NameMatchRule().is_match(0, 0, 0, comparable=False) is False
