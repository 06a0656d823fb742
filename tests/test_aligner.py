"""
Tests for the token aligner.
"""

from namematch.config.models import AlignedPair, AlignmentStatus, OversizePolicy, TokenSequence
from namematch.core.aligner import TokenAligner
from namematch.core.distance import DistanceCalculator, levenshtein_distance


class CountingCalculator:
    """Levenshtein distance that records how often it is computed."""

    def __init__(self):
        self.calls = 0

    def __call__(self, s1, s2):
        self.calls += 1
        return levenshtein_distance(s1, s2)


def _tokens(*texts):
    return TokenSequence.from_texts(list(texts))


def _aligner(**kwargs):
    return TokenAligner(DistanceCalculator("levenshtein"), **kwargs)


class TestTokenAligner:
    """Test exhaustive alignment search."""

    def test_order_insensitive(self):
        """Test swapped tokens align at zero cost."""
        alignment = _aligner().align(_tokens("a", "b"), _tokens("b", "a"))
        assert alignment.status == AlignmentStatus.ALIGNED
        assert alignment.total_distance == 0
        assert alignment.pairs == (AlignedPair("a", "a", 0), AlignedPair("b", "b", 0))

    def test_surplus_tokens_ignored(self):
        """Test extra tokens of the longer name are left out."""
        alignment = _aligner().align(
            _tokens("ANGELA", "DOROTHEA", "MERKEL"),
            _tokens("MERKEL", "ANGELA")
        )
        assert alignment.total_distance == 0
        assert [pair.as_tuple() for pair in alignment.pairs] == [
            ("MERKEL", "MERKEL", 0),
            ("ANGELA", "ANGELA", 0),
        ]

    def test_pairs_keep_name_sides(self):
        """Test pairs list the first name's token first when it is the shorter."""
        alignment = _aligner().align(_tokens("smyth"), _tokens("jones", "smith"))
        assert alignment.pairs == (AlignedPair("smyth", "smith", 1),)
        assert alignment.total_distance == 1

    def test_first_minimum_wins_ties(self):
        alignment = _aligner().align(_tokens("ab"), _tokens("ac", "ad"))
        assert alignment.pairs == (AlignedPair("ab", "ac", 1),)

    def test_total_is_sum_of_pairs(self):
        alignment = _aligner().align(
            _tokens("jon", "smyth", "alex"),
            _tokens("smith", "john", "alexander", "jr")
        )
        assert alignment.total_distance == sum(pair.distance for pair in alignment.pairs)
        assert len(alignment.pairs) == 3

    def test_empty_sequence_incomparable(self):
        """Test empty token sequences are reported without a distance."""
        for tokens_x, tokens_y in [(_tokens(), _tokens("john")), (_tokens("john"), _tokens()), (_tokens(), _tokens())]:
            alignment = _aligner().align(tokens_x, tokens_y)
            assert alignment.status == AlignmentStatus.INCOMPARABLE
            assert alignment.total_distance is None
            assert alignment.pairs == ()
            assert not alignment.is_comparable

    def test_stops_at_zero(self):
        """Test an exact alignment ends the search before other distances are computed."""
        calculator = CountingCalculator()
        alignment = TokenAligner(calculator).align(
            _tokens("aa", "bb", "cc"),
            _tokens("aa", "bb", "cc")
        )
        assert alignment.total_distance == 0
        assert calculator.calls == 3

    def test_prunes_partial_sums(self):
        """Test candidates are abandoned once they reach the best total."""
        calculator = CountingCalculator()
        TokenAligner(calculator).align(_tokens("aaaa", "bbbb"), _tokens("aaaa", "bbbc"))
        # (0, 1) scores both pairs, (1, 0) stops after its first pair
        assert calculator.calls == 3


class TestOversizeNames:
    """Test names with more tokens than the exhaustive search allows."""

    def test_assignment_fallback(self):
        alignment = _aligner(max_permutation_tokens=2).align(
            _tokens("aa", "bb", "cc"),
            _tokens("cc", "aa", "bb")
        )
        assert alignment.status == AlignmentStatus.ALIGNED
        assert alignment.total_distance == 0
        assert [pair.token_y for pair in alignment.pairs] == ["aa", "bb", "cc"]

    def test_assignment_matches_exhaustive_total(self):
        tokens_x = _tokens("jon", "smyth", "alex")
        tokens_y = _tokens("smith", "john", "alexander", "jr")
        exhaustive = _aligner().align(tokens_x, tokens_y)
        assignment = _aligner(max_permutation_tokens=1).align(tokens_x, tokens_y)
        assert assignment.total_distance == exhaustive.total_distance

    def test_assignment_when_first_name_longer(self):
        alignment = _aligner(max_permutation_tokens=1).align(
            _tokens("maria", "de", "la", "cruz"),
            _tokens("cruz", "mario")
        )
        assert [pair.as_tuple() for pair in alignment.pairs] == [
            ("cruz", "cruz", 0),
            ("maria", "mario", 1),
        ]
        assert alignment.total_distance == 1

    def test_reject_policy(self):
        alignment = _aligner(
            max_permutation_tokens=2,
            oversize_policy=OversizePolicy.REJECT
        ).align(_tokens("aa", "bb", "cc"), _tokens("aa"))
        assert alignment.status == AlignmentStatus.TOO_MANY_TOKENS
        assert alignment.total_distance is None
        assert alignment.pairs == ()
