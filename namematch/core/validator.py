"""Token pair match classification."""

from namematch.config.models import Alignment
from namematch.config.rules import TokenMatchRules, DEFAULT_TOKEN_RULES


class TokenMatchValidator:
    """Decides whether aligned tokens plausibly spell the same word."""

    def __init__(self, rules: TokenMatchRules = DEFAULT_TOKEN_RULES):
        self.rules = rules

    def classify(self, len_x: int, len_y: int, distance: int) -> bool:
        """
        Classify a token pair from its lengths and edit distance.

        Longer tokens tolerate more edits: none up to 3 characters, one at
        4, two from 5 to 8 and three from 9 characters.

        Args:
            len_x: Length of the first token
            len_y: Length of the second token
            distance: Edit distance between the tokens

        Returns:
            bool: Whether the tokens match
        """
        return self.rules.allows(max(len_x, len_y), distance)

    def count_matches(self, alignment: Alignment) -> int:
        """Number of aligned pairs classified as matching."""
        return sum(
            1 for pair in alignment.pairs
            if self.classify(len(pair.token_x), len(pair.token_y), pair.distance)
        )


_default_validator = TokenMatchValidator()


def classify(len_x: int, len_y: int, distance: int) -> bool:
    """Classify a token pair with the default length bands."""
    return _default_validator.classify(len_x, len_y, distance)
