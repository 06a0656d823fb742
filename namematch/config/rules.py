"""Token and name match rules for the name matching system."""

from abc import ABC, abstractmethod
from typing import Optional, Tuple
from dataclasses import dataclass

class TokenRule(ABC):
    """Base class for token-pair match rules."""

    @abstractmethod
    def applies_to(self, len_max: int) -> bool:
        """Whether the rule governs tokens whose longer member has this length."""
        pass

    @abstractmethod
    def allows(self, len_max: int, distance: int) -> bool:
        """
        Determine if two tokens match.

        Args:
            len_max: Length of the longer of the two tokens
            distance: Edit distance between the tokens

        Returns:
            bool: Whether the tokens plausibly spell the same word
        """
        pass

@dataclass(frozen=True)
class LengthBandRule(TokenRule):
    """Allow up to ``max_distance`` edits for tokens within a length band."""

    min_length: int
    max_length: Optional[int]
    max_distance: int

    def applies_to(self, len_max: int) -> bool:
        if len_max < self.min_length:
            return False
        return self.max_length is None or len_max <= self.max_length

    def allows(self, len_max: int, distance: int) -> bool:
        return self.applies_to(len_max) and distance <= self.max_distance

@dataclass(frozen=True)
class TokenMatchRules:
    """Ordered collection of length bands; the first applicable band decides."""

    bands: Tuple[TokenRule, ...]

    def allows(self, len_max: int, distance: int) -> bool:
        for band in self.bands:
            if band.applies_to(len_max):
                return band.allows(len_max, distance)
        return False

# Typo tolerance grows with word length
DEFAULT_TOKEN_RULES = TokenMatchRules(bands=(
    LengthBandRule(min_length=0, max_length=3, max_distance=0),
    LengthBandRule(min_length=4, max_length=4, max_distance=1),
    LengthBandRule(min_length=5, max_length=8, max_distance=2),
    LengthBandRule(min_length=9, max_length=None, max_distance=3),
))

@dataclass(frozen=True)
class NameMatchRule:
    """Overall decision for a pair of names from its token match counts."""

    n_match_crit: int = 2

    def is_match(self, k_x: int, k_y: int, n_match: int, comparable: bool = True) -> bool:
        """
        Determine if two names match.

        Names match when every token of the longer name is matched, or when
        at least ``n_match_crit`` aligned tokens match.

        Args:
            k_x: Token count of the first name
            k_y: Token count of the second name
            n_match: Number of aligned token pairs that match
            comparable: False when the names could not be aligned

        Returns:
            bool: Whether the names are considered the same
        """
        if not comparable:
            return False
        return n_match == max(k_x, k_y) or n_match >= self.n_match_crit
