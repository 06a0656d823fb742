"""Configuration models for the name matching system."""

from dataclasses import dataclass, field, asdict
from typing import Any, Dict, Iterator, List, Optional, Tuple
from enum import Enum

from namematch.config.rules import NameMatchRule, TokenMatchRules, DEFAULT_TOKEN_RULES

class TokenizeStrategy(str, Enum):
    """Rules for splitting a name into tokens."""
    DELIMITER = "delimiter"
    ALPHA_RUN = "alpha"

class DistanceMethod(str, Enum):
    """Character-level edit distance metrics."""
    LEVENSHTEIN = "levenshtein"
    OSA = "osa"

class OversizePolicy(str, Enum):
    """What to do when a name has too many tokens for exhaustive search."""
    ASSIGNMENT = "assignment"
    REJECT = "reject"

class AlignmentStatus(str, Enum):
    """Outcome of aligning the tokens of two names."""
    ALIGNED = "aligned"
    INCOMPARABLE = "incomparable"
    TOO_MANY_TOKENS = "too_many_tokens"

@dataclass(frozen=True)
class MatchConfig:
    """Configuration for tokenizing, aligning and scoring name pairs."""
    min_token_length: int = 2
    strategy: TokenizeStrategy = TokenizeStrategy.ALPHA_RUN
    dist_method: DistanceMethod = DistanceMethod.LEVENSHTEIN
    standardize: bool = False
    native_distance: bool = True
    max_permutation_tokens: int = 8  # 8! candidates at most
    oversize_policy: OversizePolicy = OversizePolicy.ASSIGNMENT
    token_rules: TokenMatchRules = DEFAULT_TOKEN_RULES
    name_rule: NameMatchRule = field(default_factory=NameMatchRule)

    def __post_init__(self):
        """Coerce enum fields and validate bounds."""
        object.__setattr__(self, 'strategy', TokenizeStrategy(self.strategy))
        object.__setattr__(self, 'dist_method', DistanceMethod(self.dist_method))
        object.__setattr__(self, 'oversize_policy', OversizePolicy(self.oversize_policy))

        if self.min_token_length < 1:
            raise ValueError("min_token_length must be at least 1")
        if self.max_permutation_tokens < 1:
            raise ValueError("max_permutation_tokens must be at least 1")

# Alphabetic runs scored with Levenshtein distance
FAST_CONFIG = MatchConfig()

# Delimiter tokens scored with optimal string alignment distance
FULL_CONFIG = MatchConfig(
    strategy=TokenizeStrategy.DELIMITER,
    dist_method=DistanceMethod.OSA
)

@dataclass(frozen=True)
class Token:
    """A contiguous run of characters taken from a name."""
    text: str

    @property
    def length(self) -> int:
        return len(self.text)

@dataclass(frozen=True)
class TokenSequence:
    """Tokens of one name, in their original left-to-right order."""
    tokens: Tuple[Token, ...] = ()

    @classmethod
    def from_texts(cls, texts: List[str]) -> 'TokenSequence':
        return cls(tuple(Token(text) for text in texts))

    @property
    def texts(self) -> List[str]:
        return [token.text for token in self.tokens]

    def __len__(self) -> int:
        return len(self.tokens)

    def __iter__(self) -> Iterator[Token]:
        return iter(self.tokens)

    def __getitem__(self, index: int) -> Token:
        return self.tokens[index]

@dataclass(frozen=True)
class AlignedPair:
    """One token of each name placed in correspondence by an alignment."""
    token_x: str
    token_y: str
    distance: int

    def as_tuple(self) -> Tuple[str, str, int]:
        return (self.token_x, self.token_y, self.distance)

@dataclass(frozen=True)
class Alignment:
    """Best token correspondence found between two names."""
    status: AlignmentStatus
    total_distance: Optional[int] = None
    pairs: Tuple[AlignedPair, ...] = ()

    @property
    def is_comparable(self) -> bool:
        return self.status == AlignmentStatus.ALIGNED

@dataclass
class MatchRecord:
    """Result of comparing one pair of names."""
    k_x: int
    k_y: int
    k_align: int
    n_match: int
    total_distance: Optional[int]
    freq_1: Optional[int] = None
    freq_2: Optional[int] = None
    freq_3: Optional[int] = None
    status: AlignmentStatus = AlignmentStatus.ALIGNED
    alignment: Optional[Tuple[AlignedPair, ...]] = None

    BASE_FIELDS = ('k_x', 'k_y', 'k_align', 'total_distance')
    FREQUENCY_FIELDS = (
        'k_x', 'k_y', 'k_align', 'n_match', 'total_distance',
        'freq_1', 'freq_2', 'freq_3'
    )

    def to_dict(self, fields: Optional[Tuple[str, ...]] = None) -> Dict[str, Any]:
        """Plain mapping of the requested output fields (all by default)."""
        data = asdict(self)
        if fields is None:
            fields = self.FREQUENCY_FIELDS + ('status',)
        return {name: data[name] for name in fields}
