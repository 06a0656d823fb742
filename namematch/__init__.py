"""
Name Matcher
============

Fuzzy comparison of personal and entity names for record linkage and
deduplication across datasets with inconsistent spelling, token order or
formatting.

Key Features:
- Tokenization on delimiters or alphabetic runs with a minimum token length
- Levenshtein and optimal string alignment edit distances
- Lowest-cost token alignment with an assignment-solver fallback for long names
- Length-scaled token match classification
- Token frequency annotation of aligned pairs
- Parallel batch processing and pandas output
"""

from namematch.core.matcher import (
    NameMatcher,
    match,
    match_with_frequency,
    match_names,
    records_to_frame
)
from namematch.core.preprocessor import tokenize, name_standardize
from namematch.core.distance import DistanceCalculator, levenshtein_distance, osa_distance
from namematch.core.validator import classify
from namematch.core.analyzer import FrequencyTable
from namematch.core.errors import (
    NameMatchError,
    LengthMismatchError,
    VocabularyMismatchError
)

from namematch.config.models import (
    MatchConfig,
    MatchRecord,
    TokenizeStrategy,
    DistanceMethod,
    OversizePolicy,
    AlignmentStatus,
    FAST_CONFIG,
    FULL_CONFIG
)
from namematch.config.rules import NameMatchRule, TokenMatchRules, LengthBandRule

__version__ = "1.0.0"
