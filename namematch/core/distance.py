"""Character-level edit distances between name tokens."""

from typing import Callable, Dict, Tuple
from functools import lru_cache
import Levenshtein
from rapidfuzz.distance import OSA

from namematch.config.models import DistanceMethod


def levenshtein_distance(s1: str, s2: str) -> int:
    """
    Levenshtein distance using two rolling rows.

    Args:
        s1: First string
        s2: Second string

    Returns:
        int: Minimum number of single-character insertions, deletions and
            substitutions turning one string into the other
    """
    # Rows run over the shorter string
    if len(s1) < len(s2):
        s1, s2 = s2, s1

    m, n = len(s1), len(s2)
    if n == 0:
        return m

    prev_row = list(range(n + 1))
    curr_row = [0] * (n + 1)

    for i in range(1, m + 1):
        curr_row[0] = i
        c1 = s1[i - 1]

        for j in range(1, n + 1):
            if c1 == s2[j - 1]:
                curr_row[j] = prev_row[j - 1]
            else:
                curr_row[j] = 1 + min(prev_row[j], curr_row[j - 1], prev_row[j - 1])

        prev_row, curr_row = curr_row, prev_row

    return prev_row[n]


def osa_distance(s1: str, s2: str) -> int:
    """
    Optimal string alignment distance using three rolling rows.

    Levenshtein distance plus transposition of two adjacent characters. Only
    the cell two rows back is consulted for a transposition, so no substring
    is edited more than once (restricted Damerau-Levenshtein).

    Args:
        s1: First string
        s2: Second string

    Returns:
        int: OSA distance between the strings
    """
    if len(s1) < len(s2):
        s1, s2 = s2, s1

    m, n = len(s1), len(s2)
    if n == 0:
        return m

    prev2_row = [0] * (n + 1)
    prev_row = list(range(n + 1))
    curr_row = [0] * (n + 1)

    for i in range(1, m + 1):
        curr_row[0] = i
        c1 = s1[i - 1]

        for j in range(1, n + 1):
            c2 = s2[j - 1]
            cost = 0 if c1 == c2 else 1
            best = min(
                prev_row[j] + 1,
                curr_row[j - 1] + 1,
                prev_row[j - 1] + cost
            )
            if i > 1 and j > 1 and c1 == s2[j - 2] and s1[i - 2] == c2:
                best = min(best, prev2_row[j - 2] + 1)
            curr_row[j] = best

        prev2_row, prev_row, curr_row = prev_row, curr_row, prev2_row

    return prev_row[n]


_PURE_METHODS: Dict[DistanceMethod, Callable[[str, str], int]] = {
    DistanceMethod.LEVENSHTEIN: levenshtein_distance,
    DistanceMethod.OSA: osa_distance,
}

_NATIVE_METHODS: Dict[DistanceMethod, Callable[[str, str], int]] = {
    DistanceMethod.LEVENSHTEIN: Levenshtein.distance,
    DistanceMethod.OSA: OSA.distance,
}


class DistanceCalculator:
    """Computes a configured edit distance between token pairs with caching."""

    def __init__(
        self,
        method: DistanceMethod = DistanceMethod.LEVENSHTEIN,
        native: bool = True,
        cache_size: int = 10000
    ):
        """
        Initialize the calculator.

        Args:
            method: Edit distance metric
            native: Use the compiled implementation of the metric
            cache_size: Number of token pairs to memoize
        """
        try:
            self.method = DistanceMethod(method)
        except ValueError:
            raise ValueError(f"Unknown distance method: {method}") from None

        self.native = native
        self.cache_size = cache_size
        methods = _NATIVE_METHODS if native else _PURE_METHODS
        self._distance = lru_cache(maxsize=cache_size)(methods[self.method])

    def __call__(self, s1: str, s2: str) -> int:
        return int(self._distance(s1, s2))

    def __getstate__(self) -> Dict[str, object]:
        # The memoized function does not pickle
        return {
            'method': self.method,
            'native': self.native,
            'cache_size': self.cache_size
        }

    def __setstate__(self, state: Dict[str, object]) -> None:
        self.__init__(state['method'], state['native'], state['cache_size'])

    def cache_info(self) -> Tuple[int, int, int, int]:
        return self._distance.cache_info()
