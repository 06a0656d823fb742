"""Minimum-cost alignment of the tokens of two names."""

from typing import List, Optional, Sequence, Tuple
from itertools import permutations
import logging
import numpy as np
from scipy.optimize import linear_sum_assignment

from namematch.config.models import (
    AlignedPair,
    Alignment,
    AlignmentStatus,
    OversizePolicy,
    TokenSequence
)
from namematch.core.distance import DistanceCalculator

logger = logging.getLogger(__name__)


class _CostMatrix:
    """Distances between shorter-name rows and longer-name columns, computed on demand."""

    def __init__(self, rows: Sequence[str], columns: Sequence[str], calculator: DistanceCalculator):
        self.rows = rows
        self.columns = columns
        self.calculator = calculator
        self._values: List[List[Optional[int]]] = [[None] * len(columns) for _ in rows]

    def get(self, row: int, column: int) -> int:
        value = self._values[row][column]
        if value is None:
            value = self.calculator(self.rows[row], self.columns[column])
            self._values[row][column] = value
        return value

    def to_array(self) -> np.ndarray:
        return np.array([
            [self.get(row, column) for column in range(len(self.columns))]
            for row in range(len(self.rows))
        ], dtype=np.int64)


class TokenAligner:
    """
    Finds the lowest total edit distance pairing of two token sequences.

    Each token of the shorter sequence is paired with a distinct token of
    the longer one; surplus tokens of the longer sequence are left out.
    """

    def __init__(
        self,
        calculator: DistanceCalculator,
        max_permutation_tokens: int = 8,
        oversize_policy: OversizePolicy = OversizePolicy.ASSIGNMENT
    ):
        """
        Initialize the aligner.

        Args:
            calculator: Edit distance used to score token pairs
            max_permutation_tokens: Longest sequence searched exhaustively
            oversize_policy: Handling of sequences above that limit
        """
        self.calculator = calculator
        self.max_permutation_tokens = max_permutation_tokens
        self.oversize_policy = OversizePolicy(oversize_policy)

    def align(self, tokens_x: TokenSequence, tokens_y: TokenSequence) -> Alignment:
        """
        Align two token sequences.

        Args:
            tokens_x: Tokens of the first name
            tokens_y: Tokens of the second name

        Returns:
            Alignment: Best alignment, or an incomparable/rejected marker
        """
        if not len(tokens_x) or not len(tokens_y):
            return Alignment(status=AlignmentStatus.INCOMPARABLE)

        x_is_longer = len(tokens_x) > len(tokens_y)
        shorter, longer = (tokens_y, tokens_x) if x_is_longer else (tokens_x, tokens_y)
        costs = _CostMatrix(shorter.texts, longer.texts, self.calculator)

        if len(longer) > self.max_permutation_tokens:
            if self.oversize_policy == OversizePolicy.REJECT:
                logger.warning(
                    f"Rejecting pair with {len(longer)} tokens "
                    f"(limit {self.max_permutation_tokens})"
                )
                return Alignment(status=AlignmentStatus.TOO_MANY_TOKENS)

            logger.debug(
                f"{len(longer)} tokens exceed permutation limit, "
                f"solving as an assignment problem"
            )
            columns, total = self._assignment_search(costs)
        else:
            columns, total = self._permutation_search(costs, len(shorter), len(longer))

        pairs = []
        for row, column in enumerate(columns):
            short_text, long_text = shorter[row].text, longer[column].text
            distance = costs.get(row, column)
            if x_is_longer:
                pairs.append(AlignedPair(long_text, short_text, distance))
            else:
                pairs.append(AlignedPair(short_text, long_text, distance))

        return Alignment(
            status=AlignmentStatus.ALIGNED,
            total_distance=total,
            pairs=tuple(pairs)
        )

    @staticmethod
    def _permutation_search(costs: _CostMatrix, m: int, n: int) -> Tuple[Tuple[int, ...], int]:
        """
        Exhaustive branch-and-bound search over column orderings.

        Orderings are visited lexicographically. Only the first ``m``
        columns of an ordering are scored, so orderings sharing that prefix
        are visited once. The first ordering reaching the minimum wins ties.
        """
        best_total: Optional[int] = None
        best_columns: Tuple[int, ...] = ()

        for columns in permutations(range(n), m):
            total = 0
            for row, column in enumerate(columns):
                total += costs.get(row, column)
                if best_total is not None and total >= best_total:
                    break
            else:
                best_total, best_columns = total, columns
                if total == 0:
                    break

        return best_columns, best_total

    @staticmethod
    def _assignment_search(costs: _CostMatrix) -> Tuple[Tuple[int, ...], int]:
        """Polynomial-time minimum-cost assignment for long names."""
        matrix = costs.to_array()
        rows, columns = linear_sum_assignment(matrix)
        return tuple(int(c) for c in columns), int(matrix[rows, columns].sum())
