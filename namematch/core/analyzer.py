"""Token frequency lookup and annotation of aligned token pairs."""

from numbers import Integral
from typing import Any, Callable, Dict, Iterator, Mapping, Optional, Sequence, Tuple, Union
import logging
import pandas as pd

from namematch.config.models import Alignment
from namematch.core.errors import VocabularyMismatchError

logger = logging.getLogger(__name__)

VocabularyInput = Union[
    'FrequencyTable',
    Mapping[str, int],
    Tuple[Sequence[str], Sequence[int]],
    pd.DataFrame
]


class FrequencyTable:
    """Read-only mapping from token text to its count in a reference corpus."""

    def __init__(self, counts: Mapping[str, int]):
        self._counts: Dict[str, int] = dict(counts)

    @classmethod
    def from_sequences(
        cls,
        keys: Sequence[str],
        values: Sequence[int],
        key_transform: Optional[Callable[[str], str]] = None
    ) -> 'FrequencyTable':
        """
        Build a table from parallel key and value sequences.

        Args:
            keys: Token texts
            values: Occurrence counts, one per key
            key_transform: Optional function applied to every key

        Returns:
            FrequencyTable: The validated table

        Raises:
            VocabularyMismatchError: If the sequences differ in length, keys
                repeat, or a count is not a non-negative integer
        """
        keys, values = list(keys), list(values)
        if len(keys) != len(values):
            raise VocabularyMismatchError(
                f"Vocabulary has {len(keys)} keys but {len(values)} values"
            )

        counts: Dict[str, int] = {}
        for key, value in zip(keys, values):
            token = key_transform(key) if key_transform else key
            if token in counts:
                raise VocabularyMismatchError(f"Duplicate vocabulary key: {key!r}")
            if isinstance(value, bool) or not isinstance(value, Integral) or value < 0:
                raise VocabularyMismatchError(
                    f"Frequency for {key!r} must be a non-negative integer, got {value!r}"
                )
            counts[token] = int(value)

        logger.debug(f"Built frequency table with {len(counts)} tokens")
        return cls(counts)

    @classmethod
    def from_frame(
        cls,
        df: pd.DataFrame,
        token_col: str = 'token_std',
        freq_col: str = 'freq',
        key_transform: Optional[Callable[[str], str]] = None
    ) -> 'FrequencyTable':
        """Build a table from a DataFrame of tokens and frequencies."""
        missing = [col for col in (token_col, freq_col) if col not in df.columns]
        if missing:
            raise VocabularyMismatchError(f"Vocabulary frame lacks columns: {missing}")

        return cls.from_sequences(
            df[token_col].astype(str).tolist(),
            df[freq_col].tolist(),
            key_transform
        )

    @classmethod
    def build(
        cls,
        vocabulary: VocabularyInput,
        key_transform: Optional[Callable[[str], str]] = None
    ) -> 'FrequencyTable':
        """Build a table from any supported vocabulary input."""
        if isinstance(vocabulary, FrequencyTable):
            if key_transform is None:
                return vocabulary
            return cls.from_sequences(
                list(vocabulary._counts), list(vocabulary._counts.values()), key_transform
            )
        if isinstance(vocabulary, pd.DataFrame):
            return cls.from_frame(vocabulary, key_transform=key_transform)
        if isinstance(vocabulary, Mapping):
            return cls.from_sequences(
                list(vocabulary.keys()), list(vocabulary.values()), key_transform
            )
        if isinstance(vocabulary, tuple) and len(vocabulary) == 2:
            keys, values = vocabulary
            return cls.from_sequences(keys, values, key_transform)

        raise VocabularyMismatchError(
            f"Unsupported vocabulary type: {type(vocabulary).__name__}"
        )

    def get(self, token: str) -> Optional[int]:
        return self._counts.get(token)

    def combined(self, token_x: str, token_y: str) -> Optional[int]:
        """Sum of both tokens' frequencies, or None if either is unknown."""
        freq_x = self._counts.get(token_x)
        freq_y = self._counts.get(token_y)
        if freq_x is None or freq_y is None:
            return None
        return freq_x + freq_y

    def __contains__(self, token: Any) -> bool:
        return token in self._counts

    def __len__(self) -> int:
        return len(self._counts)

    def __iter__(self) -> Iterator[str]:
        return iter(self._counts)


class FrequencyAnnotator:
    """Attaches combined token frequencies to the leading pairs of an alignment."""

    def __init__(self, table: FrequencyTable, slots: int = 3):
        self.table = table
        self.slots = slots

    def annotate(self, alignment: Alignment) -> Tuple[Optional[int], ...]:
        """
        Combined frequencies of the first aligned pairs.

        Args:
            alignment: Best alignment of a name pair

        Returns:
            Tuple[Optional[int], ...]: One value per slot; None where a token
                is missing from the table or there is no aligned pair
        """
        values = [
            self.table.combined(pair.token_x, pair.token_y)
            for pair in alignment.pairs[:self.slots]
        ]
        values.extend([None] * (self.slots - len(values)))
        return tuple(values)
