"""Main name matching system implementation."""

from typing import Any, Dict, List, Optional, Sequence, Tuple
from dataclasses import replace
from multiprocessing import Pool, cpu_count
from functools import partial
import logging
import time
import numpy as np
import pandas as pd

from namematch.core.preprocessor import NamePreprocessor, NameStandardizer
from namematch.core.distance import DistanceCalculator
from namematch.core.aligner import TokenAligner
from namematch.core.validator import TokenMatchValidator
from namematch.core.analyzer import FrequencyAnnotator, FrequencyTable, VocabularyInput
from namematch.core.errors import LengthMismatchError
from namematch.config.models import (
    AlignmentStatus,
    MatchConfig,
    MatchRecord,
    FAST_CONFIG,
    FULL_CONFIG
)

FREQUENCY_SLOTS = 3

INTEGER_COLUMNS = (
    'k_x', 'k_y', 'k_align', 'n_match', 'total_distance',
    'freq_1', 'freq_2', 'freq_3'
)


class NameMatcher:
    """
    Scores batches of name pairs by token alignment and edit distance.
    """

    def __init__(
        self,
        config: MatchConfig = FULL_CONFIG,
        worker_processes: int = 1,
        include_match_details: bool = False
    ):
        """
        Initialize the name matcher.

        Args:
            config: Tokenization, distance and rule configuration
            worker_processes: Number of worker processes (-1 for CPU count)
            include_match_details: Whether to keep the aligned token pairs
        """
        self.config = config
        self.worker_processes = worker_processes if worker_processes > 0 else cpu_count()
        self.include_match_details = include_match_details

        # Initialize components
        self.preprocessor = NamePreprocessor(
            strategy=config.strategy,
            min_length=config.min_token_length,
            standardizer=NameStandardizer() if config.standardize else None
        )
        self.aligner = TokenAligner(
            calculator=DistanceCalculator(config.dist_method, native=config.native_distance),
            max_permutation_tokens=config.max_permutation_tokens,
            oversize_policy=config.oversize_policy
        )
        self.validator = TokenMatchValidator(config.token_rules)

        self._initialize_logging()

    def _initialize_logging(self) -> None:
        """Setup logging configuration."""
        self.logger = logging.getLogger(__name__)
        if not self.logger.handlers:
            handler = logging.StreamHandler()
            handler.setFormatter(
                logging.Formatter(
                    '%(asctime)s - %(levelname)s - %(message)s'
                )
            )
            self.logger.addHandler(handler)
            self.logger.setLevel(logging.INFO)

    def build_frequency_table(self, vocabulary: VocabularyInput) -> FrequencyTable:
        """
        Build the frequency table shared by every pair of a batch.

        Keys go through the same standardization as the names.
        """
        key_transform = None
        if self.preprocessor.standardizer is not None:
            key_transform = self.preprocessor.standardizer.process
        return FrequencyTable.build(vocabulary, key_transform=key_transform)

    def match_pairs(
        self,
        names_x: Sequence[Any],
        names_y: Sequence[Any],
        vocabulary: Optional[VocabularyInput] = None
    ) -> List[MatchRecord]:
        """
        Compare two parallel sequences of names.

        Args:
            names_x: First names of each pair
            names_y: Second names of each pair
            vocabulary: Optional token frequencies

        Returns:
            List[MatchRecord]: One record per pair, in input order

        Raises:
            LengthMismatchError: If the name sequences differ in length
            VocabularyMismatchError: If the vocabulary is malformed
        """
        start_time = time.time()

        names_x, names_y = list(names_x), list(names_y)
        if len(names_x) != len(names_y):
            raise LengthMismatchError(
                f"names_x has {len(names_x)} entries but names_y has {len(names_y)}"
            )

        table = self.build_frequency_table(vocabulary) if vocabulary is not None else None
        pairs = list(zip(names_x, names_y))
        workers = min(self.worker_processes, len(pairs))

        if workers <= 1:
            records = self._process_chunk(pairs, table=table)
        else:
            # Contiguous chunks keep every record in its input slot
            chunks = [
                [pairs[i] for i in indices]
                for indices in np.array_split(np.arange(len(pairs)), workers)
            ]

            with Pool(processes=workers) as pool:
                results = pool.map(
                    partial(self._process_chunk, table=table),
                    chunks
                )

            records = [item for sublist in results for item in sublist]

        self.logger.info(
            f"Matched {len(records)} name pairs in {time.time() - start_time:.2f} seconds"
        )

        return records

    def _process_chunk(
        self,
        chunk: List[Tuple[Any, Any]],
        table: Optional[FrequencyTable]
    ) -> List[MatchRecord]:
        """Process a chunk of name pairs."""
        return [self.match_pair(name_x, name_y, table) for name_x, name_y in chunk]

    def match_pair(
        self,
        name_x: Any,
        name_y: Any,
        table: Optional[FrequencyTable] = None
    ) -> MatchRecord:
        """
        Compare a single pair of names.

        Args:
            name_x: First name
            name_y: Second name
            table: Optional frequency table

        Returns:
            MatchRecord: Token counts, matches, distance and frequencies
        """
        tokens_x = self.preprocessor.process(name_x)
        tokens_y = self.preprocessor.process(name_y)

        alignment = self.aligner.align(tokens_x, tokens_y)
        n_match = self.validator.count_matches(alignment)

        if table is not None:
            frequencies = FrequencyAnnotator(table, FREQUENCY_SLOTS).annotate(alignment)
        else:
            frequencies = (None,) * FREQUENCY_SLOTS

        return MatchRecord(
            k_x=len(tokens_x),
            k_y=len(tokens_y),
            k_align=min(len(tokens_x), len(tokens_y)),
            n_match=n_match,
            total_distance=alignment.total_distance,
            freq_1=frequencies[0],
            freq_2=frequencies[1],
            freq_3=frequencies[2],
            status=alignment.status,
            alignment=alignment.pairs if self.include_match_details else None
        )

    def is_match(self, record: MatchRecord) -> bool:
        """Overall match status of a record under the configured name rule."""
        return self.config.name_rule.is_match(
            record.k_x,
            record.k_y,
            record.n_match,
            comparable=record.status == AlignmentStatus.ALIGNED
        )

    def match_dataframe(
        self,
        df: pd.DataFrame,
        col_x: str,
        col_y: str,
        vocabulary: Optional[VocabularyInput] = None
    ) -> pd.DataFrame:
        """
        Compare the names held in two columns of a DataFrame.

        Args:
            df: DataFrame with one name pair per row
            col_x: Column holding the first names
            col_y: Column holding the second names
            vocabulary: Optional token frequencies

        Returns:
            pd.DataFrame: Copy of ``df`` with match columns appended
        """
        for col in (col_x, col_y):
            if col not in df.columns:
                raise ValueError(f"Column {col} not found in dataframe")

        records = self.match_pairs(df[col_x].tolist(), df[col_y].tolist(), vocabulary)

        result_df = records_to_frame(
            records,
            include_match_details=self.include_match_details
        )
        result_df.insert(0, 'is_match', [self.is_match(r) for r in records])
        result_df.index = df.index

        return pd.concat([df.copy(), result_df], axis=1)


def records_to_frame(
    records: List[MatchRecord],
    fields: Tuple[str, ...] = MatchRecord.FREQUENCY_FIELDS + ('status',),
    include_match_details: bool = False
) -> pd.DataFrame:
    """
    Tabulate match records.

    Integer columns use the nullable ``Int64`` dtype so that incomparable
    distances and missing frequencies show as ``<NA>`` rather than a number.
    """
    result_df = pd.DataFrame(
        [record.to_dict(fields) for record in records],
        columns=list(fields)
    )

    for col in INTEGER_COLUMNS:
        if col in result_df.columns:
            result_df[col] = result_df[col].astype('Int64')

    if 'status' in result_df.columns:
        result_df['status'] = [AlignmentStatus(s).value for s in result_df['status']]

    if include_match_details:
        result_df['alignment'] = pd.Series(
            [
                [pair.as_tuple() for pair in record.alignment or ()]
                for record in records
            ],
            index=result_df.index,
            dtype=object
        )

    return result_df


def match(
    names_x: Sequence[Any],
    names_y: Sequence[Any],
    min_token_length: int = 2,
    config: MatchConfig = FAST_CONFIG,
    worker_processes: int = 1
) -> List[Dict[str, Optional[int]]]:
    """
    Token counts and minimum total edit distance for each name pair.

    Args:
        names_x: First names of each pair
        names_y: Second names of each pair
        min_token_length: Tokens shorter than this are ignored
        config: Base configuration (alphabetic tokens, Levenshtein distance)
        worker_processes: Number of worker processes (-1 for CPU count)

    Returns:
        List[Dict]: ``k_x``, ``k_y``, ``k_align`` and ``total_distance`` per
            pair; ``total_distance`` is None when a name has no tokens
    """
    matcher = NameMatcher(
        replace(config, min_token_length=min_token_length),
        worker_processes=worker_processes
    )
    return [
        record.to_dict(MatchRecord.BASE_FIELDS)
        for record in matcher.match_pairs(names_x, names_y)
    ]


def match_with_frequency(
    names_x: Sequence[Any],
    names_y: Sequence[Any],
    min_token_length: int = 2,
    vocabulary: Optional[VocabularyInput] = None,
    config: MatchConfig = FULL_CONFIG,
    worker_processes: int = 1
) -> List[Dict[str, Optional[int]]]:
    """
    Full match details for each name pair, with token frequencies.

    Args:
        names_x: First names of each pair
        names_y: Second names of each pair
        min_token_length: Tokens shorter than this are ignored
        vocabulary: Optional token frequencies
        config: Base configuration (delimiter tokens, OSA distance)
        worker_processes: Number of worker processes (-1 for CPU count)

    Returns:
        List[Dict]: ``k_x``, ``k_y``, ``k_align``, ``n_match``,
            ``total_distance`` and ``freq_1`` to ``freq_3`` per pair; None
            marks an incomparable distance or a missing frequency
    """
    matcher = NameMatcher(
        replace(config, min_token_length=min_token_length),
        worker_processes=worker_processes
    )
    return [
        record.to_dict(MatchRecord.FREQUENCY_FIELDS)
        for record in matcher.match_pairs(names_x, names_y, vocabulary)
    ]


def match_names(
    names_x: Sequence[Any],
    names_y: Sequence[Any],
    min_token_length: int = 2,
    config: MatchConfig = FULL_CONFIG,
    worker_processes: int = 1
) -> List[bool]:
    """Overall match status for each name pair."""
    matcher = NameMatcher(
        replace(config, min_token_length=min_token_length),
        worker_processes=worker_processes
    )
    return [matcher.is_match(record) for record in matcher.match_pairs(names_x, names_y)]
