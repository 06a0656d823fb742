"""
Tests for the token frequency table and annotator.
"""

import pandas as pd
import pytest

from namematch.config.models import AlignedPair, Alignment, AlignmentStatus
from namematch.core.analyzer import FrequencyAnnotator, FrequencyTable
from namematch.core.errors import VocabularyMismatchError


class TestFrequencyTable:
    """Test construction and lookup of token frequencies."""

    def test_combined_frequency(self):
        table = FrequencyTable.build({"john": 5, "jon": 2})
        assert table.combined("john", "jon") == 7

    def test_missing_is_not_zero(self):
        table = FrequencyTable.build({"john": 5, "jon": 0})
        assert table.combined("john", "jon") == 5
        assert table.combined("john", "jonathan") is None
        assert table.get("jonathan") is None

    def test_parallel_sequences(self):
        table = FrequencyTable.build((["charles", "smith"], [100, 50]))
        assert len(table) == 2
        assert "smith" in table
        assert sorted(table) == ["charles", "smith"]

    def test_unequal_lengths(self):
        with pytest.raises(VocabularyMismatchError):
            FrequencyTable.from_sequences(["charles", "smith"], [100])

    def test_duplicate_keys(self):
        with pytest.raises(VocabularyMismatchError):
            FrequencyTable.from_sequences(["smith", "smith"], [1, 2])

    def test_key_transform_collision(self):
        with pytest.raises(VocabularyMismatchError):
            FrequencyTable.build({"smith": 1, "SMITH": 2}, key_transform=str.upper)

    @pytest.mark.parametrize("value", [-1, 2.5, "3", True, None])
    def test_invalid_counts(self, value):
        with pytest.raises(VocabularyMismatchError):
            FrequencyTable.from_sequences(["smith"], [value])

    def test_from_frame(self):
        df = pd.DataFrame({"token_std": ["CHARLES", "SMITH"], "freq": [100, 50]})
        table = FrequencyTable.build(df)
        assert table.get("CHARLES") == 100
        assert table.combined("SMITH", "CHARLES") == 150

    def test_from_frame_missing_columns(self):
        with pytest.raises(VocabularyMismatchError):
            FrequencyTable.from_frame(pd.DataFrame({"token": ["a"], "freq": [1]}))

    def test_unsupported_input(self):
        with pytest.raises(VocabularyMismatchError):
            FrequencyTable.build(["john", "jon"])

    def test_existing_table_reused(self):
        table = FrequencyTable({"john": 5})
        assert FrequencyTable.build(table) is table
        assert FrequencyTable.build(table, key_transform=str.upper).get("JOHN") == 5


class TestFrequencyAnnotator:
    """Test frequency slots attached to an alignment."""

    def _alignment(self, *pairs):
        return Alignment(
            status=AlignmentStatus.ALIGNED,
            total_distance=sum(p[2] for p in pairs),
            pairs=tuple(AlignedPair(*p) for p in pairs),
        )

    def test_slots_in_alignment_order(self):
        table = FrequencyTable({"CHARLES": 100, "SMITH": 50, "SMYTH": 20})
        alignment = self._alignment(
            ("CHARLES", "CHARLES", 0),
            ("ABE", "ABE", 0),
            ("SMITH", "SMYTH", 1),
        )
        assert FrequencyAnnotator(table).annotate(alignment) == (200, None, 70)

    def test_padding(self):
        table = FrequencyTable({"john": 5, "jon": 2})
        alignment = self._alignment(("john", "jon", 1))
        assert FrequencyAnnotator(table).annotate(alignment) == (7, None, None)

    def test_only_first_slots(self):
        table = FrequencyTable({"aa": 1, "bb": 2, "cc": 3, "dd": 4})
        alignment = self._alignment(("aa", "aa", 0), ("bb", "bb", 0), ("cc", "cc", 0), ("dd", "dd", 0))
        assert FrequencyAnnotator(table).annotate(alignment) == (2, 4, 6)

    def test_incomparable(self):
        table = FrequencyTable({"john": 5})
        alignment = Alignment(status=AlignmentStatus.INCOMPARABLE)
        assert FrequencyAnnotator(table).annotate(alignment) == (None, None, None)
