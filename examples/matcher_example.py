"""Example usage of the name matching system with CSV files."""

import pandas as pd
import logging
from pathlib import Path
from typing import Optional

from namematch.config.models import (
    MatchConfig,
    TokenizeStrategy,
    DistanceMethod,
    OversizePolicy
)
from namematch.config.rules import NameMatchRule
from namematch.core import matcher


EXAMPLE_NAMES = pd.DataFrame({
    'name_source1': [
        "Angela Dorothea Merkel",
        "Emmanuel Jean-Michel Frédéric Macron",
        "Mette Frederiksen",
        "Katrin Jakobsdóttir",
        "Pedro Sánchez Pérez-Castejón",
        "Aubrey Drake Graham",
    ],
    'name_source2': [
        "MERKEL, Angela",
        "MACRON, Emmanuel J.-M. F.",
        "FREDERICKSON, Mette",
        "JAKOBSDOTTIR  Kathríne",
        "PEREZ-CASTLEJON, Pedro",
        "Drake",
    ],
})


def create_name_matcher(
    worker_processes: int = 1,
    include_match_details: bool = False
) -> matcher.NameMatcher:
    """
    Create a matcher configured for personal names from two registries.

    Args:
        worker_processes: Number of worker processes (-1 for CPU count)
        include_match_details: Whether to include the aligned token pairs

    Returns:
        NameMatcher: Configured matcher instance
    """
    config = MatchConfig(
        min_token_length=2,
        strategy=TokenizeStrategy.DELIMITER,
        dist_method=DistanceMethod.OSA,
        standardize=True,
        max_permutation_tokens=7,
        oversize_policy=OversizePolicy.ASSIGNMENT,
        name_rule=NameMatchRule(n_match_crit=2)
    )

    return matcher.NameMatcher(
        config,
        worker_processes=worker_processes,
        include_match_details=include_match_details
    )


def match_csv_file(
    input_file: Path,
    col_x: str,
    col_y: str,
    output_file: Optional[Path] = None,
    worker_processes: int = -1,
    include_match_details: bool = True
) -> pd.DataFrame:
    """
    Compare two name columns of a CSV file.

    Args:
        input_file: Path to CSV file with one name pair per row
        col_x: Column holding the first names
        col_y: Column holding the second names
        output_file: Optional path for output CSV file
        worker_processes: Number of worker processes
        include_match_details: Whether to include match details

    Returns:
        pd.DataFrame: DataFrame with match results
    """
    logging.info(f"Reading input file: {input_file}")
    df = pd.read_csv(input_file, dtype=str)

    results = summarize_matches(
        df, col_x, col_y,
        worker_processes=worker_processes,
        include_match_details=include_match_details
    )

    if output_file:
        logging.info(f"Saving results to: {output_file}")
        results.to_csv(output_file, index=False)

    return results


def summarize_matches(
    df: pd.DataFrame,
    col_x: str,
    col_y: str,
    worker_processes: int = 1,
    include_match_details: bool = False
) -> pd.DataFrame:
    """Match two name columns and log summary statistics."""
    name_matcher = create_name_matcher(
        worker_processes=worker_processes,
        include_match_details=include_match_details
    )
    results = name_matcher.match_dataframe(df, col_x, col_y)

    total_records = len(results)
    matched_records = int(results['is_match'].sum())
    incomparable = int(results['total_distance'].isna().sum())

    logging.info("Matching Statistics:")
    logging.info(f"Total pairs: {total_records}")
    if total_records:
        logging.info(
            f"Matched pairs: {matched_records} "
            f"({matched_records/total_records*100:.1f}%)"
        )
    logging.info(f"Pairs without comparable tokens: {incomparable}")

    return results


if __name__ == "__main__":
    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s - %(levelname)s - %(message)s'
    )

    results_df = summarize_matches(
        EXAMPLE_NAMES,
        'name_source1',
        'name_source2',
        include_match_details=True
    )
    print(results_df.to_string(index=False))
