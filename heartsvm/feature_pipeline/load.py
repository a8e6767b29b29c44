"""
Data loading module for the NHIS heart-attack pipeline.

Handles loading the raw survey extract, restricting it to the fixed column
subset, and keeping only eligible respondent records (adult males with a
valid survey year, status flag, heart-attack answer and alcohol count).
"""
import pandas as pd
from typing import Optional, List
import logging

from heartsvm import config

logger = logging.getLogger(__name__)


def load_raw_data(file_path: Optional[str] = None) -> pd.DataFrame:
    """
    Load the raw survey extract from CSV.

    Args:
        file_path: Path to raw CSV file. If None, uses default from config.

    Returns:
        DataFrame with one row per respondent-year.

    Raises:
        FileNotFoundError: If CSV file doesn't exist.
        pd.errors.EmptyDataError: If CSV file is empty.

    Example:
        >>> df = load_raw_data("data/raw/nhis_extract.csv")
        >>> print(df.columns[:3].tolist())
        ['YEAR', 'SERIAL', 'ASTATFLG']
    """
    if file_path is None:
        file_path = config.RAW_DATA_PATH

    logger.info(f"Loading raw data from: {file_path}")

    try:
        df = pd.read_csv(file_path)
    except FileNotFoundError:
        logger.error(f"File not found: {file_path}")
        raise
    except pd.errors.EmptyDataError:
        logger.error(f"File is empty: {file_path}")
        raise

    logger.info(f"Loaded {len(df):,} rows × {len(df.columns)} columns")

    return df


def select_columns(
    df: pd.DataFrame,
    columns: Optional[List[str]] = None
) -> pd.DataFrame:
    """
    Restrict the extract to the fixed column subset used by the analysis.

    Args:
        df: Raw survey DataFrame.
        columns: Columns to keep. If None, uses config.RAW_COLUMNS.

    Returns:
        DataFrame with exactly the requested columns, in that order.

    Raises:
        KeyError: If any requested column is absent from the input.
    """
    if columns is None:
        columns = config.RAW_COLUMNS

    missing = [c for c in columns if c not in df.columns]
    if missing:
        raise KeyError(f"Columns not found in DataFrame: {missing}")

    df_selected = df[columns].copy()

    logger.info(
        f"Selected {len(columns)} columns "
        f"({len(df.columns) - len(columns)} ignored)"
    )

    return df_selected


def filter_eligible_records(df: pd.DataFrame) -> pd.DataFrame:
    """
    Keep only respondent records that meet every eligibility predicate.

    Predicates:
    - YEAR >= 1997
    - ASTATFLG == 1 (sample adult record)
    - HEARTATTEV in {1, 2} (question answered No / Yes)
    - ALCDAYSYR < 995 (below the unknown/refused codes)
    - SEX == 1 (male)

    A missing value in any predicate field fails the comparison, so the
    result holds no undefined predicate fields.

    Args:
        df: DataFrame with the predicate columns.

    Returns:
        Filtered DataFrame.

    Raises:
        KeyError: If a predicate column doesn't exist.
        ValueError: If no rows satisfy the predicates.

    Example:
        >>> df_filtered = filter_eligible_records(df_raw)
        >>> print(sorted(df_filtered['HEARTATTEV'].unique()))
        [1, 2]
    """
    predicate_columns = [
        config.YEAR_COLUMN,
        config.STATUS_FLAG_COLUMN,
        config.HEART_ATTACK_COLUMN,
        config.ALCOHOL_YEARLY_COLUMN,
        config.SEX_COLUMN,
    ]
    missing = [c for c in predicate_columns if c not in df.columns]
    if missing:
        raise KeyError(f"Columns not found in DataFrame: {missing}")

    mask = (
        (df[config.YEAR_COLUMN] >= config.MIN_SURVEY_YEAR) &
        (df[config.STATUS_FLAG_COLUMN] == config.SAMPLE_ADULT_FLAG) &
        (df[config.HEART_ATTACK_COLUMN].isin(config.VALID_HEART_ATTACK_CODES)) &
        (df[config.ALCOHOL_YEARLY_COLUMN] < config.ALCOHOL_YEARLY_SENTINEL_MIN) &
        (df[config.SEX_COLUMN] == config.MALE_CODE)
    )

    rows_before = len(df)
    df_filtered = df[mask].copy()
    rows_after = len(df_filtered)

    if rows_after == 0:
        raise ValueError("No rows satisfy the eligibility predicates")

    logger.info(
        f"Eligible records: {rows_after:,} rows kept, "
        f"{rows_before - rows_after:,} removed "
        f"({(rows_before - rows_after) / rows_before * 100:.2f}%)"
    )

    return df_filtered
