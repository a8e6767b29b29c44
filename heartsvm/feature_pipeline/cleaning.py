"""
Data cleaning module for the NHIS heart-attack pipeline.

Survey fields carry reserved "unknown/refused/not ascertained" codes. Rows
holding any of them are dropped entirely; nothing is imputed.
"""
import pandas as pd
from typing import Dict, List, Optional
import logging

from heartsvm import config

logger = logging.getLogger(__name__)


def drop_sentinel_rows(
    df: pd.DataFrame,
    sentinels: Optional[Dict[str, List[float]]] = None
) -> pd.DataFrame:
    """
    Drop rows in which any field holds one of its sentinel codes.

    Args:
        df: Input DataFrame (after eligibility filtering).
        sentinels: Mapping of column -> sentinel codes. If None, uses
            config.SENTINEL_VALUES.

    Returns:
        DataFrame without sentinel-coded rows.

    Raises:
        KeyError: If a sentinel column doesn't exist.

    Example:
        >>> df_clean = drop_sentinel_rows(df_filtered)
        >>> assert not df_clean['AGE'].isin([997, 998, 999]).any()
    """
    if sentinels is None:
        sentinels = config.SENTINEL_VALUES

    missing = [c for c in sentinels if c not in df.columns]
    if missing:
        raise KeyError(f"Columns not found in DataFrame: {missing}")

    rows_before = len(df)
    has_sentinel = pd.Series(False, index=df.index)

    for column, codes in sentinels.items():
        column_mask = df[column].isin(codes)
        if column_mask.any():
            logger.info(f"  {column:<10s}: {column_mask.sum():,} sentinel rows")
        has_sentinel |= column_mask

    df_clean = df[~has_sentinel].copy()

    logger.info(
        f"Dropped {rows_before - len(df_clean):,} rows holding sentinel codes"
    )

    return df_clean


def drop_missing_values(df: pd.DataFrame) -> pd.DataFrame:
    """
    Drop rows with a missing value in any retained column.

    Args:
        df: Input DataFrame.

    Returns:
        DataFrame with no missing values.
    """
    rows_before = len(df)
    df_clean = df.dropna().copy()

    logger.info(f"Dropped {rows_before - len(df_clean):,} rows with missing values")

    return df_clean


def clean_data(df: pd.DataFrame) -> pd.DataFrame:
    """
    Execute full data cleaning pipeline.

    Orchestrates all cleaning steps:
    1. Drop rows holding sentinel codes
    2. Drop rows with remaining missing values

    Args:
        df: Input DataFrame from load module (after eligibility filtering).

    Returns:
        Cleaned DataFrame.
    """
    logger.info("Starting data cleaning pipeline")

    df = drop_sentinel_rows(df)
    df = drop_missing_values(df)

    logger.info(f"Cleaning complete. Final shape: {df.shape}")

    return df
