"""
Recoding module for the NHIS heart-attack pipeline.

Applies the deterministic field recodes, derives the binary label and
prepares the modeling-ready dataset.
"""
import pandas as pd
import numpy as np
import logging

from heartsvm import config

logger = logging.getLogger(__name__)


def recode_alcohol_monthly(df: pd.DataFrame) -> pd.DataFrame:
    """
    Convert yearly drinking days into a monthly rate.

    Feature created:
    - ALCDAYSMO: ALCDAYSYR // 12 (truncated toward zero)

    Annualized answers cluster on round numbers (52, 104, 365, ...); the
    monthly rate spreads those clusters out.

    Args:
        df: Input DataFrame with ALCDAYSYR column.

    Returns:
        DataFrame with ALCDAYSMO feature (ALCDAYSYR kept until the final drop).

    Example:
        >>> df_eng = recode_alcohol_monthly(df)
        >>> df_eng.loc[df['ALCDAYSYR'] == 365, 'ALCDAYSMO'].unique()
        array([30])
    """
    df = df.copy()

    df[config.ALCOHOL_MONTHLY_COLUMN] = np.trunc(
        df[config.ALCOHOL_YEARLY_COLUMN] / config.MONTHS_PER_YEAR
    ).astype(int)

    logger.info(
        f"Created {config.ALCOHOL_MONTHLY_COLUMN} "
        f"(range: {df[config.ALCOHOL_MONTHLY_COLUMN].min()} to "
        f"{df[config.ALCOHOL_MONTHLY_COLUMN].max()})"
    )

    return df


def recode_activity_minutes(df: pd.DataFrame) -> pd.DataFrame:
    """
    Replace the "unable to do activity" code 996 with a 720-minute ceiling.

    Args:
        df: Input DataFrame with MODMIN and VIGMIN columns.

    Returns:
        DataFrame with recoded activity minutes.
    """
    df = df.copy()

    for column in config.ACTIVITY_MINUTES_COLUMNS:
        n_recoded = (df[column] == config.ACTIVITY_MINUTES_SENTINEL).sum()
        df[column] = df[column].replace(
            config.ACTIVITY_MINUTES_SENTINEL,
            config.ACTIVITY_MINUTES_CEILING
        )
        logger.info(
            f"Recoded {n_recoded:,} {column} values "
            f"{config.ACTIVITY_MINUTES_SENTINEL} → {config.ACTIVITY_MINUTES_CEILING}"
        )

    return df


def recode_sleep_hours(df: pd.DataFrame) -> pd.DataFrame:
    """
    Replace the "less than half an hour" sleep code 25 with 0.

    Args:
        df: Input DataFrame with HRSLEEP column.

    Returns:
        DataFrame with recoded HRSLEEP.
    """
    df = df.copy()

    n_recoded = (df[config.SLEEP_HOURS_COLUMN] == config.SLEEP_HOURS_SENTINEL).sum()
    df[config.SLEEP_HOURS_COLUMN] = df[config.SLEEP_HOURS_COLUMN].replace(
        config.SLEEP_HOURS_SENTINEL,
        config.SLEEP_HOURS_REPLACEMENT
    )

    logger.info(
        f"Recoded {n_recoded:,} {config.SLEEP_HOURS_COLUMN} values "
        f"{config.SLEEP_HOURS_SENTINEL} → {config.SLEEP_HOURS_REPLACEMENT}"
    )

    return df


def create_label(df: pd.DataFrame) -> pd.DataFrame:
    """
    Derive the binary heart-attack label.

    Feature created:
    - HEARTATTACK: HEARTATTEV - 1 (0 = never told, 1 = told had heart attack)

    Args:
        df: Input DataFrame with HEARTATTEV column.

    Returns:
        DataFrame with HEARTATTACK label column.

    Raises:
        ValueError: If any derived label falls outside {0, 1}.
    """
    df = df.copy()

    df[config.TARGET_COLUMN] = (
        df[config.HEART_ATTACK_COLUMN] - config.TARGET_OFFSET
    ).astype(int)

    invalid = ~df[config.TARGET_COLUMN].isin([0, 1])
    if invalid.any():
        raise ValueError(
            f"{invalid.sum():,} rows have {config.HEART_ATTACK_COLUMN} "
            f"outside {config.VALID_HEART_ATTACK_CODES}"
        )

    logger.info(
        f"Created {config.TARGET_COLUMN} label "
        f"({df[config.TARGET_COLUMN].sum():,} positive)"
    )

    return df


def create_features(df: pd.DataFrame) -> pd.DataFrame:
    """
    Execute the recoding pipeline.

    Orchestrates all recoding steps:
    1. Monthly alcohol rate
    2. Activity-minutes ceiling
    3. Sleep-hours correction
    4. Binary label

    Args:
        df: Input DataFrame from cleaning module.

    Returns:
        DataFrame with recoded fields and the label column.
    """
    logger.info("Starting recoding pipeline")

    df = recode_alcohol_monthly(df)
    df = recode_activity_minutes(df)
    df = recode_sleep_hours(df)
    df = create_label(df)

    logger.info(f"Recoding complete. Shape: {df.shape}")

    return df


def prepare_final_dataset(df: pd.DataFrame) -> pd.DataFrame:
    """
    Drop columns no longer needed and prepare the modeling-ready dataset.

    Steps:
    1. Drop columns defined in config.DROP_COLUMNS
    2. Keep HEARTATTACK column (training handles the X/y split)
    3. Validate no missing values

    Args:
        df: Input DataFrame with all recoded fields.

    Returns:
        Final DataFrame with config.FEATURE_COLUMNS plus HEARTATTACK.

    Raises:
        ValueError: If the label column is absent or any value is missing.

    Example:
        >>> df_final = prepare_final_dataset(df_features)
        >>> assert 'HEARTATTACK' in df_final.columns
        >>> assert 'YEAR' not in df_final.columns
    """
    df = df.copy()

    existing_cols_to_drop = [c for c in config.DROP_COLUMNS if c in df.columns]
    df = df.drop(columns=existing_cols_to_drop)
    logger.info(f"Dropped {len(existing_cols_to_drop)} columns: {existing_cols_to_drop}")

    if config.TARGET_COLUMN not in df.columns:
        raise ValueError(f"{config.TARGET_COLUMN} column missing from dataset")

    missing_cols = df.columns[df.isnull().any()].tolist()
    if missing_cols:
        missing_summary = df[missing_cols].isnull().sum()
        raise ValueError(
            f"Missing values found in columns:\n{missing_summary[missing_summary > 0]}"
        )

    df = df[config.FEATURE_COLUMNS + [config.TARGET_COLUMN]].copy()
    df[config.TARGET_COLUMN] = df[config.TARGET_COLUMN].astype(int)

    logger.info(f"Final dataset prepared - Shape: {df.shape}")
    logger.info(
        f"Target distribution: {df[config.TARGET_COLUMN].value_counts().to_dict()}"
    )

    return df
