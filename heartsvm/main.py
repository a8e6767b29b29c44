"""
Preprocessing entry point for the NHIS heart-attack analysis.

Chains the feature pipeline stages and returns the modeling-ready dataset.
Nothing is written to disk.

Usage:
    python -m heartsvm.main
"""
import logging
from typing import Optional

import pandas as pd

from heartsvm.feature_pipeline import (
    load_raw_data,
    select_columns,
    filter_eligible_records,
    clean_data,
    create_features,
    prepare_final_dataset
)

logger = logging.getLogger(__name__)


def run_preprocessing_pipeline(file_path: Optional[str] = None) -> pd.DataFrame:
    """
    Execute loading, filtering, cleaning and recoding.

    Pipeline:
    1. Load raw extract
    2. Select the fixed column subset
    3. Keep eligible adult-male records
    4. Drop sentinel-coded and missing rows
    5. Recode fields and derive the label
    6. Drop columns no longer needed

    Args:
        file_path: Path to raw CSV file. If None, uses config.RAW_DATA_PATH.

    Returns:
        Modeling-ready DataFrame (config.FEATURE_COLUMNS + HEARTATTACK).
    """
    logger.info("=" * 80)
    logger.info("PREPROCESSING PIPELINE")
    logger.info("=" * 80)

    logger.info("\n[1/6] Loading raw data...")
    df = load_raw_data(file_path)

    logger.info("\n[2/6] Selecting columns...")
    df = select_columns(df)

    logger.info("\n[3/6] Filtering eligible records...")
    df = filter_eligible_records(df)

    logger.info("\n[4/6] Cleaning sentinel and missing values...")
    df = clean_data(df)

    logger.info("\n[5/6] Recoding fields...")
    df = create_features(df)

    logger.info("\n[6/6] Preparing final dataset...")
    df = prepare_final_dataset(df)

    logger.info(f"✓ Preprocessing complete: {len(df):,} modeling-ready records")

    return df


if __name__ == "__main__":
    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    run_preprocessing_pipeline()
