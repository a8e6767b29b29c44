"""
Feature pipeline for the NHIS heart-attack analysis.

Public API for loading, filtering, cleaning and recoding raw survey records.
"""
from heartsvm.feature_pipeline.load import (
    load_raw_data,
    select_columns,
    filter_eligible_records
)
from heartsvm.feature_pipeline.cleaning import (
    drop_sentinel_rows,
    drop_missing_values,
    clean_data
)
from heartsvm.feature_pipeline.engineering import (
    create_features,
    prepare_final_dataset
)

__all__ = [
    'load_raw_data',
    'select_columns',
    'filter_eligible_records',
    'drop_sentinel_rows',
    'drop_missing_values',
    'clean_data',
    'create_features',
    'prepare_final_dataset',
]
