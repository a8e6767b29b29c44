"""
SVM training module for the NHIS heart-attack analysis.

Handles the seeded fixed-size train/test split, per-kernel feature selection
and construction of the scaled SVC pipelines.
"""
import pandas as pd
import logging
from sklearn.model_selection import train_test_split
from sklearn.pipeline import Pipeline
from sklearn.preprocessing import StandardScaler
from sklearn.svm import SVC
from typing import List, Tuple

from heartsvm import config

logger = logging.getLogger(__name__)


def split_features_target(df: pd.DataFrame) -> Tuple[pd.DataFrame, pd.Series]:
    """
    Split a modeling-ready DataFrame into features (X) and label (y).

    Raises:
        KeyError: If the HEARTATTACK column is missing.
    """
    if config.TARGET_COLUMN not in df.columns:
        raise KeyError(f"Target column '{config.TARGET_COLUMN}' not found in data")

    y = df[config.TARGET_COLUMN]
    X = df.drop(columns=[config.TARGET_COLUMN])

    return X, y


def split_train_test(
    df: pd.DataFrame,
    train_size: int = None,
    random_state: int = None
) -> Tuple[pd.DataFrame, pd.DataFrame]:
    """
    Draw a fixed-size random training sample; the remaining rows form the test set.

    The draw is uniform without replacement and unstratified, so the same
    seed and input always yield the same partition.

    Args:
        df: Modeling-ready DataFrame.
        train_size: Number of training rows. If None, uses config.TRAIN_SIZE.
        random_state: Random seed. If None, uses config.RANDOM_STATE.

    Returns:
        Tuple of (train_df, test_df).

    Raises:
        ValueError: If train_size is not smaller than the number of rows.

    Example:
        >>> train_df, test_df = split_train_test(df_final)
        >>> print(len(train_df), len(test_df))
        6000 1000
    """
    if train_size is None:
        train_size = config.TRAIN_SIZE
    if random_state is None:
        random_state = config.RANDOM_STATE

    if train_size >= len(df):
        raise ValueError(
            f"train_size={train_size:,} leaves no test rows "
            f"(dataset has {len(df):,} rows)"
        )

    train_df, test_df = train_test_split(
        df,
        train_size=train_size,
        random_state=random_state,
        shuffle=True
    )

    logger.info(f"Train/test split complete (seed={random_state}):")
    logger.info(f"  Train: {len(train_df):,} samples")
    logger.info(f"  Test: {len(test_df):,} samples")
    logger.info(
        f"  Train class distribution: "
        f"No = {(train_df[config.TARGET_COLUMN] == 0).sum():,}, "
        f"Yes = {(train_df[config.TARGET_COLUMN] == 1).sum():,}"
    )

    return train_df, test_df


def feature_columns_for(kernel: str, df: pd.DataFrame = None) -> List[str]:
    """
    Return the covariates used by a kernel family.

    Args:
        kernel: One of config.KERNELS.
        df: If given, columns are taken from it instead of config.FEATURE_COLUMNS.

    Raises:
        ValueError: If the kernel is unknown.
    """
    if kernel not in config.KERNEL_SPECS:
        raise ValueError(f"Unknown kernel '{kernel}'. Expected one of {config.KERNELS}")

    if df is None:
        columns = config.FEATURE_COLUMNS
    else:
        columns = [c for c in df.columns if c != config.TARGET_COLUMN]

    excluded = config.KERNEL_SPECS[kernel]["exclude"]
    return [c for c in columns if c not in excluded]


def check_class_balance(y_train: pd.Series) -> None:
    """
    Make sure both labels occur in the training data.

    Raises:
        ValueError: If either class has zero members.
    """
    counts = y_train.value_counts()
    for label in (0, 1):
        if counts.get(label, 0) == 0:
            raise ValueError(
                f"Training labels contain no members of class {label}; "
                f"cannot fit a binary classifier"
            )

    logger.info(
        f"Class balance - No: {counts.get(0, 0):,}, Yes: {counts.get(1, 0):,}"
    )


def build_svm_pipeline(kernel: str, **params) -> Pipeline:
    """
    Build an unfitted StandardScaler → SVC pipeline.

    Args:
        kernel: SVC kernel name ('linear', 'rbf' or 'poly').
        **params: Extra SVC parameters (C, gamma, degree, ...).

    Returns:
        sklearn Pipeline with steps 'scaler' and 'svc'.

    Example:
        >>> pipe = build_svm_pipeline('rbf', C=10, gamma=0.1)
        >>> pipe.named_steps['svc'].kernel
        'rbf'
    """
    return Pipeline([
        ("scaler", StandardScaler()),
        ("svc", SVC(kernel=kernel, **params))
    ])
