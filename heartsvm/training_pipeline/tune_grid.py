"""
Hyperparameter grid search for the kernel SVM classifiers.

For each kernel family every point of the declared grid is scored by
cross-validated misclassification error on the training sample; the
minimum-error configuration is refit on the full training sample.
"""
import pandas as pd
import numpy as np
import logging
from dataclasses import dataclass, field
from sklearn.model_selection import GridSearchCV, KFold
from sklearn.pipeline import Pipeline
from typing import Dict, List, Optional, Any, Tuple

from heartsvm import config
from heartsvm.training_pipeline.train_svm import (
    split_features_target,
    split_train_test,
    feature_columns_for,
    check_class_balance,
    build_svm_pipeline
)

logger = logging.getLogger(__name__)

STEP_PREFIX = "svc__"


@dataclass
class KernelModel:
    """
    A fitted SVM for one kernel family together with its grid-search outcome.

    Attributes:
        kernel: Kernel family ('linear', 'rbf' or 'poly').
        features: Covariates the model was trained on, in order.
        estimator: Fitted StandardScaler → SVC pipeline.
        best_params: Selected hyperparameters (C, gamma, degree, ...).
        cv_error: Cross-validated misclassification error of best_params.
        cv_results: One row per grid point with its mean CV error.
    """
    kernel: str
    features: List[str]
    estimator: Pipeline
    best_params: Dict[str, Any]
    cv_error: float
    cv_results: pd.DataFrame = field(repr=False)

    def predict(self, df: pd.DataFrame) -> np.ndarray:
        return self.estimator.predict(df[self.features])


def _prefix_grid(param_grid: Dict[str, List[Any]]) -> Dict[str, List[Any]]:
    return {f"{STEP_PREFIX}{name}": values for name, values in param_grid.items()}


def _strip_prefix(params: Dict[str, Any]) -> Dict[str, Any]:
    return {name.replace(STEP_PREFIX, "", 1): value for name, value in params.items()}


def run_grid_search(
    X_train: pd.DataFrame,
    y_train: pd.Series,
    kernel: str,
    param_grid: Optional[Dict[str, List[Any]]] = None,
    cv_folds: int = None,
    random_state: int = None,
    n_jobs: int = None
) -> KernelModel:
    """
    Grid-search one kernel family by cross-validated misclassification error.

    Every grid point is scored with accuracy over shuffled, seeded K folds;
    the error is 1 - accuracy. Ties go to the earliest grid point, so
    reruns with the same seed select the same hyperparameters.

    Args:
        X_train: Training covariates for this kernel.
        y_train: Training labels.
        kernel: Kernel family.
        param_grid: SVC parameter grid. If None, uses config.KERNEL_SPECS.
        cv_folds: Number of CV folds. If None, uses config.CV_FOLDS.
        random_state: Fold shuffling seed. If None, uses config.RANDOM_STATE.
        n_jobs: Parallel jobs for GridSearchCV. If None, uses config.N_JOBS.

    Returns:
        KernelModel refit on the full training sample.

    Example:
        >>> model = run_grid_search(X_train, y_train, 'linear', {'C': [0.1, 1]})
        >>> print(model.best_params, f"{model.cv_error:.4f}")
        {'C': 0.1} 0.0712
    """
    if param_grid is None:
        param_grid = config.KERNEL_SPECS[kernel]["param_grid"]
    if cv_folds is None:
        cv_folds = config.CV_FOLDS
    if random_state is None:
        random_state = config.RANDOM_STATE
    if n_jobs is None:
        n_jobs = config.N_JOBS

    n_candidates = int(np.prod([len(v) for v in param_grid.values()]))
    logger.info(
        f"Grid search [{kernel}]: {n_candidates} candidates × {cv_folds} folds "
        f"on {X_train.shape[1]} features"
    )

    cv = KFold(n_splits=cv_folds, shuffle=True, random_state=random_state)
    search = GridSearchCV(
        estimator=build_svm_pipeline(kernel),
        param_grid=_prefix_grid(param_grid),
        scoring="accuracy",
        cv=cv,
        n_jobs=n_jobs,
        refit=True
    )
    search.fit(X_train, y_train)

    results = search.cv_results_
    cv_table = pd.DataFrame([_strip_prefix(p) for p in results["params"]])
    cv_table["cv_error"] = 1.0 - results["mean_test_score"]
    cv_table["cv_error_std"] = results["std_test_score"]

    best_params = _strip_prefix(search.best_params_)
    cv_error = 1.0 - search.best_score_

    logger.info(f"✓ [{kernel}] best parameters: {best_params}")
    logger.info(f"  [{kernel}] CV misclassification error: {cv_error:.4f}")

    return KernelModel(
        kernel=kernel,
        features=list(X_train.columns),
        estimator=search.best_estimator_,
        best_params=best_params,
        cv_error=cv_error,
        cv_results=cv_table
    )


def tune_all_kernels(
    train_df: pd.DataFrame,
    kernels: Optional[List[str]] = None,
    param_grids: Optional[Dict[str, Dict[str, List[Any]]]] = None,
    cv_folds: int = None,
    random_state: int = None,
    n_jobs: int = None
) -> Dict[str, KernelModel]:
    """
    Run the grid search for each kernel family on its own covariate subset.

    Args:
        train_df: Training partition (features + HEARTATTACK).
        kernels: Kernel families to fit. If None, uses config.KERNELS.
        param_grids: Per-kernel grid overrides; kernels not listed use config.
        cv_folds: Number of CV folds. If None, uses config.CV_FOLDS.
        random_state: Fold shuffling seed. If None, uses config.RANDOM_STATE.
        n_jobs: Parallel jobs for GridSearchCV. If None, uses config.N_JOBS.

    Returns:
        Dict of kernel -> KernelModel, in kernel order.

    Raises:
        ValueError: If the training labels miss a class or a kernel is unknown.
    """
    if kernels is None:
        kernels = config.KERNELS
    if param_grids is None:
        param_grids = {}

    X_all, y_train = split_features_target(train_df)
    check_class_balance(y_train)

    models = {}
    for kernel in kernels:
        features = feature_columns_for(kernel, train_df)
        models[kernel] = run_grid_search(
            X_all[features],
            y_train,
            kernel,
            param_grid=param_grids.get(kernel),
            cv_folds=cv_folds,
            random_state=random_state,
            n_jobs=n_jobs
        )

    return models


def run_model_training(
    df: pd.DataFrame,
    train_size: int = None,
    random_state: int = None,
    kernels: Optional[List[str]] = None,
    param_grids: Optional[Dict[str, Dict[str, List[Any]]]] = None,
    cv_folds: int = None,
    n_jobs: int = None
) -> Tuple[Dict[str, KernelModel], pd.DataFrame, pd.DataFrame]:
    """
    Execute the complete training stage.

    Pipeline:
    1. Split into fixed-size train sample and test complement
    2. Grid-search each kernel family

    Args:
        df: Modeling-ready DataFrame.
        train_size: Number of training rows. If None, uses config.TRAIN_SIZE.
        random_state: Seed for the split and CV folds. If None, uses config.RANDOM_STATE.
        kernels: Kernel families to fit. If None, uses config.KERNELS.
        param_grids: Per-kernel grid overrides.
        cv_folds: Number of CV folds. If None, uses config.CV_FOLDS.
        n_jobs: Parallel jobs for GridSearchCV. If None, uses config.N_JOBS.

    Returns:
        Tuple of (models, train_df, test_df).
    """
    logger.info("=" * 80)
    logger.info("SVM TRAINING PIPELINE")
    logger.info("=" * 80)

    logger.info("\n[1/2] Splitting train/test...")
    train_df, test_df = split_train_test(df, train_size=train_size, random_state=random_state)

    logger.info("\n[2/2] Running grid searches...")
    models = tune_all_kernels(
        train_df,
        kernels=kernels,
        param_grids=param_grids,
        cv_folds=cv_folds,
        random_state=random_state,
        n_jobs=n_jobs
    )

    logger.info("\n" + "=" * 80)
    logger.info("✓ SVM TRAINING COMPLETE")
    logger.info("=" * 80)
    for kernel, model in models.items():
        logger.info(f"  {kernel:8s}: {model.best_params} (CV error {model.cv_error:.4f})")

    return models, train_df, test_df
