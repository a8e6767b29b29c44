"""
Training pipeline tests: train/test split, kernel feature subsets and grid search.

Run with: pytest tests/test_training_pipeline.py -v
"""
import pytest
import pandas as pd
import numpy as np

from heartsvm import config
from heartsvm.training_pipeline.train_svm import (
    split_features_target,
    split_train_test,
    feature_columns_for,
    check_class_balance,
    build_svm_pipeline
)
from heartsvm.training_pipeline.tune_grid import (
    KernelModel,
    run_grid_search,
    tune_all_kernels,
    run_model_training
)


class TestSplit:
    """Test suite for the fixed-size seeded split."""

    def test_split_sizes(self, make_modeling_data):
        """Test that train has exactly train_size rows and test the rest."""
        df = make_modeling_data(700)

        train_df, test_df = split_train_test(df, train_size=600, random_state=1)

        assert len(train_df) == 600
        assert len(test_df) == 100

    def test_split_disjoint(self, make_modeling_data):
        """Test that partitions are disjoint and within the cleaned records."""
        df = make_modeling_data(300)

        train_df, test_df = split_train_test(df, train_size=200, random_state=1)

        assert set(train_df.index).isdisjoint(test_df.index)
        assert set(train_df.index) | set(test_df.index) <= set(df.index)
        assert len(train_df) + len(test_df) <= len(df)

    def test_split_deterministic(self, make_modeling_data):
        """Test that the same seed yields the same partition."""
        df = make_modeling_data(300)

        first, _ = split_train_test(df, train_size=200, random_state=5)
        second, _ = split_train_test(df, train_size=200, random_state=5)
        other, _ = split_train_test(df, train_size=200, random_state=6)

        assert first.index.tolist() == second.index.tolist()
        assert first.index.tolist() != other.index.tolist(), "A new seed should draw differently"

    def test_split_train_size_too_large(self, make_modeling_data):
        """Test that a train size leaving no test rows raises ValueError."""
        df = make_modeling_data(50)

        with pytest.raises(ValueError, match="no test rows"):
            split_train_test(df, train_size=50)

    def test_split_features_target(self, make_modeling_data):
        """Test the X/y separation."""
        X, y = split_features_target(make_modeling_data(20))

        assert config.TARGET_COLUMN not in X.columns
        assert X.columns.tolist() == config.FEATURE_COLUMNS
        assert y.name == config.TARGET_COLUMN


class TestKernelSetup:
    """Test suite for per-kernel features and SVM construction."""

    def test_linear_uses_all_features(self):
        assert feature_columns_for("linear") == config.FEATURE_COLUMNS

    def test_rbf_excludes_diet_frequencies(self):
        features = feature_columns_for("rbf")

        for col in ["FRUTNO", "VEGENO", "SODAPNO"]:
            assert col not in features
        assert len(features) == len(config.FEATURE_COLUMNS) - 3

    def test_poly_excludes_activity_and_sleep(self):
        features = feature_columns_for("poly")

        for col in ["HRSLEEP", "MODMIN", "VIGMIN"]:
            assert col not in features
        assert len(features) == len(config.FEATURE_COLUMNS) - 3

    def test_feature_subsets_differ(self):
        """Test that the radial and polynomial subsets exclude different fields."""
        assert set(feature_columns_for("rbf")) != set(feature_columns_for("poly"))

    def test_unknown_kernel(self):
        with pytest.raises(ValueError, match="Unknown kernel"):
            feature_columns_for("sigmoid")

    def test_build_svm_pipeline(self):
        """Test that params reach the SVC step behind a scaler."""
        pipe = build_svm_pipeline("poly", C=10, degree=3)

        assert list(pipe.named_steps) == ["scaler", "svc"]
        assert pipe.named_steps["svc"].kernel == "poly"
        assert pipe.named_steps["svc"].C == 10
        assert pipe.named_steps["svc"].degree == 3

    def test_check_class_balance_single_class(self):
        """Test that a training set with one class raises ValueError."""
        with pytest.raises(ValueError, match="class 1"):
            check_class_balance(pd.Series([0, 0, 0]))

    def test_check_class_balance_ok(self):
        check_class_balance(pd.Series([0, 1, 0]))


class TestGridSearch:
    """Test suite for cross-validated grid search."""

    @pytest.fixture
    def train_xy(self, make_modeling_data):
        df = make_modeling_data(240, seed=2)
        return split_features_target(df)

    def test_run_grid_search_result(self, train_xy):
        """Test that the selected model comes from the grid with minimum CV error."""
        X, y = train_xy
        grid = {"C": [0.01, 0.1, 1]}

        model = run_grid_search(X, y, "linear", grid, cv_folds=3, random_state=1, n_jobs=1)

        assert isinstance(model, KernelModel)
        assert model.best_params["C"] in grid["C"]
        assert 0.0 <= model.cv_error <= 1.0
        assert len(model.cv_results) == 3
        assert model.cv_error == pytest.approx(model.cv_results["cv_error"].min())
        assert model.features == X.columns.tolist()

    def test_run_grid_search_two_parameters(self, train_xy):
        """Test that multi-parameter grids are searched exhaustively."""
        X, y = train_xy
        X = X[feature_columns_for("rbf")]

        model = run_grid_search(
            X, y, "rbf", {"C": [1, 10], "gamma": [0.1, 1]},
            cv_folds=3, random_state=1, n_jobs=1
        )

        assert len(model.cv_results) == 4
        assert set(model.best_params) == {"C", "gamma"}
        assert model.estimator.named_steps["svc"].gamma == model.best_params["gamma"]

    def test_model_predicts_binary_labels(self, train_xy):
        X, y = train_xy
        model = run_grid_search(X, y, "linear", {"C": [1]}, cv_folds=3, random_state=1, n_jobs=1)

        predictions = model.predict(X)

        assert len(predictions) == len(X)
        assert set(np.unique(predictions)) <= {0, 1}

    def test_tune_all_kernels(self, make_modeling_data, small_grids):
        """Test that each kernel is fitted on its own feature subset."""
        train_df = make_modeling_data(240, seed=4)

        models = tune_all_kernels(
            train_df, param_grids=small_grids, cv_folds=3, random_state=1, n_jobs=1
        )

        assert list(models) == ["linear", "rbf", "poly"]
        for kernel, model in models.items():
            assert model.kernel == kernel
            assert model.features == feature_columns_for(kernel, train_df)
            assert model.estimator.named_steps["svc"].kernel == kernel

    def test_tune_all_kernels_single_class(self, make_modeling_data, small_grids):
        """Test that training labels without positives abort the run."""
        train_df = make_modeling_data(60)
        train_df["HEARTATTACK"] = 0

        with pytest.raises(ValueError):
            tune_all_kernels(train_df, param_grids=small_grids, cv_folds=3, n_jobs=1)

    def test_rerun_is_deterministic(self, make_modeling_data, small_grids):
        """Test that the same seed gives the same split and hyperparameters."""
        df = make_modeling_data(300, seed=7)

        runs = [
            run_model_training(
                df, train_size=220, random_state=3,
                param_grids=small_grids, cv_folds=3, n_jobs=1
            )
            for _ in range(2)
        ]

        (models_a, train_a, test_a), (models_b, train_b, test_b) = runs
        assert train_a.index.tolist() == train_b.index.tolist()
        assert test_a.index.tolist() == test_b.index.tolist()
        for kernel in models_a:
            assert models_a[kernel].best_params == models_b[kernel].best_params
            assert models_a[kernel].cv_error == models_b[kernel].cv_error
