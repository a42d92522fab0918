"""Tests for the elastic-net alpha sweep."""

import numpy as np
import pandas as pd
import pytest

from classregr.config import EvaluationConfig
from classregr.evaluation import regression
from classregr.evaluation.regression import alpha_label, evaluate_alpha_grid
from classregr.evaluation.results import REGRESSION_ROWS
from classregr.validation import ConfigurationError, FitError


@pytest.fixture
def regression_df():
    """200 rows, 4 numeric features (2 informative) and a numeric target."""
    rng = np.random.RandomState(0)
    X = rng.randn(200, 4)
    y = 2.0 * X[:, 0] - 1.0 * X[:, 1] + rng.randn(200) * 0.5
    df = pd.DataFrame(X, columns=["a", "b", "c", "d"])
    df["y"] = y
    return df


@pytest.mark.parametrize(
    "alpha, label",
    [(0, "0"), (0.2, "0.2"), (1.0, "1"), (0.1 + 0.2, "0.3"), (0.05, "0.05")],
)
def test_alpha_label(alpha, label):
    """Test column labels for mixing values."""
    assert alpha_label(alpha) == label


def test_columns_rows_and_ranges(regression_df):
    """Test one column per alpha with finite RMSE and R2 <= 1."""
    result = evaluate_alpha_grid(regression_df, "y", [0, 1], EvaluationConfig())

    assert result.mode == "regression"
    assert result.columns == ["0", "1"]
    assert result.rows == list(REGRESSION_ROWS)
    for label in result.columns:
        rmse = result.value("RMSE", label)
        assert np.isfinite(rmse) and rmse >= 0
        assert result.value("R2", label) <= 1
        assert result.value("R2", label) > 0.5


def test_ridge_and_lasso_differ(regression_df):
    """Test that the two ends of the grid are genuinely different fits."""
    result = evaluate_alpha_grid(regression_df, "y", [0, 1], EvaluationConfig())

    assert result.value("RMSE", "0") != result.value("RMSE", "1")
    assert result.details["0"]["best_lambda"] != result.details["1"]["best_lambda"]


def test_grid_order_preserved(regression_df):
    """Test that column order follows the grid, not sorted order."""
    result = evaluate_alpha_grid(regression_df, "y", [1, 0.3, 0], EvaluationConfig())

    assert result.columns == ["1", "0.3", "0"]


def test_details_record_split_and_lambda(regression_df):
    """Test the per-alpha details."""
    result = evaluate_alpha_grid(regression_df, "y", [0.5], EvaluationConfig())
    details = result.details["0.5"]

    assert details["n_train"] == 140
    assert details["n_test"] == 60
    assert details["alpha"] == 0.5
    assert details["best_lambda"] > 0
    assert 0 <= details["n_nonzero"] <= 4


def test_failing_alpha_marks_column(regression_df, monkeypatch, capsys):
    """Test that a failing alpha gives a NaN column and the others survive."""
    real_select = regression.select_penalty

    def flaky(X, y, l1_ratio, **kwargs):
        if l1_ratio == 0.5:
            raise RuntimeError("did not converge")
        return real_select(X, y, l1_ratio, **kwargs)

    monkeypatch.setattr(regression, "select_penalty", flaky)

    result = evaluate_alpha_grid(regression_df, "y", [0, 0.5, 1], EvaluationConfig())

    assert result.table["0.5"].isna().all()
    assert not result.table[["0", "1"]].isna().any().any()
    assert len(result.failures) == 1
    failure = result.failures[0]
    assert failure.column == "0.5"
    assert failure.stage == "select_penalty"
    assert "Warning: 0.5" in capsys.readouterr().out


def test_failing_alpha_can_raise(regression_df, monkeypatch):
    """Test the strict failure policy."""
    def broken(*args, **kwargs):
        raise RuntimeError("did not converge")

    monkeypatch.setattr(regression, "select_penalty", broken)

    with pytest.raises(FitError, match="alpha=0"):
        evaluate_alpha_grid(
            regression_df, "y", [0], EvaluationConfig(raise_on_fit_error=True)
        )


def test_categorical_feature(regression_df):
    """Test that text features are one-hot encoded before fitting."""
    rng = np.random.RandomState(3)
    df = regression_df.assign(site=rng.choice(["n", "s", "e"], len(regression_df)))

    result = evaluate_alpha_grid(df, "y", [0.5], EvaluationConfig())

    assert np.isfinite(result.value("RMSE", "0.5"))


def test_missing_feature_values_are_imputed(regression_df):
    """Test that NaN in a feature does not break the fit."""
    df = regression_df.copy()
    df.loc[::7, "c"] = np.nan

    result = evaluate_alpha_grid(df, "y", [1], EvaluationConfig())

    assert np.isfinite(result.value("RMSE", "1"))


def test_constant_target_gives_nan_r2():
    """Test that a constant test target leaves R2 undefined."""
    rng = np.random.RandomState(4)
    df = pd.DataFrame({"x": rng.randn(30), "y": np.full(30, 2.0)})

    result = evaluate_alpha_grid(df, "y", [1], EvaluationConfig())

    assert result.value("RMSE", "1") == pytest.approx(0.0, abs=1e-8)
    assert np.isnan(result.value("R2", "1"))


def test_parallel_grid_matches_sequential(regression_df):
    """Test that running alphas in parallel gives the same table."""
    grid = [0, 0.5, 1]
    serial = evaluate_alpha_grid(regression_df, "y", grid, EvaluationConfig(n_jobs=1))
    parallel = evaluate_alpha_grid(regression_df, "y", grid, EvaluationConfig(n_jobs=2))

    pd.testing.assert_frame_equal(serial.table, parallel.table)


def test_grid_values_sharing_a_label_rejected(regression_df):
    """Test that two alphas that would share a column are rejected up front."""
    with pytest.raises(ConfigurationError, match="duplicate"):
        evaluate_alpha_grid(regression_df, "y", [0.3, 0.1 + 0.2], EvaluationConfig())
