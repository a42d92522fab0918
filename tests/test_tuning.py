"""Tests for the inner model-selection helpers."""

import numpy as np
import pytest

from classregr.tuning import TunedKNeighborsClassifier, lambda_path, select_penalty


@pytest.fixture
def classification_data():
    """80 rows with a clear linear boundary."""
    rng = np.random.RandomState(42)
    X = rng.randn(80, 3)
    y = np.where(X[:, 0] - X[:, 1] > 0, 1, 0)
    return X, y


@pytest.fixture
def regression_data():
    """120 rows, 5 features, 2 of them informative."""
    rng = np.random.RandomState(42)
    X = rng.randn(120, 5)
    y = 3 * X[:, 0] - 2 * X[:, 1] + rng.randn(120) * 0.5
    return X, y


def test_knn_picks_from_grid(classification_data):
    """Test that the selected neighbour count comes from the grid."""
    X, y = classification_data

    model = TunedKNeighborsClassifier(n_neighbors_grid=(5, 7, 9), cv=5).fit(X, y)

    assert model.n_neighbors_ in (5, 7, 9)
    assert 0 <= model.best_score_ <= 1
    assert list(model.classes_) == [0, 1]
    assert model.predict(X).shape == (80,)
    assert model.predict_proba(X).shape == (80, 2)


def test_knn_drops_candidates_larger_than_training_folds():
    """Test that neighbour counts the inner folds cannot support are skipped."""
    X = np.arange(12, dtype=float).reshape(-1, 1)
    y = np.array([0] * 6 + [1] * 6)

    model = TunedKNeighborsClassifier(n_neighbors_grid=(5, 7, 9), cv=10).fit(X, y)

    # 6 rows per class -> 6 inner folds -> 10 rows per inner training fold
    assert model.n_neighbors_ in (5, 7, 9)
    assert set(model.search_.param_grid["n_neighbors"]) <= {5, 7, 9}

    tiny = TunedKNeighborsClassifier(n_neighbors_grid=(5, 7, 9), cv=10).fit(X[4:8], y[4:8])
    # 2 rows per inner training fold, so the only usable count is 2
    assert tiny.n_neighbors_ == 2


def test_knn_is_reproducible(classification_data):
    """Test that a fixed random_state gives the same selection."""
    X, y = classification_data

    a = TunedKNeighborsClassifier(random_state=1).fit(X, y)
    b = TunedKNeighborsClassifier(random_state=1).fit(X, y)

    assert a.n_neighbors_ == b.n_neighbors_
    assert a.best_score_ == b.best_score_


def test_lambda_path_is_decreasing(regression_data):
    """Test the lambda path shape and ordering."""
    X, y = regression_data

    path = lambda_path(X, y, l1_ratio=0.5, n_lambdas=50)

    assert path.shape == (50,)
    assert np.all(np.diff(path) < 0)
    assert path[-1] == pytest.approx(path[0] * 1e-4)


def test_lambda_path_supports_ridge(regression_data):
    """Test that alpha=0 still gives a finite path."""
    X, y = regression_data

    ridge = lambda_path(X, y, l1_ratio=0.0)
    lasso = lambda_path(X, y, l1_ratio=1.0)

    assert np.all(np.isfinite(ridge))
    assert ridge[0] > lasso[0]


def test_lambda_path_constant_target():
    """Test that a constant target does not produce a zero-length path."""
    X = np.random.RandomState(0).randn(20, 2)
    path = lambda_path(X, np.ones(20), l1_ratio=1.0, n_lambdas=10)

    assert np.all(path > 0)


@pytest.mark.parametrize("l1_ratio", [0.0, 0.5, 1.0])
def test_select_penalty_returns_lambda_on_path(regression_data, l1_ratio):
    """Test that the chosen lambda is one of the candidates."""
    X, y = regression_data

    best_lambda, results = select_penalty(X, y, l1_ratio=l1_ratio, cv=5, n_lambdas=30)

    assert best_lambda > 0
    assert np.any(np.isclose(results["lambdas"], best_lambda))
    assert results["best_lambda"] == best_lambda
    assert results["best_score"] >= 0
