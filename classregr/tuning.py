"""Inner model selection.

Two searches run inside a training set and never look at held-out rows:

- the neighbour count of k-nearest-neighbours, chosen by ``GridSearchCV`` to
  maximise cross-validated accuracy
- the penalty strength (lambda) of elastic-net regression for a fixed mixing
  value, chosen by ``ElasticNetCV`` to minimise cross-validated squared error

Naming: scikit-learn calls the penalty strength ``alpha`` and the mixing value
``l1_ratio``. In this package "alpha" always means the mixing value (0 = ridge,
1 = lasso) and "lambda" the penalty strength.
"""

from typing import Dict, Optional, Sequence, Tuple

import numpy as np
from sklearn.base import BaseEstimator, ClassifierMixin
from sklearn.model_selection import GridSearchCV, KFold, StratifiedKFold

# Mixing values below this are treated as this when sizing the lambda path,
# since lambda_max is infinite for a pure ridge penalty.
MIN_L1_RATIO_FOR_PATH = 1e-3


def _inner_splitter(y, cv: int, stratify: bool, random_state: Optional[int]):
    """Pick an inner CV splitter that the training set can support."""
    y = np.asarray(y)
    n = len(y)
    if stratify:
        _, counts = np.unique(y, return_counts=True)
        n_splits = min(cv, int(counts.min()))
        if n_splits >= 2:
            return StratifiedKFold(n_splits=n_splits, shuffle=True, random_state=random_state)
    n_splits = max(2, min(cv, n))
    return KFold(n_splits=n_splits, shuffle=True, random_state=random_state)


def _smallest_train_size(splitter, n: int) -> int:
    """Size of the smallest inner training fold for ``n`` rows."""
    return n - int(np.ceil(n / splitter.get_n_splits()))


class TunedKNeighborsClassifier(ClassifierMixin, BaseEstimator):
    """k-nearest-neighbours with the neighbour count picked by inner CV.

    Parameters
    ----------
    n_neighbors_grid : sequence of int
        Candidate neighbour counts. Candidates larger than the smallest inner
        training fold are skipped.
    cv : int
        Number of inner folds (reduced when a class is too small).
    scoring : str
        Selection metric for ``GridSearchCV``.
    random_state : int, optional
        Seed for shuffling the inner folds.
    """

    def __init__(
        self,
        n_neighbors_grid: Sequence[int] = (5, 7, 9),
        cv: int = 10,
        scoring: str = "accuracy",
        random_state: Optional[int] = 0,
    ):
        self.n_neighbors_grid = n_neighbors_grid
        self.cv = cv
        self.scoring = scoring
        self.random_state = random_state

    def fit(self, X, y):
        from sklearn.neighbors import KNeighborsClassifier

        y = np.asarray(y)
        splitter = _inner_splitter(y, self.cv, stratify=True, random_state=self.random_state)
        max_k = max(_smallest_train_size(splitter, len(y)), 1)
        grid = sorted({int(k) for k in self.n_neighbors_grid if int(k) <= max_k})
        if not grid:
            grid = [max_k]

        search = GridSearchCV(
            KNeighborsClassifier(),
            {"n_neighbors": grid},
            cv=splitter,
            scoring=self.scoring,
            refit=True,
        )
        search.fit(X, y)

        self.search_ = search
        self.best_estimator_ = search.best_estimator_
        self.n_neighbors_ = search.best_params_["n_neighbors"]
        self.best_score_ = search.best_score_
        self.classes_ = self.best_estimator_.classes_
        return self

    def predict(self, X):
        return self.best_estimator_.predict(X)

    def predict_proba(self, X):
        return self.best_estimator_.predict_proba(X)


def lambda_path(X, y, l1_ratio: float, n_lambdas: int = 100) -> np.ndarray:
    """Decreasing sequence of penalty strengths for one mixing value.

    The path runs from the smallest lambda that zeroes every coefficient down
    to ``eps * lambda_max`` on a log scale, where ``eps`` is 1e-4 when there
    are more rows than columns and 1e-2 otherwise.
    """
    X = np.asarray(X, dtype=float)
    y = np.asarray(y, dtype=float)
    n, p = X.shape

    Xc = X - X.mean(axis=0)
    yc = y - y.mean()
    ratio = max(float(l1_ratio), MIN_L1_RATIO_FOR_PATH)
    lambda_max = float(np.max(np.abs(Xc.T @ yc))) / (n * ratio) if p else 0.0
    if not np.isfinite(lambda_max) or lambda_max <= 0:
        # constant target or constant features: every lambda fits the mean
        lambda_max = 1.0

    eps = 1e-4 if n > p else 1e-2
    if n_lambdas == 1:
        return np.array([lambda_max])
    return np.geomspace(lambda_max, lambda_max * eps, num=n_lambdas)


def select_penalty(
    X_train: np.ndarray,
    y_train: np.ndarray,
    l1_ratio: float,
    cv: int = 10,
    n_lambdas: int = 100,
    random_state: Optional[int] = 0,
) -> Tuple[float, Dict]:
    """Choose lambda for a fixed mixing value by K-fold CV on training rows.

    Parameters
    ----------
    X_train : np.ndarray
        Preprocessed training features
    y_train : np.ndarray
        Training targets
    l1_ratio : float
        Elastic-net mixing value in [0, 1]
    cv : int
        Number of inner folds (capped at the number of rows)
    n_lambdas : int
        Length of the lambda path
    random_state : int, optional
        Seed for shuffling the inner folds

    Returns
    -------
    best_lambda : float
        Penalty strength with the lowest mean CV squared error
    results : Dict
        ``best_lambda``, ``best_score`` (mean CV MSE at ``best_lambda``) and
        the full ``lambdas`` path
    """
    from sklearn.linear_model import ElasticNetCV

    lambdas = lambda_path(X_train, y_train, l1_ratio, n_lambdas=n_lambdas)
    splitter = _inner_splitter(y_train, cv, stratify=False, random_state=random_state)

    search = ElasticNetCV(
        l1_ratio=l1_ratio,
        alphas=lambdas,
        cv=splitter,
        max_iter=10000,
    )
    search.fit(X_train, y_train)

    mean_mse = search.mse_path_.mean(axis=-1)
    best_idx = int(np.argmin(mean_mse))
    results = {
        "best_lambda": float(search.alpha_),
        "best_score": float(mean_mse[best_idx]),
        "lambdas": search.alphas_,
    }
    return float(search.alpha_), results
