"""Input checks run before any model is fitted.

Everything here raises :class:`ConfigurationError`, a ``ValueError`` subclass,
so callers that already catch ``ValueError`` keep working. These errors are
fatal: they describe a bad dataset or bad arguments and are never retried.
"""

from numbers import Integral, Real
from typing import Sequence

import numpy as np
import pandas as pd


class ConfigurationError(ValueError):
    """Raised when the dataset, target or evaluation settings are invalid."""


class FitError(RuntimeError):
    """Raised when a model fails to fit and ``raise_on_fit_error`` is set."""


def validate_k(k, n_rows: int) -> int:
    """Check the fold count: an integer with 2 <= k < n_rows."""
    if isinstance(k, bool) or not isinstance(k, Integral):
        raise ConfigurationError(f"k must be an integer, got {k!r}")
    if k < 2:
        raise ConfigurationError("k must be at least equal to 2")
    if k >= n_rows:
        raise ConfigurationError(
            f"k cannot be bigger than or equal to the number of observations "
            f"(k={k}, rows={n_rows})"
        )
    return int(k)


def alpha_label(alpha: float) -> str:
    """Column label for a mixing value: 0 -> "0", 0.2 -> "0.2", 1 -> "1"."""
    return f"{float(alpha):.15g}"


def validate_alpha_grid(alpha_grid) -> Sequence[float]:
    """Check the elastic-net mixing grid and return it as a tuple of floats."""
    if isinstance(alpha_grid, (str, bytes)):
        raise ConfigurationError("invalid input for alpha")
    if isinstance(alpha_grid, Real) and not isinstance(alpha_grid, bool):
        alpha_grid = [alpha_grid]
    try:
        values = list(alpha_grid)
    except TypeError:
        raise ConfigurationError("invalid input for alpha")
    if not values:
        raise ConfigurationError("alpha grid must contain at least one value")

    grid = []
    for a in values:
        if isinstance(a, bool) or not isinstance(a, Real):
            raise ConfigurationError(f"alpha must be integer or numeric, got {a!r}")
        if not np.isfinite(a) or a < 0 or a > 1:
            raise ConfigurationError(f"alpha must be between 0 and 1, got {a!r}")
        grid.append(float(a))
    # values that print the same would share a result column
    labels = [alpha_label(a) for a in grid]
    if len(set(labels)) != len(labels):
        raise ConfigurationError(f"alpha grid contains duplicate values: {labels}")
    return tuple(grid)


def validate_inputs(dataset, target, k, alpha_grid) -> None:
    """Validate everything ``evaluate`` needs before dispatching.

    Parameters
    ----------
    dataset : DataFrame
        Input table. Must have the target column and at least one feature.
    target : str
        Name of the dependent variable.
    k : int
        Number of cross-validation folds (2 <= k < number of rows).
    alpha_grid : sequence of float
        Elastic-net mixing values, each in [0, 1].
    """
    if not isinstance(dataset, pd.DataFrame):
        raise ConfigurationError("dataset must be a pandas DataFrame")
    if not isinstance(target, str):
        raise ConfigurationError("target must be a string")
    if target not in dataset.columns:
        raise ConfigurationError(f"target column '{target}' not found in dataset")
    if dataset.shape[1] < 2:
        raise ConfigurationError("dataset must contain at least one feature column")

    n_missing = int(dataset[target].isna().sum())
    if n_missing:
        raise ConfigurationError(
            f"target column '{target}' has {n_missing} missing values"
        )

    validate_k(k, len(dataset))
    validate_alpha_grid(alpha_grid)
