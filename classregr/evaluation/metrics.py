"""Metrics computation for classification and regression.

Pure functions: no state, no printing. An undefined value (a zero
denominator) comes back as ``nan`` rather than raising or being zeroed.
"""

from typing import Any, Dict, Sequence

import numpy as np


def confusion_matrix_2x2(observed, predicted, levels: Sequence[Any]) -> np.ndarray:
    """Count table of observed (rows) against predicted (columns) labels.

    ``levels`` fixes the order of both axes as (negative, positive), so a
    level missing from the predictions still gets its (zero) column.
    """
    from sklearn.metrics import confusion_matrix

    if len(levels) != 2:
        raise ValueError(f"Expected exactly 2 levels, got {len(levels)}")
    matrix = confusion_matrix(observed, predicted, labels=list(levels))
    assert matrix.shape == (2, 2), f"confusion matrix has shape {matrix.shape}"
    return matrix


def _ratio(num: float, den: float) -> float:
    return float(num) / float(den) if den != 0 else float("nan")


def confusion_metrics(matrix) -> Dict[str, float]:
    """Compute performance statistics from a 2x2 confusion matrix.

    Parameters
    ----------
    matrix : array-like, shape (2, 2)
        Rows are observed levels, columns predicted levels, both ordered
        (negative, positive).

    Returns
    -------
    Dict[str, float]
        - accuracy: (TN + TP) / N
        - misclassification_rate: 1 - accuracy
        - sensitivity: TP / (TP + FP), the positive *column* sum
        - recall: TP / (TP + FN), the positive *row* sum
        - f_score: harmonic mean of sensitivity and recall
        - mcc: Matthews correlation coefficient

    Notes
    -----
    "sensitivity" here is what is usually called precision. The names are
    kept so the F-score matches earlier reports exactly; the F-score itself
    is symmetric in the two so its value is the conventional F1.
    """
    m = np.asarray(matrix)
    if m.shape != (2, 2):
        raise ValueError(f"confusion matrix must be 2x2, got shape {m.shape}")

    tn, fp = float(m[0, 0]), float(m[0, 1])
    fn, tp = float(m[1, 0]), float(m[1, 1])
    n = tn + fp + fn + tp

    accuracy = _ratio(tn + tp, n)
    sensitivity = _ratio(tp, tp + fp)
    recall = _ratio(tp, tp + fn)
    f_score = _ratio(2 * sensitivity * recall, sensitivity + recall)
    mcc = _ratio(
        tp * tn - fp * fn,
        np.sqrt((tp + fp) * (tp + fn) * (tn + fp) * (tn + fn)),
    )

    return {
        "accuracy": accuracy,
        "misclassification_rate": 1.0 - accuracy,
        "sensitivity": sensitivity,
        "recall": recall,
        "f_score": f_score,
        "mcc": mcc,
    }


def regression_metrics(predicted, observed) -> Dict[str, float]:
    """Compute RMSE and R-squared of predictions against observed values.

    Parameters
    ----------
    predicted : array-like
        Predicted target values.
    observed : array-like
        Ground truth target values.

    Returns
    -------
    Dict[str, float]
        - RMSE: sqrt(mean((predicted - observed)^2)), always >= 0
        - R2: 1 - SS_res / SS_tot; may be negative, ``nan`` when the observed
          values are constant
    """
    from sklearn.metrics import mean_squared_error, r2_score

    pred = np.asarray(predicted, dtype=float).ravel()
    obs = np.asarray(observed, dtype=float).ravel()
    if pred.shape != obs.shape:
        raise ValueError(
            f"predicted and observed lengths differ: {pred.shape[0]} vs {obs.shape[0]}"
        )

    # SS_tot is zero for a constant target
    if len(obs) > 1 and np.ptp(obs) > 0:
        r2 = float(r2_score(obs, pred, force_finite=False))
    else:
        r2 = float("nan")

    return {
        "RMSE": float(np.sqrt(mean_squared_error(obs, pred))),
        "R2": r2,
    }
