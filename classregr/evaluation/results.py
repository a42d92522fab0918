"""Result containers returned by the evaluators."""

import copy
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

import numpy as np
import pandas as pd

CLASSIFICATION_ROWS = ("accuracy", "misc rate", "F-score")
REGRESSION_ROWS = ("RMSE", "R2")


@dataclass(frozen=True)
class FitFailure:
    """One algorithm or alpha whose fit (or prediction) raised.

    ``fold`` is set for classification failures, ``alpha`` for regression.
    """

    column: str
    stage: str
    error: str
    fold: Optional[int] = None
    alpha: Optional[float] = None

    def describe(self) -> str:
        where = f"fold {self.fold + 1}" if self.fold is not None else f"alpha={self.alpha:g}"
        return f"{self.column} ({where}, {self.stage}): {self.error}"


class OutOfFoldPredictions:
    """Held-out predictions for every row of a cross-validated dataset.

    Each row position receives exactly one prediction, from the fold in
    which it was held out. Recording a second prediction for the same row is
    an error.
    """

    def __init__(self, observed):
        self.observed = np.asarray(observed)
        self.predicted = np.empty_like(self.observed)
        self.fold = np.full(len(self.observed), -1, dtype=int)

    def __len__(self):
        return len(self.observed)

    def record(self, fold_id: int, row_idx, predictions) -> None:
        row_idx = np.asarray(row_idx)
        if len(row_idx) != len(predictions):
            raise ValueError(
                f"fold {fold_id}: {len(predictions)} predictions for {len(row_idx)} rows"
            )
        already = row_idx[self.fold[row_idx] >= 0]
        if len(already):
            raise ValueError(f"rows already predicted: {already[:10].tolist()}")
        self.predicted[row_idx] = predictions
        self.fold[row_idx] = fold_id

    @property
    def complete(self) -> bool:
        return bool((self.fold >= 0).all())


@dataclass(frozen=True)
class ResultTable:
    """Metrics table for one evaluation run.

    Attributes
    ----------
    mode : str
        "classification" or "regression".
    details : Dict[str, Dict[str, Any]]
        Per column (algorithm or alpha label) detailed results: every metric
        computed, the confusion matrix or the selected lambda. Returned as a
        copy, so changing it does not change the result.
    failures : Tuple[FitFailure, ...]
        Columns whose fit failed; their values in the table are NaN.
    """

    mode: str
    _frame: pd.DataFrame = field(repr=False)
    _details: Dict[str, Dict[str, Any]] = field(default_factory=dict, repr=False)
    failures: Tuple[FitFailure, ...] = ()

    @property
    def table(self) -> pd.DataFrame:
        """The metrics table (rows = metric, columns = algorithm or alpha)."""
        return self._frame.copy()

    @property
    def details(self) -> Dict[str, Dict[str, Any]]:
        return copy.deepcopy(self._details)

    @property
    def columns(self) -> List[str]:
        return list(self._frame.columns)

    @property
    def rows(self) -> List[str]:
        return list(self._frame.index)

    def __getitem__(self, column: str) -> pd.Series:
        return self._frame[column].copy()

    def value(self, row: str, column: str) -> float:
        return float(self._frame.loc[row, column])

    def to_dict(self) -> Dict[str, Any]:
        """JSON-friendly representation (NaN becomes None)."""
        values = {
            col: {
                row: (None if pd.isna(v) else float(v))
                for row, v in self._frame[col].items()
            }
            for col in self._frame.columns
        }
        return {
            "mode": self.mode,
            "table": values,
            "failures": [f.__dict__.copy() for f in self.failures],
        }

    def __str__(self):
        return self._frame.to_string(float_format=lambda v: f"{v:.4f}")


def build_table(mode: str, rows, columns: Dict[str, Dict[str, float]],
                details=None, failures=()) -> ResultTable:
    """Assemble a :class:`ResultTable` from per-column metric dicts.

    Column order follows the insertion order of ``columns``.
    """
    frame = pd.DataFrame(
        {col: [metrics.get(row, np.nan) for row in rows] for col, metrics in columns.items()},
        index=list(rows),
        dtype=float,
    )
    return ResultTable(
        mode=mode,
        _frame=frame,
        _details=copy.deepcopy(dict(details or {})),
        failures=tuple(failures),
    )
