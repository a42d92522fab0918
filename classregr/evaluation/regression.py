"""Elastic-net regression over a grid of mixing values.

One train/test split is made per evaluation and shared by every alpha, so
the columns of the result table are comparable. For each alpha the penalty
strength is chosen by cross-validation on the training rows only; the test
rows are touched once, for the final prediction.
"""

from typing import Any, Dict, List, Sequence

import numpy as np
import pandas as pd
from joblib import Parallel, delayed
from tqdm import tqdm

from ..config import EvaluationConfig
from ..data.preprocessing import build_preprocessing_pipeline, feature_frame, split_feature_columns
from ..data.splitting import train_test_partition
from ..models import get_regressor
from ..tuning import select_penalty
from ..validation import FitError, alpha_label, validate_alpha_grid
from .metrics import regression_metrics
from .results import REGRESSION_ROWS, FitFailure, ResultTable, build_table


def _fit_alpha(alpha, X_train, y_train, X_test, cfg):
    """Select lambda, refit and predict the test rows for one mixing value.

    Errors are returned, not raised, so the caller applies the failure policy.
    """
    stage = "select_penalty"
    try:
        best_lambda, search = select_penalty(
            X_train,
            y_train,
            l1_ratio=alpha,
            cv=cfg.inner_cv,
            n_lambdas=cfg.n_lambdas,
            random_state=cfg.random_state,
        )
        stage = "fit"
        model = get_regressor(l1_ratio=alpha, penalty=best_lambda)
        model.fit(X_train, y_train)
        stage = "predict"
        y_pred = model.predict(X_test)
    except Exception as e:
        return {"alpha": alpha, "y_pred": None, "error": e, "stage": stage}
    return {
        "alpha": alpha,
        "y_pred": y_pred,
        "lambda": best_lambda,
        "cv_mse": search["best_score"],
        "n_nonzero": int(np.count_nonzero(model.coef_)),
        "error": None,
        "stage": None,
    }


def evaluate_alpha_grid(
    dataset: pd.DataFrame,
    target: str,
    alpha_grid: Sequence[float],
    cfg: EvaluationConfig,
) -> ResultTable:
    """Test-set RMSE and R2 of elastic-net for each mixing value.

    Parameters
    ----------
    dataset : DataFrame
        Features plus the numeric target column.
    target : str
        Name of the target column.
    alpha_grid : sequence of float
        Mixing values in [0, 1]; column order of the result follows it.
    cfg : EvaluationConfig
        Evaluation settings.

    Returns
    -------
    ResultTable
        Rows "RMSE", "R2"; one column per alpha, labelled by
        :func:`alpha_label`.
    """
    y = dataset[target].to_numpy(dtype=float)
    X = feature_frame(dataset, target)
    numeric_cols, cat_cols = split_feature_columns(dataset, target)

    split = train_test_partition(
        len(dataset), test_size=cfg.test_size, random_state=cfg.random_state, verbose=cfg.verbose
    )

    # Fit preprocessing on training rows only (important!)
    preprocessor = build_preprocessing_pipeline(
        numeric_cols, cat_cols, cfg.scaling, cfg.impute_strategy
    )
    X_train = preprocessor.fit_transform(X.iloc[split.train_idx])
    X_test = preprocessor.transform(X.iloc[split.test_idx])
    y_train = y[split.train_idx]
    y_test = y[split.test_idx]

    grid = list(validate_alpha_grid(alpha_grid))
    alpha_results = Parallel(n_jobs=cfg.n_jobs)(
        delayed(_fit_alpha)(alpha, X_train.copy(), y_train.copy(), X_test.copy(), cfg)
        for alpha in tqdm(grid, desc="Alpha grid", unit="alpha", disable=not cfg.verbose)
    )

    columns: Dict[str, Dict[str, float]] = {}
    details: Dict[str, Dict[str, Any]] = {}
    failures: List[FitFailure] = []

    # Parallel returns results in grid order
    for res in alpha_results:
        alpha = res["alpha"]
        label = alpha_label(alpha)

        if res["error"] is not None:
            if cfg.raise_on_fit_error:
                raise FitError(
                    f"elastic-net failed at {res['stage']} for alpha={label}: {res['error']}"
                ) from res["error"]
            failure = FitFailure(
                column=label, stage=res["stage"], error=repr(res["error"]), alpha=alpha,
            )
            print(f"Warning: {failure.describe()}")
            failures.append(failure)
            columns[label] = {}
            details[label] = {"alpha": alpha, "error": repr(res["error"])}
            continue

        metrics = regression_metrics(res["y_pred"], y_test)
        columns[label] = metrics
        details[label] = dict(
            metrics,
            alpha=alpha,
            best_lambda=res["lambda"],
            cv_mse=res["cv_mse"],
            n_nonzero=res["n_nonzero"],
            n_train=split.n_train,
            n_test=split.n_test,
        )

        if cfg.verbose:
            print(f"  alpha={label}: RMSE={metrics['RMSE']:.3f} R2={metrics['R2']:.3f}")

    return build_table("regression", REGRESSION_ROWS, columns, details, failures)
