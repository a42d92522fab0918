"""k-fold cross-validated comparison of binary classifiers.

For each registered classifier we fit a fresh pipeline (preprocessing plus
classifier) on the training folds, predict the held-out fold, and collect the
held-out predictions of all folds into one record covering every row. The
confusion matrix of that record gives accuracy, misclassification rate and
F-score.

Folds can run in parallel (``n_jobs``); predictions are only written into the
record once every fold of an algorithm has finished.
"""

from typing import Any, Dict, List

import numpy as np
import pandas as pd
from joblib import Parallel, delayed
from sklearn.pipeline import Pipeline
from tqdm import tqdm

from ..config import EvaluationConfig, classifier_names
from ..data.preprocessing import build_preprocessing_pipeline, feature_frame, split_feature_columns
from ..data.splitting import stratified_folds
from ..models import get_classifier
from ..target import Binary
from ..validation import FitError
from .metrics import confusion_matrix_2x2, confusion_metrics
from .results import CLASSIFICATION_ROWS, FitFailure, OutOfFoldPredictions, ResultTable, build_table


def _classifier_params(cfg: EvaluationConfig) -> Dict[str, Any]:
    params = dict(cfg.extra)
    params.update(
        random_state=cfg.random_state,
        inner_cv=cfg.inner_cv,
        knn_neighbors=cfg.knn_neighbors,
    )
    return params


def _fit_predict_fold(name, params, numeric_cols, cat_cols, cfg, fold_id,
                      X_train, y_train, X_val, val_idx):
    """Fit one classifier on one training fold and predict its held-out fold.

    Errors are returned, not raised, so the caller can decide the policy
    after all folds are collected.
    """
    stage = "fit"
    try:
        model = Pipeline([
            ("preprocess", build_preprocessing_pipeline(
                numeric_cols, cat_cols, cfg.scaling, cfg.impute_strategy)),
            ("model", get_classifier(name, params)),
        ])
        model.fit(X_train, y_train)
        stage = "predict"
        y_pred = model.predict(X_val)
    except Exception as e:
        return {"fold": fold_id, "val_idx": val_idx, "y_pred": None, "error": e, "stage": stage}
    return {"fold": fold_id, "val_idx": val_idx, "y_pred": y_pred, "error": None, "stage": None}


def cross_validate_classifier(
    name: str,
    X: pd.DataFrame,
    y: np.ndarray,
    folds,
    numeric_cols: List[str],
    cat_cols: List[str],
    cfg: EvaluationConfig,
):
    """Out-of-fold predictions of one classifier.

    Returns
    -------
    tuple
        (OutOfFoldPredictions, list of fold results that raised)
    """
    params = _classifier_params(cfg)
    fold_results = Parallel(n_jobs=cfg.n_jobs)(
        delayed(_fit_predict_fold)(
            name, params, numeric_cols, cat_cols, cfg, fold_id,
            X.iloc[train_idx].copy(), y[train_idx].copy(),
            X.iloc[val_idx].copy(), val_idx,
        )
        for fold_id, (train_idx, val_idx) in enumerate(folds)
    )

    record = OutOfFoldPredictions(y)
    errors = [r for r in fold_results if r["error"] is not None]
    if not errors:
        for r in fold_results:
            record.record(r["fold"], r["val_idx"], r["y_pred"])
    return record, errors


def evaluate_classifiers(
    dataset: pd.DataFrame,
    target: str,
    kind: Binary,
    k: int,
    cfg: EvaluationConfig,
) -> ResultTable:
    """Cross-validate every configured classifier and tabulate the metrics.

    Parameters
    ----------
    dataset : DataFrame
        Features plus the target column.
    target : str
        Name of the target column.
    kind : Binary
        Target levels; ``kind.positive`` is the positive class.
    k : int
        Number of folds.
    cfg : EvaluationConfig
        Evaluation settings.

    Returns
    -------
    ResultTable
        Rows "accuracy", "misc rate", "F-score"; one column per classifier.
    """
    names = classifier_names(cfg)
    y = dataset[target].to_numpy()
    X = feature_frame(dataset, target)
    numeric_cols, cat_cols = split_feature_columns(dataset, target)
    folds = stratified_folds(y, k, random_state=cfg.random_state, verbose=cfg.verbose)

    columns: Dict[str, Dict[str, float]] = {}
    details: Dict[str, Dict[str, Any]] = {}
    failures: List[FitFailure] = []

    for name in tqdm(names, desc="Classifiers", unit="model", disable=not cfg.verbose):
        record, errors = cross_validate_classifier(name, X, y, folds, numeric_cols, cat_cols, cfg)

        if errors:
            first = errors[0]
            if cfg.raise_on_fit_error:
                raise FitError(
                    f"{name} failed to {first['stage']} on fold {first['fold'] + 1}/{k}: "
                    f"{first['error']}"
                ) from first["error"]
            for err in errors:
                failure = FitFailure(
                    column=name, stage=err["stage"], error=repr(err["error"]), fold=err["fold"],
                )
                print(f"Warning: {failure.describe()}")
                failures.append(failure)
            columns[name] = {}
            details[name] = {"error": repr(first["error"])}
            continue

        matrix = confusion_matrix_2x2(record.observed, record.predicted, kind.levels)
        metrics = confusion_metrics(matrix)
        columns[name] = {
            "accuracy": metrics["accuracy"],
            "misc rate": metrics["misclassification_rate"],
            "F-score": metrics["f_score"],
        }
        details[name] = dict(
            metrics,
            confusion_matrix=matrix.tolist(),
            levels=list(kind.levels),
            fold=record.fold.copy(),
        )

        if cfg.verbose:
            print(
                f"  {name}: accuracy={metrics['accuracy']:.3f} "
                f"F-score={metrics['f_score']:.3f}"
            )

    return build_table("classification", CLASSIFICATION_ROWS, columns, details, failures)
