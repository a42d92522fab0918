"""Entry point: pick the evaluation protocol from the target and run it.

>>> from classregr import evaluate
>>> result = evaluate(df, "outcome", k=5)
>>> result.table
"""

from typing import Any, Dict, Optional, Sequence, Union

import pandas as pd

from .config import DEFAULT_ALPHA_GRID, EvaluationConfig
from .evaluation.classification import evaluate_classifiers
from .evaluation.regression import evaluate_alpha_grid
from .evaluation.results import ResultTable
from .target import Binary, Continuous, infer_target_kind
from .validation import validate_alpha_grid, validate_inputs

ConfigLike = Union[EvaluationConfig, Dict[str, Any], None]


def _as_config(config: ConfigLike) -> EvaluationConfig:
    if config is None:
        return EvaluationConfig()
    if isinstance(config, EvaluationConfig):
        return config
    return EvaluationConfig.from_dict(config)


def evaluate(
    dataset: pd.DataFrame,
    target: str,
    k: int = 5,
    alpha_grid: Sequence[float] = DEFAULT_ALPHA_GRID,
    config: ConfigLike = None,
) -> ResultTable:
    """Compare models on ``dataset`` for predicting ``target``.

    A two-level categorical target is classified with logistic regression,
    LDA, QDA and k-nearest-neighbours under ``k``-fold cross-validation. A
    numeric target is regressed with elastic-net for every mixing value in
    ``alpha_grid`` on a single 70/30 train/test split.

    Parameters
    ----------
    dataset : DataFrame
        Input data; every column except ``target`` is a feature. Not modified.
    target : str
        Name of the column to classify or regress.
    k : int
        Number of folds, 2 <= k < number of rows. Used for classification.
    alpha_grid : sequence of float
        Elastic-net mixing values in [0, 1]. Used for regression.
    config : EvaluationConfig or dict, optional
        Further settings (seed, inner CV folds, n_jobs, fit-failure policy).
        A dict is read like a loaded YAML config.

    Returns
    -------
    ResultTable
        Classification: rows accuracy / misc rate / F-score, one column per
        classifier. Regression: rows RMSE / R2, one column per alpha.

    Raises
    ------
    ConfigurationError
        Invalid dataset, target, ``k`` or ``alpha_grid``, or a categorical
        target without exactly two levels.
    FitError
        Only when ``raise_on_fit_error`` is set and a model fails.
    """
    cfg = _as_config(config)
    validate_inputs(dataset, target, k, alpha_grid)
    kind = infer_target_kind(dataset[target])

    if cfg.verbose:
        print(f"\n{'='*70}")
        print(f"Target: {target} ({type(kind).__name__.lower()}), rows: {len(dataset)}")
        print(f"{'='*70}")

    if isinstance(kind, Binary):
        return evaluate_classifiers(dataset, target, kind, int(k), cfg)
    if isinstance(kind, Continuous):
        return evaluate_alpha_grid(dataset, target, validate_alpha_grid(alpha_grid), cfg)
    raise TypeError(f"Unsupported target kind: {kind!r}")


def class_regr(data: pd.DataFrame, Y: str, k: int = 5,
               alpha: Sequence[float] = DEFAULT_ALPHA_GRID) -> ResultTable:
    """Alias of :func:`evaluate` with the historical argument names."""
    return evaluate(data, Y, k=k, alpha_grid=alpha)


def evaluate_from_config(dataset: pd.DataFrame, cfg: Dict[str, Any],
                         target: Optional[str] = None) -> ResultTable:
    """Run :func:`evaluate` with ``k``, ``alpha_grid`` and target from a config dict."""
    eval_cfg = EvaluationConfig.from_dict(cfg)
    target = target or (cfg.get("data") or {}).get("target")
    return evaluate(dataset, target, k=eval_cfg.k, alpha_grid=eval_cfg.alpha_grid, config=eval_cfg)
