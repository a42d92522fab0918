"""Configuration helpers for classregr.

Settings live in a small YAML file (see `configs/example_config.yaml`). We read
that file into a plain dictionary and build an :class:`EvaluationConfig` from
the ``evaluation`` and ``preprocessing`` sections. Anything missing from the
YAML falls back to the defaults below, so an empty file is a valid config.
"""

import yaml
from dataclasses import dataclass, field, fields
from typing import Any, Dict, List, Optional, Tuple

from .validation import ConfigurationError

DEFAULT_ALPHA_GRID = (0.0, 0.2, 0.4, 0.6, 0.8, 1.0)
DEFAULT_CLASSIFIERS = ("logistic", "qda", "lda", "knn")


def load_config(path: str) -> Dict[str, Any]:
    """Load a YAML config file.

    Parameters
    ----------
    path : str
        Path to a .yaml or .yml file.

    Returns
    -------
    Dict[str, Any]
        A nested dictionary of configuration values.
    """
    with open(path, "r") as f:
        cfg = yaml.safe_load(f)

    if cfg is None:
        cfg = {}
    if not isinstance(cfg, dict):
        raise ConfigurationError(f"Config file {path} must contain a mapping")

    for section in ("data", "evaluation", "preprocessing", "output"):
        if cfg.get(section) is not None and not isinstance(cfg[section], dict):
            raise ConfigurationError(
                f"Section '{section}' in {path} must be a mapping, "
                f"got {type(cfg[section]).__name__}"
            )

    # Allow a single classifier name instead of a list
    evaluation = cfg.get("evaluation") or {}
    if isinstance(evaluation.get("classifiers"), str):
        evaluation["classifiers"] = [evaluation["classifiers"]]
    if isinstance(evaluation.get("alpha_grid"), (int, float)):
        evaluation["alpha_grid"] = [evaluation["alpha_grid"]]

    return cfg


@dataclass
class EvaluationConfig:
    """Knobs for one evaluation run.

    ``k`` and ``alpha_grid`` here are only defaults: the arguments passed to
    ``evaluate`` take precedence.
    """

    k: int = 5
    alpha_grid: Tuple[float, ...] = DEFAULT_ALPHA_GRID
    random_state: int = 0
    test_size: float = 0.3
    inner_cv: int = 10
    n_lambdas: int = 100
    knn_neighbors: Tuple[int, ...] = (5, 7, 9)
    classifiers: Tuple[str, ...] = DEFAULT_CLASSIFIERS
    n_jobs: int = 1
    raise_on_fit_error: bool = False
    verbose: bool = False
    scaling: str = "standard"
    impute_strategy: str = "mean"
    extra: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        self.alpha_grid = tuple(self.alpha_grid)
        self.knn_neighbors = tuple(int(n) for n in self.knn_neighbors)
        self.classifiers = tuple(self.classifiers)
        if not 0 < self.test_size < 1:
            raise ConfigurationError("test_size must be between 0 and 1")
        if self.inner_cv < 2:
            raise ConfigurationError("inner_cv must be at least 2")
        if self.n_lambdas < 1:
            raise ConfigurationError("n_lambdas must be at least 1")
        if not self.knn_neighbors or min(self.knn_neighbors) < 1:
            raise ConfigurationError("knn_neighbors must be positive integers")
        if self.scaling not in ("standard", "minmax"):
            raise ConfigurationError(
                f"scaling must be 'standard' or 'minmax', got {self.scaling!r}"
            )

    @classmethod
    def from_dict(cls, cfg: Optional[Dict[str, Any]]) -> "EvaluationConfig":
        """Build a config from the dictionary returned by :func:`load_config`.

        Keys under ``evaluation`` and ``preprocessing`` map onto the fields of
        this class; unknown keys are kept in ``extra``.
        """
        cfg = cfg or {}
        known = {f.name for f in fields(cls)} - {"extra"}
        merged: Dict[str, Any] = {}
        for section in ("evaluation", "preprocessing"):
            values = cfg.get(section) or {}
            if not isinstance(values, dict):
                raise ConfigurationError(f"Section '{section}' must be a mapping")
            merged.update(values)

        kwargs = {k: v for k, v in merged.items() if k in known}
        kwargs["extra"] = {k: v for k, v in merged.items() if k not in known}
        return cls(**kwargs)


def classifier_names(cfg: EvaluationConfig) -> List[str]:
    """Return the configured classifier names, checked against the registry."""
    from .models import available_classifiers

    registered = available_classifiers()
    unknown = [name for name in cfg.classifiers if name not in registered]
    if unknown:
        raise ConfigurationError(
            f"Unknown classifier(s) {unknown}; available: {registered}"
        )
    return list(cfg.classifiers)
