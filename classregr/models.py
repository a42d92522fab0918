"""Model registry: the fit/predict capability providers.

Classifiers are looked up by name (set in YAML under
`evaluation.classifiers`):

- logistic : logistic regression
- lda      : linear discriminant analysis
- qda      : quadratic discriminant analysis
- knn      : k-nearest-neighbours, neighbour count tuned by inner CV

Each name maps to a factory returning an unfitted scikit-learn estimator. The
classification evaluator wraps it in a pipeline with the preprocessing step
and only ever calls ``fit`` and ``predict``, so adding an algorithm is a
single :func:`register_classifier` call.

Regression always uses elastic-net; see :func:`get_regressor`.
"""

from typing import Any, Callable, Dict, List, Optional

from .validation import ConfigurationError

ClassifierFactory = Callable[[Dict[str, Any]], Any]

_CLASSIFIERS: Dict[str, ClassifierFactory] = {}


def register_classifier(name: str, factory: ClassifierFactory, overwrite: bool = False):
    """Add a classifier factory to the registry.

    Parameters
    ----------
    name : str
        Column label used in the result table.
    factory : callable
        ``factory(params) -> estimator``; ``params`` is a dict of settings
        (``random_state``, ``inner_cv``, ``knn_neighbors``) the factory may
        use or ignore.
    overwrite : bool
        Replace an existing entry instead of raising.
    """
    key = name.lower()
    if key in _CLASSIFIERS and not overwrite:
        raise ValueError(f"Classifier '{name}' is already registered")
    _CLASSIFIERS[key] = factory
    return factory


def available_classifiers() -> List[str]:
    """Registered classifier names in registration order."""
    return list(_CLASSIFIERS)


def get_classifier(name: str, params: Optional[Dict[str, Any]] = None):
    """Return an unfitted classifier by name."""
    params = params or {}
    try:
        factory = _CLASSIFIERS[name.lower()]
    except KeyError:
        raise ConfigurationError(
            f"Unknown model name: {name}; available: {available_classifiers()}"
        )
    return factory(params)


def _logistic(params):
    from sklearn.linear_model import LogisticRegression

    return LogisticRegression(
        random_state=params.get("random_state", 0),
        max_iter=params.get("max_iter", 1000),
    )


def _lda(params):
    from sklearn.discriminant_analysis import LinearDiscriminantAnalysis

    return LinearDiscriminantAnalysis()


def _qda(params):
    from sklearn.discriminant_analysis import QuadraticDiscriminantAnalysis

    return QuadraticDiscriminantAnalysis(reg_param=params.get("qda_reg_param", 0.0))


def _knn(params):
    from .tuning import TunedKNeighborsClassifier

    return TunedKNeighborsClassifier(
        n_neighbors_grid=tuple(params.get("knn_neighbors", (5, 7, 9))),
        cv=params.get("inner_cv", 10),
        random_state=params.get("random_state", 0),
    )


# Registration order is the default column order of the result table.
register_classifier("logistic", _logistic)
register_classifier("qda", _qda)
register_classifier("lda", _lda)
register_classifier("knn", _knn)


def get_regressor(l1_ratio: float, penalty: float):
    """Elastic-net regressor with fixed mixing value and penalty strength.

    ``l1_ratio`` is the mixing value (the "alpha" of the result table) and
    ``penalty`` the lambda picked by :func:`classregr.tuning.select_penalty`.
    """
    from sklearn.linear_model import ElasticNet

    return ElasticNet(alpha=penalty, l1_ratio=l1_ratio, max_iter=10000)
