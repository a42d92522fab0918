"""Evaluation module for classregr.

Submodules:
- metrics: confusion-matrix and regression metrics (pure functions)
- classification: k-fold cross-validation of the registered classifiers
- regression: elastic-net sweep over the alpha grid
- results: ResultTable and the out-of-fold prediction record
- reporting: console display and CSV/JSON output
"""

from .metrics import (
    confusion_matrix_2x2,
    confusion_metrics,
    regression_metrics,
)
from .results import (
    FitFailure,
    OutOfFoldPredictions,
    ResultTable,
)
from .classification import evaluate_classifiers
from .regression import alpha_label, evaluate_alpha_grid
from .reporting import (
    best_column,
    format_result_table,
    print_result_table,
    save_result_table,
)

from . import metrics
from . import reporting

__all__ = [
    # Evaluators
    'evaluate_classifiers',
    'evaluate_alpha_grid',
    'alpha_label',

    # Metric functions
    'confusion_matrix_2x2',
    'confusion_metrics',
    'regression_metrics',

    # Results
    'FitFailure',
    'OutOfFoldPredictions',
    'ResultTable',

    # Reporting
    'best_column',
    'format_result_table',
    'print_result_table',
    'save_result_table',

    # Submodules
    'metrics',
    'reporting',
]
