"""classregr package namespace."""

from .config import EvaluationConfig, load_config
from .data import CSVDataLoader
from .evaluate import class_regr, evaluate, evaluate_from_config
from .evaluation import ResultTable, print_result_table
from .models import register_classifier
from .target import Binary, Continuous, infer_target_kind
from .validation import ConfigurationError, FitError

__all__ = [
    "evaluate",
    "evaluate_from_config",
    "class_regr",
    "load_config",
    "EvaluationConfig",
    "CSVDataLoader",
    "ResultTable",
    "print_result_table",
    "register_classifier",
    "Binary",
    "Continuous",
    "infer_target_kind",
    "ConfigurationError",
    "FitError",
]
