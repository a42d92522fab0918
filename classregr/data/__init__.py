"""Data loading, preprocessing and partitioning."""

from .loader import CSVDataLoader
from .preprocessing import (
    build_preprocessing_pipeline,
    feature_frame,
    split_feature_columns,
)
from .splitting import (
    TrainTestSplit,
    fold_assignment,
    stratified_folds,
    train_test_partition,
)

__all__ = [
    "CSVDataLoader",
    "build_preprocessing_pipeline",
    "feature_frame",
    "split_feature_columns",
    "TrainTestSplit",
    "fold_assignment",
    "stratified_folds",
    "train_test_partition",
]
