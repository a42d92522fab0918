"""Preprocessing utilities for turning a DataFrame into a model matrix."""

from typing import List, Tuple

import pandas as pd


def split_feature_columns(dataset: pd.DataFrame, target: str) -> Tuple[List[str], List[str]]:
    """Return (numeric_cols, cat_cols) for every column except ``target``.

    Bool columns count as categorical so they get a single dummy column.
    """
    features = dataset.drop(columns=[target])
    numeric_cols = features.select_dtypes(include=["number"]).columns.tolist()
    cat_cols = [c for c in features.columns if c not in numeric_cols]
    return numeric_cols, cat_cols


def build_preprocessing_pipeline(numeric_cols: List[str], cat_cols: List[str],
                                 scaling: str = "standard", impute_strategy: str = "mean"):
    """Build a scikit-learn preprocessing pipeline.

    Parameters
    ----------
    numeric_cols : list of str
        Names of numeric columns
    cat_cols : list of str
        Names of categorical columns
    scaling : str
        "standard" or "minmax" scaling for numeric features
    impute_strategy : str
        Imputation strategy for numeric features ("mean", "median", "most_frequent")

    Returns
    -------
    ColumnTransformer
        Preprocessing pipeline ready to fit

    Notes
    -----
    Categorical columns are one-hot encoded with the first level dropped, the
    same coding a model matrix with an intercept uses. Without the drop,
    logistic regression and LDA would see perfectly collinear dummies.
    """
    from sklearn.impute import SimpleImputer
    from sklearn.preprocessing import StandardScaler, MinMaxScaler, OneHotEncoder
    from sklearn.compose import ColumnTransformer
    from sklearn.pipeline import Pipeline

    transformers = []

    if numeric_cols:
        scaler = StandardScaler() if scaling == "standard" else MinMaxScaler()
        num_pipeline = Pipeline([
            ("imputer", SimpleImputer(strategy=impute_strategy)),
            ("scaler", scaler)
        ])
        transformers.append(("num", num_pipeline, numeric_cols))

    if cat_cols:
        cat_pipeline = Pipeline([
            ("imputer", SimpleImputer(strategy="most_frequent")),
            ("onehot", OneHotEncoder(drop="first", handle_unknown="ignore", sparse_output=False)),
        ])
        transformers.append(("cat", cat_pipeline, cat_cols))

    return ColumnTransformer(transformers=transformers, remainder="drop")


def feature_frame(dataset: pd.DataFrame, target: str) -> pd.DataFrame:
    """Feature columns only, with non-numeric columns cast to ``object``.

    ``SimpleImputer`` cannot impute pandas ``category`` or ``string`` columns,
    so those are converted to plain objects first.
    """
    from pandas.api.types import is_numeric_dtype

    X = dataset.drop(columns=[target])
    for col in X.columns:
        if X[col].dtype == bool or not is_numeric_dtype(X[col]):
            X[col] = X[col].astype(object)
    return X
