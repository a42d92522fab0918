"""CSV data loader for the command line."""

from typing import List, Optional

import pandas as pd


class CSVDataLoader:
    """Read a CSV into a DataFrame ready for :func:`classregr.evaluate`.

    How to use (via YAML): give the CSV path, the target column, and list any
    columns that hold categories stored as numbers (for example a 0/1 outcome
    you want classified rather than regressed).

    Notes
    -----
    - Text columns are already categorical. Numeric columns stay numeric
      unless named in ``categorical``.
    - Rows with a missing target are dropped with a warning. Missing feature
      values are left for the preprocessing pipeline to impute.

    Parameters
    ----------
    path : str
        Path to CSV file
    target : str
        Name of the target column
    features : list of str, optional
        Feature columns to keep. If None, all columns are kept.
    categorical : list of str, optional
        Columns to cast to pandas ``category`` dtype.
    """

    def __init__(
        self,
        path: str,
        target: str,
        features: Optional[List[str]] = None,
        categorical: Optional[List[str]] = None,
    ):
        self.path = path
        self.target = target
        self.features = features
        self.categorical = list(categorical or [])

    def load(self) -> pd.DataFrame:
        """Read the CSV and return the selected columns."""
        df = pd.read_csv(self.path)

        if self.target not in df.columns:
            raise ValueError(f"Target column '{self.target}' not found in {self.path}")

        if self.features is not None:
            missing = [c for c in self.features if c not in df.columns]
            if missing:
                raise ValueError(f"Feature columns not found in {self.path}: {missing}")
            df = df[[c for c in self.features if c != self.target] + [self.target]].copy()

        for col in self.categorical:
            if col not in df.columns:
                raise ValueError(f"Categorical column '{col}' not found in {self.path}")
            df[col] = df[col].astype("category")

        mask_target = ~df[self.target].isna()
        if not mask_target.all():
            n_dropped = int((~mask_target).sum())
            print(f"Warning: Dropping {n_dropped} rows with NaN in target '{self.target}'")
            df = df[mask_target].reset_index(drop=True)
            if isinstance(df[self.target].dtype, pd.CategoricalDtype):
                df[self.target] = df[self.target].cat.remove_unused_categories()

        return df
