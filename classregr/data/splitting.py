"""Data splitting utilities for cross-validation and held-out evaluation.

Two partitions are used:

- k disjoint folds for classification (stratified when possible); every row
  is in exactly one validation fold and fold sizes differ by at most one
- a single train/test split for regression, made once per evaluation and
  shared by every alpha value
"""

from dataclasses import dataclass
from typing import List, Tuple

import numpy as np


@dataclass(frozen=True)
class TrainTestSplit:
    """Row positions of the training and test sets."""

    train_idx: np.ndarray
    test_idx: np.ndarray

    @property
    def n_train(self) -> int:
        return len(self.train_idx)

    @property
    def n_test(self) -> int:
        return len(self.test_idx)


def can_stratify(y, k: int) -> bool:
    """True when every class has at least ``k`` rows."""
    _, counts = np.unique(np.asarray(y), return_counts=True)
    return bool(counts.min() >= k)


def stratified_folds(
    y,
    k: int,
    random_state: int = 0,
    shuffle: bool = True,
    verbose: bool = False,
) -> List[Tuple[np.ndarray, np.ndarray]]:
    """Split row positions into ``k`` (train_idx, val_idx) pairs.

    Parameters
    ----------
    y : array-like
        Class labels, one per row.
    k : int
        Number of folds.
    random_state : int
        Seed used when ``shuffle`` is on.
    shuffle : bool
        Shuffle rows (within each class) before assigning folds.
    verbose : bool
        Print a short summary of the folds.

    Returns
    -------
    list of tuples
        One (train_idx, val_idx) pair per fold. The validation sets partition
        ``range(len(y))``.

    Notes
    -----
    ``StratifiedKFold`` needs every class to have at least ``k`` rows. When
    that does not hold (for example ``k = n_rows - 1``) we fall back to a
    plain shuffled ``KFold``, which still gives equal-sized disjoint folds.
    """
    from sklearn.model_selection import KFold, StratifiedKFold

    y = np.asarray(y)
    seed = random_state if shuffle else None

    if can_stratify(y, k):
        splitter = StratifiedKFold(n_splits=k, shuffle=shuffle, random_state=seed)
        folds = list(splitter.split(np.zeros(len(y)), y))
    else:
        print(
            f"Warning: a class has fewer than k={k} rows; "
            f"using unstratified k-fold instead"
        )
        splitter = KFold(n_splits=k, shuffle=shuffle, random_state=seed)
        folds = list(splitter.split(np.zeros(len(y))))

    if verbose:
        sizes = [len(val_idx) for _, val_idx in folds]
        print(f"\nK-Fold Cross-Validation Setup:")
        print(f"  Number of rows: {len(y)}")
        print(f"  Number of folds: {k}")
        print(f"  Validation fold sizes: {sizes}\n")

    return folds


def fold_assignment(y, k: int, random_state: int = 0, shuffle: bool = True) -> np.ndarray:
    """Map each row position to its validation fold id in ``[0, k)``."""
    folds = stratified_folds(y, k, random_state=random_state, shuffle=shuffle)
    assignment = np.full(len(y), -1, dtype=int)
    for fold_id, (_, val_idx) in enumerate(folds):
        assignment[val_idx] = fold_id
    return assignment


def train_test_partition(
    n_rows: int,
    test_size: float = 0.3,
    random_state: int = 0,
    verbose: bool = False,
) -> TrainTestSplit:
    """Randomly split ``range(n_rows)`` into train and test positions.

    Sampling is without replacement and the two sets cover every row once.
    Both sets are guaranteed to be non-empty.
    """
    from sklearn.model_selection import train_test_split

    if n_rows < 2:
        raise ValueError(f"Need at least 2 rows to make a train/test split, got {n_rows}")

    # round first so 0.3 * 200 is 60, not 61
    n_test = int(np.ceil(round(test_size * n_rows, 8)))
    n_test = min(max(n_test, 1), n_rows - 1)
    train_idx, test_idx = train_test_split(
        np.arange(n_rows),
        test_size=n_test,
        random_state=random_state,
        shuffle=True,
    )

    if verbose:
        print(f"\nTrain/Test Split Setup:")
        print(f"  Train samples: {len(train_idx)}")
        print(f"  Test samples: {len(test_idx)}\n")

    return TrainTestSplit(train_idx=np.sort(train_idx), test_idx=np.sort(test_idx))
