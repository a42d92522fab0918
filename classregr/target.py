"""Target kind detection.

The evaluation mode is decided once, here, from the target column's dtype:

- a numeric column is ``Continuous`` and goes to the regression evaluator
- a categorical column (pandas ``category``, object/string, or bool) must have
  exactly two levels and becomes ``Binary``

The positive level is the second one. For a ``category`` column that is the
second *declared* category (like R factor levels); for any other dtype it is
the second level in sorted order (string order when the values are of mixed
types).
"""

from dataclasses import dataclass
from typing import Any, Tuple, Union

import pandas as pd
from pandas.api import types as ptypes

from .validation import ConfigurationError


@dataclass(frozen=True)
class Binary:
    levels: Tuple[Any, Any]

    @property
    def negative(self):
        return self.levels[0]

    @property
    def positive(self):
        return self.levels[1]


@dataclass(frozen=True)
class Continuous:
    pass


TargetKind = Union[Binary, Continuous]


def _sorted_levels(values):
    """Natural order when the values compare, string order for mixed types."""
    try:
        return sorted(values)
    except TypeError:
        return sorted(values, key=str)


def infer_target_kind(y: pd.Series) -> TargetKind:
    """Classify a target column as ``Binary`` or ``Continuous``.

    Raises
    ------
    ConfigurationError
        If the column is categorical with a number of levels other than two.
    """
    if isinstance(y.dtype, pd.CategoricalDtype):
        levels = list(y.cat.categories)
    elif ptypes.is_bool_dtype(y):
        levels = [False, True]
    elif ptypes.is_numeric_dtype(y):
        return Continuous()
    else:
        levels = _sorted_levels(y.dropna().unique().tolist())

    if len(levels) != 2:
        raise ConfigurationError(
            f"target '{y.name}' must have exactly 2 levels, found {len(levels)}: "
            f"{levels[:10]}"
        )
    return Binary(levels=(levels[0], levels[1]))
