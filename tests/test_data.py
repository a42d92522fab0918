"""Tests for data loading and preprocessing."""
import pytest
import numpy as np
import pandas as pd
import tempfile

from classregr.data import (
    CSVDataLoader,
    build_preprocessing_pipeline,
    feature_frame,
    split_feature_columns,
)


@pytest.fixture
def sample_csv():
    """Create a temporary CSV with mixed data types."""
    data = pd.DataFrame({
        'num1': [1.0, 2.0, 3.0, 4.0, 5.0, 6.0, 7.0, 8.0, 9.0, 10.0] * 5,
        'num2': [0.1, 0.2, 0.3, 0.4, 0.5, 0.6, 0.7, 0.8, 0.9, 1.0] * 5,
        'cat': ['A', 'B', 'C'] * 16 + ['A', 'B'],
        'label': [0, 1, 0, 1, 0, 1, 0, 1, 0, 1] * 5
    })
    with tempfile.NamedTemporaryFile(mode='w', suffix='.csv', delete=False) as f:
        data.to_csv(f, index=False)
        return f.name


@pytest.fixture
def mixed_df():
    """Small frame with numeric, text and bool features."""
    return pd.DataFrame({
        'num1': [1.0, 2.0, np.nan, 4.0, 5.0, 6.0],
        'cat': ['A', 'B', 'C', 'A', np.nan, 'C'],
        'flag': [True, False, True, True, False, False],
        'y': [0.5, 1.5, 2.5, 3.5, 4.5, 5.5],
    })


def test_loader_reads_all_columns(sample_csv):
    """Test that all columns are kept when no features are listed."""
    df = CSVDataLoader(path=sample_csv, target='label').load()

    assert df.shape == (50, 4)
    assert df['label'].dtype.kind in 'iu'


def test_loader_casts_categorical(sample_csv):
    """Test that a numeric label listed as categorical becomes a category."""
    df = CSVDataLoader(path=sample_csv, target='label', categorical=['label']).load()

    assert isinstance(df['label'].dtype, pd.CategoricalDtype)
    assert list(df['label'].cat.categories) == [0, 1]


def test_loader_selects_features(sample_csv):
    """Test that only the listed features plus the target are returned."""
    df = CSVDataLoader(path=sample_csv, target='label', features=['num2', 'cat']).load()

    assert list(df.columns) == ['num2', 'cat', 'label']


def test_loader_missing_columns_raise(sample_csv):
    """Test that unknown target or feature names raise errors."""
    with pytest.raises(ValueError):
        CSVDataLoader(path=sample_csv, target='nope').load()
    with pytest.raises(ValueError):
        CSVDataLoader(path=sample_csv, target='label', features=['num1', 'nope']).load()
    with pytest.raises(ValueError):
        CSVDataLoader(path=sample_csv, target='label', categorical=['nope']).load()


def test_loader_drops_missing_targets(capsys):
    """Test that rows without a target are dropped with a warning."""
    data = pd.DataFrame({'x': [1.0, 2.0, 3.0, 4.0], 'label': ['a', None, 'b', 'a']})
    with tempfile.NamedTemporaryFile(mode='w', suffix='.csv', delete=False) as f:
        data.to_csv(f, index=False)
        path = f.name

    df = CSVDataLoader(path=path, target='label', categorical=['label']).load()

    assert len(df) == 3
    assert list(df.index) == [0, 1, 2]
    assert "Dropping 1 rows" in capsys.readouterr().out


def test_split_feature_columns(mixed_df):
    """Test that numeric columns are separated from the rest."""
    numeric_cols, cat_cols = split_feature_columns(mixed_df, 'y')

    assert numeric_cols == ['num1']
    assert cat_cols == ['cat', 'flag']


def test_feature_frame_drops_target(mixed_df):
    """Test that the target is removed and the input is unchanged."""
    X = feature_frame(mixed_df, 'y')

    assert 'y' not in X.columns
    assert X['flag'].dtype == object
    assert mixed_df['flag'].dtype == bool


def test_categorical_encoding_drops_first_level(mixed_df):
    """Test one-hot encoding with the first level dropped."""
    numeric_cols, cat_cols = split_feature_columns(mixed_df, 'y')
    pre = build_preprocessing_pipeline(numeric_cols, cat_cols)

    Xt = pre.fit_transform(feature_frame(mixed_df, 'y'))

    # 1 numeric + (3 - 1) cat levels + (2 - 1) flag levels
    assert Xt.shape == (6, 4)


def test_scaling_produces_clean_data(mixed_df):
    """Test that imputation and scaling don't leave NaN or inf."""
    numeric_cols, cat_cols = split_feature_columns(mixed_df, 'y')
    for scaling in ['standard', 'minmax']:
        pre = build_preprocessing_pipeline(numeric_cols, cat_cols, scaling=scaling)
        Xt = pre.fit_transform(feature_frame(mixed_df, 'y'))

        assert not np.isnan(Xt).any()
        assert not np.isinf(Xt).any()


def test_minmax_range(mixed_df):
    """Test that minmax scaling maps numeric features into [0, 1]."""
    pre = build_preprocessing_pipeline(['num1'], [], scaling='minmax')
    Xt = pre.fit_transform(mixed_df[['num1']])

    assert Xt.min() == pytest.approx(0.0)
    assert Xt.max() == pytest.approx(1.0)


def test_unseen_category_is_ignored(mixed_df):
    """Test that a level missing from the training rows does not break transform."""
    pre = build_preprocessing_pipeline([], ['cat'])
    pre.fit(mixed_df[['cat']].iloc[:2].astype(object))

    Xt = pre.transform(pd.DataFrame({'cat': ['C']}, dtype=object))

    assert Xt.shape == (1, 1)
    assert Xt.sum() == 0
