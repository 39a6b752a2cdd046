"""
splitting.stratify
------------------
Turn a single column into stratum keys for proportion-preserving sampling.
Functions:
    - infer_kind: Decide whether a column is continuous or categorical.
    - stratify: Compute one stratum key per row.
    - group_by_stratum: Collect row indices per stratum key.
"""
import logging

import numpy as np
import pandas as pd

from core.errors import UnsupportedMultiColumnStrataError

logger = logging.getLogger(__name__)

CONTINUOUS = 'continuous'
CATEGORICAL = 'categorical'
MISSING_BIN = -1


def _as_series(column):
    if isinstance(column, pd.DataFrame):
        if column.shape[1] != 1:
            raise UnsupportedMultiColumnStrataError(
                f"Stratification uses exactly one column, got {column.shape[1]}: {list(column.columns)}"
            )
        return column.iloc[:, 0]
    if isinstance(column, pd.Series):
        return column
    if not isinstance(column, np.ndarray):
        column = list(column)
    shape = np.shape(np.asarray(column, dtype=object))
    if len(shape) > 1:
        raise UnsupportedMultiColumnStrataError(
            f"Stratification uses exactly one column, got an array of shape {shape}"
        )
    return pd.Series(column)


def infer_kind(column):
    """
    Numeric (non-boolean) columns are continuous, everything else is categorical.
    """
    series = _as_series(column)
    if pd.api.types.is_bool_dtype(series) or not pd.api.types.is_numeric_dtype(series):
        return CATEGORICAL
    return CONTINUOUS


def quantile_breaks(values, breaks=4):
    """
    Interior breakpoints splitting values into `breaks` equal-count bins.

    Parameters
    ----------
    values : array-like of float
        Non-missing numeric values.
    breaks : int
        Number of bins; 4 gives the 25th/50th/75th percentiles.

    Returns
    -------
    np.ndarray
        Sorted breakpoints, length breaks - 1.
    """
    if breaks < 1:
        raise ValueError(f"breaks must be a positive integer, got {breaks}.")
    qs = np.arange(1, breaks) * (100.0 / breaks)
    if len(values) == 0:
        return np.array([], dtype=np.float64)
    return np.percentile(np.asarray(values, dtype=np.float64), qs)


def stratify(column, kind=None, breaks=4):
    """
    Compute the stratum key of every row of a single column.

    Parameters
    ----------
    column : pd.Series, single-column pd.DataFrame or 1-D sequence
        Values to stratify on.
    kind : {'continuous', 'categorical'} or None
        How to derive keys; inferred from the dtype when None.
    breaks : int
        Number of bins for continuous columns (default 4, quartiles).

    Returns
    -------
    list
        One key per row. Continuous columns give bin indices 0..breaks-1 over
        right-closed intervals, so a value equal to a breakpoint falls in the
        lower bin, and missing values get -1. Categorical columns keep the
        value itself, with missing values mapped to None.

    Raises
    ------
    UnsupportedMultiColumnStrataError
        If more than one column is given.
    ValueError
        If kind is not recognised.
    """
    series = _as_series(column)
    if kind is None:
        kind = infer_kind(series)
    missing = series.isna().to_numpy()

    if kind == CATEGORICAL:
        return [None if is_na else value for value, is_na in zip(series.tolist(), missing)]
    if kind != CONTINUOUS:
        raise ValueError(f"Unknown strata kind '{kind}', expected '{CONTINUOUS}' or '{CATEGORICAL}'.")

    values = pd.to_numeric(series).to_numpy(dtype=np.float64, na_value=np.nan)
    cut_points = quantile_breaks(values[~missing], breaks)
    bins = np.searchsorted(cut_points, values, side='left')
    bins[missing] = MISSING_BIN
    logger.debug(f"Continuous strata breakpoints: {cut_points.tolist()}")
    return [int(b) for b in bins]


def group_by_stratum(keys):
    """
    Map each stratum key to its row indices, ordered by first appearance.
    """
    strata = {}
    for row, key in enumerate(keys):
        strata.setdefault(key, []).append(row)
    return strata
