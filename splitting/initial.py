"""
splitting.initial
-----------------
Entry points for spending a dataset on training, validation and testing.
Functions:
    - initial_split: Two-way training/testing split.
    - initial_validation_split: Three-way training/validation/testing split.
    - initial_time_split: Two-way split keeping the original row order.
    - initial_validation_time_split: Three-way split keeping the original row order.

The random splits accept an optional `strata` column (a single column name)
and an optional `unit` column whose rows must always stay together.
"""
import logging

import pandas as pd

import config
from core.errors import InvalidProportionsError, UnsupportedMultiColumnStrataError
from core.rng import new_context
from splitting.planner import plan, plan_ordered, plan_stratified, validate_proportions
from splitting.stratify import group_by_stratum, stratify
from splitting.units import group_by_unit, unit_strata

logger = logging.getLogger(__name__)


def _as_frame(data):
    if isinstance(data, pd.DataFrame):
        return data
    return pd.DataFrame(list(data))


def _column(data, name):
    if name not in data.columns:
        raise KeyError(f"Column '{name}' not found; available columns: {list(data.columns)}")
    return data[name]


def _strata_column(strata):
    if strata is None or not isinstance(strata, (list, tuple, set, pd.Index)):
        return strata
    names = list(strata)
    if len(names) != 1:
        raise UnsupportedMultiColumnStrataError(
            f"Stratification uses exactly one column, got {len(names)}: {names}"
        )
    return names[0]


def _two_way(prop, tolerance=None):
    return validate_proportions((prop, 1.0 - prop), tolerance)


def _three_way(prop, tolerance=None):
    try:
        p_train, p_val = prop
    except (TypeError, ValueError) as e:
        raise InvalidProportionsError(
            f"A validation split takes two proportions (training, validation), got {prop!r}."
        ) from e
    return validate_proportions((p_train, p_val, 1.0 - p_train - p_val), tolerance)


def _random_plan(data, proportions, strata, unit, seed, breaks, tolerance):
    strata = _strata_column(strata)
    rng = new_context(seed)
    if unit is not None:
        units = group_by_unit(_column(data, unit))
        groups = list(units.items())
        logger.info(f"Grouping {len(data)} rows into {len(groups)} units by '{unit}'")
    else:
        groups = [(row, [row]) for row in range(len(data))]

    if strata is None:
        return plan(groups, proportions, rng, tolerance=tolerance)

    keys = stratify(_column(data, strata), breaks=breaks)
    if unit is not None:
        per_unit = unit_strata(units, keys)
        by_stratum = {}
        for unit_id, rows in groups:
            by_stratum.setdefault(per_unit[unit_id], []).append((unit_id, rows))
    else:
        by_stratum = {
            key: [(row, [row]) for row in rows]
            for key, rows in group_by_stratum(keys).items()
        }
    logger.info(f"Stratifying on '{strata}' with {len(by_stratum)} strata")
    return plan_stratified(by_stratum, proportions, rng, tolerance=tolerance)


def initial_split(data, prop=config.TRAIN_PROPORTION, strata=None, unit=None,
                  seed=config.RANDOM_SEED, breaks=config.STRATA_BREAKS, tolerance=None):
    """
    Randomly split data into training and testing subsets.

    Parameters
    ----------
    data : pd.DataFrame or sequence of mappings
        Rows to split. Not modified.
    prop : float
        Fraction of rows for training; the rest goes to testing.
    strata : str or None
        Column to stratify on (exactly one).
    unit : str or None
        Column identifying experimental units; a unit is never split.
    seed : int
        Seed for the shuffle.
    breaks : int
        Number of bins used for a continuous strata column.
    tolerance : float, optional
        Allowed distance of the proportions from summing to 1
        (default config.PROPORTION_TOLERANCE).

    Returns
    -------
    SplitPlan
        Bound to data, labels ('training', 'testing').
    """
    data = _as_frame(data)
    proportions = _two_way(prop, tolerance)
    return _random_plan(data, proportions, strata, unit, seed, breaks, tolerance).bind(data)


def initial_validation_split(data, prop=config.VALIDATION_PROPORTIONS, strata=None, unit=None,
                             seed=config.RANDOM_SEED, breaks=config.STRATA_BREAKS, tolerance=None):
    """
    Randomly split data into training, validation and testing subsets.

    Parameters
    ----------
    data : pd.DataFrame or sequence of mappings
        Rows to split. Not modified.
    prop : (float, float)
        Fractions for training and validation; testing gets the rest.
    strata, unit, seed, breaks, tolerance
        As for initial_split.

    Returns
    -------
    SplitPlan
        Bound to data, labels ('training', 'validation', 'testing').
    """
    data = _as_frame(data)
    proportions = _three_way(prop, tolerance)
    return _random_plan(data, proportions, strata, unit, seed, breaks, tolerance).bind(data)


def initial_time_split(data, prop=config.TRAIN_PROPORTION, tolerance=None):
    """
    Split ordered data: the first floor(prop * n) rows train, the rest test.
    No shuffling and no seed are involved.
    """
    data = _as_frame(data)
    return plan_ordered(len(data), _two_way(prop, tolerance), tolerance=tolerance).bind(data)


def initial_validation_time_split(data, prop=config.VALIDATION_PROPORTIONS, tolerance=None):
    """
    Three-way version of initial_time_split: training rows first, then
    validation rows, then testing rows.
    """
    data = _as_frame(data)
    return plan_ordered(len(data), _three_way(prop, tolerance), tolerance=tolerance).bind(data)
