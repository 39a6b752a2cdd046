"""
splitting.units
---------------
Group rows by experimental unit so a unit is never split across subsets.
Functions:
    - group_by_unit: Map each unit id to its row indices.
    - unit_strata: Pick one stratum key per unit.
"""
import logging
from collections import Counter

import pandas as pd

logger = logging.getLogger(__name__)


def group_by_unit(column):
    """
    Map each unit id to the row indices carrying it.

    Parameters
    ----------
    column : pd.Series or sequence
        One unit id per row. Missing ids are collected under None.

    Returns
    -------
    dict
        unit id -> list of row indices, in order of first appearance.
    """
    values = column.tolist() if isinstance(column, pd.Series) else list(column)
    missing = pd.isna(pd.Series(values, dtype=object)).tolist()
    units = {}
    for row, (unit, is_na) in enumerate(zip(values, missing)):
        units.setdefault(None if is_na else unit, []).append(row)
    return units


def unit_strata(units, stratum_keys):
    """
    Give every unit the most common stratum key among its rows.

    Ties go to the key seen first. Units whose rows disagree are logged at
    debug level since the whole unit still moves as one group.

    Parameters
    ----------
    units : dict
        Output of group_by_unit.
    stratum_keys : sequence
        One stratum key per row.

    Returns
    -------
    dict
        unit id -> stratum key.
    """
    assigned = {}
    for unit, rows in units.items():
        counts = Counter(stratum_keys[row] for row in rows)
        # Counter keeps insertion order, most_common is stable on ties
        key, _ = counts.most_common(1)[0]
        if len(counts) > 1:
            logger.debug(f"Unit {unit!r} spans strata {list(counts)}; using {key!r}.")
        assigned[unit] = key
    return assigned
