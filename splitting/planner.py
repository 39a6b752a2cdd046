"""
splitting.planner
-----------------
Assign groups of rows to named subsets (training, validation, testing).

Every sampling policy goes through the same group-then-cut walk: simple
random sampling uses one group per row, grouped sampling one group per
experimental unit, and stratified sampling runs the walk separately inside
each stratum before pooling the results.

Functions:
    - validate_proportions: Check subset fractions.
    - plan: Shuffle groups and cut them at the target proportions.
    - plan_stratified: Run `plan`'s walk independently per stratum.
    - plan_ordered: Cut rows in their original order, without randomness.
"""
import dataclasses
import logging
import math
import warnings
from typing import Optional, Tuple

import numpy as np
import pandas as pd

import config
from core.errors import InvalidProportionsError, SmallStrataWarning, UnknownSubsetError

logger = logging.getLogger(__name__)

TRAINING = 'training'
VALIDATION = 'validation'
TESTING = 'testing'
TWO_WAY = (TRAINING, TESTING)
THREE_WAY = (TRAINING, VALIDATION, TESTING)

# Cumulative targets are rounded to this many decimals before cutting
_TARGET_DECIMALS = 9


@dataclasses.dataclass(frozen=True, eq=False)
class SplitPlan:
    """
    Immutable assignment of every row index to exactly one subset label.

    Attributes:
        labels (tuple): Ordered subset labels, two-way or three-way.
        codes (np.ndarray): Read-only array, codes[row] indexes into labels.
        data (pd.DataFrame, optional): The dataset the plan was made for.
    """
    labels: Tuple[str, ...]
    codes: np.ndarray
    data: Optional[pd.DataFrame] = dataclasses.field(default=None, repr=False)

    def __post_init__(self):
        codes = np.array(self.codes, dtype=np.intp)
        codes.setflags(write=False)
        object.__setattr__(self, 'codes', codes)

    def __len__(self):
        return len(self.codes)

    def __eq__(self, other):
        if not isinstance(other, SplitPlan):
            return NotImplemented
        return self.labels == other.labels and np.array_equal(self.codes, other.codes)

    __hash__ = None

    def code_of(self, label):
        try:
            return self.labels.index(label)
        except ValueError:
            raise UnknownSubsetError(
                f"Subset '{label}' is not part of this plan; available subsets: {list(self.labels)}"
            ) from None

    def indices(self, label):
        """Row indices assigned to label, in ascending order."""
        return np.flatnonzero(self.codes == self.code_of(label))

    def label_of(self, row):
        return self.labels[self.codes[row]]

    def sizes(self):
        counts = np.bincount(self.codes, minlength=len(self.labels))
        return {label: int(count) for label, count in zip(self.labels, counts)}

    def bind(self, data):
        """Return a copy of the plan that refers to data (no data copy)."""
        if len(data) != len(self):
            raise ValueError(f"Plan covers {len(self)} rows but the dataset has {len(data)}.")
        return dataclasses.replace(self, data=data)

    def to_frame(self):
        """Tidy view of the plan: one row per dataset row with its label."""
        return pd.DataFrame({
            'row': np.arange(len(self)),
            'label': np.asarray(self.labels, dtype=object)[self.codes],
        })

    def __repr__(self):
        names = '/'.join(label.capitalize() for label in self.labels)
        counts = '/'.join(str(n) for n in self.sizes().values())
        return f"<{names}/Total> <{counts}/{len(self)}>"


def validate_proportions(proportions, tolerance=None):
    """
    Check that proportions are fractions in (0, 1) summing to 1.

    Parameters
    ----------
    proportions : sequence of float
        One fraction per subset.
    tolerance : float, optional
        Allowed distance of the sum from 1 (default config.PROPORTION_TOLERANCE).

    Returns
    -------
    tuple of float

    Raises
    ------
    InvalidProportionsError
    """
    if tolerance is None:
        tolerance = config.PROPORTION_TOLERANCE
    try:
        props = tuple(float(p) for p in proportions)
    except (TypeError, ValueError) as e:
        raise InvalidProportionsError(f"Proportions must be numbers: {proportions!r}") from e
    if not props:
        raise InvalidProportionsError("At least one proportion is required.")
    for p in props:
        # anything within tolerance of zero counts as zero
        if not math.isfinite(p) or not tolerance < p < 1.0:
            raise InvalidProportionsError(f"Each proportion must lie strictly between 0 and 1, got {p}.")
    total = math.fsum(props)
    if abs(total - 1.0) > tolerance:
        raise InvalidProportionsError(f"Proportions must sum to 1, got {total} from {props}.")
    return props


def _resolve_labels(proportions, labels):
    if labels is None:
        if len(proportions) == len(TWO_WAY):
            return TWO_WAY
        if len(proportions) == len(THREE_WAY):
            return THREE_WAY
        raise InvalidProportionsError(
            f"Expected 2 or 3 proportions (training/[validation/]testing), got {len(proportions)}."
        )
    labels = tuple(labels)
    if len(labels) != len(proportions):
        raise InvalidProportionsError(f"{len(proportions)} proportions given for {len(labels)} subsets {labels}.")
    return labels


def _cumulative_targets(n_rows, proportions):
    cumulative = np.cumsum(proportions)[:-1]
    return np.round(n_rows * cumulative, _TARGET_DECIMALS)


def _cut_points(sizes, proportions):
    """
    Greedy boundaries over a walk of group sizes.

    For each cumulative target the cut lands on the prefix whose row count is
    closest to it, preferring the earlier prefix on ties. Cuts never move
    backwards. Returns positions in the walk: groups before cut k belong to
    subset <= k.
    """
    prefix = np.concatenate([[0], np.cumsum(sizes)])
    cuts = []
    previous = 0
    for target in _cumulative_targets(prefix[-1], proportions):
        upper = min(int(np.searchsorted(prefix, target, side='left')), len(prefix) - 1)
        lower = max(upper - 1, 0)
        best = lower if target - prefix[lower] <= prefix[upper] - target else upper
        previous = max(best, previous)
        cuts.append(previous)
    return np.asarray(cuts, dtype=np.int64)


def _assign_walk(groups, proportions, rng, codes):
    walk = rng.shuffle(groups)
    cuts = _cut_points([len(rows) for _, rows in walk], proportions)
    for position, (_, rows) in enumerate(walk):
        codes[rows] = np.searchsorted(cuts, position, side='right')


def _empty_codes(groups):
    """Unassigned codes for the rows of groups, which must cover 0..n-1 exactly once."""
    n_rows = sum(len(rows) for _, rows in groups)
    claimed = np.zeros(n_rows, dtype=bool)
    for group_id, rows in groups:
        rows = np.asarray(rows, dtype=np.int64)
        if rows.size and (rows.min() < 0 or rows.max() >= n_rows):
            raise ValueError(f"Group {group_id!r} refers to rows outside 0..{n_rows - 1}.")
        if claimed[rows].any() or len(np.unique(rows)) != len(rows):
            raise ValueError(f"Group {group_id!r} repeats a row already claimed.")
        claimed[rows] = True
    return np.full(n_rows, -1, dtype=np.int64)


def _finish(codes, labels):
    split_plan = SplitPlan(labels=labels, codes=codes)
    logger.info(f"Planned split {split_plan!r}")
    return split_plan


def plan(groups, proportions, rng, labels=None, tolerance=None):
    """
    Shuffle groups and cut the walk at the cumulative target proportions.

    Args:
        groups (sequence): (group_id, row_indices) pairs covering rows 0..n-1 once.
        proportions (sequence of float): One fraction per subset.
        rng (RngContext): Source of the shuffle.
        labels (sequence of str, optional): Subset labels; TWO_WAY or THREE_WAY
            by default, depending on the number of proportions.
        tolerance (float, optional): Passed to validate_proportions.
    Returns:
        SplitPlan
    Raises:
        InvalidProportionsError: If the proportions are invalid.
        ValueError: If groups overlap or leave rows uncovered.
    """
    proportions = validate_proportions(proportions, tolerance)
    labels = _resolve_labels(proportions, labels)
    groups = list(groups)
    codes = _empty_codes(groups)
    _assign_walk(groups, proportions, rng, codes)
    return _finish(codes, labels)


def plan_stratified(strata, proportions, rng, labels=None, tolerance=None):
    """
    Cut every stratum independently and pool the results.

    Each stratum keeps its own proportions within one row (or one group). A
    stratum with fewer rows than subsets goes entirely to the subset with the
    largest proportion and raises a SmallStrataWarning.

    Args:
        strata (mapping): stratum key -> sequence of (group_id, row_indices).
        proportions (sequence of float): One fraction per subset.
        rng (RngContext): Source of the shuffles; strata are visited in mapping order.
        labels (sequence of str, optional): Subset labels.
        tolerance (float, optional): Passed to validate_proportions.
    Returns:
        SplitPlan
    """
    proportions = validate_proportions(proportions, tolerance)
    labels = _resolve_labels(proportions, labels)
    strata = {key: list(groups) for key, groups in strata.items()}
    codes = _empty_codes([group for groups in strata.values() for group in groups])
    fallback = int(np.argmax(proportions))
    for key, groups in strata.items():
        n_rows = sum(len(rows) for _, rows in groups)
        if n_rows < len(proportions):
            message = (
                f"Stratum {key!r} has {n_rows} row(s) for {len(proportions)} subsets; "
                f"all of it goes to '{labels[fallback]}'."
            )
            logger.warning(message)
            warnings.warn(message, SmallStrataWarning, stacklevel=2)
            for _, rows in groups:
                codes[rows] = fallback
            continue
        _assign_walk(groups, proportions, rng, codes)
        stratum_rows = np.concatenate([np.asarray(rows, dtype=np.int64) for _, rows in groups])
        counts = np.bincount(codes[stratum_rows], minlength=len(labels))
        logger.debug(f"Stratum {key!r}: {dict(zip(labels, counts.tolist()))}")
    return _finish(codes, labels)


def plan_ordered(n_rows, proportions, labels=None, tolerance=None):
    """
    Cut rows 0..n-1 in order, with no shuffle and no random draws.

    Cut k sits at floor(n * (p_1 + ... + p_k)) rows from the front.

    Args:
        n_rows (int): Number of rows.
        proportions (sequence of float): One fraction per subset.
        labels (sequence of str, optional): Subset labels.
        tolerance (float, optional): Passed to validate_proportions.
    Returns:
        SplitPlan
    """
    proportions = validate_proportions(proportions, tolerance)
    labels = _resolve_labels(proportions, labels)
    cuts = np.floor(_cumulative_targets(n_rows, proportions)).astype(np.int64)
    codes = np.searchsorted(cuts, np.arange(n_rows), side='right')
    return _finish(codes, labels)
