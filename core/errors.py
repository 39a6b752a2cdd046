"""
Exceptions and warnings raised while planning a data split.

All errors are caller-input errors: they are raised before any split plan
exists, so a failed call never leaves a partial result behind.
"""


class SplitError(ValueError):
    """Base class for invalid split requests."""


class InvalidSeedError(SplitError):
    """The seed cannot be used to seed the random generator."""


class InvalidProportionsError(SplitError):
    """Proportions are out of range or do not sum to one."""


class UnsupportedMultiColumnStrataError(SplitError):
    """More than one column was requested for stratification."""


class UnknownSubsetError(SplitError, KeyError):
    """The requested subset label is not part of the plan."""

    def __str__(self):
        # KeyError would quote the message
        return str(self.args[0]) if self.args else ''


class SmallStrataWarning(UserWarning):
    """A stratum had fewer rows than there are subsets to fill."""
