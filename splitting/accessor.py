"""
splitting.accessor
------------------
Read-only views over one subset of a planned split.
Functions:
    - subset: View of the rows carrying a label.
    - training, validation, testing: Shorthands for the three labels.
"""
from splitting.planner import TESTING, TRAINING, VALIDATION


class SubsetView:
    """
    Non-copying view of the rows of a DataFrame that belong to one subset.

    The view keeps a reference to the original frame, which must outlive it.
    Use to_frame() for an independent copy.
    """

    def __init__(self, data, indices, label):
        self._data = data
        self.indices = indices
        self.label = label

    @property
    def data(self):
        return self._data

    @property
    def columns(self):
        return self._data.columns

    @property
    def dtypes(self):
        return self._data.dtypes

    @property
    def shape(self):
        return (len(self.indices), self._data.shape[1])

    def __len__(self):
        return len(self.indices)

    def __getitem__(self, column):
        """Values of one column restricted to the subset."""
        return self._data[column].to_numpy()[self.indices]

    def iterrows(self):
        for row in self.indices:
            yield int(row), {column: self._data[column].iat[row] for column in self.columns}

    def to_frame(self):
        return self._data.iloc[self.indices].copy()

    def __repr__(self):
        return f"SubsetView(label={self.label!r}, rows={len(self)}, columns={list(self.columns)})"


def subset(plan, label):
    """
    Return the rows of the plan's dataset assigned to label.

    Args:
        plan (SplitPlan): A plan bound to its dataset.
        label (str): One of plan.labels.
    Returns:
        SubsetView
    Raises:
        UnknownSubsetError: If label is not in the plan.
        ValueError: If the plan is not bound to a dataset.
    """
    indices = plan.indices(label)
    if plan.data is None:
        raise ValueError("Plan is not bound to a dataset; call plan.bind(data) first.")
    indices.setflags(write=False)
    return SubsetView(plan.data, indices, label)


def training(plan):
    return subset(plan, TRAINING)


def validation(plan):
    return subset(plan, VALIDATION)


def testing(plan):
    return subset(plan, TESTING)


# not a pytest test function
testing.__test__ = False
