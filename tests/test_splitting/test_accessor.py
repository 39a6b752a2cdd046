import numpy as np
import pandas as pd
import pytest

from core.errors import UnknownSubsetError
from splitting.accessor import subset, testing, training, validation
from splitting.initial import initial_split, initial_validation_split
from splitting.planner import plan_ordered


@pytest.fixture
def frame():
    return pd.DataFrame({
        'x': np.arange(10, dtype=float),
        'label': list('abcdefghij'),
    })


def test_view_aliases_original_frame(frame):
    split_plan = initial_split(frame, prop=0.7, seed=1)
    view = training(split_plan)
    assert view.data is frame
    assert split_plan.data is frame
    assert list(view.columns) == list(frame.columns)
    assert view.dtypes.equals(frame.dtypes)
    assert view.shape == (7, 2)


def test_views_partition_rows(frame):
    split_plan = initial_validation_split(frame, prop=(0.6, 0.2), seed=1)
    parts = [training(split_plan), validation(split_plan), testing(split_plan)]
    assert [len(p) for p in parts] == [6, 2, 2]
    rows = np.sort(np.concatenate([p.indices for p in parts]))
    assert np.array_equal(rows, np.arange(10))


def test_column_access_and_iteration(frame):
    split_plan = initial_split(frame, prop=0.5, seed=2)
    view = testing(split_plan)
    assert list(view['x']) == [float(i) for i in view.indices]
    for row, values in view.iterrows():
        assert values['label'] == frame['label'].iloc[row]


def test_to_frame_is_a_copy(frame):
    split_plan = initial_split(frame, prop=0.5, seed=2)
    copy = training(split_plan).to_frame()
    copy['x'] = -1.0
    assert (frame['x'] >= 0).all()
    assert len(copy) == 5


def test_indices_are_read_only(frame):
    view = training(initial_split(frame, prop=0.5, seed=2))
    with pytest.raises(ValueError):
        view.indices[0] = 99


def test_validation_on_two_way_plan(frame):
    split_plan = initial_split(frame, prop=0.8, seed=501)
    with pytest.raises(UnknownSubsetError):
        validation(split_plan)


def test_unbound_plan():
    with pytest.raises(ValueError):
        subset(plan_ordered(4, (0.5, 0.5)), 'training')


def test_iterrows_keeps_column_types():
    mixed = pd.DataFrame({'i': [1, 2, 3, 4], 'f': [0.5, 1.5, 2.5, 3.5]})
    view = training(initial_split(mixed, prop=0.5, seed=0))
    for row, values in view.iterrows():
        assert isinstance(values['i'], (int, np.integer))
        assert values['i'] == mixed['i'].iloc[row]
        assert isinstance(values['f'], (float, np.floating))


def test_testing_accessor_is_not_a_test_function():
    assert testing.__test__ is False
