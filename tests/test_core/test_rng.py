import numpy as np
import pytest

from core.errors import InvalidSeedError, SplitError
from core.rng import new_context


def test_same_seed_same_stream():
    a = new_context(501)
    b = new_context(501)
    assert np.array_equal(a.permutation(50), b.permutation(50))
    assert a.shuffle(range(20)) == b.shuffle(range(20))


def test_different_seeds_differ():
    assert not np.array_equal(new_context(1).permutation(100), new_context(2).permutation(100))


def test_shuffle_returns_copy_and_counts_draws():
    rng = new_context(0)
    items = list(range(10))
    shuffled = rng.shuffle(items)
    assert items == list(range(10))
    assert sorted(shuffled) == items
    assert rng.draws == 1


def test_numpy_integer_and_large_seeds_accepted():
    assert new_context(np.int64(7)).seed == 7
    assert new_context(2 ** 64 - 1).seed == 2 ** 64 - 1


@pytest.mark.parametrize('seed', [-1, 2 ** 64, 1.0, True, '3', None])
def test_invalid_seed(seed):
    with pytest.raises(InvalidSeedError):
        new_context(seed)


def test_invalid_seed_is_value_error():
    with pytest.raises(ValueError):
        new_context(-5)
    assert issubclass(InvalidSeedError, SplitError)
