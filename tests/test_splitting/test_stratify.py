import unittest

import numpy as np
import pandas as pd

from core.errors import UnsupportedMultiColumnStrataError
from splitting.stratify import group_by_stratum, infer_kind, quantile_breaks, stratify


class TestStratify(unittest.TestCase):
    def test_categorical_keys_are_values(self):
        keys = stratify(pd.Series(['a', 'b', 'a', None]), kind='categorical')
        self.assertEqual(keys, ['a', 'b', 'a', None])

    def test_categorical_nan_maps_to_none(self):
        keys = stratify(['x', np.nan, 'y'])
        self.assertEqual(keys, ['x', None, 'y'])

    def test_continuous_quartiles(self):
        keys = stratify(pd.Series(np.arange(1, 9, dtype=float)))
        self.assertEqual(keys, [0, 0, 1, 1, 2, 2, 3, 3])

    def test_breakpoint_ties_go_to_lower_bin(self):
        # breakpoints are exactly 2, 3 and 4
        keys = stratify([1, 2, 3, 4, 5], kind='continuous')
        self.assertEqual(keys, [0, 0, 1, 2, 3])

    def test_continuous_missing_values(self):
        keys = stratify(pd.Series([1.0, np.nan, 3.0, 4.0, 5.0]))
        self.assertEqual(keys[1], -1)
        self.assertTrue(all(k >= 0 for i, k in enumerate(keys) if i != 1))

    def test_custom_breaks(self):
        keys = stratify(list(range(10)), kind='continuous', breaks=2)
        self.assertEqual(keys, [0] * 5 + [1] * 5)
        self.assertEqual(len(quantile_breaks(range(10), 5)), 4)

    def test_infer_kind(self):
        self.assertEqual(infer_kind(pd.Series([1, 2, 3])), 'continuous')
        self.assertEqual(infer_kind(pd.Series([1.5, 2.5])), 'continuous')
        self.assertEqual(infer_kind(pd.Series(['a', 'b'])), 'categorical')
        self.assertEqual(infer_kind(pd.Series([True, False])), 'categorical')

    def test_multi_column_rejected(self):
        df = pd.DataFrame({'a': [1, 2], 'b': [3, 4]})
        with self.assertRaises(UnsupportedMultiColumnStrataError):
            stratify(df)
        with self.assertRaises(UnsupportedMultiColumnStrataError):
            stratify([[1, 2], [3, 4]])

    def test_single_column_frame_accepted(self):
        df = pd.DataFrame({'a': ['u', 'v']})
        self.assertEqual(stratify(df), ['u', 'v'])

    def test_unknown_kind(self):
        with self.assertRaises(ValueError):
            stratify([1, 2, 3], kind='ordinal')

    def test_group_by_stratum_keeps_first_appearance_order(self):
        strata = group_by_stratum(['b', 'a', 'b', 'c'])
        self.assertEqual(list(strata), ['b', 'a', 'c'])
        self.assertEqual(strata['b'], [0, 2])


if __name__ == '__main__':
    unittest.main()
