import unittest

import numpy as np
import pandas as pd

from delaycomp.errors import SchemaError
from delaycomp.transforms.reshape import filter_by_category, reshape_long


def _annual():
    return pd.DataFrame(
        {
            "time_period": [2023, 2023, 2024, 2024],
            "delay_compensation": [
                "Volume of claims received within period",
                "Percentage closed within 20 working days",
                "Volume of claims received within period",
                "Percentage closed within 20 working days",
            ],
            "great_britain": [100.0, 0.8, 120.0, 0.85],
            "c2c": [10.0, 0.9, np.nan, 0.95],
        }
    )


class FilterByCategoryTests(unittest.TestCase):
    def test_exact_match(self):
        out = filter_by_category(_annual(), "Volume of claims received within period")

        self.assertListEqual(out["time_period"].tolist(), [2023, 2024])
        self.assertListEqual(out["great_britain"].tolist(), [100.0, 120.0])

    def test_case_sensitive(self):
        out = filter_by_category(_annual(), "volume of claims received within period")
        self.assertTrue(out.empty)

    def test_absent_key_returns_empty_frame_with_columns(self):
        df = _annual()
        out = filter_by_category(df, "Number of claims rejected")

        self.assertEqual(len(out), 0)
        self.assertListEqual(list(out.columns), list(df.columns))

    def test_missing_category_column(self):
        with self.assertRaises(SchemaError):
            filter_by_category(pd.DataFrame({"c2c": [1.0]}), "X")


class ReshapeLongTests(unittest.TestCase):
    def test_synthetic_row(self):
        rows = pd.DataFrame(
            {
                "period": [2024],
                "category": ["X"],
                "opA": [10],
                "opB": [None],
                "notes": ["text"],
            }
        )

        out = reshape_long(rows, ["period"], {"category", "notes"})

        self.assertListEqual(list(out.columns), ["period", "operator", "value"])
        self.assertListEqual(
            list(out.itertuples(index=False, name=None)),
            [(2024, "opA", 10.0)],
        )

    def test_non_numeric_cells_skipped_even_when_not_excluded(self):
        rows = pd.DataFrame({"category": ["X"], "opA": ["[x]"], "opB": [5.0]})

        out = reshape_long(rows, [], {"category"})

        self.assertListEqual(out["operator"].tolist(), ["opB"])

    def test_row_major_order(self):
        rows = pd.DataFrame(
            {
                "time_period": [2023, 2024],
                "b": [1.0, 3.0],
                "a": [2.0, 4.0],
            }
        )

        out = reshape_long(rows, ["time_period"], [])

        self.assertListEqual(
            list(out.itertuples(index=False, name=None)),
            [(2023, "b", 1.0), (2023, "a", 2.0), (2024, "b", 3.0), (2024, "a", 4.0)],
        )

    def test_uses_row_position_not_source_index(self):
        rows = _annual().iloc[[2, 0]]

        out = reshape_long(rows, ["time_period"], ["delay_compensation"], value_name="claims")

        self.assertListEqual(out["time_period"].tolist(), [2024, 2023, 2023])
        self.assertListEqual(out["operator"].tolist(), ["great_britain", "great_britain", "c2c"])
        self.assertEqual(out["claims"].dtype, np.dtype("float64"))

    def test_empty_rows(self):
        rows = _annual().iloc[0:0]

        out = reshape_long(rows, ["time_period"], ["delay_compensation"], value_name="claims")

        self.assertTrue(out.empty)
        self.assertListEqual(list(out.columns), ["time_period", "operator", "claims"])

    def test_missing_key_column(self):
        with self.assertRaises(SchemaError):
            reshape_long(_annual(), ["period"], [])


if __name__ == "__main__":
    unittest.main()
