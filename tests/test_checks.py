import unittest

import pandas as pd

from delaycomp.errors import SchemaError
from delaycomp.validation.checks import check_annual, check_periodic, check_tables


CLAIMS = "Volume of claims received within period"
CLOSED = "Percentage closed within 20 working days"


class _Logger:
    def __init__(self):
        self.messages = []
        self.warnings = []

    def info(self, msg):
        self.messages.append(msg)

    def warning(self, msg):
        self.warnings.append(msg)


def _annual():
    return pd.DataFrame(
        {
            "time_period": [2024, 2024],
            "delay_compensation": [CLAIMS, CLOSED],
            "great_britain": [220.0, 0.9],
        }
    )


def _periodic():
    return pd.DataFrame({"delay_compensation": [CLAIMS], "great_britain": [30.0]})


class CheckTablesTests(unittest.TestCase):
    def test_clean_tables_pass_without_warnings(self):
        logger = _Logger()

        check_tables(logger, _annual(), _periodic())

        self.assertListEqual(logger.warnings, [])
        self.assertIn("Annual table checks OK", logger.messages)
        self.assertIn("Periodic table checks OK", logger.messages)

    def test_annual_without_period_is_fatal(self):
        with self.assertRaises(SchemaError) as ctx:
            check_annual(_Logger(), _annual().drop(columns="time_period"))
        self.assertIn("time_period", str(ctx.exception))

    def test_periodic_without_category_is_fatal(self):
        with self.assertRaises(SchemaError):
            check_periodic(_Logger(), _periodic().drop(columns="delay_compensation"))

    def test_duplicate_period_category_is_warned(self):
        logger = _Logger()
        annual = pd.concat([_annual(), _annual().iloc[[0]]], ignore_index=True)

        check_annual(logger, annual)

        self.assertEqual(len(logger.warnings), 1)
        self.assertIn("2 rows", logger.warnings[0])

    def test_mixed_period_types_are_fatal(self):
        annual = _annual().astype({"time_period": object})
        annual.loc[1, "time_period"] = "2024-25"

        with self.assertRaises(SchemaError) as ctx:
            check_annual(_Logger(), annual)
        self.assertEqual(ctx.exception.stage, "schema")
        self.assertIn("annual", str(ctx.exception))

    def test_missing_category_is_warned(self):
        logger = _Logger()

        check_annual(logger, _annual().iloc[[0]])

        self.assertEqual(len(logger.warnings), 1)
        self.assertIn(CLOSED, logger.warnings[0])

    def test_unlabelled_operator_is_warned(self):
        logger = _Logger()
        periodic = _periodic().assign(brand_new_rail=[1.0])

        check_tables(logger, _annual(), periodic)

        self.assertEqual(len(logger.warnings), 1)
        self.assertIn("brand_new_rail", logger.warnings[0])


if __name__ == "__main__":
    unittest.main()
