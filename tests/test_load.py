import os
import tempfile
import unittest

import pandas as pd
from openpyxl import Workbook

from delaycomp.errors import ColumnCollisionError, WorkbookLoadError
from delaycomp.load import load_workbook, read_sheets


class _Logger:
    def __init__(self):
        self.messages = []

    def info(self, msg):
        self.messages.append(msg)


ANNUAL = pd.DataFrame(
    {
        "Time period": [2023, 2024],
        "Delay compensation": ["Volume of claims received within period"] * 2,
        "Great Britain": [200, 220],
        "Hull Trains (note 1)": [1, 2],
    }
)

PERIODIC = pd.DataFrame(
    {
        "Delay compensation": ["Volume of claims received within period"],
        "Great Britain": [30],
    }
)


class LoadWorkbookTests(unittest.TestCase):
    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.tmp = self._tmp.name

    def tearDown(self):
        self._tmp.cleanup()

    def _write(self, name, sheets):
        path = os.path.join(self.tmp, name)
        with pd.ExcelWriter(path, engine="openpyxl") as writer:
            for sheet, df in sheets.items():
                df.to_excel(writer, sheet_name=sheet, index=False)
        return path

    def test_loads_and_normalizes_both_sheets(self):
        path = self._write("ok.xlsx", {"Annual_Data": ANNUAL, "Periodic_Data": PERIODIC})
        logger = _Logger()

        wb = load_workbook(logger, path)
        annual, periodic = wb.annual, wb.periodic

        self.assertListEqual(
            list(annual.columns),
            ["time_period", "delay_compensation", "great_britain", "hull_trains_note_1"],
        )
        self.assertListEqual(list(periodic.columns), ["delay_compensation", "great_britain"])
        self.assertListEqual(annual["great_britain"].tolist(), [200, 220])
        self.assertEqual(len(logger.messages), 2)
        self.assertTupleEqual(wb.annual_schema.operator_columns, ("great_britain", "hull_trains_note_1"))
        self.assertIsNone(wb.periodic_schema.period_column)

    def test_missing_file(self):
        with self.assertRaises(WorkbookLoadError) as ctx:
            read_sheets(os.path.join(self.tmp, "absent.xlsx"))
        self.assertEqual(ctx.exception.stage, "load")

    def test_missing_worksheet(self):
        path = self._write("annual_only.xlsx", {"Annual_Data": ANNUAL})

        with self.assertRaises(WorkbookLoadError) as ctx:
            read_sheets(path)
        self.assertIn("Periodic_Data", str(ctx.exception))

    def test_unreadable_file(self):
        path = os.path.join(self.tmp, "broken.xlsx")
        with open(path, "w") as fh:
            fh.write("not a workbook")

        with self.assertRaises(WorkbookLoadError):
            read_sheets(path)

    def test_repeated_identical_header_is_fatal(self):
        path = os.path.join(self.tmp, "repeated.xlsx")
        book = Workbook()
        ws = book.active
        ws.title = "Annual_Data"
        ws.append(["Time period", "Delay compensation", "Great Britain", "Great Britain"])
        ws.append([2024, "Volume of claims received within period", 220, 221])
        ws = book.create_sheet("Periodic_Data")
        ws.append(["Delay compensation", "Great Britain"])
        ws.append(["Volume of claims received within period", 30])
        book.save(path)

        annual_raw, _ = read_sheets(path)
        self.assertListEqual(
            list(annual_raw.columns),
            ["Time period", "Delay compensation", "Great Britain", "Great Britain"],
        )
        with self.assertRaises(ColumnCollisionError) as ctx:
            load_workbook(_Logger(), path)
        self.assertIn("great_britain", str(ctx.exception))

    def test_header_collision_is_fatal(self):
        annual = ANNUAL.assign(**{"GREAT BRITAIN": [1, 2]})
        path = self._write("collide.xlsx", {"Annual_Data": annual, "Periodic_Data": PERIODIC})

        with self.assertRaises(ColumnCollisionError):
            load_workbook(_Logger(), path)


if __name__ == "__main__":
    unittest.main()
