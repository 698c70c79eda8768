import os
import tempfile
import unittest

import numpy as np
import pandas as pd
from matplotlib.figure import Figure

from delaycomp.plotting import (
    PlotTheme,
    compose_figure,
    plot_operator_claims,
    plot_periodic_distribution,
    plot_volume_efficiency,
)
from delaycomp.transforms.figures import FigureTables


def _tables(empty=False):
    trend = pd.DataFrame({"time_period": [2023, 2024], "claims": [200.0, 220.0]})
    bars = pd.DataFrame({"operator": ["great_britain", "c2c", "new_rail"], "claims": [220.0, 22.0, 5.0]})
    periodic = pd.DataFrame({"operator": ["c2c", "c2c", "merseyrail"], "claims": [3.0, 4.0, 1.0]})
    joined = pd.DataFrame(
        {
            "time_period": [2023, 2024],
            "operator": ["c2c", "c2c"],
            "claims": [20.0, 22.0],
            "closed_pct": [0.9, np.nan],
        }
    )
    if empty:
        trend, bars, periodic, joined = (df.iloc[0:0] for df in (trend, bars, periodic, joined))
    return FigureTables(
        latest_period=None if empty else 2024,
        national_trend=trend,
        operator_claims=bars,
        periodic_claims=periodic,
        volume_efficiency=joined,
    )


class ChartTests(unittest.TestCase):
    def test_operator_bars_sorted_and_labelled(self):
        fig = Figure()
        ax = fig.subplots()

        plot_operator_claims(ax, _tables().operator_claims, PlotTheme(), period=2024)

        labels = [t.get_text() for t in ax.get_yticklabels()]
        self.assertListEqual(labels, ["new_rail", "c2c", "Great Britain"])
        self.assertIn("(2024)", ax.get_title(loc="left"))

    def test_periodic_box_one_box_per_operator(self):
        fig = Figure()
        ax = fig.subplots()

        plot_periodic_distribution(ax, _tables().periodic_claims, PlotTheme())

        labels = [t.get_text() for t in ax.get_yticklabels()]
        self.assertListEqual(labels, ["c2c", "Merseyrail"])

    def test_scatter_skips_rows_without_efficiency(self):
        fig = Figure()
        ax = fig.subplots()

        plot_volume_efficiency(ax, _tables().volume_efficiency, PlotTheme())

        self.assertEqual(len(ax.collections), 1)
        self.assertEqual(len(ax.collections[0].get_offsets()), 1)

    def test_compose_figure_has_four_panels(self):
        fig = compose_figure(_tables())
        self.assertEqual(len([ax for ax in fig.axes if ax.get_label() != "<colorbar>"]), 4)

    def test_empty_tables_render(self):
        fig = compose_figure(_tables(empty=True), PlotTheme(dpi=50))

        with tempfile.TemporaryDirectory() as tmp:
            path = os.path.join(tmp, "empty.png")
            fig.savefig(path)
            self.assertTrue(os.path.getsize(path) > 0)


if __name__ == "__main__":
    unittest.main()
