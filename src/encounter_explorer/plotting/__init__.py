"""
Plotting Package - Categorical Boxplots.

Uses matplotlib's non-interactive Agg backend.
"""

from encounter_explorer.plotting.boxplot import BoxplotRenderer, PlotError, relabel_tick

__all__ = [
    "BoxplotRenderer",
    "PlotError",
    "relabel_tick",
]
