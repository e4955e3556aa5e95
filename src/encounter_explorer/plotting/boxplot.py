"""
Categorical Boxplot Renderer.

Draws one box per category of a categorical column over a numeric column,
e.g. ``time_in_hospital`` by ``age`` bracket. Tick labels can be shortened
by splitting: ``"[70-80)"`` with delimiter ``-`` and part 0 becomes ``"70"``.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional, Tuple, Union

import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt  # noqa: E402
import pandas as pd  # noqa: E402
from matplotlib.figure import Figure  # noqa: E402
from pandas.api.types import is_numeric_dtype  # noqa: E402

from encounter_explorer.config.models import BoxplotConfig, TickLabelConfig  # noqa: E402

logger = logging.getLogger(__name__)


class PlotError(Exception):
    """Raised when a boxplot cannot be drawn from the data."""
    pass


def relabel_tick(label: str, config: TickLabelConfig) -> str:
    """
    Shorten a tick label by string splitting.

    Args:
        label: Original category label
        config: Delimiter, part to keep (None = all, joined), chars to strip

    Returns:
        New label, or the original one if ``part`` is out of range
    """
    parts = label.split(config.delimiter)
    if config.part is None:
        picked = config.joiner.join(p.strip(config.strip) for p in parts)
    elif -len(parts) <= config.part < len(parts):
        picked = parts[config.part]
    else:
        return label
    return picked.strip(config.strip)


def _category_label(value: object) -> str:
    # integer codes in a float column (NaN present) read as 1.0, 2.0
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


class BoxplotRenderer:
    """Render categorical boxplots from the encounter table."""

    def __init__(self, config: BoxplotConfig) -> None:
        self.config = config

    @property
    def name(self) -> str:
        return "boxplot"

    def groups(self, frame: pd.DataFrame) -> List[Tuple[str, pd.Series]]:
        """
        Split values by category in plotting order.

        Categories sort in their own dtype, so integer codes run 1, 2, 10.
        Labels are the string form of each category; ``category_order``
        is matched against those labels.

        Raises:
            PlotError: On missing/non-numeric columns or nothing to plot
        """
        category, value = self.config.category_column, self.config.value_column
        missing = [c for c in (category, value) if c not in frame.columns]
        if missing:
            raise PlotError(f"Unknown columns: {', '.join(missing)}")
        if not frame.empty and not is_numeric_dtype(frame[value]):
            raise PlotError(
                f"value_column={value} is not numeric (dtype={frame[value].dtype})"
            )

        data = frame[[category, value]].dropna()
        distinct = list(data[category].unique())
        try:
            distinct.sort()
        except TypeError:
            # mixed types in an object column
            distinct.sort(key=str)
        by_label = {_category_label(c): c for c in distinct}

        if self.config.category_order is not None:
            labels = [c for c in self.config.category_order if c in by_label]
        else:
            labels = list(by_label)

        result = [
            (label, data.loc[data[category] == by_label[label], value])
            for label in labels
        ]
        result = [(c, values) for c, values in result if not values.empty]
        if not result:
            raise PlotError(f"No rows to plot for {value} by {category}")
        return result

    def render(self, frame: pd.DataFrame) -> Figure:
        """Draw the boxplot and return the figure. The caller closes it."""
        groups = self.groups(frame)
        labels = [label for label, _ in groups]
        if self.config.tick_labels is not None:
            labels = [relabel_tick(label, self.config.tick_labels) for label in labels]

        fig, ax = plt.subplots(figsize=self.config.figsize)
        ax.boxplot([values.to_numpy() for _, values in groups])
        ax.set_xticks(range(1, len(labels) + 1))
        ax.set_xticklabels(labels)
        ax.set_xlabel(self.config.category_column)
        ax.set_ylabel(self.config.value_column)
        ax.set_title(
            self.config.title
            or f"{self.config.value_column} by {self.config.category_column}"
        )
        fig.tight_layout()
        return fig

    @staticmethod
    def close(fig: Figure) -> None:
        """Release a figure returned by render()."""
        plt.close(fig)

    def render_to_file(
        self,
        frame: pd.DataFrame,
        path: Union[str, Path, None] = None,
    ) -> Path:
        """
        Render and save as PNG.

        Args:
            frame: Encounter table
            path: Output file (default: config.output_path)

        Returns:
            Path the figure was written to
        """
        target: Optional[Union[str, Path]] = path or self.config.output_path
        if target is None:
            raise PlotError("No output path given for boxplot")
        out = Path(target)
        out.parent.mkdir(parents=True, exist_ok=True)

        fig = self.render(frame)
        try:
            fig.savefig(out, format="png")
        finally:
            plt.close(fig)
        logger.info(f"Boxplot written to {out}")
        return out
