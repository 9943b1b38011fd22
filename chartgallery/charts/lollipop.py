# Licensed under the MIT License.
# Copyright (c) Microsoft Corporation.

import numpy as np
import pandas as pd
import matplotlib
matplotlib.use('Agg')
from typing import Optional

from chartgallery.data.loaders import require_columns
from chartgallery.theme import END_COLOR, MUTED_COLOR, new_axes, tidy_axes


def plot_lollipop(df: pd.DataFrame,
                  category: str,
                  value: str,
                  sort: bool = True,
                  horizontal: bool = True,
                  baseline: float = 0.0,
                  highlight: Optional[object] = None,
                  show_values: bool = False,
                  color: str = '#4c72b0',
                  value_fmt: str = '{:.1f}',
                  ax=None,
                  title: Optional[str] = None,
                  figsize=None):
    """
    Lollipop chart: a thin stem from `baseline` to each value, capped by a dot.

    Reads like a bar chart with less ink, which helps when many bars would have
    similar lengths. `highlight` colors one category and mutes the rest.
    """
    require_columns(df, [category, value], context='plot_lollipop')
    data = df.dropna(subset=[value])
    if sort:
        data = data.sort_values(value, ascending=horizontal)
    fig, ax = new_axes(ax, figsize)

    pos = np.arange(len(data))
    if highlight is None:
        colors = [color] * len(data)
    else:
        colors = [END_COLOR if c == highlight else MUTED_COLOR for c in data[category]]

    labels = data[category].astype(str)
    values = data[value].to_numpy(dtype=float)
    if horizontal:
        ax.hlines(pos, baseline, values, colors=colors, linewidth=2)
        ax.scatter(values, pos, s=90, color=colors, zorder=3)
        ax.set_yticks(pos)
        ax.set_yticklabels(labels)
        ax.axvline(baseline, color='black', linewidth=0.8)
        ax.set_xlabel(value)
    else:
        ax.vlines(pos, baseline, values, colors=colors, linewidth=2)
        ax.scatter(pos, values, s=90, color=colors, zorder=3)
        ax.set_xticks(pos)
        ax.set_xticklabels(labels, rotation=45, ha='right')
        ax.axhline(baseline, color='black', linewidth=0.8)
        ax.set_ylabel(value)

    if show_values:
        for p, v in zip(pos, values):
            xy = (v, p) if horizontal else (p, v)
            offset = (8, 0) if horizontal else (0, 8)
            ax.annotate(value_fmt.format(v), xy=xy, xytext=offset, textcoords='offset points',
                        va='center' if horizontal else 'bottom',
                        ha='left' if horizontal else 'center', fontsize=9)

    if title:
        ax.set_title(title, fontsize=14)
    tidy_axes(ax, grid_axis='x' if horizontal else 'y')
    return fig
