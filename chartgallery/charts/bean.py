# Licensed under the MIT License.
# Copyright (c) Microsoft Corporation.

import numpy as np
import pandas as pd
import matplotlib
matplotlib.use('Agg')
from scipy import stats
from typing import Optional, Sequence

from chartgallery.data.loaders import require_columns
from chartgallery.theme import category_colors, new_axes, tidy_axes
from chartgallery.charts.strip import category_order


def _bean_outline(values: np.ndarray, bandwidth: Optional[float], grid_size: int = 200):
    """Return (grid, density) for one bean, or (None, None) when no KDE is possible."""
    if np.unique(values).size < 2:
        return None, None
    kde = stats.gaussian_kde(values, bw_method=bandwidth)
    spread = values.max() - values.min()
    pad = 0.25 * spread
    grid = np.linspace(values.min() - pad, values.max() + pad, grid_size)
    return grid, kde(grid)


def plot_bean(df: pd.DataFrame,
              x: str,
              y: str,
              order: Optional[Sequence] = None,
              bandwidth: Optional[float] = None,
              width: float = 0.8,
              show_beans: bool = True,
              palette: str = 'husl',
              ax=None,
              title: Optional[str] = None,
              figsize=None):
    """
    Bean plot: a mirrored density outline per group, with every observation
    drawn as a short line ("bean") inside it.

    A thick bar marks each group mean and a dashed line marks the overall mean,
    so shape, raw data and centre can all be compared at once. Groups with fewer
    than two distinct values get beans but no outline.

    Args:
        df: Long table, one row per observation
        x: Grouping column
        y: Numeric column
        order: Explicit group order
        bandwidth: Passed to scipy's gaussian_kde as bw_method
        width: Maximum full width of a bean
        show_beans: Draw one line per observation

    Returns:
        The matplotlib Figure
    """
    require_columns(df, [x, y], context='plot_bean')
    data = df[[x, y]].dropna()
    order = category_order(data, x, order)
    colors = category_colors(order, palette)
    fig, ax = new_axes(ax, figsize)

    half = width / 2.0
    for pos, cat in enumerate(order):
        values = data.loc[data[x] == cat, y].to_numpy(dtype=float)
        if values.size == 0:
            continue
        color = colors[cat]

        grid, density = _bean_outline(values, bandwidth)
        if grid is not None:
            scaled = density / density.max() * half
            ax.fill_betweenx(grid, pos - scaled, pos + scaled,
                             facecolor=color, alpha=0.35, edgecolor=color, linewidth=1.2)

        if show_beans:
            ax.hlines(values, pos - half * 0.3, pos + half * 0.3, colors='black',
                      linewidth=0.8, alpha=0.6)
        ax.hlines(values.mean(), pos - half * 0.8, pos + half * 0.8, colors='black', linewidth=2.5)

    overall = data[y].mean()
    if not np.isnan(overall):
        ax.axhline(overall, color='gray', linestyle='--', linewidth=1, label=f'Overall mean: {overall:.2f}')
        ax.legend(loc='upper right', frameon=False)

    ax.set_xticks(range(len(order)))
    ax.set_xticklabels([str(c) for c in order])
    ax.set_xlim(-0.6, len(order) - 0.4)
    ax.set_xlabel(x)
    ax.set_ylabel(y)
    if title:
        ax.set_title(title, fontsize=14)
    tidy_axes(ax)
    return fig
