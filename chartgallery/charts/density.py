# Licensed under the MIT License.
# Copyright (c) Microsoft Corporation.

import numpy as np
import pandas as pd
import matplotlib
matplotlib.use('Agg')
import seaborn as sns
from scipy import stats
from typing import Optional, Sequence, Tuple

from chartgallery.data.loaders import require_columns
from chartgallery.theme import category_colors, new_axes, tidy_axes
from chartgallery.charts.strip import category_order


def density_curve(values, grid_size: int = 200, bandwidth: Optional[float] = None) -> Tuple[np.ndarray, np.ndarray]:
    """
    Gaussian KDE of `values` evaluated on an evenly spaced grid.

    Raises:
        ValueError: If fewer than two distinct finite values are given
    """
    arr = np.asarray(values, dtype=float)
    arr = arr[np.isfinite(arr)]
    if np.unique(arr).size < 2:
        raise ValueError("density_curve needs at least two distinct finite values")
    kde = stats.gaussian_kde(arr, bw_method=bandwidth)
    grid = np.linspace(arr.min(), arr.max(), grid_size)
    return grid, kde(grid)


def plot_density(df: pd.DataFrame,
                 x: str,
                 hue: Optional[str] = None,
                 fill: bool = True,
                 bw_adjust: float = 1.0,
                 common_norm: bool = False,
                 show_stats: bool = False,
                 ax=None,
                 title: Optional[str] = None,
                 figsize=None):
    """
    Smoothed distribution of `x`, one curve per `hue` level.

    With `common_norm=False` every curve integrates to one, which compares shapes
    rather than group sizes. `show_stats` adds mean and median reference lines
    for the whole column.
    """
    require_columns(df, [x, hue], context='plot_density')
    data = df.dropna(subset=[x])
    fig, ax = new_axes(ax, figsize)

    sns.kdeplot(data=data, x=x, hue=hue, fill=fill, bw_adjust=bw_adjust,
                common_norm=common_norm, alpha=0.35 if fill else 1.0, linewidth=1.5, ax=ax)

    if show_stats:
        mean_val = data[x].mean()
        median_val = data[x].median()
        ax.axvline(mean_val, color='red', linestyle='--', linewidth=1.5, label=f'Mean: {mean_val:.1f}')
        ax.axvline(median_val, color='green', linestyle='--', linewidth=1.5, label=f'Median: {median_val:.1f}')
        if hue is None:
            ax.legend(frameon=False)

    ax.set_ylabel('Density')
    if title:
        ax.set_title(title, fontsize=14)
    tidy_axes(ax)
    return fig


def plot_ridgeline(df: pd.DataFrame,
                   x: str,
                   by: str,
                   order: Optional[Sequence] = None,
                   overlap: float = 0.6,
                   bandwidth: Optional[float] = None,
                   palette: str = 'husl',
                   ax=None,
                   title: Optional[str] = None,
                   figsize=None):
    """Stacked density curves, one ridge per group, sharing the x axis."""
    require_columns(df, [x, by], context='plot_ridgeline')
    data = df.dropna(subset=[x, by])
    order = category_order(data, by, order)
    colors = category_colors(order, palette)
    fig, ax = new_axes(ax, figsize)

    lo, hi = data[x].min(), data[x].max()
    pad = 0.1 * (hi - lo) if hi > lo else 1.0
    grid = np.linspace(lo - pad, hi + pad, 300)

    curves = {}
    for cat in order:
        values = data.loc[data[by] == cat, x].to_numpy(dtype=float)
        if np.unique(values).size < 2:
            continue
        curves[cat] = stats.gaussian_kde(values, bw_method=bandwidth)(grid)
    if not curves:
        raise ValueError(f"No group in '{by}' has enough distinct values for a density")

    peak = max(c.max() for c in curves.values())
    step = 1.0 - overlap
    # top ridge first so lower ridges are drawn in front
    for level, cat in reversed(list(enumerate(order))):
        if cat not in curves:
            continue
        base = (len(order) - 1 - level) * step
        heights = curves[cat] / peak
        ax.fill_between(grid, base, base + heights, facecolor=colors[cat], alpha=0.6,
                        edgecolor='white', linewidth=1.2, zorder=level + 1)
        ax.plot(grid, base + heights, color='black', linewidth=0.8, zorder=level + 1)

    ax.set_yticks([(len(order) - 1 - i) * step for i in range(len(order))])
    ax.set_yticklabels([str(c) for c in order])
    ax.set_xlabel(x)
    if title:
        ax.set_title(title, fontsize=14)
    tidy_axes(ax, grid_axis='x')
    return fig
