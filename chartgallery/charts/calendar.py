# Licensed under the MIT License.
# Copyright (c) Microsoft Corporation.

import numpy as np
import pandas as pd
import matplotlib
matplotlib.use('Agg')
import matplotlib.pyplot as plt
from typing import Optional

from chartgallery.data.reshape import calendar_frame, month_starts


WEEKDAY_LABELS = ['Mon', 'Tue', 'Wed', 'Thu', 'Fri', 'Sat', 'Sun']
N_WEEKS = 54


def calendar_matrix(frame: pd.DataFrame, year: int) -> np.ndarray:
    """7 x 54 array of daily values for one year of a `calendar_frame`; NaN where empty."""
    grid = np.full((7, N_WEEKS), np.nan)
    part = frame[frame['year'] == year]
    grid[part['weekday'].to_numpy(), part['week'].to_numpy()] = part['value'].to_numpy(dtype=float)
    return grid


def plot_calendar_heatmap(df: pd.DataFrame,
                          date: str,
                          value: str,
                          agg: str = 'sum',
                          cmap: str = 'YlOrRd',
                          colorbar_label: Optional[str] = None,
                          title: Optional[str] = None,
                          figsize=None):
    """
    Calendar heat map: one weekday x week panel per year, days colored by value.

    Shows weekly rhythm and seasonal runs together. Days with no data stay
    blank. Every panel shares a single color scale.

    Returns:
        The matplotlib Figure
    """
    frame = calendar_frame(df, date, value, agg=agg)
    years = sorted(frame['year'].unique())
    starts = month_starts(frame)

    values = frame['value'].to_numpy(dtype=float)
    vmin, vmax = np.nanmin(values), np.nanmax(values)
    if vmin == vmax:
        vmax = vmin + 1

    fig, axes = plt.subplots(len(years), 1, figsize=figsize or (14, 2.2 * len(years) + 0.6), squeeze=False)
    cmap_obj = matplotlib.colormaps[cmap].copy()
    cmap_obj.set_bad('#f0f0f0')

    mesh = None
    for ax, year in zip(axes[:, 0], years):
        grid = np.ma.masked_invalid(calendar_matrix(frame, year))
        mesh = ax.pcolormesh(grid, cmap=cmap_obj, vmin=vmin, vmax=vmax, edgecolors='white', linewidth=1.5)
        ax.invert_yaxis()
        ax.set_aspect('equal')
        ax.set_yticks(np.arange(7) + 0.5)
        ax.set_yticklabels(WEEKDAY_LABELS, fontsize=8)
        firsts = starts[starts['year'] == year]
        ax.set_xticks(firsts['week'].to_numpy() + 0.5)
        ax.set_xticklabels(firsts['label'], fontsize=8)
        ax.tick_params(length=0)
        ax.set_ylabel(str(year), fontsize=11, rotation=0, labelpad=25, va='center')
        for spine in ax.spines.values():
            spine.set_visible(False)

    cbar = fig.colorbar(mesh, ax=axes[:, 0].tolist(), orientation='horizontal', fraction=0.05, pad=0.12, aspect=50)
    cbar.set_label(colorbar_label or value)
    if title:
        fig.suptitle(title, fontsize=14)
    return fig
