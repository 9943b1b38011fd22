# Licensed under the MIT License.
# Copyright (c) Microsoft Corporation.

import numpy as np
import pandas as pd
import matplotlib
matplotlib.use('Agg')
from typing import Optional

from chartgallery.data.loaders import require_columns
from chartgallery.theme import END_COLOR, START_COLOR, new_axes, tidy_axes


def plot_dumbbell(frame: pd.DataFrame,
                  category: str,
                  start: str = 'start',
                  end: str = 'end',
                  sort_by: Optional[str] = 'end',
                  start_label: Optional[str] = None,
                  end_label: Optional[str] = None,
                  start_color: str = START_COLOR,
                  end_color: str = END_COLOR,
                  show_change: bool = False,
                  ax=None,
                  title: Optional[str] = None,
                  figsize=None):
    """
    Dumbbell plot: two values per category joined by a segment.

    Use it for before/after or two-period comparisons where the gap matters
    more than either value. Expects the wide layout produced by
    `chartgallery.data.reshape.dumbbell_frame`.

    Args:
        frame: One row per category
        category: Column labelling the rows
        start, end: Columns holding the two values
        sort_by: 'start', 'end', 'change' or None to keep the frame order
        show_change: Write the signed difference next to each dumbbell
    """
    require_columns(frame, [category, start, end], context='plot_dumbbell')
    data = frame.copy()
    if sort_by == 'change':
        data = data.assign(_change=data[end] - data[start]).sort_values('_change')
    elif sort_by is not None:
        require_columns(data, [sort_by], context='plot_dumbbell')
        data = data.sort_values(sort_by)
    fig, ax = new_axes(ax, figsize)

    ypos = np.arange(len(data))
    ax.hlines(ypos, data[start], data[end], color='#cccccc', linewidth=3, zorder=1)
    ax.scatter(data[start], ypos, s=80, color=start_color, zorder=2, label=start_label or start)
    ax.scatter(data[end], ypos, s=80, color=end_color, zorder=3, label=end_label or end)

    if show_change:
        for y, (s, e) in zip(ypos, zip(data[start], data[end])):
            if np.isnan(s) or np.isnan(e):
                continue
            ax.annotate(f"{e - s:+.1f}", xy=(max(s, e), y), xytext=(8, 0), textcoords='offset points',
                        va='center', fontsize=9, color='dimgray')

    ax.set_yticks(ypos)
    ax.set_yticklabels(data[category].astype(str))
    ax.legend(frameon=False, loc='lower right')
    if title:
        ax.set_title(title, fontsize=14)
    tidy_axes(ax, grid_axis='x')
    return fig
