# Licensed under the MIT License.
# Copyright (c) Microsoft Corporation.

import matplotlib
matplotlib.use('Agg')
import matplotlib.pyplot as plt
import seaborn as sns
from typing import Dict, Iterable, Optional, Sequence, Tuple


DEFAULT_PALETTE = 'husl'
DEFAULT_FIGSIZE: Tuple[float, float] = (10, 6)

# Sober two-tone pair used by dumbbells and highlights
START_COLOR = '#8c96a8'
END_COLOR = '#d1495b'
MUTED_COLOR = '#b0b0b0'


def apply_theme(palette: str = DEFAULT_PALETTE):
    """Reset matplotlib to its defaults and set the seaborn color cycle."""
    plt.style.use('default')
    sns.set_palette(palette)


def category_colors(categories: Iterable, palette: str = DEFAULT_PALETTE) -> Dict[object, Tuple[float, float, float]]:
    """Map each category to a palette color, preserving order of first appearance."""
    unique = list(dict.fromkeys(categories))
    colors = sns.color_palette(palette, max(len(unique), 1))
    return dict(zip(unique, colors))


def new_axes(ax=None, figsize: Optional[Sequence[float]] = None):
    """Return (fig, ax), creating a figure only when no axes was handed in."""
    if ax is not None:
        return ax.figure, ax
    fig, ax = plt.subplots(figsize=tuple(figsize) if figsize else DEFAULT_FIGSIZE)
    return fig, ax


def tidy_axes(ax, grid_axis: Optional[str] = 'y'):
    """Drop the top/right spines and add a light grid."""
    ax.spines['top'].set_visible(False)
    ax.spines['right'].set_visible(False)
    if grid_axis:
        ax.grid(True, axis=grid_axis, alpha=0.3)
        ax.set_axisbelow(True)
    return ax
