# Licensed under the MIT License.
# Copyright (c) Microsoft Corporation.

import pandas as pd
import matplotlib
matplotlib.use('Agg')
import matplotlib.pyplot as plt
import seaborn as sns
from typing import Callable, Dict, Optional, Sequence

from chartgallery.data.loaders import require_columns
from chartgallery.charts.strip import category_order


def _facet_bar(data: pd.DataFrame, x: str, y: str, color=None, label=None, **kwargs):
    ax = plt.gca()
    ax.bar(data[x].astype(str), data[y], color=color, alpha=0.85, **kwargs)


def _facet_step(data: pd.DataFrame, x: str, y: str, color=None, label=None, **kwargs):
    ax = plt.gca()
    part = data.sort_values(x)
    ax.step(part[x], part[y], where='post', color=color, linewidth=1.8, **kwargs)


def _facet_area(data: pd.DataFrame, x: str, y: str, color=None, label=None, **kwargs):
    ax = plt.gca()
    part = data.sort_values(x)
    ax.fill_between(part[x], 0, part[y], color=color, alpha=0.4, **kwargs)
    ax.plot(part[x], part[y], color=color, linewidth=1.5)


FACET_KINDS: Dict[str, Callable] = {
    'bar': _facet_bar,
    'step': _facet_step,
    'area': _facet_area,
}


def plot_faceted(df: pd.DataFrame,
                 x: str,
                 y: str,
                 facet: str,
                 kind: str = 'bar',
                 col_wrap: int = 2,
                 sharey: bool = True,
                 order: Optional[Sequence] = None,
                 color: Optional[str] = None,
                 height: float = 3.0,
                 aspect: float = 1.6,
                 title: Optional[str] = None):
    """
    Small multiples: one panel per `facet` level, all drawn the same way.

    `kind` selects the mark: 'bar' for categorical x, 'step' for running totals
    that change in discrete jumps, 'area' for cumulative quantities.

    Returns:
        The matplotlib Figure owning the grid
    """
    if kind not in FACET_KINDS:
        raise ValueError(f"Unknown facet kind '{kind}'; expected one of {', '.join(FACET_KINDS)}")
    require_columns(df, [x, y, facet], context='plot_faceted')
    data = df.dropna(subset=[y])
    order = category_order(data, facet, order)

    g = sns.FacetGrid(data, col=facet, col_order=order, col_wrap=col_wrap, sharey=sharey,
                      sharex=(kind != 'bar'), height=height, aspect=aspect, despine=True)
    g.map_dataframe(FACET_KINDS[kind], x=x, y=y, color=color or sns.color_palette()[0])
    g.set_titles(col_template='{col_name}')
    g.set_axis_labels(x, y)
    for ax in g.axes.flat:
        ax.grid(True, axis='y', alpha=0.3)
        ax.set_axisbelow(True)
        if kind == 'bar':
            ax.tick_params(axis='x', rotation=45)

    if title:
        g.figure.suptitle(title, fontsize=14, y=1.02)
    g.figure.tight_layout()
    return g.figure
