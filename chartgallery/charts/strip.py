# Licensed under the MIT License.
# Copyright (c) Microsoft Corporation.

import numpy as np
import pandas as pd
import matplotlib
matplotlib.use('Agg')
import seaborn as sns
from typing import List, Optional, Sequence

from chartgallery.data.loaders import require_columns
from chartgallery.theme import new_axes, tidy_axes


def category_order(df: pd.DataFrame, column: str, order: Optional[Sequence] = None) -> List:
    """Categories in the order they are drawn: explicit, categorical, or first appearance."""
    if order is not None:
        return list(order)
    if isinstance(df[column].dtype, pd.CategoricalDtype):
        return [c for c in df[column].cat.categories if c in set(df[column])]
    return list(pd.unique(df[column].dropna()))


def plot_strip(df: pd.DataFrame,
               x: str,
               y: str,
               hue: Optional[str] = None,
               order: Optional[Sequence] = None,
               jitter: float = 0.2,
               show_mean: bool = True,
               point_size: float = 6,
               alpha: float = 0.7,
               ax=None,
               title: Optional[str] = None,
               figsize=None):
    """
    Strip chart: every observation drawn as a jittered dot along its category.

    Good for small samples where a box plot would hide how few points there are.
    When `show_mean` is set, each category's mean is marked with a short bar.

    Returns:
        The matplotlib Figure
    """
    require_columns(df, [x, y, hue], context='plot_strip')
    order = category_order(df, x, order)
    fig, ax = new_axes(ax, figsize)

    sns.stripplot(data=df, x=x, y=y, hue=hue, order=order, jitter=jitter,
                  size=point_size, alpha=alpha, ax=ax)

    if show_mean:
        means = df.groupby(x)[y].mean()
        for pos, cat in enumerate(order):
            if cat not in means.index or np.isnan(means[cat]):
                continue
            ax.hlines(means[cat], pos - 0.3, pos + 0.3, colors='black', linewidth=2.5, zorder=5)

    if title:
        ax.set_title(title, fontsize=14)
    tidy_axes(ax)
    return fig
