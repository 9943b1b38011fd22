# Licensed under the MIT License.
# Copyright (c) Microsoft Corporation.

import pandas as pd
import matplotlib
matplotlib.use('Agg')
from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

from chartgallery.data.loaders import require_columns
from chartgallery.theme import MUTED_COLOR, category_colors, new_axes, tidy_axes


@dataclass
class Annotation:
    x: object
    y: float
    text: str
    offset: Tuple[float, float] = (20, 20)
    arrow: bool = True


def annotate_extreme(df: pd.DataFrame, x: str, y: str, which: str = 'max', label: Optional[str] = None) -> Annotation:
    """Annotation pointing at the row with the largest (or smallest) `y`."""
    require_columns(df, [x, y], context='annotate_extreme')
    if which not in ('max', 'min'):
        raise ValueError(f"which must be 'max' or 'min', got '{which}'")
    values = df[y].dropna()
    if values.empty:
        raise ValueError(f"Column '{y}' has no values to annotate")

    idx = values.idxmax() if which == 'max' else values.idxmin()
    row = df.loc[idx]
    text = label if label is not None else f"{which.title()}: {row[y]:.1f}"
    offset = (20, 20) if which == 'max' else (20, -30)
    return Annotation(x=row[x], y=float(row[y]), text=text, offset=offset)


def plot_annotated_line(df: pd.DataFrame,
                        x: str,
                        y: str,
                        hue: Optional[str] = None,
                        annotations: Sequence[Annotation] = (),
                        hline: Optional[float] = None,
                        hline_label: Optional[str] = None,
                        shade: Optional[Tuple[object, object]] = None,
                        shade_label: Optional[str] = None,
                        label_ends: bool = False,
                        highlight: Optional[object] = None,
                        palette: str = 'husl',
                        ax=None,
                        title: Optional[str] = None,
                        figsize=None):
    """
    Line chart carrying its own explanation: callouts, a reference line,
    a shaded span and optionally direct labels instead of a legend.

    Args:
        df: Long table
        x, y: Columns for the line
        hue: One line per level of this column
        annotations: Callouts drawn with an arrow from text to point
        hline: y value of a horizontal reference line
        hline_label: Text placed on the reference line
        shade: (start, end) x range to shade
        shade_label: Text placed at the top of the shaded span
        label_ends: Label each line at its last point instead of using a legend
        highlight: Level of `hue` drawn in color; the others are greyed out

    Returns:
        The matplotlib Figure
    """
    require_columns(df, [x, y, hue], context='plot_annotated_line')
    fig, ax = new_axes(ax, figsize)

    groups = [(None, df)] if hue is None else list(df.groupby(hue, sort=False))
    colors = category_colors([g for g, _ in groups], palette)
    for key, part in groups:
        part = part.sort_values(x)
        color = colors[key]
        lw = 2.0
        if highlight is not None and key != highlight:
            color, lw = MUTED_COLOR, 1.2
        ax.plot(part[x], part[y], color=color, linewidth=lw, label=None if key is None else str(key))
        if label_ends and key is not None and not part.empty:
            last = part.iloc[-1]
            ax.annotate(str(key), xy=(last[x], last[y]), xytext=(6, 0), textcoords='offset points',
                        va='center', fontsize=9, color=color)

    if shade is not None:
        ax.axvspan(shade[0], shade[1], color='#f2e3b3', alpha=0.5, zorder=0)
        if shade_label:
            ax.text(shade[0], 1.0, shade_label, transform=ax.get_xaxis_transform(),
                    va='bottom', ha='left', fontsize=9, color='#7a6a2f')

    if hline is not None:
        ax.axhline(hline, color='gray', linestyle='--', linewidth=1)
        if hline_label:
            ax.annotate(hline_label, xy=(0, hline), xycoords=('axes fraction', 'data'),
                        xytext=(4, 4), textcoords='offset points', fontsize=9, color='gray')

    for note in annotations:
        arrowprops = dict(arrowstyle='->', color='black', lw=1) if note.arrow else None
        ax.annotate(note.text, xy=(note.x, note.y), xytext=note.offset, textcoords='offset points',
                    fontsize=10, arrowprops=arrowprops,
                    bbox=dict(boxstyle='round,pad=0.3', fc='white', ec='gray', alpha=0.9))

    if hue is not None and not label_ends:
        ax.legend(frameon=False)
    ax.set_xlabel(x)
    ax.set_ylabel(y)
    if title:
        ax.set_title(title, fontsize=14)
    tidy_axes(ax)
    return fig
